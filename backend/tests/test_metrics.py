"""Unit tests for upload and booking metrics collection"""

import pytest
from prometheus_client import REGISTRY

from src.monitoring.metrics import MetricsCollector


class TestMetricsCollector:
    """Tests for MetricsCollector"""

    @pytest.fixture
    def collector(self):
        """Create metrics collector for testing"""
        return MetricsCollector()

    def test_record_file_upload(self, collector):
        """Test recording a file upload"""
        collector.record_file_upload(status="uploaded", duration_seconds=0.5)

        assert collector.latencies["uploaded"] == [500.0]  # 0.5s = 500ms

    def test_failed_uploads_tracked_separately(self, collector):
        collector.record_file_upload(status="uploaded", duration_seconds=0.1)
        collector.record_file_upload(status="upload_failed", duration_seconds=0.2)

        assert len(collector.latencies["uploaded"]) == 1
        assert len(collector.latencies["upload_failed"]) == 1

    def test_max_latency_samples_limit(self, collector):
        """Test that latency samples are limited"""
        collector.max_latency_samples = 100

        for _ in range(150):
            collector.record_file_upload(status="uploaded", duration_seconds=0.1)

        assert len(collector.latencies["uploaded"]) == 100

    def test_percentiles(self, collector):
        """Test percentile calculation"""
        for i in range(1, 101):
            collector.record_file_upload(status="uploaded", duration_seconds=i / 1000)

        percentiles = collector.get_latency_percentiles()

        assert percentiles["p50"] == pytest.approx(50.5)
        assert percentiles["p99"] == pytest.approx(99.01)
        assert percentiles["p90"] < percentiles["p95"] < percentiles["p99"]

    def test_percentiles_empty(self, collector):
        """Test percentiles with no data"""
        assert collector.get_latency_percentiles() == {
            "p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0
        }

    def test_record_batch_counter(self, collector):
        """Test batch outcomes increment the Prometheus counter"""
        before = REGISTRY.get_sample_value(
            "image_upload_batches_total", {"status": "partial"}
        ) or 0.0

        collector.record_batch(status="partial", batch_size=3)

        after = REGISTRY.get_sample_value("image_upload_batches_total", {"status": "partial"})
        assert after == before + 1

    def test_record_booking_counter(self, collector):
        before = REGISTRY.get_sample_value(
            "bookings_total", {"notification": "skipped"}
        ) or 0.0

        collector.record_booking("skipped")

        assert REGISTRY.get_sample_value("bookings_total", {"notification": "skipped"}) == before + 1
