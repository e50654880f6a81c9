"""Prometheus metrics for image uploads and bookings"""

import logging
from typing import Dict, List
from collections import defaultdict
from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)


# Batch metrics
image_upload_batches_total = Counter(
    'image_upload_batches_total',
    'Total number of image upload batches',
    ['status']
)

image_upload_batch_size = Histogram(
    'image_upload_batch_size',
    'Number of files submitted per upload batch',
    buckets=[1, 2, 3, 4, 5, 10]
)

# Per-file metrics
image_uploads_total = Counter(
    'image_uploads_total',
    'Total number of individual image uploads',
    ['status']
)

image_upload_duration_seconds = Histogram(
    'image_upload_duration_seconds',
    'Time spent uploading and storing a single image',
    ['status'],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)

# Booking metrics
bookings_total = Counter(
    'bookings_total',
    'Total number of stored bookings by notification outcome',
    ['notification']
)


class MetricsCollector:
    """Collector for upload metrics with in-memory latency statistics"""

    def __init__(self):
        self.latencies: Dict[str, List[float]] = defaultdict(list)
        self.max_latency_samples = 1000  # Keep last N samples for percentile calculation

    def record_batch(self, status: str, batch_size: int):
        """Record the outcome of an upload batch"""
        image_upload_batches_total.labels(status=status).inc()
        image_upload_batch_size.observe(batch_size)

    def record_file_upload(self, status: str, duration_seconds: float):
        """Record a single file upload+persist"""
        image_uploads_total.labels(status=status).inc()
        image_upload_duration_seconds.labels(status=status).observe(duration_seconds)

        # Store latency for percentile calculation
        self.latencies[status].append(duration_seconds * 1000)  # Convert to ms
        if len(self.latencies[status]) > self.max_latency_samples:
            self.latencies[status].pop(0)

    def record_booking(self, notification: str):
        """Record a stored booking (notification: sent, failed, skipped)"""
        bookings_total.labels(notification=notification).inc()

    def get_latency_percentiles(self, status: str = "uploaded") -> Dict[str, float]:
        """Calculate latency percentiles from stored samples"""
        latencies = self.latencies.get(status, [])

        if not latencies:
            return {"p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0}

        sorted_latencies = sorted(latencies)
        n = len(sorted_latencies)

        def percentile(p: float) -> float:
            k = (n - 1) * p
            f = int(k)
            c = min(f + 1, n - 1)
            return sorted_latencies[f] + (k - f) * (sorted_latencies[c] - sorted_latencies[f])

        return {
            "p50": percentile(0.50),
            "p90": percentile(0.90),
            "p95": percentile(0.95),
            "p99": percentile(0.99),
        }


# Global metrics collector instance
metrics_collector = MetricsCollector()
