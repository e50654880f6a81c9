"""Health check and metrics endpoints"""

import asyncio
from datetime import datetime
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.api.dependencies import get_object_store
from src.database import get_session_factory
from src.services.object_store import ObjectStoreError

router = APIRouter(tags=["Health"])


def _resolve(request: Request, provider):
    """Call a dependency provider, honouring app.dependency_overrides"""
    return request.app.dependency_overrides.get(provider, provider)()


@router.get("/", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
async def liveness_check():
    """Liveness check (plain text)"""
    return "Builder backend is running"


@router.get("/health", status_code=status.HTTP_200_OK)
async def detailed_health_check(
    request: Request,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """
    Detailed health check with service dependency status

    Checks connectivity to:
    - Database
    - Object store bucket

    Returns overall status and individual service statuses
    """
    services = {}
    overall_status = "healthy"

    # Check database connectivity
    try:
        async with session_factory() as session:
            result = await session.execute(text("SELECT 1"))
            result.scalar_one()
        services["database"] = "connected"
    except Exception as e:
        services["database"] = f"disconnected: {str(e)}"
        overall_status = "degraded"

    # Check object store connectivity; building the client can fail too
    try:
        object_store = _resolve(request, get_object_store)
        await asyncio.to_thread(object_store.check_connection)
        services["object_store"] = "connected"
    except ObjectStoreError as e:
        services["object_store"] = str(e)
        overall_status = "degraded"

    return {
        "status": overall_status,
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "services": services
    }


@router.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics exposition"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
