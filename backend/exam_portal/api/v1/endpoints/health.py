"""
Health Check Endpoints

- /health/live  - Basic liveness (app is running)
- /health/ready - Readiness check (database reachable, tables present)
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from typing import Dict, Any
import time

from exam_portal.core.config import settings
from exam_portal.core.database import get_session_local
from exam_portal.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_database() -> Dict[str, Any]:
    """Check database connectivity and that the users table is readable"""
    start = time.time()
    try:
        session_factory = get_session_local()
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
            await session.execute(text("SELECT COUNT(*) FROM users"))
        return {"status": "healthy", "latency_ms": round((time.time() - start) * 1000, 2)}
    except SQLAlchemyError as e:
        logger.error(f"[Health] Database check failed: {e}")
        return {"status": "unhealthy", "error": type(e).__name__}


@router.get("/live")
async def liveness():
    return {"status": "alive", "service": settings.APP_NAME}


@router.get("/ready")
async def readiness():
    database = await check_database()
    ready = database["status"] == "healthy"
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ready" if ready else "not_ready", "checks": {"database": database}},
    )
