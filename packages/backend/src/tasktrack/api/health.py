"""Health check endpoint.

Reports whether the database answers and whether the optional Redis
pool (used for rate limiting) is connected.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack import __version__
from tasktrack.db.engine import get_db

router = APIRouter()


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Check server health and dependency connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"

    # Redis is optional; report it without affecting overall status
    try:
        from tasktrack.cache import get_redis

        await get_redis().ping()
        redis_status = "ok"
    except Exception as e:
        redis_status = f"unavailable: {e}"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks, "redis": redis_status}
