"""
Health checks for the load balancer and orchestrator.

/health and /health/live only prove the process answers; /health/ready
also round-trips a query to the hospital store and reports 503 when that
fails, so traffic is withheld until the database is reachable.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from afyaconnect.core.config import settings
from afyaconnect.db.connection import db_cursor, is_postgres_mode

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health")

OK = {"status": "ok"}


def _check_database() -> bool:
    try:
        with db_cursor(settings.DB_PATH) as (_, cur):
            cur.execute("SELECT COUNT(*) FROM hospitals")
            cur.fetchone()
    except Exception as exc:
        logger.warning(f"Readiness check could not reach the database: {exc}")
        return False
    return True


@router.get("")
async def health():
    return OK


@router.get("/live")
async def liveness():
    return OK


@router.get("/ready")
async def readiness():
    database_ok = _check_database()
    body = {
        "status": "ok" if database_ok else "unhealthy",
        "checks": {
            "database": "ok" if database_ok else "unhealthy",
            "backend": "postgresql" if is_postgres_mode() else "sqlite",
        },
    }
    return JSONResponse(status_code=200 if database_ok else 503, content=body)
