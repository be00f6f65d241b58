import logging

from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request):
    """Liveness plus a database round trip"""
    database_status = "ok"
    try:
        await request.app.state.database.ping()
    except SQLAlchemyError as exc:
        logger.error(f"Health check database ping failed: {exc}")
        database_status = "error"
    return {"status": "ok", "database": database_status}
