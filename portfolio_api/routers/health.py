import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio_api.database import get_db
from portfolio_api.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api", tags=["Health"])

STARTED_AT = time.monotonic()


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        try:
            db.execute(text("SELECT 1"))
            database = "connected"
        except SQLAlchemyError:
            database = "unavailable"
        return create_response(
            message="Service healthy",
            data={
                "status": "OK",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "uptime_seconds": round(time.monotonic() - STARTED_AT, 3),
                "database": database,
            },
        )
    except Exception as exc:
        return handle_exception(exc)
