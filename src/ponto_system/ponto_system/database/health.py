from __future__ import annotations

import logging

from ..core.exceptions import ExternalServiceError
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchone

logger = logging.getLogger(__name__)


def health_check(conn_factory: DatabaseConnection) -> dict:
    """Ping the database and count registered users."""
    try:
        with db_cursor(conn_factory) as (_, cur):
            cur.execute("SELECT NOW() AS current_time_db")
            now_row = fetchone(cur) or {}
            cur.execute("SELECT COUNT(*) AS total FROM usuarios")
            count_row = fetchone(cur) or {}
    except ExternalServiceError as e:
        return {"status": "unhealthy", "error": str(e)}
    except Exception as e:
        logger.exception("health check failed")
        return {"status": "unhealthy", "error": str(e)}

    current_time = now_row.get("current_time_db")
    return {
        "status": "healthy",
        "database": conn_factory.database,
        "current_time": current_time.isoformat() if current_time else None,
        "usuarios": int(count_row.get("total") or 0),
    }
