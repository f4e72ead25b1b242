"""Background tasks of the core module."""

import time
from typing import Any, Dict

import structlog
from celery import shared_task
from django.db import DatabaseError, connections

logger = structlog.get_logger(__name__)


def check_database(alias: str = "default") -> Dict[str, Any]:
    """Run ``SELECT 1`` against *alias* and report status and latency."""
    start = time.monotonic()
    try:
        conn = connections[alias]
        conn.ensure_connection()
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as exc:
        logger.error("database.check_failed", database=alias, error=str(exc))
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


@shared_task(name="core.monitor_database_connection")
def monitor_database_connection():
    """Periodic connectivity check scheduled by Celery beat.

    Failures are reported through the log only; the task itself never
    raises so the beat schedule keeps running.
    """
    result = check_database()
    if result["status"] == "up":
        logger.info("database.connection_ok", **result)
    else:
        logger.warning("database.connection_lost")
    return result
