"""Health check endpoint."""
from __future__ import annotations

import logging
from pathlib import Path

from alembic.config import Config
from alembic.script import ScriptDirectory
from fastapi import APIRouter
from sqlalchemy import text

from halodkm.config import AppInfo, get_settings
from halodkm.db import get_engine

router = APIRouter(prefix="/health", tags=["health"])
logger = logging.getLogger(__name__)

ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


def _db_status() -> str:
    """Return 'ok' if the DB is reachable, 'error' otherwise."""

    try:
        engine = get_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return "ok"
    except Exception:  # noqa: BLE001
        logger.exception("DB health check failed")
        return "error"


def _expected_migration_head() -> str | None:
    try:
        config = Config(str(ALEMBIC_INI))
        config.set_main_option("script_location", str(ALEMBIC_INI.parent / "alembic"))
        script = ScriptDirectory.from_config(config)
        return script.get_current_head()
    except Exception:  # noqa: BLE001
        logger.exception("Failed to load Alembic head revision")
        return None


def _migrations_status() -> tuple[bool, str]:
    expected_head = _expected_migration_head()
    try:
        engine = get_engine()
        with engine.connect() as conn:
            current = conn.execute(text("SELECT version_num FROM alembic_version")).scalar()
        if expected_head and current == expected_head:
            return True, "up_to_date"
        if expected_head is None:
            return False, "unknown"
        return False, "out_of_date"
    except Exception:  # noqa: BLE001
        logger.warning("Migration check failed", exc_info=True)
        return False, "unknown"


@router.get("", summary="Health check")
def healthcheck() -> dict[str, object]:
    """Return service, database and migration status."""

    settings = get_settings()
    db_status = _db_status()
    db_ok = db_status == "ok"
    if db_ok:
        migrations_ok, migrations_status = _migrations_status()
    else:
        migrations_ok, migrations_status = False, "unknown"
    return {
        "status": "ok" if db_ok else "degraded",
        "version": AppInfo().version,
        "env": settings.app_env,
        "db_ok": db_ok,
        "db_status": db_status,
        "migrations_ok": migrations_ok,
        "migrations_status": migrations_status,
        "lock_completed_events": settings.LOCK_COMPLETED_EVENTS,
    }
