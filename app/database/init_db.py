"""Create or upgrade the billing schema and seed the company settings row."""

import logging
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy import inspect

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT))

from app.core.startup import bootstrap
import app.database.db as db_module
from app.models import Base
from app.services.settings_service import SettingsService

logger = logging.getLogger(__name__)
BASELINE_REVISION = "20261018_0001"
CORE_TABLES = {"customers", "products", "invoices", "invoice_items", "payments"}


def _build_alembic_config(database_url: str) -> AlembicConfig:
    cfg = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    return cfg


def _requires_baseline_stamp() -> bool:
    """Tables built by ``create_all`` without alembic need stamping before upgrade."""
    table_names = set(inspect(db_module.get_engine()).get_table_names())
    return CORE_TABLES.issubset(table_names) and "alembic_version" not in table_names


def init_db() -> None:
    bootstrap()
    alembic_cfg = _build_alembic_config(db_module.get_active_database_url())
    try:
        if _requires_baseline_stamp():
            command.stamp(alembic_cfg, BASELINE_REVISION)
            logger.info("database.schema.stamped", extra={"event": "database.schema.stamped"})
        command.upgrade(alembic_cfg, "head")
    except Exception:
        logger.exception("database.migration_failed", extra={"event": "database.migration_failed"})
        raise

    Base.metadata.create_all(bind=db_module.get_engine())
    with db_module.get_db_session() as session:
        SettingsService(db=session).get_company_settings()
    logger.info("database.tables.created", extra={"event": "database.tables.created"})


if __name__ == "__main__":
    init_db()
