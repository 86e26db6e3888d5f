# infra/migrate.py
from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

MIGRATION_DIR = Path(__file__).resolve().parents[1] / "migration"


def alembic_config(db_url: str, migration_dir: Path = MIGRATION_DIR) -> Config:
    alembic_ini = migration_dir / "alembic.ini"
    if not migration_dir.exists():
        raise RuntimeError(f"Alembic script_location missing: {migration_dir}")
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic config missing: {alembic_ini}")

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(migration_dir))
    cfg.set_main_option("sqlalchemy.url", db_url)
    cfg.attributes["configure_logger"] = False
    return cfg


def run_migrations(db_url: str, migration_dir: Path = MIGRATION_DIR) -> None:
    logger.info("Upgrading task database schema at %s", db_url)
    command.upgrade(alembic_config(db_url, migration_dir), "head")
