"""Schema setup for the verification tables.

Alembic owns the schema wherever the ``alembic/`` tree ships next to the
package; installs without it fall back to ``SQLModel.metadata.create_all``.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from sqlalchemy import text
from sqlmodel import SQLModel

from data_accounting.db.session import engine
from data_accounting.db.tables import *  # noqa: F401,F403

logger = logging.getLogger(__name__)

# Children before parents so DROP never trips a foreign key.
RESET_ORDER = (
    "witness_merkle_tree",
    "witness_events",
    "page_verification",
    "da_settings",
    "alembic_version",
)


def _migration_candidates() -> list[Path]:
    candidates = []
    if os.getenv("ALEMBIC_DIR"):
        candidates.append(Path(os.environ["ALEMBIC_DIR"]))
    candidates.append(Path(__file__).resolve().parents[2] / "alembic")
    return candidates


def find_migrations() -> Path | None:
    for candidate in _migration_candidates():
        if (candidate / "env.py").is_file() and (candidate / "versions").is_dir():
            return candidate
    return None


def upgrade_to_head(migrations: Path) -> None:
    from alembic import command
    from alembic.config import Config

    cfg = Config()
    cfg.set_main_option("script_location", str(migrations))
    cfg.set_main_option("sqlalchemy.url", engine.url.render_as_string(hide_password=False))
    command.upgrade(cfg, "head")


def migrate() -> None:
    """Bring the schema up to date without dropping anything."""
    migrations = find_migrations()
    if migrations is None:
        logger.info("No migrations shipped, creating tables from metadata")
        SQLModel.metadata.create_all(engine)
        return

    logger.info("Upgrading schema with migrations from %s", migrations)
    try:
        upgrade_to_head(migrations)
    except Exception:
        logger.exception("Migration failed, creating missing tables from metadata")
        SQLModel.metadata.create_all(engine)


def reset_db() -> None:
    """Drop every verification table, then migrate. Destroys all data."""
    logger.warning("Dropping tables: %s", ", ".join(RESET_ORDER))
    with engine.begin() as conn:
        for table in RESET_ORDER:
            conn.execute(text(f"DROP TABLE IF EXISTS {table}"))
    migrate()
