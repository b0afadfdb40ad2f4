from __future__ import annotations

import logging
from pathlib import Path

from data_accounting.db import init_db
from data_accounting.utils.logging_config import resolve_level, setup_logging

REPO_MIGRATIONS = Path(__file__).resolve().parents[1] / "alembic"


def test_resolve_level_accepts_names_and_numbers():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" Warning ") == logging.WARNING
    assert resolve_level(logging.ERROR) == logging.ERROR
    assert resolve_level("chatty") == logging.INFO
    assert resolve_level("chatty", fallback=logging.WARNING) == logging.WARNING


def test_setup_logging_replaces_handler():
    root = setup_logging("debug")
    setup_logging("debug")
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    setup_logging(logging.ERROR)
    assert logging.getLogger("uvicorn.access").level == logging.ERROR


def test_repo_migrations_are_accepted(monkeypatch):
    monkeypatch.setenv("ALEMBIC_DIR", str(REPO_MIGRATIONS))
    found = init_db.find_migrations()
    assert found == REPO_MIGRATIONS
    assert (found / "versions" / "002_add_da_settings.py").is_file()


def test_find_migrations_prefers_override(tmp_path, monkeypatch):
    (tmp_path / "versions").mkdir()
    (tmp_path / "env.py").write_text("")
    monkeypatch.setenv("ALEMBIC_DIR", str(tmp_path))
    assert init_db.find_migrations() == tmp_path


def test_invalid_override_is_skipped(tmp_path, monkeypatch):
    monkeypatch.setenv("ALEMBIC_DIR", str(tmp_path))
    assert init_db.find_migrations() != tmp_path


def test_reset_order_drops_children_first():
    order = list(init_db.RESET_ORDER)
    assert order.index("witness_merkle_tree") < order.index("witness_events")
    assert set(order) >= {"page_verification", "da_settings", "alembic_version"}
