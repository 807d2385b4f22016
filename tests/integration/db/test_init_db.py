from __future__ import annotations

import pytest
from alembic.util import CommandError
from sqlalchemy import text

import app.database.db as db_module
import app.database.init_db as init_db_module
from app.models import Base


@pytest.fixture
def ledger_file(tmp_path, monkeypatch):
    original_url = db_module.get_active_database_url()
    url = f"sqlite:///{tmp_path / 'ledger.db'}"
    db_module.reset_engine(url)
    monkeypatch.setattr(init_db_module, "bootstrap", lambda: None)
    yield tmp_path
    db_module.get_engine().dispose()
    db_module.reset_engine(original_url)


def test_unknown_revision_fails_without_touching_existing_ledger(ledger_file):
    engine = db_module.get_engine()
    Base.metadata.create_all(bind=engine)
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE alembic_version (version_num VARCHAR(32) NOT NULL)"))
        conn.execute(text("INSERT INTO alembic_version (version_num) VALUES ('20261101_0002')"))
        conn.execute(
            text(
                "INSERT INTO customers (name, phone, created_at, updated_at) "
                "VALUES ('Sharma Traders', '9820000000', CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)"
            )
        )

    with pytest.raises(CommandError):
        init_db_module.init_db()

    assert sorted(path.name for path in ledger_file.iterdir()) == ["ledger.db"]
    with db_module.get_engine().connect() as conn:
        assert conn.execute(text("SELECT COUNT(*) FROM customers")).scalar() == 1


def test_fresh_database_is_migrated_and_seeded(ledger_file):
    init_db_module.init_db()

    with db_module.get_engine().connect() as conn:
        revision = conn.execute(text("SELECT version_num FROM alembic_version")).scalar()
        settings_rows = conn.execute(text("SELECT COUNT(*) FROM company_settings")).scalar()
    assert revision == init_db_module.BASELINE_REVISION
    assert settings_rows == 1
