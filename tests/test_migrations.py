from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text

from ncf_pos.config import settings
from ncf_pos.seed import SEED_INVOICE_TYPES

ROOT = Path(__file__).resolve().parents[1]
TABLES = ["stores", "invoice_types", "invoice_sequences", "sales"]


@pytest.fixture()
def migrated_engine(tmp_path, monkeypatch):
    url = f"sqlite+pysqlite:///{tmp_path / 'migrated.db'}"
    monkeypatch.setattr(settings, "database_url", url)
    config = Config()
    config.set_main_option("script_location", str(ROOT / "alembic"))
    command.upgrade(config, "head")
    engine = create_engine(url)
    yield engine
    engine.dispose()


def _constraint_names(engine, table: str) -> dict:
    inspector = inspect(engine)
    return {
        "pk": inspector.get_pk_constraint(table)["name"],
        "fk": sorted(fk["name"] for fk in inspector.get_foreign_keys(table)),
        "uq": sorted(uq["name"] for uq in inspector.get_unique_constraints(table)),
        "ix": sorted(ix["name"] for ix in inspector.get_indexes(table)),
        "ck": sorted(ck["name"] for ck in inspector.get_check_constraints(table)),
    }


@pytest.mark.parametrize("table", TABLES)
def test_migrations_name_constraints_like_the_models(migrated_engine, engine, table):
    assert _constraint_names(migrated_engine, table) == _constraint_names(
        engine, table
    )


def test_sales_foreign_keys_are_named(migrated_engine):
    assert _constraint_names(migrated_engine, "sales")["fk"] == [
        "fk_sales_invoice_type_id_invoice_types",
        "fk_sales_store_id_stores",
    ]


def test_migration_seeds_same_invoice_types_as_seeder(migrated_engine):
    with migrated_engine.connect() as conn:
        rows = conn.execute(
            text("SELECT code, name, description FROM invoice_types ORDER BY code")
        ).all()

    assert [tuple(row) for row in rows] == [
        (entry["code"], entry["name"], entry["description"])
        for entry in SEED_INVOICE_TYPES
    ]
