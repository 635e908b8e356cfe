from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from app.database import Base
from app import models  # noqa: F401

ROOT = Path(__file__).resolve().parent.parent


def describe_products(url: str) -> dict:
    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        return {
            "columns": {c["name"]: c["nullable"] for c in inspector.get_columns("products")},
            "checks": {c["name"] for c in inspector.get_check_constraints("products")},
            "indexes": {i["name"] for i in inspector.get_indexes("products")},
            "pk": inspector.get_pk_constraint("products")["constrained_columns"],
        }
    finally:
        engine.dispose()


def test_migration_matches_model(tmp_path, monkeypatch):
    migrated_url = f"sqlite:///{tmp_path / 'migrated.db'}"
    monkeypatch.setenv("DATABASE_URL", migrated_url)

    # no ini file, so alembic leaves the app's logging configuration alone
    config = Config()
    config.set_main_option("script_location", str(ROOT / "alembic"))
    command.upgrade(config, "head")

    model_url = f"sqlite:///{tmp_path / 'model.db'}"
    engine = create_engine(model_url)
    Base.metadata.create_all(engine)
    engine.dispose()

    migrated = describe_products(migrated_url)
    assert migrated == describe_products(model_url)
    assert migrated["checks"] == {"ck_products_price_pos", "ck_products_name_not_empty"}
    assert "ix_products_id" in migrated["indexes"]
    assert set(migrated["columns"]) == {"id", "name", "price", "availability"}


def test_downgrade_drops_products(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    config = Config()
    config.set_main_option("script_location", str(ROOT / "alembic"))

    command.upgrade(config, "head")
    command.downgrade(config, "base")

    engine = create_engine(url)
    try:
        assert "products" not in inspect(engine).get_table_names()
    finally:
        engine.dispose()
