import pytest

from huno.core.errors import UserNotFound
from huno.db.base import Base
from huno.db.session import build_engine, build_sessionmaker
from huno.services.user_store import InMemoryUserStore, SqlUserStore


@pytest.fixture(params=["memory", "sqlite"])
def store(request):
    if request.param == "memory":
        return InMemoryUserStore()

    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    return SqlUserStore(build_sessionmaker(engine))


def test_get_or_create_creates_once(store):
    user, created = store.get_or_create("09121234567", 50)
    assert created is True
    assert user.credits == 50
    assert user.settings == {}
    assert user.created_at.tzinfo is not None

    again, created = store.get_or_create("09121234567", 50)
    assert created is False
    assert again.id == user.id


def test_lookup_by_id_and_phone(store):
    user = store.create("09350000000", 10)
    assert store.get(user.id).phone == "09350000000"
    assert store.get_by_phone("09350000000").id == user.id
    assert store.get("missing") is None
    assert store.get_by_phone("09111111111") is None


def test_adjust_credits(store):
    user = store.create("09121234567", 50)
    assert store.adjust_credits(user.id, -20).credits == 30
    assert store.adjust_credits(user.id, -40).credits == -10
    assert store.get(user.id).credits == -10
    assert store.get_by_phone("09121234567").credits == -10


def test_adjust_unknown_user(store):
    with pytest.raises(UserNotFound):
        store.adjust_credits("missing", 1)


def test_sql_store_duplicate_phone_returns_existing():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    store = SqlUserStore(build_sessionmaker(engine))

    first = store.create("09121234567", 50)
    second = store.create("09121234567", 50)
    assert second.id == first.id


def test_app_uses_sql_store_when_database_url_set(otp_store):
    from fastapi.testclient import TestClient
    from huno.main import create_app

    from conftest import make_settings

    app = create_app(settings=make_settings(DATABASE_URL="sqlite://"), otp_store=otp_store)
    assert isinstance(app.state.user_store, SqlUserStore)
    with TestClient(app) as c:
        code = c.post("/api/auth/send-otp", json={"phone": "09121234567"}).json()["devCode"]
        user = c.post("/api/auth/verify-otp", json={"phone": "09121234567", "code": code}).json()["user"]
        assert c.get(f"/api/users/{user['id']}").json()["credits"] == 50


def test_alembic_upgrade_builds_users_table(tmp_path):
    import argparse
    from pathlib import Path

    from alembic import command
    from alembic.config import Config
    from sqlalchemy import inspect

    url = f"sqlite:///{tmp_path / 'huno.db'}"
    cfg = Config(cmd_opts=argparse.Namespace(x=[f"dburl={url}"]))
    cfg.set_main_option("script_location", str(Path(__file__).resolve().parents[1] / "alembic"))
    command.upgrade(cfg, "head")

    engine = build_engine(url)
    assert "users" in inspect(engine).get_table_names()
    store = SqlUserStore(build_sessionmaker(engine))
    user, created = store.get_or_create("09121234567", 50)
    assert created is True
    assert store.get(user.id).credits == 50
