from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from logitrack.config import get_settings
from logitrack.db import Base, get_engine
from logitrack.main import app
from logitrack.models import JobRecord, UserRecord

TEST_JWT_SECRET = "test-jwt-secret-key"


@pytest.fixture(autouse=True)
def reset_api_caches() -> Iterator[None]:
    get_settings.cache_clear()
    get_engine.cache_clear()
    yield
    get_settings.cache_clear()
    get_engine.cache_clear()
    app.dependency_overrides.clear()


@pytest.fixture
def database(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Engine]:
    sqlite_db_path = tmp_path / "api-tests.db"
    monkeypatch.setenv("LOGITRACK_DATABASE_URL", f"sqlite+pysqlite:///{sqlite_db_path}")
    monkeypatch.setenv("LOGITRACK_DB_ECHO", "false")
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.delenv("GEOFENCE_ENFORCE_CURRENT", raising=False)

    engine = get_engine()
    Base.metadata.create_all(bind=engine)

    yield engine

    engine.dispose()


@pytest.fixture
def session(database: Engine) -> Iterator[Session]:
    with Session(database) as db_session:
        yield db_session


@pytest.fixture
def client(database: Engine) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


def _add_user(engine: Engine, *, role: str, first_name: str, last_name: str, phone: str) -> str:
    with Session(engine) as db_session:
        user = UserRecord(role=role, first_name=first_name, last_name=last_name, phone=phone)
        db_session.add(user)
        db_session.commit()
        return user.id


@pytest.fixture
def driver_id(database: Engine) -> str:
    return _add_user(database, role="driver", first_name="Ram", last_name="Thapa", phone="9801234567")


@pytest.fixture
def admin_id(database: Engine) -> str:
    return _add_user(database, role="admin", first_name="Sita", last_name="Karki", phone="9807654321")


def make_token(user_id: str | None, role: str | None, *, expires_in: timedelta = timedelta(hours=1)) -> str:
    payload: dict[str, Any] = {"exp": datetime.now(timezone.utc) + expires_in}
    if user_id is not None:
        payload["id"] = user_id
    if role is not None:
        payload["role"] = role
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


@pytest.fixture
def admin_headers(admin_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(admin_id, 'admin')}"}


@pytest.fixture
def driver_headers(driver_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(driver_id, 'driver')}"}


@pytest.fixture
def job_payload() -> Callable[..., dict[str, Any]]:
    def build(driver: str, **overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "driverInfo": {"id": driver, "name": "Ram Thapa", "phone": "9801234567"},
            "pickupInfo": {
                "name": "Thamel Warehouse",
                "phone": "014400111",
                "email": "warehouse@example.com",
                "latitude": "27.7172",
                "longitude": "85.3240",
            },
            "dropoffInfo": {
                "name": "Patan Store",
                "phone": "015500222",
                "latitude": 27.6766,
                "longitude": 85.3188,
            },
            "note": "Leave at reception",
            "addOns": {"fragileItems": True, "heavyItem": False},
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def seed_job(database: Engine, driver_id: str) -> Callable[..., str]:
    def seed(**fields: Any) -> str:
        now = datetime.now(timezone.utc)
        values: dict[str, Any] = {
            "driver_id": driver_id,
            "driver_name": "Ram Thapa",
            "driver_phone": "9801234567",
            "pickup_name": "Thamel Warehouse",
            "pickup_phone": "014400111",
            "pickup_latitude": 27.7172,
            "pickup_longitude": 85.3240,
            "dropoff_name": "Patan Store",
            "dropoff_phone": "015500222",
            "dropoff_latitude": 27.6766,
            "dropoff_longitude": 85.3188,
            "created_at": now,
            "updated_at": now,
        }
        values.update(fields)
        with Session(database) as db_session:
            job = JobRecord(**values)
            db_session.add(job)
            db_session.commit()
            return job.id

    return seed


@pytest.fixture
def token_factory() -> Callable[..., str]:
    return make_token
