"""Shared fixtures: in-memory database, pinned clock, authenticated client."""

from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from barbershop import models  # noqa: F401
from barbershop.config import Settings, get_settings
from barbershop.db import get_session
from barbershop.deps import get_clock
from barbershop.main import app

# Monday
NOW = datetime(2026, 6, 1, 10, 0)


class FixedClock:
    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        secret_key="test-secret",
        shop_timezone="America/Sao_Paulo",
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def client(session: Session, settings: Settings, clock: FixedClock):
    def _get_session():
        yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client: TestClient, email: str = "joao@barber.com", name: str = "Joao") -> dict:
    resp = client.post(
        "/register",
        json={"name": name, "email": email, "password": "secret123"},
    )
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture()
def auth(client: TestClient) -> dict:
    return register(client)


@pytest.fixture()
def catalog(client: TestClient, auth: dict) -> dict:
    """One client and three services: Haircut 30m, Beard Trim 30m, Cut and Beard 45m."""
    ids = {}
    resp = client.post("/clientes", json={"name": "Carlos", "phone": "11999990000"}, headers=auth)
    assert resp.status_code == 201, resp.text
    ids["client"] = resp.json()["id"]
    for key, name, duration, price in [
        ("haircut", "Haircut", 30, 40.0),
        ("beard", "Beard Trim", 30, 25.0),
        ("combo", "Cut and Beard", 45, 60.0),
    ]:
        resp = client.post(
            "/service",
            json={"name": name, "price": price, "duration": duration},
            headers=auth,
        )
        assert resp.status_code == 201, resp.text
        ids[key] = resp.json()["id"]
    return ids


@pytest.fixture()
def other_auth(client: TestClient, auth: dict) -> dict:
    return register(client, email="pedro@barber.com", name="Pedro")
