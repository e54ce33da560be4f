from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.ponto_system.ponto_system.container import build_services
from src.ponto_system.ponto_system.core.enums import PunchKind
from src.ponto_system.ponto_system.core.exceptions import ExternalServiceError
from src.ponto_system.ponto_system.main import create_app
from src.ponto_system.ponto_system.punches.factory import AggregatorFactory
from src.ponto_system.ponto_system.punches.model import GeoPoint, PunchEvent
from src.ponto_system.ponto_system.users.model import User


@dataclass
class InMemoryUsers:
    users: dict[int, User] = field(default_factory=dict)
    _id: int = 0

    def add(self, user: User) -> User:
        self.users[user.user_id] = user
        self._id = max(self._id, user.user_id)
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        for u in self.users.values():
            if u.email == email:
                return u
        return None

    def create_user(self, *, full_name: str, email: str, password_hash: str, company: str, role: str) -> int:
        self._id += 1
        self.users[self._id] = User(
            user_id=self._id,
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            company=company,
            role=role,
            created_at=datetime(2025, 3, 10, 9, 0),
        )
        return self._id

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        self.users[user_id] = replace(self.users[user_id], password_hash=password_hash)
        return True

    def update_profile_field(self, user_id: int, *, field: str, value: str) -> bool:
        self.users[user_id] = replace(self.users[user_id], **{field: value})
        return True

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        self.users[user_id] = replace(self.users[user_id], is_active=is_active)
        return True


@dataclass
class InMemoryPunches:
    events: list[PunchEvent] = field(default_factory=list)
    _id: int = 0

    def append(self, *, user_id: int, kind: PunchKind, timestamp: datetime, location: Optional[GeoPoint] = None, note=None) -> PunchEvent:
        self._id += 1
        event = PunchEvent(punch_id=self._id, user_id=user_id, kind=kind, timestamp=timestamp, location=location, note=note)
        self.events.append(event)
        return event

    def list_for_user(self, user_id: int, *, start_date: Optional[date] = None, end_date: Optional[date] = None):
        items = [e for e in self.events if e.user_id == user_id]
        if start_date is not None:
            items = [e for e in items if e.timestamp.date() >= start_date]
        if end_date is not None:
            items = [e for e in items if e.timestamp.date() <= end_date]
        return sorted(items, key=lambda e: (e.timestamp, e.punch_id))

    def get_by_id(self, punch_id: int) -> Optional[PunchEvent]:
        for e in self.events:
            if e.punch_id == punch_id:
                return e
        return None


class UnreachableDatabase:
    database = "ponto_test"

    def connect(self):
        raise ExternalServiceError("Banco de dados indisponível, tente novamente")


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 10, 18, 0, 0)


@pytest.fixture
def aggregator():
    return AggregatorFactory().build()


@pytest.fixture
def users_repo() -> InMemoryUsers:
    repo = InMemoryUsers()
    repo.add(
        User(
            user_id=1,
            full_name="Ana Souza",
            email="ana@empresa.com",
            password_hash=generate_password_hash("segredo1"),
            company="Empresa X",
            role="Analista",
            created_at=datetime(2025, 1, 2, 8, 0),
        )
    )
    return repo


@pytest.fixture
def punches_repo() -> InMemoryPunches:
    return InMemoryPunches()


@pytest.fixture
def container(users_repo, punches_repo, fixed_now):
    return build_services(
        UnreachableDatabase(),
        users_repo,
        punches_repo,
        settings={"TIMEZONE": "America/Sao_Paulo", "CLOCK": lambda: fixed_now},
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container, TESTING=True)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in(client):
    resp = client.post("/api/login", json={"email": "ana@empresa.com", "senha": "segredo1"})
    assert resp.status_code == 200
    return client
