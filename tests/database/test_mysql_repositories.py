from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import mysql.connector
import pytest

from src.ponto_system.ponto_system.core.enums import PunchKind
from src.ponto_system.ponto_system.core.exceptions import ValidationError
from src.ponto_system.ponto_system.punches.model import GeoPoint
from src.ponto_system.ponto_system.punches.mysql_punch_repository import MySQLPunchRepository
from src.ponto_system.ponto_system.users.mysql_user_repository import MySQLUserRepository


class FakeCursor:
    def __init__(self, rows):
        self._rows = rows
        self.executed = []
        self.lastrowid = 7
        self.rowcount = 1

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), params))

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, rows=(), fail=False):
        self.cur = FakeCursor(list(rows))
        self.fail = fail
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=False):
        return self.cur

    def commit(self):
        if self.fail:
            raise RuntimeError("commit failed")
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeFactory:
    database = "ponto_test"

    def __init__(self, conn: FakeConnection):
        self.conn = conn

    def connect(self):
        return self.conn


def test_append_inserts_date_and_timestamp():
    conn = FakeConnection()
    repo = MySQLPunchRepository(FakeFactory(conn))

    event = repo.append(
        user_id=1,
        kind=PunchKind.SAIDA_ALMOCO,
        timestamp=datetime(2025, 3, 10, 12, 0, 5),
        location=GeoPoint(latitude=-23.5, longitude=-46.6),
    )

    sql, params = conn.cur.executed[0]
    assert sql.startswith("INSERT INTO registros_ponto")
    assert params == (1, "saida_almoco", date(2025, 3, 10), datetime(2025, 3, 10, 12, 0, 5), -23.5, -46.6, None)
    assert event.punch_id == 7
    assert conn.committed


def test_list_for_user_maps_rows_and_bounds():
    rows = [
        {
            "id": 3,
            "usuario_id": 1,
            "tipo": "entrada",
            "timestamp_registro": datetime(2025, 3, 10, 8, 0),
            "latitude": Decimal("-23.500000"),
            "longitude": Decimal("-46.600000"),
            "observacao": None,
        }
    ]
    conn = FakeConnection(rows)
    repo = MySQLPunchRepository(FakeFactory(conn))

    (event,) = repo.list_for_user(1, start_date=date(2025, 3, 1), end_date=date(2025, 3, 31))

    sql, params = conn.cur.executed[0]
    assert "data_registro >= %s AND data_registro <= %s" in sql
    assert "ORDER BY timestamp_registro ASC, id ASC" in sql
    assert params == (1, date(2025, 3, 1), date(2025, 3, 31))
    assert event.kind is PunchKind.ENTRADA
    assert event.location == GeoPoint(latitude=-23.5, longitude=-46.6)


def test_failed_commit_rolls_back():
    conn = FakeConnection(fail=True)
    repo = MySQLUserRepository(FakeFactory(conn))

    with pytest.raises(RuntimeError):
        repo.set_active(1, is_active=False)

    assert conn.rolled_back


def test_user_row_mapping_and_editable_columns():
    row = {
        "id": 1,
        "nome_completo": "Ana Souza",
        "email": "ana@empresa.com",
        "senha_hash": "hash",
        "empresa": "Empresa X",
        "cargo": "Analista",
        "data_cadastro": datetime(2025, 1, 2),
        "ativo": 0,
    }
    conn = FakeConnection([row])
    repo = MySQLUserRepository(FakeFactory(conn))

    user = repo.get_by_email("ana@empresa.com")
    assert (user.full_name, user.company, user.is_active) == ("Ana Souza", "Empresa X", False)

    repo.update_profile_field(1, field="company", value="Empresa Z")
    assert conn.cur.executed[-1] == ("UPDATE usuarios SET empresa=%s WHERE id=%s", ("Empresa Z", 1))
    with pytest.raises(ValueError):
        repo.update_profile_field(1, field="email", value="x@y.com")


class RejectingCursor(FakeCursor):
    def __init__(self, error):
        super().__init__([])
        self._error = error

    def execute(self, sql, params=()):
        raise self._error


def _create(repo):
    return repo.create_user(
        full_name="Bruno Lima",
        email="bruno@empresa.com",
        password_hash="hash",
        company="Empresa Y",
        role="Dev",
    )


def test_duplicate_email_from_concurrent_insert_is_validation_error():
    conn = FakeConnection()
    conn.cur = RejectingCursor(mysql.connector.IntegrityError(msg="Duplicate entry", errno=1062))
    repo = MySQLUserRepository(FakeFactory(conn))

    with pytest.raises(ValidationError, match="E-mail já cadastrado"):
        _create(repo)

    assert conn.rolled_back


def test_other_integrity_errors_propagate():
    conn = FakeConnection()
    conn.cur = RejectingCursor(mysql.connector.IntegrityError(msg="Column cannot be null", errno=1048))
    repo = MySQLUserRepository(FakeFactory(conn))

    with pytest.raises(mysql.connector.IntegrityError):
        _create(repo)
