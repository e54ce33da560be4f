from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest

from src.ponto_system.ponto_system.core.enums import PunchKind
from src.ponto_system.ponto_system.core.exceptions import (
    AuthenticationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from src.ponto_system.ponto_system.punches.factory import AggregatorFactory
from src.ponto_system.ponto_system.punches.service import PunchService
from src.ponto_system.ponto_system.users.service import SessionUser

ANA = SessionUser(user_id=1, full_name="Ana Souza", email="ana@empresa.com", company="Empresa X")


def _service(punches_repo, users_repo, fixed_now, **kwargs) -> PunchService:
    schema_name = kwargs.pop("schema_name", "four_state")
    return PunchService(
        punches_repo,
        users_repo,
        AggregatorFactory().build(schema_name=schema_name),
        timezone="America/Sao_Paulo",
        clock=lambda: fixed_now,
        **kwargs,
    )


def test_register_punch_uses_clock_and_confirms(punches_repo, users_repo, fixed_now):
    svc = _service(punches_repo, users_repo, fixed_now)

    receipt = svc.register_punch(ANA, kind="entrada", latitude=-23.55, longitude=-46.63)

    assert receipt.event.timestamp == fixed_now
    assert receipt.event.kind is PunchKind.ENTRADA
    assert receipt.event.location.latitude == -23.55
    assert receipt.message == "Entrada registrada às 18:00:00"
    assert punches_repo.events == [receipt.event]


def test_invalid_kind_rejected_and_nothing_stored(punches_repo, users_repo, fixed_now):
    svc = _service(punches_repo, users_repo, fixed_now)

    with pytest.raises(ValidationError):
        svc.register_punch(ANA, kind="almoco_invalido")

    assert punches_repo.events == []


def test_two_state_rejects_lunch_kinds(punches_repo, users_repo, fixed_now):
    svc = _service(punches_repo, users_repo, fixed_now, schema_name="two_state")

    with pytest.raises(ValidationError):
        svc.register_punch(ANA, kind="saida_almoco")
    assert svc.register_punch(ANA, kind="SAIDA").event.kind is PunchKind.SAIDA


def test_unauthenticated_actor_rejected(punches_repo, users_repo, fixed_now):
    svc = _service(punches_repo, users_repo, fixed_now)

    with pytest.raises(AuthenticationError):
        svc.register_punch(None, kind="entrada")

    users_repo.users[1] = replace(users_repo.users[1], is_active=False)
    with pytest.raises(AuthenticationError):
        svc.register_punch(ANA, kind="entrada")

    assert punches_repo.events == []


def test_location_failure_leaves_no_event(punches_repo, users_repo, fixed_now):
    svc = _service(punches_repo, users_repo, fixed_now)

    with pytest.raises(ExternalServiceError, match="Permissão"):
        svc.register_punch(ANA, kind="entrada", location_error="permission_denied")
    with pytest.raises(ExternalServiceError):
        svc.register_punch(ANA, kind="entrada", location_error="timeout")

    assert punches_repo.events == []


def test_required_location(punches_repo, users_repo, fixed_now):
    svc = _service(punches_repo, users_repo, fixed_now, require_location=True)

    with pytest.raises(ExternalServiceError):
        svc.register_punch(ANA, kind="entrada")
    assert svc.register_punch(ANA, kind="entrada", latitude="-23.5", longitude="-46.6").event.location is not None


@pytest.mark.parametrize(
    "lat, lng",
    [(-23.5, None), (100, 10), (10, 181), ("abc", 10)],
)
def test_bad_coordinates(punches_repo, users_repo, fixed_now, lat, lng):
    svc = _service(punches_repo, users_repo, fixed_now)

    with pytest.raises(ValidationError):
        svc.register_punch(ANA, kind="entrada", latitude=lat, longitude=lng)


def test_client_timestamps(punches_repo, users_repo, fixed_now):
    svc = _service(punches_repo, users_repo, fixed_now)

    past = svc.register_punch(ANA, kind="entrada", timestamp="2025-03-10T08:00:00")
    assert past.event.timestamp == datetime(2025, 3, 10, 8, 0)

    # UTC-3, no daylight saving
    aware = svc.register_punch(ANA, kind="saida", timestamp="2025-03-10T15:00:00+00:00")
    assert aware.event.timestamp == datetime(2025, 3, 10, 12, 0)

    within_tolerance = svc.register_punch(ANA, kind="entrada", timestamp="2025-03-10T18:00:30")
    assert within_tolerance.event.timestamp == datetime(2025, 3, 10, 18, 0, 30)

    with pytest.raises(ValidationError):
        svc.register_punch(ANA, kind="saida", timestamp="2025-03-10T18:05:00")
    with pytest.raises(ValidationError):
        svc.register_punch(ANA, kind="saida", timestamp="10/03/2025 08:00")


def test_future_allowed_when_configured(punches_repo, users_repo, fixed_now):
    svc = _service(punches_repo, users_repo, fixed_now, allow_future=True)

    receipt = svc.register_punch(ANA, kind="saida", timestamp="2025-03-10T19:00:00")

    assert receipt.event.timestamp == datetime(2025, 3, 10, 19, 0)


def test_note_is_trimmed_and_bounded(punches_repo, users_repo, fixed_now):
    svc = _service(punches_repo, users_repo, fixed_now)

    assert svc.register_punch(ANA, kind="entrada", note="  home office ").event.note == "home office"
    assert svc.register_punch(ANA, kind="saida", note="   ").event.note is None
    with pytest.raises(ValidationError):
        svc.register_punch(ANA, kind="saida", note="x" * 501)


def test_list_and_get_are_scoped_to_actor(punches_repo, users_repo, fixed_now):
    svc = _service(punches_repo, users_repo, fixed_now)
    mine = punches_repo.append(user_id=1, kind=PunchKind.ENTRADA, timestamp=datetime(2025, 3, 9, 8, 0))
    punches_repo.append(user_id=1, kind=PunchKind.SAIDA, timestamp=datetime(2025, 2, 9, 17, 0))
    theirs = punches_repo.append(user_id=2, kind=PunchKind.ENTRADA, timestamp=datetime(2025, 3, 9, 8, 0))

    assert len(svc.list_punches(ANA)) == 2
    assert svc.list_punches(ANA, day=date(2025, 3, 9)) == [mine]
    assert [e.kind for e in svc.list_punches(ANA, month=(2025, 2))] == [PunchKind.SAIDA]
    assert svc.get_punch(ANA, mine.punch_id) == mine

    with pytest.raises(NotFoundError):
        svc.get_punch(ANA, theirs.punch_id)
    with pytest.raises(NotFoundError):
        svc.get_punch(ANA, 404)
    with pytest.raises(ValidationError):
        svc.list_punches(ANA, day=date(2025, 3, 9), month=(2025, 3))


def test_dashboard(punches_repo, users_repo, fixed_now):
    svc = _service(punches_repo, users_repo, fixed_now)
    for kind, hour in (("entrada", 8), ("saida_almoco", 12), ("retorno_almoco", 13), ("saida", 17)):
        svc.register_punch(ANA, kind=kind, timestamp=f"2025-03-10T{hour:02d}:00:00")

    data = svc.dashboard(ANA)

    assert data["data"] == "2025-03-10"
    assert data["status"] == "OFF_WORK"
    assert data["status_dia"]["retorno_almoco"] == "13:00"
    assert data["horas_trabalhadas"] == "8h 00m"
    assert data["resumo"]["intervalos"] == 1
    assert data["ultimo_registro"]["tipo"] == "saida"


def test_dashboard_without_punches(punches_repo, users_repo, fixed_now):
    data = _service(punches_repo, users_repo, fixed_now).dashboard(ANA)

    assert data["status"] == "AWAITING_FIRST_PUNCH"
    assert data["horas_trabalhadas"] == "0h 00m"
    assert data["ultimo_registro"] is None


def test_timestamps_are_stored_in_whole_seconds(punches_repo, users_repo):
    almost_midnight = datetime(2025, 3, 10, 23, 59, 59, 700000)
    svc = _service(punches_repo, users_repo, almost_midnight)

    clocked = svc.register_punch(ANA, kind="saida")
    sent = svc.register_punch(ANA, kind="entrada", timestamp="2025-03-10T08:00:00.999999")

    assert clocked.event.timestamp == datetime(2025, 3, 10, 23, 59, 59)
    assert clocked.event.day == date(2025, 3, 10)
    assert clocked.message == "Saída registrada às 23:59:59"
    assert sent.event.timestamp == datetime(2025, 3, 10, 8, 0, 0)


@pytest.mark.parametrize("field", ["note", "timestamp"])
def test_non_string_fields_are_validation_errors(punches_repo, users_repo, fixed_now, field):
    svc = _service(punches_repo, users_repo, fixed_now)

    with pytest.raises(ValidationError):
        svc.register_punch(ANA, kind="entrada", **{field: 5})

    assert punches_repo.events == []
