from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import get_tz, month_bounds, now_local, parse_client_timestamp
from ..common.validators import require_coordinate
from ..core.constants import FUTURE_TOLERANCE_SECONDS, MAX_NOTE_LENGTH, TIME_FORMAT
from ..core.enums import WorkStatus
from ..core.exceptions import ExternalServiceError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from ..users.service import SessionUser, require_active_user
from .aggregator import AttendanceAggregator, filter_by_day, latest_event
from .model import CONFIRMATION_LABELS, GeoPoint, PunchEvent
from .repository import PunchRepository

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    WorkStatus.AWAITING_FIRST_PUNCH: "Aguardando primeiro registro",
    WorkStatus.WORKING: "Trabalhando",
    WorkStatus.OFF_WORK: "Fora do expediente",
}

LOCATION_ERROR_MESSAGES = {
    "permission_denied": "Permissão de localização negada. Ponto não registrado.",
    "timeout": "Tempo esgotado ao obter a localização. Ponto não registrado.",
}


@dataclass(frozen=True)
class PunchReceipt:
    event: PunchEvent
    message: str


class PunchService:
    def __init__(
        self,
        punches: PunchRepository,
        users: UserRepository,
        aggregator: AttendanceAggregator,
        *,
        timezone: str | None = None,
        allow_future: bool = False,
        require_location: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._punches = punches
        self._users = users
        self._aggregator = aggregator
        self._tz = get_tz(timezone)
        self._allow_future = bool(allow_future)
        self._require_location = bool(require_location)
        self._clock = clock or (lambda: now_local(self._tz))

    @property
    def aggregator(self) -> AttendanceAggregator:
        return self._aggregator

    def _resolve_location(self, latitude, longitude, location_error: Optional[str]) -> Optional[GeoPoint]:
        if location_error:
            message = LOCATION_ERROR_MESSAGES.get(location_error, "Localização indisponível. Ponto não registrado.")
            raise ExternalServiceError(message)

        if latitude is None and longitude is None:
            if self._require_location:
                raise ExternalServiceError("Localização obrigatória para registrar o ponto.")
            return None
        if latitude is None or longitude is None:
            raise ValidationError("Informe latitude e longitude")

        return GeoPoint(
            latitude=require_coordinate(latitude, "Latitude", 90),
            longitude=require_coordinate(longitude, "Longitude", 180),
        )

    def _resolve_timestamp(self, raw: Optional[str]) -> datetime:
        # DATETIME columns hold whole seconds
        now = self._clock().replace(microsecond=0)
        if not raw:
            return now

        ts = parse_client_timestamp(raw, self._tz).replace(microsecond=0)
        if not self._allow_future and ts > now + timedelta(seconds=FUTURE_TOLERANCE_SECONDS):
            raise ValidationError("Não é permitido registrar ponto em horário futuro")
        return ts

    def register_punch(
        self,
        actor: Optional[SessionUser],
        *,
        kind: str,
        timestamp: Optional[str] = None,
        latitude=None,
        longitude=None,
        note: Optional[str] = None,
        location_error: Optional[str] = None,
    ) -> PunchReceipt:
        user = require_active_user(self._users, actor)
        punch_kind = self._aggregator.schema.parse_kind(kind)
        location = self._resolve_location(latitude, longitude, location_error)
        ts = self._resolve_timestamp(timestamp)

        if note is not None and not isinstance(note, str):
            raise ValidationError("Observação inválida")
        note = (note or "").strip() or None
        if note and len(note) > MAX_NOTE_LENGTH:
            raise ValidationError(f"Observação deve ter no máximo {MAX_NOTE_LENGTH} caracteres")

        event = self._punches.append(
            user_id=user.user_id,
            kind=punch_kind,
            timestamp=ts,
            location=location,
            note=note,
        )
        logger.info("punch recorded: user=%s kind=%s at=%s id=%s", user.user_id, punch_kind.value, ts.isoformat(), event.punch_id)

        message = f"{CONFIRMATION_LABELS[punch_kind]} às {ts.strftime(TIME_FORMAT)}"
        return PunchReceipt(event=event, message=message)

    def list_punches(
        self,
        actor: Optional[SessionUser],
        *,
        day: Optional[date] = None,
        month: Optional[tuple[int, int]] = None,
    ) -> list[PunchEvent]:
        if day is not None and month is not None:
            raise ValidationError("Use apenas um filtro: dia ou mês")

        user = require_active_user(self._users, actor)
        if day is not None:
            start, end = day, day
        elif month is not None:
            start, end = month_bounds(*month)
        else:
            start = end = None
        return list(self._punches.list_for_user(user.user_id, start_date=start, end_date=end))

    def get_punch(self, actor: Optional[SessionUser], punch_id: int) -> PunchEvent:
        user = require_active_user(self._users, actor)
        event = self._punches.get_by_id(punch_id)
        # other users' punches look the same as missing ones
        if not event or event.user_id != user.user_id:
            raise NotFoundError("Registro não encontrado")
        return event

    def dashboard(self, actor: Optional[SessionUser], *, today: Optional[date] = None) -> dict:
        user = require_active_user(self._users, actor)
        today = today or self._clock().date()

        events = list(self._punches.list_for_user(user.user_id))
        todays = filter_by_day(events, today)
        status = self._aggregator.current_status(events)
        summary = self._aggregator.summarize(todays)
        last = latest_event(events)

        return {
            "data": today.isoformat(),
            "status": status.value,
            "status_label": STATUS_LABELS[status],
            "status_dia": {kind.value: hhmm for kind, hhmm in self._aggregator.daily_status(events, today).items()},
            "resumo": summary.to_dict(),
            "horas_trabalhadas": self._aggregator.worked_duration(todays),
            "ultimo_registro": last.to_dict() if last else None,
        }
