from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from itertools import groupby
from typing import Callable, Optional

from werkzeug.utils import secure_filename

from ..common.datetime_utils import format_br_date, get_tz, month_bounds, now_local
from ..punches.aggregator import AttendanceAggregator, filter_by_month, format_duration, sort_chronologically
from ..punches.repository import PunchRepository
from ..users.repository import UserRepository
from ..users.service import SessionUser, require_active_user
from .csv_export import write_punches_csv


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: bytes


class ReportService:
    def __init__(
        self,
        punches: PunchRepository,
        users: UserRepository,
        aggregator: AttendanceAggregator,
        *,
        timezone: str | None = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._punches = punches
        self._users = users
        self._aggregator = aggregator
        tz = get_tz(timezone)
        self._clock = clock or (lambda: now_local(tz))

    def _month_events(self, user_id: int, year: int, month: int):
        start, end = month_bounds(year, month)
        events = self._punches.list_for_user(user_id, start_date=start, end_date=end)
        return sort_chronologically(filter_by_month(events, year, month))

    def build_month_report(self, actor: Optional[SessionUser], *, year: int, month: int) -> ReportData:
        """One row per day with punches in the month, plus month totals."""
        user = require_active_user(self._users, actor)
        events = self._month_events(user.user_id, year, month)

        out_rows: list[dict] = []
        total_minutes = 0
        totals = {"entradas": 0, "saidas": 0, "intervalos": 0}

        for day, day_events in groupby(events, key=lambda e: e.timestamp.date()):
            day_events = list(day_events)
            s = self._aggregator.summarize(day_events)
            out_rows.append(
                {
                    "data": format_br_date(day),
                    "status_dia": {k.value: v for k, v in self._aggregator.daily_status(day_events, day).items()},
                    "entradas": s.entradas,
                    "saidas": s.saidas,
                    "intervalos": s.intervalos,
                    "horas_trabalhadas": self._aggregator.worked_duration(day_events),
                }
            )
            total_minutes += s.worked_minutes
            totals["entradas"] += s.entradas
            totals["saidas"] += s.saidas
            totals["intervalos"] += s.intervalos

        summary = {
            "mes": f"{year:04d}-{month:02d}",
            "dias_trabalhados": len(out_rows),
            **totals,
            "horas_trabalhadas": format_duration(total_minutes),
        }
        return ReportData(rows=out_rows, summary=summary)

    def export_csv(
        self,
        actor: Optional[SessionUser],
        *,
        month: Optional[tuple[int, int]] = None,
        today: Optional[date] = None,
    ) -> CsvExport:
        user = require_active_user(self._users, actor)
        if month is not None:
            events = self._month_events(user.user_id, *month)
        else:
            events = sort_chronologically(self._punches.list_for_user(user.user_id))

        text = write_punches_csv(events, employee_name=user.full_name)
        stamp = (today or self._clock().date()).strftime("%d-%m-%Y")
        filename = secure_filename(f"ponto-{user.full_name}-{stamp}.csv") or f"ponto-{stamp}.csv"
        # BOM so spreadsheet apps detect UTF-8
        return CsvExport(filename=filename, content=text.encode("utf-8-sig"))
