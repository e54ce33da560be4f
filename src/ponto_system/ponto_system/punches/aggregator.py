"""Attendance aggregation over a user's punches.

Everything here is pure: callers pass the event collection in and get a new
value back. Nothing is cached between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..core.constants import UNSET_TIME, ZERO_DURATION
from ..core.enums import PunchKind, WorkStatus
from .model import PunchEvent
from .pairing.base import PairingPolicy
from .schema import PunchSchema


@dataclass(frozen=True)
class WorkSummary:
    entradas: int
    saidas: int
    intervalos: int
    worked_minutes: int

    @property
    def worked(self) -> str:
        return format_duration(self.worked_minutes)

    def to_dict(self) -> dict:
        return {
            "entradas": self.entradas,
            "saidas": self.saidas,
            "intervalos": self.intervalos,
            "minutos_trabalhados": self.worked_minutes,
            "horas_trabalhadas": self.worked,
        }


def format_duration(minutes: int) -> str:
    """240 -> '4h 00m'. Negative input is treated as zero."""
    minutes = max(int(minutes), 0)
    return f"{minutes // 60}h {minutes % 60:02d}m"


def sort_chronologically(events: Iterable[PunchEvent]) -> list[PunchEvent]:
    # id breaks ties between punches recorded in the same second
    return sorted(events, key=lambda e: (e.timestamp, e.punch_id))


def filter_by_day(events: Iterable[PunchEvent], day: date) -> list[PunchEvent]:
    return [e for e in events if e.timestamp.date() == day]


def filter_by_month(events: Iterable[PunchEvent], year: int, month: int) -> list[PunchEvent]:
    return [e for e in events if e.timestamp.year == year and e.timestamp.month == month]


def latest_event(events: Iterable[PunchEvent]) -> Optional[PunchEvent]:
    ordered = sort_chronologically(events)
    return ordered[-1] if ordered else None


@dataclass(frozen=True)
class AttendanceAggregator:
    """Derives status and worked time, parameterized by schema and pairing rule."""

    schema: PunchSchema
    pairing: PairingPolicy

    def current_status(self, events: Iterable[PunchEvent]) -> WorkStatus:
        last = latest_event(events)
        if last is None:
            return WorkStatus.AWAITING_FIRST_PUNCH
        if last.kind is PunchKind.ENTRADA:
            return WorkStatus.WORKING
        return WorkStatus.OFF_WORK

    def daily_status(self, events: Iterable[PunchEvent], day: date) -> dict[PunchKind, str]:
        """Last HH:MM per recognized kind on `day`, UNSET_TIME where none."""
        status = {kind: UNSET_TIME for kind in self.schema.kinds}
        for event in sort_chronologically(filter_by_day(events, day)):
            if event.kind in status:
                status[event.kind] = event.timestamp.strftime("%H:%M")
        return status

    def worked_minutes(self, events: Iterable[PunchEvent]) -> int:
        ordered = sort_chronologically(events)
        if len(ordered) < 2:
            return 0

        total = timedelta()
        open_since: Optional[datetime] = None
        for event in ordered:
            if not self.schema.recognizes(event.kind):
                continue
            if self.pairing.opens(event.kind):
                # last opening wins
                open_since = event.timestamp
            elif self.pairing.closes(event.kind) and open_since is not None:
                total += event.timestamp - open_since
                open_since = None
        return int(total.total_seconds() // 60)

    def worked_duration(self, events: Iterable[PunchEvent]) -> str:
        events = list(events)
        if len(events) < 2:
            return ZERO_DURATION
        return format_duration(self.worked_minutes(events))

    def counts_by_kind(self, events: Iterable[PunchEvent]) -> dict[PunchKind, int]:
        counts = {kind: 0 for kind in self.schema.kinds}
        for event in events:
            if event.kind in counts:
                counts[event.kind] += 1
        return counts

    def summarize(self, events: Sequence[PunchEvent]) -> WorkSummary:
        counts = self.counts_by_kind(events)
        entradas = counts.get(PunchKind.ENTRADA, 0)
        saidas = counts.get(PunchKind.SAIDA, 0)
        return WorkSummary(
            entradas=entradas,
            saidas=saidas,
            intervalos=min(entradas, saidas),
            worked_minutes=self.worked_minutes(events),
        )
