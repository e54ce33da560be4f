from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchKind
from .model import GeoPoint, PunchEvent


class PunchRepository(Protocol):
    def append(
        self,
        *,
        user_id: int,
        kind: PunchKind,
        timestamp: datetime,
        location: Optional[GeoPoint] = None,
        note: Optional[str] = None,
    ) -> PunchEvent:
        """Insert one row atomically and return the stored event."""

        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[PunchEvent]:
        """Events ordered by timestamp ascending; date bounds are inclusive."""

        raise NotImplementedError

    def get_by_id(self, punch_id: int) -> Optional[PunchEvent]:
        raise NotImplementedError
