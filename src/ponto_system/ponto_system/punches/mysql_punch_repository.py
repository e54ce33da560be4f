from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import PunchKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import GeoPoint, PunchEvent
from .repository import PunchRepository

_PUNCH_COLUMNS = "id, usuario_id, tipo, timestamp_registro, latitude, longitude, observacao"


def _row_to_event(r: dict) -> PunchEvent:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = GeoPoint(latitude=float(r["latitude"]), longitude=float(r["longitude"]))
    return PunchEvent(
        punch_id=int(r["id"]),
        user_id=int(r["usuario_id"]),
        kind=PunchKind(r["tipo"]),
        timestamp=r["timestamp_registro"],
        location=location,
        note=r.get("observacao"),
    )


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        user_id: int,
        kind: PunchKind,
        timestamp: datetime,
        location: Optional[GeoPoint] = None,
        note: Optional[str] = None,
    ) -> PunchEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO registros_ponto(usuario_id, tipo, data_registro, timestamp_registro, latitude, longitude, observacao)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    kind.value,
                    timestamp.date(),
                    timestamp,
                    location.latitude if location else None,
                    location.longitude if location else None,
                    note,
                ),
            )
            punch_id = int(cur.lastrowid)

        return PunchEvent(
            punch_id=punch_id,
            user_id=int(user_id),
            kind=kind,
            timestamp=timestamp,
            location=location,
            note=note,
        )

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[PunchEvent]:
        clauses = ["usuario_id=%s"]
        params: list[object] = [int(user_id)]

        if start_date is not None:
            clauses.append("data_registro >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("data_registro <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PUNCH_COLUMNS}
                FROM registros_ponto
                WHERE {where}
                ORDER BY timestamp_registro ASC, id ASC
                """,
                tuple(params),
            )
            return [_row_to_event(r) for r in fetchall(cur)]

    def get_by_id(self, punch_id: int) -> Optional[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PUNCH_COLUMNS} FROM registros_ponto WHERE id=%s", (int(punch_id),))
            r = fetchone(cur)
            return _row_to_event(r) if r else None
