from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterable

from ..core.constants import BR_DATE_FORMAT, EXPORT_HEADER, TIME_FORMAT
from ..core.enums import PunchKind
from ..core.exceptions import ValidationError
from ..punches.model import PunchEvent


@dataclass(frozen=True)
class ExportRow:
    day: date
    at: time
    kind: PunchKind
    employee: str


def write_punches_csv(events: Iterable[PunchEvent], *, employee_name: str) -> str:
    """Render events as `Data,Hora,Tipo,Funcionário` rows, in the given order."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for e in events:
        writer.writerow(
            [
                e.timestamp.strftime(BR_DATE_FORMAT),
                e.timestamp.strftime(TIME_FORMAT),
                e.kind.value,
                employee_name,
            ]
        )
    return out.getvalue()


def read_punches_csv(text: str) -> list[ExportRow]:
    """Parse a file produced by write_punches_csv."""
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    header = next(reader, None)
    if header is None or tuple(header) != EXPORT_HEADER:
        raise ValidationError("Cabeçalho CSV inválido")

    rows: list[ExportRow] = []
    for line_no, row in enumerate(reader, start=2):
        if not row:
            continue
        try:
            day_s, time_s, kind_s, employee = row
            rows.append(
                ExportRow(
                    day=datetime.strptime(day_s, BR_DATE_FORMAT).date(),
                    at=datetime.strptime(time_s, TIME_FORMAT).time(),
                    kind=PunchKind(kind_s),
                    employee=employee,
                )
            )
        except ValueError as e:
            raise ValidationError(f"Linha {line_no} inválida: {e}")
    return rows
