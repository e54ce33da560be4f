from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import TIME_FORMAT
from ..core.enums import PunchKind

KIND_LABELS = {
    PunchKind.ENTRADA: "Entrada",
    PunchKind.SAIDA_ALMOCO: "Saída Almoço",
    PunchKind.RETORNO_ALMOCO: "Retorno Almoço",
    PunchKind.SAIDA: "Saída",
}

CONFIRMATION_LABELS = {
    PunchKind.ENTRADA: "Entrada registrada",
    PunchKind.SAIDA_ALMOCO: "Saída para almoço",
    PunchKind.RETORNO_ALMOCO: "Retorno do almoço",
    PunchKind.SAIDA: "Saída registrada",
}


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class PunchEvent:
    """Entidade de domínio: registro de ponto. Imutável depois de criado."""

    punch_id: int
    user_id: int
    kind: PunchKind
    timestamp: datetime
    location: Optional[GeoPoint] = None
    note: Optional[str] = None

    @property
    def day(self) -> date:
        return self.timestamp.date()

    def to_dict(self) -> dict:
        return {
            "id": self.punch_id,
            "usuario_id": self.user_id,
            "tipo": self.kind.value,
            "tipo_label": KIND_LABELS[self.kind],
            "data": self.timestamp.date().isoformat(),
            "hora": self.timestamp.strftime(TIME_FORMAT),
            "timestamp": self.timestamp.isoformat(),
            "latitude": self.location.latitude if self.location else None,
            "longitude": self.location.longitude if self.location else None,
            "observacao": self.note,
        }
