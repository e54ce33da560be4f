from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PunchKind
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PunchSchema:
    """Ordered set of punch kinds a deployment recognizes."""

    name: str
    kinds: tuple[PunchKind, ...]

    def recognizes(self, kind: PunchKind) -> bool:
        return kind in self.kinds

    def parse_kind(self, raw) -> PunchKind:
        try:
            kind = PunchKind(str(raw).strip().lower())
        except ValueError:
            kind = None
        if kind is None or not self.recognizes(kind):
            raise ValidationError(f"Tipo de ponto inválido: {raw!r}")
        return kind


FOUR_STATE = PunchSchema(
    name="four_state",
    kinds=(PunchKind.ENTRADA, PunchKind.SAIDA_ALMOCO, PunchKind.RETORNO_ALMOCO, PunchKind.SAIDA),
)

# Legacy deployments only record clock-in/clock-out.
TWO_STATE = PunchSchema(name="two_state", kinds=(PunchKind.ENTRADA, PunchKind.SAIDA))

SCHEMAS = {s.name: s for s in (FOUR_STATE, TWO_STATE)}


def get_schema(name: str) -> PunchSchema:
    try:
        return SCHEMAS[name]
    except KeyError:
        raise ValueError(f"Unknown PUNCH_SCHEMA {name!r}; expected one of {sorted(SCHEMAS)}")
