from __future__ import annotations

from ...core.enums import PunchKind
from .base import PairingPolicy


class LunchExcludedPairing(PairingPolicy):
    """Lunch is not worked time: saida_almoco closes, retorno_almoco reopens."""

    opening_kinds = frozenset({PunchKind.ENTRADA, PunchKind.RETORNO_ALMOCO})
    closing_kinds = frozenset({PunchKind.SAIDA, PunchKind.SAIDA_ALMOCO})
