from __future__ import annotations

from ...core.enums import PunchKind
from .base import PairingPolicy


class LunchIncludedPairing(PairingPolicy):
    """Only entrada/saida count; lunch punches are ignored."""

    opening_kinds = frozenset({PunchKind.ENTRADA})
    closing_kinds = frozenset({PunchKind.SAIDA})
