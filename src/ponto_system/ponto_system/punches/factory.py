from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import LunchPolicy
from .aggregator import AttendanceAggregator
from .pairing.base import PairingPolicy
from .pairing.lunch_excluded import LunchExcludedPairing
from .pairing.lunch_included import LunchIncludedPairing
from .schema import get_schema


@dataclass
class AggregatorFactory:
    """Factory Pattern: build the aggregator for the configured schema and lunch policy."""

    def pairing_for(self, lunch_policy: LunchPolicy | str) -> PairingPolicy:
        try:
            policy = LunchPolicy(lunch_policy)
        except ValueError:
            raise ValueError(f"Unknown LUNCH_POLICY {lunch_policy!r}; expected 'exclude' or 'include'")

        if policy is LunchPolicy.INCLUDE:
            return LunchIncludedPairing()
        return LunchExcludedPairing()

    def build(self, *, schema_name: str = "four_state", lunch_policy: LunchPolicy | str = LunchPolicy.EXCLUDE) -> AttendanceAggregator:
        return AttendanceAggregator(schema=get_schema(schema_name), pairing=self.pairing_for(lunch_policy))
