from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import PunchKind


class PairingPolicy(ABC):
    """Strategy Pattern: decide which punch kinds open and close a worked interval."""

    @property
    @abstractmethod
    def opening_kinds(self) -> frozenset[PunchKind]:
        raise NotImplementedError

    @property
    @abstractmethod
    def closing_kinds(self) -> frozenset[PunchKind]:
        raise NotImplementedError

    def opens(self, kind: PunchKind) -> bool:
        return kind in self.opening_kinds

    def closes(self, kind: PunchKind) -> bool:
        return kind in self.closing_kinds
