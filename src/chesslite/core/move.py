"""MoveOutcome value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesslite.core.enums import MoveKind
from chesslite.core.types import Square


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of asking the engine to play a move.

    ``square`` is only set for :attr:`MoveKind.PROMOTION_PENDING` and names
    the square awaiting a promotion choice.
    """

    kind: MoveKind
    square: Square | None = None

    @classmethod
    def invalid(cls) -> MoveOutcome:
        return cls(MoveKind.INVALID)

    @classmethod
    def promotion_pending(cls, sq: Square) -> MoveOutcome:
        return cls(MoveKind.PROMOTION_PENDING, sq)

    @property
    def accepted(self) -> bool:
        """Whether the board changed."""
        return self.kind != MoveKind.INVALID

    @property
    def is_capture(self) -> bool:
        return self.kind == MoveKind.MOVED_WITH_CAPTURE

    def __str__(self) -> str:
        name = self.kind.name.lower()
        if self.square is not None:
            return f"{name}({self.square})"
        return name
