"""Domain errors raised by the directional zone framework."""

from __future__ import annotations

from collections.abc import Iterable


class InvalidBoundaryError(ValueError):
    """Raised when a boundary polygon cannot support a sector analysis.

    Attributes:
        reason: Machine-readable cause. One of ``too_few_points``,
            ``degenerate``, ``non_finite`` or ``invalid_radius``.
    """

    def __init__(self, message: str, reason: str = "invalid") -> None:
        self.reason = reason
        super().__init__(message)


class MissingAttributeRecordError(KeyError):
    """Raised when an attribute table does not cover every main direction.

    Attributes:
        table: Name of the incomplete table.
        missing: Direction codes without a record.
    """

    def __init__(self, table: str, missing: Iterable[str]) -> None:
        self.table = table
        self.missing = tuple(missing)
        super().__init__(
            f"Attribute table '{table}' has no record for: {', '.join(self.missing)}"
        )

    def __str__(self) -> str:
        # KeyError quotes its argument by default.
        return str(self.args[0])


__all__ = ["InvalidBoundaryError", "MissingAttributeRecordError"]
