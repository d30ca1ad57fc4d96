"""Per-direction attribute tables.

Each analysis ships a table of eight immutable records, one per main
direction, holding its numeric weights, tags, usage keyword lists and the
guidance strings its recommendation templates draw on. The scoring engine
reads these records but never mutates them.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from vastu.domain.errors import MissingAttributeRecordError
from vastu.domain.value_objects import MainDirection


@dataclass(frozen=True)
class DirectionalAttributeRecord:
    """Static attributes of one main direction for one analysis.

    Attributes:
        direction: The main direction this record describes.
        identifier: Stable identifier (e.g. the ruling deity's name).
        title: Display title.
        element: Element classification tag.
        weights: Named numeric weights such as ``ideal_percentage``.
        tags: Named tag lists such as qualities or materials.
        ideal_usage: Usage keywords that suit the direction.
        prohibited_usage: Usage keywords that conflict with the direction.
        usage_compatibility: Usage name to compatibility score (0-100).
        guidance: Free-text fields available to recommendation templates.
    """

    direction: MainDirection
    identifier: str
    title: str = ""
    element: str = ""
    weights: Mapping[str, float] = field(default_factory=dict)
    tags: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    ideal_usage: tuple[str, ...] = ()
    prohibited_usage: tuple[str, ...] = ()
    usage_compatibility: Mapping[str, float] = field(default_factory=dict)
    guidance: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.identifier:
            raise ValueError("identifier must not be empty")
        for usage, score in self.usage_compatibility.items():
            if not 0 <= score <= 100:
                raise ValueError(
                    f"Compatibility for '{usage}' must be between 0 and 100, got {score}"
                )
        object.__setattr__(self, "direction", MainDirection(self.direction))
        object.__setattr__(self, "ideal_usage", tuple(self.ideal_usage))
        object.__setattr__(self, "prohibited_usage", tuple(self.prohibited_usage))
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))
        object.__setattr__(
            self,
            "tags",
            MappingProxyType({k: tuple(v) for k, v in self.tags.items()}),
        )
        object.__setattr__(
            self,
            "usage_compatibility",
            MappingProxyType({k.lower(): v for k, v in self.usage_compatibility.items()}),
        )
        object.__setattr__(self, "guidance", MappingProxyType(dict(self.guidance)))

    def weight(self, name: str, default: float | None = None) -> float:
        """Look up a numeric weight.

        Raises:
            KeyError: If the weight is absent and no default is given.
        """
        if name in self.weights:
            return self.weights[name]
        if default is None:
            raise KeyError(f"{self.direction.value} record has no weight '{name}'")
        return default

    def compatibility(self, usage: str) -> float | None:
        """Compatibility score for an exact usage name, case-insensitive."""
        return self.usage_compatibility.get(usage.strip().lower())

    def matching_prohibited(self, usage: str) -> str | None:
        """First prohibited keyword contained in ``usage``, case-insensitive."""
        return _first_keyword_in(usage, self.prohibited_usage)

    def matching_ideal(self, usage: str) -> str | None:
        """First ideal keyword contained in ``usage``, case-insensitive."""
        return _first_keyword_in(usage, self.ideal_usage)


def _first_keyword_in(text: str, keywords: Iterable[str]) -> str | None:
    lowered = text.lower()
    for keyword in keywords:
        if keyword.lower() in lowered:
            return keyword
    return None


class AttributeTable(Mapping[MainDirection, DirectionalAttributeRecord]):
    """Immutable table of records covering all eight main directions.

    Lookups accept either a ``MainDirection`` or its code string.

    Args:
        name: Table name used in error messages.
        records: One record per main direction.

    Raises:
        ValueError: If two records share a direction.
        MissingAttributeRecordError: If any main direction has no record.
    """

    def __init__(self, name: str, records: Iterable[DirectionalAttributeRecord]) -> None:
        self.name = name
        table: dict[MainDirection, DirectionalAttributeRecord] = {}
        for record in records:
            if record.direction in table:
                raise ValueError(
                    f"Attribute table '{name}' has two records for {record.direction.value}"
                )
            table[record.direction] = record
        missing = [d.value for d in MainDirection if d not in table]
        if missing:
            raise MissingAttributeRecordError(name, missing)
        self._records = {d: table[d] for d in MainDirection}

    def __getitem__(self, direction: MainDirection | str) -> DirectionalAttributeRecord:
        try:
            key = MainDirection(direction)
        except ValueError:
            raise MissingAttributeRecordError(self.name, [str(direction)]) from None
        return self._records[key]

    def __iter__(self) -> Iterator[MainDirection]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"AttributeTable(name={self.name!r}, records={len(self)})"


__all__ = ["AttributeTable", "DirectionalAttributeRecord"]
