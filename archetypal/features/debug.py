"""Introspection helpers reporting how entities are spread over archetypes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from archetypal.storage.archetype import Archetype


@dataclass
class EntityCounts:
    """Number of entities in one archetype."""

    archetype: Archetype
    count: int

    def __str__(self) -> str:
        return f"Archetype {self.archetype.layout} has {self.count} entities"


def get_entity_counts(world: Any) -> list[EntityCounts]:
    """Return counts of non-empty archetypes, largest first."""
    counts = [EntityCounts(a, a.count()) for a in world.archetypes if a.count() != 0]
    counts.sort(key=lambda c: c.count, reverse=True)
    return counts


def print_entity_counts(world: Any) -> None:
    """Print the entity count of every non-empty archetype."""
    lines = ["Entity Counts:"]
    lines.extend(str(c) for c in get_entity_counts(world))
    print("\n".join(lines) + "\n\n")