"""Queries selecting entities of a world by the layout of their components."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from archetypal.filters import LayoutFilter
from archetypal.storage.archetype import Archetype, iter_archetypes


@runtime_checkable
class Orderable(Protocol):
    """Component data that can be used to order query results."""

    def order(self) -> int:
        """Return the sort key of the value."""


@dataclass
class _Cache:
    archetypes: list[int] = field(default_factory=list)
    seen: int = 0


class Query:
    """Selects entities whose archetype layout matches a filter.

    Matching archetypes are cached per world, so a query should be created
    once and reused.
    """

    def __init__(self, layout_filter: LayoutFilter) -> None:
        self.filter = layout_filter
        self._layout_matches: dict[Any, _Cache] = {}

    def _evaluate(self, world: Any, accessor: Any) -> list[int]:
        cache = self._layout_matches.setdefault(world.id, _Cache())
        cache.archetypes.extend(accessor.index.search_from(self.filter, cache.seen))
        cache.seen = len(accessor.archetypes)
        return list(cache.archetypes)

    def _matching_archetypes(self, world: Any) -> Iterator[Archetype]:
        accessor = world.storage_accessor()
        return iter_archetypes(accessor.archetypes, self._evaluate(world, accessor))

    def iter(self, world: Any) -> Iterator[Any]:
        """Yield an entry for every fully created entity matching the query."""
        for archetype in self._matching_archetypes(world):
            with archetype:
                for entity in tuple(archetype.entities):
                    if entity.is_ready():
                        yield world.entry(entity)

    def each(self, world: Any, callback: Callable[[Any], Any]) -> None:
        """Call the callback with every entry matching the query."""
        for entry in self.iter(world):
            callback(entry)

    def count(self, world: Any) -> int:
        """Return the number of entities in the matching archetypes."""
        return sum(len(a.entities) for a in self._matching_archetypes(world))

    def first(self, world: Any) -> Any | None:
        """Return the entry of the first matching entity, or None."""
        for archetype in self._matching_archetypes(world):
            if archetype.entities:
                return world.entry(archetype.entities[0])
        return None


class OrderedQuery(Query):
    """A query whose results can be ordered by an orderable component."""

    def __init__(self, layout_filter: LayoutFilter) -> None:
        super().__init__(layout_filter)
        self._lock = threading.Lock()

    def iter_ordered(self, world: Any, order_by: Any) -> Iterator[Any]:
        """Yield matching entries, stably sorted by order_by's value's order()."""
        with self._lock:
            entries = list(self.iter(world))
            entries.sort(key=lambda entry: order_by.get_value(entry).order())
        yield from entries

    def each_ordered(self, world: Any, order_by: Any, callback: Callable[[Any], Any]) -> None:
        """Call the callback with matching entries in order."""
        for entry in self.iter_ordered(world, order_by):
            callback(entry)


def ordered_entries(world: Any, entities: Iterable[Any], ordered_by: Any) -> list[Any]:
    """Return entries of the entities, stably sorted by ordered_by's value's order()."""
    entries = [world.entry(entity) for entity in entities]
    entries.sort(key=lambda entry: ordered_by.get_value(entry).order())
    return entries