"""Archetypes, the archetype search index and iteration over archetypes."""

from __future__ import annotations

import threading
from collections.abc import Iterator, Sequence
from typing import Any

from archetypal.filters import LayoutFilter
from archetypal.storage.entity import Entity
from archetypal.storage.layout import Layout


class Archetype:
    """The entities sharing one layout of components.

    Usable as a context manager to hold its (reentrant) lock.
    """

    def __init__(self, index: int, layout: Layout) -> None:
        self.index = index
        self.layout = layout
        self.entities: list[Entity] = []
        self.lock = threading.RLock()

    def __enter__(self) -> Archetype:
        self.lock.acquire()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.lock.release()

    def component_types(self) -> list[Any]:
        """Return the component types of the archetype's layout."""
        return self.layout.components

    def swap_remove(self, entity_index: int) -> Entity:
        """Remove the entity at the index, moving the last one into its place."""
        if not 0 <= entity_index < len(self.entities):
            raise IndexError(f"entity index {entity_index} out of range")
        removed = self.entities[entity_index]
        last = self.entities.pop()
        if entity_index < len(self.entities):
            self.entities[entity_index] = last
        return removed

    def layout_matches(self, components: Sequence[Any]) -> bool:
        """Return True if the components are exactly this archetype's layout."""
        if len(self.layout.components) != len(components):
            return False
        return all(self.layout.has_component(c) for c in components)

    def push_entity(self, entity: Entity) -> None:
        """Add an entity to the archetype."""
        self.entities.append(entity)

    def count(self) -> int:
        """Return the number of entities in the archetype."""
        return len(self.entities)

    def __repr__(self) -> str:
        return f"Archetype(index={self.index}, layout={self.layout}, count={self.count()})"


class Index:
    """Searchable list of archetype layouts, in archetype index order."""

    def __init__(self) -> None:
        self._layouts: list[list[Any]] = []

    def __len__(self) -> int:
        return len(self._layouts)

    def push(self, layout: Layout) -> None:
        """Add the layout of the next archetype."""
        self._layouts.append(layout.components)

    def search_from(self, layout_filter: LayoutFilter, start: int) -> list[int]:
        """Return indices, from start on, of archetypes matching the filter."""
        return [
            i
            for i, components in enumerate(self._layouts[start:], start)
            if layout_filter.matches_layout(components)
        ]

    def search(self, layout_filter: LayoutFilter) -> list[int]:
        """Return indices of all archetypes matching the filter."""
        return self.search_from(layout_filter, 0)


def iter_archetypes(archetypes: Sequence[Archetype], indices: Sequence[int]) -> Iterator[Archetype]:
    """Yield the archetypes at the given indices, in order."""
    for i in indices:
        yield archetypes[i]