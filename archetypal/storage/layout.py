"""Component layouts and the map from entity ids to storage locations."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


class Layout:
    """An ordered collection of component types."""

    def __init__(self, components: Iterable[Any] = ()) -> None:
        self.components: list[Any] = []
        for component_type in components:
            self.add_component(component_type)

    def add_component(self, component_type: Any) -> None:
        """Register a component type in the layout."""
        self.components.append(component_type)

    def has_component(self, component_type: Any) -> bool:
        """Return True if the layout holds the given component type."""
        return any(c is component_type for c in self.components)

    def __str__(self) -> str:
        return "Layout: {" + ", ".join(str(c) for c in self.components) + "}"

    def __repr__(self) -> str:
        return f"Layout({self.components!r})"


@dataclass
class Location:
    """Where an entity lives: its archetype and its row within it."""

    archetype: int
    component: int
    valid: bool = True


class LocationMap:
    """Locations of entities, indexed by entity id."""

    def __init__(self) -> None:
        self._locations: list[Location | None] = [None]
        self._len = 0

    def __len__(self) -> int:
        return self._len

    def contains(self, entity_id: int) -> bool:
        """Return True if the id has a valid location."""
        if not 0 <= entity_id < len(self._locations):
            return False
        loc = self._locations[entity_id]
        return loc is not None and loc.valid

    def remove(self, entity_id: int) -> None:
        """Mark the location of the id as invalid."""
        self._locations[entity_id].valid = False
        self._len -= 1

    def insert(self, entity_id: int, archetype: int, component: int) -> None:
        """Record the archetype and row of the id, reusing its location object."""
        if entity_id == len(self._locations):
            self._locations.append(Location(archetype, component))
            self._len += 1
            return
        loc = self._locations[entity_id]
        loc.archetype = archetype
        loc.component = component
        if not loc.valid:
            self._len += 1
            loc.valid = True

    def set(self, entity_id: int, location: Location) -> None:
        """Copy the archetype and row of a location to the id."""
        self.insert(entity_id, location.archetype, location.component)

    def location(self, entity_id: int) -> Location | None:
        """Return the location object of the id."""
        return self._locations[entity_id]

    def archetype(self, entity_id: int) -> int:
        """Return the archetype index of the id."""
        return self._locations[entity_id].archetype

    def component(self, entity_id: int) -> int:
        """Return the row of the id within its archetype."""
        return self._locations[entity_id].component