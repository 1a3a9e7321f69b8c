"""Entries: handles to an entity and its location in a world's storage."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any

from archetypal.storage.entity import NULL, Entity
from archetypal.storage.layout import Location

__all__ = [
    "NULL",
    "Entity",
    "Entry",
    "add",
    "get",
    "get_components",
    "get_value",
    "remove",
    "set_value",
    "valid",
]

_MISSING = object()


@dataclass(eq=False)
class Entry:
    """An entity of a world together with its current storage location."""

    world: Any
    id: int
    entity: Entity
    loc: Location

    def component(self, component_type: Any) -> Any:
        """Return the entity's data for the component type."""
        storage = self.world.components.storage(component_type)
        return storage.component(self.loc.archetype, self.loc.component)

    def set_component(self, component_type: Any, value: Any) -> None:
        """Replace the entity's data for the component type."""
        storage = self.world.components.storage(component_type)
        storage.set_component(self.loc.archetype, self.loc.component, value)

    def add_component(self, component_type: Any, value: Any = _MISSING) -> None:
        """Add the component type to the entity, optionally setting its data."""
        if not self.has_component(component_type):
            archetype_index = self.loc.archetype
            layout = self.world.archetypes[archetype_index].layout.components
            target = self.world._archetype_for_components([*layout, component_type])
            self.world.transfer_archetype(archetype_index, target, self.loc.component)
            self.loc = self.world.entry(self.entity).loc
        if value is not _MISSING:
            self.set_component(component_type, value)

    def remove_component(self, component_type: Any) -> None:
        """Remove the component type from the entity; do nothing if it is absent."""
        if not self.has_component(component_type):
            return
        layout = self.world.archetypes[self.loc.archetype].layout.components
        target_layout = [c for c in layout if c is not component_type]
        target = self.world._archetype_for_components(target_layout)
        self.world.transfer_archetype(self.loc.archetype, target, self.loc.component)
        self.loc = self.world.entry(self.entity).loc

    def remove(self) -> None:
        """Remove the entity from its world."""
        self.world.remove(self.entity)

    def valid(self) -> bool:
        """Return True if the entity is still alive in its world."""
        return self.world.valid(self.entity)

    def archetype(self) -> Any:
        """Return the archetype the entity currently belongs to."""
        return self.world.archetypes[self.loc.archetype]

    def has_component(self, component_type: Any) -> bool:
        """Return True if the entity has the component type."""
        return self.archetype().layout.has_component(component_type)

    def __str__(self) -> str:
        valid_text = "true" if self.valid() else "false"
        return f"Entry: {{{self.entity}, {self.archetype().layout}, Valid: {valid_text}}}"


def get(entry: Entry, component_type: Any) -> Any:
    """Return the entry's data for the component type."""
    return entry.component(component_type)


def get_value(entry: Entry, component_type: Any) -> Any:
    """Return a copy of the entry's data for the component type."""
    return copy.copy(entry.component(component_type))


def set_value(entry: Entry, component_type: Any, value: Any) -> None:
    """Replace the entry's data for the component type."""
    entry.set_component(component_type, value)


def add(entry: Entry, component_type: Any, value: Any) -> None:
    """Add the component type to the entry with the given data."""
    entry.add_component(component_type, value)


def remove(entry: Entry, component_type: Any) -> None:
    """Remove the component type from the entry."""
    entry.remove_component(component_type)


def valid(entry: Entry | None) -> bool:
    """Return True if the entry exists and its entity is alive."""
    if entry is None:
        return False
    return entry.valid()


def get_components(entry: Entry) -> list[Any]:
    """Return copies of all the entry's component data, in layout order."""
    return [copy.copy(entry.component(c)) for c in entry.archetype().component_types()]