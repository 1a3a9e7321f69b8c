"""Worlds: collections of entities whose components are stored by archetype."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from archetypal.entry import Entry
from archetypal.filters import Exact
from archetypal.storage.archetype import Archetype, Index
from archetypal.storage.entity import NULL, Entity, new_entity
from archetypal.storage.layout import Layout, Location, LocationMap
from archetypal.storage.storage import Components

EntityCallback = Callable[["World", Entity], Any]
Initializer = Callable[["World"], Any]

_world_ids = itertools.count(0)
_registered_initializers: list[Initializer] = []


def register_initializer(initializer: Initializer) -> None:
    """Register a function called with every world created from now on."""
    _registered_initializers.append(initializer)


@dataclass
class StorageAccessor:
    """Access to a world's storage, used by queries."""

    index: Index
    components: Components
    archetypes: list[Archetype]


class World:
    """A collection of entities and their components."""

    def __init__(self) -> None:
        self.id: int = next(_world_ids)
        self.index = Index()
        self.entities = LocationMap()
        self.components = Components()
        self.archetypes: list[Archetype] = []
        self._destroyed: list[Entity] = []
        self._entries: list[Entry | None] = [None]
        self._next_entity_id = 1
        self._create_callbacks: list[EntityCallback] = []
        self._remove_callbacks: list[EntityCallback] = []
        for initializer in _registered_initializers:
            initializer(self)

    def __len__(self) -> int:
        return len(self.entities)

    def create(self, *args: Any) -> Entity:
        """Create an entity with the given component types."""
        return self._create_entity(self._archetype_for_components(args))

    def create_many(self, count: int, *args: Any) -> list[Entity]:
        """Create count entities with the given component types."""
        archetype_index = self._archetype_for_components(args)
        return [self._create_entity(archetype_index) for _ in range(count)]

    def entry(self, entity: Entity) -> Entry:
        """Return the entry of the entity, updated to its current location."""
        entity = Entity(entity)
        entity_id = entity.id()
        if not 0 <= entity_id < len(self._entries) or self._entries[entity_id] is None:
            raise LookupError(f"unknown entity {entity}")
        entry = self._entries[entity_id]
        entry.entity = entity
        entry.loc = self.entities.location(entity_id)
        return entry

    def remove(self, entity: Entity) -> None:
        """Remove the entity; do nothing if it is not valid."""
        entity = Entity(entity)
        if not self.valid(entity):
            return
        # Callbacks run first so they can still reach the entity's data.
        for callback in self._remove_callbacks:
            callback(self, entity)
        self.entities.remove(entity.id())
        self._remove_at_location(entity, self.entities.location(entity.id()))

    def valid(self, entity: Entity) -> bool:
        """Return True if the entity is alive in this world."""
        entity = Entity(entity)
        if entity == NULL:
            return False
        if not self.entities.contains(entity.id()):
            return False
        loc = self.entities.location(entity.id())
        return (
            entity.is_ready()
            and loc.valid
            and entity == self.archetypes[loc.archetype].entities[loc.component]
        )

    def storage_accessor(self) -> StorageAccessor:
        """Return the world's storage, for use by queries."""
        return StorageAccessor(self.index, self.components, self.archetypes)

    def transfer_archetype(self, from_index: int, to_index: int, component_index: int) -> int:
        """Move the entity at the row of one archetype to another; return its new row."""
        if from_index == to_index:
            return component_index
        from_archetype = self.archetypes[from_index]
        to_archetype = self.archetypes[to_index]

        entity = from_archetype.swap_remove(component_index)
        to_archetype.push_entity(entity)
        self.entities.insert(entity.id(), to_index, len(to_archetype.entities) - 1)

        if len(from_archetype.entities) > component_index:
            moved = from_archetype.entities[component_index]
            self.entities.insert(moved.id(), from_index, component_index)

        from_layout = from_archetype.layout
        to_layout = to_archetype.layout
        for component_type in to_layout.components:
            if not from_layout.has_component(component_type):
                self.components.storage(component_type).push_component(component_type, to_index)

        for component_type in from_layout.components:
            storage = self.components.storage(component_type)
            if to_layout.has_component(component_type):
                storage.move_component(from_index, component_index, to_index)
            else:
                storage.swap_remove(from_index, component_index)
        self.components.move(from_index, to_index)

        return len(to_archetype.entities) - 1

    def on_create(self, callback: EntityCallback) -> None:
        """Register a callback run after an entity is created."""
        self._create_callbacks.append(callback)

    def on_remove(self, callback: EntityCallback) -> None:
        """Register a callback run before an entity is removed."""
        self._remove_callbacks.append(callback)

    def _create_entity(self, archetype_index: int) -> Entity:
        entity = self._next_entity()
        archetype = self.archetypes[archetype_index]
        component_index = self.components.push_components(
            archetype.layout.components, archetype_index
        )
        self.entities.insert(entity.id(), archetype_index, component_index)
        archetype.push_entity(entity)

        with archetype:
            self._create_entry(entity)
            ready = entity.ready()
            archetype.entities[component_index] = ready
            self._entries[ready.id()].entity = ready
            for callback in self._create_callbacks:
                callback(self, ready)
        return ready

    def _create_entry(self, entity: Entity) -> Entry:
        entity_id = entity.id()
        location = self.entities.location(entity_id)
        if entity_id >= len(self._entries):
            entry = Entry(world=self, id=entity_id, entity=entity, loc=location)
            self._entries.append(entry)
            return entry
        entry = self._entries[entity_id]
        entry.loc = location
        return entry

    def _remove_at_location(self, entity: Entity, loc: Location) -> None:
        component_index = loc.component
        archetype = self.archetypes[loc.archetype]
        archetype.swap_remove(component_index)
        self.components.remove(archetype, component_index)
        if component_index < len(archetype.entities):
            swapped = archetype.entities[component_index]
            self.entities.set(swapped.id(), loc)
        self._destroyed.append(entity.inc_version())

    def _next_entity(self) -> Entity:
        if not self._destroyed:
            entity_id = self._next_entity_id
            self._next_entity_id += 1
            return new_entity(entity_id)
        return self._destroyed.pop()

    def _insert_archetype(self, layout: Layout) -> int:
        self.index.push(layout)
        archetype_index = len(self.archetypes)
        self.archetypes.append(Archetype(archetype_index, layout))
        return archetype_index

    def _archetype_for_components(self, components: Iterable[Any]) -> int:
        components = list(components)
        if not components:
            raise ValueError("entity must have at least one component")
        matches = self.index.search(Exact(components))
        if matches:
            return matches[0]
        if not _no_duplicates(components):
            raise ValueError(f"duplicate component types: {components}")
        return self._insert_archetype(Layout(components))

    def __repr__(self) -> str:
        return f"World(id={self.id}, entities={len(self)})"


def _no_duplicates(components: Sequence[Any]) -> bool:
    return all(
        a is not b
        for i, a in enumerate(components)
        for b in components[i + 1:]
    )