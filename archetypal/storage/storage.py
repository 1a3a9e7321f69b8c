"""Per-component value storage, grouped by archetype, and a simple component type."""

from __future__ import annotations

import copy
import itertools
from collections.abc import Iterable
from typing import Any

from archetypal.storage.archetype import Archetype


class Storage:
    """Values of one component type, one list per archetype index."""

    def __init__(self) -> None:
        self._storages: dict[int, list[Any]] = {}

    def push_component(self, component_type: Any, archetype_index: int) -> None:
        """Append a fresh value of the component type to the archetype's list."""
        self._storages.setdefault(archetype_index, []).append(component_type.new())

    def component(self, archetype_index: int, component_index: int) -> Any:
        """Return the value stored at the archetype and row."""
        return self._storages[archetype_index][component_index]

    def set_component(self, archetype_index: int, component_index: int, value: Any) -> None:
        """Replace the value stored at the archetype and row."""
        self._storages[archetype_index][component_index] = value

    def move_component(self, src_index: int, index: int, dst_index: int) -> None:
        """Move a value from one archetype to the end of another."""
        value = self.swap_remove(src_index, index)
        self._storages.setdefault(dst_index, []).append(value)

    def swap_remove(self, archetype_index: int, component_index: int) -> Any:
        """Remove and return a value, moving the archetype's last value into its place."""
        values = self._storages[archetype_index]
        if not 0 <= component_index < len(values):
            raise IndexError(f"component index {component_index} out of range")
        removed = values[component_index]
        last = values.pop()
        if component_index < len(values):
            values[component_index] = last
        return removed

    def contains(self, archetype_index: int, component_index: int) -> bool:
        """Return True if a value is stored at the archetype and row."""
        values = self._storages.get(archetype_index)
        if values is None or not 0 <= component_index < len(values):
            return False
        return values[component_index] is not None


class Components:
    """All component storages of a world, keyed by component type id."""

    def __init__(self) -> None:
        self._storages: dict[int, Storage] = {}
        self.component_indices: dict[int, int] = {}

    def push_components(self, components: Iterable[Any], archetype_index: int) -> int:
        """Store fresh values of the components for a new row; return the row index."""
        for component_type in components:
            self.storage(component_type).push_component(component_type, archetype_index)
        index = self.component_indices.get(archetype_index, -1) + 1
        self.component_indices[archetype_index] = index
        return index

    def move(self, src: int, dst: int) -> None:
        """Account for a row moved from one archetype to another."""
        self.component_indices[src] = self.component_indices.get(src, 0) - 1
        self.component_indices[dst] = self.component_indices.get(dst, -1) + 1

    def storage(self, component_type: Any) -> Storage:
        """Return the storage of the component type, creating it if needed."""
        storage = self._storages.get(component_type.id)
        if storage is None:
            storage = Storage()
            self._storages[component_type.id] = storage
        return storage

    def remove(self, archetype: Archetype, component_index: int) -> None:
        """Remove the row from every storage of the archetype's components."""
        for component_type in archetype.layout.components:
            self.storage(component_type).swap_remove(archetype.index, component_index)
        self.component_indices[archetype.index] = self.component_indices.get(archetype.index, 0) - 1


_mock_ids = itertools.count(1)


class MockComponentType:
    """A minimal component type: values are made by calling the type or copying a default."""

    def __init__(self, typ: type, default_val: Any = None) -> None:
        self.id = next(_mock_ids)
        self.typ = typ
        self.default_val = default_val

    @property
    def name(self) -> str:
        return f"MockComponentType[{self.typ.__name__}]"

    def new(self) -> Any:
        """Return a new value: a copy of the default, or the type's zero value."""
        if self.default_val is not None:
            return copy.copy(self.default_val)
        return self.typ()

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"MockComponentType(id={self.id}, typ={self.typ.__name__})"