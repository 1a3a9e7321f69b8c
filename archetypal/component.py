"""Component types, the registry of all component types, and tag components."""

from __future__ import annotations

import copy
import itertools
from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

from archetypal.filters import Contains
from archetypal.query import Query

T = TypeVar("T")

_component_type_ids = itertools.count(1)
_all_component_types: list[ComponentType[Any]] = []


class ComponentType(Generic[T]):
    """A kind of component, used to get and set component data on entries.

    Values of a new component are copies of the default value if one is
    given, otherwise the result of calling the data type with no arguments.
    """

    def __init__(self, typ: type[T], default_val: T | None = None, name: str | None = None) -> None:
        if default_val is not None and not isinstance(default_val, typ):
            raise TypeError(
                f"default value is not assignable to component type: {name or typ.__name__}"
            )
        self.id: int = next(_component_type_ids)
        self.typ = typ
        self.name: str = name if name is not None else typ.__name__
        self.default_val = default_val
        self.query = Query(Contains((self,)))
        _all_component_types.append(self)

    def new(self) -> T:
        """Return a fresh value for a newly created component."""
        if self.default_val is not None:
            return copy.copy(self.default_val)
        return self.typ()

    def get(self, entry: Any) -> T:
        """Return the component data stored on the entry."""
        return entry.component(self)

    def get_value(self, entry: Any) -> T:
        """Return a copy of the component data stored on the entry."""
        return copy.copy(entry.component(self))

    def set(self, entry: Any, value: T) -> None:
        """Store the given object as the entry's component data."""
        entry.set_component(self, value)

    def set_value(self, entry: Any, value: T) -> None:
        """Replace the entry's component data with the given value."""
        entry.set_component(self, value)

    def each(self, world: Any, callback: Callable[[Any], Any]) -> None:
        """Call the callback with every entry that has this component."""
        self.query.each(world, callback)

    def iter(self, world: Any) -> Iterator[Any]:
        """Yield every entry that has this component."""
        return self.query.iter(world)

    def first(self, world: Any) -> Any | None:
        """Return the first entry that has this component, or None."""
        return self.query.first(world)

    def must_first(self, world: Any) -> Any:
        """Return the first entry that has this component; raise LookupError if none."""
        entry = self.query.first(world)
        if entry is None:
            raise LookupError(f"no entity has the component {self.name}")
        return entry

    def set_name(self, name: str) -> ComponentType[T]:
        """Set the component type's name and return the component type."""
        self.name = name
        return self

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"ComponentType(id={self.id}, name={self.name!r})"


class Tag(str):
    """Data of a tag component: a component that carries no data."""

    __slots__ = ()


def new_tag(name: Any = None) -> ComponentType[Tag]:
    """Create a tag component type, named after the given string if one is given."""
    if not isinstance(name, str):
        return ComponentType(Tag)
    return ComponentType(Tag, Tag(name), name=name)


def all_component_types() -> list[ComponentType[Any]]:
    """Return every component type created so far, in creation order."""
    return list(_all_component_types)