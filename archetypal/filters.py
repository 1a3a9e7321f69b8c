"""Component type protocol and the layout filters used to select archetypes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ComponentTypeProtocol(Protocol):
    """What the storage layer needs from a component type."""

    @property
    def id(self) -> int:
        """Unique identifier of the component type."""

    @property
    def name(self) -> str:
        """Human readable name of the component type."""

    @property
    def typ(self) -> type:
        """Python type of the component's data."""

    def new(self) -> Any:
        """Return a fresh value for a newly stored component."""


def _contains_component(components: Iterable[Any], component_type: Any) -> bool:
    return any(c is component_type for c in components)


class LayoutFilter(ABC):
    """Decides whether a layout (a sequence of component types) matches."""

    @abstractmethod
    def matches_layout(self, components: Sequence[Any]) -> bool:
        """Return True if the given component layout matches the filter."""

    def __and__(self, other: LayoutFilter) -> LayoutFilter:
        return And((self, other))

    def __or__(self, other: LayoutFilter) -> LayoutFilter:
        return Or((self, other))

    def __invert__(self) -> LayoutFilter:
        return Not(self)


class Contains(LayoutFilter):
    """Matches layouts that contain all of the given component types."""

    __slots__ = ("components",)

    def __init__(self, components: Iterable[Any]) -> None:
        self.components = tuple(components)

    def matches_layout(self, components: Sequence[Any]) -> bool:
        return all(_contains_component(components, c) for c in self.components)

    def __repr__(self) -> str:
        return f"Contains({list(self.components)!r})"


class Exact(LayoutFilter):
    """Matches layouts made of exactly the given component types, in any order."""

    __slots__ = ("components",)

    def __init__(self, components: Iterable[Any]) -> None:
        self.components = tuple(components)

    def matches_layout(self, components: Sequence[Any]) -> bool:
        if len(components) != len(self.components):
            return False
        return all(_contains_component(self.components, c) for c in components)

    def __repr__(self) -> str:
        return f"Exact({list(self.components)!r})"


class And(LayoutFilter):
    """Matches when every inner filter matches."""

    __slots__ = ("filters",)

    def __init__(self, filters: Iterable[LayoutFilter]) -> None:
        self.filters = tuple(filters)

    def matches_layout(self, components: Sequence[Any]) -> bool:
        return all(f.matches_layout(components) for f in self.filters)

    def __repr__(self) -> str:
        return f"And({list(self.filters)!r})"


class Or(LayoutFilter):
    """Matches when at least one inner filter matches."""

    __slots__ = ("filters",)

    def __init__(self, filters: Iterable[LayoutFilter]) -> None:
        self.filters = tuple(filters)

    def matches_layout(self, components: Sequence[Any]) -> bool:
        return any(f.matches_layout(components) for f in self.filters)

    def __repr__(self) -> str:
        return f"Or({list(self.filters)!r})"


class Not(LayoutFilter):
    """Matches when the inner filter does not."""

    __slots__ = ("filter",)

    def __init__(self, layout_filter: LayoutFilter) -> None:
        self.filter = layout_filter

    def matches_layout(self, components: Sequence[Any]) -> bool:
        return not self.filter.matches_layout(components)

    def __repr__(self) -> str:
        return f"Not({self.filter!r})"


def contains(*args: Any) -> LayoutFilter:
    """Filter for layouts containing all the given component types."""
    return Contains(args)


def exact(components: Iterable[Any]) -> LayoutFilter:
    """Filter for layouts made of exactly the given component types."""
    return Exact(components)


def and_(*args: LayoutFilter) -> LayoutFilter:
    """Filter matching when all given filters match."""
    return And(args)


def or_(*args: LayoutFilter) -> LayoutFilter:
    """Filter matching when any given filter matches."""
    return Or(args)


def not_(layout_filter: LayoutFilter) -> LayoutFilter:
    """Filter matching when the given filter does not."""
    return Not(layout_filter)