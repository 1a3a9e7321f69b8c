"""Parent/child relations between entries of a world."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from archetypal.component import ComponentType
from archetypal.filters import Contains
from archetypal.query import Query


@dataclass
class _ChildrenData:
    children: list[Any] = field(default_factory=list)


@dataclass
class _ParentData:
    parent: Any = None


_children_component = ComponentType(_ChildrenData, name="Children")
_parent_component = ComponentType(_ParentData, name="Parent")


def get_children(entry: Any) -> list[Any] | None:
    """Return the entry's children, or None if it has never had any."""
    if not has_children(entry):
        return None
    return _children_component.get(entry).children


def must_get_children(entry: Any) -> list[Any]:
    """Return the entry's children; raise LookupError if it has none."""
    if not has_children(entry):
        raise LookupError("entry has no children")
    return _children_component.get(entry).children


def has_children(entry: Any) -> bool:
    """Return True if the entry carries a children list."""
    return entry.has_component(_children_component)


def has_parent(entry: Any) -> bool:
    """Return True if the entry has a parent."""
    return entry.has_component(_parent_component)


def get_parent(entry: Any) -> Any | None:
    """Return the entry's parent if it has one that is still valid, else None."""
    if not has_parent(entry):
        return None
    parent = _parent_component.get(entry).parent
    if parent is not None and parent.valid():
        return parent
    return None


def must_get_parent(entry: Any) -> Any:
    """Return the entry's parent, valid or not; raise LookupError if it has none."""
    if not has_parent(entry):
        raise LookupError("entry has no parent")
    return _parent_component.get(entry).parent


def remove_children_recursive(entry: Any) -> None:
    """Remove every descendant of the entry."""
    children = get_children(entry)
    if children is None:
        return
    for child in list(children):
        if child.valid():
            remove_children_recursive(child)
            child.remove()


def remove_recursive(entry: Any) -> None:
    """Remove the entry and all its descendants."""
    remove_children_recursive(entry)
    entry.remove()


def append_child(parent: Any, child: Any) -> None:
    """Make child a child of parent."""
    set_parent(child, parent)


def find_child_with_component(entry: Any, component_type: Any) -> Any | None:
    """Return the first valid child having the component type, or None."""
    for child in get_children(entry) or ():
        if child.valid() and child.has_component(component_type):
            return child
    return None


def set_parent(child: Any, parent: Any) -> None:
    """Attach child to parent; raise ValueError if either is invalid or child has a parent."""
    if not parent.valid():
        raise ValueError("parent is not valid")
    if not child.valid():
        raise ValueError("child is not valid")
    if child.has_component(_parent_component):
        raise ValueError("child already has a parent")
    if not parent.has_component(_children_component):
        parent.add_component(_children_component)
    child.add_component(_parent_component, _ParentData(parent=parent))
    _children_component.get(parent).children.append(child)


def change_parent(child: Any, new_parent: Any) -> None:
    """Move child from its current parent, if any, to new_parent."""
    if not new_parent.valid():
        raise ValueError("newParent is not valid")
    if not child.valid():
        raise ValueError("child is not valid")
    if not new_parent.has_component(_children_component):
        new_parent.add_component(_children_component)

    old_parent = get_parent(child)
    if old_parent is not None:
        if old_parent is new_parent:
            return
        old_children = _children_component.get(old_parent).children
        for index, existing in enumerate(old_children):
            if existing is child:
                del old_children[index]
                break
        child.remove_component(_parent_component)

    set_parent(child, new_parent)


class HierarchySystem:
    """A system removing entries whose parent is no longer valid, with their children."""

    def __init__(self) -> None:
        self.query = Query(Contains((_parent_component,)))

    def remove_children(self, ecs: Any) -> None:
        """Remove orphaned entries and their descendants."""
        for entry in self.query.iter(ecs.world):
            if not entry.valid() or not has_parent(entry):
                continue
            parent = _parent_component.get(entry).parent
            if parent is not None and parent.valid():
                continue
            for child in list(get_children(entry) or ()):
                remove_recursive(child)
            entry.remove()


hierarchy_system = HierarchySystem()