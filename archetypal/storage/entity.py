"""Entity identifiers: a 64-bit value holding an id, a version and a ready flag."""

from __future__ import annotations

ID_MASK = 0xFFFFFFFF00000000
VERSION_MASK = 0x0FFFFFF
READY_MASK = 0x1000000
_UINT64 = (1 << 64) - 1


class Entity(int):
    """Identifier of an entity.

    The upper 32 bits are the id, the low 24 bits the version; bit 24 marks
    an entity whose creation has completed.
    """

    __slots__ = ()

    def __new__(cls, value: int = 0) -> Entity:
        return super().__new__(cls, int(value) & _UINT64)

    def id(self) -> int:
        """Return the entity id."""
        return int(self) >> 32

    def version(self) -> int:
        """Return the entity version."""
        return int(self) & VERSION_MASK

    def is_ready(self) -> bool:
        """Return True if the entity has been fully created."""
        return bool(int(self) & READY_MASK)

    def ready(self) -> Entity:
        """Return this entity with the ready flag set."""
        return Entity(int(self) | READY_MASK)

    def inc_version(self) -> Entity:
        """Return this entity with its version incremented and not ready."""
        value = int(self)
        return Entity((value & ID_MASK) | (((value + 1) & VERSION_MASK) & ~READY_MASK))

    def __str__(self) -> str:
        return f"Entity: {{id: {self.id()}, version: {self.version()}}}"

    def __repr__(self) -> str:
        return f"Entity({int(self):#x})"


NULL = Entity(0)


def new_entity(entity_id: int) -> Entity:
    """Create a new entity with the given id and version zero."""
    return Entity((int(entity_id) << 32) & ID_MASK)