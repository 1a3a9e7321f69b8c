from dataclasses import dataclass, field

import pytest

from archetypal.component import ComponentType, new_tag
from archetypal.entry import add, get
from archetypal.filters import contains
from archetypal.query import Query
from archetypal.storage.entity import NULL
from archetypal.world import World, register_initializer


@dataclass
class Vec2f:
    x: float = 0.0
    y: float = 0.0


@dataclass
class TransformData:
    position: Vec2f = field(default_factory=Vec2f)


@dataclass
class VelocityData:
    velocity: Vec2f = field(default_factory=Vec2f)


transform = ComponentType(TransformData)
velocity = ComponentType(VelocityData)
tag_a = new_tag()
tag_b = new_tag()


def test_entry():
    world = World()
    entry = world.entry(world.create(tag_a, transform, velocity))
    assert entry.has_component(tag_a)


def test_mutate_component():
    world = World()
    a = world.create(tag_a, transform, velocity)
    b = world.create(tag_b, transform, velocity)
    c = world.create(tag_b, transform, velocity)

    entry_a = world.entry(a)
    get(entry_a, transform).position.x = 10
    get(entry_a, transform).position.y = 20

    entry_b = world.entry(b)
    get(entry_b, transform).position.x = 30
    get(entry_b, transform).position.y = 40

    entry_c = world.entry(c)
    add(entry_c, transform, TransformData(Vec2f(40, 50)))

    for entry, expected in [
        (entry_a, Vec2f(10, 20)),
        (entry_b, Vec2f(30, 40)),
        (entry_c, Vec2f(40, 50)),
    ]:
        assert get(entry, transform).position == expected


def test_archetype():
    world = World()
    entry = world.entry(world.create(tag_a, transform, velocity))
    assert entry.has_component(tag_a)
    assert not entry.has_component(tag_b)


def test_add_component():
    world = World()
    entities = [world.create(tag_a, transform) for _ in range(3)]
    entry = world.entry(entities[1])
    old_archetype = entry.archetype()

    add(entry, velocity, VelocityData(Vec2f(10, 20)))
    entry.add_component(tag_b)

    new_archetype = entry.archetype()
    assert len(new_archetype.layout.components) == 4
    assert len(old_archetype.entities) == 2
    assert len(new_archetype.entities) == 1
    assert get(entry, velocity).velocity == Vec2f(10, 20)


def test_remove_component():
    world = World()
    entities = [world.create(tag_a, transform, velocity) for _ in range(3)]
    entry = world.entry(entities[1])
    old_archetype = entry.archetype()

    entry.remove_component(transform)

    new_archetype = entry.archetype()
    assert len(new_archetype.layout.components) == 2
    assert len(old_archetype.entities) == 2
    assert len(new_archetype.entities) == 1


@pytest.mark.parametrize(
    ("delete_indices", "expected_count"),
    [([0], 2), ([0, 1, 2], 0), ([2], 2)],
)
def test_delete_entity(delete_indices, expected_count):
    world = World()
    entries = [world.entry(world.create(tag_a, transform, velocity)) for _ in range(3)]

    for entry in entries:
        assert world.valid(entry.entity)
        assert entry.valid()

    for index in delete_indices:
        world.remove(entries[index].entity)
        assert not world.valid(entries[index].entity)
        assert not entries[index].valid()

    assert len(world) == expected_count


def test_delete_keeps_other_entities_data():
    world = World()
    entries = [world.entry(world.create(tag_a, transform)) for _ in range(3)]
    for i, entry in enumerate(entries):
        get(entry, transform).position.x = i
    world.remove(entries[0].entity)
    assert get(world.entry(entries[2].entity), transform).position.x == 2
    assert get(world.entry(entries[1].entity), transform).position.x == 1


def test_archetype_storage_expands():
    world = World()
    dummy = new_tag()
    entry = world.entry(world.create(dummy))
    n = 256
    for _ in range(n):
        entry.add_component(new_tag())
    found = Query(contains(dummy)).first(world)
    assert found is not None
    assert len(found.archetype().layout.components) == n + 1


def test_remove_and_create_entity():
    world = World()
    called = {"create": False, "remove": False}

    world.on_create(lambda w, e: called.__setitem__("create", True))
    world.on_remove(lambda w, e: called.__setitem__("remove", True))

    entity_a = world.create(tag_a)
    assert called["create"]

    world.remove(entity_a)
    assert called["remove"]
    assert not world.valid(entity_a)

    entity_b = world.create(tag_a)
    entry = Query(contains(tag_a)).first(world)
    assert entry is not None
    assert entry.entity == entity_b
    assert entry.has_component(tag_a)


def test_reused_entity_has_new_version():
    world = World()
    entity_a = world.create(tag_a)
    world.remove(entity_a)
    entity_b = world.create(tag_a)
    assert entity_b.id() == entity_a.id()
    assert entity_b.version() == entity_a.version() + 1
    assert world.valid(entity_b)
    assert not world.valid(entity_a)


def test_create_entity_and_extend():
    world = World()
    entry = world.entry(world.create(velocity))
    old_archetype = entry.archetype()
    assert len(old_archetype.entities) == 1

    add(entry, transform, TransformData())
    new_archetype = entry.archetype()
    assert len(old_archetype.entities) == 0
    assert len(new_archetype.entities) == 1

    another = world.entry(world.create(velocity))
    assert len(old_archetype.entities) == 1
    assert len(new_archetype.entities) == 1

    add(another, transform, TransformData())
    assert len(old_archetype.entities) == 0
    assert len(new_archetype.entities) == 2


def test_component_default_val():
    @dataclass
    class ComponentData:
        val: int = 0

    component = ComponentType(ComponentData, ComponentData(val=10))
    world = World()
    entry = world.entry(world.create(component))
    assert get(entry, component).val == 10


def test_create_without_components_raises():
    world = World()
    with pytest.raises(ValueError):
        world.create()


def test_create_with_duplicate_components_raises():
    world = World()
    with pytest.raises(ValueError):
        world.create(tag_a, tag_a)


def test_create_many():
    world = World()
    entities = world.create_many(5, tag_a, transform)
    assert len(entities) == 5
    assert len(set(entities)) == 5
    assert len(world) == 5
    assert all(world.valid(e) for e in entities)


def test_null_is_never_valid():
    world = World()
    world.create(tag_a)
    assert not world.valid(NULL)


def test_remove_callback_sees_valid_entity():
    world = World()
    seen = []
    world.on_remove(lambda w, e: seen.append(w.valid(e)))
    world.remove(world.create(tag_a))
    assert seen == [True]


def test_remove_invalid_entity_does_nothing():
    world = World()
    removed = []
    world.on_remove(lambda w, e: removed.append(e))
    entity = world.create(tag_a)
    world.remove(entity)
    world.remove(entity)
    assert len(removed) == 1
    assert len(world) == 0


def test_transfer_to_same_archetype_keeps_row():
    world = World()
    world.create(tag_a)
    assert world.transfer_archetype(0, 0, 0) == 0


def test_storage_accessor_shares_world_storage():
    world = World()
    world.create(tag_a)
    accessor = world.storage_accessor()
    assert accessor.archetypes is world.archetypes
    assert accessor.index is world.index
    assert accessor.components is world.components


def test_world_ids_are_unique():
    first = World()
    second = World()
    assert second.id == first.id + 1


def test_entry_of_unknown_entity_raises():
    world = World()
    with pytest.raises(LookupError):
        world.entry(world.create(tag_a) + (99 << 32))


def test_registered_initializer_runs_for_new_worlds():
    seen = []
    register_initializer(lambda w: seen.append(w.id))
    world = World()
    assert world.id in seen