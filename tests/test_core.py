import pytest

from archetypal.component import new_tag
from archetypal.ecs.core import ECS, Layer, new_query
from archetypal.filters import contains
from archetypal.world import World


class Recorder:
    def __init__(self, counters, query=None):
        self.counters = counters
        self.query = query
        self.updated_index = -1
        self.drawn_index = -1
        self.update_count = 0
        self.draw_count = 0
        self.draw_arg = None
        self.query_count_update = 0
        self.query_count_draw = 0

    def update(self, ecs):
        self.updated_index = self.counters["update"]
        self.update_count += 1
        self.counters["update"] += 1
        if self.query is not None:
            self.query_count_update = self.query.count(ecs.world)

    def draw(self, ecs, arg: str):
        self.drawn_index = self.counters["draw"]
        self.draw_arg = arg
        self.draw_count += 1
        self.counters["draw"] += 1
        if self.query is not None:
            self.query_count_draw = self.query.count(ecs.world)


def test_ecs_update_and_draw_order():
    ecs = ECS(World())
    counters = {"update": 0, "draw": 0}
    systems = [(1, Recorder(counters)), (1, Recorder(counters)), (0, Recorder(counters))]
    for layer, system in systems:
        ecs.add_system(system.update)
        ecs.add_renderer(layer, system.draw)

    ecs.update()
    for expected_index, (_, system) in enumerate(systems):
        assert system.update_count == 1
        assert system.updated_index == expected_index

    ecs.draw("test")
    expected_drawn = [1, 2, 0]
    for expected, (_, system) in zip(expected_drawn, systems):
        assert system.draw_count == 1
        assert system.drawn_index == expected
        assert system.draw_arg == "test"


def test_ecs_layer_queries():
    ecs = ECS(World())
    c1 = new_tag()
    ecs.create(0, c1)
    ecs.create(1, c1)
    counters = {"update": 0, "draw": 0}
    s0 = Recorder(counters, new_query(0, contains(c1)))
    s1 = Recorder(counters, new_query(1, contains(c1)))
    ecs.add_system(s0.update).add_renderer(0, s0.draw)
    ecs.add_system(s1.update).add_renderer(1, s1.draw)

    ecs.draw_layer(0, "test")
    assert s0.query_count_draw == 1
    assert s1.query_count_draw == 0
    assert s1.draw_count == 0


def test_empty_default_layer():
    ecs = ECS(World())
    calls = []
    ecs.add_renderer(1, lambda e, arg: calls.append(arg))
    ecs.draw("test")
    assert calls == ["test"]


def test_layer_tags():
    layer0 = Layer(0)
    layer1 = Layer(1)
    assert layer0.id == 0
    assert layer1.id == 1
    assert layer0.tag is not layer1.tag
    assert layer0.tag.name == "Layer0"
    assert Layer(0).tag is layer0.tag


def test_create_puts_entity_on_layer():
    ecs = ECS(World())
    c = new_tag()
    entity = ecs.create(2, c)
    entry = ecs.world.entry(entity)
    assert entry.has_component(Layer(2).tag)
    assert entry.has_component(c)
    assert not entry.has_component(Layer(0).tag)


def test_create_many():
    ecs = ECS(World())
    c = new_tag()
    entities = ecs.create_many(0, 3, c)
    assert len(entities) == 3
    assert new_query(0, contains(c)).count(ecs.world) == 3
    assert new_query(0).count(ecs.world) == 3
    assert new_query(1).count(ecs.world) == 0


def test_renderer_only_called_for_matching_argument_type():
    ecs = ECS(World())
    c = new_tag()
    ecs.create(0, c)
    calls = []

    def draw_int(e, arg: int):
        calls.append((arg, new_query(0, contains(c)).count(e.world)))

    returned = ecs.add_renderer(0, draw_int)
    assert returned is ecs
    ecs.draw("text")
    ecs.draw(5)
    assert calls == [(5, 1)]


def test_add_renderer_rejects_non_callable():
    ecs = ECS(World())
    with pytest.raises(TypeError):
        ecs.add_renderer(0, 42)


def test_add_renderer_rejects_wrong_arity():
    ecs = ECS(World())
    with pytest.raises(TypeError):
        ecs.add_renderer(0, lambda e: None)


def test_pause_and_resume():
    ecs = ECS(World())
    assert ecs.is_paused() is False
    ecs.pause()
    assert ecs.is_paused() is True
    ecs.update()
    assert ecs.time.delta_time == 0
    ecs.resume()
    assert ecs.is_paused() is False