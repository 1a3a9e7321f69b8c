"""Systems, layered renderers and layer-aware entity creation on top of a world."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from archetypal.component import ComponentType, Tag, new_tag
from archetypal.ecs.clock import Time
from archetypal.filters import And, Contains, LayoutFilter
from archetypal.query import Query
from archetypal.storage.entity import Entity

LAYER_DEFAULT = 0

System = Callable[["ECS"], Any]
Renderer = Callable[["ECS", Any], Any]

_layer_tags: dict[int, ComponentType[Tag]] = {}


def _shared_layer_tag(layer_id: int) -> ComponentType[Tag]:
    tag = _layer_tags.get(layer_id)
    if tag is None:
        tag = new_tag(f"Layer{layer_id}")
        _layer_tags[layer_id] = tag
    return tag


def _function_of(renderer: Any) -> tuple[Any, int]:
    """Return the plain function behind a callable and how many leading parameters are bound."""
    func = getattr(renderer, "__func__", None)
    if func is not None and hasattr(func, "__code__"):
        return func, 1
    if hasattr(renderer, "__code__"):
        return renderer, 0
    call = getattr(type(renderer), "__call__", None)
    if call is not None and hasattr(call, "__code__"):
        return call, 1
    raise TypeError("renderer must be a function")


def _resolve_annotation(func: Any, annotation: Any) -> Any:
    if isinstance(annotation, str):
        return getattr(func, "__globals__", {}).get(annotation, annotation)
    return annotation


def _renderer_argument_type(renderer: Any) -> type:
    if not callable(renderer):
        raise TypeError("renderer must be a function")
    func, bound = _function_of(renderer)
    code = func.__code__
    if code.co_argcount - bound != 2:
        raise TypeError("renderer must have 2 arguments")
    first_name, second_name = code.co_varnames[bound:bound + 2]
    annotations = getattr(func, "__annotations__", None) or {}
    first = _resolve_annotation(func, annotations.get(first_name))
    if first == "ECS":
        first = ECS
    if isinstance(first, type) and not issubclass(first, ECS):
        raise TypeError("first argument must be ECS")
    second = _resolve_annotation(func, annotations.get(second_name))
    if isinstance(second, type):
        return second
    return object


class Layer:
    """A drawing layer: a shared tag component and the renderers of one ECS."""

    def __init__(self, layer_id: int) -> None:
        self.id = layer_id
        self.tag = _shared_layer_tag(layer_id)
        self._renderers: list[tuple[type, Renderer]] = []

    def _add_renderer(self, renderer: Renderer) -> None:
        arg_type = _renderer_argument_type(renderer)
        self._renderers.append((arg_type, renderer))

    def _draw(self, ecs: ECS, arg: Any) -> None:
        for arg_type, renderer in self._renderers:
            if isinstance(arg, arg_type):
                renderer(ecs, arg)

    def __repr__(self) -> str:
        return f"Layer(id={self.id}, renderers={len(self._renderers)})"


def new_query(layer_id: int, layout_filter: LayoutFilter | None = None) -> Query:
    """Create a query restricted to entities of the given layer."""
    layer_filter = Contains((_shared_layer_tag(layer_id),))
    if layout_filter is None:
        return Query(layer_filter)
    return Query(And((layer_filter, layout_filter)))


class ECS:
    """A world together with its update systems, renderers and clock."""

    def __init__(self, world: Any) -> None:
        self.world = world
        self.time = Time()
        self._systems: list[System] = []
        self._layers: dict[int, Layer] = {}

    def add_system(self, system: System) -> ECS:
        """Add a system run on every update; return self."""
        self._systems.append(system)
        return self

    def add_renderer(self, layer_id: int, renderer: Renderer) -> ECS:
        """Add a renderer to a layer; return self.

        The renderer is called with the ECS and the draw argument when the
        argument is an instance of its second parameter's annotated type.
        """
        self._layer(layer_id)._add_renderer(renderer)
        return self

    def update(self) -> None:
        """Advance the clock and run every system in order."""
        self.time.update()
        for system in self._systems:
            system(self)

    def draw_layer(self, layer_id: int, arg: Any) -> None:
        """Run the renderers of one layer."""
        self._layer(layer_id)._draw(self, arg)

    def draw(self, arg: Any) -> None:
        """Run the renderers of every layer, in layer id order."""
        for layer_id in sorted(self._layers):
            self._layers[layer_id]._draw(self, arg)

    def create(self, layer_id: int, *args: Any) -> Entity:
        """Create an entity with the given components on the given layer."""
        entry = self.world.entry(self.world.create(*args))
        entry.add_component(self._layer(layer_id).tag)
        return entry.entity

    def create_many(self, layer_id: int, count: int, *args: Any) -> list[Entity]:
        """Create count entities with the given components on the given layer."""
        return self.world.create_many(count, *args, self._layer(layer_id).tag)

    def pause(self) -> None:
        """Pause the clock."""
        self.time.pause()

    def resume(self) -> None:
        """Resume the clock."""
        self.time.resume()

    def is_paused(self) -> bool:
        """Return True if the clock is paused."""
        return self.time.is_paused

    def _layer(self, layer_id: int) -> Layer:
        layer = self._layers.get(layer_id)
        if layer is None:
            layer = Layer(layer_id)
            self._layers[layer_id] = layer
        return layer