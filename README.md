# archetypal

An Entity Component System for Python that keeps entities grouped by
archetype, meaning the exact set of component types they carry. Queries
match archetypes with layout filters and cache the matching archetypes for
each world, so a query is best created once and reused.

## Install

```
pip install archetypal
```

To run the tests, install `archetypal[test]` and run `pytest`.

## Quick look

```python
from dataclasses import dataclass

from archetypal.component import ComponentType, new_tag
from archetypal.filters import contains
from archetypal.query import Query
from archetypal.world import World


@dataclass
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass
class Velocity:
    x: float = 0.0
    y: float = 0.0


position = ComponentType(Position)
velocity = ComponentType(Velocity)
player = new_tag("Player")

world = World()
entity = world.create(position, velocity, player)
entry = world.entry(entity)
velocity.set_value(entry, Velocity(1.0, 2.0))

moving = Query(contains(position, velocity))
for e in moving.iter(world):
    pos, vel = position.get(e), velocity.get(e)
    pos.x += vel.x
    pos.y += vel.y
```

A new component's value is a copy of the component type's default value if
one was given, otherwise the data type called with no arguments.

## What is included

- `archetypal.world`: `World` creates entities (`create`, `create_many`),
  removes them (`remove`), checks them (`valid`) and returns their `Entry`
  (`entry`). `on_create` and `on_remove` register callbacks; remove
  callbacks run before the entity's data is gone. `register_initializer`
  registers a function called with every world created afterwards.
- `archetypal.entry`: `Entry` reads and replaces component data
  (`component`, `set_component`) and adds or removes component types
  (`add_component`, `remove_component`), moving the entity to another
  archetype. The module also has the helpers `get`, `get_value`,
  `set_value`, `add`, `remove`, `valid` and `get_components`.
- `archetypal.component`: `ComponentType`, with `get`, `get_value`, `set`,
  `set_value`, `iter`, `each`, `first` and `must_first` (which raises
  `LookupError` when no entity has the component). `new_tag` makes a
  data-less tag component; `all_component_types` lists every component type
  created so far.
- `archetypal.filters`: the layout filters `contains`, `exact`, `and_`,
  `or_` and `not_`. Filters also combine with `&`, `|` and `~`.
- `archetypal.query`: `Query` with `iter`, `each`, `count` and `first`, and
  `OrderedQuery`, whose `iter_ordered` and `each_ordered` sort entries
  stably by the `order()` of a component's value.
- `archetypal.ecs.core`: `ECS` runs its systems on every `update` and its
  renderers per layer with `draw_layer` or `draw` (all layers in id order).
  A renderer takes the `ECS` and one argument, and is called only when the
  draw argument is an instance of that parameter's annotated type.
  `ECS.create` and `ECS.create_many` tag new entities with their layer, and
  `new_query` builds a query limited to one layer.
- `archetypal.ecs.clock`: `Time` measures delta time in seconds, capped at
  1/30 s, with `pause`, `resume`, `set_time_scale` and `set_sleep`.
- `archetypal.features.hierarchy`: parent and child links (`set_parent`,
  `append_child`, `change_parent`, `get_parent`, `get_children`,
  `find_child_with_component`), recursive removal, and `HierarchySystem`,
  whose `remove_children` system removes entries whose parent is gone.
- `archetypal.features.debug`: `get_entity_counts` and
  `print_entity_counts` report entities per non-empty archetype, largest
  first.
- `archetypal.storage`: the low-level entity ids, layouts, archetypes,
  search index and component storage the world is built on.

## What it does not do

The package has no event bus, no 2D vector type and no transform component;
positions, rotations and scales of parented entities have to be kept in
components of your own. It draws nothing itself: renderers receive whatever
argument is passed to `draw`.