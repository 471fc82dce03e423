# edcore

`edcore` is a small world-model library for robots. It covers entities,
which are objects with an id, a type, a pose, shapes and measurements. It
also covers the geometry and bookkeeping around them: convex hulls and
their collisions, joint positions over time, the state of a top-down map
view, and the parsing of update and query requests.

## Modules

### `edcore.convex_hull`

- `Vec2` and `Vector3` are frozen vector dataclasses with `+` and `-`. `Vec2` also supports scaling and has `dot`, `length` and `normalized`.
- `convex_hull_indices(points)` returns the indices of the hull vertices, counter-clockwise. Collinear points are dropped.
- `create(points, z_min, z_max)` builds a `ConvexHull` centred on its own origin. It returns `(hull, translation)`.
- `create_absolute(points, z_min, z_max)` builds a hull that keeps the frame of the points.
- `calculate_edges_and_normals(chull)` fills the hull's edges and outward normals.
- `calculate_area(chull)` sets the hull's signed area and returns it.
- `collide(c1, pos1, c2, pos2, xy_padding, z_padding)` is a padded separating-axis overlap test. Hulls with fewer than three points never collide.
- `ConvexHull2D` is a polygon of 3D points with a `min_z` and a `max_z`. It reports `area()`, `height()` and `volume()`.

### `edcore.error_context`

- `ErrorContext(msg, value)` is a context manager. It pushes a `(msg, value)` pair onto a per-thread stack while it is active.
- `change(msg, value)` replaces the innermost entry on that stack.
- `current_stack()` returns a copy of the stack, outermost entry first.

### `edcore.properties`

- `Pose3D` holds a translation `t` and a rotation `r`, given as three rows. `Pose3D.identity()` gives the identity pose. `Pose3D.from_rpy(x, y, z, roll, pitch, yaw)` builds a pose from a position and roll, pitch and yaw angles.
- `PoseInfo` and `CounterInfo` are property descriptors with `serialize`, `deserialize` and `serializable`.
  - `PoseInfo` uses `{"pos": {...}, "rot": {...}}`. When it reads a pose, any missing field keeps its identity value.
  - `CounterInfo` uses `{"value": n}`. It raises `ValueError` when `value` is missing.

### `edcore.entity`

- `Entity(id, type, measurement_buffer_size=5)` keeps an entity's state:
  - its pose;
  - its visual and collision shapes, each with a revision counter;
  - its convex hull;
  - a bounded buffer of measurements, newest first.
- `set_visual(visual)` rebuilds the convex hull from the shape's `points`.
- `update_convex_hull()` merges the hulls in `convex_hull_map`, which are `MeasurementConvexHull` entries, into one hull and pose.
- `add_measurement(m)` stores a measurement and keeps the best one in `best_measurement`. The best one is the one with the larger `image_mask_size`, or else the larger `mask_size`.
- `measurements_since(t)`, `latest_measurements(n)` and `last_measurement()` read the buffer.
- `generate_id()` returns a random id of 32 lower-case hexadecimal characters.

### `edcore.joint`

- `TimeCache` is a time-ordered cache that can be bounded. It has `insert(t, value)` and `lower_upper(t)`, and its `max_size` can be set.
- `JointRelation(segment)` records joint positions over time:
  - `joint_position(t)` interpolates linearly between samples. Before the first sample it gives the first value, and after the last sample it gives the last value.
  - `calculate_transform(t)` passes that position to `segment` and returns the resulting `Pose3D`.
  - `set_cache_size(n)` bounds the history.
- `robot_child_id(robot_name, name)` prefixes a link name with the robot name, unless the name already contains it.

### `edcore.gui_geometry` and `edcore.gui`

- `in_polygon(points, point)` is an even-odd point-in-polygon test.
- `color_hash(text, max_val)` and `id_to_color(entity_id)` give each entity id a stable colour, as `(blue, green, red)`.
- `parse_float_param(params, key)` reads the leading number of a string parameter. It returns `None` if the key is absent.
- `GuiState` holds the map-view state:
  - `raise_event(name, params, entity_at)` handles the `click`, `zoom`, `pan`, `explore` and `wait` events. It returns a message for the caller.
  - `get_command()` returns the pending `GuiCommand`, or `None`.

### `edcore.update`

- `parse_update(text, property_db)` reads a JSON update document into an `UpdateRequest`. The document can hold:
  - entity types;
  - poses, and pose removals;
  - flags;
  - entity removals;
  - YAML `data`;
  - properties, read through the descriptors in `property_db`.
- It returns `(request, messages)`. The messages describe the entries that were skipped.
- It raises `ValueError` if the text is not a JSON object.

### `edcore.query`

- `SimpleQuery` selects entities by id, type and distance from a point. Its `matches(entity)` method does the test.
- `encode_data_string(text)` puts a YAML dump on one line. Quotes become `|` and newlines become `^`.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Example

```python
from edcore.convex_hull import Vec2, Vector3, create, collide
from edcore.error_context import ErrorContext, current_stack
from edcore.joint import JointRelation
from edcore.properties import CounterInfo, Pose3D
from edcore.update import parse_update

square = [Vec2(0, 0), Vec2(1, 0), Vec2(1, 1), Vec2(0, 1)]
hull, origin = create(square, 0.0, 1.0)
print(hull.area)  # 1.0
print(collide(hull, Vector3(0, 0, 0), hull, Vector3(0.5, 0, 0), 0.0, 0.0))  # True

with ErrorContext("loading", "world"):
    print(current_stack())  # [('loading', 'world')]

joint = JointRelation(lambda pos: Pose3D(t=Vector3(pos, 0.0, 0.0)))
joint.insert(0.0, 0.0)
joint.insert(1.0, 1.0)
print(joint.joint_position(0.5))  # 0.5

doc = '{"entities": [{"id": "table", "type": "object", "properties": [{"name": "counter", "value": 3}]}]}'
request, messages = parse_update(doc, {"counter": CounterInfo()})
print(request.types, request.properties, messages)
# {'table': 'object'} {'table': {'counter': 3}} []
```

## What it does not do

`edcore` is a library only. It provides:

- no server or network services;
- no plugin loading or main loop;
- no rendering of the map image;
- no mesh or model file loading;
- no command-line program.

It works on world-model data that the caller supplies. A visual shape, for example, is any object with `points`, and with `intersect` and `contains` when used in queries.