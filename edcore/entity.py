"""World-model entities: shape, pose, convex hull and measurement history."""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from typing import Any, Optional

from edcore.convex_hull import ConvexHull, Vec2, create, create_absolute
from edcore.properties import Pose3D

_ID_ALPHABET = "0123456789abcdef"
_ID_LENGTH = 32


@dataclass
class MeasurementConvexHull:
    """A convex hull observed by one source, with the pose of its origin."""

    convex_hull: ConvexHull
    pose: Pose3D


def generate_id() -> str:
    """A random identifier of 32 lower-case hexadecimal characters."""
    return "".join(random.choices(_ID_ALPHABET, k=_ID_LENGTH))


def _mask_size(measurement: Any) -> Optional[int]:
    return getattr(measurement, "mask_size", None)


class Entity:
    """An object in the world model.

    Visual shapes are objects whose ``points`` attribute holds the mesh
    vertices as ``Vector3``. Measurements are objects with a ``timestamp``,
    an ``image_mask_size`` and, optionally, a ``mask_size`` (``None`` when
    the measurement carries no mask).
    """

    def __init__(self, id: str = "", type: str = "", measurement_buffer_size: int = 5):
        self.id = id
        self.type = type
        self.revision = 0
        self.existence_prob = 1.0
        self.last_update_timestamp = 0.0
        self.measurements: deque = deque(maxlen=measurement_buffer_size)
        self.measurements_seq = 0
        self.best_measurement: Any = None
        self.visual: Any = None
        self.collision: Any = None
        self.visual_revision = 0
        self.collision_revision = 0
        self.volumes_revision = 0
        self.has_pose = False
        self.pose = Pose3D.identity()
        self.convex_hull = ConvexHull()
        self.convex_hull_map: dict[str, MeasurementConvexHull] = {}

    def __repr__(self) -> str:
        return f"Entity(id={self.id!r}, type={self.type!r})"

    # ------------------------------------------------------------------ shapes

    def set_visual(self, visual: Any) -> None:
        """Replace the visual shape and rebuild the convex hull from its vertices."""
        if visual is self.visual:
            return
        self.visual_revision += 1
        self.visual = visual
        if visual is not None:
            self._update_convex_hull_from_visual()

    def set_collision(self, collision: Any) -> None:
        """Replace the collision shape."""
        if collision is not self.collision:
            self.collision_revision += 1
            self.collision = collision

    def _update_convex_hull_from_visual(self) -> None:
        vertices = list(self.visual.points)
        if not vertices:
            return
        # Rotation of the pose is deliberately ignored: vertices stay in the entity frame.
        z_min = min(min(v.z for v in vertices), 1e9)
        z_max = max(max(v.z for v in vertices), -1e9)
        points = [Vec2(v.x, v.y) for v in vertices]
        self.convex_hull = create_absolute(points, z_min, z_max)

    # ------------------------------------------------------------ convex hull

    def update_convex_hull(self) -> None:
        """Merge the per-source hulls in ``convex_hull_map`` into one hull and pose."""
        if not self.convex_hull_map:
            self.convex_hull.points.clear()
            return

        entries = [self.convex_hull_map[key] for key in sorted(self.convex_hull_map)]
        first = entries[0]

        if len(entries) == 1:
            self.convex_hull = first.convex_hull
            self.pose = first.pose
            self.has_pose = True
            return

        # The first hull contributes its height range only, not its points.
        z_min = first.convex_hull.z_min + first.pose.t.z
        z_max = first.convex_hull.z_max + first.pose.t.z
        points: list[Vec2] = []
        for m in entries[1:]:
            z_min = min(z_min, m.convex_hull.z_min + m.pose.t.z)
            z_max = max(z_max, m.convex_hull.z_max + m.pose.t.z)
            offset = Vec2(m.pose.t.x, m.pose.t.y)
            points.extend(p + offset for p in m.convex_hull.points)

        self.convex_hull, translation = create(points, z_min, z_max)
        self.pose = Pose3D(t=translation)
        self.has_pose = True

    # ----------------------------------------------------------- measurements

    def add_measurement(self, measurement: Any) -> None:
        """Record a measurement as the newest and update the best one."""
        self.measurements.appendleft(measurement)
        self.measurements_seq += 1

        best = self.best_measurement
        if best is None:
            self.best_measurement = measurement
            return

        larger_image_mask = measurement.image_mask_size > best.image_mask_size
        new_mask, best_mask = _mask_size(measurement), _mask_size(best)
        larger_mask = new_mask is not None and best_mask is not None and new_mask > best_mask
        if larger_image_mask or larger_mask:
            self.best_measurement = measurement

    def measurements_since(self, min_timestamp: float) -> list:
        """Stored measurements newer than ``min_timestamp``, newest first."""
        return [m for m in self.measurements if m.timestamp > min_timestamp]

    def latest_measurements(self, num: int) -> list:
        """Up to ``num`` most recent measurements, newest first."""
        return list(self.measurements)[: max(num, 0)]

    def last_measurement(self) -> Any:
        """The newest measurement, or ``None`` if there is none."""
        return self.measurements[0] if self.measurements else None