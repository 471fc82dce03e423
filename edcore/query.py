"""Entity queries by id, type and distance from a point."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from edcore.convex_hull import Vector3


def encode_data_string(text: str) -> str:
    """Make a YAML dump fit on one line: quotes become '|', newlines '^'."""
    return text.replace('"', "|").replace("\n", "^")


def _rotate_transposed(r, v: Vector3) -> Vector3:
    comps = (v.x, v.y, v.z)
    return Vector3(*(sum(r[j][i] * comps[j] for j in range(3)) for i in range(3)))


@dataclass
class SimpleQuery:
    """Selects entities by id, type and geometry around ``center_point``.

    An empty ``id`` or ``type`` matches everything; the type ``"unknown"``
    matches entities without a type. An infinite ``radius`` disables the
    geometric test. Visual shapes are asked ``intersect(point, radius)`` or,
    for a radius of zero or less, ``contains(point)``, with the point in the
    entity frame.
    """

    id: str = ""
    type: str = ""
    center_point: Vector3 = field(default_factory=Vector3)
    radius: float = math.inf
    ignore_z: bool = False

    def matches(self, entity: Any) -> bool:
        """True if ``entity`` satisfies the query."""
        if self.id and entity.id != self.id:
            return False
        if not entity.has_pose:
            return False

        if self.type:
            if self.type == "unknown":
                if entity.type != "":
                    return False
            elif entity.type != self.type:
                return False

        if self.radius < math.inf:
            pose = entity.pose
            center = self.center_point
            if self.ignore_z:
                center = Vector3(center.x, center.y, pose.t.z)

            visual = entity.visual
            if visual is not None:
                local = _rotate_transposed(pose.r, center - pose.t)
                if self.radius > 0:
                    ok = visual.intersect(local, self.radius)
                else:
                    ok = visual.contains(local)
            else:
                d = pose.t - center
                ok = self.radius > 0 and self.radius ** 2 > d.x ** 2 + d.y ** 2 + d.z ** 2
            if not ok:
                return False

        return True