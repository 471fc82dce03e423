"""Rigid poses and serialisable entity property types."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from edcore.convex_hull import Vector3

_IDENTITY = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))
_ROT_KEYS = (("xx", "xy", "xz"), ("yx", "yy", "yz"), ("zx", "zy", "zz"))


@dataclass(frozen=True)
class Pose3D:
    """Translation ``t`` and rotation matrix ``r`` given as three rows."""

    t: Vector3 = field(default_factory=Vector3)
    r: tuple[tuple[float, float, float], ...] = _IDENTITY

    @classmethod
    def identity(cls) -> Pose3D:
        return cls()

    @classmethod
    def from_rpy(cls, x: float, y: float, z: float, roll: float, pitch: float, yaw: float) -> Pose3D:
        """Pose from a position and roll, pitch, yaw angles (rotation Rz * Ry * Rx)."""
        sr, cr = math.sin(roll), math.cos(roll)
        sp, cp = math.sin(pitch), math.cos(pitch)
        sy, cy = math.sin(yaw), math.cos(yaw)
        r = (
            (cy * cp, cy * sp * sr - sy * cr, cy * sp * cr + sy * sr),
            (sy * cp, sy * sp * sr + cy * cr, sy * sp * cr - cy * sr),
            (-sp, cp * sr, cp * cr),
        )
        return cls(Vector3(x, y, z), r)


class PoseInfo:
    """Serialisation of a Pose3D property."""

    def serialize(self, pose: Pose3D) -> dict[str, Any]:
        return {
            "pos": {"x": pose.t.x, "y": pose.t.y, "z": pose.t.z},
            "rot": {
                key: value
                for keys, row in zip(_ROT_KEYS, pose.r)
                for key, value in zip(keys, row)
            },
        }

    def deserialize(self, data: Mapping[str, Any]) -> Pose3D:
        """Read a pose; absent groups or fields keep their identity values."""
        t = [0.0, 0.0, 0.0]
        pos = data.get("pos")
        if isinstance(pos, Mapping):
            for i, key in enumerate(("x", "y", "z")):
                if key in pos:
                    t[i] = float(pos[key])

        r = [list(row) for row in _IDENTITY]
        rot = data.get("rot")
        if isinstance(rot, Mapping):
            for i, keys in enumerate(_ROT_KEYS):
                for j, key in enumerate(keys):
                    if key in rot:
                        r[i][j] = float(rot[key])

        return Pose3D(Vector3(*t), tuple(tuple(row) for row in r))

    def serializable(self) -> bool:
        return True


class CounterInfo:
    """Serialisation of an integer counter property."""

    def serialize(self, counter: int) -> dict[str, int]:
        return {"value": counter}

    def deserialize(self, data: Mapping[str, Any]) -> int:
        if "value" not in data:
            raise ValueError("counter property has no 'value'")
        return int(data["value"])

    def serializable(self) -> bool:
        return True