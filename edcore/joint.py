"""Joint relations: time-stamped joint positions turned into link transforms."""

from __future__ import annotations

import bisect
import copy
from typing import Callable, Generic, Iterator, Optional, TypeVar

from edcore.properties import Pose3D

T = TypeVar("T")

Sample = tuple[float, T]


class TimeCache(Generic[T]):
    """Values ordered by time, holding at most ``max_size`` of the most recent ones."""

    def __init__(self, max_size: Optional[int] = None):
        self._times: list[float] = []
        self._values: list[T] = []
        self._max_size = max_size

    def __len__(self) -> int:
        return len(self._times)

    def __iter__(self) -> Iterator[Sample]:
        return iter(zip(self._times, self._values))

    @property
    def max_size(self) -> Optional[int]:
        return self._max_size

    @max_size.setter
    def max_size(self, n: Optional[int]) -> None:
        if n is not None and n < 0:
            raise ValueError("cache size must not be negative")
        self._max_size = n
        self._trim()

    def insert(self, t: float, value: T) -> None:
        """Store ``value`` at time ``t``, replacing any value already at that time."""
        i = bisect.bisect_left(self._times, t)
        if i < len(self._times) and self._times[i] == t:
            self._values[i] = value
        else:
            self._times.insert(i, t)
            self._values.insert(i, value)
        self._trim()

    def lower_upper(self, t: float) -> tuple[Optional[Sample], Optional[Sample]]:
        """The latest sample at or before ``t`` and the earliest sample after it."""
        i = bisect.bisect_right(self._times, t)
        lower = (self._times[i - 1], self._values[i - 1]) if i > 0 else None
        upper = (self._times[i], self._values[i]) if i < len(self._times) else None
        return lower, upper

    def _trim(self) -> None:
        if self._max_size is None:
            return
        excess = len(self._times) - self._max_size
        if excess > 0:
            del self._times[:excess]
            del self._values[:excess]

    def __copy__(self) -> TimeCache[T]:
        other: TimeCache[T] = TimeCache(self._max_size)
        other._times = list(self._times)
        other._values = list(self._values)
        return other


class JointRelation:
    """Relation between two links, driven by a joint whose position changes over time.

    ``segment`` maps a joint position to the pose of the child link in the
    frame of the parent link.
    """

    def __init__(self, segment: Callable[[float], Pose3D]):
        self.segment = segment
        self._cache: TimeCache[float] = TimeCache()

    def __len__(self) -> int:
        return len(self._cache)

    def __copy__(self) -> JointRelation:
        other = JointRelation(self.segment)
        other._cache = copy.copy(self._cache)
        return other

    def insert(self, t: float, joint_pos: float) -> None:
        """Record the joint position at time ``t``."""
        self._cache.insert(t, joint_pos)

    def set_cache_size(self, n: int) -> None:
        """Keep at most ``n`` of the most recent joint positions."""
        self._cache.max_size = n

    def joint_position(self, t: float) -> Optional[float]:
        """Joint position at ``t``, linearly interpolated; ``None`` if nothing is recorded.

        Before the first sample the earliest position is used, after the last
        sample the latest one.
        """
        lower, upper = self._cache.lower_upper(t)
        if lower is None:
            return None if upper is None else upper[1]
        if upper is None:
            return lower[1]

        (t1, p1), (t2, p2) = lower, upper
        dt1 = t - t1
        dt2 = t2 - t
        return (p1 * dt2 + p2 * dt1) / (dt1 + dt2)

    def calculate_transform(self, t: float) -> Optional[Pose3D]:
        """Pose of the child link at ``t``, or ``None`` if no joint position is known."""
        pos = self.joint_position(t)
        if pos is None:
            return None
        return self.segment(pos)


def robot_child_id(robot_name: str, name: str) -> str:
    """Entity id of a robot link: the link name, prefixed with the robot name unless it contains it."""
    if robot_name in name:
        return name
    return f"{robot_name}/{name}"