import copy

import pytest

from edcore.convex_hull import Vector3
from edcore.joint import JointRelation, TimeCache, robot_child_id
from edcore.properties import Pose3D


def _prismatic(pos):
    return Pose3D(t=Vector3(pos, 0.0, 0.0))


def test_time_cache_lower_upper_between():
    cache = TimeCache()
    cache.insert(1.0, "a")
    cache.insert(3.0, "b")
    lower, upper = cache.lower_upper(2.0)
    assert lower == (1.0, "a")
    assert upper == (3.0, "b")


def test_time_cache_lower_upper_outside():
    cache = TimeCache()
    cache.insert(1.0, "a")
    cache.insert(3.0, "b")
    assert cache.lower_upper(0.0) == (None, (1.0, "a"))
    assert cache.lower_upper(5.0) == ((3.0, "b"), None)


def test_time_cache_empty():
    assert TimeCache().lower_upper(1.0) == (None, None)


def test_time_cache_insert_out_of_order_and_replace():
    cache = TimeCache()
    cache.insert(3.0, "c")
    cache.insert(1.0, "a")
    cache.insert(2.0, "b")
    cache.insert(2.0, "B")
    assert list(cache) == [(1.0, "a"), (2.0, "B"), (3.0, "c")]


def test_time_cache_max_size_keeps_newest():
    cache = TimeCache(max_size=3)
    for t in range(5):
        cache.insert(float(t), t)
    assert len(cache) == 3
    assert [t for t, _ in cache] == [2.0, 3.0, 4.0]


def test_time_cache_negative_size_rejected():
    with pytest.raises(ValueError):
        TimeCache().max_size = -1


def test_joint_position_empty_is_none():
    rel = JointRelation(_prismatic)
    assert rel.joint_position(0.0) is None
    assert rel.calculate_transform(0.0) is None


def test_joint_position_interpolates_midpoint():
    rel = JointRelation(_prismatic)
    rel.insert(0.0, 0.0)
    rel.insert(2.0, 1.0)
    assert rel.joint_position(1.0) == pytest.approx(0.5)


def test_joint_position_exact_and_clamped():
    rel = JointRelation(_prismatic)
    rel.insert(1.0, 0.25)
    rel.insert(2.0, 0.75)
    assert rel.joint_position(1.0) == pytest.approx(0.25)
    assert rel.joint_position(0.0) == pytest.approx(0.25)
    assert rel.joint_position(10.0) == pytest.approx(0.75)


def test_joint_position_monotonic_between_samples():
    rel = JointRelation(_prismatic)
    rel.insert(0.0, -1.0)
    rel.insert(4.0, 3.0)
    values = [rel.joint_position(t / 2) for t in range(9)]
    assert values == sorted(values)
    assert all(-1.0 <= v <= 3.0 for v in values)


def test_calculate_transform_uses_segment():
    rel = JointRelation(_prismatic)
    rel.insert(0.0, 0.2)
    rel.insert(1.0, 0.6)
    pose = rel.calculate_transform(0.3)
    assert pose.t.x == pytest.approx(rel.joint_position(0.3))
    assert pose.t.y == 0.0


def test_set_cache_size_limits_length():
    rel = JointRelation(_prismatic)
    rel.set_cache_size(2)
    for t in range(4):
        rel.insert(float(t), float(t))
    assert len(rel) == 2
    assert rel.joint_position(0.0) == pytest.approx(2.0)


def test_copy_is_independent():
    rel = JointRelation(_prismatic)
    rel.insert(0.0, 1.0)
    dup = copy.copy(rel)
    dup.insert(1.0, 2.0)
    assert len(rel) == 1
    assert len(dup) == 2
    assert dup.segment is rel.segment


def test_robot_child_id_prefixes():
    assert robot_child_id("amigo", "base_link") == "amigo/base_link"


def test_robot_child_id_keeps_named():
    assert robot_child_id("amigo", "amigo/base_link") == "amigo/base_link"