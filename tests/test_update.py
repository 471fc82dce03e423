import json
import math

import pytest

from edcore.properties import CounterInfo, Pose3D, PoseInfo
from edcore.update import UpdateRequest, parse_update

DB = {"pose": PoseInfo(), "counter": CounterInfo()}


class _Unserializable:
    def serializable(self):
        return False

    def deserialize(self, data):
        return data


def _parse(doc, db=DB):
    return parse_update(json.dumps(doc), db)


def test_new_request_is_empty():
    assert UpdateRequest().empty() is True


def test_type_is_set():
    req, messages = _parse({"entities": [{"id": "table", "type": "object"}]})
    assert req.types == {"table": "object"}
    assert messages == []
    assert req.empty() is False


def test_missing_id_is_reported():
    req, messages = _parse({"entities": [{"type": "object"}]})
    assert messages == ["Entities should have field 'id'."]
    assert req.empty()


def test_remove_action_and_unknown_action():
    req, messages = _parse(
        {"entities": [{"id": "a", "action": "remove"}, {"id": "b", "action": "fly"}]}
    )
    assert req.removed_entities == {"a"}
    assert messages == ["Unknown action 'fly'."]


def test_position_only_pose():
    req, _ = _parse({"entities": [{"id": "a", "pose": {"x": 1, "y": 2.5, "z": -3}}]})
    pose = req.poses["a"]
    assert (pose.t.x, pose.t.y, pose.t.z) == (1.0, 2.5, -3.0)
    assert pose.r == Pose3D.identity().r


def test_pose_with_rotation_matches_rpy():
    req, _ = _parse(
        {"entities": [{"id": "a", "pose": {"x": 0, "y": 0, "z": 0, "X": 0, "Y": 0, "Z": math.pi / 2}}]}
    )
    assert req.poses["a"] == Pose3D.from_rpy(0, 0, 0, 0, 0, math.pi / 2)


def test_pose_remove_and_invalid_pose():
    req, messages = _parse(
        {"entities": [{"id": "a", "pose": {"remove": "true"}}, {"id": "b", "pose": {"x": 1}}]}
    )
    assert req.removed_poses == {"a"}
    assert "b" not in req.poses
    assert messages == ["For entity 'b': invalid pose (position)."]


def test_flags_add_and_remove():
    req, messages = _parse(
        {"entities": [{"id": "a", "flags": [{"add": "self"}, {"remove": "locked"}, {"other": 1}]}]}
    )
    assert req.flags == {"a": {"self"}}
    assert req.removed_flags == {"a": {"locked"}}
    assert messages == ["For entity 'a': flag list should only contain 'add' or 'remove'."]


def test_data_is_loaded_as_yaml():
    req, _ = _parse({"entities": [{"id": "a", "data": "color: red\nsize: [1, 2]"}]})
    assert req.data == {"a": [{"color": "red", "size": [1, 2]}]}


def test_properties_round_trip():
    pose = Pose3D.from_rpy(1, 2, 3, 0.1, 0.2, 0.3)
    doc = {
        "entities": [
            {
                "id": "a",
                "properties": [
                    {"name": "pose", **PoseInfo().serialize(pose)},
                    {"name": "counter", **CounterInfo().serialize(7)},
                ],
            }
        ]
    }
    req, messages = _parse(doc)
    assert messages == []
    assert req.properties["a"]["counter"] == 7
    got = req.properties["a"]["pose"]
    assert got.t == pose.t
    for row_got, row_exp in zip(got.r, pose.r):
        assert row_got == pytest.approx(row_exp)


def test_property_errors_are_reported():
    db = dict(DB, secretive=_Unserializable())
    req, messages = _parse(
        {
            "entities": [
                {
                    "id": "a",
                    "properties": [
                        {"name": "nope"},
                        {"name": "secretive"},
                        {"name": "counter"},
                        {"value": 3},
                    ],
                }
            ]
        },
        db,
    )
    assert messages == [
        "For entity 'a': unknown property 'nope'.",
        "For entity 'a': property 'secretive' is not serializable.",
        "For entity 'a': deserialization of property 'counter' failed.",
    ]
    assert req.properties == {}


def test_invalid_json_raises():
    with pytest.raises(ValueError):
        parse_update("{not json", DB)


def test_non_object_document_raises():
    with pytest.raises(ValueError):
        parse_update("[1, 2]", DB)


def test_document_without_entities_gives_empty_request():
    req, messages = parse_update("{}", DB)
    assert req.empty()
    assert messages == []