"""Parsing of JSON world-model update requests."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import yaml

from edcore.properties import Pose3D
from edcore.convex_hull import Vector3


@dataclass
class UpdateRequest:
    """A set of changes to apply to the world model."""

    types: dict[str, str] = field(default_factory=dict)
    poses: dict[str, Pose3D] = field(default_factory=dict)
    removed_poses: set[str] = field(default_factory=set)
    flags: dict[str, set[str]] = field(default_factory=dict)
    removed_flags: dict[str, set[str]] = field(default_factory=dict)
    data: dict[str, list[Any]] = field(default_factory=dict)
    properties: dict[str, dict[str, Any]] = field(default_factory=dict)
    removed_entities: set[str] = field(default_factory=set)

    def empty(self) -> bool:
        """True if the request changes nothing."""
        return not (
            self.types
            or self.poses
            or self.removed_poses
            or self.flags
            or self.removed_flags
            or self.data
            or self.properties
            or self.removed_entities
        )


def _read_str(obj: Mapping[str, Any], key: str) -> Optional[str]:
    value = obj.get(key)
    return value if isinstance(value, str) else None


def _read_float(obj: Mapping[str, Any], key: str) -> Optional[float]:
    value = obj.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _read_pose(
    req: UpdateRequest, entity_id: str, pose: Mapping[str, Any], messages: list[str]
) -> None:
    x, y, z = (_read_float(pose, k) for k in ("x", "y", "z"))
    if x is not None and y is not None and z is not None:
        roll, pitch, yaw = (_read_float(pose, k) for k in ("X", "Y", "Z"))
        if roll is not None and pitch is not None and yaw is not None:
            req.poses[entity_id] = Pose3D.from_rpy(x, y, z, roll, pitch, yaw)
        else:
            req.poses[entity_id] = Pose3D(t=Vector3(x, y, z))
    elif _read_str(pose, "remove") == "true":
        req.removed_poses.add(entity_id)
    else:
        messages.append(f"For entity '{entity_id}': invalid pose (position).")


def _read_flags(
    req: UpdateRequest, entity_id: str, flags: list[Any], messages: list[str]
) -> None:
    for item in flags:
        item = item if isinstance(item, Mapping) else {}
        added = _read_str(item, "add")
        removed = _read_str(item, "remove")
        if added is not None:
            req.flags.setdefault(entity_id, set()).add(added)
        elif removed is not None:
            req.removed_flags.setdefault(entity_id, set()).add(removed)
        else:
            messages.append(
                f"For entity '{entity_id}': flag list should only contain 'add' or 'remove'."
            )


def _read_properties(
    req: UpdateRequest,
    entity_id: str,
    items: list[Any],
    property_db: Mapping[str, Any],
    messages: list[str],
) -> None:
    for item in items:
        if not isinstance(item, Mapping):
            continue
        name = _read_str(item, "name")
        if name is None:
            continue
        info = property_db.get(name)
        if info is None:
            messages.append(f"For entity '{entity_id}': unknown property '{name}'.")
            continue
        if not info.serializable():
            messages.append(
                f"For entity '{entity_id}': property '{name}' is not serializable."
            )
            continue
        try:
            value = info.deserialize(item)
        except (ValueError, TypeError, KeyError):
            messages.append(
                f"For entity '{entity_id}': deserialization of property '{name}' failed."
            )
            continue
        req.properties.setdefault(entity_id, {})[name] = value


def _read_data(req: UpdateRequest, entity_id: str, text: str) -> None:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return
    req.data.setdefault(entity_id, []).append(data)


def parse_update(
    text: str, property_db: Mapping[str, Any]
) -> tuple[UpdateRequest, list[str]]:
    """Parse a JSON update document.

    ``property_db`` maps property names to their info objects (with
    ``serializable()`` and ``deserialize(data)``). Returns the update request
    and the messages about entries that were skipped. Raises ``ValueError``
    if the text is not a JSON object.
    """
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    if not isinstance(doc, dict):
        raise ValueError("update request must be a JSON object")

    req = UpdateRequest()
    messages: list[str] = []

    entities = doc.get("entities")
    if not isinstance(entities, list):
        return req, messages

    for entry in entities:
        entry = entry if isinstance(entry, Mapping) else {}
        entity_id = _read_str(entry, "id")
        if entity_id is None:
            messages.append("Entities should have field 'id'.")
            continue

        action = _read_str(entry, "action")
        if action is not None:
            if action == "remove":
                req.removed_entities.add(entity_id)
            else:
                messages.append(f"Unknown action '{action}'.")

        entity_type = _read_str(entry, "type")
        if entity_type is not None:
            req.types[entity_id] = entity_type

        pose = entry.get("pose")
        if isinstance(pose, Mapping):
            _read_pose(req, entity_id, pose, messages)

        flags = entry.get("flags")
        if isinstance(flags, list):
            _read_flags(req, entity_id, flags, messages)

        data_str = _read_str(entry, "data")
        if data_str is not None:
            _read_data(req, entity_id, data_str)

        props = entry.get("properties")
        if isinstance(props, list):
            _read_properties(req, entity_id, props, property_db, messages)

    return req, messages