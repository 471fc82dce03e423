"""Frame-id normalisation and prefix exclusion for transform publishing."""

from __future__ import annotations


def normalize_frame_id(frame_id: str) -> str:
    """Drop one leading slash from a frame id."""
    return frame_id[1:] if frame_id.startswith("/") else frame_id


def is_excluded(entity_id: str, exclude: str) -> bool:
    """True if ``exclude`` is set and the entity id starts with it (leading slashes ignored)."""
    prefix = normalize_frame_id(exclude)
    if not prefix:
        return False
    return normalize_frame_id(entity_id).startswith(prefix)