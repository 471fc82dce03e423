"""Helpers for the map view: point-in-polygon tests, id colours and parameter parsing."""

from __future__ import annotations

import re
from typing import Mapping, Optional, Sequence

_REDS = (255, 0, 255, 0, 255, 0, 255)
_GREENS = (255, 255, 0, 0, 255, 255, 0)
_BLUES = (255, 255, 255, 255, 0, 0, 0)

_UINT64 = (1 << 64) - 1

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def in_polygon(points: Sequence[tuple[float, float]], point: tuple[float, float]) -> bool:
    """True if ``point`` lies inside the polygon ``points`` (even-odd rule)."""
    tx, ty = point
    inside = False
    for (xi, yi), (xj, yj) in zip(points, [*points[-1:], *points[:-1]]):
        if (yi > ty) != (yj > ty) and tx < (xj - xi) * (ty - yi) / (yj - yi) + xi:
            inside = not inside
    return inside


def color_hash(text: str, max_val: int) -> int:
    """The djb2 hash of ``text`` (as UTF-8, signed bytes) reduced modulo ``max_val``."""
    if max_val <= 0:
        raise ValueError("max_val must be positive")
    h = 5381
    for byte in text.encode("utf-8"):
        c = byte - 256 if byte >= 128 else byte
        h = (h * 33 + c) & _UINT64
    return h % max_val


def id_to_color(entity_id: str) -> tuple[int, int, int]:
    """A colour for an entity id, as (blue, green, red)."""
    i = color_hash(entity_id, len(_REDS))
    return (_BLUES[i], _GREENS[i], _REDS[i])


def parse_float_param(params: Mapping[str, str], key: str) -> Optional[float]:
    """The number at the start of ``params[key]``; 0.0 if none, ``None`` if the key is absent."""
    if key not in params:
        return None
    match = _FLOAT_PREFIX.match(params[key])
    return float(match.group(1)) if match else 0.0