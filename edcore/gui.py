"""State of the map view: clicks, selection, camera panning and the pending command."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from edcore.convex_hull import Vector3
from edcore.entity import generate_id
from edcore.gui_geometry import parse_float_param

EntityLookup = Callable[[tuple[int, int]], str]


@dataclass(frozen=True)
class GuiCommand:
    """A command issued from the map view, with its age in seconds."""

    command: str
    command_id: str
    age: float
    params: dict[str, str] = field(default_factory=dict)


def _divide(numerator: float, denominator: float) -> float:
    """Floating-point division that yields inf or nan instead of raising on zero."""
    if denominator != 0.0:
        return numerator / denominator
    if numerator == 0.0 or math.isnan(numerator):
        return math.nan
    sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
    return math.copysign(math.inf, sign)


class GuiState:
    """Handles events raised by a map view and keeps the command it asks for.

    ``camera`` is the position of the top-down camera that renders the map.
    ``clock`` returns the current time in seconds and ``id_factory`` produces
    fresh command ids.
    """

    def __init__(
        self,
        camera: Vector3 = Vector3(),
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], str] = generate_id,
    ):
        self.camera = camera
        self._clock = clock
        self._id_factory = id_factory

        self.command = "explore"
        self.command_id = id_factory()
        self.command_params: dict[str, str] = {}
        self.t_command = clock()

        self.selected_id = ""
        self.click: Optional[tuple[int, int]] = None
        self.t_last_click: Optional[float] = None

    def _issue(self, command: str) -> None:
        self.command = command
        self.t_command = self._clock()
        self.command_id = self._id_factory()

    def _handle_click(self, params: Mapping[str, str], entity_at: EntityLookup) -> str:
        x = parse_float_param(params, "x")
        y = parse_float_param(params, "y")
        click_type = params.get("type")
        if x is None or y is None or click_type is None:
            return "Could not parse click event"

        self.click = (int(x), int(y))
        self.t_last_click = self._clock()

        self.command = ""
        self.selected_id = entity_at(self.click)

        if click_type == "delete":
            msg = "Deletion not yet implemented" if self.selected_id else ""
        elif click_type == "navigate":
            self.command = "navigate"
            self.command_params["id"] = self.selected_id
            msg = f"Navigating to '{self.selected_id}'"
        elif click_type == "select":
            msg = f"Selected '{self.selected_id}'"
        else:
            msg = f"Unknown click type: {click_type}"

        if self.command:
            self._issue(self.command)
        return msg

    def raise_event(
        self,
        name: str,
        params: Mapping[str, str],
        entity_at: EntityLookup = lambda point: "",
    ) -> str:
        """Handle an event from the view and return the message for the caller.

        ``entity_at`` maps a clicked pixel to the id of the entity there, or
        the empty string if there is none.
        """
        if name == "click":
            return self._handle_click(params, entity_at)

        if name == "zoom":
            factor = parse_float_param(params, "factor")
            if factor is not None:
                self.camera = Vector3(self.camera.x, self.camera.y, _divide(self.camera.z, factor))
            return ""

        if name == "pan":
            dx = parse_float_param(params, "dx")
            dy = parse_float_param(params, "dy")
            if dx is not None and dy is not None:
                self.camera = Vector3(self.camera.x + dx, self.camera.y + dy, self.camera.z)
            return ""

        if name in ("explore", "wait"):
            self._issue(name)
            return ""

        return f"Unknown event received: {name}"

    def get_command(self) -> Optional[GuiCommand]:
        """The pending command, or ``None`` if there is none."""
        if not self.command:
            return None
        return GuiCommand(
            command=self.command,
            command_id=self.command_id,
            age=self._clock() - self.t_command,
            params=dict(sorted(self.command_params.items())),
        )