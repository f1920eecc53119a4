"""Label and color helpers mapping round state to what the widgets show.

Call context:
    ``GameVM`` uses these to build header and hole DTOs; views never see
    domain enums directly.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..domain.entities import HoleState, RoundPhase

HOLE_DOWN_TEXT = "   "
HOLE_UP_TEXT = " :P "
HOLE_HIT_TEXT = " X "

HOLE_DOWN_COLOR = "#c0c0c0"  # light gray
HOLE_UP_COLOR = "#00ff00"
HOLE_HIT_COLOR = "#ff0000"

_HOLE_STYLES = {
    HoleState.DOWN: (HOLE_DOWN_TEXT, HOLE_DOWN_COLOR),
    HoleState.UP: (HOLE_UP_TEXT, HOLE_UP_COLOR),
    HoleState.HIT: (HOLE_HIT_TEXT, HOLE_HIT_COLOR),
}


def hole_style(state: HoleState) -> Tuple[str, str]:
    """Return ``(text, background)`` for a hole state."""
    return _HOLE_STYLES[state]


def phase_label(phase: Optional[RoundPhase]) -> str:
    mapping = {
        RoundPhase.IDLE: "Ready",
        RoundPhase.RUNNING: "Running",
        RoundPhase.COOLDOWN: "Round over",
    }
    if phase is None:
        return "Ready"
    return mapping[phase]


def counter_text(value: Optional[int]) -> str:
    """Render a countdown or score field; blank when there is no round."""
    if value is None:
        return ""
    return str(int(value))


__all__ = [
    "HOLE_DOWN_COLOR",
    "HOLE_DOWN_TEXT",
    "HOLE_HIT_COLOR",
    "HOLE_HIT_TEXT",
    "HOLE_UP_COLOR",
    "HOLE_UP_TEXT",
    "counter_text",
    "hole_style",
    "phase_label",
]
