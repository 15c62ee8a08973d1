"""Priority Colors
---

Nodes are tinted by priority so the heap order is visible at a glance. Priorities
fall into five bands from cool (low) to hot (high), and the glow around a node
grows with its priority.
"""
from typing import NamedTuple

PRIORITY_HIGH = "high"
PRIORITY_MID_HIGH = "mid-high"
PRIORITY_MID = "mid"
PRIORITY_MID_LOW = "mid-low"
PRIORITY_LOW = "low"

# (lower bound, band, hex color), checked top down
PRIORITY_BANDS = (
    (80, PRIORITY_HIGH, "#f43f5e"),  # red
    (60, PRIORITY_MID_HIGH, "#ec4899"),  # pink
    (40, PRIORITY_MID, "#a855f7"),  # purple
    (20, PRIORITY_MID_LOW, "#22d3ee"),  # cyan
    (float("-inf"), PRIORITY_LOW, "#3b82f6"),  # blue
)

# The priority at which the glow reaches full intensity
MAX_GLOW_PRIORITY = 100.0


class PriorityColor(NamedTuple):
    band: str
    hex: str


def get_priority_color(priority: float) -> PriorityColor:
    """Return the color band for a node with the given priority."""
    for lower, band, color in PRIORITY_BANDS:
        if priority >= lower:
            return PriorityColor(band, color)
    raise ValueError(f"priority is not comparable: {priority!r}")


def get_priority_band(priority: float) -> str:
    return get_priority_color(priority).band


def get_priority_glow(priority: float) -> float:
    """Glow intensity in [0, 1]. Never decreases as priority increases."""
    return min(max(priority / MAX_GLOW_PRIORITY, 0.0), 1.0)


def get_priority_glow_css(priority: float) -> str:
    """A CSS `box-shadow` value for the node's glow."""
    intensity = get_priority_glow(priority)
    inner = 10 + intensity * 20
    outer = 20 + intensity * 40
    return f"0 0 {inner:g}px currentColor, 0 0 {outer:g}px currentColor"
