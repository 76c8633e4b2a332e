import math
import random
from enum import Enum

JITTER_RANGE = 8.0
CIRCLE_RADIUS = 20.0
CIRCLE_STEP = math.pi / 8.0
HORIZONTAL_STEP = 20.0


class MovementPattern(Enum):
    JITTER = "jitter"
    CIRCLE = "circle"
    HORIZONTAL = "horizontal"

    @property
    def display_name(self):
        return self.value.capitalize()


def compute_next(pattern, current, phase, rng=random):
    """Return ``(next_position, phase)`` for one tick of ``pattern``.

    Every pattern is relative to ``current``, the pointer position sampled
    at this tick. Only the circle pattern advances the phase.
    """
    x, y = current
    if pattern is MovementPattern.JITTER:
        dx = rng.uniform(-JITTER_RANGE, JITTER_RANGE)
        dy = rng.uniform(-JITTER_RANGE, JITTER_RANGE)
        return (x + dx, y + dy), phase
    if pattern is MovementPattern.CIRCLE:
        phase += CIRCLE_STEP
        return (x + CIRCLE_RADIUS * math.cos(phase), y + CIRCLE_RADIUS * math.sin(phase)), phase
    if pattern is MovementPattern.HORIZONTAL:
        return (x + HORIZONTAL_STEP, y), phase
    raise ValueError(f"Unknown pattern: {pattern}")
