from typing import Optional

from pydantic import BaseModel, Field


class TreapConfig(BaseModel):
    # Randomly generated priorities are drawn uniformly from [low, high)
    priority_low: int = 0
    priority_high: int = Field(100, gt=0)
    # Seed for the engine's random source. None draws fresh entropy.
    seed: Optional[int] = None
    # Keep at most this many operation records (newest win). None keeps the
    # entire history for the lifetime of the engine.
    max_operations: Optional[int] = Field(None, gt=0)


class LayoutConfig(BaseModel):
    # The viewport is never treated as smaller than this
    min_width: float = 800.0
    min_height: float = 600.0
    # Lower bound on the horizontal distance budgeted per node
    min_horizontal_spacing: float = 80.0
