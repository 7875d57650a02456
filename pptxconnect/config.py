"""
Routing configuration

Clearance and sampling constants used by the connector routing engine, plus a
RoutingConfig dataclass so callers can tune them per router
"""
from dataclasses import dataclass

# Minimum distance a connector travels out of its connection site before turning
MIN_EXIT_CLEARANCE_PX = 50.0

# Distance kept from a shape's bounding box by the perimeter-hugging candidates
PERIMETER_CLEARANCE_PX = 20.0

# Offset used by the best-effort route when every candidate collides
FALLBACK_OFFSET_PX = 80.0

# Number of sub-intervals a segment is split into for containment sampling.
# Thin obstacles lying entirely between two samples are not detected.
COLLISION_SAMPLES = 10

# A segment whose |dy| is below this value counts as horizontal
ORIENTATION_TOLERANCE_PX = 1.0

# Default size for elements that carry no explicit size in a .pptx
DEFAULT_ELEMENT_SIZE_PX = 100.0


@dataclass
class RoutingConfig:
    """Tunable routing parameters"""
    min_exit_clearance: float = MIN_EXIT_CLEARANCE_PX
    perimeter_clearance: float = PERIMETER_CLEARANCE_PX
    fallback_offset: float = FALLBACK_OFFSET_PX
    collision_samples: int = COLLISION_SAMPLES
    orientation_tolerance: float = ORIENTATION_TOLERANCE_PX

    def __post_init__(self):
        if self.min_exit_clearance < 0:
            raise ValueError(f"min_exit_clearance must be >= 0, got {self.min_exit_clearance}")
        if self.perimeter_clearance < 0:
            raise ValueError(f"perimeter_clearance must be >= 0, got {self.perimeter_clearance}")
        if self.fallback_offset < self.min_exit_clearance:
            raise ValueError(
                f"fallback_offset ({self.fallback_offset}) must not be smaller than "
                f"min_exit_clearance ({self.min_exit_clearance})"
            )
        if self.collision_samples < 1:
            raise ValueError(f"collision_samples must be >= 1, got {self.collision_samples}")
        if self.orientation_tolerance <= 0:
            raise ValueError(f"orientation_tolerance must be > 0, got {self.orientation_tolerance}")


# Global config instance
default_config = RoutingConfig()
