"""
Geometry Layer
==============

Bounded Context: Pure geometry of the detection zone and spatial queries.

Responsibilities:
- Normalized rectangle representation (immutable)
- Point-in-rectangle tests
- Head/feet-in-zone decision
- NO state, NO edge triggering, NO visualization

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Fail-fast validation
- Zero side effects
"""

from nether_zone.geometry.shapes import (
    DEFAULT_ZONE,
    MIN_DIMENSION,
    NormalizedRect,
    clamp,
)
from nether_zone.geometry.detector import (
    CONFIDENCE_THRESHOLD,
    FOOT_JOINTS,
    HEAD_JOINTS,
    ZoneDetector,
)

__all__ = [
    "DEFAULT_ZONE",
    "MIN_DIMENSION",
    "NormalizedRect",
    "clamp",
    "CONFIDENCE_THRESHOLD",
    "FOOT_JOINTS",
    "HEAD_JOINTS",
    "ZoneDetector",
]
