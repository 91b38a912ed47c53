"""
Normalized Shapes Module
========================

Pure geometric representation of the detection zone - NO state, NO side effects.

Design:
- Immutable rectangle (frozen dataclass)
- Unit-square coordinates, top-left origin
- Fail-fast validation of the size and bounds invariant
- Thread-safe by design (immutability)
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, Tuple

MIN_DIMENSION = 0.05
"""Smallest width/height a committed zone may have."""

# Float slack for x + width <= 1 after clamping (1 - x is not exact)
BOUNDS_TOLERANCE = 1e-9


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(value, upper))


@dataclass(frozen=True)
class NormalizedRect:
    """
    Immutable rectangle in normalized [0, 1] coordinates.

    Invariants:
        - 0 <= x, y <= 1
        - x + width <= 1, y + height <= 1
        - width >= MIN_DIMENSION, height >= MIN_DIMENSION

    Attributes:
        x: Left edge (fraction of frame width)
        y: Top edge (fraction of frame height)
        width: Width (fraction of frame width)
        height: Height (fraction of frame height)

    A zone exactly MIN_DIMENSION wide or high is valid but cannot be
    dragged: editor candidates must be strictly larger, so it stays fixed
    until it is built larger.

    Example:
        >>> zone = NormalizedRect(x=0.39, y=0.0, width=0.16, height=1.0)
        >>> zone.contains_point((0.4, 0.5))
        True
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        """Validate invariants."""
        for name in ("x", "y", "width", "height"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"NormalizedRect {name} must be finite, got {value}")

        if not 0.0 <= self.x <= 1.0 or not 0.0 <= self.y <= 1.0:
            raise ValueError(
                f"NormalizedRect origin must be in [0, 1], got ({self.x}, {self.y})"
            )
        if self.width < MIN_DIMENSION or self.height < MIN_DIMENSION:
            raise ValueError(
                f"NormalizedRect size must be >= {MIN_DIMENSION}, "
                f"got ({self.width}, {self.height})"
            )
        if self.max_x > 1.0 + BOUNDS_TOLERANCE or self.max_y > 1.0 + BOUNDS_TOLERANCE:
            raise ValueError(
                f"NormalizedRect exceeds unit square: "
                f"x+width={self.max_x}, y+height={self.max_y}"
            )

    @property
    def max_x(self) -> float:
        """Right edge."""
        return self.x + self.width

    @property
    def max_y(self) -> float:
        """Bottom edge."""
        return self.y + self.height

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2

    def contains_point(self, point: Tuple[float, float]) -> bool:
        """
        Inclusive point-in-rectangle test.

        Args:
            point: (x, y) in normalized, top-left origin coordinates

        Returns:
            True if the point lies inside or on the border
        """
        px, py = point
        return self.x <= px <= self.max_x and self.y <= py <= self.max_y

    def to_pixels(self, frame_resolution_wh: Tuple[int, int]) -> Tuple[int, int, int, int]:
        """
        Project onto a frame.

        Args:
            frame_resolution_wh: (width, height) of the frame in pixels

        Returns:
            (x, y, width, height) in integer pixels
        """
        width, height = frame_resolution_wh
        return (
            int(round(self.x * width)),
            int(round(self.y * height)),
            int(round(self.width * width)),
            int(round(self.height * height)),
        )

    def to_dict(self) -> Dict[str, float]:
        """Serialize to JSON/YAML-compatible dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "NormalizedRect":
        """
        Deserialize from dict.

        Raises:
            ValueError: If keys are missing or values violate the invariants
        """
        try:
            return cls(
                x=float(data["x"]),
                y=float(data["y"]),
                width=float(data["width"]),
                height=float(data["height"]),
            )
        except KeyError as e:
            raise ValueError(f"Missing required zone field: {e}")
        except TypeError as e:
            raise ValueError(f"Invalid zone data: {e}")


DEFAULT_ZONE = NormalizedRect(x=0.39, y=0.0, width=0.16, height=1.0)
"""A narrow full-height band slightly left of center."""
