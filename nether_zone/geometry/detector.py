"""
Zone Detector Module
====================

Stateless detection logic - applies the zone rectangle to pose observations.

Design:
- Pure functions (no state)
- Edge triggering lives in the analytics layer (RisingEdgeTrigger)
- Thread-safe (no mutations)
"""

import math
from typing import FrozenSet, Iterable, Optional, Tuple

from nether_zone.geometry.shapes import NormalizedRect
from nether_zone.pose.types import Joint, JointName, PoseObservation

CONFIDENCE_THRESHOLD = 0.3
"""A joint is present only if its confidence is strictly above this."""

HEAD_JOINTS: FrozenSet[JointName] = frozenset({
    JointName.NOSE,
    JointName.LEFT_EYE,
    JointName.RIGHT_EYE,
    JointName.LEFT_EAR,
    JointName.RIGHT_EAR,
})

FOOT_JOINTS: FrozenSet[JointName] = frozenset({
    JointName.LEFT_ANKLE,
    JointName.RIGHT_ANKLE,
})


class ZoneDetector:
    """
    Stateless detector deciding whether a person stands fully inside a zone.

    A person is "in zone" when at least one head joint AND at least one
    foot joint are present and inside the zone.

    Usage:
        in_zone = ZoneDetector.evaluate(observations, zone)
    """

    @staticmethod
    def to_overlay_point(joint: Joint) -> Tuple[float, float]:
        """
        Convert a joint position to the overlay (top-left origin) convention.

        Pose sources report y growing upwards; the zone is drawn with y
        growing downwards.
        """
        return float(joint.x), 1.0 - float(joint.y)

    @staticmethod
    def usable_overlay_point(joint: Joint) -> Optional[Tuple[float, float]]:
        """
        Overlay point of a joint, or None if its position is unusable.

        Missing, too short, non-numeric and non-finite positions yield None.
        """
        try:
            x, y = ZoneDetector.to_overlay_point(joint)
        except (TypeError, ValueError, IndexError):
            return None
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        return x, y

    @staticmethod
    def is_present(joint: Joint, confidence_threshold: float = CONFIDENCE_THRESHOLD) -> bool:
        """Confidence gate. NaN and out-of-range values never raise."""
        try:
            return float(joint.confidence) > confidence_threshold
        except (TypeError, ValueError):
            return False

    @staticmethod
    def any_joint_in_zone(
        observation: PoseObservation,
        names: Iterable[JointName],
        zone: NormalizedRect,
        confidence_threshold: float = CONFIDENCE_THRESHOLD,
    ) -> bool:
        """
        True if any present joint from `names` lies inside the zone.

        Joints with an unusable position count as not present.
        """
        wanted = frozenset(names)
        for joint in observation:
            if joint.name not in wanted:
                continue
            if not ZoneDetector.is_present(joint, confidence_threshold):
                continue
            point = ZoneDetector.usable_overlay_point(joint)
            if point is not None and zone.contains_point(point):
                return True
        return False

    @staticmethod
    def is_observation_in_zone(
        observation: PoseObservation,
        zone: NormalizedRect,
        confidence_threshold: float = CONFIDENCE_THRESHOLD,
    ) -> bool:
        """Head AND feet of one person inside the zone."""
        head_in_zone = ZoneDetector.any_joint_in_zone(
            observation, HEAD_JOINTS, zone, confidence_threshold
        )
        if not head_in_zone:
            return False
        return ZoneDetector.any_joint_in_zone(
            observation, FOOT_JOINTS, zone, confidence_threshold
        )

    @staticmethod
    def evaluate(
        observations: Iterable[PoseObservation],
        zone: NormalizedRect,
        confidence_threshold: float = CONFIDENCE_THRESHOLD,
    ) -> bool:
        """
        Decide the human-in-zone signal for one frame.

        Args:
            observations: Every person detected in the frame
            zone: Zone rectangle (normalized, top-left origin)
            confidence_threshold: Joint presence threshold

        Returns:
            True if ANY observation has head and feet inside the zone
        """
        return any(
            ZoneDetector.is_observation_in_zone(observation, zone, confidence_threshold)
            for observation in observations
        )
