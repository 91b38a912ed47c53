"""
Pose Types Module
=================

Value objects exchanged with a pose source, plus the pose source interface.

Coordinate convention:
    Joint positions are normalized to [0, 1] with the origin at the
    BOTTOM-left of the upright frame (y grows upwards). ZoneDetector
    flips y before comparing against the on-screen, top-left origin zone.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Protocol, Tuple

import numpy as np


class JointName(str, Enum):
    """Named skeletal landmarks."""

    NOSE = "nose"
    LEFT_EYE = "left_eye"
    RIGHT_EYE = "right_eye"
    LEFT_EAR = "left_ear"
    RIGHT_EAR = "right_ear"
    NECK = "neck"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_ELBOW = "left_elbow"
    RIGHT_ELBOW = "right_elbow"
    LEFT_WRIST = "left_wrist"
    RIGHT_WRIST = "right_wrist"
    ROOT = "root"
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    LEFT_KNEE = "left_knee"
    RIGHT_KNEE = "right_knee"
    LEFT_ANKLE = "left_ankle"
    RIGHT_ANKLE = "right_ankle"


class Orientation(str, Enum):
    """
    How a raw frame must be rotated to appear upright.

    UP: already upright
    DOWN: upside down (rotate 180)
    LEFT: rotate 90 counter-clockwise
    RIGHT: rotate 90 clockwise
    """

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Joint:
    """
    One detected landmark.

    Not validated: out-of-range or NaN confidences fail the presence
    threshold downstream, and unusable positions are skipped by the
    detector.
    """

    name: JointName
    position: Tuple[float, float]
    confidence: float

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]


@dataclass(frozen=True)
class PoseObservation:
    """All joints of one person in one frame."""

    joints: Tuple[Joint, ...] = ()

    def joint(self, name: JointName) -> Optional[Joint]:
        """Return the named joint, or None if the source did not report it."""
        for joint in self.joints:
            if joint.name == name:
                return joint
        return None

    def __iter__(self) -> Iterator[Joint]:
        return iter(self.joints)

    def __len__(self) -> int:
        return len(self.joints)


class PoseDetectionError(Exception):
    """Raised by a pose source when inference fails for a frame."""
    pass


class PoseSource(Protocol):
    """Protocol for pose estimators (interface)."""

    def infer(self, image: np.ndarray, orientation: Orientation) -> List[PoseObservation]:
        """
        Estimate body poses in one frame.

        Args:
            image: BGR frame as captured
            orientation: How the frame must be interpreted to be upright

        Returns:
            One PoseObservation per detected person

        Raises:
            PoseDetectionError: If inference fails
        """
        ...
