"""
Pose Layer
==========

Bounded Context: Body-pose observations and the pose source interface.

Responsibilities:
- Joint / PoseObservation value objects
- PoseSource protocol (black-box inference)
- Keypoint conversion and frame rotation helpers

The YOLO-backed source lives in nether_zone.pose.yolo and is imported
explicitly so that ultralytics is only loaded when it is used.
"""

from nether_zone.pose.types import (
    Joint,
    JointName,
    Orientation,
    PoseDetectionError,
    PoseObservation,
    PoseSource,
)
from nether_zone.pose.keypoints import (
    COCO_KEYPOINTS,
    observation_from_keypoints,
    observations_from_keypoints,
    rotate_upright,
)

__all__ = [
    "Joint",
    "JointName",
    "Orientation",
    "PoseDetectionError",
    "PoseObservation",
    "PoseSource",
    "COCO_KEYPOINTS",
    "observation_from_keypoints",
    "observations_from_keypoints",
    "rotate_upright",
]
