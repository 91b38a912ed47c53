"""
Keypoint Conversion Module
==========================

Model-agnostic helpers shared by pose source adapters.

- COCO-17 keypoint layout (YOLO pose output order)
- Raw keypoint arrays -> PoseObservation (bottom-left origin)
- Frame rotation to upright for a declared Orientation
"""

from typing import List, Optional

import cv2
import numpy as np

from nether_zone.pose.types import Joint, JointName, Orientation, PoseObservation

# COCO keypoint order produced by YOLO pose models (17 keypoints)
COCO_KEYPOINTS = (
    JointName.NOSE,
    JointName.LEFT_EYE,
    JointName.RIGHT_EYE,
    JointName.LEFT_EAR,
    JointName.RIGHT_EAR,
    JointName.LEFT_SHOULDER,
    JointName.RIGHT_SHOULDER,
    JointName.LEFT_ELBOW,
    JointName.RIGHT_ELBOW,
    JointName.LEFT_WRIST,
    JointName.RIGHT_WRIST,
    JointName.LEFT_HIP,
    JointName.RIGHT_HIP,
    JointName.LEFT_KNEE,
    JointName.RIGHT_KNEE,
    JointName.LEFT_ANKLE,
    JointName.RIGHT_ANKLE,
)

_ROTATIONS = {
    Orientation.DOWN: cv2.ROTATE_180,
    Orientation.LEFT: cv2.ROTATE_90_COUNTERCLOCKWISE,
    Orientation.RIGHT: cv2.ROTATE_90_CLOCKWISE,
}


def rotate_upright(image: np.ndarray, orientation: Orientation) -> np.ndarray:
    """
    Rotate a raw frame so that it is upright.

    Args:
        image: Raw frame (H, W[, C])
        orientation: Declared orientation of the raw frame

    Returns:
        Upright frame (the input itself for Orientation.UP)
    """
    rotation = _ROTATIONS.get(Orientation(orientation))
    if rotation is None:
        return image
    return cv2.rotate(image, rotation)


def observation_from_keypoints(
    xyn: np.ndarray,
    confidence: Optional[np.ndarray] = None,
) -> PoseObservation:
    """
    Build a PoseObservation from one person's COCO keypoints.

    Args:
        xyn: (17, 2) keypoints normalized to [0, 1], top-left origin
        confidence: Optional (17,) per-keypoint confidence. Missing
                    confidences are reported as 0.0 (never present).

    Returns:
        PoseObservation with y flipped to the bottom-left origin convention
    """
    xyn = np.asarray(xyn, dtype=np.float64).reshape(-1, 2)
    if xyn.shape[0] != len(COCO_KEYPOINTS):
        raise ValueError(
            f"Expected {len(COCO_KEYPOINTS)} keypoints, got {xyn.shape[0]}"
        )

    if confidence is None:
        confidence = np.zeros(len(COCO_KEYPOINTS), dtype=np.float64)
    confidence = np.asarray(confidence, dtype=np.float64).reshape(-1)

    joints = tuple(
        Joint(
            name=name,
            position=(float(x), 1.0 - float(y)),
            confidence=float(conf),
        )
        for name, (x, y), conf in zip(COCO_KEYPOINTS, xyn, confidence)
    )
    return PoseObservation(joints=joints)


def observations_from_keypoints(
    xyn: np.ndarray,
    confidence: Optional[np.ndarray] = None,
) -> List[PoseObservation]:
    """
    Batch version of observation_from_keypoints.

    Args:
        xyn: (N, 17, 2) keypoints for N people
        confidence: Optional (N, 17) confidences

    Returns:
        One PoseObservation per person (empty list for N == 0)
    """
    xyn = np.asarray(xyn, dtype=np.float64)
    if xyn.size == 0:
        return []

    xyn = xyn.reshape(-1, len(COCO_KEYPOINTS), 2)
    if confidence is not None:
        confidence = np.asarray(confidence, dtype=np.float64).reshape(-1, len(COCO_KEYPOINTS))

    return [
        observation_from_keypoints(
            person, None if confidence is None else confidence[idx]
        )
        for idx, person in enumerate(xyn)
    ]
