"""
YOLO Pose Source
================

PoseSource backed by an Ultralytics YOLO pose model.

Design:
- Model is injected (loaded by nether_app.model_loader or by the caller)
- Frame rotated upright here, so the detector stays orientation-agnostic
- Any inference exception, or keypoint output of an unexpected layout,
  surfaces as PoseDetectionError

Dependencies:
- ultralytics (YOLO pose inference)
- opencv-python (rotation, via nether_zone.pose.keypoints)
"""

import logging
from typing import List

import numpy as np
from ultralytics import YOLO

from nether_zone.pose.keypoints import observations_from_keypoints, rotate_upright
from nether_zone.pose.types import Orientation, PoseDetectionError, PoseObservation

logger = logging.getLogger(__name__)


class YoloPoseSource:
    """
    Pose estimation with a YOLO pose model.

    Usage:
        source = YoloPoseSource(YOLO("yolo11n-pose.pt"))
        observations = source.infer(frame, Orientation.UP)
    """

    def __init__(self, model: YOLO):
        """
        Args:
            model: Loaded Ultralytics pose model (e.g. yolo11n-pose.pt)
        """
        self.model = model

    def infer(self, image: np.ndarray, orientation: Orientation = Orientation.UP) -> List[PoseObservation]:
        """
        Run pose estimation on one frame.

        Raises:
            PoseDetectionError: If the model fails on this frame or returns
                keypoints that are not in the COCO 17-joint layout
        """
        upright = rotate_upright(image, orientation)

        try:
            results = self.model(upright, verbose=False)
        except Exception as e:
            raise PoseDetectionError(f"Pose inference failed: {e}") from e

        observations: List[PoseObservation] = []
        try:
            for result in results:
                keypoints = result.keypoints
                if keypoints is None or keypoints.xyn is None:
                    continue

                xyn = keypoints.xyn.cpu().numpy()
                conf = keypoints.conf.cpu().numpy() if keypoints.conf is not None else None
                observations.extend(observations_from_keypoints(xyn, conf))
        except (AttributeError, TypeError, ValueError, IndexError) as e:
            raise PoseDetectionError(f"Unexpected keypoint output: {e}") from e

        logger.debug(f"Pose inference: {len(observations)} person(s)")
        return observations
