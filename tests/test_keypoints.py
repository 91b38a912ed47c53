import numpy as np
import pytest

from nether_zone.pose.keypoints import (
    COCO_KEYPOINTS,
    observation_from_keypoints,
    observations_from_keypoints,
    rotate_upright,
)
from nether_zone.pose.types import JointName, Orientation


def test_coco_layout():
    assert len(COCO_KEYPOINTS) == 17
    assert COCO_KEYPOINTS[0] is JointName.NOSE
    assert COCO_KEYPOINTS[15] is JointName.LEFT_ANKLE
    assert COCO_KEYPOINTS[16] is JointName.RIGHT_ANKLE


def test_keypoints_flipped_to_bottom_left_origin():
    xyn = np.full((17, 2), 0.5)
    xyn[0] = (0.4, 0.1)  # nose near top of image
    conf = np.full(17, 0.8)

    observation = observation_from_keypoints(xyn, conf)
    nose = observation.joint(JointName.NOSE)

    assert nose.x == pytest.approx(0.4)
    assert nose.y == pytest.approx(0.9)
    assert nose.confidence == pytest.approx(0.8)
    assert len(observation) == 17


def test_missing_confidence_means_absent():
    observation = observation_from_keypoints(np.zeros((17, 2)))
    assert all(joint.confidence == 0.0 for joint in observation)


def test_wrong_keypoint_count():
    with pytest.raises(ValueError):
        observation_from_keypoints(np.zeros((5, 2)))


def test_batch_conversion():
    xyn = np.random.default_rng(0).random((3, 17, 2))
    conf = np.ones((3, 17))
    observations = observations_from_keypoints(xyn, conf)
    assert len(observations) == 3

    assert observations_from_keypoints(np.zeros((0, 17, 2))) == []


def test_joint_lookup_missing():
    observation = observation_from_keypoints(np.zeros((17, 2)))
    assert observation.joint(JointName.NECK) is None


@pytest.mark.parametrize("orientation, expected_shape", [
    (Orientation.UP, (40, 60, 3)),
    (Orientation.DOWN, (40, 60, 3)),
    (Orientation.LEFT, (60, 40, 3)),
    (Orientation.RIGHT, (60, 40, 3)),
])
def test_rotate_upright_shapes(orientation, expected_shape):
    frame = np.zeros((40, 60, 3), dtype=np.uint8)
    assert rotate_upright(frame, orientation).shape == expected_shape


def test_rotate_directions():
    frame = np.zeros((2, 3), dtype=np.uint8)
    frame[0, 0] = 255  # top-left pixel

    assert rotate_upright(frame, Orientation.DOWN)[1, 2] == 255
    # Clockwise: top-left goes to top-right
    assert rotate_upright(frame, Orientation.RIGHT)[0, 1] == 255
    # Counter-clockwise: top-left goes to bottom-left
    assert rotate_upright(frame, Orientation.LEFT)[2, 0] == 255


def test_orientation_accepts_strings():
    frame = np.zeros((40, 60, 3), dtype=np.uint8)
    assert rotate_upright(frame, "right").shape == (60, 40, 3)
