import pytest

from nether_zone.editing.editor import HandleId, ZoneEditor
from nether_zone.geometry.shapes import NormalizedRect
from nether_zone.monitor import ZoneMonitor
from nether_zone.pose.types import Orientation, PoseDetectionError

from tests.fakes import FailingPoseSource, FakePoseSource, blank_frame, person

ZONE = NormalizedRect(x=0.3, y=0.0, width=0.4, height=1.0)
INSIDE = person(head=(0.5, 0.1), foot=(0.5, 0.9))
OUTSIDE = person(head=(0.1, 0.1), foot=(0.1, 0.9))


def test_entry_listener_fires_on_rising_edges():
    cues = []
    monitor = ZoneMonitor(editor=ZoneEditor(ZONE))
    monitor.add_entry_listener(lambda: cues.append(1))

    frames = [[], [INSIDE], [INSIDE], [INSIDE, OUTSIDE], [OUTSIDE], [INSIDE]]
    signals = [monitor.process_observations(frame) for frame in frames]

    assert signals == [False, True, True, True, False, True]
    assert len(cues) == 2
    assert monitor.get_stats().entries == 2
    assert monitor.get_stats().frames_processed == 6


def test_process_frame_uses_pose_source():
    source = FakePoseSource([[INSIDE], []])
    monitor = ZoneMonitor(pose_source=source, editor=ZoneEditor(ZONE))

    assert monitor.process_frame(blank_frame(), Orientation.LEFT)
    assert not monitor.process_frame(blank_frame(), Orientation.LEFT)
    assert source.calls == [Orientation.LEFT, Orientation.LEFT]


def test_pose_failure_degrades_to_no_detection():
    cues = []
    source = FakePoseSource([[INSIDE], PoseDetectionError("dropped"), [INSIDE]])
    monitor = ZoneMonitor(pose_source=source, editor=ZoneEditor(ZONE))
    monitor.add_entry_listener(lambda: cues.append(1))

    assert monitor.process_frame(blank_frame())
    assert not monitor.process_frame(blank_frame())
    assert monitor.process_frame(blank_frame())

    assert len(cues) == 2
    assert monitor.get_stats().pose_failures == 1


def test_always_failing_source_never_raises():
    cues = []
    monitor = ZoneMonitor(pose_source=FailingPoseSource())
    monitor.add_entry_listener(lambda: cues.append(1))

    for _ in range(3):
        assert not monitor.process_frame(blank_frame())

    assert cues == []
    assert not monitor.is_human_detected


def test_process_frame_without_source():
    monitor = ZoneMonitor()
    with pytest.raises(ValueError):
        monitor.process_frame(blank_frame())


def test_listener_errors_are_swallowed():
    calls = []
    monitor = ZoneMonitor(editor=ZoneEditor(ZONE))

    def broken():
        raise RuntimeError("no audio device")

    monitor.add_entry_listener(broken)
    monitor.add_entry_listener(lambda: calls.append(1))

    assert monitor.process_observations([INSIDE])
    assert calls == [1]
    assert monitor.is_human_detected


def test_detection_observers():
    changes = []
    monitor = ZoneMonitor(editor=ZoneEditor(ZONE))
    monitor.subscribe_detection(lambda old, new: changes.append(new))

    for frame in [[INSIDE], [INSIDE], [], []]:
        monitor.process_observations(frame)

    assert changes == [True, False]


def test_zone_edit_applies_on_next_frame():
    editor = ZoneEditor(ZONE)
    monitor = ZoneMonitor(editor=editor)
    assert monitor.process_observations([INSIDE])

    # Shrink the zone to the right half so the person falls outside
    editor.begin_handle_drag(HandleId.MIDDLE_LEFT)
    editor.update_handle_drag(HandleId.MIDDLE_LEFT, 0.3, 0.0)
    editor.end_handle_drag()

    assert monitor.current_zone.x == pytest.approx(0.6)
    assert not monitor.process_observations([INSIDE])


def test_confidence_threshold_is_configurable():
    observation = person(head=(0.5, 0.1), foot=(0.5, 0.9), head_confidence=0.5, foot_confidence=0.5)
    strict = ZoneMonitor(editor=ZoneEditor(ZONE), confidence_threshold=0.6)
    assert not strict.process_observations([observation])


def test_reset():
    cues = []
    monitor = ZoneMonitor(editor=ZoneEditor(ZONE))
    monitor.add_entry_listener(lambda: cues.append(1))
    monitor.process_observations([INSIDE])
    monitor.reset()

    assert monitor.get_stats().frames_processed == 0
    assert not monitor.is_human_detected
    assert monitor.last_observations == []

    monitor.process_observations([INSIDE])
    assert len(cues) == 2
