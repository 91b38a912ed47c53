import numpy as np
import pytest

from nether_zone.editing.editor import ZoneEditor
from nether_zone.geometry.shapes import NormalizedRect
from nether_zone.monitor import ZoneMonitor
from nether_zone.pipeline import PipelineBuilder
from nether_zone.pose.types import Orientation

from tests.fakes import FakePoseSource, blank_frame, person

ZONE = NormalizedRect(x=0.3, y=0.0, width=0.4, height=1.0)
INSIDE = person(head=(0.5, 0.1), foot=(0.5, 0.9))


def make_monitor(script):
    return ZoneMonitor(pose_source=FakePoseSource(script), editor=ZoneEditor(ZONE))


def test_builder_requires_source_and_monitor():
    with pytest.raises(ValueError, match="Source"):
        PipelineBuilder().with_monitor(make_monitor([])).build()
    with pytest.raises(ValueError, match="monitor"):
        PipelineBuilder().with_source(0).build()


def test_builder_validation():
    with pytest.raises(FileNotFoundError):
        PipelineBuilder().with_source("missing.mp4").with_monitor(make_monitor([])).build()
    with pytest.raises(ValueError):
        PipelineBuilder().with_source(0).with_monitor(make_monitor([])).with_stride(0).build()
    with pytest.raises(ValueError):
        PipelineBuilder().with_source(0).with_monitor(ZoneMonitor()).build()


def test_source_digit_string_is_camera():
    pipeline = PipelineBuilder().with_source("1").with_monitor(make_monitor([])).build()
    assert pipeline.config.source == 1


def test_process_runs_monitor_on_every_frame(monkeypatch):
    cues = []
    monitor = make_monitor([[], [INSIDE], [INSIDE], [], [INSIDE]])
    monitor.add_entry_listener(lambda: cues.append(1))

    pipeline = (
        PipelineBuilder()
        .with_source(0)
        .with_monitor(monitor)
        .with_display(False)
        .build()
    )
    monkeypatch.setattr(pipeline, "_frames", lambda: iter([blank_frame() for _ in range(5)]))

    stats = pipeline.process()

    assert stats.frames_processed == 5
    assert stats.entries == 2
    assert len(cues) == 2


def test_max_frames(monkeypatch):
    monitor = make_monitor([[]] * 10)
    pipeline = (
        PipelineBuilder()
        .with_source(0)
        .with_monitor(monitor)
        .with_display(False)
        .with_max_frames(3)
        .build()
    )
    monkeypatch.setattr(pipeline, "_frames", lambda: iter([blank_frame() for _ in range(10)]))

    assert pipeline.process().frames_processed == 3


def test_annotated_frame_is_upright():
    monitor = make_monitor([[INSIDE]])
    pipeline = (
        PipelineBuilder()
        .with_source(0)
        .with_monitor(monitor)
        .with_orientation(Orientation.LEFT)
        .with_display(False)
        .build()
    )

    frame = blank_frame(320, 240)
    annotated = pipeline._process_frame(frame)

    assert annotated.shape == (320, 240, 3)
    assert not np.array_equal(annotated, np.zeros_like(annotated))
    assert not frame.any()
    assert monitor.pose_source.calls == [Orientation.LEFT]
