"""
Nether Zone Monitor
===================

Bounded Context: "Human fully inside zone" detection for live video.

Design Philosophy:
- Separation of Concerns: Geometry, Pose, Analytics, Editing, Rendering separated
- Pure decision logic, stateful edges kept in small explicit state machines
- Pose model is a black box behind a Protocol

Architecture:

    nether_zone/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── shapes.py      # NormalizedRect
    │   └── detector.py    # ZoneDetector (head + feet in zone)
    │
    ├── pose/              # Pose observations and sources
    │   ├── types.py       # Joint, PoseObservation, PoseSource protocol
    │   ├── keypoints.py   # COCO keypoints -> observations, rotation
    │   └── yolo.py        # YoloPoseSource (ultralytics)
    │
    ├── analytics/         # Stateful signal processing
    │   ├── trigger.py     # RisingEdgeTrigger
    │   ├── observable.py  # ObservableValue (published state)
    │   └── counter.py     # MonitorCounter, MonitorStats
    │
    ├── editing/           # Interactive zone editing
    │   ├── editor.py      # ZoneEditor (drag state machine)
    │   ├── hit_test.py    # Pointer -> handle/body
    │   └── gestures.py    # OpenCV mouse callback adapter
    │
    ├── rendering/         # Visualization (stateless drawing)
    │   └── visualizer.py  # ZoneVisualizer
    │
    ├── logging/           # Structured JSON logging
    ├── monitor.py         # ZoneMonitor (per-frame orchestration)
    └── pipeline.py        # Video loop (camera/file, window, output)

Usage:

    # 1. Decide (stateless)
    from nether_zone import ZoneDetector, NormalizedRect

    zone = NormalizedRect(x=0.39, y=0.0, width=0.16, height=1.0)
    in_zone = ZoneDetector.evaluate(observations, zone)

    # 2. Edit
    from nether_zone import ZoneEditor, HandleId

    editor = ZoneEditor(zone)
    editor.begin_handle_drag(HandleId.MIDDLE_RIGHT)
    editor.update_handle_drag(HandleId.MIDDLE_RIGHT, 0.1, 0.0)
    editor.end_handle_drag()

    # 3. Monitor frames (stateful, edge-triggered)
    from nether_zone import ZoneMonitor

    monitor = ZoneMonitor(pose_source, editor)
    monitor.add_entry_listener(audio.play_cue)
    monitor.process_frame(frame, Orientation.UP)

    # 4. Or use Pipeline (high-level orchestration)
    from nether_zone import PipelineBuilder

    pipeline = PipelineBuilder().with_source(0).with_monitor(monitor).build()
    pipeline.process()
"""

# Geometry Layer (immutable, stateless)
from nether_zone.geometry.shapes import DEFAULT_ZONE, MIN_DIMENSION, NormalizedRect
from nether_zone.geometry.detector import CONFIDENCE_THRESHOLD, ZoneDetector

# Pose Layer
from nether_zone.pose.types import (
    Joint,
    JointName,
    Orientation,
    PoseDetectionError,
    PoseObservation,
    PoseSource,
)

# Analytics Layer (stateful)
from nether_zone.analytics.trigger import EdgeState, RisingEdgeTrigger
from nether_zone.analytics.observable import ObservableValue
from nether_zone.analytics.counter import MonitorCounter, MonitorStats

# Editing Layer
from nether_zone.editing.editor import DragMode, DragSession, HandleId, ZoneEditor
from nether_zone.editing.hit_test import HitTarget, hit_test
from nether_zone.editing.gestures import MouseDragController

# Rendering Layer (stateless)
from nether_zone.rendering.visualizer import ZoneVisualizer

# Orchestration
from nether_zone.monitor import ZoneMonitor
from nether_zone.pipeline import ZoneMonitorPipeline, PipelineBuilder

__all__ = [
    # Geometry
    "DEFAULT_ZONE",
    "MIN_DIMENSION",
    "NormalizedRect",
    "CONFIDENCE_THRESHOLD",
    "ZoneDetector",
    # Pose
    "Joint",
    "JointName",
    "Orientation",
    "PoseDetectionError",
    "PoseObservation",
    "PoseSource",
    # Analytics
    "EdgeState",
    "RisingEdgeTrigger",
    "ObservableValue",
    "MonitorCounter",
    "MonitorStats",
    # Editing
    "DragMode",
    "DragSession",
    "HandleId",
    "ZoneEditor",
    "HitTarget",
    "hit_test",
    "MouseDragController",
    # Rendering
    "ZoneVisualizer",
    # Orchestration
    "ZoneMonitor",
    "ZoneMonitorPipeline",
    "PipelineBuilder",
]

__version__ = "1.0.0"
