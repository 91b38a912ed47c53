"""
Zone Monitor Pipeline Module
=============================

Bounded Context: Live/recorded video orchestration for zone monitoring.

Design:
- Orchestrator: Combines frame source, monitor, rendering, interactive editing
- Builder pattern: Fluent configuration
- Fail Fast: Validation at build time, not runtime

Dependencies:
- supervision (video file frames, VideoSink)
- opencv-python (camera capture, display window, mouse callbacks)
- nether_zone.monitor (detection + edge trigger)
- nether_zone.rendering (visualizer)
- nether_zone.editing (mouse gestures)
"""

import logging
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

import cv2
import numpy as np
import supervision as sv

from nether_zone.analytics.counter import MonitorStats
from nether_zone.editing.editor import DragMode
from nether_zone.editing.gestures import MouseDragController
from nether_zone.editing.hit_test import HANDLE_HITBOX_PX
from nether_zone.logging import LogEvent, StructuredLogger
from nether_zone.monitor import ZoneMonitor
from nether_zone.pose.keypoints import rotate_upright
from nether_zone.pose.types import Orientation
from nether_zone.rendering.visualizer import ZoneVisualizer
from nether_zone.utils import get_target_run_folder, parse_source

logger = logging.getLogger(__name__)

QUIT_KEYS = {ord("q"), 27}  # q, ESC


@dataclass
class PipelineConfig:
    """
    Pipeline configuration.

    Design:
    - All dependencies injected
    - Validated at construction
    """

    source: Union[int, str]
    monitor: ZoneMonitor
    visualizer: ZoneVisualizer
    orientation: Orientation = Orientation.UP
    stride: int = 1
    display: bool = True
    window_name: str = "Nether"
    handle_hitbox_px: float = HANDLE_HITBOX_PX
    output_folder: Optional[str] = None
    output_fps: int = 15
    max_frames: Optional[int] = None
    draw_joints: bool = True


class ZoneMonitorPipeline:
    """
    Runs the monitor over a camera or video and renders the zone.

    Usage:
        pipeline = (
            PipelineBuilder()
            .with_source(0)
            .with_monitor(monitor)
            .build()
        )

        stats = pipeline.process()
    """

    def __init__(self, config: PipelineConfig):
        """
        Initialize pipeline with configuration.

        Args:
            config: Pipeline configuration (validated)
        """
        self.config = config
        self._validate_config()
        self.events = StructuredLogger(component="pipeline")
        self._stop_requested = False
        self._controller: Optional[MouseDragController] = None

    def _validate_config(self) -> None:
        """Validate configuration (fail fast)."""
        source = self.config.source
        if isinstance(source, str) and not Path(source).exists():
            raise FileNotFoundError(f"Video not found: {source}")

        if self.config.stride < 1:
            raise ValueError(f"stride must be >= 1, got {self.config.stride}")

        if self.config.max_frames is not None and self.config.max_frames < 1:
            raise ValueError(f"max_frames must be >= 1, got {self.config.max_frames}")

        if self.config.monitor.pose_source is None:
            raise ValueError("Pipeline monitor requires a pose source")

    def stop(self) -> None:
        """Request the frame loop to finish after the current frame."""
        self._stop_requested = True

    def process(self) -> MonitorStats:
        """
        Process frames until the source ends, the user quits, or max_frames.

        Returns:
            Final monitor statistics
        """
        cfg = self.config
        sink = None
        output_path = None
        stack = ExitStack()

        if cfg.display:
            cv2.namedWindow(cfg.window_name, cv2.WINDOW_NORMAL)

        self.events.info(
            event=LogEvent.PIPELINE_STARTED,
            message="Zone monitoring started",
            metadata={'source': str(cfg.source), 'orientation': cfg.orientation.value}
        )

        try:
            for frame_idx, frame in enumerate(self._frames()):
                annotated = self._process_frame(frame)

                if cfg.output_folder is not None:
                    if sink is None:
                        sink, output_path = self._open_sink(annotated)
                        stack.enter_context(sink)
                    sink.write_frame(annotated)

                if cfg.display and not self._show(annotated):
                    break

                if self._stop_requested:
                    break
                if cfg.max_frames is not None and frame_idx + 1 >= cfg.max_frames:
                    break
        finally:
            stack.close()
            if cfg.display:
                cv2.destroyWindow(cfg.window_name)

        stats = cfg.monitor.get_stats()
        self.events.info(
            event=LogEvent.PIPELINE_STOPPED,
            message="Zone monitoring completed",
            metadata={'stats': stats.to_dict(), 'output': output_path}
        )
        if output_path:
            logger.info(f"✓ Zone monitoring completed. Output: {output_path}")
        return stats

    def _frames(self) -> Iterator[np.ndarray]:
        """Frames from a video file (supervision) or a camera (OpenCV)."""
        source = self.config.source
        if isinstance(source, str):
            yield from sv.get_video_frames_generator(source, stride=self.config.stride)
            return

        capture = cv2.VideoCapture(source)
        if not capture.isOpened():
            raise RuntimeError(f"Could not open camera {source}")
        try:
            frame_idx = 0
            while True:
                ok, frame = capture.read()
                if not ok:
                    logger.warning(f"Camera {source} returned no frame, stopping")
                    break
                if frame_idx % self.config.stride == 0:
                    yield frame
                frame_idx += 1
        finally:
            capture.release()

    def _process_frame(self, frame: np.ndarray) -> np.ndarray:
        """
        Process a single frame through the pipeline.

        Pipeline stages:
        1. Pose inference + zone detection + edge trigger (monitor)
        2. Visualization (rendering layer)
        """
        cfg = self.config
        monitor = cfg.monitor
        monitor.process_frame(frame, cfg.orientation)

        # Session snapshot first, then zone (both immutable)
        session = monitor.editor.session
        zone = monitor.current_zone

        # Overlay is drawn on the upright frame, the space joints are reported in
        annotated = rotate_upright(frame, cfg.orientation).copy()
        annotated = cfg.visualizer.draw_zone(
            annotated,
            zone,
            is_human_detected=monitor.is_human_detected,
            active_handle=session.active_handle if session.mode is DragMode.HANDLE else None,
        )
        if cfg.draw_joints:
            annotated = cfg.visualizer.draw_joints(
                annotated, monitor.last_observations, monitor.confidence_threshold
            )
        annotated = cfg.visualizer.draw_stats(annotated, monitor.get_stats())
        return annotated

    def _show(self, frame: np.ndarray) -> bool:
        """Display a frame; wire mouse editing on first use. False = quit."""
        cfg = self.config
        height, width = frame.shape[:2]

        if self._controller is None:
            self._controller = MouseDragController(
                cfg.monitor.editor, (width, height), cfg.handle_hitbox_px
            )
            cv2.setMouseCallback(cfg.window_name, self._controller.on_mouse)
        else:
            self._controller.set_container_size((width, height))

        cv2.imshow(cfg.window_name, frame)
        key = cv2.waitKey(1) & 0xFF
        return key not in QUIT_KEYS

    def _open_sink(self, frame: np.ndarray):
        """Open the output video once the first frame size is known."""
        height, width = frame.shape[:2]
        video_info = sv.VideoInfo(width=width, height=height, fps=self.config.output_fps)
        output_path = f"{self.config.output_folder}/zone_monitor_output.mp4"
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        return sv.VideoSink(output_path, video_info), output_path


class PipelineBuilder:
    """
    Builder for ZoneMonitorPipeline.

    Design:
    - Fluent API for construction
    - Fail-fast validation
    - Sensible defaults

    Usage:
        pipeline = (
            PipelineBuilder()
            .with_source("video.mp4")
            .with_monitor(monitor)
            .with_orientation(Orientation.RIGHT)
            .with_display(False)
            .build()
        )
    """

    def __init__(self):
        self._source: Optional[Union[int, str]] = None
        self._monitor: Optional[ZoneMonitor] = None
        self._visualizer: Optional[ZoneVisualizer] = None
        self._orientation: Orientation = Orientation.UP
        self._stride: int = 1
        self._display: bool = True
        self._window_name: str = "Nether"
        self._handle_hitbox_px: float = HANDLE_HITBOX_PX
        self._output_folder: Optional[str] = None
        self._save_video: bool = False
        self._output_fps: int = 15
        self._max_frames: Optional[int] = None
        self._draw_joints: bool = True

    def with_source(self, source: Union[int, str]) -> "PipelineBuilder":
        """Set camera index or video path."""
        self._source = parse_source(source)
        return self

    def with_monitor(self, monitor: ZoneMonitor) -> "PipelineBuilder":
        """Set zone monitor (pose source + editor)."""
        self._monitor = monitor
        return self

    def with_visualizer(self, visualizer: ZoneVisualizer) -> "PipelineBuilder":
        """Set visualizer."""
        self._visualizer = visualizer
        return self

    def with_orientation(self, orientation: Orientation) -> "PipelineBuilder":
        """Set declared frame orientation."""
        self._orientation = Orientation(orientation)
        return self

    def with_stride(self, stride: int) -> "PipelineBuilder":
        """Set frame stride (process every N frames)."""
        self._stride = stride
        return self

    def with_display(self, display: bool, window_name: str = "Nether") -> "PipelineBuilder":
        """Enable/disable the interactive window."""
        self._display = display
        self._window_name = window_name
        return self

    def with_handle_hitbox(self, hitbox_px: float) -> "PipelineBuilder":
        """Set handle hitbox size in pixels."""
        self._handle_hitbox_px = hitbox_px
        return self

    def with_output(self, folder: Optional[str] = None, fps: int = 15) -> "PipelineBuilder":
        """Save the annotated video (default folder: ./runs/nether/<timestamp>)."""
        self._save_video = True
        self._output_folder = folder
        self._output_fps = fps
        return self

    def with_max_frames(self, max_frames: Optional[int]) -> "PipelineBuilder":
        """Stop after N processed frames."""
        self._max_frames = max_frames
        return self

    def with_joints(self, draw_joints: bool) -> "PipelineBuilder":
        """Enable/disable joint overlay."""
        self._draw_joints = draw_joints
        return self

    def build(self) -> ZoneMonitorPipeline:
        """
        Build the pipeline.

        Raises:
            ValueError: If required configuration is missing
        """
        if self._source is None:
            raise ValueError("Source is required (use .with_source())")
        if self._monitor is None:
            raise ValueError("Zone monitor is required (use .with_monitor())")

        # Defaults
        if self._visualizer is None:
            self._visualizer = ZoneVisualizer()
        if self._save_video and self._output_folder is None:
            self._output_folder = get_target_run_folder(application_name="nether")

        config = PipelineConfig(
            source=self._source,
            monitor=self._monitor,
            visualizer=self._visualizer,
            orientation=self._orientation,
            stride=self._stride,
            display=self._display,
            window_name=self._window_name,
            handle_hitbox_px=self._handle_hitbox_px,
            output_folder=self._output_folder,
            output_fps=self._output_fps,
            max_frames=self._max_frames,
            draw_joints=self._draw_joints,
        )

        return ZoneMonitorPipeline(config)
