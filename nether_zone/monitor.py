"""
Zone Monitor Module
===================

Bounded Context: Per-frame orchestration of zone detection.

Design:
- Pose source injected (PoseSource protocol), failures degrade to "no people"
- Zone read from the editor as an immutable snapshot each frame
- Detection flag published as observable state
- Rising edge notifies entry listeners (audio); their errors are swallowed

Flow per frame:
    pose source -> ZoneDetector.evaluate(observations, zone)
                -> detection state -> RisingEdgeTrigger -> entry listeners
"""

from typing import Callable, List, Optional

import numpy as np

from nether_zone.analytics.counter import MonitorCounter, MonitorStats
from nether_zone.analytics.observable import ObservableValue
from nether_zone.analytics.trigger import RisingEdgeTrigger
from nether_zone.editing.editor import ZoneEditor
from nether_zone.geometry.detector import CONFIDENCE_THRESHOLD, ZoneDetector
from nether_zone.geometry.shapes import NormalizedRect
from nether_zone.logging import LogEvent, StructuredLogger
from nether_zone.pose.types import Orientation, PoseDetectionError, PoseObservation, PoseSource


class ZoneMonitor:
    """
    Decides, frame by frame, whether a human stands fully inside the zone.

    Thread Safety:
    - process_frame / process_observations must be called sequentially,
      in frame order (the edge trigger is order-sensitive)
    - The zone may be edited concurrently through the editor

    Usage:
        editor = ZoneEditor()
        monitor = ZoneMonitor(pose_source, editor)
        monitor.add_entry_listener(audio.play_cue)

        for frame in frames:
            monitor.process_frame(frame, Orientation.UP)

        stats = monitor.get_stats()
    """

    def __init__(
        self,
        pose_source: Optional[PoseSource] = None,
        editor: Optional[ZoneEditor] = None,
        confidence_threshold: float = CONFIDENCE_THRESHOLD,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            pose_source: Pose estimator (required for process_frame only)
            editor: Zone owner (default: editor with the default zone)
            confidence_threshold: Joint presence threshold
            logger: Structured logger (default: component "monitor")
        """
        self.pose_source = pose_source
        self.editor = editor or ZoneEditor()
        self.confidence_threshold = confidence_threshold
        self.logger = logger or StructuredLogger(component="monitor")

        self._detected = ObservableValue(False, error_handler=self._on_observer_error)
        self._entry_listeners: List[Callable[[], None]] = []
        self.trigger = RisingEdgeTrigger(on_rising_edge=self._notify_entry)
        self.counter = MonitorCounter()

        self._frame_id = 0
        self._last_observations: List[PoseObservation] = []

    # ===== Published state =====

    @property
    def is_human_detected(self) -> bool:
        """Detector output for the last processed frame."""
        return self._detected.value

    @property
    def current_zone(self) -> NormalizedRect:
        """Zone currently used for detection."""
        return self.editor.current_zone

    @property
    def last_observations(self) -> List[PoseObservation]:
        """Observations of the last processed frame (for rendering)."""
        return list(self._last_observations)

    def subscribe_detection(self, observer: Callable[[bool, bool], None]) -> Callable[[], None]:
        """
        Observe changes of the detection flag.

        Args:
            observer: Called with (old, new)

        Returns:
            Unsubscribe function
        """
        return self._detected.subscribe(observer)

    def add_entry_listener(self, listener: Callable[[], None]) -> None:
        """Register a no-argument callback fired once per rising edge."""
        self._entry_listeners.append(listener)

    def get_stats(self) -> MonitorStats:
        """Immutable statistics snapshot."""
        return self.counter.get_stats()

    # ===== Frame processing =====

    def process_frame(self, image: np.ndarray, orientation: Orientation = Orientation.UP) -> bool:
        """
        Run pose inference on a frame and update the detection state.

        A failing pose source is treated as a frame without people.

        Returns:
            Human-in-zone signal for this frame
        """
        if self.pose_source is None:
            raise ValueError("process_frame requires a pose source (use process_observations)")

        try:
            observations = self.pose_source.infer(image, orientation)
        except PoseDetectionError as e:
            self.counter.record_pose_failure()
            self.logger.warning(
                event=LogEvent.POSE_INFERENCE_FAILED,
                message="Pose inference failed, treating frame as empty",
                metadata={'frame_id': self._frame_id, 'error': str(e)}
            )
            observations = []
        else:
            self.logger.debug(
                event=LogEvent.POSE_INFERENCE_COMPLETED,
                message=f"{len(observations)} person(s) detected",
                metadata={'frame_id': self._frame_id, 'orientation': Orientation(orientation).value}
            )

        return self.process_observations(observations)

    def process_observations(self, observations: List[PoseObservation]) -> bool:
        """
        Update the detection state from already computed observations.

        Returns:
            Human-in-zone signal for this frame
        """
        frame_id = self._frame_id
        self._frame_id += 1

        zone = self.editor.current_zone
        in_zone = ZoneDetector.evaluate(observations, zone, self.confidence_threshold)
        was_detected = self._detected.value

        self._last_observations = list(observations)
        self._detected.set(in_zone)
        rising_edge = self.trigger.update(in_zone)
        self.counter.update(people=len(observations), in_zone=in_zone, rising_edge=rising_edge)

        if rising_edge:
            self.logger.info(
                event=LogEvent.ZONE_ENTERED,
                message="Human entered zone",
                metadata={'frame_id': frame_id, 'zone': zone.to_dict(), 'people': len(observations)}
            )
        elif was_detected and not in_zone:
            self.logger.info(
                event=LogEvent.ZONE_EXITED,
                message="Zone clear",
                metadata={'frame_id': frame_id}
            )

        return in_zone

    def reset(self) -> None:
        """Forget edge state and statistics (zone is kept)."""
        self.trigger.reset()
        self.counter.reset()
        self._detected.set(False)
        self._last_observations = []
        self._frame_id = 0

    # ===== Collaborator boundary =====

    def _notify_entry(self) -> None:
        for listener in list(self._entry_listeners):
            try:
                listener()
            except Exception as e:
                self.logger.error(
                    event=LogEvent.AUDIO_PLAYBACK_FAILED,
                    message="Entry listener raised",
                    exc_info=e
                )

    def _on_observer_error(self, error: Exception) -> None:
        self.logger.error(
            event=LogEvent.OBSERVER_ERROR,
            message="Detection observer raised",
            exc_info=error
        )
