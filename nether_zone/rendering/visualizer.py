"""
Zone Visualizer Module
======================

Pure visualization layer for the zone, its handles and pose joints.

Design:
- Stateless rendering (pure functions)
- No business logic
- Configurable styles
- Uses supervision drawing utilities (OpenCV for circles)

Dependencies:
- supervision (draw utilities, Color, Rect, Point)
- opencv-python (handle and joint circles)
- numpy (arrays)
"""

from typing import Iterable, Optional

import cv2
import numpy as np
import supervision as sv

from nether_zone.analytics.counter import MonitorStats
from nether_zone.editing.editor import HandleId
from nether_zone.editing.hit_test import handle_positions
from nether_zone.geometry.detector import CONFIDENCE_THRESHOLD, ZoneDetector
from nether_zone.geometry.shapes import NormalizedRect
from nether_zone.pose.types import PoseObservation

PURPLE = sv.Color(r=175, g=82, b=222)
GREEN = sv.Color(r=0, g=255, b=0)
WHITE = sv.Color(r=255, g=255, b=255)
BLACK = sv.Color(r=0, g=0, b=0)


class ZoneVisualizer:
    """
    Stateless visualizer for the detection zone.

    Design Philosophy:
    - SRP: Only draws, doesn't compute
    - Outline color reflects the detection flag (green = human in zone)
    - Handles drawn larger while being dragged

    Usage:
        visualizer = ZoneVisualizer()

        frame = visualizer.draw_zone(frame, zone, is_human_detected=True)
        frame = visualizer.draw_joints(frame, observations)
        frame = visualizer.draw_stats(frame, stats)
    """

    def __init__(
        self,
        zone_color: sv.Color = PURPLE,
        detected_color: sv.Color = GREEN,
        handle_color: sv.Color = WHITE,
        text_color: sv.Color = WHITE,
        text_background_color: sv.Color = BLACK,
        thickness: int = 4,
        handle_radius: int = 8,
        active_handle_radius: int = 30,
        text_scale: float = 0.6,
        text_thickness: int = 2,
        text_padding: int = 10,
        opacity: float = 0.1,
    ):
        """
        Initialize visualizer with style configuration.

        Args:
            zone_color: Outline/fill color while no human is detected
            detected_color: Outline color while a human is detected
            handle_color: Fill color of the resize handles
            text_color: Color for text labels
            text_background_color: Background color for text
            thickness: Outline thickness
            handle_radius: Radius of idle handles
            active_handle_radius: Radius of the handle being dragged
            text_scale: Scale factor for text
            text_thickness: Thickness for text
            text_padding: Padding for text background
            opacity: Opacity for zone fill (0-1)
        """
        self.zone_color = zone_color
        self.detected_color = detected_color
        self.handle_color = handle_color
        self.text_color = text_color
        self.text_background_color = text_background_color
        self.thickness = thickness
        self.handle_radius = handle_radius
        self.active_handle_radius = active_handle_radius
        self.text_scale = text_scale
        self.text_thickness = text_thickness
        self.text_padding = text_padding
        self.opacity = opacity

    def draw_zone(
        self,
        frame: np.ndarray,
        zone: NormalizedRect,
        is_human_detected: bool = False,
        active_handle: Optional[HandleId] = None,
        draw_handles: bool = True,
    ) -> np.ndarray:
        """
        Draw the zone rectangle (and its handles) on the frame.

        Args:
            frame: Video frame to draw on
            zone: Zone snapshot
            is_human_detected: Selects the outline color
            active_handle: Handle drawn enlarged, if any
            draw_handles: Whether to draw the 8 handles

        Returns:
            Frame with zone drawn
        """
        height, width = frame.shape[:2]
        x, y, w, h = zone.to_pixels((width, height))
        rect = sv.Rect(x=x, y=y, width=w, height=h)

        frame = sv.draw_filled_rectangle(
            scene=frame,
            rect=rect,
            color=self.zone_color,
            opacity=self.opacity,
        )

        outline = self.detected_color if is_human_detected else self.zone_color
        frame = sv.draw_rectangle(
            scene=frame,
            rect=rect,
            color=outline,
            thickness=self.thickness,
        )

        if draw_handles:
            frame = self.draw_handles(frame, zone, active_handle)

        return frame

    def draw_handles(
        self,
        frame: np.ndarray,
        zone: NormalizedRect,
        active_handle: Optional[HandleId] = None,
    ) -> np.ndarray:
        """Draw the 8 resize handles."""
        height, width = frame.shape[:2]
        for handle, (hx, hy) in handle_positions(zone, (width, height)).items():
            radius = self.active_handle_radius if handle is active_handle else self.handle_radius
            center = (int(round(hx)), int(round(hy)))
            cv2.circle(frame, center, radius, self.handle_color.as_bgr(), -1)
            cv2.circle(frame, center, radius, self.zone_color.as_bgr(), 2)
        return frame

    def draw_joints(
        self,
        frame: np.ndarray,
        observations: Iterable[PoseObservation],
        confidence_threshold: float = CONFIDENCE_THRESHOLD,
        radius: int = 4,
    ) -> np.ndarray:
        """
        Draw present joints of every observation.

        Joints are converted to the overlay convention the same way the
        detector converts them, so what is drawn is what is tested.
        """
        height, width = frame.shape[:2]
        color = self.detected_color.as_bgr()
        for observation in observations:
            for joint in observation:
                if not ZoneDetector.is_present(joint, confidence_threshold):
                    continue
                point = ZoneDetector.usable_overlay_point(joint)
                if point is None:
                    continue
                ox, oy = point
                center = (int(round(ox * width)), int(round(oy * height)))
                cv2.circle(frame, center, radius, color, -1)
        return frame

    def draw_stats(
        self,
        frame: np.ndarray,
        stats: MonitorStats,
    ) -> np.ndarray:
        """Render the statistics line in the top-left corner."""
        return sv.draw_text(
            scene=frame,
            text=str(stats),
            text_anchor=sv.Point(x=150, y=25),
            text_color=self.text_color,
            text_scale=self.text_scale,
            text_thickness=self.text_thickness,
            text_padding=self.text_padding,
            background_color=self.text_background_color,
        )
