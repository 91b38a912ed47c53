"""
Mouse Gesture Module
====================

Routes OpenCV mouse events to ZoneEditor drag operations.

Design:
- One gesture at a time: press -> moves -> release
- Deltas are total translation since press, normalized by container size
- Hit-tested target is fixed for the whole gesture

Usage:
    controller = MouseDragController(editor, container_wh=(1280, 720))
    cv2.setMouseCallback("Nether", controller.on_mouse)
"""

from typing import Optional, Tuple

import cv2

from nether_zone.editing.editor import DragMode, ZoneEditor
from nether_zone.editing.hit_test import HANDLE_HITBOX_PX, HitTarget, hit_test


class MouseDragController:
    """
    Translates raw pointer events into editor gestures.

    Thread: cv2 mouse callbacks run on the thread that calls cv2.waitKey.
    """

    def __init__(
        self,
        editor: ZoneEditor,
        container_wh: Tuple[int, int],
        hitbox_px: float = HANDLE_HITBOX_PX,
    ):
        """
        Args:
            editor: Zone editor receiving the gestures
            container_wh: (width, height) of the displayed frame in pixels
            hitbox_px: Side of the square hitbox around each handle
        """
        self.editor = editor
        self.container_wh = container_wh
        self.hitbox_px = hitbox_px

        self._target: Optional[HitTarget] = None
        self._origin: Tuple[int, int] = (0, 0)

    @property
    def active_target(self) -> Optional[HitTarget]:
        """Target of the gesture in progress, if any."""
        return self._target

    def set_container_size(self, container_wh: Tuple[int, int]) -> None:
        """Update the display size (frame resolution may change)."""
        self.container_wh = container_wh

    def on_mouse(self, event: int, x: int, y: int, flags: int = 0, param=None) -> None:
        """cv2.setMouseCallback-compatible handler."""
        if event == cv2.EVENT_LBUTTONDOWN:
            self.press(x, y)
        elif event == cv2.EVENT_MOUSEMOVE:
            self.move(x, y)
        elif event == cv2.EVENT_LBUTTONUP:
            self.release()

    def press(self, x: int, y: int) -> Optional[HitTarget]:
        """Start a gesture if the press hits the zone or a handle."""
        if self._target is not None:
            self.release()

        target = hit_test((x, y), self.editor.current_zone, self.container_wh, self.hitbox_px)
        if target is None:
            return None

        self._target = target
        self._origin = (x, y)
        if target.mode is DragMode.HANDLE:
            self.editor.begin_handle_drag(target.handle)
        else:
            self.editor.begin_body_drag()
        return target

    def move(self, x: int, y: int) -> None:
        """Feed the total translation since press to the editor."""
        if self._target is None:
            return

        width, height = self.container_wh
        delta_x = (x - self._origin[0]) / width
        delta_y = (y - self._origin[1]) / height

        if self._target.mode is DragMode.HANDLE:
            self.editor.update_handle_drag(self._target.handle, delta_x, delta_y)
        else:
            self.editor.update_body_drag(delta_x, delta_y)

    def release(self) -> None:
        """Finish the gesture in progress."""
        if self._target is None:
            return

        if self._target.mode is DragMode.HANDLE:
            self.editor.end_handle_drag()
        else:
            self.editor.end_body_drag()
        self._target = None
