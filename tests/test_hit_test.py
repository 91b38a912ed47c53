from nether_zone.editing.editor import DragMode, HandleId
from nether_zone.editing.hit_test import HitTarget, handle_positions, hit_test
from nether_zone.geometry.shapes import NormalizedRect

ZONE = NormalizedRect(x=0.3, y=0.3, width=0.4, height=0.4)
CONTAINER = (1000, 500)


def test_handle_positions():
    positions = handle_positions(ZONE, CONTAINER)
    assert len(positions) == 8
    assert positions[HandleId.TOP_LEFT] == (300.0, 150.0)
    assert positions[HandleId.BOTTOM_RIGHT] == (700.0, 350.0)
    assert positions[HandleId.TOP_CENTER][0] == 500.0
    assert positions[HandleId.MIDDLE_LEFT][1] == 250.0


def test_press_on_handle():
    assert hit_test((310, 160), ZONE, CONTAINER) == HitTarget(DragMode.HANDLE, HandleId.TOP_LEFT)
    assert hit_test((700, 250), ZONE, CONTAINER) == HitTarget(DragMode.HANDLE, HandleId.MIDDLE_RIGHT)


def test_handle_hitbox_extends_outside_zone():
    assert hit_test((280, 140), ZONE, CONTAINER).handle is HandleId.TOP_LEFT


def test_press_on_body():
    assert hit_test((500, 250), ZONE, CONTAINER) == HitTarget(DragMode.BODY)
    # Just outside the middle-left hitbox
    assert hit_test((331, 250), ZONE, CONTAINER) == HitTarget(DragMode.BODY)


def test_press_outside():
    assert hit_test((50, 50), ZONE, CONTAINER) is None


def test_nearest_handle_wins_on_small_zone():
    small = NormalizedRect(x=0.45, y=0.45, width=0.1, height=0.1)
    assert hit_test((92, 92), small, (200, 200)).handle is HandleId.TOP_LEFT
    assert hit_test((108, 100), small, (200, 200)).handle is HandleId.MIDDLE_RIGHT


def test_custom_hitbox():
    assert hit_test((280, 140), ZONE, CONTAINER, hitbox_px=10) is None
