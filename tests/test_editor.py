import random

import pytest

from nether_zone.editing.editor import (
    DragMode,
    HandleId,
    ZoneEditor,
    resize_candidate,
    validate_candidate,
)
from nether_zone.geometry.shapes import DEFAULT_ZONE, MIN_DIMENSION, NormalizedRect

SQUARE = NormalizedRect(x=0.3, y=0.3, width=0.4, height=0.4)


def assert_rect(rect, x, y, width, height):
    assert rect.x == pytest.approx(x)
    assert rect.y == pytest.approx(y)
    assert rect.width == pytest.approx(width)
    assert rect.height == pytest.approx(height)


def assert_invariants(rect):
    assert rect.width > MIN_DIMENSION
    assert rect.height > MIN_DIMENSION
    assert 0.0 <= rect.x <= 1.0
    assert 0.0 <= rect.y <= 1.0
    assert rect.x + rect.width <= 1.0 + 1e-9
    assert rect.y + rect.height <= 1.0 + 1e-9


def test_middle_right_clamped_to_unit_square():
    editor = ZoneEditor(DEFAULT_ZONE)
    editor.begin_handle_drag(HandleId.MIDDLE_RIGHT)
    assert editor.update_handle_drag(HandleId.MIDDLE_RIGHT, 0.5, 0.0)
    editor.end_handle_drag()

    assert_rect(editor.current_zone, 0.39, 0.0, 0.61, 1.0)


@pytest.mark.parametrize("handle, expected", [
    (HandleId.TOP_LEFT, (0.35, 0.35, 0.35, 0.35)),
    (HandleId.TOP_CENTER, (0.30, 0.35, 0.40, 0.35)),
    (HandleId.TOP_RIGHT, (0.30, 0.35, 0.45, 0.35)),
    (HandleId.MIDDLE_LEFT, (0.35, 0.30, 0.35, 0.40)),
    (HandleId.MIDDLE_RIGHT, (0.30, 0.30, 0.45, 0.40)),
    (HandleId.BOTTOM_LEFT, (0.35, 0.30, 0.35, 0.45)),
    (HandleId.BOTTOM_CENTER, (0.30, 0.30, 0.40, 0.45)),
    (HandleId.BOTTOM_RIGHT, (0.30, 0.30, 0.45, 0.45)),
])
def test_handle_edge_adjustments(handle, expected):
    editor = ZoneEditor(SQUARE)
    editor.begin_handle_drag(handle)
    editor.update_handle_drag(handle, 0.05, 0.05)

    assert_rect(editor.current_zone, *expected)


def test_candidate_too_narrow_is_rejected():
    editor = ZoneEditor(DEFAULT_ZONE)
    editor.begin_handle_drag(HandleId.MIDDLE_RIGHT)

    # 0.16 - 0.13 = 0.03
    assert not editor.update_handle_drag(HandleId.MIDDLE_RIGHT, -0.13, 0.0)
    assert editor.current_zone == DEFAULT_ZONE


def test_rejected_candidate_keeps_last_committed_zone():
    editor = ZoneEditor(DEFAULT_ZONE)
    editor.begin_handle_drag(HandleId.MIDDLE_RIGHT)
    assert editor.update_handle_drag(HandleId.MIDDLE_RIGHT, -0.05, 0.0)
    committed = editor.current_zone

    assert not editor.update_handle_drag(HandleId.MIDDLE_RIGHT, -0.13, 0.0)
    assert editor.current_zone == committed
    assert committed.width == pytest.approx(0.11)


def test_minimum_size_is_exclusive():
    assert validate_candidate((0.1, 0.1, MIN_DIMENSION, 0.5)) is None
    assert validate_candidate((0.1, 0.1, 0.5, MIN_DIMENSION)) is None
    assert validate_candidate((0.1, 0.1, 0.06, 0.06)) is not None


def test_updates_are_relative_to_drag_start():
    editor = ZoneEditor(SQUARE)
    editor.begin_handle_drag(HandleId.BOTTOM_RIGHT)
    editor.update_handle_drag(HandleId.BOTTOM_RIGHT, 0.1, 0.1)
    editor.update_handle_drag(HandleId.BOTTOM_RIGHT, 0.1, 0.1)

    assert_rect(editor.current_zone, 0.3, 0.3, 0.5, 0.5)


def test_position_is_clamped_before_size():
    editor = ZoneEditor(SQUARE)
    editor.begin_handle_drag(HandleId.TOP_LEFT)
    editor.update_handle_drag(HandleId.TOP_LEFT, -0.5, -0.5)

    # x, y clamp to 0; width/height then bounded by 1 - 0
    assert_rect(editor.current_zone, 0.0, 0.0, 0.9, 0.9)


def test_resize_candidate_is_unvalidated():
    x, y, width, height = resize_candidate(SQUARE, HandleId.MIDDLE_LEFT, 0.6, 0.0)
    assert x == pytest.approx(0.9)
    assert width == pytest.approx(-0.2)


def test_body_drag_translates():
    editor = ZoneEditor(SQUARE)
    editor.begin_body_drag()
    editor.update_body_drag(0.1, -0.2)
    editor.end_body_drag()

    assert_rect(editor.current_zone, 0.4, 0.1, 0.4, 0.4)


def test_body_drag_clamps_inside_unit_square():
    editor = ZoneEditor(DEFAULT_ZONE)
    editor.begin_body_drag()
    editor.update_body_drag(0.9, 0.5)
    assert_rect(editor.current_zone, 0.84, 0.0, 0.16, 1.0)

    editor.update_body_drag(-2.0, -2.0)
    assert_rect(editor.current_zone, 0.0, 0.0, 0.16, 1.0)


def test_session_lifecycle():
    editor = ZoneEditor(SQUARE)
    assert editor.session.mode is DragMode.IDLE

    editor.begin_handle_drag(HandleId.TOP_RIGHT)
    assert editor.session.mode is DragMode.HANDLE
    assert editor.session.active_handle is HandleId.TOP_RIGHT
    assert editor.session.initial_rect == SQUARE

    editor.end_handle_drag()
    assert not editor.session.is_active
    assert editor.session.active_handle is None


def test_update_without_begin_starts_session():
    editor = ZoneEditor(SQUARE)
    assert editor.update_body_drag(0.1, 0.0)
    assert editor.session.mode is DragMode.BODY
    assert_rect(editor.current_zone, 0.4, 0.3, 0.4, 0.4)


def test_observers_see_commits():
    changes = []
    editor = ZoneEditor(SQUARE)
    editor.subscribe(lambda old, new: changes.append((old, new)))

    editor.begin_handle_drag(HandleId.BOTTOM_CENTER)
    editor.update_handle_drag(HandleId.BOTTOM_CENTER, 0.0, 0.1)
    editor.update_handle_drag(HandleId.BOTTOM_CENTER, 0.0, -0.38)  # rejected
    editor.end_handle_drag()

    assert len(changes) == 1
    old, new = changes[0]
    assert old == SQUARE
    assert new.height == pytest.approx(0.5)


def test_observer_errors_do_not_block_edits():
    editor = ZoneEditor(SQUARE)

    def broken(old, new):
        raise RuntimeError("renderer gone")

    editor.subscribe(broken)
    assert editor.update_body_drag(0.1, 0.0)
    assert editor.current_zone.x == pytest.approx(0.4)


def test_set_zone():
    editor = ZoneEditor()
    editor.set_zone(SQUARE)
    assert editor.current_zone == SQUARE


def test_random_drags_keep_invariants():
    rng = random.Random(1234)
    editor = ZoneEditor(DEFAULT_ZONE)
    handles = list(HandleId)

    for _ in range(200):
        if rng.random() < 0.3:
            editor.begin_body_drag()
            for _ in range(5):
                editor.update_body_drag(rng.uniform(-1.5, 1.5), rng.uniform(-1.5, 1.5))
                assert_invariants(editor.current_zone)
            editor.end_body_drag()
        else:
            handle = rng.choice(handles)
            editor.begin_handle_drag(handle)
            for _ in range(5):
                editor.update_handle_drag(handle, rng.uniform(-1.5, 1.5), rng.uniform(-1.5, 1.5))
                assert_invariants(editor.current_zone)
            editor.end_handle_drag()
