import numpy as np
import pytest

from piksy.frames import Frame, Rect
from piksy.project_file import Animation, AnimationManager, Tool
from piksy.viewport import MAX_SCALE, MIN_SCALE, Vec2, Viewport, lerp


def make_manager(frames=None):
    manager = AnimationManager()
    manager.add_animation("walk", Animation("walk", list(frames or [])))
    manager.set_current_animation("walk")
    return manager


def sheet():
    pixels = np.zeros((40, 40, 4), dtype=np.uint8)
    pixels[5:10, 5:10] = (255, 255, 255, 255)
    pixels[25:30, 25:30] = (255, 255, 255, 255)
    return pixels


def test_lerp_endpoints_floats_and_vectors():
    assert lerp(2.0, 8.0, 0.0) == 2.0
    assert lerp(2.0, 8.0, 1.0) == 8.0
    a, b = Vec2(1.0, -3.0), Vec2(9.0, 5.0)
    assert lerp(a, b, 0.0) == a
    assert lerp(a, b, 1.0) == b


def test_lerp_midpoint_between_values():
    result = lerp(Vec2(0.0, 0.0), Vec2(4.0, 8.0), 0.5)
    assert result == Vec2(2.0, 4.0)


def test_wheel_zoom_clamps_to_limits():
    view = Viewport(make_manager())
    view.process_zoom(1000.0)
    assert view.zoom.target_scale == MAX_SCALE == 10.0
    view.process_zoom(-1000.0)
    assert view.zoom.target_scale == MIN_SCALE == 0.1


def test_wheel_zoom_direction():
    view = Viewport(make_manager())
    before = view.zoom.target_scale
    view.process_zoom(1.0)
    assert view.zoom.target_scale > before
    view.process_zoom(-2.0)
    assert view.zoom.target_scale < before


def test_alt_drag_zoom_uses_vertical_drag():
    view = Viewport(make_manager())
    view.mouse.is_pressed = True
    view.mouse.start_pos = Vec2(0.0, 0.0)
    view.mouse.current_pos = Vec2(0.0, 200.0)
    view.process_zoom(0.0, alt_down=True)
    assert view.zoom.target_scale > 1.0
    unchanged = Viewport(make_manager())
    unchanged.mouse = view.mouse
    unchanged.process_zoom(0.0, alt_down=False)
    assert unchanged.zoom.target_scale == 1.0


def test_update_moves_scale_towards_target():
    view = Viewport(make_manager())
    view.zoom.target_scale = 2.0
    view.update()
    assert 1.0 < view.zoom.current_scale < 2.0
    previous = view.zoom.current_scale
    view.update()
    assert previous < view.zoom.current_scale < 2.0


def test_pan_tool_drag_moves_target_offset():
    view = Viewport(make_manager(), tool=Tool.PAN)
    view.mouse_input(True, Vec2(10.0, 10.0), clicked=True, down=True)
    view.mouse_input(True, Vec2(30.0, 15.0), down=True)
    assert view.pan.target_offset == Vec2(30.0, 15.0) - Vec2(10.0, 10.0)
    assert view.mouse.start_pos == Vec2(30.0, 15.0)
    assert view.mouse.is_panning is True


def test_not_hovered_resets_mouse_flags():
    view = Viewport(make_manager(), tool=Tool.PAN)
    view.mouse_input(True, Vec2(1.0, 1.0), clicked=True, down=True)
    view.mouse_input(False, Vec2(1.0, 1.0))
    assert (view.mouse.is_pressed, view.mouse.is_dragging, view.mouse.is_panning) == (
        False,
        False,
        False,
    )


def test_selection_world_rect_is_normalised():
    view = Viewport(make_manager())
    view.mouse.start_pos = Vec2(10.0, 20.0)
    view.mouse.current_pos = Vec2(5.0, 40.0)
    assert view.selection_world_rect() == Rect(5, 20, 10 - 5, 40 - 20)


def test_select_tool_selects_intersecting_frames():
    frames = [Frame(0, 0, 5, 5), Frame(20, 20, 5, 5), Frame(2, 2, 3, 3)]
    view = Viewport(make_manager(frames), tool=Tool.SELECT)
    view.mouse.start_pos = Vec2(0.0, 0.0)
    view.mouse.current_pos = Vec2(10.0, 10.0)
    view.process_selection()
    assert view.selected_frames == {0, 2}


def test_extract_preview_then_commit_on_release():
    manager = make_manager([Frame(100, 100, 1, 1)])
    view = Viewport(manager, pixels=sheet(), tool=Tool.EXTRACT)
    view.mouse_input(True, Vec2(0.0, 0.0), clicked=True, down=True)
    view.mouse_input(True, Vec2(40.0, 40.0), down=True)
    view.update()
    assert view.is_previewing is True
    assert len(view.preview_frames) == 2
    preview = list(view.preview_frames)

    view.mouse_input(True, Vec2(40.0, 40.0), down=False)
    view.update()
    assert manager.current.frames == preview
    assert view.preview_frames == []
    assert view.is_previewing is False
    assert preview[0].x < preview[1].x


def test_extract_commit_with_shift_appends():
    existing = Frame(100, 100, 1, 1)
    manager = make_manager([existing])
    view = Viewport(manager, pixels=sheet(), tool=Tool.EXTRACT)
    view.mouse_input(True, Vec2(0.0, 0.0), clicked=True, down=True)
    view.mouse_input(True, Vec2(40.0, 40.0), down=True)
    view.update()
    view.mouse_input(True, Vec2(40.0, 40.0), down=False)
    view.update(shift_down=True)
    assert manager.current.frames[0] == existing
    assert len(manager.current.frames) == 3


def test_backspace_removes_selected_frames():
    frames = [Frame(0, 0, 1, 1), Frame(5, 5, 1, 1), Frame(9, 9, 1, 1)]
    manager = make_manager(frames)
    view = Viewport(manager)
    view.selected_frames = {0, 2}
    view.update(backspace_down=True)
    assert manager.current.frames == [Frame(5, 5, 1, 1)]
    assert view.selected_frames == set()


def test_escape_with_extract_clears_frames():
    manager = make_manager([Frame(0, 0, 1, 1)])
    view = Viewport(manager, tool=Tool.EXTRACT)
    view.current_frame = 3
    view.selected_frames = {0}
    view.update(escape_down=True)
    assert manager.current.frames == []
    assert view.current_frame == 0
    assert view.selected_frames == set()


def test_escape_with_select_keeps_frames():
    manager = make_manager([Frame(0, 0, 1, 1)])
    view = Viewport(manager, tool=Tool.SELECT)
    view.selected_frames = {0}
    view.update(escape_down=True)
    assert view.selected_frames == set()
    assert manager.current.frames == [Frame(0, 0, 1, 1)]


def test_click_selects_sprite_inside_and_deselects_outside():
    view = Viewport(make_manager(), pixels=sheet(), tool=Tool.SELECT)
    view.handle_click(3.0, 3.0)
    assert view.sprite_selected is True
    view.handle_click(100.0, 100.0)
    assert view.sprite_selected is False


def test_color_swap_click_replaces_matching_pixels():
    pixels = np.zeros((4, 4, 4), dtype=np.uint8)
    pixels[...] = (10, 20, 30, 255)
    pixels[0, 0] = (1, 2, 3, 4)
    view = Viewport(make_manager(), pixels=pixels, tool=Tool.COLOR_SWAP)
    view.replacement_color = (1.0, 0.0, 0.0, 1.0)
    view.handle_click(2.0, 2.0)
    assert tuple(pixels[3, 3]) == (255, 0, 0, 255)
    assert tuple(pixels[0, 0]) == (1, 2, 3, 4)
    assert int((pixels[..., 0] == 255).sum()) == 15


@pytest.mark.parametrize("tool", [Tool.SELECT, Tool.EXTRACT])
def test_update_without_animation_does_nothing(tool):
    manager = AnimationManager()
    view = Viewport(manager, pixels=sheet(), tool=tool)
    view.selected_frames = {1}
    view.update(backspace_down=True, escape_down=True)
    assert view.selected_frames == {1}
    assert manager.current is None