"""Viewport interaction: zoom, pan, rectangle selection and the editing tools."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TypeVar

import numpy as np

from piksy.colors import DEFAULT_THRESHOLD, Color, pixel_color, swap_color
from piksy.frames import Frame, Rect, extract_frames
from piksy.project_file import Animation, AnimationManager, Tool

logger = logging.getLogger(__name__)

MIN_SCALE = 0.1
MAX_SCALE = 10.0
SMOOTHING = 0.1
DRAG_ZOOM_FACTOR = 0.01
DEFAULT_ZOOM_SPEED = 0.1


@dataclass(frozen=True)
class Vec2:
    """A 2D vector of floats."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vec2:
        return Vec2(self.x / divisor, self.y / divisor)


_T = TypeVar("_T", float, Vec2)


def lerp(a: _T, b: _T, t: float) -> _T:
    """Linear interpolation between ``a`` and ``b``."""
    return a + (b - a) * t


@dataclass
class MouseState:
    start_pos: Vec2 = field(default_factory=Vec2)
    current_pos: Vec2 = field(default_factory=Vec2)
    is_pressed: bool = False
    is_dragging: bool = False
    is_panning: bool = False


@dataclass
class ZoomState:
    current_scale: float = 1.0
    target_scale: float = 1.0
    zoom_speed: float = DEFAULT_ZOOM_SPEED


@dataclass
class PanState:
    current_offset: Vec2 = field(default_factory=Vec2)
    target_offset: Vec2 = field(default_factory=Vec2)


class Viewport:
    """The editing canvas: turns mouse and key input into edits of the current animation."""

    def __init__(
        self,
        manager: AnimationManager,
        pixels: np.ndarray | None = None,
        tool: Tool = Tool.SELECT,
    ) -> None:
        self.manager = manager
        self.pixels = pixels
        self.tool = tool
        self.mouse = MouseState()
        self.zoom = ZoomState()
        self.pan = PanState()
        self.selected_frames: set[int] = set()
        self.current_frame = 0
        self.preview_frames: list[Frame] = []
        self.is_previewing = False
        self.replacement_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
        self.sprite_selected = False

    @property
    def sprite_rect(self) -> Rect:
        """Where the texture lies in world coordinates."""
        if self.pixels is None:
            return Rect(0, 0, 0, 0)
        height, width = self.pixels.shape[:2]
        return Rect(0, 0, width, height)

    def _to_world(self, point: Vec2) -> Vec2:
        return point / self.zoom.current_scale - self.pan.current_offset

    def update(
        self, shift_down: bool = False, backspace_down: bool = False, escape_down: bool = False
    ) -> None:
        """Advance smoothing and apply pending selection, commit, delete and cancel actions."""
        self.zoom.current_scale = lerp(self.zoom.current_scale, self.zoom.target_scale, SMOOTHING)
        self.pan.current_offset = lerp(
            self.pan.current_offset, self.pan.target_offset, SMOOTHING
        )

        animation = self.manager.current
        if animation is None:
            return

        if self.tool is Tool.EXTRACT and not self.mouse.is_pressed and self.is_previewing:
            self._commit_preview(animation, append=shift_down)

        if self.mouse.is_pressed and not self.mouse.is_panning:
            self.process_selection()

        if backspace_down and self.selected_frames:
            animation.frames = [
                frame
                for index, frame in enumerate(animation.frames)
                if index not in self.selected_frames
            ]
            self.selected_frames.clear()

        if escape_down:
            if self.tool is Tool.SELECT:
                self.selected_frames.clear()
            elif self.tool is Tool.EXTRACT:
                animation.frames.clear()
                self.preview_frames = []
                self.is_previewing = False
                self.current_frame = 0
                self.selected_frames.clear()

    def _commit_preview(self, animation: Animation, append: bool) -> None:
        if self.preview_frames:
            if not append:
                animation.frames.clear()
            animation.frames.extend(self.preview_frames)
            logger.debug("Committed %d frames to animation", len(self.preview_frames))
        self.preview_frames = []
        self.is_previewing = False

    def mouse_input(
        self,
        hovered: bool,
        pos: Vec2,
        clicked: bool = False,
        down: bool = False,
        wheel: float = 0.0,
        alt_down: bool = False,
        shift_down: bool = False,
    ) -> None:
        """Feed one frame of mouse state, with ``pos`` relative to the viewport image."""
        if not hovered:
            self.mouse.is_dragging = False
            self.mouse.is_pressed = False
            self.mouse.is_panning = False
            return

        self.mouse.current_pos = pos
        if clicked:
            self.mouse.start_pos = pos
            self.mouse.is_pressed = True
            self.handle_click(pos.x, pos.y)

        self.mouse.is_dragging = self.mouse.is_pressed
        self.mouse.is_pressed = down

        self.process_zoom(wheel, alt_down)
        self.process_panning(shift_down)

    def process_zoom(self, wheel: float, alt_down: bool = False) -> None:
        """Change the target scale from the wheel, or from a vertical drag with Alt held."""
        zoom_accel = wheel
        if alt_down:
            drag_y = float(self.mouse.is_pressed) * (
                self.mouse.current_pos.y - self.mouse.start_pos.y
            )
            if abs(drag_y * DRAG_ZOOM_FACTOR) > abs(wheel):
                zoom_accel = drag_y * DRAG_ZOOM_FACTOR

        if zoom_accel != 0.0:
            target = self.zoom.target_scale + zoom_accel * self.zoom.zoom_speed
            self.zoom.target_scale = min(max(target, MIN_SCALE), MAX_SCALE)

    def process_panning(self, shift_down: bool = False) -> None:
        """Move the target offset while dragging with the pan tool or with Shift held."""
        wants_pan = self.tool is Tool.PAN or (not self.mouse.is_dragging and shift_down)
        if self.mouse.is_pressed and wants_pan:
            delta = (self.mouse.current_pos - self.mouse.start_pos) / self.zoom.current_scale
            self.pan.target_offset = self.pan.target_offset + delta
            self.mouse.start_pos = self.mouse.current_pos
            self.mouse.is_panning = True
        else:
            self.mouse.is_panning = False

    def selection_world_rect(self) -> Rect:
        """The dragged rectangle in world (texture) coordinates."""
        start = self._to_world(self.mouse.start_pos)
        end = self._to_world(self.mouse.current_pos)
        return Rect(
            int(min(start.x, end.x)),
            int(min(start.y, end.y)),
            int(abs(end.x - start.x)),
            int(abs(end.y - start.y)),
        )

    def process_selection(self) -> None:
        """Apply the dragged rectangle: preview extraction or select overlapping frames."""
        rect = self.selection_world_rect()
        if self.tool is Tool.EXTRACT:
            if self.pixels is None:
                return
            self.is_previewing = True
            self.preview_frames = extract_frames(
                self.pixels, rect, self.preview_frames, append=False, preview_mode=True
            )
        elif self.tool is Tool.SELECT:
            self.selected_frames.clear()
            animation = self.manager.current
            if animation is None:
                return
            self.selected_frames.update(
                index
                for index, frame in enumerate(animation.frames)
                if frame.rect.intersects(rect)
            )

    def handle_click(self, x: float, y: float) -> None:
        """React to a click at viewport position (``x``, ``y``) with the current tool."""
        world = self._to_world(Vec2(x, y))
        rect = self.sprite_rect
        texture_x = world.x - rect.x
        texture_y = world.y - rect.y

        inside = 0 <= texture_x < rect.w and 0 <= texture_y < rect.h
        if not inside:
            self.sprite_selected = False
            return

        if self.tool is Tool.SELECT:
            self.sprite_selected = True
        elif self.tool is Tool.COLOR_SWAP and self.pixels is not None:
            source = pixel_color(self.pixels, int(texture_x), int(texture_y))
            r, g, b, a = (int(channel * 255) for channel in self.replacement_color)
            swap_color(self.pixels, source, Color(r, g, b, a), DEFAULT_THRESHOLD)