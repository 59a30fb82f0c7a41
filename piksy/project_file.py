"""Saving and loading the editor's project state as JSON."""

from __future__ import annotations

import json
import logging
import os
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any

from piksy.frames import Frame

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
_FRAME_KEYS = ("x", "y", "w", "h")


class Tool(IntEnum):
    """Editing tools; stored in project files by number."""

    SELECT = 0
    EXTRACT = 1
    PAN = 2
    COLOR_SWAP = 3


@dataclass
class Animation:
    name: str
    frames: list[Frame] = field(default_factory=list)


class AnimationManager:
    """Named animations and the one currently being edited."""

    def __init__(self) -> None:
        self.animations: dict[str, Animation] = {}
        self._current: str | None = None

    @property
    def current(self) -> Animation | None:
        return self.animations.get(self._current) if self._current is not None else None

    def add_animation(self, name: str, animation: Animation) -> None:
        self.animations[name] = animation

    def set_current_animation(self, name: str) -> None:
        if name not in self.animations:
            raise KeyError(f"unknown animation: {name}")
        self._current = name

    def clear(self) -> None:
        self.animations.clear()
        self._current = None


@dataclass
class ProjectState:
    tool: Tool = Tool.SELECT
    texture_path: str | None = None


class ProjectFileError(Exception):
    """Raised when a project file cannot be written or read."""


def _merge_patch(target: Any, patch: Any) -> Any:
    if not isinstance(patch, dict):
        return patch
    result = dict(target) if isinstance(target, dict) else {}
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = _merge_patch(result.get(key), value)
    return result


def dump_project(
    state: ProjectState, manager: AnimationManager, timestamp: str | None = None
) -> dict[str, Any]:
    """Build the JSON document describing the project."""
    if timestamp is None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    animations = []
    for name, animation in manager.animations.items():
        frames = []
        for frame in animation.frames:
            frame_json: dict[str, Any] = {"x": frame.x, "y": frame.y, "w": frame.w, "h": frame.h}
            if frame.data:
                frame_json = _merge_patch(frame_json, frame.data)
            frames.append(frame_json)
        animations.append({"name": name, "frames": frames})

    document: dict[str, Any] = {
        "metadata": {"version": FORMAT_VERSION, "timestamp": timestamp},
        "tool": int(state.tool),
        "animations": animations,
    }
    if manager.current is not None:
        document["current_animation"] = manager.current.name
    texture: dict[str, Any] = {}
    if state.texture_path is not None:
        texture["path"] = state.texture_path
    document["sprite"] = [{"texture": texture}]
    return document


def _int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {value!r}")
    return value


def _frame(frame_json: dict[str, Any]) -> Frame:
    x, y, w, h = (_int(frame_json[key]) for key in _FRAME_KEYS)
    extra = {k: v for k, v in frame_json.items() if k not in _FRAME_KEYS}
    return Frame(x, y, w, h, extra)


def apply_project(data: Any, state: ProjectState, manager: AnimationManager) -> None:
    """Apply a project document to the state and animation manager."""
    try:
        if not isinstance(data, dict):
            raise TypeError("project document must be an object")
        metadata = data.get("metadata")
        if isinstance(metadata, dict):
            if "version" in metadata:
                logger.info("Loaded save file version: %d", _int(metadata["version"]))
            if "timestamp" in metadata:
                logger.info("Loaded save file timestamp: %s", metadata["timestamp"])

        if "tool" in data:
            state.tool = Tool(_int(data["tool"]))

        if "animations" in data:
            manager.clear()
            for anim_json in data["animations"]:
                name = anim_json["name"]
                if not isinstance(name, str):
                    raise TypeError("animation name must be a string")
                frames = [_frame(frame_json) for frame_json in anim_json["frames"]]
                manager.add_animation(name, Animation(name, frames))

        if "current_animation" in data:
            manager.set_current_animation(data["current_animation"])

        sprites = data.get("sprite")
        if sprites:
            texture = sprites[0]["texture"]
            if "path" in texture:
                path = texture["path"]
                if not isinstance(path, str):
                    raise TypeError("texture path must be a string")
                state.texture_path = path
                logger.info("Loaded texture from path: %s", path)
    except (KeyError, TypeError, ValueError, IndexError) as exc:
        raise ProjectFileError(f"Invalid project data: {exc}") from exc


def save_project(
    path: str | os.PathLike, state: ProjectState, manager: AnimationManager
) -> Path:
    """Write the project atomically and keep a ``.bak`` copy next to it."""
    target = Path(path)
    logger.info("Saving the application state...")
    document = dump_project(state, manager)
    temp_path = target.with_suffix(".tmp")
    backup_path = target.with_suffix(".bak")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        temp_path.write_text(json.dumps(document, indent=4, sort_keys=True, ensure_ascii=False),
                             encoding="utf-8")
        logger.info("Temporary save file created at: %s", temp_path)
        os.replace(temp_path, target)
        logger.info("Save file created at: %s", target)
        shutil.copyfile(target, backup_path)
        logger.info("Backup created at: %s", backup_path)
    except OSError as exc:
        raise ProjectFileError(f"Failed to save: {exc}") from exc
    return target


def load_project(path: str | os.PathLike, state: ProjectState, manager: AnimationManager) -> None:
    """Read a project file and apply it."""
    source = Path(path)
    logger.info("Loading the application state...")
    if not source.exists():
        raise ProjectFileError(f"Save file does not exist (path: {source})")
    try:
        with source.open(encoding="utf-8") as stream:
            document = json.load(stream)
    except json.JSONDecodeError as exc:
        raise ProjectFileError(f"JSON error during load: {exc}") from exc
    except OSError as exc:
        raise ProjectFileError(f"Failed to open the load file: {exc}") from exc
    apply_project(document, state, manager)