"""Sprite sheet and animation editing core: frames, colours, export, project files, explorer, console and viewport logic."""

__version__ = "1.0.0"