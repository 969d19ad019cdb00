"""Configuration module using Pydantic Settings.

Provides typed configuration for the editor and the viewer collaborator with
environment variable support.

Usage:
    from worldengine.config import EditorSettings, ViewerSettings

    settings = EditorSettings(initial_mode="play")
    viewer = ViewerSettings(movement_speed=2.0)
"""

from worldengine.config.settings import EditorSettings, ViewerSettings

__all__ = [
    "EditorSettings",
    "ViewerSettings",
]
