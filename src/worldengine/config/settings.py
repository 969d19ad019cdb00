"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support.

Usage:
    from worldengine.config import EditorSettings, ViewerSettings

    # Load from environment variables (WORLDENGINE_*, VIEWER_*)
    editor_settings = EditorSettings()
    viewer_settings = ViewerSettings()

    # Or override with explicit values
    editor_settings = EditorSettings(wire_indent=4)
"""

from __future__ import annotations

from typing import Literal
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EditorSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for editor sessions.

    Attributes:
        initial_mode: Mode a new session starts in.
        wire_indent: Indentation of exported wire text (None for compact).
        clear_dirty_on_export: Treat a successful export as saving.

    Environment Variables:
        WORLDENGINE_INITIAL_MODE
        WORLDENGINE_WIRE_INDENT
        WORLDENGINE_CLEAR_DIRTY_ON_EXPORT
    """

    model_config = SettingsConfigDict(
        env_prefix="WORLDENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    initial_mode: Literal["edit", "play"] = "edit"
    wire_indent: int | None = Field(default=2, ge=0)
    clear_dirty_on_export: bool = True


class ViewerSettings(BaseSettings):  # type: ignore[misc]
    """Configuration handed to the viewer frame that renders a world.

    Attributes:
        movement_speed: Camera movement multiplier.
        invert_look: Invert vertical mouse look.
        show_instructions: Show the controls overlay on load.
        view_url: Location of the viewer page.

    Environment Variables:
        VIEWER_MOVEMENT_SPEED
        VIEWER_INVERT_LOOK
        VIEWER_SHOW_INSTRUCTIONS
        VIEWER_VIEW_URL
    """

    model_config = SettingsConfigDict(
        env_prefix="VIEWER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    movement_speed: float = Field(default=1.0, gt=0)
    invert_look: bool = False
    show_instructions: bool = True
    view_url: str = "./Resources/world-engine/index.html"

    def build_view_url(self) -> str:
        """Return ``view_url`` with the viewer options as query parameters.

        Existing query parameters other than the viewer's own are kept.
        """
        parts = urlsplit(self.view_url)
        params = {
            "moveSpeed": str(self.movement_speed),
            "invertLook": str(self.invert_look).lower(),
            "showInstructions": str(self.show_instructions).lower(),
        }
        kept = [(key, value) for key, value in parse_qsl(parts.query, keep_blank_values=True) if key not in params]
        query = urlencode(kept + list(params.items()))
        return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))
