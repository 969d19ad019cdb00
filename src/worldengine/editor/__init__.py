"""Editing state: selection, modes and the session that composes them.

Architecture Note:
    editor/ is the stateful layer. Unlike core/ (pure functions over document
    values), it holds the current document, selection and mode and
    coordinates mutations through them.
"""

from worldengine.editor.mode import (
    EditorMode,
    LoggingModeContext,
    ModeContext,
    ModePolicy,
    ModeStateMachine,
)
from worldengine.editor.selection import SelectionState
from worldengine.editor.session import EditorSession, ExportPackage

__all__ = [
    "EditorMode",
    "ModeContext",
    "LoggingModeContext",
    "ModePolicy",
    "ModeStateMachine",
    "SelectionState",
    "EditorSession",
    "ExportPackage",
]
