"""World Engine: hierarchical world documents and an editing surface over them.

Usage:
    from worldengine import EditorSession, serialize_world, validate_world_document

    session = EditorSession()
    await session.update_node("camp", lambda node: {**node, "name": "Base camp"})
    switched = await session.switch_mode("play")
    package = await session.export_document()
    print(package.fingerprint)
"""

__version__ = "0.1.0"

# Document model
from worldengine.core import (
    CURRENT_WORLD_SCHEMA_VERSION,
    ParseError,
    TreeUpdate,
    UnsupportedVersionError,
    ValidationError,
    ValidationResult,
    WorldDocument,
    WorldDocumentError,
    default_world,
    deserialize_world,
    find_node_by_id,
    fingerprint,
    flatten_node_ids,
    serialize_world,
    update_node_by_id,
    validate_world_document,
)

# Editing state
from worldengine.editor import (
    EditorMode,
    EditorSession,
    ExportPackage,
    ModeContext,
    ModePolicy,
    ModeStateMachine,
    SelectionState,
)

__all__ = [
    # Version
    "__version__",
    # Document
    "CURRENT_WORLD_SCHEMA_VERSION",
    "WorldDocument",
    "default_world",
    "ValidationResult",
    "validate_world_document",
    "serialize_world",
    "deserialize_world",
    "fingerprint",
    "WorldDocumentError",
    "ValidationError",
    "ParseError",
    "UnsupportedVersionError",
    "TreeUpdate",
    "find_node_by_id",
    "flatten_node_ids",
    "update_node_by_id",
    # Editor
    "EditorMode",
    "ModeContext",
    "ModePolicy",
    "ModeStateMachine",
    "SelectionState",
    "EditorSession",
    "ExportPackage",
]
