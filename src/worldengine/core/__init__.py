"""Core document model: stateless building blocks.

Architecture Note:
    core/ contains pure, stateless functions over plain document values.
    Nothing here holds state between calls or mutates its inputs.
    For stateful editing services, see editor/.
"""

from worldengine.core.document import (
    CURRENT_WORLD_SCHEMA_VERSION,
    Asset,
    AssetRef,
    Component,
    Forest,
    Quaternion,
    SceneNode,
    Transform,
    Vector3,
    WorldDocument,
    default_world,
)
from worldengine.core.serialization import (
    ParseError,
    UnsupportedVersionError,
    ValidationError,
    WorldDocumentError,
    deserialize_world,
    fingerprint,
    migrate_document,
    serialize_world,
)
from worldengine.core.tree import (
    NodeUpdater,
    TreeUpdate,
    find_node_by_id,
    flatten_node_ids,
    iter_nodes,
    update_node_by_id,
)
from worldengine.core.validation import ValidationResult, validate_world_document

__all__ = [
    # Document
    "CURRENT_WORLD_SCHEMA_VERSION",
    "WorldDocument",
    "Asset",
    "AssetRef",
    "SceneNode",
    "Transform",
    "Vector3",
    "Quaternion",
    "Component",
    "Forest",
    "default_world",
    # Validation
    "ValidationResult",
    "validate_world_document",
    # Serialization
    "serialize_world",
    "deserialize_world",
    "migrate_document",
    "fingerprint",
    "WorldDocumentError",
    "ValidationError",
    "ParseError",
    "UnsupportedVersionError",
    # Tree
    "NodeUpdater",
    "TreeUpdate",
    "iter_nodes",
    "find_node_by_id",
    "flatten_node_ids",
    "update_node_by_id",
]
