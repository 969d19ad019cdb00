"""World document shapes and the built-in default document."""

from worldengine.core.document.defaults import default_world
from worldengine.core.document.models import (
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
)

__all__ = [
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
]
