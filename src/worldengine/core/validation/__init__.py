"""Structural and referential validation of world documents.

Usage:
    result = validate_world_document(doc)
    if not result.valid:
        for error in result.errors:
            print(error)
"""

from worldengine.core.validation.core import (
    validate_asset_reference,
    validate_assets,
    validate_component,
    validate_quaternion,
    validate_scene_node,
    validate_transform,
    validate_vector3,
    validate_wire_value,
    validate_world_document,
)
from worldengine.core.validation.models import NodeContext, ValidationResult

__all__ = [
    "ValidationResult",
    "NodeContext",
    "validate_world_document",
    "validate_assets",
    "validate_scene_node",
    "validate_transform",
    "validate_vector3",
    "validate_quaternion",
    "validate_component",
    "validate_asset_reference",
    "validate_wire_value",
]
