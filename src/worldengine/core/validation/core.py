"""Validator for world documents and their substructures.

Every function here is pure and total: it never raises for malformed input
and returns the full list of errors rather than stopping at the first one.
Records are ``dict``s with string keys and sequences are ``list``s, exactly
what the JSON wire format decodes to, so a valid document survives a
serialize/deserialize round trip unchanged.
"""

from __future__ import annotations

import math
from typing import Any

from worldengine.core.validation.models import NodeContext, ValidationResult

_VECTOR3_KEYS = ("x", "y", "z")
_QUATERNION_KEYS = ("x", "y", "z", "w")


def _is_record(value: Any) -> bool:
    return isinstance(value, dict)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, list)


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _wire_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def validate_wire_value(value: Any, path: str = "", _open: frozenset[int] = frozenset()) -> list[str]:
    """Check that a value is carried unchanged by the JSON wire format.

    Accepts ``None``, ``bool``, ``int``, finite ``float``, ``str``, ``list``
    and ``dict`` with string keys, recursively. Opaque payloads such as
    ``metadata`` and ``components[i].data`` get no other content checks.

    Args:
        value: Any part of a document.
        path: Path of ``value``; empty for the document itself.

    Returns:
        One error per value the wire format would drop, rewrite or reject.
    """
    label = path or "World"
    if value is None or isinstance(value, bool | int | str):
        return []
    if isinstance(value, float):
        return [] if math.isfinite(value) else [f"{label} must be a finite number"]
    if isinstance(value, list | dict):
        if id(value) in _open:
            return [f"{label} must not contain itself"]
        _open = _open | {id(value)}
    if isinstance(value, list):
        errors: list[str] = []
        for index, item in enumerate(value):
            errors.extend(validate_wire_value(item, f"{path}[{index}]", _open))
        return errors
    if isinstance(value, dict):
        errors = []
        for key, item in value.items():
            if not isinstance(key, str):
                errors.append(f"{label} key {key!r} must be a string")
                continue
            errors.extend(validate_wire_value(item, _wire_path(path, key), _open))
        return errors
    return [f"{label} must be a JSON value, not {type(value).__name__}"]


def _validate_components(value: Any, path: str, keys: tuple[str, ...], label: str) -> list[str]:
    if not _is_record(value):
        return [f"{path} must be an object with {label} numbers"]
    return [f"{path}.{key} must be a finite number" for key in keys if not _is_finite_number(value.get(key))]


def validate_vector3(value: Any, path: str) -> list[str]:
    """Check a ``{x, y, z}`` record of finite numbers."""
    return _validate_components(value, path, _VECTOR3_KEYS, "x, y, and z")


def validate_quaternion(value: Any, path: str) -> list[str]:
    """Check a ``{x, y, z, w}`` record of finite numbers."""
    return _validate_components(value, path, _QUATERNION_KEYS, "x, y, z, and w")


def validate_transform(value: Any, path: str) -> list[str]:
    """Check each present transform field independently.

    Absent fields are not reported and not filled in.
    """
    if not _is_record(value):
        return [f"{path} must be an object"]
    errors: list[str] = []
    if "position" in value:
        errors.extend(validate_vector3(value["position"], f"{path}.position"))
    if "rotation" in value:
        errors.extend(validate_quaternion(value["rotation"], f"{path}.rotation"))
    if "scale" in value:
        errors.extend(validate_vector3(value["scale"], f"{path}.scale"))
    return errors


def validate_component(component: Any, path: str) -> list[str]:
    """Check a component's open ``type`` tag and the shape of its payload."""
    if not _is_record(component):
        return [f"{path} must be an object"]
    errors: list[str] = []
    if not _is_non_empty_string(component.get("type")):
        errors.append(f"{path}.type must be a non-empty string")
    if "data" in component and not _is_record(component["data"]):
        errors.append(f"{path}.data must be an object when present")
    return errors


def validate_asset_reference(asset_ref: Any, path: str, asset_ids: frozenset[str]) -> list[str]:
    """Check that a node's asset reference names a known asset.

    Args:
        asset_ref: The node's ``asset`` value.
        path: Path of the reference, e.g. ``nodes[0].asset``.
        asset_ids: Ids resolvable in the owning document.

    Returns:
        Errors found, empty if the reference is valid.
    """
    if not _is_record(asset_ref):
        return [f"{path} must be an object"]
    errors: list[str] = []
    asset_id = asset_ref.get("assetId")
    if not _is_non_empty_string(asset_id):
        errors.append(f"{path}.assetId must be a non-empty string")
    elif asset_id not in asset_ids:
        errors.append(f"{path}.assetId references missing asset '{asset_id}'")
    if "options" in asset_ref and not _is_record(asset_ref["options"]):
        errors.append(f"{path}.options must be an object when present")
    return errors


def validate_scene_node(node: Any, path: str, context: NodeContext) -> list[str]:
    """Validate a node and, recursively, its children.

    The node's id is registered in ``context.seen_ids`` before its children are
    visited, giving the same pre-order document order as ``flatten_node_ids``.

    Args:
        node: Candidate node record.
        path: Path of the node, e.g. ``nodes[0].children[1]``.
        context: Traversal state shared by the whole forest.

    Returns:
        Errors for this node and its subtree.
    """
    if not _is_record(node):
        return [f"{path} must be an object"]
    errors: list[str] = []

    node_id = node.get("id")
    if not _is_non_empty_string(node_id):
        errors.append(f"{path}.id must be a non-empty string")
    elif node_id in context.seen_ids:
        errors.append(f"{path}.id '{node_id}' must be unique")
    else:
        context.seen_ids.add(node_id)

    if "name" in node and not isinstance(node["name"], str):
        errors.append(f"{path}.name must be a string when present")
    if "tags" in node:
        tags = node["tags"]
        if not _is_sequence(tags) or any(not isinstance(tag, str) for tag in tags):
            errors.append(f"{path}.tags must be an array of strings when present")
    if "transform" in node:
        errors.extend(validate_transform(node["transform"], f"{path}.transform"))
    if "components" in node:
        components = node["components"]
        if not _is_sequence(components):
            errors.append(f"{path}.components must be an array when present")
        else:
            for index, component in enumerate(components):
                errors.extend(validate_component(component, f"{path}.components[{index}]"))
    if "asset" in node:
        errors.extend(validate_asset_reference(node["asset"], f"{path}.asset", context.asset_ids))
    if "children" in node:
        children = node["children"]
        if not _is_sequence(children):
            errors.append(f"{path}.children must be an array when present")
        else:
            for index, child in enumerate(children):
                errors.extend(validate_scene_node(child, f"{path}.children[{index}]", context))
    return errors


def validate_assets(assets: Any, path: str = "assets") -> tuple[list[str], frozenset[str]]:
    """Validate the asset library.

    The returned id set is built best-effort from every entry that is a record
    with a string ``id``, even when the entry or the list has other errors, so
    node references are still checked against whatever could be resolved.

    Args:
        assets: The document's ``assets`` value.
        path: Path prefix for error messages.

    Returns:
        Tuple of (errors, resolvable asset ids).
    """
    if not _is_sequence(assets):
        return [f"{path} must be an array when present"], frozenset()

    errors: list[str] = []
    seen_ids: set[str] = set()
    resolvable: set[str] = set()
    for index, asset in enumerate(assets):
        asset_path = f"{path}[{index}]"
        if not _is_record(asset):
            errors.append(f"{asset_path} must be an object")
            continue
        asset_id = asset.get("id")
        if isinstance(asset_id, str):
            resolvable.add(asset_id)
        if not _is_non_empty_string(asset_id):
            errors.append(f"{asset_path}.id must be a non-empty string")
        elif asset_id in seen_ids:
            errors.append(f"{asset_path}.id '{asset_id}' must be unique")
        else:
            seen_ids.add(asset_id)
        if not _is_non_empty_string(asset.get("uri")):
            errors.append(f"{asset_path}.uri must be a non-empty string")
        if "type" in asset and not isinstance(asset["type"], str):
            errors.append(f"{asset_path}.type must be a string when present")
        if "meta" in asset and not _is_record(asset["meta"]):
            errors.append(f"{asset_path}.meta must be an object when present")
    return errors, frozenset(resolvable)


def validate_world_document(world: Any) -> ValidationResult:
    """Validate a whole world document.

    Checks, in order: the document is a record, the metadata payload shape,
    the asset library, then every node of the forest with one shared
    traversal context. Once the structure is sound, every value is checked
    for wire compatibility, so each violation is reported once.

    Args:
        world: Candidate document, typically freshly decoded wire input.

    Returns:
        ValidationResult with every error found.

    Example:
        >>> validate_world_document({"nodes": [{"id": "a"}, {"id": "a"}]}).errors
        ["nodes[1].id 'a' must be unique"]
    """
    if not _is_record(world):
        return ValidationResult(["World must be an object"])

    errors: list[str] = []
    if "metadata" in world and not _is_record(world["metadata"]):
        errors.append("metadata must be an object when present")

    asset_ids: frozenset[str] = frozenset()
    if "assets" in world:
        asset_errors, asset_ids = validate_assets(world["assets"])
        errors.extend(asset_errors)

    nodes = world.get("nodes")
    if not _is_sequence(nodes):
        errors.append("nodes must be an array")
    else:
        context = NodeContext(asset_ids=asset_ids)
        for index, node in enumerate(nodes):
            errors.extend(validate_scene_node(node, f"nodes[{index}]", context))
    if not errors:
        errors.extend(validate_wire_value(world))
    return ValidationResult(errors)
