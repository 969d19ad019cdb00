"""World document shapes.

Documents are plain JSON-compatible dicts and lists so that unknown fields and
opaque payloads (``metadata``, ``components[i].data``, ``asset.meta``,
``asset.options``) pass through untouched. The TypedDicts below describe the
known fields for type checkers only; nothing here enforces them at runtime.
The Validator is the only gate.

Usage:
    doc: WorldDocument = {
        "version": CURRENT_WORLD_SCHEMA_VERSION,
        "metadata": {"title": "Empty"},
        "assets": [],
        "nodes": [{"id": "root"}],
    }
"""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

CURRENT_WORLD_SCHEMA_VERSION = 1
"""Newest schema version this package reads and the one it always writes."""


class Vector3(TypedDict):
    x: float
    y: float
    z: float


class Quaternion(TypedDict):
    x: float
    y: float
    z: float
    w: float


class Transform(TypedDict, total=False):
    """Absent fields are left absent; consumers apply identity defaults."""

    position: Vector3
    rotation: Quaternion
    scale: Vector3


class Component(TypedDict):
    type: str
    data: NotRequired[dict[str, Any]]


class AssetRef(TypedDict):
    assetId: str
    options: NotRequired[dict[str, Any]]


class Asset(TypedDict):
    id: str
    uri: str
    type: NotRequired[str]
    meta: NotRequired[dict[str, Any]]


class SceneNode(TypedDict):
    id: str
    name: NotRequired[str]
    tags: NotRequired[list[str]]
    transform: NotRequired[Transform]
    components: NotRequired[list[Component]]
    asset: NotRequired[AssetRef]
    children: NotRequired[list[SceneNode]]


class WorldDocument(TypedDict):
    version: int
    metadata: NotRequired[dict[str, Any]]
    assets: NotRequired[list[Asset]]
    nodes: list[SceneNode]


# Ordered root nodes of a document
Forest = list[SceneNode]
