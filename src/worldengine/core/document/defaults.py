"""Built-in demo document used when a session starts without input."""

from __future__ import annotations

import copy

from worldengine.core.document.models import CURRENT_WORLD_SCHEMA_VERSION, WorldDocument

_DEFAULT_WORLD: WorldDocument = {
    "version": CURRENT_WORLD_SCHEMA_VERSION,
    "metadata": {
        "title": "Demo Park",
        "author": "World Engine",
        "description": "Sample scene showcasing the authoring pipeline.",
    },
    "assets": [
        {"id": "hero-tree", "uri": "/assets/tree.gltf", "type": "gltf", "meta": {"variant": "pine"}},
        {"id": "campfire-audio", "uri": "/assets/campfire.ogg", "type": "audio"},
    ],
    "nodes": [
        {
            "id": "root",
            "name": "World root",
            "tags": ["scene"],
            "children": [
                {
                    "id": "camp",
                    "name": "Camp clearing",
                    "transform": {"position": {"x": 2, "y": 0, "z": -3}},
                    "components": [{"type": "light", "data": {"intensity": 1.2}}],
                    "children": [
                        {
                            "id": "fire",
                            "name": "Campfire",
                            "asset": {"assetId": "campfire-audio"},
                            "components": [{"type": "emitter", "data": {"rate": 32}}],
                        },
                    ],
                },
                {
                    "id": "trees",
                    "name": "Tree cluster",
                    "tags": ["foliage"],
                    "children": [
                        {
                            "id": "tree-1",
                            "name": "Tree A",
                            "asset": {"assetId": "hero-tree"},
                            "transform": {"position": {"x": -4, "y": 0, "z": 2}},
                        },
                        {
                            "id": "tree-2",
                            "name": "Tree B",
                            "asset": {"assetId": "hero-tree"},
                            "transform": {"position": {"x": -6, "y": 0, "z": 4}},
                        },
                    ],
                },
            ],
        },
    ],
}


def default_world() -> WorldDocument:
    """Return a fresh copy of the demo document.

    Returns:
        Deep copy, so callers may hold it without sharing state with other sessions.
    """
    return copy.deepcopy(_DEFAULT_WORLD)
