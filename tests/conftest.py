"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from worldengine import EditorSession, default_world
from worldengine.config import EditorSettings


@pytest.fixture
def world():
    """Fresh copy of the demo document."""
    return default_world()


@pytest.fixture
def editor_settings():
    """Settings independent of the environment."""
    return EditorSettings(initial_mode="edit", wire_indent=2, clear_dirty_on_export=True)


@pytest.fixture
def session(editor_settings):
    """Session over the demo document."""
    return EditorSession(settings=editor_settings)


@pytest.fixture
def small_world():
    """Two roots, one nested child, one asset."""
    return {
        "version": 1,
        "metadata": {"title": "Small"},
        "assets": [{"id": "crate", "uri": "/assets/crate.gltf"}],
        "nodes": [
            {"id": "alpha", "children": [{"id": "alpha-child", "asset": {"assetId": "crate"}}]},
            {"id": "beta", "name": "Beta"},
        ],
    }
