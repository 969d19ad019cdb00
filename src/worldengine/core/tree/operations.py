"""Pure functions over a node forest.

All traversals are pre-order, depth-first, in document order: roots left to
right, each node's children before its next sibling. This is the same order
the Validator uses to detect duplicate ids.

These functions do not assume the forest is valid. Entries that are not
records, or ``children`` values that are not lists, are skipped rather than
reported. Validation happens at the serializer boundary.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from worldengine.core.document.models import SceneNode

NodeUpdater = Callable[[SceneNode], SceneNode | None]
"""Returns a replacement node, or None (or the same node) to leave it unchanged."""


@dataclass(frozen=True, slots=True)
class TreeUpdate:
    """Result of ``update_node_by_id``.

    ``forest`` is the input list itself when ``changed`` is False.
    """

    forest: list[SceneNode]
    changed: bool


def _children(node: Any) -> list[SceneNode] | None:
    if not isinstance(node, dict):
        return None
    children = node.get("children")
    return children if isinstance(children, list) else None


def iter_nodes(forest: Sequence[SceneNode], depth: int = 0) -> Iterator[tuple[SceneNode, int]]:
    """Walk the forest in document order.

    Args:
        forest: Root nodes.
        depth: Depth assigned to the roots.

    Yields:
        (node, depth) for every record in the forest.
    """
    for node in forest:
        if not isinstance(node, dict):
            continue
        yield node, depth
        children = _children(node)
        if children:
            yield from iter_nodes(children, depth + 1)


def find_node_by_id(forest: Sequence[SceneNode], node_id: str) -> SceneNode | None:
    """Return the first node with ``node_id`` in document order, or None."""
    for node, _ in iter_nodes(forest):
        if node.get("id") == node_id:
            return node
    return None


def flatten_node_ids(forest: Sequence[SceneNode]) -> list[str]:
    """Ids of every node in document order.

    This is the canonical navigation order for focus cycling. Nodes without a
    string id cannot be navigated to and are left out.
    """
    return [node["id"] for node, _ in iter_nodes(forest) if isinstance(node.get("id"), str)]


def update_node_by_id(
    forest: list[SceneNode],
    node_id: str,
    updater: NodeUpdater,
) -> TreeUpdate:
    """Replace nodes by id, sharing every untouched subtree.

    Every node whose id matches is passed to ``updater``; ids are unique in a
    validated document, but a hand-built forest with duplicates gets all of
    them updated. Only the ancestor chain of a replaced node is copied.
    Sibling subtrees off that path are reused by reference.

    Only the original forest is searched; updater output is never searched.
    Nested duplicates below a match are updated when the replacement keeps
    the matched node's ``children`` list; a replacement that supplies its own
    children (or wraps the matched node) is adopted as returned.

    Args:
        forest: Root nodes. Never mutated.
        node_id: Id to match.
        updater: Called with each matching node.

    Returns:
        TreeUpdate with the new forest, or the input list and ``changed=False``
        if nothing matched or the updater declined every match.

    Example:
        >>> result = update_node_by_id(doc["nodes"], "tree-1", lambda n: {**n, "name": "Oak"})
        >>> result.changed
        True
    """
    changed = False
    mapped: list[SceneNode] = []
    for node in forest:
        if not isinstance(node, dict):
            mapped.append(node)
            continue

        next_node = node
        if node.get("id") == node_id:
            replacement = updater(node)
            if replacement is not None:
                next_node = replacement

        children = _children(node)
        child_update = update_node_by_id(children, node_id, updater) if children is not None else None

        if child_update is not None and child_update.changed:
            if next_node is node:
                next_node = {**node, "children": child_update.forest}
            elif _children(next_node) is children:
                next_node = {**next_node, "children": child_update.forest}

        if next_node is not node:
            changed = True
        mapped.append(next_node)

    if not changed:
        return TreeUpdate(forest, False)
    return TreeUpdate(mapped, True)
