"""Tree Index: traversal and structure-sharing updates over the node forest."""

from worldengine.core.tree.operations import (
    NodeUpdater,
    TreeUpdate,
    find_node_by_id,
    flatten_node_ids,
    iter_nodes,
    update_node_by_id,
)

__all__ = [
    "NodeUpdater",
    "TreeUpdate",
    "iter_nodes",
    "find_node_by_id",
    "flatten_node_ids",
    "update_node_by_id",
]
