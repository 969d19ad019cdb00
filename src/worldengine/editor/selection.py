"""Multi-member selection with a single focused member.

Usage:
    selection = SelectionState()
    selection.select("camp")
    selection.select("fire", additive=True)   # {"camp", "fire"}, focus "fire"
    selection.focus_next(flatten_node_ids(doc["nodes"]))

Membership is kept in insertion order, so whenever focus has to move to "some
remaining member" the choice is the earliest-added one and is reproducible.
State is mutated synchronously; there is no locking.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

SelectionListener = Callable[["SelectionState"], None]


class SelectionState:
    """Selected ids plus the focused id.

    The focused id is always a member of the selection, or None.

    Args:
        initial: Ids selected at construction; the first becomes focused.
    """

    def __init__(self, initial: Iterable[str] = ()) -> None:
        self._members: dict[str, None] = dict.fromkeys(initial)
        self._focused: str | None = self._first()
        self._listeners: list[SelectionListener] = []
        self._revision = 0

    def _first(self) -> str | None:
        return next(iter(self._members), None)

    def _changed(self) -> None:
        self._revision += 1
        for listener in list(self._listeners):
            listener(self)

    @property
    def focused(self) -> str | None:
        return self._focused

    @property
    def revision(self) -> int:
        """Incremented on every operation that may have changed the state."""
        return self._revision

    def selection(self) -> list[str]:
        """Selected ids in insertion order."""
        return list(self._members)

    def is_selected(self, node_id: str) -> bool:
        return node_id in self._members

    def is_focused(self, node_id: str) -> bool:
        return self._focused is not None and self._focused == node_id

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Register a listener called after every selection operation.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def select(self, node_id: str, *, additive: bool = False, focus: bool = True) -> list[str]:
        """Select a node, replacing or toggling membership.

        Args:
            node_id: Node to select.
            additive: Toggle ``node_id`` in the current selection instead of
                replacing it.
            focus: Move focus to ``node_id``. When False, focus only moves if
                the previously focused id was dropped.

        Returns:
            The new selection.
        """
        if not additive:
            self._members = {node_id: None}
        elif node_id in self._members:
            del self._members[node_id]
        else:
            self._members[node_id] = None

        if focus and node_id in self._members:
            self._focused = node_id
        elif self._focused is not None and self._focused not in self._members:
            # Toggled off the node being focused, or focus=False dropped it
            self._focused = self._first()
        self._changed()
        return self.selection()

    def set_selection(self, ids: Sequence[str], focus_last: bool = True) -> list[str]:
        """Replace the whole selection.

        Args:
            ids: New members, in order. Duplicates are collapsed.
            focus_last: Focus the last id. Otherwise keep the current focus if
                it survived, else focus the first id.

        Returns:
            The new selection.
        """
        ids = list(ids)
        self._members = dict.fromkeys(ids)
        if focus_last:
            self._focused = ids[-1] if ids else None
        elif self._focused is None or self._focused not in self._members:
            self._focused = ids[0] if ids else None
        self._changed()
        return self.selection()

    def focus(self, node_id: str | None) -> str | None:
        """Focus a node.

        A member only gains focus. A non-member replaces the selection. None
        re-derives focus from the current members without changing them.

        Returns:
            The focused id.
        """
        if node_id is None:
            self._focused = self._first()
        elif node_id in self._members:
            self._focused = node_id
        else:
            self._members = {node_id: None}
            self._focused = node_id
        self._changed()
        return self._focused

    def ensure_focused(self) -> str | None:
        """Keep the current focus if it is a member, else focus the first member."""
        if self._focused is None or self._focused not in self._members:
            self._focused = self._first()
        return self._focused

    def focus_next(self, order: Sequence[str], direction: int = 1) -> str | None:
        """Move focus along an external ordering, collapsing the selection to it.

        Args:
            order: Total ordering of navigable ids, typically
                ``flatten_node_ids(forest)``.
            direction: Step through ``order``; wraps at both ends. From no
                focus, +1 lands on the first id.

        Returns:
            The newly focused id, or None if ``order`` is empty (which also
            clears the selection).
        """
        if not order:
            self._members = {}
            self._focused = None
            self._changed()
            return None

        current_index = order.index(self._focused) if self._focused in order else -1
        next_id = order[(current_index + direction) % len(order)]
        self._members = {next_id: None}
        self._focused = next_id
        self._changed()
        return next_id

    def clear(self) -> None:
        self._members = {}
        self._focused = None
        self._changed()
