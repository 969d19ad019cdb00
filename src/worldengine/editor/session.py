"""EditorSession: composition root for editing one world document.

Usage:
    session = EditorSession()                      # starts from the demo document
    await session.update_node("tree-1", lambda n: {**n, "name": "Oak"})
    session.focus_next(1)
    package = await session.export_document()
    await session.import_document(package.text)

The session owns one document value and replaces it wholesale on every
successful edit; the previous value is never mutated, so readers holding it
never observe a half-applied change.

Mutating entry points are coroutines serialized through a single-slot lock:
while one is in flight (for example a mode switch awaiting a confirmation
dialog), later calls wait for it instead of acting on stale state.
Selection operations are synchronous and do not take the lock.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from worldengine.config import EditorSettings
from worldengine.core.document import WorldDocument, default_world
from worldengine.core.document.models import SceneNode
from worldengine.core.serialization import (
    ValidationError,
    WorldDocumentError,
    deserialize_world,
    fingerprint,
    serialize_world,
)
from worldengine.core.tree import NodeUpdater, find_node_by_id, flatten_node_ids, update_node_by_id
from worldengine.core.validation import validate_world_document
from worldengine.editor.mode import (
    ConfirmSwitch,
    EditorMode,
    LoggingModeContext,
    ModeListener,
    ModePolicy,
    ModeStateMachine,
)
from worldengine.editor.selection import SelectionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExportPackage:
    """Serialized document plus a fingerprint for user-facing confirmation."""

    text: str
    fingerprint: str
    document: WorldDocument
    exported_at: datetime = field(default_factory=lambda: datetime.now(UTC))


SessionAutoSave = Callable[[ExportPackage], Awaitable[Any] | Any]


class EditorSession:
    """One editable document with its selection and mode state.

    Args:
        document: Starting document; the built-in demo document if omitted.
            Validated unless ``validate`` is False.
        settings: Editor settings; loaded from the environment if omitted.
        auto_save: Called with a fresh export when a mode switch finds
            unsaved changes. Takes precedence over ``confirm_switch``.
            Persist the package it is given; do not call back into the
            session.
        confirm_switch: Asked with (current, target) whether to switch
            despite unsaved changes. It runs while ``switch_mode`` holds the
            session lock, so awaiting ``export_document()``,
            ``update_node()``, ``import_document()`` or ``switch_mode()``
            from it deadlocks. Read ``session.document`` directly if the
            prompt needs the current state.
        create_context: Factory for per-mode contexts.
        validate: Check ``document`` before adopting it.

    Raises:
        ValidationError: If ``document`` is invalid and ``validate`` is True.
    """

    def __init__(
        self,
        document: WorldDocument | None = None,
        *,
        settings: EditorSettings | None = None,
        auto_save: SessionAutoSave | None = None,
        confirm_switch: ConfirmSwitch | None = None,
        create_context: Callable[[EditorMode], Any] = LoggingModeContext,
        validate: bool = True,
    ) -> None:
        if document is None:
            document = default_world()
        elif validate:
            validation = validate_world_document(document)
            if not validation.valid:
                raise ValidationError(validation.errors)

        self._settings = settings or EditorSettings()
        self._document = document
        self._node_ids: list[str] = []
        self._node_ids_source: WorldDocument | None = None
        self._lock = asyncio.Lock()
        self._auto_save = auto_save

        policy = ModePolicy(
            create_context=create_context,
            auto_save=self._run_auto_save if auto_save is not None else None,
            confirm_switch=confirm_switch,
        )
        self._modes = ModeStateMachine(policy, initial_mode=self._settings.initial_mode)
        self._selection = SelectionState()
        self._select_first_root()

    # Read access

    @property
    def document(self) -> WorldDocument:
        """Current document. Treat as read-only; edit through ``update_node``."""
        return self._document

    @property
    def settings(self) -> EditorSettings:
        return self._settings

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def mode(self) -> EditorMode:
        return self._modes.mode

    @property
    def modes(self) -> ModeStateMachine:
        return self._modes

    @property
    def is_dirty(self) -> bool:
        return self._modes.is_dirty()

    @property
    def node_ids(self) -> list[str]:
        """Node ids in navigation order, recomputed only when the document changes."""
        if self._node_ids_source is not self._document:
            self._node_ids = flatten_node_ids(self._forest())
            self._node_ids_source = self._document
        return list(self._node_ids)

    def find_node(self, node_id: str) -> SceneNode | None:
        return find_node_by_id(self._forest(), node_id)

    @property
    def focused_node(self) -> SceneNode | None:
        """The node under focus, if it still exists in the document."""
        focused = self._selection.focused
        return self.find_node(focused) if focused is not None else None

    def subscribe_mode(self, listener: ModeListener) -> Callable[[], None]:
        return self._modes.subscribe(listener)

    # Selection

    def select(self, node_id: str, *, additive: bool = False, focus: bool = True) -> list[str]:
        return self._selection.select(node_id, additive=additive, focus=focus)

    def set_selection(self, ids: Sequence[str], focus_last: bool = True) -> list[str]:
        return self._selection.set_selection(ids, focus_last=focus_last)

    def focus(self, node_id: str | None) -> str | None:
        return self._selection.focus(node_id)

    def focus_next(self, direction: int = 1) -> str | None:
        """Step focus through the document in navigation order."""
        return self._selection.focus_next(self.node_ids, direction)

    def _forest(self) -> list[SceneNode]:
        nodes = self._document.get("nodes")
        return nodes if isinstance(nodes, list) else []

    def _select_first_root(self) -> None:
        roots = [node.get("id") for node in self._forest() if isinstance(node, dict)]
        first = roots[0] if roots else None
        self._selection.set_selection([first] if isinstance(first, str) else [])

    # Mutations

    async def update_node(self, node_id: str, updater: NodeUpdater) -> bool:
        """Apply ``updater`` to the node with ``node_id``.

        The document is replaced and marked dirty only if something changed.

        Args:
            node_id: Node to edit.
            updater: Returns the replacement node, or None to leave it as is.

        Returns:
            True if the document changed.
        """
        async with self._lock:
            result = update_node_by_id(self._forest(), node_id, updater)
            if not result.changed:
                return False
            self._document = {**self._document, "nodes": result.forest}
            self._modes.mark_dirty()
            return True

    async def switch_mode(self, target: EditorMode | str) -> bool:
        """Switch mode through the unsaved-changes gate. See ``ModeStateMachine``."""
        async with self._lock:
            return await self._modes.switch_mode(target)

    async def import_document(self, wire_text: str | bytes) -> WorldDocument:
        """Replace the document with deserialized wire text.

        Selection resets to the first root node and the dirty flag clears. On
        failure the session is left exactly as it was.

        Raises:
            ParseError: If the text is not valid JSON.
            UnsupportedVersionError: If the text is from a newer schema.
            ValidationError: If the document is invalid.
        """
        async with self._lock:
            try:
                document = deserialize_world(wire_text)
            except WorldDocumentError as e:
                logger.warning("Rejected world import: %s", e)
                raise
            self._document = document
            self._select_first_root()
            self._modes.clear_dirty()
            logger.info("Imported world with %d node(s)", len(self.node_ids))
            return document

    async def export_document(self) -> ExportPackage:
        """Serialize the current document.

        Raises:
            ValidationError: If edits left the document invalid.
        """
        async with self._lock:
            return self._export()

    def _export(self) -> ExportPackage:
        text = serialize_world(self._document, indent=self._settings.wire_indent)
        package = ExportPackage(text=text, fingerprint=fingerprint(text), document=self._document)
        if self._settings.clear_dirty_on_export:
            self._modes.clear_dirty()
        logger.info("Exported world (hash %s)", package.fingerprint)
        return package

    async def _run_auto_save(self) -> None:
        # Runs inside switch_mode, which already holds the lock
        if self._auto_save is None:
            return
        result = self._auto_save(self._export())
        if inspect.isawaitable(result):
            await result

    def close(self) -> None:
        """Dispose both mode contexts and drop mode listeners."""
        self._modes.destroy()
