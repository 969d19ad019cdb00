"""Edit/play mode switching with an unsaved-changes gate.

Usage:
    machine = ModeStateMachine(ModePolicy(confirm_switch=ask_user))
    unsubscribe = machine.subscribe(print)   # prints "edit" immediately
    switched = await machine.switch_mode(EditorMode.PLAY)

Each mode owns a context created lazily by ``ModePolicy.create_context``.
Contexts expose any of ``activate``, ``deactivate`` and ``dispose``; missing
hooks are skipped.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class EditorMode(str, Enum):
    """The two exclusive editing modes."""

    EDIT = "edit"
    PLAY = "play"


class ModeContext:
    """Per-mode capability object with no-op hooks.

    Subclassing is optional: the machine looks hooks up by name, so any object
    defining a subset of ``activate``, ``deactivate`` and ``dispose`` works.
    """

    def activate(self) -> None:
        pass

    def deactivate(self) -> None:
        pass

    def dispose(self) -> None:
        pass


ModeListener = Callable[[EditorMode], None]
AutoSave = Callable[[], Awaitable[Any] | Any]
ConfirmSwitch = Callable[[EditorMode, EditorMode], Awaitable[Any] | Any]


@dataclass(slots=True)
class LoggingModeContext(ModeContext):
    """Default context: records entering and leaving its mode."""

    mode: EditorMode

    def activate(self) -> None:
        logger.info("Entering %s mode", self.mode.value)

    def deactivate(self) -> None:
        logger.info("Leaving %s mode", self.mode.value)


@dataclass
class ModePolicy:
    """Callbacks that decide how mode switches treat unsaved changes.

    Gate precedence when dirty: ``auto_save`` (save, then allow), else
    ``confirm_switch`` (allow only if it returns truthy), else allow.
    Either callback may be a plain function or a coroutine function.
    """

    create_context: Callable[[EditorMode], Any] = LoggingModeContext
    """Builds the context for a mode on first use."""

    auto_save: AutoSave | None = None
    """Persists pending changes before switching."""

    confirm_switch: ConfirmSwitch | None = None
    """Asked with (current, target) whether to discard pending changes."""

    has_unsaved_changes: Callable[[], bool] | None = None
    """External dirty predicate; overrides the machine's own flag."""

    contexts: dict[EditorMode, Any] = field(default_factory=dict)
    """Prebuilt contexts; modes present here skip ``create_context``."""


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _call_hook(context: Any, hook: str) -> None:
    method = getattr(context, hook, None)
    if callable(method):
        method()


class ModeStateMachine:
    """Owns the current mode, the per-mode contexts and the dirty flag.

    The initial mode's context is created and activated at construction.
    ``destroy`` ends the machine's lifecycle; it is not a mode.

    Args:
        policy: Context factory and unsaved-changes callbacks.
        initial_mode: Mode to start in.
    """

    def __init__(
        self,
        policy: ModePolicy | None = None,
        initial_mode: EditorMode | str = EditorMode.EDIT,
    ) -> None:
        self._policy = policy or ModePolicy()
        self._mode = EditorMode(initial_mode)
        self._contexts: dict[EditorMode, Any] = dict(self._policy.contexts)
        self._listeners: list[ModeListener] = []
        self._dirty = False
        _call_hook(self._get_or_create_context(self._mode), "activate")

    @property
    def mode(self) -> EditorMode:
        return self._mode

    def get_context(self, mode: EditorMode | str) -> Any | None:
        """Return the context for ``mode`` if it has been created."""
        return self._contexts.get(EditorMode(mode))

    def _get_or_create_context(self, mode: EditorMode) -> Any:
        if mode not in self._contexts:
            self._contexts[mode] = self._policy.create_context(mode)
        return self._contexts[mode]

    def is_dirty(self) -> bool:
        """External predicate if configured, else the local flag."""
        if self._policy.has_unsaved_changes is not None:
            return bool(self._policy.has_unsaved_changes())
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True

    def clear_dirty(self) -> None:
        self._dirty = False

    def subscribe(self, listener: ModeListener) -> Callable[[], None]:
        """Call ``listener`` now with the current mode and after every switch.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)
        listener(self._mode)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _gate(self, target: EditorMode) -> bool:
        """Decide whether unsaved changes allow switching to ``target``."""
        if not self.is_dirty():
            return True
        if self._policy.auto_save is not None:
            logger.debug("Auto-saving before switching to %s", target.value)
            await _resolve(self._policy.auto_save())
            self.clear_dirty()
            return True
        if self._policy.confirm_switch is not None:
            confirmed = await _resolve(self._policy.confirm_switch(self._mode, target))
            if confirmed:
                self.clear_dirty()
            return bool(confirmed)
        return True

    async def switch_mode(self, target: EditorMode | str) -> bool:
        """Switch to ``target`` if the unsaved-changes gate allows it.

        Switching to the current mode succeeds without side effects. A blocked
        switch leaves mode, contexts and listeners untouched.

        Args:
            target: Mode to enter.

        Returns:
            True if the machine is now in ``target``, False if blocked.

        Raises:
            ValueError: If ``target`` is not a known mode.
        """
        target = EditorMode(target)
        if target == self._mode:
            return True

        if not await self._gate(target):
            logger.info(
                "Switch from %s to %s blocked by unsaved changes",
                self._mode.value,
                target.value,
            )
            return False

        previous = self._contexts.get(self._mode)
        if previous is not None:
            _call_hook(previous, "deactivate")
        _call_hook(self._get_or_create_context(target), "activate")
        self._mode = target
        logger.debug("Mode is now %s", target.value)
        for listener in list(self._listeners):
            listener(self._mode)
        return True

    def destroy(self) -> None:
        """Dispose every mode's context, creating any never entered, and drop listeners."""
        for mode in EditorMode:
            self._get_or_create_context(mode)
        for context in self._contexts.values():
            _call_hook(context, "dispose")
        self._contexts.clear()
        self._listeners.clear()
