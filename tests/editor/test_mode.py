"""Tests for ModeStateMachine."""

import asyncio
import logging
from types import SimpleNamespace

import pytest

from worldengine.editor import EditorMode, LoggingModeContext, ModeContext, ModePolicy, ModeStateMachine


class RecordingContext(ModeContext):
    def __init__(self, mode, events):
        self.mode = mode
        self.events = events

    def activate(self):
        self.events.append(("activate", self.mode.value))

    def deactivate(self):
        self.events.append(("deactivate", self.mode.value))

    def dispose(self):
        self.events.append(("dispose", self.mode.value))


@pytest.fixture
def events():
    return []


def _machine(events, **policy):
    return ModeStateMachine(ModePolicy(create_context=lambda mode: RecordingContext(mode, events), **policy))


def test_initial_mode_context_is_activated(events):
    machine = _machine(events)

    assert machine.mode == EditorMode.EDIT
    assert machine.mode == "edit"
    assert events == [("activate", "edit")]
    assert machine.get_context("play") is None


def test_initial_mode_can_be_play(events):
    machine = ModeStateMachine(
        ModePolicy(create_context=lambda mode: RecordingContext(mode, events)),
        initial_mode="play",
    )

    assert machine.mode == EditorMode.PLAY
    assert events == [("activate", "play")]


@pytest.mark.asyncio
async def test_switch_runs_hooks_and_notifies(events):
    machine = _machine(events)
    seen = []
    machine.subscribe(seen.append)

    assert await machine.switch_mode("play") is True

    assert machine.mode == EditorMode.PLAY
    assert events == [("activate", "edit"), ("deactivate", "edit"), ("activate", "play")]
    assert seen == [EditorMode.EDIT, EditorMode.PLAY]


@pytest.mark.asyncio
async def test_switch_to_current_mode_has_no_side_effects(events):
    machine = _machine(events)
    seen = []
    machine.subscribe(seen.append)

    assert await machine.switch_mode(EditorMode.EDIT) is True

    assert events == [("activate", "edit")]
    assert seen == [EditorMode.EDIT]


@pytest.mark.asyncio
async def test_confirm_rejection_blocks_switch(events, caplog):
    asked = []

    def confirm(current, target):
        asked.append((current, target))
        return False

    machine = _machine(events, confirm_switch=confirm)
    seen = []
    machine.subscribe(seen.append)
    machine.mark_dirty()

    with caplog.at_level(logging.INFO, logger="worldengine.editor.mode"):
        assert await machine.switch_mode("play") is False

    assert machine.mode == EditorMode.EDIT
    assert seen == [EditorMode.EDIT]
    assert events == [("activate", "edit")]
    assert asked == [(EditorMode.EDIT, EditorMode.PLAY)]
    assert machine.is_dirty()
    assert "blocked" in caplog.text


@pytest.mark.asyncio
async def test_confirm_acceptance_clears_dirty(events):
    machine = _machine(events, confirm_switch=lambda current, target: True)
    machine.mark_dirty()

    assert await machine.switch_mode("play") is True
    assert not machine.is_dirty()


@pytest.mark.asyncio
async def test_async_confirm_is_awaited(events):
    async def confirm(current, target):
        await asyncio.sleep(0)
        return "yes"

    machine = _machine(events, confirm_switch=confirm)
    machine.mark_dirty()

    assert await machine.switch_mode("play") is True


@pytest.mark.asyncio
async def test_confirm_not_consulted_when_clean(events):
    def confirm(current, target):
        raise AssertionError("should not be asked")

    machine = _machine(events, confirm_switch=confirm)

    assert await machine.switch_mode("play") is True


@pytest.mark.asyncio
async def test_auto_save_takes_precedence_over_confirm(events):
    saved = []

    async def auto_save():
        saved.append(True)

    def confirm(current, target):
        raise AssertionError("should not be asked")

    machine = _machine(events, auto_save=auto_save, confirm_switch=confirm)
    machine.mark_dirty()

    assert await machine.switch_mode("play") is True
    assert saved == [True]
    assert not machine.is_dirty()


@pytest.mark.asyncio
async def test_dirty_without_policy_is_allowed(events):
    machine = _machine(events)
    machine.mark_dirty()

    assert await machine.switch_mode("play") is True
    assert machine.is_dirty()


@pytest.mark.asyncio
async def test_external_dirty_predicate_overrides_flag(events):
    external = {"dirty": False}
    machine = _machine(
        events,
        has_unsaved_changes=lambda: external["dirty"],
        confirm_switch=lambda current, target: False,
    )
    machine.mark_dirty()

    assert not machine.is_dirty()
    assert await machine.switch_mode("play") is True

    external["dirty"] = True
    assert await machine.switch_mode("edit") is False


@pytest.mark.asyncio
async def test_auto_save_error_propagates_and_keeps_mode(events):
    def auto_save():
        raise OSError("disk full")

    machine = _machine(events, auto_save=auto_save)
    machine.mark_dirty()

    with pytest.raises(OSError, match="disk full"):
        await machine.switch_mode("play")
    assert machine.mode == EditorMode.EDIT
    assert machine.is_dirty()


@pytest.mark.asyncio
async def test_contexts_are_created_once_and_reused(events):
    created = []

    def factory(mode):
        created.append(mode)
        return RecordingContext(mode, events)

    machine = ModeStateMachine(ModePolicy(create_context=factory))
    await machine.switch_mode("play")
    await machine.switch_mode("edit")
    await machine.switch_mode("play")

    assert created == [EditorMode.EDIT, EditorMode.PLAY]


@pytest.mark.asyncio
async def test_contexts_with_partial_hooks():
    activated = []
    machine = ModeStateMachine(
        ModePolicy(create_context=lambda mode: SimpleNamespace(activate=lambda: activated.append(mode)))
    )

    await machine.switch_mode("play")
    machine.destroy()

    assert activated == [EditorMode.EDIT, EditorMode.PLAY]


@pytest.mark.asyncio
async def test_unknown_mode_is_rejected(events):
    machine = _machine(events)

    with pytest.raises(ValueError):
        await machine.switch_mode("pause")


@pytest.mark.asyncio
async def test_unsubscribe_stops_notifications(events):
    machine = _machine(events)
    seen = []
    unsubscribe = machine.subscribe(seen.append)

    unsubscribe()
    await machine.switch_mode("play")

    assert seen == [EditorMode.EDIT]


def test_destroy_disposes_never_entered_modes(events):
    machine = _machine(events)
    seen = []
    machine.subscribe(seen.append)

    machine.destroy()

    assert events == [("activate", "edit"), ("dispose", "edit"), ("dispose", "play")]
    assert machine.get_context("edit") is None


def test_prebuilt_contexts_skip_factory(events):
    edit_context = RecordingContext(EditorMode.EDIT, events)

    def factory(mode):
        raise AssertionError("factory should not be used for edit")

    machine = ModeStateMachine(ModePolicy(create_context=factory, contexts={EditorMode.EDIT: edit_context}))

    assert machine.get_context("edit") is edit_context


def test_logging_context_logs_transitions(caplog):
    context = LoggingModeContext(EditorMode.PLAY)

    with caplog.at_level(logging.INFO, logger="worldengine.editor.mode"):
        context.activate()
        context.deactivate()

    assert "Entering play mode" in caplog.text
    assert "Leaving play mode" in caplog.text
