# -*- coding: utf-8 -*-
"""
Tests for overlapping async transitions.

Guards are gated with asyncio events so each test controls exactly when a
pending guard settles.
"""

import asyncio

import pytest

from ui.wizards.framework import NavigationPolicy, StepStatus
from ui.wizards.framework.operation_counter import OperationCounter


def gated_guard(result, first_only=True):
    """
    Guard that blocks its first call until released.

    Returns (guard, started, release).
    """
    started = asyncio.Event()
    release = asyncio.Event()
    calls = []

    async def guard(values):
        calls.append(dict(values))
        if len(calls) == 1 or not first_only:
            started.set()
            await release.wait()
        return result

    return guard, started, release


class TestOperationCounter:
    """Test the generation counter."""

    def test_begin_marks_busy(self):
        """Test begin increments and reports busy."""
        changes = []
        counter = OperationCounter(on_busy_changed=changes.append)

        op_id = counter.begin()

        assert op_id == 1
        assert counter.current == 1
        assert counter.is_busy is True
        assert changes == [True]

    def test_only_latest_clears_busy(self):
        """Test stale operations cannot clear the busy flag."""
        changes = []
        counter = OperationCounter(on_busy_changed=changes.append)
        first = counter.begin()
        second = counter.begin()

        counter.end(first)
        assert counter.is_busy is True
        assert counter.is_stale(first) is True
        assert counter.is_stale(second) is False

        counter.end(second)
        assert counter.is_busy is False
        assert changes == [True, False]


class TestOverlappingCommands:
    """Test that the most recently issued command wins."""

    @pytest.mark.asyncio
    async def test_overlapping_next_settles_once(self, make_navigator, make_step, step_changes):
        """Test two next() calls while the first guard is pending transition once."""
        guard, started, release = gated_guard(True)
        steps = [make_step("A", can_exit=guard), make_step("B"), make_step("C")]
        nav = make_navigator(steps)

        first = asyncio.create_task(nav.next())
        await started.wait()
        assert nav.is_busy is True

        await nav.next()
        assert nav.active_step_id == "B"
        assert nav.is_busy is False

        release.set()
        await first

        assert nav.active_step_id == "B"
        assert nav.history == ["A"]
        assert [(f, t) for f, t, _ in step_changes] == [("A", "B")]
        assert nav.is_busy is False

    @pytest.mark.asyncio
    async def test_stale_failure_is_discarded(self, make_navigator, make_step):
        """Test a late failing guard of a superseded call records nothing."""
        started = asyncio.Event()
        release = asyncio.Event()
        calls = []

        async def can_exit(values):
            calls.append(1)
            if len(calls) == 1:
                started.set()
                await release.wait()
                return False
            return True

        nav = make_navigator([make_step("A", can_exit=can_exit), make_step("B")])

        first = asyncio.create_task(nav.next())
        await started.wait()
        await nav.next()

        release.set()
        await first

        assert nav.active_step_id == "B"
        assert nav.errors is None
        assert nav.status_by_id == {"A": StepStatus.COMPLETE}

    @pytest.mark.asyncio
    async def test_hung_guard_keeps_busy_until_superseded(self, make_navigator, make_step):
        """Test a guard that never settles leaves the wizard busy."""
        guard, started, release = gated_guard(True)
        nav = make_navigator([make_step("A", can_exit=guard), make_step("B")])

        hung = asyncio.create_task(nav.next())
        await started.wait()
        await asyncio.sleep(0)
        assert nav.is_busy is True
        assert nav.active_step_id == "A"

        await nav.next()
        assert nav.active_step_id == "B"
        assert nav.is_busy is False

        hung.cancel()
        with pytest.raises(asyncio.CancelledError):
            await hung
        assert nav.is_busy is False
        assert nav.active_step_id == "B"

    @pytest.mark.asyncio
    async def test_overlapping_go_to_last_wins(self, make_navigator, make_step):
        """Test the later jump wins over an earlier one still checking its guard."""
        guard, started, release = gated_guard(True)
        steps = [make_step("A"), make_step("B", can_enter=guard), make_step("C")]
        nav = make_navigator(steps, navigation_policy=NavigationPolicy.FREE)

        first = asyncio.create_task(nav.go_to("B"))
        await started.wait()
        await nav.go_to("C")

        release.set()
        await first

        assert nav.active_step_id == "C"
        assert nav.history == ["A"]
        assert nav.get_step_status("B") == StepStatus.UPCOMING

    @pytest.mark.asyncio
    async def test_superseded_finish_does_not_complete(self, make_navigator, make_step, finish_calls):
        """Test a finish superseded while validating never calls on_finish."""
        guard, started, release = gated_guard(True)
        steps = [make_step("A"), make_step("B", can_exit=guard)]
        nav = make_navigator(steps, navigation_policy=NavigationPolicy.FREE, start_at="B")

        pending = asyncio.create_task(nav.finish())
        await started.wait()
        await nav.go_to("A")

        release.set()
        await pending

        assert finish_calls == []
        assert nav.active_step_id == "A"

    @pytest.mark.asyncio
    async def test_cursor_moved_by_visibility(self, make_navigator, make_step, step_changes):
        """Test a transition is dropped when its origin step was hidden meanwhile."""
        guard, started, release = gated_guard(True)
        steps = [
            make_step("A"),
            make_step("B", can_exit=guard, is_visible=lambda v: v.get("showB", True)),
            make_step("C"),
        ]
        nav = make_navigator(steps)
        await nav.next()

        pending = asyncio.create_task(nav.next())
        await started.wait()
        nav.set_values({"showB": False})
        assert nav.active_step_id == "A"

        release.set()
        await pending

        assert nav.active_step_id == "A"
        assert nav.history == ["A"]
        assert [(f, t) for f, t, _ in step_changes] == [("A", "B")]
        assert nav.is_busy is False

    @pytest.mark.asyncio
    async def test_target_hidden_while_entering(self, make_navigator, make_step):
        """Test the cursor never lands on a step hidden during its entry guard."""
        guard, started, release = gated_guard(True)
        steps = [
            make_step("A"),
            make_step("B", can_enter=guard, is_visible=lambda v: v.get("showB", True)),
            make_step("C"),
        ]
        nav = make_navigator(steps)

        pending = asyncio.create_task(nav.next())
        await started.wait()
        nav.context.merge_values({"showB": False})

        release.set()
        await pending

        assert nav.active_step_id == "A"
        assert nav.active_step_id in nav.visible_step_ids

    @pytest.mark.asyncio
    async def test_guards_see_snapshot_values(self, make_navigator, make_step):
        """Test a command evaluates against the values at the time it was issued."""
        seen = []

        async def can_enter(values):
            seen.append(values.get("plan"))
            return True

        guard, started, release = gated_guard(True)
        steps = [make_step("A", can_exit=guard), make_step("B", can_enter=can_enter)]
        nav = make_navigator(steps, initial_values={"plan": "basic"})

        pending = asyncio.create_task(nav.next())
        await started.wait()
        nav.context.merge_values({"plan": "pro"})

        release.set()
        await pending

        assert seen == ["basic"]
        assert nav.active_step_id == "B"
