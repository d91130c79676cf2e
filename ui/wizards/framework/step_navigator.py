# -*- coding: utf-8 -*-
"""
Step Navigator - Manages navigation between wizard steps.

Handles:
- Step progression (next/previous/skip/go_to/finish)
- Entry and exit guards before navigation
- History stack and per-step statuses
- Navigation policy (visited-only / free)
- Race-safe async transitions
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from app.config import Config
from services.exceptions import GuardException
from utils.logger import get_logger

from .base_step import (
    NavigationPolicy, StepId, StepStatus, ValidationResult, Values, WizardStep
)
from .error_boundary import ErrorBoundary, guard_error_result
from .guards import GuardEvaluator, call_with_values
from .operation_counter import OperationCounter
from .step_registry import StepRegistry
from .wizard_context import WizardContext

logger = get_logger(__name__)


class StepNavigator(QObject):
    """
    Manages navigation between wizard steps.

    Responsibilities:
    - Keep the active step inside the visible steps
    - Run guards and commit transitions
    - Track history and step statuses
    - Emit signals for UI updates

    Async commands (next, skip, go_to, finish) may overlap. The most recently
    issued one wins; older ones are discarded after their guards settle.
    """

    # Signals
    step_changed = pyqtSignal(str, str)  # from_id, to_id
    busy_changed = pyqtSignal(bool)
    errors_changed = pyqtSignal(object)  # ValidationResult or None
    values_changed = pyqtSignal(dict)
    status_changed = pyqtSignal(str, str)  # step_id, status
    state_changed = pyqtSignal()
    validation_failed = pyqtSignal(object)  # ValidationResult
    finished = pyqtSignal(dict)
    cancelled = pyqtSignal()

    def __init__(
        self,
        registry: StepRegistry,
        on_finish: Callable[[Values], Any],
        context: Optional[WizardContext] = None,
        start_at: Optional[StepId] = None,
        on_cancel: Optional[Callable[[], None]] = None,
        on_step_change: Optional[Callable[[StepId, StepId, Values], None]] = None,
        navigation_policy=NavigationPolicy.VISITED_ONLY,
        parent: Optional[QObject] = None,
    ):
        """
        Initialize the navigator.

        Args:
            registry: Step definitions
            on_finish: Called with the values when the flow completes
            context: Existing state to resume from; a fresh one is created if omitted
            start_at: Initial step, ignored unless it is visible
            on_cancel: Observer for cancel()
            on_step_change: Observer for committed transitions
            navigation_policy: "visited-only" or "free"
            parent: Parent object
        """
        super().__init__(parent)
        if not callable(on_finish):
            raise ValueError("on_finish must be callable")

        self.registry = registry
        self.context = context if context is not None else WizardContext()
        self.navigation_policy = NavigationPolicy(navigation_policy)
        self.guards = GuardEvaluator(registry)
        self.operations = OperationCounter(on_busy_changed=self._on_busy_changed)
        self.error_boundary = ErrorBoundary("wizard", self)

        self._on_finish = on_finish
        self._on_cancel = self.error_boundary.protect(on_cancel, "on_cancel")
        self._on_step_change = self.error_boundary.protect(on_step_change, "on_step_change")

        if context is not None:
            self._prune_history()
        if start_at is not None and start_at in self.visible_step_ids:
            self.context.active_step_id = start_at
        elif start_at is not None:
            logger.debug(f"Ignoring start_at '{start_at}': not a visible step")
        self._repair_cursor()

        logger.info(
            f"Wizard {self.context.wizard_id} ready at step '{self.context.active_step_id}' "
            f"({len(self.registry)} steps, policy={self.navigation_policy.value})"
        )

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def values(self) -> Values:
        return dict(self.context.values)

    @property
    def history(self) -> List[StepId]:
        return list(self.context.history)

    @property
    def status_by_id(self) -> Dict[StepId, StepStatus]:
        return dict(self.context.status_by_id)

    @property
    def errors(self) -> Optional[ValidationResult]:
        return self.context.errors

    @property
    def is_busy(self) -> bool:
        return self.operations.is_busy

    @property
    def visible_steps(self) -> List[WizardStep]:
        return self.registry.visible_steps(self.context.values)

    @property
    def visible_step_ids(self) -> List[StepId]:
        return self.registry.visible_step_ids(self.context.values)

    @property
    def active_step_id(self) -> Optional[StepId]:
        return self.context.active_step_id

    @property
    def active_step(self) -> Optional[WizardStep]:
        return self.registry.find(self.context.active_step_id)

    @property
    def active_index(self) -> int:
        """Index of the active step among visible steps, -1 if none."""
        visible = self.visible_step_ids
        if self.context.active_step_id in visible:
            return visible.index(self.context.active_step_id)
        return -1

    @property
    def is_first_step(self) -> bool:
        return self.active_index == 0

    @property
    def is_last_step(self) -> bool:
        visible = self.visible_step_ids
        return bool(visible) and self.active_index == len(visible) - 1

    def get_step_status(self, step_id: StepId) -> StepStatus:
        """Status of a step; the active step is always reported as active."""
        if step_id == self.context.active_step_id:
            return StepStatus.ACTIVE
        return self.context.get_recorded_status(step_id) or StepStatus.UPCOMING

    def can_go_to(self, step_id: StepId) -> bool:
        """Check whether go_to(step_id) is allowed by the navigation policy."""
        if step_id not in self.visible_step_ids:
            return False
        if step_id == self.context.active_step_id:
            return True
        if self.navigation_policy == NavigationPolicy.FREE:
            return True

        status = self.context.get_recorded_status(step_id)
        if status is not None and status != StepStatus.UPCOMING:
            return True
        return step_id in self.context.history

    def get_completed_steps_count(self) -> int:
        """Number of visible steps recorded as complete or skipped."""
        done = (StepStatus.COMPLETE, StepStatus.SKIPPED)
        return sum(
            1 for step_id in self.visible_step_ids
            if self.context.get_recorded_status(step_id) in done
        )

    def get_progress(self) -> Tuple[int, int]:
        """(completed or skipped, total) over the visible steps."""
        return self.get_completed_steps_count(), len(self.visible_step_ids)

    def get_progress_percentage(self) -> float:
        """
        Get current progress as percentage.

        Returns:
            Progress percentage (0.0 to 100.0)
        """
        done, total = self.get_progress()
        if total == 0:
            return 0.0
        return (done / total) * 100.0

    # =========================================================================
    # Synchronous commands
    # =========================================================================

    def set_values(self, partial: Values):
        """Shallow-merge values, clear errors and repair the cursor if needed."""
        self.context.merge_values(partial)
        self._set_errors(None)
        self.values_changed.emit(dict(self.context.values))
        self._repair_cursor()
        self.state_changed.emit()

    def clear_errors(self):
        self._set_errors(None)
        self.state_changed.emit()

    def previous(self):
        """
        Navigate back to the most recent visible step in history.

        Entries that are hidden or equal to the active step are discarded on
        the way. Never guarded.
        """
        if self.is_busy:
            logger.debug("previous() ignored: a transition is in flight")
            return

        visible = self.visible_step_ids
        remaining = list(self.context.history)
        while remaining:
            candidate = remaining.pop()
            if candidate in visible and candidate != self.context.active_step_id:
                logger.info(f"Navigating back: '{self.context.active_step_id}' -> '{candidate}'")
                self._commit_transition(self.context.active_step_id, candidate, remaining)
                return

        logger.debug("previous() ignored: no visible step in history")

    def cancel(self):
        """Cancel the flow."""
        logger.info(f"Wizard {self.context.wizard_id} cancelled")
        self.context.status = WizardContext.STATUS_CANCELLED
        self.context.touch()
        self._on_cancel()
        self.cancelled.emit()
        self.state_changed.emit()

    # =========================================================================
    # Asynchronous commands
    # =========================================================================

    async def next(self):
        """Validate the active step and move to its successor, or finish."""
        step = self.active_step
        if step is None:
            logger.debug("next() ignored: no active step")
            return

        values = self.values
        op_id = self.operations.begin()
        try:
            if not await self._exit_active_step(op_id, step, values):
                return

            visible = self.registry.visible_step_ids(values)
            try:
                to_id = await self.guards.resolve_next_step_id(step.id, values, visible)
            except GuardException as e:
                if self._is_current(op_id, step.id):
                    self._fail_step(step.id, guard_error_result(e), e)
                return
            if not self._is_current(op_id, step.id):
                return

            if to_id is None:
                await self._finish_flow(op_id, step, values, StepStatus.COMPLETE)
                return

            allowed = await self._enter(to_id, values)
            if not self._is_current(op_id, step.id, to_id):
                return

            self._set_status(step.id, StepStatus.COMPLETE)
            if not allowed:
                self._block(to_id)
                return

            logger.info(f"Navigating: '{step.id}' -> '{to_id}'")
            self._commit_transition(step.id, to_id, self.context.history + [step.id])
        finally:
            self.operations.end(op_id)

    async def skip(self):
        """Skip an optional step without running its exit guard."""
        step = self.active_step
        if step is None or not step.optional:
            logger.debug("skip() ignored: active step is not optional")
            return

        values = self.values
        op_id = self.operations.begin()
        try:
            visible = self.registry.visible_step_ids(values)
            try:
                to_id = await self.guards.resolve_next_step_id(step.id, values, visible)
            except GuardException as e:
                if self._is_current(op_id, step.id):
                    self._fail_step(step.id, guard_error_result(e), e)
                return
            if not self._is_current(op_id, step.id):
                return

            if to_id is None:
                self._set_status(step.id, StepStatus.SKIPPED)
                await self._finish_flow(op_id, step, values, StepStatus.SKIPPED)
                return

            allowed = await self._enter(to_id, values)
            if not self._is_current(op_id, step.id, to_id):
                return

            self._set_status(step.id, StepStatus.SKIPPED)
            if not allowed:
                self._block(to_id)
                return

            logger.info(f"Skipping: '{step.id}' -> '{to_id}'")
            self._commit_transition(step.id, to_id, self.context.history + [step.id])
        finally:
            self.operations.end(op_id)

    async def go_to(self, step_id: StepId):
        """
        Jump to a reachable step.

        visited-only truncates history back to before the target's last
        occurrence; free pushes the current step like next() does.
        """
        from_id = self.context.active_step_id
        if step_id == from_id:
            return
        if not self.can_go_to(step_id):
            logger.debug(f"go_to('{step_id}') ignored: step not reachable")
            return

        values = self.values
        op_id = self.operations.begin()
        try:
            allowed = await self._enter(step_id, values)
            if not self._is_current(op_id, from_id, step_id):
                return
            if not allowed:
                self._block(step_id)
                return

            history = self.context.history
            if self.navigation_policy == NavigationPolicy.VISITED_ONLY:
                if step_id in history:
                    last = len(history) - 1 - history[::-1].index(step_id)
                    history = history[:last]
                else:
                    history = list(history)
            else:
                history = history + [from_id]

            logger.info(f"Jumping: '{from_id}' -> '{step_id}'")
            self._commit_transition(from_id, step_id, history)
        finally:
            self.operations.end(op_id)

    async def finish(self):
        """Validate the active step and complete the flow."""
        step = self.active_step
        if step is None:
            logger.debug("finish() ignored: no active step")
            return

        values = self.values
        op_id = self.operations.begin()
        try:
            if not await self._exit_active_step(op_id, step, values):
                return
            await self._finish_flow(op_id, step, values, StepStatus.COMPLETE)
        finally:
            self.operations.end(op_id)

    # =========================================================================
    # Internals
    # =========================================================================

    def _is_current(self, op_id: int, from_id: Optional[StepId],
                    to_id: Optional[StepId] = None) -> bool:
        """
        True when the operation may still commit: no newer operation started,
        the cursor has not moved and the target is still visible.
        """
        if self.operations.is_stale(op_id):
            logger.debug(f"Discarding stale operation #{op_id}")
            return False
        if self.context.active_step_id != from_id:
            logger.debug(f"Discarding operation #{op_id}: active step moved")
            return False
        if to_id is not None and to_id not in self.visible_step_ids:
            logger.debug(f"Discarding operation #{op_id}: '{to_id}' is no longer visible")
            return False
        return True

    async def _exit_active_step(self, op_id: int, step: WizardStep, values: Values) -> bool:
        """Run the exit guard; record failures. Returns True when the step may be left."""
        try:
            validation = await self.guards.can_exit_step(step, values)
        except GuardException as e:
            if self._is_current(op_id, step.id):
                self._fail_step(step.id, guard_error_result(e), e)
            return False
        if not self._is_current(op_id, step.id):
            return False

        if not validation.ok:
            self._fail_step(step.id, validation)
            return False
        return True

    async def _enter(self, step_id: StepId, values: Values) -> bool:
        """Run the entry guard; a raising guard counts as a rejection."""
        try:
            return await self.guards.can_enter_step(step_id, values)
        except GuardException as e:
            logger.error(f"Entry guard of '{step_id}' raised: {e.message}",
                         exc_info=e.original_error)
            return False

    async def _finish_flow(self, op_id: int, step: WizardStep, values: Values,
                           status_on_success: StepStatus) -> bool:
        """Call on_finish; failures become errors on the step."""
        try:
            await call_with_values(self._on_finish, values)
        except Exception as e:
            if self.operations.is_stale(op_id):
                return False
            logger.error(f"on_finish failed at step '{step.id}': {e}", exc_info=True)
            message = str(e) or Config.FINISH_FAILED_MESSAGE
            self._fail_step(step.id, ValidationResult.failure([message]))
            return False

        if self.operations.is_stale(op_id):
            return False

        self._set_status(step.id, status_on_success)
        self.context.status = WizardContext.STATUS_COMPLETED
        self._set_errors(None)
        logger.info(f"Wizard {self.context.wizard_id} finished at step '{step.id}'")
        self.finished.emit(dict(values))
        self.state_changed.emit()
        return True

    def _commit_transition(self, from_id: StepId, to_id: StepId, history: List[StepId]):
        self.context.history = list(history)
        self.context.active_step_id = to_id
        self.context.touch()
        self._set_errors(None)

        self._on_step_change(from_id, to_id, self.values)
        self.step_changed.emit(from_id, to_id)
        self.state_changed.emit()

    def _fail_step(self, step_id: StepId, result: ValidationResult,
                   error: Optional[GuardException] = None):
        if error is not None:
            logger.error(f"Guard '{error.guard}' of '{step_id}' raised: {error.message}",
                         exc_info=error.original_error)
        else:
            logger.warning(f"Step '{step_id}' failed validation: {result.errors}")
        self._set_errors(result)
        self._set_status(step_id, StepStatus.ERROR)
        self.state_changed.emit()

    def _block(self, step_id: StepId):
        logger.warning(f"Entry to step '{step_id}' was blocked")
        self._set_status(step_id, StepStatus.BLOCKED)
        self.state_changed.emit()

    def _set_status(self, step_id: StepId, status: StepStatus):
        self.context.set_step_status(step_id, status)
        self.status_changed.emit(step_id, status.value)

    def _set_errors(self, errors: Optional[ValidationResult]):
        if errors is None and self.context.errors is None:
            return
        self.context.errors = errors
        self.errors_changed.emit(errors)
        if errors is not None and not errors.ok:
            self.validation_failed.emit(errors)

    def _repair_cursor(self) -> bool:
        """
        Keep the active step inside the visible steps.

        Falls back to the most recent visible history entry, else the first
        visible step. History is pruned to the visible ids and keeps
        the fallback entry. Never runs guards and never notifies on_step_change.

        Returns:
            True if the active step was moved
        """
        visible = self.visible_step_ids
        active = self.context.active_step_id

        if not visible:
            if active is None:
                return False
            logger.info(f"No visible steps left; '{active}' deactivated")
            self.context.active_step_id = None
            return True

        if active in visible:
            return False

        remaining = [step_id for step_id in self.context.history if step_id in visible]
        fallback = remaining[-1] if remaining else visible[0]

        if active is None:
            logger.debug(f"Placing cursor on '{fallback}'")
        else:
            logger.info(f"Active step '{active}' is not visible; falling back to '{fallback}'")
        self.context.history = remaining
        self.context.active_step_id = fallback
        self.context.touch()
        self._set_errors(None)
        return True

    def _prune_history(self):
        """Drop history entries that are not visible under the current values."""
        visible = self.visible_step_ids
        if not visible:
            return
        pruned = [step_id for step_id in self.context.history if step_id in visible]
        if len(pruned) != len(self.context.history):
            logger.debug(f"Pruned hidden steps from history: {self.context.history} -> {pruned}")
            self.context.history = pruned

    def _on_busy_changed(self, busy: bool):
        self.busy_changed.emit(busy)
        self.state_changed.emit()
