# -*- coding: utf-8 -*-
"""
Render API - What step bodies and presentation views may see and do.

StepRenderApi is handed to the active step's render callback: it can read
and update values and drive navigation.

StepperApi is handed to passive views (steppers, footers). It is read-mostly:
it can jump with go_to() but cannot change values, skip or finish, so views
have no way around the guards.
"""

from typing import Any, Dict, List, Optional, Tuple

from .base_step import StepId, StepStatus, ValidationResult, Values, WizardStep
from .step_navigator import StepNavigator


class StepRenderApi:
    """Read/command surface for the active step body."""

    __slots__ = ("_navigator",)

    def __init__(self, navigator: StepNavigator):
        self._navigator = navigator

    @property
    def values(self) -> Values:
        return self._navigator.values

    @property
    def errors(self) -> Optional[ValidationResult]:
        return self._navigator.errors

    @property
    def active_step_id(self) -> Optional[StepId]:
        return self._navigator.active_step_id

    @property
    def is_busy(self) -> bool:
        return self._navigator.is_busy

    def set_values(self, partial: Values):
        self._navigator.set_values(partial)

    async def next(self):
        await self._navigator.next()

    def previous(self):
        self._navigator.previous()

    async def go_to(self, step_id: StepId):
        await self._navigator.go_to(step_id)

    async def skip(self):
        await self._navigator.skip()

    async def finish(self):
        await self._navigator.finish()


class StepperApi:
    """Read-mostly surface for steppers and footers."""

    __slots__ = ("_navigator", "labels", "mobile_labels")

    def __init__(self, navigator: StepNavigator,
                 labels: Optional[Dict[str, Any]] = None,
                 mobile_labels: Optional[Dict[str, Any]] = None):
        self._navigator = navigator
        self.labels = dict(labels or {})
        self.mobile_labels = dict(mobile_labels or {})

    @property
    def visible_steps(self) -> List[WizardStep]:
        return self._navigator.visible_steps

    @property
    def active_step_id(self) -> Optional[StepId]:
        return self._navigator.active_step_id

    def get_step_status(self, step_id: StepId) -> StepStatus:
        return self._navigator.get_step_status(step_id)

    def can_go_to(self, step_id: StepId) -> bool:
        return self._navigator.can_go_to(step_id)

    async def go_to(self, step_id: StepId):
        await self._navigator.go_to(step_id)

    def progress(self) -> Tuple[int, int]:
        """(completed or skipped, total) over the visible steps."""
        return self._navigator.get_progress()
