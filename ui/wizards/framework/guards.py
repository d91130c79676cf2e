# -*- coding: utf-8 -*-
"""
Guard Evaluator - Invokes and normalizes step guards.

Guards may be plain functions or coroutines; their results are awaited when
awaitable. Nothing here mutates wizard state: results are returned to the
StepNavigator, which alone commits transitions.
"""

import inspect
from typing import Any, Callable, List, Optional

from .base_step import StepId, ValidationResult, Values, WizardStep
from .step_registry import StepRegistry
from services.exceptions import GuardException
from utils.logger import get_logger

logger = get_logger(__name__)


async def call_with_values(func: Callable[[Values], Any], values: Values) -> Any:
    """Call a guard or callback with the values, awaiting the result if needed."""
    result = func(values)
    if inspect.isawaitable(result):
        result = await result
    return result


class GuardEvaluator:
    """Runs can_enter, can_exit and next_step for the steps of a registry."""

    def __init__(self, registry: StepRegistry):
        self.registry = registry

    async def can_enter_step(self, step_id: StepId, values: Values) -> bool:
        """
        Check the entry guard of a step.

        Returns:
            False for unknown steps, True when no guard is defined

        Raises:
            GuardException: if the guard itself raised
        """
        step = self.registry.find(step_id)
        if step is None:
            return False
        if step.can_enter is None:
            return True

        try:
            allowed = await call_with_values(step.can_enter, values)
        except Exception as e:
            raise GuardException(str(e), step_id=step_id, guard="can_enter",
                                 original_error=e) from e

        logger.debug(f"can_enter({step_id}) -> {bool(allowed)}")
        return bool(allowed)

    async def can_exit_step(self, step: Optional[WizardStep], values: Values) -> ValidationResult:
        """
        Run the exit validation of a step.

        Raises:
            GuardException: if the guard raised or returned an unsupported value
        """
        if step is None or step.can_exit is None:
            return ValidationResult.success()

        try:
            result = await call_with_values(step.can_exit, values)
            validation = ValidationResult.from_value(result)
        except Exception as e:
            raise GuardException(str(e), step_id=step.id, guard="can_exit",
                                 original_error=e) from e

        logger.debug(f"can_exit({step.id}) -> ok={validation.ok}")
        return validation

    async def resolve_next_step_id(self, from_id: StepId, values: Values,
                                   visible_ids: List[StepId]) -> Optional[StepId]:
        """
        Resolve the step that follows from_id.

        An explicit next_step resolver wins; otherwise the positional
        successor among the visible steps. None means the flow is complete.

        Raises:
            GuardException: if the resolver raised or named a step that is
                unknown or not visible
        """
        step = self.registry.find(from_id)
        if step is None:
            return None

        if step.next_step is not None:
            try:
                next_id = await call_with_values(step.next_step, values)
            except Exception as e:
                raise GuardException(str(e), step_id=from_id, guard="next_step",
                                     original_error=e) from e

            if next_id is None:
                return None
            if next_id not in self.registry:
                raise GuardException(f"Unknown next step '{next_id}'",
                                     step_id=from_id, guard="next_step")
            if next_id not in visible_ids:
                raise GuardException(f"Next step '{next_id}' is not visible",
                                     step_id=from_id, guard="next_step")
            return next_id

        if from_id not in visible_ids:
            return visible_ids[0] if visible_ids else None

        index = visible_ids.index(from_id)
        if index + 1 < len(visible_ids):
            return visible_ids[index + 1]
        return None
