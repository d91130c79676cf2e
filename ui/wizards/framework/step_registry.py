# -*- coding: utf-8 -*-
"""
Step Registry - Ordered, immutable collection of wizard step definitions.

Also hosts the visibility resolver: the visible subset of the registry is
recomputed from the current values on every read and is the basis for all
index and navigation arithmetic.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .base_step import StepId, Values, WizardStep
from services.exceptions import DuplicateStepException, UnknownStepException


def compute_visible_steps(steps: Iterable[WizardStep], values: Values) -> List[WizardStep]:
    """Return the steps whose visibility predicate accepts the values, in order."""
    return [step for step in steps if step.visible_for(values)]


class StepRegistry:
    """Ordered step definitions, indexed by id."""

    def __init__(self, steps: Iterable[WizardStep]):
        self._steps: Tuple[WizardStep, ...] = tuple(steps)
        self._by_id: Dict[StepId, WizardStep] = {}
        for step in self._steps:
            if step.id in self._by_id:
                raise DuplicateStepException(
                    "Duplicate wizard step id", step_id=step.id
                )
            self._by_id[step.id] = step

    def __iter__(self) -> Iterator[WizardStep]:
        return iter(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._by_id

    @property
    def steps(self) -> Tuple[WizardStep, ...]:
        return self._steps

    @property
    def ids(self) -> List[StepId]:
        return [step.id for step in self._steps]

    def find(self, step_id: Optional[StepId]) -> Optional[WizardStep]:
        """Get a step by id, or None."""
        if step_id is None:
            return None
        return self._by_id.get(step_id)

    def get(self, step_id: StepId) -> WizardStep:
        """Get a step by id, raising UnknownStepException if absent."""
        step = self.find(step_id)
        if step is None:
            raise UnknownStepException("Unknown wizard step", step_id=step_id)
        return step

    def visible_steps(self, values: Values) -> List[WizardStep]:
        return compute_visible_steps(self._steps, values)

    def visible_step_ids(self, values: Values) -> List[StepId]:
        return [step.id for step in self.visible_steps(values)]
