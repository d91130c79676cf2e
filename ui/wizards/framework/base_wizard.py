# -*- coding: utf-8 -*-
"""
Base Wizard - Entry point that wires a wizard together.

Builds from the host's configuration:
- Step registry
- Navigator (state machine)
- Render API for the active step body
- Stepper API for passive views
- Presentation knobs, passed through untouched
"""

from typing import Any, Callable, Dict, Iterable, List, Optional
from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field

from PyQt5.QtCore import QObject

from app.config import Config

from .base_step import StepId, Values, WizardStep
from .render_api import StepperApi, StepRenderApi
from .step_navigator import StepNavigator
from .step_registry import StepRegistry
from .wizard_context import WizardContext


@dataclass
class WizardPresentation:
    """Options for stepper/footer views. The engine never reads them."""
    header_variant: str = Config.DEFAULT_HEADER_VARIANT
    header_size: str = Config.DEFAULT_HEADER_SIZE
    cancel_label: str = Config.CANCEL_LABEL
    previous_label: str = Config.PREVIOUS_LABEL
    next_label: str = Config.NEXT_LABEL
    finish_label: str = Config.FINISH_LABEL
    skip_label: str = Config.SKIP_LABEL
    show_cancel: bool = False
    labels: Dict[str, Any] = field(default_factory=dict)
    mobile_labels: Dict[str, Any] = field(default_factory=dict)


class Wizard(QObject):
    """A configured wizard flow."""

    def __init__(
        self,
        steps: Iterable[WizardStep],
        initial_values: Optional[Values],
        on_finish: Callable[[Values], Any],
        start_at: Optional[StepId] = None,
        on_cancel: Optional[Callable[[], None]] = None,
        on_step_change: Optional[Callable[[StepId, StepId, Values], None]] = None,
        navigation_policy: Optional[str] = None,
        presentation: Optional[WizardPresentation] = None,
        context: Optional[WizardContext] = None,
        parent: Optional[QObject] = None,
    ):
        """
        Initialize the wizard.

        Args:
            steps: Ordered step definitions
            initial_values: Starting values (ignored when context is given)
            on_finish: Called with the final values
            start_at: Initial step id
            on_cancel: Observer for cancellation
            on_step_change: Observer for committed transitions
            navigation_policy: "visited-only" (default from Config) or "free"
            presentation: Stepper/footer options
            context: Restored state to resume from
            parent: Parent object
        """
        super().__init__(parent)

        self.registry = StepRegistry(steps)
        if context is None:
            context = WizardContext(values=initial_values)
        self.presentation = presentation or WizardPresentation()

        self.navigator = StepNavigator(
            self.registry,
            on_finish=on_finish,
            context=context,
            start_at=start_at,
            on_cancel=on_cancel,
            on_step_change=on_step_change,
            navigation_policy=navigation_policy or Config.DEFAULT_NAVIGATION_POLICY,
            parent=self,
        )

        self.render_api = StepRenderApi(self.navigator)
        self.stepper_api = StepperApi(
            self.navigator,
            labels=self.presentation.labels,
            mobile_labels=self.presentation.mobile_labels,
        )

    @property
    def context(self) -> WizardContext:
        return self.navigator.context

    @property
    def steps(self) -> List[WizardStep]:
        return list(self.registry.steps)

    def render_active_step(self) -> Any:
        """Render the active step body, or None when no step is active."""
        step = self.navigator.active_step
        if step is None:
            return None
        return step.render(self.render_api)

    def snapshot(self) -> Dict[str, Any]:
        """State a caller can store to resume the flow later."""
        return self.context.to_dict()


# Combine PyQt5 metaclass with ABC metaclass
class ABCQObjectMeta(type(QObject), ABCMeta):
    """Metaclass that combines PyQt5's metaclass with ABC."""
    pass


class BaseWizard(Wizard, metaclass=ABCQObjectMeta):
    """
    Abstract base class for wizards defined by subclassing.

    Subclasses must implement:
    - create_steps(): Create and return list of wizard steps
    - on_submit(): Handle final submission
    """

    def __init__(
        self,
        start_at: Optional[StepId] = None,
        navigation_policy: Optional[str] = None,
        presentation: Optional[WizardPresentation] = None,
        context: Optional[WizardContext] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(
            steps=self.create_steps(),
            initial_values=self.get_initial_values(),
            on_finish=self.on_submit,
            start_at=start_at,
            on_cancel=self.on_cancel,
            on_step_change=self.on_step_change,
            navigation_policy=navigation_policy,
            presentation=presentation,
            context=context,
            parent=parent,
        )

    # =========================================================================
    # Abstract Methods - Must be implemented by subclasses
    # =========================================================================

    @abstractmethod
    def create_steps(self) -> List[WizardStep]:
        """
        Create and return list of wizard steps.

        Returns:
            List of WizardStep definitions
        """
        pass

    @abstractmethod
    def on_submit(self, values: Values) -> Any:
        """
        Handle wizard submission.

        May be a coroutine. Raising marks the last step as failed and keeps
        the wizard open so the user can retry.
        """
        pass

    # =========================================================================
    # Optional Methods - Can be overridden by subclasses
    # =========================================================================

    def get_initial_values(self) -> Values:
        """Starting values. Override to customize."""
        return {}

    def get_wizard_title(self) -> str:
        """Get wizard title. Override to customize."""
        return Config.APP_NAME

    def on_cancel(self):
        """Handle wizard cancellation. Override to customize."""
        pass

    def on_step_change(self, from_id: StepId, to_id: StepId, values: Values):
        """Observe committed transitions. Override to customize."""
        pass
