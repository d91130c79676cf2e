# -*- coding: utf-8 -*-
"""
Wizard Framework - Generic multi-step flow engine.

Provides the step model, navigation state machine, guard evaluation and
render surfaces for building sequential or branching wizards with
dynamic step visibility and async guards.
"""

from .base_step import (
    NavigationPolicy, StepStatus, ValidationResult, WizardStep
)
from .base_wizard import BaseWizard, Wizard, WizardPresentation
from .render_api import StepperApi, StepRenderApi
from .step_navigator import StepNavigator
from .step_registry import StepRegistry, compute_visible_steps
from .wizard_context import WizardContext

__all__ = [
    'BaseWizard',
    'NavigationPolicy',
    'StepNavigator',
    'StepRegistry',
    'StepRenderApi',
    'StepStatus',
    'StepperApi',
    'ValidationResult',
    'Wizard',
    'WizardContext',
    'WizardPresentation',
    'WizardStep',
    'compute_visible_steps',
]
