# -*- coding: utf-8 -*-
"""
Wizard Engine Service Layer
"""

from .exceptions import (
    DuplicateStepException,
    GuardException,
    UnknownStepException,
    WizardException,
)

__all__ = [
    "DuplicateStepException",
    "GuardException",
    "UnknownStepException",
    "WizardException",
]
