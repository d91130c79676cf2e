# -*- coding: utf-8 -*-
"""Custom exceptions for the wizard engine."""


class WizardException(Exception):
    """Base exception for wizard engine errors."""

    def __init__(self, message: str, step_id: str = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.step_id = step_id
        self.context = context

    def __str__(self):
        if self.step_id:
            return f"[{self.step_id}] {self.message}"
        return self.message


class GuardException(WizardException):
    """Raised when a step guard (can_enter, can_exit, next_step) fails unexpectedly."""

    def __init__(self, message: str, step_id: str = None, guard: str = None,
                 original_error: Exception = None):
        super().__init__(message, step_id=step_id, context=guard)
        self.guard = guard
        self.original_error = original_error


class DuplicateStepException(WizardException):
    """Raised when two step definitions share the same id."""


class UnknownStepException(WizardException):
    """Raised when a step id does not exist in the registry."""
