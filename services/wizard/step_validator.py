# -*- coding: utf-8 -*-
"""
Step validation service for wizard flows.

Builds can_exit guards from per-field rules, without UI coupling:

    can_exit=StepValidator()
        .require("workspace_name", "Workspace name is required")
        .min_length("workspace_name", 3, "Use at least 3 characters")
"""

from typing import Any, Callable, List, Tuple

from ui.wizards.framework.base_step import ValidationResult, Values


class StepValidator:
    """Validates wizard values field by field."""

    def __init__(self):
        self._rules: List[Tuple[str, Callable[[Any], bool], str]] = []

    def check(self, field_name: str, predicate: Callable[[Any], bool], message: str) -> "StepValidator":
        """Add a rule: predicate(values[field_name]) must be truthy."""
        self._rules.append((field_name, predicate, message))
        return self

    def require(self, field_name: str, message: str = None) -> "StepValidator":
        """The field must be present and non-blank."""
        def is_filled(value: Any) -> bool:
            if value is None:
                return False
            if isinstance(value, str):
                return bool(value.strip())
            if isinstance(value, (list, tuple, set, dict)):
                return len(value) > 0
            return True

        return self.check(field_name, is_filled, message or f"{field_name} is required")

    def min_length(self, field_name: str, length: int, message: str = None) -> "StepValidator":
        """The field, when filled, must have at least length characters/items."""
        return self.check(
            field_name,
            lambda value: value is None or len(value) >= length,
            message or f"{field_name} must have at least {length} characters",
        )

    def __call__(self, values: Values) -> ValidationResult:
        """
        Validate values.

        Only the first failing rule of each field is reported.
        """
        result = ValidationResult.success()
        for field_name, predicate, message in self._rules:
            if field_name in result.field_errors:
                continue
            if not predicate(values.get(field_name)):
                result.add_error(message, field_name)
        return result
