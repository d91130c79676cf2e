# -*- coding: utf-8 -*-
"""
Base Step - Step definition model for wizards.

A wizard is described by an ordered list of WizardStep records. Each record
is plain data plus optional callables:
- is_visible(values): dynamic visibility
- can_enter(values): entry guard (bool, sync or async)
- can_exit(values): exit validation (ValidationResult or bool, sync or async)
- next_step(values): explicit successor id, or None to finish
- render(api): builds the step body from the render API
"""

from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union
from dataclasses import dataclass, field
from enum import Enum

from app.config import Config


StepId = str
Values = Dict[str, Any]


class StepStatus(str, Enum):
    """Status of a step as seen by steppers."""
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETE = "complete"
    SKIPPED = "skipped"
    ERROR = "error"
    BLOCKED = "blocked"


class NavigationPolicy(str, Enum):
    """Rules deciding which non-adjacent steps go_to() may reach."""
    VISITED_ONLY = "visited-only"
    FREE = "free"


@dataclass
class ValidationResult:
    """Result of step validation."""
    ok: bool = True
    errors: List[str] = field(default_factory=list)
    field_errors: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, errors: List[str],
                field_errors: Optional[Dict[str, str]] = None) -> "ValidationResult":
        return cls(ok=False, errors=list(errors), field_errors=dict(field_errors or {}))

    @classmethod
    def from_value(cls, value: Any) -> "ValidationResult":
        """
        Normalize a guard return value.

        Accepts a ValidationResult, a bool, or a mapping shaped like
        {"ok": False, "errors": [...], "fieldErrors": {...}}.

        Raises:
            TypeError: for any other value
        """
        if isinstance(value, ValidationResult):
            return value
        if isinstance(value, bool):
            return cls.success() if value else cls.failure([Config.BLOCKED_MESSAGE])
        if isinstance(value, Mapping) and "ok" in value:
            if value["ok"]:
                return cls.success()
            field_errors = value.get("field_errors", value.get("fieldErrors")) or {}
            return cls.failure(list(value.get("errors") or []), dict(field_errors))
        raise TypeError(
            f"Guard returned {type(value).__name__}; expected ValidationResult, bool or mapping"
        )

    def add_error(self, message: str, field_name: Optional[str] = None):
        """Add an error message, optionally tied to a field."""
        self.errors.append(message)
        if field_name:
            self.field_errors[field_name] = message
        self.ok = False

    def has_errors(self) -> bool:
        """Check if there are any errors."""
        return len(self.errors) > 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"ok": self.ok}
        if not self.ok:
            data["errors"] = list(self.errors)
            if self.field_errors:
                data["field_errors"] = dict(self.field_errors)
        return data


VisibilityPredicate = Callable[[Values], bool]
EntryGuard = Callable[[Values], Union[bool, Awaitable[bool]]]
ExitGuard = Callable[[Values], Union[ValidationResult, bool, Awaitable[Any]]]
NextResolver = Callable[[Values], Union[Optional[StepId], Awaitable[Optional[StepId]]]]


@dataclass(frozen=True)
class WizardStep:
    """
    Immutable definition of one wizard step.

    title, description and icon are display payloads the engine never
    interprets.
    """
    id: StepId
    title: Any
    render: Callable[[Any], Any]
    description: Any = None
    icon: Any = None
    optional: bool = False
    is_visible: Optional[VisibilityPredicate] = None
    can_enter: Optional[EntryGuard] = None
    can_exit: Optional[ExitGuard] = None
    next_step: Optional[NextResolver] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Wizard step id must be a non-empty string")
        if not callable(self.render):
            raise ValueError(f"Wizard step '{self.id}' needs a callable render")

    def visible_for(self, values: Values) -> bool:
        """Evaluate the visibility predicate (visible when none is set)."""
        if self.is_visible is None:
            return True
        return bool(self.is_visible(values))
