# -*- coding: utf-8 -*-
"""
Wizard Context - Mutable state of one wizard flow.

Holds:
- Flow values (shallow-merged on every update)
- History stack of previously active visible steps
- Recorded step statuses
- Last validation/finish errors
- Lifecycle status and timestamps

The context is owned by the StepNavigator; nothing else writes to it.
There is no persistence: to_dict()/from_dict() let callers snapshot and
restore a flow themselves.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
import uuid

from .base_step import StepId, StepStatus, ValidationResult, Values


class WizardContext:
    """State of a running wizard."""

    STATUS_IN_PROGRESS = "in_progress"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"

    def __init__(self, values: Optional[Values] = None):
        """Initialize base context properties."""
        self.wizard_id: str = str(uuid.uuid4())
        self.status: str = self.STATUS_IN_PROGRESS
        self.created_at: datetime = datetime.now()
        self.updated_at: datetime = datetime.now()

        self.values: Values = dict(values or {})
        self.history: List[StepId] = []
        self.status_by_id: Dict[StepId, StepStatus] = {}
        self.active_step_id: Optional[StepId] = None
        self.errors: Optional[ValidationResult] = None

    def touch(self):
        self.updated_at = datetime.now()

    def merge_values(self, partial: Values):
        """Shallow-merge values."""
        self.values = {**self.values, **partial}
        self.touch()

    def set_step_status(self, step_id: StepId, status: StepStatus):
        """Record a step status."""
        self.status_by_id[step_id] = status
        self.touch()

    def get_recorded_status(self, step_id: StepId) -> Optional[StepStatus]:
        return self.status_by_id.get(step_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize context to dictionary."""
        return {
            "wizard_id": self.wizard_id,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "active_step_id": self.active_step_id,
            "history": list(self.history),
            "status_by_id": {k: v.value for k, v in self.status_by_id.items()},
            "values": dict(self.values),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WizardContext":
        """
        Restore context from dictionary.

        Errors are not restored; they belong to the attempt that raised them.
        """
        context = cls(values=data.get("values", {}))
        context.wizard_id = data.get("wizard_id", context.wizard_id)
        context.status = data.get("status", cls.STATUS_IN_PROGRESS)
        context.active_step_id = data.get("active_step_id")
        context.history = list(data.get("history", []))
        context.status_by_id = {
            k: StepStatus(v) for k, v in data.get("status_by_id", {}).items()
        }

        # Parse datetime strings
        if "created_at" in data:
            context.created_at = datetime.fromisoformat(data["created_at"])
        if "updated_at" in data:
            context.updated_at = datetime.fromisoformat(data["updated_at"])
        return context
