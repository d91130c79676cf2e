# -*- coding: utf-8 -*-
"""
Observer isolation for the wizard navigator.

Host observers (on_step_change, on_cancel) run after a transition has been
committed. A raising observer is logged and reported through
observer_failed; the transition stands.
"""

from typing import Callable, Dict, Optional
from functools import wraps

from PyQt5.QtCore import QObject, pyqtSignal

from services.exceptions import GuardException
from utils.logger import get_logger

from .base_step import ValidationResult

logger = get_logger(__name__)


class ErrorBoundary(QObject):
    """Counts and reports failures of the observers it wraps."""

    observer_failed = pyqtSignal(str, str)  # observer name, error message

    def __init__(self, wizard_name: str, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.wizard_name = wizard_name
        self.failures: Dict[str, int] = {}
        self.last_error: Optional[Exception] = None

    @property
    def error_count(self) -> int:
        return sum(self.failures.values())

    def protect(self, observer: Optional[Callable], observer_name: str) -> Callable:
        """
        Wrap an observer so it cannot raise into the navigator.

        Args:
            observer: Callback supplied by the host; None gives a no-op
            observer_name: Name used in logs and in failures

        Returns:
            Callable with the observer's signature returning None on failure
        """
        if observer is None:
            return lambda *args, **kwargs: None

        @wraps(observer)
        def guarded(*args, **kwargs):
            try:
                return observer(*args, **kwargs)
            except Exception as e:
                self._record(observer_name, e)
                return None

        return guarded

    def _record(self, observer_name: str, error: Exception):
        self.failures[observer_name] = self.failures.get(observer_name, 0) + 1
        self.last_error = error

        logger.error(f"{self.wizard_name}: observer {observer_name} raised {error!r}",
                     exc_info=error)
        self.observer_failed.emit(observer_name, str(error))

    def get_error_summary(self) -> str:
        """One line per failing observer plus the last error."""
        if not self.failures:
            return "No errors"

        lines = [f"{name}: {count} failure(s)" for name, count in sorted(self.failures.items())]
        lines.append(f"Last error: {type(self.last_error).__name__} - {self.last_error}")
        return "\n".join(lines)


def guard_error_result(error: GuardException) -> ValidationResult:
    """Convert a failed guard into the error result shown to the step body."""
    message = error.message or type(error.original_error).__name__
    return ValidationResult.failure([message])
