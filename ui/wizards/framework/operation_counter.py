# -*- coding: utf-8 -*-
"""
Operation Counter - Generation token for async wizard transitions.

Every async command takes a new generation before its first await and
checks it after each await. Only the latest generation may commit state or
clear the busy flag; older ones are stale and stop silently. Guards are not
cancelled, their results are ignored.
"""

from typing import Callable, Optional


class OperationCounter:
    """Monotonic generation counter with a busy flag."""

    def __init__(self, on_busy_changed: Optional[Callable[[bool], None]] = None):
        self._current = 0
        self._busy = False
        self._on_busy_changed = on_busy_changed

    @property
    def current(self) -> int:
        return self._current

    @property
    def is_busy(self) -> bool:
        return self._busy

    def begin(self) -> int:
        """Start a new operation and return its generation id."""
        self._current += 1
        self._set_busy(True)
        return self._current

    def is_stale(self, op_id: int) -> bool:
        """True when a newer operation started after op_id."""
        return op_id != self._current

    def end(self, op_id: int):
        """Finish an operation; only the latest one clears the busy flag."""
        if not self.is_stale(op_id):
            self._set_busy(False)

    def _set_busy(self, busy: bool):
        if busy == self._busy:
            return
        self._busy = busy
        if self._on_busy_changed is not None:
            self._on_busy_changed(busy)
