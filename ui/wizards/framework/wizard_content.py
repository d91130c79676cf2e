# -*- coding: utf-8 -*-
"""
Wizard Content - Qt host for the active step body.

Calls the active step's render(api) whenever the active step changes and
keeps the returned widget in its layout. A body widget that defines
refresh() is asked to update itself on other state changes (errors, busy
flag, values) instead of being rebuilt.
"""

from typing import Optional

from PyQt5.QtWidgets import QLabel, QVBoxLayout, QWidget

from utils.logger import get_logger

from .base_step import StepId
from .base_wizard import Wizard

logger = get_logger(__name__)


class WizardContent(QWidget):
    """Shows the body of the active wizard step."""

    def __init__(self, wizard: Wizard, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.wizard = wizard
        self.body: Optional[QWidget] = None
        self._rendered_step_id: Optional[StepId] = None

        self.main_layout = QVBoxLayout(self)
        self.main_layout.setContentsMargins(0, 24, 0, 24)

        wizard.navigator.state_changed.connect(self.refresh)
        self._render()

    @property
    def rendered_step_id(self) -> Optional[StepId]:
        return self._rendered_step_id

    def refresh(self):
        """Re-render on step change, otherwise let the body refresh itself."""
        if self.wizard.navigator.active_step_id != self._rendered_step_id:
            self._render()
            return

        refresh = getattr(self.body, "refresh", None)
        if callable(refresh):
            refresh()

    def _render(self):
        if self.body is not None:
            self.main_layout.removeWidget(self.body)
            self.body.setParent(None)
            self.body.deleteLater()
            self.body = None

        step_id = self.wizard.navigator.active_step_id
        self._rendered_step_id = step_id
        if step_id is None:
            return

        body = self.wizard.render_active_step()
        if body is None:
            return
        if not isinstance(body, QWidget):
            body = QLabel(str(body))

        logger.debug(f"Rendered body for step '{step_id}'")
        self.body = body
        self.main_layout.addWidget(body)
