# -*- coding: utf-8 -*-
"""
Step body shown for every workspace setup step.
"""

from typing import Callable, Optional

from PyQt5.QtWidgets import QLabel, QVBoxLayout, QWidget
from PyQt5.QtGui import QFont

from ui.wizards.framework.render_api import StepRenderApi


class SetupStepView(QWidget):
    """Title, description and the latest validation errors of a step."""

    def __init__(self, api: StepRenderApi, title: str, description: str = "",
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.api = api

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(12)

        self.title_label = QLabel(title)
        title_font = QFont()
        title_font.setPointSize(14)
        title_font.setBold(True)
        self.title_label.setFont(title_font)
        layout.addWidget(self.title_label)

        self.description_label = QLabel(description)
        self.description_label.setWordWrap(True)
        layout.addWidget(self.description_label)

        self.errors_label = QLabel()
        self.errors_label.setStyleSheet("color: #E74C3C;")
        self.errors_label.setWordWrap(True)
        layout.addWidget(self.errors_label)
        layout.addStretch()

        self.refresh()

    def refresh(self):
        """Show the current errors and disable input while busy."""
        errors = self.api.errors
        if errors is not None and not errors.ok:
            self.errors_label.setText("\n".join(f"• {error}" for error in errors.errors))
            self.errors_label.show()
        else:
            self.errors_label.clear()
            self.errors_label.hide()
        self.setEnabled(not self.api.is_busy)


def setup_step_view(title: str, description: str = "") -> Callable[[StepRenderApi], QWidget]:
    """Render callback building a SetupStepView."""
    return lambda api: SetupStepView(api, title, description)
