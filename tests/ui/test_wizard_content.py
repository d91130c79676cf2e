# -*- coding: utf-8 -*-
"""
Tests for the Qt step body host.
"""

import pytest
from PyQt5.QtWidgets import QLabel

from ui.wizards.framework import ValidationResult, Wizard
from ui.wizards.framework.wizard_content import WizardContent
from ui.wizards.workspace_setup.step_views import SetupStepView, setup_step_view


@pytest.fixture
def content(qtbot, make_step):
    """Content widget for a wizard with widget and text bodies."""
    steps = [
        make_step(
            "A",
            render=setup_step_view("Step A", "First step"),
            can_exit=lambda v: ValidationResult.failure(["Name is required"]),
        ),
        make_step("B", render=setup_step_view("Step B")),
        make_step("C"),
    ]
    wizard = Wizard(steps, None, on_finish=lambda v: None, navigation_policy="free")
    widget = WizardContent(wizard)
    qtbot.addWidget(widget)
    return widget


class TestWizardContent:
    """Test rendering of the active step body."""

    def test_initial_render(self, content):
        """Test the first step body is shown."""
        assert content.rendered_step_id == "A"
        assert isinstance(content.body, SetupStepView)
        assert content.body.title_label.text() == "Step A"
        assert content.body.errors_label.isHidden()

    @pytest.mark.asyncio
    async def test_rerenders_on_step_change(self, content):
        """Test a new body is built when the active step changes."""
        await content.wizard.navigator.go_to("B")

        assert content.rendered_step_id == "B"
        assert content.body.title_label.text() == "Step B"

    @pytest.mark.asyncio
    async def test_plain_body_is_wrapped(self, content):
        """Test non-widget bodies are shown as text."""
        await content.wizard.navigator.go_to("C")

        assert isinstance(content.body, QLabel)
        assert content.body.text() == "body of C"

    @pytest.mark.asyncio
    async def test_body_refreshes_errors(self, content):
        """Test the body shows validation errors without being rebuilt."""
        body = content.body

        await content.wizard.navigator.next()

        assert content.body is body
        assert not body.errors_label.isHidden()
        assert "Name is required" in body.errors_label.text()

        content.wizard.navigator.set_values({"name": "Acme"})
        assert body.errors_label.isHidden()

    def test_no_visible_step(self, qtbot, make_step):
        """Test nothing is rendered without an active step."""
        wizard = Wizard([make_step("A", is_visible=lambda v: False)], None,
                        on_finish=lambda v: None)
        widget = WizardContent(wizard)
        qtbot.addWidget(widget)

        assert widget.rendered_step_id is None
        assert widget.body is None
