# -*- coding: utf-8 -*-
"""
Shared fixtures for wizard engine tests.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("WIZARD_LOG_TO_FILE", "false")

import pytest

from ui.wizards.framework import StepNavigator, StepRegistry, WizardContext, WizardStep


@pytest.fixture
def make_step():
    """Factory for step definitions with a trivial render callback."""
    def factory(step_id, **kwargs):
        kwargs.setdefault("title", step_id)
        kwargs.setdefault("render", lambda api: f"body of {step_id}")
        return WizardStep(id=step_id, **kwargs)
    return factory


@pytest.fixture
def finish_calls():
    """Values passed to on_finish, one entry per call."""
    return []


@pytest.fixture
def step_changes():
    """(from_id, to_id, values) passed to on_step_change."""
    return []


@pytest.fixture
def make_navigator(finish_calls, step_changes):
    """Factory for navigators recording on_finish and on_step_change calls."""
    def factory(steps, initial_values=None, **kwargs):
        kwargs.setdefault("on_finish", finish_calls.append)
        kwargs.setdefault(
            "on_step_change",
            lambda from_id, to_id, values: step_changes.append((from_id, to_id, values)),
        )
        return StepNavigator(
            StepRegistry(steps),
            context=WizardContext(values=initial_values),
            **kwargs,
        )
    return factory


@pytest.fixture
def abc_steps(make_step):
    """Three plain steps A, B, C."""
    return [make_step("A"), make_step("B"), make_step("C")]
