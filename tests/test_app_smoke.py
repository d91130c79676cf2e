# -*- coding: utf-8 -*-
"""
Smoke tests to ensure application doesn't break after changes.
These tests verify basic functionality works.
"""
import logging

import pytest


def test_imports():
    """Test that all main modules can be imported."""
    try:
        from app.config import Config
        from services.exceptions import GuardException, WizardException
        from services.wizard.step_validator import StepValidator
        from ui.wizards.framework import StepNavigator, Wizard, WizardStep
        from ui.wizards.framework.wizard_content import WizardContent
        from ui.wizards.workspace_setup import WorkspaceSetupWizard
        from utils.logger import get_logger
        assert True
    except ImportError as e:
        pytest.fail(f"Import failed: {e}")


def test_config_defaults():
    """Test configuration values used by the engine."""
    from app.config import Config

    assert Config.DEFAULT_NAVIGATION_POLICY in ("visited-only", "free")
    assert Config.BLOCKED_MESSAGE == "Blocked"
    assert Config.FINISH_FAILED_MESSAGE == "Finish failed"
    assert Config.LOG_PATH.name == Config.LOG_FILE


def test_logger_hierarchy():
    """Test module loggers are children of the application logger."""
    from utils.logger import get_logger

    logger = get_logger("smoke")

    assert isinstance(logger, logging.Logger)
    assert logger.name == "wizard.smoke"


def test_logger_overrides():
    """Test setup_logger honours explicit console level and file settings."""
    from utils.logger import setup_logger

    logger = setup_logger(console_level="debug", log_to_file=False)

    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.DEBUG

    setup_logger(log_to_file=False)


def test_exception_formatting():
    """Test wizard exceptions carry the step id."""
    from services.exceptions import GuardException

    error = GuardException("boom", step_id="basics", guard="can_exit",
                           original_error=ValueError("boom"))

    assert str(error) == "[basics] boom"
    assert error.context == "can_exit"


@pytest.mark.asyncio
async def test_demo_flow():
    """Test the demo walks the setup wizard to completion."""
    from main import run_demo
    from ui.wizards.workspace_setup import WorkspaceSetupWizard

    wizard = WorkspaceSetupWizard()

    assert await run_demo(wizard) is True
    assert wizard.navigator.get_progress() == (6, 6)


def test_main_entry_point(monkeypatch):
    """Test main() runs the demo and reports success."""
    import main as entry_point

    monkeypatch.setattr(entry_point, "QCoreApplication", lambda argv: object())

    assert entry_point.main() == 0

    from utils.logger import setup_logger
    setup_logger(log_to_file=False)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
