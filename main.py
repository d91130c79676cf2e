#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Wizard Engine - Main entry point.

Walks the workspace setup wizard headlessly on an asyncio loop and logs
each transition.
"""

import asyncio
import sys

from PyQt5.QtCore import QCoreApplication

from app.config import Config
from ui.wizards.workspace_setup import WorkspaceSetupWizard
from utils.logger import get_logger, setup_logger


async def run_demo(wizard: WorkspaceSetupWizard) -> bool:
    """Fill in and complete the workspace setup flow."""
    navigator = wizard.navigator
    logger = get_logger("demo")

    navigator.set_values({"workspace_name": "Acme"})
    await navigator.next()

    navigator.set_values({"invitees": ["ana@example.com", "li@example.com"]})
    await navigator.next()
    await navigator.skip()

    navigator.set_values({"smtp_host": "smtp example.com", "sender_address": "noreply@example.com"})
    await navigator.next()
    if navigator.errors is not None:
        logger.info(f"Email settings rejected: {navigator.errors.errors}")
    navigator.set_values({"smtp_host": "smtp.example.com"})
    await navigator.next()

    navigator.set_values({"security_acknowledged": True})
    await navigator.next()
    await navigator.finish()

    done, total = navigator.get_progress()
    for step in navigator.visible_steps:
        logger.info(f"  {step.id:<18} {navigator.get_step_status(step.id).value}")
    logger.info(f"Progress: {done}/{total} ({navigator.get_progress_percentage():.0f}%)")
    return wizard.submitted_values is not None


def main():
    """Main application entry point."""
    logger = setup_logger()
    logger.info(f"Starting {Config.APP_NAME} v{Config.VERSION}")

    app = QCoreApplication(sys.argv)
    wizard = WorkspaceSetupWizard()
    logger.info(f"Running wizard: {wizard.get_wizard_title()}")
    completed = asyncio.run(run_demo(wizard))

    if wizard.navigator.error_boundary.error_count:
        logger.warning(f"Observer failures:\n{wizard.navigator.error_boundary.get_error_summary()}")

    logger.info("Workspace setup completed" if completed else "Workspace setup not completed")
    del app
    return 0 if completed else 1


if __name__ == "__main__":
    sys.exit(main())
