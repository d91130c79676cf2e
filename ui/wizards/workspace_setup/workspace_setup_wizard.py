# -*- coding: utf-8 -*-
"""
Workspace Setup Wizard.

Guided setup for a new workspace.

Steps:
1. Workspace basics - Name the workspace (solo workspaces jump to security)
2. Invite users - Optional
3. Create teams - Optional, only offered once someone is invited
4. Configure email - Optional, SMTP settings checked off the event loop
5. Review security - Requires a named workspace
6. Explore apps
"""

import asyncio
from typing import Any, Dict, List, Optional

from services.wizard.step_validator import StepValidator
from ui.wizards.framework import BaseWizard, ValidationResult, WizardStep
from utils.logger import get_logger

from .step_views import setup_step_view

logger = get_logger(__name__)


STEP_WORKSPACE_BASICS = "workspace-basics"
STEP_INVITE_USERS = "invite-users"
STEP_CREATE_TEAMS = "create-teams"
STEP_CONFIGURE_EMAIL = "configure-email"
STEP_REVIEW_SECURITY = "review-security"
STEP_EXPLORE_APPS = "explore-apps"


def _valid_addresses(addresses) -> bool:
    return all("@" in address and "." in address.split("@")[-1] for address in addresses or [])


def _check_email_settings(values: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult.success()
    host = (values.get("smtp_host") or "").strip()
    sender = (values.get("sender_address") or "").strip()

    if not host:
        result.add_error("SMTP host is required", "smtp_host")
    elif " " in host:
        result.add_error("SMTP host must not contain spaces", "smtp_host")
    if not sender or not _valid_addresses([sender]):
        result.add_error("Sender address is not a valid email address", "sender_address")
    return result


async def verify_email_settings(values: Dict[str, Any]) -> ValidationResult:
    """Exit guard of the email step."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _check_email_settings, values)


def build_workspace_setup_steps() -> List[WizardStep]:
    """Step definitions of the workspace setup flow."""
    return [
        WizardStep(
            id=STEP_WORKSPACE_BASICS,
            title="Workspace basics",
            description="Name your workspace.",
            render=setup_step_view("Workspace basics", "Name your workspace."),
            can_exit=StepValidator()
            .require("workspace_name", "Workspace name is required")
            .min_length("workspace_name", 3, "Workspace name needs at least 3 characters"),
            next_step=lambda values: (
                STEP_REVIEW_SECURITY if values.get("solo_workspace") else STEP_INVITE_USERS
            ),
        ),
        WizardStep(
            id=STEP_INVITE_USERS,
            title="Invite users",
            description="Invite colleagues by email.",
            render=setup_step_view("Invite users", "Invite colleagues by email."),
            optional=True,
            can_exit=StepValidator().check(
                "invitees", _valid_addresses, "Every invitee needs a valid email address"
            ),
        ),
        WizardStep(
            id=STEP_CREATE_TEAMS,
            title="Create teams",
            description="Group invited users into teams.",
            render=setup_step_view("Create teams", "Group invited users into teams."),
            optional=True,
            is_visible=lambda values: bool(values.get("invitees")),
        ),
        WizardStep(
            id=STEP_CONFIGURE_EMAIL,
            title="Configure email",
            description="Outgoing mail server for notifications.",
            render=setup_step_view("Configure email", "Outgoing mail server for notifications."),
            optional=True,
            can_exit=verify_email_settings,
        ),
        WizardStep(
            id=STEP_REVIEW_SECURITY,
            title="Review security",
            description="Confirm the security defaults.",
            render=setup_step_view("Review security", "Confirm the security defaults."),
            can_enter=lambda values: bool((values.get("workspace_name") or "").strip()),
            can_exit=StepValidator().check(
                "security_acknowledged", bool, "Please confirm the security settings"
            ),
        ),
        WizardStep(
            id=STEP_EXPLORE_APPS,
            title="Explore apps",
            description="Pick the apps to pin to the dashboard.",
            render=setup_step_view("Explore apps", "Pick the apps to pin to the dashboard."),
        ),
    ]


class WorkspaceSetupWizard(BaseWizard):
    """Guided workspace setup."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.submitted_values: Optional[Dict[str, Any]] = None

    def create_steps(self) -> List[WizardStep]:
        return build_workspace_setup_steps()

    def get_initial_values(self) -> Dict[str, Any]:
        return {
            "workspace_name": "",
            "solo_workspace": False,
            "invitees": [],
            "teams": [],
            "smtp_host": "",
            "sender_address": "",
            "security_acknowledged": False,
        }

    def get_wizard_title(self) -> str:
        return "Workspace setup"

    async def on_submit(self, values: Dict[str, Any]):
        logger.info(f"Workspace '{values.get('workspace_name')}' set up")
        self.submitted_values = dict(values)

    def on_step_change(self, from_id: str, to_id: str, values: Dict[str, Any]):
        logger.debug(f"Workspace setup: {from_id} -> {to_id}")
