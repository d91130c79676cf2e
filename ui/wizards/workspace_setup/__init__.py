# -*- coding: utf-8 -*-
"""
Workspace Setup Wizard Package.

Guided setup flow for a new workspace, built on the wizard framework.
"""

from .workspace_setup_wizard import WorkspaceSetupWizard, build_workspace_setup_steps

__all__ = [
    'WorkspaceSetupWizard',
    'build_workspace_setup_steps'
]
