# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
import os

from dotenv import load_dotenv

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
load_dotenv()

# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
_PROJECT_ROOT = Path(__file__).parent.parent

# Logging
_LOGS_DIR = Path(os.getenv("WIZARD_LOGS_DIR", str(_PROJECT_ROOT / "logs")))
_LOG_TO_FILE = os.getenv("WIZARD_LOG_TO_FILE", "true").lower() in ("true", "1", "yes")
_LOG_LEVEL = os.getenv("WIZARD_LOG_LEVEL", "INFO").upper()

# Wizard behaviour
_NAVIGATION_POLICY = os.getenv("WIZARD_NAVIGATION_POLICY", "visited-only")


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "Wizard Engine"
    VERSION: str = "1.0.0"

    # Paths
    PROJECT_ROOT: Path = _PROJECT_ROOT
    LOGS_DIR: Path = _LOGS_DIR

    # Logging
    LOG_FILE: str = "wizard.log"
    LOG_PATH: Path = _LOGS_DIR / LOG_FILE
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3
    LOG_TO_FILE: bool = _LOG_TO_FILE
    LOG_LEVEL: str = _LOG_LEVEL  # console handler level

    # Navigation
    # "visited-only" | "free"
    DEFAULT_NAVIGATION_POLICY: str = _NAVIGATION_POLICY

    # Messages used when a guard gives no message of its own
    BLOCKED_MESSAGE: str = "Blocked"
    FINISH_FAILED_MESSAGE: str = "Finish failed"

    # Presentation defaults (passed through to stepper/footer views)
    DEFAULT_HEADER_VARIANT: str = "circles"  # chevron | radio | circles | icon-underline | status
    DEFAULT_HEADER_SIZE: str = "md"  # sm | md | lg
    CANCEL_LABEL: str = "Cancel"
    PREVIOUS_LABEL: str = "Previous"
    NEXT_LABEL: str = "Next"
    FINISH_LABEL: str = "Finish"
    SKIP_LABEL: str = "Skip"
