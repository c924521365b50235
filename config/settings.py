"""
Configuration settings for Smart Tender v1.0.

Environment variables:
    GOOGLE_CLOUD_PROJECT: GCP project ID (Vertex AI mode)
    GOOGLE_APPLICATION_CREDENTIALS: Path to service account key
    GEMINI_API_KEY: Gemini Developer API key (takes precedence over Vertex AI)
    SMART_TENDER_DATA: Folder for saved projects and configuration overrides
    SMART_TENDER_OUTPUTS: Folder for exported .md / .docx files
"""

import logging
import os
from pathlib import Path

_settings_logger = logging.getLogger(__name__)


def _get_env(key: str, default: str = "") -> str:
    """Read a config value from the environment."""
    return os.getenv(key, default)


# =============================================================================
# Version
# =============================================================================

VERSION = "1.0.0"

PRODUCT_NAME = _get_env("PRODUCT_NAME", "Smart Tender")

# =============================================================================
# Google Cloud / Gemini Configuration
# =============================================================================

PROJECT_ID = _get_env("GOOGLE_CLOUD_PROJECT", "")
VERTEX_LOCATION = _get_env("VERTEX_LOCATION", "us-central1")
GEMINI_API_KEY = _get_env("GEMINI_API_KEY", "")

# NOTE: default is empty string, not a relative filename, to avoid accidentally loading
# a stray key file from an unpredictable working directory.
KEY_PATH = _get_env("GOOGLE_APPLICATION_CREDENTIALS", "")

# =============================================================================
# Models
# =============================================================================

MODEL_FLASH = _get_env("MODEL_FLASH", "gemini-2.5-flash")

DRAFT_MODEL = _get_env("DRAFT_MODEL", MODEL_FLASH)
DRAFT_TEMPERATURE = float(_get_env("DRAFT_TEMPERATURE", "0.3"))
DRAFT_MAX_TOKENS = int(_get_env("DRAFT_MAX_TOKENS", "16384"))

# 0 disables thinking on flash models; None leaves the model default.
THINKING_BUDGET_STANDARD = 4096

# Transport-level attempts per Gemini call (rate limits, 5xx). The drafting
# pipeline itself never retries.
LLM_MAX_ATTEMPTS = int(_get_env("LLM_MAX_ATTEMPTS", "4"))

# =============================================================================
# Paths
# =============================================================================

BASE_DIR = Path(__file__).parent.parent
DATA_FOLDER = Path(_get_env("SMART_TENDER_DATA", str(BASE_DIR / "data")))
CONFIG_OVERRIDES_FOLDER = DATA_FOLDER / "config"
OUTPUTS_FOLDER = Path(_get_env("SMART_TENDER_OUTPUTS", str(BASE_DIR / "outputs")))

# Export file stem used when the project has no name yet
DEFAULT_EXPORT_NAME = "tender-draft"

# NOTE: directories are NOT created at import time (would break pytest in CI).
# Call setup_environment() or ensure_data_dirs() explicitly at startup.
_DATA_DIRS = [DATA_FOLDER, CONFIG_OVERRIDES_FOLDER, OUTPUTS_FOLDER]


def ensure_data_dirs() -> None:
    """Create all required data directories. Call this at application startup."""
    for _folder in _DATA_DIRS:
        _folder.mkdir(parents=True, exist_ok=True)


# =============================================================================
# Helper Functions
# =============================================================================

def setup_environment():
    """Set up environment variables for Google Cloud and create data directories."""
    if PROJECT_ID:
        os.environ["GOOGLE_CLOUD_PROJECT"] = PROJECT_ID
        os.environ["GOOGLE_CLOUD_LOCATION"] = VERTEX_LOCATION
    if not GEMINI_API_KEY:
        os.environ["GOOGLE_GENAI_USE_VERTEXAI"] = "true"

    if KEY_PATH and os.path.exists(KEY_PATH):
        os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = KEY_PATH

    ensure_data_dirs()


def validate_config() -> dict[str, bool]:
    """Validate configuration and return status dict."""
    has_key_file = bool(KEY_PATH) and os.path.exists(KEY_PATH)
    status = {
        "api_key": bool(GEMINI_API_KEY),
        "project_id": bool(PROJECT_ID),
        "credentials": has_key_file,
    }
    # Either mode is enough: API key, or a Vertex project (ADC may supply credentials)
    status["all_ok"] = status["api_key"] or status["project_id"]
    if not status["all_ok"]:
        _settings_logger.warning(
            "Neither GEMINI_API_KEY nor GOOGLE_CLOUD_PROJECT is set; draft generation will fail."
        )
    return status
