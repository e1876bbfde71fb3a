"""
Configuration for Asset Vault.

Model Selection:
- Default: gemini-3-flash-preview (fast, cost-effective)
- Optional: gemini-3-pro-preview (set USE_PRO_MODEL=true)

API Access:
- The key saved in the vault settings wins
- GOOGLE_API_KEY from the environment is the fallback
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# =============================================================================
# Model Configuration
# =============================================================================

# Model selection flag: set USE_PRO_MODEL=true for better quality
USE_PRO_MODEL = os.getenv("USE_PRO_MODEL", "false").lower() == "true"

# Gemini model IDs
GEMINI_FLASH_MODEL = "gemini-3-flash-preview"
GEMINI_PRO_MODEL = "gemini-3-pro-preview"
GEMINI_MODEL = os.getenv(
    "GEMINI_MODEL", GEMINI_PRO_MODEL if USE_PRO_MODEL else GEMINI_FLASH_MODEL
)

# Metadata suggestions are short structured answers
TEMPERATURE_SUGGESTION = float(os.getenv("TEMPERATURE_SUGGESTION", "1.0"))

# =============================================================================
# API Configuration
# =============================================================================

# Google AI Studio key, used when no key has been saved in settings
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")


def get_gemini_client(api_key: Optional[str] = None):
    """
    Get a Gemini client for the given key.

    Falls back to GOOGLE_API_KEY when no key is passed.
    """
    from google import genai

    key = api_key or GOOGLE_API_KEY
    if not key:
        raise ValueError(
            "No Gemini API key. Save one in the vault settings "
            "or set GOOGLE_API_KEY in the environment."
        )
    return genai.Client(api_key=key)


# =============================================================================
# Paths
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.resolve()  # Always absolute
# Always resolve VAULT_DATA_DIR relative to PROJECT_ROOT, not CWD
_data_env = os.getenv("VAULT_DATA_DIR")
if _data_env:
    DATA_DIR = (PROJECT_ROOT / _data_env).resolve()
else:
    DATA_DIR = PROJECT_ROOT / "data"
LOGS_DIR = PROJECT_ROOT / "logs"

# =============================================================================
# Storage Keys
# =============================================================================

# Names are kept from the browser build so exported stores stay readable
ASSETS_KEY = "forge_assets"
CATEGORIES_KEY = "forge_categories"
API_KEY_KEY = "asthye_gemini_key"
BACKGROUND_KEY = "asthye_bg"

# =============================================================================
# Server Settings
# =============================================================================

HOST = os.getenv("VAULT_HOST", "127.0.0.1")
PORT = int(os.getenv("VAULT_PORT", "8000"))

# =============================================================================
# Logging
# =============================================================================

import logging

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# =============================================================================
# Print Configuration (for debugging)
# =============================================================================


def print_config():
    """Print current configuration for debugging."""
    print(f"""
Asset Vault Configuration
=========================
Model: {GEMINI_MODEL} {"(Pro)" if USE_PRO_MODEL else "(Flash)"}
Env API Key: {"set" if GOOGLE_API_KEY else "not set"}
Project Root: {PROJECT_ROOT}
Data Dir: {DATA_DIR}
Server: http://{HOST}:{PORT}/
Log Level: {LOG_LEVEL}
""")


if __name__ == "__main__":
    print_config()
