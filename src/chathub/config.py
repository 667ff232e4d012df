"""Environment-driven settings and platform-aware default paths."""

import logging
import os
import sys
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

# LLM providers the catalog knows about, in the order the catalog lists them.
DEFAULT_LLM_PROVIDERS = (
    "openai",
    "anthropic",
    "google",
    "azureOpenAi",
    "ollama",
    "awsBedrock",
    "vercelAiGateway",
    "xAiGrok",
    "groq",
    "openRouter",
    "deepSeek",
    "cohere",
    "mistralCloud",
)


def get_data_path() -> Path:
    """Return the path of the default chat data file."""
    env = os.environ.get("CHATHUB_DATA_PATH")
    if env:
        return Path(env)

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "chathub" / "chat.json"
    elif sys.platform == "win32":
        return Path(os.environ.get("APPDATA", "")) / "chathub" / "chat.json"
    else:  # Linux
        return Path.home() / ".local" / "share" / "chathub" / "chat.json"


def get_llm_providers() -> tuple[str, ...]:
    """Return the known LLM provider ids, including CHATHUB_EXTRA_PROVIDERS."""
    extra = os.environ.get("CHATHUB_EXTRA_PROVIDERS", "")
    providers = list(DEFAULT_LLM_PROVIDERS)
    for name in extra.split(","):
        name = name.strip()
        if name and name not in providers:
            providers.append(name)
    return tuple(providers)


def get_timezone() -> tzinfo | None:
    """Return the zone used for calendar days, or None for the host's local zone."""
    name = os.environ.get("CHATHUB_TIMEZONE")
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown CHATHUB_TIMEZONE %r, using local time", name)
        return None


def get_log_level() -> str:
    return os.environ.get("CHATHUB_LOG_LEVEL", "WARNING").upper()
