"""Unified configuration for the Grouchy Spouse client.

Usage:
    from grouchy.config import get_settings

    s = get_settings()
    s.chat.model           # "deepseek-reasoner"
    s.speech.voice         # VoicePreset.AF_BELLA
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from grouchy.config._sections import VoicePreset
from grouchy.config._settings import GrouchySettings
from grouchy.config.logging import get_logger
from grouchy.errors import ConfigurationError

logger = get_logger("config")

_settings: GrouchySettings | None = None


def get_settings() -> GrouchySettings:
    """Return the singleton GrouchySettings instance (created on first call).

    Raises:
        ConfigurationError: if a value from the environment or YAML is invalid.
    """
    global _settings
    if _settings is None:
        try:
            _settings = GrouchySettings()
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration:\n{exc}") from exc
    return _settings


def reset_settings() -> None:
    """Force re-creation of the settings singleton (useful for tests)."""
    global _settings
    _settings = None


def load_system_prompt(path: str | Path) -> str | None:
    """Read the system prompt from a plain text file.

    A missing or blank file means the conversation starts without a system
    message.
    """
    prompt_path = Path(path).expanduser()
    if not prompt_path.is_file():
        logger.warning(f"System prompt file not found: {prompt_path}")
        return None

    text = prompt_path.read_text(encoding="utf-8").strip()
    return text or None


__all__ = [
    "GrouchySettings",
    "VoicePreset",
    "get_settings",
    "load_system_prompt",
    "reset_settings",
]
