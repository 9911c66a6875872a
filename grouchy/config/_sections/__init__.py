"""Config section models."""

from grouchy.config._sections.chat import ChatSettings
from grouchy.config._sections.logging import LoggingSettings
from grouchy.config._sections.speech import SpeechSettings, VoicePreset

__all__ = [
    "ChatSettings",
    "LoggingSettings",
    "SpeechSettings",
    "VoicePreset",
]
