"""Synthesis request parameters."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from grouchy.config._sections import VoicePreset

if TYPE_CHECKING:
    from grouchy.config._sections import SpeechSettings


@dataclass(frozen=True)
class SynthesisRequestParameters:
    """Input for one synthesis job.

    speed, temperature and length are multipliers interpreted by the remote
    model; they only have to be positive here.
    """

    text: str = ""
    language: str = "en-us"
    voice: VoicePreset = VoicePreset.AF_BELLA
    speed: float = 1.1
    temperature: float = 0.7
    length: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "voice", VoicePreset(self.voice))
        for name in ("speed", "temperature", "length"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

    @classmethod
    def from_settings(cls, settings: SpeechSettings) -> SynthesisRequestParameters:
        return cls(
            language=settings.language,
            voice=settings.voice,
            speed=settings.speed,
            temperature=settings.temperature,
            length=settings.length,
        )

    def with_text(self, text: str) -> SynthesisRequestParameters:
        return replace(self, text=text)

    def to_input(self) -> dict[str, Any]:
        """The ``input`` object of a prediction request."""
        return {
            "text": self.text,
            "language": self.language,
            "temperature": self.temperature,
            "length": self.length,
            "speed": self.speed,
            "voice": self.voice.value,
        }
