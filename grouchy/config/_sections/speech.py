"""Speech synthesis configuration models."""

from enum import Enum

from pydantic import BaseModel, Field


class VoicePreset(str, Enum):
    """Named voices offered by the synthesis model."""

    AF_BELLA = "af_bella"
    AF_ZOE = "af_zoe"
    AF_LISA = "af_lisa"
    AF_MIA = "af_mia"
    AF_SAMANTHA = "af_samantha"
    AF_OLIVIA = "af_olivia"
    AF_ISABELLA = "af_isabella"

    def __str__(self) -> str:
        return self.value


class SpeechSettings(BaseModel):
    enabled: bool = True
    base_url: str = "https://api.replicate.com/v1"
    api_token: str = ""
    model_version: str = "dfdf537ba482b029e0a761699e6f55e9162cfd159270bfe0e44857caa5f275a6"
    voice: VoicePreset = VoicePreset.AF_BELLA
    language: str = "en-us"
    speed: float = Field(default=1.1, gt=0)
    temperature: float = Field(default=0.7, gt=0)
    length: float = Field(default=1.0, gt=0)
    timeout: float = Field(default=8.0, gt=0)
    poll_interval: float = Field(default=1.0, gt=0)
    request_timeout: float = Field(default=30.0, gt=0)
