"""Root GrouchySettings model."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from grouchy.config._loader import YamlSettingsSource
from grouchy.config._sections import ChatSettings, LoggingSettings, SpeechSettings


class GrouchySettings(BaseSettings):
    model_config = {"env_nested_delimiter": "__", "case_sensitive": False, "extra": "ignore"}

    chat: ChatSettings = Field(default_factory=ChatSettings)
    speech: SpeechSettings = Field(default_factory=SpeechSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    system_prompt_file: str = "system_prompt.txt"
    input_history_file: str = "~/.grouchy/input_history"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls),
        )
