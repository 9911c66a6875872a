"""grouchy.yaml discovery and the YAML settings source."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from grouchy.errors import ConfigurationError

CONFIG_ENV_VAR = "GROUCHY_CONFIG"
CONFIG_NAMES = ("grouchy.yaml", "grouchy.yml")


def _candidates() -> Iterator[Path]:
    for name in CONFIG_NAMES:
        yield Path.cwd() / name
    yield Path.home() / ".grouchy" / CONFIG_NAMES[0]


def find_config_file() -> Path | None:
    """Locate the YAML config.

    $GROUCHY_CONFIG wins when set (and is the only place looked at); otherwise
    ./grouchy.yaml, ./grouchy.yml, then ~/.grouchy/grouchy.yaml.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit).expanduser()
        return path if path.is_file() else None
    return next((p for p in _candidates() if p.is_file()), None)


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML config file into a mapping.

    Raises:
        ConfigurationError: the file is not valid YAML or not a mapping
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"{path} is not valid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")
    return data


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the discovered grouchy.yaml, if any."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        path = find_config_file()
        self.path = path
        self._data = read_config_file(path) if path is not None else {}

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return {k: v for k, v in self._data.items() if k in self.settings_cls.model_fields}
