"""Logging configuration model."""

from pydantic import BaseModel


class LoggingSettings(BaseModel):
    level: str = "INFO"
    file: str = "~/.grouchy/cli.log"
