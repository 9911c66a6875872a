"""Chat completion service configuration."""

from pydantic import BaseModel, Field


class ChatSettings(BaseModel):
    base_url: str = "https://api.deepseek.com/v1"
    api_key: str = ""
    model: str = "deepseek-reasoner"
    request_timeout: float = Field(default=120.0, gt=0)
