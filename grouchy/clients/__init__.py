"""HTTP adapters for the chat completion and prediction services."""

from grouchy.clients.base import ServiceClient
from grouchy.clients.chat import ChatClient, extract_reply
from grouchy.clients.predictions import JobStatus, PredictionsClient, SynthesisJob

__all__ = [
    "ChatClient",
    "JobStatus",
    "PredictionsClient",
    "ServiceClient",
    "SynthesisJob",
    "extract_reply",
]
