"""Pytest configuration and fixtures for Grouchy Spouse tests."""

from __future__ import annotations

import asyncio
import io
import json
from pathlib import Path
from typing import Any

import httpx
import pytest
from rich.console import Console

from grouchy.config import GrouchySettings
from grouchy.config._sections import ChatSettings, LoggingSettings, SpeechSettings
from grouchy.errors import PlaybackError
from grouchy.voice.player import AudioPlayer

CHAT_BASE = "https://chat.test/v1"
SPEECH_BASE = "https://speech.test/v1"
AUDIO_URL = "http://x/audio.wav"


class FakePlayer(AudioPlayer):
    """Records what it was asked to play instead of making noise."""

    name = "fake"

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.played: list[Path] = []
        self.payloads: list[bytes] = []

    async def play(self, path: Path) -> None:
        self.played.append(path)
        self.payloads.append(path.read_bytes())
        if self.fail:
            raise PlaybackError("speaker on fire")


class FakeServices:
    """Scripted chat, prediction and audio endpoints behind one MockTransport.

    Attributes:
        chat_replies: Responses for successive chat calls (last one repeats)
        create_reply: Response to POST /predictions
        polls: Responses for successive GET /predictions/{id} (last one repeats)
        audio: Bytes served at AUDIO_URL
        requests: Every request seen, in order
    """

    def __init__(self) -> None:
        self.chat_replies: list[tuple[int, Any]] = [
            (200, {"choices": [{"message": {"role": "assistant", "content": "Hi there"}}]})
        ]
        self.create_reply: tuple[int, Any] = (201, {"id": "job-1", "status": "starting"})
        self.polls: list[tuple[int, Any]] = [(200, {"id": "job-1", "status": "succeeded", "output": AUDIO_URL})]
        self.audio = b"RIFF....WAVEfmt fake audio"
        self.poll_delay = 0.0
        self.requests: list[httpx.Request] = []
        self._chat_index = 0
        self._poll_index = 0

    @staticmethod
    def _response(scripted: tuple[int, Any]) -> httpx.Response:
        status, body = scripted
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    @staticmethod
    def _next(items: list[tuple[int, Any]], index: int) -> tuple[int, Any]:
        return items[min(index, len(items) - 1)]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url == f"{CHAT_BASE}/chat/completions":
            scripted = self._next(self.chat_replies, self._chat_index)
            self._chat_index += 1
            return self._response(scripted)

        if url == f"{SPEECH_BASE}/predictions" and request.method == "POST":
            return self._response(self.create_reply)

        if url.startswith(f"{SPEECH_BASE}/predictions/"):
            if self.poll_delay:
                await asyncio.sleep(self.poll_delay)
            scripted = self._next(self.polls, self._poll_index)
            self._poll_index += 1
            return self._response(scripted)

        if url == AUDIO_URL:
            return httpx.Response(200, content=self.audio)

        return httpx.Response(404, text="not found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, prefix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and str(r.url).startswith(prefix)]

    @property
    def chat_calls(self) -> list[httpx.Request]:
        return self.calls("POST", f"{CHAT_BASE}/chat/completions")

    @property
    def poll_calls(self) -> list[httpx.Request]:
        return self.calls("GET", f"{SPEECH_BASE}/predictions/")

    @property
    def create_calls(self) -> list[httpx.Request]:
        return self.calls("POST", f"{SPEECH_BASE}/predictions")

    @property
    def download_calls(self) -> list[httpx.Request]:
        return self.calls("GET", AUDIO_URL)

    def last_json(self, calls: list[httpx.Request]) -> Any:
        return json.loads(calls[-1].content)


@pytest.fixture
def services():
    """Fresh scripted remote services."""
    return FakeServices()


@pytest.fixture
def player():
    """A player that records instead of playing."""
    return FakePlayer()


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at the fake services, with fast polling."""
    return GrouchySettings(
        chat=ChatSettings(base_url=CHAT_BASE, api_key="chat-key", model="test-model"),
        speech=SpeechSettings(
            base_url=SPEECH_BASE,
            api_token="speech-token",
            model_version="v-123",
            timeout=2.0,
            poll_interval=0.01,
        ),
        logging=LoggingSettings(file=str(tmp_path / "cli.log")),
        system_prompt_file=str(tmp_path / "system_prompt.txt"),
        input_history_file=str(tmp_path / "history"),
    )


@pytest.fixture
def console():
    """A Rich console writing into a buffer; read it with console.file.getvalue()."""
    return Console(file=io.StringIO(), width=100, color_system=None)
