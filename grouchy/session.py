"""Session context: everything one conversation needs to talk to the outside.

Built once at startup and handed to the Conversation. Each session owns its
own HTTP clients and credentials; nothing lives in module globals.
"""

from __future__ import annotations

import httpx

from grouchy.clients.chat import ChatClient
from grouchy.clients.predictions import PredictionsClient
from grouchy.config import GrouchySettings
from grouchy.config.logging import get_logger
from grouchy.errors import ConfigurationError
from grouchy.voice.manager import VoiceManager
from grouchy.voice.params import SynthesisRequestParameters
from grouchy.voice.player import AudioPlayer, resolve_player
from grouchy.voice.synthesizer import SpeechSynthesizer

logger = get_logger("session")


class Session:
    """Owns the chat client and, when speech is enabled, the voice pipeline.

    Usage:
        async with Session.from_settings(get_settings()) as session:
            conversation = Conversation(session.chat, session.voice, console)
    """

    def __init__(
        self,
        settings: GrouchySettings,
        chat: ChatClient,
        voice: VoiceManager | None = None,
        predictions: PredictionsClient | None = None,
        download_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.chat = chat
        self.voice = voice
        self._predictions = predictions
        self._download_client = download_client

    @classmethod
    def from_settings(
        cls,
        settings: GrouchySettings,
        transport: httpx.AsyncBaseTransport | None = None,
        player: AudioPlayer | None = None,
        platform: str | None = None,
    ) -> Session:
        """Validate settings and build every client.

        Args:
            settings: Loaded settings
            transport: Optional httpx transport shared by all clients (tests)
            player: Optional player, otherwise resolved for ``platform``
            platform: Host platform name (defaults to ``sys.platform``)

        Raises:
            ConfigurationError: missing credentials or unsupported platform
        """
        if not settings.chat.api_key:
            raise ConfigurationError("CHAT__API_KEY is not set")

        chat = ChatClient(
            base_url=settings.chat.base_url,
            api_key=settings.chat.api_key,
            model=settings.chat.model,
            timeout=settings.chat.request_timeout,
            transport=transport,
        )

        speech = settings.speech
        if not speech.enabled:
            logger.info("Speech disabled, replies will be text only")
            return cls(settings, chat)

        if not speech.api_token:
            raise ConfigurationError("SPEECH__API_TOKEN is not set (or set SPEECH__ENABLED=false)")

        player = player or resolve_player(platform)

        predictions = PredictionsClient(
            base_url=speech.base_url,
            api_token=speech.api_token,
            model_version=speech.model_version,
            timeout=speech.request_timeout,
            transport=transport,
        )
        synthesizer = SpeechSynthesizer(
            predictions,
            params=SynthesisRequestParameters.from_settings(speech),
            timeout=speech.timeout,
            poll_interval=speech.poll_interval,
        )
        download_client = httpx.AsyncClient(
            timeout=httpx.Timeout(speech.request_timeout),
            follow_redirects=True,
            transport=transport,
        )
        voice = VoiceManager(synthesizer, player, download_client)
        logger.info(f"Speech enabled with voice {speech.voice} via {player.name}")

        return cls(settings, chat, voice=voice, predictions=predictions, download_client=download_client)

    async def close(self) -> None:
        """Close all HTTP clients."""
        await self.chat.close()
        if self._predictions:
            await self._predictions.close()
        if self._download_client:
            await self._download_client.aclose()

    async def __aenter__(self) -> Session:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
