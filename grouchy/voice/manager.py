"""Voice pipeline: synthesize a reply, then fetch and play the audio."""

from __future__ import annotations

import httpx

from grouchy.config.logging import get_logger
from grouchy.voice.player import AudioPlayer
from grouchy.voice.retrieval import fetch_and_play
from grouchy.voice.synthesizer import SpeechSynthesizer

logger = get_logger("voice.manager")


class VoiceManager:
    """Gives the assistant a voice, one reply at a time.

    Nothing raised while speaking reaches the caller: a reply that cannot be
    voiced is simply not voiced.
    """

    def __init__(
        self,
        synthesizer: SpeechSynthesizer,
        player: AudioPlayer,
        http: httpx.AsyncClient,
    ) -> None:
        self.synthesizer = synthesizer
        self.player = player
        self.http = http

    async def synthesize_and_play(self, text: str) -> bool:
        """Speak ``text`` through the local speaker.

        Returns:
            True if audio was played
        """
        if not text or not text.strip():
            return False

        try:
            location = await self.synthesizer.synthesize(text)
            if location is None:
                logger.info("No audio for this reply")
                return False

            await fetch_and_play(location, self.http, self.player)
            return True
        except Exception:
            logger.exception("TTS synthesis/playback failed")
            return False
