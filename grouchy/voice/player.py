"""Local speaker playback of an audio file, one variant per host OS.

Each player blocks (asynchronously) until the clip has finished so the next
prompt never talks over the reply.
"""

from __future__ import annotations

import asyncio
import sys
from abc import ABC, abstractmethod
from pathlib import Path

from grouchy.config.logging import get_logger
from grouchy.errors import ConfigurationError, PlaybackError

logger = get_logger("voice.player")


class AudioPlayer(ABC):
    """Plays an audio file and returns when playback is over."""

    name: str = "player"

    @abstractmethod
    async def play(self, path: Path) -> None:
        """Play ``path``.

        Raises:
            PlaybackError: the clip could not be played
        """
        raise NotImplementedError


class CommandPlayer(AudioPlayer):
    """Plays through an external command such as ``afplay`` or ``aplay``."""

    command: str = ""

    def args(self, path: Path) -> list[str]:
        return [self.command, str(path)]

    async def play(self, path: Path) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.args(path),
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise PlaybackError(f"{self.command} not found on PATH") from exc

        try:
            _, stderr = await proc.communicate()
        except asyncio.CancelledError:
            proc.kill()
            raise

        if proc.returncode != 0:
            detail = stderr.decode(errors="ignore").strip() if stderr else ""
            raise PlaybackError(f"{self.command} exited with {proc.returncode}: {detail}")

        logger.debug(f"Played {path.name} with {self.command}")


class AfplayPlayer(CommandPlayer):
    """macOS."""

    name = "afplay"
    command = "afplay"


class AplayPlayer(CommandPlayer):
    """Linux (ALSA)."""

    name = "aplay"
    command = "aplay"

    def args(self, path: Path) -> list[str]:
        return [self.command, "-q", str(path)]


class WinsoundPlayer(AudioPlayer):
    """Windows, through the standard ``winsound`` module."""

    name = "winsound"

    async def play(self, path: Path) -> None:
        import winsound

        try:
            await asyncio.to_thread(winsound.PlaySound, str(path), winsound.SND_FILENAME)
        except RuntimeError as exc:
            raise PlaybackError(f"winsound could not play {path.name}: {exc}") from exc


PLAYERS: dict[str, type[AudioPlayer]] = {
    "darwin": AfplayPlayer,
    "linux": AplayPlayer,
    "win32": WinsoundPlayer,
}


def resolve_player(platform: str | None = None) -> AudioPlayer:
    """Pick the player for ``platform`` (defaults to ``sys.platform``).

    Raises:
        ConfigurationError: the platform has no supported player
    """
    platform = platform or sys.platform
    key = "linux" if platform.startswith("linux") else platform
    player_cls = PLAYERS.get(key)
    if player_cls is None:
        raise ConfigurationError(f"Your OS ({platform}) is not supported for audio playback.")
    return player_cls()
