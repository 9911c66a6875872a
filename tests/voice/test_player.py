"""Tests for platform audio players."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from grouchy.errors import ConfigurationError, PlaybackError
from grouchy.voice.player import AfplayPlayer, AplayPlayer, WinsoundPlayer, resolve_player


def fake_process(returncode: int = 0, stderr: bytes = b"") -> MagicMock:
    proc = MagicMock()
    proc.returncode = returncode
    proc.communicate = AsyncMock(return_value=(b"", stderr))
    return proc


class TestResolvePlayer:
    """Tests for resolve_player."""

    @pytest.mark.parametrize(
        "platform,expected",
        [
            ("darwin", AfplayPlayer),
            ("linux", AplayPlayer),
            ("linux2", AplayPlayer),
            ("win32", WinsoundPlayer),
        ],
    )
    def test_known_platforms(self, platform, expected):
        """Each supported platform maps to its native player."""
        assert isinstance(resolve_player(platform), expected)

    def test_unknown_platform(self):
        """Anything else is a configuration error."""
        with pytest.raises(ConfigurationError, match="not supported"):
            resolve_player("sunos5")


class TestCommandPlayer:
    """Tests for the subprocess-based players."""

    @pytest.mark.asyncio
    async def test_afplay_invocation(self, tmp_path):
        """afplay is called with the file path and awaited."""
        path = tmp_path / "clip.wav"
        proc = fake_process()
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)) as spawn:
            await AfplayPlayer().play(path)

        assert spawn.call_args.args == ("afplay", str(path))
        proc.communicate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_aplay_invocation(self, tmp_path):
        """aplay runs quietly."""
        path = tmp_path / "clip.wav"
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=fake_process())) as spawn:
            await AplayPlayer().play(path)

        assert spawn.call_args.args == ("aplay", "-q", str(path))

    @pytest.mark.asyncio
    async def test_non_zero_exit(self, tmp_path):
        """A failing player raises PlaybackError with its stderr."""
        proc = fake_process(returncode=1, stderr=b"no such device")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
            with pytest.raises(PlaybackError, match="no such device"):
                await AplayPlayer().play(tmp_path / "clip.wav")

    @pytest.mark.asyncio
    async def test_missing_binary(self, tmp_path):
        """A player that is not installed raises PlaybackError."""
        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError)):
            with pytest.raises(PlaybackError, match="not found"):
                await AfplayPlayer().play(Path(tmp_path / "clip.wav"))
