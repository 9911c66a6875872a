"""Voice output for replies.

Text -> prediction job (polled) -> audio URL -> temp file -> local speaker.
"""

from grouchy.voice.manager import VoiceManager
from grouchy.voice.params import SynthesisRequestParameters
from grouchy.voice.player import AudioPlayer, resolve_player
from grouchy.voice.synthesizer import SpeechSynthesizer

__all__ = [
    "AudioPlayer",
    "SpeechSynthesizer",
    "SynthesisRequestParameters",
    "VoiceManager",
    "resolve_player",
]
