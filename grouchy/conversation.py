"""The conversation loop: one user line in, one reply out, then speak it."""

from __future__ import annotations

from enum import Enum

from rich.console import Console
from rich.markdown import Markdown

from grouchy.clients.chat import ChatClient
from grouchy.config.logging import get_logger
from grouchy.messages import ConversationHistory
from grouchy.voice.manager import VoiceManager

logger = get_logger("conversation")

EMPTY_INPUT_NUDGE = "If you want her to talk, you have to give me something to say!"
FALLBACK_REPLY = "No response from the model..."


class TurnState(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    PROCESSING_TURN = "processing_turn"


class Conversation:
    """Owns the history and runs turns strictly one after another.

    A turn is: append the user message, request one completion with the
    whole history, append and print the reply (or the fallback text), then
    hand the reply to the voice pipeline. The reply is always printed before
    any audio is attempted.

    Attributes:
        history: Messages sent to the model on every turn
        state: AWAITING_INPUT between turns, PROCESSING_TURN during one
        turns: Number of turns that reached the chat service
    """

    def __init__(
        self,
        chat: ChatClient,
        voice: VoiceManager | None = None,
        console: Console | None = None,
        system_prompt: str | None = None,
    ) -> None:
        self.chat = chat
        self.voice = voice
        self.console = console or Console()
        self.history = ConversationHistory(system_prompt)
        self.state = TurnState.AWAITING_INPUT
        self.turns = 0

    async def take_turn(self, user_input: str) -> str | None:
        """Process one line of user input.

        Returns:
            The assistant reply that was appended, or None for empty input

        Raises:
            TransportError: the chat request failed; the user message stays in history
        """
        if not user_input or not user_input.strip():
            self.console.print(f"[yellow]{EMPTY_INPUT_NUDGE}[/yellow]")
            return None

        self.state = TurnState.PROCESSING_TURN
        self.turns += 1
        try:
            self.history.add_user(user_input)

            reply = await self.chat.complete(self.history)
            if reply is None:
                logger.warning("Using fallback reply", extra={"turn": self.turns})
                reply = FALLBACK_REPLY

            self.history.add_assistant(reply)
            self.show_reply(reply)

            if self.voice is not None:
                await self.voice.synthesize_and_play(reply)

            return reply
        finally:
            self.state = TurnState.AWAITING_INPUT

    def show_reply(self, reply: str) -> None:
        self.console.print()
        self.console.print(Markdown(reply))
        self.console.print()
