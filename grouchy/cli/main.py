"""Interactive console for Grouchy Spouse.

Usage:
    python -m grouchy

Environment variables (or a .env file / grouchy.yaml):
    CHAT__API_KEY       - Bearer token for the chat completion API
    SPEECH__API_TOKEN   - Bearer token for the prediction API
    SPEECH__VOICE       - Voice preset (default: af_bella)
    SPEECH__TIMEOUT     - Seconds to wait for synthesized audio (default: 8)

Ctrl+C cancels the current line, Ctrl+D exits.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable
from pathlib import Path

from dotenv import load_dotenv
from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from rich.console import Console
from rich.panel import Panel

from grouchy.config import get_settings, load_system_prompt
from grouchy.config.logging import configure_cli_logging, get_logger
from grouchy.conversation import Conversation
from grouchy.errors import ConfigurationError, TransportError
from grouchy.session import Session

logger = get_logger("cli")

PROMPT = "You: "


async def repl(conversation: Conversation, console: Console, read_line: Callable[[], str]) -> None:
    """Read lines until EOF and run a turn for each.

    ``read_line`` blocks, so it runs in the default executor.
    """
    loop = asyncio.get_running_loop()
    while True:
        try:
            user_input = await loop.run_in_executor(None, read_line)
        except KeyboardInterrupt:
            console.print("\n[yellow]Interrupted[/yellow]")
            continue
        except EOFError:
            break

        try:
            await conversation.take_turn(user_input)
        except TransportError as exc:
            logger.error(f"Chat request failed: {exc}")
            console.print(f"[red]Chat request failed:[/red] {exc}")


async def main() -> int:
    """Run the console client. Returns the process exit status."""
    load_dotenv()
    console = Console()

    try:
        settings = get_settings()
    except ConfigurationError as exc:
        console.print(f"[red]{exc}[/red]")
        return 1

    log_file = configure_cli_logging(settings.logging)
    logger.info(f"Logging to {log_file}")

    console.clear()
    system_prompt = load_system_prompt(settings.system_prompt_file)
    if system_prompt:
        console.print(Panel(system_prompt, title="System prompt", border_style="blue"))

    try:
        session = Session.from_settings(settings)
    except ConfigurationError as exc:
        logger.error(f"Configuration error: {exc}")
        console.print(f"[red]Configuration error:[/red] {exc}")
        return 1

    history_path = Path(settings.input_history_file).expanduser()
    history_path.parent.mkdir(parents=True, exist_ok=True)
    prompt_session: PromptSession[str] = PromptSession(history=FileHistory(str(history_path)))

    async with session:
        conversation = Conversation(
            chat=session.chat,
            voice=session.voice,
            console=console,
            system_prompt=system_prompt,
        )
        await repl(conversation, console, lambda: prompt_session.prompt(PROMPT))

    console.print("[grey50]Goodbye[/grey50]")
    return 0


def run() -> None:
    """Entry point for the console script."""
    try:
        status = asyncio.run(main())
    except KeyboardInterrupt:
        status = 0
    sys.exit(status)


if __name__ == "__main__":
    run()
