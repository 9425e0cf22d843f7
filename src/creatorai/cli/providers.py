"""Factory functions for the CLI.

Centralizes creation of settings, store, history and assistant instances
from environment variables. Hides configuration details from commands.
"""

from rich.console import Console

from ..config import Settings
from ..errors import ConfigurationError
from ..llm import ChatAssistant, create_assistant
from ..memory import ConversationHistory, KeyValueStore, create_key_value_store
from ..preferences import Preferences

# Default console for output
_console = Console()


def get_settings(console: Console | None = None) -> Settings:
    """Load settings from the environment, exiting on invalid values."""
    import typer

    con = console or _console
    try:
        return Settings.from_env()
    except ConfigurationError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def get_store(settings: Settings) -> KeyValueStore:
    """Create the file-backed key-value store at CREATORAI_STORE_PATH."""
    return create_key_value_store("file", path=settings.store_path)


def get_history(settings: Settings, store: KeyValueStore | None = None) -> ConversationHistory:
    """Create the persisted conversation history."""
    return ConversationHistory(
        max_history=settings.max_history,
        store=store or get_store(settings),
        storage_key=settings.history_key,
    )


def get_preferences(settings: Settings) -> Preferences:
    return Preferences(get_store(settings))


def get_assistant(
    settings: Settings,
    simulated: bool = False,
    console: Console | None = None,
) -> ChatAssistant:
    """Create the assistant and restore its history.

    Args:
        settings: Loaded settings
        simulated: Use the offline canned-response assistant
        console: Optional Rich console for output

    Returns:
        Assistant instance with history loaded

    Raises:
        SystemExit: If the Gemini API key is not configured
    """
    import typer

    con = console or _console
    history = get_history(settings)

    if simulated:
        assistant = create_assistant("simulated", history=history)
    else:
        try:
            assistant = create_assistant(
                "gemini",
                api_key=settings.require_api_key(),
                model=settings.model,
                base_url=settings.base_url,
                timeout=settings.timeout,
                history=history,
            )
        except ConfigurationError as e:
            con.print(f"[red]Error: {e}[/red]")
            con.print("[dim]Use --simulated to try the offline assistant.[/dim]")
            raise typer.Exit(code=1)

    assistant.load_history()
    return assistant
