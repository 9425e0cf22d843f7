"""Main CLI application using Typer."""
import asyncio
import logging

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..llm import ChatAssistant, ChatSuccess, GenerationOptions, StatsSnapshot
from ..llm.models import ChatResult
from ..preferences import Theme
from .providers import get_assistant, get_history, get_preferences, get_settings

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="creatorai",
    help="Gemini-backed creative assistant for content creators",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Logging level (debug, info, warning, error)"
    )
):
    """Configure logging for every command."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _build_options(
    context: str | None,
    temperature: float | None,
    max_tokens: int | None,
    no_history: bool,
) -> GenerationOptions | None:
    """Only options given on the command line override the client defaults."""
    overrides: dict = {}
    if context:
        overrides["context"] = context
    if temperature is not None:
        overrides["temperature"] = temperature
    if max_tokens is not None:
        overrides["max_tokens"] = max_tokens
    if no_history:
        overrides["use_history"] = False
    return GenerationOptions(**overrides) if overrides else None


def _render_result(result: ChatResult) -> None:
    if isinstance(result, ChatSuccess):
        console.print(f"[bold green]Assistant:[/bold green] {result.message}")
        console.print(f"[dim]{result.tokens} tokens | {result.request_id}[/dim]\n")
    else:
        console.print(
            f"[yellow]Request failed ({result.error.kind}, {result.error.code}): "
            f"{result.error.message}[/yellow]"
        )
        console.print(Panel(result.message, title="Fallback reply", border_style="yellow"))


def _stats_table(stats: StatsSnapshot) -> Table:
    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="bold cyan", width=20)
    table.add_column("Value")

    table.add_row("Total Requests", str(stats.total_requests))
    table.add_row("Successful", str(stats.successful_requests))
    table.add_row("Failed", str(stats.failed_requests))
    table.add_row("Total Tokens", str(stats.total_tokens))
    table.add_row("Average Tokens", f"{stats.average_tokens:.1f}")
    table.add_row("Success Rate", f"{stats.success_rate}%")
    last = stats.last_request_time.isoformat() if stats.last_request_time else "Never"
    table.add_row("Last Request", last)
    return table


def _history_table(messages) -> Table:
    table = Table(show_header=True)
    table.add_column("Time", style="dim", width=20)
    table.add_column("Role", style="bold")
    table.add_column("Message")
    for message in messages:
        content = message.content if len(message.content) <= 200 else message.content[:200] + "..."
        table.add_row(
            message.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            message.role.value,
            content,
        )
    return table


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Prompt to send"),
    context: str | None = typer.Option(
        None,
        "--context",
        "-c",
        help="Extra context appended to the persona preamble"
    ),
    temperature: float | None = typer.Option(
        None,
        "--temperature",
        "-t",
        help="Sampling temperature (0.0 to 2.0)"
    ),
    max_tokens: int | None = typer.Option(
        None,
        "--max-tokens",
        "-m",
        help="Maximum output tokens"
    ),
    no_history: bool = typer.Option(
        False,
        "--no-history",
        help="Do not fold previous turns into the prompt"
    ),
    simulated: bool = typer.Option(
        False,
        "--simulated",
        help="Use the offline canned-response assistant"
    )
):
    """Send a single prompt and print the reply."""
    async def _ask():
        settings = get_settings(console)
        assistant = get_assistant(settings, simulated=simulated, console=console)
        options = _build_options(context, temperature, max_tokens, no_history)

        async with assistant:
            result = await assistant.send_message(prompt, options)
            _render_result(result)

        if not result.success:
            raise typer.Exit(code=1)

    asyncio.run(_ask())


async def _chat_loop(assistant: ChatAssistant) -> None:
    while True:
        try:
            user_input = console.input("[bold yellow]You:[/bold yellow] ")
        except (KeyboardInterrupt, EOFError):
            console.print("\n[dim]Goodbye![/dim]")
            break

        command = user_input.strip()
        if not command:
            continue

        if command.lower() in ("exit", "quit", "q"):
            console.print("[dim]Goodbye![/dim]")
            break

        if command == "/stats":
            console.print(_stats_table(assistant.get_stats()))
            continue

        if command == "/history":
            console.print(_history_table(assistant.history))
            continue

        if command == "/clear":
            assistant.clear_history()
            console.print("[dim]History cleared.[/dim]")
            continue

        result = await assistant.send_message(user_input)
        _render_result(result)


@app.command()
def chat(
    simulated: bool = typer.Option(
        False,
        "--simulated",
        help="Use the offline canned-response assistant"
    )
):
    """Interactive chat mode."""
    async def _chat():
        settings = get_settings(console)
        assistant = get_assistant(settings, simulated=simulated, console=console)

        console.print(f"[bold cyan]creatorai chat[/bold cyan] [dim]({assistant.model})[/dim]")
        console.print("[dim]Commands: /stats, /history, /clear. Type 'exit', 'quit', or 'q' to leave[/dim]\n")

        async with assistant:
            await _chat_loop(assistant)

    asyncio.run(_chat())


@app.command()
def ping(
    simulated: bool = typer.Option(
        False,
        "--simulated",
        help="Probe the offline assistant instead of Gemini"
    )
):
    """Check connectivity to the generation endpoint."""
    async def _ping():
        settings = get_settings(console)
        assistant = get_assistant(settings, simulated=simulated, console=console)

        async with assistant:
            report = await assistant.test_connection()

        if report.connected:
            console.print(
                f"[green]+[/green] {report.model}: OK ({report.latency_ms:.0f} ms)"
            )
        else:
            detail = report.error.message if report.error else "unknown error"
            console.print(f"[red]x[/red] {report.model}: FAILED ({detail})")
            raise typer.Exit(code=1)

    asyncio.run(_ping())


@app.command()
def history():
    """Show the stored conversation history."""
    settings = get_settings(console)
    conversation = get_history(settings)
    messages = conversation.load()

    if not messages:
        console.print("[dim]No stored history.[/dim]")
        return

    console.print(_history_table(messages))


@app.command(name="clear-history")
def clear_history(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    )
):
    """Delete the stored conversation history."""
    if not yes:
        confirm = typer.confirm("Delete the stored conversation history?")
        if not confirm:
            console.print("[dim]Aborted.[/dim]")
            return

    settings = get_settings(console)
    get_history(settings).clear()
    console.print("[green]History cleared.[/green]")


@app.command()
def theme(
    toggle: bool = typer.Option(
        False,
        "--toggle",
        help="Switch between light and dark"
    )
):
    """Show or toggle the stored theme preference."""
    preferences = get_preferences(get_settings(console))
    current = preferences.toggle_theme() if toggle else preferences.theme
    style = "bold white on black" if current == Theme.DARK else "bold black on white"
    console.print(f"Theme: [{style}] {current.value} [/{style}]")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
