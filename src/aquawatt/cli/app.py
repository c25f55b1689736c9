"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..assistant import ChatSession, ContextAggregator
from ..llm import StreamChunk
from ..sources import create_usage_source
from .providers import configure_logging, get_config, get_engine

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="aquawatt",
    help="AquaWatt assistant: ask about your water and electricity usage",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

SOURCE_OPTION = typer.Option(
    "demo",
    "--source",
    "-s",
    help="Usage data source: demo or memory (empty)"
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging"
    )
):
    """AquaWatt assistant command line."""
    configure_logging(verbose)


def _print_chunk(chunk: StreamChunk) -> None:
    if chunk.content:
        console.out(chunk.content, end="", highlight=False)
    if chunk.done:
        console.out("")


@app.command()
def chat(source: str = SOURCE_OPTION):
    """Start an interactive chat with the assistant."""
    async def _chat():
        engine = get_engine(source, console)
        session = ChatSession()

        async with engine:
            console.print("[bold cyan]AquaWatt Assistant[/bold cyan]")
            console.print("[dim]Type 'exit', 'quit', or 'q' to leave; '/clear' resets the conversation[/dim]\n")
            console.print(f"[bold green]Assistant:[/bold green] {session.messages[0].content}\n")

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                text = user_input.strip()
                if not text:
                    continue
                if text.lower() in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break
                if text.lower() == "/clear":
                    session.clear()
                    console.print("[dim]Conversation cleared.[/dim]\n")
                    continue

                console.print("[bold green]Assistant:[/bold green] ", end="")
                await session.send(engine, text, _print_chunk)
                console.print()

    asyncio.run(_chat())


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question or /command to send"),
    source: str = SOURCE_OPTION
):
    """Ask a single question and stream the reply."""
    async def _ask():
        async with get_engine(source, console) as engine:
            await engine.stream_reply([], question, _print_chunk)

    asyncio.run(_ask())


@app.command()
def context(source: str = SOURCE_OPTION):
    """Show the context summaries the assistant would use."""
    async def _context():
        try:
            aggregator = ContextAggregator(create_usage_source(source))
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)

        summary = await aggregator.build_context_summaries()

        table = Table(title="Assistant Context")
        table.add_column("Source", style="cyan")
        table.add_column("Summary")
        table.add_row("Usage", summary.usage_summary or "[dim]unavailable[/dim]")
        table.add_row("Billing", summary.billing_summary or "[dim]unavailable[/dim]")
        table.add_row("Devices", summary.device_summary or "[dim]unavailable[/dim]")
        console.print(table)

    asyncio.run(_context())


@app.command()
def health():
    """Check which reply path the assistant will use."""
    config = get_config(console)

    console.print(f"[green]+[/green] Provider: {config.provider}")
    if config.has_credentials:
        console.print("[green]+[/green] API key: SET (live streaming replies)")
    else:
        console.print("[yellow]![/yellow] API key: NOT SET (offline heuristic replies)")
    console.print(f"[green]+[/green] Model: {config.model or 'provider default'}")
    console.print(f"[green]+[/green] History sent per turn: {config.history_limit} messages")


if __name__ == "__main__":
    app()
