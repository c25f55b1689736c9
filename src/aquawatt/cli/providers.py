"""Provider factory functions for CLI.

Centralizes creation of the configuration and reply engine from environment
variables. Hides configuration details from command implementations.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from ..assistant import AssistantConfig, StreamingReplyEngine, create_reply_engine
from ..llm.factory import PROVIDER_DEFAULTS

# Default console for output
_console = Console()


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route library logging through Rich.

    Args:
        verbose: Show DEBUG records instead of WARNING and above
        console: Optional Rich console to log to (default: stderr)
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_config(console: Console | None = None) -> AssistantConfig:
    """Create assistant configuration from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Assistant configuration; without an API key replies use the
        heuristic fallback

    Environment variables:
        LLM_PROVIDER: Provider type (openai, deepseek; default: openai)
        OPENAI_API_KEY: OpenAI API key (for openai provider)
        DEEPSEEK_API_KEY: DeepSeek API key (for deepseek provider)
        AQUAWATT_MODEL: Model override
        AQUAWATT_BASE_URL: Base URL override
        AQUAWATT_TEMPERATURE: Sampling temperature (default: 0.4)
    """
    import typer

    con = console or _console
    try:
        config = AssistantConfig.from_env()
    except ValueError as e:
        con.print(f"[red]Error: invalid assistant configuration: {e}[/red]")
        raise typer.Exit(code=1)

    if config.provider not in PROVIDER_DEFAULTS:
        con.print(f"[red]Error: Unknown LLM provider: {config.provider}[/red]")
        raise typer.Exit(code=1)
    return config


def get_engine(source: str = "demo", console: Console | None = None) -> StreamingReplyEngine:
    """Create the reply engine for CLI commands.

    Args:
        source: Usage data source type
        console: Optional Rich console for output

    Returns:
        Reply engine instance

    Raises:
        SystemExit: If the source type is not supported
    """
    import typer

    con = console or _console
    config = get_config(con)
    if not config.has_credentials:
        con.print(f"[yellow]Warning: no API key for {config.provider}, using offline replies[/yellow]")
    try:
        return create_reply_engine(config, source=source)
    except ValueError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
