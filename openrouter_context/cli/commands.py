"""CLI commands for openrouter-context."""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from openrouter_context import __version__
from openrouter_context.config.loader import load_config
from openrouter_context.context.estimator import TiktokenEstimator, TokenEstimator
from openrouter_context.context.factory import build_context_manager
from openrouter_context.context.types import Message
from openrouter_context.errors import ContextError

app = typer.Typer(
    name="openrouter-context",
    help="Inspect and reduce conversation context for OpenRouter models",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"openrouter-context v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """openrouter-context - conversation context management."""
    pass


def _load_messages(path: Path) -> list[Message]:
    """Load a conversation from a JSON list of {role, content} objects."""
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read {path}: {e}[/red]")
        raise typer.Exit(1)

    if not isinstance(data, list) or not all(isinstance(m, dict) for m in data):
        console.print(f"[red]{path} must contain a JSON list of messages[/red]")
        raise typer.Exit(1)

    return [Message.from_dict(m) for m in data]


def _preview(text: str, width: int = 60) -> str:
    text = text.replace("\n", " ")
    return text if len(text) <= width else text[: width - 3] + "..."


def _print_messages(
    title: str, messages: list[Message], estimator: TokenEstimator | None = None
) -> None:
    estimator = estimator or TokenEstimator()
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Role", style="cyan")
    table.add_column("Tokens", justify="right")
    table.add_column("Content")

    for i, msg in enumerate(messages):
        table.add_row(
            str(i), msg.role, str(estimator.estimate([msg])), _preview(msg.content)
        )

    console.print(table)


@app.command()
def estimate(
    file: Path = typer.Argument(..., help="Conversation JSON file"),
    tiktoken: bool = typer.Option(
        False, "--tiktoken", help="Count content with the cl100k_base encoding"
    ),
):
    """Estimate the token count of a conversation."""
    messages = _load_messages(file)
    estimator = TiktokenEstimator() if tiktoken else TokenEstimator()

    _print_messages(file.name, messages, estimator)
    console.print(
        f"Total: {estimator.estimate(messages)} tokens "
        f"across {len(messages)} messages"
    )


@app.command()
def fit(
    file: Path = typer.Argument(..., help="Conversation JSON file"),
    strategy: str = typer.Option(
        None, "--strategy", "-s", help="truncation, sliding_window or summary"
    ),
    budget: int = typer.Option(None, "--budget", "-b", help="Token budget"),
    window_size: int = typer.Option(None, "--window-size", help="Sliding window size"),
    keep_first: bool = typer.Option(
        None, "--keep-first/--no-keep-first", help="Pin the first message"
    ),
    recent_count: int = typer.Option(
        None, "--recent-count", help="Messages kept verbatim by the summary strategy"
    ),
    config_path: Path = typer.Option(None, "--config", "-c", help="Config file"),
    output: Path = typer.Option(None, "--output", "-o", help="Write result as JSON"),
):
    """Fit a conversation into a token budget."""
    config = load_config(config_path)
    ctx = config.context
    if strategy is not None:
        ctx.strategy = strategy
    if budget is not None:
        ctx.max_context_tokens = budget
    if window_size is not None:
        ctx.window_size = window_size
    if keep_first is not None:
        ctx.keep_first = keep_first
    if recent_count is not None:
        ctx.recent_count = recent_count

    messages = _load_messages(file)

    provider = None
    if ctx.strategy == "summary" or ctx.use_processor:
        from openrouter_context.providers.litellm_provider import LiteLLMProvider

        provider = LiteLLMProvider(
            api_key=config.provider.api_key or None,
            api_base=config.get_api_base(),
            default_model=config.provider.default_model,
            timeout_seconds=config.provider.timeout_seconds,
            app_title=config.provider.app_title,
            http_referer=config.provider.http_referer,
        )

    try:
        manager = build_context_manager(config, provider)
        outcome = asyncio.run(manager.fit(messages))
    except ContextError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _print_messages(f"{file.name} ({ctx.strategy})", outcome.messages)

    status = "[red]over budget[/red]" if outcome.exceeds_budget else "[green]ok[/green]"
    console.print(
        f"{len(messages)} -> {len(outcome.messages)} messages, "
        f"~{outcome.estimated_tokens}/{outcome.budget} tokens ({status})"
    )

    if output:
        output.write_text(
            json.dumps([m.to_dict() for m in outcome.messages], indent=2)
        )
        console.print(f"[green]✓[/green] Wrote {output}")


if __name__ == "__main__":
    app()
