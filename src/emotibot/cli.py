"""Typer CLI — ``emotibot analyze``, ``validate``, ``templates`` and ``providers``."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from emotibot.config import load_config
from emotibot.errors import AnalysisError, ProviderUnavailable
from emotibot.output.markdown import render_markdown, score_bar
from emotibot.schemas.analysis import AnalysisCategory, AnalysisRecord, parse_category
from emotibot.schemas.config import AppConfig
from emotibot.service import AnalysisService

# Load .env file from the working directory (if it exists)
load_dotenv()

app = typer.Typer(
    name="emotibot",
    help="Emotibot — score a message's style, impact and likely outcome with an LLM.",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # The SDK and httpx log every HTTP request — noisy and unhelpful for users
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def _load_or_exit(config: Path | None) -> AppConfig:
    try:
        return load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)


def _read_text(text: str | None, file: Path | None) -> str:
    if text is not None:
        return text
    if file is not None:
        if not file.exists():
            console.print(f"[red]No such file:[/] {file}")
            raise typer.Exit(code=1)
        return file.read_text()
    if not sys.stdin.isatty():
        return sys.stdin.read()
    console.print("[red]Error:[/] provide --text, --file, or pipe the message on stdin.")
    raise typer.Exit(code=1)


@app.command()
def analyze(
    category: str = typer.Option("style", "--category", "-k", help="style, impact or outcome."),
    text: str = typer.Option(None, "--text", "-t", help="Message to analyze."),
    file: Path = typer.Option(None, "--file", "-f", help="Read the message from a file."),
    provider: str = typer.Option(None, "--provider", "-p", help="Provider to use (overrides config)."),
    model: str = typer.Option(None, "--model", "-m", help="Model for the chosen provider."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to emotibot.yml"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the record to a .json or .md file."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON instead of a table."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use canned replies (no API calls)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Analyze a message and print the scored result."""
    _setup_logging(verbose)

    try:
        parsed_category = parse_category(category)
    except ValueError as exc:
        console.print(f"[red]Error:[/] {exc}")
        raise typer.Exit(code=1)

    cfg = _load_or_exit(config)
    message = _read_text(text, file)
    service = AnalysisService.from_config(cfg)

    provider_name = "dry-run" if dry_run else provider
    if provider_name or model:
        options = {"model": model} if model else None
        target = provider_name or cfg.default_provider
        if not service.set_provider(target, options):
            console.print(
                f"[red]Unknown provider:[/] {target} "
                f"(available: {', '.join(service.registry.names)})"
            )
            raise typer.Exit(code=1)

    active = service.registry.get_active_provider()
    try:
        result = asyncio.run(service.analyze(message, parsed_category))
    except ProviderUnavailable as exc:
        console.print(f"[red]{exc}[/] — check the API key for this provider.")
        raise typer.Exit(code=2)
    except AnalysisError as exc:
        console.print(f"[red]Analysis failed:[/] {exc}")
        raise typer.Exit(code=1)

    record = AnalysisRecord(
        text=message,
        category=parsed_category,
        provider=active.name,
        model=active.model,
        result=result,
    )

    if as_json:
        typer.echo(record.result.model_dump_json(indent=2))
    else:
        _print_record(record)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        if output.suffix.lower() == ".md":
            output.write_text(render_markdown(record))
        else:
            output.write_text(record.model_dump_json(indent=2))
        console.print(f"[green]Result written to:[/] {output}")


def _print_record(record: AnalysisRecord) -> None:
    result = record.result
    table = Table(title=f"{record.category.value.title()} — {record.provider} ({record.model})")
    table.add_column("Metric", no_wrap=True)
    table.add_column("Score", justify="right")
    table.add_column("", no_wrap=True)
    table.add_column("Analysis", overflow="fold")
    for name, score in result.metrics.items():
        table.add_row(
            name.replace("_", " ").title(),
            f"{score:g}",
            f"[cyan]{score_bar(score)}[/]",
            escape(result.analysis.get(name, "")),
        )
    console.print(table)

    if result.summary:
        console.print(Panel(escape(result.summary), title="Summary", style="blue"))
    if result.suggestions:
        console.print("[bold]Suggestions[/]")
        for i, suggestion in enumerate(result.suggestions, 1):
            console.print(f"  {i}. {escape(suggestion)}")


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to emotibot.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a configuration file without calling any provider."""
    _setup_logging(verbose)
    cfg = _load_or_exit(config)

    console.print("[green]Config is valid![/]\n")
    console.print(f"  Default provider: {cfg.default_provider}")
    console.print(f"  Timeout:          {cfg.timeout_seconds:g}s")
    console.print(f"  Max tokens:       {cfg.max_tokens}")
    console.print(f"  Live probe:       {'yes' if cfg.probe else 'no'}")
    for name, settings in cfg.providers.items():
        console.print(f"  {name}: model={settings.model or '(default)'} key_env={settings.api_key_env or '(default)'}")
    if cfg.templates:
        console.print(f"  Template overrides: {', '.join(sorted(cfg.templates))}")


@app.command()
def templates(
    category: str = typer.Option(None, "--category", "-k", help="Show only this category."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to emotibot.yml"),
) -> None:
    """Print the active prompt template(s), including config overrides."""
    cfg = _load_or_exit(config)
    service = AnalysisService.from_config(cfg)

    if category:
        try:
            categories = [parse_category(category)]
        except ValueError as exc:
            console.print(f"[red]Error:[/] {exc}")
            raise typer.Exit(code=1)
    else:
        categories = list(AnalysisCategory)

    for cat in categories:
        console.print(Panel(escape(service.prompts.get_template(cat)), title=cat.value, style="blue"))


@app.command()
def providers(
    config: Path = typer.Option(None, "--config", "-c", help="Path to emotibot.yml"),
) -> None:
    """List the providers that can be selected with --provider."""
    cfg = _load_or_exit(config)
    service = AnalysisService.from_config(cfg)
    active = service.registry.get_active_provider()

    table = Table()
    table.add_column("Name")
    table.add_column("Provider")
    table.add_column("Model")
    table.add_column("Key configured")
    for name in service.registry.names:
        p = service.registry.get(name)
        marker = " [green](default)[/]" if p is active else ""
        table.add_row(
            f"{name}{marker}",
            p.name,
            p.model,
            "yes" if p.client.has_credentials else "[red]no[/]",
        )
    console.print(table)
