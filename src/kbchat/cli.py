"""Command line interface for kbchat."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from kbchat.config import AppConfig
from kbchat.index.search import SectionSelector
from kbchat.prompt import build_system_prompt
from kbchat.utils.files import load_knowledge_base
from kbchat.web.app import app as web_app


console = Console()
app = typer.Typer(help="kbchat - knowledge-grounded chat prompt assembly")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_selector(knowledge: Path | None) -> SectionSelector:
    config = AppConfig.from_env()
    if knowledge is not None:
        config.knowledge_path = knowledge
    path = config.resolve_knowledge_path(Path.cwd())
    if not path.exists():
        console.print(
            f"[yellow]Warning: knowledge base not found at {path}, using an empty corpus.[/yellow]"
        )
    return SectionSelector(load_knowledge_base(path))


@app.command()
def sections(
    knowledge: Path = typer.Option(None, "--knowledge", "-k", help="Knowledge base file"),
) -> None:
    """List the sections found in the knowledge base."""
    selector = _load_selector(knowledge)
    if not selector.sections:
        console.print("[yellow]No '## ' headings found; the corpus is used as a whole.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#")
    table.add_column("Heading")
    table.add_column("Characters")
    for position, section in enumerate(selector.sections, start=1):
        table.add_row(str(position), section.heading, str(len(section.body)))
    console.print(table)


@app.command()
def select(
    query: str = typer.Argument(..., help="User message to select knowledge for"),
    knowledge: Path = typer.Option(None, "--knowledge", "-k", help="Knowledge base file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show section scores and the knowledge selected for a query."""
    _setup_logging(verbose)
    selector = _load_selector(knowledge)

    ranked = selector.rank(query)
    if ranked:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Score")
        table.add_column("Heading")
        for item in ranked:
            table.add_row(f"{item.score:.2f}", item.heading)
        console.print(table)

    selected = selector.select(query)
    if not selected:
        console.print("[yellow]Knowledge base is empty.[/yellow]")
        return
    console.print(selected, markup=False, highlight=False)


@app.command()
def prompt(
    query: str = typer.Argument(..., help="User message to build the prompt for"),
    knowledge: Path = typer.Option(None, "--knowledge", "-k", help="Knowledge base file"),
) -> None:
    """Print the system prompt that would be sent for a query."""
    selector = _load_selector(knowledge)
    console.print(build_system_prompt(selector.select(query)), markup=False, highlight=False)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    knowledge: Path = typer.Option(None, "--knowledge", "-k", help="Knowledge base file"),
) -> None:
    """Start the chat API server."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    # the app reads its config from the environment on startup
    if knowledge is not None:
        os.environ["KBCHAT_KNOWLEDGE_PATH"] = str(knowledge)

    config = AppConfig.from_env()
    knowledge_path = config.resolve_knowledge_path(Path.cwd())
    if not knowledge_path.exists():
        console.print("[yellow]Warning: knowledge base not found, answers will be ungrounded.[/yellow]")
    if not config.api_key:
        console.print("[yellow]Warning: ANTHROPIC_API_KEY is not set, chat requests will fail.[/yellow]")

    console.print(f"Starting chat API on http://{host}:{port} (knowledge: {knowledge_path})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":
    app()
