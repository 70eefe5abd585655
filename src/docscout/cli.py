"""Command line interface for docscout."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Optional

import typer
from rich.console import Console
from rich.markdown import Markdown

from docscout.config import AppConfig
from docscout.errors import DocScoutError
from docscout.index.search import DocsService


console = Console()
app = typer.Typer(help="docscout - offline search over Markdown documentation")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _service(corpus: Optional[Path]) -> DocsService:
    config = AppConfig(corpus_root=corpus if corpus is not None else AppConfig().corpus_root)
    resolved = config.resolve_corpus_root(Path.cwd())
    if not resolved.exists():
        console.print(f"[yellow]Corpus not found at {resolved}, results will be empty.[/yellow]")
    return DocsService(config)


def _emit(operation: Awaitable[str], raw: bool) -> None:
    try:
        text = asyncio.run(operation)
    except DocScoutError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    if raw:
        console.print(text, markup=False, highlight=False)
    else:
        console.print(Markdown(text))


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    section: Optional[str] = typer.Option(None, help="Restrict to a section, e.g. guides"),
    version: Optional[str] = typer.Option(None, "--version", help="Version, e.g. latest or v51.0.0"),
    corpus: Optional[Path] = typer.Option(None, "--corpus", help="Documentation corpus directory"),
    raw: bool = typer.Option(False, "--raw", help="Print plain Markdown instead of rendering it"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search the documentation."""
    _setup_logging(verbose)
    service = _service(corpus)
    _emit(service.search(query, section, version), raw)


@app.command()
def show(
    fragment: Optional[str] = typer.Argument(None, help="Path fragment, e.g. guides/routing"),
    version: Optional[str] = typer.Option(None, "--version", help="Version, e.g. latest or v51.0.0"),
    corpus: Optional[Path] = typer.Option(None, "--corpus", help="Documentation corpus directory"),
    raw: bool = typer.Option(False, "--raw", help="Print plain Markdown instead of rendering it"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show the first document whose path matches a fragment."""
    _setup_logging(verbose)
    service = _service(corpus)
    _emit(service.get_by_path(fragment, version), raw)


@app.command()
def content(
    stored_path: str = typer.Argument(..., help="Corpus-relative path of a document"),
    corpus: Optional[Path] = typer.Option(None, "--corpus", help="Documentation corpus directory"),
    raw: bool = typer.Option(False, "--raw", help="Print plain Markdown instead of rendering it"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show a document by its exact stored path."""
    _setup_logging(verbose)
    service = _service(corpus)
    _emit(service.get_content(stored_path), raw)


@app.command()
def sections(
    section: Optional[str] = typer.Option(None, help="Only list this section"),
    version: Optional[str] = typer.Option(None, "--version", help="Version, e.g. latest or v51.0.0"),
    corpus: Optional[Path] = typer.Option(None, "--corpus", help="Documentation corpus directory"),
    raw: bool = typer.Option(False, "--raw", help="Print plain Markdown instead of rendering it"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List sections and their topics."""
    _setup_logging(verbose)
    service = _service(corpus)
    _emit(service.list_sections(section, version), raw)


@app.command()
def api(
    module: str = typer.Argument(..., help="Module name, e.g. expo-camera"),
    version: Optional[str] = typer.Option(None, "--version", help="Version, e.g. latest or v51.0.0"),
    corpus: Optional[Path] = typer.Option(None, "--corpus", help="Documentation corpus directory"),
    raw: bool = typer.Option(False, "--raw", help="Print plain Markdown instead of rendering it"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show the API reference page for a module."""
    _setup_logging(verbose)
    service = _service(corpus)
    _emit(service.get_api_reference(module, version), raw)


@app.command()
def quickstart(
    platform: Optional[str] = typer.Option(None, help="ios, android, web or all"),
    corpus: Optional[Path] = typer.Option(None, "--corpus", help="Documentation corpus directory"),
    raw: bool = typer.Option(False, "--raw", help="Print plain Markdown instead of rendering it"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show the quick start guide."""
    _setup_logging(verbose)
    service = _service(corpus)
    _emit(service.get_quick_start(platform), raw)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    corpus: Optional[Path] = typer.Option(None, "--corpus", help="Documentation corpus directory"),
) -> None:
    """Start the HTTP interface."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - optional extra
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    from docscout.web.app import app as web_app, configure

    config = AppConfig(corpus_root=corpus if corpus is not None else AppConfig().corpus_root)
    resolved = config.resolve_corpus_root(Path.cwd())
    configure(config)

    console.print(f"Starting web interface on http://{host}:{port} (corpus: {resolved})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":  # pragma: no cover
    app()
