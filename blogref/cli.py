"""CLI entry point for blogref."""

import asyncio
import json

import typer
from rich.console import Console
from rich.table import Table

from . import config
from .errors import BlogRefError
from .extractor import extract_metadata
from .providers import PROVIDERS, EXTERNAL, detect_provider_from_url
from .resolver import resolve_external_url

app = typer.Typer(
    name="blogref",
    help="Extract blog post metadata and rebuild links to externally hosted posts.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


@app.command()
def extract(
    url: str = typer.Argument(..., help="Blog post URL"),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the metadata as JSON",
    ),
    timeout: float = typer.Option(
        config.FETCH_TIMEOUT,
        "-t", "--timeout",
        help="Request timeout in seconds",
    ),
):
    """
    Fetch a blog post and print its metadata.

    Example:
        blogref extract https://medium.com/@jane/my-post-1a2b3c4d5e
    """
    try:
        metadata = asyncio.run(extract_metadata(url, timeout=timeout))
    except BlogRefError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(metadata.to_dict(), ensure_ascii=False))
        return

    provider = detect_provider_from_url(url)
    console.print(f"\n[bold]{metadata.title or '(untitled)'}[/bold]")
    console.print(f"[dim]{provider} - {metadata.author or 'unknown author'} - {metadata.date}[/dim]")
    if metadata.excerpt:
        console.print(f"\n{metadata.excerpt}")
    if metadata.image:
        console.print(f"\n[cyan]Image:[/cyan] {metadata.image}")
    if metadata.tags:
        console.print(f"[cyan]Tags:[/cyan] {', '.join(metadata.tags)}")
    console.print()


@app.command()
def resolve(
    identifier: str = typer.Argument(..., help="Stored external id (URL, slug or handle)"),
    provider: str = typer.Option(
        "external",
        "-p", "--provider",
        help="Provider id (medium, dev.to, hashnode, ...)",
    ),
    author: str = typer.Option(
        None,
        "-a", "--author",
        help="Post author (required for dev.to)",
    ),
):
    """Rebuild the external URL for a stored blog identifier."""
    url = resolve_external_url(identifier, provider, author)
    if url is None:
        err_console.print("[yellow]No link can be built from this identifier.[/yellow]")
        raise typer.Exit(1)
    typer.echo(url)


@app.command()
def detect(url: str = typer.Argument(..., help="Blog URL or hostname")):
    """Print the provider id for a URL or hostname."""
    typer.echo(detect_provider_from_url(url))


@app.command()
def providers():
    """List known providers and the hosts they match."""
    table = Table(title="Providers")
    table.add_column("id", style="cyan")
    table.add_column("label")
    table.add_column("hosts", style="dim")
    for provider in (*PROVIDERS, EXTERNAL):
        table.add_row(provider.id, provider.label, ", ".join(provider.hosts) or "-")
    console.print(table)


@app.command()
def serve(
    host: str = typer.Option(config.HOST, "--host", help="Bind address"),
    port: int = typer.Option(config.PORT, "--port", help="Bind port"),
):
    """Run the metadata extraction web service."""
    import uvicorn

    uvicorn.run("blogref.web:app", host=host, port=port)


if __name__ == "__main__":
    app()
