"""
CLI for docs-inline.

Usage:
    docs-inline inline --project-root docs-repo
    docs-inline inline --dry-run
    docs-inline refs docs/index.md
    docs-inline snippet lib/sdm/dotnetCore.ts dotnetGenerator
    docs-inline check-links
"""

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from docs_inline import __version__
from docs_inline.config import InlineConfig
from docs_inline.errors import ConfigError
from docs_inline.grammar.reference import find_references
from docs_inline.grammar.snippet import find_snippet
from docs_inline.logging import configure_logging
from docs_inline.project import LocalProject
from docs_inline.reconcile import Disposition, InlineResult, Reconciler
from docs_inline.refcheck import inspect_references
from docs_inline.samples import SampleFetcher
from docs_inline.settings import DocsInlineSettings

console = Console()


def load_config(project_root: str, config_path: str | None) -> InlineConfig:
    """Config from *config_path*, else DOCS_INLINE_CONFIG_FILE, else defaults."""
    path = Path(config_path) if config_path else DocsInlineSettings().config_file
    config = InlineConfig.from_yaml(path) if path else InlineConfig()
    config.project_root = Path(project_root)
    return config


async def run_inline(config: InlineConfig, dry_run: bool) -> InlineResult:
    project = LocalProject(config.project_root)
    async with SampleFetcher(timeout=config.fetch_timeout) as fetcher:
        reconciler = Reconciler(
            config,
            fetcher,
            write_to_log=lambda section: console.print(section, markup=False, highlight=False, soft_wrap=True),
            dry_run=dry_run,
        )
        return await reconciler.run(project)


@click.group()
@click.version_option(version=__version__)
def cli():
    """Inline code snippets from a sample repository into Markdown docs."""
    settings = DocsInlineSettings()
    configure_logging(level=settings.log_level, json_format=settings.log_format == "json")


@cli.command()
@click.option(
    "--project-root", "-p",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Root directory holding the Markdown documents.",
)
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML configuration file.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Report what would change without writing files.",
)
def inline(project_root: str, config_path: str | None, dry_run: bool):
    """Refresh every code snippet reference block.

    Exits 1 if the run did not complete cleanly.
    """
    try:
        config = load_config(project_root, config_path)
    except ConfigError as e:
        raise click.ClickException(e.message)

    console.print("\n[bold blue]📎 Inlining code snippets[/bold blue]\n")
    result = asyncio.run(run_inline(config, dry_run))

    table = Table(title="Snippet references")
    table.add_column("Document", style="cyan")
    table.add_column("Snippet")
    table.add_column("Sample file")
    table.add_column("Result")
    table.add_column("Edited", justify="center")

    styles = {
        Disposition.REPLACE: "green",
        Disposition.SNIPPET_NOT_FOUND: "yellow",
        Disposition.SAMPLE_FILE_NOT_FOUND: "red",
    }
    for outcome in result.outcomes:
        style = styles[outcome.disposition]
        table.add_row(
            outcome.location.markdown_path,
            outcome.location.snippet_name,
            outcome.location.sample_filepath,
            f"[{style}]{outcome.disposition.value}[/{style}]",
            "✅" if outcome.edited else "-",
        )
    console.print(table)

    verb = "Would rewrite" if dry_run else "Rewrote"
    console.print(f"\n{verb} {len(result.edited_paths)} document(s)")

    if not result.success:
        console.print(f"[bold red]❌ Run failed:[/bold red] {result.error}")
        raise SystemExit(1)


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
def refs(file_path: str):
    """List the snippet reference blocks in a Markdown file."""
    content = Path(file_path).read_text(encoding="utf-8")
    references = find_references(content)

    console.print(f"\nFound {len(references)} reference(s) in {file_path}\n")
    for ref in references:
        console.print(f"[bold cyan]{ref.target}[/bold cyan]", highlight=False)
        console.print(f"  Body: {len(ref.current_body.strip())} chars")
        if ref.prior_diagnostic:
            console.print(f"  Diagnostic: {ref.prior_diagnostic.strip()}", markup=False)
        if ref.prior_link:
            console.print(f"  Link: {ref.prior_link}", markup=False)


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("name")
def snippet(file_path: str, name: str):
    """Show the region NAME of a local sample file."""
    content = Path(file_path).read_text(encoding="utf-8")
    found = find_snippet(content, name)

    if found is None:
        console.print(f"[bold yellow]⚠️  Snippet '{name}' not found in {file_path}[/bold yellow]")
        raise SystemExit(1)

    start, end = found.line_span(content)
    console.print(f"[bold cyan]{name}[/bold cyan] lines {start}-{end}\n")
    console.print(found.content, markup=False, highlight=False)


@cli.command("check-links")
@click.option(
    "--project-root", "-p",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Root directory holding the Markdown documents.",
)
def check_links(project_root: str):
    """Find reference-style links with no definition."""
    comments = inspect_references(LocalProject(project_root))

    if not comments:
        console.print("[bold green]✅ All link references resolve[/bold green]")
        return

    for comment in comments:
        console.print(f"  ❌ {comment.path}:{comment.line} {comment.detail}", markup=False, soft_wrap=True)
    console.print(f"\n[bold red]{len(comments)} unresolved link reference(s)[/bold red]")
    raise SystemExit(1)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
