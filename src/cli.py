"""CLI interface for notesfeed."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from notesfeed.config import ItemOrder, SiteConfig, load_config, merge_cli_overrides
from notesfeed.errors import BuildReport, FeedBuildError, save_report
from notesfeed.feeds.discovery import discovery_links
from notesfeed.pipeline import generate_main_feeds
from notesfeed.posts.loader import load_posts

app = typer.Typer(
    name="notesfeed",
    help="Build RSS, Atom and JSON feeds for a notes blog.",
)

console = Console()
_stderr_console = Console(stderr=True)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="Path to a .notesfeed.toml file. Defaults to ./.notesfeed.toml.",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from notesfeed import __version__

        console.print(f"notesfeed {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """notesfeed - syndication feeds for a notes blog."""
    pass


def _load(config_path: Path | None, **overrides: object) -> SiteConfig:
    try:
        return merge_cli_overrides(load_config(config_path), **overrides)
    except ValidationError as exc:
        _stderr_console.print(f"[red]Error:[/red] Invalid configuration: {exc}")
        raise typer.Exit(1)


def _save_report(report: BuildReport, output_dir: Path) -> None:
    """Persist the build report; a failure here never changes the exit code."""
    try:
        save_report(report, output_dir)
    except OSError as exc:
        _stderr_console.print(f"[yellow]Warning:[/yellow] Could not save build report: {exc}")


@app.command(name="build")
def build_cmd(
    config_path: ConfigOption = None,
    base_url: Annotated[
        Optional[str],
        typer.Option("--base-url", help="Site base URL, e.g. https://example.com."),
    ] = None,
    content_dir: Annotated[
        Optional[Path],
        typer.Option("--content-dir", help="Directory holding the post collections."),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Public output directory. Feeds go in <output>/feeds/."),
    ] = None,
    order: Annotated[
        Optional[ItemOrder],
        typer.Option("--order", help="Item order: published-desc or loader."),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only print errors."),
    ] = False,
) -> None:
    """Generate feed.xml, atom.xml and feed.json from the post collection."""
    config = _load(
        config_path,
        base_url=base_url,
        content_dir=content_dir,
        output_dir=output_dir,
        order=order,
    )

    report = BuildReport()
    try:
        written = generate_main_feeds(config, report=report)
    except FeedBuildError as exc:
        _stderr_console.print(f"[red]Error:[/red] {exc}")
        _save_report(report, Path(config.output_dir))
        raise typer.Exit(1)

    _save_report(report, Path(config.output_dir))

    if not quiet:
        for path in written:
            console.print(f"  [green]wrote[/green] {path}")
        console.print(report.summary_text())


@app.command(name="posts")
def posts_cmd(
    config_path: ConfigOption = None,
    content_dir: Annotated[
        Optional[Path],
        typer.Option("--content-dir", help="Directory holding the post collections."),
    ] = None,
) -> None:
    """List the posts that would go into the feeds."""
    config = _load(config_path, content_dir=content_dir)

    try:
        posts = load_posts(Path(config.content_dir), config.collection)
    except FeedBuildError as exc:
        _stderr_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    if not posts:
        console.print("[yellow]No posts found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"{config.collection} ({len(posts)})")
    table.add_column("Slug")
    table.add_column("Published")
    table.add_column("Title")
    for post in posts:
        table.add_row(post.slug, post.metadata.published_at, post.metadata.title)
    console.print(table)


@app.command(name="head")
def head_cmd(config_path: ConfigOption = None) -> None:
    """Print the feed discovery <link> tags for the page head."""
    config = _load(config_path)
    for tag in discovery_links(config):
        print(tag)


if __name__ == "__main__":
    app()
