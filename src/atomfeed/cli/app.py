from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from atomfeed.core.builder import FeedBuilder
from atomfeed.core.config import AtomFeedConfig
from atomfeed.core.exceptions import AtomFeedError
from atomfeed.core.logging import setup_logging
from atomfeed.core.types import MetadataOverrides
from atomfeed.core.utils import format_timestamp
from atomfeed.infra.repository.files import DirectoryContentStore
from atomfeed.infra.sinks.atom_xml import AtomXMLOutputSink

app = typer.Typer(name="atomfeed", help="Generate Atom feeds from a directory of content records.")

# The feed itself may go to stdout
console = Console(stderr=True)


def _load(site_root: Path | None, content_dir: Path | None, log_level: str) -> FeedBuilder:
    setup_logging(log_level)
    config = AtomFeedConfig.load(site_root)
    store = DirectoryContentStore(content_dir or config.paths.abs_content_dir)
    return FeedBuilder(store, config=config)


@app.command()
def build(
    identifiers: list[str] | None = typer.Argument(None, help="Record titles, in feed order. Defaults to all feed-eligible records."),
    site_root: Path | None = typer.Option(None, "--site-root", help="Directory holding .atomfeed.toml."),
    content_dir: Path | None = typer.Option(None, "--content-dir", help="Directory of content records."),
    output: str | None = typer.Option(None, "--output", "-o", help="Output file, or '-' for stdout."),
    title: str | None = typer.Option(None, "--title", help="Override the feed title."),
    subtitle: str | None = typer.Option(None, "--subtitle", help="Override the feed subtitle."),
    author: str | None = typer.Option(None, "--author", help="Override the feed author."),
    feed_path: str | None = typer.Option(None, "--feed-path", help="Feed path relative to the server URL."),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level."),
):
    """
    Build the Atom feed.
    """
    try:
        builder = _load(site_root, content_dir, log_level)
        overrides = MetadataOverrides(title=title, subtitle=subtitle, author=author, feed_path=feed_path)
        xml = builder.build(identifiers or builder.feed_identifiers(), overrides)
    except (AtomFeedError, FileNotFoundError) as exc:
        console.print(f"[bold red]Feed generation failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if output == "-":
        typer.echo(xml, nl=False)
        return

    target = Path(output) if output else builder.config.paths.abs_output
    AtomXMLOutputSink(target).publish(xml)
    console.print(f"✅ Feed written to {target}")


@app.command("list")
def list_records(
    site_root: Path | None = typer.Option(None, "--site-root", help="Directory holding .atomfeed.toml."),
    content_dir: Path | None = typer.Option(None, "--content-dir", help="Directory of content records."),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level."),
):
    """
    List the records that would make up the feed, newest first.
    """
    try:
        builder = _load(site_root, content_dir, log_level)
    except (AtomFeedError, FileNotFoundError) as exc:
        console.print(f"[bold red]Could not load content:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    table = Table(title="Feed records")
    table.add_column("Title", style="bold cyan")
    table.add_column("Modified")
    table.add_column("Author")
    table.add_column("Tags")

    for identifier in builder.feed_identifiers():
        record = builder.store.get_record(identifier)
        table.add_row(
            record.title,
            format_timestamp(record.modified, builder.config.feed.timestamp_format),
            record.modifier or record.creator or "",
            ", ".join(record.tags),
        )

    Console().print(table)


if __name__ == "__main__":
    app()
