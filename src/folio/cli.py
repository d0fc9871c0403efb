"""CLI interface for folio."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from folio.config import FolioConfig, load_config, merge_cli_overrides
from folio.content.catalog import ContentCatalog
from folio.content.sources import create_source
from folio.errors import FolioError
from folio.local.slots import FileSlots
from folio.local.store import LocalKeyedStore
from folio.observability import setup_logging

app = typer.Typer(
    name="folio",
    help="Content catalog and demo store for a personal site.",
)
content_app = typer.Typer(help="List content, tags, and sitemap routes.")
store_app = typer.Typer(help="Inspect and append to local demo stores.")
app.add_typer(content_app, name="content")
app.add_typer(store_app, name="store")

console = Console()
err_console = Console(stderr=True)


class _State:
    config: FolioConfig = FolioConfig()


state = _State()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from folio import __version__

        console.print(f"folio {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .folio.toml file."),
    ] = None,
    content_dir: Annotated[
        Optional[str],
        typer.Option("--content-dir", help="Directory of markdown content."),
    ] = None,
    store_path: Annotated[
        Optional[str],
        typer.Option("--store-path", help="JSON file holding demo store slots."),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Enable debug logging.")
    ] = False,
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
    """folio - content catalog and demo store."""
    config = load_config(config_path)
    state.config = merge_cli_overrides(
        config,
        content_dir=content_dir,
        store_path=store_path,
    )
    if verbose:
        setup_logging("DEBUG", "text")


def _catalog() -> ContentCatalog:
    config = state.config
    return ContentCatalog(
        create_source(config.content),
        route_prefix=config.sitemap.route_prefix,
        priority=config.sitemap.priority,
    )


def _fail(exc: FolioError) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {exc.message}")
    return typer.Exit(code=1)


# ── content ──────────────────────────────────────────────────────


@content_app.command("list")
def content_list(
    tag: Annotated[Optional[str], typer.Option("--tag", "-t", help="Only entries with this tag.")] = None,
    include_drafts: Annotated[
        bool, typer.Option("--all", help="Include unpublished entries.")
    ] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON instead of a table.")] = False,
) -> None:
    """List entries, newest first."""
    try:
        records = _catalog().snapshot(published_only=not include_drafts).list(tag)
    except FolioError as exc:
        raise _fail(exc) from exc

    if as_json:
        console.print_json(json.dumps([r.model_dump(mode="json") for r in records]))
        return

    table = Table(title="Content")
    table.add_column("Date")
    table.add_column("Slug")
    table.add_column("Title")
    table.add_column("Tags")
    for record in records:
        table.add_row(
            record.timestamp.isoformat() if record.timestamp else "-",
            record.slug,
            record.title,
            ", ".join(record.tags),
        )
    console.print(table)


@content_app.command("tags")
def content_tags() -> None:
    """Print every tag used by published entries."""
    try:
        tags = _catalog().tag_facets()
    except FolioError as exc:
        raise _fail(exc) from exc
    for tag in tags:
        console.print(tag)


@content_app.command("sitemap")
def content_sitemap() -> None:
    """Print sitemap routes as JSON."""
    try:
        entries = _catalog().sitemap_entries()
    except FolioError as exc:
        raise _fail(exc) from exc
    console.print_json(json.dumps([e.model_dump() for e in entries]))


# ── store ────────────────────────────────────────────────────────


def _parse_fields(fields: list[str]) -> dict[str, str]:
    payload: dict[str, str] = {}
    for field in fields:
        key, sep, value = field.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {field!r}")
        payload[key] = value
    return payload


@store_app.command("list")
def store_list(
    name: Annotated[str, typer.Argument(help="Store name, e.g. combobox:genres.")],
) -> None:
    """Print every entry in a store as JSON."""
    store = LocalKeyedStore(name, FileSlots(state.config.store.path))
    console.print_json(json.dumps([e.model_dump(mode="json") for e in store.find_all()]))


@store_app.command("add")
def store_add(
    name: Annotated[str, typer.Argument(help="Store name.")],
    fields: Annotated[list[str], typer.Argument(help="Payload fields as key=value.")],
) -> None:
    """Create one entry and print it."""
    payload = _parse_fields(fields)
    store = LocalKeyedStore(name, FileSlots(state.config.store.path))
    entry = store.create_one(payload)
    console.print_json(entry.model_dump_json())


# ── serve ────────────────────────────────────────────────────────


@app.command()
def serve(
    host: Annotated[Optional[str], typer.Option(help="Bind address.")] = None,
    port: Annotated[Optional[int], typer.Option(help="Bind port.")] = None,
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from folio.web.app import create_app

    config = merge_cli_overrides(state.config, host=host, port=port)
    setup_logging(config.server.log_level, config.server.log_format)
    logging.getLogger(__name__).info(
        "Serving on %s:%d", config.server.host, config.server.port
    )
    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    app()
