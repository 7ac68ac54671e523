"""Click CLI for folio — build responsive images for a portfolio site."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from folio.config.hierarchy import load_config_hierarchy

if TYPE_CHECKING:
    from folio.cache.store import ImageCacheStore

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging based on verbosity level."""
    level = logging.getLevelName(str(default_level).upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
        force=True,
    )


def _site_path(config: dict[str, Any], key: str) -> Path:
    """Resolve a configured path relative to the site directory."""
    path = Path(config[key])
    return path if path.is_absolute() else Path(config["site_dir"]) / path


@click.group()
@click.version_option(package_name="folio")
def cli() -> None:
    """folio: incremental responsive-image builder."""


@cli.command()
@click.argument("site_dir", type=click.Path(exists=True, file_okay=False), required=False)
@click.option("--dist", "dist_dir", type=click.Path(file_okay=False), help="Output directory.")
@click.option("--cache-file", type=click.Path(dir_okay=False), help="Image cache JSON file.")
@click.option("--workers", type=int, default=None, help="Concurrent images per collection.")
@click.option("--no-cache", is_flag=True, default=False, help="Ignore the existing image cache.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def build(
    site_dir: str | None,
    dist_dir: str | None,
    cache_file: str | None,
    workers: int | None,
    no_cache: bool,
    verbose: int,
) -> None:
    """Derive responsive images for every collection under SITE_DIR."""
    config = load_config_hierarchy(
        site_dir=site_dir,
        dist_dir=dist_dir,
        cache_file=cache_file,
        max_workers=workers,
        cache_disabled=no_cache or None,
    )
    _setup_logging(verbose, config.get("log_level", "WARNING"))

    from folio.core import ImageBuilder
    from folio.errors.exceptions import ConfigError

    try:
        builder = ImageBuilder(
            site_dir=config["site_dir"],
            dist_dir=_site_path(config, "dist_dir"),
            cache_path=_site_path(config, "cache_file"),
            max_workers=int(config.get("max_workers") or 1),
            no_cache=bool(config.get("cache_disabled")),
            collection_overrides=config.get("collections") or None,
        )
        report = builder.build()
    except (ConfigError, ValueError) as e:
        error_console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(2)

    _print_report(report)
    if not report.succeeded:
        error_console.print("[red]Build produced no usable image collections.[/red]")
        sys.exit(1)


def _print_report(report: object) -> None:
    """Print the per-collection summary and any warnings."""
    from folio.types import BuildReport

    if not isinstance(report, BuildReport):
        return

    table = Table(title="Image Build Summary", show_header=True)
    table.add_column("Collection", style="cyan")
    table.add_column("Processed", justify="right")
    table.add_column("Cached", justify="right")
    table.add_column("Failed", justify="right")
    table.add_column("Total", justify="right")

    for key, stats in report.collections.items():
        if stats.missing:
            table.add_row(key, "-", "-", "[red]missing[/red]", str(stats.total))
            continue
        failed = f"[red]{stats.failed}[/red]" if stats.failed else "0"
        table.add_row(key, str(stats.processed), str(stats.skipped), failed, str(stats.total))
    table.add_row(
        "[bold]Total[/bold]",
        str(report.processed),
        str(report.skipped),
        str(report.failed),
        str(sum(s.total for s in report.collections.values())),
    )
    console.print(table)

    if report.warnings:
        console.print("[yellow]Image validation warnings:[/yellow]")
        for warning in report.warnings:
            console.print(f"  - {warning}")
    if report.errors:
        error_console.print("[red]Errors:[/red]")
        for error in report.errors:
            error_console.print(f"  - {error}")


@cli.command("inspect")
@click.argument("site_dir", type=click.Path(exists=True, file_okay=False), default=".")
def inspect_site(site_dir: str) -> None:
    """List the collections and image counts discovered under SITE_DIR."""
    from folio.pipeline.inventory import discover_collections

    inventory = discover_collections(site_dir)

    table = Table(title="Collections", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Kind")
    table.add_column("Images", justify="right")
    table.add_column("Source")

    for spec in inventory.collections:
        table.add_row(spec.key, spec.kind.value, str(len(spec.images)), str(spec.source_dir))

    console.print(table)
    for error in inventory.errors:
        error_console.print(f"[red]Error:[/red] {error}")


@cli.group()
def cache() -> None:
    """Image cache management commands."""


def _open_store(site_dir: str, cache_file: str | None) -> ImageCacheStore:
    from folio.cache.store import ImageCacheStore

    config = load_config_hierarchy(site_dir=site_dir, cache_file=cache_file)
    return ImageCacheStore(_site_path(config, "cache_file"))


@cache.command("stats")
@click.argument("site_dir", type=click.Path(exists=True, file_okay=False), default=".")
@click.option("--cache-file", type=click.Path(dir_okay=False), help="Image cache JSON file.")
def cache_stats(site_dir: str, cache_file: str | None) -> None:
    """Show image cache statistics."""
    store = _open_store(site_dir, cache_file)
    store.load()
    stats = store.stats()

    table = Table(title="Image Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Path", stats.path)
    table.add_row("Entries", str(stats.entries))
    table.add_row("Size (KB)", f"{stats.size_kb:.1f}")

    console.print(table)


@cache.command("clear")
@click.argument("site_dir", type=click.Path(exists=True, file_okay=False), default=".")
@click.option("--cache-file", type=click.Path(dir_okay=False), help="Image cache JSON file.")
@click.confirmation_option(prompt="Are you sure you want to clear the image cache?")
def cache_clear(site_dir: str, cache_file: str | None) -> None:
    """Delete the image cache; the next build reprocesses every image."""
    store = _open_store(site_dir, cache_file)
    if store.clear():
        console.print(f"[green]Cache cleared:[/green] {store.path}")
    else:
        console.print(f"[yellow]No cache file at {store.path}[/yellow]")


def main() -> None:
    """Entry point for the CLI."""
    cli()
