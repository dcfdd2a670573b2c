"""
Command-line interface for playlist-facets.

This module implements the CLI using Click, with rich-click for colored
help output and Rich tables for results.

Commands:
    facets tracks <playlist>            List the tracks of a playlist
    facets analyze <playlist>           Fetch facets for every track, filter, export
    facets device <file> --kind <kind>  Normalize a device dashboard payload

<playlist> is a playlist ID or a music.163.com playlist URL.

Usage:
    # List tracks
    facets tracks 24381616

    # Analyze, keep pop or folk songs between 90 and 120 BPM, write the list
    facets analyze "https://music.163.com/#/playlist?id=24381616" \\
        --style 流行 --style 民谣 --bpm-min 90 --bpm-max 120 --output songs.txt

    # Normalize a door sensor payload
    facets device door.json --kind door_window

Configuration:
    Optional config.yaml in the current directory (or --config <path>):
    - API base URL and per-request timeout
    - Output directory for log files

Exit codes:
    0 success, 1 error, 2 usage error, 130 interrupted.
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

import rich_click as click
from rich.console import Console
from rich.table import Table

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = ""
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "facets analyze": [
        {
            "name": "Filters",
            "options": ["--style", "--tag", "--language", "--bpm-min", "--bpm-max"],
        },
        {
            "name": "Output",
            "options": ["--output", "--help"],
        },
    ],
}

from playlist_facets import __version__
from playlist_facets.core import (
    Config,
    ConfigError,
    PlaylistFacetsError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from playlist_facets.core.progress import EnrichmentProgressBar
from playlist_facets.devices import DEVICE_TRANSFORMS, transform_device
from playlist_facets.facets import AvailableFilters, FacetRecord
from playlist_facets.netease import NeteaseClient, Track
from playlist_facets.session import AppState

logger = get_logger(__name__)


@click.group(invoke_without_command=True)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="Configuration file (default: ./config.yaml if present)"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show debug messages on the console"
)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit."
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    verbose: bool,
    version: bool
) -> None:
    """
    playlist-facets: Genre, tag, language and BPM facets for NetEase playlists.

    Fetches a playlist's tracks, looks up each track's wiki summary one
    at a time, and lets you filter the tracks by the facets found.

    \b
    BASIC USAGE:
        facets tracks 24381616
        facets analyze 24381616 --style 流行 --output songs.txt
        facets device payload.json --kind air_sensor
    """
    if version:
        click.echo(f"playlist-facets {__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("playlist", metavar="<playlist>")
@click.pass_context
def tracks(ctx: click.Context, playlist: str) -> None:
    """List the tracks of a playlist (ID or URL)."""

    def run(state: AppState, console: Console) -> None:
        state.set_input(playlist)
        state.fetch_playlist()
        _print_tracks(console, state.tracks)

    _run_session(ctx.obj, run)


@cli.command()
@click.argument("playlist", metavar="<playlist>")
@click.option(
    "--style", "styles",
    multiple=True,
    metavar="<style>",
    help="Keep tracks with this style (repeatable, any matches)"
)
@click.option(
    "--tag", "tags",
    multiple=True,
    metavar="<tag>",
    help="Keep tracks with this tag (repeatable, any matches)"
)
@click.option(
    "--language", "languages",
    multiple=True,
    metavar="<language>",
    help="Keep tracks in this language (repeatable, any matches)"
)
@click.option(
    "--bpm-min",
    type=int,
    default=None,
    metavar="<bpm>",
    help="Lowest BPM to keep (tracks without BPM always pass)"
)
@click.option(
    "--bpm-max",
    type=int,
    default=None,
    metavar="<bpm>",
    help="Highest BPM to keep (tracks without BPM always pass)"
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<file>",
    help="Write the song list here instead of stdout"
)
@click.pass_context
def analyze(
    ctx: click.Context,
    playlist: str,
    styles: tuple[str, ...],
    tags: tuple[str, ...],
    languages: tuple[str, ...],
    bpm_min: Optional[int],
    bpm_max: Optional[int],
    output: Optional[Path]
) -> None:
    """
    Analyze every track of a playlist and export the filtered song list.

    Within one filter, a track needs any one of the given values; across
    filters, a track must pass all of them.
    """
    if bpm_min is not None and bpm_max is not None and bpm_min > bpm_max:
        raise click.UsageError("--bpm-min cannot be greater than --bpm-max")

    def run(state: AppState, console: Console) -> None:
        state.set_input(playlist)
        state.fetch_playlist()
        logger.info(f"Fetched {len(state.tracks)} tracks")

        with EnrichmentProgressBar(total=len(state.tracks)) as progress_bar:
            state.analyze(progress_bar=progress_bar)

        available = state.available_filters
        _apply_filters(state, available, styles, tags, languages, bpm_min, bpm_max)

        _print_available(console, available)
        _print_records(console, state.filtered_records, state.filtered_count_label)

        text = state.export_text()
        if output is not None:
            output.write_text(text + "\n" if text else "", encoding="utf-8")
            logger.info(f"Wrote {len(state.filtered_records)} songs to {output}")
        else:
            click.echo(text)

    _run_session(ctx.obj, run)


@cli.command()
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    metavar="<file.json>"
)
@click.option(
    "--kind",
    type=click.Choice(sorted(DEVICE_TRANSFORMS)),
    required=True,
    help="Device kind of the payload"
)
def device(file: Path, kind: str) -> None:
    """Normalize a device payload (JSON object or list of objects) and print it."""
    try:
        payload = json.loads(file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        click.echo(f"Error: cannot read {file}: {e}", err=True)
        sys.exit(1)

    try:
        if isinstance(payload, list):
            result: Any = [transform_device(item, kind).to_dict() for item in payload]
        else:
            result = transform_device(payload, kind).to_dict()
    except PlaylistFacetsError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    click.echo(json.dumps(result, ensure_ascii=False, indent=2))


def _run_session(
    options: dict,
    run: Callable[[AppState, Console], None]
) -> None:
    """
    Set up configuration, logging and the API client, then run a command.

    Args:
        options: Dictionary with group options from click context.
        run: Command body receiving the session state and a console.

    Raises:
        SystemExit: On errors (with appropriate exit code).
    """
    try:
        config = _load_configuration(options.get("config_path"))
        setup_logging(config.output.directory, verbose=options.get("verbose", False))
        logger.debug(f"Using API {config.api.base_url} (timeout {config.api.timeout}s)")

        client = NeteaseClient.init(
            base_url=config.api.base_url,
            timeout=config.api.timeout
        )
        run(AppState(client), Console())

    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(1)

    except PlaylistFacetsError as e:
        click.echo(f"Error: {e.message}", err=True)
        logger.error(f"Error: {e.message}", exc_info=True)
        sys.exit(1)

    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        logger.info("Interrupted by user")
        sys.exit(130)

    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error")
        sys.exit(1)

    finally:
        NeteaseClient.reset()
        shutdown_logging()


def _load_configuration(config_path: Optional[Path]) -> Config:
    """
    Load configuration from --config or ./config.yaml.

    Raises:
        ConfigError: If configuration is invalid or an explicit file is missing.
    """
    return load_config(config_path)


def _apply_filters(
    state: AppState,
    available: AvailableFilters,
    styles: Sequence[str],
    tags: Sequence[str],
    languages: Sequence[str],
    bpm_min: Optional[int],
    bpm_max: Optional[int]
) -> None:
    """Select the requested filter values, warning about absent ones.

    Repeated values are selected once; a second toggle would clear them.
    """
    for style in dict.fromkeys(styles):
        if style not in available.styles:
            logger.warning(f"No track has style '{style}'")
        state.toggle_style(style)

    for tag in dict.fromkeys(tags):
        if tag not in available.tags:
            logger.warning(f"No track has tag '{tag}'")
        state.toggle_tag(tag)

    for language in dict.fromkeys(languages):
        if language not in available.languages:
            logger.warning(f"No track has language '{language}'")
        state.toggle_language(language)

    if bpm_min is not None:
        state.set_bpm_min(bpm_min)
    if bpm_max is not None:
        state.set_bpm_max(bpm_max)


def _print_tracks(console: Console, track_list: Sequence[Track]) -> None:
    if not track_list:
        console.print("No tracks in this playlist")
        return

    table = Table(title=f"Playlist ({len(track_list)} tracks)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title")
    table.add_column("Artists", style="cyan")
    for number, track in enumerate(track_list, start=1):
        table.add_row(str(number), track.name, track.artists_display)
    console.print(table)


def _print_available(console: Console, available: AvailableFilters) -> None:
    table = Table(title="Available filters", show_header=False)
    table.add_column("Filter", style="bold")
    table.add_column("Values")
    table.add_row("Styles", ", ".join(available.styles) or "-")
    table.add_row("Tags", ", ".join(available.tags) or "-")
    table.add_row("Languages", ", ".join(available.languages) or "-")
    bpm = available.bpm_range
    table.add_row("BPM", f"{bpm.min} - {bpm.max}" if bpm is not None else "-")
    console.print(table)


def _print_records(
    console: Console,
    records: Sequence[FacetRecord],
    count_label: str
) -> None:
    title = "Analysis"
    if count_label:
        title += f" (filtered {count_label})"

    if not records:
        console.print(f"{title}: no tracks")
        return

    table = Table(title=title)
    table.add_column("Title")
    table.add_column("Styles", style="yellow")
    table.add_column("Tags", style="blue")
    table.add_column("Language", style="magenta")
    table.add_column("BPM", justify="right")
    for record in records:
        table.add_row(
            record.track_name,
            ", ".join(record.styles),
            ", ".join(record.tags),
            record.language,
            str(record.bpm) if record.bpm is not None else ""
        )
    console.print(table)


def main() -> None:
    """
    Entry point for the CLI.

    Called when running `facets` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
