from __future__ import annotations

import itertools
import logging
from dataclasses import replace
from pathlib import Path
from typing import TextIO

import typer
import yaml

from .config import OUTPUT_FORMATS, DumpConfig, load_dump_config
from .filters import FrameFilter, parse_frame_id
from .render import RENDERERS, render_error
from .stream import DecodedLine, iter_decoded_lines, iter_frames

app = typer.Typer(add_completion=False, help="ascdump: decode Vector ASC CAN traces")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(config: Path | None) -> DumpConfig:
    if config is not None and not config.is_file():
        typer.secho(f"Config file not found: {config}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
    try:
        return load_dump_config(config)
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
        typer.secho(f"Cannot load config: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from e


def _open_input(input_path: Path, cfg: DumpConfig) -> TextIO:
    if not input_path.is_file():
        typer.secho(f"Input file not found: {input_path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
    try:
        return input_path.open("r", encoding=cfg.encoding, errors="replace")
    except OSError as e:
        typer.secho(f"Cannot open input file: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from e


def _build_filter(cfg: DumpConfig, bus: list[int] | None, frame_id: list[str] | None) -> FrameFilter:
    # Command line values replace the config values field by field.
    frame_filter = cfg.frame_filter()
    if bus:
        frame_filter = replace(frame_filter, bus_ids=frozenset(bus))
    if frame_id:
        try:
            frame_ids = frozenset(parse_frame_id(s) for s in frame_id)
        except ValueError as e:
            typer.secho(str(e), fg=typer.colors.RED, err=True)
            raise typer.Exit(code=2) from e
        frame_filter = replace(frame_filter, frame_ids=frame_ids)
    return frame_filter


def _report_error(decoded: DecodedLine) -> None:
    typer.secho(render_error(decoded), fg=typer.colors.YELLOW, err=True)


@app.command()
def dump(
    input_path: Path = typer.Argument(..., metavar="INPUT", help="ASC trace file to decode"),
    bus: list[int] | None = typer.Option(
        None,
        "--bus",
        "-b",
        min=0,
        max=0xFF,
        help="Only frames on this bus id (repeatable)",
    ),
    frame_id: list[str] | None = typer.Option(
        None,
        "--id",
        "-i",
        help="Only frames with this id: 0x7d0, 7d0x or 2000 (repeatable)",
    ),
    limit: int | None = typer.Option(None, "--limit", "-n", min=0, help="Print at most N frames (0 = all)"),
    fmt: str | None = typer.Option(None, "--format", "-f", help="Output format: text|json"),
    show_errors: bool = typer.Option(False, "--show-errors", help="Report lines that fail to decode on stderr"),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (defaults to the nearest ascdump.yaml)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    _configure_logging(verbose)
    cfg = _load_config(config)

    fmt = fmt or cfg.format
    if fmt not in OUTPUT_FORMATS:
        expected = "|".join(OUTPUT_FORMATS)
        typer.secho(f"Unknown format {fmt!r} (expected {expected})", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
    render = RENDERERS[fmt]

    frame_filter = _build_filter(cfg, bus, frame_id)
    limit = cfg.limit if limit is None else limit
    report = show_errors or cfg.show_errors

    with _open_input(input_path, cfg) as f:
        frames = frame_filter.apply(iter_frames(f, on_error=_report_error if report else None))
        if limit:
            frames = itertools.islice(frames, limit)
        for frame in frames:
            typer.echo(render(frame))


@app.command()
def summary(
    input_path: Path = typer.Argument(..., metavar="INPUT", help="ASC trace file to summarize"),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (defaults to the nearest ascdump.yaml)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    _configure_logging(verbose)
    cfg = _load_config(config)

    decoded_count = 0
    skipped_count = 0
    buses: set[int] = set()
    ids: set[int] = set()
    first_ts: float | None = None
    last_ts: float | None = None

    with _open_input(input_path, cfg) as f:
        for decoded in iter_decoded_lines(f):
            if not decoded.ok:
                skipped_count += 1
                continue
            frame = decoded.frame
            decoded_count += 1
            buses.add(frame.bus_id)
            ids.add(frame.id)
            if first_ts is None:
                first_ts = frame.timestamp
            last_ts = frame.timestamp

    typer.echo(f"frames       : {decoded_count}")
    typer.echo(f"skipped lines: {skipped_count}")
    typer.echo(f"buses        : {', '.join(str(b) for b in sorted(buses)) or '-'}")
    typer.echo(f"distinct ids : {len(ids)}")
    if first_ts is not None and last_ts is not None:
        typer.echo(f"time span    : {first_ts:.6f} .. {last_ts:.6f} s ({last_ts - first_ts:.6f} s)")


def main() -> None:
    # Entry point for console script.
    app()


if __name__ == "__main__":
    main()
