"""Command-line interface for is-agentic-tui."""

from __future__ import annotations

import logging
import sys
import time

import click
import typer

from is_agentic_tui.config import load_config
from is_agentic_tui.detect import default_registry, is_specific_agentic_tui, which_agentic_tui
from is_agentic_tui.errors import AgenticTuiError
from is_agentic_tui.exit_codes import ExitCode
from is_agentic_tui.models import AgenticTui
from is_agentic_tui.output import OutputMode, format_json, format_report, resolve_output_mode
from is_agentic_tui.process import get_lookup

cli = typer.Typer(
    no_args_is_help=True,
    help="Detect whether an agentic TUI (Claude Code, Codex, Cursor Agent, ...) is driving this process.",
)


@cli.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log detection details to stderr."),
) -> None:
    """Top-level is-agentic-tui entrypoint."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)


def _fail(exc: AgenticTuiError) -> None:
    click.echo(f"Error [{exc.code}]: {exc.message}", err=True)
    if exc.suggestion is not None:
        click.echo(f"  fix: {exc.suggestion.fix}", err=True)
    raise SystemExit(exc.exit_code) from exc


@cli.command()
def check(
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Print nothing; only set the exit code."),
) -> None:
    """Exit 0 when an agentic TUI is detected, 1 otherwise."""
    result = which_agentic_tui()
    if result is None or result.tool is None:
        raise SystemExit(int(ExitCode.NOT_DETECTED))
    if not quiet:
        click.echo(result.tool.value)


@cli.command()
def which(
    output: OutputMode = typer.Option(
        OutputMode.AUTO,
        "--output",
        "-o",
        case_sensitive=False,
        help="auto picks text on a terminal and JSON otherwise.",
    ),
) -> None:
    """Report which agentic TUI is running, with confidence and signals."""
    start = time.perf_counter()
    result = which_agentic_tui()
    duration_ms = int((time.perf_counter() - start) * 1000)

    if resolve_output_mode(output) == OutputMode.JSON:
        click.echo(format_json(result, duration_ms=duration_ms))
    else:
        click.echo(format_report(result))


@cli.command("is")
def is_tool(
    tool: AgenticTui = typer.Argument(..., help="Tool identifier, e.g. claude-code."),
) -> None:
    """Exit 0 when TOOL is the detected agentic TUI, 1 otherwise."""
    if not is_specific_agentic_tui(tool):
        raise SystemExit(int(ExitCode.NOT_DETECTED))


@cli.command()
def tools() -> None:
    """List detectors in evaluation order."""
    for position, detector in enumerate(default_registry, start=1):
        line = f"{position:>2}. {detector.tool.value:<20} {detector.tool.display_name}"
        if detector.runs_before:
            line += f"  (before: {', '.join(detector.runs_before)})"
        click.echo(line)


@cli.command()
def ancestors(
    max_depth: int = typer.Option(None, "--max-depth", min=0, help="Override the configured depth."),
    backend: str = typer.Option(None, "--backend", help="Lookup backend: psutil|ps."),
) -> None:
    """Print ancestor process names as the detectors see them, nearest first."""
    config = load_config()
    try:
        lookup = get_lookup(config, backend=backend)
    except AgenticTuiError as exc:
        _fail(exc)
        return

    depth = config.max_depth if max_depth is None else max_depth
    names = lookup.lookup(depth) if depth > 0 else []
    if not names:
        click.echo("(none)")
        return
    for name in names:
        click.echo(name)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
