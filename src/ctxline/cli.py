"""CLI entry point for ctxline."""

import logging
import os
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from ctxline import __version__
from ctxline.config import (
    COLOR_MODES,
    DEFAULT_COLOR_MODE,
    DEFAULT_CONTEXT_WINDOW,
    DEFAULT_GIT_TIMEOUT,
    ConfigError,
    get_color_mode,
    get_context_window,
    get_git_timeout,
)
from ctxline.git import get_git_status
from ctxline.metrics import compute_metrics
from ctxline.reader import parse_session, read_input
from ctxline.render import build_segments, color_supported, render_line

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool, quiet: bool) -> None:
    """Send log records to stderr; stdout carries only the status line."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    stderr_console = Console(stderr=True)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=stderr_console, rich_tracebacks=verbose)],
        force=True,
    )


def resolve(option, getter, default):
    """Prefer an explicit CLI option, then the environment, then the default."""
    if option is not None:
        return option
    try:
        return getter()
    except ConfigError as e:
        logger.warning("%s; using %r", e, default)
        return default


def render_status_line(
    text: str,
    color: bool,
    git_timeout: float = DEFAULT_GIT_TIMEOUT,
    context_window: int = DEFAULT_CONTEXT_WINDOW,
    default_cwd: str | None = None,
) -> str:
    """Run the whole pipeline over a raw session payload.

    Returns:
        The rendered status line without a trailing newline.
    """
    info = parse_session(text, default_cwd=default_cwd)
    logger.debug("session: %s", info)

    git = get_git_status(info.cwd, timeout=git_timeout)
    metrics = compute_metrics(info, default_context_window=context_window)
    logger.debug("metrics: %s", metrics)

    return render_line(build_segments(info, git, metrics), color=color)


@click.command()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging on stderr")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors")
@click.option(
    "--color",
    type=click.Choice(COLOR_MODES),
    default=None,
    help="When to colorize output [default: CTXLINE_COLOR or auto]",
)
@click.option(
    "--git-timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds to wait for git [default: CTXLINE_GIT_TIMEOUT or 1.0]",
)
@click.option(
    "--context-window",
    type=click.IntRange(min=1),
    default=None,
    help="Context window size when the host does not report one "
    "[default: CTXLINE_CONTEXT_WINDOW or 200000]",
)
@click.version_option(version=__version__)
def main(
    verbose: bool,
    quiet: bool,
    color: str | None,
    git_timeout: float | None,
    context_window: int | None,
) -> None:
    """ctxline - render a status line from a session payload on stdin."""
    setup_logging(verbose, quiet)

    mode = resolve(color, get_color_mode, DEFAULT_COLOR_MODE)
    timeout = resolve(git_timeout, get_git_timeout, DEFAULT_GIT_TIMEOUT)
    capacity = resolve(context_window, get_context_window, DEFAULT_CONTEXT_WINDOW)

    text = read_input(sys.stdin.buffer)

    line = render_status_line(
        text,
        color=color_supported(mode, sys.stdout),
        git_timeout=timeout,
        context_window=capacity,
        default_cwd=os.getcwd(),
    )
    click.echo(line, color=True)
