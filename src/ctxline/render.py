"""Assemble and style the status line."""

import re
from typing import TextIO

from rich.console import Console
from rich.text import Text

from ctxline.metrics import Metrics
from ctxline.models import Color, Fragment, GitStatus, Segment, SessionInfo
from ctxline.severity import select_severity

SEPARATOR = " │ "

SEGMENT_ORDER = ("model", "directory", "branch", "context", "tokens", "cost", "diff")

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f\u2028\u2029]")


def dir_name(path: str) -> str:
    """Return the last component of a path.

    Both / and \\ count as separators and trailing separators are ignored,
    so the root directory has an empty name.
    """
    return re.split(r"[\\/]", path.rstrip("\\/"))[-1]


def clean(text: str) -> str:
    """Replace control characters with spaces so the line stays a single line."""
    return _CONTROL_CHARS.sub(" ", text)


def build_segments(info: SessionInfo, git: GitStatus, metrics: Metrics) -> list[Segment]:
    """Build every segment of the status line in display order.

    Segments without backing data are returned with present=False. The model
    segment is always present, falling back to an empty "[]".
    """
    segments = [Segment.single("model", f"[{clean(info.model)}]", Color.PURPLE)]

    name = clean(dir_name(info.cwd))
    segments.append(
        Segment.single("directory", name, Color.CYAN) if name else Segment.absent("directory")
    )

    if git.branch:
        segments.append(Segment.single("branch", clean(git.branch), Color.BLUE))
    else:
        segments.append(Segment.absent("branch"))

    if metrics.context_percent is not None:
        severity = select_severity(metrics.context_percent)
        segments.append(
            Segment.single("context", f"ctx:{metrics.context_percent}%", severity.color)
        )
    else:
        segments.append(Segment.absent("context"))

    if metrics.input_tokens is not None:
        segments.append(Segment.single("tokens", f"in:{metrics.input_tokens}", Color.GREY))
    else:
        segments.append(Segment.absent("tokens"))

    if metrics.cost is not None:
        segments.append(Segment.single("cost", metrics.cost, Color.YELLOW))
    else:
        segments.append(Segment.absent("cost"))

    if metrics.diff is not None:
        added, removed = metrics.diff
        segments.append(
            Segment(
                name="diff",
                fragments=(
                    Fragment(f"+{added}", Color.GREEN),
                    Fragment(f"/-{removed}", Color.RED),
                ),
            )
        )
    else:
        segments.append(Segment.absent("diff"))

    return segments


def to_text(segments: list[Segment]) -> Text:
    """Join the present segments into a styled rich Text."""
    parts = []
    for segment in segments:
        if not segment.present:
            continue
        part = Text()
        for fragment in segment.fragments:
            part.append(fragment.text, style=fragment.color.style)
        parts.append(part)
    return Text(SEPARATOR).join(parts)


def render_line(segments: list[Segment], color: bool) -> str:
    """Render the status line without a trailing newline.

    Args:
        segments: Segments in display order, absent ones are skipped
        color: Whether to emit ANSI escape sequences

    Returns:
        The line as a string. Plain and colored renderings have identical
        visible content.
    """
    text = to_text(segments)
    if not color:
        return text.plain

    console = Console(
        force_terminal=True,
        color_system="standard",
        no_color=False,
        highlight=False,
        soft_wrap=True,
        legacy_windows=False,
    )
    with console.capture() as capture:
        console.print(text, end="")
    return capture.get()


def color_supported(mode: str, stream: TextIO | None = None) -> bool:
    """Decide once per invocation whether output gets color.

    Args:
        mode: "always", "never" or "auto"
        stream: Output stream to probe in "auto" mode

    Returns:
        True when escape sequences should be emitted. In "auto" mode this
        follows rich's terminal detection, which honors NO_COLOR,
        FORCE_COLOR and TERM=dumb.
    """
    if mode == "always":
        return True
    if mode == "never":
        return False

    console = Console(file=stream)
    return console.color_system is not None and not console.no_color
