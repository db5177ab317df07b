"""Core data models for ctxline."""

from dataclasses import dataclass
from enum import Enum


class Color(str, Enum):
    """Color category of a piece of status line text."""

    NONE = "none"
    PURPLE = "purple"
    CYAN = "cyan"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    GREY = "grey"

    @property
    def style(self) -> str:
        """Return the rich style string for this color."""
        return _STYLES[self]


_STYLES = {
    Color.NONE: "",
    Color.PURPLE: "bold magenta",
    Color.CYAN: "cyan",
    Color.BLUE: "blue",
    Color.GREEN: "green",
    Color.YELLOW: "yellow",
    Color.RED: "red",
    Color.GREY: "dim",
}


class Severity(str, Enum):
    """Severity bucket of the context usage."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def color(self) -> Color:
        if self is Severity.CRITICAL:
            return Color.RED
        if self is Severity.WARNING:
            return Color.YELLOW
        return Color.GREEN


@dataclass(frozen=True)
class SessionInfo:
    """Session state reported by the host for a single invocation.

    Optional values are None when the host did not report them. Zero is a
    real value and never stands in for "missing".
    """

    model: str = ""
    cwd: str = ""
    context_tokens: int | None = None
    input_tokens: int | None = None
    context_window: int | None = None
    used_percentage: float | None = None
    cost_usd: float | None = None
    lines_added: int | None = None
    lines_removed: int | None = None


@dataclass(frozen=True)
class GitStatus:
    """Git state of the working directory."""

    branch: str | None = None


@dataclass(frozen=True)
class Fragment:
    """A run of text rendered in a single color."""

    text: str
    color: Color = Color.NONE


@dataclass(frozen=True)
class Segment:
    """A named, independently omittable piece of the status line."""

    name: str
    fragments: tuple[Fragment, ...] = ()

    @property
    def present(self) -> bool:
        return bool(self.fragments)

    @property
    def text(self) -> str:
        return "".join(fragment.text for fragment in self.fragments)

    @classmethod
    def absent(cls, name: str) -> "Segment":
        return cls(name=name)

    @classmethod
    def single(cls, name: str, text: str, color: Color) -> "Segment":
        return cls(name=name, fragments=(Fragment(text, color),))
