"""Parse the session payload sent by the host on stdin."""

import json
import logging
import math
from typing import Any, BinaryIO

from ctxline.models import SessionInfo

logger = logging.getLogger(__name__)

_MISSING = object()

# Each field is looked up along these paths in order; the first path that
# holds a usable value wins. Nested paths follow the host's documented
# payload, flat keys are accepted as shorthand.
MODEL_PATHS = (("model", "display_name"), ("model", "id"), ("model",))
CWD_PATHS = (("workspace", "current_dir"), ("cwd",), ("workspace", "project_dir"))
INPUT_TOKENS_PATHS = (
    ("context_window", "current_usage", "input_tokens"),
    ("input_tokens",),
    ("tokens_used",),
)
CONTEXT_WINDOW_PATHS = (("context_window", "context_window_size"), ("context_capacity",))
USED_PERCENTAGE_PATHS = (("context_window", "used_percentage"),)
COST_PATHS = (("cost", "total_cost_usd"), ("cost_usd",))
LINES_ADDED_PATHS = (("cost", "total_lines_added"), ("lines_added",))
LINES_REMOVED_PATHS = (("cost", "total_lines_removed"), ("lines_removed",))

_CURRENT_USAGE = ("context_window", "current_usage")
_CACHE_TOKEN_KEYS = ("cache_creation_input_tokens", "cache_read_input_tokens")


def read_input(stream: BinaryIO) -> str:
    """Read the whole stream as text, replacing undecodable bytes."""
    return stream.read().decode("utf-8", errors="replace")


def lookup(doc: Any, path: tuple[str, ...]) -> Any:
    """Follow a key path through nested objects.

    Returns:
        The value at the path, or a private sentinel when any step is missing
        or is not an object.
    """
    current = doc
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def as_str(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    return None


def as_count(value: Any) -> int | None:
    """Coerce a token or line count.

    Accepts ints, finite floats (truncated) and numeric strings. Booleans,
    negative numbers and anything else count as absent.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = as_number(value)
        if value is None:
            return None
    if isinstance(value, int):
        count = value
    elif isinstance(value, float) and math.isfinite(value):
        count = int(value)
    else:
        return None
    return count if count >= 0 else None


def as_number(value: Any) -> float | None:
    """Coerce a non-negative finite number such as a cost or percentage."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def first(doc: Any, paths: tuple[tuple[str, ...], ...], coerce) -> Any:
    """Return the first value along paths that coerces to something usable."""
    for path in paths:
        value = lookup(doc, path)
        if value is _MISSING:
            continue
        coerced = coerce(value)
        if coerced is not None:
            return coerced
        logger.debug("ignoring %s: unexpected value %r", ".".join(path), value)
    return None


def context_tokens(doc: dict[str, Any]) -> int | None:
    """Tokens currently occupying the context window.

    A flat tokens_used wins. Otherwise the host's current_usage is summed:
    input tokens plus tokens written to and read from the prompt cache.
    """
    tokens = first(doc, (("tokens_used",),), as_count)
    if tokens is not None:
        return tokens

    usage = lookup(doc, _CURRENT_USAGE)
    if usage is _MISSING:
        return None

    tokens = as_count(lookup(usage, ("input_tokens",)))
    if tokens is None:
        return None
    for key in _CACHE_TOKEN_KEYS:
        tokens += as_count(lookup(usage, (key,))) or 0
    return tokens


def parse_session(text: str, default_cwd: str | None = None) -> SessionInfo:
    """Parse the host payload into a SessionInfo.

    Malformed, empty or non-object documents are not an error: they produce
    a SessionInfo with every optional field absent.

    Args:
        text: Raw JSON text read from the host.
        default_cwd: Directory to assume when the payload does not name one.

    Returns:
        The parsed session info.
    """
    fallback_cwd = default_cwd or ""

    try:
        doc = json.loads(text)
    except (ValueError, RecursionError) as e:
        logger.debug("could not parse session payload: %s", e)
        return SessionInfo(cwd=fallback_cwd)

    if not isinstance(doc, dict):
        logger.debug("session payload is not an object: %s", type(doc).__name__)
        return SessionInfo(cwd=fallback_cwd)

    model = first(doc, MODEL_PATHS, as_str)
    cwd = first(doc, CWD_PATHS, as_str)

    return SessionInfo(
        model=model.strip() if model else "",
        cwd=cwd or fallback_cwd,
        context_tokens=context_tokens(doc),
        input_tokens=first(doc, INPUT_TOKENS_PATHS, as_count),
        context_window=first(doc, CONTEXT_WINDOW_PATHS, as_count),
        used_percentage=first(doc, USED_PERCENTAGE_PATHS, as_number),
        cost_usd=first(doc, COST_PATHS, as_number),
        lines_added=first(doc, LINES_ADDED_PATHS, as_count),
        lines_removed=first(doc, LINES_REMOVED_PATHS, as_count),
    )
