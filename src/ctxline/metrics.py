"""Derive display metrics from session info.

Everything here is a pure function of its inputs. Rounding is half up
throughout, so 1050 tokens read as "1.1k" and 42.5% reads as 43%.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from ctxline.config import DEFAULT_CONTEXT_WINDOW
from ctxline.models import SessionInfo


@dataclass(frozen=True)
class Metrics:
    """Display values derived from a session. None means "no data"."""

    context_percent: int | None = None
    input_tokens: str | None = None
    cost: str | None = None
    diff: tuple[int, int] | None = None


def round_half_up(value: Decimal, places: str = "1") -> Decimal:
    """Round half up to the exponent of places, widening precision as needed."""
    exponent = Decimal(places)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exponent.as_tuple().exponent + 2)
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def clamp_percent(value: Decimal) -> int:
    """Round a percentage to an integer in [0, 100]."""
    if value >= 100:
        return 100
    return max(0, min(100, int(round_half_up(value))))


def context_percentage(tokens: int | None, capacity: int | None) -> int | None:
    """Percentage of the context window in use, clamped to [0, 100].

    Returns:
        None when either side is missing, the capacity is not positive or
        the token count is negative.
    """
    if tokens is None or capacity is None:
        return None
    if capacity <= 0 or tokens < 0:
        return None
    if tokens >= capacity:
        return 100
    return clamp_percent(Decimal(100) * tokens / capacity)


def format_tokens(count: int) -> str:
    """Format a token count, scaling to thousands from 1000 up.

    >>> format_tokens(999)
    '999'
    >>> format_tokens(15234)
    '15.2k'
    """
    if count < 1000:
        return str(count)
    return f"{round_half_up(Decimal(count) / 1000, '0.1')}k"


def format_cost(cost: float) -> str:
    """Format a USD cost with exactly two decimals.

    >>> format_cost(0.0123)
    '$0.01'
    """
    return f"${round_half_up(Decimal(repr(cost)), '0.01')}"


def format_diff(added: int | None, removed: int | None) -> tuple[int, int] | None:
    """Pair up line change counts.

    Returns:
        None when neither count was reported. A single missing side reads
        as zero.
    """
    if added is None and removed is None:
        return None
    return (added or 0, removed or 0)


def compute_metrics(
    info: SessionInfo, default_context_window: int = DEFAULT_CONTEXT_WINDOW
) -> Metrics:
    """Compute every display metric for a session.

    The context percentage is computed from token counts. When the host
    reported no token counts but did report a percentage, that is used.
    """
    capacity = info.context_window
    if capacity is None:
        capacity = default_context_window

    percent = context_percentage(info.context_tokens, capacity)
    if info.context_tokens is None and info.used_percentage is not None:
        percent = clamp_percent(Decimal(repr(info.used_percentage)))

    return Metrics(
        context_percent=percent,
        input_tokens=format_tokens(info.input_tokens) if info.input_tokens is not None else None,
        cost=format_cost(info.cost_usd) if info.cost_usd is not None else None,
        diff=format_diff(info.lines_added, info.lines_removed),
    )
