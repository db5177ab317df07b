"""Configuration utilities for ctxline."""

import math
import os

COLOR_MODES = ("auto", "always", "never")

DEFAULT_COLOR_MODE = "auto"
DEFAULT_GIT_TIMEOUT = 1.0
DEFAULT_CONTEXT_WINDOW = 200_000


class ConfigError(Exception):
    """Raised when a configuration value is invalid."""


def get_color_mode() -> str:
    """Get color mode from CTXLINE_COLOR.

    Returns:
        One of "auto", "always" or "never". Defaults to "auto".

    Raises:
        ConfigError: If CTXLINE_COLOR is set to an unknown mode.
    """
    mode = os.environ.get("CTXLINE_COLOR")
    if not mode:
        return DEFAULT_COLOR_MODE

    mode = mode.strip().lower()
    if mode not in COLOR_MODES:
        raise ConfigError(
            f"CTXLINE_COLOR must be one of {', '.join(COLOR_MODES)}, got {mode!r}"
        )
    return mode


def get_git_timeout() -> float:
    """Get the git query timeout in seconds from CTXLINE_GIT_TIMEOUT.

    Raises:
        ConfigError: If the value is not a positive number.
    """
    value = os.environ.get("CTXLINE_GIT_TIMEOUT")
    if not value:
        return DEFAULT_GIT_TIMEOUT

    try:
        timeout = float(value)
    except ValueError:
        raise ConfigError(f"CTXLINE_GIT_TIMEOUT is not a number: {value!r}")

    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"CTXLINE_GIT_TIMEOUT must be positive, got {value!r}")
    return timeout


def get_context_window() -> int:
    """Get the default context window capacity from CTXLINE_CONTEXT_WINDOW.

    Used when the session payload does not report the capacity itself.

    Raises:
        ConfigError: If the value is not a positive integer.
    """
    value = os.environ.get("CTXLINE_CONTEXT_WINDOW")
    if not value:
        return DEFAULT_CONTEXT_WINDOW

    try:
        capacity = int(value.replace("_", ""))
    except ValueError:
        raise ConfigError(f"CTXLINE_CONTEXT_WINDOW is not an integer: {value!r}")

    if capacity <= 0:
        raise ConfigError(f"CTXLINE_CONTEXT_WINDOW must be positive, got {value!r}")
    return capacity
