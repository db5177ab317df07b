"""Map context usage onto severity buckets."""

from ctxline.models import Severity

WARNING_THRESHOLD = 60
CRITICAL_THRESHOLD = 80


def select_severity(percent: int) -> Severity:
    """Return the severity bucket for a context usage percentage.

    Boundary values belong to the higher bucket: 60 is a warning and 80 is
    critical.
    """
    if percent >= CRITICAL_THRESHOLD:
        return Severity.CRITICAL
    if percent >= WARNING_THRESHOLD:
        return Severity.WARNING
    return Severity.NORMAL
