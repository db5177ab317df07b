"""Tests for severity bucket selection."""

import pytest

from ctxline.models import Color, Severity
from ctxline.severity import select_severity


@pytest.mark.parametrize(
    ("percent", "expected"),
    [
        (0, Severity.NORMAL),
        (59, Severity.NORMAL),
        (60, Severity.WARNING),
        (79, Severity.WARNING),
        (80, Severity.CRITICAL),
        (100, Severity.CRITICAL),
    ],
)
def test_select_severity(percent: int, expected: Severity) -> None:
    assert select_severity(percent) is expected


def test_severity_colors() -> None:
    assert Severity.NORMAL.color is Color.GREEN
    assert Severity.WARNING.color is Color.YELLOW
    assert Severity.CRITICAL.color is Color.RED
