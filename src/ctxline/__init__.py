"""ctxline - status line renderer for agent sessions."""

__version__ = "0.1.0"
