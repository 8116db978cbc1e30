"""Lint test drive: compare static-analysis checkers by the findings they report."""

__version__ = "0.1.0"
