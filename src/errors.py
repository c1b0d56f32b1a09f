# src/errors.py
from __future__ import annotations


class InvalidInput(ValueError):
    """Raised for negative counts, bad widths, or malformed series specs."""


class EmptyInput(ValueError):
    """Raised when a reduction is asked for over no records."""
