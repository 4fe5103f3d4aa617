"""Utility modules for guardio.

This module exports commonly used utility functions.
"""

from guardio.utils.text import normalize_newlines, normalize_newlines_bytes, printable

__all__ = [
    "normalize_newlines",
    "normalize_newlines_bytes",
    "printable",
]
