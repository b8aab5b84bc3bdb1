"""Kotoba utilities."""

from .string_compare import ComparisonStatus, compare_strings, border_class, focus_ring_class
from .search import filter_words, shuffle_words

__all__ = [
    "ComparisonStatus",
    "compare_strings",
    "border_class",
    "focus_ring_class",
    "filter_words",
    "shuffle_words",
]
