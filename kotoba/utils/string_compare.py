"""
Live input comparison for typing practice.

Classifies a partial answer against the target on every keystroke.
"""

from enum import Enum


class ComparisonStatus(str, Enum):
    EMPTY = "empty"        # nothing typed yet
    CORRECT = "correct"    # exact match
    PARTIAL = "partial"    # proper prefix of the target
    ERROR = "error"        # diverges from the target


def compare_strings(input_text: str, target: str) -> ComparisonStatus:
    """
    Compare user input with the target string.

    Args:
        input_text: What the user has typed so far
        target: The correct answer

    Returns:
        ComparisonStatus for the input
    """
    if not input_text:
        return ComparisonStatus.EMPTY
    if input_text == target:
        return ComparisonStatus.CORRECT
    if target.startswith(input_text):
        return ComparisonStatus.PARTIAL
    return ComparisonStatus.ERROR


BORDER_CLASSES = {
    ComparisonStatus.EMPTY: "input-neutral",
    ComparisonStatus.PARTIAL: "input-neutral",
    ComparisonStatus.CORRECT: "input-correct",
    ComparisonStatus.ERROR: "input-error",
}


def border_class(status: ComparisonStatus) -> str:
    """CSS class for the input border."""
    return BORDER_CLASSES.get(status, "input-neutral")


def focus_ring_class(status: ComparisonStatus) -> str:
    """CSS class for the input focus ring."""
    if status == ComparisonStatus.CORRECT:
        return "focus-correct"
    if status == ComparisonStatus.ERROR:
        return "focus-error"
    return "focus-default"
