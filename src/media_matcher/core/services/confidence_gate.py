"""Confidence thresholds for model output."""

from enum import Enum


class Comparator(str, Enum):
    """How a confidence is compared against the threshold."""

    AT_LEAST = ">="
    GREATER_THAN = ">"


def accept(confidence: object, threshold: float, comparator: Comparator) -> bool:
    """Check a model-reported confidence against a threshold.

    Non-numeric values and values outside [0, 1] are never accepted.

    Args:
        confidence: Raw confidence value.
        threshold: Acceptance threshold.
        comparator: Comparison to apply.

    Returns:
        True if the confidence passes.
    """
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        return False
    if not 0.0 <= confidence <= 1.0:
        return False
    if comparator == Comparator.GREATER_THAN:
        return confidence > threshold
    return confidence >= threshold


class ConfidenceGate:
    """Per-result acceptance threshold."""

    def __init__(self, threshold: float, comparator: Comparator) -> None:
        self.threshold = threshold
        self.comparator = comparator

    def accept(self, confidence: object) -> bool:
        return accept(confidence, self.threshold, self.comparator)

    def __repr__(self) -> str:
        return f"ConfidenceGate({self.comparator.value} {self.threshold})"


IDENTIFICATION_GATE = ConfidenceGate(0.6, Comparator.AT_LEAST)
CHANNEL_MATCH_GATE = ConfidenceGate(0.7, Comparator.GREATER_THAN)
