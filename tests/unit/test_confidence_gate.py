"""Test confidence gating."""

import pytest

from media_matcher.core.services import (
    CHANNEL_MATCH_GATE,
    IDENTIFICATION_GATE,
    Comparator,
    ConfidenceGate,
    accept,
)


@pytest.mark.parametrize(
    "confidence, expected",
    [(0.6, True), (0.59, False), (0.95, True), (1.0, True), (1, True), (0, False)],
)
def test_identification_gate_is_inclusive(confidence, expected):
    """Test identification accepts confidence >= 0.6."""
    assert IDENTIFICATION_GATE.accept(confidence) is expected


@pytest.mark.parametrize(
    "confidence, expected",
    [(0.7, False), (0.7001, True), (0.85, True), (1.0, True), (0.5, False)],
)
def test_channel_gate_is_strict(confidence, expected):
    """Test channel matching accepts confidence > 0.7 only."""
    assert CHANNEL_MATCH_GATE.accept(confidence) is expected


@pytest.mark.parametrize("confidence", [None, "0.9", True, 1.5, -0.1, float("nan")])
def test_invalid_confidence_is_rejected(confidence):
    """Test non-numeric and out-of-range values never pass."""
    assert not accept(confidence, 0.0, Comparator.AT_LEAST)


def test_gate_describes_its_rule():
    gate = ConfidenceGate(0.8, Comparator.GREATER_THAN)

    assert gate.accept(0.81)
    assert not gate.accept(0.8)
    assert repr(gate) == "ConfidenceGate(> 0.8)"
