"""
Tests for difficulty classification bands.
"""

import pytest

from app.features.difficulty import (
    DIFFICULTY_CLASSES,
    UNKNOWN_DIFFICULTY,
    classify_difficulty,
)


class TestBandTable:
    """The table itself."""

    def test_order_is_descending(self):
        thresholds = [band.min_score for band in DIFFICULTY_CLASSES]
        assert thresholds == sorted(thresholds, reverse=True)
        assert thresholds == [150, 130, 110, 90, 70, 50, 0]

    def test_colors(self):
        colors = {band.tag: band.color for band in DIFFICULTY_CLASSES}
        assert colors == {
            "suspicious": "#6b7280",
            "extreme": "#7c3aed",
            "very-hard": "#dc2626",
            "hard": "#ea580c",
            "moderate": "#ca8a04",
            "accessible": "#16a34a",
            "easy": "#22c55e",
        }

    def test_labels(self):
        labels = [band.label for band in DIFFICULTY_CLASSES]
        assert labels == [
            "hmmmm", "Extrem", "Sehr schwer", "Schwer", "Moderat", "Machbar", "Einfach"
        ]

    def test_unknown_is_not_a_band(self):
        assert UNKNOWN_DIFFICULTY not in DIFFICULTY_CLASSES
        assert UNKNOWN_DIFFICULTY.label == "—"

    def test_to_dict_uses_class_key(self):
        assert DIFFICULTY_CLASSES[3].to_dict() == {
            "class": "hard",
            "label": "Schwer",
            "color": "#ea580c",
        }


class TestClassifyDifficulty:
    """Tests for classify_difficulty function."""

    @pytest.mark.parametrize("score,tag", [
        (150, "suspicious"),
        (149.999, "extreme"),
        (130, "extreme"),
        (129.9, "very-hard"),
        (110, "very-hard"),
        (90, "hard"),
        (89.99, "moderate"),
        (70, "moderate"),
        (50, "accessible"),
        (49.99, "easy"),
        (0, "easy"),
        (1000, "suspicious"),
    ])
    def test_boundaries(self, score, tag):
        assert classify_difficulty(score).tag == tag

    def test_negative_falls_through_to_lowest_band(self):
        assert classify_difficulty(-5).tag == "easy"
        assert classify_difficulty(-1e9).tag == "easy"

    def test_never_unknown(self):
        for score in [-100, -0.1, 0, 12.5, 55, 75, 95, 115, 135, 155, 1e6]:
            assert classify_difficulty(score) is not UNKNOWN_DIFFICULTY
            assert classify_difficulty(score) in DIFFICULTY_CLASSES
