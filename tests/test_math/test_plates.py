"""Tests for barbell plate breakdown."""

from __future__ import annotations

from wellness_engine.math.plates import calculate_plates, loaded_weight, weight_per_side


class TestPlates:
    def test_one_plate_each_side(self) -> None:
        breakdown = dict(calculate_plates(135.0))
        assert breakdown[45.0] == 1
        assert sum(breakdown.values()) == 1

    def test_mixed_plates(self) -> None:
        breakdown = dict(calculate_plates(190.0))
        assert breakdown == {45.0: 1, 35.0: 0, 25.0: 1, 10.0: 0, 5.0: 0, 2.5: 1}

    def test_empty_bar(self) -> None:
        assert all(count == 0 for _, count in calculate_plates(45.0))

    def test_below_bar_weight(self) -> None:
        assert weight_per_side(30.0) == 0.0
        assert all(count == 0 for _, count in calculate_plates(30.0))

    def test_loaded_weight_matches_target(self) -> None:
        for total in (95.0, 135.0, 190.0, 225.0, 315.0):
            assert loaded_weight(calculate_plates(total)) == total

    def test_remainder_smaller_than_lightest_plate_dropped(self) -> None:
        assert loaded_weight(calculate_plates(137.0)) == 135.0

    def test_custom_bar(self) -> None:
        breakdown = dict(calculate_plates(55.0, barbell_weight=35.0))
        assert breakdown[10.0] == 1
