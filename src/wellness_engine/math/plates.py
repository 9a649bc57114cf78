"""Barbell plate math — which plates to load on each side."""

from __future__ import annotations

from wellness_engine.models.enums import DEFAULT_BARBELL_WEIGHT, STANDARD_PLATES


def weight_per_side(total_weight: float, barbell_weight: float = DEFAULT_BARBELL_WEIGHT) -> float:
    return max(0.0, (total_weight - barbell_weight) / 2)


def calculate_plates(
    total_weight: float,
    barbell_weight: float = DEFAULT_BARBELL_WEIGHT,
    plates: tuple[float, ...] = STANDARD_PLATES,
) -> list[tuple[float, int]]:
    """Greedy per-side plate breakdown, heaviest plate first.

    Returns one ``(plate_weight, count)`` pair per available plate size,
    with zero counts when the total does not exceed the bar. Any remainder
    smaller than the lightest plate is dropped.
    """
    remaining = weight_per_side(total_weight, barbell_weight)
    breakdown: list[tuple[float, int]] = []
    for plate in plates:
        count = int(remaining // plate) if remaining > 0 else 0
        breakdown.append((plate, count))
        remaining -= count * plate
    return breakdown


def loaded_weight(
    breakdown: list[tuple[float, int]], barbell_weight: float = DEFAULT_BARBELL_WEIGHT
) -> float:
    """Total weight actually on the bar for a per-side breakdown."""
    return barbell_weight + 2 * sum(plate * count for plate, count in breakdown)
