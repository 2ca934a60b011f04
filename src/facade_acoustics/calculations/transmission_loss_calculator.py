"""
Transmission Loss Calculator - Condition-adjusted sound reduction of facade elements

Derives per-band transmission loss from a catalog material and the element's
condition, plus the quick single-number summaries used for facade overviews.
Standard-compliant single numbers come from the material's weighted index;
the averages here are deliberate simplifications.
"""

import math
from typing import Dict, Iterable, Mapping, Sequence, Tuple

from .element_types import ConditionLike, ElementCondition, MaterialSpectrum
from .errors import DomainError
from .iso_constants import (
    CONDITION_FACTORS, DEFAULT_CONDITION_FACTOR, DEFAULT_KEY_BANDS,
    MIN_EFFECTIVE_TRANSMISSION_LOSS_DB, MAX_AREA_REDUCTION_DB,
    NON_POSITIVE_AREA_REDUCTION_DB, OPENING_PENALTY_PER_OPENING_DB,
)


def get_condition_factor(condition: ConditionLike) -> float:
    """
    Multiplicative derating for an element condition

    Unknown or missing conditions fall back to the default factor (0.8).
    """
    if isinstance(condition, ElementCondition):
        condition = condition.value
    return CONDITION_FACTORS.get(condition, DEFAULT_CONDITION_FACTOR)


def calc_transmission_loss_bands(material: MaterialSpectrum, condition: ConditionLike) -> Dict[int, float]:
    """
    Calculate the condition-adjusted transmission loss per band

    Args:
        material: Catalog material with R per band
        condition: Element condition (enum member or its string value)

    Returns:
        Band -> R (dB), with exactly the material's band keys
    """
    factor = get_condition_factor(condition)
    return {band: loss * factor for band, loss in material.band_loss.items()}


def calc_average_transmission_loss(bands: Mapping[int, float],
                                   keys: Sequence[int] = DEFAULT_KEY_BANDS) -> float:
    """
    Arithmetic mean of the transmission loss at a few key bands

    Key bands missing from ``bands`` count as 0 dB.
    """
    if not keys:
        raise DomainError("At least one key band is required to average transmission loss")
    values = [bands.get(band, 0.0) for band in keys]
    return sum(values) / len(values)


def calc_effective_transmission_loss(avg_loss: float, area_reduction: float,
                                     openings_penalty: float = 0.0) -> float:
    """Average loss minus penalties, never below the 5 dB floor"""
    return max(avg_loss - area_reduction - openings_penalty, MIN_EFFECTIVE_TRANSMISSION_LOSS_DB)


def calc_area_reduction(opening_area: float) -> float:
    """
    Area penalty of an opening: 10*log10(S), capped at 20 dB

    A non-positive area has no logarithm and yields 0 dB.
    """
    if opening_area <= 0:
        return NON_POSITIVE_AREA_REDUCTION_DB
    return min(10.0 * math.log10(opening_area), MAX_AREA_REDUCTION_DB)


def calc_openings_penalty(opening_count: int) -> float:
    """Penalty applied to a wall for each opening it contains (2 dB each)"""
    if opening_count < 0:
        raise DomainError(f"Opening count cannot be negative: {opening_count}")
    return OPENING_PENALTY_PER_OPENING_DB * opening_count


def calc_area_weighted_rw(parts: Iterable[Tuple[float, MaterialSpectrum, ConditionLike]]) -> float:
    """
    Composite single-number rating of a facade

    Each part is ``(area, material, condition)``. A part contributes its
    material's Rw when the catalog provides one, otherwise its
    condition-adjusted average transmission loss, weighted by area.

    Raises:
        DomainError: if a part has a negative area or the total area is not positive
    """
    total_area = 0.0
    weighted_sum = 0.0
    for area, material, condition in parts:
        if area < 0:
            raise DomainError(f"Element area cannot be negative: {area}",
                              element_id=material.material_id)
        if material.weighted_index is not None:
            rating = material.weighted_index.rw
        else:
            rating = calc_average_transmission_loss(calc_transmission_loss_bands(material, condition))
        total_area += area
        weighted_sum += rating * area

    if total_area <= 0:
        raise DomainError("Total facade area must be positive to weight Rw")
    return weighted_sum / total_area
