"""
Interior Field Calculator - Reverberant sound field of the source room

Converts room volume and reverberation time into equivalent absorption area
(Sabine, SI units) and a source sound power spectrum into the mean interior
sound pressure level.
"""

import math
from typing import Dict, Mapping

from .element_types import RoomAbsorption
from .errors import DomainError
from .iso_constants import SABINE_CONSTANT_METRIC, REVERBERANT_FIELD_NUMERATOR


def calc_absorption(volume: float, reverberation_time: Mapping[int, float]) -> Dict[int, float]:
    """
    Calculate the equivalent absorption area per band

    A = 0.16 * V / T60

    Args:
        volume: Room volume (m³)
        reverberation_time: Band -> T60 (s)

    Returns:
        Band -> A (m² sabins)

    Raises:
        DomainError: for a non-positive volume or any non-positive/non-finite T60
    """
    if not (isinstance(volume, (int, float)) and math.isfinite(volume) and volume > 0):
        raise DomainError(f"Room volume must be positive, got {volume!r}")

    absorption = {}
    for band, t60 in reverberation_time.items():
        if t60 is None or not math.isfinite(t60) or t60 <= 0:
            raise DomainError(f"Invalid reverberation time {t60!r} s", band=band)
        absorption[band] = SABINE_CONSTANT_METRIC * volume / t60
    return absorption


def calc_absorption_for_room(room: RoomAbsorption) -> Dict[int, float]:
    """Convenience wrapper over calc_absorption for a room context"""
    return calc_absorption(room.volume, room.reverberation_time)


def calc_lp_inside(lw: Mapping[int, float], absorption: Mapping[int, float]) -> Dict[int, float]:
    """
    Calculate the mean interior sound pressure level per band

    Lp = Lw + 10*log10(4 / A)

    Only bands present in both inputs appear in the output.

    Raises:
        DomainError: if an absorption area is not positive
    """
    lp = {}
    for band, level in lw.items():
        if band not in absorption:
            continue
        area = absorption[band]
        if area <= 0:
            raise DomainError(f"Absorption area must be positive, got {area!r}", band=band)
        lp[band] = level + 10.0 * math.log10(REVERBERANT_FIELD_NUMERATOR / area)
    return lp
