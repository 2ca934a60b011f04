"""
Exterior Field Aggregator - Sound pressure at a receiver from many facade elements

Each element radiates its LW,out with free-field geometric spreading and a
cos^N directivity about its outward normal. Contributions from different
elements are incoherent and combine by summing energies, never decibels.
"""

import math
from typing import Dict, Iterable, Mapping, Optional, Sequence

from .acoustic_utilities import SpectrumProcessor
from .element_types import ElementEmission
from .errors import ConfigurationError, DomainError
from .geometry import angle_between, distance, sub, to_tuple3
from .iso_constants import (
    A_WEIGHTING_THIRD_OCTAVE, DEFAULT_DIRECTIVITY_N, FREE_FIELD_OFFSET_DB,
    MIN_DIRECTIVITY_FACTOR, MIN_RECEIVER_DISTANCE_M,
)


def free_field_attenuation(r: float) -> float:
    """
    Geometric attenuation in the free field: 20*log10(r) + 11

    Distances below 0.1 m are clamped to 0.1 m.
    """
    return 20.0 * math.log10(max(r, MIN_RECEIVER_DISTANCE_M)) + FREE_FIELD_OFFSET_DB


def calc_directivity_factor(normal: Sequence[float], direction: Sequence[float],
                            directivity_n: float = DEFAULT_DIRECTIVITY_N) -> float:
    """
    Directivity factor Q = cos(theta)^N, clamped to at least 1e-4

    theta is the angle between the outward normal and the direction towards the
    receiver. Receivers behind the element (cos < 0) get the minimum factor.
    """
    if directivity_n <= 0:
        raise DomainError(f"Directivity exponent must be positive, got {directivity_n!r}")
    theta = angle_between(normal, direction)
    cosine = max(math.cos(theta), 0.0)
    return max(MIN_DIRECTIVITY_FACTOR, cosine ** directivity_n)


def calc_lp_at_point_from_elements(point: Sequence[float], elements: Iterable[ElementEmission],
                                   directivity_n: float = DEFAULT_DIRECTIVITY_N,
                                   ground: Optional[Mapping[int, float]] = None) -> Dict[int, float]:
    """
    Calculate the exterior sound pressure level per band at a receiver point

    Args:
        point: Receiver coordinates (x, y, z)
        elements: Emissions carrying ``lw_out``, ``position`` and ``normal``
        directivity_n: Exponent of the cos^N directivity model
        ground: Optional ground correction per band (dB), subtracted; bands
            without an entry get no correction

    Returns:
        Band -> Lp (dB). No elements means no bands: an empty dict.
    """
    receiver = to_tuple3(point)
    ground = ground or {}
    energy = {}

    for element in elements:
        element_id = getattr(element, 'element_id', None)
        try:
            position = to_tuple3(element.position)
            normal = to_tuple3(element.normal)
        except ConfigurationError as e:
            raise ConfigurationError(e.message, element_id=element_id) from e

        r = max(distance(receiver, position), MIN_RECEIVER_DISTANCE_M)
        q = calc_directivity_factor(normal, sub(receiver, position), directivity_n)
        attenuation = free_field_attenuation(r) - 10.0 * math.log10(q)

        for band, lw in element.lw_out.items():
            lp = lw - attenuation - ground.get(band, 0.0)
            energy[band] = energy.get(band, 0.0) + SpectrumProcessor.to_linear(lp)

    return {band: SpectrumProcessor.to_db(total) for band, total in energy.items()}


def calc_laeq(spectrum: Mapping[int, float], a_weighting: Optional[Mapping[int, float]] = None) -> float:
    """
    Integrate a spectrum into a single A-weighted level

    LAeq = 10*log10(sum(10^((Lp + Aw) / 10))) over the bands of ``spectrum``.

    Args:
        spectrum: Band -> Lp (dB)
        a_weighting: Band -> A-weighting offset (dB); IEC 61672-1 1/3 octave table by default

    Raises:
        DomainError: for an empty spectrum
        ConfigurationError: when a band of the spectrum has no weighting entry
    """
    if not spectrum:
        raise DomainError("Cannot integrate an empty spectrum into an A-weighted level")
    weighting = A_WEIGHTING_THIRD_OCTAVE if a_weighting is None else a_weighting

    linear = 0.0
    for band, level in spectrum.items():
        if band not in weighting:
            raise ConfigurationError("No A-weighting value for band", band=band)
        linear += SpectrumProcessor.to_linear(level + weighting[band])
    return SpectrumProcessor.to_db(linear)
