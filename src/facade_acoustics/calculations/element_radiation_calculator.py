"""
Element Radiation Calculator - Sound power radiated outward by facade elements

LW,out = Lp,in + 10*log10(S / A) - R + delta, per band of the interior field.
"""

import math
from typing import Dict, Mapping, Optional, Sequence

from .element_types import (
    ConditionLike, ElementEmission, MaterialSpectrum, RadiatingElement,
)
from .errors import ConfigurationError, DomainError
from .geometry import normalize
from .transmission_loss_calculator import calc_transmission_loss_bands


def calc_lw_out_per_element(lp_in: Mapping[int, float], element, absorption: Mapping[int, float],
                            delta: float = 0.0) -> Dict[int, float]:
    """
    Calculate the sound power transmitted through one element

    Args:
        lp_in: Interior sound pressure level per band (dB)
        element: Object exposing ``area`` (m²) and ``transmission_loss_bands``
        absorption: Equivalent absorption area per band (m² sabins)
        delta: Additional correction (dB)

    Returns:
        Band -> LW,out (dB), for every band of ``lp_in``

    Raises:
        DomainError: non-positive element area or absorption area
        ConfigurationError: R or A has no value for a band of ``lp_in``
    """
    element_id = getattr(element, 'element_id', None)
    area = element.area
    if area is None or area <= 0:
        raise DomainError(f"Element area must be positive, got {area!r}", element_id=element_id)

    transmission_loss = element.transmission_loss_bands
    lw_out = {}
    for band, level in lp_in.items():
        if band not in transmission_loss:
            raise ConfigurationError("No transmission loss data for band",
                                     element_id=element_id, band=band)
        if band not in absorption:
            raise ConfigurationError("No absorption data for band",
                                     element_id=element_id, band=band)
        absorption_area = absorption[band]
        if absorption_area <= 0:
            raise DomainError(f"Absorption area must be positive, got {absorption_area!r}",
                              element_id=element_id, band=band)
        lw_out[band] = level + 10.0 * math.log10(area / absorption_area) - transmission_loss[band] + delta
    return lw_out


def build_radiating_element(material: MaterialSpectrum, condition: ConditionLike, area: float,
                            position: Sequence[float], normal: Sequence[float],
                            element_id: Optional[str] = None, element_type: str = 'wall') -> RadiatingElement:
    """Resolve a material and condition into a radiating element with a unit normal"""
    unit_normal = normalize(normal)
    if unit_normal == (0.0, 0.0, 0.0):
        raise ConfigurationError("Element normal must be a non-zero vector", element_id=element_id)
    return RadiatingElement(
        area=area,
        transmission_loss_bands=calc_transmission_loss_bands(material, condition),
        position=position,
        normal=unit_normal,
        element_id=element_id,
        element_type=element_type,
    )


def to_emission(element: RadiatingElement, lw_out: Mapping[int, float]) -> ElementEmission:
    """Pair an element's radiated power with its placement"""
    return ElementEmission(
        lw_out=lw_out,
        position=element.position,
        normal=element.normal,
        element_id=element.element_id,
    )
