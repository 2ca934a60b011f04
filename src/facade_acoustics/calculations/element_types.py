"""
Value objects for facade transmission analysis
Materials, element conditions, radiating elements and room context
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union

from .geometry import Vector3, to_tuple3


def _freeze_bands(bands: Optional[Mapping]) -> Optional[Mapping[int, float]]:
    """Copy a band map into a read-only mapping with int keys and float values"""
    if bands is None:
        return None
    return MappingProxyType({int(band): float(value) for band, value in bands.items()})


@dataclass(frozen=True)
class WeightedIndex:
    """Single-number weighted sound reduction index (ISO 717-1)"""
    rw: float
    c: float = 0.0
    ctr: float = 0.0


@dataclass(frozen=True)
class MaterialSpectrum:
    """
    Per-material acoustic data as published in a catalog

    ``band_loss`` holds the sound reduction index R per 1/3 octave band. Instances
    are shared read-only between every element that uses the material.
    """
    band_loss: Mapping[int, float]
    weighted_index: Optional[WeightedIndex]
    material_id: Optional[str] = None
    descriptor: Optional[str] = None
    material_type: str = 'other'
    subtype: Optional[str] = None
    thickness_mm: Optional[float] = None
    mass_kg_m2: Optional[float] = None
    catalog: Optional[str] = None
    octave_band_loss: Optional[Mapping[int, float]] = None

    def __post_init__(self):
        object.__setattr__(self, 'band_loss', _freeze_bands(self.band_loss))
        object.__setattr__(self, 'octave_band_loss', _freeze_bands(self.octave_band_loss))


class ElementCondition(str, Enum):
    """Qualitative state of a wall, door or window"""
    EXCELLENT = 'excellent'
    GOOD = 'good'
    FAIR = 'fair'
    POOR = 'poor'
    DAMAGED = 'damaged'
    CLOSED_SEALED = 'closed_sealed'
    CLOSED_UNSEALED = 'closed_unsealed'
    PARTIALLY_OPEN = 'partially_open'
    FULLY_OPEN = 'fully_open'


ConditionLike = Union[ElementCondition, str, None]


@dataclass(frozen=True)
class RadiatingElement:
    """A facade element with its resolved transmission loss per band"""
    area: float
    transmission_loss_bands: Mapping[int, float]
    position: Vector3
    normal: Vector3
    element_id: Optional[str] = None
    element_type: str = 'wall'

    def __post_init__(self):
        object.__setattr__(self, 'transmission_loss_bands', _freeze_bands(self.transmission_loss_bands))
        object.__setattr__(self, 'position', to_tuple3(self.position))
        object.__setattr__(self, 'normal', to_tuple3(self.normal))


@dataclass(frozen=True)
class ElementEmission:
    """Sound power radiated outward by one element (LW,out per band)"""
    lw_out: Mapping[int, float]
    position: Vector3
    normal: Vector3
    element_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'lw_out', _freeze_bands(self.lw_out))
        object.__setattr__(self, 'position', to_tuple3(self.position))
        object.__setattr__(self, 'normal', to_tuple3(self.normal))


@dataclass(frozen=True)
class RoomAbsorption:
    """Source room context used to derive the equivalent absorption area"""
    volume: float
    reverberation_time: Mapping[int, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'reverberation_time', _freeze_bands(self.reverberation_time))


ReceiverPoint = Tuple[float, float, float]
Spectrum = Dict[int, float]
