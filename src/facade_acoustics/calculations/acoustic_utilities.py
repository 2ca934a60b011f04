"""
Acoustic Utilities - Centralized spectrum and frequency band functions

This module consolidates the energy arithmetic on decibel spectra and the
frequency band management (1/3 octave and octave sets, ISO 266 conversion)
used across the facade calculation modules.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

import numpy as np

from .iso_constants import (
    THIRD_OCTAVE_BANDS, OCTAVE_BANDS, OCTAVE_TO_THIRD_OCTAVE,
    BAND_TYPE_THIRD_OCTAVE, BAND_TYPE_OCTAVE,
)
from .errors import DomainError
from .result_types import ValidationResult


class SpectrumProcessor:
    """Common spectrum processing and conversion functions"""

    @staticmethod
    def to_linear(level: float) -> float:
        """Decibel level -> relative energy"""
        return 10.0 ** (level / 10.0)

    @staticmethod
    def to_db(energy: float) -> float:
        """
        Relative energy -> decibel level

        Raises:
            DomainError: if the energy is not strictly positive
        """
        if not energy > 0.0:
            raise DomainError(f"Cannot express non-positive energy {energy!r} in dB")
        return 10.0 * math.log10(energy)

    @staticmethod
    def energy_sum(levels: Iterable[float]) -> float:
        """
        Combine incoherent levels by summing their energies

        Args:
            levels: Sound levels (dB)

        Returns:
            Combined level (dB)
        """
        values = np.asarray(list(levels), dtype=float)
        if values.size == 0:
            raise DomainError("Cannot combine an empty set of levels")
        return SpectrumProcessor.to_db(float(np.sum(np.power(10.0, values / 10.0))))

    @staticmethod
    def combine_spectra(spectrum_a: Mapping[int, float], spectrum_b: Mapping[int, float]) -> Dict[int, float]:
        """
        Energy-sum two spectra band by band

        Bands present in only one operand pass through unchanged.
        """
        combined = {}
        for band in sorted(set(spectrum_a) | set(spectrum_b)):
            if band in spectrum_a and band in spectrum_b:
                combined[band] = SpectrumProcessor.energy_sum((spectrum_a[band], spectrum_b[band]))
            elif band in spectrum_a:
                combined[band] = float(spectrum_a[band])
            else:
                combined[band] = float(spectrum_b[band])
        return combined

    @staticmethod
    def validate_spectrum(spectrum: Mapping, allowed_bands: Optional[Iterable[int]] = None) -> ValidationResult:
        """
        Validate a band-keyed spectrum

        Args:
            spectrum: Mapping of band (Hz) -> level (dB)
            allowed_bands: Known band set; defaults to 1/3 octave plus octave centers

        Returns:
            ValidationResult with errors for unusable values, warnings for unknown bands
        """
        result = ValidationResult(is_valid=True)
        if not isinstance(spectrum, Mapping):
            result.add_error("Spectrum must be a mapping of band -> level")
            return result
        if not spectrum:
            result.add_warning("Spectrum is empty")
            return result

        known = set(allowed_bands) if allowed_bands is not None else set(THIRD_OCTAVE_BANDS) | set(OCTAVE_BANDS)
        for band, level in spectrum.items():
            try:
                band_hz = int(band)
            except (TypeError, ValueError):
                result.add_error(f"Band key {band!r} is not a frequency")
                continue
            if band_hz not in known:
                result.add_warning(f"Band {band_hz} Hz is not a standard center frequency")
            if isinstance(level, bool) or not isinstance(level, (int, float)):
                result.add_error(f"Level at {band_hz} Hz is not numeric: {level!r}")
            elif not math.isfinite(level):
                result.add_error(f"Level at {band_hz} Hz is not finite: {level!r}")
        return result


@dataclass
class FrequencyAnalysisResult:
    """Outcome of choosing the band set for a group of materials"""
    band_type: str
    frequencies: List[int]
    materials_with_missing_data: List[Dict[str, Optional[str]]] = field(default_factory=list)


class FrequencyBandManager:
    """Utilities for frequency band management and conversion (ISO 266)"""

    @staticmethod
    def get_third_octave_frequencies() -> List[int]:
        return list(THIRD_OCTAVE_BANDS)

    @staticmethod
    def get_octave_frequencies() -> List[int]:
        return list(OCTAVE_BANDS)

    @staticmethod
    def convert_third_octave_to_octave(third_octave_bands: Mapping[int, float]) -> Dict[int, float]:
        """
        Convert 1/3 octave values to octave values

        Each octave is the energetic mean of whichever of its three components
        are available: R_oct = 10*log10(mean(10^(R_i/10))). Octaves with no
        available component are left out.
        """
        octave_bands = {}
        for octave, thirds in OCTAVE_TO_THIRD_OCTAVE.items():
            values = [
                float(third_octave_bands[f]) for f in thirds
                if f in third_octave_bands and third_octave_bands[f] is not None
                and math.isfinite(third_octave_bands[f])
            ]
            if not values:
                continue
            energy = np.mean(np.power(10.0, np.asarray(values) / 10.0))
            octave_bands[octave] = 10.0 * math.log10(float(energy))
        return octave_bands

    @staticmethod
    def has_valid_band_data(bands: Optional[Mapping[int, float]]) -> bool:
        """True when at least one band holds a finite, non-zero value"""
        if not bands:
            return False
        return any(
            isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v) and v != 0
            for v in bands.values()
        )

    @staticmethod
    def get_material_bands(material, band_type: str) -> Optional[Dict[int, float]]:
        """
        Get the band values of a material for the requested band type

        Octave values are derived from the 1/3 octave data when the material
        carries no octave data of its own. Returns None when there is nothing usable.
        """
        if material is None:
            return None
        third = getattr(material, 'band_loss', None)
        octave = getattr(material, 'octave_band_loss', None)
        has_third = FrequencyBandManager.has_valid_band_data(third)
        has_octave = FrequencyBandManager.has_valid_band_data(octave)

        if band_type == BAND_TYPE_THIRD_OCTAVE:
            return dict(third) if has_third else None
        if band_type == BAND_TYPE_OCTAVE:
            if has_octave:
                return dict(octave)
            if has_third:
                return FrequencyBandManager.convert_third_octave_to_octave(third)
            return None
        raise ValueError(f"Unknown band type: {band_type}")

    @staticmethod
    def determine_band_type(materials: Iterable) -> FrequencyAnalysisResult:
        """
        Decide which band set a calculation over these materials should use

        1/3 octave wins ties; octave is used when more materials carry only
        octave data than carry 1/3 octave data. Octave values cannot be split
        back into 1/3 octaves, so materials lacking 1/3 octave data are
        reported as missing.
        """
        third_count = 0
        octave_only_count = 0
        missing = []
        for material in materials:
            if material is None:
                continue
            material_id = getattr(material, 'material_id', None)
            has_third = FrequencyBandManager.has_valid_band_data(getattr(material, 'band_loss', None))
            has_octave = FrequencyBandManager.has_valid_band_data(getattr(material, 'octave_band_loss', None))
            if has_third:
                third_count += 1
            elif has_octave:
                octave_only_count += 1
                missing.append({'material_id': material_id, 'missing_band_type': 'third-octave'})
            else:
                missing.append({'material_id': material_id, 'missing_band_type': 'both'})

        if octave_only_count > third_count:
            return FrequencyAnalysisResult(BAND_TYPE_OCTAVE, list(OCTAVE_BANDS), missing)
        return FrequencyAnalysisResult(BAND_TYPE_THIRD_OCTAVE, list(THIRD_OCTAVE_BANDS), missing)


# Convenience functions
def energy_sum(levels: Iterable[float]) -> float:
    """Convenience function for incoherent level summation"""
    return SpectrumProcessor.energy_sum(levels)


def combine_spectra(spectrum_a: Mapping[int, float], spectrum_b: Mapping[int, float]) -> Dict[int, float]:
    """Convenience function for band-wise spectrum summation"""
    return SpectrumProcessor.combine_spectra(spectrum_a, spectrum_b)


def convert_third_octave_to_octave(third_octave_bands: Mapping[int, float]) -> Dict[int, float]:
    """Convenience function for ISO 266 band conversion"""
    return FrequencyBandManager.convert_third_octave_to_octave(third_octave_bands)


__all__ = [
    'SpectrumProcessor',
    'FrequencyBandManager',
    'FrequencyAnalysisResult',
    'energy_sum',
    'combine_spectra',
    'convert_third_octave_to_octave',
]
