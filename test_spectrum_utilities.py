#!/usr/bin/env python3
"""
Test script for geometry helpers, spectrum processing and band management
"""

import sys
import os
import math

import pytest

# Add src directory to path
current_dir = os.path.dirname(__file__)
src_dir = os.path.join(current_dir, 'src')
sys.path.insert(0, src_dir)

from facade_acoustics.calculations import (
    ConfigurationError, DomainError, FrequencyBandManager, MaterialSpectrum, SpectrumProcessor,
    WeightedIndex, angle_between, combine_spectra, convert_third_octave_to_octave, distance,
    energy_sum, normalize, sub, to_tuple3,
)
from facade_acoustics.calculations.iso_constants import (
    A_WEIGHTING_THIRD_OCTAVE, BAND_TYPE_OCTAVE, BAND_TYPE_THIRD_OCTAVE, THIRD_OCTAVE_BANDS,
)


def test_geometry_helpers():
    assert to_tuple3([1, 2, 3]) == (1.0, 2.0, 3.0)
    with pytest.raises(ConfigurationError):
        to_tuple3((1.0, 2.0))
    with pytest.raises(ConfigurationError):
        to_tuple3(None)
    for bad in [("a", 0, 0), (float("nan"), 0, 0), (0, float("inf"), 0), 5]:
        with pytest.raises(ConfigurationError):
            to_tuple3(bad)

    assert sub((3, 4, 5), (1, 1, 1)) == (2.0, 3.0, 4.0)
    assert distance((0, 0, 0), (3, 4, 0)) == pytest.approx(5.0)
    assert normalize((0, 0, 2)) == pytest.approx((0.0, 0.0, 1.0))
    assert normalize((0, 0, 0)) == (0.0, 0.0, 0.0)

    assert angle_between((1, 0, 0), (0, 1, 0)) == pytest.approx(math.pi / 2)
    assert angle_between((1, 0, 0), (-2, 0, 0)) == pytest.approx(math.pi)
    assert angle_between((1, 0, 0), (0, 0, 0)) == 0.0
    print("✓ Geometry helpers")


def test_energy_sum():
    assert energy_sum([70.0, 70.0]) == pytest.approx(73.0103, abs=1e-3)
    assert energy_sum([60.0]) == pytest.approx(60.0)
    assert SpectrumProcessor.to_db(SpectrumProcessor.to_linear(42.0)) == pytest.approx(42.0)
    with pytest.raises(DomainError):
        energy_sum([])
    with pytest.raises(DomainError):
        SpectrumProcessor.to_db(0.0)
    print("✓ Energy summation")


def test_combine_spectra_keeps_band_union():
    combined = combine_spectra({125: 50.0, 500: 60.0}, {500: 60.0, 1000: 40.0})
    assert list(combined) == [125, 500, 1000]
    assert combined[125] == 50.0
    assert combined[500] == pytest.approx(63.01, abs=0.01)
    assert combined[1000] == 40.0


def test_validate_spectrum():
    assert SpectrumProcessor.validate_spectrum({500: 60.0, 1000: 55.0}).is_valid

    result = SpectrumProcessor.validate_spectrum({500: 'loud', 1000: float('nan'), 999: 40.0})
    assert not result.is_valid
    assert len(result.errors) == 2
    assert any('999' in warning for warning in result.warnings)

    assert not SpectrumProcessor.validate_spectrum([60.0]).is_valid
    print("✓ Spectrum validation")


def test_third_to_octave_conversion():
    equal = {f: 30.0 for f in THIRD_OCTAVE_BANDS}
    octave = convert_third_octave_to_octave(equal)
    assert octave[500] == pytest.approx(30.0)
    assert set(octave) == {63, 125, 250, 500, 1000, 2000, 4000}

    # Energetic mean of the available components only
    partial = convert_third_octave_to_octave({400: 30.0, 500: 40.0})
    assert partial[500] == pytest.approx(10.0 * math.log10((10 ** 3.0 + 10 ** 4.0) / 2.0))
    assert set(partial) == {500}
    print("✓ 1/3 octave to octave conversion")


def test_band_type_decision():
    third = MaterialSpectrum(band_loss={500: 30.0}, weighted_index=WeightedIndex(30.0), material_id="third")
    octave_only = MaterialSpectrum(band_loss={}, weighted_index=WeightedIndex(30.0), material_id="octave",
                                   octave_band_loss={500: 30.0})
    empty = MaterialSpectrum(band_loss={500: 0.0}, weighted_index=WeightedIndex(0.0), material_id="empty")

    tie = FrequencyBandManager.determine_band_type([third, octave_only])
    assert tie.band_type == BAND_TYPE_THIRD_OCTAVE
    assert tie.materials_with_missing_data == [{'material_id': 'octave', 'missing_band_type': 'third-octave'}]

    octave_wins = FrequencyBandManager.determine_band_type([third, octave_only, octave_only])
    assert octave_wins.band_type == BAND_TYPE_OCTAVE
    assert octave_wins.frequencies == FrequencyBandManager.get_octave_frequencies()

    no_data = FrequencyBandManager.determine_band_type([empty, None])
    assert no_data.band_type == BAND_TYPE_THIRD_OCTAVE
    assert no_data.materials_with_missing_data[0]['missing_band_type'] == 'both'
    print("✓ Band type decision")


def test_material_bands():
    material = MaterialSpectrum(band_loss={400: 30.0, 500: 30.0, 630: 30.0}, weighted_index=WeightedIndex(30.0))
    assert FrequencyBandManager.get_material_bands(material, BAND_TYPE_THIRD_OCTAVE) == {400: 30.0, 500: 30.0, 630: 30.0}
    assert FrequencyBandManager.get_material_bands(material, BAND_TYPE_OCTAVE)[500] == pytest.approx(30.0)
    assert FrequencyBandManager.get_material_bands(None, BAND_TYPE_OCTAVE) is None
    with pytest.raises(ValueError):
        FrequencyBandManager.get_material_bands(material, 'twelfth-octave')


def test_a_weighting_reference_values():
    assert A_WEIGHTING_THIRD_OCTAVE[1000] == 0.0
    assert A_WEIGHTING_THIRD_OCTAVE[63] == pytest.approx(-26.2)
    assert A_WEIGHTING_THIRD_OCTAVE[2500] == pytest.approx(1.3)
    assert set(A_WEIGHTING_THIRD_OCTAVE) == set(THIRD_OCTAVE_BANDS)


def main():
    """Run all tests"""
    print("Spectrum Utilities Test Suite")
    print("=" * 50)
    sys.exit(pytest.main([__file__, "-v"]))


if __name__ == "__main__":
    main()
