#!/usr/bin/env python3
"""
Test script for the exterior field aggregator and A-weighted integration
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
    ConfigurationError, DomainError, ElementEmission,
    calc_directivity_factor, calc_laeq, calc_lp_at_point_from_elements, energy_sum, free_field_attenuation,
)


def _emission(lw_out, position=(0.0, 0.0, 0.0), normal=(1.0, 0.0, 0.0), element_id=None):
    return ElementEmission(lw_out=lw_out, position=position, normal=normal, element_id=element_id)


def test_free_field_attenuation():
    assert free_field_attenuation(1.0) == pytest.approx(11.0)
    assert free_field_attenuation(10.0) == pytest.approx(31.0)
    # Clamped to 0.1 m
    assert free_field_attenuation(0.0) == pytest.approx(-9.0)
    assert free_field_attenuation(0.05) == free_field_attenuation(0.1)
    print("✓ Free field attenuation")


def test_directivity_factor():
    normal = (1.0, 0.0, 0.0)
    assert calc_directivity_factor(normal, (5.0, 0.0, 0.0)) == pytest.approx(1.0)
    assert calc_directivity_factor(normal, (1.0, 1.0, 0.0)) == pytest.approx(math.cos(math.pi / 4))
    assert calc_directivity_factor(normal, (1.0, 1.0, 0.0), 2.0) == pytest.approx(0.5)
    # Grazing and behind the element fall back to the minimum
    assert calc_directivity_factor(normal, (0.0, 1.0, 0.0)) == pytest.approx(1e-4)
    assert calc_directivity_factor(normal, (-1.0, 0.0, 0.0), 1.5) == pytest.approx(1e-4)

    with pytest.raises(DomainError):
        calc_directivity_factor(normal, (1.0, 0.0, 0.0), 0.0)
    print("✓ Directivity factor")


def test_two_identical_elements_sum_energetically():
    # Each element alone gives 81 - 11 = 70 dB at 1 m on axis
    first = _emission({500: 81.0}, element_id="a")
    second = _emission({500: 81.0}, element_id="b")
    receiver = (1.0, 0.0, 0.0)

    single = calc_lp_at_point_from_elements(receiver, [first])
    combined = calc_lp_at_point_from_elements(receiver, [first, second])

    assert single[500] == pytest.approx(70.0)
    assert combined[500] == pytest.approx(70.0 + 10.0 * math.log10(2.0))
    assert combined[500] == pytest.approx(73.01, abs=0.01)
    print("✓ Energy summation")


def test_contributions_follow_spectrum_processor():
    elements = [_emission({500: 81.0}, element_id="a"), _emission({500: 75.0}, element_id="b")]
    lp = calc_lp_at_point_from_elements((1.0, 0.0, 0.0), elements)
    assert lp[500] == pytest.approx(energy_sum([70.0, 64.0]))

    # Energy that underflows to zero has no level
    with pytest.raises(DomainError):
        calc_lp_at_point_from_elements((1.0, 0.0, 0.0), [_emission({500: -4000.0})])
    with pytest.raises(DomainError):
        calc_laeq({1000: -4000.0})


def test_no_elements_gives_empty_spectrum():
    assert calc_lp_at_point_from_elements((10.0, 0.0, 0.0), []) == {}


def test_receiver_on_element():
    lp = calc_lp_at_point_from_elements((0.0, 0.0, 0.0), [_emission({500: 50.0})])
    # r = 0.1 m and on-axis: 50 - (20*log10(0.1) + 11)
    assert lp[500] == pytest.approx(59.0)
    assert math.isfinite(lp[500])


def test_band_union_and_ground_correction():
    elements = [_emission({125: 60.0, 500: 60.0}), _emission({500: 60.0, 2000: 60.0})]
    lp = calc_lp_at_point_from_elements((1.0, 0.0, 0.0), elements, ground={500: 3.0})

    assert set(lp) == {125, 500, 2000}
    assert lp[125] == pytest.approx(49.0)
    assert lp[2000] == pytest.approx(49.0)
    assert lp[500] == pytest.approx(49.0 - 3.0 + 10.0 * math.log10(2.0))


def test_receiver_behind_element_is_attenuated():
    lp = calc_lp_at_point_from_elements((-1.0, 0.0, 0.0), [_emission({500: 81.0})])
    assert lp[500] == pytest.approx(70.0 - 40.0)


def test_invalid_vectors_report_element():
    with pytest.raises(ConfigurationError):
        calc_lp_at_point_from_elements((1.0, 0.0), [_emission({500: 60.0})])

    class BrokenEmission:
        lw_out = {500: 60.0}
        position = (0.0, 0.0)
        normal = (1.0, 0.0, 0.0)
        element_id = "broken"

    with pytest.raises(ConfigurationError) as excinfo:
        calc_lp_at_point_from_elements((1.0, 0.0, 0.0), [BrokenEmission()])
    assert excinfo.value.element_id == "broken"
    print("✓ Invalid vectors")


def test_laeq():
    assert calc_laeq({1000: 60.0}) == pytest.approx(60.0)
    assert calc_laeq({1000: 60.0, 500: 63.2}) == pytest.approx(10.0 * math.log10(2.0 * 10 ** 6.0))
    assert calc_laeq({100: 50.0}, a_weighting={100: -10.0}) == pytest.approx(40.0)

    with pytest.raises(DomainError):
        calc_laeq({})
    with pytest.raises(ConfigurationError) as excinfo:
        calc_laeq({1000: 60.0, 12500: 40.0})
    assert excinfo.value.band == 12500
    print("✓ A-weighted level")


def main():
    """Run all tests"""
    print("Exterior Field Test Suite")
    print("=" * 50)
    sys.exit(pytest.main([__file__, "-v"]))


if __name__ == "__main__":
    main()
