#!/usr/bin/env python3
"""
Test script for the material catalog and its SQLAlchemy store
"""

import sys
import os
import json

import pytest

# Add src directory to path
current_dir = os.path.dirname(__file__)
src_dir = os.path.join(current_dir, 'src')
sys.path.insert(0, src_dir)

from facade_acoustics.calculations import ConfigurationError, calc_area_weighted_rw
from facade_acoustics.calculations.iso_constants import THIRD_OCTAVE_BANDS
from facade_acoustics.data import (
    MaterialCatalog, load_catalog_from_json, load_default_catalog, load_standard_catalog, material_from_dict,
)
from facade_acoustics.models import (
    close_database, initialize_database, load_catalog_from_database, save_catalog_to_database, session_scope,
)
from facade_acoustics.utils import settings_manager


@pytest.fixture
def memory_database():
    initialize_database(":memory:")
    yield
    close_database()


def test_standard_catalog_contents():
    catalog = load_standard_catalog()

    assert len(catalog) == 16
    assert set(catalog.get_material_types()) == {'wall', 'ceiling', 'floor', 'door', 'window'}
    assert len(catalog.by_type('wall')) == 5
    assert len(catalog.by_type('Window')) == 2

    slab = catalog.get_material('floor-concrete-slab')
    assert slab.material_type == 'floor'
    assert slab.weighted_index.rw == 41.0
    assert slab.band_loss[500] == pytest.approx(39.0)

    brick = catalog.get_material('wall-ceramic-brick')
    assert brick.weighted_index.rw == 43.0
    assert brick.weighted_index.ctr == -4.0
    assert brick.band_loss[125] == pytest.approx(29.2)
    assert set(brick.band_loss) == set(THIRD_OCTAVE_BANDS)
    # Published octave ratings are not band data
    assert brick.octave_band_loss is None
    print("✓ Standard catalog")


def test_unknown_material_raises():
    catalog = load_standard_catalog()
    with pytest.raises(ConfigurationError):
        catalog.get_material('wall-made-of-cheese')
    with pytest.raises(KeyError):
        catalog['wall-made-of-cheese']


def test_catalog_is_read_only():
    catalog = load_standard_catalog()
    with pytest.raises(TypeError):
        catalog['new'] = None
    with pytest.raises(TypeError):
        catalog.get_material('door-standard').band_loss[500] = 0.0


def test_search_and_summary():
    catalog = load_standard_catalog()
    assert set(catalog.search_materials('glazing')) == {'window-standard', 'window-double-glazed'}
    assert set(catalog.search_materials('gypsum', material_type='ceiling')) == {'ceiling-gypsum-board'}
    summary = catalog.get_material_summary('door-acoustic')
    assert summary.startswith("Acoustic Door - Rw 45 (-2;-4) dB")


def test_material_from_dict_parsing():
    material = material_from_dict({
        'id': 'custom',
        'type': 'wall',
        'thirdOctaveBands': {'125': 30, 500: 40, 2000.0: 50},
    })
    assert material.band_loss == {125: 30.0, 500: 40.0, 2000: 50.0}
    assert material.weighted_index is None

    octave = material_from_dict({'id': 'o', 'thirdOctaveBands': {}, 'octaveBands': {'500': 33}})
    assert octave.octave_band_loss == {500: 33.0}
    assert octave.material_type == 'other'


def test_unrated_material_uses_condition_adjusted_rating():
    window = material_from_dict({'id': 'w', 'type': 'window', 'thirdOctaveBands': {125: 30, 500: 30, 2000: 30}})
    assert calc_area_weighted_rw([(2.0, window, 'fully_open')]) == pytest.approx(3.0)
    assert calc_area_weighted_rw([(2.0, window, 'closed_sealed')]) == pytest.approx(30.0)

    catalog = MaterialCatalog([window])
    assert catalog.get_material_summary('w') == "w - Rw n/a"


def test_material_from_dict_rejects_malformed_records():
    bad_records = [
        {'thirdOctaveBands': {500: 30}},
        {'id': 'x'},
        {'id': 'x', 'thirdOctaveBands': [30, 40]},
        {'id': 'x', 'thirdOctaveBands': {'mid': 30}},
        {'id': 'x', 'thirdOctaveBands': {500: 'loud'}},
        {'id': 'x', 'thirdOctaveBands': {500: 30}, 'weightedIndex': {'C': -1}},
        {'id': 'x', 'thirdOctaveBands': {500: 30}, 'thickness_mm': 'thick'},
        ['not', 'a', 'record'],
    ]
    for record in bad_records:
        with pytest.raises(ConfigurationError):
            material_from_dict(record)


def test_duplicate_ids_rejected():
    record = {'id': 'dup', 'thirdOctaveBands': {500: 30}}
    with pytest.raises(ConfigurationError):
        MaterialCatalog([material_from_dict(record), material_from_dict(record)])


def test_load_catalog_from_json(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([{'id': 'only', 'type': 'door', 'thirdOctaveBands': {'500': 25}}]))
    catalog = load_catalog_from_json(str(path))
    assert list(catalog) == ['only']

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigurationError):
        load_catalog_from_json(str(broken))
    with pytest.raises(ConfigurationError):
        load_catalog_from_json(str(tmp_path / "missing.json"))


def test_default_catalog_honours_override(tmp_path, monkeypatch):
    path = tmp_path / "override.json"
    path.write_text(json.dumps({'materials': [{'id': 'site-wall', 'thirdOctaveBands': {'500': 45}}]}))

    monkeypatch.setattr(settings_manager, '_settings_manager', None)
    monkeypatch.setenv('FACADE_ACOUSTICS_CATALOG_PATH', str(path))
    assert list(load_default_catalog()) == ['site-wall']

    monkeypatch.setattr(settings_manager, '_settings_manager', None)
    monkeypatch.delenv('FACADE_ACOUSTICS_CATALOG_PATH')
    assert 'door-standard' in load_default_catalog()
    print("✓ Catalog override")


def test_database_round_trip(memory_database):
    catalog = load_standard_catalog()

    with session_scope() as session:
        assert save_catalog_to_database(session, catalog) == len(catalog)

    with session_scope() as session:
        stored = load_catalog_from_database(session)

    assert set(stored) == set(catalog)
    for key, material in catalog.items():
        loaded = stored[key]
        assert loaded.band_loss == material.band_loss
        assert loaded.weighted_index == material.weighted_index
        assert loaded.material_type == material.material_type
        assert loaded.descriptor == material.descriptor
        assert loaded.thickness_mm == material.thickness_mm
    print("✓ Database round trip")


def test_database_save_replaces_existing(memory_database):
    first = material_from_dict({'id': 'w', 'type': 'wall', 'thirdOctaveBands': {500: 30}, 'octaveBands': {500: 31}})
    second = material_from_dict({'id': 'w', 'type': 'wall', 'thirdOctaveBands': {500: 35, 1000: 38}})

    with session_scope() as session:
        save_catalog_to_database(session, [first])
    with session_scope() as session:
        save_catalog_to_database(session, [second])
    with session_scope() as session:
        walls = load_catalog_from_database(session, material_type='wall')

    assert len(walls) == 1
    assert walls['w'].band_loss == {500: 35.0, 1000: 38.0}
    assert walls['w'].octave_band_loss is None


def test_database_keeps_missing_weighted_index(memory_database):
    rated = material_from_dict({'id': 'rated', 'thirdOctaveBands': {500: 30},
                                'weightedIndex': {'Rw': 32, 'C': -1, 'Ctr': -3}})
    unrated = material_from_dict({'id': 'unrated', 'thirdOctaveBands': {500: 30}})

    with session_scope() as session:
        save_catalog_to_database(session, [rated, unrated])
    with session_scope() as session:
        stored = load_catalog_from_database(session)

    assert stored['unrated'].weighted_index is None
    assert stored['rated'].weighted_index == rated.weighted_index


def main():
    """Run all tests"""
    print("Material Catalog Test Suite")
    print("=" * 50)
    sys.exit(pytest.main([__file__, "-v"]))


if __name__ == "__main__":
    main()
