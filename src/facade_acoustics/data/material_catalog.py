"""
Material Catalog - Read-only access to facade materials and their transmission loss
"""

import json
import math
import os
from collections.abc import Mapping
from typing import Dict, Iterator, List, Optional

from ..calculations.element_types import MaterialSpectrum, WeightedIndex
from ..calculations.errors import ConfigurationError
from ..calculations.iso_constants import MATERIAL_TYPES

STANDARD_CATALOG_PATH = os.path.join(os.path.dirname(__file__), 'standard_materials.json')


class MaterialCatalog(Mapping):
    """
    Immutable mapping of material id -> MaterialSpectrum

    Built once and shared; every element referencing a material sees the same
    instance.
    """

    def __init__(self, materials=()):
        entries = {}
        for material in materials:
            if not material.material_id:
                raise ConfigurationError("Catalog materials must carry an id")
            if material.material_id in entries:
                raise ConfigurationError(f"Duplicate material id in catalog: {material.material_id}")
            entries[material.material_id] = material
        self._materials = entries

    def __getitem__(self, material_id: str) -> MaterialSpectrum:
        return self._materials[material_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._materials)

    def __len__(self) -> int:
        return len(self._materials)

    def get_material(self, material_id: str) -> MaterialSpectrum:
        """Look up a material, raising ConfigurationError for unknown ids"""
        try:
            return self._materials[material_id]
        except KeyError:
            raise ConfigurationError(f"Unknown material id: {material_id}") from None

    def by_type(self, material_type: str) -> Dict[str, MaterialSpectrum]:
        """All materials of one type ('wall', 'door', 'window', ...)"""
        material_type = (material_type or '').lower()
        return {key: m for key, m in self._materials.items() if m.material_type == material_type}

    def search_materials(self, search_term: str, material_type: Optional[str] = None) -> Dict[str, MaterialSpectrum]:
        """Case-insensitive search over id, descriptor and subtype"""
        term = search_term.lower()
        source = self.by_type(material_type) if material_type else self._materials
        results = {}
        for key, material in source.items():
            haystack = " ".join(filter(None, [key, material.descriptor, material.subtype])).lower()
            if term in haystack:
                results[key] = material
        return results

    def get_material_types(self) -> List[str]:
        return sorted({m.material_type for m in self._materials.values()})

    def get_material_summary(self, material_id: str) -> str:
        """One-line description of a material for reports"""
        material = self.get_material(material_id)
        parts = [material.descriptor or material_id]
        index = material.weighted_index
        if index is None:
            parts.append("Rw n/a")
        else:
            parts.append(f"Rw {index.rw:.0f} ({index.c:+.0f};{index.ctr:+.0f}) dB")
        if material.thickness_mm:
            parts.append(f"{material.thickness_mm:g} mm")
        if material.mass_kg_m2:
            parts.append(f"{material.mass_kg_m2:g} kg/m²")
        return " - ".join(parts)


def _parse_bands(raw, material_id: Optional[str], field_name: str) -> Dict[int, float]:
    """Parse a band table whose keys may be strings or numbers"""
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"'{field_name}' must be an object of band -> dB", element_id=material_id)
    bands = {}
    for key, value in raw.items():
        try:
            band = int(float(key))
        except (TypeError, ValueError):
            raise ConfigurationError(f"Band key {key!r} in '{field_name}' is not a frequency",
                                     element_id=material_id) from None
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ConfigurationError(f"Value {value!r} in '{field_name}' is not a finite number",
                                     element_id=material_id, band=band)
        bands[band] = float(value)
    return bands


def _optional_float(record: Mapping, key: str, material_id: Optional[str]) -> Optional[float]:
    value = record.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"'{key}' must be numeric, got {value!r}", element_id=material_id) from None


def material_from_dict(record: Mapping) -> MaterialSpectrum:
    """
    Build a MaterialSpectrum from a catalog record

    Args:
        record: Dict with ``id``, ``thirdOctaveBands`` and optionally
            ``descriptor``, ``type``, ``subtype``, ``thickness_mm``,
            ``mass_kg_m2``, ``catalog``, ``octaveBands`` and ``weightedIndex``
            (``{"Rw", "C", "Ctr"}``)

    Returns:
        MaterialSpectrum. A record without ``weightedIndex`` keeps
        ``weighted_index=None`` so ratings fall back to the condition-adjusted
        key-band average.

    Raises:
        ConfigurationError: for a record that cannot be interpreted
    """
    if not isinstance(record, Mapping):
        raise ConfigurationError(f"Catalog record must be an object, got {type(record).__name__}")
    material_id = record.get('id')
    if not material_id:
        raise ConfigurationError("Catalog record has no 'id'")
    if 'thirdOctaveBands' not in record:
        raise ConfigurationError("Catalog record has no 'thirdOctaveBands'", element_id=material_id)

    band_loss = _parse_bands(record['thirdOctaveBands'], material_id, 'thirdOctaveBands')

    # Published octave ratings ("43(-2;-4)" per range) are descriptive only
    octave_raw = record.get('octaveBands')
    octave_band_loss = None
    if isinstance(octave_raw, Mapping) and octave_raw:
        octave_band_loss = _parse_bands(octave_raw, material_id, 'octaveBands')

    index_raw = record.get('weightedIndex')
    if index_raw:
        try:
            weighted_index = WeightedIndex(
                rw=float(index_raw['Rw']),
                c=float(index_raw.get('C', 0.0)),
                ctr=float(index_raw.get('Ctr', 0.0)),
            )
        except (KeyError, TypeError, ValueError, AttributeError):
            raise ConfigurationError(f"Malformed weightedIndex: {index_raw!r}", element_id=material_id) from None
    else:
        weighted_index = None

    material_type = str(record.get('type') or 'other').lower()
    if material_type not in MATERIAL_TYPES:
        material_type = 'other'

    return MaterialSpectrum(
        band_loss=band_loss,
        weighted_index=weighted_index,
        material_id=str(material_id),
        descriptor=record.get('descriptor'),
        material_type=material_type,
        subtype=record.get('subtype'),
        thickness_mm=_optional_float(record, 'thickness_mm', material_id),
        mass_kg_m2=_optional_float(record, 'mass_kg_m2', material_id),
        catalog=record.get('catalog'),
        octave_band_loss=octave_band_loss,
    )


def load_catalog_from_json(path: str) -> MaterialCatalog:
    """
    Load a catalog file

    The file holds either a list of records or an object with a
    ``materials`` list.
    """
    if not os.path.exists(path):
        raise ConfigurationError(f"Material catalog not found: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Material catalog is not valid JSON: {path} ({e})") from e

    records = payload.get('materials') if isinstance(payload, dict) else payload
    if not isinstance(records, list):
        raise ConfigurationError(f"Material catalog has no 'materials' list: {path}")
    return MaterialCatalog(material_from_dict(record) for record in records)


def load_standard_catalog() -> MaterialCatalog:
    """Bundled walls, ceilings, doors and windows"""
    return load_catalog_from_json(STANDARD_CATALOG_PATH)


def load_default_catalog() -> MaterialCatalog:
    """Catalog from the configured override path, else the bundled one"""
    from ..utils.settings_manager import get_settings_manager

    custom_path = get_settings_manager().get_catalog_path()
    if custom_path:
        return load_catalog_from_json(custom_path)
    return load_standard_catalog()
