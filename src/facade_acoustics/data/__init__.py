"""
Standard data libraries for the facade transmission engine
"""

from .material_catalog import (
    MaterialCatalog, STANDARD_CATALOG_PATH, material_from_dict,
    load_catalog_from_json, load_standard_catalog, load_default_catalog
)

__all__ = [
    'MaterialCatalog',
    'STANDARD_CATALOG_PATH',
    'material_from_dict',
    'load_catalog_from_json',
    'load_standard_catalog',
    'load_default_catalog',
]
