"""
Database models for the facade transmission engine
"""

from .database import Base, initialize_database, get_session, session_scope, close_database
from .acoustic_material import (TransmissionMaterial, MaterialBandLoss,
								save_catalog_to_database, load_catalog_from_database)

__all__ = [
	'Base',
	'initialize_database',
	'get_session',
	'session_scope',
	'close_database',
	'TransmissionMaterial',
	'MaterialBandLoss',
	'save_catalog_to_database',
	'load_catalog_from_database',
]
