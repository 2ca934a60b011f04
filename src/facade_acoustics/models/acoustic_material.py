"""
Transmission loss material models - Persisted catalog entries with per-band sound reduction
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Float
from sqlalchemy.orm import relationship
from datetime import datetime

from .database import Base
from ..calculations.element_types import MaterialSpectrum, WeightedIndex
from ..calculations.iso_constants import BAND_TYPE_OCTAVE, BAND_TYPE_THIRD_OCTAVE
from ..data.material_catalog import MaterialCatalog


class TransmissionMaterial(Base):
	"""Facade material with its weighted index and band data"""
	__tablename__ = 'transmission_materials'

	id = Column(Integer, primary_key=True)
	material_key = Column(String(100), nullable=False, unique=True)  # catalog id, e.g. 'wall-concrete-block'
	descriptor = Column(String(200))
	material_type = Column(String(50), default='other')  # 'wall', 'door', 'window', 'ceiling', ...
	subtype = Column(String(200))
	thickness_mm = Column(Float)
	mass_kg_m2 = Column(Float)
	catalog = Column(String(200))

	# Weighted sound reduction index (ISO 717-1)
	rw = Column(Float)  # NULL when the catalog publishes no weighted index
	c = Column(Float, default=0.0)
	ctr = Column(Float, default=0.0)

	created_date = Column(DateTime, default=datetime.utcnow)

	# Relationships
	band_losses = relationship("MaterialBandLoss", back_populates="material",
							   cascade="all, delete-orphan", order_by="MaterialBandLoss.band_hz")

	def _weighted_index(self):
		if self.rw is None:
			return None
		return WeightedIndex(rw=self.rw, c=self.c or 0.0, ctr=self.ctr or 0.0)

	def to_spectrum(self):
		"""Convert the stored row into a MaterialSpectrum"""
		third = {b.band_hz: b.loss_db for b in self.band_losses if b.band_type == BAND_TYPE_THIRD_OCTAVE}
		octave = {b.band_hz: b.loss_db for b in self.band_losses if b.band_type == BAND_TYPE_OCTAVE}
		return MaterialSpectrum(
			band_loss=third,
			weighted_index=self._weighted_index(),
			material_id=self.material_key,
			descriptor=self.descriptor,
			material_type=self.material_type or 'other',
			subtype=self.subtype,
			thickness_mm=self.thickness_mm,
			mass_kg_m2=self.mass_kg_m2,
			catalog=self.catalog,
			octave_band_loss=octave or None,
		)

	@classmethod
	def from_spectrum(cls, material):
		"""Create a row (with band children) from a MaterialSpectrum"""
		row = cls(
			material_key=material.material_id,
			descriptor=material.descriptor,
			material_type=material.material_type,
			subtype=material.subtype,
			thickness_mm=material.thickness_mm,
			mass_kg_m2=material.mass_kg_m2,
			catalog=material.catalog,
		)
		index = material.weighted_index
		if index is not None:
			row.rw, row.c, row.ctr = index.rw, index.c, index.ctr
		for band, loss in material.band_loss.items():
			row.band_losses.append(MaterialBandLoss(band_hz=band, loss_db=loss, band_type=BAND_TYPE_THIRD_OCTAVE))
		for band, loss in (material.octave_band_loss or {}).items():
			row.band_losses.append(MaterialBandLoss(band_hz=band, loss_db=loss, band_type=BAND_TYPE_OCTAVE))
		return row

	def __repr__(self):
		return f"<TransmissionMaterial(id={self.id}, key='{self.material_key}', rw={self.rw})>"


class MaterialBandLoss(Base):
	"""Sound reduction index of a material in one frequency band"""
	__tablename__ = 'material_band_losses'

	id = Column(Integer, primary_key=True)
	material_id = Column(Integer, ForeignKey('transmission_materials.id'), nullable=False)
	band_hz = Column(Integer, nullable=False)
	loss_db = Column(Float, nullable=False)
	band_type = Column(String(20), nullable=False, default=BAND_TYPE_THIRD_OCTAVE)  # 'third-octave' or 'octave'

	material = relationship("TransmissionMaterial", back_populates="band_losses")

	def __repr__(self):
		return f"<MaterialBandLoss(band={self.band_hz}Hz, R={self.loss_db}dB, type='{self.band_type}')>"


def save_catalog_to_database(session, catalog):
	"""
	Store every material of a catalog, replacing rows with the same key

	Args:
		session: Open SQLAlchemy session (caller commits)
		catalog: MaterialCatalog or any iterable of MaterialSpectrum

	Returns:
		Number of materials written
	"""
	materials = catalog.values() if isinstance(catalog, MaterialCatalog) else catalog
	count = 0
	for material in materials:
		existing = session.query(TransmissionMaterial).filter_by(material_key=material.material_id).first()
		if existing is not None:
			session.delete(existing)
			session.flush()
		session.add(TransmissionMaterial.from_spectrum(material))
		count += 1
	session.flush()
	return count


def load_catalog_from_database(session, material_type=None):
	"""Build a MaterialCatalog from the stored materials, optionally of one type"""
	query = session.query(TransmissionMaterial)
	if material_type:
		query = query.filter(TransmissionMaterial.material_type == material_type.lower())
	return MaterialCatalog(row.to_spectrum() for row in query.order_by(TransmissionMaterial.material_key).all())
