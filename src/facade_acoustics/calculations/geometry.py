"""
Geometry utilities for facade radiation

Vector helpers used by the exterior field aggregator: distances, directions and
the angle between an element's outward normal and the direction to a receiver.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from .errors import ConfigurationError

Vector3 = Tuple[float, float, float]


def to_tuple3(values: Sequence[float]) -> Vector3:
	"""Coerce a sequence into an (x, y, z) tuple.

	Raises ConfigurationError unless exactly three finite numeric components
	are given.
	"""
	if values is None or not hasattr(values, "__len__") or len(values) != 3:
		raise ConfigurationError(f"Vector must have exactly 3 components, got {values!r}")
	try:
		vector = (float(values[0]), float(values[1]), float(values[2]))
	except (TypeError, ValueError):
		raise ConfigurationError(f"Vector components must be numeric, got {values!r}") from None
	if not all(math.isfinite(c) for c in vector):
		raise ConfigurationError(f"Vector components must be finite, got {values!r}")
	return vector


def _as_array(values: Sequence[float]) -> np.ndarray:
	return np.asarray(to_tuple3(values), dtype=float)


def sub(a: Sequence[float], b: Sequence[float]) -> Vector3:
	"""Component-wise a - b"""
	diff = _as_array(a) - _as_array(b)
	return (float(diff[0]), float(diff[1]), float(diff[2]))


def distance(a: Sequence[float], b: Sequence[float]) -> float:
	"""Euclidean distance between two points"""
	return float(np.linalg.norm(_as_array(a) - _as_array(b)))


def normalize(v: Sequence[float]) -> Vector3:
	"""Unit vector along v; the zero vector maps to itself"""
	arr = _as_array(v)
	length = float(np.linalg.norm(arr))
	if length <= 0.0:
		return (0.0, 0.0, 0.0)
	unit = arr / length
	return (float(unit[0]), float(unit[1]), float(unit[2]))


def angle_between(a: Sequence[float], b: Sequence[float]) -> float:
	"""Angle in radians between two vectors.

	The cosine is clamped to [-1, 1]. A zero-length input has no direction and
	is treated as aligned (0.0).
	"""
	arr_a = _as_array(a)
	arr_b = _as_array(b)
	len_a = float(np.linalg.norm(arr_a))
	len_b = float(np.linalg.norm(arr_b))
	if len_a <= 0.0 or len_b <= 0.0:
		return 0.0
	cosine = float(np.dot(arr_a, arr_b)) / (len_a * len_b)
	return math.acos(max(-1.0, min(1.0, cosine)))
