"""
ISO 12354-4 Calculation Constants - Centralized definition of all magic numbers
Band sets, weighting tables, condition factors and the physical safety clamps
used throughout the facade transmission engine
"""

from typing import Dict, List, Tuple

# =============================================================================
# FREQUENCY BAND CONSTANTS (ISO 266)
# =============================================================================

# Standard 1/3 octave band center frequencies (Hz)
THIRD_OCTAVE_BANDS: Tuple[int, ...] = (
    50, 63, 80, 100, 125, 160, 200, 250, 315, 400, 500, 630,
    800, 1000, 1250, 1600, 2000, 2500, 3150, 4000, 5000,
)

# Reduced 1/1 octave band set used for summaries
OCTAVE_BANDS: Tuple[int, ...] = (63, 125, 250, 500, 1000, 2000, 4000)

NUM_THIRD_OCTAVE_BANDS: int = len(THIRD_OCTAVE_BANDS)
NUM_OCTAVE_BANDS: int = len(OCTAVE_BANDS)

# Octave center frequency -> its three 1/3 octave components
OCTAVE_TO_THIRD_OCTAVE: Dict[int, Tuple[int, int, int]] = {
    63: (50, 63, 80),
    125: (100, 125, 160),
    250: (200, 250, 315),
    500: (400, 500, 630),
    1000: (800, 1000, 1250),
    2000: (1600, 2000, 2500),
    4000: (3150, 4000, 5000),
}

BAND_TYPE_THIRD_OCTAVE: str = 'third-octave'
BAND_TYPE_OCTAVE: str = 'octave'

# Octave anchors for quick single-number transmission loss summaries
DEFAULT_KEY_BANDS: Tuple[int, ...] = (125, 500, 2000)

# =============================================================================
# A-WEIGHTING (IEC 61672-1)
# =============================================================================

# A-weighting adjustments for each 1/3 octave band (dB)
A_WEIGHTING_THIRD_OCTAVE: Dict[int, float] = {
    50: -30.2, 63: -26.2, 80: -22.5, 100: -19.1, 125: -16.1, 160: -13.4,
    200: -10.9, 250: -8.6, 315: -6.6, 400: -4.8, 500: -3.2, 630: -1.9,
    800: -0.8, 1000: 0.0, 1250: 0.6, 1600: 1.0, 2000: 1.2, 2500: 1.3,
    3150: 1.2, 4000: 1.0, 5000: 0.5,
}

# =============================================================================
# ELEMENT CONDITION CONSTANTS
# =============================================================================

# Multiplicative derating applied to every band of a material's R
CONDITION_FACTORS: Dict[str, float] = {
    'excellent': 1.0,
    'good': 0.95,
    'fair': 0.85,
    'poor': 0.70,
    'damaged': 0.5,
    'closed_sealed': 1.0,
    'closed_unsealed': 0.7,
    'partially_open': 0.3,
    'fully_open': 0.1,
}

# Factor for any condition not listed above
DEFAULT_CONDITION_FACTOR: float = 0.8

# =============================================================================
# TRANSMISSION LOSS SUMMARY CONSTANTS
# =============================================================================

MIN_EFFECTIVE_TRANSMISSION_LOSS_DB: float = 5.0   # Effective isolation floor
MAX_AREA_REDUCTION_DB: float = 20.0               # Area penalty ceiling
NON_POSITIVE_AREA_REDUCTION_DB: float = 0.0       # Penalty for a zero/negative opening area
OPENING_PENALTY_PER_OPENING_DB: float = 2.0       # Wall penalty per adjacent opening

# =============================================================================
# ROOM / PROPAGATION CONSTANTS
# =============================================================================

SABINE_CONSTANT_METRIC: float = 0.16      # A = 0.16 * V / T60 (SI units)
REVERBERANT_FIELD_NUMERATOR: float = 4.0  # Lp = Lw + 10log(4/A)
FREE_FIELD_OFFSET_DB: float = 11.0        # 10log(4*pi) for spherical (full-sphere) free-field radiation
MIN_RECEIVER_DISTANCE_M: float = 0.1      # Distance clamp before the logarithm
MIN_DIRECTIVITY_FACTOR: float = 1e-4      # Q clamp before the logarithm
DEFAULT_DIRECTIVITY_N: float = 1.0

# =============================================================================
# MATERIAL TYPES
# =============================================================================

MATERIAL_TYPES: List[str] = ['wall', 'door', 'window', 'ceiling', 'floor', 'other']
