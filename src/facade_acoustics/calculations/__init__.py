"""
Acoustic calculation engines for ISO 12354-4 facade transmission
"""

# Common utilities (imported first for use by other modules)
from .acoustic_utilities import (
    SpectrumProcessor, FrequencyBandManager, FrequencyAnalysisResult,
    energy_sum, combine_spectra, convert_third_octave_to_octave
)
from .errors import FacadeAcousticsError, DomainError, ConfigurationError
from .result_types import CalculationResult, ResultStatus, ValidationResult
from .element_types import (
    WeightedIndex, MaterialSpectrum, ElementCondition, RadiatingElement,
    ElementEmission, RoomAbsorption
)
from .geometry import distance, sub, normalize, angle_between, to_tuple3
from .transmission_loss_calculator import (
    get_condition_factor, calc_transmission_loss_bands, calc_average_transmission_loss,
    calc_effective_transmission_loss, calc_area_reduction, calc_openings_penalty,
    calc_area_weighted_rw
)
from .interior_field_calculator import calc_absorption, calc_absorption_for_room, calc_lp_inside
from .element_radiation_calculator import calc_lw_out_per_element, build_radiating_element, to_emission
from .exterior_field_aggregator import (
    free_field_attenuation, calc_directivity_factor, calc_lp_at_point_from_elements, calc_laeq
)
from .facade_pipeline import (
    FacadeEmissionResult, ReceiverLevel, calc_facade_emissions,
    evaluate_receiver_points, receiver_results_to_dataframe
)

__all__ = [
    # Common utilities
    'SpectrumProcessor',
    'FrequencyBandManager',
    'FrequencyAnalysisResult',
    'energy_sum',
    'combine_spectra',
    'convert_third_octave_to_octave',
    # Errors and results
    'FacadeAcousticsError',
    'DomainError',
    'ConfigurationError',
    'CalculationResult',
    'ResultStatus',
    'ValidationResult',
    # Value objects
    'WeightedIndex',
    'MaterialSpectrum',
    'ElementCondition',
    'RadiatingElement',
    'ElementEmission',
    'RoomAbsorption',
    # Geometry
    'distance',
    'sub',
    'normalize',
    'angle_between',
    'to_tuple3',
    # Core calculators
    'get_condition_factor',
    'calc_transmission_loss_bands',
    'calc_average_transmission_loss',
    'calc_effective_transmission_loss',
    'calc_area_reduction',
    'calc_openings_penalty',
    'calc_area_weighted_rw',
    'calc_absorption',
    'calc_absorption_for_room',
    'calc_lp_inside',
    'calc_lw_out_per_element',
    'build_radiating_element',
    'to_emission',
    'free_field_attenuation',
    'calc_directivity_factor',
    'calc_lp_at_point_from_elements',
    'calc_laeq',
    # Pipeline
    'FacadeEmissionResult',
    'ReceiverLevel',
    'calc_facade_emissions',
    'evaluate_receiver_points',
    'receiver_results_to_dataframe',
]
