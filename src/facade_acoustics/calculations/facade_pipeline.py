"""
Facade Pipeline - ISO 12354-4 chain from source room to exterior receivers

Runs absorption -> interior level -> per-element radiated power for one room,
then evaluates the exterior field at caller-supplied receiver points. A failure
at one receiver becomes an error result for that point; the sweep continues.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from .acoustic_utilities import SpectrumProcessor
from .debug_logger import debug_logger
from .element_radiation_calculator import calc_lw_out_per_element, to_emission
from .element_types import ElementEmission, RadiatingElement, RoomAbsorption
from .errors import ConfigurationError, FacadeAcousticsError
from .exterior_field_aggregator import calc_laeq, calc_lp_at_point_from_elements
from .geometry import to_tuple3
from .interior_field_calculator import calc_absorption_for_room, calc_lp_inside
from .result_types import CalculationResult, ResultStatus, ValidationResult

COMPONENT = "FacadePipeline"


@dataclass
class FacadeEmissionResult:
    """Intermediate spectra of one room plus the emissions of its envelope"""
    absorption: Dict[int, float]
    lp_inside: Dict[int, float]
    emissions: List[ElementEmission] = field(default_factory=list)


@dataclass
class ReceiverLevel:
    """Exterior level at one receiver point"""
    point: tuple
    spectrum: Dict[int, float]
    laeq: Optional[float] = None


def calc_facade_emissions(room: RoomAbsorption, source_lw: Mapping[int, float],
                          elements: Iterable[RadiatingElement], delta: float = 0.0) -> FacadeEmissionResult:
    """
    Calculate the radiated sound power of every envelope element of a room

    Args:
        room: Volume and reverberation time of the source room
        source_lw: Source sound power level per band (dB)
        elements: Radiating elements with resolved transmission loss
        delta: Additional correction applied to every element (dB)

    Raises:
        DomainError / ConfigurationError from the underlying calculators, with
        the failing element and band attached
    """
    elements = list(elements)
    debug_logger.log_calculation_start(COMPONENT, "facade_emissions", item_count=len(elements))

    absorption = calc_absorption_for_room(room)
    lp_inside = calc_lp_inside(source_lw, absorption)

    emissions = []
    for element in elements:
        try:
            lw_out = calc_lw_out_per_element(lp_inside, element, absorption, delta)
        except FacadeAcousticsError as e:
            debug_logger.error(COMPONENT, "Element radiation failed", error=e, data=e.context())
            raise
        debug_logger.log_element_processing(COMPONENT, element.element_type, element.element_id, lw_out)
        emissions.append(to_emission(element, lw_out))

    debug_logger.log_calculation_end(COMPONENT, "facade_emissions", True,
                                     {'element_count': len(emissions), 'lp_inside': lp_inside})
    return FacadeEmissionResult(absorption=absorption, lp_inside=lp_inside, emissions=emissions)


def _validate_emissions(emissions: Sequence[ElementEmission]) -> ValidationResult:
    """Check every emission spectrum before the sweep, labelling messages by element"""
    validation = ValidationResult(is_valid=True)
    for position, emission in enumerate(emissions):
        label = emission.element_id or f"element #{position}"
        check = SpectrumProcessor.validate_spectrum(emission.lw_out)
        for message in check.errors:
            validation.add_error(f"{label}: {message}")
        for message in check.warnings:
            validation.add_warning(f"{label}: {message}")
    return validation


def evaluate_receiver_points(points: Iterable[Sequence[float]], emissions: Sequence[ElementEmission],
                             directivity_n: Optional[float] = None,
                             ground: Optional[Mapping[int, float]] = None,
                             a_weighting: Optional[Mapping[int, float]] = None) -> List[CalculationResult]:
    """
    Evaluate the exterior field at each receiver point

    Returns:
        One CalculationResult per point, in input order. Successful results hold
        a ReceiverLevel (``laeq`` is None when no band reached the point) and
        carry any emission validation warnings; error results carry
        ``point_index`` and, when known, ``element_id``/``band`` in their
        metadata. When an emission spectrum holds unusable levels every point
        is reported as validation failed. Without an explicit
        ``directivity_n`` the configured default
        (FACADE_ACOUSTICS_DIRECTIVITY_N, else 1) applies.
    """
    if directivity_n is None:
        from ..utils.settings_manager import get_settings_manager
        directivity_n = get_settings_manager().get_directivity_n()
    points = list(points)
    emissions = list(emissions)
    debug_logger.log_calculation_start(COMPONENT, "receiver_sweep", item_count=len(points))

    validation = _validate_emissions(emissions)
    debug_logger.log_validation_result(COMPONENT, validation.is_valid, validation.errors, validation.warnings)
    if not validation.is_valid:
        message = "Emission spectra failed validation: " + "; ".join(validation.errors)
        results = [
            CalculationResult.validation_failed(message, warnings=list(validation.warnings),
                                                metadata={'point_index': index, 'point': point})
            for index, point in enumerate(points)
        ]
        debug_logger.log_calculation_end(COMPONENT, "receiver_sweep", False,
                                         {'point_count': len(results), 'failed_count': len(results)})
        return results

    results = []
    for index, point in enumerate(points):
        try:
            spectrum = calc_lp_at_point_from_elements(point, emissions, directivity_n, ground)
            laeq = calc_laeq(spectrum, a_weighting) if spectrum else None
        except FacadeAcousticsError as e:
            result = CalculationResult.error(str(e), metadata={'point_index': index, 'point': point})
            for key, value in e.context().items():
                result.set_metadata(key, value)
            debug_logger.warning(COMPONENT, "Receiver point skipped", {'error': str(e), **result.metadata})
            results.append(result)
            continue
        result = CalculationResult.success(
            ReceiverLevel(point=tuple(point), spectrum=spectrum, laeq=laeq),
            warnings=list(validation.warnings),
            metadata={'point_index': index},
        )
        if not spectrum:
            result.add_warning("No emission reached the receiver")
        results.append(result)

    failed = sum(1 for result in results if not result.is_success)
    debug_logger.log_calculation_end(COMPONENT, "receiver_sweep", failed == 0,
                                     {'point_count': len(results), 'failed_count': failed})
    return results


def receiver_results_to_dataframe(results: Sequence[CalculationResult]) -> pd.DataFrame:
    """
    Tabulate a receiver sweep, one row per point

    Columns: point_index, x, y, z, status, laeq_dba, error, then Lp_<band>Hz
    for every band seen in the sweep (ascending).
    """
    rows = []
    bands = set()
    for position, result in enumerate(results):
        row = {
            'point_index': result.metadata.get('point_index', position),
            'status': result.status.value,
            'laeq_dba': None,
            'error': result.error_message,
        }
        point = result.data.point if result.status == ResultStatus.SUCCESS else result.metadata.get('point')
        try:
            row['x'], row['y'], row['z'] = to_tuple3(point)
        except ConfigurationError:
            pass  # unusable coordinates stay NaN
        if result.is_success:
            row['laeq_dba'] = result.data.laeq
            for band, level in result.data.spectrum.items():
                row[f'Lp_{band}Hz'] = level
                bands.add(band)
        rows.append(row)

    columns = ['point_index', 'x', 'y', 'z', 'status', 'laeq_dba', 'error']
    columns += [f'Lp_{band}Hz' for band in sorted(bands)]
    return pd.DataFrame(rows, columns=columns)
