# axis_simulator/axis_calculations.py
import logging
import math
from typing import Any, NamedTuple, Optional, Tuple, Union

import numpy as np

from .constants import (
    AXIS_RANGES, AXIS_VALUES, DEFAULT_AXIS_DEGREES, INDETERMINATE_AREA_THRESHOLD,
    MAX_MEASURED_AMPLITUDE_MM, MAX_QRS_DURATION_MS, MAX_RANDOM_AXIS_DRAWS, MIN_QRS_DURATION_MS, MS_PER_MM,
    WIDE_QRS_ANALYSIS_WINDOW_MS, WIDE_QRS_THRESHOLD_MS,
)
from .exceptions import InvalidMeasurementError
from .models import AxisClassification, AxisPreset, QRSMeasurements

logger = logging.getLogger(__name__)

PresetLike = Union[AxisPreset, str]


class MeasuredAxis(NamedTuple):
    axis_degrees: Optional[float]
    classification: AxisClassification
    lead_i_area: float
    lead_ii_area: float


# --- Angle Helpers ---
def is_valid_number(value: Any) -> bool:
    """True for finite real numbers (bools and non-numeric values are rejected)."""
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        return False
    return math.isfinite(value)


def normalize_angle(angle: Any) -> float:
    """
    Normalize an angle in degrees to the half-open interval (-180, 180].

    Invalid input (None, NaN, infinities, non-numeric values) normalizes to 0°
    so interactive callers always get a usable angle back.
    """
    if not is_valid_number(angle):
        logger.debug("normalize_angle: invalid angle %r, using %s", angle, DEFAULT_AXIS_DEGREES)
        return DEFAULT_AXIS_DEGREES

    normalized = float(angle) % 360.0
    if normalized > 180.0:
        normalized -= 360.0
    return normalized


# --- Classification ---
def classify_axis(axis_degrees: Optional[float]) -> AxisClassification:
    """
    Classify a QRS axis into the standard clinical categories.

    Normal [-30, 90], Right (90, 180], Left [-90, -30), Extreme otherwise.
    The angle is normalized first, so -180° is classified as +180° (Right).
    """
    if axis_degrees is None:
        return AxisClassification.INDETERMINATE

    axis = normalize_angle(axis_degrees)
    normal_min, normal_max = AXIS_RANGES["normal"]
    right_min, right_max = AXIS_RANGES["right"]
    left_min, left_max = AXIS_RANGES["left"]

    if normal_min <= axis <= normal_max:
        return AxisClassification.NORMAL
    if right_min < axis <= right_max:
        return AxisClassification.RIGHT
    if left_min <= axis < left_max:
        return AxisClassification.LEFT
    return AxisClassification.EXTREME


def format_axis(axis_degrees: Optional[float]) -> str:
    if axis_degrees is None:
        return AxisClassification.INDETERMINATE.value
    return f"{axis_degrees:.1f}°"


# --- Presets ---
def _preset_key(preset: PresetLike) -> str:
    value = preset.value if isinstance(preset, AxisPreset) else str(preset).lower()
    if value not in AXIS_VALUES:
        logger.debug("Unknown axis preset %r, falling back to normal", preset)
        return AxisPreset.NORMAL.value
    return value


def get_axis_value_from_type(preset: PresetLike) -> float:
    """Representative axis angle for a preset button (unknown presets -> normal)."""
    return AXIS_VALUES[_preset_key(preset)]


def get_axis_range_from_type(preset: PresetLike) -> Tuple[float, float]:
    return AXIS_RANGES[_preset_key(preset)]


def is_axis_in_range(axis_degrees: float, preset: PresetLike) -> bool:
    range_min, range_max = get_axis_range_from_type(preset)
    axis = normalize_angle(axis_degrees)
    return range_min <= axis <= range_max


def get_random_value_in_axis_range(
    preset: PresetLike,
    rng: Optional[np.random.Generator] = None,
) -> float:
    """
    Draw a uniformly distributed axis value inside a preset's category.

    Draws are rounded to one decimal and normalized to (-180, 180]. Values that
    land on a boundary belonging to another category (e.g. -180.0 for the
    extreme preset, 90.0 for the right preset) are redrawn; after
    MAX_RANDOM_AXIS_DRAWS attempts the preset's representative value is used.

    Args:
        preset: Axis preset (or its string value)
        rng: Optional numpy Generator, injectable for reproducible draws

    Returns:
        Axis in degrees rounded to one decimal place, classified like the preset
    """
    rng = rng if rng is not None else np.random.default_rng()
    range_min, range_max = get_axis_range_from_type(preset)
    representative = get_axis_value_from_type(preset)
    expected = classify_axis(representative)

    for _ in range(MAX_RANDOM_AXIS_DRAWS):
        value = normalize_angle(round(float(rng.uniform(range_min, range_max)), 1))
        if classify_axis(value) is expected:
            return value

    logger.debug("No in-category draw for preset %r, using %s", preset, representative)
    return representative


# --- Axis From Measurements ---
def validate_qrs_measurements(measurements: QRSMeasurements) -> bool:
    """
    Check that measured QRS values fall within physiological ranges.

    Total QRS duration (Q + S segments) must lie between 60 and 200 ms and no
    amplitude may exceed 20 mm in magnitude.
    """
    total_duration_ms = (measurements.q_duration + measurements.s_duration) * MS_PER_MM
    if total_duration_ms < MIN_QRS_DURATION_MS or total_duration_ms > MAX_QRS_DURATION_MS:
        return False

    amplitudes = (measurements.q_amplitude, measurements.r_amplitude, measurements.s_amplitude)
    if any(abs(amplitude) > MAX_MEASURED_AMPLITUDE_MM for amplitude in amplitudes):
        return False

    return True


def calculate_qrs_area(measurements: QRSMeasurements) -> float:
    """
    Calculate the net area under a QRS complex using triangular approximations.

    The R wave spans the whole complex (Q + S durations); Q and S always count
    as negative area. Wide complexes (>= 120 ms) only contribute their first
    80 ms, which is where the mean vector is best represented.

    Args:
        measurements: QRS measurements for a single lead

    Returns:
        Net area (positive minus negative) in mm^2

    Raises:
        InvalidMeasurementError: If the measurements are not physiological
    """
    if not validate_qrs_measurements(measurements):
        raise InvalidMeasurementError(f"Invalid QRS measurements provided: {measurements!r}")

    q_duration = measurements.q_duration
    s_duration = measurements.s_duration
    q_depth = abs(measurements.q_amplitude)
    s_depth = abs(measurements.s_amplitude)

    q_duration_ms = q_duration * MS_PER_MM
    s_duration_ms = s_duration * MS_PER_MM
    total_duration_ms = q_duration_ms + s_duration_ms

    if total_duration_ms >= WIDE_QRS_THRESHOLD_MS:
        scale_factor = WIDE_QRS_ANALYSIS_WINDOW_MS / total_duration_ms
        q_duration = q_duration * (1.0 if q_duration_ms < WIDE_QRS_ANALYSIS_WINDOW_MS else scale_factor)
        if q_duration_ms >= WIDE_QRS_ANALYSIS_WINDOW_MS or s_duration_ms == 0:
            s_duration = 0.0
        else:
            s_duration = s_duration * scale_factor * (WIDE_QRS_ANALYSIS_WINDOW_MS - q_duration_ms) / s_duration_ms

    q_area = -(q_duration * q_depth) / 2
    r_area = (measurements.r_amplitude * (q_duration + s_duration)) / 2
    s_area = -(s_duration * s_depth) / 2

    return q_area + r_area + s_area


def is_axis_indeterminate(lead_i_area: float, lead_ii_area: float) -> bool:
    return abs(lead_i_area) < INDETERMINATE_AREA_THRESHOLD and abs(lead_ii_area) < INDETERMINATE_AREA_THRESHOLD


def calculate_qrs_axis(lead_i_area: float, lead_ii_area: float) -> Optional[float]:
    """
    Calculate the mean QRS axis from the net areas in Lead I and Lead II.

    Lead II sits at 60°, so the aVF-equivalent component is (2*II - I)/sqrt(3).
    arctan2 resolves the quadrant when Lead I is negative or zero.

    Returns:
        Axis in degrees within (-180, 180], or None if indeterminate
    """
    if is_axis_indeterminate(lead_i_area, lead_ii_area):
        return None

    numerator = 2 * lead_ii_area - lead_i_area
    denominator = math.sqrt(3) * lead_i_area
    axis = math.degrees(math.atan2(numerator, denominator))
    return normalize_angle(axis)


def calculate_axis_from_measurements(
    lead_i: QRSMeasurements,
    lead_ii: QRSMeasurements,
) -> MeasuredAxis:
    """
    Mean QRS axis from manually measured Lead I and Lead II complexes.

    Raises:
        InvalidMeasurementError: If either lead is outside physiological ranges
    """
    lead_i_area = calculate_qrs_area(lead_i)
    lead_ii_area = calculate_qrs_area(lead_ii)
    axis = calculate_qrs_axis(lead_i_area, lead_ii_area)
    logger.debug(
        "Axis from measurements: Lead I area %.2f mm^2, Lead II area %.2f mm^2 -> %s",
        lead_i_area, lead_ii_area, format_axis(axis),
    )
    return MeasuredAxis(axis, classify_axis(axis), lead_i_area, lead_ii_area)
