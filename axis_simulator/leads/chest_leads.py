# axis_simulator/leads/chest_leads.py
"""
Chest lead deflection engine.

Precordial morphology is modelled as a position along the V1 -> V6 progression
(0 = V1, 1 = V6) split into three bands: right precordial (V1-V2), transition
zone (V3-V4) and left precordial (V5-V6). Each pattern interpolates Q/R/S
fractions of the base amplitude linearly inside those bands.
"""
import logging
import math
from typing import Any, Dict, Tuple, Union

from ..axis_calculations import is_valid_number, normalize_angle
from ..constants import (
    CHEST_AXIS_MODULATION_GAIN, CHEST_AXIS_REFERENCE_DEGREES, CHEST_BASE_AMPLITUDE_MM,
    CHEST_LEAD_PROGRESSION, DEFAULT_AXIS_DEGREES, LEFT_PRECORDIAL_WIDTH, MAX_DEFLECTION_MM,
    RIGHT_PRECORDIAL_LIMIT, TRANSITION_ZONE_LIMIT, TRANSITION_ZONE_WIDTH,
)
from ..models import ChestLeadPattern, ChestLeadSet, QRSDeflection

logger = logging.getLogger(__name__)

# (r, s, q) fractions of the base amplitude
Fractions = Tuple[float, float, float]


def _normal_fractions(position: float) -> Fractions:
    # R progressively grows and S shrinks from V1 to V6
    if position <= RIGHT_PRECORDIAL_LIMIT:
        return 0.2 * (1 + position * 2), -(0.8 - position * 0.5), -0.05
    if position <= TRANSITION_ZONE_LIMIT:
        tf = (position - RIGHT_PRECORDIAL_LIMIT) / TRANSITION_ZONE_WIDTH
        return 0.4 + tf * 0.4, -(0.7 - tf * 0.5), -(0.05 + tf * 0.1)
    lf = (position - TRANSITION_ZONE_LIMIT) / LEFT_PRECORDIAL_WIDTH
    return 0.8 + lf * 0.1, -(0.2 - lf * 0.15), -(0.15 + lf * 0.05)


def _lvh_fractions(position: float) -> Fractions:
    if position <= RIGHT_PRECORDIAL_LIMIT:
        return 0.2, -0.9, -0.05
    if position <= TRANSITION_ZONE_LIMIT:
        tf = (position - RIGHT_PRECORDIAL_LIMIT) / TRANSITION_ZONE_WIDTH
        return 0.2 + tf * 0.8, -(0.9 - tf * 0.4), -(0.05 + tf * 0.15)
    # Tall lateral R waves with deep Q
    return 1.5, -0.2, -0.25


def _rvh_fractions(position: float) -> Fractions:
    if position <= RIGHT_PRECORDIAL_LIMIT:
        return 0.8, -0.4, -0.05  # dominant R in V1
    if position <= TRANSITION_ZONE_LIMIT:
        tf = (position - RIGHT_PRECORDIAL_LIMIT) / TRANSITION_ZONE_WIDTH
        return 0.8 - tf * 0.4, -(0.4 + tf * 0.3), -0.05
    # Persistent lateral S waves
    return 0.4, -0.7, -0.05


def _anterior_infarct_fractions(position: float) -> Fractions:
    if position <= TRANSITION_ZONE_LIMIT:
        return 0.1, -0.9, -0.3  # QS through V1-V4
    lf = (position - TRANSITION_ZONE_LIMIT) / LEFT_PRECORDIAL_WIDTH
    return 0.1 + lf * 0.7, -(0.9 - lf * 0.7), -(0.3 - lf * 0.2)


def _lateral_infarct_fractions(position: float) -> Fractions:
    if position <= TRANSITION_ZONE_LIMIT:
        return _normal_fractions(position)
    # Loss of lateral R with pathological Q in V5-V6
    lf = (position - TRANSITION_ZONE_LIMIT) / LEFT_PRECORDIAL_WIDTH
    return 0.8 - lf * 0.5, -(0.2 + lf * 0.2), -(0.15 + lf * 0.15)


def _rbbb_fractions(position: float) -> Fractions:
    if position <= RIGHT_PRECORDIAL_LIMIT:
        return 0.9, -0.5, -0.05  # RSR' simplified to an exaggerated R
    if position <= TRANSITION_ZONE_LIMIT:
        tf = (position - RIGHT_PRECORDIAL_LIMIT) / TRANSITION_ZONE_WIDTH
        return 0.9 - tf * 0.3, -(0.5 + tf * 0.2), -(0.05 + tf * 0.1)
    # Wide lateral S
    return 0.6, -0.7, -0.15


def _lbbb_fractions(position: float) -> Fractions:
    if position <= RIGHT_PRECORDIAL_LIMIT:
        return 0.1, -0.9, -0.2
    if position <= TRANSITION_ZONE_LIMIT:
        tf = (position - RIGHT_PRECORDIAL_LIMIT) / TRANSITION_ZONE_WIDTH
        return 0.1 + tf * 0.7, -(0.9 - tf * 0.7), -0.2
    # Tall lateral R with almost no S
    return 1.2, -0.1, -0.2


PATTERN_FRACTIONS = {
    ChestLeadPattern.NORMAL: _normal_fractions,
    ChestLeadPattern.LEFT_VENTRICULAR_HYPERTROPHY: _lvh_fractions,
    ChestLeadPattern.RIGHT_VENTRICULAR_HYPERTROPHY: _rvh_fractions,
    ChestLeadPattern.ANTERIOR_INFARCT: _anterior_infarct_fractions,
    ChestLeadPattern.LATERAL_INFARCT: _lateral_infarct_fractions,
    ChestLeadPattern.RBBB: _rbbb_fractions,
    ChestLeadPattern.LBBB: _lbbb_fractions,
}


def resolve_pattern(pattern: Union[ChestLeadPattern, str, None]) -> ChestLeadPattern:
    """Coerce a pattern or its string value; anything unrecognised becomes NORMAL."""
    if isinstance(pattern, ChestLeadPattern):
        return pattern
    try:
        return ChestLeadPattern(pattern)
    except ValueError:
        logger.debug("Unknown chest lead pattern %r, using normal", pattern)
        return ChestLeadPattern.NORMAL


def generate_chest_lead_deflection(
    position: float,
    axis_angle: float,
    pattern: Union[ChestLeadPattern, str] = ChestLeadPattern.NORMAL,
    base_amplitude: float = CHEST_BASE_AMPLITUDE_MM,
) -> QRSDeflection:
    """
    Generate the QRS deflection of a chest lead at a point in the V1-V6 progression.

    Only the normal pattern is coupled to the frontal plane axis, through a
    factor of 1 + cos(axis - 60°) * position * 0.3. This borrows the frontal
    axis to approximate a horizontal plane effect and is kept as a known
    simplification.

    Args:
        position: Progression position between 0 (V1) and 1 (V6)
        axis_angle: QRS axis in degrees
        pattern: Morphology family to generate
        base_amplitude: Amplitude that the pattern fractions are applied to

    Returns:
        QRSDeflection clamped to q in [-A, 0], r in [0, 2A], s in [-2A, 0]
    """
    if not is_valid_number(position):
        position = 0.0
    position = min(1.0, max(0.0, float(position)))
    if not is_valid_number(axis_angle):
        axis_angle = DEFAULT_AXIS_DEGREES
    if not is_valid_number(base_amplitude) or base_amplitude <= 0:
        base_amplitude = CHEST_BASE_AMPLITUDE_MM

    pattern = resolve_pattern(pattern)
    r_fraction, s_fraction, q_fraction = PATTERN_FRACTIONS[pattern](position)
    r = base_amplitude * r_fraction
    s = base_amplitude * s_fraction
    q = base_amplitude * q_fraction

    if pattern is ChestLeadPattern.NORMAL:
        axis_effect = math.cos(math.radians(axis_angle - CHEST_AXIS_REFERENCE_DEGREES))
        axis_scale_factor = 1 + axis_effect * position * CHEST_AXIS_MODULATION_GAIN
        r *= axis_scale_factor
        s *= axis_scale_factor
        q *= axis_scale_factor

    q = max(-base_amplitude, min(0.0, q))
    r = max(0.0, min(base_amplitude * 2, r))
    s = max(-base_amplitude * 2, min(0.0, s))

    return QRSDeflection(q=q, r=r, s=s)


def normalize_chest_lead_deflections(deflections: Dict[str, QRSDeflection]) -> Dict[str, QRSDeflection]:
    """
    Scale each chest lead on its own so |q| + r + |s| stays within MAX_DEFLECTION_MM.

    Unlike the limb leads there is no shared factor: R wave progression means
    chest leads are expected to differ in absolute size.
    """
    normalized: Dict[str, QRSDeflection] = {}
    for lead, deflection in deflections.items():
        total_magnitude = deflection.total_magnitude
        if total_magnitude > MAX_DEFLECTION_MM:
            deflection = deflection.scaled(MAX_DEFLECTION_MM / total_magnitude)
        normalized[lead] = deflection
    return normalized


def compute_chest_lead_deflections(
    axis_angle_degrees: Any = DEFAULT_AXIS_DEGREES,
    pattern: Union[ChestLeadPattern, str] = ChestLeadPattern.NORMAL,
) -> ChestLeadSet:
    """
    Calculate the QRS deflections for V1-V6 from a QRS axis and a morphology pattern.

    Args:
        axis_angle_degrees: QRS axis in degrees; None or non-finite values act as 0°
        pattern: ChestLeadPattern or its string value; unknown values act as normal

    Returns:
        ChestLeadSet where every lead satisfies |q| + r + |s| <= MAX_DEFLECTION_MM
    """
    if not is_valid_number(axis_angle_degrees):
        logger.debug("Invalid axis angle %r, using %s", axis_angle_degrees, DEFAULT_AXIS_DEGREES)
        axis_angle_degrees = DEFAULT_AXIS_DEGREES
    axis_angle = normalize_angle(axis_angle_degrees)
    pattern = resolve_pattern(pattern)

    deflections = {
        lead: generate_chest_lead_deflection(position, axis_angle, pattern)
        for lead, position in CHEST_LEAD_PROGRESSION.items()
    }
    return ChestLeadSet(**normalize_chest_lead_deflections(deflections))
