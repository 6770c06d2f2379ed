# axis_simulator/leads/limb_leads.py
"""
Limb lead deflection engine.

Projects a frontal plane QRS axis onto the six hexaxial leads and turns each
projection into an R/S amplitude pair. Every lead, including III, aVR, aVL and
aVF, is projected directly from the axis rather than derived from Leads I and
II through Einthoven's law.

All functions are pure and fail-soft: invalid numbers degrade to safe defaults
instead of raising.
"""
import logging
from typing import Any, Dict

from ..axis_calculations import is_valid_number, normalize_angle
from ..constants import (
    ALIGNED_BOOST_DEGREES, DEFAULT_AXIS_DEGREES, DEFAULT_BASE_AMPLITUDE, DOMINANT_BOOST,
    FALLBACK_DEFLECTION, FRACTION_SWING, LIMB_AMPLITUDE_GAIN, LIMB_LEAD_ANGLES,
    LIMB_TOTAL_AMPLITUDE_FACTOR, MAX_DEFLECTION_MM, MIN_LIMB_VALUES, OPPOSED_BOOST_DEGREES,
    PERPENDICULAR_DEGREES, PERPENDICULAR_SPLIT_FACTOR, PERPENDICULAR_TOLERANCE_DEGREES,
    R_FRACTION_ALIGNED, RECESSIVE_DAMPING, S_FRACTION_ALIGNED,
)
from ..models import LimbLeadSet, QRSDeflection

logger = logging.getLogger(__name__)


def _sanitize_amplitude(value: Any) -> float:
    if not is_valid_number(value) or value <= 0:
        logger.debug("Invalid base amplitude %r, using %s", value, DEFAULT_BASE_AMPLITUDE)
        return DEFAULT_BASE_AMPLITUDE
    return float(value)


def _sanitize_angle(value: Any) -> float:
    if not is_valid_number(value):
        logger.debug("Invalid axis angle %r, using %s", value, DEFAULT_AXIS_DEGREES)
        return DEFAULT_AXIS_DEGREES
    return float(value)


def _sanitize_deflection(deflection: QRSDeflection) -> QRSDeflection:
    q, r, s = deflection.q, deflection.r, deflection.s
    if is_valid_number(q) and is_valid_number(r) and is_valid_number(s):
        return deflection
    logger.debug("Replacing non-finite deflection %r with fallbacks", deflection)
    return QRSDeflection(
        q=q if is_valid_number(q) else FALLBACK_DEFLECTION["q"],
        r=r if is_valid_number(r) else FALLBACK_DEFLECTION["r"],
        s=s if is_valid_number(s) else FALLBACK_DEFLECTION["s"],
    )


def compute_single_lead_deflection(
    axis_angle: float,
    lead_angle: float,
    base_amplitude: float = DEFAULT_BASE_AMPLITUDE,
) -> QRSDeflection:
    """
    Generate the QRS deflection of one limb lead for a given QRS axis.

    A fixed R+S amplitude budget is redistributed linearly with the angular
    distance between axis and lead: aligned leads get 90% of it as R, opposed
    leads get 90% of it as S (a QS-like complex). Exactly perpendicular leads
    (within 5°) get an equal R/S split so they read as isoelectric, and leads
    within 15° of full alignment or opposition are sharpened further.

    Args:
        axis_angle: QRS axis in degrees
        lead_angle: Hexaxial angle of the lead in degrees
        base_amplitude: Amplitude scale, must be positive

    Returns:
        QRSDeflection with q fixed at 0
    """
    axis_angle = _sanitize_angle(axis_angle)
    lead_angle = _sanitize_angle(lead_angle)
    base_amplitude = _sanitize_amplitude(base_amplitude)

    amplified_base = base_amplitude * LIMB_AMPLITUDE_GAIN
    total_amplitude = LIMB_TOTAL_AMPLITUDE_FACTOR * amplified_base

    abs_angle_diff = abs(normalize_angle(lead_angle - axis_angle))
    angle_proportion = abs_angle_diff / 180.0  # 0 = aligned, 1 = opposed

    r_amp = total_amplitude * (R_FRACTION_ALIGNED - FRACTION_SWING * angle_proportion)
    s_amp = -(total_amplitude * (S_FRACTION_ALIGNED + FRACTION_SWING * angle_proportion))

    if abs(abs_angle_diff - PERPENDICULAR_DEGREES) < PERPENDICULAR_TOLERANCE_DEGREES:
        r_amp = PERPENDICULAR_SPLIT_FACTOR * amplified_base
        s_amp = -PERPENDICULAR_SPLIT_FACTOR * amplified_base

    if abs_angle_diff < ALIGNED_BOOST_DEGREES:
        r_amp *= DOMINANT_BOOST
        s_amp *= RECESSIVE_DAMPING
    if abs_angle_diff > OPPOSED_BOOST_DEGREES:
        r_amp *= RECESSIVE_DAMPING
        s_amp *= DOMINANT_BOOST

    return _sanitize_deflection(QRSDeflection(q=0.0, r=r_amp, s=s_amp))


def apply_minimum_values(deflections: Dict[str, QRSDeflection]) -> Dict[str, QRSDeflection]:
    """
    Force q to zero and lift small nonzero R/S values to their clinical floor.

    Sign is preserved and exact zeros stay zero, so a lead keeps a thin but
    visible complex even when it is nearly isoelectric.
    """
    floored: Dict[str, QRSDeflection] = {}
    for lead, deflection in deflections.items():
        components = {"q": 0.0}
        for component in ("r", "s"):
            value = getattr(deflection, component)
            minimum = MIN_LIMB_VALUES[component]
            if value != 0 and abs(value) < minimum:
                value = minimum if value > 0 else -minimum
            components[component] = value
        floored[lead] = QRSDeflection(**components)
    return floored


def normalize_limb_lead_deflections(deflections: Dict[str, QRSDeflection]) -> Dict[str, QRSDeflection]:
    """
    Scale all limb leads by one shared factor so the largest component is at
    most MAX_DEFLECTION_MM.

    A shared factor keeps the six tracings comparable with each other. Non-finite
    components are replaced with fallbacks before the maximum is taken.
    """
    sanitized = {lead: _sanitize_deflection(deflection) for lead, deflection in deflections.items()}

    max_abs_value = max((deflection.max_component for deflection in sanitized.values()), default=0.0)
    if max_abs_value <= MAX_DEFLECTION_MM:
        return sanitized

    scale_factor = MAX_DEFLECTION_MM / max_abs_value
    return {lead: deflection.scaled(scale_factor) for lead, deflection in sanitized.items()}


def compute_limb_lead_deflections(
    axis_angle_degrees: Any = DEFAULT_AXIS_DEGREES,
    base_amplitude: Any = DEFAULT_BASE_AMPLITUDE,
) -> LimbLeadSet:
    """
    Calculate the QRS deflections for all six limb leads from a QRS axis.

    Args:
        axis_angle_degrees: QRS axis in degrees; None or non-finite values act as 0°
        base_amplitude: Positive amplitude scale; invalid values act as 1.0

    Returns:
        LimbLeadSet with q == 0 on every lead, r >= 0, s <= 0 and no component
        larger than MAX_DEFLECTION_MM
    """
    axis_angle = normalize_angle(_sanitize_angle(axis_angle_degrees))
    base_amplitude = _sanitize_amplitude(base_amplitude)

    projected = {
        lead: compute_single_lead_deflection(axis_angle, lead_angle, base_amplitude)
        for lead, lead_angle in LIMB_LEAD_ANGLES.items()
    }
    floored = apply_minimum_values(projected)
    normalized = normalize_limb_lead_deflections(floored)

    return LimbLeadSet(**normalized)
