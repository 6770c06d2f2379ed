# axis_simulator/waveform_primitives.py
import logging
from typing import Dict, Tuple, Union

import numpy as np

from .constants import (
    BIPHASIC_P_WAVE_LEADS, FS, LIMB_LEAD_DISPLAY_NAMES, LIMB_P_WAVE_MM, LIMB_T_WAVE_MM,
    PAPER_SPEED_MM_PER_SEC, QRS_APEX_POSITIONS, TRACING_SAFE_ZONE_MM, TRACING_TIMING_MM,
    TRACING_WIDTH_MM,
)
from .models import ChestLeadSet, LimbLeadSet, QRSDeflection

logger = logging.getLogger(__name__)


# --- Waveform Primitives ---
def quadratic_hump(x_points, start, end, amplitude):
    """Parabolic hump between start and end peaking at amplitude (a quadratic Bezier arc)."""
    if end - start <= 1e-9: return np.zeros_like(x_points)
    u = (x_points - start) / (end - start)
    mask = (u >= 0) & (u <= 1)
    hump = np.zeros_like(x_points)
    hump[mask] = amplitude * 4 * u[mask] * (1 - u[mask])
    return hump


def biphasic_hump(x_points, start, end, amplitude):
    """Positive half-hump followed by a negative half-hump of the same size."""
    midpoint = (start + end) / 2
    return quadratic_hump(x_points, start, midpoint, amplitude) + quadratic_hump(x_points, midpoint, end, -amplitude)


def qrs_complex(x_points, start, width, deflection: QRSDeflection):
    """
    Piecewise linear QRS: baseline -> Q apex -> R apex -> S apex -> baseline.

    Straight segments keep the sharp, clinical look of a QRS and preserve the
    calculated amplitudes exactly at the apices.
    """
    knots_x = [
        start,
        start + width * QRS_APEX_POSITIONS["q"],
        start + width * QRS_APEX_POSITIONS["r"],
        start + width * QRS_APEX_POSITIONS["s"],
        start + width,
    ]
    knots_y = [0.0, deflection.q, deflection.r, deflection.s, 0.0]
    mask = (x_points >= start) & (x_points <= start + width)
    complex_signal = np.zeros_like(x_points)
    complex_signal[mask] = np.interp(x_points[mask], knots_x, knots_y)
    return complex_signal


# --- Lead Tracing ---
def get_tracing_layout() -> Dict[str, float]:
    """Start positions (mm of paper) of each tracing segment."""
    timing = TRACING_TIMING_MM
    total_width = sum(timing.values())
    p_start = (TRACING_WIDTH_MM - total_width) / 4
    p_end = p_start + timing["p_width"]
    qrs_start = p_end + timing["pr_interval"]
    qrs_end = qrs_start + timing["qrs_width"]
    t_start = qrs_end + timing["st_segment"]
    t_end = t_start + timing["t_width"]
    return {
        "p_start": p_start, "p_end": p_end,
        "qrs_start": qrs_start, "qrs_end": qrs_end,
        "t_start": t_start, "t_end": t_end,
    }


def generate_lead_tracing(lead_name: str, deflection: QRSDeflection, fs: int = FS) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build one beat of a lead tracing from its QRS deflection.

    The window is 48 mm of paper at 25 mm/s. P and T waves use the fixed
    per-lead heights of the limb leads; leads without constants (the chest
    leads) keep a flat baseline there. All samples are clamped to the safe
    display zone.

    Args:
        lead_name: Lead display name ("I", "aVL", "V3", ...) or limb set key ("leadI", ...)
        deflection: QRS deflection for the lead
        fs: Sampling frequency in Hz

    Returns:
        (time_axis in seconds, signal in mm)
    """
    lead = LIMB_LEAD_DISPLAY_NAMES.get(lead_name, lead_name)
    duration_sec = TRACING_WIDTH_MM / PAPER_SPEED_MM_PER_SEC
    num_samples = int(duration_sec * fs)
    time_axis = np.linspace(0, duration_sec, num_samples, endpoint=False)
    x_mm = time_axis * PAPER_SPEED_MM_PER_SEC

    layout = get_tracing_layout()
    signal = np.zeros(num_samples)

    if lead in BIPHASIC_P_WAVE_LEADS:
        signal += biphasic_hump(x_mm, layout["p_start"], layout["p_end"], BIPHASIC_P_WAVE_LEADS[lead])
    else:
        signal += quadratic_hump(x_mm, layout["p_start"], layout["p_end"], LIMB_P_WAVE_MM.get(lead, 0.0))

    signal += qrs_complex(x_mm, layout["qrs_start"], TRACING_TIMING_MM["qrs_width"], deflection)
    signal += quadratic_hump(x_mm, layout["t_start"], layout["t_end"], LIMB_T_WAVE_MM.get(lead, 0.0))

    np.clip(signal, -TRACING_SAFE_ZONE_MM, TRACING_SAFE_ZONE_MM, out=signal)
    return time_axis, signal


def generate_lead_set_tracings(
    lead_set: Union[LimbLeadSet, ChestLeadSet],
    fs: int = FS,
) -> Tuple[np.ndarray, Dict[str, np.ndarray]]:
    """Tracings for every lead of a limb or chest set, keyed by display name."""
    if lead_set.kind == "limb":
        names = LIMB_LEAD_DISPLAY_NAMES
    elif lead_set.kind == "chest":
        names = {}
    else:
        raise TypeError(f"Unsupported lead set kind: {lead_set.kind!r}")

    time_axis = None
    tracings: Dict[str, np.ndarray] = {}
    for key, deflection in lead_set.items():
        display_name = names.get(key, key)
        time_axis, tracings[display_name] = generate_lead_tracing(display_name, deflection, fs)
    return time_axis, tracings
