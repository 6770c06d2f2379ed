# axis_simulator/constants.py
from typing import Dict, Tuple

# --- Hexaxial Reference System ---
# Frontal plane lead angles in degrees. 0° points along Lead I, angles increase
# counterclockwise toward the inferior leads (90° = aVF).
LIMB_LEAD_ANGLES: Dict[str, float] = {
    "leadI": 0.0,
    "leadII": 60.0,
    "leadIII": 120.0,
    "aVR": -150.0,
    "aVL": -30.0,
    "aVF": 90.0,
}

# Display names used on tracings, keyed the same way as LIMB_LEAD_ANGLES
LIMB_LEAD_DISPLAY_NAMES: Dict[str, str] = {
    "leadI": "I",
    "leadII": "II",
    "leadIII": "III",
    "aVR": "aVR",
    "aVL": "aVL",
    "aVF": "aVF",
}

# --- Precordial Progression ---
# Conceptual right-to-left placement across the chest wall (not a true angle)
CHEST_LEADS: Tuple[str, ...] = ("V1", "V2", "V3", "V4", "V5", "V6")
CHEST_LEAD_PROGRESSION: Dict[str, float] = {
    "V1": 0.0,
    "V2": 0.2,
    "V3": 0.4,
    "V4": 0.6,
    "V5": 0.8,
    "V6": 1.0,
}

# Band edges of the precordial morphology recipes
RIGHT_PRECORDIAL_LIMIT = 0.2   # V1-V2
TRANSITION_ZONE_LIMIT = 0.6    # V3-V4, everything beyond is V5-V6
TRANSITION_ZONE_WIDTH = TRANSITION_ZONE_LIMIT - RIGHT_PRECORDIAL_LIMIT
LEFT_PRECORDIAL_WIDTH = 1.0 - TRANSITION_ZONE_LIMIT

CHEST_BASE_AMPLITUDE_MM = 10.0
CHEST_AXIS_REFERENCE_DEGREES = 60.0
CHEST_AXIS_MODULATION_GAIN = 0.3

# --- Amplitude Ceilings (mm) ---
# Shared by both engines: the limb engine caps the largest single component
# across all six leads, the chest engine caps |q| + r + |s| per lead.
MAX_DEFLECTION_MM = 9.0

# --- Limb Lead Projection Parameters ---
LIMB_AMPLITUDE_GAIN = 1.8           # base amplitude -> amplified base
LIMB_TOTAL_AMPLITUDE_FACTOR = 3.0   # amplified base -> R+S budget
R_FRACTION_ALIGNED = 0.9            # R share at 0° difference
S_FRACTION_ALIGNED = 0.1            # S share at 0° difference
FRACTION_SWING = 0.8                # share moved from R to S between 0° and 180°

PERPENDICULAR_DEGREES = 90.0
PERPENDICULAR_TOLERANCE_DEGREES = 5.0
PERPENDICULAR_SPLIT_FACTOR = 1.5    # r = |s| = 1.5 x amplified base

ALIGNED_BOOST_DEGREES = 15.0
OPPOSED_BOOST_DEGREES = 165.0
DOMINANT_BOOST = 1.2
RECESSIVE_DAMPING = 0.8

# Clinical minimum magnitudes so near-isoelectric leads stay visible.
# Q waves are omitted from limb leads for teaching clarity.
MIN_LIMB_VALUES: Dict[str, float] = {
    "q": 0.0,
    "r": 0.3,
    "s": 0.15,
}

# Substitutes for non-finite values
FALLBACK_DEFLECTION: Dict[str, float] = {
    "q": 0.0,
    "r": 1.0,
    "s": -0.5,
}
DEFAULT_AXIS_DEGREES = 0.0
DEFAULT_BASE_AMPLITUDE = 1.0

# --- Axis Classification ---
# (min, max) in degrees; the open/closed treatment of each edge lives in
# axis_calculations.classify_axis
AXIS_RANGES: Dict[str, Tuple[float, float]] = {
    "normal": (-30.0, 90.0),
    "left": (-90.0, -30.0),
    "right": (90.0, 180.0),
    "extreme": (-180.0, -90.0),
}

# Representative values for the preset buttons
AXIS_VALUES: Dict[str, float] = {
    "normal": 60.0,
    "left": -45.0,
    "right": 120.0,
    "extreme": -135.0,
}

# Redraws allowed before a random preset axis falls back to the representative value
MAX_RANDOM_AXIS_DRAWS = 100

# --- Axis From Measurements ---
MS_PER_MM = 40.0                    # 25 mm/s paper speed
MIN_QRS_DURATION_MS = 60.0
MAX_QRS_DURATION_MS = 200.0
MAX_MEASURED_AMPLITUDE_MM = 20.0
WIDE_QRS_THRESHOLD_MS = 120.0
WIDE_QRS_ANALYSIS_WINDOW_MS = 80.0
INDETERMINATE_AREA_THRESHOLD = 0.5  # mm^2

# --- Tracing Geometry ---
FS = 250
PAPER_SPEED_MM_PER_SEC = 25.0
TRACING_WIDTH_MM = 48.0
TRACING_SAFE_ZONE_MM = 12.0

# Segment widths in mm of paper (1 mm = 40 ms)
TRACING_TIMING_MM: Dict[str, float] = {
    "p_width": 2.0,      # 80 ms
    "pr_interval": 4.0,  # 160 ms
    "qrs_width": 2.25,   # 90 ms
    "st_segment": 2.0,   # 80 ms
    "t_width": 4.0,      # 160 ms
}

# Relative positions of the Q, R and S apices inside the QRS window
QRS_APEX_POSITIONS: Dict[str, float] = {"q": 0.2, "r": 0.5, "s": 0.8}

# Per-lead P and T wave heights in mm. aVL carries a biphasic P wave.
# Chest leads have no P/T constants and render a flat baseline there.
LIMB_P_WAVE_MM: Dict[str, float] = {
    "I": 1.5, "II": 2.0, "III": 1.0, "aVR": -1.5, "aVL": 0.0, "aVF": 2.0,
}
BIPHASIC_P_WAVE_LEADS: Dict[str, float] = {"aVL": 1.0}
LIMB_T_WAVE_MM: Dict[str, float] = {
    "I": 3.0, "II": 4.0, "III": 2.5, "aVR": -3.0, "aVL": -1.5, "aVF": 3.5,
}

# --- Deflection Cache ---
DEFAULT_CACHE_SIZE = 360
DEFAULT_ANGLE_RESOLUTION = 1.0
