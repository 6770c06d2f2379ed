"""
Pytest configuration and shared fixtures for axis simulator tests.
"""
import pytest

from axis_simulator.cache import DeflectionCache
from axis_simulator.config import get_settings
from axis_simulator.models import QRSMeasurements


@pytest.fixture
def tolerance_config():
    """Standard tolerance values for numerical comparisons."""
    return {
        'amplitude_tolerance_mm': 1e-6,    # engine output is deterministic
        'tracing_tolerance_mm': 1e-6,      # apex samples land on the knots
        'axis_tolerance_degrees': 0.5,     # axis recovered from measurements
        'max_deflection_mm': 9.0,
    }


@pytest.fixture
def medical_reference_values():
    """Reference values for clinical validation."""
    return {
        'normal_axis_range_degrees': (-30, 90),
        'left_axis_range_degrees': (-90, -30),
        'right_axis_range_degrees': (90, 180),
        'normal_qrs_duration_ms': (60, 120),
        'isoelectric_tolerance_degrees': 5.0,
    }


@pytest.fixture
def all_axis_angles():
    """Frontal plane angles sampled every 7.5° around the full circle."""
    return [-180.0 + 7.5 * i for i in range(49)]


@pytest.fixture
def deflection_cache():
    """Small fresh cache so eviction is easy to observe."""
    return DeflectionCache(max_entries=8, angle_resolution=1.0)


@pytest.fixture
def normal_lead_i_measurements():
    """Upright Lead I complex: small Q, tall R, small S, 80 ms total."""
    return QRSMeasurements(q_duration=1.0, q_amplitude=1.0, r_amplitude=10.0, s_amplitude=2.0, s_duration=1.0)


@pytest.fixture
def negative_lead_i_measurements():
    """Mostly negative Lead I complex (deep S)."""
    return QRSMeasurements(q_duration=1.0, q_amplitude=0.0, r_amplitude=1.0, s_amplitude=10.0, s_duration=1.0)


@pytest.fixture
def small_lead_measurements():
    """Near isoelectric complex with a net area well below 0.5 mm^2."""
    return QRSMeasurements(q_duration=1.0, q_amplitude=0.0, r_amplitude=0.2, s_amplitude=0.0, s_duration=1.0)


@pytest.fixture
def clean_settings(monkeypatch):
    """Clear AXIS_SIM_* variables and the cached settings around a test."""
    import os
    for name in list(os.environ):
        if name.startswith("AXIS_SIM_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
