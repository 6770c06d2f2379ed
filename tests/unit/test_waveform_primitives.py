"""
Tests for waveform primitives and lead tracing generation.
"""
from types import SimpleNamespace

import numpy as np
import pytest

from axis_simulator.constants import TRACING_SAFE_ZONE_MM
from axis_simulator.leads.chest_leads import compute_chest_lead_deflections
from axis_simulator.leads.limb_leads import compute_limb_lead_deflections
from axis_simulator.models import QRSDeflection
from axis_simulator.waveform_primitives import (
    biphasic_hump,
    generate_lead_set_tracings,
    generate_lead_tracing,
    get_tracing_layout,
    qrs_complex,
    quadratic_hump,
)


class TestPrimitives:
    """Test the individual wave shapes."""

    @pytest.mark.unit
    def test_quadratic_hump_peak_and_support(self):
        x = np.linspace(0, 10, 101)
        hump = quadratic_hump(x, 2.0, 4.0, 3.0)

        assert hump[30] == pytest.approx(3.0), "Peak should sit at the midpoint"
        assert np.all(hump[x < 2.0] == 0)
        assert np.all(hump[x > 4.0] == 0)

    @pytest.mark.unit
    def test_degenerate_hump_is_flat(self):
        x = np.linspace(0, 10, 11)
        assert np.all(quadratic_hump(x, 5.0, 5.0, 2.0) == 0)

    @pytest.mark.unit
    def test_biphasic_hump(self):
        x = np.linspace(0, 4, 401)
        wave = biphasic_hump(x, 0.0, 4.0, 1.0)

        assert wave.max() == pytest.approx(1.0)
        assert wave.min() == pytest.approx(-1.0)
        assert np.argmax(wave) < np.argmin(wave), "Positive phase comes first"

    @pytest.mark.unit
    def test_qrs_complex_hits_apices(self):
        x = np.linspace(0, 4, 401)
        deflection = QRSDeflection(q=-1.0, r=6.0, s=-2.5)
        signal = qrs_complex(x, 1.0, 2.0, deflection)

        assert signal[140] == pytest.approx(-1.0)   # x = 1.4
        assert signal[200] == pytest.approx(6.0)    # x = 2.0
        assert signal[260] == pytest.approx(-2.5)   # x = 2.6
        assert signal[50] == 0.0 and signal[350] == 0.0


class TestLeadTracing:
    """Test single lead tracings."""

    @pytest.mark.unit
    def test_layout_is_centered_and_ordered(self):
        layout = get_tracing_layout()

        assert layout["p_start"] == pytest.approx(8.4375)
        assert layout["qrs_start"] == pytest.approx(14.4375)
        assert layout["t_start"] == pytest.approx(18.6875)
        assert layout["p_end"] < layout["qrs_start"] < layout["qrs_end"] < layout["t_start"] < layout["t_end"]

    @pytest.mark.unit
    def test_tracing_length(self):
        time_axis, signal = generate_lead_tracing("II", QRSDeflection(r=5.0, s=-1.0))

        assert len(time_axis) == len(signal)
        assert abs(len(signal) - 480) <= 1, "48 mm at 25 mm/s sampled at 250 Hz"
        assert time_axis[0] == 0.0

    @pytest.mark.unit
    def test_qrs_amplitudes_preserved(self, tolerance_config):
        """At 2000 Hz the R and S apices fall exactly on samples."""
        deflection = compute_limb_lead_deflections(60).lead_ii
        time_axis, signal = generate_lead_tracing("leadII", deflection, fs=2000)
        layout = get_tracing_layout()

        x_mm = time_axis * 25
        window = (x_mm >= layout["qrs_start"]) & (x_mm <= layout["qrs_end"])
        tol = tolerance_config['tracing_tolerance_mm']

        assert abs(signal[window].max() - deflection.r) < tol
        assert abs(signal[window].min() - deflection.s) < tol

    @pytest.mark.unit
    def test_signal_clamped_to_safe_zone(self):
        _, signal = generate_lead_tracing("I", QRSDeflection(r=30.0, s=-30.0))

        assert signal.max() == TRACING_SAFE_ZONE_MM
        assert signal.min() == -TRACING_SAFE_ZONE_MM

    @pytest.mark.unit
    def test_inverted_avr_waves(self):
        _, signal = generate_lead_tracing("aVR", QRSDeflection(r=0.5, s=-4.0), fs=1000)
        layout = get_tracing_layout()
        x_mm = np.arange(len(signal)) / 1000 * 25

        t_window = (x_mm > layout["t_start"]) & (x_mm < layout["t_end"])
        assert signal[t_window].min() < -2.5, "aVR should have an inverted T wave"

    @pytest.mark.unit
    def test_chest_leads_flat_outside_qrs(self):
        _, signal = generate_lead_tracing("V3", QRSDeflection(q=-1.0, r=4.0, s=-3.0), fs=1000)
        layout = get_tracing_layout()
        x_mm = np.arange(len(signal)) / 1000 * 25

        outside = (x_mm < layout["qrs_start"]) | (x_mm > layout["qrs_end"])
        assert np.all(signal[outside] == 0)


class TestLeadSetTracings:
    """Test tracing whole lead sets."""

    @pytest.mark.unit
    def test_limb_set_uses_display_names(self):
        time_axis, tracings = generate_lead_set_tracings(compute_limb_lead_deflections(60))

        assert list(tracings) == ["I", "II", "III", "aVR", "aVL", "aVF"]
        assert all(len(signal) == len(time_axis) for signal in tracings.values())

    @pytest.mark.unit
    def test_chest_set(self):
        _, tracings = generate_lead_set_tracings(compute_chest_lead_deflections(60), fs=500)
        assert list(tracings) == ["V1", "V2", "V3", "V4", "V5", "V6"]

    @pytest.mark.unit
    def test_unknown_kind_rejected(self):
        with pytest.raises(TypeError):
            generate_lead_set_tracings(SimpleNamespace(kind="horizontal"))
