"""
Clinical validation of axis classification and lead morphology.
Checks the teaching scenarios students are expected to recognise on a 12-lead ECG.
"""
import pytest

from axis_simulator.axis_calculations import classify_axis, get_axis_value_from_type
from axis_simulator.constants import LIMB_LEAD_ANGLES
from axis_simulator.leads.chest_leads import compute_chest_lead_deflections
from axis_simulator.leads.limb_leads import compute_limb_lead_deflections
from axis_simulator.models import AxisClassification, AxisPreset


class TestAxisClassification:
    """Test classification against the standard clinical ranges."""

    @pytest.mark.medical
    @pytest.mark.parametrize("axis,expected", [
        (-30.0, AxisClassification.NORMAL),
        (0.0, AxisClassification.NORMAL),
        (60.0, AxisClassification.NORMAL),
        (90.0, AxisClassification.NORMAL),
        (90.1, AxisClassification.RIGHT),
        (150.0, AxisClassification.RIGHT),
        (180.0, AxisClassification.RIGHT),
        (-180.0, AxisClassification.RIGHT),
        (-30.1, AxisClassification.LEFT),
        (-90.0, AxisClassification.LEFT),
        (-90.1, AxisClassification.EXTREME),
        (-135.0, AxisClassification.EXTREME),
        (None, AxisClassification.INDETERMINATE),
    ])
    def test_classification_boundaries(self, axis, expected):
        assert classify_axis(axis) is expected, f"{axis}° should be {expected.value}"

    @pytest.mark.medical
    def test_wrapped_angles_classify_like_their_normal_form(self):
        assert classify_axis(420) is AxisClassification.NORMAL
        assert classify_axis(-240) is AxisClassification.RIGHT
        assert classify_axis(270) is AxisClassification.LEFT

    @pytest.mark.medical
    @pytest.mark.parametrize("preset,expected", [
        (AxisPreset.NORMAL, AxisClassification.NORMAL),
        (AxisPreset.LEFT, AxisClassification.LEFT),
        (AxisPreset.RIGHT, AxisClassification.RIGHT),
        (AxisPreset.EXTREME, AxisClassification.EXTREME),
    ])
    def test_presets_fall_in_their_category(self, preset, expected):
        assert classify_axis(get_axis_value_from_type(preset)) is expected

    @pytest.mark.medical
    def test_normal_range_reference(self, medical_reference_values):
        low, high = medical_reference_values['normal_axis_range_degrees']
        assert classify_axis(low) is AxisClassification.NORMAL
        assert classify_axis(high) is AxisClassification.NORMAL


class TestLimbLeadScenarios:
    """Test the frontal plane teaching scenarios."""

    @pytest.mark.medical
    def test_normal_axis_lead_ii_dominant(self):
        """Axis +60°: Lead II has the tallest R and the smallest S."""
        lead_set = compute_limb_lead_deflections(60)
        deflections = lead_set.as_dict()

        assert max(deflections, key=lambda lead: deflections[lead].r) == "leadII"
        assert min(deflections, key=lambda lead: abs(deflections[lead].s)) == "leadII"

    @pytest.mark.medical
    def test_normal_axis_avl_isoelectric(self, tolerance_config):
        """Axis +60° is perpendicular to aVL (-30°), so aVL is equiphasic."""
        avl = compute_limb_lead_deflections(60).avl
        assert abs(avl.r - abs(avl.s)) < tolerance_config['amplitude_tolerance_mm']

    @pytest.mark.medical
    def test_extreme_axis_avr_upright(self):
        """Axis -150°: aVR is upright and Lead I is predominantly negative."""
        lead_set = compute_limb_lead_deflections(-150)

        assert lead_set.avr.r > abs(lead_set.avr.s)
        assert abs(lead_set.lead_i.s) > lead_set.lead_i.r

    @pytest.mark.medical
    def test_left_axis_deviation_pattern(self):
        """Axis -45°: Lead I positive, Leads II, III and aVF negative."""
        lead_set = compute_limb_lead_deflections(-45)

        assert lead_set.lead_i.r > abs(lead_set.lead_i.s)
        for lead in (lead_set.lead_iii, lead_set.avf):
            assert abs(lead.s) > lead.r
        assert abs(lead_set.lead_ii.s) >= lead_set.lead_ii.r

    @pytest.mark.medical
    def test_right_axis_deviation_pattern(self):
        """Axis +120°: Lead I negative, Lead III tallest."""
        lead_set = compute_limb_lead_deflections(120)
        deflections = lead_set.as_dict()

        assert abs(lead_set.lead_i.s) > lead_set.lead_i.r
        assert max(deflections, key=lambda lead: deflections[lead].r) == "leadIII"

    @pytest.mark.medical
    @pytest.mark.parametrize("lead", list(LIMB_LEAD_ANGLES))
    def test_axis_along_a_lead_makes_it_tallest(self, lead):
        deflections = compute_limb_lead_deflections(LIMB_LEAD_ANGLES[lead]).as_dict()

        tallest = max(deflections, key=lambda name: deflections[name].r)
        assert tallest == lead, f"Axis along {lead} made {tallest} the tallest lead"

    @pytest.mark.medical
    @pytest.mark.parametrize("axis", [90.0, -90.0])
    def test_lead_i_isoelectric_at_vertical_axis(self, axis, tolerance_config):
        lead_i = compute_limb_lead_deflections(axis).lead_i
        assert abs(lead_i.r + lead_i.s) < tolerance_config['amplitude_tolerance_mm']

    @pytest.mark.medical
    @pytest.mark.parametrize("bad_angle", [float("nan"), None])
    def test_invalid_input_still_renders(self, bad_angle):
        lead_set = compute_limb_lead_deflections(bad_angle)
        assert len(lead_set.as_dict()) == 6


class TestChestLeadScenarios:
    """Test precordial R wave progression."""

    @pytest.mark.medical
    def test_normal_r_wave_progression(self):
        """Axis +60°: R grows strictly and S shrinks strictly from V1 to V6."""
        lead_set = compute_chest_lead_deflections(60)
        leads = [deflection for _, deflection in lead_set.items()]

        for previous, current in zip(leads, leads[1:]):
            assert current.r > previous.r, "R wave should progress across the precordium"
            assert abs(current.s) < abs(previous.s), "S wave should regress across the precordium"

    @pytest.mark.medical
    def test_normal_transition_zone(self):
        """R/S ratio crosses 1 between V2 and V4."""
        lead_set = compute_chest_lead_deflections(60)

        assert lead_set.V1.r < abs(lead_set.V1.s)
        assert lead_set.V4.r > abs(lead_set.V4.s)
        assert lead_set.V6.r > abs(lead_set.V6.s)
