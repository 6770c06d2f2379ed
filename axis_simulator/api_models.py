# axis_simulator/api_models.py
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .models import (
    AxisClassification, AxisPreset, ChestLeadPattern, ChestLeadSet, LimbLeadSet, QRSMeasurements,
)


class LimbLeadParams(BaseModel):
    axis_angle_degrees: float = Field(60.0, description="QRS axis in degrees; any finite value, normalized to (-180, 180].")
    base_amplitude: float = Field(1.0, gt=0, le=10.0, description="Amplitude scale for the limb lead projections.")


class ChestLeadParams(BaseModel):
    axis_angle_degrees: float = Field(60.0, description="QRS axis in degrees; only the normal pattern depends on it.")
    pattern: ChestLeadPattern = Field(ChestLeadPattern.NORMAL, description="Precordial morphology family.")


class TracingParams(BaseModel):
    axis_angle_degrees: float = Field(60.0, description="QRS axis in degrees.")
    base_amplitude: float = Field(1.0, gt=0, le=10.0)
    pattern: ChestLeadPattern = Field(ChestLeadPattern.NORMAL)
    include_chest_leads: bool = Field(True, description="Also return V1-V6 tracings.")
    sampling_rate_hz: int = Field(250, ge=50, le=2000)


class AxisMeasurementParams(BaseModel):
    lead_i: QRSMeasurements
    lead_ii: QRSMeasurements


class LimbLeadResponse(BaseModel):
    axis_degrees: float
    classification: AxisClassification
    deflections: LimbLeadSet


class ChestLeadResponse(BaseModel):
    axis_degrees: float
    pattern: ChestLeadPattern
    deflections: ChestLeadSet


class TracingResponse(BaseModel):
    axis_degrees: float
    classification: AxisClassification
    time_axis: List[float]
    leads: Dict[str, List[float]]


class AxisMeasurementResponse(BaseModel):
    axis_degrees: Optional[float]
    formatted: str
    classification: AxisClassification
    lead_i_area: float
    lead_ii_area: float


class AxisPresetInfo(BaseModel):
    axis_degrees: float
    range: Tuple[float, float]
    classification: AxisClassification


class RandomAxisResponse(BaseModel):
    preset: AxisPreset
    axis_degrees: float
    formatted: str
    classification: AxisClassification
