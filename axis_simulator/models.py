# axis_simulator/models.py
"""
Value types shared by the deflection engines, the tracing builder and the API.

Every model is frozen: engines build new instances instead of mutating the
ones they were handed, so results can be cached and shared safely.
"""
from enum import Enum
from typing import Annotated, Dict, Iterator, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class ChestLeadPattern(str, Enum):
    NORMAL = "normal"
    LEFT_VENTRICULAR_HYPERTROPHY = "lvh"
    RIGHT_VENTRICULAR_HYPERTROPHY = "rvh"
    ANTERIOR_INFARCT = "anterior_mi"
    LATERAL_INFARCT = "lateral_mi"
    RBBB = "rbbb"
    LBBB = "lbbb"


class AxisClassification(str, Enum):
    NORMAL = "Normal"
    LEFT = "Left Axis Deviation"
    RIGHT = "Right Axis Deviation"
    EXTREME = "Extreme Axis Deviation"
    INDETERMINATE = "Indeterminate"


class AxisPreset(str, Enum):
    NORMAL = "normal"
    LEFT = "left"
    RIGHT = "right"
    EXTREME = "extreme"


class QRSDeflection(BaseModel):
    """QRS deflection of a single lead in millimetres (q <= 0 <= r, s <= 0)."""
    model_config = ConfigDict(frozen=True)

    q: float = Field(0.0, description="Q wave depth (mm), zero or negative")
    r: float = Field(0.0, description="R wave height (mm), zero or positive")
    s: float = Field(0.0, description="S wave depth (mm), zero or negative")

    @property
    def total_magnitude(self) -> float:
        return abs(self.q) + abs(self.r) + abs(self.s)

    @property
    def max_component(self) -> float:
        return max(abs(self.q), abs(self.r), abs(self.s))

    def scaled(self, factor: float) -> "QRSDeflection":
        return QRSDeflection(q=self.q * factor, r=self.r * factor, s=self.s * factor)


class _LeadSetBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def items(self) -> Iterator[Tuple[str, QRSDeflection]]:
        """Yield (lead key, deflection) pairs in the canonical lead order."""
        for name, field in type(self).model_fields.items():
            if name == "kind":
                continue
            yield (field.alias or name), getattr(self, name)

    def as_dict(self) -> Dict[str, QRSDeflection]:
        return dict(self.items())

    @property
    def max_component(self) -> float:
        return max(deflection.max_component for _, deflection in self.items())


class LimbLeadSet(_LeadSetBase):
    """Deflections for the six frontal plane leads, keyed leadI..aVF on the wire."""
    kind: Literal["limb"] = "limb"
    lead_i: QRSDeflection = Field(alias="leadI")
    lead_ii: QRSDeflection = Field(alias="leadII")
    lead_iii: QRSDeflection = Field(alias="leadIII")
    avr: QRSDeflection = Field(alias="aVR")
    avl: QRSDeflection = Field(alias="aVL")
    avf: QRSDeflection = Field(alias="aVF")


class ChestLeadSet(_LeadSetBase):
    """Deflections for the six precordial leads."""
    kind: Literal["chest"] = "chest"
    V1: QRSDeflection
    V2: QRSDeflection
    V3: QRSDeflection
    V4: QRSDeflection
    V5: QRSDeflection
    V6: QRSDeflection


LeadSet = Annotated[Union[LimbLeadSet, ChestLeadSet], Field(discriminator="kind")]


class QRSMeasurements(BaseModel):
    """Manually measured QRS complex of one lead.

    Durations are in millimetres of paper (40 ms per mm), amplitudes in mm.
    Q and S depths may be entered either as positive magnitudes or as
    negative values.
    """
    model_config = ConfigDict(frozen=True)

    q_duration: float = Field(1.0, ge=0, description="Q wave duration in mm of paper")
    q_amplitude: float = Field(0.0, description="Q wave depth in mm")
    r_amplitude: float = Field(0.0, description="R wave height in mm")
    s_amplitude: float = Field(0.0, description="S wave depth in mm")
    s_duration: float = Field(1.0, ge=0, description="S wave duration in mm of paper")
