# axis_simulator/api.py
import logging
from typing import Dict, List, Optional

import numpy as np
from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api_models import (
    AxisMeasurementParams, AxisMeasurementResponse, AxisPresetInfo, ChestLeadParams,
    ChestLeadResponse, LimbLeadParams, LimbLeadResponse, RandomAxisResponse, TracingParams,
    TracingResponse,
)
from .axis_calculations import (
    calculate_axis_from_measurements, classify_axis, format_axis, get_axis_range_from_type,
    get_axis_value_from_type, get_random_value_in_axis_range, normalize_angle,
)
from .cache import DeflectionCache
from .config import get_settings
from .exceptions import InvalidMeasurementError
from .models import AxisPreset, ChestLeadPattern
from .waveform_primitives import generate_lead_set_tracings

logger = logging.getLogger(__name__)

app = FastAPI(title="Axis Simulator Engine")

_settings = get_settings()

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.deflection_cache = DeflectionCache(
    max_entries=_settings.cache_size,
    angle_resolution=_settings.angle_resolution,
)


def get_deflection_cache(request: Request) -> DeflectionCache:
    return request.app.state.deflection_cache


@app.exception_handler(InvalidMeasurementError)
async def invalid_measurement_handler(request: Request, exc: InvalidMeasurementError):
    logger.info("Rejected QRS measurements: %s", exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.post("/limb_leads", response_model=LimbLeadResponse)
async def get_limb_leads(params: LimbLeadParams, cache: DeflectionCache = Depends(get_deflection_cache)):
    axis = normalize_angle(params.axis_angle_degrees)
    deflections = cache.get_limb(axis, params.base_amplitude)
    return LimbLeadResponse(axis_degrees=axis, classification=classify_axis(axis), deflections=deflections)


@app.post("/chest_leads", response_model=ChestLeadResponse)
async def get_chest_leads(params: ChestLeadParams, cache: DeflectionCache = Depends(get_deflection_cache)):
    axis = normalize_angle(params.axis_angle_degrees)
    deflections = cache.get_chest(axis, params.pattern)
    return ChestLeadResponse(axis_degrees=axis, pattern=params.pattern, deflections=deflections)


@app.post("/twelve_lead_tracings", response_model=TracingResponse)
async def get_twelve_lead_tracings(params: TracingParams, cache: DeflectionCache = Depends(get_deflection_cache)):
    axis = normalize_angle(params.axis_angle_degrees)

    time_axis, leads = generate_lead_set_tracings(cache.get_limb(axis, params.base_amplitude), params.sampling_rate_hz)
    if params.include_chest_leads:
        _, chest_leads = generate_lead_set_tracings(cache.get_chest(axis, params.pattern), params.sampling_rate_hz)
        leads.update(chest_leads)

    return TracingResponse(
        axis_degrees=axis,
        classification=classify_axis(axis),
        time_axis=time_axis.tolist(),
        leads={name: signal.tolist() for name, signal in leads.items()},
    )


@app.post("/axis_from_measurements", response_model=AxisMeasurementResponse)
async def get_axis_from_measurements(params: AxisMeasurementParams):
    measured = calculate_axis_from_measurements(params.lead_i, params.lead_ii)
    return AxisMeasurementResponse(
        axis_degrees=measured.axis_degrees,
        formatted=format_axis(measured.axis_degrees),
        classification=measured.classification,
        lead_i_area=measured.lead_i_area,
        lead_ii_area=measured.lead_ii_area,
    )


@app.get("/presets", response_model=Dict[str, AxisPresetInfo])
async def get_presets():
    presets = {}
    for preset in AxisPreset:
        axis = get_axis_value_from_type(preset)
        presets[preset.value] = AxisPresetInfo(
            axis_degrees=axis,
            range=get_axis_range_from_type(preset),
            classification=classify_axis(axis),
        )
    return presets


@app.get("/presets/{preset}/random", response_model=RandomAxisResponse)
async def get_random_preset_axis(preset: AxisPreset, seed: Optional[int] = Query(None, ge=0)):
    rng = np.random.default_rng(seed) if seed is not None else None
    axis = get_random_value_in_axis_range(preset, rng)
    return RandomAxisResponse(
        preset=preset,
        axis_degrees=axis,
        formatted=format_axis(axis),
        classification=classify_axis(axis),
    )


@app.get("/chest_patterns", response_model=List[str])
async def get_chest_patterns():
    return [pattern.value for pattern in ChestLeadPattern]


@app.get("/cache_stats")
async def get_cache_stats(cache: DeflectionCache = Depends(get_deflection_cache)):
    return cache.stats()
