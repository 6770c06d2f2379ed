"""
Performance tests for the deflection engines, cache and tracing builder.
The engines run on every frame of an interactive drag, so they must stay cheap.
"""
import os
import time

import psutil
import pytest

from axis_simulator.cache import DeflectionCache
from axis_simulator.leads.chest_leads import compute_chest_lead_deflections
from axis_simulator.leads.limb_leads import compute_limb_lead_deflections
from axis_simulator.models import ChestLeadPattern
from axis_simulator.waveform_primitives import generate_lead_set_tracings


class TestPerformance:
    """Test performance characteristics of deflection generation."""

    @pytest.mark.performance
    def test_limb_engine_full_sweep_time(self):
        """A full 0.5° sweep of the circle (720 frames) should be well under a second."""
        start_time = time.time()
        for i in range(720):
            compute_limb_lead_deflections(-180 + i * 0.5)
        execution_time = time.time() - start_time

        assert execution_time < 1.0, f"Limb sweep took {execution_time:.3f}s (too slow)"

    @pytest.mark.performance
    def test_chest_engine_all_patterns_time(self):
        start_time = time.time()
        for pattern in ChestLeadPattern:
            for angle in range(-180, 180, 2):
                compute_chest_lead_deflections(angle, pattern)
        execution_time = time.time() - start_time

        assert execution_time < 2.0, f"Chest sweep took {execution_time:.3f}s (too slow)"

    @pytest.mark.performance
    def test_twelve_lead_tracing_time(self):
        limb = compute_limb_lead_deflections(60)
        chest = compute_chest_lead_deflections(60)

        start_time = time.time()
        for _ in range(20):
            generate_lead_set_tracings(limb)
            generate_lead_set_tracings(chest)
        execution_time = time.time() - start_time

        assert execution_time < 1.0, f"20 twelve-lead tracings took {execution_time:.3f}s (too slow)"

    @pytest.mark.performance
    def test_cache_speeds_up_repeated_angles(self):
        cache = DeflectionCache(max_entries=360)
        for angle in range(-179, 181):
            cache.get_limb(angle)

        start_time = time.time()
        for angle in range(-179, 181):
            cache.get_limb(angle)
        cached_time = time.time() - start_time

        assert cache.stats()["hits"] == 360
        assert cached_time < 0.5, f"Cached lookups took {cached_time:.3f}s"

    @pytest.mark.performance
    def test_cache_memory_usage(self):
        """A full cache of limb and chest sets should not grow memory noticeably."""
        process = psutil.Process(os.getpid())
        initial_memory = process.memory_info().rss / 1024 / 1024  # MB

        cache = DeflectionCache(max_entries=720)
        for angle in range(-179, 181):
            cache.get_limb(angle)
            cache.get_chest(angle)

        final_memory = process.memory_info().rss / 1024 / 1024  # MB
        memory_increase = final_memory - initial_memory

        assert len(cache) == 720
        assert memory_increase < 50, f"Cache used {memory_increase:.1f}MB (too much)"
