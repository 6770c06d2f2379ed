# axis_simulator/cache.py
import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Dict, Hashable, Tuple, Union

from .axis_calculations import is_valid_number, normalize_angle
from .constants import DEFAULT_ANGLE_RESOLUTION, DEFAULT_BASE_AMPLITUDE, DEFAULT_CACHE_SIZE
from .leads.chest_leads import compute_chest_lead_deflections, resolve_pattern
from .leads.limb_leads import compute_limb_lead_deflections
from .models import ChestLeadPattern, ChestLeadSet, LimbLeadSet

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, float, Hashable]


class DeflectionCache:
    """
    Bounded LRU cache of lead sets keyed by rounded axis angle.

    The engines themselves never cache; callers that recompute on every frame
    (for example while a compass is dragged) own one of these and pass it
    around. Engine output is deterministic, so cached sets are identical to a
    fresh computation at the rounded angle.
    """

    def __init__(self, max_entries: int = DEFAULT_CACHE_SIZE, angle_resolution: float = DEFAULT_ANGLE_RESOLUTION):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        if angle_resolution <= 0:
            raise ValueError("angle_resolution must be positive")
        self.max_entries = max_entries
        self.angle_resolution = angle_resolution
        self._entries: "OrderedDict[CacheKey, Any]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def round_angle(self, angle: Any) -> float:
        """Snap an angle onto the cache grid, normalized to (-180, 180]."""
        snapped = round(normalize_angle(angle) / self.angle_resolution) * self.angle_resolution
        return normalize_angle(snapped)

    def get_or_compute(self, key: CacheKey, compute: Callable[[], Any]) -> Any:
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self._hits += 1
                return self._entries[key]
            self._misses += 1

        # Computed outside the lock; a concurrent miss on the same key only
        # repeats a pure computation.
        value = compute()

        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted_key, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cache entry %s", evicted_key)
        return value

    def get_limb(self, axis_angle_degrees: Any, base_amplitude: Any = DEFAULT_BASE_AMPLITUDE) -> LimbLeadSet:
        angle = self.round_angle(axis_angle_degrees)
        amplitude = float(base_amplitude) if is_valid_number(base_amplitude) else DEFAULT_BASE_AMPLITUDE
        return self.get_or_compute(
            ("limb", angle, amplitude),
            lambda: compute_limb_lead_deflections(angle, amplitude),
        )

    def get_chest(
        self,
        axis_angle_degrees: Any,
        pattern: Union[ChestLeadPattern, str] = ChestLeadPattern.NORMAL,
    ) -> ChestLeadSet:
        angle = self.round_angle(axis_angle_degrees)
        resolved = resolve_pattern(pattern)
        return self.get_or_compute(
            ("chest", angle, resolved.value),
            lambda: compute_chest_lead_deflections(angle, resolved),
        )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "size": len(self._entries),
                "max_entries": self.max_entries,
                "angle_resolution": self.angle_resolution,
                "hits": self._hits,
                "misses": self._misses,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
