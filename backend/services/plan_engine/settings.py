"""
Engine configuration, the single source of truth for plan constants.

Every dimension the pipeline uses (grid snap, circulation factor, door and
window sizes, wall thickness, the standards table ...) lives on one frozen
``EngineConfig`` that callers pass into each stage.  Lengths are metres,
request areas are in the form's unit (square feet by default) and are
converted with ``area_to_sqm``.

Rules can be overridden from a JSON file::

    {"grid_size": 0.25, "standards": {"Kitchen": 0.15}}
"""

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

SQFT_TO_SQM = 0.092903
METER_TO_FEET = 3.28084

# Share of the usable area each room type receives when no size hint is given
DEFAULT_STANDARDS = {
    'LivingRoom': 0.30,
    'Kitchen':    0.12,
    'Bedroom':    0.20,
    'Bathroom':   0.08,
    'DiningRoom': 0.10,
}

# Per-instance floor (sq m)
DEFAULT_MIN_AREAS = {
    'Bedroom':    7.5,
    'Bathroom':   4.0,
    'Kitchen':    5.0,
    'LivingRoom': 12.0,
    'DiningRoom': 7.0,
}

# Floor colors (RGBA) by room type
DEFAULT_FLOOR_COLORS = {
    'LivingRoom': (210, 180, 140, 255),   # Tan wood
    'Bedroom':    (234, 218, 196, 255),   # Beige carpet
    'Kitchen':    (191, 192, 192, 255),   # Silver tile
    'Bathroom':   (162, 162, 162, 255),   # Dark tile
    'DiningRoom': (200, 169, 126, 255),   # Medium wood
}

FLOOR_COLOR_DEFAULT = (240, 240, 240, 255)
WALL_COLOR = (245, 245, 245, 255)         # Off-white

# Lengths and factors that must be strictly positive
POSITIVE_FIELDS = (
    'grid_size', 'circulation_factor', 'envelope_aspect', 'area_to_sqm',
    'door_width', 'door_height', 'window_width', 'window_height',
    'wall_height', 'wall_thickness', 'floor_thickness',
)
NON_NEGATIVE_FIELDS = (
    'min_free_size', 'area_tolerance', 'adjacency_tolerance',
    'window_sill', 'window_clearance', 'min_segment',
)
TABLE_FIELDS = ('standards', 'min_room_area', 'floor_colors')


@dataclass(frozen=True)
class EngineConfig:
    """Immutable bundle of every constant the plan engine reads."""

    # Grid / envelope
    grid_size: float = 0.5
    circulation_factor: float = 1.25
    envelope_aspect: float = 1.5
    aspect_ratios: Tuple[float, ...] = (1.0, 1.5, 1 / 1.5, 2.0, 0.5)
    jitter_range: Tuple[float, float] = (0.5, 2.0)
    min_free_size: float = 0.5

    # Area allocation
    area_to_sqm: float = SQFT_TO_SQM
    area_tolerance: float = 1.0
    min_total_area: float = 50.0
    max_total_area: float = 5000.0
    max_room_count: int = 10
    min_size_hint: float = 10.0
    max_size_hint: float = 2000.0
    standards: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_STANDARDS))
    min_room_area: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_MIN_AREAS))

    # Openings
    adjacency_tolerance: float = 0.1
    door_width: float = 0.9
    door_height: float = 2.1
    window_width: float = 1.5
    window_height: float = 1.2
    window_sill: float = 0.9
    window_clearance: float = 1.0

    # Walls / floors
    wall_height: float = 2.7
    wall_thickness: float = 0.15
    floor_thickness: float = 0.05
    min_segment: float = 0.01
    floor_colors: Dict[str, Tuple[int, int, int, int]] = field(
        default_factory=lambda: dict(DEFAULT_FLOOR_COLORS))
    wall_color: Tuple[int, int, int, int] = WALL_COLOR

    def __post_init__(self):
        for name in POSITIVE_FIELDS:
            value = getattr(self, name)
            if not _is_number(value) or value <= 0:
                raise ValueError(f"{name} must be a positive number, got {value!r}")
        for name in NON_NEGATIVE_FIELDS:
            value = getattr(self, name)
            if not _is_number(value) or value < 0:
                raise ValueError(f"{name} must be a non-negative number, got {value!r}")
        if not self.aspect_ratios or not all(_is_number(r) and r > 0 for r in self.aspect_ratios):
            raise ValueError(f"aspect_ratios must be positive numbers, got {self.aspect_ratios!r}")
        lo, hi = self.jitter_range
        if not (_is_number(lo) and _is_number(hi) and 0 < lo <= hi):
            raise ValueError(f"jitter_range must be (low, high) with 0 < low <= high, got {self.jitter_range!r}")

    def snap(self, value: float) -> float:
        """Round *value* to the nearest grid unit (halves round up)."""
        return _round_half_up(value / self.grid_size) * self.grid_size

    def floor_color(self, room_type: str) -> Tuple[int, int, int, int]:
        return tuple(self.floor_colors.get(room_type, FLOOR_COLOR_DEFAULT))

    def with_overrides(self, **overrides) -> "EngineConfig":
        return EngineConfig.from_dict(overrides, base=self)

    @classmethod
    def from_dict(cls, data: dict, base: Optional["EngineConfig"] = None) -> "EngineConfig":
        """
        Build a config from a (partial) mapping.

        Table-valued keys (``standards``, ``min_room_area``, ``floor_colors``)
        are merged into the base tables rather than replacing them.
        Raises ``ValueError`` for unknown keys, tables that are not mappings
        and out-of-range values, so a bad rules file falls back cleanly.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Engine config must be a mapping, got {type(data).__name__}")
        base = base or cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown engine config keys: {', '.join(unknown)}")

        values = {}
        for key, value in data.items():
            current = getattr(base, key)
            if key in TABLE_FIELDS:
                if not isinstance(value, Mapping):
                    raise ValueError(f"{key} must be a mapping of room type to value, got {value!r}")
                merged = dict(current)
                merged.update(value)
                value = merged
            elif isinstance(current, tuple):
                if not isinstance(value, (list, tuple)):
                    raise ValueError(f"{key} must be a list, got {value!r}")
                value = tuple(value)
            values[key] = value
        return replace(base, **values)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _round_half_up(value: float) -> float:
    # round() is banker's rounding; the grid wants halves up
    return math.floor(value + 0.5)


def load_engine_config(path: Optional[str] = None) -> EngineConfig:
    """
    Load engine rules from a JSON file.

    Falls back to the built-in defaults when *path* is empty, missing,
    or unreadable.
    """
    if not path:
        return EngineConfig()

    rules_path = Path(path)
    try:
        with open(rules_path, 'r') as f:
            data = json.load(f)
        config = EngineConfig.from_dict(data)
        logger.info(f"Loaded plan rules from {rules_path}")
        return config
    except (OSError, ValueError) as e:
        logger.warning(f"Could not load plan rules from {rules_path}: {e}. Using built-in defaults.")
        return EngineConfig()
