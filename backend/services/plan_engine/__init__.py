"""
Plan Engine for procedural floor-plan generation.

Allocates room areas, packs rooms into a rectangular envelope with
guillotine cuts, places doors and windows from adjacency, and builds
wall/floor box geometry with the openings cut out.
"""

from .allocator import allocate, validate_request
from .generator import PlanGenerator, PlanResult, PlanStatus, generate_plan
from .geometry import FloorSlab, PlanGeometry, WallBox, build_geometry
from .openings import resolve_openings
from .packer import compute_envelope, pack
from .room_model import (
    Envelope,
    InvalidPlanRequest,
    Opening,
    PlacedRoom,
    PlanEngineError,
    RoomRequest,
    RoomSpec,
    RoomType,
    WallSide,
)
from .settings import EngineConfig, load_engine_config

__all__ = [
    "allocate",
    "validate_request",
    "compute_envelope",
    "pack",
    "resolve_openings",
    "build_geometry",
    "PlanGenerator",
    "PlanResult",
    "PlanStatus",
    "generate_plan",
    "FloorSlab",
    "PlanGeometry",
    "WallBox",
    "Envelope",
    "InvalidPlanRequest",
    "Opening",
    "PlacedRoom",
    "PlanEngineError",
    "RoomRequest",
    "RoomSpec",
    "RoomType",
    "WallSide",
    "EngineConfig",
    "load_engine_config",
]
