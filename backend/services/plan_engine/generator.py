"""
Plan generator, the public entry point of the plan engine.

Runs the pipeline request -> specs -> placed rooms -> rooms with openings
-> geometry, and reports whether the layout is complete, partial, empty
or impossible.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .allocator import allocate
from .geometry import PlanGeometry, build_geometry
from .geometry_utils import coverage_ratio, detect_overlaps, rooms_outside_envelope, total_room_area
from .openings import resolve_openings
from .packer import compute_envelope, pack
from .room_model import Envelope, PlacedRoom, RoomRequest
from .settings import EngineConfig

logger = logging.getLogger(__name__)


class PlanStatus(str, Enum):
    COMPLETE = "complete"          # every requested room placed
    PARTIAL = "partial"            # some rooms dropped by the packer
    EMPTY = "empty"                # nothing requested
    UNPLACEABLE = "unplaceable"    # rooms requested, none placed


@dataclass
class PlanResult:
    status: PlanStatus
    envelope: Envelope
    rooms: List[PlacedRoom] = field(default_factory=list)
    geometry: PlanGeometry = field(default_factory=PlanGeometry)
    requested_count: int = 0
    seed: Optional[int] = None

    @property
    def placed_count(self) -> int:
        return len(self.rooms)

    @property
    def has_layout(self) -> bool:
        return bool(self.rooms)

    @property
    def placed_area(self) -> float:
        """Sum of placed room areas (sq m)."""
        return total_room_area(self.rooms)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "seed": self.seed,
            "envelope": self.envelope.to_dict(),
            "requested_count": self.requested_count,
            "placed_count": self.placed_count,
            "placed_area": round(self.placed_area, 4),
            "coverage": round(coverage_ratio(self.rooms, self.envelope), 4),
            "rooms": [r.to_dict() for r in self.rooms],
            "geometry": self.geometry.to_dict(),
        }


class PlanGenerator:
    """
    Generate floor plans from room requests.

    Typical workflow::

        gen = PlanGenerator()
        result = gen.generate(RoomRequest.from_dict({
            "total_area": 1200,
            "room_counts": {"Bedroom": 2, "Bathroom": 1, "Kitchen": 1},
        }))
        if result.status is not PlanStatus.COMPLETE:
            ...
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def _check_layout(self, rooms: List[PlacedRoom], envelope: Envelope) -> None:
        """Log packer guarantee violations; never expected to fire."""
        overlaps = detect_overlaps(rooms)
        if overlaps:
            logger.error(f"Packed rooms overlap: {overlaps}")
        outside = rooms_outside_envelope(rooms, envelope)
        if outside:
            logger.error(f"Packed rooms outside envelope: {outside}")

    def generate(self, request: RoomRequest, seed: Optional[int] = None) -> PlanResult:
        """
        Run the full pipeline for *request*.

        Raises ``InvalidPlanRequest`` when the request is out of bounds;
        every other outcome is reported through ``PlanResult.status``.
        """
        config = self.config
        specs = allocate(request, config)
        envelope = compute_envelope(request.total_area * config.area_to_sqm, config)
        if not specs:
            logger.info("No rooms requested; returning empty plan")
            return PlanResult(status=PlanStatus.EMPTY, envelope=envelope, seed=seed)

        placed = pack(envelope, specs, config, seed=seed)
        self._check_layout(placed, envelope)
        rooms = resolve_openings(placed, envelope, config)
        geometry = build_geometry(rooms, config)

        if not rooms:
            status = PlanStatus.UNPLACEABLE
        elif len(rooms) < len(specs):
            status = PlanStatus.PARTIAL
        else:
            status = PlanStatus.COMPLETE

        logger.info(
            f"Plan {status.value}: {len(rooms)}/{len(specs)} rooms in "
            f"{envelope.width}x{envelope.depth} m, "
            f"{sum(len(r.doors) for r in rooms)} doors, "
            f"{sum(len(r.windows) for r in rooms)} windows, "
            f"{len(geometry.boxes)} wall boxes"
        )
        return PlanResult(
            status=status,
            envelope=envelope,
            rooms=rooms,
            geometry=geometry,
            requested_count=len(specs),
            seed=seed,
        )

    def generate_variations(self, request: RoomRequest, count: int = 4,
                            seed: int = 0) -> List[PlanResult]:
        """
        Generate *count* plans with seeds ``seed, seed + 1, ...``.

        Each seed adds one random aspect ratio per free rectangle, so
        the variations differ while staying reproducible.
        """
        return [self.generate(request, seed=seed + i) for i in range(count)]


def generate_plan(request: RoomRequest, config: Optional[EngineConfig] = None,
                  seed: Optional[int] = None) -> PlanResult:
    """Convenience wrapper around ``PlanGenerator(config).generate()``."""
    return PlanGenerator(config).generate(request, seed=seed)
