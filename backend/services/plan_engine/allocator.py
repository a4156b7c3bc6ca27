"""
Turn a room request into per-instance room specs.

Each requested room gets a target area from its size hint, or from the
standards table share split across the instances of that type.  The specs
are then scaled uniformly so they sum to the requested total.
"""

import logging
from typing import List, Optional

from .room_model import InvalidPlanRequest, RoomRequest, RoomSpec, RoomType
from .settings import EngineConfig

logger = logging.getLogger(__name__)


def validate_request(request: RoomRequest, config: EngineConfig) -> None:
    """Raise ``InvalidPlanRequest`` if *request* is outside the configured bounds."""
    if not (config.min_total_area <= request.total_area <= config.max_total_area):
        raise InvalidPlanRequest(
            f"total_area {request.total_area} outside "
            f"[{config.min_total_area}, {config.max_total_area}]"
        )

    for key, count in request.room_counts.items():
        room_type = RoomType.parse(key)
        if not (0 <= count <= config.max_room_count):
            raise InvalidPlanRequest(
                f"{room_type.value} count {count} outside [0, {config.max_room_count}]"
            )

    for key, size in (request.room_size_hints or {}).items():
        room_type = RoomType.parse(key)
        if not (config.min_size_hint <= size <= config.max_size_hint):
            raise InvalidPlanRequest(
                f"{room_type.value} size hint {size} outside "
                f"[{config.min_size_hint}, {config.max_size_hint}]"
            )


def _instance_area(room_type: RoomType, count: int, total_sqm: float,
                   hints: dict, config: EngineConfig) -> float:
    hint = hints.get(room_type)
    if hint is not None:
        area = hint * config.area_to_sqm
    else:
        area = total_sqm * config.standards.get(room_type.value, 0.0) / count
    return max(area, config.min_room_area.get(room_type.value, 0.0))


def allocate(request: RoomRequest, config: Optional[EngineConfig] = None) -> List[RoomSpec]:
    """
    Allocate a target area (sq m) to every requested room instance.

    Returns an empty list when no rooms are requested.
    """
    config = config or EngineConfig()
    validate_request(request, config)

    total_sqm = request.total_area * config.area_to_sqm
    hints = {RoomType.parse(k): v for k, v in (request.room_size_hints or {}).items()}

    raw = []
    for key, count in request.room_counts.items():
        if count <= 0:
            continue
        room_type = RoomType.parse(key)
        area = _instance_area(room_type, count, total_sqm, hints, config)
        for i in range(count):
            raw.append((f"{room_type.value}-{i + 1}", room_type, area))

    total_specified = sum(area for _, _, area in raw)
    if total_specified <= 0:
        return []

    scale = 1.0
    if abs(total_specified - total_sqm) > config.area_tolerance:
        scale = total_sqm / total_specified
        logger.debug(f"Normalizing {len(raw)} specs by {scale:.4f} "
                     f"({total_specified:.2f} -> {total_sqm:.2f} sq m)")

    return [RoomSpec(id=rid, type=rtype, target_area=area * scale) for rid, rtype, area in raw]
