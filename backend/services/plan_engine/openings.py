"""
Door and window placement from room adjacency.

For each pair of rooms that share a wall, a door is placed at the
midpoint of the shared span on both sides.  Exterior walls without a door
get one window centred on the wall when the wall is long enough.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from .room_model import Envelope, Opening, PlacedRoom, WallSide
from .settings import EngineConfig

logger = logging.getLogger(__name__)


def _overlap(a0: float, a1: float, b0: float, b1: float) -> Tuple[float, float]:
    """(start, length) of the 1-D overlap of [a0, a1] and [b0, b1]."""
    start = max(a0, b0)
    return start, max(0.0, min(a1, b1) - start)


def shared_wall(a: PlacedRoom, b: PlacedRoom, config: EngineConfig
                ) -> Optional[Tuple[WallSide, WallSide, float]]:
    """
    Detect a wall shared by *a* and *b*.

    Returns ``(side_on_a, side_on_b, door_pos)`` or ``None``.  Edges must
    coincide within ``adjacency_tolerance`` and the span along them must
    exceed the door width.
    """
    tol = config.adjacency_tolerance
    x_start, x_len = _overlap(a.x, a.right, b.x, b.right)
    y_start, y_len = _overlap(a.y, a.top, b.y, b.top)

    if x_len > config.door_width and abs(a.top - b.y) < tol:
        return WallSide.NORTH, WallSide.SOUTH, x_start + x_len / 2
    if x_len > config.door_width and abs(a.y - b.top) < tol:
        return WallSide.SOUTH, WallSide.NORTH, x_start + x_len / 2
    if y_len > config.door_width and abs(a.right - b.x) < tol:
        return WallSide.EAST, WallSide.WEST, y_start + y_len / 2
    if y_len > config.door_width and abs(a.x - b.right) < tol:
        return WallSide.WEST, WallSide.EAST, y_start + y_len / 2
    return None


def _door(wall: WallSide, pos: float, other_id: str, config: EngineConfig) -> Opening:
    return Opening(
        kind="door",
        wall=wall,
        pos=pos,
        width=config.door_width,
        height=config.door_height,
        sill_height=0.0,
        connects_to=other_id,
    )


def exterior_walls(room: PlacedRoom, envelope: Envelope, config: EngineConfig) -> List[WallSide]:
    """Walls of *room* lying on the envelope boundary (south, north, west, east order)."""
    tol = config.adjacency_tolerance
    walls = []
    if abs(room.y) < tol:
        walls.append(WallSide.SOUTH)
    if abs(room.top - envelope.depth) < tol:
        walls.append(WallSide.NORTH)
    if abs(room.x) < tol:
        walls.append(WallSide.WEST)
    if abs(room.right - envelope.width) < tol:
        walls.append(WallSide.EAST)
    return walls


def _windows(room: PlacedRoom, doors: List[Opening], envelope: Envelope,
             config: EngineConfig) -> List[Opening]:
    door_walls = {d.wall for d in doors}
    windows = []
    for wall in exterior_walls(room, envelope, config):
        if wall in door_walls:
            continue
        start, end = room.wall_span(wall)
        if end - start <= config.window_width + config.window_clearance:
            continue
        windows.append(Opening(
            kind="window",
            wall=wall,
            pos=start + (end - start) / 2,
            width=config.window_width,
            height=config.window_height,
            sill_height=config.window_sill,
        ))
    return windows


def resolve_openings(
    rooms: Sequence[PlacedRoom],
    envelope: Envelope,
    config: Optional[EngineConfig] = None,
) -> List[PlacedRoom]:
    """
    Return copies of *rooms* with doors and windows filled in.

    Openings already present on the input rooms are discarded and
    recomputed; the input rooms are left untouched.
    """
    config = config or EngineConfig()
    doors: Dict[str, List[Opening]] = {r.id: [] for r in rooms}

    for i in range(len(rooms)):
        for j in range(i + 1, len(rooms)):
            a, b = rooms[i], rooms[j]
            wall = shared_wall(a, b, config)
            if wall is None:
                continue
            side_a, side_b, pos = wall
            doors[a.id].append(_door(side_a, pos, b.id, config))
            doors[b.id].append(_door(side_b, pos, a.id, config))
            logger.debug(f"Door {a.id}:{side_a.value} <-> {b.id}:{side_b.value} at {pos:.2f}")

    resolved = []
    for room in rooms:
        room_doors = doors[room.id]
        resolved.append(replace(
            room,
            doors=room_doors,
            windows=_windows(room, room_doors, envelope, config),
        ))
    return resolved
