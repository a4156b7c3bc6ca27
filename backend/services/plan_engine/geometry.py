"""
Wall and floor geometry with door/window openings cut out.

Each room gets a floor slab and, per wall, a run of solid boxes split
around its openings:

    |  wall  | lintel |  wall  | lintel |  wall  |
    |        |  door  |        | window |        |
    |        |        |        |  sill  |        |

Frame is Z-up: x east, y north, z elevation.  Wall boxes are centred on
the room's boundary line, so walls of adjoining rooms sit flush or overlap
slightly along shared edges.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .room_model import Opening, PlacedRoom, WallSide
from .settings import EngineConfig

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]

WALL_ORDER = (WallSide.NORTH, WallSide.SOUTH, WallSide.EAST, WallSide.WEST)


@dataclass(frozen=True)
class WallBox:
    """Solid box primitive: a wall run, a sill under a window, or a lintel."""

    room_id: str
    wall: WallSide
    part: str                      # 'wall' | 'sill' | 'lintel'
    size: Vec3
    center: Vec3

    def to_dict(self) -> dict:
        return {
            "room_id": self.room_id,
            "wall": self.wall.value,
            "part": self.part,
            "size": [round(v, 4) for v in self.size],
            "center": [round(v, 4) for v in self.center],
        }


@dataclass(frozen=True)
class FloorSlab:
    """Flat floor rectangle at elevation 0."""

    room_id: str
    room_type: str
    x: float
    y: float
    width: float
    depth: float
    color: Tuple[int, int, int, int]
    elevation: float = 0.0

    @property
    def center(self) -> Vec3:
        return (self.x + self.width / 2, self.y + self.depth / 2, self.elevation)

    def to_dict(self) -> dict:
        return {
            "room_id": self.room_id,
            "room_type": self.room_type,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "depth": self.depth,
            "elevation": self.elevation,
            "color": list(self.color),
        }


@dataclass
class PlanGeometry:
    floors: List[FloorSlab] = field(default_factory=list)
    boxes: List[WallBox] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.floors and not self.boxes

    def to_dict(self) -> dict:
        return {
            "floors": [f.to_dict() for f in self.floors],
            "boxes": [b.to_dict() for b in self.boxes],
        }


class _WallRun:
    """Box factory for one wall of one room."""

    def __init__(self, room: PlacedRoom, wall: WallSide, config: EngineConfig):
        self.room = room
        self.wall = wall
        self.config = config
        if wall == WallSide.NORTH:
            self.line = room.top
        elif wall == WallSide.SOUTH:
            self.line = room.y
        elif wall == WallSide.EAST:
            self.line = room.right
        else:
            self.line = room.x

    def box(self, part: str, start: float, end: float, z0: float, z1: float) -> WallBox:
        length = end - start
        mid = start + length / 2
        t = self.config.wall_thickness
        if self.wall.horizontal:
            size, center = (length, t, z1 - z0), (mid, self.line, (z0 + z1) / 2)
        else:
            size, center = (t, length, z1 - z0), (self.line, mid, (z0 + z1) / 2)
        return WallBox(self.room.id, self.wall, part, size, center)


def _opening_boxes(run: _WallRun, opening: Opening, config: EngineConfig) -> List[WallBox]:
    boxes = []
    if opening.kind == "window" and opening.sill_height > 0:
        boxes.append(run.box("sill", opening.start, opening.end, 0.0, opening.sill_height))

    top_height = config.wall_height - opening.top
    if top_height > config.min_segment:
        boxes.append(run.box("lintel", opening.start, opening.end, opening.top, config.wall_height))
    return boxes


def build_wall(room: PlacedRoom, wall: WallSide, config: EngineConfig) -> List[WallBox]:
    """Boxes for one wall of *room*, split around its openings."""
    run = _WallRun(room, wall, config)
    start, end = room.wall_span(wall)
    h = config.wall_height
    boxes = []

    cursor = start
    for opening in room.openings_on(wall):
        if opening.start - cursor > config.min_segment:
            boxes.append(run.box("wall", cursor, opening.start, 0.0, h))
        boxes.extend(_opening_boxes(run, opening, config))
        cursor = opening.end

    if end - cursor > config.min_segment:
        boxes.append(run.box("wall", cursor, end, 0.0, h))
    return boxes


def build_floor(room: PlacedRoom, config: EngineConfig) -> FloorSlab:
    return FloorSlab(
        room_id=room.id,
        room_type=room.type.value,
        x=room.x,
        y=room.y,
        width=room.width,
        depth=room.height,
        color=config.floor_color(room.type.value),
    )


def build_geometry(rooms: Sequence[PlacedRoom], config: Optional[EngineConfig] = None) -> PlanGeometry:
    """Floor slabs and wall boxes for every room in *rooms*."""
    config = config or EngineConfig()
    geometry = PlanGeometry()
    for room in rooms:
        geometry.floors.append(build_floor(room, config))
        for wall in WALL_ORDER:
            geometry.boxes.extend(build_wall(room, wall, config))

    logger.debug(f"Built {len(geometry.floors)} floors, {len(geometry.boxes)} wall boxes")
    return geometry
