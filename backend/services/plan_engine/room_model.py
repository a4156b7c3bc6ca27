"""
Plan data model: requests, specs, placed rooms and openings.

Each pipeline stage owns the records it produces; later stages build new
records instead of mutating the ones they were handed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .settings import METER_TO_FEET


class PlanEngineError(Exception):
    """Base class for plan engine errors."""


class InvalidPlanRequest(PlanEngineError, ValueError):
    """Request outside the configured bounds or naming an unknown room type."""


class RoomType(str, Enum):
    BEDROOM = "Bedroom"
    BATHROOM = "Bathroom"
    KITCHEN = "Kitchen"
    LIVING_ROOM = "LivingRoom"
    DINING_ROOM = "DiningRoom"

    @property
    def display_name(self) -> str:
        """``LivingRoom`` -> ``Living Room``."""
        out = []
        for ch in self.value:
            if ch.isupper() and out:
                out.append(" ")
            out.append(ch)
        return "".join(out)

    @classmethod
    def parse(cls, value) -> "RoomType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidPlanRequest(f"Unknown room type: {value!r}") from None


class WallSide(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def horizontal(self) -> bool:
        """North/south walls run along the x axis."""
        return self in (WallSide.NORTH, WallSide.SOUTH)


@dataclass
class RoomRequest:
    """What the caller asked for: total area plus counts per room type."""

    total_area: float
    room_counts: Dict[RoomType, int]
    room_size_hints: Optional[Dict[RoomType, float]] = None

    @property
    def requested_count(self) -> int:
        return sum(self.room_counts.values())

    @classmethod
    def from_dict(cls, data: dict) -> "RoomRequest":
        """
        Build a request from a JSON-style dict with string room-type keys::

            {"total_area": 1200,
             "room_counts": {"Bedroom": 2, "Kitchen": 1},
             "room_size_hints": {"Bedroom": 150}}
        """
        counts = {RoomType.parse(k): int(v) for k, v in data.get("room_counts", {}).items()}
        hints = data.get("room_size_hints")
        if hints:
            hints = {RoomType.parse(k): float(v) for k, v in hints.items() if v is not None}
        return cls(
            total_area=float(data["total_area"]),
            room_counts=counts,
            room_size_hints=hints or None,
        )


@dataclass(frozen=True)
class RoomSpec:
    """One room instance to place, with its target area in square metres."""

    id: str
    type: RoomType
    target_area: float


@dataclass(frozen=True)
class Envelope:
    """Outer rectangle bounding every placed room."""

    width: float
    depth: float

    @property
    def area(self) -> float:
        return self.width * self.depth

    def to_dict(self) -> dict:
        return {"width": self.width, "depth": self.depth, "area": round(self.area, 4)}


@dataclass(frozen=True)
class FreeRect:
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class Opening:
    """
    A door or window cut into one wall of a room.

    ``pos`` is the absolute envelope coordinate of the opening centre along
    the wall's axis (x for north/south walls, y for east/west walls).
    """

    kind: str                      # 'door' | 'window'
    wall: WallSide
    pos: float
    width: float
    height: float
    sill_height: float = 0.0
    connects_to: Optional[str] = None

    @property
    def start(self) -> float:
        return self.pos - self.width / 2

    @property
    def end(self) -> float:
        return self.pos + self.width / 2

    @property
    def top(self) -> float:
        return self.sill_height + self.height

    def to_dict(self) -> dict:
        d = {
            "kind": self.kind,
            "wall": self.wall.value,
            "pos": round(self.pos, 4),
            "width": self.width,
            "height": self.height,
            "sill_height": self.sill_height,
        }
        if self.connects_to is not None:
            d["connects_to"] = self.connects_to
        return d


@dataclass(frozen=True)
class PlacedRoom:
    """Axis-aligned room rectangle in envelope coordinates (metres)."""

    id: str
    type: RoomType
    x: float
    y: float
    width: float
    height: float
    doors: List[Opening] = field(default_factory=list)
    windows: List[Opening] = field(default_factory=list)

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    def wall_span(self, wall: WallSide):
        """(start, end) of *wall* along its own axis."""
        if wall.horizontal:
            return self.x, self.right
        return self.y, self.top

    def openings_on(self, wall: WallSide) -> List[Opening]:
        """Doors and windows on *wall*, ordered by position."""
        found = [o for o in list(self.doors) + list(self.windows) if o.wall == wall]
        return sorted(found, key=lambda o: o.pos)

    def label(self) -> str:
        """Viewer label: type, dimensions in feet, approximate square feet."""
        width_ft = round(self.width * METER_TO_FEET)
        depth_ft = round(self.height * METER_TO_FEET)
        return f"{self.type.display_name}\n{width_ft}' x {depth_ft}'\n~{width_ft * depth_ft} sqft"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "area": round(self.area, 4),
            "label": self.label(),
            "doors": [d.to_dict() for d in self.doors],
            "windows": [w.to_dict() for w in self.windows],
        }

    def __repr__(self) -> str:
        return (
            f"PlacedRoom({self.id}, ({self.x:.2f},{self.y:.2f}) "
            f"{self.width:.2f}x{self.height:.2f}, "
            f"doors={len(self.doors)}, windows={len(self.windows)})"
        )
