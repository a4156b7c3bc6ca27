"""
Layout validation utilities.

Checks that placed rooms stay inside the envelope and do not overlap
each other.  All checks go through Shapely boxes.
"""

from typing import List, Sequence, Tuple

from shapely.geometry import Polygon, box
from shapely.ops import unary_union

from .room_model import Envelope, PlacedRoom


def room_polygon(room: PlacedRoom) -> Polygon:
    """Room rectangle as a Shapely polygon."""
    return box(room.x, room.y, room.right, room.top)


def envelope_polygon(envelope: Envelope) -> Polygon:
    return box(0.0, 0.0, envelope.width, envelope.depth)


def detect_overlaps(rooms: Sequence[PlacedRoom],
                    tolerance: float = 1e-6) -> List[Tuple[str, str]]:
    """
    Return ``(id_a, id_b)`` pairs of rooms that overlap.

    Rooms sharing only an edge (zero-area intersection) are **not**
    considered overlapping.

    Parameters
    ----------
    rooms : sequence of PlacedRoom
        Rooms to check.
    tolerance : float
        Minimum intersection area to count as an overlap (sq m).
    """
    polys = [room_polygon(r) for r in rooms]
    overlaps = []
    for i in range(len(polys)):
        for j in range(i + 1, len(polys)):
            inter = polys[i].intersection(polys[j])
            if inter.area > tolerance:
                overlaps.append((rooms[i].id, rooms[j].id))
    return overlaps


def rooms_outside_envelope(rooms: Sequence[PlacedRoom], envelope: Envelope,
                           tolerance: float = 1e-6) -> List[str]:
    """Ids of rooms sticking out of *envelope* by more than *tolerance* sq m."""
    outer = envelope_polygon(envelope)
    return [r.id for r in rooms if room_polygon(r).difference(outer).area > tolerance]


def rooms_within_envelope(rooms: Sequence[PlacedRoom], envelope: Envelope) -> bool:
    return not rooms_outside_envelope(rooms, envelope)


def total_room_area(rooms: Sequence[PlacedRoom]) -> float:
    """Sum of individual room areas (not union, so overlaps count twice)."""
    return sum(r.area for r in rooms)


def coverage_ratio(rooms: Sequence[PlacedRoom], envelope: Envelope) -> float:
    """Fraction of the envelope covered by the union of the rooms."""
    if not rooms or envelope.area <= 0:
        return 0.0
    merged = unary_union([room_polygon(r) for r in rooms])
    return merged.intersection(envelope_polygon(envelope)).area / envelope.area
