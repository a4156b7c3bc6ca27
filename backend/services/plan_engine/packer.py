"""
Greedy guillotine bin packing of room specs.

Rooms are placed largest first.  For each room every free rectangle is
tried against a fixed set of width:height ratios; the candidate leaving the
smallest leftover area wins ("best area fit").  The chosen free rectangle
is then cut into a right and a bottom remainder.

The packer never backtracks: a room with no feasible candidate is dropped,
and callers compare the placed count against the request.
"""

import logging
import math
import random
from typing import List, Optional, Sequence

from .room_model import Envelope, FreeRect, PlacedRoom, RoomSpec
from .settings import EngineConfig

logger = logging.getLogger(__name__)


def compute_envelope(total_area_sqm: float, config: Optional[EngineConfig] = None) -> Envelope:
    """
    Outer rectangle for *total_area_sqm* of usable area.

    The gross area adds the circulation factor; width:depth follows
    ``config.envelope_aspect``; both sides snap to the grid and never fall
    below one grid unit.
    """
    config = config or EngineConfig()
    gross = total_area_sqm * config.circulation_factor
    width = max(config.grid_size, config.snap(math.sqrt(gross * config.envelope_aspect)))
    depth = max(config.grid_size, config.snap(gross / width))
    return Envelope(width=width, depth=depth)


def _candidate_ratios(config: EngineConfig, rng: Optional[random.Random]) -> List[float]:
    ratios = list(config.aspect_ratios)
    if rng is not None:
        lo, hi = config.jitter_range
        ratios.append(lo + rng.random() * (hi - lo))
    return ratios


def _best_fit(spec: RoomSpec, free_rects: List[FreeRect], config: EngineConfig,
              rng: Optional[random.Random]):
    """Return (score, rect_index, width, height) of the best candidate, or None."""
    best = None
    for idx, rect in enumerate(free_rects):
        for ratio in _candidate_ratios(config, rng):
            w = config.snap(math.sqrt(spec.target_area * ratio))
            if w <= 0:
                continue
            h = config.snap(spec.target_area / w)
            if h <= 0 or w > rect.width or h > rect.height:
                continue
            score = rect.area - w * h
            if best is None or score < best[0]:
                best = (score, idx, w, h)
    return best


def _split(rect: FreeRect, w: float, h: float, config: EngineConfig) -> List[FreeRect]:
    """Guillotine cut of *rect* around a w x h room placed at its origin."""
    parts = []
    right = FreeRect(rect.x + w, rect.y, rect.width - w, rect.height)
    if right.width > config.min_free_size:
        parts.append(right)
    bottom = FreeRect(rect.x, rect.y + h, w, rect.height - h)
    if bottom.height > config.min_free_size:
        parts.append(bottom)
    return parts


def pack(
    envelope: Envelope,
    specs: Sequence[RoomSpec],
    config: Optional[EngineConfig] = None,
    seed: Optional[int] = None,
) -> List[PlacedRoom]:
    """
    Place *specs* inside *envelope*.

    Parameters
    ----------
    envelope : Envelope
        Outer rectangle to pack into.
    specs : sequence of RoomSpec
        Rooms to place; not modified.
    config : EngineConfig, optional
        Grid, ratios and split threshold.
    seed : int, optional
        When given, one extra seeded random ratio is tried per free
        rectangle for variety.  Without a seed packing is deterministic.

    Returns
    -------
    list[PlacedRoom]
        Rooms in placement order.  May be shorter than *specs*.
    """
    config = config or EngineConfig()
    rng = random.Random(seed) if seed is not None else None

    free_rects = [FreeRect(0.0, 0.0, envelope.width, envelope.depth)]
    placed: List[PlacedRoom] = []

    for spec in sorted(specs, key=lambda s: s.target_area, reverse=True):
        best = _best_fit(spec, free_rects, config, rng)
        if best is None:
            logger.debug(f"No free rectangle fits {spec.id} ({spec.target_area:.2f} sq m); dropped")
            continue

        _, idx, w, h = best
        rect = free_rects.pop(idx)
        placed.append(PlacedRoom(id=spec.id, type=spec.type, x=rect.x, y=rect.y, width=w, height=h))
        free_rects.extend(_split(rect, w, h, config))

    if len(placed) < len(specs):
        logger.warning(f"Packed {len(placed)}/{len(specs)} rooms into "
                       f"{envelope.width}x{envelope.depth} envelope")
    return placed
