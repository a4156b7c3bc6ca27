"""
Plan generation routes.

Thin HTTP layer over ``services.plan_engine``: validates the form payload,
runs the generator and returns layout plus geometry as JSON.
"""

import logging
from fastapi import APIRouter, HTTPException
from config import PLAN_MAX_VARIATIONS, PLAN_RULES_PATH
from schemas import PlanRequest, PlanResponse, RoomTypeInfo, VariationsRequest, VariationsResponse
from services.plan_engine import (
    InvalidPlanRequest,
    PlanGenerator,
    RoomRequest,
    RoomType,
    load_engine_config,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plan", tags=["plan"])

_engine_config = load_engine_config(PLAN_RULES_PATH)


def _to_room_request(req: PlanRequest) -> RoomRequest:
    try:
        return RoomRequest.from_dict(req.to_engine_dict())
    except InvalidPlanRequest as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/generate", response_model=PlanResponse)
async def generate(req: PlanRequest):
    """Generate one floor plan (rooms, openings, wall/floor geometry)."""
    generator = PlanGenerator(_engine_config)
    try:
        result = generator.generate(_to_room_request(req), seed=req.seed)
    except InvalidPlanRequest as e:
        raise HTTPException(status_code=422, detail=str(e))
    return result.to_dict()


@router.post("/variations", response_model=VariationsResponse)
async def variations(req: VariationsRequest):
    """Generate several seeded variations of the same request."""
    if req.count > PLAN_MAX_VARIATIONS:
        raise HTTPException(
            status_code=422,
            detail=f"count must be at most {PLAN_MAX_VARIATIONS}",
        )
    generator = PlanGenerator(_engine_config)
    try:
        results = generator.generate_variations(
            _to_room_request(req), count=req.count, seed=req.seed or 0,
        )
    except InvalidPlanRequest as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info(f"Generated {len(results)} plan variations from seed {req.seed or 0}")
    return {"variations": [r.to_dict() for r in results]}


@router.get("/room-types", response_model=list[RoomTypeInfo])
async def room_types():
    """Room types with their default area share and minimum area."""
    return [
        {
            "room_type": rt.value,
            "label": rt.display_name,
            "standard_share": _engine_config.standards.get(rt.value, 0.0),
            "min_area_sqm": _engine_config.min_room_area.get(rt.value, 0.0),
        }
        for rt in RoomType
    ]
