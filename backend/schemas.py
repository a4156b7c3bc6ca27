"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, Field
from typing import Optional


# ---------- Plan Generation ----------
class RoomCounts(BaseModel):
    Bedroom: int = Field(0, ge=0, le=10)
    Bathroom: int = Field(0, ge=0, le=10)
    Kitchen: int = Field(0, ge=0, le=10)
    LivingRoom: int = Field(0, ge=0, le=10)
    DiningRoom: int = Field(0, ge=0, le=10)


class RoomSqft(BaseModel):
    """Preferred area per room instance (sq ft); unset types use the standards table."""
    Bedroom: Optional[float] = Field(None, gt=0)
    Bathroom: Optional[float] = Field(None, gt=0)
    Kitchen: Optional[float] = Field(None, gt=0)
    LivingRoom: Optional[float] = Field(None, gt=0)
    DiningRoom: Optional[float] = Field(None, gt=0)


class PlanRequest(BaseModel):
    total_area: float = Field(1200, ge=50, le=5000, description="Total area in sq ft")
    room_counts: RoomCounts
    room_sqft: Optional[RoomSqft] = None
    seed: Optional[int] = Field(None, description="Seed for aspect-ratio variety; omit for deterministic packing")

    def to_engine_dict(self) -> dict:
        """Shape expected by ``RoomRequest.from_dict``."""
        hints = self.room_sqft.model_dump(exclude_none=True) if self.room_sqft else None
        return {
            "total_area": self.total_area,
            "room_counts": self.room_counts.model_dump(),
            "room_size_hints": hints,
        }


class VariationsRequest(PlanRequest):
    count: int = Field(4, ge=1)
    seed: Optional[int] = 0


class PlanResponse(BaseModel):
    status: str
    seed: Optional[int] = None
    envelope: dict
    requested_count: int
    placed_count: int
    placed_area: float
    coverage: float
    rooms: list = []
    geometry: dict = {}


class VariationsResponse(BaseModel):
    variations: list[PlanResponse] = []


class RoomTypeInfo(BaseModel):
    room_type: str
    label: str
    standard_share: float
    min_area_sqm: float
