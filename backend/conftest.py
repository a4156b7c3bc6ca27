"""Shared fixtures for plan engine tests."""
import pytest

from services.plan_engine import EngineConfig, PlanGenerator, RoomRequest, RoomType


@pytest.fixture
def config():
    return EngineConfig()


@pytest.fixture
def generator(config):
    return PlanGenerator(config)


@pytest.fixture
def two_bed_request():
    """1200 sq ft: 2 bedrooms, 2 bathrooms, kitchen, living, dining."""
    return RoomRequest(
        total_area=1200,
        room_counts={
            RoomType.BEDROOM: 2,
            RoomType.BATHROOM: 2,
            RoomType.KITCHEN: 1,
            RoomType.LIVING_ROOM: 1,
            RoomType.DINING_ROOM: 1,
        },
    )


@pytest.fixture
def empty_request():
    return RoomRequest(total_area=1200, room_counts={rt: 0 for rt in RoomType})
