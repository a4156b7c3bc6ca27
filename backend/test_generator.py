"""End-to-end plan generation: statuses, layout invariants and determinism."""
import pytest

from services.plan_engine import (
    InvalidPlanRequest, PlanGenerator, PlanStatus, RoomRequest, RoomType, WallSide,
)
from services.plan_engine.geometry_utils import detect_overlaps, rooms_within_envelope
from services.plan_engine.openings import exterior_walls
from services.plan_engine.settings import SQFT_TO_SQM

OPPOSITE = {
    WallSide.NORTH: WallSide.SOUTH,
    WallSide.SOUTH: WallSide.NORTH,
    WallSide.EAST: WallSide.WEST,
    WallSide.WEST: WallSide.EAST,
}


def test_two_bedroom_plan_is_complete(generator, two_bed_request):
    result = generator.generate(two_bed_request)
    assert result.status == PlanStatus.COMPLETE
    assert result.placed_count == result.requested_count == 7
    assert detect_overlaps(result.rooms) == []
    assert rooms_within_envelope(result.rooms, result.envelope)


def _snap_bound(rooms, config):
    """Largest area change grid snapping can make to *rooms*."""
    g = config.grid_size
    return sum(g / 2 * (r.width + r.height) + g * g / 4 for r in rooms)


def test_placed_area_close_to_requested(generator, two_bed_request, config):
    result = generator.generate(two_bed_request)
    target = two_bed_request.total_area * SQFT_TO_SQM
    bound = config.area_tolerance + _snap_bound(result.rooms, config)
    assert abs(result.placed_area - target) <= bound


ROOM_MIXES = [
    {RoomType.BEDROOM: 2, RoomType.BATHROOM: 2, RoomType.KITCHEN: 1,
     RoomType.LIVING_ROOM: 1, RoomType.DINING_ROOM: 1},
    {RoomType.BEDROOM: 3, RoomType.BATHROOM: 2, RoomType.KITCHEN: 1,
     RoomType.LIVING_ROOM: 1, RoomType.DINING_ROOM: 1},
    {RoomType.BEDROOM: 2, RoomType.BATHROOM: 2, RoomType.LIVING_ROOM: 1,
     RoomType.DINING_ROOM: 1},
    {RoomType.BEDROOM: 1, RoomType.BATHROOM: 1, RoomType.KITCHEN: 1},
    {RoomType.BEDROOM: 4, RoomType.BATHROOM: 3, RoomType.KITCHEN: 1,
     RoomType.LIVING_ROOM: 1},
]


@pytest.mark.parametrize("total_area", [800, 1200, 2500, 5000])
@pytest.mark.parametrize("counts", ROOM_MIXES)
def test_complete_plans_stay_within_snapping_bound(generator, config, total_area, counts):
    result = generator.generate(RoomRequest(total_area=total_area, room_counts=counts))
    if result.status is not PlanStatus.COMPLETE:
        pytest.skip(f"{result.status.value} plan; dropped rooms lower the placed area")
    target = total_area * SQFT_TO_SQM
    bound = config.area_tolerance + _snap_bound(result.rooms, config)
    assert abs(result.placed_area - target) <= bound + 1e-9


def test_doors_are_symmetric_and_on_shared_span(generator, two_bed_request):
    result = generator.generate(two_bed_request)
    by_id = {r.id: r for r in result.rooms}
    assert any(r.doors for r in result.rooms)

    for room in result.rooms:
        for door in room.doors:
            other = by_id[door.connects_to]
            mirror = [d for d in other.doors if d.connects_to == room.id]
            assert len(mirror) == 1
            assert mirror[0].wall == OPPOSITE[door.wall]
            assert mirror[0].pos == pytest.approx(door.pos)

            lo_a, hi_a = room.wall_span(door.wall)
            lo_b, hi_b = other.wall_span(mirror[0].wall)
            assert max(lo_a, lo_b) <= door.pos <= min(hi_a, hi_b)


def test_windows_on_envelope_boundary_only(generator, two_bed_request, config):
    result = generator.generate(two_bed_request)
    for room in result.rooms:
        exterior = exterior_walls(room, result.envelope, config)
        door_walls = {d.wall for d in room.doors}
        for window in room.windows:
            assert window.wall in exterior
            assert window.wall not in door_walls


def test_exterior_rooms_have_openings(generator, two_bed_request, config):
    result = generator.generate(two_bed_request)
    exterior_rooms = [r for r in result.rooms if exterior_walls(r, result.envelope, config)]
    assert exterior_rooms
    for room in exterior_rooms:
        assert room.doors or room.windows
    assert any(r.windows for r in result.rooms)


def test_geometry_matches_rooms(generator, two_bed_request):
    result = generator.generate(two_bed_request)
    assert len(result.geometry.floors) == 7
    assert {b.room_id for b in result.geometry.boxes} == {r.id for r in result.rooms}
    n_windows = sum(len(r.windows) for r in result.rooms)
    assert sum(1 for b in result.geometry.boxes if b.part == "sill") == n_windows


def test_generation_is_idempotent(generator, two_bed_request):
    assert generator.generate(two_bed_request).to_dict() == generator.generate(two_bed_request).to_dict()


def test_seeded_generation_is_reproducible(generator, two_bed_request):
    first = generator.generate(two_bed_request, seed=11)
    second = generator.generate(two_bed_request, seed=11)
    assert first.to_dict() == second.to_dict()
    assert detect_overlaps(first.rooms) == []


def test_empty_request_gives_empty_plan(generator, empty_request):
    result = generator.generate(empty_request)
    assert result.status == PlanStatus.EMPTY
    assert result.rooms == []
    assert result.geometry.is_empty
    assert not result.has_layout


def test_degenerate_envelope_drops_room_without_error(config):
    skinny = PlanGenerator(config.with_overrides(envelope_aspect=400.0))
    request = RoomRequest(total_area=5000, room_counts={RoomType.LIVING_ROOM: 1})
    result = skinny.generate(request)
    assert result.placed_count <= result.requested_count
    assert result.status == PlanStatus.UNPLACEABLE
    assert result.geometry.is_empty


def test_partial_plan_reported(config):
    # Without circulation slack the living room leaves only 1 m strips
    tight = PlanGenerator(config.with_overrides(circulation_factor=1.0, envelope_aspect=1.0))
    request = RoomRequest(total_area=500, room_counts={
        RoomType.LIVING_ROOM: 1, RoomType.KITCHEN: 1,
    })
    result = tight.generate(request)
    assert result.status == PlanStatus.PARTIAL
    assert result.requested_count == 2
    assert [r.id for r in result.rooms] == ["LivingRoom-1"]
    assert result.has_layout


def test_invalid_request_raises(generator):
    with pytest.raises(InvalidPlanRequest):
        generator.generate(RoomRequest(total_area=1, room_counts={RoomType.BEDROOM: 1}))


def test_variations_reproducible_and_valid(generator, two_bed_request):
    first = generator.generate_variations(two_bed_request, count=3, seed=5)
    second = generator.generate_variations(two_bed_request, count=3, seed=5)
    assert [r.seed for r in first] == [5, 6, 7]
    assert [r.to_dict() for r in first] == [r.to_dict() for r in second]
    for result in first:
        assert detect_overlaps(result.rooms) == []
        assert rooms_within_envelope(result.rooms, result.envelope)


def test_result_dict_shape(generator, two_bed_request):
    data = generator.generate(two_bed_request).to_dict()
    assert data["status"] == "complete"
    assert data["envelope"] == {"width": 14.5, "depth": 9.5, "area": 137.75}
    assert 0 < data["coverage"] <= 1
    room = data["rooms"][0]
    assert set(room) >= {"id", "type", "x", "y", "width", "height", "doors", "windows", "label"}
    assert room["label"].startswith("Living Room\n")
