"""trimesh scene assembly from plan geometry."""
import numpy as np

from services.plan_engine import PlacedRoom, RoomType, build_geometry, generate_plan
from services.plan_engine.mesh import build_scene, floor_mesh, wall_mesh


def test_scene_has_one_node_per_primitive(config):
    room = PlacedRoom(id="B", type=RoomType.BEDROOM, x=0.0, y=0.0, width=4.0, height=3.0)
    geo = build_geometry([room], config)
    scene = build_scene(geo, config)

    assert len(scene.geometry) == len(geo.floors) + len(geo.boxes)
    assert "B:floor" in scene.geometry


def test_scene_bounds_span_floor_to_wall_top(config):
    room = PlacedRoom(id="B", type=RoomType.BEDROOM, x=0.0, y=0.0, width=4.0, height=3.0)
    scene = build_scene(build_geometry([room], config), config)
    lo, hi = scene.bounds
    t = config.wall_thickness
    assert np.allclose(lo, [-t / 2, -t / 2, -config.floor_thickness])
    assert np.allclose(hi, [4.0 + t / 2, 3.0 + t / 2, config.wall_height])


def test_wall_mesh_matches_box(config):
    geo = build_geometry(
        [PlacedRoom(id="K", type=RoomType.KITCHEN, x=1.0, y=1.0, width=3.0, height=3.0)], config)
    box = geo.boxes[0]
    mesh = wall_mesh(box, config)
    assert np.allclose(mesh.extents, box.size)
    assert np.allclose(mesh.bounds.mean(axis=0), box.center)
    assert tuple(mesh.visual.face_colors[0]) == config.wall_color


def test_floor_mesh_top_at_zero_and_colored(config):
    geo = build_geometry(
        [PlacedRoom(id="L", type=RoomType.LIVING_ROOM, x=0.0, y=0.0, width=5.0, height=4.0)], config)
    mesh = floor_mesh(geo.floors[0], config)
    assert np.isclose(mesh.bounds[1][2], 0.0)
    assert tuple(mesh.visual.face_colors[0]) == config.floor_color("LivingRoom")


def test_full_plan_scene(two_bed_request, config):
    result = generate_plan(two_bed_request, config)
    scene = build_scene(result.geometry, config)
    assert len(scene.geometry) == len(result.geometry.floors) + len(result.geometry.boxes)
