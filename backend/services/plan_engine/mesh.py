"""
trimesh scene assembly for plan geometry.

Turns the primitive list from ``build_geometry`` into colored box meshes
so an exporter can write GLB/OBJ.  Writing files is left to the caller.
"""

import logging
from typing import Optional, Sequence

import numpy as np
import trimesh

from .geometry import FloorSlab, PlanGeometry, WallBox
from .settings import EngineConfig

logger = logging.getLogger(__name__)


def _color_mesh(mesh: trimesh.Trimesh, rgba: Sequence[int]) -> trimesh.Trimesh:
    """Apply a uniform RGBA face color to *mesh*."""
    c = np.asarray(rgba, dtype=np.uint8)
    mesh.visual = trimesh.visual.ColorVisuals(mesh=mesh, face_colors=c)
    return mesh


def _make_box(size, center) -> trimesh.Trimesh:
    mesh = trimesh.creation.box(extents=list(size))
    mesh.apply_translation(list(center))
    return mesh


def wall_mesh(wall_box: WallBox, config: EngineConfig) -> trimesh.Trimesh:
    return _color_mesh(_make_box(wall_box.size, wall_box.center), config.wall_color)


def floor_mesh(slab: FloorSlab, config: EngineConfig) -> trimesh.Trimesh:
    """Thin box whose top face sits at the slab elevation."""
    t = config.floor_thickness
    cx, cy, cz = slab.center
    mesh = _make_box((slab.width, slab.depth, t), (cx, cy, cz - t / 2))
    return _color_mesh(mesh, slab.color)


def build_scene(geometry: PlanGeometry, config: Optional[EngineConfig] = None) -> trimesh.Scene:
    """
    Assemble a ``trimesh.Scene`` with one node per floor slab and wall box.

    Node names: ``<room_id>:floor`` and ``<room_id>:<wall>:<part>:<n>``.
    """
    config = config or EngineConfig()
    scene = trimesh.Scene()

    for slab in geometry.floors:
        scene.add_geometry(floor_mesh(slab, config), node_name=f"{slab.room_id}:floor",
                           geom_name=f"{slab.room_id}:floor")

    for n, wall_box in enumerate(geometry.boxes):
        name = f"{wall_box.room_id}:{wall_box.wall.value}:{wall_box.part}:{n}"
        scene.add_geometry(wall_mesh(wall_box, config), node_name=name, geom_name=name)

    logger.info(f"Scene assembled: {len(geometry.floors)} floors, {len(geometry.boxes)} wall boxes")
    return scene
