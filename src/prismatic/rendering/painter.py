"""Painter's algorithm scene drawing.

Collects the triangles of every visible mesh, shades them, sorts them
back to front and draws them into a matplotlib Axes as one
PolyCollection.  Dust particles are drawn underneath as a scatter.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from matplotlib.axes import Axes
from matplotlib.collections import PolyCollection
from matplotlib.colors import to_rgb

from prismatic.model import (
    AmbientLight,
    BeamMaterial,
    Camera,
    GlassMaterial,
    NodeKind,
    PointsMaterial,
)
from prismatic.rendering.shading import EXPOSURE, beam_alpha, shade_glass
from prismatic.scene import PrismScene

_GLASS_EDGE_RGBA = (1.0, 1.0, 1.0, 0.25)
_GLASS_EDGE_WIDTH = 0.4
_PARTICLE_ZORDER = 1
_FACE_ZORDER = 2


@dataclass
class _FaceBatch:
    """Projected, shaded triangles ready to be depth sorted.

    Attributes:
        verts_2d: Screen-space triangles, shape ``(n, 3, 2)``.
        depth: Mean view depth per triangle (larger = further).
        face_rgba: Fill colour per triangle, shape ``(n, 4)``.
        edge_rgba: Edge colour per triangle, shape ``(n, 4)``.
    """

    verts_2d: np.ndarray
    depth: np.ndarray
    face_rgba: np.ndarray
    edge_rgba: np.ndarray


def _to_world(vertices: np.ndarray, world: np.ndarray) -> np.ndarray:
    return vertices @ world[:3, :3].T + world[:3, 3]


def _screen(camera: Camera, points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Project to screen space, where x spans ``[-aspect, aspect]``."""
    ndc, depth = camera.project(points)
    return ndc * np.array([camera.aspect, 1.0]), depth


def _collect_faces(scene: PrismScene, camera: Camera, exposure: float) -> list[_FaceBatch]:
    graph = scene.graph
    spot = scene.spot_light
    spot_position = graph.world_position(scene.spot)
    ambient: AmbientLight | None = None
    for handle in graph.handles(NodeKind.AMBIENT_LIGHT):
        if graph.is_visible(handle):
            ambient = graph.node(handle).light
            break

    batches: list[_FaceBatch] = []
    for node, world in scene.visible_meshes():
        material = graph.material(node.material)
        geometry = node.geometry
        verts = _to_world(geometry.vertices, world)
        tri = verts[geometry.faces]

        xy, depth = _screen(camera, verts)
        tri_depth = depth[geometry.faces]
        # Drop triangles that cross the near or far plane.
        keep = np.all(camera.in_clip_range(tri_depth), axis=1)
        if not np.any(keep):
            continue

        if isinstance(material, GlassMaterial):
            normals = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
            length = np.linalg.norm(normals, axis=1, keepdims=True)
            normals = np.divide(
                normals, length, out=np.zeros_like(normals), where=length > 1e-12,
            )
            face_rgba = shade_glass(
                normals, tri.mean(axis=1), camera.position, material,
                spot=spot if graph.is_visible(scene.spot) else None,
                spot_position=spot_position,
                ambient=ambient,
                environment=scene.environment,
                fog=scene.fog,
                exposure=exposure,
            )
            edge_rgba = np.tile(_GLASS_EDGE_RGBA, (len(face_rgba), 1))
        elif isinstance(material, BeamMaterial):
            if geometry.uvs is None:
                continue
            alpha = beam_alpha(
                geometry.uvs[geometry.faces].mean(axis=1),
                material.opacity, material.fade_power, material.edge_power,
            )
            rgb = np.tile(to_rgb(material.colour), (len(alpha), 1))
            face_rgba = np.column_stack([rgb, alpha])
            edge_rgba = np.zeros_like(face_rgba)
        else:
            continue

        batches.append(_FaceBatch(
            verts_2d=xy[geometry.faces][keep],
            depth=tri_depth.mean(axis=1)[keep],
            face_rgba=face_rgba[keep],
            edge_rgba=edge_rgba[keep],
        ))
    return batches


def _draw_particles(ax: Axes, scene: PrismScene, camera: Camera) -> None:
    graph = scene.graph
    if not graph.is_visible(scene.particles):
        return
    node = graph.node(scene.particles)
    material: PointsMaterial = graph.material(node.material)
    points = _to_world(node.points, graph.world_matrix(scene.particles))
    xy, depth = _screen(camera, points)
    keep = camera.in_clip_range(depth)
    if not np.any(keep):
        return

    # Perspective-scaled sprite size converted from screen units to
    # points: the axes spans two screen units vertically.
    focal = 1.0 / np.tan(np.radians(camera.fov) / 2.0)
    bbox = ax.get_window_extent()
    points_per_unit = bbox.height / 2.0 * 72.0 / ax.figure.dpi
    diameter = 2.0 * material.size * focal / depth[keep] * points_per_unit
    fog = scene.fog.factor(np.linalg.norm(points[keep] - camera.position, axis=1))
    rgba = np.zeros((int(keep.sum()), 4))
    rgba[:, :3] = to_rgb(material.colour)
    rgba[:, 3] = material.opacity * (1.0 - fog)

    ax.scatter(
        xy[keep, 0], xy[keep, 1],
        s=np.maximum(diameter, 0.5) ** 2,
        c=rgba,
        marker="o",
        linewidths=0,
        zorder=_PARTICLE_ZORDER,
    )


def draw_scene(
    ax: Axes,
    scene: PrismScene,
    camera: Camera,
    *,
    exposure: float = EXPOSURE,
) -> None:
    """Paint *scene* as seen by *camera* onto *ax*.

    Clears the artists of the previous draw and redraws everything.
    Does **not** create or show the figure; the caller owns the figure
    lifecycle.

    Args:
        ax: A matplotlib ``Axes`` to draw into.
        scene: The scene to render.
        camera: The camera; its aspect ratio should match *ax*.
        exposure: Tone-mapping exposure for lit surfaces.
    """
    while ax.collections:
        ax.collections[0].remove()

    ax.set_facecolor(to_rgb(scene.background))
    ax.set_xlim(-camera.aspect, camera.aspect)
    ax.set_ylim(-1.0, 1.0)
    ax.set_xticks([])
    ax.set_yticks([])
    for spine in ax.spines.values():
        spine.set_visible(False)

    _draw_particles(ax, scene, camera)

    batches = _collect_faces(scene, camera, exposure)
    if not batches:
        return
    verts = np.concatenate([b.verts_2d for b in batches])
    depth = np.concatenate([b.depth for b in batches])
    face_rgba = np.concatenate([b.face_rgba for b in batches])
    edge_rgba = np.concatenate([b.edge_rgba for b in batches])

    # Furthest first.
    order = np.argsort(-depth, kind="stable")
    ax.add_collection(PolyCollection(
        verts[order],
        facecolors=face_rgba[order],
        edgecolors=edge_rgba[order],
        linewidths=_GLASS_EDGE_WIDTH,
        zorder=_FACE_ZORDER,
    ))
