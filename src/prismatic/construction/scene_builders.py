"""Assemble the default prism scene."""

from __future__ import annotations

import logging
import math

import numpy as np

from prismatic._constants import (
    BEAM_LENGTH,
    BIPYRAMID_HEIGHT,
    BIPYRAMID_RADIUS,
    SINGLE_PYRAMID_HEIGHT,
    SINGLE_PYRAMID_RADIUS,
    SPOT_ANGLE,
    SPOT_POSITION,
)
from prismatic.construction.geometry import (
    beam_geometry,
    build_bipyramid_pair,
    build_single_pyramid,
)
from prismatic.construction.particles import scatter_particles
from prismatic.model import (
    AmbientLight,
    BeamMaterial,
    Fog,
    GlassMaterial,
    PointsMaterial,
    SceneGraph,
    ShapeKind,
    Solid,
    SpotLight,
)
from prismatic.scene import PrismScene

logger = logging.getLogger(__name__)


def compose_scene(
    *,
    material: GlassMaterial | None = None,
    gap: float = 0.15,
    shape: ShapeKind | str = ShapeKind.BI_PYRAMID,
    orientation: tuple[float, float, float] = (math.pi / 6, math.pi / 4, 0.0),
    particle_seed: np.random.Generator | int | None = None,
) -> PrismScene:
    """Build the prism scene with every entity it will ever need.

    Both solids are created up front; *shape* only decides which one
    starts visible.  All three pyramid meshes reference one glass
    material slot.

    Args:
        material: The shared glass material.  Defaults to a fresh
            :class:`GlassMaterial`.
        gap: Initial bi-pyramid gap.
        shape: The solid that starts visible.
        orientation: Initial prism rotation ``(x, y, z)`` in radians.
        particle_seed: Seed or ``Generator`` for the dust layout.

    Returns:
        The composed :class:`PrismScene`.
    """
    graph = SceneGraph()
    glass = graph.add_material(material if material is not None else GlassMaterial())

    prism_group = graph.add_group("prism", rotation=orientation)

    single_group = graph.add_group("single_pyramid", prism_group)
    graph.add_mesh(
        "single_pyramid_mesh",
        build_single_pyramid(SINGLE_PYRAMID_RADIUS, SINGLE_PYRAMID_HEIGHT),
        glass, single_group,
    )

    bipyramid_group = graph.add_group("bipyramid", prism_group)
    upper_solid, lower_solid = build_bipyramid_pair(
        BIPYRAMID_RADIUS, BIPYRAMID_HEIGHT, gap,
    )
    upper = graph.add_mesh("bipyramid_upper", upper_solid, glass, bipyramid_group)
    lower = graph.add_mesh("bipyramid_lower", lower_solid, glass, bipyramid_group)

    # ---- Lighting ----
    graph.add_light("ambient", AmbientLight(colour="white", intensity=0.03))
    spot = graph.add_light(
        "spot",
        SpotLight(
            colour="white",
            intensity=200.0,
            target=np.zeros(3),
            angle=SPOT_ANGLE,
            penumbra=0.1,
            decay=0.5,
            distance=50.0,
        ),
        position=SPOT_POSITION,
    )

    # ---- Decorative beam: apex towards the prism, wide end at the light ----
    beam_material = graph.add_material(BeamMaterial(opacity=0.25))
    beam = graph.add_mesh(
        "beam",
        Solid(
            geometry=beam_geometry(SPOT_ANGLE, BEAM_LENGTH),
            position=np.array([SPOT_POSITION[0] + BEAM_LENGTH / 2, 0.0, 0.0]),
            rotation=np.array([0.0, 0.0, -math.pi / 2]),
        ),
        beam_material,
    )
    graph.node(beam).visible = False

    # ---- Dust ----
    particles = graph.add_points(
        "dust",
        scatter_particles(rng=particle_seed),
        graph.add_material(PointsMaterial()),
    )

    scene = PrismScene(
        graph=graph,
        prism_group=prism_group,
        single_group=single_group,
        bipyramid_group=bipyramid_group,
        upper=upper,
        lower=lower,
        spot=spot,
        beam=beam,
        particles=particles,
        glass=glass,
        beam_material=beam_material,
        bipyramid_height=BIPYRAMID_HEIGHT,
        bipyramid_gap=gap,
        fog=Fog(colour="black", density=0.02),
        background="black",
    )
    scene.set_active_shape(shape)
    logger.debug("Composed scene with %d nodes", len(graph))
    return scene
