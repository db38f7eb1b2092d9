"""Top-level scene: the prism group, its two solids, lights and atmosphere."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from prismatic.construction.geometry import bipyramid_offsets
from prismatic.model import (
    BeamMaterial,
    Environment,
    Fog,
    GlassMaterial,
    MaterialHandle,
    Node,
    NodeHandle,
    NodeKind,
    SceneGraph,
    ShapeKind,
    SpotLight,
)

if TYPE_CHECKING:
    from matplotlib.figure import Figure

logger = logging.getLogger(__name__)


@dataclass
class PrismScene:
    """Render-ready scene with exactly one visible solid.

    Built by :func:`~prismatic.construction.scene_builders.compose_scene`;
    every entity is created once and lives as long as the scene.  The
    handles below index into :attr:`graph`.

    Attributes:
        graph: Arena holding every node and material.
        prism_group: Group whose rotation is the user-controlled
            orientation.  Parent of both shape groups.
        single_group: Group holding the single pyramid.
        bipyramid_group: Group holding the two bi-pyramid halves.
        upper: The apex-up half of the bi-pyramid.
        lower: The apex-down half of the bi-pyramid.
        spot: The spotlight node.
        beam: The decorative light-beam mesh.
        particles: The dust point cloud.
        glass: Material slot shared by all three pyramid meshes.
        beam_material: Material slot of the light beam.
        bipyramid_height: Height of each bi-pyramid half.
        fog: Exponential-squared fog.
        background: Clear colour.
        environment: Environment image, or ``None`` until one is loaded.
    """

    graph: SceneGraph
    prism_group: NodeHandle
    single_group: NodeHandle
    bipyramid_group: NodeHandle
    upper: NodeHandle
    lower: NodeHandle
    spot: NodeHandle
    beam: NodeHandle
    particles: NodeHandle
    glass: MaterialHandle
    beam_material: MaterialHandle
    bipyramid_height: float
    bipyramid_gap: float = 0.15
    fog: Fog = field(default_factory=Fog)
    background: str = "black"
    environment: Environment | None = None

    @classmethod
    def compose(cls, **kwargs: object) -> PrismScene:
        """Build the default scene.

        See Also:
            :func:`prismatic.construction.scene_builders.compose_scene`
        """
        from prismatic.construction.scene_builders import compose_scene

        return compose_scene(**kwargs)

    # ---- Shape selection ----

    @property
    def active_shape(self) -> ShapeKind:
        if self.graph.node(self.single_group).visible:
            return ShapeKind.SINGLE_PYRAMID
        return ShapeKind.BI_PYRAMID

    def set_active_shape(self, kind: ShapeKind | str) -> None:
        """Show the solid for *kind* and hide the other one.

        Raises:
            ValueError: If *kind* is not a recognised shape.
        """
        kind = ShapeKind(kind)
        self.graph.node(self.single_group).visible = kind is ShapeKind.SINGLE_PYRAMID
        self.graph.node(self.bipyramid_group).visible = kind is ShapeKind.BI_PYRAMID
        logger.debug("Active shape: %s", kind)

    # ---- Orientation ----

    @property
    def orientation(self) -> tuple[float, float, float]:
        x, y, z = self.graph.node(self.prism_group).rotation
        return (float(x), float(y), float(z))

    def set_orientation(self, x: float, y: float, z: float) -> None:
        """Set the prism group's absolute XYZ rotation in radians."""
        self.graph.node(self.prism_group).rotation = np.array(
            [x, y, z], dtype=float,
        )

    # ---- Bi-pyramid gap ----

    def update_bipyramid_gap(self, gap: float) -> None:
        """Move both bi-pyramid halves to sit *gap* apart.

        The meshes are repositioned, never rebuilt.
        """
        if gap < 0:
            raise ValueError(f"gap must be non-negative, got {gap}")
        upper_y, lower_y = bipyramid_offsets(self.bipyramid_height, gap)
        self.graph.node(self.upper).position[1] = upper_y
        self.graph.node(self.lower).position[1] = lower_y
        self.bipyramid_gap = gap

    @property
    def bipyramid_offsets(self) -> tuple[float, float]:
        """Current ``(upper, lower)`` Y offsets of the bi-pyramid halves."""
        return (
            float(self.graph.node(self.upper).position[1]),
            float(self.graph.node(self.lower).position[1]),
        )

    # ---- Materials, lights and atmosphere ----

    @property
    def material(self) -> GlassMaterial:
        """The glass material shared by every solid."""
        return self.graph.material(self.glass)

    @property
    def spot_light(self) -> SpotLight:
        return self.graph.node(self.spot).light

    def set_light_intensity(self, intensity: float) -> None:
        if intensity < 0:
            raise ValueError(
                f"intensity must be non-negative, got {intensity}"
            )
        self.spot_light.intensity = float(intensity)

    def set_beam_visible(self, visible: bool) -> None:
        self.graph.node(self.beam).visible = bool(visible)

    def set_beam_opacity(self, opacity: float) -> None:
        material: BeamMaterial = self.graph.material(self.beam_material)
        material.opacity = float(opacity)

    def set_fog_density(self, density: float) -> None:
        if density < 0:
            raise ValueError(f"density must be non-negative, got {density}")
        self.fog.density = float(density)

    def set_particles_visible(self, visible: bool) -> None:
        self.graph.node(self.particles).visible = bool(visible)

    def advance_particles(self, step: float) -> None:
        """Turn the dust cloud by *step* radians about Y."""
        self.graph.node(self.particles).rotation[1] += step

    def set_environment(self, environment: Environment | None) -> None:
        """Install (or clear) the environment used for reflections."""
        self.environment = environment
        if environment is not None:
            logger.info("Environment installed from %s", environment.source or "<array>")

    # ---- Traversal ----

    def visible_meshes(self) -> Iterator[tuple[Node, np.ndarray]]:
        """Yield ``(node, world_matrix)`` for every drawable mesh."""
        for handle in self.graph.handles(NodeKind.MESH):
            if self.graph.is_visible(handle):
                yield self.graph.node(handle), self.graph.world_matrix(handle)

    def solids(self, kind: ShapeKind | str) -> list[NodeHandle]:
        """Mesh handles making up the solid for *kind*."""
        group = (
            self.single_group if ShapeKind(kind) is ShapeKind.SINGLE_PYRAMID
            else self.bipyramid_group
        )
        return list(self.graph.node(group).children)

    def render_still(
        self,
        output: str | Path | None = None,
        **kwargs: object,
    ) -> Figure:
        """Render a single frame with matplotlib.

        See :func:`prismatic.rendering.static.render_still` for the
        full list of keyword arguments.
        """
        from prismatic.rendering.static import render_still

        return render_still(self, output, **kwargs)
