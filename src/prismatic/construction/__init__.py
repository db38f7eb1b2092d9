"""Procedural construction of prism geometry and dust particles.

The scene assembly in :mod:`prismatic.construction.scene_builders`
depends on :mod:`prismatic.scene` and is imported from there directly.
"""

from prismatic.construction.geometry import (
    beam_geometry,
    bipyramid_offsets,
    build_bipyramid_pair,
    build_single_pyramid,
    cone_geometry,
    pyramid_geometry,
)
from prismatic.construction.particles import scatter_particles

__all__ = [
    "beam_geometry",
    "bipyramid_offsets",
    "build_bipyramid_pair",
    "build_single_pyramid",
    "cone_geometry",
    "pyramid_geometry",
    "scatter_particles",
]
