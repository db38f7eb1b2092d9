"""Procedural meshes for the pyramid solids and the light beam."""

from __future__ import annotations

import math

import numpy as np

from prismatic._constants import BEAM_SEGMENTS, PYRAMID_SEGMENTS
from prismatic.model import MeshGeometry, Solid


def cone_geometry(
    radius: float,
    height: float,
    radial_segments: int = 8,
    height_segments: int = 1,
    open_ended: bool = False,
) -> MeshGeometry:
    """Build a cone centred on the origin with its apex pointing up.

    The apex sits at ``y = height / 2`` and the base circle at
    ``y = -height / 2``.  The first radial vertex lies on the +Z axis and
    the others follow counter-clockwise seen from above.  Faces wind
    counter-clockwise when seen from outside.  The apex is duplicated
    once per radial column so that every column has its own UV seam.

    Args:
        radius: Base radius.
        height: Apex-to-base height.
        radial_segments: Number of sides around the axis.
        height_segments: Number of rows along the axis.
        open_ended: If ``True``, the base is left open.

    Returns:
        The cone geometry with UVs (``u`` around the axis, ``v`` from
        the base at 0 to the apex at 1).

    Raises:
        ValueError: If *radius* or *height* is not positive or the
            segment counts are too small.
    """
    if radius <= 0:
        raise ValueError(f"radius must be positive, got {radius}")
    if height <= 0:
        raise ValueError(f"height must be positive, got {height}")
    if radial_segments < 3:
        raise ValueError(
            f"radial_segments must be >= 3, got {radial_segments}"
        )
    if height_segments < 1:
        raise ValueError(
            f"height_segments must be >= 1, got {height_segments}"
        )

    half = height / 2.0
    vertices: list[tuple[float, float, float]] = []
    uvs: list[tuple[float, float]] = []
    faces: list[tuple[int, int, int]] = []

    # ---- Side surface ----
    rows: list[list[int]] = []
    for iy in range(height_segments + 1):
        v = iy / height_segments
        r = v * radius
        row = []
        for ix in range(radial_segments + 1):
            u = ix / radial_segments
            theta = u * 2.0 * math.pi
            row.append(len(vertices))
            vertices.append((r * math.sin(theta), half - v * height, r * math.cos(theta)))
            uvs.append((u, 1.0 - v))
        rows.append(row)

    for ix in range(radial_segments):
        for iy in range(height_segments):
            a = rows[iy][ix]
            b = rows[iy + 1][ix]
            c = rows[iy + 1][ix + 1]
            d = rows[iy][ix + 1]
            # The apex row has zero radius, so its upper triangle is
            # degenerate and skipped.
            if iy != 0:
                faces.append((a, b, d))
            faces.append((b, c, d))

    # ---- Base cap ----
    if not open_ended:
        centres = []
        for ix in range(radial_segments):
            centres.append(len(vertices))
            vertices.append((0.0, -half, 0.0))
            uvs.append((0.5, 0.5))
        ring_start = len(vertices)
        for ix in range(radial_segments + 1):
            theta = ix / radial_segments * 2.0 * math.pi
            vertices.append((radius * math.sin(theta), -half, radius * math.cos(theta)))
            uvs.append((0.5 * math.cos(theta) + 0.5, -0.5 * math.sin(theta) + 0.5))
        for ix in range(radial_segments):
            i = ring_start + ix
            faces.append((i + 1, i, centres[ix]))

    return MeshGeometry(
        vertices=np.array(vertices),
        faces=np.array(faces),
        uvs=np.array(uvs),
    )


def pyramid_geometry(radius: float, height: float) -> MeshGeometry:
    """Four-sided pyramid with a flat face, not an edge, facing +Z."""
    return cone_geometry(radius, height, PYRAMID_SEGMENTS, 1).rotate_y(math.pi / 4)


def bipyramid_offsets(height: float, gap: float) -> tuple[float, float]:
    """Vertical offsets ``(upper, lower)`` of the two bi-pyramid halves.

    The halves sit base to base, ``gap`` apart, symmetric about the
    origin.  Both build-time placement and gap updates use this.
    """
    offset = height / 2.0 + gap / 2.0
    return offset, -offset


def build_single_pyramid(radius: float, height: float) -> Solid:
    """An apex-up pyramid centred on the origin."""
    return Solid(geometry=pyramid_geometry(radius, height))


def build_bipyramid_pair(
    radius: float, height: float, gap: float,
) -> tuple[Solid, Solid]:
    """Two congruent pyramids base to base, ``gap`` apart.

    Returns:
        ``(upper, lower)``.  The upper pyramid points up; the lower one
        is the same shape flipped by pi about X.  Each half has its own
        geometry so the two meshes are independent.
    """
    if gap < 0:
        raise ValueError(f"gap must be non-negative, got {gap}")
    upper_y, lower_y = bipyramid_offsets(height, gap)
    upper = Solid(
        geometry=pyramid_geometry(radius, height),
        position=np.array([0.0, upper_y, 0.0]),
    )
    lower = Solid(
        geometry=pyramid_geometry(radius, height),
        position=np.array([0.0, lower_y, 0.0]),
        rotation=np.array([math.pi, 0.0, 0.0]),
    )
    return upper, lower


def beam_geometry(angle: float, length: float) -> MeshGeometry:
    """Open cone that widens at the spotlight's *angle* over *length*.

    The apex points up (+Y); callers rotate the node so the apex sits
    at the light.
    """
    radius = math.tan(angle) * length
    return cone_geometry(radius, length, BEAM_SEGMENTS, 1, open_ended=True)
