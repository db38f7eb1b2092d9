from __future__ import annotations

import numpy as np

from prismatic._constants import PARTICLE_BOX, PARTICLE_COUNT


def scatter_particles(
    count: int = PARTICLE_COUNT,
    box: tuple[float, float, float] = PARTICLE_BOX,
    *,
    rng: np.random.Generator | int | None = None,
) -> np.ndarray:
    """Uniformly random points inside an origin-centred box.

    Args:
        count: Number of points.
        box: Edge lengths of the box along X, Y and Z.
        rng: A numpy ``Generator``, or a seed passed to
            :func:`numpy.random.default_rng`.

    Returns:
        Array of shape ``(count, 3)``.

    Raises:
        ValueError: If *count* is negative or an edge length is not
            positive.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    extent = np.asarray(box, dtype=float)
    if extent.shape != (3,) or np.any(extent <= 0):
        raise ValueError(f"box must be three positive lengths, got {box}")
    if not isinstance(rng, np.random.Generator):
        rng = np.random.default_rng(rng)
    return (rng.random((count, 3)) - 0.5) * extent
