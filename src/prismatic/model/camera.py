from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


@dataclass
class Camera:
    """Fixed perspective camera.

    The camera sits at :attr:`position` looking at :attr:`target` with
    +Y as the up hint.  Only the aspect ratio changes at runtime, when
    the output surface is resized.

    Attributes:
        position: Eye position in world space.
        target: Point the camera looks at.
        fov: Vertical field of view in degrees.
        aspect: Viewport width divided by height.
        near: Near clipping distance.
        far: Far clipping distance.
    """

    position: np.ndarray = field(
        default_factory=lambda: np.array([0.0, 0.0, 8.0])
    )
    target: np.ndarray = field(
        default_factory=lambda: np.zeros(3, dtype=float)
    )
    fov: float = 50.0
    aspect: float = 1.0
    near: float = 0.1
    far: float = 100.0

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=float)
        self.target = np.asarray(self.target, dtype=float)
        if not 0.0 < self.fov < 180.0:
            raise ValueError(f"fov must be in (0, 180), got {self.fov}")
        if self.aspect <= 0:
            raise ValueError(f"aspect must be positive, got {self.aspect}")
        if not 0.0 < self.near < self.far:
            raise ValueError(
                f"need 0 < near < far, got near={self.near}, far={self.far}"
            )
        if np.linalg.norm(self.target - self.position) < 1e-12:
            raise ValueError("position and target must differ")

    def set_viewport(self, width: float, height: float) -> None:
        """Update the aspect ratio for an output surface of this size.

        Zero-sized surfaces (minimised windows) are ignored.
        """
        if width > 0 and height > 0:
            self.aspect = width / height

    @property
    def rotation(self) -> np.ndarray:
        """3x3 world-to-camera rotation; rows are right, up, backward."""
        back = self.position - self.target
        back /= np.linalg.norm(back)
        right = np.cross((0.0, 1.0, 0.0), back)
        if np.linalg.norm(right) < 1e-12:
            right = np.array([1.0, 0.0, 0.0])
        right /= np.linalg.norm(right)
        up = np.cross(back, right)
        return np.array([right, up, back])

    def to_camera(self, points: np.ndarray) -> np.ndarray:
        """Transform world *points* ``(n, 3)`` into camera space.

        The camera looks down its own -Z axis.
        """
        points = np.asarray(points, dtype=float)
        return (points - self.position) @ self.rotation.T

    def project(self, points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Project world *points* to normalised device coordinates.

        Args:
            points: Array of shape ``(n, 3)``.

        Returns:
            Tuple of ``(ndc_xy, depth)`` where *ndc_xy* has shape
            ``(n, 2)`` with the visible range ``[-1, 1]`` on both axes,
            and *depth* is the positive distance along the viewing axis
            (larger = further from the camera).  Points at or behind
            the eye get ``nan`` coordinates.
        """
        cam = self.to_camera(points)
        depth = -cam[:, 2]
        f = 1.0 / math.tan(math.radians(self.fov) / 2.0)
        with np.errstate(divide="ignore", invalid="ignore"):
            x = cam[:, 0] * f / (self.aspect * depth)
            y = cam[:, 1] * f / depth
        xy = np.column_stack([x, y])
        xy[depth <= 0] = np.nan
        return xy, depth

    def in_clip_range(self, depth: np.ndarray) -> np.ndarray:
        """Boolean mask of depths between the near and far planes."""
        depth = np.asarray(depth, dtype=float)
        return (depth >= self.near) & (depth <= self.far)
