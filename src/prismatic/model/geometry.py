from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from scipy.spatial.transform import Rotation


def euler_matrix(angles: np.ndarray | tuple[float, float, float]) -> np.ndarray:
    """Rotation matrix for intrinsic XYZ Euler *angles* (radians).

    The result is ``Rx(a) @ Ry(b) @ Rz(c)``, the convention used for
    node rotations throughout the scene graph.
    """
    return Rotation.from_euler("XYZ", np.asarray(angles, dtype=float)).as_matrix()


@dataclass
class MeshGeometry:
    """Triangle mesh in local coordinates.

    Attributes:
        vertices: Vertex positions, shape ``(n_vertices, 3)``.
        faces: Vertex indices per triangle, shape ``(n_faces, 3)``.
        uvs: Optional texture coordinates, shape ``(n_vertices, 2)``.

    Raises:
        ValueError: If the arrays have the wrong shape or a face
            references a vertex that does not exist.
    """

    vertices: np.ndarray
    faces: np.ndarray
    uvs: np.ndarray | None = None

    def __post_init__(self) -> None:
        self.vertices = np.asarray(self.vertices, dtype=float)
        self.faces = np.asarray(self.faces, dtype=int)
        if self.vertices.ndim != 2 or self.vertices.shape[1] != 3:
            raise ValueError(
                f"vertices must have shape (n, 3), got {self.vertices.shape}"
            )
        if self.faces.ndim != 2 or self.faces.shape[1] != 3:
            raise ValueError(
                f"faces must have shape (m, 3), got {self.faces.shape}"
            )
        if self.faces.size and (
            self.faces.min() < 0 or self.faces.max() >= len(self.vertices)
        ):
            raise ValueError("faces reference vertices out of range")
        if self.uvs is not None:
            self.uvs = np.asarray(self.uvs, dtype=float)
            if self.uvs.shape != (len(self.vertices), 2):
                raise ValueError(
                    f"uvs must have shape ({len(self.vertices)}, 2), "
                    f"got {self.uvs.shape}"
                )

    def rotate_y(self, angle: float) -> MeshGeometry:
        """Rotate the vertices about the Y axis in place.

        Returns ``self`` so calls can be chained.
        """
        c, s = np.cos(angle), np.sin(angle)
        rot = np.array([
            [ c,  0.0,  s],
            [0.0, 1.0, 0.0],
            [-s,  0.0,  c],
        ])
        self.vertices = self.vertices @ rot.T
        return self

    def face_normals(self) -> np.ndarray:
        """Unit normals of every face, shape ``(n_faces, 3)``.

        Degenerate faces get a zero normal.
        """
        tri = self.vertices[self.faces]
        n = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
        length = np.linalg.norm(n, axis=1, keepdims=True)
        return np.divide(n, length, out=np.zeros_like(n), where=length > 1e-12)

    def copy(self) -> MeshGeometry:
        return MeshGeometry(
            vertices=self.vertices.copy(),
            faces=self.faces.copy(),
            uvs=None if self.uvs is None else self.uvs.copy(),
        )


@dataclass
class Solid:
    """A mesh geometry with a local placement, not yet in a scene graph.

    Attributes:
        geometry: The mesh in local coordinates.
        position: Translation relative to the parent node.
        rotation: Intrinsic XYZ Euler angles in radians.
    """

    geometry: MeshGeometry
    position: np.ndarray = field(
        default_factory=lambda: np.zeros(3, dtype=float)
    )
    rotation: np.ndarray = field(
        default_factory=lambda: np.zeros(3, dtype=float)
    )

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=float)
        self.rotation = np.asarray(self.rotation, dtype=float)
        if self.position.shape != (3,):
            raise ValueError(
                f"position must have shape (3,), got {self.position.shape}"
            )
        if self.rotation.shape != (3,):
            raise ValueError(
                f"rotation must have shape (3,), got {self.rotation.shape}"
            )
