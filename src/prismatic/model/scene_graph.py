"""Arena-backed scene graph.

Nodes and materials live in two flat lists and are referred to by
integer handles that stay valid for the lifetime of the graph.  A mesh
refers to its material by handle, so several meshes can share one
material slot without copying it.  Nodes are never removed.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import NewType

import numpy as np

from prismatic.model.geometry import MeshGeometry, Solid, euler_matrix
from prismatic.model.lights import AmbientLight, SpotLight
from prismatic.model.material import Material

NodeHandle = NewType("NodeHandle", int)
MaterialHandle = NewType("MaterialHandle", int)


class NodeKind(StrEnum):
    """What a scene-graph node holds.

    Attributes:
        GROUP: A transform node with children only.
        MESH: A triangle mesh with a material.
        POINTS: A point cloud with a points material.
        AMBIENT_LIGHT: An :class:`AmbientLight`.
        SPOT_LIGHT: A :class:`SpotLight`.
    """

    GROUP = "group"
    MESH = "mesh"
    POINTS = "points"
    AMBIENT_LIGHT = "ambient_light"
    SPOT_LIGHT = "spot_light"


@dataclass
class Node:
    """A single entry in the arena.

    Attributes:
        name: Human-readable identifier, unique within the graph.
        kind: What the node holds.
        parent: Handle of the parent node, ``None`` for the root.
        children: Handles of child nodes in insertion order.
        position: Translation relative to the parent.
        rotation: Intrinsic XYZ Euler angles relative to the parent.
        visible: Local visibility flag.  A node is drawn only if it and
            all of its ancestors are visible.
        geometry: Mesh geometry for ``MESH`` nodes.
        points: Point positions, shape ``(n, 3)``, for ``POINTS`` nodes.
        material: Material handle for ``MESH`` and ``POINTS`` nodes.
        light: Light payload for light nodes.
    """

    name: str
    kind: NodeKind
    parent: NodeHandle | None = None
    children: list[NodeHandle] = field(default_factory=list)
    position: np.ndarray = field(
        default_factory=lambda: np.zeros(3, dtype=float)
    )
    rotation: np.ndarray = field(
        default_factory=lambda: np.zeros(3, dtype=float)
    )
    visible: bool = True
    geometry: MeshGeometry | None = None
    points: np.ndarray | None = None
    material: MaterialHandle | None = None
    light: AmbientLight | SpotLight | None = None

    def local_matrix(self) -> np.ndarray:
        """4x4 transform from this node's space to its parent's."""
        m = np.eye(4)
        m[:3, :3] = euler_matrix(self.rotation)
        m[:3, 3] = self.position
        return m


class SceneGraph:
    """Flat arena of nodes and materials addressed by stable handles."""

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._materials: list[Material] = []
        self._names: dict[str, NodeHandle] = {}
        self._root = self._insert(Node(name="root", kind=NodeKind.GROUP), None)

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> NodeHandle:
        return self._root

    # ---- Materials ----

    def add_material(self, material: Material) -> MaterialHandle:
        """Store *material* in its own slot and return the slot handle."""
        self._materials.append(material)
        return MaterialHandle(len(self._materials) - 1)

    def material(self, handle: MaterialHandle) -> Material:
        if not 0 <= handle < len(self._materials):
            raise ValueError(f"unknown material handle {handle}")
        return self._materials[handle]

    def users_of(self, handle: MaterialHandle) -> list[NodeHandle]:
        """Handles of every node referencing material slot *handle*."""
        self.material(handle)
        return [
            NodeHandle(i) for i, node in enumerate(self._nodes)
            if node.material == handle
        ]

    # ---- Nodes ----

    def node(self, handle: NodeHandle) -> Node:
        if not 0 <= handle < len(self._nodes):
            raise ValueError(f"unknown node handle {handle}")
        return self._nodes[handle]

    def find(self, name: str) -> NodeHandle:
        """Return the handle of the node called *name*."""
        try:
            return self._names[name]
        except KeyError:
            raise ValueError(f"no node named {name!r}") from None

    def add_group(
        self,
        name: str,
        parent: NodeHandle | None = None,
        *,
        position: tuple[float, float, float] = (0.0, 0.0, 0.0),
        rotation: tuple[float, float, float] = (0.0, 0.0, 0.0),
    ) -> NodeHandle:
        node = Node(
            name=name, kind=NodeKind.GROUP,
            position=np.array(position, dtype=float),
            rotation=np.array(rotation, dtype=float),
        )
        return self._insert(node, parent)

    def add_mesh(
        self,
        name: str,
        solid: Solid,
        material: MaterialHandle,
        parent: NodeHandle | None = None,
    ) -> NodeHandle:
        """Add a mesh node placed where *solid* says, sharing *material*."""
        self.material(material)
        node = Node(
            name=name, kind=NodeKind.MESH,
            position=solid.position.copy(),
            rotation=solid.rotation.copy(),
            geometry=solid.geometry,
            material=material,
        )
        return self._insert(node, parent)

    def add_points(
        self,
        name: str,
        points: np.ndarray,
        material: MaterialHandle,
        parent: NodeHandle | None = None,
    ) -> NodeHandle:
        self.material(material)
        points = np.asarray(points, dtype=float)
        if points.ndim != 2 or points.shape[1] != 3:
            raise ValueError(
                f"points must have shape (n, 3), got {points.shape}"
            )
        node = Node(
            name=name, kind=NodeKind.POINTS, points=points, material=material,
        )
        return self._insert(node, parent)

    def add_light(
        self,
        name: str,
        light: AmbientLight | SpotLight,
        parent: NodeHandle | None = None,
        *,
        position: tuple[float, float, float] = (0.0, 0.0, 0.0),
    ) -> NodeHandle:
        kind = (
            NodeKind.SPOT_LIGHT if isinstance(light, SpotLight)
            else NodeKind.AMBIENT_LIGHT
        )
        node = Node(
            name=name, kind=kind, light=light,
            position=np.array(position, dtype=float),
        )
        return self._insert(node, parent)

    def handles(self, kind: NodeKind | None = None) -> Iterator[NodeHandle]:
        """Iterate node handles in insertion order, optionally by kind."""
        for i, node in enumerate(self._nodes):
            if kind is None or node.kind == kind:
                yield NodeHandle(i)

    # ---- Transforms and visibility ----

    def world_matrix(self, handle: NodeHandle) -> np.ndarray:
        """4x4 transform from *handle*'s local space to world space."""
        m = self.node(handle).local_matrix()
        parent = self._nodes[handle].parent
        while parent is not None:
            m = self._nodes[parent].local_matrix() @ m
            parent = self._nodes[parent].parent
        return m

    def world_position(self, handle: NodeHandle) -> np.ndarray:
        return self.world_matrix(handle)[:3, 3].copy()

    def is_visible(self, handle: NodeHandle) -> bool:
        """Whether *handle* and every ancestor are visible."""
        current: NodeHandle | None = handle
        while current is not None:
            node = self.node(current)
            if not node.visible:
                return False
            current = node.parent
        return True

    def _insert(self, node: Node, parent: NodeHandle | None) -> NodeHandle:
        if node.name in self._names:
            raise ValueError(f"duplicate node name {node.name!r}")
        if parent is None and self._nodes:
            parent = self._root
        if parent is not None:
            self.node(parent)
        handle = NodeHandle(len(self._nodes))
        node.parent = parent
        self._nodes.append(node)
        self._names[node.name] = handle
        if parent is not None:
            self._nodes[parent].children.append(handle)
        return handle
