"""Core data model for prismatic: geometry, materials, lights, scene graph.

Everything is re-exported here so that ``from prismatic.model import
GlassMaterial`` works without knowing the submodule layout.
"""

from prismatic.model.atmosphere import Environment, Fog
from prismatic.model.camera import Camera
from prismatic.model.geometry import MeshGeometry, Solid, euler_matrix
from prismatic.model.lights import AmbientLight, SpotLight
from prismatic.model.material import (
    MATERIAL_RANGES,
    BeamMaterial,
    GlassMaterial,
    Material,
    PointsMaterial,
)
from prismatic.model.scene_graph import (
    MaterialHandle,
    Node,
    NodeHandle,
    NodeKind,
    SceneGraph,
)
from prismatic.model.settings import PrismSettings, ShapeKind, ViewerConfig

__all__ = [
    "AmbientLight",
    "BeamMaterial",
    "Camera",
    "Environment",
    "Fog",
    "GlassMaterial",
    "MATERIAL_RANGES",
    "Material",
    "MaterialHandle",
    "MeshGeometry",
    "Node",
    "NodeHandle",
    "NodeKind",
    "PointsMaterial",
    "PrismSettings",
    "SceneGraph",
    "ShapeKind",
    "Solid",
    "SpotLight",
    "ViewerConfig",
    "euler_matrix",
]
