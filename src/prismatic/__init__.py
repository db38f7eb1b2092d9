"""Prismatic: an interactive glass prism in a beam of light.

A transmissive, dispersive glass solid (a single square pyramid or a
gapped pair of pyramids) sits in a dark, foggy scene lit by a narrow
spotlight.  The prism can be turned by dragging, spun automatically and
restyled from a panel of controls.

Example usage::

    from prismatic import run_viewer

    run_viewer()

or, for a still image::

    from prismatic import PrismScene

    scene = PrismScene.compose(particle_seed=0)
    scene.render_still("prism.png")
"""

from prismatic.app import PrismApp
from prismatic.construction.config import ConfigSet, load_config, save_config
from prismatic.construction.scene_builders import compose_scene
from prismatic.controls import (
    ControlBindings,
    ParameterSpec,
    RangeHint,
    default_bindings,
)
from prismatic.environment import EnvironmentLoader, read_environment
from prismatic.interaction import InteractionController, PointerState
from prismatic.log import setup_default_logging
from prismatic.model import (
    AmbientLight,
    BeamMaterial,
    Camera,
    Environment,
    Fog,
    GlassMaterial,
    MeshGeometry,
    PointsMaterial,
    PrismSettings,
    SceneGraph,
    ShapeKind,
    Solid,
    SpotLight,
    ViewerConfig,
)
from prismatic.rendering import ControlPanel, PrismViewer, render_still, run_viewer
from prismatic.scene import PrismScene

__all__ = [
    "AmbientLight",
    "BeamMaterial",
    "Camera",
    "ConfigSet",
    "ControlBindings",
    "ControlPanel",
    "Environment",
    "EnvironmentLoader",
    "Fog",
    "GlassMaterial",
    "InteractionController",
    "MeshGeometry",
    "ParameterSpec",
    "PointerState",
    "PointsMaterial",
    "PrismApp",
    "PrismScene",
    "PrismSettings",
    "PrismViewer",
    "RangeHint",
    "SceneGraph",
    "ShapeKind",
    "Solid",
    "SpotLight",
    "ViewerConfig",
    "compose_scene",
    "default_bindings",
    "load_config",
    "read_environment",
    "render_still",
    "run_viewer",
    "save_config",
    "setup_default_logging",
]
