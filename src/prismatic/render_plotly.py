"""Interactive plotly 3D export of a prism scene."""

from __future__ import annotations

import numpy as np
from matplotlib.colors import to_rgb

from prismatic.model import (
    BeamMaterial,
    GlassMaterial,
    PointsMaterial,
)
from prismatic.scene import PrismScene


def _rgb_string(colour: str) -> str:
    """Convert a colour spec to a plotly-compatible ``rgb(r,g,b)`` string."""
    r, g, b = to_rgb(colour)
    return f"rgb({int(r * 255)}, {int(g * 255)}, {int(b * 255)})"


def _build_traces(scene: PrismScene) -> list:
    """One ``Mesh3d`` per visible mesh plus a ``Scatter3d`` for the dust."""
    import plotly.graph_objects as go

    graph = scene.graph
    traces = []
    for node, world in scene.visible_meshes():
        material = graph.material(node.material)
        verts = node.geometry.vertices @ world[:3, :3].T + world[:3, 3]
        faces = node.geometry.faces
        if isinstance(material, GlassMaterial):
            colour = "rgb(220, 235, 255)"
            opacity = max(0.15, 1.0 - material.transmission * 0.85)
        elif isinstance(material, BeamMaterial):
            colour = _rgb_string(material.colour)
            opacity = material.opacity
        else:
            continue
        traces.append(go.Mesh3d(
            x=verts[:, 0], y=verts[:, 1], z=verts[:, 2],
            i=faces[:, 0], j=faces[:, 1], k=faces[:, 2],
            color=colour,
            opacity=opacity,
            flatshading=True,
            name=node.name,
            hoverinfo="name",
        ))

    if graph.is_visible(scene.particles):
        node = graph.node(scene.particles)
        material: PointsMaterial = graph.material(node.material)
        world = graph.world_matrix(scene.particles)
        points = np.asarray(node.points) @ world[:3, :3].T + world[:3, 3]
        traces.append(go.Scatter3d(
            x=points[:, 0], y=points[:, 1], z=points[:, 2],
            mode="markers",
            marker=dict(
                size=2,
                color=_rgb_string(material.colour),
                opacity=material.opacity,
            ),
            name=node.name,
            hoverinfo="skip",
        ))
    return traces


def render_plotly(
    scene: PrismScene,
    *,
    width: int = 700,
    height: int = 700,
):
    """Render a PrismScene as an interactive plotly 3D figure.

    Glass and beam meshes become flat-shaded ``Mesh3d`` traces and the
    dust a ``Scatter3d`` trace.  Only what is currently visible is
    exported, so the figure shows the active shape alone.

    Args:
        scene: The PrismScene to render.
        width: Figure width in pixels.
        height: Figure height in pixels.

    Returns:
        A plotly ``Figure`` object.

    Raises:
        ImportError: If plotly is not installed.
    """
    try:
        import plotly.graph_objects as go
    except ImportError:
        raise ImportError(
            "plotly is required for render_plotly(). "
            "Install it with: pip install plotly"
        )

    fig = go.Figure(data=_build_traces(scene))
    fig.update_layout(
        scene=dict(
            aspectmode="data",
            bgcolor=_rgb_string(scene.background),
            xaxis=dict(visible=False),
            yaxis=dict(visible=False),
            zaxis=dict(visible=False),
        ),
        paper_bgcolor=_rgb_string(scene.background),
        width=width,
        height=height,
        showlegend=False,
    )
    return fig
