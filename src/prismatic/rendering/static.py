"""Static matplotlib renderer: :func:`render_still` entry point."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from matplotlib.figure import Figure

from prismatic.model import Camera
from prismatic.rendering.painter import draw_scene
from prismatic.rendering.shading import EXPOSURE
from prismatic.scene import PrismScene


def render_still(
    scene: PrismScene,
    output: str | Path | None = None,
    *,
    camera: Camera | None = None,
    figsize: tuple[float, float] = (6.0, 6.0),
    dpi: int = 150,
    exposure: float = EXPOSURE,
    show: bool | None = None,
) -> Figure:
    """Render one frame of *scene* as a matplotlib figure.

    Example usage::

        scene = PrismScene.compose(particle_seed=0)
        scene.set_active_shape("Single Pyramid")
        scene.render_still("pyramid.png", dpi=200)

    Args:
        scene: The scene to render.
        output: Optional file path.  The format is inferred from the
            extension.
        camera: Camera to render from.  Defaults to the fixed viewer
            camera with its aspect matched to *figsize*.
        figsize: Figure size in inches ``(width, height)``.
        dpi: Resolution for raster output formats.
        exposure: Tone-mapping exposure.
        show: Whether to call ``plt.show()``.  Defaults to ``True``
            when *output* is ``None`` and ``False`` otherwise.

    Returns:
        The matplotlib :class:`~matplotlib.figure.Figure`.
    """
    if camera is None:
        camera = Camera()
        camera.set_viewport(*figsize)

    bg_rgb = to_rgb(scene.background)
    fig, ax = plt.subplots(1, 1, figsize=figsize, dpi=dpi)
    fig.set_facecolor(bg_rgb)
    fig.subplots_adjust(left=0, right=1, bottom=0, top=1)

    draw_scene(ax, scene, camera, exposure=exposure)

    if output is not None:
        fig.savefig(output, dpi=dpi, facecolor=bg_rgb)

    if show is None:
        show = output is None
    if show:
        plt.show()

    return fig
