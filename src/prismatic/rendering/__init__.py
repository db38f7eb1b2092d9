"""Rendering: depth-sorted matplotlib output (static and interactive)."""

from prismatic.rendering.interactive import PrismViewer, run_viewer
from prismatic.rendering.panel import ControlPanel
from prismatic.rendering.static import render_still

__all__ = [
    "ControlPanel",
    "PrismViewer",
    "render_still",
    "run_viewer",
]
