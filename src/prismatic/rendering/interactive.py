"""Interactive matplotlib viewer: render area plus control panel."""

from __future__ import annotations

import logging

import matplotlib.pyplot as plt
from matplotlib.backend_bases import Event, MouseEvent
from matplotlib.colors import to_rgb

from prismatic.app import PrismApp
from prismatic.log import setup_default_logging
from prismatic.model import PrismSettings, ViewerConfig
from prismatic.rendering.painter import draw_scene
from prismatic.rendering.panel import ControlPanel

logger = logging.getLogger(__name__)


class PrismViewer:
    """Matplotlib window driving a :class:`~prismatic.app.PrismApp`.

    The render area fills the left of the figure and the control panel
    the right.  Mouse events in the render area drag the prism; a
    canvas timer drives the per-frame tick and repaints the scene once
    per frame, so panel edits and drags show on the next frame.

    **Mouse:**

    - **Left-drag** in the render area to rotate the prism.  Releasing
      the button or leaving the render area ends the drag.

    Args:
        app: The application state to drive.
    """

    def __init__(self, app: PrismApp) -> None:
        self.app = app
        config = app.config
        bg_rgb = to_rgb(app.scene.background)

        self.figure = plt.figure(figsize=config.figsize, dpi=config.dpi)
        self.figure.set_facecolor(bg_rgb)
        render_w = 1.0 - config.panel_width
        self.ax = self.figure.add_axes((0.0, 0.0, render_w, 1.0))
        self.panel = ControlPanel(
            self.figure, app.bindings, (render_w, 0.0, config.panel_width, 1.0),
        )
        self._sync_viewport()

        canvas = self.figure.canvas
        self._cids = [
            canvas.mpl_connect("button_press_event", self.on_press),
            canvas.mpl_connect("motion_notify_event", self.on_motion),
            canvas.mpl_connect("button_release_event", self.on_release),
            canvas.mpl_connect("axes_leave_event", self.on_leave),
            canvas.mpl_connect("resize_event", self.on_resize),
        ]
        self.timer = canvas.new_timer(interval=config.frame_interval)
        self.timer.add_callback(self.on_timer)

        self.redraw()

    # ---- Coordinates ----

    def _client_xy(self, event: MouseEvent) -> tuple[float, float]:
        """Event position with y growing downwards from the top edge."""
        return event.x, self.figure.bbox.height - event.y

    def _sync_viewport(self) -> None:
        extent = self.ax.get_window_extent()
        self.app.resize(extent.width, extent.height)

    # ---- Drawing ----

    def redraw(self) -> None:
        draw_scene(self.ax, self.app.scene, self.app.camera)
        self.figure.canvas.draw_idle()

    # ---- Event handlers ----

    def on_press(self, event: MouseEvent) -> None:
        if event.inaxes is not self.ax or event.button != 1:
            return
        self.app.pointer_down(*self._client_xy(event))

    def on_motion(self, event: MouseEvent) -> None:
        self.app.pointer_move(*self._client_xy(event))

    def on_release(self, event: MouseEvent) -> None:
        self.app.pointer_up()

    def on_leave(self, event: Event) -> None:
        if getattr(event, "inaxes", None) is self.ax:
            self.app.pointer_leave()

    def on_resize(self, event: Event) -> None:
        self._sync_viewport()
        self.redraw()

    def on_timer(self) -> None:
        self.app.tick()
        # Dust drifts every frame, so the scene is always repainted.
        self.redraw()

    # ---- Lifecycle ----

    def show(self) -> None:
        """Run the viewer until its window is closed."""
        self.timer.start()
        try:
            plt.show()
        finally:
            self.close()

    def close(self) -> None:
        """Stop the timer and release every connection."""
        self.timer.stop()
        for cid in self._cids:
            self.figure.canvas.mpl_disconnect(cid)
        self._cids = []
        self.panel.disconnect()
        self.app.close()


def run_viewer(
    settings: PrismSettings | None = None,
    config: ViewerConfig | None = None,
    *,
    log_level: int | str = "INFO",
) -> PrismSettings:
    """Open the interactive viewer and block until it is closed.

    Example usage::

        settings = run_viewer()
        save_config("prism.json", settings=settings)

    Args:
        settings: Initial control-panel values.
        config: Window-level configuration.
        log_level: Level for :func:`~prismatic.log.setup_default_logging`.

    Returns:
        The settings record as it was when the window closed.
    """
    setup_default_logging(log_level)
    app = PrismApp.create(settings, config)
    logger.info("Opening prism viewer")
    viewer = PrismViewer(app)
    viewer.show()
    return app.settings
