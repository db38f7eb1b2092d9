"""Application state shared by the event and tick handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from prismatic.construction.scene_builders import compose_scene
from prismatic.controls import ControlBindings, default_bindings
from prismatic.environment import EnvironmentLoader
from prismatic.interaction import InteractionController
from prismatic.model import Camera, PrismSettings, ViewerConfig
from prismatic.scene import PrismScene

logger = logging.getLogger(__name__)


@dataclass
class PrismApp:
    """Everything the running viewer mutates, created once at startup.

    Handlers are called one at a time from the host event loop, so the
    last write to any setting wins in program order.

    Attributes:
        scene: The composed scene.
        bindings: Settings record plus parameter callbacks.
        controller: Pointer and tick handling.
        camera: Fixed camera; only its aspect ratio changes.
        loader: Background environment loader.
        config: Window-level configuration.
    """

    scene: PrismScene
    bindings: ControlBindings
    controller: InteractionController
    camera: Camera
    loader: EnvironmentLoader
    config: ViewerConfig

    @classmethod
    def create(
        cls,
        settings: PrismSettings | None = None,
        config: ViewerConfig | None = None,
    ) -> PrismApp:
        """Compose the scene and wire every collaborator to it.

        If *config* names an environment image, its load is started in
        the background; the app works the same whether or not it ever
        arrives.
        """
        config = config if config is not None else ViewerConfig()
        settings = settings if settings is not None else PrismSettings()
        # The bindings clamp and apply the record, so the scene starts
        # from its defaults.
        scene = compose_scene(particle_seed=config.particle_seed)
        bindings = default_bindings(scene, settings)
        app = cls(
            scene=scene,
            bindings=bindings,
            controller=InteractionController(bindings, scene),
            camera=Camera(),
            loader=EnvironmentLoader(scene),
            config=config,
        )
        if config.environment_path is not None:
            app.loader.request(config.environment_path)
        return app

    @property
    def settings(self) -> PrismSettings:
        return self.bindings.settings

    def tick(self) -> bool:
        """Advance one frame.

        Returns:
            ``True`` if the orientation changed this frame.
        """
        self.loader.poll()
        return self.controller.tick()

    def pointer_down(self, x: float, y: float) -> None:
        self.controller.pointer_down(x, y)

    def pointer_move(self, x: float, y: float) -> bool:
        return self.controller.pointer_move(x, y)

    def pointer_up(self) -> None:
        self.controller.pointer_up()

    def pointer_leave(self) -> None:
        self.controller.pointer_leave()

    def resize(self, width: float, height: float) -> None:
        """Match the camera to a new output size; settings are untouched."""
        self.camera.set_viewport(width, height)
        logger.debug("Viewport resized to %sx%s", width, height)

    def close(self) -> None:
        self.loader.shutdown()
