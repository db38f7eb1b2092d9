"""Pointer-drag and auto-rotate control of the prism orientation."""

from __future__ import annotations

from enum import StrEnum

from prismatic._constants import AUTO_ROTATE_STEP, DRAG_SENSITIVITY, PARTICLE_DRIFT
from prismatic.controls import ControlBindings
from prismatic.scene import PrismScene


class PointerState(StrEnum):
    """Whether the pointer is currently dragging the prism.

    Attributes:
        IDLE: No button held inside the canvas.
        DRAGGING: Button pressed inside the canvas and not yet released.
    """

    IDLE = "idle"
    DRAGGING = "dragging"


class InteractionController:
    """Turn pointer events and frame ticks into orientation writes.

    Pointer coordinates are client coordinates: x grows to the right
    and y grows downwards.  Dragging right turns the prism about Y,
    dragging down turns it about X.  Every write goes through
    *bindings*, so the settings record, the scene and any panel display
    stay in step.

    While the pointer is down, auto-rotation is skipped for that tick,
    whether or not the pointer moved.

    Args:
        bindings: The settings/control binding layer.
        scene: Scene whose dust particles drift on each tick, or
            ``None`` to skip the drift.
        sensitivity: Radians per pixel of drag.
        auto_rotate_step: Radians per tick at an auto-rotate speed of 1.
    """

    def __init__(
        self,
        bindings: ControlBindings,
        scene: PrismScene | None = None,
        *,
        sensitivity: float = DRAG_SENSITIVITY,
        auto_rotate_step: float = AUTO_ROTATE_STEP,
    ) -> None:
        self.bindings = bindings
        self.scene = scene
        self.sensitivity = sensitivity
        self.auto_rotate_step = auto_rotate_step
        self.state = PointerState.IDLE
        self._last_xy: tuple[float, float] = (0.0, 0.0)

    @property
    def dragging(self) -> bool:
        return self.state is PointerState.DRAGGING

    def pointer_down(self, x: float, y: float) -> None:
        self.state = PointerState.DRAGGING
        self._last_xy = (x, y)

    def pointer_move(self, x: float, y: float) -> bool:
        """Rotate by the distance moved since the last event.

        Returns:
            ``True`` if the orientation changed.
        """
        if not self.dragging:
            return False
        x0, y0 = self._last_xy
        self._last_xy = (x, y)
        dx, dy = x - x0, y - y0
        if dx == 0 and dy == 0:
            return False
        settings = self.bindings.settings
        self.bindings.update({
            "rotate_y": settings.rotate_y + dx * self.sensitivity,
            "rotate_x": settings.rotate_x + dy * self.sensitivity,
        })
        return True

    def pointer_up(self) -> None:
        self.state = PointerState.IDLE

    def pointer_leave(self) -> None:
        self.state = PointerState.IDLE

    def tick(self) -> bool:
        """Advance one animation frame.

        Returns:
            ``True`` if auto-rotation changed the orientation.
        """
        if self.scene is not None:
            self.scene.advance_particles(PARTICLE_DRIFT)
        settings = self.bindings.settings
        if not settings.auto_rotate or self.dragging:
            return False
        self.bindings.set(
            "rotate_y",
            settings.rotate_y + settings.auto_rotate_speed * self.auto_rotate_step,
        )
        return True
