from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np



@dataclass
class AmbientLight:
    """Uniform light added to every lit surface.

    Attributes:
        colour: Light colour, any matplotlib colour string.
        intensity: Non-negative scale factor.
    """

    colour: str = "white"
    intensity: float = 0.03

    def __post_init__(self) -> None:
        if self.intensity < 0:
            raise ValueError(
                f"intensity must be non-negative, got {self.intensity}"
            )


@dataclass
class SpotLight:
    """Cone-shaped light aimed at a fixed target.

    The light's position is its scene-graph node position; only the
    target and the cone parameters live here.

    Attributes:
        colour: Light colour, any matplotlib colour string.
        intensity: Luminous intensity.  Runtime-adjustable.
        target: World-space point the cone axis passes through.
        angle: Half-angle of the cone in radians, in ``(0, pi/2]``.
        penumbra: Fraction of the cone over which light fades to zero,
            in ``[0, 1]``.
        decay: Exponent of the distance falloff.
        distance: Cut-off distance; ``0`` disables the cut-off.
    """

    colour: str = "white"
    intensity: float = 200.0
    target: np.ndarray = field(
        default_factory=lambda: np.zeros(3, dtype=float)
    )
    angle: float = math.pi / 3
    penumbra: float = 0.0
    decay: float = 2.0
    distance: float = 0.0

    def __post_init__(self) -> None:
        self.target = np.asarray(self.target, dtype=float)
        if self.target.shape != (3,):
            raise ValueError(
                f"target must have shape (3,), got {self.target.shape}"
            )
        if self.intensity < 0:
            raise ValueError(
                f"intensity must be non-negative, got {self.intensity}"
            )
        if not 0.0 < self.angle <= math.pi / 2:
            raise ValueError(
                f"angle must be in (0, pi/2], got {self.angle}"
            )
        if not 0.0 <= self.penumbra <= 1.0:
            raise ValueError(
                f"penumbra must be between 0.0 and 1.0, got {self.penumbra}"
            )
        if self.distance < 0:
            raise ValueError(
                f"distance must be non-negative, got {self.distance}"
            )
