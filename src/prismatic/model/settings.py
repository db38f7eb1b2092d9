from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum

from prismatic.model._util import _field_defaults


class ShapeKind(StrEnum):
    """Which solid is shown inside the prism group.

    Attributes:
        SINGLE_PYRAMID: One apex-up square pyramid.
        BI_PYRAMID: Two pyramids base to base, separated by a gap.
    """

    SINGLE_PYRAMID = "Single Pyramid"
    BI_PYRAMID = "Bi-Pyramid"


_BOOL_FIELDS = ("auto_rotate", "show_beam", "particles_visible")
_FLOAT_FIELDS = (
    "rotate_x", "rotate_y", "rotate_z", "auto_rotate_speed", "bipyramid_gap",
    "beam_opacity", "light_intensity", "fog_density", "transmission", "ior",
    "dispersion", "thickness", "roughness",
)


@dataclass
class PrismSettings:
    """Canonical record of every user-tunable parameter.

    This is the single source of truth for the running viewer: panel
    widgets, pointer drags and the auto-rotate tick all write here
    (through :class:`~prismatic.controls.ControlBindings`), and the
    scene mirrors it.

    Attributes:
        shape: The active solid.
        rotate_x: Prism rotation about X in radians.
        rotate_y: Prism rotation about Y in radians.
        rotate_z: Prism rotation about Z in radians.
        auto_rotate: Whether the tick advances ``rotate_y``.
        auto_rotate_speed: Auto-rotate speed multiplier.
        bipyramid_gap: Separation between the two bi-pyramid halves.
        show_beam: Whether the decorative light beam is drawn.
        beam_opacity: Opacity of the light beam.
        light_intensity: Spotlight intensity.
        fog_density: Exponential-squared fog density.
        particles_visible: Whether dust particles are drawn.
        transmission: Glass transmission.
        ior: Glass index of refraction.
        dispersion: Glass dispersion.
        thickness: Glass thickness.
        roughness: Glass roughness.
    """

    shape: ShapeKind = ShapeKind.BI_PYRAMID
    rotate_x: float = math.pi / 6
    rotate_y: float = math.pi / 4
    rotate_z: float = 0.0
    auto_rotate: bool = True
    auto_rotate_speed: float = 0.3
    bipyramid_gap: float = 0.15
    show_beam: bool = False
    beam_opacity: float = 0.25
    light_intensity: float = 200.0
    fog_density: float = 0.02
    particles_visible: bool = True
    transmission: float = 1.0
    ior: float = 2.0
    dispersion: float = 5.0
    thickness: float = 5.0
    roughness: float = 0.0

    def __post_init__(self) -> None:
        self.shape = ShapeKind(self.shape)
        for name in _BOOL_FIELDS:
            val = getattr(self, name)
            if not isinstance(val, bool):
                raise TypeError(f"{name} must be a bool, got {val!r}")
        # Ranges are enforced by the bindings; only type and finiteness here.
        for name in _FLOAT_FIELDS:
            val = getattr(self, name)
            if isinstance(val, bool) or not isinstance(val, (int, float)):
                raise TypeError(f"{name} must be a number, got {val!r}")
            if not math.isfinite(val):
                raise ValueError(f"{name} must be finite, got {val}")

    @property
    def orientation(self) -> tuple[float, float, float]:
        """The three rotation angles as an ``(x, y, z)`` tuple."""
        return (self.rotate_x, self.rotate_y, self.rotate_z)

    def to_dict(self) -> dict:
        """Serialise to a JSON-compatible dictionary.

        Fields at their default values are omitted.
        """
        d: dict = {}
        for name, default in _field_defaults(type(self)).items():
            val = getattr(self, name)
            if val != default:
                d[name] = str(val) if name == "shape" else val
        return d

    @classmethod
    def from_dict(cls, d: dict) -> PrismSettings:
        """Deserialise from a dictionary.

        Raises:
            ValueError: If *d* contains unknown keys.
        """
        known = _field_defaults(cls)
        unknown = set(d) - set(known)
        if unknown:
            raise ValueError(f"unknown settings keys: {sorted(unknown)}")
        return cls(**d)


@dataclass
class ViewerConfig:
    """Window-level configuration for the interactive viewer.

    Attributes:
        figsize: Figure size in inches ``(width, height)``.
        dpi: Figure resolution.
        frame_interval: Milliseconds between animation ticks.
        panel_width: Fraction of the figure width used by the control
            panel on the right.
        particle_seed: Seed for dust-particle placement, or ``None``
            for a fresh random layout on every run.
        environment_path: Optional image to load as the environment.
    """

    figsize: tuple[float, float] = (11.0, 7.0)
    dpi: int = 100
    frame_interval: int = 16
    panel_width: float = 0.3
    particle_seed: int | None = None
    environment_path: str | None = None

    def __post_init__(self) -> None:
        self.figsize = tuple(self.figsize)
        if len(self.figsize) != 2 or min(self.figsize) <= 0:
            raise ValueError(
                f"figsize must be two positive numbers, got {self.figsize}"
            )
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive, got {self.dpi}")
        if self.frame_interval <= 0:
            raise ValueError(
                f"frame_interval must be positive, got {self.frame_interval}"
            )
        if not 0.0 < self.panel_width < 1.0:
            raise ValueError(
                f"panel_width must be in (0, 1), got {self.panel_width}"
            )

    def to_dict(self) -> dict:
        """Serialise to a JSON-compatible dictionary.

        Fields at their default values are omitted.
        """
        d: dict = {}
        for name, default in _field_defaults(type(self)).items():
            val = getattr(self, name)
            if val != default:
                d[name] = list(val) if name == "figsize" else val
        return d

    @classmethod
    def from_dict(cls, d: dict) -> ViewerConfig:
        """Deserialise from a dictionary.

        Raises:
            ValueError: If *d* contains unknown keys.
        """
        known = _field_defaults(cls)
        unknown = set(d) - set(known)
        if unknown:
            raise ValueError(f"unknown viewer keys: {sorted(unknown)}")
        return cls(**d)
