from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from prismatic.model._util import _clamp, _field_defaults

logger = logging.getLogger(__name__)

MATERIAL_RANGES: dict[str, tuple[float, float]] = {
    "transmission": (0.0, 1.0),
    "roughness": (0.0, 1.0),
    "thickness": (0.0, 10.0),
    "ior": (1.0, 3.0),
    "dispersion": (0.0, 10.0),
}
"""Closed ranges of the runtime-tunable glass parameters."""


@dataclass
class GlassMaterial:
    """Physically based transmissive material shared by every solid.

    Only the five optical parameters are tunable.  The remaining fields
    are fixed at construction and are not constructor arguments.

    Attributes:
        transmission: Fraction of light transmitted through the surface.
        roughness: Microfacet roughness of the surface.
        thickness: Nominal thickness of the volume beneath the surface.
        ior: Index of refraction.
        dispersion: Strength of wavelength-dependent refraction.
        metalness: Always 0.
        clearcoat: Always 1.
        clearcoat_roughness: Always 0.
        double_sided: Always ``True``; back faces are shaded too.
        env_map_intensity: Always 1; scale of environment reflections.

    Raises:
        ValueError: If a tunable parameter is outside its range.
    """

    transmission: float = 1.0
    roughness: float = 0.0
    thickness: float = 5.0
    ior: float = 2.0
    dispersion: float = 5.0
    metalness: float = field(default=0.0, init=False)
    clearcoat: float = field(default=1.0, init=False)
    clearcoat_roughness: float = field(default=0.0, init=False)
    double_sided: bool = field(default=True, init=False)
    env_map_intensity: float = field(default=1.0, init=False)

    def __post_init__(self) -> None:
        for name, (lo, hi) in MATERIAL_RANGES.items():
            val = getattr(self, name)
            if not lo <= val <= hi:
                raise ValueError(
                    f"{name} must be between {lo} and {hi}, got {val}"
                )

    def set(self, name: str, value: float) -> float:
        """Set a tunable parameter, clamping it into range.

        Returns:
            The value actually stored.

        Raises:
            ValueError: If *name* is not a tunable parameter or
                *value* is not finite.
        """
        if name not in MATERIAL_RANGES:
            raise ValueError(
                f"{name!r} is not a tunable material parameter; "
                f"expected one of {sorted(MATERIAL_RANGES)}"
            )
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value}")
        lo, hi = MATERIAL_RANGES[name]
        stored = _clamp(value, lo, hi)
        if stored != value:
            logger.debug("Clamped %s from %s to %s", name, value, stored)
        setattr(self, name, stored)
        return stored

    def to_dict(self) -> dict:
        """Serialise the tunable parameters that differ from defaults."""
        return {
            name: getattr(self, name)
            for name, default in _field_defaults(type(self)).items()
            if getattr(self, name) != default
        }

    @classmethod
    def from_dict(cls, d: dict) -> GlassMaterial:
        """Deserialise from a dictionary, ignoring fixed fields."""
        return cls(**{k: d[k] for k in _field_defaults(cls) if k in d})


@dataclass
class BeamMaterial:
    """Unlit additive material for the decorative light beam.

    The beam fades towards its far end and towards its silhouette; a
    single *opacity* uniform scales the whole effect.

    Attributes:
        opacity: Overall alpha multiplier.
        colour: Beam colour, any matplotlib colour string.
        fade_power: Exponent of the fade along the beam length.
        edge_power: Exponent of the fade across the beam.
    """

    opacity: float = 0.25
    colour: str = "white"
    fade_power: float = 1.2
    edge_power: float = 0.3
    additive: bool = field(default=True, init=False)
    double_sided: bool = field(default=True, init=False)
    depth_write: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError(
                f"opacity must be between 0.0 and 1.0, got {self.opacity}"
            )


@dataclass
class PointsMaterial:
    """Unlit additive point-sprite material for dust particles."""

    colour: str = "white"
    size: float = 0.015
    opacity: float = 0.2
    additive: bool = field(default=True, init=False)
    depth_write: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError(
                f"opacity must be between 0.0 and 1.0, got {self.opacity}"
            )


Material = GlassMaterial | BeamMaterial | PointsMaterial
