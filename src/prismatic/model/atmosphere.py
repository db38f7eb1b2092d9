from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np



@dataclass
class Fog:
    """Exponential-squared fog.

    A fragment at distance *d* from the camera keeps a fraction
    ``exp(-(density * d) ** 2)`` of its colour; the rest is replaced by
    the fog colour.
    """

    colour: str = "black"
    density: float = 0.02

    def __post_init__(self) -> None:
        if self.density < 0:
            raise ValueError(
                f"density must be non-negative, got {self.density}"
            )

    def factor(self, distance: np.ndarray | float) -> np.ndarray:
        """Fog blend factor in ``[0, 1]`` (0 = clear, 1 = fully fogged)."""
        d = np.asarray(distance, dtype=float)
        return 1.0 - np.exp(-(self.density * d) ** 2)


@dataclass
class Environment:
    """An environment image used to approximate ambient reflections.

    Attributes:
        image: RGB(A) pixel array as returned by
            :func:`matplotlib.image.imread`.
        source: Where the image was loaded from, for diagnostics.
        mean_colour: Average RGB of the image, derived on construction.
    """

    image: np.ndarray
    source: str = ""
    mean_colour: tuple[float, float, float] = field(init=False)

    def __post_init__(self) -> None:
        image = np.asarray(self.image)
        if image.ndim == 2:
            image = np.stack([image] * 3, axis=-1)
        if image.ndim != 3 or image.shape[2] not in (3, 4):
            raise ValueError(
                f"image must be greyscale, RGB or RGBA, got shape {image.shape}"
            )
        rgb = image[..., :3].astype(float)
        # Integer images from imread use the 0-255 range.
        if np.issubdtype(image.dtype, np.integer):
            rgb = rgb / 255.0
        self.image = image
        mean = np.clip(rgb.reshape(-1, 3).mean(axis=0), 0.0, 1.0)
        self.mean_colour = tuple(float(c) for c in mean)
