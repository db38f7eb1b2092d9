"""Shared constants used across the construction and interaction layers."""

import math

PYRAMID_SEGMENTS: int = 4
"""Radial segments of a pyramid: four sides."""

SINGLE_PYRAMID_RADIUS: float = 1.2
SINGLE_PYRAMID_HEIGHT: float = 2.0

BIPYRAMID_RADIUS: float = 1.2
BIPYRAMID_HEIGHT: float = 1.5 * 1.3
"""Each half of the bi-pyramid is 30% taller than a 1.5 base height."""

DRAG_SENSITIVITY: float = 0.005
"""Radians of rotation per pixel of pointer drag."""

AUTO_ROTATE_STEP: float = 0.01
"""Radians per tick at an auto-rotate speed of 1."""

PARTICLE_DRIFT: float = 0.0001
"""Radians the dust cloud turns about Y on each tick."""

PARTICLE_COUNT: int = 300
PARTICLE_BOX: tuple[float, float, float] = (20.0, 8.0, 8.0)
"""Edge lengths of the origin-centred box the dust particles fill."""

SPOT_POSITION: tuple[float, float, float] = (-15.0, 0.0, 0.0)
SPOT_ANGLE: float = math.pi / 80

BEAM_LENGTH: float = 14.0
BEAM_SEGMENTS: int = 32
