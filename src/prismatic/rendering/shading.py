"""Per-face shading for the painter.

A small stylised approximation of a transmissive clear-coated material
lit by one spotlight, an ambient term and an optional environment
image.  It is meant to read as glass in a flat-shaded matplotlib
render, not to be physically exact.
"""

from __future__ import annotations

import math

import numpy as np
from matplotlib.colors import hsv_to_rgb, to_rgb

from prismatic.model import (
    AmbientLight,
    Environment,
    Fog,
    GlassMaterial,
    SpotLight,
)

EXPOSURE: float = 1.2
"""Default tone-mapping exposure."""

_MIN_GLASS_ALPHA = 0.08


def aces_filmic(x: np.ndarray) -> np.ndarray:
    """ACES filmic tone curve (Narkowicz fit), clipped to ``[0, 1]``."""
    x = np.asarray(x, dtype=float)
    mapped = (x * (2.51 * x + 0.03)) / (x * (2.43 * x + 0.59) + 0.14)
    return np.clip(mapped, 0.0, 1.0)


def _normalise_rows(v: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(v, axis=-1, keepdims=True)
    return np.divide(v, length, out=np.zeros_like(v), where=length > 1e-12)


def distance_attenuation(
    distance: np.ndarray, cutoff: float, decay: float,
) -> np.ndarray:
    """Inverse-power falloff with a smooth window to zero at *cutoff*.

    A *cutoff* of 0 disables the window.
    """
    d = np.asarray(distance, dtype=float)
    falloff = 1.0 / np.maximum(d ** decay, 0.01)
    if cutoff > 0:
        falloff = falloff * np.clip(1.0 - (d / cutoff) ** 4, 0.0, 1.0) ** 2
    return falloff


def spot_irradiance(
    light: SpotLight,
    light_position: np.ndarray,
    points: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Light reaching *points* from a spotlight.

    Args:
        light: The spotlight.
        light_position: World position of the light.
        points: World positions, shape ``(n, 3)``.

    Returns:
        Tuple of ``(directions, irradiance)``: unit vectors from each
        point towards the light, shape ``(n, 3)``, and the scalar
        irradiance at each point, shape ``(n,)``.
    """
    to_light = light_position - points
    distance = np.linalg.norm(to_light, axis=1)
    directions = _normalise_rows(to_light)

    axis = light.target - light_position
    axis = axis / max(float(np.linalg.norm(axis)), 1e-12)
    cos_angle = -directions @ axis
    cos_outer = math.cos(light.angle)
    cos_inner = math.cos(light.angle * (1.0 - light.penumbra))
    if cos_inner - cos_outer > 1e-12:
        t = np.clip((cos_angle - cos_outer) / (cos_inner - cos_outer), 0.0, 1.0)
        cone = t * t * (3.0 - 2.0 * t)
    else:
        cone = (cos_angle >= cos_outer).astype(float)

    irradiance = (
        light.intensity
        * cone
        * distance_attenuation(distance, light.distance, light.decay)
    )
    return directions, irradiance


def dispersion_tint(
    normals: np.ndarray, light_dirs: np.ndarray, material: GlassMaterial,
) -> np.ndarray:
    """Spectral tint of light refracted through each face.

    Faces at different angles to the light split it into different
    hues.  The strength grows with dispersion and with the index of
    refraction; with no dispersion the tint is white.

    Returns:
        RGB array of shape ``(n, 3)``.
    """
    strength = (material.dispersion / 10.0) * ((material.ior - 1.0) / 2.0)
    cos_nl = np.einsum("ij,ij->i", normals, light_dirs)
    hue = np.mod(0.5 + 0.5 * cos_nl * (1.0 + material.dispersion / 5.0), 1.0)
    hsv = np.column_stack([hue, np.ones_like(hue), np.ones_like(hue)])
    rainbow = hsv_to_rgb(hsv)
    return (1.0 - strength) + strength * rainbow


def shade_glass(
    normals: np.ndarray,
    centroids: np.ndarray,
    eye: np.ndarray,
    material: GlassMaterial,
    *,
    spot: SpotLight | None = None,
    spot_position: np.ndarray | None = None,
    ambient: AmbientLight | None = None,
    environment: Environment | None = None,
    fog: Fog | None = None,
    exposure: float = EXPOSURE,
) -> np.ndarray:
    """RGBA colours of glass faces.

    Args:
        normals: Unit world-space face normals, shape ``(n, 3)``.
        centroids: World-space face centres, shape ``(n, 3)``.
        eye: World-space camera position.
        material: The shared glass material.
        spot: Spotlight, or ``None`` for no direct light.
        spot_position: World position of *spot*.
        ambient: Ambient light, or ``None``.
        environment: Environment for reflections, or ``None``.
        fog: Fog applied by distance from *eye*, or ``None``.
        exposure: Tone-mapping exposure.

    Returns:
        Array of shape ``(n, 4)`` with values in ``[0, 1]``.
    """
    n_faces = len(normals)
    view_dirs = _normalise_rows(eye - centroids)
    normals = np.array(normals, dtype=float)
    if material.double_sided:
        facing = np.einsum("ij,ij->i", normals, view_dirs) < 0
        normals[facing] *= -1.0

    cos_nv = np.clip(np.einsum("ij,ij->i", normals, view_dirs), 0.0, 1.0)
    f0 = ((material.ior - 1.0) / (material.ior + 1.0)) ** 2
    fresnel = f0 + (1.0 - f0) * (1.0 - cos_nv) ** 5

    radiance = np.zeros((n_faces, 3))
    if ambient is not None:
        radiance += ambient.intensity * np.array(to_rgb(ambient.colour))

    if spot is not None and spot_position is not None:
        light_rgb = np.array(to_rgb(spot.colour))
        light_dirs, irradiance = spot_irradiance(spot, spot_position, centroids)
        cos_nl = np.einsum("ij,ij->i", normals, light_dirs)
        lit = np.clip(cos_nl, 0.0, None) * irradiance

        diffuse = (1.0 - material.transmission) * (1.0 - material.metalness) * lit / math.pi

        half = _normalise_rows(light_dirs + view_dirs)
        cos_nh = np.clip(np.einsum("ij,ij->i", normals, half), 0.0, 1.0)
        shininess = 8.0 + 248.0 * (1.0 - material.roughness) ** 2
        specular = fresnel * cos_nh ** shininess * lit
        f_coat = 0.04 + 0.96 * (1.0 - cos_nv) ** 5
        coat_shininess = 8.0 + 248.0 * (1.0 - material.clearcoat_roughness) ** 2
        specular += material.clearcoat * f_coat * cos_nh ** coat_shininess * lit

        # Light entering from behind the face and leaving towards the eye.
        through = np.clip(-cos_nl, 0.0, None) * irradiance
        absorbed = math.exp(-0.05 * material.thickness)
        transmitted = material.transmission * absorbed * through / math.pi
        tint = dispersion_tint(normals, light_dirs, material)

        radiance += light_rgb * (diffuse + specular)[:, None]
        radiance += light_rgb * tint * transmitted[:, None]

    if environment is not None:
        env_rgb = np.array(environment.mean_colour) * material.env_map_intensity
        radiance += env_rgb * fresnel[:, None]
        radiance += env_rgb * 0.2 * material.transmission

    rgb = aces_filmic(radiance * exposure)
    alpha = 1.0 - material.transmission * (1.0 - 0.5 * material.roughness) + fresnel
    alpha = np.clip(alpha, _MIN_GLASS_ALPHA, 1.0)

    if fog is not None:
        f = fog.factor(np.linalg.norm(centroids - eye, axis=1))[:, None]
        rgb = rgb * (1.0 - f) + np.array(to_rgb(fog.colour)) * f

    return np.column_stack([rgb, alpha])


def beam_alpha(uvs: np.ndarray, opacity: float, fade_power: float, edge_power: float) -> np.ndarray:
    """Alpha of beam faces from their mean texture coordinates.

    The beam is brightest at its wide end (``v = 0``) and along the
    middle of its unwrapped surface (``u = 0.5``).

    Args:
        uvs: Mean UV per face, shape ``(n, 2)``.
        opacity: Overall opacity.
        fade_power: Exponent of the fade along the length.
        edge_power: Exponent of the fade across the surface.
    """
    uvs = np.asarray(uvs, dtype=float)
    fade = np.clip(1.0 - uvs[:, 1], 0.0, 1.0) ** fade_power
    edge = np.clip(1.0 - np.abs(uvs[:, 0] - 0.5) * 2.0, 0.0, 1.0) ** edge_power
    return np.clip(opacity * fade * edge, 0.0, 1.0)
