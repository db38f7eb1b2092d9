"""Tests for per-face glass and beam shading."""

import math

import numpy as np
import pytest

from prismatic.model import AmbientLight, Environment, Fog, GlassMaterial, SpotLight
from prismatic.rendering.shading import (
    aces_filmic,
    beam_alpha,
    dispersion_tint,
    distance_attenuation,
    shade_glass,
    spot_irradiance,
)

SPOT_POSITION = np.array([-15.0, 0.0, 0.0])
EYE = np.array([0.0, 0.0, 8.0])


def _spot():
    return SpotLight(
        intensity=200.0, angle=math.pi / 80, penumbra=0.1, decay=0.5, distance=50.0,
    )


class TestToneMapping:
    def test_black_stays_black(self):
        assert aces_filmic(np.array([0.0]))[0] == pytest.approx(0.0)

    def test_monotonic_and_bounded(self):
        y = aces_filmic(np.linspace(0.0, 50.0, 200))
        assert np.all(np.diff(y) >= 0)
        assert y.max() <= 1.0


class TestDistanceAttenuation:
    def test_no_cutoff_is_inverse_power(self):
        assert distance_attenuation(np.array([4.0]), 0.0, 2.0)[0] == pytest.approx(1 / 16)

    def test_zero_beyond_cutoff(self):
        assert distance_attenuation(np.array([60.0]), 50.0, 0.5)[0] == 0.0

    def test_window_reduces_near_cutoff(self):
        plain = distance_attenuation(np.array([40.0]), 0.0, 0.5)[0]
        windowed = distance_attenuation(np.array([40.0]), 50.0, 0.5)[0]
        assert 0 < windowed < plain


class TestSpotIrradiance:
    def test_on_axis(self):
        dirs, irr = spot_irradiance(_spot(), SPOT_POSITION, np.zeros((1, 3)))
        np.testing.assert_allclose(dirs, [[-1.0, 0.0, 0.0]])
        expected = 200.0 / math.sqrt(15.0) * (1.0 - (15.0 / 50.0) ** 4) ** 2
        assert irr[0] == pytest.approx(expected)

    def test_outside_cone_is_dark(self):
        _, irr = spot_irradiance(_spot(), SPOT_POSITION, np.array([[0.0, 5.0, 0.0]]))
        assert irr[0] == 0.0

    def test_hard_edge_without_penumbra(self):
        light = SpotLight(angle=0.3, penumbra=0.0)
        _, irr = spot_irradiance(light, np.array([0.0, 0.0, 10.0]), np.zeros((1, 3)))
        assert irr[0] > 0


class TestDispersionTint:
    def test_no_dispersion_is_white(self):
        normals = np.array([[0.0, 0.0, 1.0], [1.0, 0.0, 0.0]])
        light_dirs = np.array([[-1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]])
        tint = dispersion_tint(normals, light_dirs, GlassMaterial(dispersion=0.0))
        np.testing.assert_allclose(tint, 1.0)

    def test_dispersion_colours_faces_differently(self):
        normals = np.array([[0.0, 0.0, 1.0], [-1.0, 0.0, 0.0]])
        light_dirs = np.array([[-1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]])
        tint = dispersion_tint(normals, light_dirs, GlassMaterial(dispersion=10.0, ior=3.0))
        assert not np.allclose(tint[0], tint[1])


class TestShadeGlass:
    NORMALS = np.array([[0.0, 0.0, 1.0], [1.0, 0.0, 0.0]])
    CENTROIDS = np.zeros((2, 3))

    def test_shape_and_range(self):
        rgba = shade_glass(
            self.NORMALS, self.CENTROIDS, EYE, GlassMaterial(),
            spot=_spot(), spot_position=SPOT_POSITION, ambient=AmbientLight(),
            fog=Fog(),
        )
        assert rgba.shape == (2, 4)
        assert np.all((rgba >= 0.0) & (rgba <= 1.0))

    def test_spot_brightens(self):
        dark = shade_glass(self.NORMALS, self.CENTROIDS, EYE, GlassMaterial())
        lit = shade_glass(
            self.NORMALS, self.CENTROIDS, EYE, GlassMaterial(),
            spot=_spot(), spot_position=SPOT_POSITION,
        )
        assert lit[:, :3].sum() > dark[:, :3].sum()

    def test_environment_brightens(self):
        env = Environment(image=np.ones((2, 2, 3)))
        plain = shade_glass(self.NORMALS, self.CENTROIDS, EYE, GlassMaterial())
        reflected = shade_glass(
            self.NORMALS, self.CENTROIDS, EYE, GlassMaterial(), environment=env,
        )
        assert reflected[:, :3].sum() > plain[:, :3].sum()

    def test_dense_fog_hides_colour(self):
        rgba = shade_glass(
            self.NORMALS, self.CENTROIDS, EYE, GlassMaterial(),
            spot=_spot(), spot_position=SPOT_POSITION, ambient=AmbientLight(),
            fog=Fog(colour="black", density=10.0),
        )
        np.testing.assert_allclose(rgba[:, :3], 0.0, atol=1e-12)

    def test_less_transmission_more_opaque(self):
        clear = shade_glass(self.NORMALS, self.CENTROIDS, EYE, GlassMaterial(transmission=1.0))
        frosted = shade_glass(self.NORMALS, self.CENTROIDS, EYE, GlassMaterial(transmission=0.2))
        assert np.all(frosted[:, 3] >= clear[:, 3])

    def test_does_not_mutate_normals(self):
        normals = np.array([[0.0, 0.0, -1.0]])
        shade_glass(normals, np.zeros((1, 3)), EYE, GlassMaterial())
        np.testing.assert_array_equal(normals, [[0.0, 0.0, -1.0]])


class TestBeamAlpha:
    def test_brightest_at_wide_end_centre(self):
        alpha = beam_alpha(np.array([[0.5, 0.0]]), 0.25, 1.2, 0.3)
        assert alpha[0] == pytest.approx(0.25)

    def test_fades_to_zero_at_apex(self):
        alpha = beam_alpha(np.array([[0.5, 1.0]]), 0.25, 1.2, 0.3)
        assert alpha[0] == pytest.approx(0.0)

    def test_zero_opacity(self):
        alpha = beam_alpha(np.array([[0.5, 0.2], [0.1, 0.5]]), 0.0, 1.2, 0.3)
        np.testing.assert_allclose(alpha, 0.0)
