"""Tests for lights, fog and environment images."""

import math

import numpy as np
import pytest

from prismatic.model.atmosphere import Environment, Fog
from prismatic.model.lights import AmbientLight, SpotLight


class TestFog:
    def test_zero_distance_is_clear(self):
        assert Fog().factor(0.0) == pytest.approx(0.0)

    def test_exp2_falloff(self):
        fog = Fog(density=0.1)
        assert fog.factor(10.0) == pytest.approx(1.0 - math.exp(-1.0))

    def test_zero_density_is_clear(self):
        np.testing.assert_allclose(Fog(density=0.0).factor(np.array([1.0, 100.0])), 0.0)

    def test_monotonic(self):
        f = Fog(density=0.05).factor(np.array([1.0, 5.0, 20.0]))
        assert np.all(np.diff(f) > 0)

    def test_negative_density_raises(self):
        with pytest.raises(ValueError, match="density"):
            Fog(density=-0.01)


class TestEnvironment:
    def test_mean_colour_float_rgb(self):
        image = np.zeros((2, 2, 3))
        image[..., 2] = 1.0
        env = Environment(image=image)
        assert env.mean_colour == pytest.approx((0.0, 0.0, 1.0))

    def test_mean_colour_uint8(self):
        image = np.full((2, 2, 3), 255, dtype=np.uint8)
        assert Environment(image=image).mean_colour == pytest.approx((1.0, 1.0, 1.0))

    def test_rgba_ignores_alpha(self):
        image = np.full((2, 2, 4), 0.5)
        image[..., 3] = 0.0
        assert Environment(image=image).mean_colour == pytest.approx((0.5, 0.5, 0.5))

    def test_greyscale_stacked(self):
        env = Environment(image=np.full((3, 3), 0.25))
        assert env.image.shape == (3, 3, 3)
        assert env.mean_colour == pytest.approx((0.25, 0.25, 0.25))

    def test_bad_shape_raises(self):
        with pytest.raises(ValueError, match="greyscale, RGB or RGBA"):
            Environment(image=np.zeros((2, 2, 2)))


class TestLights:
    def test_ambient_defaults(self):
        light = AmbientLight()
        assert light.intensity == 0.03

    def test_ambient_negative_raises(self):
        with pytest.raises(ValueError, match="intensity"):
            AmbientLight(intensity=-1.0)

    def test_spot_target_coerced(self):
        light = SpotLight(target=[1, 2, 3])
        assert light.target.dtype == float

    @pytest.mark.parametrize("kwargs, match", [
        ({"intensity": -1.0}, "intensity"),
        ({"angle": 0.0}, "angle"),
        ({"angle": 2.0}, "angle"),
        ({"penumbra": 1.5}, "penumbra"),
        ({"distance": -1.0}, "distance"),
        ({"target": [0.0, 0.0]}, "target"),
    ])
    def test_spot_validation(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            SpotLight(**kwargs)
