"""Tests for PrismSettings and ViewerConfig."""

import math

import pytest

from prismatic.model.settings import PrismSettings, ShapeKind, ViewerConfig


class TestPrismSettings:
    def test_defaults(self):
        s = PrismSettings()
        assert s.shape is ShapeKind.BI_PYRAMID
        assert s.rotate_x == pytest.approx(math.pi / 6)
        assert s.rotate_y == pytest.approx(math.pi / 4)
        assert s.rotate_z == 0.0
        assert s.auto_rotate is True
        assert s.auto_rotate_speed == 0.3
        assert s.bipyramid_gap == 0.15
        assert s.show_beam is False
        assert s.beam_opacity == 0.25
        assert s.light_intensity == 200.0
        assert s.fog_density == 0.02
        assert s.particles_visible is True
        assert (s.transmission, s.ior, s.dispersion, s.thickness, s.roughness) == (
            1.0, 2.0, 5.0, 5.0, 0.0,
        )

    def test_shape_string_converted(self):
        assert PrismSettings(shape="Single Pyramid").shape is ShapeKind.SINGLE_PYRAMID

    def test_invalid_shape_raises(self):
        with pytest.raises(ValueError):
            PrismSettings(shape="Cube")

    def test_orientation(self):
        s = PrismSettings(rotate_x=0.1, rotate_y=0.2, rotate_z=0.3)
        assert s.orientation == (0.1, 0.2, 0.3)

    def test_to_dict_omits_defaults(self):
        assert PrismSettings().to_dict() == {}

    def test_to_dict_shape_as_string(self):
        d = PrismSettings(shape=ShapeKind.SINGLE_PYRAMID, fog_density=0.05).to_dict()
        assert d == {"shape": "Single Pyramid", "fog_density": 0.05}

    def test_from_dict(self):
        s = PrismSettings.from_dict({"shape": "Single Pyramid", "auto_rotate": False})
        assert s.shape is ShapeKind.SINGLE_PYRAMID
        assert s.auto_rotate is False

    def test_from_dict_unknown_key_raises(self):
        with pytest.raises(ValueError, match="unknown settings keys"):
            PrismSettings.from_dict({"colour": "red"})

    @pytest.mark.parametrize("kwargs, error", [
        ({"rotate_x": "abc"}, TypeError),
        ({"fog_density": None}, TypeError),
        ({"ior": True}, TypeError),
        ({"auto_rotate": "yes"}, TypeError),
        ({"light_intensity": float("nan")}, ValueError),
    ])
    def test_wrong_type_or_non_finite_raises(self, kwargs, error):
        with pytest.raises(error):
            PrismSettings(**kwargs)

    def test_out_of_range_values_kept(self):
        s = PrismSettings(bipyramid_gap=-0.5, fog_density=1.0, light_intensity=350)
        assert (s.bipyramid_gap, s.fog_density, s.light_intensity) == (-0.5, 1.0, 350)


class TestViewerConfig:
    def test_defaults(self):
        c = ViewerConfig()
        assert c.figsize == (11.0, 7.0)
        assert c.frame_interval == 16
        assert c.environment_path is None

    @pytest.mark.parametrize("kwargs, match", [
        ({"figsize": (0.0, 5.0)}, "figsize"),
        ({"dpi": 0}, "dpi"),
        ({"frame_interval": 0}, "frame_interval"),
        ({"panel_width": 1.0}, "panel_width"),
    ])
    def test_validation(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            ViewerConfig(**kwargs)

    def test_to_dict_figsize_as_list(self):
        d = ViewerConfig(figsize=(8.0, 6.0), particle_seed=3).to_dict()
        assert d == {"figsize": [8.0, 6.0], "particle_seed": 3}

    def test_from_dict_list_figsize(self):
        c = ViewerConfig.from_dict({"figsize": [8.0, 6.0]})
        assert c.figsize == (8.0, 6.0)

    def test_from_dict_unknown_key_raises(self):
        with pytest.raises(ValueError, match="unknown viewer keys"):
            ViewerConfig.from_dict({"title": "x"})
