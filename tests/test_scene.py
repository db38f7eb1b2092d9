"""Tests for PrismScene shape switching, orientation, gap and lighting."""

import numpy as np
import pytest

from prismatic.model import Environment, ShapeKind
from prismatic.scene import PrismScene


def _visible_names(scene):
    return sorted(node.name for node, _ in scene.visible_meshes())


class TestActiveShape:
    def test_default_meshes(self, scene):
        assert _visible_names(scene) == ["bipyramid_lower", "bipyramid_upper"]

    def test_switch_to_single(self, scene):
        scene.set_active_shape(ShapeKind.SINGLE_PYRAMID)
        assert scene.active_shape is ShapeKind.SINGLE_PYRAMID
        assert _visible_names(scene) == ["single_pyramid_mesh"]

    def test_switch_by_label(self, scene):
        scene.set_active_shape("Single Pyramid")
        scene.set_active_shape("Bi-Pyramid")
        assert scene.active_shape is ShapeKind.BI_PYRAMID

    @pytest.mark.parametrize("sequence", [
        ["Single Pyramid"],
        ["Single Pyramid", "Single Pyramid"],
        ["Bi-Pyramid", "Single Pyramid", "Bi-Pyramid"],
    ])
    def test_exactly_one_shape_visible(self, scene, sequence):
        for kind in sequence:
            scene.set_active_shape(kind)
        single = scene.graph.node(scene.single_group).visible
        bi = scene.graph.node(scene.bipyramid_group).visible
        assert single != bi

    def test_invalid_shape_raises(self, scene):
        with pytest.raises(ValueError):
            scene.set_active_shape("Cube")

    def test_solids(self, scene):
        assert scene.solids("Bi-Pyramid") == [scene.upper, scene.lower]
        assert len(scene.solids(ShapeKind.SINGLE_PYRAMID)) == 1


class TestOrientation:
    def test_set_orientation(self, scene):
        scene.set_orientation(0.1, -0.2, 0.3)
        assert scene.orientation == pytest.approx((0.1, -0.2, 0.3))

    def test_orientation_shared_by_both_shapes(self, scene):
        scene.set_orientation(0.5, 1.0, 0.0)
        prism_world = scene.graph.world_matrix(scene.prism_group)
        for group in (scene.single_group, scene.bipyramid_group):
            np.testing.assert_allclose(scene.graph.world_matrix(group), prism_world)


class TestBipyramidGap:
    @pytest.mark.parametrize("gap", [0.0, 0.5, 1.0])
    def test_offsets_symmetric(self, scene, gap):
        scene.update_bipyramid_gap(gap)
        upper, lower = scene.bipyramid_offsets
        assert upper == pytest.approx(-lower)
        assert upper - lower == pytest.approx(scene.bipyramid_height + gap)
        assert scene.bipyramid_gap == gap

    def test_meshes_not_rebuilt(self, scene):
        geom = scene.graph.node(scene.upper).geometry
        scene.update_bipyramid_gap(0.8)
        assert scene.graph.node(scene.upper).geometry is geom

    def test_negative_gap_raises(self, scene):
        with pytest.raises(ValueError, match="gap"):
            scene.update_bipyramid_gap(-0.5)


class TestSharedMaterial:
    def test_change_seen_by_every_shape(self, scene):
        scene.material.set("ior", 1.7)
        for kind in ShapeKind:
            scene.set_active_shape(kind)
            for node, _ in scene.visible_meshes():
                assert scene.graph.material(node.material).ior == 1.7

    def test_same_object_across_shapes(self, scene):
        materials = {
            id(scene.graph.material(scene.graph.node(h).material))
            for kind in ShapeKind for h in scene.solids(kind)
        }
        assert len(materials) == 1


class TestLightingAndAtmosphere:
    def test_light_intensity(self, scene):
        scene.set_light_intensity(350.0)
        assert scene.spot_light.intensity == 350.0

    def test_negative_intensity_raises(self, scene):
        with pytest.raises(ValueError, match="intensity"):
            scene.set_light_intensity(-1.0)

    def test_beam_visibility_and_opacity(self, scene):
        scene.set_beam_visible(True)
        assert scene.graph.is_visible(scene.beam)
        scene.set_beam_opacity(0.4)
        assert scene.graph.material(scene.beam_material).opacity == 0.4

    def test_visible_beam_listed_with_meshes(self, scene):
        scene.set_beam_visible(True)
        assert "beam" in _visible_names(scene)

    def test_fog_density(self, scene):
        scene.set_fog_density(0.06)
        assert scene.fog.density == 0.06

    def test_particles_visible(self, scene):
        scene.set_particles_visible(False)
        assert not scene.graph.is_visible(scene.particles)

    def test_advance_particles(self, scene):
        scene.advance_particles(0.0001)
        scene.advance_particles(0.0001)
        assert scene.graph.node(scene.particles).rotation[1] == pytest.approx(0.0002)

    def test_set_environment(self, scene):
        env = Environment(image=np.full((2, 2, 3), 0.5), source="test")
        scene.set_environment(env)
        assert scene.environment is env
        scene.set_environment(None)
        assert scene.environment is None


class TestCompose:
    def test_classmethod(self):
        scene = PrismScene.compose(gap=0.4, particle_seed=0)
        assert isinstance(scene, PrismScene)
        assert scene.bipyramid_gap == 0.4
