"""Tests for painter's-algorithm scene drawing."""

import matplotlib.pyplot as plt
import numpy as np
import pytest
from matplotlib.collections import PathCollection, PolyCollection

from prismatic.model import Camera
from prismatic.rendering.painter import draw_scene


def _polys(ax):
    return [c for c in ax.collections if isinstance(c, PolyCollection)]


def _scatters(ax):
    return [c for c in ax.collections if isinstance(c, PathCollection)]


class TestDrawScene:
    def test_bipyramid_faces(self, scene):
        fig, ax = plt.subplots()
        draw_scene(ax, scene, Camera())
        (poly,) = _polys(ax)
        # Two pyramids of four sides and a four-triangle base each.
        assert len(poly.get_paths()) == 16
        plt.close(fig)

    def test_single_pyramid_faces(self, scene):
        scene.set_active_shape("Single Pyramid")
        fig, ax = plt.subplots()
        draw_scene(ax, scene, Camera())
        (poly,) = _polys(ax)
        assert len(poly.get_paths()) == 8
        plt.close(fig)

    def test_beam_adds_faces(self, scene):
        scene.set_beam_visible(True)
        fig, ax = plt.subplots()
        draw_scene(ax, scene, Camera())
        (poly,) = _polys(ax)
        assert len(poly.get_paths()) == 16 + 32
        plt.close(fig)

    def test_particles_drawn_as_scatter(self, scene):
        fig, ax = plt.subplots()
        draw_scene(ax, scene, Camera())
        (scatter,) = _scatters(ax)
        assert len(scatter.get_offsets()) == 300
        plt.close(fig)

    def test_hidden_particles_not_drawn(self, scene):
        scene.set_particles_visible(False)
        fig, ax = plt.subplots()
        draw_scene(ax, scene, Camera())
        assert _scatters(ax) == []
        plt.close(fig)

    def test_particles_below_faces(self, scene):
        fig, ax = plt.subplots()
        draw_scene(ax, scene, Camera())
        assert _scatters(ax)[0].get_zorder() < _polys(ax)[0].get_zorder()
        plt.close(fig)

    def test_redraw_replaces_artists(self, scene):
        fig, ax = plt.subplots()
        draw_scene(ax, scene, Camera())
        n = len(ax.collections)
        draw_scene(ax, scene, Camera())
        assert len(ax.collections) == n
        plt.close(fig)

    def test_limits_follow_aspect(self, scene):
        fig, ax = plt.subplots()
        draw_scene(ax, scene, Camera(aspect=1.5))
        assert ax.get_xlim() == pytest.approx((-1.5, 1.5))
        assert ax.get_ylim() == pytest.approx((-1.0, 1.0))
        plt.close(fig)

    def test_background_colour(self, scene):
        fig, ax = plt.subplots()
        draw_scene(ax, scene, Camera())
        np.testing.assert_allclose(ax.get_facecolor()[:3], (0.0, 0.0, 0.0))
        plt.close(fig)

    def test_hex_background_colour(self, scene):
        scene.background = "#336699"
        fig, ax = plt.subplots()
        draw_scene(ax, scene, Camera())
        np.testing.assert_allclose(ax.get_facecolor()[:3], (0.2, 0.4, 0.6))
        plt.close(fig)

    def test_named_particle_colour(self, scene):
        scene.graph.material(scene.graph.node(scene.particles).material).colour = "red"
        fig, ax = plt.subplots()
        draw_scene(ax, scene, Camera())
        (scatter,) = _scatters(ax)
        rgb = scatter.get_facecolors()[:, :3]
        np.testing.assert_allclose(rgb, np.tile((1.0, 0.0, 0.0), (len(rgb), 1)))
        plt.close(fig)

    def test_orientation_changes_projection(self, scene):
        fig, ax = plt.subplots()
        draw_scene(ax, scene, Camera())
        before = np.concatenate([p.vertices for p in _polys(ax)[0].get_paths()])
        scene.set_orientation(0.0, 1.0, 0.0)
        draw_scene(ax, scene, Camera())
        after = np.concatenate([p.vertices for p in _polys(ax)[0].get_paths()])
        assert before.shape == after.shape
        assert not np.allclose(before, after)
        plt.close(fig)

    def test_nothing_in_view(self, scene):
        scene.set_particles_visible(False)
        camera = Camera(position=np.array([0.0, 0.0, 200.0]))
        fig, ax = plt.subplots()
        draw_scene(ax, scene, camera)
        assert len(ax.collections) == 0
        plt.close(fig)
