"""Shared test fixtures for prismatic."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from prismatic.app import PrismApp
from prismatic.construction.scene_builders import compose_scene
from prismatic.controls import default_bindings
from prismatic.model import ViewerConfig


@pytest.fixture(autouse=True)
def _close_figures():
    """Close any figures a test left open."""
    yield
    plt.close("all")


@pytest.fixture
def scene():
    """The default scene with a reproducible dust layout."""
    return compose_scene(particle_seed=0)


@pytest.fixture
def bindings(scene):
    """Default bindings already applied to the ``scene`` fixture."""
    return default_bindings(scene)


@pytest.fixture
def app():
    """A fully wired application with no environment image."""
    application = PrismApp.create(config=ViewerConfig(particle_seed=0))
    yield application
    application.close()


@pytest.fixture
def env_image_path(tmp_path):
    """A small PNG with a known mean colour of (0.2, 0.4, 0.6)."""
    image = np.zeros((4, 8, 3))
    image[..., 0] = 0.2
    image[..., 1] = 0.4
    image[..., 2] = 0.6
    path = tmp_path / "env.png"
    plt.imsave(path, image)
    return path
