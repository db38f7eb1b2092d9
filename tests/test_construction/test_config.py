"""Tests for configuration file save/load."""

import json

import pytest

from prismatic.construction.config import ConfigSet, load_config, save_config
from prismatic.model import PrismSettings, ShapeKind, ViewerConfig


class TestSaveConfig:
    def test_writes_only_given_sections(self, tmp_path):
        path = tmp_path / "cfg.json"
        save_config(path, settings=PrismSettings(fog_density=0.05))
        data = json.loads(path.read_text())
        assert data == {"settings": {"fog_density": 0.05}}

    def test_empty_sections_written(self, tmp_path):
        path = tmp_path / "cfg.json"
        save_config(path, settings=PrismSettings(), viewer=ViewerConfig())
        assert json.loads(path.read_text()) == {"settings": {}, "viewer": {}}

    def test_two_space_indent(self, tmp_path):
        path = tmp_path / "cfg.json"
        save_config(path, viewer=ViewerConfig(dpi=120))
        assert '\n  "viewer"' in path.read_text()


class TestLoadConfig:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "cfg.json"
        settings = PrismSettings(shape=ShapeKind.SINGLE_PYRAMID, auto_rotate=False)
        viewer = ViewerConfig(figsize=(8.0, 5.0), particle_seed=7)
        save_config(path, settings=settings, viewer=viewer)

        loaded = load_config(path)
        assert isinstance(loaded, ConfigSet)
        assert loaded.settings == settings
        assert loaded.viewer == viewer

    def test_missing_sections_are_none(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text("{}")
        loaded = load_config(path)
        assert loaded.settings is None
        assert loaded.viewer is None

    def test_unknown_top_level_key_raises(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"styles": {}}))
        with pytest.raises(ValueError, match="unknown top-level keys"):
            load_config(path)

    def test_non_object_raises(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="JSON object"):
            load_config(path)

    def test_unknown_settings_key_raises(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"settings": {"wobble": 1}}))
        with pytest.raises(ValueError, match="unknown settings keys"):
            load_config(path)

    def test_invalid_shape_raises(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"settings": {"shape": "Cube"}}))
        with pytest.raises(ValueError):
            load_config(path)
