"""Settings and viewer configuration save/load for JSON files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from prismatic.model import PrismSettings, ViewerConfig

_VALID_SECTIONS = frozenset({"settings", "viewer"})


@dataclass
class ConfigSet:
    """Configuration sections loaded from a file.

    Sections missing from the file are ``None``.

    Attributes:
        settings: Initial control-panel values.
        viewer: Window-level configuration.
    """

    settings: PrismSettings | None = None
    viewer: ViewerConfig | None = None


def save_config(
    path: str | Path,
    *,
    settings: PrismSettings | None = None,
    viewer: ViewerConfig | None = None,
) -> None:
    """Write configuration to a JSON file.

    Only sections that are not ``None`` are written, and within each
    section only non-default values.  The file uses two-space
    indentation.

    Args:
        path: Destination file path.
        settings: Control-panel values.
        viewer: Window-level configuration.
    """
    data: dict = {}
    if settings is not None:
        data["settings"] = settings.to_dict()
    if viewer is not None:
        data["viewer"] = viewer.to_dict()
    Path(path).write_text(json.dumps(data, indent=2) + "\n")


def load_config(path: str | Path) -> ConfigSet:
    """Read configuration from a JSON file.

    Args:
        path: Source file path.

    Returns:
        A :class:`ConfigSet` with the parsed sections.

    Raises:
        ValueError: If the file has unknown top-level keys or a section
            holds unknown or invalid values.
        TypeError: If a settings value has the wrong type.
    """
    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError("configuration file must contain a JSON object")

    unknown = set(data) - _VALID_SECTIONS
    if unknown:
        raise ValueError(
            f"unknown top-level keys in config file: {sorted(unknown)}"
        )

    settings = None
    if "settings" in data:
        settings = PrismSettings.from_dict(data["settings"])

    viewer = None
    if "viewer" in data:
        viewer = ViewerConfig.from_dict(data["viewer"])

    return ConfigSet(settings=settings, viewer=viewer)
