"""Command-line entry point: ``python -m prismatic``."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

from prismatic.app import PrismApp
from prismatic.construction.config import load_config, save_config
from prismatic.log import setup_default_logging
from prismatic.model import ViewerConfig
from prismatic.rendering.interactive import run_viewer

logger = logging.getLogger("prismatic")


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="prismatic",
        description="Glass prism in a beam of light",
    )
    ap.add_argument("--config", help="JSON file with settings/viewer sections")
    ap.add_argument("--environment", help="Image to use as the environment")
    ap.add_argument("--seed", type=int, help="Seed for dust-particle placement")
    ap.add_argument("--still", help="Render one frame to this file and exit")
    ap.add_argument("--save-config", dest="save_config", help="Write the final configuration here")
    ap.add_argument("--log-level", dest="log_level", default="INFO")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    setup_default_logging(args.log_level)

    settings = None
    viewer = ViewerConfig()
    if args.config is not None:
        try:
            loaded = load_config(args.config)
        except (OSError, ValueError, TypeError) as exc:
            print(f"prismatic: invalid config {args.config}: {exc}", file=sys.stderr)
            return 2
        settings = loaded.settings
        if loaded.viewer is not None:
            viewer = loaded.viewer

    overrides: dict = {}
    if args.environment is not None:
        overrides["environment_path"] = args.environment
    if args.seed is not None:
        overrides["particle_seed"] = args.seed
    if overrides:
        viewer = dataclasses.replace(viewer, **overrides)

    if args.still is not None:
        app = PrismApp.create(settings, viewer)
        try:
            app.loader.wait()
            app.scene.render_still(args.still, show=False)
        finally:
            app.close()
        logger.info("Rendered %s", args.still)
        final = app.settings
    else:
        final = run_viewer(settings, viewer, log_level=args.log_level)

    if args.save_config is not None:
        save_config(args.save_config, settings=final, viewer=viewer)
        logger.info("Saved configuration to %s", args.save_config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
