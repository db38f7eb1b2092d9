"""Background loading of the environment image."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

import numpy as np
from matplotlib.image import imread

from prismatic.model import Environment
from prismatic.scene import PrismScene

logger = logging.getLogger(__name__)


def read_environment(path: str | Path) -> Environment:
    """Read an image file into an :class:`Environment`.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not an image matplotlib understands.
    """
    image = np.asarray(imread(path))
    return Environment(image=image, source=str(path))


class EnvironmentLoader:
    """Load one environment image off the main thread.

    :meth:`request` starts the read on a single worker thread;
    :meth:`poll`, called from the frame tick, installs the result on
    the scene once it is ready.  The scene is only ever touched from
    the thread calling :meth:`poll`.  A failed read is logged and the
    scene keeps rendering without an environment.

    Args:
        scene: Scene to install the environment on.
    """

    def __init__(self, scene: PrismScene) -> None:
        self.scene = scene
        self._executor: ThreadPoolExecutor | None = None
        self._pending: Future[Environment] | None = None
        self._path: str | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def request(self, path: str | Path) -> None:
        """Start reading *path* in the background.

        A request made while another is pending replaces it; the older
        result is discarded.
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="prismatic-env",
            )
        self._path = str(path)
        self._pending = self._executor.submit(read_environment, path)

    def poll(self) -> bool:
        """Install the environment if the read has finished.

        Returns:
            ``True`` if an environment was installed by this call.
        """
        future = self._pending
        if future is None or not future.done():
            return False
        self._pending = None
        try:
            environment = future.result()
        except (OSError, ValueError) as exc:
            logger.warning(
                "Could not load environment %s (%s); continuing without it",
                self._path, exc,
            )
            return False
        self.scene.set_environment(environment)
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the pending read finishes, then :meth:`poll`."""
        if self._pending is not None:
            try:
                self._pending.exception(timeout=timeout)
            except TimeoutError:
                return False
        return self.poll()

    def shutdown(self) -> None:
        """Stop the worker thread, discarding any pending read."""
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        self._pending = None
