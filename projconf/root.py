"""Server root discovery."""

from __future__ import annotations

import importlib.util
import logging
import threading
from pathlib import Path
from typing import Callable, Optional

from .errors import RootResolutionError
from .overrides import SERVER_ROOT, Overrides

logger = logging.getLogger(__name__)

# Segments dropped from the anchor package location to reach the project root.
TRAILING_SEGMENTS = 4


def locate_package(name: str) -> Path:
    """Return the installation directory of package ``name``.

    For a package installed in ``<prefix>/lib/pythonX.Y/site-packages/<name>``
    dropping :data:`TRAILING_SEGMENTS` segments gives ``<prefix>``. A plain
    module is located by its file.
    """
    spec = importlib.util.find_spec(name)
    if spec is None:
        raise RootResolutionError(f"Cannot locate anchor package {name!r}")
    if spec.submodule_search_locations:
        return Path(list(spec.submodule_search_locations)[0]).resolve()
    if spec.origin is None:
        raise RootResolutionError(f"Cannot locate anchor package {name!r}")
    return Path(spec.origin).resolve()


class RootResolver:
    """Memoized server root derivation.

    The root is read from the ``server_root`` override cell. When the cell is
    empty the anchor package is located, its last :data:`TRAILING_SEGMENTS`
    path segments are dropped and the result is cached in the cell. Later
    calls return the cached value until :meth:`reset` clears it.
    """

    def __init__(
        self,
        overrides: Overrides,
        anchor_package: str = "projconf",
        locate: Optional[Callable[[str], Path]] = None,
    ) -> None:
        self._overrides = overrides
        self._anchor_package = anchor_package
        self._locate = locate or locate_package
        self._lock = threading.Lock()
        self.derivations = 0

    def server_root(self) -> str:
        root = self._overrides.get(SERVER_ROOT)
        if root is not None:
            return root

        with self._lock:
            root = self._overrides.get(SERVER_ROOT)
            if root is None:
                root = self._derive()
                self._overrides.set(SERVER_ROOT, root)
        return root

    def reset(self) -> None:
        """Forget the cached root so the next lookup derives it again."""
        self._overrides.unset(SERVER_ROOT)

    def _derive(self) -> str:
        location = Path(self._locate(self._anchor_package))
        parts = location.parts
        if len(parts) <= TRAILING_SEGMENTS:
            raise RootResolutionError(
                f"Anchor location {location} is too shallow to derive a server root"
            )
        root = str(Path(*parts[:-TRAILING_SEGMENTS]))
        self.derivations += 1
        logger.info("Derived server root %s from %s", root, location)
        return root
