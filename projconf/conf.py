"""Project configuration: loading, typed accessors and derived settings."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from .overrides import DBMS, TEMPLATE_EXPANDER, TEMPLATE_ROOT, Overrides
from .root import RootResolver
from .storage import ConfigEntry, ConfigFileStorage
from .store import ConfigStore

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PARTS = ("config", "project.conf")


class Backend(str, Enum):
    """Identifiers of the storage engines a data-access layer can select."""

    MNESIA = "db_mnesia"
    COUCHDB = "db_couchdb"


_DBMS_BACKENDS = {
    "mnesia": Backend.MNESIA,
    "couchdb": Backend.COUCHDB,
}


def select_backend(entries: List[ConfigEntry]) -> Backend:
    """Map the first ``dbms`` entry to a backend, defaulting to Mnesia."""
    for key, value in entries:
        if key != "dbms":
            continue
        backend = _DBMS_BACKENDS.get(value) if isinstance(value, str) else None
        if backend is None:
            logger.warning(
                "Unknown dbms %r, falling back to %s", value, Backend.MNESIA.value
            )
            return Backend.MNESIA
        return backend
    return Backend.MNESIA


class Configuration:
    """Owner of the configuration store and its override cells.

    Public API:

    * :meth:`load` / :meth:`install` / :meth:`reinstall`
    * :meth:`get`
    * one accessor per recognized option, each falling back to a fixed
      default when the option is absent
    * :meth:`server_root` and :meth:`template_root`
    """

    def __init__(
        self,
        store: Optional[ConfigStore] = None,
        overrides: Optional[Overrides] = None,
        anchor_package: str = "projconf",
        locate: Optional[Callable[[str], Path]] = None,
    ) -> None:
        self.store = store if store is not None else ConfigStore()
        self.overrides = overrides if overrides is not None else Overrides()
        self._load_lock = threading.Lock()
        self._root = RootResolver(
            self.overrides, anchor_package=anchor_package, locate=locate
        )

    # ------------------------------------------------------------------ #
    # Loading
    # ------------------------------------------------------------------ #

    def default_path(self) -> Path:
        return Path(self.server_root(), *DEFAULT_CONFIG_PARTS)

    def load(self, path: Union[str, Path, None] = None) -> None:
        """Load the configuration file at ``path``, erasing the previous one.

        ``path`` defaults to ``<server_root>/config/project.conf``. A
        ``template_root`` entry is appended after the file's own entries, so
        the key is always present in the store. The ``dbms`` option is turned
        into a :class:`Backend` and kept in the override cells.

        Parse failures propagate before the store is touched.
        """
        config_path = Path(path) if path is not None else self.default_path()
        entries = ConfigFileStorage(path=config_path).read()
        entries.append((TEMPLATE_ROOT, self.template_root()))

        backend = select_backend(entries)
        # Store content and backend selection always come from the same file.
        with self._load_lock:
            self.store.replace(entries)
            self.overrides.set(DBMS, backend)
        logger.info(
            "Loaded %d configuration entries from %s (dbms=%s)",
            len(entries),
            config_path,
            backend.value,
        )

    def install(self) -> None:
        """Load the configuration from the default path."""
        self.load()

    def reinstall(self) -> None:
        """Load the configuration from the default path."""
        self.load()

    def get(self, key: str, default: Any = None) -> Any:
        return self.store.get(key, default)

    # ------------------------------------------------------------------ #
    # Paths
    # ------------------------------------------------------------------ #

    def server_root(self) -> str:
        return self._root.server_root()

    def reset_server_root(self) -> None:
        self._root.reset()

    @property
    def root_derivations(self) -> int:
        return self._root.derivations

    def template_root(self) -> str:
        """Return the ``template_root`` override, else ``<server_root>/templates``.

        This ignores the ``template_root`` entry of the store.
        """
        template_dir = self.overrides.get(TEMPLATE_ROOT)
        if template_dir is not None:
            return template_dir
        return str(Path(self.server_root(), "templates"))

    def upload_dir(self) -> str:
        """Return ``<server_root>/docroot/<upload_dir>``.

        The configured value is always taken relative to the docroot, a
        leading separator is ignored. Without a value the directory is
        ``<server_root>/docroot/upload``.
        """
        fragment = str(self.get("upload_dir", "upload")).lstrip("/\\")
        return str(Path(self.server_root(), "docroot", fragment))

    def cache_dir(self) -> str:
        # Returned as configured, not joined with the server root.
        return self.get("cache_dir", "templates/cache")

    # ------------------------------------------------------------------ #
    # Plain options
    # ------------------------------------------------------------------ #

    def default_language(self) -> str:
        """Language used for translation when the session does not set one."""
        return self.get("default_language", "en")

    def host(self) -> str:
        """Host name the server runs on, used for redirections."""
        return self.get("host", "localhost")

    def fe_servers(self) -> List[Any]:
        return self.get("fe_servers", [])

    def debug_mode(self) -> bool:
        """Show raw errors instead of the generic error pages."""
        return self.get("debug_mode", False)

    def primitive_types(self) -> List[Any]:
        return self.get("primitive_types", [])

    def http_port(self) -> str:
        return str(self.get("http_port", 80))

    def https_port(self) -> str:
        return str(self.get("https_port", 443))

    def project_name(self) -> str:
        """Name of the project, used for naming CouchDB databases."""
        return self.get("project_name", "erlangweb")

    def couchdb_address(self) -> str:
        return self.get("couchdb_address", "http://localhost:5984/")

    def ecomponents(self) -> List[Any]:
        """Declared components with their settings, in start order."""
        return self.get("ecomponents", [])

    # ------------------------------------------------------------------ #
    # Override-backed options
    # ------------------------------------------------------------------ #

    def dbms(self) -> Backend:
        """Backend chosen by the last :meth:`load`, Mnesia before any load."""
        return self.overrides.get(DBMS, Backend.MNESIA)

    def template_expander(self) -> Optional[str]:
        return self.overrides.get(TEMPLATE_EXPANDER)

    def snapshot(self) -> Dict[str, Any]:
        """Return the current value of every accessor."""
        return {
            "server_root": self.server_root(),
            "template_root": self.template_root(),
            "template_expander": self.template_expander(),
            "upload_dir": self.upload_dir(),
            "cache_dir": self.cache_dir(),
            "default_language": self.default_language(),
            "host": self.host(),
            "fe_servers": self.fe_servers(),
            "debug_mode": self.debug_mode(),
            "primitive_types": self.primitive_types(),
            "http_port": self.http_port(),
            "https_port": self.https_port(),
            "project_name": self.project_name(),
            "couchdb_address": self.couchdb_address(),
            "dbms": self.dbms().value,
            "ecomponents": self.ecomponents(),
        }
