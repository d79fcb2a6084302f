"""Process-lifetime override cells."""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional

SERVER_ROOT = "server_root"
TEMPLATE_ROOT = "template_root"
TEMPLATE_EXPANDER = "template_expander"
DBMS = "dbms"


class Overrides:
    """Small set of single-value cells kept apart from the configuration file.

    A cell is either unset or holds one value; :meth:`set` overwrites. There
    is no bulk replacement.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._lock = threading.Lock()
        self._cells: Dict[str, Any] = {}
        for name, value in (initial or {}).items():
            if value is not None:
                self._cells[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self._cells.get(name, default)

    def is_set(self, name: str) -> bool:
        return name in self._cells

    def set(self, name: str, value: Any) -> None:
        with self._lock:
            self._cells[name] = value

    def unset(self, name: str) -> None:
        with self._lock:
            self._cells.pop(name, None)
