"""Bulk key/value mapping populated from a configuration file."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from .storage import ConfigEntry

logger = logging.getLogger(__name__)


class ConfigStore:
    """Process-wide configuration mapping.

    Public API:

    * :meth:`replace` - drop every entry and insert a new set.
    * :meth:`get`
    * :meth:`keys`
    * :meth:`is_initialized`

    The store starts uninitialized, where every lookup misses. A
    :meth:`replace` builds the new mapping first and then swaps it in, so
    readers see either the complete previous set or the complete new one.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Optional[Dict[str, Any]] = None

    # --------------------------------------------------------------------- #
    # Mutation
    # --------------------------------------------------------------------- #

    def replace(self, entries: Iterable[ConfigEntry]) -> None:
        """Replace the whole content of the store.

        When a key repeats, the first occurrence in ``entries`` is kept.
        """
        table: Dict[str, Any] = {}
        for key, value in entries:
            if key in table:
                logger.warning(
                    "Duplicate configuration key %r, keeping first value", key
                )
                continue
            table[key] = value

        with self._lock:
            self._entries = table

    def clear(self) -> None:
        """Return the store to the uninitialized state."""
        with self._lock:
            self._entries = None

    # --------------------------------------------------------------------- #
    # Lookup
    # --------------------------------------------------------------------- #

    def get(self, key: str, default: Any = None) -> Any:
        entries = self._entries
        if entries is None:
            return default
        return entries.get(key, default)

    def keys(self) -> List[str]:
        entries = self._entries
        return list(entries) if entries is not None else []

    def is_initialized(self) -> bool:
        return self._entries is not None

    def __contains__(self, key: object) -> bool:
        entries = self._entries
        return entries is not None and key in entries

    def __len__(self) -> int:
        entries = self._entries
        return len(entries) if entries is not None else 0
