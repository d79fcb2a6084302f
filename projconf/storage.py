"""File reading for configuration files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Tuple

from .errors import ConfigParseError

ConfigEntry = Tuple[str, Any]


@dataclass(frozen=True)
class ConfigFileStorage:
    """Reads a JSON configuration file into an ordered list of entries.

    The file holds either an object (``{"host": "example.org", ...}``) or an
    array of two-element arrays (``[["host", "example.org"], ...]``). Source
    order is kept, repeated keys included.
    """

    path: Path

    def read(self) -> List[ConfigEntry]:
        if not self.path.exists():
            raise FileNotFoundError(f"Configuration file does not exist: {self.path}")
        try:
            raw_text = self.path.read_bytes().decode("utf-8")
            raw = json.loads(raw_text, object_pairs_hook=_PairList)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ConfigParseError(self.path, str(exc)) from exc
        return self._to_entries(raw)

    def _to_entries(self, raw: Any) -> List[ConfigEntry]:
        if isinstance(raw, _PairList):
            return [(key, _plain(value)) for key, value in raw]
        if not isinstance(raw, list):
            raise ConfigParseError(
                self.path, "expected an object or an array of [key, value] pairs"
            )

        entries: List[ConfigEntry] = []
        for index, item in enumerate(raw):
            is_pair = (
                isinstance(item, list)
                and not isinstance(item, _PairList)
                and len(item) == 2
            )
            if not is_pair:
                raise ConfigParseError(
                    self.path, f"item {index} is not a [key, value] pair"
                )
            key, value = item
            if not isinstance(key, str):
                raise ConfigParseError(self.path, f"item {index} has a non-string key")
            entries.append((key, _plain(value)))
        return entries


class _PairList(list):
    """Ordered (key, value) pairs of a decoded JSON object."""


def _plain(value: Any) -> Any:
    # Nested objects become dicts; only the top level keeps its pairs.
    if isinstance(value, _PairList):
        return {key: _plain(item) for key, item in value}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value
