"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from projconf import Configuration, Overrides


@pytest.fixture()
def write_conf(tmp_path: Path) -> Callable[..., Path]:
    """Write a JSON configuration file and return its path."""

    def _write(entries: Dict[str, Any], name: str = "project.conf") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(entries), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def conf() -> Configuration:
    """A configuration rooted at /srv with nothing loaded."""
    return Configuration(overrides=Overrides({"server_root": "/srv"}))
