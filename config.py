"""Host application configuration objects."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional


def _env(name: str) -> Optional[str]:
    return os.environ.get(name) or None


def _env_path(name: str) -> Optional[Path]:
    value = _env(name)
    return Path(value) if value else None


@dataclass(frozen=True)
class AppConfig:
    """Immutable container for host application configuration.

    Override with environment variables, e.g.
    ``PROJCONF_SERVER_ROOT=/srv/site``.
    """

    anchor_package: str = field(
        default_factory=lambda: os.environ.get("PROJCONF_ANCHOR_PACKAGE", "projconf")
    )
    server_root: Optional[str] = field(
        default_factory=lambda: _env("PROJCONF_SERVER_ROOT")
    )
    template_root: Optional[str] = field(
        default_factory=lambda: _env("PROJCONF_TEMPLATE_ROOT")
    )
    template_expander: Optional[str] = field(
        default_factory=lambda: _env("PROJCONF_TEMPLATE_EXPANDER")
    )
    # Explicit configuration file; the default is <server_root>/config/project.conf.
    config_path: Optional[Path] = field(
        default_factory=lambda: _env_path("PROJCONF_CONFIG_PATH")
    )

    def override_cells(self) -> Dict[str, Optional[str]]:
        return {
            "server_root": self.server_root,
            "template_root": self.template_root,
            "template_expander": self.template_expander,
        }


config = AppConfig()
