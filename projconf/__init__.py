"""projconf.

Process-wide project configuration: loads ``project.conf``, exposes typed
accessors with defaults and derives the server paths and database backend.
"""

from __future__ import annotations

from .conf import Backend, Configuration
from .overrides import Overrides
from .store import ConfigStore

__all__ = ["Backend", "ConfigStore", "Configuration", "Overrides"]
