"""
Engine settings consulted by the selector and the standard heuristics.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

INJECT_MARKER = "__kunai_inject__"


@dataclass
class Settings:
    """
    Runtime configuration of member selection.

    Settings are read on every call, so changing a field on a shared instance
    takes effect on the next selection.
    """

    inject_non_public: bool = False
    inject_parent_private_properties: bool = False
    inject_marker: str = INJECT_MARKER

    def copy(self, **changes: Any) -> Settings:
        """Return a copy of these settings with the given fields replaced."""
        return dataclasses.replace(self, **changes)
