"""Device capability lookup.

JS device bundles declare the capabilities of the family they were built
for so that the runtime can refuse to install a package on hardware that
cannot run it. Native bundles carry their own metadata and never get a
``supports`` entry.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Protocol


class CapabilityLookup(Protocol):
    """Callable returning the capability object for a device family."""

    def __call__(self, family: str) -> dict[str, Any] | None: ...


DEFAULT_CAPABILITIES: Mapping[str, Mapping[str, Any]] = {
    "ionic": {"screenSize": {"w": 348, "h": 250}},
    "versa": {"screenSize": {"w": 300, "h": 300}},
    "versa-lite": {"screenSize": {"w": 300, "h": 300}},
    "versa-2": {"screenSize": {"w": 300, "h": 300}},
}
"""Capabilities of the device families known to this toolchain."""


class TableCapabilityLookup:
    """Capability lookup backed by a static table.

    Unknown families resolve to None so that no ``supports`` key is written.

    Example:
        >>> lookup = TableCapabilityLookup()
        >>> lookup("ionic")
        {'screenSize': {'w': 348, 'h': 250}}
        >>> lookup("unknown") is None
        True
    """

    def __init__(self, table: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self.table = DEFAULT_CAPABILITIES if table is None else table

    def __call__(self, family: str) -> dict[str, Any] | None:
        capabilities = self.table.get(family)
        if capabilities is None:
            return None
        # Callers own the returned object
        return copy.deepcopy(dict(capabilities))
