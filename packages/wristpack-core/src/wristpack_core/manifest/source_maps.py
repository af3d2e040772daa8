"""Nested source map tree built from dot-delimited keys."""

from __future__ import annotations

import copy
from typing import Any


class SourceMapTree:
    """Nested mapping of source map paths.

    Keys are dot-delimited paths (``"device.ionic"``); each segment becomes
    one level of nesting and the last segment holds the path string. A
    write replaces whatever is stored at its key, whether that is a leaf or
    a subtree, and a write below an existing leaf replaces the leaf with a
    subtree. Nothing else is ever removed.

    Example:
        >>> tree = SourceMapTree()
        >>> tree.set("device.ionic", "sourcemaps/device/ionic.js.map")
        >>> tree.set("companion", "sourcemaps/companion.js.map")
        >>> tree.to_dict()
        {'device': {'ionic': 'sourcemaps/device/ionic.js.map'}, 'companion': 'sourcemaps/companion.js.map'}
    """

    def __init__(self) -> None:
        self._root: dict[str, Any] = {}

    def __len__(self) -> int:
        return len(self._root)

    @staticmethod
    def split_key(key: str) -> list[str]:
        """Split a dot-delimited key into its segments.

        Raises:
            ValueError: If the key is empty or has an empty segment.
        """
        segments = key.split(".")
        if not all(segments):
            raise ValueError(f"Invalid source map key: '{key}'")
        return segments

    def set(self, key: str, value: str) -> None:
        """Store ``value`` at ``key``, last write wins."""
        *parents, leaf = self.split_key(key)
        self._assign(self._root, parents, leaf, value)

    def _assign(self, node: dict[str, Any], parents: list[str], leaf: str, value: str) -> None:
        if not parents:
            node[leaf] = value
            return
        head, *rest = parents
        child = node.get(head)
        if not isinstance(child, dict):
            child = {}
            node[head] = child
        self._assign(child, rest, leaf, value)

    def get(self, key: str) -> Any | None:
        """Return the leaf or subtree stored at ``key``, if any."""
        node: Any = self._root
        for segment in self.split_key(key):
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        return node

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the tree."""
        return copy.deepcopy(self._root)
