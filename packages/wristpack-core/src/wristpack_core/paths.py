"""Path helpers shared by the manifest stage."""

from __future__ import annotations

from pathlib import PurePath


def normalize_to_posix(path: str | PurePath) -> str:
    """Return ``path`` with every backslash replaced by a forward slash.

    Manifest documents are consumed on-device, so recorded paths must not
    depend on the separator of the machine that produced the build.

    Example:
        >>> normalize_to_posix("sourcemaps\\\\device\\\\index.js.map")
        'sourcemaps/device/index.js.map'
    """
    return str(path).replace("\\", "/")
