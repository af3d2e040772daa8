"""wristpack-cli: Command line host for the wristpack manifest stage."""

from __future__ import annotations

__version__ = "0.1.0"
