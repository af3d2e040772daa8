"""Tile mapping.

Tiles declared in project configuration are reconciled with the device
families actually present in the build. A tile that ends up with no
family is dropped, and when every tile is dropped the manifest carries no
``tiles`` key at all.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from wristpack_core.schemas.manifest import Tile
from wristpack_core.schemas.project_config import AppType, ProjectConfig, TileDeclaration

logger = structlog.get_logger(__name__)


def map_tiles(
    declarations: Sequence[TileDeclaration],
    registered_families: Sequence[str],
) -> list[Tile] | None:
    """Resolve tile declarations against registered device families.

    Args:
        declarations: Tiles declared by the project, in declared order.
        registered_families: Device families in registration order.

    Returns:
        Tiles with at least one platform, or None if there are none.

    Example:
        >>> decl = TileDeclaration(name="Clock", id="t1", build_targets=["fenix", "versa"])
        >>> map_tiles([decl], ["fenix"])
        [Tile(id='t1', name='Clock', platforms=['fenix'])]
    """
    registered = set(registered_families)
    tiles: list[Tile] = []

    for declaration in declarations:
        if declaration.build_targets is not None:
            platforms = [target for target in declaration.build_targets if target in registered]
        else:
            platforms = list(registered_families)

        if not platforms:
            logger.debug("tile_dropped", tile_id=declaration.id, name=declaration.name)
            continue

        tiles.append(Tile(id=declaration.id, name=declaration.name, platforms=platforms))

    return tiles or None


def tiles_for_build(
    project_config: ProjectConfig,
    registered_families: Sequence[str],
    *,
    has_native: bool,
) -> list[Tile] | None:
    """Compute tiles if this build carries them.

    Tiles only apply to apps with native device components.
    """
    if project_config.app_type is not AppType.APP or not has_native:
        return None

    tiles = map_tiles(project_config.tiles, registered_families)
    logger.info(
        "tiles_mapped",
        declared=len(project_config.tiles),
        mapped=len(tiles) if tiles else 0,
    )
    return tiles
