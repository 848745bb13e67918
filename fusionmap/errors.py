"""Error and warning taxonomy for map loading.

Fatal errors abort ``SpriteFusionResource.load`` and surface to the caller.
Warnings never interrupt control flow; they are reported through the
``warnings`` module and the console log.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class FusionMapError(Exception):
    """Base class for all fusionmap errors."""


class SchemaError(FusionMapError, ValueError):
    """Raised when raw map JSON is missing fields, mis-shaped or numerically invalid.

    ``issues`` holds one entry per problem with ``loc`` (path into the
    document) and ``msg`` keys, mirroring pydantic's error listing.
    """

    def __init__(self, message: str, *, issues: Optional[List[Dict[str, Any]]] = None) -> None:
        self.issues = issues or []
        lines = [message]
        for issue in self.issues:
            loc = ".".join(str(part) for part in issue.get("loc", ())) or "<root>"
            lines.append(f"  - {loc}: {issue.get('msg', '')}")
        super().__init__("\n".join(lines))


class SpriteSheetIndexError(FusionMapError, IndexError):
    """Raised when the sprite sheet cannot be sliced evenly by the tile size."""

    def __init__(self, *, width: int, height: int, tile_size: int, reason: str) -> None:
        self.width = width
        self.height = height
        self.tile_size = tile_size
        message = (
            f"Cannot index {width}x{height} sprite sheet with tile size {tile_size}: {reason}\n\n"
            "Remediation tips:\n"
            "  - Export the sprite sheet from the editor without extra padding\n"
            "  - Check that tileSize in the map JSON matches the sheet"
        )
        super().__init__(message)


class TileError(FusionMapError):
    """Base class for per-tile failures; carries the layer and tile context."""

    def __init__(self, message: str, *, layer: Optional[str] = None, tile: Any = None) -> None:
        self.layer = layer
        self.tile = tile
        if layer is not None:
            message = f"[layer '{layer}'] {message}"
        super().__init__(message)


class TileIdError(TileError, ValueError):
    """Raised when a tile id is not a non-negative integer string."""


class TileBoundsError(TileError):
    """Raised when a tile coordinate falls outside the map grid."""


class SpriteLookupError(TileError):
    """Raised when a tile id has neither a registered factory nor a sprite."""


class AlreadyLoadedError(FusionMapError):
    """Raised when ``load`` is invoked more than once on a resource."""


class ResourceNotLoadedError(FusionMapError):
    """Raised when an operation needs a loaded resource but load has not completed."""


class MapSourceError(FusionMapError):
    """Raised when the map JSON or sprite sheet image cannot be fetched or decoded."""


# =============================
# Warnings
# =============================

class FusionMapWarning(UserWarning):
    """Base class for non-fatal fusionmap warnings."""


class DuplicateFactoryWarning(FusionMapWarning):
    """Emitted when a factory registration overwrites an existing one."""


class MissingFactoryWarning(FusionMapWarning):
    """Emitted when unregistering a tile id that has no factory."""


__all__ = [
    "FusionMapError",
    "SchemaError",
    "SpriteSheetIndexError",
    "TileError",
    "TileIdError",
    "TileBoundsError",
    "SpriteLookupError",
    "AlreadyLoadedError",
    "ResourceNotLoadedError",
    "MapSourceError",
    "FusionMapWarning",
    "DuplicateFactoryWarning",
    "MissingFactoryWarning",
]
