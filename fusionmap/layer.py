"""
Layer builder: resolve one authored layer into a grid plus entities.

Each tile is resolved in authored order:
1. Parse the id (``TileIdError``) and locate its cell (``TileBoundsError``)
2. Forward ``attributes`` to the attribute callback, if both exist
3. Object layers stop here
4. A factory registered for the id consumes the tile (its entity, if any,
   is recorded on the layer)
5. Otherwise the cell is decorated with the sprite at that index
   (``SpriteLookupError`` if there is none) and marked solid when the layer
   is a collider

Duplicate coordinates are allowed; the last tile decides ``solid``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, List, Mapping, Optional, Set

from .errors import SpriteLookupError, TileIdError
from .grid import GridCell, TileGrid
from .logging_utils import log_build
from .schemas import (
    AttributeCallback,
    Factory,
    FactoryProps,
    LayerData,
    TileAttributeData,
    TileData,
    parse_tile_id,
)

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .resource import SpriteFusionResource
    from .scene import Scene


class Layer:
    """One built layer: a fixed-size grid and the entities its factories produced.

    The layer keeps a reference to the owning resource so factory lookups
    always see the resource's current factory table.
    """

    def __init__(
        self,
        data: LayerData,
        order: int,
        resource: "SpriteFusionResource",
        attribute_callback: Optional[AttributeCallback] = None,
        object_layers: Iterable[str] = (),
    ) -> None:
        self.data = data
        self.order = order
        self.resource = resource
        self.collider = bool(data.collider)
        self.is_object_layer = data.name in set(object_layers)
        self.entities: List[Any] = []
        self.scene: Optional["Scene"] = None

        map_data = resource.data
        self.tilemap = TileGrid(
            name=data.name,
            width=map_data.map_width,
            height=map_data.map_height,
            tile_size=map_data.tile_size,
            z=order,
        )

        # Indices into data.tiles already handed to a factory; re-dispatch skips them.
        self._dispatched: Set[int] = set()

        self._build(attribute_callback)

    @property
    def name(self) -> str:
        return self.data.name

    @property
    def z(self) -> int:
        return self.tilemap.z

    @property
    def factories(self) -> Mapping[int, Factory]:
        return self.resource.factories

    def _build(self, attribute_callback: Optional[AttributeCallback]) -> None:
        map_data = self.resource.data
        spritesheet = self.resource.spritesheet

        for index, tile in enumerate(self.data.tiles):
            sprite_id = self._parse_id(tile)
            cell = self.tilemap.get_tile(tile.x, tile.y)

            if tile.attributes is not None and attribute_callback is not None:
                attribute_callback(TileAttributeData(tile_data=tile, map_data=map_data))

            if self.is_object_layer:
                continue

            factory = self.factories.get(sprite_id)
            if factory is not None:
                self._dispatch(index, tile, sprite_id, cell, factory)
                continue

            sprite = spritesheet.get(sprite_id)
            if sprite is None:
                raise SpriteLookupError(
                    f"Tile id {sprite_id} at ({tile.x}, {tile.y}) has no registered factory "
                    f"and the sprite sheet only has {len(spritesheet)} sprites",
                    layer=self.name,
                    tile=tile,
                )
            cell.add_graphic(sprite)
            cell.solid = self.collider

        log_build(
            f"Built layer '{self.name}' (z={self.order}): "
            f"{len(self.tilemap.decorated_cells())} decorated cells, {len(self.entities)} entities"
        )

    def _parse_id(self, tile: TileData) -> int:
        try:
            return parse_tile_id(tile.id)
        except TileIdError as exc:
            raise TileIdError(str(exc), layer=self.name, tile=tile) from exc

    def _dispatch(
        self,
        index: int,
        tile: TileData,
        sprite_id: int,
        cell: GridCell,
        factory: Factory,
    ) -> Optional[Any]:
        # Marked before the call so a factory re-registering its own id is not re-run here.
        self._dispatched.add(index)
        cell.factory_id = sprite_id
        entity = factory(
            FactoryProps(
                world_pos=cell.pos,
                id=sprite_id,
                x=tile.x,
                y=tile.y,
                attributes=tile.attributes,
                layer=self,
            )
        )
        if entity is not None:
            self.entities.append(entity)
            if self.scene is not None:
                self.scene.add(entity)
        return entity

    def run_factory(
        self, tile_id: int, factories: Optional[Mapping[int, Factory]] = None
    ) -> List[Any]:
        """Dispatch the factory for ``tile_id`` to tiles of that id not yet dispatched.

        Used when a factory is registered after the layer was built. Matching
        cells are marked consumed but keep any sprite they were decorated with;
        the grid is not rebuilt. Each tile is dispatched at most
        once, so repeated calls do not duplicate entities.

        Args:
            tile_id: Tile id to re-scan for
            factories: Factory table to consult; defaults to the resource's

        Returns:
            Entities created by this call
        """

        table = self.factories if factories is None else factories
        factory = table.get(tile_id)
        if factory is None or self.is_object_layer:
            return []

        created: List[Any] = []
        for index, tile in enumerate(self.data.tiles):
            if index in self._dispatched:
                continue
            if self._parse_id(tile) != tile_id:
                continue
            cell = self.tilemap.get_tile(tile.x, tile.y)
            entity = self._dispatch(index, tile, tile_id, cell, factory)
            if entity is not None:
                created.append(entity)
        return created

    def __repr__(self) -> str:
        return f"Layer(name={self.name!r}, z={self.order}, entities={len(self.entities)})"


def build_layer(
    data: LayerData,
    order: int,
    resource: "SpriteFusionResource",
    attribute_callback: Optional[AttributeCallback] = None,
    object_layers: Iterable[str] = (),
) -> Layer:
    """Build a ``Layer`` for ``data`` at z ``order``."""

    return Layer(data, order, resource, attribute_callback, object_layers)


__all__ = ["Layer", "build_layer"]
