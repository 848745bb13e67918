"""
SpriteFusion map resource: loads a map and sprite sheet and builds its layers.

Lifecycle:
1. Construct with ``ResourceOptions`` (or the same fields as keyword arguments).
   Initial factories are registered in the order given.
2. ``await resource.load()``: the map JSON (fetch + validate) and the sprite
   sheet (fetch + decode) load concurrently, then the sheet is indexed and
   layers are built in reverse authored order. The last authored layer gets
   ``start_z_index`` and each following layer one more.
3. ``resource.add_to_scene(scene, pos)`` hands grids and entities to the host.

The factory table stays mutable: registering a factory after load dispatches
it to matching tiles of every built layer.

Usage:
    resource = SpriteFusionResource(
        map_path="map/map.json",
        spritesheet_path="map/spritesheet.png",
        object_layers=["spawns"],
        tile_attribute_factory=record_spawn,
    )
    resource.register_factory(12, lambda props: Chest(props.world_pos))
    await resource.load()
    resource.add_to_scene(scene)
"""

from __future__ import annotations

import asyncio
import warnings
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .config import ResourceOptions
from .errors import (
    AlreadyLoadedError,
    DuplicateFactoryWarning,
    MissingFactoryWarning,
    ResourceNotLoadedError,
    TileIdError,
)
from .grid import ZERO, BoundingBox, TileGrid, Vector
from .layer import Layer, build_layer
from .logging_utils import log_info, log_success, log_warning
from .schemas import Factory, SpriteFusionMapData, parse_tile_id, validate_map_data
from .sources import fetch_map_json, load_image
from .spritesheet import SpriteHandle, SpriteSheet, index_sprite_sheet


class LoadState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


class SpriteFusionResource:
    """Owns the sprite sheet, the built layers and the tile id factory table."""

    def __init__(self, options: Optional[ResourceOptions] = None, **kwargs: Any) -> None:
        """Initialize the resource.

        Args:
            options: Prebuilt ``ResourceOptions``; when omitted, keyword
                arguments are validated into one.
            **kwargs: ``ResourceOptions`` fields (map_path, spritesheet_path,
                start_z_index, use_tilemap_camera_strategy, object_layers,
                entity_tile_id_factories, tile_attribute_factory, map_loader,
                image_loader)
        """
        if options is None:
            options = ResourceOptions(**kwargs)
        elif kwargs:
            options = ResourceOptions(**{**dict(options), **kwargs})
        self.options = options

        self.map_path = options.map_path
        self.spritesheet_path = options.spritesheet_path
        self.start_z_index = options.start_z_index
        self.use_tilemap_camera_strategy = options.use_tilemap_camera_strategy
        self.object_layers: Tuple[str, ...] = options.object_layers
        self.tile_attribute_factory = options.tile_attribute_factory
        self._map_loader = options.map_loader or fetch_map_json
        self._image_loader = options.image_loader or load_image

        self.state = LoadState.UNLOADED
        self.data: Optional[SpriteFusionMapData] = None
        self.spritesheet: Optional[SpriteSheet] = None
        self.layers: List[Layer] = []
        self.factories: Dict[int, Factory] = {}

        for tile_id, factory in options.entity_tile_id_factories.items():
            self.register_factory(tile_id, factory)

    # ------------------------------------------------------------------
    # Factory table
    # ------------------------------------------------------------------

    def register_factory(self, tile_id: Union[int, str], factory: Factory) -> None:
        """Register ``factory`` for ``tile_id``.

        Overwriting an existing registration is allowed but warned about. Once
        loaded, the factory is dispatched to matching tiles of every layer.
        """
        key = parse_tile_id(tile_id)
        if key in self.factories:
            self._warn(
                f'Another factory has already been registered for tile id "{key}", '
                "this is probably a bug.",
                DuplicateFactoryWarning,
            )
        self.factories[key] = factory

        if self.is_loaded():
            created = 0
            for layer in self.layers:
                created += len(layer.run_factory(key, self.factories))
            log_info(f"Late factory for tile id {key} created {created} entities")

    def unregister_factory(self, tile_id: Union[int, str]) -> None:
        """Remove the factory for ``tile_id``. Entities it already built are kept."""
        try:
            key = parse_tile_id(tile_id)
        except TileIdError:
            key = None
        if key not in self.factories:
            self._warn(
                f'No factory has been registered for tile id "{tile_id}", cannot unregister!',
                MissingFactoryWarning,
            )
            return
        del self.factories[key]

    @staticmethod
    def _warn(message: str, category: type) -> None:
        log_warning(message)
        warnings.warn(message, category, stacklevel=3)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> SpriteFusionMapData:
        """Load the map and sprite sheet, then build every layer.

        Returns:
            The validated map description

        Raises:
            AlreadyLoadedError: If load was already invoked on this resource
            MapSourceError: If either source cannot be fetched or decoded
            SchemaError: If the map JSON is invalid
            SpriteSheetIndexError: If the sheet does not divide into tiles
            TileIdError, TileBoundsError, SpriteLookupError: On bad tile data
        """
        if self.state is not LoadState.UNLOADED:
            raise AlreadyLoadedError(
                f"Resource for {self.map_path} has already been loaded (state: {self.state.value})"
            )
        self.state = LoadState.LOADING

        # Map JSON and sprite sheet are independent; load them concurrently.
        data, image = await asyncio.gather(
            self._load_map_data(),
            self._image_loader(self.spritesheet_path),
        )
        spritesheet = index_sprite_sheet(image, data.tile_size)
        log_info(
            f"Indexed sprite sheet {self.spritesheet_path}: "
            f"{spritesheet.columns}x{spritesheet.rows} sprites of {data.tile_size}px"
        )

        self.data = data
        self.spritesheet = spritesheet

        # Layers are published only once all of them built.
        layers: List[Layer] = []
        order = self.start_z_index
        try:
            for layer_data in reversed(data.layers):
                layers.append(
                    build_layer(
                        layer_data,
                        order,
                        self,
                        self.tile_attribute_factory,
                        self.object_layers,
                    )
                )
                order += 1
        except Exception:
            self.data = None
            self.spritesheet = None
            raise

        self.layers = layers
        self.state = LoadState.LOADED
        log_success(f"Loaded {self.map_path}: {len(layers)} layers")
        return data

    async def _load_map_data(self) -> SpriteFusionMapData:
        raw = await self._map_loader(self.map_path)
        return validate_map_data(raw)

    def is_loaded(self) -> bool:
        return self.state is LoadState.LOADED

    def _require_loaded(self, operation: str) -> None:
        if not self.is_loaded():
            raise ResourceNotLoadedError(
                f"Cannot {operation} before load() completes (state: {self.state.value})"
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_sprite_by_id(self, tile_id: Any) -> Optional[SpriteHandle]:
        """Look up a sprite by numeric or string id; returns None for anything invalid."""
        if self.spritesheet is None:
            return None
        try:
            sprite_id = parse_tile_id(tile_id)
        except TileIdError:
            return None
        return self.spritesheet.get(sprite_id)

    def get_layer(self, name: str) -> Optional[Layer]:
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    def get_tile_map(self, name: str) -> Optional[TileGrid]:
        layer = self.get_layer(name)
        return layer.tilemap if layer else None

    @property
    def map_pixel_size(self) -> Tuple[int, int]:
        self._require_loaded("compute map size")
        return self.data.pixel_width, self.data.pixel_height

    def bounds(self, pos: Vector = ZERO) -> BoundingBox:
        """Pixel bounds of the whole map with its top-left corner at ``pos``."""
        width, height = self.map_pixel_size
        return BoundingBox.from_dimension(width, height, pos)

    # ------------------------------------------------------------------
    # Scene
    # ------------------------------------------------------------------

    def add_to_scene(self, scene: Any, pos: Vector = ZERO) -> None:
        """Position every grid at ``pos`` and add grids and entities to ``scene``.

        Layers are added in build order (back to front). With
        ``use_tilemap_camera_strategy`` the scene camera is limited to the map.
        """
        self._require_loaded("add to scene")
        pos = Vector(*pos)

        for layer in self.layers:
            layer.tilemap.pos = pos
            layer.scene = scene
            scene.add(layer.tilemap)
            for entity in layer.entities:
                scene.add(entity)

        if self.use_tilemap_camera_strategy and self.layers:
            camera = getattr(scene, "camera", None)
            if camera is None:
                log_warning("Scene has no camera; skipping camera bounds")
            else:
                camera.limit_bounds(self.bounds(pos))

    def __repr__(self) -> str:
        return f"SpriteFusionResource(map_path={self.map_path!r}, state={self.state.value})"


__all__ = ["SpriteFusionResource", "LoadState"]
