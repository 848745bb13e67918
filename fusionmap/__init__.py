"""
fusionmap - build layered tile maps from SpriteFusion exports.

Validates the map JSON, slices the sprite sheet, and resolves each tile into
either grid decoration or a game entity built by a registered factory.
Scene, camera and rendering stay with the host engine.
"""

__version__ = "0.1.0"

# Main resource
from .resource import SpriteFusionResource, LoadState
from .config import Config, ResourceOptions

# Map schemas and hook payloads
from .schemas import (
    SpriteFusionMapData,
    LayerData,
    TileData,
    TileAttributeData,
    FactoryProps,
    Factory,
    AttributeCallback,
    parse_tile_id,
    validate_map_data,
)

# Building blocks
from .layer import Layer, build_layer
from .grid import TileGrid, GridCell, Vector, BoundingBox
from .spritesheet import SpriteSheet, SpriteHandle, index_sprite_sheet
from .scene import Scene, Camera, InMemoryScene, InMemoryCamera
from .sources import fetch_map_json, load_image
from .debug import render_ascii_layer

# Errors and warnings
from .errors import (
    FusionMapError,
    SchemaError,
    SpriteSheetIndexError,
    TileError,
    TileIdError,
    TileBoundsError,
    SpriteLookupError,
    AlreadyLoadedError,
    ResourceNotLoadedError,
    MapSourceError,
    FusionMapWarning,
    DuplicateFactoryWarning,
    MissingFactoryWarning,
)

__all__ = [
    # Main class
    "SpriteFusionResource",
    "LoadState",
    "Config",
    "ResourceOptions",
    # Schemas
    "SpriteFusionMapData",
    "LayerData",
    "TileData",
    "TileAttributeData",
    "FactoryProps",
    "Factory",
    "AttributeCallback",
    "parse_tile_id",
    "validate_map_data",
    # Building blocks
    "Layer",
    "build_layer",
    "TileGrid",
    "GridCell",
    "Vector",
    "BoundingBox",
    "SpriteSheet",
    "SpriteHandle",
    "index_sprite_sheet",
    "Scene",
    "Camera",
    "InMemoryScene",
    "InMemoryCamera",
    "fetch_map_json",
    "load_image",
    "render_ascii_layer",
    # Errors
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
