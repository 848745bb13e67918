"""
Pydantic schemas for SpriteFusion map data.

The map JSON is produced by an external editor and is treated as untrusted:
every field is validated strictly and the whole document either validates or
is rejected with a ``SchemaError``. Unknown fields are ignored so newer
editor exports keep loading.

Map file structure:
```json
{
  "tileSize": 16,
  "mapWidth": 40,
  "mapHeight": 30,
  "layers": [
    {
      "name": "ground",
      "collider": true,
      "tiles": [{"id": "12", "x": 0, "y": 0, "attributes": {"spawn": true}}]
    }
  ]
}
```

Besides the map models this module defines the payloads handed to user hooks:
``TileAttributeData`` for the attribute callback and ``FactoryProps`` for tile
id factories.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from .errors import SchemaError, TileIdError
from .grid import Vector

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .layer import Layer


_TILE_ID_PATTERN = re.compile(r"\d+")


def parse_tile_id(value: Union[str, int]) -> int:
    """Convert a tile id to a non-negative integer.

    Accepts decimal digit strings (surrounding whitespace tolerated) and
    non-negative ints. Anything else, including floats, signs and bools,
    raises ``TileIdError``.
    """

    if isinstance(value, bool):
        raise TileIdError(f"Tile id must be a numeric string, got {value!r}", tile=value)
    if isinstance(value, int):
        if value < 0:
            raise TileIdError(f"Tile id must be non-negative, got {value}", tile=value)
        return value
    if isinstance(value, str):
        text = value.strip()
        if _TILE_ID_PATTERN.fullmatch(text):
            return int(text)
    raise TileIdError(f"Tile id must be a non-negative integer string, got {value!r}", tile=value)


class _MapModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class TileData(_MapModel):
    """A single authored tile placement."""

    id: StrictStr = Field(..., description="Sprite sheet index as a numeric string")
    x: StrictInt = Field(..., description="Zero-based grid column")
    y: StrictInt = Field(..., description="Zero-based grid row")
    # Opaque payload, only ever forwarded to the attribute callback.
    attributes: Any = Field(None, description="Optional editor attributes")

    @field_validator("id")
    @classmethod
    def _id_is_numeric(cls, value: str) -> str:
        parse_tile_id(value)
        return value

    @property
    def sprite_id(self) -> int:
        return parse_tile_id(self.id)


class LayerData(_MapModel):
    """One authored layer: a name, its tiles and an optional collider flag."""

    name: StrictStr
    tiles: List[TileData] = Field(..., description="Tile placements in authored order")
    collider: StrictBool = Field(False, description="Mark every decorated cell solid")

    @field_validator("collider", mode="before")
    @classmethod
    def _null_collider_is_false(cls, value: Any) -> Any:
        return False if value is None else value


class SpriteFusionMapData(_MapModel):
    """Validated map description. Immutable once loaded."""

    tile_size: StrictInt = Field(..., alias="tileSize", gt=0)
    map_width: StrictInt = Field(..., alias="mapWidth", gt=0)
    map_height: StrictInt = Field(..., alias="mapHeight", gt=0)
    layers: List[LayerData] = Field(..., description="Layers in authored (top to bottom) order")

    @property
    def pixel_width(self) -> int:
        return self.map_width * self.tile_size

    @property
    def pixel_height(self) -> int:
        return self.map_height * self.tile_size


def validate_map_data(raw: Union[dict, str, bytes, Any]) -> SpriteFusionMapData:
    """Validate raw map JSON into a ``SpriteFusionMapData``.

    Args:
        raw: Decoded JSON (dict) or JSON text/bytes

    Returns:
        The validated, frozen map description

    Raises:
        SchemaError: On invalid JSON or any schema violation. No partial
            result is ever returned.
    """

    try:
        if isinstance(raw, (str, bytes, bytearray)):
            return SpriteFusionMapData.model_validate_json(raw)
        return SpriteFusionMapData.model_validate(raw)
    except ValidationError as exc:
        issues = [
            {"loc": tuple(error.get("loc", ())), "msg": error.get("msg", "")}
            for error in exc.errors(include_url=False)
        ]
        raise SchemaError(
            f"Map data failed validation with {len(issues)} issue(s)", issues=issues
        ) from exc


def decode_map_json(text: Union[str, bytes]) -> Any:
    """Decode JSON text, mapping decode failures to ``SchemaError``."""

    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SchemaError(f"Map data is not valid JSON: {exc}") from exc


# ============================================================================
# Hook payloads
# ============================================================================

@dataclass(frozen=True)
class TileAttributeData:
    """Argument passed to the attribute callback for tiles carrying attributes."""

    tile_data: TileData
    map_data: SpriteFusionMapData

    @property
    def attributes(self) -> Any:
        return self.tile_data.attributes


@dataclass(frozen=True)
class FactoryProps:
    """Argument passed to a tile id factory.

    ``world_pos`` is the cell position in the layer's local space (the grid
    origin is applied later by ``add_to_scene``).
    """

    world_pos: Vector
    id: int
    x: int
    y: int
    attributes: Any
    layer: "Layer"


Factory = Callable[[FactoryProps], Optional[Any]]
AttributeCallback = Callable[[TileAttributeData], Any]


__all__ = [
    "TileData",
    "LayerData",
    "SpriteFusionMapData",
    "TileAttributeData",
    "FactoryProps",
    "Factory",
    "AttributeCallback",
    "parse_tile_id",
    "validate_map_data",
    "decode_map_json",
]
