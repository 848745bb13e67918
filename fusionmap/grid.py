"""Fixed-size tile grid owned by each layer.

A ``TileGrid`` mirrors the host engine's tile map: ``width x height`` cells of
``tile_size`` pixels, positioned at ``pos`` and drawn at ``z``. Cells start
empty and are either decorated with sprites or consumed by a factory while
the layer is built. The grid is never resized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Tuple

from .errors import TileBoundsError


class Vector(NamedTuple):
    """2D position in pixels."""

    x: float
    y: float

    def __add__(self, other: Tuple[float, float]) -> "Vector":  # type: ignore[override]
        return Vector(self.x + other[0], self.y + other[1])


ZERO = Vector(0, 0)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in pixels."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_dimension(cls, width: float, height: float, pos: Vector = ZERO) -> "BoundingBox":
        """Box of ``width x height`` anchored at its top-left corner ``pos``."""
        return cls(left=pos.x, top=pos.y, right=pos.x + width, bottom=pos.y + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass
class GridCell:
    """A single grid cell.

    Empty cells have no graphics and no ``factory_id``. Decorated cells hold
    one or more sprite handles. Consumed cells record the tile id whose
    factory took them over.
    """

    x: int
    y: int
    pos: Vector
    graphics: List[Any] = field(default_factory=list)
    solid: bool = False
    factory_id: Optional[int] = None

    def add_graphic(self, graphic: Any) -> None:
        self.graphics.append(graphic)

    @property
    def is_empty(self) -> bool:
        return not self.graphics and self.factory_id is None

    @property
    def is_decorated(self) -> bool:
        return bool(self.graphics)


@dataclass
class TileGrid:
    """Dense ``width x height`` grid of cells."""

    name: str
    width: int
    height: int
    tile_size: int
    z: int = 0
    pos: Vector = ZERO
    cells: Dict[Tuple[int, int], GridCell] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        for y in range(self.height):
            for x in range(self.width):
                self.cells[(x, y)] = GridCell(
                    x=x, y=y, pos=Vector(x * self.tile_size, y * self.tile_size)
                )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> GridCell:
        """Return the cell at ``(x, y)``; raises ``TileBoundsError`` outside the grid."""
        if not self.in_bounds(x, y):
            raise TileBoundsError(
                f"Tile ({x}, {y}) is outside the {self.width}x{self.height} grid",
                layer=self.name,
                tile=(x, y),
            )
        return self.cells[(x, y)]

    def world_pos(self, x: int, y: int) -> Vector:
        """Pixel position of a cell including the grid origin."""
        return self.pos + self.get_tile(x, y).pos

    def __iter__(self) -> Iterator[GridCell]:
        for y in range(self.height):
            for x in range(self.width):
                yield self.cells[(x, y)]

    def decorated_cells(self) -> List[GridCell]:
        return [cell for cell in self if cell.is_decorated]

    def solid_cells(self) -> List[GridCell]:
        return [cell for cell in self if cell.solid]

