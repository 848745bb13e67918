"""Slice a decoded sprite sheet image into addressable sprite handles.

Sprite ids in the map JSON are row-major, zero-based indices into the sheet,
so handle ``i`` sits at column ``i % columns`` and row ``i // columns``.
Sheets whose dimensions are not an exact multiple of the tile size are
rejected rather than truncated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Sequence, Union

from .errors import SpriteSheetIndexError


@dataclass(frozen=True)
class SpriteHandle:
    """A tile-sized region of the sprite sheet."""

    index: int
    column: int
    row: int
    x: int
    y: int
    width: int
    height: int
    source: Any = field(default=None, compare=False, repr=False)

    @property
    def box(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def crop(self) -> Any:
        """Return the sprite pixels as a new image (Pillow ``Image.crop``)."""
        if self.source is None:
            raise ValueError(f"Sprite {self.index} has no source image to crop")
        return self.source.crop(self.box)


class SpriteSheet(Sequence[SpriteHandle]):
    """Dense, zero-based sequence of sprite handles."""

    def __init__(self, sprites: List[SpriteHandle], *, rows: int, columns: int, tile_size: int):
        self._sprites = sprites
        self.rows = rows
        self.columns = columns
        self.tile_size = tile_size

    def __len__(self) -> int:
        return len(self._sprites)

    def __getitem__(self, index):  # type: ignore[override]
        return self._sprites[index]

    def __iter__(self) -> Iterator[SpriteHandle]:
        return iter(self._sprites)

    def get(self, index: Union[int, Any]) -> Optional[SpriteHandle]:
        """Return the handle at ``index`` or ``None`` (negative indices are not wrapped)."""
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if 0 <= index < len(self._sprites):
            return self._sprites[index]
        return None

    def __repr__(self) -> str:
        return f"SpriteSheet(rows={self.rows}, columns={self.columns}, tile_size={self.tile_size})"


def index_sprite_sheet(image: Any, tile_size: int) -> SpriteSheet:
    """Slice ``image`` into ``tile_size`` square sprites.

    Args:
        image: Any object exposing integer ``width`` and ``height`` (a Pillow
            ``Image`` works and enables ``SpriteHandle.crop``)
        tile_size: Edge length of one sprite in pixels

    Returns:
        SpriteSheet with ``(width // tile_size) * (height // tile_size)`` handles

    Raises:
        SpriteSheetIndexError: If tile_size is not positive or does not evenly
            divide both image dimensions
    """

    width = int(image.width)
    height = int(image.height)

    if tile_size <= 0:
        raise SpriteSheetIndexError(
            width=width, height=height, tile_size=tile_size, reason="tile size must be positive"
        )
    if width <= 0 or height <= 0:
        raise SpriteSheetIndexError(
            width=width, height=height, tile_size=tile_size, reason="image is empty"
        )
    if width % tile_size or height % tile_size:
        raise SpriteSheetIndexError(
            width=width,
            height=height,
            tile_size=tile_size,
            reason="dimensions are not a multiple of the tile size",
        )

    columns = width // tile_size
    rows = height // tile_size
    sprites = [
        SpriteHandle(
            index=row * columns + column,
            column=column,
            row=row,
            x=column * tile_size,
            y=row * tile_size,
            width=tile_size,
            height=tile_size,
            source=image,
        )
        for row in range(rows)
        for column in range(columns)
    ]
    return SpriteSheet(sprites, rows=rows, columns=columns, tile_size=tile_size)
