"""Tests for sprite sheet indexing."""

from dataclasses import dataclass

import pytest
from PIL import Image

from fusionmap.errors import SpriteSheetIndexError
from fusionmap.spritesheet import SpriteHandle, SpriteSheet, index_sprite_sheet


@dataclass
class FakeImage:
    width: int
    height: int


def test_index_is_row_major_and_zero_based():
    sheet = index_sprite_sheet(FakeImage(width=48, height=32), 16)

    assert isinstance(sheet, SpriteSheet)
    assert len(sheet) == 6
    assert (sheet.columns, sheet.rows) == (3, 2)
    assert [sprite.index for sprite in sheet] == list(range(6))

    fourth = sheet[4]
    assert (fourth.column, fourth.row) == (1, 1)
    assert (fourth.x, fourth.y) == (16, 16)
    assert fourth.box == (16, 16, 32, 32)


def test_get_returns_none_out_of_range():
    sheet = index_sprite_sheet(FakeImage(width=32, height=16), 16)

    assert sheet.get(1).index == 1
    assert sheet.get(2) is None
    assert sheet.get(-1) is None
    assert sheet.get("1") is None


@pytest.mark.parametrize(
    "width,height,tile_size",
    [
        (50, 32, 16),   # width not divisible
        (32, 40, 16),   # height not divisible
        (8, 8, 16),     # smaller than one tile
        (0, 16, 16),
        (32, 32, 0),
    ],
)
def test_incompatible_dimensions_are_rejected(width, height, tile_size):
    with pytest.raises(SpriteSheetIndexError) as excinfo:
        index_sprite_sheet(FakeImage(width=width, height=height), tile_size)

    # Also catchable as the builtin IndexError.
    assert isinstance(excinfo.value, IndexError)
    assert excinfo.value.tile_size == tile_size


def test_crop_uses_pillow_source():
    image = Image.new("RGBA", (32, 16), (0, 0, 0, 0))
    image.putpixel((16, 0), (255, 0, 0, 255))

    sheet = index_sprite_sheet(image, 16)
    sprite = sheet[1].crop()

    assert sprite.size == (16, 16)
    assert sprite.getpixel((0, 0)) == (255, 0, 0, 255)


def test_crop_without_source_fails():
    handle = SpriteHandle(index=0, column=0, row=0, x=0, y=0, width=16, height=16)
    with pytest.raises(ValueError):
        handle.crop()
