"""Unit tests for map data validation."""

import json

import pytest

from fusionmap.errors import SchemaError, TileIdError
from fusionmap.schemas import (
    LayerData,
    SpriteFusionMapData,
    TileData,
    parse_tile_id,
    validate_map_data,
)


def make_raw_map(**overrides) -> dict:
    raw = {
        "tileSize": 16,
        "mapWidth": 4,
        "mapHeight": 3,
        "layers": [
            {
                "name": "ground",
                "collider": True,
                "tiles": [
                    {"id": "0", "x": 0, "y": 0},
                    {"id": "3", "x": 3, "y": 2, "attributes": {"spawn": True}},
                ],
            },
            {"name": "decor", "tiles": []},
        ],
    }
    raw.update(overrides)
    return raw


def test_validate_map_data_from_dict():
    data = validate_map_data(make_raw_map())

    assert isinstance(data, SpriteFusionMapData)
    assert data.tile_size == 16
    assert data.map_width == 4
    assert data.map_height == 3
    assert [layer.name for layer in data.layers] == ["ground", "decor"]
    assert data.layers[0].collider is True
    assert data.layers[1].collider is False
    assert data.layers[0].tiles[1].attributes == {"spawn": True}
    assert data.layers[0].tiles[0].attributes is None
    assert data.pixel_width == 64
    assert data.pixel_height == 48


def test_validate_map_data_from_json_text():
    data = validate_map_data(json.dumps(make_raw_map()))
    assert data.layers[0].tiles[1].sprite_id == 3


def test_unknown_fields_are_ignored():
    raw = make_raw_map(editorVersion="2.1")
    raw["layers"][0]["opacity"] = 0.5
    raw["layers"][0]["tiles"][0]["rotation"] = 90

    data = validate_map_data(raw)
    assert data.layers[0].name == "ground"


def test_null_collider_means_false():
    raw = make_raw_map()
    raw["layers"][1]["collider"] = None
    assert validate_map_data(raw).layers[1].collider is False


@pytest.mark.parametrize("field", ["tileSize", "mapWidth", "mapHeight", "layers"])
def test_missing_required_field_is_rejected(field):
    raw = make_raw_map()
    del raw[field]

    with pytest.raises(SchemaError) as excinfo:
        validate_map_data(raw)

    assert any(issue["loc"][0] == field for issue in excinfo.value.issues)
    assert field in str(excinfo.value)


@pytest.mark.parametrize("value", [0, -16, 16.5, "16", True])
def test_invalid_tile_size_is_rejected(value):
    with pytest.raises(SchemaError):
        validate_map_data(make_raw_map(tileSize=value))


@pytest.mark.parametrize("tile_id", ["abc", "-1", "1.5", "", 7])
def test_non_numeric_tile_id_is_a_validation_failure(tile_id):
    raw = make_raw_map()
    raw["layers"][0]["tiles"][0]["id"] = tile_id

    with pytest.raises(SchemaError) as excinfo:
        validate_map_data(raw)

    assert excinfo.value.issues[0]["loc"][:4] == ("layers", 0, "tiles", 0)


def test_tile_coordinates_must_be_integers():
    raw = make_raw_map()
    raw["layers"][0]["tiles"][0]["x"] = "1"
    with pytest.raises(SchemaError):
        validate_map_data(raw)


@pytest.mark.parametrize("field", ["name", "tiles"])
def test_layer_missing_required_field_is_rejected(field):
    raw = make_raw_map()
    del raw["layers"][1][field]

    with pytest.raises(SchemaError) as excinfo:
        validate_map_data(raw)

    assert excinfo.value.issues[0]["loc"] == ("layers", 1, field)


def test_validation_is_all_or_nothing():
    raw = make_raw_map()
    raw["layers"][1]["tiles"] = [{"id": "0", "x": 0}]

    with pytest.raises(SchemaError):
        validate_map_data(raw)


@pytest.mark.parametrize("raw", [None, [], "not json", b"{", 12])
def test_non_object_input_is_rejected(raw):
    with pytest.raises(SchemaError):
        validate_map_data(raw)


def test_map_data_is_immutable():
    data = validate_map_data(make_raw_map())
    with pytest.raises(Exception):
        data.tile_size = 32


def test_models_accept_field_names_directly():
    layer = LayerData(name="objects", tiles=[TileData(id="5", x=1, y=2)])
    data = SpriteFusionMapData(tile_size=8, map_width=2, map_height=3, layers=[layer])
    assert data.layers[0].tiles[0].sprite_id == 5


def test_parse_tile_id():
    assert parse_tile_id("0") == 0
    assert parse_tile_id(" 42 ") == 42
    assert parse_tile_id(7) == 7

    for bad in ["", "x1", "-3", "2.0", -1, True, None, 1.0]:
        with pytest.raises(TileIdError):
            parse_tile_id(bad)
