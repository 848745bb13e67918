"""
Quickstart: load a small SpriteFusion map
=========================================

WHAT THIS SHOWS:
- Writing a map JSON and sprite sheet the way SpriteFusion exports them
- Registering a factory that turns chest tiles into entities
- Recording spawn points from tile attributes on an object layer
- Handing the result to a scene and clamping the camera to the map

RUN:
    python examples/quickstart/run.py [--output-dir DIR]
"""

import argparse
import asyncio
import json
import tempfile
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from fusionmap import (
    Config,
    FactoryProps,
    InMemoryScene,
    SpriteFusionResource,
    TileAttributeData,
    Vector,
    render_ascii_layer,
)

TILE_SIZE = 16
CHEST_TILE_ID = 3


# ============================================================================
# STEP 1: Export assets (normally produced by the editor)
# ============================================================================

MAP = {
    "tileSize": TILE_SIZE,
    "mapWidth": 6,
    "mapHeight": 4,
    "layers": [
        {
            "name": "spawns",
            "tiles": [{"id": "0", "x": 1, "y": 1, "attributes": {"spawn": "player"}}],
        },
        {
            "name": "items",
            "tiles": [{"id": str(CHEST_TILE_ID), "x": 4, "y": 2}],
        },
        {
            "name": "walls",
            "collider": True,
            "tiles": [{"id": "1", "x": x, "y": 0} for x in range(6)]
            + [{"id": "1", "x": x, "y": 3} for x in range(6)],
        },
        {
            "name": "floor",
            "tiles": [{"id": "2", "x": x, "y": y} for x in range(6) for y in (1, 2)],
        },
    ],
}


def write_assets(directory: Path) -> tuple[Path, Path]:
    map_path = directory / "map.json"
    map_path.write_text(json.dumps(MAP, indent=2), encoding="utf-8")

    # 4 sprites in a row: spawn marker, wall, floor, chest
    sheet = Image.new("RGBA", (TILE_SIZE * 4, TILE_SIZE), (0, 0, 0, 0))
    colors = [(255, 0, 255, 255), (90, 90, 90, 255), (180, 140, 90, 255), (220, 180, 0, 255)]
    for index, color in enumerate(colors):
        sheet.paste(color, (index * TILE_SIZE, 0, (index + 1) * TILE_SIZE, TILE_SIZE))
    sheet_path = directory / "spritesheet.png"
    sheet.save(sheet_path)
    return map_path, sheet_path


# ============================================================================
# STEP 2: Game objects and hooks
# ============================================================================

@dataclass
class Chest:
    pos: Vector


def make_chest(props: FactoryProps) -> Chest:
    return Chest(pos=props.world_pos)


async def main(output_dir: Path) -> None:
    Config.validate()
    map_path, sheet_path = write_assets(output_dir)

    spawn_points: list[tuple[int, int]] = []

    def record_spawn(att_data: TileAttributeData) -> None:
        if att_data.attributes.get("spawn") == "player":
            spawn_points.append((att_data.tile_data.x, att_data.tile_data.y))

    resource = SpriteFusionResource(
        map_path=map_path,
        spritesheet_path=sheet_path,
        use_tilemap_camera_strategy=True,
        object_layers=["spawns"],
        tile_attribute_factory=record_spawn,
        entity_tile_id_factories={CHEST_TILE_ID: make_chest},
    )

    # ========================================================================
    # STEP 3: Load and add to a scene
    # ========================================================================

    await resource.load()

    scene = InMemoryScene()
    resource.add_to_scene(scene, pos=Vector(0, 0))

    for layer in resource.layers:
        print(f"Layer {layer.name!r} (z={layer.z}, entities={len(layer.entities)})")
        print(render_ascii_layer(layer))
        print()

    print(f"Player spawn points: {spawn_points}")
    print(f"Camera bounds: {scene.camera.bounds}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Load a small SpriteFusion map")
    parser.add_argument("--output-dir", type=Path, default=None, help="Where to write the assets")
    args = parser.parse_args()

    if args.output_dir:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        asyncio.run(main(args.output_dir))
    else:
        with tempfile.TemporaryDirectory() as tmp:
            asyncio.run(main(Path(tmp)))
