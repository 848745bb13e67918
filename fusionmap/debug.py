"""ASCII snapshots of built layers for debugging and tests."""

from __future__ import annotations

from typing import Dict, List, Optional

from .layer import Layer

_DEFAULT_CELL_SYMBOLS: Dict[str, str] = {
    "solid": "#",
    "decorated": "+",
    "factory": "@",
    "empty": ".",
}


def render_ascii_layer(layer: Layer, *, symbols: Optional[Dict[str, str]] = None) -> str:
    """Render one character per cell, top row first.

    ``#`` solid, ``+`` decorated, ``@`` consumed by a factory, ``.`` empty.
    Pass ``symbols`` to override any of the keys above.
    """

    mapping = {**_DEFAULT_CELL_SYMBOLS}
    if symbols:
        mapping.update(symbols)

    grid = layer.tilemap
    lines: List[str] = []
    for y in range(grid.height):
        row_chars: List[str] = []
        for x in range(grid.width):
            cell = grid.cells[(x, y)]
            if cell.factory_id is not None:
                row_chars.append(mapping["factory"])
            elif cell.solid:
                row_chars.append(mapping["solid"])
            elif cell.is_decorated:
                row_chars.append(mapping["decorated"])
            else:
                row_chars.append(mapping["empty"])
        lines.append("".join(row_chars))

    return "\n".join(lines)


__all__ = ["render_ascii_layer"]
