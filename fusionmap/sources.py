"""Default fetch and decode collaborators used by ``SpriteFusionResource.load``.

Both loaders accept a filesystem path or a ``file://``/``http(s)://`` URL.
Blocking I/O runs in a worker thread so the map JSON and the sprite sheet can
be loaded concurrently. Failures raise ``MapSourceError``; nothing is retried.
"""

from __future__ import annotations

import asyncio
import io
from pathlib import Path
from typing import Any, Union
from urllib import error, parse, request

from PIL import Image, UnidentifiedImageError

from .config import Config
from .errors import MapSourceError
from .schemas import decode_map_json

Source = Union[str, Path]

_URL_SCHEMES = ("http", "https", "file")


def _is_url(source: Source) -> bool:
    if isinstance(source, Path):
        return False
    return parse.urlparse(source).scheme in _URL_SCHEMES


def _read_bytes(source: Source, timeout: float) -> bytes:
    """Blocking read of ``source`` from disk or over HTTP."""

    if _is_url(source):
        try:
            with request.urlopen(str(source), timeout=timeout) as resp:
                return resp.read()
        except error.HTTPError as exc:
            raise MapSourceError(
                f"Request for {source} failed with status {exc.code}: {exc.reason}"
            ) from exc
        except error.URLError as exc:
            raise MapSourceError(f"Could not reach {source}: {exc.reason}") from exc

    path = Path(source)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise MapSourceError(f"Could not read {path}: {exc}") from exc


def _decode_image(data: bytes, source: Source) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise MapSourceError(f"Could not decode sprite sheet {source}: {exc}") from exc
    return image


async def fetch_map_json(source: Source, timeout: float | None = None) -> Any:
    """Fetch map JSON and decode it (validation happens separately).

    Raises:
        MapSourceError: If the source cannot be read
        SchemaError: If the payload is not valid JSON
    """

    data = await asyncio.to_thread(
        _read_bytes, source, timeout if timeout is not None else Config.FETCH_TIMEOUT_SECONDS
    )
    return decode_map_json(data)


async def load_image(source: Source, timeout: float | None = None) -> Image.Image:
    """Fetch and fully decode a sprite sheet image with Pillow."""

    data = await asyncio.to_thread(
        _read_bytes, source, timeout if timeout is not None else Config.FETCH_TIMEOUT_SECONDS
    )
    return await asyncio.to_thread(_decode_image, data, source)


__all__ = ["fetch_map_json", "load_image"]
