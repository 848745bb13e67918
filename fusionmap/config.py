"""
fusionmap Configuration

Process-wide defaults load from environment variables (and a ``.env`` file if
present). Per-resource options are described by ``ResourceOptions``.
"""

import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    # Map building
    START_Z_INDEX: int = int(os.getenv("FUSIONMAP_START_Z_INDEX", "0"))

    # Sources
    FETCH_TIMEOUT_SECONDS: float = float(os.getenv("FUSIONMAP_FETCH_TIMEOUT", "30"))

    # Logging
    VERBOSE: bool = _env_flag("FUSIONMAP_VERBOSE")
    NO_COLOR: bool = bool(os.getenv("FUSIONMAP_NO_COLOR"))

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors for unusable values."""
        if cls.FETCH_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                "FUSIONMAP_FETCH_TIMEOUT must be a positive number of seconds"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "fusionmap Configuration:",
            f"  Start Z Index: {cls.START_Z_INDEX}",
            f"  Fetch Timeout: {cls.FETCH_TIMEOUT_SECONDS}s",
            f"  Verbose: {cls.VERBOSE}",
            f"  Color: {'off' if cls.NO_COLOR else 'on'}",
        ]
        return "\n".join(lines)


class ResourceOptions(BaseModel):
    """Construction-time options for ``SpriteFusionResource``."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    map_path: Union[str, Path] = Field(..., description="Map JSON exported by SpriteFusion")
    spritesheet_path: Union[str, Path] = Field(..., description="Sprite sheet image path or URL")
    start_z_index: StrictInt = Field(
        default_factory=lambda: Config.START_Z_INDEX,
        description="z assigned to the last authored layer",
    )
    use_tilemap_camera_strategy: bool = Field(
        False, description="Limit the scene camera to the map bounds in add_to_scene",
    )
    object_layers: Tuple[str, ...] = Field(
        default_factory=tuple,
        description="Layers whose tiles only trigger attribute callbacks",
    )
    # Registered in iteration order when the resource is constructed.
    entity_tile_id_factories: Dict[Any, Callable[..., Any]] = Field(default_factory=dict)
    tile_attribute_factory: Optional[Callable[..., Any]] = None
    # Injectable collaborators; None means fusionmap.sources defaults.
    map_loader: Optional[Callable[..., Any]] = None
    image_loader: Optional[Callable[..., Any]] = None

    @field_validator("object_layers", mode="before")
    @classmethod
    def _normalize_object_layers(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return tuple(value)
