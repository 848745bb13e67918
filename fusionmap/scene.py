"""
Scene and camera interfaces consumed by ``SpriteFusionResource.add_to_scene``.

fusionmap never renders anything itself. The host engine supplies a scene
that accepts grids and entities, plus a camera that can be clamped to the
map bounds. ``InMemoryScene`` records what it is given, which is enough for
headless tools and tests.

Usage pattern:
    scene = InMemoryScene()
    resource.add_to_scene(scene, pos=Vector(32, 0))
    scene.items        # grids then entities, layer by layer
    scene.camera.bounds
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from .grid import BoundingBox


class Camera(ABC):
    """Camera capability: restrict movement to a box."""

    @abstractmethod
    def limit_bounds(self, box: BoundingBox) -> None:
        """Keep the camera inside ``box``."""


class Scene(ABC):
    """Scene capability: accept drawables (grids) and entities."""

    camera: Optional[Camera] = None

    @abstractmethod
    def add(self, item: Any) -> None:
        """Add a grid or entity to the scene."""


class InMemoryCamera(Camera):
    """Camera that records the last bounds it was limited to."""

    def __init__(self) -> None:
        self.bounds: Optional[BoundingBox] = None

    def limit_bounds(self, box: BoundingBox) -> None:
        self.bounds = box


class InMemoryScene(Scene):
    """Scene that keeps added items in insertion order."""

    def __init__(self, camera: Optional[Camera] = None) -> None:
        self.camera = camera or InMemoryCamera()
        self.items: List[Any] = []

    def add(self, item: Any) -> None:
        self.items.append(item)

    def __contains__(self, item: Any) -> bool:
        return any(existing is item for existing in self.items)


__all__ = ["Camera", "Scene", "InMemoryCamera", "InMemoryScene"]
