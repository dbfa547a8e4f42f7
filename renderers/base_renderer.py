import threading
from abc import ABC, abstractmethod
from typing import List, Optional
import numpy as np
from core.scene import Scene, RenderSettings
from core.camera import Camera


class BaseRenderer(ABC):
    """Turns a scene snapshot into a float color buffer."""

    @abstractmethod
    def render(self, scene: Scene, camera: Camera, settings: RenderSettings,
               cancel: Optional[threading.Event] = None) -> np.ndarray:
        """Return a (height, width, 3) buffer; undefined contents once ``cancel`` is set."""

    @abstractmethod
    def get_capabilities(self) -> List[str]:
        pass


class RendererFactory:
    """Renderer classes by the name the CLI selects them with."""

    _renderers = {}

    @classmethod
    def register(cls, name: str, renderer_class):
        cls._renderers[name] = renderer_class

    @classmethod
    def create(cls, name: str, **kwargs) -> BaseRenderer:
        if name not in cls._renderers:
            raise ValueError(f"Unknown renderer: {name}")
        return cls._renderers[name](**kwargs)

    @classmethod
    def list_available(cls) -> List[str]:
        return list(cls._renderers.keys())
