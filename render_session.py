import threading
from dataclasses import replace
from typing import Callable, Optional
import numpy as np
from PIL import Image

from core.scene import SceneStore, RenderSettings
from core.camera import Camera
from core.image import scale, encode_bitmap, to_pil_image
from renderers.base_renderer import BaseRenderer, RendererFactory
from scene_builders.default_scene_builder import DefaultSceneBuilder
from scene_builders.text_scene_builder import TextSceneBuilder, scene_to_string

# register the built-in renderers
import renderers.cpu_renderer  # noqa: F401


class RenderSession:
    """Entry points used by a front end: render, save_scene and open_scene.

    The front end owns cancellation and must not start a render while another
    one is running. Save and open run on their own threads and report through
    ``on_complete(success)`` from that thread.
    """

    def __init__(self,
                 settings: Optional[RenderSettings] = None,
                 store: Optional[SceneStore] = None,
                 renderer: Optional[BaseRenderer] = None,
                 display: Optional[Callable[[Image.Image], None]] = None):
        self.settings = settings or RenderSettings()
        self.store = store or SceneStore(DefaultSceneBuilder().build_scene)
        self.renderer = renderer or RendererFactory.create("cpu_raytracer")
        self.display = display
        self.applied_scale = 1.0

    def render(self, width: int, height: int, cancel: Optional[threading.Event] = None) -> Optional[np.ndarray]:
        """Render the current scene, show it and write it as a BMP.

        Returns the final color buffer, or None when cancelled (nothing is
        shown or written in that case).
        """
        if cancel is None:
            cancel = threading.Event()
        settings = replace(self.settings, width=width, height=height)

        scene = self.store.current
        camera = Camera(vfov=settings.fov)
        image = self.renderer.render(scene, camera, settings, cancel)
        if cancel.is_set():
            return None

        self.applied_scale = 1.0
        if settings.output_scale != 1.0:
            image, self.applied_scale = scale(image, settings.output_scale)
            print(f"Scaled output by {self.applied_scale}x to {image.shape[1]}x{image.shape[0]}")

        if self.display is not None:
            self.display(to_pil_image(image))
        encode_bitmap(image, settings.output_path)
        return image

    def save_scene(self, path: str, on_complete: Callable[[bool], None]) -> threading.Thread:
        text = scene_to_string(self.store.current)
        worker = threading.Thread(target=self._save, args=(path, text, on_complete),
                                  name="scene-save", daemon=True)
        worker.start()
        return worker

    def open_scene(self, path: str, on_complete: Callable[[bool], None]) -> threading.Thread:
        worker = threading.Thread(target=self._open, args=(path, on_complete),
                                  name="scene-open", daemon=True)
        worker.start()
        return worker

    @staticmethod
    def _save(path: str, text: str, on_complete: Callable[[bool], None]):
        try:
            with open(path, "w", encoding="ascii") as f:
                f.write(text)
        except Exception as e:
            print(f"Saving scene to {path} failed: {e}")
            on_complete(False)
            return
        on_complete(True)

    def _open(self, path: str, on_complete: Callable[[bool], None]):
        try:
            with open(path, "r", encoding="ascii") as f:
                scene = TextSceneBuilder(f.read()).build_scene()
        except Exception as e:
            print(f"Opening scene {path} failed: {e}")
            on_complete(False)
            return
        self.store.publish(scene)
        on_complete(True)
