import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple
import numpy as np

from core.math import Vec3, Ray
from core.scene import Scene, RenderSettings
from core.camera import Camera
from core.tracer import trace
from renderers.base_renderer import BaseRenderer, RendererFactory


def partition_rows(height: int, workers: int) -> List[Tuple[int, int]]:
    """Split ``height`` rows into ``workers`` contiguous [start, end) ranges.

    Every range gets ``height // workers`` rows; the last one also takes the
    remainder.
    """
    workers = max(1, workers)
    rows_per_worker = height // workers
    ranges = []
    for i in range(workers):
        start = i * rows_per_worker
        end = height if i == workers - 1 else start + rows_per_worker
        ranges.append((start, end))
    return ranges


class RowCounter:
    """Completed-row count shared by the workers and the progress monitor."""

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def increment(self):
        with self._lock:
            self._value += 1

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


def print_progress(percent: int):
    print(f"Tracing {percent}% complete")


class CPURenderer(BaseRenderer):
    """Ray tracer that splits scanlines across a fixed pool of worker threads."""

    def __init__(self, on_progress: Optional[Callable[[int], None]] = print_progress):
        self.on_progress = on_progress

    def get_capabilities(self) -> List[str]:
        return [
            "ray_tracing",
            "shadows",
            "reflection",
            "refraction",
            "fresnel",
            "point_lights",
            "cancellation",
        ]

    def render(self, scene: Scene, camera: Camera, settings: RenderSettings,
               cancel: Optional[threading.Event] = None) -> np.ndarray:
        if cancel is None:
            cancel = threading.Event()
        start_time = time.time()
        width, height = settings.width, settings.height
        workers = max(1, settings.workers)

        print(f"CPU rendering started: {width}x{height}, {workers} workers")

        buffer = np.zeros((height, width, 3), dtype=np.float64)
        directions = camera.ray_directions(width, height)
        counter = RowCounter()
        finished = threading.Event()

        monitor = threading.Thread(target=self._monitor_progress,
                                   args=(counter, height, cancel, finished, settings.progress_interval),
                                   name="render-progress", daemon=True)
        monitor.start()
        try:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="render-worker") as pool:
                tasks = [pool.submit(self._render_rows, scene, camera.origin, directions, buffer,
                                     start, end, counter, cancel, settings.follow_bounces)
                         for start, end in partition_rows(height, workers)]
                try:
                    for task in tasks:
                        task.result()
                except BaseException:
                    # a failed worker or Ctrl-C stops the rest of the pool
                    cancel.set()
                    raise
        finally:
            finished.set()
            monitor.join()

        elapsed = time.time() - start_time
        if cancel.is_set():
            print(f"CPU rendering cancelled after {elapsed:.2f}s")
        else:
            print(f"CPU rendering finished: {elapsed:.2f}s")
        return buffer

    @staticmethod
    def _render_rows(scene: Scene, origin: Vec3, directions: np.ndarray, buffer: np.ndarray,
                     start: int, end: int, counter: RowCounter, cancel: threading.Event,
                     follow_bounces: bool):
        """Trace rows [start, end). Only this worker writes those rows."""
        width = buffer.shape[1]
        for y in range(start, end):
            if cancel.is_set():
                return
            for x in range(width):
                if cancel.is_set():
                    return
                ray = Ray(origin, Vec3(*directions[y, x]))
                color = trace(scene, ray, follow_bounces)
                buffer[y, x] = color.to_np()
            counter.increment()

    def _monitor_progress(self, counter: RowCounter, height: int, cancel: threading.Event,
                          finished: threading.Event, interval: float):
        """Report progress in 10% steps until done, cancelled or the workers stop."""
        last_reported = -1
        while True:
            # read the flags first so the final count is seen before exiting
            stopping = cancel.is_set() or finished.is_set()
            done = counter.value
            percent = 100 if height == 0 else int(done * 100 / height)
            step = percent - percent % 10
            if step > last_reported and self.on_progress is not None:
                self.on_progress(step)
                last_reported = step
            if stopping or done >= height:
                return
            cancel.wait(interval)


RendererFactory.register("cpu_raytracer", CPURenderer)
