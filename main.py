import time
import argparse
import threading

from core.scene import RenderSettings, SceneStore
from renderers.base_renderer import RendererFactory
from scene_builders.default_scene_builder import DefaultSceneBuilder
from scene_builders.text_scene_builder import TextSceneBuilder, scene_to_string
from render_session import RenderSession


def main():
    parser = argparse.ArgumentParser(description='Whitted-style ray tracer with reflection and refraction')
    parser.add_argument('--renderer', '-r',
                        choices=RendererFactory.list_available(),
                        default='cpu_raytracer',
                        help='renderer to use')
    parser.add_argument('--scene',
                        default=None,
                        help='scene text file (default: built-in scene)')
    parser.add_argument('--width', '-w', type=int, default=840,
                        help='image width')
    parser.add_argument('--height', type=int, default=680,
                        help='image height')
    parser.add_argument('--workers', '-j', type=int, default=4,
                        help='render worker threads')
    parser.add_argument('--scale', '-s', type=float, default=1.0,
                        help='output scale factor (rounded to 0.25, 0.5 or a whole number)')
    parser.add_argument('--output', '-o', default='output.bmp',
                        help='output BMP file')
    parser.add_argument('--save-scene', default=None,
                        help='also write the scene in text form to this file')
    parser.add_argument('--follow-bounces', action='store_true',
                        help='bounce each reflection/refraction off the previous bounce instead of the camera ray')

    args = parser.parse_args()

    settings = RenderSettings(
        width=args.width,
        height=args.height,
        workers=args.workers,
        output_scale=args.scale,
        output_path=args.output,
        follow_bounces=args.follow_bounces,
    )

    if args.scene:
        print(f"Loading scene: {args.scene}")
        with open(args.scene, 'r', encoding='ascii') as f:
            text = f.read()
        store = SceneStore(TextSceneBuilder(text).build_scene)
    else:
        store = SceneStore(DefaultSceneBuilder().build_scene)

    scene = store.current
    print(f"Scene: {scene.material_count} materials, {scene.light_count} lights, "
          f"{scene.sphere_count} spheres, {scene.plane_count} planes")

    if args.save_scene:
        with open(args.save_scene, 'w', encoding='ascii') as f:
            f.write(scene_to_string(scene))
        print(f"Scene written: {args.save_scene}")

    renderer = RendererFactory.create(args.renderer)
    print(f"Capabilities: {', '.join(renderer.get_capabilities())}")

    session = RenderSession(settings=settings, store=store, renderer=renderer)
    cancel = threading.Event()

    start_time = time.time()
    try:
        image = session.render(args.width, args.height, cancel)
    except KeyboardInterrupt:
        cancel.set()
        image = None
    end_time = time.time()

    if image is None:
        print("Rendering cancelled, nothing written")
        return

    print(f"Image written: {args.output} ({image.shape[1]}x{image.shape[0]})")

    elapsed = end_time - start_time
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    print(f"Total time: {minutes}m {seconds:.2f}s")


if __name__ == "__main__":
    main()
