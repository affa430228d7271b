"""Primary-ray renderer writing binary PPM images, and the command entry point."""

from __future__ import annotations

import argparse
import math
import os
import sys
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, TextIO, Union

from bunnytrace.light import Light
from bunnytrace.ray import Ray
from bunnytrace.scene import Scene
from bunnytrace.triangle import MeshTriangle
from bunnytrace.vector import M_PI, Vector3f, clamp, normalize, update_progress

PathLike = Union[str, "os.PathLike[str]"]

EYE_POS = Vector3f(-1, 5, 10)


def deg2rad(deg: float) -> float:
    return deg * M_PI / 180.0


def write_ppm(framebuffer: Sequence[Vector3f], width: int, height: int, path: PathLike) -> None:
    """Write the framebuffer as a binary P6 image, clamping channels to [0, 1]."""
    if len(framebuffer) != width * height:
        raise ValueError(
            f"framebuffer holds {len(framebuffer)} pixels, expected {width * height}"
        )
    data = bytearray(f"P6\n{width} {height}\n255\n".encode("ascii"))
    for pixel in framebuffer:
        data.extend(int(255 * clamp(0, 1, c)) for c in pixel)
    with open(path, "wb") as handle:
        handle.write(data)


@dataclass
class Renderer:
    """Casts one ray per pixel from a fixed eye position."""

    stream: Optional[TextIO] = None

    def render(self, scene: Scene, path: PathLike = "binary.ppm") -> List[Vector3f]:
        """Render the scene, save it to path and return the framebuffer."""
        out = self.stream if self.stream is not None else sys.stdout
        scale = math.tan(deg2rad(scene.fov * 0.5))
        aspect = scene.width / scene.height
        framebuffer: List[Vector3f] = []
        for j in range(scene.height):
            y = (1 - 2 * (j + 0.5) / scene.height) * scale
            for i in range(scene.width):
                x = (2 * (i + 0.5) / scene.width - 1) * aspect * scale
                direction = normalize(Vector3f(x, y, -1))
                framebuffer.append(scene.cast_ray(Ray(EYE_POS, direction, 0.0), 0))
            update_progress(j / scene.height, out)
        update_progress(1.0, out)
        write_ppm(framebuffer, scene.width, scene.height, path)
        return framebuffer


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Render an OBJ model to a PPM image.")
    parser.add_argument("model", nargs="?", default="../models/bunny/bunny.obj")
    parser.add_argument("--output", default="binary.ppm")
    parser.add_argument("--width", type=int, default=1280)
    parser.add_argument("--height", type=int, default=960)
    args = parser.parse_args(argv)

    scene = Scene(args.width, args.height)
    scene.add(MeshTriangle(args.model))
    scene.add(Light(Vector3f(-20, 70, 20), Vector3f(1)))
    scene.add(Light(Vector3f(20, 70, 20), Vector3f(1)))
    scene.build_bvh()

    start = time.monotonic()
    Renderer().render(scene, args.output)
    elapsed = int(time.monotonic() - start)

    print("Render complete: ")
    print(f"Time taken: {elapsed // 3600} hours")
    print(f"          : {elapsed // 60} minutes")
    print(f"          : {elapsed} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())