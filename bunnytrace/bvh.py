"""Bounding volume hierarchy over scene objects."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, TextIO

from bunnytrace.bounds3 import Bounds3, union
from bunnytrace.intersection import Intersection, SceneObject
from bunnytrace.ray import Ray


class SplitMethod(Enum):
    NAIVE = "naive"
    SAH = "sah"


@dataclass
class BVHBuildNode:
    """A node of the hierarchy; leaves hold exactly one object."""

    bounds: Bounds3 = field(default_factory=Bounds3)
    left: Optional["BVHBuildNode"] = None
    right: Optional["BVHBuildNode"] = None
    object: Optional[SceneObject] = None
    split_axis: int = 0
    first_prim_offset: int = 0
    n_primitives: int = 0

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


class BVHAccel:
    """Binary hierarchy built by splitting at the median centroid of the longest axis."""

    def __init__(
        self,
        primitives: Sequence[SceneObject],
        max_prims_in_node: int = 1,
        split_method: SplitMethod = SplitMethod.NAIVE,
        stream: Optional[TextIO] = None,
    ):
        self.max_prims_in_node = min(255, max_prims_in_node)
        self.split_method = split_method
        self.primitives: List[SceneObject] = list(primitives)
        self.root: Optional[BVHBuildNode] = None

        start = time.time()
        if not self.primitives:
            return

        self.root = self.recursive_build(self.primitives)

        diff = int(time.time() - start)
        hrs = diff // 3600
        mins = diff // 60 - hrs * 60
        secs = diff - hrs * 3600 - mins * 60
        out = stream if stream is not None else sys.stdout
        out.write(
            f"\rBVH Generation complete: \nTime Taken: {hrs} hrs, {mins} mins, {secs} secs\n\n"
        )

    def recursive_build(self, objects: Sequence[SceneObject]) -> BVHBuildNode:
        """Build the subtree holding the given objects."""
        node = BVHBuildNode()
        objects = list(objects)

        if len(objects) == 1:
            node.bounds = objects[0].get_bounds()
            node.object = objects[0]
            return node

        if len(objects) == 2:
            node.left = self.recursive_build([objects[0]])
            node.right = self.recursive_build([objects[1]])
            node.bounds = union(node.left.bounds, node.right.bounds)
            return node

        centroid_bounds = Bounds3()
        for obj in objects:
            centroid_bounds = union(centroid_bounds, obj.get_bounds().centroid())
        dim = centroid_bounds.max_extent()
        objects.sort(key=lambda o: o.get_bounds().centroid()[dim])

        middle = len(objects) // 2
        node.left = self.recursive_build(objects[:middle])
        node.right = self.recursive_build(objects[middle:])
        node.bounds = union(node.left.bounds, node.right.bounds)
        return node

    def intersect(self, ray: Ray) -> Intersection:
        """Nearest hit of the ray with any object in the hierarchy."""
        if self.root is None:
            return Intersection()
        return self.get_intersection(self.root, ray)

    def get_intersection(self, node: BVHBuildNode, ray: Ray) -> Intersection:
        """Nearest hit of the ray within the subtree rooted at node."""
        d = ray.direction
        dir_is_neg = [int(d.x > 0), int(d.y > 0), int(d.z > 0)]
        if not node.bounds.intersect_p(ray, ray.direction_inv, dir_is_neg):
            return Intersection()
        if node.is_leaf:
            return node.object.get_intersection(ray)
        hit1 = self.get_intersection(node.left, ray)
        hit2 = self.get_intersection(node.right, ray)
        return hit1 if hit1.distance < hit2.distance else hit2