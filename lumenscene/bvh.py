"""Bounding volume hierarchy over intersectable primitives."""

from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

from lumenscene.bounding_box import BoundingBox, Ray, union
from lumenscene.shapes import Intersection

log = logging.getLogger(__name__)


class SplitMethod(Enum):
    NAIVE = "naive"
    SAH = "sah"


@dataclass(eq=False)
class BVHNode:
    bbox: BoundingBox = field(default_factory=BoundingBox)
    left: BVHNode | None = None
    right: BVHNode | None = None
    primitive: Any = None
    area: float = 0.0


class BVHAccel:
    """Binary hierarchy splitting primitives at the median centroid of the widest axis."""

    def __init__(
        self,
        primitives: Sequence[Any],
        max_prims_in_node: int = 1,
        split_method: SplitMethod = SplitMethod.NAIVE,
    ) -> None:
        self.max_prims_in_node = min(255, max_prims_in_node)
        self.split_method = split_method
        self.primitives = list(primitives)
        self.root: BVHNode | None = None
        if not self.primitives:
            return
        start = time.monotonic()
        self.root = self._build(self.primitives)
        log.info("BVH generation complete in %.3f s", time.monotonic() - start)

    def _build(self, prims: list[Any]) -> BVHNode:
        node = BVHNode()
        if len(prims) == 1:
            node.bbox = prims[0].bounds()
            node.primitive = prims[0]
            node.area = prims[0].area
            return node
        if len(prims) == 2:
            node.left = self._build([prims[0]])
            node.right = self._build([prims[1]])
        else:
            centroids = BoundingBox()
            for prim in prims:
                centroids.merge_point(prim.bounds().centroid())
            axis = centroids.max_extent_axis()
            ordered = sorted(prims, key=lambda p: p.bounds().centroid()[axis])
            mid = len(ordered) // 2
            node.left = self._build(ordered[:mid])
            node.right = self._build(ordered[mid:])
        node.bbox = union(node.left.bbox, node.right.bbox)
        node.area = node.left.area + node.right.area
        return node

    def intersect(self, ray: Ray) -> Intersection:
        """Closest intersection of the ray with any primitive."""
        if self.root is None:
            return Intersection()
        return self._intersect(self.root, ray)

    def _intersect(self, node: BVHNode | None, ray: Ray) -> Intersection:
        if node is None or not node.bbox.intersect_ray(ray):
            return Intersection()
        if node.left is None and node.right is None and node.primitive is not None:
            return node.primitive.get_intersection(ray)
        left_hit = self._intersect(node.left, ray)
        right_hit = self._intersect(node.right, ray)
        return right_hit if right_hit.trace_distance < left_hit.trace_distance else left_hit

    def world_bound(self) -> BoundingBox:
        if self.root is not None:
            return self.root.bbox.copy()
        return BoundingBox()

    def sample(self) -> tuple[Intersection, float]:
        """Pick a point on the primitives; returns it with its pdf."""
        if self.root is None:
            raise ValueError("cannot sample an empty hierarchy")
        split = math.sqrt(random.random()) * self.root.area
        pos, pdf = self._sample(self.root, split)
        return pos, pdf / self.root.area

    def _sample(self, node: BVHNode, split: float) -> tuple[Intersection, float]:
        if node.left is None or node.right is None:
            pos, pdf = node.primitive.sample()
            return pos, pdf * node.area
        if split < node.left.area:
            return self._sample(node.left, split)
        return self._sample(node.right, split - node.left.area)