# src/geometry/bvh.py
"""
Bounding volume hierarchy.

The tree is stored as a flat node table addressed by index. Branch nodes hold
the ids of their two children, leaf nodes the id of one primitive in the
leaf table. The tree is built once and never modified.
"""
import logging
from typing import Iterable, List, Optional, Tuple, Union
from core.aabb import AABB
from core.errors import IllegalOperationError
from core.ray import Ray, RayExpanded
from geometry.hittable import Hittable, Hit

logger = logging.getLogger(__name__)


class BvhBranch:
    __slots__ = ("aabb", "left", "right")

    def __init__(self, aabb: AABB, left: int, right: int):
        self.aabb = aabb
        self.left = left
        self.right = right

    def __repr__(self) -> str:
        return f"BvhBranch({self.aabb}, left={self.left}, right={self.right})"


class BvhLeaf:
    __slots__ = ("aabb", "leaf")

    def __init__(self, aabb: AABB, leaf: int):
        self.aabb = aabb
        self.leaf = leaf

    def __repr__(self) -> str:
        return f"BvhLeaf({self.aabb}, leaf={self.leaf})"


BvhNode = Union[BvhBranch, BvhLeaf]


def _split(content: List[Tuple[int, AABB]], sort_axis: int):
    # Median split on bounding box centroids, not a surface area heuristic
    content.sort(key=lambda item: item[1].centroid(sort_axis))
    middle = len(content) // 2
    return content[:middle], content[middle:]


def make_bvh(content: List[Tuple[int, AABB]], sort_axis: int, nodes: List[BvhNode]) -> int:
    """
    Appends the subtree over content to nodes and returns the id of its root.
    The sort axis cycles x -> y -> z with depth.
    """
    if len(content) == 1:
        leaf, aabb = content[0]
        nodes.append(BvhLeaf(aabb, leaf))
        return len(nodes) - 1

    left_content, right_content = _split(content, sort_axis)
    next_axis = (sort_axis + 1) % 3
    left = make_bvh(left_content, next_axis, nodes)
    right = make_bvh(right_content, next_axis, nodes)
    aabb = nodes[left].aabb.union(nodes[right].aabb)
    nodes.append(BvhBranch(aabb, left, right))
    return len(nodes) - 1


class Bvh(Hittable):
    """
    Terminal aggregate over a fixed set of hittables. It answers hit queries
    only; its bounding box is not available for further composition.
    """
    def __init__(self, hittables: Iterable[Hittable], scene_data):
        self.leaves: Tuple[Hittable, ...] = tuple(hittables)
        if not self.leaves:
            raise IllegalOperationError("Cannot build a Bvh over an empty set of hittables")
        content = [(leaf_id, obj.bounding_box(scene_data)) for leaf_id, obj in enumerate(self.leaves)]
        self.nodes: List[BvhNode] = []
        self.root = make_bvh(content, 0, self.nodes)
        logger.info("Built Bvh: %d leaves, %d nodes, depth %d", len(self.leaves), len(self.nodes), self.depth())

    def _hit_node(self, ray: RayExpanded, node_id: int, scene_data) -> Optional[Hit]:
        node = self.nodes[node_id]
        if not node.aabb.collide(ray):
            return None
        if isinstance(node, BvhLeaf):
            return self.leaves[node.leaf].hit(ray.inner, scene_data)

        # Children are visited in storage order, left first
        ray = ray.copy()
        hit = self._hit_node(ray, node.left, scene_data)
        if hit is not None:
            ray.inner.t_max = hit.t
        hit_right = self._hit_node(ray, node.right, scene_data)
        if hit_right is not None and (hit is None or hit_right.t < hit.t):
            hit = hit_right
        return hit

    def hit(self, ray: Ray, scene_data) -> Optional[Hit]:
        return self._hit_node(ray.expand(), self.root, scene_data)

    def bounding_box(self, scene_data=None) -> AABB:
        raise IllegalOperationError("Do not take the bounding box of a Bvh: it is a terminal aggregate")

    def node_box(self, node_id: int) -> AABB:
        return self.nodes[node_id].aabb

    def depth(self, node_id: Optional[int] = None) -> int:
        node = self.nodes[self.root if node_id is None else node_id]
        if isinstance(node, BvhLeaf):
            return 1
        return 1 + max(self.depth(node.left), self.depth(node.right))

    def leaf_nodes(self) -> List[BvhLeaf]:
        return [node for node in self.nodes if isinstance(node, BvhLeaf)]
