"""Tree Layout
---

To render a treap, every node needs an x/y coordinate. Treapviz uses a simple
repeated bisection: each node sits at the midpoint of the horizontal interval
it was given, and its children split that interval in half. The split ignores
subtree sizes, so it is not a tidy (Reingold-Tilford) drawing, but it is cheap,
deterministic, and keeps left children left of their parents.

The layout never touches the tree. It returns `LayoutNode` records that point
at the nodes they place, and one `TreeEdge` per parent/child link.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config import LayoutConfig
from .tree import TreapNode


@dataclass
class LayoutNode:
    node: TreapNode
    x: float
    y: float
    level: int


@dataclass
class TreeEdge:
    source: LayoutNode
    target: LayoutNode


class TreeMeasurement:
    """Summary of the rendered tree"""

    def __init__(self):
        self.minX = 0.0
        self.maxX = 0.0
        self.minY = 0.0
        self.maxY = 0.0
        self.width = 0.0
        self.height = 0.0
        self.centerX = 0.0
        self.centerY = 0.0

    def include(self, x: float, y: float, first: bool = False):
        if first:
            self.minX = self.maxX = x
            self.minY = self.maxY = y
        self.minX = min(self.minX, x)
        self.maxX = max(self.maxX, x)
        self.minY = min(self.minY, y)
        self.maxY = max(self.maxY, y)
        self.width = abs(self.minX - self.maxX)
        self.height = abs(self.minY - self.maxY)
        self.centerX = self.minX + self.width / 2
        self.centerY = self.minY + self.height / 2


@dataclass
class TreeLayoutResult:
    nodes: List[LayoutNode] = field(default_factory=list)
    edges: List[TreeEdge] = field(default_factory=list)
    measurement: TreeMeasurement = field(default_factory=TreeMeasurement)

    def find(self, key: int) -> Optional[LayoutNode]:
        """Return the layout record for the node with `key`, if any."""
        for item in self.nodes:
            if item.node.key == key:
                return item
        return None


class TreeLayout:
    """Calculate a visual layout for input trees."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        if config is None:
            config = LayoutConfig()
        if not isinstance(config, LayoutConfig):
            raise ValueError("config must be a LayoutConfig instance")
        self.config = config

    def layout(
        self, node: Optional[TreapNode], width: float, height: float
    ) -> TreeLayoutResult:
        """Assign x/y values to all nodes in the tree for a viewport of the given
        size, and return them along with the edges and bounds of the tree.

        The tree is centered on the origin."""
        result = TreeLayoutResult()
        if node is None:
            return result

        width = max(width, self.config.min_width)
        height = max(height, self.config.min_height)
        depth, count = self.measure(node)

        level_height = height / (depth + 1)
        spacing = max(self.config.min_horizontal_spacing, width / (count + 1))
        tree_width = (count - 1) * spacing
        tree_height = depth * level_height
        left = -tree_width / 2
        top = -tree_height / 2
        self.transform(node, 0, left, left + tree_width, top, level_height, result)
        return result

    def measure(self, node: Optional[TreapNode]) -> Tuple[int, int]:
        """Return the (depth, node count) of the tree rooted at `node`."""
        depth = 0
        count = 0

        def node_visit(item: TreapNode, level: int, data):
            nonlocal depth, count
            depth = max(depth, level + 1)
            count += 1

        if node is not None:
            node.visit_preorder(node_visit)
        return depth, count

    def transform(
        self,
        node: Optional[TreapNode],
        level: int,
        left_bound: float,
        right_bound: float,
        top: float,
        level_height: float,
        result: TreeLayoutResult,
    ) -> Optional[LayoutNode]:
        """Place `node` at the middle of [left_bound, right_bound] and split that
        interval in half for its children, all the way down. Nodes and edges are
        appended in preorder. Returns the placed `node`."""
        if node is None:
            return None

        root: Optional[LayoutNode] = None
        # (node, level, left bound, right bound, placed parent)
        stack = [(node, level, left_bound, right_bound, None)]
        while stack:
            current, depth, low, high, parent = stack.pop()
            mid = (low + high) / 2
            placed = LayoutNode(
                node=current, x=mid, y=top + depth * level_height, level=depth
            )
            result.measurement.include(placed.x, placed.y, first=not result.nodes)
            result.nodes.append(placed)
            if parent is not None:
                result.edges.append(TreeEdge(source=parent, target=placed))
            else:
                root = placed
            if current.right is not None:
                stack.append((current.right, depth + 1, mid, high, placed))
            if current.left is not None:
                stack.append((current.left, depth + 1, low, mid, placed))
        return root


def calculate_tree_layout(
    root: Optional[TreapNode],
    width: float,
    height: float,
    config: Optional[LayoutConfig] = None,
) -> TreeLayoutResult:
    """Lay out the tree at `root` for a `width` x `height` viewport."""
    return TreeLayout(config).layout(root, width, height)
