"""Treap Engine
---

A treap is a binary tree that is a binary search tree by `key` and a max-heap
by `priority` at the same time. Priorities are random unless given, so the
tree stays balanced in expectation no matter which order keys arrive in.

Every public operation appends to an operation log owned by the engine, so a
host application can replay or display what happened, including each rotation
that was needed to restore the heap order.
"""
import collections
import itertools
import logging
import math
import numbers
import time
from dataclasses import dataclass
from typing import Any, Counter, Deque, Dict, List, Optional, Tuple, Union

import numpy as np
import srsly

from ..config import TreapConfig
from .tree import LEFT, RIGHT, InvariantViolation, TreapNode, validate_treap

OP_INSERT = "insert"
OP_DELETE = "delete"
OP_SEARCH = "search"
OP_ROTATE_LEFT = "rotate-left"
OP_ROTATE_RIGHT = "rotate-right"
OPERATION_TYPES = (OP_INSERT, OP_DELETE, OP_SEARCH, OP_ROTATE_LEFT, OP_ROTATE_RIGHT)

# (parent, side) pairs describing the slots walked from the root. A parent of
# None means the engine's root slot.
TreePath = List[Tuple[Optional[TreapNode], str]]


@dataclass(frozen=True)
class OperationRecord:
    """One entry in the operation log"""

    type: str
    key: int
    sequence: int
    timestamp: float
    priority: Optional[float] = None
    found: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "type": self.type,
            "key": self.key,
            "sequence": self.sequence,
            "timestamp": self.timestamp,
        }
        if self.priority is not None:
            result["priority"] = self.priority
        if self.found is not None:
            result["found"] = self.found
        return result


class Treap:
    """Owns a treap and the log of operations applied to it."""

    _log = logging.getLogger("Treap")

    root: Optional[TreapNode]
    operations: Union[List[OperationRecord], Deque[OperationRecord]]

    def __init__(
        self,
        *,
        config: Optional[TreapConfig] = None,
        rng: Optional[np.random.RandomState] = None,
    ):
        if config is None:
            config = TreapConfig()
        if not isinstance(config, TreapConfig):
            raise ValueError("config must be a TreapConfig instance")
        if config.priority_low >= config.priority_high:
            raise ValueError(
                f"priority_low ({config.priority_low}) must be less than "
                f"priority_high ({config.priority_high})"
            )
        self.config = config
        self.rng = rng if rng is not None else np.random.RandomState(config.seed)
        self.root = None
        if config.max_operations is None:
            self.operations = []
        else:
            self.operations = collections.deque(maxlen=config.max_operations)
        self._sequence = itertools.count(1)

    # **Operation log**

    def _record(self, type: str, key: int, **kwargs) -> OperationRecord:
        record = OperationRecord(
            type=type,
            key=key,
            sequence=next(self._sequence),
            timestamp=time.time(),
            **kwargs,
        )
        self.operations.append(record)
        return record

    def get_recent_operations(self, count: int = 10) -> List[OperationRecord]:
        """Return the last `count` log entries, oldest first."""
        if count <= 0:
            return []
        return list(self.operations)[-count:]

    def get_operations(self) -> List[OperationRecord]:
        """Return a copy of the full operation log, oldest first."""
        return list(self.operations)

    def operation_counts(self) -> Counter[str]:
        """Count log entries by operation type."""
        return collections.Counter(op.type for op in self.operations)

    # **Rotations**

    def _rotate(self, node: TreapNode, direction: str) -> TreapNode:
        """Rotate the subtree rooted at `node` and log the rotation against the
        key of `node` (the top of the subtree before rotating)."""
        if direction == RIGHT:
            top = node.rotate_right()
            self._record(OP_ROTATE_RIGHT, node.key)
        else:
            top = node.rotate_left()
            self._record(OP_ROTATE_LEFT, node.key)
        self._log.debug(f"rotate-{direction} at {node.key}, new top {top.key}")
        return top

    def _set_slot(self, parent: Optional[TreapNode], side: str, child) -> None:
        if parent is None:
            self.root = child
        else:
            parent.set_side(child, side)

    def _find_path(self, key: int) -> Tuple[Optional[TreapNode], TreePath]:
        """Descend from the root toward `key`. Returns the matching node (or None)
        and the slots walked to reach it (or the empty slot where it belongs)."""
        path: TreePath = []
        parent: Optional[TreapNode] = None
        side = LEFT
        node = self.root
        while node is not None:
            if key == node.key:
                break
            path.append((parent, side))
            parent = node
            side = LEFT if key < node.key else RIGHT
            node = node.get_child(side)
        path.append((parent, side))
        return node, path

    # **Mutations**

    def insert(self, key: int, priority: Optional[float] = None) -> TreapNode:
        """Insert `key` with the given priority, or a random one if omitted.

        Inserting a key that already exists leaves the tree untouched (including
        the existing node's priority) but is still logged. Returns the node that
        holds `key`."""
        existing, path = self._find_path(key)
        if existing is not None:
            self._record(OP_INSERT, key, priority=priority)
            self._log.debug(f"insert {key}: already present")
            return existing

        if priority is None:
            priority = int(
                self.rng.randint(self.config.priority_low, self.config.priority_high)
            )
        self._record(OP_INSERT, key, priority=priority)
        node = TreapNode(key, priority)
        parent, side = path.pop()
        self._set_slot(parent, side, node)
        self._log.debug(f"insert {key} with priority {priority}")

        # Walk back toward the root, rotating the new node up while it out-ranks
        # its parent. Equal priorities stay where they are.
        child_side = side
        while parent is not None:
            if node.priority <= parent.priority:
                break
            direction = RIGHT if child_side == LEFT else LEFT
            grand_parent, parent_side = path.pop()
            top = self._rotate(parent, direction)
            self._set_slot(grand_parent, parent_side, top)
            parent, child_side = grand_parent, parent_side
        return node

    def delete(self, key: int) -> bool:
        """Remove `key` from the tree, rotating it down to a leaf first.

        Returns True if a node was removed. Deleting a missing key is logged and
        otherwise does nothing."""
        self._record(OP_DELETE, key)
        node, path = self._find_path(key)
        if node is None:
            self._log.debug(f"delete {key}: not present")
            return False

        parent, side = path[-1]
        while not node.is_leaf():
            if node.left is not None and node.right is not None:
                # Ties promote the right child
                promote_left = node.left.priority > node.right.priority
            else:
                promote_left = node.left is not None
            top = self._rotate(node, RIGHT if promote_left else LEFT)
            self._set_slot(parent, side, top)
            parent, side = top, top.get_side(node)

        self._set_slot(parent, side, None)
        self._log.debug(f"delete {key}: removed")
        return True

    def clear(self) -> None:
        """Drop every node. The operation log is kept."""
        self.root = None

    # **Queries**

    def find(self, key: int) -> Optional[TreapNode]:
        """Return the node holding `key`, or None. Does not log."""
        node = self.root
        while node is not None:
            if key == node.key:
                return node
            node = node.left if key < node.key else node.right
        return None

    def search(self, key: int) -> bool:
        """Return whether `key` is in the tree, and log the lookup."""
        found = self.find(key) is not None
        self._record(OP_SEARCH, key, found=found)
        return found

    def _collect(self, method: str) -> List[int]:
        result: List[int] = []
        if self.root is not None:
            getattr(self.root, method)(lambda node, depth, data: result.append(node.key))
        return result

    def inorder(self) -> List[int]:
        """Keys in ascending order."""
        return self._collect("visit_inorder")

    def preorder(self) -> List[int]:
        return self._collect("visit_preorder")

    def postorder(self) -> List[int]:
        return self._collect("visit_postorder")

    def levelorder(self) -> List[int]:
        """Keys breadth-first, top to bottom and left to right."""
        result: List[int] = []
        if self.root is None:
            return result
        queue = collections.deque([self.root])
        while queue:
            node = queue.popleft()
            result.append(node.key)
            queue.extend(node.get_children())
        return result

    def get_all_nodes(self) -> List[TreapNode]:
        """All nodes in preorder."""
        nodes: List[TreapNode] = []
        if self.root is not None:
            self.root.visit_preorder(lambda node, depth, data: nodes.append(node))
        return nodes

    def size(self) -> int:
        return len(self.get_all_nodes())

    def get_height(self) -> int:
        """The number of levels in the tree. 0 when empty, 1 for a single node."""
        height = 0

        def node_visit(node: TreapNode, depth: int, data):
            nonlocal height
            height = max(height, depth + 1)

        if self.root is not None:
            self.root.visit_preorder(node_visit)
        return height

    def validate(self) -> None:
        """Raise InvariantViolation if the tree is not a valid treap."""
        validate_treap(self.root)

    # **Serialization**

    def to_dict(self) -> Optional[Dict[str, Any]]:
        """Nested `{key, priority, left, right}` structure mirroring the tree.
        An empty tree is None."""

        def node_dict(node: TreapNode) -> Dict[str, Any]:
            return {"key": node.key, "priority": node.priority, "left": None, "right": None}

        if self.root is None:
            return None
        result = node_dict(self.root)
        stack = [(self.root, result)]
        while stack:
            node, item = stack.pop()
            for side, child in ((LEFT, node.left), (RIGHT, node.right)):
                if child is not None:
                    item[side] = node_dict(child)
                    stack.append((child, item[side]))
        return result

    def to_json(self, indent: int = 2) -> str:
        return srsly.json_dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(
        cls,
        data: Optional[Dict[str, Any]],
        *,
        config: Optional[TreapConfig] = None,
        rng: Optional[np.random.RandomState] = None,
    ) -> "Treap":
        """Rebuild a treap with exactly the shape described by `data`, as produced
        by `to_dict`. Nothing is logged. Raises ValueError when the data is not a
        valid treap."""
        treap = cls(config=config, rng=rng)

        def build(item: Any) -> TreapNode:
            if not isinstance(item, dict) or "key" not in item or "priority" not in item:
                raise ValueError(f"invalid treap node: {item!r}")
            key, priority = item["key"], item["priority"]
            if isinstance(key, bool) or not isinstance(key, numbers.Integral):
                raise ValueError(f"treap keys must be integers, got {key!r}")
            if (
                isinstance(priority, bool)
                or not isinstance(priority, numbers.Real)
                or not math.isfinite(priority)
            ):
                raise ValueError(f"treap priorities must be numbers, got {priority!r}")
            return TreapNode(int(key), priority)

        if data is not None:
            treap.root = build(data)
            seen = {id(data)}
            stack = [(treap.root, data)]
            while stack:
                node, item = stack.pop()
                for side in (LEFT, RIGHT):
                    child = item.get(side)
                    if child is None:
                        continue
                    if id(child) in seen:
                        raise ValueError(f"treap node appears more than once: {child!r}")
                    seen.add(id(child))
                    node.set_side(build(child), side)
                    stack.append((node.get_child(side), child))
        try:
            treap.validate()
        except InvariantViolation as error:
            raise ValueError(f"data does not describe a valid treap: {error}")
        return treap
