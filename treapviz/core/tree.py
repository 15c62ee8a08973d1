from typing import Any, Callable, List, Optional, Set, Tuple

# ## Constants

# Return this from a node visit function to abort a tree visit.
STOP = "stop"
# The constant representing the left child side of a node.
LEFT = "left"
# The constant representing the right child side of a node.
RIGHT = "right"

VisitFunction = Callable[["TreapNode", int, Any], Optional[str]]


class InvariantViolation(RuntimeError):
    """Raised when the tree engine finds its own structure in an impossible state.

    This always indicates a defect in the engine, never bad user input."""


class TreapNode:
    """
    A single element of a treap. Each node is placed by its `key` (binary search
    tree order) and by its `priority` (max-heap order). Child slots are owned
    exclusively: a node appears in at most one slot and never holds a reference
    back to its parent.
    """

    _idCounter = 0

    key: int
    priority: float
    left: Optional["TreapNode"]
    right: Optional["TreapNode"]

    def __init__(
        self,
        key: int,
        priority: float,
        left: "TreapNode" = None,
        right: "TreapNode" = None,
        id: Optional[str] = None,
    ):
        if id is None:
            TreapNode._idCounter = TreapNode._idCounter + 1
            id = f"node-{TreapNode._idCounter}"
        self.id = id
        self.key = key
        self.priority = priority
        self.left = None
        self.right = None
        self.set_left(left)
        self.set_right(right)

    def is_leaf(self) -> bool:
        """Is this node a leaf?  A node is a leaf if it has no children."""
        return not self.left and not self.right

    def __str__(self):
        return f"{self.key}:{self.priority}"

    def __repr__(self):
        return f"<TreapNode key={self.key} priority={self.priority} id={self.id}>"

    # Visits use an explicit stack and work at any tree depth.

    def visit_preorder(self, visit_fn: VisitFunction, depth=0, data=None):
        """Visit the tree preorder, which visits the current node, then its left
        child, and then its right child.

        *Visit -> Left -> Right*

        The callback is passed the node being visited, the current depth in the
        tree, and a user specified data parameter. Traversals may be canceled by
        returning `STOP` from any visit function.
        """
        stack = [(self, depth)]
        while stack:
            node, level = stack.pop()
            if visit_fn and visit_fn(node, level, data) == STOP:
                return STOP
            if node.right:
                stack.append((node.right, level + 1))
            if node.left:
                stack.append((node.left, level + 1))

    def visit_inorder(self, visit_fn: VisitFunction, depth=0, data=None):
        """Visit the tree inorder, which visits the left child, then the current node,
        and then its right child.

        *Left -> Visit -> Right*
        """
        stack: List[Tuple["TreapNode", int]] = []
        node: Optional["TreapNode"] = self
        level = depth
        while stack or node:
            while node:
                stack.append((node, level))
                node = node.left
                level += 1
            node, level = stack.pop()
            if visit_fn and visit_fn(node, level, data) == STOP:
                return STOP
            node = node.right
            level += 1

    def visit_postorder(self, visit_fn: VisitFunction, depth=0, data=None):
        """Visit the tree postorder, which visits its left child, then its right child,
        and finally the current node.

        *Left -> Right -> Visit*
        """
        # (node, depth, children already pushed)
        stack = [(self, depth, False)]
        while stack:
            node, level, expanded = stack.pop()
            if expanded:
                if visit_fn and visit_fn(node, level, data) == STOP:
                    return STOP
                continue
            stack.append((node, level, True))
            if node.right:
                stack.append((node.right, level + 1, False))
            if node.left:
                stack.append((node.left, level + 1, False))

    # **Child Management**

    def set_left(self, child: "TreapNode" = None) -> "TreapNode":
        """Set the left node to the passed `child`"""
        if child is self:
            raise ValueError("nodes cannot be their own children")
        self.left = child
        return self

    def set_right(self, child: "TreapNode" = None) -> "TreapNode":
        """Set the right node to the passed `child`"""
        if child is self:
            raise ValueError("nodes cannot be their own children")
        self.right = child
        return self

    def get_side(self, child: "TreapNode") -> str:
        """Determine whether the given `child` is the left or right child of this
        node"""
        if child is not None and child is self.left:
            return LEFT

        if child is not None and child is self.right:
            return RIGHT

        raise ValueError("TreapNode.get_side: not a child of this node")

    def get_child(self, side: str) -> Optional["TreapNode"]:
        if side == LEFT:
            return self.left

        if side == RIGHT:
            return self.right

        raise ValueError("TreapNode.get_child: Invalid side")

    def set_side(self, child: Optional["TreapNode"], side: str) -> "TreapNode":
        """Set a new `child` on the given `side`"""
        if side == LEFT:
            return self.set_left(child)

        if side == RIGHT:
            return self.set_right(child)

        raise ValueError("TreapNode.set_side: Invalid side")

    def get_children(self) -> List["TreapNode"]:
        """Get children as an array.  If there are two children, the first object will
        always represent the left child, and the second will represent the right."""
        result = []
        if self.left:
            result.append(self.left)

        if self.right:
            result.append(self.right)

        return result

    # **Rotations**
    #
    # Both return the new top of the rotated subtree. The caller is responsible
    # for storing it in whatever slot held `self`.

    def rotate_right(self) -> "TreapNode":
        """Promote the left child.

        ```
            y                x
           / \\              / \\
          x   C    =>      A   y
         / \\                  / \\
        A   B                B   C
        ```
        """
        pivot = self.left
        if pivot is None:
            raise InvariantViolation(
                f"rotate_right: node {self.key} has no left child to promote"
            )
        self.set_left(pivot.right)
        pivot.set_right(self)
        return pivot

    def rotate_left(self) -> "TreapNode":
        """Promote the right child.

        ```
          x                  y
         / \\                / \\
        A   y       =>     x   C
           / \\            / \\
          B   C          A   B
        ```
        """
        pivot = self.right
        if pivot is None:
            raise InvariantViolation(
                f"rotate_left: node {self.key} has no right child to promote"
            )
        self.set_right(pivot.left)
        pivot.set_left(self)
        return pivot


def validate_treap(root: Optional[TreapNode]) -> None:
    """Check every treap invariant for the tree at `root`, raising
    `InvariantViolation` describing the first failure found.

    Checked: the tree is acyclic with every node owned by a single slot, keys
    are unique and in binary search tree order, and each node's priority is at
    least that of its children."""
    if root is None:
        return
    seen: Set[int] = set()
    keys: Set[int] = set()
    # (node, exclusive lower key bound, exclusive upper key bound)
    stack = [(root, None, None)]
    while stack:
        node, low, high = stack.pop()
        if id(node) in seen:
            raise InvariantViolation(f"node {node.key} is reachable more than once")
        seen.add(id(node))
        if node.key in keys:
            raise InvariantViolation(f"duplicate key {node.key}")
        keys.add(node.key)
        if low is not None and not node.key > low:
            raise InvariantViolation(f"key {node.key} must be greater than {low}")
        if high is not None and not node.key < high:
            raise InvariantViolation(f"key {node.key} must be less than {high}")
        for child in node.get_children():
            if child.priority > node.priority:
                raise InvariantViolation(
                    f"child {child.key} priority {child.priority} is greater than "
                    f"parent {node.key} priority {node.priority}"
                )
        if node.right is not None:
            stack.append((node.right, node.key, high))
        if node.left is not None:
            stack.append((node.left, low, node.key))
