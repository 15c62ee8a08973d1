from treapviz.core.tree import (
    STOP,
    InvariantViolation,
    TreapNode,
    validate_treap,
)
import pytest


def build_tree():
    """
    ```
          0
         / \\
       -1   1
    ```
    """
    return TreapNode(0, 50, TreapNode(-1, 10), TreapNode(1, 20))


def test_tree_node_constructor():
    """verify that the children passed in the constructor are properly assigned"""
    tree = build_tree()
    assert tree.left is not None and tree.right is not None
    count = 0

    def node_visit(node, depth, data):
        nonlocal count
        count = count + 1

    tree.visit_inorder(node_visit)
    assert count == 3
    assert tree.left.key == -1
    assert tree.right.key == 1


def test_tree_node_ids_are_unique():
    one = TreapNode(1, 1)
    two = TreapNode(1, 1)
    assert one.id != two.id
    assert TreapNode(3, 3, id="custom").id == "custom"


def test_tree_node_is_leaf():
    tree = build_tree()
    assert tree.left.is_leaf() is True
    assert tree.right.is_leaf() is True
    assert tree.is_leaf() is False


def test_tree_node_visit_stop():
    """Verify that tree visits can be stopped by returning the STOP constant"""
    tree = build_tree()
    total = 0

    def visit(node, depth, data):
        nonlocal total
        total += 1
        if node.key == -1:
            return STOP

    tree.visit_preorder(visit)
    # preorder stops at second node
    assert total == 2

    total = 0
    tree.visit_inorder(visit)
    # inorder stops at first node
    assert total == 1

    total = 0
    tree.visit_postorder(visit)
    # postorder stops at first node
    assert total == 1


@pytest.mark.parametrize(
    "method,order",
    [
        ("visit_preorder", [0, -1, 1]),
        ("visit_inorder", [-1, 0, 1]),
        ("visit_postorder", [-1, 1, 0]),
    ],
)
def test_tree_node_visit_order(method, order):
    tree = build_tree()

    def node_visit(node, depth, data):
        assert node.key == order.pop(0)
        assert depth == (0 if node.key == 0 else 1)

    getattr(tree, method)(node_visit)
    assert order == []


def test_tree_node_visit_deep_tree():
    """Visits do not recurse, so trees deeper than the recursion limit work"""
    count = 3000
    root = TreapNode(count, count)
    node = root
    for key in reversed(range(count)):
        node.set_left(TreapNode(key, key))
        node = node.left

    for method, order in [
        ("visit_preorder", list(reversed(range(count + 1)))),
        ("visit_inorder", list(range(count + 1))),
        ("visit_postorder", list(range(count + 1))),
    ]:
        seen = []
        depths = []

        def node_visit(item, depth, data):
            seen.append(item.key)
            depths.append(depth)

        getattr(root, method)(node_visit)
        assert seen == order
        assert max(depths) == count
    validate_treap(root)


def test_tree_node_set_left():
    one = TreapNode(2, 10)
    two = TreapNode(1, 5)
    one.set_left(two)
    assert one.left is two
    with pytest.raises(ValueError):
        # Cannot set self to child
        one.set_left(one)


def test_tree_node_set_right():
    one = TreapNode(1, 10)
    two = TreapNode(2, 5)
    one.set_right(two)
    assert one.right is two
    with pytest.raises(ValueError):
        # Cannot set self to child
        one.set_right(one)


def test_tree_node_get_side():
    tree = build_tree()
    assert tree.get_side(tree.left) == "left"
    assert tree.get_side(tree.right) == "right"
    with pytest.raises(ValueError):
        # Raises an error if the child does not belong to this parent
        tree.get_side(TreapNode(7, 1))
    with pytest.raises(ValueError):
        tree.left.get_side(None)


def test_tree_node_set_side():
    tree = TreapNode(0, 10)
    one = TreapNode(-1, 1)
    two = TreapNode(1, 1)
    tree.set_side(one, "left")
    assert tree.left is one
    tree.set_side(two, "right")
    assert tree.right is two
    assert tree.get_child("right") is two
    with pytest.raises(ValueError):
        # error if side name is not known
        tree.set_side(one, "rihgt")
    with pytest.raises(ValueError):
        tree.get_child("up")


def test_tree_node_get_children():
    tree = build_tree()
    children = tree.get_children()
    assert [c.key for c in children] == [-1, 1]
    tree.set_left(None)
    assert [c.key for c in tree.get_children()] == [1]
    assert tree.right.get_children() == []


def test_tree_node_rotate_right():
    a, b, c = TreapNode(1, 1), TreapNode(3, 1), TreapNode(5, 1)
    x = TreapNode(2, 5, a, b)
    y = TreapNode(4, 3, x, c)
    top = y.rotate_right()
    assert top is x
    assert x.left is a and x.right is y
    assert y.left is b and y.right is c


def test_tree_node_rotate_left():
    a, b, c = TreapNode(1, 1), TreapNode(3, 1), TreapNode(5, 1)
    y = TreapNode(4, 5, b, c)
    x = TreapNode(2, 3, a, y)
    top = x.rotate_left()
    assert top is y
    assert y.left is x and y.right is c
    assert x.left is a and x.right is b


def test_tree_node_rotate_without_child_fails_fast():
    leaf = TreapNode(1, 1)
    with pytest.raises(InvariantViolation):
        leaf.rotate_right()
    with pytest.raises(InvariantViolation):
        leaf.rotate_left()


def test_validate_treap_accepts_valid_trees():
    validate_treap(None)
    validate_treap(build_tree())
    # equal priorities satisfy the heap order
    validate_treap(TreapNode(5, 10, TreapNode(3, 10), TreapNode(8, 10)))


def test_validate_treap_key_order():
    bad = TreapNode(5, 10, TreapNode(3, 1, right=TreapNode(6, 0)))
    with pytest.raises(InvariantViolation):
        validate_treap(bad)


def test_validate_treap_duplicate_keys():
    with pytest.raises(InvariantViolation):
        validate_treap(TreapNode(5, 10, right=TreapNode(5, 1)))


def test_validate_treap_heap_order():
    with pytest.raises(InvariantViolation):
        validate_treap(TreapNode(5, 10, TreapNode(3, 11)))


def test_validate_treap_cycles():
    a = TreapNode(2, 5)
    b = TreapNode(1, 5)
    a.left = b
    b.left = a
    with pytest.raises(InvariantViolation):
        validate_treap(a)
