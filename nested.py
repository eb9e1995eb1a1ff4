"""
Nested lists: a tree of values where every node is either a `Leaf` holding one value, or a `Branch` holding an ordered
sequence of child nodes.

The main function in this module is `flatten`, which turns a tree (or a forest of sibling trees) into the flat list of
its leaf values, depth-first and left-to-right.

Usage
-----
    from nested import Branch, Leaf, flatten

    flatten([Leaf("a"), Branch([Leaf("b"), Branch([Leaf("c"), Leaf("d")])]), Leaf("e")])
    # ['a', 'b', 'c', 'd', 'e']
"""
from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, Sequence, Tuple, TypeVar, Union

T = TypeVar('T')

_EXHAUSTED = object()


@dataclass(frozen=True)
class Leaf(Generic[T]):
    value: T


@dataclass(frozen=True)
class Branch(Generic[T]):
    children: Tuple['Node[T]', ...]

    def __init__(self, children: Iterable['Node[T]'] = ()):
        object.__setattr__(self, 'children', tuple(children))


Node = Union[Leaf[T], Branch[T]]


def _walk(tree: Union[Node[T], Sequence[Node[T]]]) -> Iterable[Leaf[T]]:
    """Yields the leaves of a node or forest in depth-first, left-to-right order."""
    if isinstance(tree, (Leaf, Branch)):
        tree = (tree,)
    stack = [iter(tree)]
    while stack:
        node = next(stack[-1], _EXHAUSTED)
        if node is _EXHAUSTED:
            stack.pop()
        elif isinstance(node, Leaf):
            yield node
        elif isinstance(node, Branch):
            stack.append(iter(node.children))
        else:
            raise TypeError(f"Invalid node: {node!r}")


def flatten(tree: Union[Node[T], Sequence[Node[T]]]) -> List[T]:
    """
    Flatten a nested list structure.

    Parameters
    ----------
    tree : Node[T] or Sequence[Node[T]]
        A single node, or a sequence of sibling nodes.

    Returns
    -------
    List[T]
        The values of all leaves, depth-first and left-to-right. Empty branches contribute nothing.
    """
    return [leaf.value for leaf in _walk(tree)]


def leaf_count(tree: Union[Node[T], Sequence[Node[T]]]) -> int:
    """Number of leaves in a node or forest, at any depth."""
    return sum(1 for _ in _walk(tree))


def from_nested(obj: Any) -> Node:
    """
    Builds a tree from a nested Python literal. Lists and tuples become branches, anything else (strings included)
    becomes a leaf.
    """
    if not isinstance(obj, (list, tuple)):
        return Leaf(obj)
    root = []
    stack = [(iter(obj), root)]
    while stack:
        items, children = stack[-1]
        item = next(items, _EXHAUSTED)
        if item is _EXHAUSTED:
            stack.pop()
            if stack:
                stack[-1][1].append(Branch(children))
        elif isinstance(item, (list, tuple)):
            stack.append((iter(item), []))
        else:
            children.append(Leaf(item))
    return Branch(root)


def test_flatten():
    tree = [Leaf("a"), Branch([Leaf("b"), Branch([Leaf("c"), Leaf("d")])]), Leaf("e")]
    assert flatten(tree) == ["a", "b", "c", "d", "e"]
    assert leaf_count(tree) == 5
    assert flatten(Branch(tree)) == ["a", "b", "c", "d", "e"]
    assert flatten(Leaf(42)) == [42]
    assert flatten([]) == []
    assert flatten([Branch(), Branch([Branch()]), Leaf(None)]) == [None]

    leaves = [Leaf(v) for v in "xyzzy"]
    assert flatten(leaves) == list("xyzzy")

    for bad_tree in ([Leaf(1), "not a node"], [None], Branch([Leaf(1), None])):
        try:
            flatten(bad_tree)
        except TypeError:
            pass
        else:
            raise AssertionError(f"flatten accepted an invalid node in {bad_tree!r}")


def test_from_nested():
    tree = from_nested(["a", ["b", ["c", "d"]], "e"])
    assert tree == Branch([Leaf("a"), Branch([Leaf("b"), Branch([Leaf("c"), Leaf("d")])]), Leaf("e")])
    assert flatten(tree) == ["a", "b", "c", "d", "e"]
    assert from_nested("abc") == Leaf("abc")
    assert from_nested(()) == Branch()


def test_nested(num_tests=10, max_depth=6, out=None):
    import random

    def generate_random_tree(depth):
        if depth == 0 or random.random() < 0.3:
            return random.randint(0, 9)
        return [generate_random_tree(depth - 1) for _ in range(random.randint(0, 4))]

    def count_leaves(obj):
        if isinstance(obj, list):
            return sum(count_leaves(item) for item in obj)
        return 1

    for _ in range(num_tests):
        literal = generate_random_tree(max_depth)
        tree = from_nested(literal)
        flat = flatten(tree)
        if out is not None:
            print('Tree: ', literal, file=out)
            print('Flat: ', flat, file=out)
        assert len(flat) == leaf_count(tree) == count_leaves(literal), "Flattened length differs from leaf count"

    # Deep nesting does not hit the recursion limit
    tree = Leaf("bottom")
    for _ in range(10000):
        tree = Branch([tree])
    assert flatten(tree) == ["bottom"]

    literal = "bottom"
    for _ in range(10000):
        literal = [literal]
    assert flatten(from_nested(literal)) == ["bottom"]
    assert leaf_count(from_nested([literal, "top"])) == 2

    if out is not None:
        print("All tests passed!", file=out)


if __name__ == "__main__":
    import sys
    test_flatten()
    test_from_nested()
    test_nested(out=sys.stdout)
