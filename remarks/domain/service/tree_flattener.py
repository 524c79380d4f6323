"""Linearize comment trees for paginated display."""

from collections.abc import Iterable, Iterator

from remarks.domain.model.comment import CommentTree, FlatComment


def iter_flat(trees: Iterable[CommentTree]) -> Iterator[FlatComment]:
    """Yield comments in pre-order, depth first.

    Each node is emitted before its children; children keep the order the
    tree builder gave them. Iterative, so deep threads do not hit the
    recursion limit. The trees are never modified.
    """
    for tree in trees:
        stack: list[tuple[CommentTree, int]] = [(tree, 0)]
        while stack:
            node, depth = stack.pop()
            yield FlatComment(comment=node.comment, depth=depth)
            # Reversed so the first child is popped first
            for child in reversed(node.children):
                stack.append((child, depth + 1))


def flatten(trees: Iterable[CommentTree]) -> list[FlatComment]:
    """Flatten trees into one list, roots at depth 0."""
    return list(iter_flat(trees))
