"""Assemble flat comment rows into nested trees."""

from collections import defaultdict
from collections.abc import Sequence

import logfire

from remarks.domain.error import InconsistencyError
from remarks.domain.model.comment import Comment, CommentTree
from remarks.domain.value import path as path_codec


def _sibling_order(node: CommentTree) -> tuple:
    # Identical timestamps fall back to id so the order stays deterministic
    return (node.comment.created_at, str(node.comment.id))


def build_tree(
    root: Comment,
    descendants: Sequence[Comment],
    skip_orphans: bool = False,
) -> CommentTree:
    """Build one nested tree from a root and its full descendant list.

    Algorithm:
    1. Index the root by id
    2. Walk descendants shallowest first; a parent path is a strict prefix
       of its children's paths, so every parent is indexed before its
       children are reached
    3. Group each node under its parent id
    4. Sort every sibling group by created_at (path order alone says
       nothing about creation order) and attach

    Args:
        root: The subtree root
        descendants: Every comment below the root, as returned by
            ``CommentRepository.find_descendants``
        skip_orphans: Log and skip comments whose parent is missing instead
            of raising

    Returns:
        The root node with children populated recursively

    Raises:
        InconsistencyError: On a missing parent (unless skipped), a repeated
            id, or a row that does not belong under the root
    """
    with logfire.span(
        "tree_builder.build_tree",
        root_id=str(root.id),
        descendant_count=len(descendants),
    ):
        nodes: dict[str, CommentTree] = {str(root.id): CommentTree(comment=root)}
        grouped: dict[str, list[CommentTree]] = defaultdict(list)
        skipped: list[str] = []

        ordered = sorted(descendants, key=lambda comment: comment.depth)
        for comment in ordered:
            key = str(comment.id)
            if key in nodes:
                logfire.error(
                    "Repeated comment id in tree", root_id=str(root.id), comment_id=key
                )
                raise InconsistencyError(f"Comment {key} appears twice in tree", key)

            if not path_codec.is_descendant(comment.path, root.path):
                logfire.error(
                    "Comment is not below tree root",
                    root_id=str(root.id),
                    comment_id=key,
                    path=comment.path,
                )
                raise InconsistencyError(
                    f"Comment {key} is not a descendant of {root.id}", key
                )

            parent_key = str(comment.parent_id) if comment.parent_id else None
            if parent_key is None or parent_key not in nodes:
                if skip_orphans:
                    logfire.warn(
                        "Skipping orphaned comment",
                        root_id=str(root.id),
                        comment_id=key,
                        parent_id=parent_key,
                    )
                    skipped.append(key)
                    continue
                logfire.error(
                    "Orphaned comment",
                    root_id=str(root.id),
                    comment_id=key,
                    parent_id=parent_key,
                )
                raise InconsistencyError(
                    f"Parent {parent_key} of comment {key} is missing", key
                )

            node = CommentTree(comment=comment)
            nodes[key] = node
            grouped[parent_key].append(node)

        for parent_key, children in grouped.items():
            nodes[parent_key].children = sorted(children, key=_sibling_order)

        if skipped:
            logfire.warn(
                "Tree built with orphans skipped",
                root_id=str(root.id),
                skipped=skipped,
            )
        return nodes[str(root.id)]
