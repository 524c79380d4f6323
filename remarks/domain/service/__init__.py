"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .post_service import PostService
from .tree_builder import build_tree
from .tree_flattener import flatten, iter_flat
from .user_service import UserService

__all__ = [
    "CommentService",
    "PostService",
    "Service",
    "UserService",
    "build_tree",
    "flatten",
    "iter_flat",
]
