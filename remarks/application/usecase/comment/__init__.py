"""Comment use cases."""

from .common import CommentItem
from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comments import (
    DeleteCommentsRequest,
    DeleteCommentsResponse,
    DeleteCommentsUseCase,
)
from .get_comment_trees import (
    CommentTreeResponse,
    GetCommentTreesRequest,
    GetCommentTreesResponse,
    GetCommentTreesUseCase,
)
from .paginate_comments import (
    FlatCommentItem,
    PaginateCommentsRequest,
    PaginateCommentsResponse,
    PaginateCommentsUseCase,
)

__all__ = [
    "CommentItem",
    "CommentTreeResponse",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentsRequest",
    "DeleteCommentsResponse",
    "DeleteCommentsUseCase",
    "FlatCommentItem",
    "GetCommentTreesRequest",
    "GetCommentTreesResponse",
    "GetCommentTreesUseCase",
    "PaginateCommentsRequest",
    "PaginateCommentsResponse",
    "PaginateCommentsUseCase",
]
