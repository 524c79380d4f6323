"""Get comment trees use case."""

from pydantic import BaseModel

from remarks.application.usecase.base import BaseUseCase
from remarks.application.usecase.comment.common import CommentItem, parse_id
from remarks.domain.model import CommentTree
from remarks.domain.service import CommentService
from remarks.domain.value import CommentCategory, CommentFilter, PostId, TargetId


class CommentTreeResponse(CommentItem):
    """Comment tree node for responses.

    Recursive structure mirroring the domain tree.
    """

    children: list["CommentTreeResponse"]

    @classmethod
    def from_tree(cls, tree: CommentTree) -> "CommentTreeResponse":
        """Convert a domain tree, children included."""
        return cls(
            **CommentItem.from_domain(tree.comment).model_dump(),
            children=[cls.from_tree(child) for child in tree.children],
        )


class GetCommentTreesRequest(BaseModel):
    """Get comment trees request."""

    post_id: str | None = None
    category: CommentCategory | None = None
    target_id: str | None = None


class GetCommentTreesResponse(BaseModel):
    """Get comment trees response."""

    trees: list[CommentTreeResponse]
    total: int  # Comments across all trees, replies included


class GetCommentTreesUseCase(BaseUseCase):
    """Use case for reading comments as nested trees.

    Roots are matched by the request's filter; replies are always
    included in full.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comment trees use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentTreesRequest) -> GetCommentTreesResponse:
        """Execute get comment trees flow."""
        comment_filter = CommentFilter(
            post_id=PostId(parse_id(request.post_id, "post_id"))
            if request.post_id
            else None,
            category=request.category,
            target_id=TargetId(parse_id(request.target_id, "target_id"))
            if request.target_id
            else None,
        )

        trees = await self.comment_service.get_trees(comment_filter)

        return GetCommentTreesResponse(
            trees=[CommentTreeResponse.from_tree(tree) for tree in trees],
            total=sum(tree.size() for tree in trees),
        )
