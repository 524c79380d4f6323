"""Create comment use case."""

from pydantic import BaseModel, Field

from remarks.application.usecase.base import BaseUseCase
from remarks.application.usecase.comment.common import CommentItem, parse_id
from remarks.domain.service import CommentService
from remarks.domain.value import CommentCategory, CommentId, PostId, TargetId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    body: str = Field(min_length=1, max_length=10000)
    category: CommentCategory = CommentCategory.POST
    target_id: str  # UUID string of the commented content
    user_id: str  # Owner, supplied by the authenticated request
    post_id: str | None = None  # Required when category is "post"
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentResponse(CommentItem):
    """Create comment response."""

    depth: int
    user_handle: str | None = None  # Resolved owner
    post_title: str | None = None  # Resolved post, for post comments


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on content or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            ValidationError: If ids are malformed or the post reference is wrong
            NotFoundError: If the user, parent comment or post does not exist
        """
        comment = await self.comment_service.create_comment(
            body=request.body,
            category=request.category,
            target_id=TargetId(parse_id(request.target_id, "target_id")),
            user_id=UserId(parse_id(request.user_id, "user_id")),
            post_id=PostId(parse_id(request.post_id, "post_id"))
            if request.post_id
            else None,
            parent_id=CommentId(parse_id(request.parent_id, "parent_id"))
            if request.parent_id
            else None,
        )

        return CreateCommentResponse(
            **CommentItem.from_domain(comment).model_dump(),
            depth=comment.depth,
            user_handle=comment.user.handle if comment.user else None,
            post_title=comment.post.title if comment.post else None,
        )
