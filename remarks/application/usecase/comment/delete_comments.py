"""Delete comments use case."""

from pydantic import BaseModel, Field

from remarks.application.usecase.base import BaseUseCase
from remarks.application.usecase.comment.common import parse_id
from remarks.domain.service import CommentService
from remarks.domain.value import CommentId


class DeleteCommentsRequest(BaseModel):
    """Delete comments request."""

    comment_ids: list[str] = Field(min_length=1)  # UUID strings


class DeleteCommentsResponse(BaseModel):
    """Delete comments response."""

    deleted_ids: list[str]  # Ids requested, not counting replies
    removed: int  # Rows removed, replies included


class DeleteCommentsUseCase(BaseUseCase):
    """Use case for deleting comments together with all their replies."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentsRequest) -> DeleteCommentsResponse:
        """Execute delete comments flow.

        Raises:
            ValidationError: If an id is malformed
            NotFoundError: Listing every id that does not exist
        """
        comment_ids = [
            CommentId(parse_id(comment_id, "comment_id"))
            for comment_id in request.comment_ids
        ]
        removed = await self.comment_service.delete_comments(comment_ids)

        return DeleteCommentsResponse(
            deleted_ids=[str(comment_id) for comment_id in dict.fromkeys(comment_ids)],
            removed=removed,
        )
