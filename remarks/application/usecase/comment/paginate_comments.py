"""Paginate comments use case."""

from pydantic import BaseModel

from remarks.application.usecase.base import BaseUseCase
from remarks.application.usecase.comment.common import CommentItem, parse_id
from remarks.config import CommentSettings
from remarks.domain.service import CommentService
from remarks.domain.value import (
    CommentCategory,
    CommentFilter,
    PostId,
    TargetId,
    UserId,
)


class FlatCommentItem(CommentItem):
    """Comment in a flattened listing."""

    depth: int  # 0 for top-level comments


class PaginateCommentsRequest(BaseModel):
    """Paginate comments request."""

    post_id: str | None = None
    user_id: str | None = None
    category: CommentCategory | None = None
    target_id: str | None = None
    page: int = 1
    page_size: int | None = None  # Defaults to the configured page size


class PaginateCommentsResponse(BaseModel):
    """Paginate comments response."""

    items: list[FlatCommentItem]
    total: int
    page: int
    page_size: int
    total_pages: int


class PaginateCommentsUseCase(BaseUseCase):
    """Use case for reading comments as a paginated flat list.

    Threads are flattened depth first, so a reply always follows its
    parent; each item carries its depth for indentation.
    """

    def __init__(
        self, comment_service: CommentService, comment_settings: CommentSettings
    ) -> None:
        """Initialize paginate comments use case.

        Args:
            comment_service: Comment domain service
            comment_settings: Default and maximum page sizes
        """
        self.comment_service = comment_service
        self.comment_settings = comment_settings

    async def execute(
        self, request: PaginateCommentsRequest
    ) -> PaginateCommentsResponse:
        """Execute paginate comments flow.

        Raises:
            ValidationError: If ids are malformed or page/page_size below 1
        """
        page_size = request.page_size
        if page_size is None:
            page_size = self.comment_settings.default_page_size
        page_size = min(page_size, self.comment_settings.max_page_size)

        comment_filter = CommentFilter(
            post_id=PostId(parse_id(request.post_id, "post_id"))
            if request.post_id
            else None,
            user_id=UserId(parse_id(request.user_id, "user_id"))
            if request.user_id
            else None,
            category=request.category,
            target_id=TargetId(parse_id(request.target_id, "target_id"))
            if request.target_id
            else None,
        )

        result = await self.comment_service.paginate(
            comment_filter, page=request.page, page_size=page_size
        )

        return PaginateCommentsResponse(
            items=[
                FlatCommentItem(
                    **CommentItem.from_domain(item.comment).model_dump(),
                    depth=item.depth,
                )
                for item in result.items
            ],
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
        )
