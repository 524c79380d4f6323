"""Application layer DI providers."""

from dishka import Scope, provide

from remarks.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentsUseCase,
    GetCommentTreesUseCase,
    PaginateCommentsUseCase,
)
from remarks.config import CommentSettings
from remarks.domain.service import CommentService
from remarks.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider."""

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_comment_trees_use_case(
        self, comment_service: CommentService
    ) -> GetCommentTreesUseCase:
        """Provide get comment trees use case."""
        return GetCommentTreesUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_paginate_comments_use_case(
        self, comment_service: CommentService, comment_settings: CommentSettings
    ) -> PaginateCommentsUseCase:
        """Provide paginate comments use case."""
        return PaginateCommentsUseCase(
            comment_service=comment_service, comment_settings=comment_settings
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comments_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentsUseCase:
        """Provide delete comments use case."""
        return DeleteCommentsUseCase(comment_service=comment_service)
