"""Domain layer DI providers."""

from dishka import Scope, provide

from remarks.config import CommentSettings
from remarks.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
)
from remarks.domain.service import CommentService, PostService, UserService
from remarks.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider.

    Services are REQUEST-scoped so they share the repositories (and the
    database session) of a single unit of work.
    """

    scope = Scope.REQUEST

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        user_service: UserService,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_service=post_service,
            user_service=user_service,
            skip_orphans=comment_settings.skip_orphans,
        )
