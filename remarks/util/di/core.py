"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from remarks.config import CommentSettings, Settings
from remarks.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings provider.

    Settings are loaded from environment variables and .env file.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        """Provide comment tree settings."""
        return settings.comments
