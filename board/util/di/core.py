"""Configuration providers."""

from dishka import Scope, provide

from board.config import EngagementSettings, Settings
from board.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings read from the environment and .env, once per container."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        return Settings()

    @provide(scope=Scope.APP)
    def provide_engagement_settings(self, settings: Settings) -> EngagementSettings:
        """Expose the engagement section on its own so domain providers stay narrow."""
        return settings.engagement
