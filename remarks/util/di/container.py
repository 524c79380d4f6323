"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from remarks.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container (PostgreSQL persistence).

    Settings are loaded from environment variables automatically.
    Callers open a request scope per unit of work::

        async with container() as request_container:
            use_case = await request_container.get(CreateCommentUseCase)
            await use_case.execute(request)

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)
