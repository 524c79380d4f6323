"""Observability configuration using Logfire.

Domain services and repositories emit spans and events directly:

    import logfire

    logfire.info("Comment created", comment_id=str(comment.id), path=comment.path)

    with logfire.span("comment.delete", count=len(ids)):
        ...
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from remarks.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Telemetry is sent to Logfire cloud only when explicitly enabled, or
    when a token is present and nothing says otherwise. Without either,
    events go to the console only.

    Args:
        settings: Application settings
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs = {
        "service_name": "remarks",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument a SQLAlchemy engine with Logfire.

    Every query (including the row locks taken by create and delete)
    shows up as a child span of the calling operation.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")
