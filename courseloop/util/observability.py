"""Observability configuration using Logfire.

Usage:
    import logfire

    logfire.info("Course linked", user_id=str(user_id), course_id=str(course.id))

    with logfire.span("course_catalog_service.resolve_course", course_code=code):
        ...
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from courseloop.config import Settings
from courseloop.util.error import ConfigurationError


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Logs are sent to Logfire cloud only when a token is present, unless
    OBSERVABILITY__SEND_TO_LOGFIRE says otherwise. Without cloud sending
    everything still goes to the console.

    Args:
        settings: Application settings

    Raises:
        ConfigurationError: If sending is forced on without a token
    """
    observability = settings.observability
    if observability.send_to_logfire is not None:
        send_to_logfire = observability.send_to_logfire
    else:
        send_to_logfire = bool(observability.logfire_token)

    if send_to_logfire and not observability.logfire_token:
        raise ConfigurationError(
            "OBSERVABILITY__SEND_TO_LOGFIRE requires OBSERVABILITY__LOGFIRE_TOKEN"
        )

    config_kwargs = {
        "service_name": "courseloop",
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
    if observability.logfire_token:
        config_kwargs["token"] = observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(observability.logfire_token),
    )


def instrument_httpx() -> None:
    """Trace outbound requests to the backend and the college lookup."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued by the maintenance jobs.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented")
