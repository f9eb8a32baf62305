"""Logfire setup for the client.

Spans wrap every registry call and use case, e.g.::

    with logfire.span("credential_service.set_credential", name_or_path=path):
        ...
"""

import logfire

from strongbox.config import Settings


def _should_send(settings: Settings) -> bool:
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire.

    The console exporter is only enabled with ``debug``; otherwise stderr is
    left to the client's own messages. Nothing leaves the machine unless a
    token is set or sending is switched on.
    """
    send_to_logfire = _should_send(settings)
    console = (
        logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=True,
        )
        if settings.debug
        else False
    )
    logfire.configure(
        service_name="strongbox-cli",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=console,
    )
    logfire.debug(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_httpx() -> None:
    """Trace every registry and daemon request made through httpx."""
    logfire.instrument_httpx()
