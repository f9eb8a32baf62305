"""HTTP dispatcher built on httpx.

Direct calls go to the registry API. Daemon calls go over the daemon's unix
socket; while one is in flight, the daemon's ``/observe`` event stream is read
in the background and events for the request are handed to the caller.
"""

import asyncio
import contextlib
from typing import Any

import httpx
import logfire
import pydantic

from strongbox.adapter.error import TransportError
from strongbox.adapter.registry.dispatcher import (
    REQUEST_ID_HEADER,
    DaemonRequest,
    Dispatcher,
    Query,
)
from strongbox.config import Settings
from strongbox.domain.value import ProgressEvent, ProgressFunc

DAEMON_BASE_URL = "http://daemon/v1"
OBSERVE_PATH = "/observe"
# Seconds to wait for the progress stream before sending anyway
SUBSCRIBE_TIMEOUT = 5.0


def _error_message(response: httpx.Response) -> str:
    """Extract the server's error message from an error response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and payload.get("message"):
        message = payload["message"]
        if isinstance(message, list):
            return " ".join(str(part) for part in message)
        return str(message)
    return response.text or response.reason_phrase


class HttpDispatcher(Dispatcher):
    """Dispatcher talking HTTP to the registry and the daemon."""

    def __init__(self, registry: httpx.AsyncClient, daemon: httpx.AsyncClient) -> None:
        """Initialize dispatcher.

        Args:
            registry: Client whose base URL is the registry API
            daemon: Client bound to the daemon socket
        """
        self.registry = registry
        self.daemon = daemon

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpDispatcher":
        """Build a dispatcher from application settings."""
        headers = {}
        if settings.registry.token:
            headers["Authorization"] = f"Bearer {settings.registry.token}"

        registry = httpx.AsyncClient(
            base_url=settings.registry.url,
            headers=headers,
            timeout=settings.registry.timeout,
        )
        daemon = httpx.AsyncClient(
            base_url=DAEMON_BASE_URL,
            transport=httpx.AsyncHTTPTransport(uds=str(settings.daemon.socket_path)),
            timeout=settings.daemon.timeout,
        )
        return cls(registry, daemon)

    async def call(
        self,
        method: str,
        path: str,
        query: Query | None = None,
        body: Any = None,
    ) -> Any:
        request = self.registry.build_request(method, path, params=query, json=body)
        return await self._send(self.registry, request)

    async def do_with_progress(
        self,
        request: DaemonRequest,
        request_id: str,
        progress: ProgressFunc | None = None,
    ) -> Any:
        http_request = self.daemon.build_request(
            request.method,
            request.path,
            json=request.body,
            headers={REQUEST_ID_HEADER: request_id},
        )
        if progress is None:
            return await self._send(self.daemon, http_request)

        subscribed = asyncio.Event()
        observer = asyncio.create_task(self._observe(request_id, progress, subscribed))
        try:
            # Subscribe before sending so early events are not missed
            try:
                await asyncio.wait_for(subscribed.wait(), SUBSCRIBE_TIMEOUT)
            except asyncio.TimeoutError:
                logfire.warn("Progress stream not ready", request_id=request_id)
            return await self._send(self.daemon, http_request)
        finally:
            observer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await observer

    async def aclose(self) -> None:
        await self.registry.aclose()
        await self.daemon.aclose()

    async def _send(self, client: httpx.AsyncClient, request: httpx.Request) -> Any:
        try:
            response = await client.send(request)
        except httpx.HTTPError as e:
            raise TransportError(
                f"{request.method} {request.url.path} failed: {e}"
            ) from e

        if response.is_error:
            logfire.warn(
                "Request rejected",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )
            raise TransportError(
                _error_message(response), status_code=response.status_code
            )

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON from {request.method} {request.url.path}"
            ) from e

    async def _observe(
        self, request_id: str, progress: ProgressFunc, subscribed: asyncio.Event
    ) -> None:
        """Forward server-sent progress events for one request."""
        try:
            # Events may be far apart; only connecting is bounded
            timeout = httpx.Timeout(None, connect=self.daemon.timeout.connect)
            async with self.daemon.stream(
                "GET", OBSERVE_PATH, timeout=timeout
            ) as response:
                response.raise_for_status()
                subscribed.set()
                async for line in response.aiter_lines():
                    if not line.startswith("data:"):
                        continue
                    event = ProgressEvent.model_validate_json(line[5:].strip())
                    if event.id == request_id:
                        self._report(progress, event)
        except (httpx.HTTPError, pydantic.ValidationError) as e:
            logfire.warn(
                "Progress stream unavailable", request_id=request_id, error=str(e)
            )
        finally:
            subscribed.set()

    @staticmethod
    def _report(progress: ProgressFunc, event: ProgressEvent) -> None:
        """Hand an event to the caller without letting it abort the request."""
        try:
            progress(event)
        except Exception as e:
            logfire.warn(
                "Progress callback failed",
                request_id=event.id,
                error=repr(e),
            )
