"""Request dispatcher contract.

Registry clients reach the outside world through a dispatcher with two call
shapes:

- direct calls go straight to the registry and wait for the answer
- daemon-proxied calls go through the local daemon, which does local work
  (such as encryption) before forwarding and streams progress events tagged
  with the request's correlation id
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence
from uuid import uuid4

from pydantic import BaseModel, ConfigDict

from strongbox.domain.value import ProgressFunc

Query = Sequence[tuple[str, str]]

REQUEST_ID_HEADER = "X-Request-ID"


class DaemonRequest(BaseModel):
    """A request prepared for the daemon channel."""

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    body: Any = None
    request_id: str


class Dispatcher(ABC):
    """Routes logical operations to the registry or the daemon."""

    @abstractmethod
    async def call(
        self,
        method: str,
        path: str,
        query: Query | None = None,
        body: Any = None,
    ) -> Any:
        """Make a direct registry call.

        Args:
            method: HTTP method
            path: Endpoint path
            query: Query parameters; keys may repeat
            body: JSON-compatible request body

        Returns:
            Decoded JSON response, or None for empty responses

        Raises:
            TransportError: If the request fails
        """
        pass

    def new_daemon_request(
        self, method: str, path: str, body: Any = None
    ) -> tuple[DaemonRequest, str]:
        """Prepare a daemon request with a fresh correlation id.

        Returns:
            Tuple of (request, correlation id)
        """
        request_id = uuid4().hex
        request = DaemonRequest(
            method=method, path=path, body=body, request_id=request_id
        )
        return request, request_id

    @abstractmethod
    async def do_with_progress(
        self,
        request: DaemonRequest,
        request_id: str,
        progress: ProgressFunc | None = None,
    ) -> Any:
        """Send a daemon request, reporting its progress events.

        ``progress`` is called zero or more times before the result, and only
        for events carrying ``request_id``.

        Raises:
            TransportError: If the request fails
        """
        pass

    async def call_with_progress(
        self,
        method: str,
        path: str,
        body: Any = None,
        progress: ProgressFunc | None = None,
    ) -> Any:
        """Prepare and send a daemon-proxied request."""
        request, request_id = self.new_daemon_request(method, path, body)
        return await self.do_with_progress(request, request_id, progress)

    async def aclose(self) -> None:
        """Release underlying connections."""
        pass
