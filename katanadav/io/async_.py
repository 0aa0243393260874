"""
Asynchronous I/O implementation using niquests library.
"""

import logging
from typing import Mapping, Optional, Union

import niquests

from katanadav import __version__
from katanadav.lib import error
from katanadav.lib.python_utilities import to_normal_str
from katanadav.protocol.types import DAVRequest, DAVResponse

log = logging.getLogger(__name__)


class AsyncIO:
    """
    Asynchronous I/O shell using niquests library.

    This is a thin wrapper that executes DAVRequest objects via HTTP
    and returns DAVResponse objects.  Network level failures are raised
    as TransportError.

    Example:
        async with AsyncIO(base_url="https://dav.example.com") as io:
            response = await io.execute(protocol.find_request("alice"))
    """

    def __init__(
        self,
        session: Optional[niquests.AsyncSession] = None,
        base_url: str = "",
        timeout: float = 30.0,
        verify: Union[bool, str] = True,
        headers: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize the async I/O handler.

        Args:
            session: Existing niquests AsyncSession to use (creates new if None)
            base_url: Scheme and host prepended to requests for absolute paths
            timeout: Request timeout in seconds
            verify: Verify SSL certificates (bool or CA bundle path)
            headers: Additional headers for all requests
        """
        self._session = session
        self._owns_session = session is None
        self.base_url = base_url.rstrip("/") if base_url else ""
        self.timeout = timeout
        self.verify = verify
        self.headers: dict[str, str] = {
            "User-Agent": f"katanadav/{__version__}",
        }
        self.headers.update(headers or {})

    def _get_session(self) -> niquests.AsyncSession:
        """Get or create the niquests session."""
        if self._session is None:
            self._session = niquests.AsyncSession()
        return self._session

    def _resolve_url(self, url: str) -> str:
        if url.startswith("/") and self.base_url:
            return self.base_url + url
        return url

    async def execute(self, request: DAVRequest) -> DAVResponse:
        """
        Execute a DAVRequest and return DAVResponse.

        Args:
            request: The request to execute

        Returns:
            DAVResponse with status, headers, and body

        Raises:
            TransportError: If no response could be obtained
        """
        session = self._get_session()
        url = self._resolve_url(request.url)
        headers = {**self.headers, **request.headers}

        log.debug(
            f"sending request - method={request.method.value}, url={url}, headers={headers}\nbody:\n{to_normal_str(request.body)}"
        )
        try:
            response = await session.request(
                method=request.method.value,
                url=url,
                headers=headers,
                data=request.body,
                timeout=self.timeout,
                verify=self.verify,
            )
        except niquests.exceptions.RequestException as err:
            raise error.TransportError(url, str(err)) from err
        log.debug(f"server responded with {response.status_code} {response.reason}")

        return DAVResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content or b"",
            reason=response.reason or "",
        )

    async def close(self) -> None:
        """Close the session if we created it."""
        if self._session and self._owns_session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AsyncIO":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args) -> None:
        """Async context manager exit."""
        await self.close()
