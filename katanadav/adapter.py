#!/usr/bin/env python
"""
The ``PrincipalAdapter`` maps the record operations of a generic
record store (create, find one, find all) onto WebDAV requests against
a principal collection, and turns the multistatus responses into
``Principal`` objects.

All operations are coroutines.  Request building and response parsing
is done by ``katanadav.protocol.PrincipalProtocol``; the HTTP traffic
goes through an object following ``katanadav.io.AsyncIOProtocol``.
"""
import asyncio
import sys
from types import TracebackType
from typing import Any, Awaitable, List, Optional, TypeVar

from katanadav.io import AsyncIO
from katanadav.io import AsyncIOProtocol
from katanadav.lib import error
from katanadav.lib.error import log
from katanadav.protocol.operations import PrincipalProtocol
from katanadav.protocol.types import DAVRequest, DAVResponse, Principal

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self

T = TypeVar("T")


class PrincipalAdapter:
    """
    Create, find and list the principals of a DAV principal collection.

    Example:
        async with PrincipalAdapter("https://dav.example.com/server.php/principals/") as users:
            await users.create_record("alice", "Alice", "alice@example.com")
            alice = await users.find("alice")
            everybody = await users.find_all()
    """

    def __init__(
        self,
        collection_url: str,
        io: Optional[AsyncIOProtocol] = None,
        timeout: Optional[float] = None,
        depth: Optional[int] = None,
        huge_tree: bool = False,
    ) -> None:
        """
        Args:
            collection_url: URL of the principal collection.  Should end
                with a slash.  May be a bare path if io is given and
                knows the server.
            io: The transport.  By default an AsyncIO on the scheme and
                host of collection_url.
            timeout: Deadline in seconds for every operation, None for none.
                Can be overridden per call.
            depth: Depth header for the collection PROPFIND in find_all.
                None leaves it to the server.
            huge_tree: Allow parsing very large XML documents
        """
        self.protocol = PrincipalProtocol(collection_url, depth=depth, huge_tree=huge_tree)
        if io is None:
            origin = self.protocol.collection_url.origin()
            if not origin:
                raise error.ConfigurationError(
                    collection_url,
                    "collection URL needs a scheme and host unless a transport is given",
                )
            io = AsyncIO(base_url=origin)
        self.io = io
        self.timeout = timeout

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    async def close(self) -> None:
        await self.io.close()

    async def xhr(self, request: DAVRequest) -> DAVResponse:
        """
        Send a request through the transport.  Returns the response if
        the server answered with a 2xx status, raises TransportError (or
        the method specific subclass of it) otherwise.
        """
        try:
            response = await self.io.execute(request)
        except error.TransportError as err:
            log.info(f"{request.method.value} {request.url} failed: {err}")
            raise
        if not response.ok:
            log.info(
                f"{request.method.value} {request.url} failed: {response.status} {response.reason}"
            )
            raise error.exception_by_method[request.method.value.lower()](
                request.url,
                error.errmsg(response),
                status=response.status,
                body=response.text,
            )
        return response

    async def propfind(self, request: DAVRequest) -> DAVResponse:
        response = await self.xhr(request)
        if not response.is_multistatus:
            error.weirdness(
                f"PROPFIND {request.url} answered {response.status}, expected 207"
            )
        return response

    async def _with_deadline(
        self, operation: Awaitable[T], timeout: Optional[float], url: str
    ) -> T:
        if timeout is None:
            timeout = self.timeout
        if timeout is None:
            return await operation
        try:
            return await asyncio.wait_for(operation, timeout)
        except asyncio.TimeoutError as err:
            raise error.TransportError(
                url, f"no complete answer within {timeout} seconds"
            ) from err

    ## Record operations

    async def create_record(
        self,
        username: str,
        display_name: Optional[str] = None,
        email: Optional[str] = None,
        verify: bool = False,
        timeout: Optional[float] = None,
    ) -> Principal:
        """
        Create a principal with an extended MKCOL.

        The returned Principal is built from the given fields; the
        server's copy is not fetched again unless verify is set, in
        which case the principal is looked up with find() after the
        creation and that result is returned.
        """
        request = self.protocol.mkcol_request(username, display_name, email)
        return await self._with_deadline(
            self._create(request, username, display_name, email, verify),
            timeout,
            request.url,
        )

    async def _create(
        self,
        request: DAVRequest,
        username: str,
        display_name: Optional[str],
        email: Optional[str],
        verify: bool,
    ) -> Principal:
        await self.xhr(request)
        log.debug(f"created principal {username}")
        if verify:
            return await self._find(username)
        return Principal(
            id=username, username=username, display_name=display_name, email=email
        )

    async def find(self, id: str, timeout: Optional[float] = None) -> Principal:
        """
        Fetch one principal.  Properties the server doesn't return are
        None in the result.
        """
        return await self._with_deadline(
            self._find(id), timeout, self.protocol.principal_url(id)
        )

    async def _find(self, id: str) -> Principal:
        response = await self.propfind(self.protocol.find_request(id))
        return self.protocol.parse_principal(id, response.body)

    async def find_all(
        self, strict: bool = False, timeout: Optional[float] = None
    ) -> List[Principal]:
        """
        List the collection, then fetch every principal in it with its
        own request, all of them concurrently.

        With strict=False (the default) principals that can't be fetched
        are logged and left out of the result.  With strict=True the
        first failure is raised and the other lookups are cancelled.

        The order of the result is not guaranteed.
        """
        return await self._with_deadline(
            self._find_all(strict), timeout, str(self.protocol.collection_url)
        )

    async def _find_all(self, strict: bool) -> List[Principal]:
        response = await self.propfind(self.protocol.find_all_request())
        ids = self.protocol.extract_ids(self.protocol.parse(response.body))
        log.debug(f"found {len(ids)} principals: {ids}")

        tasks = [asyncio.ensure_future(self._find(id)) for id in ids]
        if strict:
            try:
                return list(await asyncio.gather(*tasks))
            except BaseException:
                for task in tasks:
                    task.cancel()
                raise

        principals = []
        try:
            results = await asyncio.gather(*tasks, return_exceptions=True)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise
        for id, result in zip(ids, results):
            if isinstance(result, Exception):
                log.warning(f"could not fetch principal {id}: {result}")
            elif isinstance(result, BaseException):
                raise result
            else:
                principals.append(result)
        return principals

    ## Operations the principal collection does not offer

    async def update_record(self, *args: Any, **kwargs: Any) -> Principal:
        raise error.UnsupportedOperationError(
            str(self.protocol.collection_url), "updating principals is not supported"
        )

    async def delete_record(self, *args: Any, **kwargs: Any) -> None:
        raise error.UnsupportedOperationError(
            str(self.protocol.collection_url), "deleting principals is not supported"
        )

    async def find_query(self, *args: Any, **kwargs: Any) -> List[Principal]:
        raise error.UnsupportedOperationError(
            str(self.protocol.collection_url), "searching principals is not supported"
        )
