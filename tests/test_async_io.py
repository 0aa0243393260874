#!/usr/bin/env python
# -*- encoding: utf-8 -*-
"""
Unit tests for the niquests based transport.

Rule: None of the tests in this file should initiate any internet
communication. We use Mock/MagicMock to emulate the HTTP session.
"""
from unittest.mock import AsyncMock, MagicMock

import niquests
import pytest

from katanadav.io import AsyncIO, AsyncIOProtocol
from katanadav.lib import error
from katanadav.protocol.types import DAVMethod, DAVRequest

SAMPLE_MULTISTATUS_XML = b"""<?xml version="1.0" encoding="utf-8" ?>
<d:multistatus xmlns:d="DAV:">
  <d:response>
    <d:href>/server.php/principals/alice/</d:href>
  </d:response>
</d:multistatus>
"""


def create_mock_response(
    content: bytes = b"",
    status_code: int = 200,
    reason: str = "OK",
    headers: dict = None,
) -> MagicMock:
    """Create a mock HTTP response."""
    resp = MagicMock()
    resp.content = content
    resp.status_code = status_code
    resp.reason = reason
    resp.headers = headers or {}
    return resp


def create_mock_session(response=None, side_effect=None) -> MagicMock:
    session = MagicMock()
    session.request = AsyncMock(return_value=response, side_effect=side_effect)
    session.close = AsyncMock()
    return session


PROPFIND = DAVRequest(
    method=DAVMethod.PROPFIND,
    url="/server.php/principals/",
    headers={"Content-Type": "application/xml; charset=utf-8"},
    body=b"<d:propfind xmlns:d='DAV:'/>",
)


class TestAsyncIO:
    def test_follows_protocol(self) -> None:
        assert isinstance(AsyncIO(), AsyncIOProtocol)

    def test_default_headers(self) -> None:
        io = AsyncIO(headers={"X-Custom-Header": "test-value"})
        assert io.headers["User-Agent"].startswith("katanadav/")
        assert io.headers["X-Custom-Header"] == "test-value"

    @pytest.mark.asyncio
    async def test_execute(self) -> None:
        session = create_mock_session(
            create_mock_response(
                SAMPLE_MULTISTATUS_XML,
                status_code=207,
                reason="Multi-Status",
                headers={"Content-Type": "application/xml"},
            )
        )
        io = AsyncIO(session=session, base_url="https://dav.example.com/", timeout=5)

        response = await io.execute(PROPFIND)

        assert response.status == 207
        assert response.reason == "Multi-Status"
        assert response.is_multistatus
        assert response.body == SAMPLE_MULTISTATUS_XML
        assert response.headers == {"Content-Type": "application/xml"}

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "PROPFIND"
        assert kwargs["url"] == "https://dav.example.com/server.php/principals/"
        assert kwargs["data"] == PROPFIND.body
        assert kwargs["timeout"] == 5
        assert kwargs["headers"]["Content-Type"] == "application/xml; charset=utf-8"
        assert "User-Agent" in kwargs["headers"]

    @pytest.mark.asyncio
    async def test_execute_absolute_url(self) -> None:
        session = create_mock_session(create_mock_response(status_code=201))
        io = AsyncIO(session=session, base_url="https://dav.example.com")
        request = DAVRequest(
            method=DAVMethod.MKCOL, url="https://other.example.com/principals/alice"
        )

        await io.execute(request)

        assert (
            session.request.call_args.kwargs["url"]
            == "https://other.example.com/principals/alice"
        )

    @pytest.mark.asyncio
    async def test_error_status_is_returned(self) -> None:
        session = create_mock_session(
            create_mock_response(b"nope", status_code=403, reason="Forbidden")
        )
        io = AsyncIO(session=session)

        response = await io.execute(PROPFIND)

        assert response.status == 403
        assert not response.ok
        assert response.text == "nope"

    @pytest.mark.asyncio
    async def test_empty_body(self) -> None:
        session = create_mock_session(create_mock_response(None, status_code=201))
        io = AsyncIO(session=session)
        response = await io.execute(PROPFIND)
        assert response.body == b""

    @pytest.mark.asyncio
    async def test_connection_failure(self) -> None:
        session = create_mock_session(
            side_effect=niquests.exceptions.ConnectionError("connection refused")
        )
        io = AsyncIO(session=session, base_url="https://dav.example.com")

        with pytest.raises(error.TransportError) as excinfo:
            await io.execute(PROPFIND)

        assert excinfo.value.url == "https://dav.example.com/server.php/principals/"
        assert "connection refused" in excinfo.value.reason
        assert excinfo.value.status is None

    @pytest.mark.asyncio
    async def test_close_leaves_foreign_session_open(self) -> None:
        session = create_mock_session()
        async with AsyncIO(session=session):
            pass
        session.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close_own_session(self) -> None:
        io = AsyncIO()
        session = create_mock_session()
        io._session = session

        await io.close()

        session.close.assert_awaited_once()
        assert io._session is None
