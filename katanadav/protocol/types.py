"""
Core protocol types for the Sans-I/O principal client.

These dataclasses represent HTTP requests and responses at the protocol
level, independent of any I/O implementation, plus the structures a
parsed multistatus document is turned into.
"""

from dataclasses import dataclass, field
from enum import Enum

from katanadav.lib.python_utilities import to_normal_str


class DAVMethod(Enum):
    """WebDAV HTTP methods used by this library."""

    PROPFIND = "PROPFIND"
    MKCOL = "MKCOL"


@dataclass(frozen=True)
class DAVRequest:
    """
    Represents an HTTP request to be made.

    This is a pure data structure with no I/O. It describes what request
    should be made, but does not make it.

    Attributes:
        method: HTTP method (PROPFIND, MKCOL)
        url: Full URL (or absolute path) for the request
        headers: HTTP headers as dict
        body: Request body as bytes (optional)
    """

    method: DAVMethod
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def with_header(self, name: str, value: str) -> "DAVRequest":
        """Return new request with additional header."""
        new_headers = {**self.headers, name: value}
        return DAVRequest(
            method=self.method,
            url=self.url,
            headers=new_headers,
            body=self.body,
        )


@dataclass(frozen=True)
class DAVResponse:
    """
    Represents an HTTP response received.

    Attributes:
        status: HTTP status code
        headers: HTTP headers as dict
        body: Response body as bytes
        reason: Reason phrase sent by the server, if any
    """

    status: int
    headers: dict[str, str]
    body: bytes
    reason: str = ""

    @property
    def ok(self) -> bool:
        """True if status indicates success (2xx)."""
        return 200 <= self.status < 300

    @property
    def is_multistatus(self) -> bool:
        """True if this is a 207 Multi-Status response."""
        return self.status == 207

    @property
    def text(self) -> str:
        return to_normal_str(self.body) or ""


@dataclass
class PropStat:
    """
    One DAV:propstat group of a response.

    Attributes:
        status: The raw status line, i.e. "HTTP/1.1 200 OK"
        properties: Property key in Clark notation ("{DAV:}displayname")
            -> text content of the property element
    """

    status: str
    properties: dict[str, str] = field(default_factory=dict)


@dataclass
class ResponseRecord:
    """
    One DAV:response element of a multistatus document.

    Attributes:
        href: URL path of the resource
        propstat: The propstat groups, in document order
    """

    href: str
    propstat: list[PropStat] = field(default_factory=list)


MultiStatusResult = list[ResponseRecord]


@dataclass
class Principal:
    """
    A DAV principal seen as a user record.

    Attributes:
        id: The last path segment of the principal URL
        username: Same as id
        display_name: DAV:displayname, None if the server didn't send it
        email: The email-address property, None if the server didn't send it
    """

    id: str
    username: str
    display_name: str | None = None
    email: str | None = None
