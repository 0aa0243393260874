"""
I/O layer for the principal protocol.

The I/O layer is intentionally thin - it only handles HTTP transport.
All protocol logic (XML building/parsing) is in katanadav.protocol.

Example:
    from katanadav.protocol import PrincipalProtocol
    from katanadav.io import AsyncIO

    protocol = PrincipalProtocol("https://dav.example.com/server.php/principals/")
    async with AsyncIO() as io:
        response = await io.execute(protocol.find_request("alice"))
        principal = protocol.parse_principal("alice", response.body)
"""

from .base import AsyncIOProtocol
from .async_ import AsyncIO

__all__ = [
    "AsyncIOProtocol",
    "AsyncIO",
]
