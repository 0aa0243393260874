#!/usr/bin/env python
import logging
import os
from collections import defaultdict
from typing import Dict
from typing import Optional
from typing import Type

from katanadav import __version__

## Environmental variables prepended with "PYTHON_KATANADAV" are used for debug purposes,
## environmental variables prepended with "KATANA_" are for connection parameters
## one of DEBUG, DEVELOPMENT, PRODUCTION
debugmode = os.environ.get("PYTHON_KATANADAV_DEBUGMODE")
if not debugmode:
    if "dev" in __version__ or __version__ == "(unknown)":
        debugmode = "DEVELOPMENT"
    else:
        debugmode = "PRODUCTION"

log = logging.getLogger("katanadav")
if debugmode.startswith("DEBUG"):
    log.setLevel(logging.DEBUG)
else:
    log.setLevel(logging.WARNING)


def errmsg(r) -> str:
    """Utility for formatting an error response to an error string"""
    return "%s %s\n\n%s" % (r.status, r.reason, r.text)


def weirdness(*reasons) -> None:
    from katanadav.lib.debug import xmlstring

    reason = " : ".join([xmlstring(x) for x in reasons])
    log.warning(f"Deviation from expectations found: {reason}")


class DAVError(Exception):
    url: Optional[str] = None
    reason: str = "no reason"

    def __init__(self, url: Optional[str] = None, reason: Optional[str] = None) -> None:
        if url:
            self.url = url
        if reason:
            self.reason = reason
        super().__init__(url, reason)

    def __str__(self) -> str:
        return "%s at '%s', reason %s" % (
            self.__class__.__name__,
            self.url,
            self.reason,
        )


class TransportError(DAVError):
    """
    The request could not be completed: either the HTTP client failed
    (connection refused, timeout, ...) or the server answered with a
    non-2xx status.  In the latter case ``status`` and ``body`` hold
    what the server sent.
    """

    status: Optional[int] = None
    body: Optional[str] = None

    def __init__(
        self,
        url: Optional[str] = None,
        reason: Optional[str] = None,
        status: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(url, reason)
        self.status = status
        self.body = body


class MkcolError(TransportError):
    pass


class PropfindError(TransportError):
    pass


class MalformedXmlError(DAVError):
    """The response body is not well-formed XML"""

    pass


class UnexpectedStructureError(DAVError):
    """
    The response body is well-formed XML, but it's not shaped like a
    multistatus document (wrong root, response without href, ...)
    """

    pass


class UnsupportedOperationError(DAVError, NotImplementedError):
    pass


class ConfigurationError(DAVError):
    pass


exception_by_method: Dict[str, Type[TransportError]] = defaultdict(
    lambda: TransportError
)
for method in (
    "mkcol",
    "propfind",
):
    exception_by_method[method] = locals()[method[0].upper() + method[1:] + "Error"]
