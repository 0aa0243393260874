#!/usr/bin/env python
import sys
import urllib.parse
from typing import Any
from typing import cast
from typing import List
from typing import Optional
from typing import Union
from urllib.parse import ParseResult
from urllib.parse import SplitResult
from urllib.parse import unquote
from urllib.parse import urlparse

from katanadav.lib.python_utilities import to_normal_str
from katanadav.lib.python_utilities import to_unicode

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self


class URL:
    """
    Wraps URLs into objects.  All methods in this library that accept
    URLs can be fed either with a URL object, a string or a
    urlparse.ParseResult object.

    Addresses may be one out of three:

    1) a path relative to the principal collection, i.e. "alice"

    2) an absolute path, i.e. "/server.php/principals/alice"

    3) a fully qualified URL, i.e.
    "https://dav.example.com/server.php/principals/alice".
    """

    def __init__(self, url: Union[str, ParseResult, SplitResult]) -> None:
        if isinstance(url, ParseResult) or isinstance(url, SplitResult):
            self.url_parsed: Optional[Union[ParseResult, SplitResult]] = url
            self.url_raw = None
        else:
            self.url_raw = url
            self.url_parsed = None

    def __bool__(self) -> bool:
        if self.url_raw or self.url_parsed:
            return True
        else:
            return False

    def __eq__(self, other: object) -> bool:
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    @classmethod
    def objectify(cls, url: Union[Self, str, ParseResult, SplitResult, None]) -> "URL":
        if url is None or isinstance(url, URL):
            return url
        else:
            return URL(url)

    # To deal with all kind of methods/properties in the ParseResult
    # class
    def __getattr__(self, attr: str):
        if "url_parsed" not in vars(self):
            raise AttributeError
        if self.url_parsed is None:
            self.url_parsed = cast(urllib.parse.ParseResult, urlparse(self.url_raw))
        if hasattr(self.url_parsed, attr):
            return getattr(self.url_parsed, attr)
        else:
            return getattr(self.__unicode__(), attr)

    def __str__(self) -> str:
        return to_normal_str(self.__unicode__())

    def __unicode__(self) -> str:
        if self.url_raw is None:
            if self.url_parsed is None:
                raise ValueError("Unexpected value None for self.url_parsed")

            self.url_raw = self.url_parsed.geturl()
        return to_unicode(self.url_raw)

    def __repr__(self) -> str:
        return "URL(%s)" % str(self)

    def origin(self) -> str:
        """
        scheme://host[:port] of an absolute URL, empty string for a bare path
        """
        if not self.scheme:
            return ""
        return "%s://%s" % (self.scheme, self.netloc)

    def segments(self) -> List[str]:
        """
        The unquoted, non-empty path segments.  "/a/b%20c/" gives
        ["a", "b c"].
        """
        return [unquote(x) for x in self.path.split("/") if x]

    def join(self, path: Any) -> "URL":
        """
        Assumes this object is the base URL or base path.  If the path
        is relative, it's appended to the base.  If the path is
        absolute, it's added to the connection details of self.  If
        the path contains connection details differing from self, a
        ValueError is raised.
        """
        pathAsString = str(path)
        if not path or not pathAsString:
            return self
        path = URL.objectify(path)
        if (
            (path.scheme and self.scheme and path.scheme != self.scheme)
            or (path.hostname and self.hostname and path.hostname != self.hostname)
            or (path.port and self.port and path.port != self.port)
        ):
            raise ValueError("%s can't be joined with %s" % (self, path))

        if path.path.startswith("/"):
            ret_path = path.path
        else:
            sep = "/"
            if self.path.endswith("/"):
                sep = ""
            ret_path = "%s%s%s" % (self.path, sep, path.path)
        return URL(
            ParseResult(
                self.scheme or path.scheme,
                self.netloc or path.netloc,
                ret_path,
                path.params,
                path.query,
                path.fragment,
            )
        )


def child_segment(
    collection: Union[URL, str], href: Union[URL, str]
) -> Optional[str]:
    """
    If href points to a direct child collection of the collection (that
    is, collection path + exactly one segment + trailing slash), return
    that segment.  Otherwise return None.

    Only paths are compared, so an absolute URL in href matches a
    path-only collection and the other way around.  Segments are
    compared unquoted.
    """
    collection = URL.objectify(collection)
    href = URL.objectify(href)
    if not href.path.endswith("/"):
        return None
    parent = collection.segments()
    child = href.segments()
    if len(child) != len(parent) + 1 or child[: len(parent)] != parent:
        return None
    return child[-1]
