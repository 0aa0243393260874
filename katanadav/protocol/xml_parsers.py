"""
Pure functions for parsing WebDAV XML responses.

All functions in this module are pure - they take XML bytes in and return
structured data out, with no side effects or I/O.  Every call builds a
fresh parser and a fresh document.
"""

import logging
from typing import Any
from typing import Dict
from typing import Iterator
from typing import Optional
from typing import Union

from lxml import etree
from lxml.etree import _Element

from katanadav.elements import dav
from katanadav.lib import error
from katanadav.lib.namespace import nsmap

from .types import MultiStatusResult, PropStat, ResponseRecord

log = logging.getLogger(__name__)


def parse_xml(body: Union[bytes, str], huge_tree: bool = False) -> _Element:
    """
    Parse a raw XML document into an element tree.

    Args:
        body: Raw XML, bytes or str
        huge_tree: Allow parsing very large XML documents

    Returns:
        The root element of the document

    Raises:
        MalformedXmlError: If body is not well-formed XML
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
    parser = etree.XMLParser(
        huge_tree=huge_tree, resolve_entities=False, no_network=True
    )
    try:
        return etree.fromstring(body, parser)
    except (etree.XMLSyntaxError, ValueError) as err:
        raise error.MalformedXmlError(reason=str(err) or "empty document") from err


def evaluate(
    expression: str,
    node: _Element,
    namespaces: Optional[Dict[str, str]] = None,
) -> Union[Iterator[_Element], str, Any]:
    """
    Evaluate an XPath expression relative to node.

    Namespace prefixes in the expression are looked up in the
    namespaces table (alias -> URI), by default the library-wide one.

    A node-set result is returned as a single-pass iterator over the
    matching nodes in document order.  A string result (i.e.
    ``string(d:href)``) is returned as a plain str.  Numbers and
    booleans are returned as-is.
    """
    if namespaces is None:
        namespaces = nsmap
    result = node.xpath(expression, namespaces=namespaces)
    if isinstance(result, list):
        return iter(result)
    if isinstance(result, str):
        return str(result)
    return result


def property_key(element: _Element) -> str:
    """The Clark notation of an element name, i.e. ``{DAV:}displayname``"""
    qname = etree.QName(element)
    if qname.namespace is None:
        return qname.localname
    return "{%s}%s" % (qname.namespace, qname.localname)


def parse_multistatus(
    body: Union[bytes, str],
    huge_tree: bool = False,
    namespaces: Optional[Dict[str, str]] = None,
) -> MultiStatusResult:
    """
    Parse a 207 Multi-Status response body.

    The general format is:
        <d:multistatus>
            <d:response>
                <d:href>...</d:href>
                <d:propstat>
                    <d:prop>...</d:prop>
                    <d:status>HTTP/1.1 200 OK</d:status>
                </d:propstat>
                (...)
            </d:response>
            (...)
        </d:multistatus>

    Responses, propstats and properties are all kept in document order.
    The href and status texts are stripped of surrounding whitespace
    (servers pretty-print them), property values are kept as found.

    Args:
        body: Raw XML response
        huge_tree: Allow parsing very large XML documents
        namespaces: Alias -> URI table used in the path expressions

    Returns:
        One ResponseRecord per DAV:response element

    Raises:
        MalformedXmlError: If body is not valid XML
        UnexpectedStructureError: If the document is not a multistatus,
            or a response has no href
    """
    tree = parse_xml(body, huge_tree=huge_tree)
    if tree.tag != dav.MultiStatus.tag:
        raise error.UnexpectedStructureError(
            reason=f"expected a multistatus document, got {tree.tag}"
        )

    result: MultiStatusResult = []
    for response in evaluate("/d:multistatus/d:response", tree, namespaces):
        href = evaluate("string(d:href)", response, namespaces).strip()
        if not href:
            raise error.UnexpectedStructureError(reason="response without href")
        record = ResponseRecord(href=href)

        for propstat in evaluate("d:propstat", response, namespaces):
            group = PropStat(
                status=evaluate("string(d:status)", propstat, namespaces).strip()
            )
            for prop in evaluate("d:prop/*", propstat, namespaces):
                group.properties[property_key(prop)] = evaluate("string()", prop)
            record.propstat.append(group)

        if not record.propstat:
            log.debug(f"response for {href} carries no propstat")
        result.append(record)

    return result


def status_to_code(status: Optional[str]) -> int:
    """
    Extract status code from status string like "HTTP/1.1 200 OK".

    Args:
        status: Status string

    Returns:
        Integer status code (defaults to 200 if parsing fails)
    """
    if not status:
        return 200

    parts = status.split()
    if len(parts) >= 2:
        try:
            return int(parts[1])
        except ValueError:
            pass

    return 200
