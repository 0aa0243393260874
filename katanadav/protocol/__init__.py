"""
Sans-I/O WebDAV principal protocol implementation.

This module provides protocol-level operations without any I/O.
It builds requests and parses responses as pure data transformations.

The protocol layer is organized into:
- types: Core data structures (DAVRequest, DAVResponse, result types)
- xml_builders: Pure functions to build XML request bodies
- xml_parsers: Pure functions to parse XML response bodies
- operations: PrincipalProtocol class combining builders and parsers
"""

from .types import (
    # Enums
    DAVMethod,
    # Request/Response
    DAVRequest,
    DAVResponse,
    # Result types
    MultiStatusResult,
    Principal,
    PropStat,
    ResponseRecord,
)
from .xml_builders import (
    build_mkcol_body,
    build_propfind_body,
)
from .xml_parsers import (
    evaluate,
    parse_multistatus,
    parse_xml,
)
from .operations import PrincipalProtocol

__all__ = [
    # Enums
    "DAVMethod",
    # Request/Response
    "DAVRequest",
    "DAVResponse",
    # Result types
    "MultiStatusResult",
    "Principal",
    "PropStat",
    "ResponseRecord",
    # XML Builders
    "build_mkcol_body",
    "build_propfind_body",
    # XML Parsers
    "evaluate",
    "parse_multistatus",
    "parse_xml",
    # Protocol
    "PrincipalProtocol",
]
