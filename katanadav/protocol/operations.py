"""
Principal protocol operations combining request building and response parsing.

This class provides a high-level interface to the principal operations
while remaining completely I/O-free.
"""

from typing import Dict, List, Optional
from urllib.parse import quote

from katanadav.lib import error
from katanadav.lib.namespace import ns
from katanadav.lib.url import URL, child_segment

from .types import DAVMethod, DAVRequest, MultiStatusResult, Principal
from .xml_builders import build_mkcol_body, build_propfind_body
from .xml_parsers import parse_multistatus, status_to_code

DISPLAYNAME = ns("d", "displayname")
EMAIL_ADDRESS = ns("s", "email-address")


class PrincipalProtocol:
    """
    Sans-I/O protocol handler for a collection of principals.

    Builds requests and parses responses without doing any I/O.
    All HTTP communication is delegated to an external I/O implementation.

    Example:
        protocol = PrincipalProtocol("https://dav.example.com/server.php/principals/")

        request = protocol.find_request("alice")
        response = await io.execute(request)
        principal = protocol.parse_principal("alice", response.body)
    """

    def __init__(
        self,
        collection_url: str,
        depth: Optional[int] = None,
        huge_tree: bool = False,
    ):
        """
        Args:
            collection_url: URL (or absolute path) of the principal collection
            depth: Depth header to send on the collection PROPFIND.  None
                leaves it to the server default.
            huge_tree: Allow parsing very large XML documents
        """
        self.collection_url = URL.objectify(collection_url)
        self.depth = depth
        self.huge_tree = huge_tree

    def _base_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/xml; charset=utf-8",
        }

    def principal_url(self, id: str) -> str:
        """URL of the principal with the given id, inside the collection"""
        return str(self.collection_url.join(quote(id, safe="")))

    # Request builders

    def mkcol_request(
        self,
        username: str,
        display_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> DAVRequest:
        if not username:
            raise ValueError(f"not a valid username: {username!r}")
        return DAVRequest(
            method=DAVMethod.MKCOL,
            url=self.principal_url(username),
            headers=self._base_headers(),
            body=build_mkcol_body(display_name, email),
        )

    def find_request(self, id: str) -> DAVRequest:
        if not id:
            raise ValueError("an id is required")
        return DAVRequest(
            method=DAVMethod.PROPFIND,
            url=self.principal_url(id),
            headers=self._base_headers(),
            body=build_propfind_body(),
        )

    def find_all_request(self) -> DAVRequest:
        request = DAVRequest(
            method=DAVMethod.PROPFIND,
            url=str(self.collection_url),
            headers=self._base_headers(),
            body=build_propfind_body(),
        )
        if self.depth is not None:
            request = request.with_header("Depth", str(self.depth))
        return request

    # Response parsers

    def parse(self, body: bytes) -> MultiStatusResult:
        return parse_multistatus(body, huge_tree=self.huge_tree)

    def parse_principal(self, id: str, body: bytes) -> Principal:
        """
        Build a Principal from the first propstat of the first response.
        Properties missing from it end up as None.
        """
        multistatus = self.parse(body)
        if not multistatus:
            raise error.UnexpectedStructureError(
                self.principal_url(id), "multistatus without any response"
            )
        if not multistatus[0].propstat:
            raise error.UnexpectedStructureError(
                self.principal_url(id), "response without any propstat"
            )
        propstat = multistatus[0].propstat[0]
        if status_to_code(propstat.status) != 200:
            error.weirdness(f"first propstat for {id} has status {propstat.status}")
        properties = propstat.properties
        return Principal(
            id=id,
            username=id,
            display_name=properties.get(DISPLAYNAME),
            email=properties.get(EMAIL_ADDRESS),
        )

    def extract_ids(self, multistatus: MultiStatusResult) -> List[str]:
        """
        The ids of the principals listed in a collection PROPFIND, in
        document order.  Only direct child collections count; the
        collection itself and plain resources are skipped.
        """
        ids = []
        for response in multistatus:
            id = child_segment(self.collection_url, response.href)
            if id is not None and id not in ids:
                ids.append(id)
        return ids
