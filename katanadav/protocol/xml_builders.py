"""
Pure functions for building WebDAV XML request bodies.

All functions in this module are pure - they take data in and return XML out,
with no side effects or I/O.
"""
from typing import List
from typing import Optional

from lxml import etree

from katanadav.elements import dav
from katanadav.elements import katana
from katanadav.elements.base import BaseElement


def build_mkcol_body(
    display_name: Optional[str] = None,
    email: Optional[str] = None,
) -> bytes:
    """
    Build an extended MKCOL (RFC 5689) request body creating a principal.

    Args:
        display_name: Value for DAV:displayname
        email: Value for the email-address property

    Returns:
        UTF-8 encoded XML bytes
    """
    prop = dav.Prop() + (dav.ResourceType() + dav.Principal())
    if display_name is not None:
        prop += dav.DisplayName(display_name)
    if email is not None:
        prop += katana.EmailAddress(email)

    mkcol = dav.Mkcol() + (dav.Set() + prop)
    return etree.tostring(mkcol.xmlelement(), encoding="utf-8", xml_declaration=True)


def build_propfind_body(props: Optional[List[BaseElement]] = None) -> bytes:
    """
    Build PROPFIND request body XML.

    Args:
        props: Property elements to ask for.  Defaults to the principal
            properties (displayname and email-address).

    Returns:
        UTF-8 encoded XML bytes
    """
    if props is None:
        props = [dav.DisplayName(), katana.EmailAddress()]
    propfind = dav.Propfind() + (dav.Prop() + props)
    return etree.tostring(propfind.xmlelement(), encoding="utf-8", xml_declaration=True)
