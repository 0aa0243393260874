#!/usr/bin/env python
import sys
from collections.abc import Iterable
from typing import ClassVar
from typing import List
from typing import Optional
from typing import Union

from lxml import etree
from lxml.etree import _Element

from katanadav.lib.namespace import nsmap
from katanadav.lib.python_utilities import to_unicode

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self


class BaseElement:
    """
    A request body element: a Clark-notation tag, an optional text value
    and child elements.  ``a + b`` adds b (or every element of an
    iterable b) as children of a and returns a.
    """

    tag: ClassVar[Optional[str]] = None

    def __init__(self, value: Union[str, bytes, None] = None) -> None:
        self.value: Optional[str] = to_unicode(value)
        self.children: List[BaseElement] = []

    def __add__(self, other: Union["BaseElement", Iterable["BaseElement"]]) -> Self:
        if isinstance(other, Iterable):
            self.children.extend(other)
        else:
            self.children.append(other)
        return self

    def xmlelement(self) -> _Element:
        if self.tag is None:
            raise ValueError(f"{self.__class__.__name__} has no tag")
        root = etree.Element(self.tag, nsmap=nsmap)
        root.text = self.value
        for child in self.children:
            root.append(child.xmlelement())
        return root


class ValuedBaseElement(BaseElement):
    """Property elements that may carry a text value (displayname, ...)"""
