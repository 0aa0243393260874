#!/usr/bin/env python
from typing import ClassVar

from .base import ValuedBaseElement
from katanadav.lib.namespace import ns


# Properties
class EmailAddress(ValuedBaseElement):
    tag: ClassVar[str] = ns("s", "email-address")
