#!/usr/bin/env python
import logging

__version__ = "0.1.0"

from .adapter import PrincipalAdapter
from .protocol.types import Principal

## Silence notification of no default logging handler
log = logging.getLogger("katanadav")


class NullHandler(logging.Handler):
    def emit(self, record) -> None:
        pass


log.addHandler(NullHandler())

__all__ = ["__version__", "PrincipalAdapter", "Principal"]
