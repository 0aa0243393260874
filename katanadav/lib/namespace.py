#!/usr/bin/env python
from typing import Dict
from typing import Optional

nsmap: Dict[str, str] = {
    "d": "DAV:",
    "s": "http://sabredav.org/ns",
}


def resolve(alias: str) -> Optional[str]:
    """Return the namespace URI an alias stands for, or None if unknown"""
    return nsmap.get(alias)


def alias_for(uri: str) -> Optional[str]:
    for alias, known in nsmap.items():
        if known == uri:
            return alias
    return None


def ns(prefix: str, tag: Optional[str] = None) -> str:
    name = "{%s}" % nsmap[prefix]
    if tag is not None:
        name = "%s%s" % (name, tag)
    return name
