#!/usr/bin/env python
from typing import ClassVar

from .base import BaseElement
from .base import ValuedBaseElement
from katanadav.lib.namespace import ns


# Operations
class Propfind(BaseElement):
    tag: ClassVar[str] = ns("d", "propfind")


class Mkcol(BaseElement):
    tag: ClassVar[str] = ns("d", "mkcol")


# Components / Data


class Prop(BaseElement):
    tag: ClassVar[str] = ns("d", "prop")


class Set(BaseElement):
    tag: ClassVar[str] = ns("d", "set")


class Principal(BaseElement):
    tag: ClassVar[str] = ns("d", "principal")


# Properties
class ResourceType(BaseElement):
    tag: ClassVar[str] = ns("d", "resourcetype")


class DisplayName(ValuedBaseElement):
    tag: ClassVar[str] = ns("d", "displayname")


# Multistatus
class MultiStatus(BaseElement):
    tag: ClassVar[str] = ns("d", "multistatus")
