# -*- coding: utf-8; -*-

from urispan.__metadata__ import version as __version__
from urispan.host import parse_host, valid_ip6
from urispan.parse import ParseError
from urispan.structure import HostData, HostType, PathSegment, Span, Uri
from urispan.uri import free_uri_members, parse, parse_uri, parse_uri_ex

__all__ = [
    'HostData',
    'HostType',
    'ParseError',
    'PathSegment',
    'Span',
    'Uri',
    'free_uri_members',
    'parse',
    'parse_host',
    'parse_uri',
    'parse_uri_ex',
    'valid_ip6',
]
