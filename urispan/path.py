# -*- coding: utf-8; -*-

"""Building the chain of path segments of a :class:`~urispan.structure.Uri`.

A segment is appended in one step, so after any failure the chain is still
consistent: `path_head` is `None` exactly when `path_tail` is `None`,
and the tail has no `next`.
"""

from urispan.structure import PathSegment
from urispan.syntax import rfc3986


SLASH = 0x2F


def append_segment(uri, text):
    """Link a new segment with the span `text` after the current tail."""
    node = PathSegment(text)
    if uri.path_tail is None:
        uri.path_head = node
    else:
        uri.path_tail.next = node
    uri.path_tail = node
    return node


def parse_segments(stream, uri):
    """Parse ``*( "/" segment )``, appending every segment to `uri`.

    The slashes are separators, never part of a segment, and every slash
    starts a segment, even an empty one.
    """
    while stream.peek() == SLASH:
        stream.advance()
        append_segment(uri, rfc3986.segment.match(stream))
