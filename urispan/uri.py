# -*- coding: utf-8; -*-

"""Parsing whole URI references (:rfc:`3986#section-4.1`).

The top-level rules of the grammar are parsed here by hand, in one pass
from left to right, storing every component into a
:class:`~urispan.structure.Uri` as soon as it is complete. The components
themselves (`scheme`, `userinfo`, `segment`, `query` and so on) are
parsed by the symbols of :mod:`urispan.syntax.rfc3986`.
"""

from urispan.host import classify_host
from urispan.parse import Mismatch, maybe, skip
from urispan.path import SLASH, append_segment, parse_segments
from urispan.stream import Stream, check_bounds
from urispan.structure import HostData, Uri, code_unit
from urispan.syntax import rfc3986


COLON = 0x3A
QUESTION_MARK = 0x3F
NUMBER_SIGN = 0x23

_scheme_colon = rfc3986.scheme + skip(':')
_userinfo_at = rfc3986.userinfo + skip('@')
_first_segment = maybe(rfc3986.segment_nz)
_first_segment_nc = maybe(rfc3986.segment_nz_nc)


class _Parser(object):

    def __init__(self, uri, stream):
        self.uri = uri
        self.stream = stream
        self.error_pos = None

    def run(self):
        try:
            self._uri_reference()
            self.stream.expect_eof()
        except Mismatch:
            error = self.stream.error()
            self.error_pos = error.position
            raise error
        return self.uri

    def _uri_reference(self):
        stream = self.stream
        scheme = stream.attempt(_scheme_colon)
        if scheme is None:
            with stream.parsing(rfc3986.relative_ref):
                self._hier_part(_first_segment_nc, rfc3986.path_noscheme)
                self._query_and_fragment()
        else:
            self.uri.scheme = scheme
            with stream.parsing(rfc3986.URI):
                with stream.parsing(rfc3986.hier_part):
                    self._hier_part(_first_segment, rfc3986.path_rootless)
                self._query_and_fragment()

    def _hier_part(self, first_segment, rootless):
        # ``hier-part`` and ``relative-part`` only differ
        # in the rule for a path that does not start with a slash.
        stream = self.stream
        if stream.peek() == SLASH:
            if stream.peek(1) == SLASH:
                stream.advance(2)
                self._authority()
                with stream.parsing(rfc3986.path_abempty):
                    parse_segments(stream, self.uri)
            else:
                with stream.parsing(rfc3986.path_absolute):
                    stream.advance()
                    self.uri.absolute_path = True
                    self._path(_first_segment)
        else:
            with stream.parsing(rootless):
                self._path(first_segment)

    def _authority(self):
        stream = self.stream
        uri = self.uri
        with stream.parsing(rfc3986.authority):
            uri.user_info = stream.attempt(_userinfo_at)
            (uri.host_text, uri.host_data) = classify_host(stream)
            if stream.peek() == COLON:
                stream.advance()
                uri.port_text = rfc3986.port.match(stream)

    def _path(self, first_segment):
        text = first_segment.match(self.stream)
        if text is not None:
            append_segment(self.uri, text)
            parse_segments(self.stream, self.uri)

    def _query_and_fragment(self):
        stream = self.stream
        if stream.peek() == QUESTION_MARK:
            stream.advance()
            self.uri.query = rfc3986.query.match(stream)
        if stream.peek() == NUMBER_SIGN:
            stream.advance()
            self.uri.fragment = rfc3986.fragment.match(stream)


def parse_uri_ex(uri, data, first=0, after_last=None):
    """Parse ``data[first:after_last]`` as a URI reference into `uri`.

    `uri` is reset first, then filled in place; it is also returned.
    Its spans point into `data`, which must stay unchanged while they
    are in use. On failure, the components parsed before the error are
    left in `uri`, and it can be released with :func:`free_uri_members`
    as usual.

    >>> uri = parse_uri_ex(Uri(), u'<http://example.com/a>', 1, 21)
    >>> uri
    <Uri scheme='http' host_text='example.com' path=['a']>

    :raises:
        :exc:`~urispan.parse.ParseError`, whose `position` is an index
        into `data`, if the input is not a valid URI reference;
        :exc:`TypeError` if `uri` or `data` is `None`;
        :exc:`ValueError` if the bounds do not fit into `data`.
    """
    if uri is None:
        raise TypeError(u'uri must not be None')
    after_last = check_bounds(data, first, after_last)
    uri.reset()
    return _Parser(uri, Stream(data, first, after_last)).run()


def parse_uri(uri, data, terminator=0):
    """Parse `data` up to the first `terminator` code unit into `uri`.

    `terminator` defaults to NUL. If `data` does not contain it,
    all of `data` is parsed.

    >>> uri = parse_uri(Uri(), b'mailto:joe@example.com\\0garbage')
    >>> uri
    <Uri scheme='mailto' path=['joe@example.com']>
    """
    if data is None:
        raise TypeError(u'data must not be None')
    if isinstance(terminator, str):
        terminator = ord(terminator)
    after_last = len(data)
    for i in range(len(data)):
        if code_unit(data, i) == terminator:
            after_last = i
            break
    return parse_uri_ex(uri, data, 0, after_last)


def parse(data):
    """Parse all of `data` into a new :class:`~urispan.structure.Uri`."""
    return parse_uri_ex(Uri(), data)


def free_uri_members(uri):
    """Release what `uri` owns: its chain of path segments and host data.

    The spans of `uri` are left as they are. Calling this again,
    or on a fresh :class:`~urispan.structure.Uri`, does nothing.
    """
    if uri is None:
        raise TypeError(u'uri must not be None')
    node = uri.path_head
    while node is not None:
        next_ = node.next
        node.next = None
        node = next_
    uri.path_head = uri.path_tail = None
    uri.host_data = HostData()
