# -*- coding: utf-8; -*-

"""Classify the host of an authority.

The alternatives are tried in this order:

1. ``IP-literal``, if the host starts with a bracket:
   ``IPvFuture`` if the bracket is followed by "v", else ``IPv6address``
   with an optional zone (:rfc:`6874`, or a bare "%" before the zone);
2. ``IPv4address``, which must cover the whole host;
3. ``reg-name``.

Only an ``IP-literal`` can make the host fail to parse. A string of
registered-name characters that is not a valid IPv4 address (say,
``1.2.3.256`` or ``01.2.3.4``) is just a registered name.
"""

from urispan.parse import function, literal
from urispan.stream import Stream, check_bounds
from urispan.structure import HostData
from urispan.syntax import rfc3986


LEFT_BRACKET = 0x5B
PERCENT = 0x25

_right_bracket = literal(']')
_v = literal('v')


def classify_host(stream):
    """Parse the host at the current position of `stream`.

    :return: A pair of the host text (a span, without any brackets)
        and the :class:`~urispan.structure.HostData` for it.
    :raises: :exc:`~urispan.parse.Mismatch` if an ``IP-literal`` is
        malformed.
    """
    with stream.parsing(rfc3986.host):
        if stream.peek() == LEFT_BRACKET:
            return _ip_literal(stream)

        text = rfc3986.reg_name.match(stream)
        window = stream.window(text)
        address = window.attempt(rfc3986.IPv4address)
        if address is not None and window.eof:
            return text, HostData.from_ip4(address)
        return text, HostData()


def _ip_literal(stream):
    with stream.parsing(rfc3986.IP_literal):
        stream.advance()
        first = stream.tell()
        if _v.test(stream.peek()):
            data = HostData.from_ip_future(rfc3986.IPvFuture.match(stream))
        else:
            address = rfc3986.IPv6address.match(stream)
            zone = None
            if stream.peek() == PERCENT:
                zone = rfc3986.zone.match(stream)
            data = HostData.from_ip6(address, zone)
        text = stream.span(first)
        _right_bracket.match(stream)
        return text, data


_host = function(classify_host)


def parse_host(data, first=0, after_last=None):
    """Classify the host in ``data[first:after_last]``.

    This is the same classification as when parsing a whole URI, but the
    entire range must be a host.

    >>> text, host_data = parse_host(u'[v1.abc]')
    >>> print(text)
    v1.abc
    >>> host_data.type
    <HostType.ip_future: 3>
    >>> parse_host(u'192.0.2.1')[1]
    HostData(ip4, IPv4Address('192.0.2.1'))

    :raises:
        :exc:`~urispan.parse.ParseError` if the range is not a valid host;
        :exc:`TypeError` if `data` is `None`;
        :exc:`ValueError` if the bounds do not fit into `data`.
    """
    after_last = check_bounds(data, first, after_last)
    return Stream(data, first, after_last).parse(_host, to_eof=True)


def valid_ip6(text):
    """Is `text` exactly one IPv6 address (without brackets or zone)?

    >>> valid_ip6(u'fe80::1'), valid_ip6(u'::ffff:10.0.0.1')
    (True, True)
    >>> valid_ip6(u'1:2:3'), valid_ip6(u'[::1]'), valid_ip6(u'')
    (False, False, False)
    """
    stream = Stream(text)
    return stream.attempt(rfc3986.IPv6address) is not None and stream.eof
