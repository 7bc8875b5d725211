# -*- coding: utf-8; -*-

"""Classes for representing a parsed URI and its pieces.

Nothing here copies the parsed input. A :class:`Span` only remembers
where a component lies inside the caller's buffer, so the buffer must stay
alive and unmodified for as long as any span derived from it is in use.
Holding a span keeps a reference to its source, so the buffer is never
collected from under it, but mutating a ``bytearray`` or ``array`` source
after parsing silently changes what the spans read.
"""

import enum


def code_unit(source, index):
    """Return the code unit at `index` in `source` as an integer.

    Narrow sources (``bytes``, ``bytearray``, ``memoryview``, arrays
    of integers) already yield integers; text sources yield characters.
    """
    unit = source[index]
    return unit if isinstance(unit, int) else ord(unit)


def code_units(value):
    if isinstance(value, Span):
        return tuple(value.units())
    return tuple(u if isinstance(u, int) else ord(u) for u in value)


###############################################################################
# Spans


class Span(object):

    """A half-open view ``[first, after_last)`` into a source buffer.

    An absent component is represented by `None`, never by a span.
    An empty span (``first == after_last``) means "present but empty".

    Spans compare by the code units they cover, so a span over ``bytes``
    equals a span over ``str`` with the same ASCII text, and either equals
    a plain string or bytestring with that text:

    >>> s = Span(u'http://example.com/', 7, 18)
    >>> print(s)
    example.com
    >>> s == u'example.com', s == b'example.com', len(s)
    (True, True, 11)
    >>> Span(b'abc', 0, 1) < Span(u'b', 0, 1)
    True
    """

    __slots__ = ('source', 'first', 'after_last')

    def __init__(self, source, first, after_last):
        assert 0 <= first <= after_last
        self.source = source
        self.first = first
        self.after_last = after_last

    def __len__(self):
        return self.after_last - self.first

    def units(self):
        source = self.source
        for i in range(self.first, self.after_last):
            yield code_unit(source, i)

    def raw(self):
        """The covered slice, in the same type as the source."""
        return self.source[self.first:self.after_last]

    def __str__(self):
        if isinstance(self.source, str):
            return self.source[self.first:self.after_last]
        return u''.join(chr(unit) for unit in self.units())

    def __repr__(self):
        return 'Span(%r, %d, %d)' % (str(self), self.first, self.after_last)

    def __eq__(self, other):
        if isinstance(other, (Span, str, bytes, bytearray)):
            return code_units(self) == code_units(other)
        return NotImplemented

    def __ne__(self, other):
        if isinstance(other, (Span, str, bytes, bytearray)):
            return code_units(self) != code_units(other)
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, (Span, str, bytes, bytearray)):
            return code_units(self) < code_units(other)
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, (Span, str, bytes, bytearray)):
            return code_units(self) <= code_units(other)
        return NotImplemented

    def __gt__(self, other):
        if isinstance(other, (Span, str, bytes, bytearray)):
            return code_units(self) > code_units(other)
        return NotImplemented

    def __ge__(self, other):
        if isinstance(other, (Span, str, bytes, bytearray)):
            return code_units(self) >= code_units(other)
        return NotImplemented

    def __hash__(self):
        # Consistent with equality between spans only. A span equal to
        # u'ab' or b'ab' does not hash like them, so do not mix spans
        # and strings in one set or as dict keys.
        return hash(code_units(self))


###############################################################################
# Hosts


class HostType(enum.Enum):

    """Which grammar the host of an authority matched.

    ``reg_name`` is a registered name: no structured data,
    only :attr:`Uri.host_text`.
    """

    reg_name = 0
    ip4 = 1
    ip6 = 2
    ip_future = 3


class HostData(object):

    """Structured host information, tagged with a :class:`HostType`.

    Only the payload matching :attr:`type` is ever set. Build instances
    with the class methods rather than the constructor:

    >>> from ipaddress import IPv4Address
    >>> data = HostData.from_ip4(IPv4Address(u'127.0.0.1'))
    >>> data.type
    <HostType.ip4: 1>
    >>> data.ip4.packed
    b'\\x7f\\x00\\x00\\x01'
    >>> data.ip6 is None and data.ip_future is None
    True
    >>> HostData().type
    <HostType.reg_name: 0>
    """

    __slots__ = ('type', 'value', 'zone')

    def __init__(self, type_=HostType.reg_name, value=None, zone=None):
        assert (value is None) == (type_ is HostType.reg_name)
        assert zone is None or type_ is HostType.ip6
        self.type = type_
        self.value = value
        self.zone = zone

    @classmethod
    def from_ip4(cls, address):
        return cls(HostType.ip4, address)

    @classmethod
    def from_ip6(cls, address, zone=None):
        return cls(HostType.ip6, address, zone)

    @classmethod
    def from_ip_future(cls, text):
        return cls(HostType.ip_future, text)

    @property
    def ip4(self):
        return self.value if self.type is HostType.ip4 else None

    @property
    def ip6(self):
        return self.value if self.type is HostType.ip6 else None

    @property
    def ip_future(self):
        return self.value if self.type is HostType.ip_future else None

    def __repr__(self):
        if self.type is HostType.reg_name:
            return 'HostData()'
        elif self.zone is not None:
            return 'HostData(%s, %r, zone=%r)' % (self.type.name,
                                                  self.value, self.zone)
        else:
            return 'HostData(%s, %r)' % (self.type.name, self.value)

    def __eq__(self, other):
        return isinstance(other, HostData) and \
            (self.type, self.value, self.zone) == \
            (other.type, other.value, other.zone)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.type, self.value, self.zone))


###############################################################################
# URIs


class PathSegment(object):

    """One node of the singly linked chain of path segments."""

    __slots__ = ('text', 'next')

    def __init__(self, text, next_=None):
        self.text = text
        self.next = next_

    def __repr__(self):
        return 'PathSegment(%r)' % self.text


class Uri(object):

    """The result of parsing an RFC 3986 URI or relative reference.

    Every span-valued field is `None` when the component does not occur
    in the input. The segment chain (`path_head` to `path_tail`) and
    `host_data` belong to this object; everything else borrows from the
    parsed buffer.

    `absolute_path` is `True` when there is no authority and the path
    begins with a slash (``path-absolute``).
    """

    __slots__ = ('scheme', 'user_info', 'host_text', 'host_data', 'port_text',
                 'path_head', 'path_tail', 'query', 'fragment',
                 'absolute_path')

    def __init__(self):
        self.reset()

    def reset(self):
        self.scheme = None
        self.user_info = None
        self.host_text = None
        self.host_data = HostData()
        self.port_text = None
        self.path_head = None
        self.path_tail = None
        self.query = None
        self.fragment = None
        self.absolute_path = False

    def segments(self):
        """Iterate over the path segments' spans, left to right."""
        node = self.path_head
        while node is not None:
            yield node.text
            node = node.next

    @property
    def has_authority(self):
        return self.host_text is not None

    def __repr__(self):
        fields = [(name, getattr(self, name))
                  for name in ('scheme', 'user_info', 'host_text',
                               'port_text', 'query', 'fragment')]
        parts = [u'%s=%r' % (name, str(value))
                 for (name, value) in fields if value is not None]
        if self.host_data.type is not HostType.reg_name:
            parts.append(u'host_data=%r' % self.host_data)
        parts.append(u'path=%r' % [str(s) for s in self.segments()])
        if self.absolute_path:
            parts.append(u'absolute_path=True')
        return '<Uri %s>' % u' '.join(parts)
