# -*- coding: utf-8; -*-

from collections import OrderedDict

from urispan.parse import Mismatch, ParseError, Terminal
from urispan.structure import Span, code_unit
from urispan.util.text import format_chars


def check_bounds(data, first, after_last):
    """Validate the range ``data[first:after_last]``; return `after_last`.

    `after_last` defaults to the end of `data`.

    :raises:
        :exc:`TypeError` if `data` is `None`;
        :exc:`ValueError` if the bounds do not fit into `data`.
    """
    if data is None:
        raise TypeError(u'data must not be None')
    if after_last is None:
        after_last = len(data)
    if not 0 <= first <= after_last <= len(data):
        raise ValueError(u'bad bounds [%r, %r) for data of length %d' %
                         (first, after_last, len(data)))
    return after_last


class Stream(object):

    """
    A cursor over ``data[first:after_last]`` for the parsers
    of :mod:`urispan.parse` and :mod:`urispan.uri`.

    `data` can be any indexable buffer of code units: ``str``, ``bytes``,
    ``bytearray``, ``memoryview``, ``array.array``, or a list of integers.
    The stream never copies it. All positions are indices into the whole
    of `data`, not relative to `first`.

    A stream also keeps track of the farthest position where parsing
    failed, and what was expected there, to build a :exc:`ParseError`.
    It is used for a single parse and must not be shared between threads.
    """

    def __init__(self, data, first=0, after_last=None, name=None):
        if after_last is None:
            after_last = len(data)
        self.data = data
        self.first = first
        self.end = after_last
        self.pos = first
        self.name = name
        self.farthest = -1
        self._expected = OrderedDict()
        self._silent = 0
        self._currently_parsing = [None]
        self._next_symbol = None

    def window(self, span):
        """A fresh stream over just the `span` of the same data."""
        return Stream(self.data, span.first, span.after_last, self.name)

    # Context manager to record which symbol is being parsed.

    def parsing(self, symbol):
        self._next_symbol = symbol
        return self

    def __enter__(self):
        self._currently_parsing.append(self._next_symbol)
        return self

    def __exit__(self, _exc_type, _exc_value, _exc_traceback):
        self._currently_parsing.pop()
        return False

    # Reading.

    @property
    def eof(self):
        return self.pos >= self.end

    def tell(self):
        return self.pos

    def seek(self, pos):
        self.pos = pos

    def peek(self, offset=0):
        """The code unit at ``pos + offset``, or `None` past the end."""
        i = self.pos + offset
        if i < self.end:
            return code_unit(self.data, i)
        return None

    def advance(self, n=1):
        self.pos += n

    def span(self, first, after_last=None):
        if after_last is None:
            after_last = self.pos
        return Span(self.data, first, after_last)

    # Failures.

    def fail(self, expected, position=None):
        """Note that `expected` is not found at `position` (default: here).

        `expected` is either a :class:`~urispan.parse.Terminal`
        or a description string. Returns a :exc:`Mismatch` to be raised.
        Failures inside :meth:`attempt` are not noted.
        """
        if position is None:
            position = self.pos
        if not self._silent and position >= self.farthest:
            if position > self.farthest:
                self.farthest = position
                self._expected.clear()
            pivots = self._expected.setdefault(expected, [])
            symbol = self._currently_parsing[-1]
            if symbol is not None and symbol not in pivots:
                pivots.append(symbol)
        return Mismatch()

    def expect_eof(self):
        if not self.eof:
            raise self.fail(u'end of data')

    def error(self):
        """Build a :exc:`ParseError` for the farthest failure so far."""
        position = self.farthest if self.farthest >= 0 else self.pos
        expected = OrderedDict()
        for (thing, pivots) in self._expected.items():
            if isinstance(thing, Terminal):
                description = format_chars(thing.chars())
            else:
                description = thing
            symbols = expected.setdefault(description, [])
            symbols.extend(p for p in pivots if p not in symbols)
        found = code_unit(self.data, position) if position < self.end else None
        return ParseError(self.name, position,
                          expected=list(expected.items()), found=found)

    # Parsing.

    def attempt(self, symbol):
        """Try to parse `symbol` here, without reporting failure.

        Returns the result, or `None` (and rewinds) if `symbol` does not
        match. Used where the grammar needs to look ahead, such as
        ``[ userinfo "@" ]``.
        """
        start = self.pos
        self._silent += 1
        try:
            return symbol.match(self)
        except Mismatch:
            self.pos = start
            return None
        finally:
            self._silent -= 1

    def parse(self, symbol, to_eof=False):
        """Parse `symbol` from the current position.

        :param to_eof: Whether `symbol` must cover the rest of the stream.
        :raises: :exc:`ParseError` for the farthest failure.
        """
        try:
            r = symbol.match(self)
            if to_eof:
                self.expect_eof()
        except Mismatch:
            raise self.error()
        return r
