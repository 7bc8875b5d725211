# -*- coding: utf-8; -*-

"""A library of parser combinators with ordered choice.

The grammar defined with these combinators is in :mod:`urispan.syntax`,
and :mod:`urispan.uri` drives it to parse whole URIs.

Symbols are combined much like the ABNF of the RFCs: ``a | b`` is an
alternative, ``a + b`` is concatenation, ``string(a)`` is ``*a``, and so on.
Unlike ABNF, alternatives are *ordered*, as in a PEG: the first alternative
that matches wins, and repetition is greedy without giving characters back.
In exchange, parsing is linear in the input and needs no chart or
memoization, and it never stores anything outside of the :class:`Stream`
that is being parsed, so any number of threads can parse at once.
Where the ABNF relies on backtracking (``dec-octet``, ``IPv6address``),
:mod:`urispan.syntax.rfc3986` reorders the alternatives or hand-codes the
rule with :func:`function`.

Terminals work on integer code units, so the same grammar parses ``str``,
``bytes`` and arrays of wide code units. The grammar is pure ASCII; code
units above 0x7F never match.

Parsing produces spans rather than strings: :func:`capture` (and
:func:`string`, :func:`string1` etc. built on it) return a
:class:`~urispan.structure.Span` over the matched input instead of copying
it. Semantic actions can be attached with the ``<<`` operator
(:meth:`Symbol.__rlshift__`) to turn results into other objects, such as
:class:`ipaddress.IPv4Address`.

When parsing fails, the error is reported at the *farthest* position where
any terminal was tried and did not match, together with everything that
was expected there (see :meth:`Stream.fail`).
"""

from bitstring import BitArray, Bits


ASCII = 0x80


class ParseError(Exception):

    def __init__(self, name, position, expected, found=None):
        """
        :param name: Name of the input, or `None`.
        :param position: Offset (into the whole buffer) of the error.
        :param expected:
            List of ``(description, symbols)``, where `description` is
            a free-form description of what could satisfy parse at that
            `position` in the input, and `symbols` is an iterable
            of :class:`Symbol` as part of which this `description` would be
            expected.
        :param found:
            The integer code unit found at `position`,
            or `None` at end of data.

        """
        super(ParseError, self).__init__(
            u'unexpected input at position %r' % position)
        self.name = name
        self.position = position
        self.expected = expected
        self.found = found


class Mismatch(Exception):

    """Internal signal that a symbol does not match at the current position.

    Never escapes :meth:`Stream.parse`; it is converted to a
    :exc:`ParseError` for the farthest failure.
    """


###############################################################################
# Combinators.


class Symbol(object):

    """A symbol of the grammar (either terminal or nonterminal)."""

    def __init__(self, name=None, citation=None, is_pivot=False):
        """
        :param name:
            The name of this symbol in the grammar, normally as specified
            in `citation`.
        :param citation:
            The :class:`~urispan.citation.Citation` for the document that
            defines this symbol.
        :param is_pivot:
            `True` if this symbol is a meaningful enough block of the grammar
            to be shown to the user as part of a :exc:`ParseError`
            explanation.

        """
        self.name = name
        self.citation = citation
        self.is_pivot = is_pivot

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__,
                            self.name or hex(id(self)))

    def __gt__(self, seal):
        """``sym >seal`` seals the `sym` symbol, then applies `seal` to it.

        This gives the symbol a name and (usually) a citation, and stops it
        from being flattened into other sequences or alternatives.

        See also :func:`fill_names`.
        """
        if self.name is None:
            sealed = self
        else:
            sealed = Nonterminal(self)
        (sealed.name, sealed.citation, sealed.is_pivot) = seal
        return sealed

    def match(self, stream):
        """Parse this symbol at the current position of `stream`.

        On success, the stream is advanced past the match and the result
        is returned. On failure, :exc:`Mismatch` is raised; the position
        of the stream is then unspecified, and it is the caller's job
        to rewind it.
        """
        if self.is_pivot:
            with stream.parsing(self):
                return self._match(stream)
        return self._match(stream)

    def scan(self, stream):
        """Like :meth:`match`, but without building a result."""
        if self.is_pivot:
            with stream.parsing(self):
                self._scan(stream)
        else:
            self._scan(stream)

    def _match(self, stream):
        raise NotImplementedError

    def _scan(self, stream):
        self._match(stream)

    def __or__(self, other):
        return Choice(_options(self) + _options(as_symbol(other)))

    def __ror__(self, other):
        return Choice(_options(as_symbol(other)) + _options(self))

    def __add__(self, other):
        return Sequence(_items(self) + _items(as_symbol(other)))

    def __radd__(self, other):
        return Sequence(_items(as_symbol(other)) + _items(self))

    def __rlshift__(self, func):
        """``func << sym`` wraps the result of parsing `sym` with `func`."""
        return Action(func, self)


class Terminal(Symbol):

    """A terminal symbol of the grammar, matching one code unit of a set."""

    def __init__(self, name=None, citation=None, bits=None):
        super(Terminal, self).__init__(name, citation)
        self.bits = bits if bits is not None else Bits(ASCII)

    def chars(self):
        return [i for (i, v) in enumerate(self.bits) if v]

    def test(self, unit):
        """Does the code unit `unit` (an integer or `None`) belong here?"""
        return unit is not None and unit < ASCII and self.bits[unit]

    def _match(self, stream):
        first = stream.tell()
        self._scan(stream)
        return stream.span(first)

    def _scan(self, stream):
        if not self.test(stream.peek()):
            raise stream.fail(self)
        stream.advance()

    def __or__(self, other):
        other = as_symbol(other)
        if isinstance(other, Terminal):
            return Terminal(bits=self.bits | other.bits)
        else:
            return super(Terminal, self).__or__(other)

    def __ror__(self, other):
        other = as_symbol(other)
        if isinstance(other, Terminal):
            return Terminal(bits=other.bits | self.bits)
        else:
            return super(Terminal, self).__ror__(other)

    def __sub__(self, other):
        other = as_symbol(other)
        return Terminal(bits=self.bits & ~other.bits)


class Nonterminal(Symbol):

    """A named wrapper around another symbol (see :meth:`Symbol.__gt__`)."""

    def __init__(self, inner, name=None, citation=None, is_pivot=False):
        super(Nonterminal, self).__init__(name, citation, is_pivot)
        self.inner = inner

    def _match(self, stream):
        return self.inner.match(stream)

    def _scan(self, stream):
        self.inner.scan(stream)


class Choice(Symbol):

    """Ordered choice: the first of `options` that matches wins."""

    def __init__(self, options, name=None, citation=None, is_pivot=False):
        super(Choice, self).__init__(name, citation, is_pivot)
        self.options = options

    def _match(self, stream):
        start = stream.tell()
        for option in self.options:
            try:
                return option.match(stream)
            except Mismatch:
                stream.seek(start)
        raise Mismatch()

    def _scan(self, stream):
        start = stream.tell()
        for option in self.options:
            try:
                option.scan(stream)
                return
            except Mismatch:
                stream.seek(start)
        raise Mismatch()


class Sequence(Symbol):

    """Concatenation of `items`.

    The result is the tuple of the items' results, minus the skipped ones
    (see :func:`skip`). A single remaining result is returned as is.
    """

    def __init__(self, items, name=None, citation=None, is_pivot=False):
        super(Sequence, self).__init__(name, citation, is_pivot)
        self.items = items

    def _match(self, stream):
        results = []
        for item in self.items:
            r = item.match(stream)
            if r is not SKIP:
                results.append(r)
        return _collapse(results)

    def _scan(self, stream):
        for item in self.items:
            item.scan(stream)


class Repeat(Symbol):

    """From `min_count` to `max_count` (`None` = unbounded) of `inner`.

    Greedy: takes as many repetitions as possible and never gives them back.
    The result is a list of the repetitions' results.
    """

    def __init__(self, min_count, max_count, inner):
        super(Repeat, self).__init__()
        self.min_count = min_count
        self.max_count = max_count
        self.inner = inner

    def _repeat(self, stream, func):
        count = 0
        while self.max_count is None or count < self.max_count:
            start = stream.tell()
            try:
                func(stream)
            except Mismatch:
                stream.seek(start)
                break
            if stream.tell() == start:      # An empty match would loop.
                break
            count += 1
        if count < self.min_count:
            raise Mismatch()

    def _match(self, stream):
        results = []
        self._repeat(stream,
                     lambda s: results.append(self.inner.match(s)))
        return results

    def _scan(self, stream):
        self._repeat(stream, self.inner.scan)


class Capture(Symbol):

    """Matches `inner` and returns the :class:`Span` of input it covered."""

    def __init__(self, inner):
        super(Capture, self).__init__()
        self.inner = inner

    def _match(self, stream):
        first = stream.tell()
        self.inner.scan(stream)
        return stream.span(first)

    def _scan(self, stream):
        self.inner.scan(stream)


class Action(Symbol):

    def __init__(self, func, inner):
        super(Action, self).__init__()
        self.func = func
        self.inner = inner

    def _match(self, stream):
        r = self.inner.match(stream)
        if r is SKIP:
            args = ()
        elif isinstance(r, tuple):
            args = r
        else:
            args = (r,)
        return self.func(*args)

    def _scan(self, stream):
        self.inner.scan(stream)


class Function(Symbol):

    """A symbol parsed by arbitrary code. See :func:`function`."""

    def __init__(self, parser):
        super(Function, self).__init__()
        self.parser = parser

    def _match(self, stream):
        return self.parser(stream)


class _Skip(object):

    def __repr__(self):
        return 'SKIP'

SKIP = _Skip()


def _collapse(results):
    if len(results) == 0:
        return SKIP
    elif len(results) == 1:
        return results[0]
    else:
        return tuple(results)


def _options(symbol):
    # Unnamed choices dissolve into the choice being built.
    if isinstance(symbol, Choice) and symbol.name is None:
        return symbol.options
    return [symbol]


def _items(symbol):
    if isinstance(symbol, Sequence) and symbol.name is None:
        return symbol.items
    return [symbol]


empty = Sequence([])


def char_range(min_, max_):
    """Create a terminal that accepts code units from `min_` to `max_`."""
    bits = BitArray(ASCII)
    for i in range(min_, max_ + 1):
        bits[i] = True
    return Terminal(bits=Bits(bits))

def char(value):
    """Create a terminal that accepts only the `value` code unit."""
    return char_range(value, value)

def literal(s, case_sensitive=False):
    """Create a symbol that parses the `s` string.

    As in ABNF, literals are case-insensitive unless asked otherwise.
    """
    if len(s) == 1:
        if case_sensitive:
            return char(ord(s))
        else:
            return char(ord(s.lower())) | char(ord(s.upper()))
    else:
        return Sequence([literal(c, case_sensitive) for c in s])

def as_symbol(x):
    return x if isinstance(x, Symbol) else literal(x)


def function(parser):
    """Create a symbol that is parsed by calling ``parser(stream)``.

    `parser` must either return a result, leaving the stream after the
    match, or raise the :exc:`Mismatch` returned by :meth:`Stream.fail`.
    """
    return Function(parser)


def capture(inner):
    return Capture(as_symbol(inner))

def skip(x):
    return _skip_args << as_symbol(x)


def maybe(inner, default=None):
    return as_symbol(inner) | subst(default) << empty


def times(min_, max_, inner):
    return Repeat(min_, max_, as_symbol(inner))

def string_times(min_, max_, inner):
    return capture(times(min_, max_, inner))

def many(inner):
    return times(0, None, inner)

def string(inner):
    return capture(many(inner))

def many1(inner):
    return times(1, None, inner)

def string1(inner):
    return capture(many1(inner))


class _AutoName(object):

    def __repr__(self):
        return '_AUTO'

_AUTO = _AutoName()


def named(name, citation=None, is_pivot=False):
    return (name, citation, is_pivot)

auto = named(_AUTO)
pivot = named(_AUTO, is_pivot=True)

def fill_names(scope, citation):
    """Process automatic names for all symbols in `scope`.

    When we write::

      foobar = literal('foo') | literal('bar')      > auto

    there is no way for `foobar` to know its own name (which is ``foobar``,
    important for error reporting), unless we post-process it with this
    function. It takes names from `scope` and writes them back into
    the symbols. This only happens for symbols sealed with :func:`auto`
    or :func:`pivot`.
    """
    for name, x in scope.items():
        if isinstance(x, Symbol) and x.name is _AUTO:
            x.name = name.rstrip('_').replace('_', '-')
            x.citation = citation


###############################################################################
# Functions that are useful as semantic actions in parsing rules.

def _skip_args(*_):
    return SKIP

def subst(r):
    def substitute(*_):
        return r
    return substitute

def decimal(span):
    value = 0
    for unit in span.units():
        value = value * 10 + (unit - 0x30)
    return value

def hexadecimal(span):
    return int(str(span), 16)


