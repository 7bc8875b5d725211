# -*- coding: utf-8; -*-

"""Explaining a :exc:`~urispan.parse.ParseError` to a human.

An explanation is a list of paragraphs, each of them a list of pieces:
strings, :class:`~urispan.parse.Symbol` and
:class:`~urispan.citation.Citation` objects. This keeps the explanation
independent of how it is rendered. :func:`text_explanation` renders it
as plain text.
"""

from functools import singledispatch

from urispan.citation import Citation
from urispan.parse import Symbol
from urispan.util.text import format_chars, printable


@singledispatch
def expand_piece(piece):
    return str(piece)

@expand_piece.register(Symbol)
def expand_symbol(sym):
    if sym.citation:
        return [sym.name, u' (', sym.citation, u')']
    else:
        return [sym.name]

@expand_piece.register(Citation)
def expand_citation(citation):
    return str(citation)


def explain(error):
    """Break down a :exc:`~urispan.parse.ParseError` into paragraphs."""
    paras = [[error.name]] if error.name else []
    paras.append([u'Parse error at offset %d.' % error.position])
    if error.found is None:
        paras.append([u'Found end of data.'])
    else:
        paras.append([u'Found: %s' % format_chars([error.found])])

    paras.append([u'Expected:'])
    for i, (option, symbols) in enumerate(error.expected):
        para = []
        if option:
            para.extend([option] if i == 0 else [u'or ', option])
            if symbols:
                para.append(u' as part of ')
        for j, symbol in enumerate(symbols or []):
            para.extend([symbol] if j == 0 else [u' or ', symbol])
        paras.append(para)

    return paras


def text_explanation(error):
    """Render :func:`explain` for `error` as plain text, a line per paragraph.

    >>> from urispan.uri import parse
    >>> from urispan.parse import ParseError
    >>> try:
    ...     parse(u'http://[notipv6]/')
    ... except ParseError as e:
    ...     print(text_explanation(e))
    Parse error at offset 8.
    Found: n
    Expected:
    A–F or a–f or 0–9 as part of IPv6address (RFC 3986 § A)
    """
    return u'\n'.join(_piece_to_text(para) for para in explain(error))


@singledispatch
def _piece_to_text(piece):
    return _piece_to_text(expand_piece(piece))

@_piece_to_text.register(str)
def _text_to_text(text):
    return printable(text)

@_piece_to_text.register(list)
def _list_to_text(xs):
    return u''.join(_piece_to_text(x) for x in xs)
