# -*- coding: utf-8; -*-

from ipaddress import IPv4Address, IPv6Address

from urispan.citation import RFC
from urispan.parse import (Symbol, auto, capture, char_range, decimal,
                           fill_names, function, hexadecimal, literal, many,
                           named, pivot, skip, string, string1, string_times)
from urispan.syntax.common import ALPHA, DIGIT, HEXDIG


COLON = 0x3A
DOT = 0x2E


pct_encoded = '%' + HEXDIG + HEXDIG                                     > auto
sub_delims = (literal('!') | '$' | '&' | "'" | '(' | ')' | '*' | '+' |
              ',' | ';' | '=')                                          > auto
unreserved = ALPHA | DIGIT | '-' | '.' | '_' | '~'                      > auto
pchar = unreserved | sub_delims | ':' | '@' | pct_encoded               > auto

segment = string(pchar)                                                 > auto
segment_nz = string1(pchar)                                             > auto
segment_nz_nc = string1(unreserved | sub_delims | '@' | pct_encoded)    > auto

scheme = capture(ALPHA + many(ALPHA | DIGIT | '+' | '-' | '.'))         > pivot
userinfo = string(unreserved | sub_delims | ':' | pct_encoded)          > pivot

# Ordered longest first, since a choice never reconsiders a shorter match.
dec_octet = decimal << capture('25' + char_range(0x30, 0x35) |
                               '2' + char_range(0x30, 0x34) + DIGIT |
                               '1' + DIGIT + DIGIT |
                               char_range(0x31, 0x39) + DIGIT |
                               DIGIT)                                   > auto

def _ip4(*octets):
    return IPv4Address(bytes(octets))

IPv4address = _ip4 << (dec_octet + skip('.') + dec_octet + skip('.') +
                       dec_octet + skip('.') + dec_octet)               > pivot

h16 = string_times(1, 4, HEXDIG)                                        > auto


def _parse_ipv6address(stream):
    # The ABNF lists nine alternatives that only work with backtracking.
    # Equivalent rules: up to eight `h16` pieces separated by colons;
    # at most one "::" standing for one or more zero pieces; and
    # an `IPv4address` counting as two pieces, only at the very end.
    head, tail = [], []
    elision = None          # Position right after the "::", if any.
    ip4 = None

    if stream.peek() == COLON:
        stream.advance()
        if stream.peek() != COLON:
            raise stream.fail(_colon)
        stream.advance()
        elision = stream.tell()

    while True:
        count = len(head) + len(tail)
        limit = 8 if elision is None else 7
        if count == limit:
            break
        start = stream.tell()
        if not HEXDIG.test(stream.peek()):
            if start == elision:
                break
            raise stream.fail(HEXDIG)

        stream.attempt(h16)
        if stream.peek() == DOT and (count == 6 if elision is None
                                     else count <= 5):
            stream.seek(start)
            ip4 = IPv4address.match(stream)
            break
        stream.seek(start)
        piece = hexadecimal(h16.match(stream))
        (head if elision is None else tail).append(piece)

        if stream.peek() != COLON or count + 1 == limit:
            break
        if elision is None and stream.peek(1) == COLON:
            stream.advance(2)
            elision = stream.tell()
        else:
            stream.advance()

    count = len(head) + len(tail) + (0 if ip4 is None else 2)
    if elision is None and count < 8:
        raise stream.fail(_colon)

    value = 0
    for piece in head + [0] * (8 - count) + tail:
        value = value << 16 | piece
    if ip4 is not None:
        value = value << 32 | int(ip4)
    return IPv6Address(value)

_colon = literal(':')

IPv6address = function(_parse_ipv6address)                             > pivot

IPvFuture = capture('v' + string1(HEXDIG) + '.' +
                    string1(unreserved | sub_delims | ':'))             > pivot

ZoneID = string1(unreserved | pct_encoded) \
    > named(u'ZoneID', RFC(6874, section=u'2'), is_pivot=True)

# RFC 6874 introduces the zone with a percent-encoded "%".
# A bare "%" is also accepted, as RFC 4007 writes zones.
zone = (skip('%25') + ZoneID | skip('%') + ZoneID) \
    > named(u'zone', RFC(6874, section=u'2'))

reg_name = string(unreserved | sub_delims | pct_encoded)                > pivot
port = string(DIGIT)                                                    > pivot

query = string(pchar | '/' | '?')                                       > pivot
fragment = string(pchar | '/' | '?')                                    > pivot


# Rules that :mod:`urispan.uri` and :mod:`urispan.host` parse by hand.
# They are only here to be referred to in parse errors.

URI = Symbol(u'URI', RFC(3986, section=u'3'), is_pivot=True)
hier_part = Symbol(u'hier-part', RFC(3986, section=u'3'), is_pivot=True)
relative_ref = Symbol(u'relative-ref', RFC(3986, section=u'4.2'),
                      is_pivot=True)
authority = Symbol(u'authority', RFC(3986, section=u'3.2'), is_pivot=True)
host = Symbol(u'host', RFC(3986, section=u'3.2.2'), is_pivot=True)
IP_literal = Symbol(u'IP-literal', RFC(3986, section=u'3.2.2'),
                    is_pivot=True)
path_abempty = Symbol(u'path-abempty', RFC(3986, section=u'3.3'),
                      is_pivot=True)
path_absolute = Symbol(u'path-absolute', RFC(3986, section=u'3.3'),
                       is_pivot=True)
path_noscheme = Symbol(u'path-noscheme', RFC(3986, section=u'3.3'),
                       is_pivot=True)
path_rootless = Symbol(u'path-rootless', RFC(3986, section=u'3.3'),
                       is_pivot=True)


fill_names(globals(), RFC(3986, section=u'A'))
