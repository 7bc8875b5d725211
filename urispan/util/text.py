# -*- coding: utf-8; -*-

import re
import string


CHAR_NAMES = {
    0x09: u'tab',
    0x0A: u'LF',
    0x0D: u'CR',
    0x20: u'space',
    0x22: u'double quote (")',
    0x23: u'hash (#)',
    0x25: u'percent sign (%)',
    0x27: u"single quote (')",
    0x2C: u'comma (,)',
    0x2E: u'period (.)',
    0x2F: u'slash (/)',
    0x3A: u'colon (:)',
    0x3B: u'semicolon (;)',
    0x3F: u'question mark (?)',
    0x40: u'at sign (@)',
    0x5B: u'left bracket ([)',
    0x5D: u'right bracket (])',
    0x2D: u'dash (-)',
}


def _char_ranges(points, as_hex=False):
    intervals = []
    min_ = max_ = None
    for point in sorted(points):
        if max_ == point - 1:
            max_ = point
        else:
            if min_ is not None:
                intervals.append((min_, max_))
            min_ = max_ = point
    if min_ is not None:
        intervals.append((min_, max_))
    if as_hex:
        show = lambda point: u'%#04x' % point
    else:
        show = chr
    return [
        (u'%s' % show(p1)) if p1 == p2 else (u'%s–%s' % (show(p1), show(p2)))
        for (p1, p2) in intervals]


def format_chars(points):
    u"""Describe a set of code points (integers) for a human reader.

    >>> print(format_chars([0x00, 0x04, 0x05, 0x06, 0x07, 0x20,
    ...                     0x30, 0x31, 0x32, 0x33, 0x34, 0x35, 0x36,
    ...                     0x37, 0x38, 0x39, 0x41, 0x42, 0x43, 0x44, 0x45,
    ...                     0x46]))
    A–F or 0–9 or space or 0x00 or 0x04–0x07

    >>> print(format_chars([ord(c) for c in u"!$&'()*+,;="]))
    single quote (') or comma (,) or semicolon (;) or !$&()*+=

    >>> print(format_chars([ord(u'V'), ord(u'W'), ord(u'X'), ord(u'a')]))
    V–X or a

    >>> print(format_chars([0x3A]))
    colon (:)
    """
    (letters, digits, named, visible, other) = ([], [], [], [], [])
    for point in sorted(points):
        c = chr(point)
        if c in string.ascii_letters:
            letters.append(point)
        elif c in string.digits:
            digits.append(point)
        elif point in CHAR_NAMES:
            named.append(point)
        elif 0x21 <= point < 0x7F:
            visible.append(point)
        else:
            other.append(point)
    pieces = (_char_ranges(letters) + _char_ranges(digits) +
              [CHAR_NAMES[point] for point in named] +
              [u''.join(chr(point) for point in visible)] +
              _char_ranges(other, as_hex=True))
    return u' or '.join(piece for piece in pieces if piece)


def printable(s):
    # Control characters in an echoed input would garble the report.
    return re.sub(
        pattern=u'[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F-\u009F]',
        repl=u'\N{REPLACEMENT CHARACTER}',
        string=s
    )
