# -*- coding: utf-8; -*-

from urispan.citation import RFC
from urispan.parse import auto, char_range, fill_names


ALPHA = char_range(0x41, 0x5A) | char_range(0x61, 0x7A)                 > auto
DIGIT = char_range(0x30, 0x39)                                          > auto
HEXDIG = DIGIT | 'A' | 'B' | 'C' | 'D' | 'E' | 'F'                      > auto

fill_names(globals(), RFC(5234, section=u'B.1'))
