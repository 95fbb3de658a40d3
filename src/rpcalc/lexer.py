from collections import namedtuple
from functools import reduce
import operator

import regex


NUMERIC = frozenset({'frac', 'hex', 'oct', 'int'})


class Token(namedtuple('Token', 'kind lexeme')):
    '''
    One lexeme, tagged with the name of the lexer group that matched it.
    '''
    __slots__ = ()

    @property
    def isnumeric(self):
        return self.kind in NUMERIC


class Lexer:
    '''
    Lexer for the calculator's lexemes: numeric literals (decimal with or
    without a fraction, h-suffixed hexadecimal, o-suffixed octal), then
    operator symbols, then bare words. One regex alternation, first
    alternative wins; anything matching none of them is skipped.
    '''
    # Order matters! Alternation is leftmost-first, so earlier kinds win over
    # later ones starting at the same position: 1.5 is one number, not 1 and
    # 5; ffh is hexadecimal, not a word.
    LEXEME = r'''
              (?<frac>
                  # -1.5, 0.25 but not 1. (that's 1, and a stray .)
                  -?\d+\.\d+
              )|(?<hex>
                  # ffh, 10h, DEADh
                  [\da-fA-F]+h
              )|(?<oct>
                  # 17o
                  [0-7]+o
              )|(?<int>
                  # 42, -7
                  -?\d+
              )|(?<operator>
                  # ** before *, or 2 3 ** would be 2 3 * *
                  \*\*
                  |
                  [-+*/%]
              )|(?<word>
                  # Functions, constants, and stack commands
                  \w+
              )
              '''
    # Default regex flags for matching lexemes. No POSIX: that's
    # leftmost-longest, not first alternative wins.
    FLAGS = reduce(operator.__or__,
                   {regex.ASCII,
                    regex.VERBOSE},
                   0)
    PATTERN = regex.compile(LEXEME, flags=FLAGS)

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Silently skips whatever isn't part of any lexeme: whitespace,
        punctuation, etc.
        '''
        yield from type(self).PATTERN.finditer(line)

    def tokens(self, line):
        '''
        Take a line and return all lexemes as Tokens.
        '''
        for match in self.lex(line):
            (kind, lexeme), = self.matchedgroups(match).items()
            yield Token(kind, lexeme)

    def matchedgroups(self, match):
        '''
        Return the lexeme kind that matched, and what it matched.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value is not None}
