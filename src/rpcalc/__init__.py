'''
RPN calculator.

Arbitrary precision decimal arithmetic, Python's mathematical functions, and
your usual stack operators. Not intended to be Turing-complete!

Numbers are pushed, operators and functions pop their arguments and push
their results. The whole stack is printed, top first, after every line:

    > 3 4 +
    [7]
    > 2 10 ** 10 3 divmod
    [1, 3, 1024, 7]

Hexadecimal and octal in, with the h and o suffixes (ffh, 17o); toggle
hexadecimal and octal out with x and o.
'''

from .cli import CLI
from .lexer import Lexer, Token
from .machine import Machine, DisplayMode


__all__ = 'Machine', 'DisplayMode', 'Lexer', 'Token', 'CLI'
