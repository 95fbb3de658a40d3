from collections import deque
from decimal import Context, Decimal, DivisionByZero, InvalidOperation, \
                    Overflow, localcontext
from enum import Enum
import logging

from .lexer import Lexer
from .operations import OPERATIONS
from .util import RPNError, StackUnderflow, UnknownToken, \
                  Output, Quit, Message, Error


logger = logging.getLogger(__name__)


HELP = '''\
number format:
  123, 0.1, 100h, 100o
function:
  + - * / % **
  fix frac floor ceil round truncate abs exponent sqrt divmod
  acos asin atan acosh asinh atanh cos sin tan cosh sinh tanh
  erf erfc exp frexp log log10
  atan2 hypot ldexp
constant:
  e pi
operation:
  c ... clear stack
  n ... pop stack
  d ... duplicate top on stack
  r ... swap top 2 on stack
  x ... print hex
  o ... print oct
  q ... quit
  h ... print this message
  v ... print version'''

VERSION = 'rpcalc v1.0'


class DisplayMode(Enum):
    DECIMAL = 'dec'
    HEXADECIMAL = 'hex'
    OCTAL = 'oct'


class Machine:
    '''
    Arithmetic stack machine (RPN calculator).

    Takes lines, lexes them, and runs the lexemes. Stack and display mode
    outlive any one line.
    '''

    DEFAULT_PRECISION = 50
    DEFAULT_MODE = DisplayMode.DECIMAL

    # Base of the digits before the suffix of non-decimal literals.
    BASES = {
        'hex': 16,
        'oct': 8,
    }

    def __init__(self, precision=None, verbose=None):
        '''
        Create empty stack machine.

        :param precision: Significant digits kept by inexact decimal
                          arithmetic: division, square roots, negative
                          powers.
        :param verbose: Log stack traces on bad user commands.
        '''
        self.stack = deque()
        self.mode = type(self).DEFAULT_MODE
        self.precision = precision or type(self).DEFAULT_PRECISION
        self.context = Context(prec=self.precision,
                               traps=[DivisionByZero,
                                      InvalidOperation,
                                      Overflow])
        self.lexer = Lexer()
        self.verbose = verbose

    def evaluate(self, line):
        '''
        Run every lexeme of line, then format the whole stack, top first.

        Stops at the first lexeme that fails or signals. Whatever earlier
        lexemes did to the stack stays done.
        '''
        try:
            for token in self.lexer.tokens(line):
                signal = self.feed(token)
                if signal is not None:
                    return signal
        except RPNError as e:
            logger.debug('Abandoning rest of %r', line,
                         exc_info=bool(self.verbose))
            return Error(e.args[0])
        return Output(self.format())

    def feed(self, token):
        '''
        Stack or run one token on machine.

        Returns a signal (Quit, Message) if the token is one, else None.
        '''
        parsed = self.parse(token)
        logger.debug('%s %r', token.kind, parsed)
        if token.isnumeric:
            self._pshstack(parsed)
        elif parsed in OPERATIONS:
            self._apply(OPERATIONS[parsed])
        elif parsed in type(self).FUNCTIONS:
            return type(self).FUNCTIONS[parsed](self)
        else:
            raise UnknownToken(parsed)

    def parse(self, token):
        '''
        Parse token into objects for machine: Decimals for numbers, names for
        everything else.
        '''
        if token.kind in type(self).BASES:
            base = type(self).BASES[token.kind]
            return Decimal(int(token.lexeme[:-1], base))
        elif token.isnumeric:
            return Decimal(token.lexeme)
        return token.lexeme

    def arity(self, name):
        '''
        Return number of stack values consumed by name, if it is an
        operation or command that consumes any.
        '''
        if name in OPERATIONS:
            return OPERATIONS[name].arity
        return type(self).ARITIES.get(name)

    def _apply(self, operation):
        '''
        Apply operation to stack, deepest argument first.

        Arguments are popped before the call; if it fails, they're gone.
        '''
        # If you don't reverse, you'll do 4 - 3 when you say 3 4 -.
        args = reversed(self._popstack(operation.arity))
        with localcontext(self.context):
            results = operation.function(*args)
        self._pshstack(*results)

    def _peekstack(self, n=1):
        '''
        Return the top n elements of the stack, deepest first.
        '''
        if len(self.stack) < n:
            raise StackUnderflow()
        return list(self.stack)[len(self.stack) - n:]

    def _popstack(self, n=1):
        '''
        Pop specified number of args from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise StackUnderflow()
        return [self.stack.pop() for _ in range(n)]

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def render(self, value):
        '''
        Format one value per the display mode.
        '''
        if self.mode is DisplayMode.HEXADECIMAL:
            return '{:x}h'.format(int(value))
        elif self.mode is DisplayMode.OCTAL:
            return '{:o}o'.format(int(value))
        # Fixed point: never 1E+3
        return '{:f}'.format(value)

    def format(self):
        '''
        Format all elements on the stack, top of the stack first.
        '''
        return [self.render(value) for value in reversed(self.stack)]

    def clrstack(self):
        '''
        Clear everything from the stack.
        '''
        self.stack.clear()

    def popstack(self):
        '''
        Discard element at top of stack.
        '''
        self._popstack()

    def dupstack(self):
        '''
        Duplicate element at top of stack.
        '''
        top, = self._peekstack()
        self._pshstack(top)

    def revstack(self):
        '''
        Swap two elements at top of stack.
        '''
        self._pshstack(*self._popstack(n=2))

    def _toggle(self, mode):
        self.mode = DisplayMode.DECIMAL if self.mode is mode else mode

    def togglehex(self):
        '''
        Toggle between hexadecimal and decimal display.
        '''
        self._toggle(DisplayMode.HEXADECIMAL)

    def toggleoct(self):
        '''
        Toggle between octal and decimal display.
        '''
        self._toggle(DisplayMode.OCTAL)

    def quit(self):
        return Quit()

    def printhelp(self):
        return Message(HELP)

    def printversion(self):
        return Message(VERSION)

    # Language mapping to stack operations/commands.
    FUNCTIONS = {
        'c': clrstack,
        'n': popstack,
        'd': dupstack,
        'r': revstack,
        'x': togglehex,
        'o': toggleoct,
        'q': quit,
        'h': printhelp,
        'v': printversion,
    }

    # Commands that need that many elements on the stack.
    ARITIES = {
        'n': 1,
        'd': 1,
        'r': 2,
    }
