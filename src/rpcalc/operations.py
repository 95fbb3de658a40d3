'''
Mathematical operations of the calculator, by name.

Every operation is a pure function over Decimals that returns a tuple of
Decimals, pushed in order. Operations whose result always has finitely many
digits (sums, products, integer powers, remainders, rounding) are exact.
The rest (division, square roots, negative powers) round in whatever decimal
context is current when called; the machine sets its own.
'''

from collections import namedtuple
from decimal import Context, Decimal, DivisionByZero, InvalidOperation, \
                    Overflow, MAX_EMAX, MAX_PREC, MIN_EMIN, localcontext, \
                    ROUND_CEILING, ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP
from enum import Enum
from functools import wraps
import math
import operator

from .util import ArithmeticFailure, wrap_user_errors


class Kind(Enum):
    ARITHMETIC = 'arithmetic'
    DECIMAL = 'decimal'
    FLOAT = 'float'
    CONSTANT = 'constant'


Operation = namedtuple('Operation', 'kind arity function')

# Unrounded. Only for operations whose results are exact; anything else
# would try to allocate MAX_PREC digits.
EXACT = Context(prec=MAX_PREC,
                Emax=MAX_EMAX,
                Emin=MIN_EMIN,
                traps=[DivisionByZero,
                       InvalidOperation,
                       Overflow])

# Refuse integer powers with more digits than this.
MAX_POWER_DIGITS = 10 ** 6


def fromfloat(f):
    '''
    Convert float to Decimal via its shortest repr, not its exact binary
    value. 0.1 is 0.1, not 0.1000000000000000055511151231257827...
    '''
    if not math.isfinite(f):
        raise ArithmeticFailure('numerical result out of range')
    return Decimal(repr(float(f)))


def _single(f):
    @wraps(f)
    def wrapped(*args):
        return f(*args),
    return wrapped


def _exact(f):
    @wraps(f)
    def wrapped(*args):
        with localcontext(EXACT):
            return f(*args)
    return wrapped


def _floating(f):
    '''
    Run math function on floats, converting back to Decimal.
    '''
    @wraps(f)
    def wrapped(*args):
        return fromfloat(f(*map(float, args))),
    return wrapped


def modulo(left, right):
    '''
    Remainder of floored division; takes the sign of the divisor.
    '''
    remainder = left % right
    if remainder and (remainder < 0) != (right < 0):
        remainder += right
    return remainder


def floordivmod(left, right):
    quotient, remainder = left // right, left % right
    if remainder and (remainder < 0) != (right < 0):
        quotient -= 1
        remainder += right
    return quotient, remainder


@_exact
def _power(base, exponent):
    coefficient = base.normalize().as_tuple().digits
    if coefficient not in {(0,), (1,)} and \
       len(coefficient) * exponent > MAX_POWER_DIGITS:
        raise OverflowError('numerical result out of range')
    return base ** exponent


def power(base, exponent):
    '''
    Raise base to the int(exponent).

    Exact for positive exponents. Negative ones are a division, and round.
    '''
    exponent = int(exponent)
    if not exponent:
        return Decimal(1)
    elif exponent < 0:
        if not base:
            # decimal says Infinity, without signalling
            raise ZeroDivisionError()
        return Decimal(1) / _power(base, -exponent)
    return _power(base, exponent)


def fix(n):
    return n.to_integral_value(rounding=ROUND_DOWN)


def frac(n):
    return n - fix(n)


def floor(n):
    return n.to_integral_value(rounding=ROUND_FLOOR)


def ceil(n):
    return n.to_integral_value(rounding=ROUND_CEILING)


def round_(n):
    return n.to_integral_value(rounding=ROUND_HALF_UP)


def exponent(n):
    '''
    Decimal exponent, as in 0.12345e3 for 123.45. Zero for zero.
    '''
    if not n:
        return Decimal(0)
    return Decimal(n.adjusted() + 1)


def sqrt(n):
    return n.sqrt()


def frexp(n):
    mantissa, power2 = math.frexp(float(n))
    return fromfloat(mantissa), Decimal(power2)


def ldexp(mantissa, exponent):
    return math.ldexp(mantissa, int(exponent))


OPERATIONS = dict()

for name, f in [('+', _exact(operator.__add__)),
                ('-', _exact(operator.__sub__)),
                ('*', _exact(operator.__mul__)),
                ('/', operator.__truediv__),
                ('%', _exact(modulo)),
                ('**', power)]:
    OPERATIONS[name] = Operation(Kind.ARITHMETIC, 2, _single(f))

for name, f in [('fix', fix),
                ('frac', frac),
                ('floor', floor),
                ('ceil', ceil),
                ('round', round_),
                ('truncate', fix),
                ('abs', abs),
                ('exponent', exponent),
                ('sqrt', sqrt)]:
    if f is not sqrt:
        f = _exact(f)
    OPERATIONS[name] = Operation(Kind.DECIMAL, 1, _single(f))

OPERATIONS['divmod'] = Operation(Kind.DECIMAL, 2, _exact(floordivmod))

for f in [math.acos, math.asin, math.atan,
          math.acosh, math.asinh, math.atanh,
          math.cos, math.sin, math.tan,
          math.cosh, math.sinh, math.tanh,
          math.erf, math.erfc,
          math.exp, math.log, math.log10]:
    OPERATIONS[f.__name__] = Operation(Kind.FLOAT, 1, _floating(f))

OPERATIONS['frexp'] = Operation(Kind.FLOAT, 1, frexp)

for f in math.atan2, math.hypot, ldexp:
    OPERATIONS[f.__name__] = Operation(Kind.FLOAT, 2, _floating(f))

OPERATIONS['e'] = Operation(Kind.CONSTANT, 0, lambda: (fromfloat(math.e),))
OPERATIONS['pi'] = Operation(Kind.CONSTANT, 0, lambda: (fromfloat(math.pi),))

# Anything can fail on bad input: 1 0 /, -1 sqrt, 0 acosh, ...
_wrap = wrap_user_errors('{error}')
OPERATIONS = {name: op._replace(function=_wrap(op.function))
              for name, op
              in OPERATIONS.items()}


__all__ = 'Kind', 'Operation', 'OPERATIONS'
