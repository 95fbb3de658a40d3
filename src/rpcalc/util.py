from dataclasses import dataclass
from decimal import DecimalException, DivisionByZero, InvalidOperation, \
                    Overflow
from functools import wraps


class RPNError(Exception):
    '''
    User error. Abandons the rest of the line, never the session.
    '''
    pass


class StackUnderflow(RPNError):
    def __init__(self, *args):
        super().__init__('stack empty', *args)


class UnknownToken(RPNError):
    def __init__(self, *args):
        super().__init__('unknown function or operation', *args)


class ArithmeticFailure(RPNError):
    pass


# What evaluating a line can come back with. Exactly one per line.
@dataclass(frozen=True)
class Output:
    values: list


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Message:
    text: str


@dataclass(frozen=True)
class Error:
    text: str


def describe(e):
    '''
    Human readable text for an arithmetic exception.

    decimal's own messages are lists of signal classes; not for humans.
    '''
    if isinstance(e, (DivisionByZero, ZeroDivisionError)):
        return 'divided by 0'
    elif isinstance(e, Overflow):
        return 'numerical result out of range'
    elif isinstance(e, InvalidOperation):
        return 'invalid operation'
    elif isinstance(e, DecimalException):
        return 'arithmetic error'
    elif e.args and isinstance(e.args[0], str):
        return e.args[0]
    return str(e) or type(e).__name__


def wrap_user_errors(fmt):
    '''
    Decorator that converts arithmetic exceptions to ArithmeticFailures.

    Passes through RPNErrors. fmt is formatted with the wrapped function's
    name and the exception's description.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except (ArithmeticError, ValueError, TypeError) as e:
                raise ArithmeticFailure(fmt.format(name=f.__name__,
                                                   error=describe(e))) from e
        return wrapper
    return decorator
