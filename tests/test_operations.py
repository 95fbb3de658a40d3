'''
Mathematical operation tests, through the machine
'''

from rpcalc.machine import Machine
from rpcalc.operations import OPERATIONS, Kind
from rpcalc.util import Output, Error

from pytest import mark


def run(line):
    return Machine().evaluate(line)


@mark.parametrize('line, expected', [
    ('7 2 %', ['1']),
    ('-7 2 %', ['1']),
    ('7 -2 %', ['-1']),
    ('-7 2 divmod', ['1', '-4']),
    ('7 -2 divmod', ['-1', '-4']),
    ('2 -1 **', ['0.5']),
    ('2 3.9 **', ['8']),
    ('0 0 **', ['1']),
    ('1.5 fix', ['1']),
    ('-1.5 fix', ['-1']),
    ('-1.5 truncate', ['-1']),
    ('-1.5 frac', ['-0.5']),
    ('-1.5 floor', ['-2']),
    ('1.2 ceil', ['2']),
    ('2.5 round', ['3']),
    ('-2.5 round', ['-3']),
    ('-3 abs', ['3']),
    ('123.45 exponent', ['3']),
    ('0.001 exponent', ['-2']),
    ('0 exponent', ['0']),
    ('16 sqrt', ['4']),
])
def test_decimal(line, expected):
    assert run(line) == Output(expected)


@mark.parametrize('line, expected', [
    ('0 cos', ['1.0']),
    ('0 sin', ['0.0']),
    ('1 exp', ['2.718281828459045']),
    ('100 log10', ['2.0']),
    ('3 4 hypot', ['5.0']),
    ('1 3 ldexp', ['8.0']),
    ('1 0 atan2', ['1.5707963267948966']),
    ('0 erf', ['0.0']),
])
def test_float(line, expected):
    assert run(line) == Output(expected)


def test_frexp():
    # Mantissa first, so exponent ends on top.
    assert run('8 frexp') == Output(['4', '0.5'])


def test_constants():
    assert run('e pi') == Output(['3.141592653589793', '2.718281828459045'])


@mark.parametrize('line', ['1 0 /', '0 0 /', '1 0 %', '1 0 divmod',
                           '0 -1 **', '-1 sqrt', '0 log', '2 acos',
                           '1000 exp', '1 atanh'])
def test_failures(line):
    assert isinstance(run(line), Error)


def test_division_by_zero_message():
    assert run('1 0 /') == Error('divided by 0')


def test_table():
    assert {name
            for name, op in OPERATIONS.items()
            if op.kind is Kind.FLOAT} == \
        {'acos', 'asin', 'atan', 'acosh', 'asinh', 'atanh', 'cos', 'sin',
         'tan', 'cosh', 'sinh', 'tanh', 'erf', 'erfc', 'exp', 'log', 'log10',
         'frexp', 'atan2', 'hypot', 'ldexp'}
    assert OPERATIONS['divmod'].arity == 2
    assert OPERATIONS['e'].arity == 0
    assert OPERATIONS['**'].kind is Kind.ARITHMETIC


BIG = 10 ** 60


@mark.parametrize('line, expected', [
    ('2 200 **', [str(2 ** 200)]),
    ('{} 1 +'.format(BIG), [str(BIG + 1)]),
    ('{} 1 -'.format(BIG), [str(BIG - 1)]),
    ('{0} {0} *'.format(BIG + 1), [str((BIG + 1) ** 2)]),
    ('{} 7 %'.format(BIG), [str(BIG % 7)]),
    ('{} 7 divmod'.format(BIG), [str(BIG % 7), str(BIG // 7)]),
    ('{}.5 frac'.format(BIG + 1), ['0.5']),
    ('{}.5 fix'.format(BIG + 1), [str(BIG + 1)]),
    ('{}.5 round'.format(BIG + 1), [str(BIG + 2)]),
    ('-{}.5 abs'.format(BIG + 1), ['{}.5'.format(BIG + 1)]),
])
def test_exact_beyond_precision(line, expected):
    assert run(line) == Output(expected)


def test_negative_power_rounds():
    assert Machine(precision=5).evaluate('3 -1 **') == Output(['0.33333'])


def test_huge_power_refused():
    assert run('2 10000000 **') == Error('numerical result out of range')
    # Ones and zeros stay one digit long.
    assert run('1 10000000 **') == Output(['1'])
    assert run('0 10000000 **') == Output(['0'])
