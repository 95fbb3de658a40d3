from pytest import Item, fixture

from rpcalc.machine import Machine
from rpcalc.lexer import Lexer


@fixture
def machine():
    return Machine()


@fixture
def lexer():
    return Lexer()


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Use with pytest -rP -o enable_assertion_pass_hook=true.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
