'''
RPN command line tests
'''

from io import StringIO

from rpcalc.cli import CLI
from rpcalc.lexer import Lexer

from pytest import fixture


@fixture
def stdin(monkeypatch):
    def feed(text):
        monkeypatch.setattr('sys.stdin', StringIO(text))
    return feed


def test_expressions(capsys):
    status = CLI().run(args=['-e', '3 4 +', '2 *'])
    out = capsys.readouterr().out
    assert status == 0
    assert out == '[7]\n[14]\n'


def test_words_before_input(capsys, stdin):
    stdin('d *\nq\n1\n')
    status = CLI().run(args=['3', '4', '+'])
    out = capsys.readouterr().out
    assert status == 0
    assert out == '[7]\n[49]\n'


def test_empty_words_still_a_line(capsys, stdin):
    stdin('1 2\n')
    status = CLI().run(args=[])
    out = capsys.readouterr().out
    assert status == 0
    assert out == '[]\n[2, 1]\n'


def test_quit_in_words(capsys, stdin):
    stdin('1\n')
    status = CLI().run(args=['q'])
    out = capsys.readouterr().out
    assert status == 0
    assert out == ''


def test_errors_to_stderr(capsys):
    status = CLI().run(args=['-e', 'foo', '1', '+'])
    captured = capsys.readouterr()
    assert status == 0
    assert captured.out == '[1]\n'
    assert captured.err == 'unknown function or operation\nstack empty\n'


def test_messages(capsys):
    CLI().run(args=['-e', 'v'])
    assert capsys.readouterr().out == 'rpcalc v1.0\n'


def test_display_modes(capsys):
    CLI().run(args=['-e', '255 x', '8 o', 'o'])
    assert capsys.readouterr().out == '[ffh]\n[10o, 377o]\n[8, 255]\n'


def test_precision(capsys):
    CLI().run(args=['-P', '3', '-e', '2 3 /'])
    assert capsys.readouterr().out == '[0.667]\n'


def test_raw_grammar(capsys):
    CLI().run(args=['-G'])
    assert capsys.readouterr().out == Lexer.LEXEME + '\n'


def test_dump(capsys):
    CLI().run(args=['-D', '-e', '1 + c'])
    assert capsys.readouterr().out.splitlines() == [
        '<group>\t<repr(lexeme)>\t<arity>',
        "int\t'1'\tNone",
        "operator\t'+'\t2",
        "word\t'c'\tNone",
    ]
