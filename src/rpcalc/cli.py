from argparse import ArgumentParser, OPTIONAL
import logging
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from .util import Output, Quit, Message, Error
from .machine import Machine
from .lexer import Lexer


logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    # Per process only; stack doesn't
                                    # persist either.
                                    history=InMemoryHistory(),
                                    enable_suspend=True,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to RPN system.
    '''

    DEFAULT_PROMPT = '> '

    def dumper(self):
        '''
        Dump all lexemes matches, parse, and arity.
        '''
        machine = Machine()
        lexer = Lexer()
        print('<group>\t<repr(lexeme)>\t<arity>')
        for line in self._lines():
            for token in lexer.tokens(line):
                arity = (None if token.isnumeric
                         else machine.arity(token.lexeme))
                print(token.kind,
                      repr(token.lexeme),
                      arity,
                      sep='\t')

    def show(self, result):
        '''
        Print result of evaluating a line. Return True if time to quit.
        '''
        if isinstance(result, Quit):
            return True
        elif isinstance(result, Output):
            print('[' + ', '.join(result.values) + ']')
        elif isinstance(result, Message):
            print(result.text)
        elif isinstance(result, Error):
            print(result.text, file=sys.stderr)
        return False

    def executor(self):
        '''
        Run machine (RPN calculator).
        '''
        machine = Machine(precision=self.args.precision,
                          verbose=self.args.verbose)
        for line in self._lines():
            if self.show(machine.evaluate(line)):
                break
        return 0

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _lines(self):
        '''
        Yield lines to run: command line words as one line first, then
        expressions or input.
        '''
        if self.args.expressions is None:
            # Run even if empty, like any other line.
            yield ' '.join(self.args.words)
            yield from self._prompting_input()
        else:
            if self.args.words:
                yield ' '.join(self.args.words)
            yield from self.args.expressions

    def _prompting_input(self):
        '''
        Return the input lines: an InteractiveInput prompting for each, or
        stdin's lines without their newlines.

        Prompts if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return (line.rstrip('\n') for line in sys.stdin)

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('words', nargs='*',
                                          help='evaluated as one line, '
                                               'before any other input')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-P', '--precision',
                                          type=int,
                                          default=None,
                                          help='significant digits of '
                                               'division, square roots and '
                                               'negative powers')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs='+',
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Returns exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                                  else logging.WARNING,
                            format='%(name)s: %(levelname)s: %(message)s')
        logger.debug('Running %s', self.args.action.__name__)
        try:
            return self.args.action() or 0
        except KeyboardInterrupt:
            return 1
