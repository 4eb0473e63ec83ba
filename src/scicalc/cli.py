from os import isatty
import io
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession

from .util import EvaluationError, ERROR_DISPLAY, display
from .machine import Machine
from .parser import Parser
from .lexer import Lexer
from .operators import Operator


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=None,  # TODO: ~/.scicalc_history
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.

    One expression per line in, one display line out.
    '''

    DEFAULT_PROMPT = '= '
    DEFAULT_PRECISION = None

    def dumper(self):
        '''
        Dump every token, then the RPN it parses to.
        '''
        lexer = self._lexer()
        parser = Parser()
        print('<kind>\t<repr(text)>\t<value>')
        for line in self.args.expressions:
            try:
                tokens = lexer.lex(line)
            except EvaluationError as e:
                print(e.args[0], file=sys.stderr)
                continue
            for token in tokens:
                print(token.kind, repr(token.text), token.value, sep='\t')
            print('rpn', ' '.join(map(self._rpn_text, parser.parse(tokens))),
                  sep='\t')

    def _rpn_text(self, token):
        '''
        Token text, with unary minus told apart from subtraction.
        '''
        return 'u-' if token.value is Operator.NEGATE else token.text

    def executor(self):
        '''
        Evaluate each line and print its display text.
        '''
        lexer = self._lexer()
        parser = Parser()
        machine = Machine()
        for line in self.args.expressions:
            try:
                result = machine.run(parser.parse(lexer.lex(line)))
            except EvaluationError as e:
                print(ERROR_DISPLAY, flush=True)
                if self.args.verbose:
                    print(e.args[0], file=sys.stderr)
            else:
                print(display(result, self.args.precision), flush=True)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def _lexer(self):
        return Lexer(max_tokens=self.args.max_tokens)

    def _ttys(self):
        '''
        Return True if both stdin and stdout are terminals.

        Streams without a file descriptor (pytest, StringIO) are not.
        '''
        try:
            return isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno())
        except io.UnsupportedOperation:
            return False

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or self._ttys():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Scientific '
                                                          'calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='explain errors, debug log')
        self.argument_parser.add_argument('-k', '--precision',
                                          type=int,
                                          default=self.DEFAULT_PRECISION,
                                          help='round results to this many '
                                               'decimal places')
        self.argument_parser.add_argument('--max-tokens',
                                          type=int,
                                          default=Lexer.DEFAULT_MAX_TOKENS,
                                          help='refuse longer expressions')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
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
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format='%(name)s: %(message)s')
        # Only these read expressions
        reads = self.args.action in (self.executor, self.dumper)
        if reads and self.args.expressions is sys.stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
