'''
Scientific calculator engine.

Turns what a person types on a calculator, 2×(3+4)−sin(π/2) or 5! or 50%,
into a float. Three stages, each feeding the next:

- Lexer: string to tokens, alternate glyphs normalized, unary minus resolved.
- Parser: tokens to RPN, by the shunting-yard algorithm.
- Machine: RPN to a number, on a stack.

Nothing is kept between calls. Malformed input is only detected by the
machine, which raises an EvaluationError; undefined arithmetic (0/0,
sqrt(-1)) is not an error, it is NaN or infinity.
'''

from .cli import CLI
from .lexer import Lexer, Token
from .parser import Parser
from .machine import Machine
from .util import (EvaluationError, StructuralUnderflow, UnknownToken,
                   ExcessOperands, TooManyTokens, ERROR_DISPLAY, display)


def evaluate(expression, max_tokens=Lexer.DEFAULT_MAX_TOKENS):
    '''
    Evaluate a calculator expression.

    :param max_tokens: Refuse expressions longer than this many tokens.
    :raises EvaluationError: If the expression is malformed.
    '''
    tokens = Lexer(max_tokens=max_tokens).lex(expression)
    return Machine().run(Parser().parse(tokens))


__all__ = ('evaluate', 'display', 'ERROR_DISPLAY', 'Lexer', 'Token', 'Parser',
           'Machine', 'CLI', 'EvaluationError', 'StructuralUnderflow',
           'UnknownToken', 'ExcessOperands', 'TooManyTokens')
