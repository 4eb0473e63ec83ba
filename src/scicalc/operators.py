'''
Operator metadata, the function set and the constants.

All arithmetic is done on numpy doubles with floating point warnings silenced,
so that undefined results come out as NaN or infinity instead of Python
exceptions: 1/0 is inf, sqrt(-1) is NaN, log(0) is -inf.
'''

from enum import Enum
import math

import numpy as np


LEFT = 'left'
RIGHT = 'right'

PREFIX = 'prefix'
INFIX = 'infix'
POSTFIX = 'postfix'


def _ieee(f):
    '''
    Run f on doubles, IEEE style: no warnings, no exceptions, plain float out.
    '''
    def wrapped(*args):
        with np.errstate(all='ignore'):
            return float(f(*map(np.float64, args)))
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = getattr(f, '__name__', 'wrapped')
    return wrapped


def factorial(x):
    '''
    Iterative factorial of x truncated toward zero.

    NaN for NaN, infinite and negative input; no gamma extension.
    '''
    if not math.isfinite(x) or x < 0:
        return math.nan
    result = np.float64(1)
    with np.errstate(all='ignore'):
        for i in range(2, int(x) + 1):
            result *= i
            if np.isinf(result):
                break
    return float(result)


class Operator(Enum):
    '''
    Operators the lexer may emit, with (symbol, precedence, associativity,
    fixity). Fixity gives the arity: infix is binary, the rest unary.
    '''
    ADD = ('+', 2, LEFT, INFIX)
    SUBTRACT = ('-', 2, LEFT, INFIX)
    MULTIPLY = ('*', 3, LEFT, INFIX)
    DIVIDE = ('/', 3, LEFT, INFIX)
    POWER = ('^', 4, RIGHT, INFIX)
    # Right associative so that --3 stacks both minuses instead of flushing
    # one before it has an operand.
    NEGATE = ('-', 5, RIGHT, PREFIX)
    FACTORIAL = ('!', 5, LEFT, POSTFIX)
    PERCENT = ('%', 5, LEFT, POSTFIX)

    def __init__(self, symbol, precedence, associativity, fixity):
        self.symbol = symbol
        self.precedence = precedence
        self.associativity = associativity
        self.fixity = fixity

    @property
    def arity(self):
        return 2 if self.fixity == INFIX else 1

    @property
    def postfix(self):
        return self.fixity == POSTFIX

    def __call__(self, *args):
        return _IMPLEMENTATIONS[self](*args)


# Binary operators by symbol; NEGATE is only ever produced by reclassifying a
# SUBTRACT.
SYMBOLS = {
    operator.symbol: operator
    for operator
    in Operator
    if operator is not Operator.NEGATE
}

_IMPLEMENTATIONS = {
    Operator.ADD: _ieee(np.add),
    Operator.SUBTRACT: _ieee(np.subtract),
    Operator.MULTIPLY: _ieee(np.multiply),
    Operator.DIVIDE: _ieee(np.true_divide),
    Operator.POWER: _ieee(np.power),
    Operator.NEGATE: _ieee(np.negative),
    Operator.FACTORIAL: factorial,
    Operator.PERCENT: _ieee(lambda x: x / 100),
}

# Unary functions, all in radians where it matters.
FUNCTIONS = {
    'sin': _ieee(np.sin),
    'cos': _ieee(np.cos),
    'tan': _ieee(np.tan),
    'asin': _ieee(np.arcsin),
    'acos': _ieee(np.arccos),
    'atan': _ieee(np.arctan),
    'log': _ieee(np.log10),
    'ln': _ieee(np.log),
    'sqrt': _ieee(np.sqrt),
    'exp': _ieee(np.exp),
    'abs': _ieee(np.abs),
}

CONSTANTS = {
    'pi': math.pi,
    'e': math.e,
}
