'''
Stack machine tests
'''

import math

from scicalc.lexer import Token, NUMBER, IDENTIFIER, OPERATOR
from scicalc.machine import Machine
from scicalc.operators import Operator
from scicalc.util import (EvaluationError, StructuralUnderflow, UnknownToken,
                          ExcessOperands)

from pytest import approx, mark, raises


@mark.parametrize('expression, expected', [
    ('1+2*3', 7),
    ('(1+2)*3', 9),
    ('7/2', 3.5),
    ('1-2-3', -4),
    ('2^3^2', 512),
    ('-3+5', 2),
    ('3-5', -2),
    ('3*-5', -15),
    ('--3', 3),
    ('2^-1', 0.5),
    ('-2^2', 4),
    ('5%', 0.05),
    ('50%*2', 1),
    ('3!', 6),
    ('0!', 1),
    ('10!', 3628800),
    ('3.7!', 6),
    ('2^3!', 64),
    ('sin(0)', 0),
    ('sqrt(3+1)', 2),
    ('abs(-2)', 2),
    ('abs(2-5)*2', 6),
    ('sin 0', 0),
])
def test_exact(run, expression, expected):
    assert run(expression) == expected


@mark.parametrize('expression, expected', [
    ('pi', 3.14159265358979),
    ('e', 2.71828182845905),
    ('\N{GREEK SMALL LETTER PI}', 3.14159265358979),
    ('2+3%', 2.03),
    ('log(1000)', 3),
    ('ln(e)', 1),
    ('exp(1)', math.e),
    ('cos(pi)', -1),
    ('tan(pi/4)', 1),
    ('asin(1)', math.pi / 2),
    ('acos(1)', 0),
    ('atan(1)*4', math.pi),
    ('2^0.5', math.sqrt(2)),
    ('6\N{DIVISION SIGN}4\N{MULTIPLICATION SIGN}2', 3),
])
def test_approximate(run, expression, expected):
    assert run(expression) == approx(expected)


@mark.parametrize('expression', [
    '-1!',
    '-0.5!',
    '0/0',
    'sqrt(-1)',
    'asin(2)',
    '(-8)^(1/3)',
    'ln(-1)',
])
def test_nan(run, expression):
    assert math.isnan(run(expression))


@mark.parametrize('expression, expected', [
    ('1/0', math.inf),
    ('-1/0', -math.inf),
    ('log(0)', -math.inf),
    ('exp(1000)', math.inf),
    ('10^400', math.inf),
    ('0^-1', math.inf),
    ('171!', math.inf),
])
def test_infinite(run, expression, expected):
    assert run(expression) == expected


def test_large_factorial_finite(run):
    assert run('170!') == approx(7.257415615307994e306)


def test_empty(run):
    assert run('') == 0
    assert run('   ') == 0
    assert Machine().run([]) == 0


@mark.parametrize('expression', ['3+', '*5', '-', '!', 'sin()', '2*(3+)'])
def test_underflow(run, expression):
    with raises(StructuralUnderflow):
        run(expression)


@mark.parametrize('expression, text', [
    ('(3+4', '('),
    ('3+4)', ')'),
    ('2&3', '&'),
    ('x+1', 'x'),
    ('1.2.3', '1.2.3'),
    ('sinh(1)', 'sinh'),
    ('3,', ','),
    (',3', ','),
    ('sin(1,)', ','),
    ('sqrt(,4)', ','),
    ('3,4', ','),
    ('sin(1,2)', ','),
])
def test_unknown(run, expression, text):
    with raises(UnknownToken) as excinfo:
        run(expression)
    assert excinfo.value.token.text == text


@mark.parametrize('expression', ['2(3)', '2 3', '(1)(2)', 'pi e'])
def test_excess(run, expression):
    with raises(ExcessOperands, match='2 values left on stack'):
        run(expression)


def test_errors_are_evaluation_errors():
    for error in StructuralUnderflow, UnknownToken, ExcessOperands:
        assert issubclass(error, EvaluationError)


def test_pop_order():
    # 9 2 ^ is 9**2, not 2**9
    rpn = [Token(NUMBER, '9', 9.0),
           Token(NUMBER, '2', 2.0),
           Token(OPERATOR, '^', Operator.POWER)]
    assert Machine().run(rpn) == 81


def test_underflow_message():
    rpn = [Token(NUMBER, '1', 1.0), Token(OPERATOR, '+', Operator.ADD)]
    with raises(StructuralUnderflow, match=r'\+ needs 2 operand\(s\), got 1'):
        Machine().run(rpn)


def test_fails_fast():
    # The unknown token comes after the underflow; underflow wins.
    rpn = [Token(OPERATOR, '+', Operator.ADD), Token(IDENTIFIER, 'x')]
    with raises(StructuralUnderflow):
        Machine().run(rpn)


def test_returns_float(run):
    assert type(run('1+1')) is float
    assert type(run('sqrt(4)')) is float
    assert type(run('3!')) is float
