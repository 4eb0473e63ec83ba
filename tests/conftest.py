from pytest import fixture

from scicalc.lexer import Lexer
from scicalc.parser import Parser
from scicalc.machine import Machine
from scicalc.operators import Operator


@fixture
def lexer():
    return Lexer()


@fixture
def rpn(lexer):
    '''
    Expression to its RPN, as one space separated string, unary minus as u-.
    Easier to eyeball than token lists.
    '''
    parser = Parser()

    def to_rpn(expression):
        return ' '.join('u-' if token.value is Operator.NEGATE else token.text
                        for token in parser.parse(lexer.lex(expression)))
    return to_rpn


@fixture
def run(lexer):
    parser = Parser()
    machine = Machine()

    def evaluate(expression):
        return machine.run(parser.parse(lexer.lex(expression)))
    return evaluate
