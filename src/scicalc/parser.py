'''
Infix to postfix conversion, by Dijkstra's shunting-yard algorithm.

The parser never rejects anything. Unbalanced parentheses and commas end up
in the output, where the machine refuses them.
'''

import logging

from .lexer import NUMBER, IDENTIFIER, OPERATOR, LPAREN, RPAREN, COMMA
from .operators import FUNCTIONS, LEFT


logger = logging.getLogger(__name__)


def isfunction(token):
    return token.kind == IDENTIFIER and token.text in FUNCTIONS


class Parser:
    '''
    Shunting-yard parser.

    Like the lexer, holds no state between calls.
    '''

    def parse(self, tokens):
        '''
        Take infix tokens and return them in RPN order.
        '''
        output = []
        stack = []
        for token in tokens:
            if token.kind == NUMBER:
                output.append(token)
            elif isfunction(token):
                stack.append(token)
            elif token.kind == IDENTIFIER:
                # Constants, and anything the machine will choke on
                output.append(token)
            elif token.kind == COMMA:
                # Every function is unary: a comma never separates anything
                self._flush(stack, output)
                output.append(token)
            elif token.kind == OPERATOR:
                while stack and self._yields(stack[-1], token.value):
                    output.append(stack.pop())
                stack.append(token)
            elif token.kind == LPAREN:
                stack.append(token)
            elif token.kind == RPAREN:
                self._flush(stack, output)
                if stack:
                    stack.pop()
                    if stack and isfunction(stack[-1]):
                        output.append(stack.pop())
                else:
                    # Unmatched
                    output.append(token)
        output.extend(reversed(stack))
        logger.debug('parsed %s into %s', tokens, output)
        return output

    def _flush(self, stack, output):
        '''
        Move operators from stack to output until an opening parenthesis.
        '''
        while stack and stack[-1].kind != LPAREN:
            output.append(stack.pop())

    def _yields(self, top, incoming):
        '''
        Return True if top of stack must be output before incoming is pushed.
        '''
        if top.kind != OPERATOR:
            return False
        top = top.value
        if incoming.postfix:
            return top.postfix or top.precedence >= incoming.precedence
        if top.postfix:
            return True
        if incoming.associativity == LEFT:
            return incoming.precedence <= top.precedence
        return incoming.precedence < top.precedence
