import logging

from .lexer import NUMBER, IDENTIFIER, OPERATOR
from .operators import CONSTANTS, FUNCTIONS
from .util import ExcessOperands, StructuralUnderflow, UnknownToken


logger = logging.getLogger(__name__)


class Machine:
    '''
    Arithmetic stack machine.

    Runs an RPN token sequence to a single float. A fresh stack per run, so
    one machine may be shared freely.
    '''

    # What an empty expression evaluates to.
    EMPTY = 0.0

    def run(self, rpn):
        '''
        Run RPN tokens and return the one value they leave.

        Fails fast on the first missing operand or unknown token.
        '''
        stack = []
        for token in rpn:
            if token.kind == NUMBER:
                stack.append(token.value)
            elif token.kind == IDENTIFIER and token.text in CONSTANTS:
                stack.append(CONSTANTS[token.text])
            elif token.kind == IDENTIFIER and token.text in FUNCTIONS:
                self._apply(stack, token, FUNCTIONS[token.text], 1)
            elif token.kind == OPERATOR:
                self._apply(stack, token, token.value, token.value.arity)
            else:
                logger.debug('unknown token %r in %s', token.text, rpn)
                raise UnknownToken(token)
        if not stack:
            return type(self).EMPTY
        if len(stack) > 1:
            logger.debug('%d values left from %s', len(stack), rpn)
            raise ExcessOperands(stack)
        return stack[0]

    def _popstack(self, stack, token, n):
        '''
        Pop n operands, leftmost operand first.
        '''
        if len(stack) < n:
            logger.debug('%s underflowed stack %s', token.text, stack)
            raise StructuralUnderflow(token, n, len(stack))
        # If you don't reverse, you'll do 2**9 when you say 9 2 ^ instead of
        # 9**2.
        return reversed([stack.pop() for _ in range(n)])

    def _apply(self, stack, token, f, arity):
        '''
        Pop the operands f takes and push its result.
        '''
        stack.append(f(*self._popstack(stack, token, arity)))
