import math


ERROR_DISPLAY = 'Error'

# Integral results this large show in exponent form.
INTEGRAL_LIMIT = 1e16


class EvaluationError(Exception):
    '''
    Expression could not be turned into a number.

    The first argument is always a human readable message.
    '''
    pass


class StructuralUnderflow(EvaluationError):
    '''
    Operator or function needed more operands than the stack held.
    '''
    def __init__(self, token, needed, available):
        super().__init__('{} needs {} operand(s), got {}'.format(token.text,
                                                                 needed,
                                                                 available))
        self.token = token


class UnknownToken(EvaluationError):
    '''
    Token that is neither number, constant, operator nor function.
    '''
    def __init__(self, token):
        super().__init__('Unknown token {}'.format(repr(token.text)))
        self.token = token


class ExcessOperands(EvaluationError):
    '''
    More than one value left once the whole expression was consumed.
    '''
    def __init__(self, stack):
        super().__init__('{} values left on stack'.format(len(stack)))
        self.stack = stack


class TooManyTokens(EvaluationError):
    def __init__(self, limit):
        super().__init__('More than {} tokens'.format(limit))
        self.limit = limit


def display(value, precision=None):
    '''
    Format a result the way a calculator display shows it.

    Integral results lose their fractional suffix: 4.0 shows as 4. Past
    INTEGRAL_LIMIT they keep float notation, 1e+300 rather than 301 digits.
    '''
    if precision is not None and math.isfinite(value):
        value = round(value, precision)
    if abs(value) < INTEGRAL_LIMIT and value == int(value):
        return str(int(value))
    return repr(value)
