from collections import namedtuple
from functools import reduce
import logging
import operator

import regex

from .operators import Operator, SYMBOLS
from .util import TooManyTokens


logger = logging.getLogger(__name__)

NUMBER = 'number'
IDENTIFIER = 'identifier'
OPERATOR = 'operator'
LPAREN = 'lparen'
RPAREN = 'rparen'
COMMA = 'comma'


class Token(namedtuple('Token', 'kind text value')):
    '''
    Lexeme: its kind, source text, and, for numbers and operators, the parsed
    float or Operator.
    '''
    __slots__ = ()

    def __new__(cls, kind, text, value=None):
        return super().__new__(cls, kind, text, value)

    def __str__(self):
        return self.text


class Lexer:
    '''
    Lexer for calculator input.

    Never fails on odd input, only on more than max_tokens tokens. Characters
    it doesn't know become single character identifiers, left for the machine
    to reject.
    '''
    # Alternate glyphs calculator keypads like to use.
    GLYPHS = {
        '\N{DIVISION SIGN}': '/',
        '\N{MULTIPLICATION SIGN}': '*',
        '\N{MINUS SIGN}': '-',
        '\N{GREEK SMALL LETTER PI}': 'pi',
    }
    # Maximal munch on digits and dots; whether it is a valid number is
    # decided after the fact.
    DIGITS = r'[\d.]+'
    LETTERS = r'\p{L}+'
    SPACE = r'\s+'

    # All possible lexemes. Order matters for "other": anything at all.
    LEXEME = r'(?<number>' + DIGITS + r')|' \
             r'(?<identifier>' + LETTERS + r')|' \
             r'(?<lparen>\()|' \
             r'(?<rparen>\))|' \
             r'(?<comma>,)|' \
             r'(?<space>' + SPACE + r')|' \
             r'(?<other>.)'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1},
                   0)

    # Tokens after which a minus can only be a sign.
    SIGN_CONTEXT = frozenset({LPAREN, COMMA})

    DEFAULT_MAX_TOKENS = None

    def __init__(self, max_tokens=DEFAULT_MAX_TOKENS):
        '''
        Create lexer.

        :param max_tokens: Refuse input with more tokens than this. None is
                           unbounded.
        '''
        self.max_tokens = max_tokens
        self._pattern = regex.compile(type(self).LEXEME, flags=type(self).FLAGS)

    def normalize(self, line):
        '''
        Replace alternate glyphs with their canonical ASCII.
        '''
        for glyph, canonical in type(self).GLYPHS.items():
            line = line.replace(glyph, canonical)
        return line

    def scan(self, line):
        '''
        Yield tokens, before unary minus resolution.
        '''
        for match in self._pattern.finditer(self.normalize(line)):
            kind = match.lastgroup
            text = match.group(0)
            if kind == 'space':
                continue
            elif kind == NUMBER:
                yield self._number(text)
            elif kind == 'other':
                if text in SYMBOLS:
                    yield Token(OPERATOR, text, SYMBOLS[text])
                else:
                    yield Token(IDENTIFIER, text)
            else:
                yield Token(kind, text)

    def _number(self, text):
        '''
        Number token, or an identifier if the digits and dots don't make one.
        '''
        try:
            return Token(NUMBER, text, float(text))
        except ValueError:
            return Token(IDENTIFIER, text)

    def lex(self, line):
        '''
        Take a line and return all tokens, with unary minuses resolved.
        '''
        tokens = []
        for token in self.scan(line):
            if token.value is Operator.SUBTRACT and self._signable(tokens):
                token = Token(OPERATOR, token.text, Operator.NEGATE)
            tokens.append(token)
            if self.max_tokens is not None and len(tokens) > self.max_tokens:
                raise TooManyTokens(self.max_tokens)
        logger.debug('lexed %r into %s', line, tokens)
        return tokens

    def _signable(self, previous):
        '''
        Return True if a minus after these tokens is unary.

        Looks behind only: at the start, after an opening parenthesis, a comma,
        or an operator that still expects an operand to its right.
        '''
        if not previous:
            return True
        last = previous[-1]
        if last.kind in type(self).SIGN_CONTEXT:
            return True
        return last.kind == OPERATOR and not last.value.postfix

    def unlex(self, tokens):
        '''
        Serialize tokens back to a line that lexes to the same tokens.
        '''
        return ' '.join(map(str, tokens))
