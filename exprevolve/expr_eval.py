#!/usr/bin/env python3
"""
expr_eval.py

Tokenizer, infix -> postfix converter and stack evaluator for the small
arithmetic language the GA searches over.

Language:
  - non-negative integer literals (no decimal point)
  - binary operators + - * / ** (no unary minus in source text)
  - parentheses
  - bare names (letters / underscore) are tokenized as variables but can
    never be evaluated

There is no AST: text is tokenized, turned into postfix with an operator
stack, then folded with an operand stack.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from exprevolve.errors import EvaluationError, ExprError, ExprSyntaxError, TokenizeError

DIGITS = "0123456789"
OP_CHARS = "+-/*"

# Largest exponent EXP will use; bigger (or infinite) exponents saturate here.
MAX_EXPONENT = 2 ** 64 - 1


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------

def _ieee_div(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _int_power(a: float, b: float) -> float:
    """
    Raise `a` to `b` truncated to a non-negative integer.
    nan and negative exponents become 0, huge ones saturate at MAX_EXPONENT.
    Overflow gives +/-inf instead of raising.
    """
    if math.isnan(b) or b <= 0:
        n = 0
    elif b >= MAX_EXPONENT:
        n = MAX_EXPONENT
    else:
        n = int(b)
    try:
        return a ** n
    except OverflowError:
        if a < 0 and n % 2 == 1:
            return -math.inf
        return math.inf


class Op(Enum):
    ADD = "+"
    SUB = "-"
    DIV = "/"
    MUL = "*"
    EXP = "**"
    UNARY_NEG = "neg"

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["Op"]:
        """Binary operator for `symbol`, or None if it isn't one."""
        if symbol == cls.UNARY_NEG.value:
            return None
        try:
            return cls(symbol)
        except ValueError:
            return None

    def apply(self, a: float, b: float) -> float:
        if self is Op.ADD:
            return a + b
        if self is Op.SUB:
            return a - b
        if self is Op.DIV:
            return _ieee_div(a, b)
        if self is Op.MUL:
            return a * b
        if self is Op.EXP:
            return _int_power(a, b)
        raise EvaluationError(f"{self.name} is not a binary operation")


_PRECEDENCE = {
    Op.ADD: 0,
    Op.SUB: 0,
    Op.DIV: 1,
    Op.MUL: 1,
    Op.EXP: 2,
    Op.UNARY_NEG: 3,
}


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

class TokenKind(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    VARIABLE = "variable"
    LPAREN = "("
    RPAREN = ")"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any = None

    @classmethod
    def number(cls, value: float) -> "Token":
        return cls(TokenKind.NUMBER, float(value))

    @classmethod
    def operator(cls, op: Op) -> "Token":
        return cls(TokenKind.OPERATOR, op)

    @classmethod
    def variable(cls, name: str) -> "Token":
        return cls(TokenKind.VARIABLE, name)

    def __str__(self):
        if self.kind is TokenKind.NUMBER:
            return f"{self.value:g}"
        if self.kind is TokenKind.OPERATOR:
            return self.value.value
        if self.kind is TokenKind.VARIABLE:
            return self.value
        return self.kind.value


LPAREN = Token(TokenKind.LPAREN)
RPAREN = Token(TokenKind.RPAREN)


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def match_number(text: str, pos: int) -> Optional[Tuple[Token, int]]:
    pos = skip_whitespace(text, pos)
    start = pos
    value = 0.0
    while pos < len(text) and text[pos] in DIGITS:
        value = value * 10 + DIGITS.index(text[pos])
        pos += 1
    if pos == start:
        return None
    return Token.number(value), pos


def match_operator(text: str, pos: int) -> Optional[Tuple[Token, int]]:
    """
    Grab the longest run of operator characters and validate it as a whole,
    so "**" is exponentiation but "+-" or "***" is an error.
    """
    pos = skip_whitespace(text, pos)
    start = pos
    while pos < len(text) and text[pos] in OP_CHARS:
        pos += 1
    if pos == start:
        return None
    run = text[start:pos]
    op = Op.from_symbol(run)
    if op is None:
        raise TokenizeError(f"Invalid operator sequence {run!r}", run)
    return Token.operator(op), pos


def match_paren(text: str, pos: int) -> Optional[Tuple[Token, int]]:
    pos = skip_whitespace(text, pos)
    if pos < len(text):
        if text[pos] == "(":
            return LPAREN, pos + 1
        if text[pos] == ")":
            return RPAREN, pos + 1
    return None


def match_variable(text: str, pos: int) -> Optional[Tuple[Token, int]]:
    pos = skip_whitespace(text, pos)
    start = pos
    while pos < len(text) and (text[pos].isalpha() or text[pos] == "_"):
        pos += 1
    if pos == start:
        return None
    return Token.variable(text[start:pos]), pos


# Order matters: every matcher runs once per pass, each starting where the
# previous successful one stopped.
MATCHERS = (match_number, match_operator, match_paren, match_variable)


def tokenize(text: str) -> List[Token]:
    """
    Split `text` into tokens.

    Raises TokenizeError on an unknown operator run, or when a whole pass
    over the matchers consumes nothing (e.g. "1 $ 2").
    """
    tokens: List[Token] = []
    pos = 0
    while pos < len(text):
        pos = skip_whitespace(text, pos)
        if pos >= len(text):
            break
        start = pos
        for matcher in MATCHERS:
            found = matcher(text, pos)
            if found is not None:
                token, pos = found
                tokens.append(token)
        if pos == start:
            rest = text[start:]
            raise TokenizeError(f"Stuck tokenizing: {rest!r}", rest)
    return tokens


# ---------------------------------------------------------------------------
# Postfix conversion
# ---------------------------------------------------------------------------

def to_postfix(text: str) -> List[Token]:
    """
    Convert infix text to postfix tokens.

    The operator stack starts with a "(" sentinel and a ")" is appended to
    the input, so the final flush is just another close paren.

    An operator only pops operators of *strictly* higher precedence, which
    makes equal-precedence chains group to the right: "8-2-1" is 8-(2-1).
    """
    tokens = tokenize(text)
    tokens.append(RPAREN)
    output: List[Token] = []
    stack: List[Token] = [LPAREN]

    last = len(tokens) - 1
    for i, token in enumerate(tokens):
        if token.kind in (TokenKind.NUMBER, TokenKind.VARIABLE):
            output.append(token)
        elif token.kind is TokenKind.OPERATOR:
            while (
                stack
                and stack[-1].kind is TokenKind.OPERATOR
                and stack[-1].value.precedence > token.value.precedence
            ):
                output.append(stack.pop())
            stack.append(token)
        elif token.kind is TokenKind.LPAREN:
            stack.append(token)
        elif token.kind is TokenKind.RPAREN:
            while True:
                if not stack:
                    raise ExprSyntaxError("Syntax error: unbalanced ')'", text)
                top = stack.pop()
                if top.kind is TokenKind.LPAREN:
                    break
                output.append(top)
            if not stack and i < last:
                # closed the sentinel before the end of input
                raise ExprSyntaxError("Syntax error: unbalanced ')'", text)

    if stack:
        # an opening paren was never closed
        raise ExprSyntaxError("Syntax error: unbalanced '('", text)
    return output


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def evaluate(text: str) -> float:
    """
    Evaluate an arithmetic expression.

    Division by zero follows IEEE rules (inf / nan), it is not an error.
    Raises TokenizeError, ExprSyntaxError or EvaluationError (all ExprError).
    """
    stack: List[float] = []
    for token in to_postfix(text):
        if token.kind is TokenKind.NUMBER:
            stack.append(token.value)
        elif token.kind is TokenKind.OPERATOR:
            if len(stack) < 2:
                raise EvaluationError("Premature stack end", text)
            b = stack.pop()
            a = stack.pop()
            stack.append(token.value.apply(a, b))
        elif token.kind is TokenKind.VARIABLE:
            raise EvaluationError(f"Cannot evaluate variable {token.value!r}", text)

    if not stack:
        raise EvaluationError("No result", text)
    if len(stack) > 1:
        raise EvaluationError(f"Dangling operands: {len(stack)} values left", text)
    return stack[0]


def safe_evaluate(text: str) -> Optional[float]:
    """Like evaluate(), but None instead of raising."""
    try:
        return evaluate(text)
    except ExprError:
        return None
