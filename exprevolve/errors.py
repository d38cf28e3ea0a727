#!/usr/bin/env python3
"""
Exceptions raised while turning text into a number.

All of them subclass ValueError, so callers that only care about
"could this string be evaluated?" can catch ValueError like any other
parsing failure.
"""


class ExprError(ValueError):
    """Base class. `text` is the input (or remainder) that caused the failure."""

    def __init__(self, message: str, text: str = ""):
        super().__init__(message)
        self.text = text


class TokenizeError(ExprError):
    """Unknown operator run, or the scanner got stuck on some character."""


class ExprSyntaxError(ExprError):
    """Unbalanced parentheses."""


class EvaluationError(ExprError):
    """Operand stack underflow, no result, dangling operands, or a
    non-binary operator applied as a binary one."""


class InvalidTargetError(ExprError):
    """The target number given to the search is missing or not a finite number."""
