import math

import pytest

from exprevolve.errors import (
    EvaluationError,
    ExprError,
    ExprSyntaxError,
    TokenizeError,
)
from exprevolve.expr_eval import (
    LPAREN,
    RPAREN,
    Op,
    Token,
    TokenKind,
    evaluate,
    safe_evaluate,
    to_postfix,
    tokenize,
)


def num(v):
    return Token.number(v)


def op(o):
    return Token.operator(o)


def test_tokenize_mixed_expression():
    toks = tokenize("1 + 2 - 5 + (7 +8)")
    assert toks == [
        num(1), op(Op.ADD), num(2), op(Op.SUB), num(5), op(Op.ADD),
        LPAREN, num(7), op(Op.ADD), num(8), RPAREN,
    ]


def test_tokenize_exponent_and_multidigit():
    assert tokenize("12**3") == [num(12), op(Op.EXP), num(3)]
    assert tokenize("007") == [num(7)]


def test_tokenize_variable():
    assert tokenize("foo_bar + 1") == [Token.variable("foo_bar"), op(Op.ADD), num(1)]


def test_tokenize_trailing_whitespace_and_empty():
    assert tokenize("  4  ") == [num(4)]
    assert tokenize("") == []
    assert tokenize("   ") == []


@pytest.mark.parametrize("text, bad", [("1+-2", "+-"), ("2***3", "***"), ("*/", "*/")])
def test_tokenize_invalid_operator_run(text, bad):
    with pytest.raises(TokenizeError) as excinfo:
        tokenize(text)
    assert excinfo.value.text == bad
    assert bad in str(excinfo.value)


def test_tokenize_stuck():
    with pytest.raises(TokenizeError) as excinfo:
        tokenize("1 $ 2")
    assert excinfo.value.text == "$ 2"


def test_tokenizer_never_emits_unary_neg():
    kinds = {t.value for t in tokenize("1-2*3/4**5+6") if t.kind is TokenKind.OPERATOR}
    assert Op.UNARY_NEG not in kinds


def test_operator_precedence_table():
    assert Op.ADD.precedence == Op.SUB.precedence == 0
    assert Op.MUL.precedence == Op.DIV.precedence == 1
    assert Op.EXP.precedence == 2
    assert Op.UNARY_NEG.precedence == 3


def test_unary_neg_is_not_binary():
    with pytest.raises(EvaluationError):
        Op.UNARY_NEG.apply(1.0, 2.0)
    assert Op.from_symbol("neg") is None
    assert Op.from_symbol("**") is Op.EXP


def test_postfix_order():
    post = to_postfix("2+3*4")
    assert [str(t) for t in post] == ["2", "3", "4", "*", "+"]


def test_postfix_parentheses():
    post = to_postfix("(2+3)*4")
    assert [str(t) for t in post] == ["2", "3", "+", "4", "*"]


@pytest.mark.parametrize("text", ["(1+2", "1+2)", "((1)", ")("])
def test_postfix_unbalanced(text):
    with pytest.raises(ExprSyntaxError):
        to_postfix(text)


@pytest.mark.parametrize("text, expected", [
    ("2+3*4", 14),
    ("(2+3)*4", 20),
    ("2**3", 8),
    ("7", 7),
    ("10/4", 2.5),
    ("3*2**2", 12),
    ("((6))", 6),
])
def test_evaluate(text, expected):
    assert evaluate(text) == expected


def test_equal_precedence_groups_right():
    # an operator only pops strictly higher precedence
    assert evaluate("8-2-1") == 7
    assert evaluate("8/4/2") == 4
    assert evaluate("2**3**2") == 512


def test_division_by_zero_is_ieee():
    assert evaluate("1/0") == math.inf
    assert math.isnan(evaluate("0/0"))
    assert evaluate("(0-1)/0") == -math.inf


def test_exponent_truncates_and_overflows():
    assert evaluate("2**(5/2)") == 4
    assert evaluate("2**(1-3)") == 1
    assert evaluate("9**999") == math.inf
    assert evaluate("2**(1/0)") == math.inf
    # nan exponent counts as 0
    assert evaluate("2**(0/0)") == 1
    # odd saturated exponent keeps the sign on overflow
    assert evaluate("(0-2)**99999999999999999999") == -math.inf


@pytest.mark.parametrize("text", ["+", "(1+2", "", "1+", "*3", "1 2", "x", "1+y"])
def test_evaluate_errors_are_typed(text):
    with pytest.raises(ExprError):
        evaluate(text)
    assert safe_evaluate(text) is None


def test_evaluate_error_kinds():
    with pytest.raises(EvaluationError, match="Premature stack end"):
        evaluate("+")
    with pytest.raises(EvaluationError, match="No result"):
        evaluate("")
    with pytest.raises(EvaluationError, match="Dangling"):
        evaluate("1 2")
    with pytest.raises(EvaluationError, match="variable"):
        evaluate("x")


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        evaluate("1+-1")
