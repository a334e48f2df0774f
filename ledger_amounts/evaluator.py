"""
Arithmetic expression → amount evaluator for quick-entry amount fields.

A user may type "12.5*3 + (4-1)/2" into an amount box. We turn that into an
integer amount in minor units:

    evaluate_expression_to_amount("2+3*4")        → 1400   (14.00)
    evaluate_expression_to_amount("(2+3)*4")      → 2000
    evaluate_expression_to_amount("-5+2")         → -300
    evaluate_expression_to_amount("(1+2")         → None   (leave input as-is)

Supported: non-negative decimal literals, unary minus, + - * /, parentheses
nested to any depth. Spaces are ignored.

Algorithm:
    1. Tokenize and convert infix → postfix with the shunting-yard algorithm.
       {+,-} bind weaker than {*,/}; equal priorities are left-associative.
    2. Evaluate the postfix program on a value stack.
    3. Scale by 10^decimal_count, round half up, check the amount range.

Errors:
    `evaluate_expression` raises typed AmountError subclasses — syntax,
    evaluation and overflow are distinct codes. `evaluate_expression_to_amount`
    logs any of them as a warning and returns None.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import (
    DEFAULT_DECIMAL_NUMBER_COUNT,
    MAX_SUPPORTED_DECIMAL_NUMBER_COUNT,
    TRANSACTION_MAX_AMOUNT,
    TRANSACTION_MIN_AMOUNT,
)
from .exceptions import (
    AmountError,
    ExpressionEvaluationError,
    ExpressionSyntaxError,
    NumericOverflowError,
)

logger = logging.getLogger(__name__)


# ─── Tokens ──────────────────────────────────────────────────────────


class TokenKind(str, Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    LEFT_PARENTHESIS = "("


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str

    def __str__(self) -> str:
        return self.text


_OPERATOR_PRIORITY: dict[str, int] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
}

_LEFT_PARENTHESIS = Token(TokenKind.LEFT_PARENTHESIS, "(")


def _is_number_char(ch: str) -> bool:
    return "0" <= ch <= "9" or ch == "."


# ─── Phase 1: Infix → Postfix ───────────────────────────────────────


def to_postfix_tokens(expr: str) -> list[Token]:
    """Tokenize *expr* and reorder it into postfix (Reverse Polish) form.

    Returns:
        e.g. "2+3*4" → [2, 3, 4, *, +]

    Raises:
        ExpressionSyntaxError: On an unknown character or unbalanced parentheses.

    A "-" starts a negative literal when it follows an operator, an opening
    parenthesis, or the start of the expression; anywhere else it subtracts.
    """
    expr = expr.replace(" ", "")

    final_tokens: list[Token] = []
    operator_stack: list[Token] = []
    number_builder = ""
    is_last_token_operator = True

    for i, ch in enumerate(expr):
        if _is_number_char(ch):
            number_builder += ch
            continue

        if (
            ch == "-"
            and not number_builder
            and is_last_token_operator
            and i + 1 < len(expr)
            and "0" <= expr[i + 1] <= "9"
        ):
            number_builder += ch
            continue

        if number_builder:
            final_tokens.append(Token(TokenKind.NUMBER, number_builder))
            number_builder = ""
            is_last_token_operator = False

        if ch in _OPERATOR_PRIORITY:
            if ch == "-" and is_last_token_operator:
                # Unary minus before "(" or another "-": kept as a literal
                # prefix, which evaluation later rejects as an invalid number
                number_builder += ch
                continue

            while operator_stack:
                top = operator_stack[-1]
                if top.kind is TokenKind.LEFT_PARENTHESIS:
                    break
                if _OPERATOR_PRIORITY[top.text] < _OPERATOR_PRIORITY[ch]:
                    break
                final_tokens.append(operator_stack.pop())

            operator_stack.append(Token(TokenKind.OPERATOR, ch))
            is_last_token_operator = True
        elif ch == "(":
            operator_stack.append(_LEFT_PARENTHESIS)
            is_last_token_operator = True
        elif ch == ")":
            has_left_parenthesis = False

            while operator_stack:
                top = operator_stack.pop()
                if top.kind is TokenKind.LEFT_PARENTHESIS:
                    has_left_parenthesis = True
                    break
                final_tokens.append(top)

            if not has_left_parenthesis:
                raise ExpressionSyntaxError(
                    f"Cannot parse expression {expr!r}: missing left parenthesis",
                    details={"expression": expr, "position": i},
                )

            is_last_token_operator = False
        else:
            raise ExpressionSyntaxError(
                f"Cannot parse expression {expr!r}: unknown token {ch!r}",
                details={"expression": expr, "position": i, "token": ch},
            )

    if number_builder:
        final_tokens.append(Token(TokenKind.NUMBER, number_builder))

    while operator_stack:
        top = operator_stack.pop()
        if top.kind is TokenKind.LEFT_PARENTHESIS:
            raise ExpressionSyntaxError(
                f"Cannot parse expression {expr!r}: missing right parenthesis",
                details={"expression": expr},
            )
        final_tokens.append(top)

    return final_tokens


# ─── Phase 2: Postfix Evaluation ────────────────────────────────────


def evaluate_postfix_tokens(tokens: list[Token]) -> float:
    """Evaluate a postfix program and return its floating-point value.

    Raises:
        ExpressionEvaluationError: On too few operands, division by zero,
            an unparsable literal, or leftover operands (missing operator).
    """
    program = " ".join(str(token) for token in tokens)
    stack: list[float] = []

    for token in tokens:
        if token.kind is TokenKind.NUMBER:
            stack.append(_parse_number(token.text, program))
            continue

        if len(stack) < 2:
            raise ExpressionEvaluationError(
                f"Cannot evaluate expression {program!r}: not enough operands",
                details={"program": program, "operator": token.text},
            )

        b = stack.pop()
        a = stack.pop()

        if token.text == "+":
            stack.append(a + b)
        elif token.text == "-":
            stack.append(a - b)
        elif token.text == "*":
            stack.append(a * b)
        else:
            if b == 0:
                raise ExpressionEvaluationError(
                    f"Cannot evaluate expression {program!r}: division by zero",
                    details={"program": program},
                )
            stack.append(a / b)

    if len(stack) != 1:
        raise ExpressionEvaluationError(
            f"Cannot evaluate expression {program!r}: missing operator",
            details={"program": program, "operands_left": len(stack)},
        )

    return stack[0]


def _parse_number(text: str, program: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise ExpressionEvaluationError(
            f"Cannot evaluate expression {program!r}: invalid number {text!r}",
            details={"program": program, "number": text},
        ) from None


# ─── Phase 3: Scale & Range Check ───────────────────────────────────


def _to_amount(value: float, decimal_count: int) -> int:
    scaled = value * 10**decimal_count

    if not math.isfinite(scaled):
        raise NumericOverflowError(
            "Numeric overflow", details={"value": value, "decimal_count": decimal_count}
        )

    # Half up, like Math.round: 2.5 → 3, -2.5 → -2. Compare the fractional
    # part instead of adding 0.5, which itself rounds large or near-half values
    amount = math.floor(scaled)
    if scaled - amount >= 0.5:
        amount += 1
    whole = amount / 10**decimal_count

    if whole > TRANSACTION_MAX_AMOUNT or whole < TRANSACTION_MIN_AMOUNT:
        raise NumericOverflowError(
            "Numeric overflow",
            details={"amount": amount, "decimal_count": decimal_count},
        )

    return amount


# ─── Public API ──────────────────────────────────────────────────────


def evaluate_expression(expr: str, decimal_count: Optional[int] = None) -> int:
    """Evaluate *expr* to an amount in minor units, raising on any failure.

    Args:
        expr: e.g. "2+3*4". Must be non-empty.
        decimal_count: Minor-unit digits of the target currency. None,
            negative or above 8 falls back to the default of 2, as
            NumberFormatOptions does.

    Raises:
        ExpressionSyntaxError, ExpressionEvaluationError, NumericOverflowError
    """
    if not expr:
        raise ExpressionSyntaxError("Empty expression cannot be evaluated")

    final_decimal_count = decimal_count

    if (
        final_decimal_count is None
        or final_decimal_count < 0
        or final_decimal_count > MAX_SUPPORTED_DECIMAL_NUMBER_COUNT
    ):
        final_decimal_count = DEFAULT_DECIMAL_NUMBER_COUNT

    tokens = to_postfix_tokens(expr)
    result = evaluate_postfix_tokens(tokens)
    return _to_amount(result, final_decimal_count)


def evaluate_expression_to_amount(expr: str, decimal_count: Optional[int] = None) -> int | None:
    """Evaluate a quick-entry amount expression; None means "could not evaluate".

    Callers should leave the user's input untouched on None.
    """
    if not expr:
        return None

    try:
        return evaluate_expression(expr, decimal_count)
    except AmountError as e:
        logger.warning("[%s] %s", e.code, e)
        return None
