"""
Expression-tolerant numeric parsing for price input fields.

Users may type simple additive arithmetic into a price field
(``50000 + 1425``). Only digits, ``+``, ``-``, ``.`` and whitespace are
understood; everything else is stripped before evaluation. Evaluation is a
small hand-written scanner over signed decimal terms, so no input ever
reaches a general-purpose evaluator.

Stripping happens before parsing, so ``"100*2"`` becomes ``"1002"`` and
evaluates to 1002.
"""

import math
import re
from typing import Optional

_DISALLOWED_CHARS = re.compile(r"[^0-9+\-.\s]")
_ALLOWED_EXPRESSION = re.compile(r"[0-9+\-.\s]+")
_DECIMAL = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def sanitize_expression(text: str) -> str:
    """Remove every character other than digits, +, -, . and whitespace."""
    return _DISALLOWED_CHARS.sub("", text)


def _skip_whitespace(expr: str, pos: int) -> int:
    while pos < len(expr) and expr[pos].isspace():
        pos += 1
    return pos


def _sum_signed_terms(expr: str) -> Optional[float]:
    """Evaluate ``term (('+'|'-') term)*`` where a term may carry unary signs."""
    total = 0.0
    pos = _skip_whitespace(expr, 0)

    while True:
        sign = 1.0
        while pos < len(expr) and expr[pos] in "+-":
            if expr[pos] == "-":
                sign = -sign
            pos = _skip_whitespace(expr, pos + 1)

        match = _DECIMAL.match(expr, pos)
        if match is None:
            return None

        total += sign * float(match.group())
        pos = _skip_whitespace(expr, match.end())

        if pos == len(expr):
            return total
        if expr[pos] not in "+-":
            # Adjacent numbers ("1 2") or a second decimal point ("1.2.3")
            return None


def evaluate_expression(text: str) -> Optional[float]:
    """
    Evaluate an additive expression.

    Args:
        text: Raw field text

    Returns:
        The finite result, or None if the sanitized text is empty, contains
        anything but the allowed characters, or is not a well-formed sum
    """
    cleaned = sanitize_expression(text)

    if not cleaned.strip() or not _ALLOWED_EXPRESSION.fullmatch(cleaned):
        return None

    result = _sum_signed_terms(cleaned)
    if result is None or not math.isfinite(result):
        return None

    return result


def extract_number(text: str) -> Optional[float]:
    """Return the first decimal number embedded in the text, if any."""
    match = _DECIMAL.search(text)
    if match is None:
        return None

    value = float(match.group())
    return value if math.isfinite(value) else None


def normalize_numeric_input(raw: str, previous: float) -> float:
    """
    Turn field text into a number.

    Tries the additive evaluator first, then the first embedded number,
    and finally keeps the previous value.

    Args:
        raw: Field text as typed
        previous: Value the field held before editing

    Returns:
        The new numeric value for the field
    """
    text = raw.strip()

    result = evaluate_expression(text)
    if result is not None:
        return result

    extracted = extract_number(text)
    if extracted is not None:
        return extracted

    return previous
