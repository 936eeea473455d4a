"""Reduce parsed Notion properties to display strings.

Two flavours exist because the fields serve different purposes: labels such
as ``TK id`` end up in filenames and footers (``extract_text``), while the
tile/modal fields hold authored HTML that is injected into the page
(``extract_html``). Neither function raises; a missing property is ``""``.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Iterable, Optional, Union

from ..schemas.notion import (
    FormulaProperty,
    PlainTextProperty,
    PropertyValue,
    RichTextProperty,
    RichTextSegment,
    TitleProperty,
)


def _join_segments(segments: Iterable[RichTextSegment]) -> str:
    return "".join(segment.plain_text or "" for segment in segments)


def format_number(value: Union[int, float]) -> str:
    """Render a formula number the way a JavaScript ``String(n)`` would.

    ``42.0`` prints as ``42``, ``0.00001`` stays in fixed notation and
    anything from ``1e21`` up switches to ``1e+21`` style exponents.
    """

    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"
    sign = "-" if number < 0 else ""
    # repr() gives the shortest round-tripping digits, same as JS.
    _, digits, exponent = Decimal(repr(abs(number))).as_tuple()
    text = "".join(str(d) for d in digits).rstrip("0")
    exponent += len(digits) - len(text)
    k = len(text)
    n = k + exponent
    if k <= n <= 21:
        body = text + "0" * (n - k)
    elif 0 < n <= 21:
        body = f"{text[:n]}.{text[n:]}"
    elif -6 < n <= 0:
        body = "0." + "0" * -n + text
    else:
        mantissa = text[0] + (f".{text[1:]}" if k > 1 else "")
        body = f"{mantissa}e{'+' if n - 1 >= 0 else '-'}{abs(n - 1)}"
    return sign + body


def extract_text(prop: Optional[PropertyValue]) -> str:
    if prop is None:
        return ""
    if isinstance(prop, TitleProperty) and prop.title:
        return _join_segments(prop.title)
    if isinstance(prop, RichTextProperty) and prop.rich_text:
        return _join_segments(prop.rich_text)
    if isinstance(prop, FormulaProperty):
        result = prop.formula
        if result.type == "string" and result.string is not None:
            return result.string
        if result.type == "number" and result.number is not None:
            return format_number(result.number)
    if isinstance(prop.plain_text, str):
        return prop.plain_text
    return ""


def extract_html(prop: Optional[PropertyValue]) -> str:
    if prop is None:
        return ""
    if isinstance(prop, TitleProperty):
        return _join_segments(prop.title)
    if isinstance(prop, RichTextProperty):
        return _join_segments(prop.rich_text)
    if isinstance(prop, FormulaProperty):
        return prop.formula.string or ""
    if isinstance(prop, PlainTextProperty):
        return prop.plain_text or ""
    return ""
