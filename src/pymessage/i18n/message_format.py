# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Index-placeholder formatting with MessageFormat semantics.

Supported argument forms::

    {0}                      plain; numbers and dates use locale defaults
    {0,number}               integer | percent | currency | <decimal pattern>
    {0,date} / {0,time}      short | medium | long | full | <date pattern>
    {0,choice,0#none|1#one|1<{0,number,integer} many}

A single quote starts a literal section, ``''`` is a literal quote, and
``'{'`` a literal brace. Arguments without a matching value are emitted as
``{n}``; ``None`` renders as ``null``.
"""

from __future__ import annotations

import datetime as dt
import math
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from numbers import Number
from typing import Any

import babel
from babel import dates, numbers

_DATE_STYLES = ("short", "medium", "long", "full")


@dataclass(frozen=True)
class _Argument:
    index: int
    type: str | None = None
    style: str = ""


def format_message(pattern: str, args: Sequence[Any], locale: babel.Locale) -> str:
    """Substitute *args* into *pattern*. Raises ``ValueError`` on bad syntax."""
    out: list[str] = []
    for token in _parse(pattern):
        if isinstance(token, str):
            out.append(token)
        elif token.index >= len(args):
            out.append(f"{{{token.index}}}")
        elif args[token.index] is None:
            out.append("null")
        else:
            out.append(_format_argument(token, args[token.index], args, locale))
    return "".join(out)


# ---------------------------------------------------------------------------
# Pattern parsing
# ---------------------------------------------------------------------------


def _parse(pattern: str) -> list[str | _Argument]:
    tokens: list[str | _Argument] = []
    literal: list[str] = []
    in_quote = False
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "'":
            if pattern.startswith("''", i):
                literal.append("'")
                i += 2
                continue
            in_quote = not in_quote
        elif in_quote:
            literal.append(ch)
        elif ch == "{":
            end = _closing_brace(pattern, i + 1)
            if literal:
                tokens.append("".join(literal))
                literal = []
            tokens.append(_parse_argument(pattern[i + 1 : end]))
            i = end
        else:
            literal.append(ch)
        i += 1
    if literal:
        tokens.append("".join(literal))
    return tokens


def _closing_brace(pattern: str, start: int) -> int:
    depth = 1
    in_quote = False
    for j in range(start, len(pattern)):
        ch = pattern[j]
        if ch == "'":
            in_quote = not in_quote
        elif in_quote:
            continue
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return j
    raise ValueError(f"Unmatched braces in the pattern: {pattern!r}")


def _parse_argument(text: str) -> _Argument:
    parts = text.split(",", 2)
    try:
        index = int(parts[0].strip())
    except ValueError:
        raise ValueError(f"Can't parse argument number: {parts[0]!r}") from None
    if index < 0:
        raise ValueError(f"Negative argument number: {index}")
    if len(parts) == 1:
        return _Argument(index)
    arg_type = parts[1].strip().lower()
    if arg_type not in ("number", "date", "time", "choice"):
        raise ValueError(f"Unknown format type: {parts[1]!r}")
    style = parts[2].strip() if len(parts) > 2 else ""
    return _Argument(index, arg_type, style)


# ---------------------------------------------------------------------------
# Argument formatting
# ---------------------------------------------------------------------------


def _format_argument(arg: _Argument, value: Any, args: Sequence[Any], locale: babel.Locale) -> str:
    if arg.type is None:
        return _format_plain(value, locale)
    if arg.type == "number":
        return _format_number(_as_number(value), arg.style, locale)
    if arg.type == "date":
        return _format_date(_as_temporal(value), arg.style, locale)
    if arg.type == "time":
        return _format_time(_as_temporal(value), arg.style, locale)
    text = _choose(arg.style, _as_number(value))
    if "{" in text:
        return format_message(text, args, locale)
    return text


def _format_plain(value: Any, locale: babel.Locale) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Number):
        return numbers.format_decimal(value, locale=locale)
    if isinstance(value, dt.datetime):
        return dates.format_datetime(value, "short", locale=locale)
    if isinstance(value, dt.date):
        return dates.format_date(value, "short", locale=locale)
    if isinstance(value, dt.time):
        return dates.format_time(value, "short", locale=locale)
    return str(value)


def _format_number(value: int | float | Decimal, style: str, locale: babel.Locale) -> str:
    keyword = style.lower()
    if not keyword:
        return numbers.format_decimal(value, locale=locale)
    if keyword == "integer":
        return numbers.format_decimal(value, format="#,##0", locale=locale)
    if keyword == "percent":
        return numbers.format_percent(value, locale=locale)
    if keyword == "currency":
        currencies = numbers.get_territory_currencies(locale.territory) if locale.territory else []
        if currencies:
            return numbers.format_currency(value, currencies[0], locale=locale)
        return numbers.format_decimal(value, format="#,##0.00", locale=locale)
    return numbers.format_decimal(value, format=style, locale=locale)


def _format_date(value: dt.date | dt.time, style: str, locale: babel.Locale) -> str:
    keyword = style.lower() or "medium"
    if keyword in _DATE_STYLES:
        if isinstance(value, dt.time):
            raise TypeError("Cannot format a time of day as a date")
        return dates.format_date(value, keyword, locale=locale)
    return _format_pattern(value, style, locale)


def _format_time(value: dt.date | dt.time, style: str, locale: babel.Locale) -> str:
    keyword = style.lower() or "medium"
    if keyword in _DATE_STYLES:
        if not isinstance(value, (dt.datetime, dt.time)):
            raise TypeError("Cannot format a calendar date as a time")
        return dates.format_time(value, keyword, locale=locale)
    return _format_pattern(value, style, locale)


def _format_pattern(value: dt.date | dt.time, pattern: str, locale: babel.Locale) -> str:
    if isinstance(value, dt.datetime):
        return dates.format_datetime(value, pattern, locale=locale)
    if isinstance(value, dt.date):
        return dates.format_date(value, pattern, locale=locale)
    return dates.format_time(value, pattern, locale=locale)


def _as_number(value: Any) -> int | float | Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise TypeError(f"Cannot format given object as a number: {value!r}")
    return value


def _as_temporal(value: Any) -> dt.date | dt.time:
    if isinstance(value, (dt.date, dt.time)):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # epoch milliseconds
        return dt.datetime.fromtimestamp(value / 1000, tz=dt.timezone.utc)
    raise TypeError(f"Cannot format given object as a date: {value!r}")


# ---------------------------------------------------------------------------
# Choice sub-format
# ---------------------------------------------------------------------------


def _choose(style: str, value: int | float | Decimal) -> str:
    limits, texts = _parse_choice(style)
    x = float(value)
    selected = texts[0]
    for limit, text in zip(limits, texts):
        if x >= limit:
            selected = text
        else:
            break
    return selected


def _parse_choice(style: str) -> tuple[list[float], list[str]]:
    limits: list[float] = []
    texts: list[str] = []
    limit_buf: list[str] = []
    text_buf: list[str] = []
    in_text = False
    in_quote = False
    i = 0
    while i < len(style):
        ch = style[i]
        buf = text_buf if in_text else limit_buf
        if ch == "'":
            if style.startswith("''", i):
                buf.append("'")
                i += 2
                continue
            in_quote = not in_quote
        elif in_quote:
            buf.append(ch)
        elif not in_text and ch in "#<≤":
            limits.append(_choice_limit("".join(limit_buf), ch))
            limit_buf = []
            in_text = True
        elif in_text and ch == "|":
            texts.append("".join(text_buf))
            text_buf = []
            in_text = False
        else:
            buf.append(ch)
        i += 1
    if in_text:
        texts.append("".join(text_buf))
    if not limits or len(limits) != len(texts):
        raise ValueError(f"Invalid choice format: {style!r}")
    return limits, texts


def _choice_limit(text: str, relation: str) -> float:
    text = text.strip()
    if text in ("∞", "+∞"):
        limit = math.inf
    elif text == "-∞":
        limit = -math.inf
    else:
        try:
            limit = float(text)
        except ValueError:
            raise ValueError(f"Invalid choice limit: {text!r}") from None
    if relation == "<":
        # strictly greater than the limit
        limit = math.nextafter(limit, math.inf)
    return limit
