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
"""Format-style dispatch for resolved messages."""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import StrEnum
from typing import Any

from pymessage.i18n.locale import to_babel_locale
from pymessage.i18n.message_format import format_message
from pymessage.kernel.exceptions import ConfigurationException

# %[index$][flags][width][.precision]conversion
_PRINTF_RE = re.compile(r"%(?:(\d+)\$)?([-#+ 0,(]*)(\d+)?(?:\.(\d+))?([a-zA-Z%])")

_INTEGER_CONVERSIONS = "dxXo"
_FLOAT_CONVERSIONS = "feEgG"


class MessageFormatStyle(StrEnum):
    """How arguments are substituted into a resolved message.

    ``STRING`` applies printf-style conversions (``%s``, ``%d``, ``%.2f``)
    in argument order. ``MESSAGE`` substitutes ``{0}``-style index
    placeholders with locale-sensitive number and date sub-formats.
    """

    STRING = "string"
    MESSAGE = "message"

    @classmethod
    def parse(cls, value: str | MessageFormatStyle) -> MessageFormatStyle:
        """Return the style named *value*, failing fast on anything else."""
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationException(
                f'Unsupported message.format={value}, only supported "string" or "message" format.',
                code="MESSAGE_FORMAT",
                context={"value": value},
            ) from None

    def format(self, pattern: str, args: Sequence[Any], locale: Any = None) -> str:
        if self is MessageFormatStyle.STRING:
            return format_printf(pattern, args)
        return format_message(pattern, args, to_babel_locale(locale))


def format_printf(pattern: str, args: Sequence[Any]) -> str:
    """Apply printf-style conversions to *pattern*.

    Besides Python's ``%`` conversions this accepts explicit argument
    indexes (``%2$s``), ``%n`` for a newline, ``%b`` for booleans and the
    ``,`` grouping flag. A missing argument raises ``IndexError``; a value
    that does not fit its conversion raises ``TypeError``.
    """
    position = 0

    def _replace(match: re.Match[str]) -> str:
        nonlocal position
        index, flags, width, precision, conversion = match.groups()
        if conversion == "%":
            return "%"
        if conversion == "n":
            return "\n"
        if index is not None:
            value_index = int(index) - 1
        else:
            value_index = position
            position += 1
        if not 0 <= value_index < len(args):
            raise IndexError(f"Format specifier '{match.group(0)}' has no matching argument")
        return _convert(args[value_index], flags, width or "", precision, conversion)

    return _PRINTF_RE.sub(_replace, pattern)


def _convert(value: Any, flags: str, width: str, precision: str | None, conversion: str) -> str:
    dot = f".{precision}" if precision is not None else ""
    plain_flags = flags.replace(",", "").replace("(", "")
    lower = conversion.lower()

    if lower in "sb":
        text = _to_text(value) if lower == "s" else _to_bool_text(value)
        text = f"%{plain_flags}{width}{dot}s" % text
        return text.upper() if conversion.isupper() else text
    if lower == "c":
        return f"%{plain_flags}{width}c" % value
    if conversion in _INTEGER_CONVERSIONS + _FLOAT_CONVERSIONS:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"%{conversion} requires a number, got {type(value).__name__}")
        if "," in flags and conversion in "dfeg":
            return format(value, _grouping_spec(flags, width, dot, conversion))
        return f"%{plain_flags}{width}{dot}{conversion}" % value
    raise ValueError(f"Unsupported format conversion '%{conversion}'")


def _grouping_spec(flags: str, width: str, dot: str, conversion: str) -> str:
    align = "<" if "-" in flags else ""
    sign = "+" if "+" in flags else (" " if " " in flags else "")
    zero = "0" if "0" in flags and not align else ""
    return f"{align}{sign}{zero}{width},{dot}{conversion}"


def _to_text(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _to_bool_text(value: Any) -> str:
    if value is None or value is False:
        return "false"
    return "true"
