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
"""Catalog parsers — ``.properties``, YAML and JSON bundles to flat dicts."""

from __future__ import annotations

import json
import re
from collections.abc import Iterator
from typing import Any, BinaryIO

import yaml  # type: ignore[import-untyped]

from pymessage.i18n.ports.outbound import PropertiesParser
from pymessage.kernel.exceptions import CatalogParseException

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class PropertiesFileParser:
    """Parses the Java ``.properties`` format.

    Handles ``#``/``!`` comments, ``=``, ``:`` or whitespace separators,
    backslash line continuations and ``\\t \\n \\r \\f \\uXXXX`` escapes.
    Later duplicates of a key win.
    """

    def parse(self, stream: BinaryIO, encoding: str) -> dict[str, str]:
        text = _decode(stream, encoding)
        entries: dict[str, str] = {}
        for line in _logical_lines(text):
            key, value = _split_entry(line)
            entries[_unescape(key)] = _unescape(value)
        return entries


class YamlBundleParser:
    """Parses YAML bundles; nested keys are flattened with dots."""

    def parse(self, stream: BinaryIO, encoding: str) -> dict[str, str]:
        text = _decode(stream, encoding)
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise CatalogParseException(f"Invalid YAML bundle: {exc}") from exc
        return _flatten(_require_mapping(data))


class JsonBundleParser:
    """Parses JSON bundles; nested keys are flattened with dots."""

    def parse(self, stream: BinaryIO, encoding: str) -> dict[str, str]:
        text = _decode(stream, encoding)
        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as exc:
            raise CatalogParseException(f"Invalid JSON bundle: {exc}") from exc
        return _flatten(_require_mapping(data))


def parser_for_suffix(suffix: str | None) -> PropertiesParser:
    """Pick a parser from the catalog file extension."""
    ext = (suffix or "").lower()
    if ext in (".yaml", ".yml"):
        return YamlBundleParser()
    if ext == ".json":
        return JsonBundleParser()
    return PropertiesFileParser()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _decode(stream: BinaryIO, encoding: str) -> str:
    raw = stream.read()
    try:
        text = raw.decode(encoding)
    except LookupError as exc:
        raise CatalogParseException(f"Unknown encoding: {encoding}") from exc
    except UnicodeDecodeError as exc:
        raise CatalogParseException(f"Cannot decode catalog as {encoding}: {exc}") from exc
    return text.removeprefix("\ufeff")


def _logical_lines(text: str) -> Iterator[str]:
    """Yield logical lines, joining continuations and skipping comments."""
    pending: str | None = None
    for raw_line in _LINE_BREAK_RE.split(text):
        line = raw_line.lstrip(" \t\f")
        if pending is None:
            if not line or line[0] in "#!":
                continue
            pending = ""
        if _ends_with_continuation(line):
            pending += line[:-1]
            continue
        yield pending + line
        pending = None
    if pending:
        yield pending


def _ends_with_continuation(line: str) -> bool:
    backslashes = len(line) - len(line.rstrip("\\"))
    return backslashes % 2 == 1


def _split_entry(line: str) -> tuple[str, str]:
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in "=: \t\f":
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(" \t\f")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t\f")
    return key, rest


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\" or i + 1 >= len(text):
            out.append(ch)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u":
            digits = text[i + 2 : i + 6]
            if len(digits) != 4 or not all(c in _HEX_DIGITS for c in digits):
                raise CatalogParseException(f"Malformed \\uxxxx encoding: \\u{digits}")
            out.append(chr(int(digits, 16)))
            i += 6
            continue
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _require_mapping(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise CatalogParseException(f"Bundle root must be a mapping, got {type(data).__name__}")
    return data


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten a nested dict into dot-separated keys with string values."""
    items: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            items.update(_flatten(value, full_key))
        elif value is not None:
            items[full_key] = str(value)
    return items
