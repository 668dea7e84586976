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
"""Locale value type and conversion to Babel locales."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import babel
from babel.core import UnknownLocaleError

_SEPARATOR_RE = re.compile(r"[_-]")

DEFAULT_FORMAT_LOCALE = "en_US"


@dataclass(frozen=True)
class Locale:
    """A ``language[_COUNTRY[_VARIANT]]`` locale identifier.

    ``str()`` yields the canonical underscore form used in catalog file
    names, e.g. ``Locale("en", "US")`` → ``en_US``. A variant without a
    country keeps the empty country slot: ``en__POSIX``.
    """

    language: str
    country: str = ""
    variant: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "language", self.language.lower())
        object.__setattr__(self, "country", self.country.upper())

    @classmethod
    def parse(cls, value: str | Locale) -> Locale:
        """Parse ``en``, ``en_US``, ``en-US`` or ``en_US_POSIX``."""
        if isinstance(value, Locale):
            return value
        text = str(value).strip()
        if not text:
            raise ValueError("Locale identifier must not be empty")
        parts = _SEPARATOR_RE.split(text, maxsplit=2)
        language = parts[0]
        country = parts[1] if len(parts) > 1 else ""
        variant = parts[2] if len(parts) > 2 else ""
        return cls(language, country, variant)

    def __str__(self) -> str:
        if self.variant:
            return f"{self.language}_{self.country}_{self.variant}"
        if self.country:
            return f"{self.language}_{self.country}"
        return self.language

    def babel(self) -> babel.Locale:
        """Return the closest Babel locale, dropping unknown components."""
        try:
            return babel.Locale(self.language, self.country or None)
        except (UnknownLocaleError, ValueError):
            pass
        try:
            return babel.Locale(self.language)
        except (UnknownLocaleError, ValueError):
            return babel.Locale.parse(DEFAULT_FORMAT_LOCALE)


def to_babel_locale(value: Any) -> babel.Locale:
    """Convert a locale-like value to a Babel locale for sub-formats.

    ``None`` or an empty value maps to the process default locale, falling
    back to ``en_US`` when the environment does not name one.
    """
    if isinstance(value, babel.Locale):
        return value
    if value is None or not str(value):
        default = babel.default_locale()
        value = default or DEFAULT_FORMAT_LOCALE
    return Locale.parse(str(value)).babel()
