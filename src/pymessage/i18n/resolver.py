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
"""MessageResolver — locale-fallback message lookup over catalog files.

Catalog files are named ``{basename}{locale_suffix}{suffix}``::

    messages_en_US.properties
    messages_en.properties
    messages.properties

A lookup for ``en_US`` walks that list from the most specific file to the
least specific one and stops at the first non-empty value. When nothing
matches, the key itself is returned so a missing translation shows up in the
rendered output instead of failing the render.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, cast

from pymessage.i18n.adapters.parsers import parser_for_suffix
from pymessage.i18n.catalog import Catalog, CatalogCache
from pymessage.i18n.formatting import MessageFormatStyle
from pymessage.i18n.ports.outbound import ErrorLogger, PropertiesParser, ResourceProvider, VariableResolver

LOCALE_VARIABLE = "locale"


class MessageResolver:
    """Resolves message keys against locale-specific catalogs.

    Thread-safe once configured: the setters are meant to be called once
    before the resolver is shared, after which any number of threads may call
    :meth:`resolve` / :meth:`message` concurrently.
    """

    def __init__(
        self,
        engine: ResourceProvider | None = None,
        *,
        basename: str | None = None,
        suffix: str | None = None,
        encoding: str | None = None,
        message_format: str | MessageFormatStyle = MessageFormatStyle.MESSAGE,
        reloadable: bool = False,
        resolver: VariableResolver | None = None,
        logger: ErrorLogger | None = None,
        parser: PropertiesParser | None = None,
    ) -> None:
        self._engine = engine
        self._basename = basename
        self._suffix = suffix
        self._encoding = encoding
        self._format = MessageFormatStyle.parse(message_format)
        self._reloadable = reloadable
        self._resolver = resolver
        self._logger = logger
        self._parser = parser
        self._cache = CatalogCache()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def engine(self) -> ResourceProvider | None:
        """Resource provider serving catalog files (``engine``)."""
        return self._engine

    @engine.setter
    def engine(self, engine: ResourceProvider | None) -> None:
        self._engine = engine

    @property
    def reloadable(self) -> bool:
        """Re-check catalogs against their source on every lookup (``reloadable``)."""
        return self._reloadable

    @reloadable.setter
    def reloadable(self, reloadable: bool) -> None:
        self._reloadable = reloadable

    @property
    def message_encoding(self) -> str | None:
        """Catalog file encoding (``message.encoding``); UTF-8 when unset."""
        return self._encoding

    @message_encoding.setter
    def message_encoding(self, encoding: str | None) -> None:
        self._encoding = encoding

    @property
    def message_suffix(self) -> str | None:
        """Catalog file extension (``message.suffix``), e.g. ``.properties``."""
        return self._suffix

    @message_suffix.setter
    def message_suffix(self, suffix: str | None) -> None:
        self._suffix = suffix

    @property
    def message_basename(self) -> str | None:
        """Catalog file name prefix (``message.basename``); lookups are disabled while unset."""
        return self._basename

    @message_basename.setter
    def message_basename(self, basename: str | None) -> None:
        self._basename = basename

    @property
    def message_format(self) -> MessageFormatStyle:
        """Argument substitution style (``message.format``)."""
        return self._format

    @message_format.setter
    def message_format(self, message_format: str | MessageFormatStyle) -> None:
        self._format = MessageFormatStyle.parse(message_format)

    @property
    def resolver(self) -> VariableResolver | None:
        """Ambient variables consulted for ``locale`` (``resolver``)."""
        return self._resolver

    @resolver.setter
    def resolver(self, resolver: VariableResolver | None) -> None:
        self._resolver = resolver

    @property
    def logger(self) -> ErrorLogger | None:
        """Error sink for catalog load failures (``logger``)."""
        return self._logger

    @logger.setter
    def logger(self, logger: ErrorLogger | None) -> None:
        self._logger = logger

    @property
    def parser(self) -> PropertiesParser:
        """Catalog parser; chosen from the file extension unless set explicitly."""
        return self._parser if self._parser is not None else parser_for_suffix(self._suffix)

    @parser.setter
    def parser(self, parser: PropertiesParser | None) -> None:
        self._parser = parser

    @property
    def cache(self) -> CatalogCache:
        return self._cache

    # ------------------------------------------------------------------
    # Public API (MessageSource protocol)
    # ------------------------------------------------------------------

    def message(self, key: str | None, *args: Any, locale: Any = None) -> str | None:
        """Resolve *key*, substituting positional *args*.

        ``message("hello")``, ``message("hello", "World")`` and
        ``message("hello", "World", locale="fr")`` mirror the template-side
        calls.
        """
        return self.resolve(key, locale, args)

    def resolve(self, key: str | None, locale: Any = None, args: Sequence[Any] = ()) -> str | None:
        """Resolve *key* for *locale* (or the ambient locale), formatting with *args*.

        Never raises for unknown keys or missing files: the key is returned
        unchanged. An empty key, an unset basename or a missing engine
        short-circuits without touching the cache.
        """
        if not key or self._basename is None or self._engine is None:
            return key
        locale_name = self._locale_name(locale)
        suffix = f"_{locale_name}" if locale_name is not None else ""
        value = self._find_by_locale(suffix, key)
        if not value:
            return key
        if not args:
            return value
        try:
            return self._format.format(value, args, locale_name)
        except (ValueError, TypeError, IndexError, OverflowError) as exc:
            self._log_error(f"Failed to format message {key}, cause: {exc}", exc)
            return value

    def locale_chain(self, locale: Any = None) -> list[str]:
        """Candidate catalog paths for *locale*, most specific first."""
        locale_name = self._locale_name(locale)
        suffix = f"_{locale_name}" if locale_name is not None else ""
        chain = [self._catalog_path(suffix)]
        while suffix:
            suffix = _truncate(suffix)
            if suffix is None:
                break
            chain.append(self._catalog_path(suffix))
        return chain

    def cached_paths(self) -> list[str]:
        """Catalog paths loaded so far, in first-access order."""
        return self._cache.paths()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _locale_name(self, locale: Any) -> str | None:
        if locale is not None:
            return str(locale)
        if self._resolver is None:
            return None
        value = self._resolver.get(LOCALE_VARIABLE)
        return None if value is None else str(value)

    def _catalog_path(self, suffix: str) -> str:
        return f"{self._basename or ''}{suffix}{self._suffix or ''}"

    def _find_by_locale(self, suffix: str, key: str) -> str | None:
        while True:
            catalog = self._get_or_load(self._catalog_path(suffix))
            if catalog is not None:
                value = catalog.get(key)
                if value:
                    return value
            if not suffix:
                return None
            truncated = _truncate(suffix)
            if truncated is None:
                return None
            suffix = truncated

    def _get_or_load(self, path: str) -> Catalog | None:
        return self._cache.get_or_load(
            path,
            provider=cast(ResourceProvider, self._engine),
            parser=self.parser,
            encoding=self._encoding,
            reloadable=self._reloadable,
            error_logger=self._logger,
        )

    def _log_error(self, message: str, cause: BaseException) -> None:
        if self._logger is not None and self._logger.is_error_enabled():
            self._logger.error(message, cause)


def _truncate(suffix: str) -> str | None:
    """Drop the most specific ``_component``: ``_en_US`` → ``_en`` → ``""``."""
    i = suffix.rfind("_")
    if i < 0:
        return None
    return suffix[:i]
