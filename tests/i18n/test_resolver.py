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
"""Tests for MessageResolver — fallback, reload policy, formatting and degradation."""

from __future__ import annotations

import datetime as dt
from unittest.mock import MagicMock

import pytest

from pymessage.i18n import Locale, MessageFormatStyle, MessageResolver, MessageSource
from pymessage.i18n.adapters.variables import MappingVariableResolver
from pymessage.kernel.exceptions import ConfigurationException

# matches the write_catalog fixture default
BASE_MTIME = 1_700_000_000


def make_resolver(provider, **kwargs) -> MessageResolver:
    kwargs.setdefault("basename", "messages")
    kwargs.setdefault("suffix", ".properties")
    return MessageResolver(provider, **kwargs)


class TestIdentityFallback:
    def test_missing_key_returns_key(self, provider, layered_catalogs):
        resolver = make_resolver(provider)
        assert resolver.resolve("no.such.key", "en_US") == "no.such.key"

    def test_missing_key_with_args_returns_key_unformatted(self, provider, layered_catalogs):
        resolver = make_resolver(provider)
        assert resolver.message("no.such.key {0}", "x", locale="en") == "no.such.key {0}"

    def test_no_catalog_files_returns_key(self, provider):
        resolver = make_resolver(provider)
        assert resolver.resolve("greeting", "fr_FR") == "greeting"
        assert len(resolver.cache) == 0

    def test_empty_key_has_no_cache_interaction(self):
        engine = MagicMock()
        resolver = make_resolver(engine)
        assert resolver.resolve("", "en") == ""
        assert resolver.resolve(None, "en") is None
        engine.has_resource.assert_not_called()
        assert len(resolver.cache) == 0

    def test_unset_basename_has_no_cache_interaction(self):
        engine = MagicMock()
        resolver = MessageResolver(engine, suffix=".properties")
        assert resolver.resolve("greeting", "en") == "greeting"
        assert resolver.message("greeting", "World") == "greeting"
        engine.has_resource.assert_not_called()
        assert len(resolver.cache) == 0

    def test_empty_basename_is_still_a_basename(self, provider, write_catalog):
        write_catalog(".properties", "greeting=bare\n")
        resolver = make_resolver(provider, basename="")
        assert resolver.resolve("greeting") == "bare"
        assert resolver.cached_paths() == [".properties"]

    def test_missing_engine_returns_key(self):
        resolver = MessageResolver(basename="messages", suffix=".properties")
        assert resolver.resolve("greeting", "en") == "greeting"


class TestLocaleFallback:
    def test_most_specific_catalog_wins(self, provider, layered_catalogs):
        resolver = make_resolver(provider)
        assert resolver.resolve("greeting", "en_US") == "Howdy"

    def test_empty_value_falls_through_to_language(self, provider, layered_catalogs):
        resolver = make_resolver(provider)
        assert resolver.resolve("farewell", "en_US") == "Bye (en)"

    def test_absent_value_falls_through_to_root(self, provider, layered_catalogs):
        resolver = make_resolver(provider)
        assert resolver.resolve("root.only", "en_US") == "root"

    def test_language_only_locale(self, provider, layered_catalogs):
        resolver = make_resolver(provider)
        assert resolver.resolve("greeting", "en") == "Hello (en)"

    def test_unknown_country_falls_back_to_language(self, provider, layered_catalogs):
        resolver = make_resolver(provider)
        assert resolver.resolve("greeting", "en_GB") == "Hello (en)"

    def test_unknown_language_falls_back_to_root(self, provider, layered_catalogs):
        resolver = make_resolver(provider)
        assert resolver.resolve("greeting", "de_DE") == "Hello"

    def test_structured_locale_uses_canonical_form(self, provider, layered_catalogs):
        resolver = make_resolver(provider)
        assert resolver.resolve("greeting", Locale("en", "us")) == "Howdy"

    def test_variant_locale_walks_three_levels(self, provider, layered_catalogs):
        resolver = make_resolver(provider)
        assert resolver.resolve("greeting", Locale("en", "US", "POSIX")) == "Howdy"

    def test_fallback_precedence_when_entries_removed(self, provider, write_catalog):
        write_catalog("messages.properties", "k=root\n")
        write_catalog("messages_en.properties", "k=en\n")
        write_catalog("messages_en_US.properties", "k=en_US\n")
        resolver = make_resolver(provider, reloadable=True)
        assert resolver.resolve("k", "en_US") == "en_US"

        write_catalog("messages_en_US.properties", "k=\n", mtime=BASE_MTIME + 10)
        assert resolver.resolve("k", "en_US") == "en"

        write_catalog("messages_en.properties", "other=x\n", mtime=BASE_MTIME + 10)
        assert resolver.resolve("k", "en_US") == "root"


class TestAmbientLocale:
    def test_ambient_locale_used_when_not_explicit(self, provider, layered_catalogs):
        resolver = make_resolver(provider, resolver=MappingVariableResolver({"locale": "en_US"}))
        assert resolver.resolve("greeting") == "Howdy"

    def test_explicit_locale_beats_ambient(self, provider, layered_catalogs):
        resolver = make_resolver(provider, resolver=MappingVariableResolver({"locale": "en_US"}))
        assert resolver.resolve("greeting", "en") == "Hello (en)"

    def test_absent_ambient_locale_uses_root_catalog(self, provider, layered_catalogs):
        resolver = make_resolver(provider, resolver=MappingVariableResolver({}))
        assert resolver.resolve("greeting") == "Hello"

    def test_no_variable_resolver_uses_root_catalog(self, provider, layered_catalogs):
        resolver = make_resolver(provider)
        assert resolver.resolve("greeting") == "Hello"

    def test_ambient_locale_object_is_stringified(self, provider, layered_catalogs):
        resolver = make_resolver(provider, resolver=MappingVariableResolver({"locale": Locale("en", "US")}))
        assert resolver.resolve("greeting") == "Howdy"


class TestReloadPolicy:
    def test_not_reloadable_never_observes_edits(self, provider, write_catalog, counting_parser):
        write_catalog("messages.properties", "title=First\n")
        resolver = make_resolver(provider, reloadable=False, parser=counting_parser)
        assert resolver.resolve("title") == "First"

        write_catalog("messages.properties", "title=Second\n", mtime=BASE_MTIME + 60)
        assert resolver.resolve("title") == "First"
        assert resolver.resolve("title") == "First"
        assert len(counting_parser.calls) == 1

    def test_not_reloadable_skips_existence_check_once_cached(self, write_catalog, provider):
        write_catalog("messages.properties", "title=First\n")
        spy = MagicMock(wraps=provider)
        resolver = make_resolver(spy, reloadable=False)
        resolver.resolve("title")
        spy.has_resource.reset_mock()
        spy.get_resource.reset_mock()

        assert resolver.resolve("title") == "First"
        spy.has_resource.assert_not_called()
        spy.get_resource.assert_not_called()

    def test_not_reloadable_still_loads_lazily(self, provider, write_catalog):
        resolver = make_resolver(provider, reloadable=False)
        assert resolver.resolve("title") == "title"

        write_catalog("messages.properties", "title=Late arrival\n")
        assert resolver.resolve("title") == "Late arrival"

    def test_reloadable_observes_newer_file(self, provider, write_catalog, counting_parser):
        write_catalog("messages.properties", "title=First\n")
        resolver = make_resolver(provider, reloadable=True, parser=counting_parser)
        assert resolver.resolve("title") == "First"

        write_catalog("messages.properties", "title=Second\n", mtime=BASE_MTIME + 60)
        assert resolver.resolve("title") == "Second"
        assert len(counting_parser.calls) == 2

    def test_reloadable_skips_parse_when_unchanged(self, provider, write_catalog, counting_parser):
        write_catalog("messages.properties", "title=First\n")
        resolver = make_resolver(provider, reloadable=True, parser=counting_parser)
        for _ in range(5):
            assert resolver.resolve("title") == "First"
        assert len(counting_parser.calls) == 1

    def test_reload_reuses_catalog_instance(self, provider, write_catalog):
        write_catalog("messages.properties", "title=First\n")
        resolver = make_resolver(provider, reloadable=True)
        resolver.resolve("title")
        catalog = resolver.cache.get("messages.properties")

        write_catalog("messages.properties", "title=Second\n", mtime=BASE_MTIME + 60)
        resolver.resolve("title")
        assert resolver.cache.get("messages.properties") is catalog
        assert catalog.last_modified == (BASE_MTIME + 60) * 1000

    def test_deleted_file_keeps_last_loaded_entries(self, provider, write_catalog):
        path = write_catalog("messages.properties", "title=First\n")
        resolver = make_resolver(provider, reloadable=True)
        assert resolver.resolve("title") == "First"

        path.unlink()
        assert resolver.resolve("title") == "First"


class TestFailureHandling:
    def test_parse_failure_is_logged_and_key_returned(self, provider, write_catalog, error_logger):
        write_catalog("messages.properties", "broken=\\u12\n")
        resolver = make_resolver(provider, logger=error_logger)
        assert resolver.resolve("broken") == "broken"
        assert len(error_logger.errors) == 1
        message, cause = error_logger.errors[0]
        assert "messages.properties" in message
        assert cause is not None

    def test_failed_reload_retains_previous_entries(self, provider, write_catalog, error_logger):
        write_catalog("messages.properties", "title=First\n")
        resolver = make_resolver(provider, reloadable=True, logger=error_logger)
        assert resolver.resolve("title") == "First"

        write_catalog("messages.properties", "title=\\uZZZZ\n", mtime=BASE_MTIME + 60)
        assert resolver.resolve("title") == "First"
        assert len(error_logger.errors) == 1

    def test_undecodable_file_is_logged(self, provider, write_catalog, error_logger):
        write_catalog("messages.properties", "title=caf\xe9\n", encoding="latin-1")
        resolver = make_resolver(provider, encoding="UTF-8", logger=error_logger)
        assert resolver.resolve("title") == "title"
        assert len(error_logger.errors) == 1

    def test_configured_encoding_is_used(self, provider, write_catalog):
        write_catalog("messages.properties", "title=caf\xe9\n", encoding="latin-1")
        resolver = make_resolver(provider, encoding="ISO-8859-1")
        assert resolver.resolve("title") == "caf\xe9"

    def test_encoding_defaults_to_utf8(self, provider, write_catalog, counting_parser):
        write_catalog("messages.properties", "title=caf\xe9\n")
        resolver = make_resolver(provider, encoding="", parser=counting_parser)
        assert resolver.resolve("title") == "caf\xe9"
        assert counting_parser.calls == ["UTF-8"]

    def test_disabled_logger_is_not_called(self, provider, write_catalog, error_logger):
        error_logger.enabled = False
        write_catalog("messages.properties", "broken=\\u12\n")
        resolver = make_resolver(provider, logger=error_logger)
        assert resolver.resolve("broken") == "broken"
        assert error_logger.errors == []

    def test_missing_logger_swallows_failures(self, provider, write_catalog):
        write_catalog("messages.properties", "broken=\\u12\n")
        resolver = make_resolver(provider)
        assert resolver.resolve("broken") == "broken"

    @pytest.mark.parametrize(
        ("pattern", "style", "arg"),
        [
            ("Count %d", "string", float("inf")),
            ("Char %c", "string", 0x110000),
            ("On {0,date}", "message", 10**22),
        ],
    )
    def test_overflow_while_formatting_returns_raw_value(
        self, provider, write_catalog, error_logger, pattern, style, arg
    ):
        write_catalog("messages.properties", f"n={pattern}\n")
        resolver = make_resolver(provider, message_format=style, logger=error_logger)
        assert resolver.message("n", arg) == pattern
        assert len(error_logger.errors) == 1
        assert error_logger.errors[0][0].startswith("Failed to format message n")

    def test_formatting_failure_returns_raw_value(self, provider, write_catalog, error_logger):
        write_catalog("messages.properties", "count=%d items\n")
        resolver = make_resolver(provider, message_format="string", logger=error_logger)
        assert resolver.message("count", "many") == "%d items"
        assert len(error_logger.errors) == 1


class TestFormatting:
    def test_string_style(self, provider, write_catalog):
        write_catalog("messages.properties", "hello=Hello %s\n")
        resolver = make_resolver(provider, message_format="string")
        assert resolver.message("hello", "World") == "Hello World"

    def test_message_style(self, provider, write_catalog):
        write_catalog("messages.properties", "hello=Hello {0}\n")
        resolver = make_resolver(provider, message_format="message")
        assert resolver.message("hello", "World") == "Hello World"

    def test_no_args_returns_value_verbatim(self, provider, write_catalog):
        write_catalog("messages.properties", "hello=Hello {0} and %s\n")
        resolver = make_resolver(provider)
        assert resolver.message("hello") == "Hello {0} and %s"

    def test_resolve_accepts_argument_sequence(self, provider, write_catalog):
        write_catalog("messages.properties", "pair={1} before {0}\n")
        resolver = make_resolver(provider)
        assert resolver.resolve("pair", None, ["a", "b"]) == "b before a"

    def test_message_style_numbers_follow_locale(self, provider, write_catalog):
        write_catalog("messages_de.properties", "total=Summe: {0,number,#,##0.00}\n")
        resolver = make_resolver(provider)
        assert resolver.message("total", 1234.5, locale="de") == "Summe: 1.234,50"

    def test_message_style_dates_follow_locale(self, provider, write_catalog):
        write_catalog("messages_en_US.properties", "when=Due {0,date,long}\n")
        resolver = make_resolver(provider)
        assert resolver.message("when", dt.date(2024, 3, 9), locale="en_US") == "Due March 9, 2024"

    def test_default_style_is_message(self, provider):
        assert make_resolver(provider).message_format is MessageFormatStyle.MESSAGE


class TestConfigurationSurface:
    def test_invalid_format_fails_fast_in_constructor(self, provider):
        with pytest.raises(ConfigurationException, match="Unsupported message.format=xml"):
            make_resolver(provider, message_format="xml")

    def test_invalid_format_fails_fast_in_setter(self, provider):
        resolver = make_resolver(provider)
        with pytest.raises(ConfigurationException):
            resolver.message_format = "printf"
        assert resolver.message_format is MessageFormatStyle.MESSAGE

    def test_setters_apply(self, provider, layered_catalogs):
        resolver = MessageResolver()
        resolver.engine = provider
        resolver.message_basename = "messages"
        resolver.message_suffix = ".properties"
        resolver.message_encoding = "UTF-8"
        resolver.message_format = "string"
        resolver.reloadable = True
        assert resolver.resolve("greeting", "en_US") == "Howdy"
        assert resolver.message_format is MessageFormatStyle.STRING
        assert resolver.reloadable is True

    def test_locale_chain(self, provider):
        resolver = make_resolver(provider)
        assert resolver.locale_chain("en_US") == [
            "messages_en_US.properties",
            "messages_en.properties",
            "messages.properties",
        ]
        assert resolver.locale_chain() == ["messages.properties"]

    def test_implements_message_source(self, provider):
        assert isinstance(make_resolver(provider), MessageSource)

    def test_cached_paths_lists_only_existing_catalogs(self, provider, write_catalog):
        write_catalog("messages.properties", "k=root\n")
        resolver = make_resolver(provider)
        resolver.resolve("k", "en_US")
        assert resolver.cached_paths() == ["messages.properties"]
