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
"""Catalog cache — one lazily (re)loaded catalog per file path.

A :class:`Catalog` publishes its entries and source timestamp together as a
single immutable snapshot, so concurrent readers see either the state before
a reload or the state after it. Reload checks on one catalog are serialized,
so concurrent first accesses parse the file once.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pymessage.i18n.ports.outbound import ErrorLogger, PropertiesParser, Resource, ResourceProvider
from pymessage.kernel.exceptions import PyMessageException

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "UTF-8"


@dataclass(frozen=True)
class _Snapshot:
    entries: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    last_modified: int = 0


class Catalog:
    """Parsed contents of one locale-specific catalog file."""

    def __init__(self, path: str) -> None:
        self._path = path
        self._snapshot = _Snapshot()
        self._reload_lock = threading.Lock()

    @property
    def path(self) -> str:
        return self._path

    @property
    def entries(self) -> Mapping[str, str]:
        return self._snapshot.entries

    @property
    def last_modified(self) -> int:
        return self._snapshot.last_modified

    def get(self, key: str) -> str | None:
        return self._snapshot.entries.get(key)

    def reload_if_modified(self, resource: Resource, parser: PropertiesParser, encoding: str) -> bool:
        """Re-parse *resource* when it is newer than the loaded snapshot.

        Returns ``True`` when the entries were replaced. Parser and stream
        errors propagate and leave the current snapshot untouched.
        """
        with self._reload_lock:
            modified = resource.last_modified
            if modified <= self._snapshot.last_modified:
                return False
            with resource.open() as stream:
                entries = parser.parse(stream, encoding)
            self._snapshot = _Snapshot(MappingProxyType(dict(entries)), modified)
        logger.debug("Loaded message catalog %s (%d entries)", self._path, len(entries))
        return True

    def __repr__(self) -> str:
        return f"Catalog(path={self._path!r}, entries={len(self.entries)}, last_modified={self.last_modified})"


class CatalogCache:
    """Path → :class:`Catalog` map with atomic insert-if-absent.

    Catalogs live as long as the cache; a missing file is never remembered,
    so its existence is checked again on the next lookup.
    """

    def __init__(self) -> None:
        self._catalogs: dict[str, Catalog] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> Catalog | None:
        return self._catalogs.get(path)

    def put_if_absent(self, catalog: Catalog) -> Catalog:
        """Publish *catalog* unless one exists for its path; return the survivor."""
        with self._lock:
            return self._catalogs.setdefault(catalog.path, catalog)

    def paths(self) -> list[str]:
        with self._lock:
            return list(self._catalogs)

    def __len__(self) -> int:
        return len(self._catalogs)

    def __contains__(self, path: object) -> bool:
        return path in self._catalogs

    def get_or_load(
        self,
        path: str,
        *,
        provider: ResourceProvider,
        parser: PropertiesParser,
        encoding: str | None = None,
        reloadable: bool = False,
        error_logger: ErrorLogger | None = None,
    ) -> Catalog | None:
        """Return the catalog for *path*, loading or refreshing it as needed.

        A new catalog is always loaded. An existing one is only checked
        against its source when *reloadable* is set; otherwise it is served
        as-is without touching the provider. Returns ``None`` while the file
        has never existed.
        """
        catalog = self._catalogs.get(path)
        if catalog is not None and not reloadable:
            return catalog
        if not provider.has_resource(path):
            return catalog
        if catalog is None:
            catalog = self.put_if_absent(Catalog(path))
        try:
            resource = provider.get_resource(path)
            catalog.reload_if_modified(resource, parser, encoding or DEFAULT_ENCODING)
        except (PyMessageException, OSError) as exc:
            if error_logger is not None and error_logger.is_error_enabled():
                error_logger.error(f"Failed to load message file {path}, cause: {exc}", exc)
        return catalog
