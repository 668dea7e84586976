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
"""Outbound ports — collaborators consumed by the message resolver."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class MessageSource(Protocol):
    """Abstract message-resolution interface.

    Implementations never raise for unknown keys; they return the key itself.
    """

    def resolve(
        self,
        key: str | None,
        locale: Any = None,
        args: Sequence[Any] = (),
    ) -> str | None:
        """Resolve *key* for *locale*, formatting with *args* when given."""
        ...

    def message(self, key: str | None, *args: Any, locale: Any = None) -> str | None:
        """Template-facing spelling of :meth:`resolve`."""
        ...


@runtime_checkable
class Resource(Protocol):
    """A readable resource with a modification timestamp."""

    @property
    def path(self) -> str: ...

    @property
    def last_modified(self) -> int:
        """Modification time in milliseconds since the epoch."""
        ...

    def open(self) -> BinaryIO:
        """Open a fresh byte stream. Raises ``ResourceException`` on failure."""
        ...


@runtime_checkable
class ResourceProvider(Protocol):
    """Supplies catalog files to the resolver (the template engine's loader)."""

    def has_resource(self, path: str) -> bool: ...

    def get_resource(self, path: str) -> Resource: ...


@runtime_checkable
class PropertiesParser(Protocol):
    """Turns an encoded byte stream into a flat key/value mapping.

    Raises ``CatalogParseException`` on malformed or undecodable input.
    """

    def parse(self, stream: BinaryIO, encoding: str) -> dict[str, str]: ...


@runtime_checkable
class VariableResolver(Protocol):
    """Ambient variable lookup; the resolver asks it for ``locale``."""

    def get(self, name: str) -> Any | None: ...


@runtime_checkable
class ErrorLogger(Protocol):
    """Best-effort error sink."""

    def is_error_enabled(self) -> bool: ...

    def error(self, message: str, cause: BaseException | None = None) -> None: ...
