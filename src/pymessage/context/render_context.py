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
"""Render-scoped context backed by contextvars.

Each template render gets a fresh RenderContext; the message resolver reads
the ambient ``locale`` attribute from it when no explicit locale is given.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

_render_context_var: ContextVar[RenderContext | None] = ContextVar(
    "pymessage_render_context", default=None
)


class RenderContext:
    """Holds per-render attributes such as ``locale``.

    Use ``RenderContext.init()`` to create a new context for the current
    thread or task, and ``RenderContext.current()`` to retrieve it.
    """

    def __init__(self, attributes: Mapping[str, Any] | None = None) -> None:
        self._attributes: dict[str, Any] = dict(attributes or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    @classmethod
    def init(cls, **attributes: Any) -> RenderContext:
        """Create and set a new RenderContext for the current thread or task."""
        ctx = cls(attributes)
        _render_context_var.set(ctx)
        return ctx

    @classmethod
    def current(cls) -> RenderContext | None:
        """Get the RenderContext for the current thread or task, or None."""
        return _render_context_var.get()

    @classmethod
    def clear(cls) -> None:
        """Clear the RenderContext for the current thread or task."""
        _render_context_var.set(None)

    @classmethod
    @contextmanager
    def scope(cls, **attributes: Any) -> Iterator[RenderContext]:
        """Install a RenderContext for the duration of a ``with`` block."""
        token = _render_context_var.set(cls(attributes))
        try:
            yield _render_context_var.get()  # type: ignore[misc]
        finally:
            _render_context_var.reset(token)
