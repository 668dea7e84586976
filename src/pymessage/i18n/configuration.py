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
"""Builds a MessageResolver from the ``pymessage`` configuration section.

Recognized options::

    pymessage:
      reloadable: false
      resource:
        directory: templates/
      message:
        basename: messages
        suffix: .properties
        encoding: UTF-8
        format: message        # or "string"
"""

from __future__ import annotations

from dataclasses import dataclass

from pymessage.core.config import Config, config_properties
from pymessage.i18n.adapters.filesystem import FileSystemResourceProvider
from pymessage.i18n.adapters.variables import RenderContextResolver
from pymessage.i18n.formatting import MessageFormatStyle
from pymessage.i18n.ports.outbound import ErrorLogger, PropertiesParser, ResourceProvider, VariableResolver
from pymessage.i18n.resolver import MessageResolver
from pymessage.logging.error_logger import StructlogErrorLogger


@config_properties(prefix="pymessage.message")
@dataclass
class MessageProperties:
    basename: str | None = None
    suffix: str | None = None
    encoding: str | None = None
    format: str = MessageFormatStyle.MESSAGE.value


def configure_message_resolver(
    config: Config,
    *,
    engine: ResourceProvider | None = None,
    resolver: VariableResolver | None = None,
    logger: ErrorLogger | None = None,
    parser: PropertiesParser | None = None,
) -> MessageResolver:
    """Create a fully wired :class:`MessageResolver`.

    Collaborators not passed in get defaults: a file-system provider rooted
    at ``pymessage.resource.directory``, the render-context variable
    resolver, and a structlog-backed error logger. An unsupported
    ``message.format`` raises ``ConfigurationException`` here.
    """
    props = config.bind(MessageProperties)
    reloadable = config.get("pymessage.reloadable", False)
    if isinstance(reloadable, str):
        reloadable = reloadable.lower() in ("true", "1", "yes")

    if engine is None:
        engine = FileSystemResourceProvider(str(config.get("pymessage.resource.directory", ".")))

    return MessageResolver(
        engine,
        basename=props.basename,
        suffix=props.suffix,
        encoding=props.encoding,
        message_format=props.format,
        reloadable=bool(reloadable),
        resolver=resolver if resolver is not None else RenderContextResolver(),
        logger=logger if logger is not None else StructlogErrorLogger(),
        parser=parser,
    )
