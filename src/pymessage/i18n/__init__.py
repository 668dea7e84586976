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
"""PyMessage I18n — locale-fallback message resolution over catalog files.

Import concrete adapter types from the adapter package::

    from pymessage.i18n.adapters.filesystem import FileSystemResourceProvider
"""

from pymessage.i18n.catalog import Catalog, CatalogCache
from pymessage.i18n.configuration import MessageProperties, configure_message_resolver
from pymessage.i18n.formatting import MessageFormatStyle
from pymessage.i18n.locale import Locale
from pymessage.i18n.ports.outbound import (
    ErrorLogger,
    MessageSource,
    PropertiesParser,
    Resource,
    ResourceProvider,
    VariableResolver,
)
from pymessage.i18n.resolver import MessageResolver

__all__ = [
    "Catalog",
    "CatalogCache",
    "ErrorLogger",
    "Locale",
    "MessageFormatStyle",
    "MessageProperties",
    "MessageResolver",
    "MessageSource",
    "PropertiesParser",
    "Resource",
    "ResourceProvider",
    "VariableResolver",
    "configure_message_resolver",
]
