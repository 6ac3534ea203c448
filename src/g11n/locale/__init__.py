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
"""g11n Locale — pluggable locale file loaders.

Register a custom format::

    from g11n.locale import register_loader

    register_loader("po", PoLocaleLoader())
"""

from g11n.locale.discovery import discover_locales
from g11n.locale.loaders import (
    get_loader,
    register_loader,
    registered_formats,
    unregister_loader,
)
from g11n.locale.ports.outbound import LocaleLoader

__all__ = [
    "LocaleLoader",
    "discover_locales",
    "get_loader",
    "register_loader",
    "registered_formats",
    "unregister_loader",
]
