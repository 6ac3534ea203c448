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
"""g11n — localizable message records.

Declare messages as annotated class fields, initialize them with a
:class:`MessageFactory` and switch every initialized record to another
language with :meth:`MessageFactory.load_locale`.
"""

from g11n.formatting import ParamFormatter, ResultFormatter, sprintf
from g11n.kernel.exceptions import (
    G11nException,
    LocaleLoadException,
    MessageSignatureException,
    UnknownFormatException,
    UnknownLocaleException,
    UnsupportedFieldException,
)
from g11n.messages import LocaleInfo, MessageFactory, describe, message, message_record

__version__ = "0.3.0"

__all__ = [
    "G11nException",
    "LocaleInfo",
    "LocaleLoadException",
    "MessageFactory",
    "MessageSignatureException",
    "ParamFormatter",
    "ResultFormatter",
    "UnknownFormatException",
    "UnknownLocaleException",
    "UnsupportedFieldException",
    "__version__",
    "describe",
    "message",
    "message_record",
    "sprintf",
]
