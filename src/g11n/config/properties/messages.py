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
"""Message factory configuration properties."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from g11n.core.config import config_properties


class LocaleSource(BaseModel):
    """A locale file with an explicit format, overriding ``g11n.format``."""

    format: str | None = None
    path: str


@config_properties(prefix="g11n")
class G11nProperties(BaseModel):
    """Configuration for the message factory (g11n.*).

    Example ``g11n.yaml``::

        g11n:
          format: yaml
          base-path: locales/
          default-locale: fr
          locales:
            de: extra/de.json
            pt-BR:
              format: toml
              path: extra/pt_BR.toml
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    format: str = "yaml"
    locales: dict[str, str | LocaleSource] = Field(default_factory=dict)
    base_path: str | None = Field(default=None, alias="base-path")
    default_locale: str | None = Field(default=None, alias="default-locale")
