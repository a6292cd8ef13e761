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
"""LoggingPort — how proxier's structured engine events are routed."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from proxier.config.properties.logging import LoggingProperties
from proxier.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Applies :class:`LoggingProperties` to whatever backs the engine loggers.

    Engine modules emit events through module-level structlog loggers
    named ``proxier.<area>``; an adapter decides how they are rendered and
    which of them are enabled.
    """

    def configure(self, config: Config) -> LoggingProperties: ...
    def apply(self, properties: LoggingProperties) -> None: ...
