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
"""StructlogAdapter — renders proxier engine events with structlog."""

from __future__ import annotations

import logging
import sys

import structlog

from proxier.config.properties.logging import LoggingProperties
from proxier.core.config import Config
from proxier.kernel.exceptions import ProxyConfigurationException

_RENDERERS = {
    "console": structlog.dev.ConsoleRenderer,
    "json": structlog.processors.JSONRenderer,
}


class StructlogAdapter:
    """Route engine events through structlog into stdlib logging.

    ``level`` maps logger names (``root``, ``proxier.proxy``, ...) to level
    names; ``format`` picks the console or JSON renderer.
    """

    def __init__(self) -> None:
        self.properties = LoggingProperties()

    def configure(self, config: Config) -> LoggingProperties:
        """Bind ``proxier.logging`` from *config*, apply it and return it."""
        properties = config.bind(LoggingProperties)
        self.apply(properties)
        return properties

    def apply(self, properties: LoggingProperties) -> None:
        """Install the renderer and levels described by *properties*.

        Raises:
            ProxyConfigurationException: For an unknown format or level name.
        """
        renderer = _RENDERERS.get(str(properties.format).lower())
        if renderer is None:
            raise ProxyConfigurationException(
                f"Unknown logging format {properties.format!r}",
                context={"format": properties.format, "supported": sorted(_RENDERERS)},
            )
        levels = {name: _level_number(value) for name, value in properties.level.items()}
        root_level = levels.pop("root", logging.INFO)

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.UnicodeDecoder(),
                renderer(),
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=root_level, force=True)
        for name, level in levels.items():
            logging.getLogger(name).setLevel(level)

        self.properties = properties


def _level_number(level: object) -> int:
    number = logging.getLevelNamesMapping().get(str(level).upper())
    if number is None:
        raise ProxyConfigurationException(f"Unknown log level {level!r}", context={"level": level})
    return number
