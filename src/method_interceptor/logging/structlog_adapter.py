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
"""StructlogAdapter — default LoggingPort implementation using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from method_interceptor.core.config import Config

LIBRARY_LOGGER = "method_interceptor"


class StructlogAdapter:
    """Route interceptor events through structlog into the library's stdlib logger.

    :meth:`configure` only touches the ``method_interceptor`` logger tree;
    the application's root logger is left alone.
    """

    def __init__(self) -> None:
        self._level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}
        self._handler: logging.Handler | None = None

    @property
    def level(self) -> str:
        return self._level

    @property
    def format(self) -> str:
        return self._format

    def configure(self, config: Config) -> None:
        """Configure from ``interceptor.logging.level`` and ``interceptor.logging.format``.

        ``level.root`` applies to the library logger; any other key under
        ``level`` names a sub-logger, e.g. ``method_interceptor.aop``.
        """
        level_section = dict(config.get_section("interceptor.logging.level"))
        level_section.pop("root", None)
        self._level = str(config.get("interceptor.logging.level.root", "INFO")).upper()
        self._module_levels = {k: str(v).upper() for k, v in level_section.items()}
        self._format = str(config.get("interceptor.logging.format", "console")).lower()

        self._setup_structlog()
        self._setup_library_logger()
        for module, level in self._module_levels.items():
            self.set_level(module, level)

    def get_logger(self, name: str, **context: Any) -> Any:
        """Get a structlog logger for *name* with *context* bound."""
        logger = structlog.get_logger(name)
        return logger.bind(**context) if context else logger

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    def _setup_structlog(self) -> None:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]

        if self._format == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))

        structlog.configure(
            processors=processors,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
        )

    def _setup_library_logger(self) -> None:
        library_logger = logging.getLogger(LIBRARY_LOGGER)
        if self._handler is not None:
            library_logger.removeHandler(self._handler)

        self._handler = logging.StreamHandler(sys.stdout)
        self._handler.setFormatter(logging.Formatter("%(message)s"))
        library_logger.addHandler(self._handler)
        library_logger.setLevel(getattr(logging, self._level, logging.INFO))
        library_logger.propagate = False
