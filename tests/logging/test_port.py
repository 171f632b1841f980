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
"""Tests for the LoggingPort protocol and how MethodInterceptor uses it."""

from typing import Any
from unittest.mock import MagicMock

from method_interceptor import Config, InterceptorSettings, MethodInterceptor, intercept
from method_interceptor.logging.port import LoggingPort
from method_interceptor.logging.structlog_adapter import StructlogAdapter


class FakeLogging:
    def __init__(self) -> None:
        self.logger = MagicMock()
        self.configured: list[Any] = []
        self.requested: list[tuple[str, dict]] = []

    def configure(self, config: Any) -> None:
        self.configured.append(config)

    def get_logger(self, name: str, **context: Any) -> Any:
        self.requested.append((name, context))
        return self.logger

    def set_level(self, name: str, level: str) -> None:
        pass


class TestLoggingPortProtocol:
    def test_conforming_class_is_instance(self):
        assert isinstance(FakeLogging(), LoggingPort)

    def test_non_conforming_class_is_not_instance(self):
        class Incomplete:
            def get_logger(self, name: str) -> Any:
                pass

        assert not isinstance(Incomplete(), LoggingPort)

    def test_structlog_adapter_conforms(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestInterceptorLoggingPort:
    def test_logger_is_bound_to_target_type(self, person):
        port = FakeLogging()

        MethodInterceptor(person, logging_port=port)

        assert port.requested == [("method_interceptor.aop.interceptor", {"target": "Person"})]
        assert port.configured == []

    def test_port_configured_when_enabled(self, person):
        port = FakeLogging()
        config = Config({"interceptor": {"configure_logging": True}})

        MethodInterceptor(person, config=config, logging_port=port)

        assert port.configured == [config]

    def test_events_go_to_port_logger(self, person):
        port = FakeLogging()

        intercept(person, InterceptorSettings(), logging_port=port).after("missing", lambda v, o: v)

        port.logger.debug.assert_called_once_with(
            "decoration_skipped",
            operation="after",
            member="missing",
            code="INTERCEPTOR_001",
            reason="Member 'missing' is not a callable",
        )
