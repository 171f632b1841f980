"""Shared fixtures: a small mock person object and its interceptor."""

from __future__ import annotations

import logging

import pytest
import structlog

from method_interceptor import MethodInterceptor
from method_interceptor.logging.structlog_adapter import LIBRARY_LOGGER


class Person:
    """Mock object with a plain property and a getter/setter pair."""

    def __init__(self, name: str) -> None:
        self.id = 0
        self._name = name

    def get_name(self) -> str:
        return self._name

    def set_name(self, name: str) -> Person:
        self._name = name
        return self


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
    library_logger = logging.getLogger(LIBRARY_LOGGER)
    for handler in list(library_logger.handlers):
        library_logger.removeHandler(handler)
    library_logger.setLevel(logging.NOTSET)
    library_logger.propagate = True


@pytest.fixture
def person() -> Person:
    return Person("john")


@pytest.fixture
def interceptor(person: Person) -> MethodInterceptor:
    return MethodInterceptor(person)
