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
"""MemberTable — uniform member access over mapping and attribute targets."""

from __future__ import annotations

import inspect
from collections.abc import Callable, MutableMapping
from typing import Any

from method_interceptor.aop.types import MISSING, MemberKind


class MemberTable:
    """Read, write and remove named members of a target object.

    A :class:`~collections.abc.MutableMapping` target exposes its keys as
    members; any other object exposes its attributes.  Names the target cannot
    look up (non-``str`` attribute names, unhashable keys) read as absent.

    Reads propagate errors raised by the target itself, such as a failing
    property getter.  Writes and removals raise whatever the target raises
    (typically ``AttributeError``, ``TypeError`` or ``KeyError``); callers
    decide how to handle refusal.
    """

    __slots__ = ("_target", "_is_mapping")

    def __init__(self, target: Any) -> None:
        self._target = target
        self._is_mapping = isinstance(target, MutableMapping)

    @property
    def target(self) -> Any:
        return self._target

    @property
    def is_mapping(self) -> bool:
        return self._is_mapping

    def get(self, name: Any) -> Any:
        """Return the member under *name*, or :data:`MISSING` when absent."""
        if self._is_mapping:
            try:
                return self._target.get(name, MISSING)
            except TypeError:
                return MISSING
        if not isinstance(name, str):
            return MISSING
        return getattr(self._target, name, MISSING)

    def as_slot(self, name: Any, value: Callable[..., Any]) -> Any:
        """Prepare *value* for storing in place of the member *name*.

        On a class target, a wrapper replacing a ``staticmethod`` or
        ``classmethod`` is stored as a ``staticmethod``: the captured original
        is already unbound or bound to the class, so instance lookups must not
        pass ``self``.
        """
        if self._is_mapping or not isinstance(self._target, type) or not isinstance(name, str):
            return value
        raw = inspect.getattr_static(self._target, name, None)
        if isinstance(raw, (staticmethod, classmethod)):
            return staticmethod(value)
        return value

    def kind(self, name: Any) -> MemberKind:
        value = self.get(name)
        if value is MISSING:
            return MemberKind.ABSENT
        if callable(value):
            return MemberKind.METHOD
        return MemberKind.PROPERTY

    def has(self, name: Any) -> bool:
        return self.get(name) is not MISSING

    def set(self, name: Any, value: Any) -> None:
        if self._is_mapping:
            self._target[name] = value
        else:
            setattr(self._target, name, value)

    def remove(self, name: Any) -> None:
        if self._is_mapping:
            del self._target[name]
        else:
            delattr(self._target, name)
