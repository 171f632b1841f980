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
"""AOP core types — member kinds, call arguments and the missing sentinel."""

from __future__ import annotations

import enum
from typing import Any, Final


class _MissingType:
    """Sentinel for "no value supplied" or "no member present"."""

    _instance: _MissingType | None = None

    def __new__(cls) -> _MissingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final[Any] = _MissingType()


class MemberKind(enum.Enum):
    """What a target currently holds under a member name."""

    METHOD = "method"
    PROPERTY = "property"
    ABSENT = "absent"


class CallArguments(list):
    """Positional arguments of an intercepted call, plus its keyword arguments.

    Behaves as a mutable list so callbacks can rewrite arguments in place
    (``args[0] += " smith"``); keyword arguments live in :attr:`kwargs`.
    The decorated call forwards the mutated values to the original.
    """

    def __init__(self, args: tuple | list = (), kwargs: dict[str, Any] | None = None) -> None:
        super().__init__(args)
        self.kwargs: dict[str, Any] = dict(kwargs) if kwargs else {}

    def __repr__(self) -> str:
        return f"CallArguments({list.__repr__(self)}, kwargs={self.kwargs!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CallArguments):
            return list.__eq__(self, other) and self.kwargs == other.kwargs
        return list.__eq__(self, other)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None  # type: ignore[assignment]

    def invoke(self, fn: Any) -> Any:
        """Call *fn* with these positional and keyword arguments."""
        return fn(*self, **self.kwargs)
