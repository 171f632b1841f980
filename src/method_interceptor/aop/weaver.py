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
"""AOP weaver — builds the decorated callables installed on target members.

Each builder captures *original* by closure and returns a wrapper carrying
its metadata (``functools.wraps``), so stacking decorations forms a chain
that ends at the undecorated member.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from method_interceptor.aop.types import MISSING, CallArguments

AfterCallback = Callable[[Any, Any], Any]
BeforeCallback = Callable[[Any], Any]
ConditionalCallback = Callable[[CallArguments, Any], Any]
WrapCallback = Callable[[Callable[..., Any], CallArguments, Any], Any]


def build_after_wrapper(target: Any, original: Callable[..., Any], callback: AfterCallback) -> Callable[..., Any]:
    """Return ``callback(original(...), target)`` from every call."""

    @functools.wraps(original)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return callback(original(*args, **kwargs), target)

    return wrapper


def build_before_wrapper(target: Any, original: Callable[..., Any], callback: BeforeCallback) -> Callable[..., Any]:
    """Run ``callback(target)`` first, then return the original's result."""

    @functools.wraps(original)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        callback(target)
        return original(*args, **kwargs)

    return wrapper


def build_conditional_wrapper(
    target: Any,
    original: Callable[..., Any],
    callback: ConditionalCallback,
    fallback: Any = MISSING,
) -> Callable[..., Any]:
    """Call *original* only when ``callback(args, target)`` is truthy.

    The callback may mutate the :class:`CallArguments` in place; the original
    receives the mutated values.  On a falsy answer the call returns
    *fallback*, or ``False`` when no fallback was supplied.
    """
    otherwise = False if fallback is MISSING else fallback

    @functools.wraps(original)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        call_args = CallArguments(args, kwargs)
        if callback(call_args, target):
            return call_args.invoke(original)
        return otherwise

    return wrapper


def build_wrap_wrapper(target: Any, original: Callable[..., Any], callback: WrapCallback) -> Callable[..., Any]:
    """Hand *original* to ``callback(original, args, target)`` and return its result.

    The original is never invoked automatically.
    """

    @functools.wraps(original)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return callback(original, CallArguments(args, kwargs), target)

    return wrapper
