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
"""MethodInterceptor — attach interception points to one object's members.

Every operation rewrites, adds or removes a single member slot on the
target and returns the interceptor, so calls chain::

    interceptor = MethodInterceptor(person)
    interceptor.after("get_name", lambda value, obj: value + " smith").inject("greet", greet)

Guard failures are logged and skipped unless
:attr:`InterceptorSettings.strict <method_interceptor.core.settings.InterceptorSettings.strict>`
is set, in which case the matching
:class:`~method_interceptor.kernel.exceptions.GuardException` is raised.
"""

from __future__ import annotations

import types
from collections.abc import Callable
from typing import Any

from method_interceptor.aop.target import MemberTable
from method_interceptor.aop.types import MISSING
from method_interceptor.aop.weaver import (
    AfterCallback,
    BeforeCallback,
    ConditionalCallback,
    WrapCallback,
    build_after_wrapper,
    build_before_wrapper,
    build_conditional_wrapper,
    build_wrap_wrapper,
)
from method_interceptor.core.config import Config
from method_interceptor.core.settings import InterceptorSettings
from method_interceptor.kernel.exceptions import (
    CallbackNotCallableException,
    GuardException,
    InvalidMemberNameException,
    MemberAlreadyExistsException,
    MemberNotCallableException,
    MemberNotInjectedException,
    MemberNotReadableException,
    TargetNotWritableException,
)
from method_interceptor.logging.port import LoggingPort
from method_interceptor.logging.structlog_adapter import StructlogAdapter

_WRITE_ERRORS = (AttributeError, TypeError, KeyError)

# Returned by _read() when the lookup itself failed and was reported.
_UNREADABLE = object()


class MethodInterceptor:
    """Decorate, inject and detach members of a single target object.

    Args:
        target: The object to rewrite in place.  Mutable mappings are
            handled key-wise, everything else attribute-wise.
        settings: Behaviour switches.  When omitted they are bound from
            *config*, so ``INTERCEPTOR_*`` environment variables apply.
        config: Configuration to bind settings from; an empty
            :class:`Config` when not given.
        logging_port: Where loggers come from; defaults to
            :class:`StructlogAdapter`.  It is configured from *config* when
            ``settings.configure_logging`` is set.
    """

    def __init__(
        self,
        target: Any,
        settings: InterceptorSettings | None = None,
        *,
        config: Config | None = None,
        logging_port: LoggingPort | None = None,
    ) -> None:
        config = config if config is not None else Config()
        if settings is None:
            settings = InterceptorSettings.from_config(config)
        self._members = MemberTable(target)
        self._settings = settings
        self._logging = logging_port if logging_port is not None else StructlogAdapter()
        if settings.configure_logging:
            self._logging.configure(config)
        self._logger = self._logging.get_logger(__name__, target=type(target).__name__)
        # Insertion-ordered set of names added by inject().
        self._injected: dict[Any, None] = {}

    @property
    def target(self) -> Any:
        """The wrapped object."""
        return self._members.target

    @property
    def settings(self) -> InterceptorSettings:
        return self._settings

    @property
    def injected(self) -> tuple[Any, ...]:
        """Names injected by this interceptor and not yet detached, in order."""
        return tuple(self._injected)

    def is_injected(self, name: Any) -> bool:
        try:
            return name in self._injected
        except TypeError:
            return False

    def __repr__(self) -> str:
        return f"MethodInterceptor(target={self.target!r}, injected={list(self._injected)!r})"

    # ------------------------------------------------------------------
    # Decoration
    # ------------------------------------------------------------------

    def after(self, name: str, callback: AfterCallback) -> MethodInterceptor:
        """Return ``callback(result, target)`` instead of the member's result."""
        self._decorate("after", name, callback, build_after_wrapper)
        return self

    def before(self, name: str, callback: BeforeCallback) -> MethodInterceptor:
        """Run ``callback(target)`` before each call of the member."""
        self._decorate("before", name, callback, build_before_wrapper)
        return self

    def conditional(
        self,
        name: str,
        callback: ConditionalCallback,
        fallback: Any = MISSING,
    ) -> MethodInterceptor:
        """Only call the member when ``callback(args, target)`` is truthy.

        Otherwise the call returns *fallback*, or ``False`` if none was given.
        An explicit falsy fallback (``0``, ``""``, ``None``) is honoured.
        """
        self._decorate("conditional", name, callback, build_conditional_wrapper, fallback)
        return self

    def both(self, name: str, before_callback: BeforeCallback, after_callback: AfterCallback) -> MethodInterceptor:
        """Apply :meth:`before` then :meth:`after`; each step is guarded on its own."""
        return self.before(name, before_callback).after(name, after_callback)

    def wrap(self, name: str, callback: WrapCallback) -> MethodInterceptor:
        """Replace the member with ``callback(original, args, target)``."""
        self._decorate("wrap", name, callback, build_wrap_wrapper)
        return self

    # ------------------------------------------------------------------
    # Injection
    # ------------------------------------------------------------------

    def inject(self, name: str, callback: Callable[..., Any], *, bind: bool = False) -> MethodInterceptor:
        """Add a new method *name*; never overwrites an existing member.

        With ``bind=True`` the callback is bound to the target and receives
        it as its first argument.
        """
        current = self._read("inject", name)
        if current is _UNREADABLE:
            return self
        if current is not MISSING:
            self._skip(MemberAlreadyExistsException("inject", name, f"Target already has a member {name!r}"))
            return self
        if not callable(callback):
            self._skip(CallbackNotCallableException("inject", name, f"Callback for {name!r} is not callable"))
            return self

        value = types.MethodType(callback, self.target) if bind else callback
        if self._write("inject", name, value):
            self._injected[name] = None
            self._applied("member_injected", "inject", name)
        return self

    def detach(self, name: str) -> MethodInterceptor:
        """Remove a method previously added by :meth:`inject`."""
        if not self.is_injected(name):
            self._skip(MemberNotInjectedException("detach", name, f"{name!r} was not injected by this interceptor"))
            return self
        current = self._read("detach", name)
        if current is _UNREADABLE:
            return self
        if not callable(current):
            self._skip(MemberNotCallableException("detach", name, f"Member {name!r} is not callable"))
            return self

        try:
            self._members.remove(name)
        except _WRITE_ERRORS as exc:
            self._skip(TargetNotWritableException("detach", name, f"Cannot remove {name!r}: {exc}"), exc)
            return self

        del self._injected[name]
        self._applied("member_detached", "detach", name)
        return self

    def property(self, name: str, value: Any) -> MethodInterceptor:
        """Add a plain value *name*; never overwrites an existing member.

        A callable *value* is a factory: it is called once, now, as
        ``value(target)`` and its result is stored.  Factories must accept
        the target as their single argument; zero-argument callables such as
        ``dict`` or ``lambda: x`` are not supported, so wrap them
        (``lambda obj: dict()``).  To store a callable itself, use
        :meth:`inject`.
        """
        if not isinstance(name, str):
            self._skip(InvalidMemberNameException("property", name, f"Property name must be a str, got {name!r}"))
            return self
        current = self._read("property", name)
        if current is _UNREADABLE:
            return self
        if current is not MISSING:
            self._skip(MemberAlreadyExistsException("property", name, f"Target already has a member {name!r}"))
            return self

        stored = value(self.target) if callable(value) else value
        if self._write("property", name, stored):
            self._applied("property_added", "property", name)
        return self

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _decorate(
        self,
        operation: str,
        name: str,
        callback: Any,
        builder: Callable[..., Callable[..., Any]],
        *extra: Any,
    ) -> bool:
        original = self._read(operation, name)
        if original is _UNREADABLE:
            return False
        if not callable(original):
            return self._skip(MemberNotCallableException(operation, name, f"Member {name!r} is not a callable"))
        if not callable(callback):
            return self._skip(
                CallbackNotCallableException(operation, name, f"Callback for {name!r} is not callable")
            )

        wrapper = self._members.as_slot(name, builder(self.target, original, callback, *extra))
        if not self._write(operation, name, wrapper):
            return False
        self._applied("member_decorated", operation, name)
        return True

    def _read(self, operation: str, name: Any) -> Any:
        """Return the member, ``MISSING`` when absent, or ``_UNREADABLE`` on a failed lookup."""
        try:
            return self._members.get(name)
        except Exception as exc:
            self._skip(MemberNotReadableException(operation, name, f"Cannot read {name!r}: {exc!r}"), exc)
            return _UNREADABLE

    def _write(self, operation: str, name: Any, value: Any) -> bool:
        try:
            self._members.set(name, value)
        except _WRITE_ERRORS as exc:
            return self._skip(TargetNotWritableException(operation, name, f"Cannot write {name!r}: {exc}"), exc)
        return True

    def _skip(self, error: GuardException, cause: BaseException | None = None) -> bool:
        if self._settings.strict:
            raise error from cause
        self._logger.debug(
            "decoration_skipped",
            operation=error.operation,
            member=error.member,
            code=error.code,
            reason=str(error),
        )
        return False

    def _applied(self, event: str, operation: str, name: Any) -> None:
        if self._settings.log_decorations:
            self._logger.debug(event, operation=operation, member=name)


def intercept(
    target: Any,
    settings: InterceptorSettings | None = None,
    *,
    config: Config | None = None,
    logging_port: LoggingPort | None = None,
) -> MethodInterceptor:
    """Return a new :class:`MethodInterceptor` bound to *target*."""
    return MethodInterceptor(target, settings, config=config, logging_port=logging_port)
