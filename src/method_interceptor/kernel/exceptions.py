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
"""Unified exception hierarchy for method-interceptor.

All library exceptions inherit from InterceptorException, enabling unified
error handling.

Categories:
- GuardException: a decoration, injection or detachment precondition failed.
  Raised only in strict mode; otherwise the operation is a logged no-op.
- ConfigurationException: invalid interceptor settings.
"""

from __future__ import annotations

# =============================================================================
# Base Exception
# =============================================================================


class InterceptorException(Exception):
    """Base exception for all method-interceptor errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "INTERCEPTOR_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class ConfigurationException(InterceptorException):
    """Interceptor settings failed validation."""


# =============================================================================
# Guard Exceptions
# =============================================================================


class GuardException(InterceptorException):
    """A precondition of an interceptor operation was not met."""

    default_code: str = "INTERCEPTOR_000"

    def __init__(self, operation: str, member: object, message: str) -> None:
        super().__init__(
            message,
            code=self.default_code,
            context={"operation": operation, "member": member},
        )
        self.operation = operation
        self.member = member


class MemberNotCallableException(GuardException):
    """The member to decorate is absent or is not callable."""

    default_code = "INTERCEPTOR_001"


class CallbackNotCallableException(GuardException):
    """The supplied callback is not callable."""

    default_code = "INTERCEPTOR_002"


class MemberAlreadyExistsException(GuardException):
    """The member to add already exists on the target."""

    default_code = "INTERCEPTOR_003"


class MemberNotInjectedException(GuardException):
    """The member to detach was not injected by this interceptor."""

    default_code = "INTERCEPTOR_004"


class InvalidMemberNameException(GuardException):
    """The member name cannot be used as a property name."""

    default_code = "INTERCEPTOR_005"


class TargetNotWritableException(GuardException):
    """The target refused the member write or removal."""

    default_code = "INTERCEPTOR_006"


class MemberNotReadableException(GuardException):
    """Reading the member from the target raised an error."""

    default_code = "INTERCEPTOR_007"
