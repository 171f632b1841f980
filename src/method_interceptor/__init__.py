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
"""method-interceptor — decorate, inject and detach members of live objects."""

from method_interceptor.aop import MISSING, CallArguments, MemberKind, MemberTable, MethodInterceptor, intercept
from method_interceptor.core import Config, InterceptorSettings, config_properties
from method_interceptor.kernel import GuardException, InterceptorException

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "CallArguments",
    "Config",
    "GuardException",
    "InterceptorException",
    "InterceptorSettings",
    "MemberKind",
    "MemberTable",
    "MethodInterceptor",
    "config_properties",
    "intercept",
]
