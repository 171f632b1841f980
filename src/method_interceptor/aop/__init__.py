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
"""Aspect-oriented interception of individual object members."""

from method_interceptor.aop.interceptor import MethodInterceptor, intercept
from method_interceptor.aop.target import MemberTable
from method_interceptor.aop.types import MISSING, CallArguments, MemberKind

__all__ = [
    "MISSING",
    "CallArguments",
    "MemberKind",
    "MemberTable",
    "MethodInterceptor",
    "intercept",
]
