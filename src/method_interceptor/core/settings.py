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
"""InterceptorSettings — typed settings bound to the ``interceptor`` prefix."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationError

from method_interceptor.core.config import Config, config_properties
from method_interceptor.kernel.exceptions import ConfigurationException


@config_properties(prefix="interceptor")
class InterceptorSettings(BaseModel):
    """Behaviour switches for :class:`~method_interceptor.aop.interceptor.MethodInterceptor`.

    Attributes:
        strict: Raise a :class:`~method_interceptor.kernel.exceptions.GuardException`
            on guard failures instead of silently skipping the operation.
        log_decorations: Emit debug events for every applied decoration.
        configure_logging: Let the interceptor configure structlog from the
            ``interceptor.logging`` section of its :class:`Config`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    strict: bool = False
    log_decorations: bool = True
    configure_logging: bool = False

    @classmethod
    def from_config(cls, config: Config) -> InterceptorSettings:
        """Bind settings from *config*, applying ``INTERCEPTOR_*`` env overrides."""
        return config.bind(cls)

    @classmethod
    def of(cls, **values: object) -> InterceptorSettings:
        """Build settings from keyword values, validating them."""
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigurationException(
                f"Invalid interceptor settings: {exc}",
                code="CONFIG_001",
                context={"values": values},
            ) from exc
