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
"""Exception hierarchy for Proxier.

All engine exceptions inherit from ProxierException, enabling unified
error handling. Failures raised by hook fragments or by the proxied
member itself are never wrapped: they reach the caller unchanged.

Categories:
- ProxyConfigurationException: a type or hook declaration that cannot be
  turned into a working proxy (surfaced at synthesis time)
- ParameterHookException: a parameter hook bound to a parameter name the
  member does not declare
"""

from __future__ import annotations


class ProxierException(Exception):
    """Base exception for all Proxier errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "PROXY_CONFIGURATION").
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


class ProxyConfigurationException(ProxierException):
    """The source type or one of its hooks cannot produce a valid proxy type."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="PROXY_CONFIGURATION", context=context)


class ParameterHookException(ProxyConfigurationException):
    """A parameter hook names a parameter the member does not have."""
