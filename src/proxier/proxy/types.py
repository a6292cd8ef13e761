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
"""Proxy engine types — Invocation, intercepted members and TypeDescriptor."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from proxier.annotations.hooks import ParameterAnnotation, ProxierAnnotation


@dataclass
class Invocation:
    """One call of a generated override, as seen by hook fragments.

    Attributes:
        target: The proxy instance whose member is being called.
        member_name: Name of the method or property being called.
        args: Positional arguments passed to the member.
        kwargs: Keyword arguments passed to the member.
        signature: Signature of the original member, ``self`` included.
        return_value: The captured result of the delegated call. After-call
            fragments may replace it; the override returns whatever it holds.
    """

    target: Any
    member_name: str
    args: tuple
    kwargs: dict[str, Any]
    signature: inspect.Signature | None = None
    return_value: Any = None

    @functools.cached_property
    def arguments(self) -> dict[str, Any]:
        """Arguments bound to parameter names, defaults applied, ``self`` excluded."""
        if self.signature is None:
            return {}
        bound = self.signature.bind(self.target, *self.args, **self.kwargs)
        bound.apply_defaults()
        return dict(list(bound.arguments.items())[1:])

    def argument(self, index: int) -> Any:
        """Return the value bound to the 1-based parameter *index*."""
        values = list(self.arguments.values())
        if index < 1 or index > len(values):
            raise IndexError(f"{self.member_name} has no parameter at index {index}")
        return values[index - 1]


@dataclass(frozen=True)
class InterceptedMember:
    """A method or property accessor that receives a generated override.

    ``function`` is the inherited implementation the override wraps. For
    accessors ``property_name`` holds the owning property's name and
    ``returns_value`` tells a getter (true) from a setter (false).
    """

    name: str
    function: Callable[..., Any]
    signature: inspect.Signature
    hooks: tuple[ProxierAnnotation, ...] = ()
    parameter_hooks: tuple[tuple[str, tuple[ParameterAnnotation, ...]], ...] = ()
    property_name: str | None = None
    returns_value: bool = True
    is_coroutine: bool = False

    @property
    def is_accessor(self) -> bool:
        return self.property_name is not None


@dataclass(frozen=True)
class InterceptedProperty:
    """A property with at least one overridable accessor.

    Both accessors share ``hooks``, the property's own hook list.
    """

    name: str
    prop: property
    hooks: tuple[ProxierAnnotation, ...] = ()
    getter: InterceptedMember | None = None
    setter: InterceptedMember | None = None


@dataclass(frozen=True)
class TypeDescriptor:
    """Everything the engine knows about one source type, computed once.

    ``is_observable`` and ``is_wrapped`` are only ever true when
    ``is_proxyable`` is.
    """

    source_type: type
    is_proxyable: bool = False
    is_observable: bool = False
    is_wrapped: bool = False
    intercepted_methods: Mapping[str, InterceptedMember] = field(default_factory=dict)
    intercepted_properties: Mapping[str, InterceptedProperty] = field(default_factory=dict)
    on_change_handler: Callable[..., None] | None = None
    on_observe_handler: Callable[..., Any] | None = None
