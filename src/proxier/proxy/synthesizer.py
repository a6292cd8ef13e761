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
"""Proxy synthesizer — builds the generated subtype for one source type.

Two shapes exist:

* override shape: the proxy extends the source type and each override
  calls the inherited implementation;
* wrapped shape: the proxy also extends the source type but owns a
  private, read-only instance of it and forwards every intercepted call,
  attribute access, ``__eq__`` and ``__hash__`` to that instance.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

import structlog

from proxier.kernel.exceptions import ProxyConfigurationException
from proxier.proxy.pipeline import Delegation, InheritedCall, WrappedCall, build_override
from proxier.proxy.registry import SynthesisContainer, fresh_id, get_container
from proxier.proxy.types import InterceptedMember, InterceptedProperty, TypeDescriptor

logger = structlog.get_logger("proxier.proxy.synthesizer")

SOURCE_ATTR = "__proxier_source__"
WRAPPED_FIELD_ATTR = "__proxier_wrapped_field__"

_REQUIRED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


def synthesize(descriptor: TypeDescriptor, container: SynthesisContainer | None = None) -> type:
    """Generate the proxy type for a proxyable *descriptor*.

    Raises:
        ValueError: If the descriptor is not proxyable.
        ProxyConfigurationException: If a wrapped source type cannot be
            constructed without arguments, or a hook's ``inject()`` does
            not return a callable.
    """
    if not descriptor.is_proxyable:
        raise ValueError(f"{descriptor.source_type.__qualname__} is not proxyable")

    container = container or get_container()
    source = descriptor.source_type
    namespace: dict[str, Any] = {
        "__doc__": f"Proxy of {source.__module__}.{source.__qualname__} generated by proxier.",
        SOURCE_ATTR: source,
    }

    delegation: Delegation
    field_name = None
    if descriptor.is_wrapped:
        field_name = f"_wrapped_instance_{fresh_id()}"
        _require_parameterless_constructor(source)
        namespace[WRAPPED_FIELD_ATTR] = field_name
        delegation = WrappedCall(field_name)
    else:
        delegation = InheritedCall()

    for name, member in descriptor.intercepted_methods.items():
        namespace[name] = build_override(member, delegation, member.hooks, descriptor)

    for name, intercepted in descriptor.intercepted_properties.items():
        namespace[name] = _property_override(intercepted, delegation, descriptor)

    if field_name is not None:
        namespace.update(_wrapped_members(source, field_name, namespace))

    generated = container.define(container.type_name(source), (source,), namespace)
    logger.info(
        "proxy_type_synthesized",
        source=source.__qualname__,
        proxy=generated.__name__,
        shape="wrapped" if descriptor.is_wrapped else "override",
    )
    return generated


def _property_override(
    intercepted: InterceptedProperty,
    delegation: Delegation,
    descriptor: TypeDescriptor,
) -> property:
    original = intercepted.prop

    def accessor(member: InterceptedMember | None, fallback: Callable[..., Any] | None) -> Callable[..., Any] | None:
        if member is None:
            return fallback
        return build_override(member, delegation, intercepted.hooks, descriptor)

    return property(
        accessor(intercepted.getter, original.fget),
        accessor(intercepted.setter, original.fset),
        original.fdel,
        original.__doc__,
    )


def _require_parameterless_constructor(source: type) -> None:
    try:
        signature = inspect.signature(source)
    except (TypeError, ValueError):
        # No introspectable signature; construction is checked on first use.
        return
    required = [
        p.name for p in signature.parameters.values() if p.kind in _REQUIRED_KINDS and p.default is p.empty
    ]
    if required:
        raise ProxyConfigurationException(
            f"{source.__qualname__} is @wrapped but cannot be constructed without arguments "
            f"(requires: {', '.join(required)})",
            context={"type": source.__qualname__, "parameters": required},
        )


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _wrapped_members(source: type, field_name: str, namespace: dict[str, Any]) -> dict[str, Any]:
    """Build the constructor, forwarding and equality members of the wrapped shape.

    Only names defined on the generated class itself (the overrides, the
    wrapped field and dunders) are answered by the proxy. Every other read
    and write reaches the wrapped instance, including class-level defaults
    and ``__slots__`` members of the source type. Writes stay on the proxy
    only for the properties the generated class defines, whose accessors
    forward in turn.
    """
    local_names = frozenset(namespace) | {field_name}
    local_properties = frozenset(name for name, value in namespace.items() if isinstance(value, property))

    def __init__(self: Any) -> None:
        object.__setattr__(self, field_name, source())

    def __getattribute__(self: Any, name: str) -> Any:
        if name in local_names or _is_dunder(name):
            return object.__getattribute__(self, name)
        return getattr(object.__getattribute__(self, field_name), name)

    def __setattr__(self: Any, name: str, value: Any) -> None:
        if name == field_name:
            raise AttributeError(f"{name} is read-only")
        if name in local_properties:
            object.__setattr__(self, name, value)
        else:
            setattr(object.__getattribute__(self, field_name), name, value)

    def __delattr__(self: Any, name: str) -> None:
        if name == field_name:
            raise AttributeError(f"{name} is read-only")
        if name in local_properties:
            object.__delattr__(self, name)
        else:
            delattr(object.__getattribute__(self, field_name), name)

    members: dict[str, Any] = {
        "__init__": __init__,
        "__getattribute__": __getattribute__,
        "__setattr__": __setattr__,
        "__delattr__": __delattr__,
    }

    if not getattr(source.__eq__, "__final__", False):

        def __eq__(self: Any, other: object) -> Any:
            return object.__getattribute__(self, field_name).__eq__(other)

        members["__eq__"] = __eq__

    if source.__hash__ is None or getattr(source.__hash__, "__final__", False):
        # Set explicitly: defining __eq__ alone would reset __hash__ to None.
        members["__hash__"] = source.__hash__
    else:

        def __hash__(self: Any) -> int:
            return object.__getattribute__(self, field_name).__hash__()

        members["__hash__"] = __hash__

    return members
