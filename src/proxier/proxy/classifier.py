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
"""Type classifier — reads a class's markers and overridable surface once."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from typing import Any

import structlog

from proxier.annotations.hooks import ProxierAnnotation, get_hooks, get_parameter_hooks
from proxier.annotations.markers import (
    OBSERVABLE_ATTR,
    ON_CHANGE_ATTR,
    ON_OBSERVE_ATTR,
    PROXIED_ATTR,
    WRAPPED_ATTR,
    has_class_marker,
    is_handler,
)
from proxier.kernel.exceptions import ParameterHookException
from proxier.proxy.types import InterceptedMember, InterceptedProperty, TypeDescriptor

logger = structlog.get_logger("proxier.proxy.classifier")

_TPFLAGS_BASETYPE = 1 << 10


def is_sealed(cls: type) -> bool:
    """Return true when *cls* cannot be subclassed or is declared ``typing.final``."""
    if not cls.__flags__ & _TPFLAGS_BASETYPE:
        return True
    return bool(vars(cls).get("__final__", False))


def is_overridable(fn: Any) -> bool:
    return inspect.isfunction(fn) and not getattr(fn, "__final__", False)


def classify(cls: type) -> TypeDescriptor:
    """Build the :class:`TypeDescriptor` for *cls*.

    A class without the ``@proxied`` marker, or one that is sealed,
    classifies as non-proxyable with every other field left empty.

    Raises:
        ParameterHookException: If a proxyable class declares a parameter
            hook for a parameter its member does not have.
    """
    if not has_class_marker(cls, PROXIED_ATTR) or is_sealed(cls):
        return TypeDescriptor(source_type=cls)

    methods: dict[str, InterceptedMember] = {}
    properties: dict[str, InterceptedProperty] = {}
    on_change_handler: Callable[..., None] | None = None
    on_observe_handler: Callable[..., Any] | None = None

    for name, attr in _iter_members(cls):
        if isinstance(attr, property):
            if not name.startswith("_"):
                intercepted = _classify_property(cls, name, attr)
                if intercepted is not None:
                    properties[name] = intercepted
            continue

        if not inspect.isfunction(attr):
            continue

        if is_handler(attr) or not is_overridable(attr):
            # First match wins; later handlers are ignored.
            if on_change_handler is None and getattr(attr, ON_CHANGE_ATTR, False):
                on_change_handler = attr
            elif on_observe_handler is None and getattr(attr, ON_OBSERVE_ATTR, False):
                on_observe_handler = attr
            continue

        if name.startswith("_"):
            continue

        methods[name] = _member(cls, name, attr, hooks=tuple(get_hooks(attr)))

    descriptor = TypeDescriptor(
        source_type=cls,
        is_proxyable=True,
        is_observable=has_class_marker(cls, OBSERVABLE_ATTR),
        is_wrapped=has_class_marker(cls, WRAPPED_ATTR),
        intercepted_methods=methods,
        intercepted_properties=properties,
        on_change_handler=on_change_handler,
        on_observe_handler=on_observe_handler,
    )
    logger.debug(
        "type_classified",
        source=cls.__qualname__,
        observable=descriptor.is_observable,
        wrapped=descriptor.is_wrapped,
        methods=len(methods),
        properties=len(properties),
    )
    return descriptor


def _iter_members(cls: type) -> Iterator[tuple[str, Any]]:
    """Yield the most-derived definition of each name along the MRO, ``object`` excluded."""
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            yield name, attr


def _classify_property(cls: type, name: str, prop: property) -> InterceptedProperty | None:
    getter_fn = prop.fget if is_overridable(prop.fget) else None
    setter_fn = prop.fset if is_overridable(prop.fset) else None
    if getter_fn is None and setter_fn is None:
        return None

    # Accessors share the property's hook list.
    hooks: list[ProxierAnnotation] = []
    for accessor in (prop.fget, prop.fset):
        for hook in get_hooks(accessor):
            if not any(hook is known for known in hooks):
                hooks.append(hook)
    shared = tuple(hooks)

    return InterceptedProperty(
        name=name,
        prop=prop,
        hooks=shared,
        getter=None if getter_fn is None else _member(cls, name, getter_fn, shared, property_name=name),
        setter=(
            None
            if setter_fn is None
            else _member(cls, name, setter_fn, shared, property_name=name, returns_value=False)
        ),
    )


def _member(
    cls: type,
    name: str,
    fn: Callable[..., Any],
    hooks: tuple[ProxierAnnotation, ...],
    property_name: str | None = None,
    returns_value: bool = True,
) -> InterceptedMember:
    signature = inspect.signature(fn)
    declared = get_parameter_hooks(fn)
    # Parameter order, ``self`` excluded.
    parameter_names = list(signature.parameters)[1:]
    unknown = [key for key in declared if key not in parameter_names]
    if unknown:
        raise ParameterHookException(
            f"{cls.__qualname__}.{name} declares hooks for unknown parameter(s): {', '.join(unknown)}",
            context={"type": cls.__qualname__, "member": name, "parameters": unknown},
        )
    parameter_hooks = tuple(
        (param, tuple(declared[param])) for param in parameter_names if param in declared
    )
    return InterceptedMember(
        name=name,
        function=fn,
        signature=signature,
        hooks=hooks,
        parameter_hooks=parameter_hooks,
        property_name=property_name,
        returns_value=returns_value,
        is_coroutine=inspect.iscoroutinefunction(fn),
    )
