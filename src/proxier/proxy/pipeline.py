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
"""Hook injection pipeline — builds one generated override per intercepted member.

Every override runs, in this fixed order:

1. member hooks with ``is_before_call=True``, in declaration order;
2. the on-change (setter) or on-observe (getter) handler, for property
   accessors of observable types with the handler bound;
3. every parameter hook, in parameter order, whatever its phase flag;
4. the delegated call, its result captured as ``invocation.return_value``;
5. member hooks with ``is_before_call=False``, in declaration order;
6. return the captured value.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from proxier.annotations.hooks import Fragment, ProxierAnnotation
from proxier.kernel.exceptions import ProxyConfigurationException
from proxier.proxy.types import InterceptedMember, Invocation, TypeDescriptor


class Delegation(Protocol):
    """Performs the delegated call of a generated override."""

    def __call__(self, proxy: Any, member: InterceptedMember, args: tuple, kwargs: dict[str, Any]) -> Any: ...


class InheritedCall:
    """Early-bound delegation: call the inherited implementation directly.

    The function captured at classification time is invoked with the proxy
    as ``self``, so the call never re-enters the override.
    """

    def __call__(self, proxy: Any, member: InterceptedMember, args: tuple, kwargs: dict[str, Any]) -> Any:
        return member.function(proxy, *args, **kwargs)


class WrappedCall:
    """Late-bound delegation: call through the wrapped instance.

    The member is looked up on the wrapped instance at call time, so its
    most-derived implementation runs.
    """

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name

    def __call__(self, proxy: Any, member: InterceptedMember, args: tuple, kwargs: dict[str, Any]) -> Any:
        inner = object.__getattribute__(proxy, self.field_name)
        if not member.is_accessor:
            return getattr(inner, member.name)(*args, **kwargs)
        if member.returns_value:
            return getattr(inner, member.property_name)
        (value,) = args
        setattr(inner, member.property_name, value)
        return None


def build_override(
    member: InterceptedMember,
    delegation: Delegation,
    hooks: Sequence[ProxierAnnotation],
    descriptor: TypeDescriptor,
) -> Callable[..., Any]:
    """Return the override function for *member*.

    Each hook's ``inject()`` is called exactly once, here.

    Raises:
        ProxyConfigurationException: If a hook's ``inject()`` does not
            return a callable fragment.
    """
    prelude = [_inject(hook, member) for hook in hooks if hook.is_before_call]

    observer = _observer(member, descriptor)
    if observer is not None:
        prelude.append(observer)

    prelude.extend(_parameter_fragments(member))

    epilogue = [_inject(hook, member) for hook in hooks if not hook.is_before_call]

    name = member.name
    signature = member.signature

    if member.is_coroutine:

        @functools.wraps(member.function)
        async def async_override(self: Any, *args: Any, **kwargs: Any) -> Any:
            invocation = Invocation(target=self, member_name=name, args=args, kwargs=kwargs, signature=signature)
            for fragment in prelude:
                fragment(invocation)
            invocation.return_value = await delegation(self, member, args, kwargs)
            for fragment in epilogue:
                fragment(invocation)
            return invocation.return_value

        return async_override

    @functools.wraps(member.function)
    def override(self: Any, *args: Any, **kwargs: Any) -> Any:
        invocation = Invocation(target=self, member_name=name, args=args, kwargs=kwargs, signature=signature)
        for fragment in prelude:
            fragment(invocation)
        invocation.return_value = delegation(self, member, args, kwargs)
        for fragment in epilogue:
            fragment(invocation)
        if not member.returns_value:
            return None
        return invocation.return_value

    return override


def _inject(hook: ProxierAnnotation, member: InterceptedMember) -> Fragment:
    fragment = hook.inject()
    if not callable(fragment):
        raise ProxyConfigurationException(
            f"{hook!r} on {member.name} returned {type(fragment).__name__} from inject(), expected a callable",
            context={"hook": type(hook).__name__, "member": member.name},
        )
    return fragment


def _parameter_fragments(member: InterceptedMember) -> list[Fragment]:
    names = list(member.signature.parameters)[1:]
    fragments: list[Fragment] = []
    for param, param_hooks in member.parameter_hooks:
        index = names.index(param) + 1
        for hook in param_hooks:
            hook.index = index
            fragments.append(_inject(hook, member))
    return fragments


def _observer(member: InterceptedMember, descriptor: TypeDescriptor) -> Fragment | None:
    """Return the notification fragment for an observable accessor, if any."""
    if not member.is_accessor or not descriptor.is_observable:
        return None

    handler = descriptor.on_observe_handler if member.returns_value else descriptor.on_change_handler
    if handler is None:
        return None

    property_name = member.property_name

    def notify(invocation: Invocation) -> None:
        handler(invocation.target, property_name)

    return notify
