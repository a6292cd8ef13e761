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
"""Hook annotations — author-supplied logic injected around proxied members.

A hook is an instance of a :class:`ProxierAnnotation` subclass used as a
decorator on a method or property::

    class Trace(ProxierAnnotation):
        def inject(self):
            def fragment(invocation):
                print(f"calling {invocation.member_name}")
            return fragment

    @proxied
    class Account:
        @Trace(is_before_call=True)
        def deposit(self, amount): ...

``inject()`` is the injection capability: it is called once, while the
proxy type is synthesized, and returns the fragment that runs on every
call of the generated override.
"""

from __future__ import annotations

import abc
import inspect
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from proxier.proxy.types import Invocation

Fragment = Callable[["Invocation"], None]

M = TypeVar("M")

HOOKS_ATTR = "__proxier_hooks__"
PARAMETER_HOOKS_ATTR = "__proxier_parameter_hooks__"


class ProxierAnnotation(abc.ABC):
    """Base type for every hook.

    Attributes:
        is_before_call: Run the fragment before the delegated call when
            true, after it otherwise. Defaults to false.
    """

    def __init__(self, is_before_call: bool = False) -> None:
        self.is_before_call = is_before_call

    @abc.abstractmethod
    def inject(self) -> Fragment:
        """Return the fragment to run inside the generated override."""

    def __call__(self, member: M) -> M:
        """Attach this hook to a function or property, keeping declaration order."""
        attach_hook(member, self)
        return member

    def __repr__(self) -> str:
        return f"{type(self).__name__}(is_before_call={self.is_before_call!r})"


class ParameterAnnotation(ProxierAnnotation):
    """A hook bound to one parameter through :func:`~proxier.annotations.parameter`.

    ``index`` is written by the injection pipeline before ``inject()`` is
    called: it holds the 1-based position of the targeted parameter.
    Parameter hooks always run before the delegated call, whatever their
    ``is_before_call`` flag says.
    """

    # Reserved for targeting the return value. Never assigned.
    RETURN_VALUE_INDEX = -1

    def __init__(self, is_before_call: bool = False) -> None:
        super().__init__(is_before_call)
        self.index: int = 0

    def __call__(self, member: M) -> M:
        raise TypeError(
            f"{type(self).__name__} is a parameter hook; attach it with @parameter(name, hook)"
        )


def _hook_carrier(member: Any) -> Any:
    """Return the function that stores hook metadata for *member*."""
    if isinstance(member, property):
        carrier = member.fget if member.fget is not None else member.fset
        if carrier is None:
            raise TypeError("cannot attach hooks to a property without accessors")
        return carrier
    if inspect.isfunction(member):
        return member
    raise TypeError(f"hooks can only decorate functions or properties, not {type(member).__name__}")


def attach_hook(member: Any, hook: ProxierAnnotation) -> None:
    carrier = _hook_carrier(member)
    # Decorators apply bottom-up; prepend so the list reads top-down.
    existing = list(getattr(carrier, HOOKS_ATTR, ()))
    setattr(carrier, HOOKS_ATTR, [hook, *existing])


def get_hooks(function: Any) -> list[ProxierAnnotation]:
    """Return the member-level hooks declared on *function*, in declaration order."""
    return list(getattr(function, HOOKS_ATTR, ()))


def get_parameter_hooks(function: Any) -> dict[str, list[ParameterAnnotation]]:
    """Return the parameter hooks declared on *function*, keyed by parameter name."""
    return {name: list(hooks) for name, hooks in getattr(function, PARAMETER_HOOKS_ATTR, {}).items()}
