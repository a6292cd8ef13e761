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
"""Declarative markers read by the type classifier."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from proxier.annotations.hooks import PARAMETER_HOOKS_ATTR, ParameterAnnotation

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])

PROXIED_ATTR = "__proxier_proxied__"
OBSERVABLE_ATTR = "__proxier_observable__"
WRAPPED_ATTR = "__proxier_wrapped__"
ON_CHANGE_ATTR = "__proxier_on_change__"
ON_OBSERVE_ATTR = "__proxier_on_observe__"


# ---------------------------------------------------------------------------
# Class markers — read from the class's own namespace, never inherited
# ---------------------------------------------------------------------------


def proxied(cls: T) -> T:
    """Mark a class as eligible for proxy generation.

    Without this marker :class:`~proxier.proxy.generator.ProxyGenerator`
    returns plain instances of the class.
    """
    setattr(cls, PROXIED_ATTR, True)
    return cls


def observable(cls: T) -> T:
    """Fire the on-change/on-observe handlers from property accessors.

    Only meaningful together with :func:`proxied`.
    """
    setattr(cls, OBSERVABLE_ATTR, True)
    return cls


def wrapped(cls: T) -> T:
    """Make the proxy own and forward to an inner instance of the class.

    Only meaningful together with :func:`proxied`. The class must be
    constructible without arguments.
    """
    setattr(cls, WRAPPED_ATTR, True)
    return cls


def has_class_marker(cls: type, attr: str) -> bool:
    return bool(vars(cls).get(attr, False))


# ---------------------------------------------------------------------------
# Handler markers
# ---------------------------------------------------------------------------


def on_change(fn: F) -> F:
    """Mark the method called with a property's name whenever it is set."""
    setattr(fn, ON_CHANGE_ATTR, True)
    return fn


def on_observe(fn: F) -> F:
    """Mark the method called with a property's name whenever it is read."""
    setattr(fn, ON_OBSERVE_ATTR, True)
    return fn


def is_handler(fn: Any) -> bool:
    return bool(getattr(fn, ON_CHANGE_ATTR, False) or getattr(fn, ON_OBSERVE_ATTR, False))


# ---------------------------------------------------------------------------
# Parameter hooks
# ---------------------------------------------------------------------------


def parameter(name: str, *hooks: ParameterAnnotation) -> Callable[[F], F]:
    """Attach parameter hooks to the parameter called *name*.

    Usage::

        @parameter("amount", Positive())
        def deposit(self, amount): ...

    Raises:
        TypeError: If no hooks are given or one is not a ParameterAnnotation.
    """
    if not hooks:
        raise TypeError("parameter() requires at least one hook")
    for hook in hooks:
        if not isinstance(hook, ParameterAnnotation):
            raise TypeError(f"parameter() expects ParameterAnnotation instances, got {type(hook).__name__}")

    def decorator(fn: F) -> F:
        if not inspect.isfunction(fn):
            raise TypeError("parameter() can only decorate functions")
        table = {key: list(value) for key, value in getattr(fn, PARAMETER_HOOKS_ATTR, {}).items()}
        # Decorators apply bottom-up; prepend so the list reads top-down.
        table[name] = [*hooks, *table.get(name, [])]
        setattr(fn, PARAMETER_HOOKS_ATTR, table)
        return fn

    return decorator
