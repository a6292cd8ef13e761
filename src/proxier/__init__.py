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
"""Proxier — runtime synthesis of hook-injecting proxy subtypes.

Mark a class with :func:`proxied`, attach hooks to its members and ask
:class:`ProxyGenerator` (or :func:`new`) for instances::

    @proxied
    class Account:
        @Audit(is_before_call=True)
        def deposit(self, amount): ...

    account = proxier.new(Account)
"""

from __future__ import annotations

from typing import TypeVar

from proxier.annotations import (
    Fragment,
    ParameterAnnotation,
    ProxierAnnotation,
    observable,
    on_change,
    on_observe,
    parameter,
    proxied,
    wrapped,
)
from proxier.config.properties import LoggingProperties, SynthesisProperties
from proxier.core.config import Config
from proxier.kernel.exceptions import ParameterHookException, ProxierException, ProxyConfigurationException
from proxier.logging import StructlogAdapter
from proxier.proxy import registry
from proxier.proxy.generator import ProxyGenerator
from proxier.proxy.types import Invocation, TypeDescriptor

T = TypeVar("T")

__version__ = "0.1.0"


def new(source_type: type[T]) -> T:
    """Return a new (possibly proxied) instance of *source_type*."""
    return ProxyGenerator.get_instance(source_type).new()


def is_proxied(source_type: type[T], value: T | None) -> bool:
    """Return true when *value* is a generated proxy of *source_type*."""
    return ProxyGenerator.get_instance(source_type).is_proxied(value)


def extract(source_type: type[T], value: T) -> T:
    """Return the instance wrapped by *value*, or *value* itself."""
    return ProxyGenerator.get_instance(source_type).extract(value)


def configure(config: Config) -> None:
    """Apply logging and synthesis settings from *config*.

    Synthesis settings only take effect if no proxy type has been
    generated yet.
    """
    StructlogAdapter().configure(config)
    registry.configure(config.bind(SynthesisProperties))


__all__ = [
    "Config",
    "Fragment",
    "Invocation",
    "LoggingProperties",
    "ParameterAnnotation",
    "ParameterHookException",
    "ProxierAnnotation",
    "ProxierException",
    "ProxyConfigurationException",
    "ProxyGenerator",
    "SynthesisProperties",
    "TypeDescriptor",
    "configure",
    "extract",
    "is_proxied",
    "new",
    "observable",
    "on_change",
    "on_observe",
    "parameter",
    "proxied",
    "wrapped",
]
