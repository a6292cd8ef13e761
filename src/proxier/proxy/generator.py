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
"""ProxyGenerator — the per-type facade handing out proxied instances."""

from __future__ import annotations

import threading
from typing import Any, ClassVar, Generic, TypeVar

from proxier.proxy.classifier import classify
from proxier.proxy.lazy import Lazy
from proxier.proxy.synthesizer import WRAPPED_FIELD_ATTR, synthesize
from proxier.proxy.types import TypeDescriptor

T = TypeVar("T")


class ProxyGenerator(Generic[T]):
    """Create instances of *source_type*, proxied when the type opts in.

    A type opts in with :func:`~proxier.annotations.proxied`. For any other
    type the generator hands out plain instances, reports nothing as
    proxied and extracts values unchanged, so removing the marker never
    breaks callers.

    One generator exists per source type; obtain it with
    :meth:`get_instance`. The proxy type is synthesized on first use and
    reused for the lifetime of the process.

    Usage::

        generator = ProxyGenerator.get_instance(Account)
        account = generator.new()
        generator.is_proxied(account)  # True when Account is @proxied
    """

    _instances: ClassVar[dict[type, Lazy[ProxyGenerator[Any]]]] = {}
    _instances_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, source_type: type[T]) -> None:
        self._source_type = source_type
        self._descriptor = classify(source_type)
        self._proxy_type: Lazy[type[T]] = Lazy(self._generate_or_get_proxy_type)

    @classmethod
    def get_instance(cls, source_type: type[T]) -> ProxyGenerator[T]:
        """Return the generator for *source_type*, creating it on first request."""
        with cls._instances_lock:
            cell = cls._instances.get(source_type)
            if cell is None:
                cell = Lazy(lambda: cls(source_type))
                cls._instances[source_type] = cell
        # Classification runs outside the registry lock, under the cell's own.
        return cell.value

    @property
    def source_type(self) -> type[T]:
        return self._source_type

    @property
    def descriptor(self) -> TypeDescriptor:
        return self._descriptor

    @property
    def is_proxyable(self) -> bool:
        return self._descriptor.is_proxyable

    @property
    def is_observable(self) -> bool:
        return self._descriptor.is_observable

    @property
    def is_wrapped(self) -> bool:
        return self._descriptor.is_wrapped

    @property
    def proxy_type(self) -> type[T]:
        """The generated type, or the source type itself when not proxyable."""
        return self._proxy_type.value

    def new(self) -> T:
        """Return a new instance of the proxy type (or of the source type)."""
        return self.proxy_type()

    def is_proxied(self, value: T | None) -> bool:
        """Return true when *value* is an instance of the generated proxy type."""
        return value is not None and self.is_proxyable and isinstance(value, self.proxy_type)

    def extract(self, value: T) -> T:
        """Return the wrapped instance of a wrapped proxy, else *value* unchanged."""
        if self.is_wrapped and self.is_proxied(value):
            return object.__getattribute__(value, getattr(self.proxy_type, WRAPPED_FIELD_ATTR))
        return value

    def _generate_or_get_proxy_type(self) -> type[T]:
        if not self._descriptor.is_proxyable:
            return self._source_type
        return synthesize(self._descriptor)

    def __repr__(self) -> str:
        return f"ProxyGenerator({self._source_type.__qualname__}, proxyable={self.is_proxyable})"
