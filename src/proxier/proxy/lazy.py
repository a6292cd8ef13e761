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
"""Lazy — a compute-once cell safe under concurrent first use."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class Lazy(Generic[T]):
    """Hold a value produced by *factory* on first access.

    The factory runs under a lock, so racing first readers never run it
    twice. The value is published only after the factory returns: a
    failing factory propagates its exception and leaves the cell empty,
    so the next access retries.

    Usage::

        container = Lazy(lambda: SynthesisContainer.create(properties))
        module = container.value
    """

    __slots__ = ("_factory", "_value", "_lock")

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._value: object = _UNSET
        self._lock = threading.RLock()

    @property
    def value(self) -> T:
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]

        with self._lock:
            # Double-check inside the lock; another thread may have won.
            if self._value is _UNSET:
                self._value = self._factory()
            return self._value  # type: ignore[return-value]

    @property
    def is_initialized(self) -> bool:
        return self._value is not _UNSET
