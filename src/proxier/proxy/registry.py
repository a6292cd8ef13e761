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
"""Synthesis container and name allocation shared by every generated proxy type."""

from __future__ import annotations

import sys
import threading
import types
import uuid

import structlog

from proxier.config.properties.synthesis import SynthesisProperties
from proxier.proxy.lazy import Lazy

logger = structlog.get_logger("proxier.proxy.registry")


def fresh_id() -> str:
    """Return a collision-free token usable inside a Python identifier."""
    return uuid.uuid4().hex


class SynthesisContainer:
    """The single synthetic module every generated proxy type is defined in.

    Generated classes report the module as their ``__module__`` and are
    reachable as its attributes, which keeps them discoverable for
    debugging and introspection.
    """

    def __init__(self, module: types.ModuleType, properties: SynthesisProperties) -> None:
        self._module = module
        self._properties = properties
        self._lock = threading.Lock()
        self._types: dict[str, type] = {}

    @classmethod
    def create(cls, properties: SynthesisProperties) -> SynthesisContainer:
        module_name = f"{properties.module_name}_{fresh_id()}"
        module = types.ModuleType(module_name, "Proxy types generated by proxier.")
        if properties.register_module:
            sys.modules[module_name] = module
        logger.info("synthesis_container_created", module=module_name, registered=properties.register_module)
        return cls(module, properties)

    @property
    def module(self) -> types.ModuleType:
        return self._module

    @property
    def name(self) -> str:
        return self._module.__name__

    @property
    def properties(self) -> SynthesisProperties:
        return self._properties

    def type_name(self, source: type) -> str:
        """Allocate a unique class name for a proxy of *source*."""
        return f"{self._properties.type_prefix}_{source.__name__}_{fresh_id()}"

    def define(self, name: str, bases: tuple[type, ...], namespace: dict[str, object]) -> type:
        """Create the class *name* inside the container and return it."""
        namespace = {**namespace, "__module__": self.name, "__qualname__": name}
        generated = type(bases[0])(name, bases, namespace)
        with self._lock:
            if name in self._types:
                raise ValueError(f"{name} is already defined in {self.name}")
            self._types[name] = generated
            setattr(self._module, name, generated)
        return generated

    def get(self, name: str) -> type | None:
        with self._lock:
            return self._types.get(name)

    def generated_types(self) -> list[type]:
        """Return every type defined so far, in definition order."""
        with self._lock:
            return list(self._types.values())


_properties = SynthesisProperties()
_properties_lock = threading.Lock()
_properties_frozen = False


def _create_container() -> SynthesisContainer:
    global _properties_frozen
    with _properties_lock:
        _properties_frozen = True
        properties = _properties
    return SynthesisContainer.create(properties)


_container: Lazy[SynthesisContainer] = Lazy(_create_container)


def get_container() -> SynthesisContainer:
    """Return the process-wide synthesis container, creating it on first use."""
    return _container.value


def configure(properties: SynthesisProperties) -> bool:
    """Set the properties used when the process-wide container is created.

    Returns false, and changes nothing, once creation has started.
    """
    global _properties
    with _properties_lock:
        if not _properties_frozen:
            _properties = properties
            return True
    logger.warning("synthesis_container_already_created", module=get_container().name)
    return False
