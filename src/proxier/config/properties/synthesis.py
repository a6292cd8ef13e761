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
"""Proxy synthesis configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from proxier.core.config import config_properties


@config_properties(prefix="proxier.synthesis")
@dataclass(frozen=True)
class SynthesisProperties:
    """Configuration for the synthesis container (proxier.synthesis.*).

    ``module_name`` is the dotted name of the synthetic module that holds
    every generated proxy type; a fresh suffix is appended so that two
    processes never share a name. ``type_prefix`` starts every generated
    class name. ``register_module`` publishes the module in ``sys.modules``.
    """

    module_name: str = "proxier.generated"
    type_prefix: str = "ProxyType"
    register_module: bool = True
