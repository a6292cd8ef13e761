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
"""Proxy engine: classification, synthesis, hook injection and the generator facade."""

from proxier.proxy.classifier import classify
from proxier.proxy.generator import ProxyGenerator
from proxier.proxy.lazy import Lazy
from proxier.proxy.pipeline import InheritedCall, WrappedCall, build_override
from proxier.proxy.registry import SynthesisContainer, fresh_id, get_container
from proxier.proxy.synthesizer import synthesize
from proxier.proxy.types import InterceptedMember, InterceptedProperty, Invocation, TypeDescriptor

__all__ = [
    "InheritedCall",
    "InterceptedMember",
    "InterceptedProperty",
    "Invocation",
    "Lazy",
    "ProxyGenerator",
    "SynthesisContainer",
    "TypeDescriptor",
    "WrappedCall",
    "build_override",
    "classify",
    "fresh_id",
    "get_container",
    "synthesize",
]
