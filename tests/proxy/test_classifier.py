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
"""Tests for the type classifier."""

from __future__ import annotations

from typing import final

import pytest

from proxier.annotations import (
    ParameterAnnotation,
    ProxierAnnotation,
    observable,
    on_change,
    on_observe,
    parameter,
    proxied,
    wrapped,
)
from proxier.kernel.exceptions import ParameterHookException
from proxier.proxy.classifier import classify, is_sealed


class Noop(ProxierAnnotation):
    def inject(self):
        return lambda invocation: None


class NoopParameter(ParameterAnnotation):
    def inject(self):
        return lambda invocation: None


# ---------------------------------------------------------------------------
# Class markers
# ---------------------------------------------------------------------------


class TestClassMarkers:
    def test_unmarked_type_is_not_proxyable(self) -> None:
        class Plain:
            def work(self) -> None:
                pass

        descriptor = classify(Plain)

        assert descriptor.is_proxyable is False
        assert descriptor.is_observable is False
        assert descriptor.is_wrapped is False
        assert dict(descriptor.intercepted_methods) == {}
        assert dict(descriptor.intercepted_properties) == {}
        assert descriptor.on_change_handler is None

    def test_flags_follow_markers(self) -> None:
        @proxied
        @observable
        @wrapped
        class Full:
            pass

        descriptor = classify(Full)

        assert descriptor.is_proxyable is True
        assert descriptor.is_observable is True
        assert descriptor.is_wrapped is True

    def test_markers_are_not_inherited(self) -> None:
        @proxied
        @wrapped
        class Base:
            pass

        class Derived(Base):
            pass

        assert classify(Derived).is_proxyable is False

    def test_final_type_is_not_proxyable(self) -> None:
        @proxied
        @final
        class Sealed:
            pass

        assert classify(Sealed).is_proxyable is False

    def test_builtin_without_subclassing_is_sealed(self) -> None:
        assert is_sealed(bool) is True
        assert is_sealed(int) is False


# ---------------------------------------------------------------------------
# Methods
# ---------------------------------------------------------------------------


class TestMethods:
    def test_collects_public_instance_methods(self) -> None:
        @proxied
        class Service:
            def work(self) -> None:
                pass

            async def fetch(self) -> None:
                pass

            def _helper(self) -> None:
                pass

            def __len__(self) -> int:
                return 0

            @staticmethod
            def build() -> None:
                pass

            @classmethod
            def create(cls) -> None:
                pass

            @final
            def locked(self) -> None:
                pass

        methods = classify(Service).intercepted_methods

        assert set(methods) == {"work", "fetch"}
        assert methods["fetch"].is_coroutine is True
        assert methods["work"].is_accessor is False

    def test_includes_inherited_methods_but_not_object(self) -> None:
        class Base:
            def inherited(self) -> None:
                pass

        @proxied
        class Service(Base):
            def own(self) -> None:
                pass

        methods = classify(Service).intercepted_methods

        assert set(methods) == {"own", "inherited"}
        assert methods["inherited"].function is Base.inherited

    def test_most_derived_definition_wins(self) -> None:
        class Base:
            def work(self) -> str:
                return "base"

        @proxied
        class Service(Base):
            def work(self) -> str:
                return "derived"

        assert classify(Service).intercepted_methods["work"].function is Service.work

    def test_hooks_keep_declaration_order(self) -> None:
        first, second = Noop(is_before_call=True), Noop()

        @proxied
        class Service:
            @first
            @second
            def work(self) -> None:
                pass

        assert classify(Service).intercepted_methods["work"].hooks == (first, second)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


class TestHandlers:
    def test_binds_handlers_and_excludes_them_from_interception(self) -> None:
        @proxied
        @observable
        class Model:
            @on_change
            def changed(self, name: str) -> None:
                pass

            @on_observe
            def observed(self, name: str) -> bool:
                return True

        descriptor = classify(Model)

        assert descriptor.on_change_handler is Model.changed
        assert descriptor.on_observe_handler is Model.observed
        assert "changed" not in descriptor.intercepted_methods
        assert "observed" not in descriptor.intercepted_methods

    def test_first_handler_wins(self) -> None:
        @proxied
        class Model:
            @on_change
            def first(self, name: str) -> None:
                pass

            @on_change
            def second(self, name: str) -> None:
                pass

        assert classify(Model).on_change_handler is Model.first

    def test_private_and_inherited_handlers_are_found(self) -> None:
        class Base:
            @on_observe
            def _observed(self, name: str) -> bool:
                return True

        @proxied
        class Model(Base):
            @on_change
            def _changed(self, name: str) -> None:
                pass

        descriptor = classify(Model)

        assert descriptor.on_change_handler is Model._changed
        assert descriptor.on_observe_handler is Base._observed


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestProperties:
    def test_accessors_share_property_hooks(self) -> None:
        hook = Noop(is_before_call=True)

        @proxied
        class Model:
            @hook
            @property
            def name(self) -> str:
                return ""

            @name.setter
            def name(self, value: str) -> None:
                pass

        intercepted = classify(Model).intercepted_properties["name"]

        assert intercepted.hooks == (hook,)
        assert intercepted.getter.hooks == (hook,)
        assert intercepted.setter.hooks == (hook,)
        assert intercepted.getter.returns_value is True
        assert intercepted.setter.returns_value is False
        assert intercepted.setter.property_name == "name"

    def test_read_only_property_has_no_setter(self) -> None:
        @proxied
        class Model:
            @property
            def size(self) -> int:
                return 0

        intercepted = classify(Model).intercepted_properties["size"]

        assert intercepted.getter is not None
        assert intercepted.setter is None

    def test_private_properties_are_skipped(self) -> None:
        @proxied
        class Model:
            @property
            def _secret(self) -> int:
                return 0

        assert dict(classify(Model).intercepted_properties) == {}

    def test_property_with_only_final_accessors_is_skipped(self) -> None:
        @proxied
        class Model:
            @property
            @final
            def size(self) -> int:
                return 0

        assert "size" not in classify(Model).intercepted_properties


# ---------------------------------------------------------------------------
# Parameter hooks
# ---------------------------------------------------------------------------


class TestParameterHooks:
    def test_ordered_by_parameter_position(self) -> None:
        on_a, on_b = NoopParameter(), NoopParameter()

        @proxied
        class Service:
            @parameter("b", on_b)
            @parameter("a", on_a)
            def do(self, a: int, b: int) -> None:
                pass

        member = classify(Service).intercepted_methods["do"]

        assert member.parameter_hooks == (("a", (on_a,)), ("b", (on_b,)))

    def test_unknown_parameter_raises(self) -> None:
        @proxied
        class Service:
            @parameter("missing", NoopParameter())
            def do(self, a: int) -> None:
                pass

        with pytest.raises(ParameterHookException, match="missing") as exc_info:
            classify(Service)
        assert exc_info.value.context["parameters"] == ["missing"]

    def test_unknown_parameter_is_ignored_when_not_proxyable(self) -> None:
        class Service:
            @parameter("missing", NoopParameter())
            def do(self, a: int) -> None:
                pass

        assert classify(Service).is_proxyable is False
