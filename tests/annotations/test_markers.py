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
"""Tests for class, handler and parameter markers."""

from __future__ import annotations

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
from proxier.annotations.hooks import get_hooks, get_parameter_hooks
from proxier.annotations.markers import (
    OBSERVABLE_ATTR,
    PROXIED_ATTR,
    WRAPPED_ATTR,
    has_class_marker,
    is_handler,
)


class Noop(ProxierAnnotation):
    def inject(self):
        return lambda invocation: None


class NotNone(ParameterAnnotation):
    def inject(self):
        index = self.index

        def fragment(invocation) -> None:
            if invocation.argument(index) is None:
                raise ValueError(f"argument {index} of {invocation.member_name} is None")

        return fragment


# ---------------------------------------------------------------------------
# Class markers
# ---------------------------------------------------------------------------


class TestClassMarkers:
    def test_markers_set_attributes(self) -> None:
        @proxied
        @observable
        @wrapped
        class Marked:
            pass

        assert getattr(Marked, PROXIED_ATTR) is True
        assert getattr(Marked, OBSERVABLE_ATTR) is True
        assert getattr(Marked, WRAPPED_ATTR) is True

    def test_decorators_return_the_class(self) -> None:
        class Marked:
            pass

        assert proxied(Marked) is Marked

    def test_markers_are_read_from_own_namespace(self) -> None:
        @proxied
        class Base:
            pass

        class Derived(Base):
            pass

        assert has_class_marker(Base, PROXIED_ATTR) is True
        assert has_class_marker(Derived, PROXIED_ATTR) is False


# ---------------------------------------------------------------------------
# Handler markers
# ---------------------------------------------------------------------------


class TestHandlerMarkers:
    def test_on_change_and_on_observe(self) -> None:
        @on_change
        def changed(self, name: str) -> None:
            pass

        @on_observe
        def observed(self, name: str) -> bool:
            return True

        def plain(self) -> None:
            pass

        assert is_handler(changed) is True
        assert is_handler(observed) is True
        assert is_handler(plain) is False


# ---------------------------------------------------------------------------
# Hooks
# ---------------------------------------------------------------------------


class TestHookAttachment:
    def test_default_phase_is_after_call(self) -> None:
        assert Noop().is_before_call is False
        assert Noop(is_before_call=True).is_before_call is True

    def test_hooks_on_functions_keep_declaration_order(self) -> None:
        first, second = Noop(), Noop()

        @first
        @second
        def work(self) -> None:
            pass

        assert get_hooks(work) == [first, second]

    def test_hooks_on_property_attach_to_getter(self) -> None:
        hook = Noop()

        class Model:
            @hook
            @property
            def name(self) -> str:
                return ""

        assert get_hooks(Model.name.fget) == [hook]

    def test_hooks_reject_other_objects(self) -> None:
        with pytest.raises(TypeError, match="functions or properties"):
            Noop()(42)

    def test_abstract_inject_is_required(self) -> None:
        class Incomplete(ProxierAnnotation):
            pass

        with pytest.raises(TypeError):
            Incomplete()

    def test_repr_mentions_phase(self) -> None:
        assert repr(Noop(is_before_call=True)) == "Noop(is_before_call=True)"


# ---------------------------------------------------------------------------
# Parameter hooks
# ---------------------------------------------------------------------------


class TestParameterMarker:
    def test_records_hooks_by_parameter_name(self) -> None:
        first, second, other = NotNone(), NotNone(), NotNone()

        @parameter("a", first)
        @parameter("b", other)
        @parameter("a", second)
        def do(self, a, b) -> None:
            pass

        assert get_parameter_hooks(do) == {"a": [first, second], "b": [other]}

    def test_index_starts_unassigned(self) -> None:
        assert NotNone().index == 0
        assert ParameterAnnotation.RETURN_VALUE_INDEX == -1

    def test_requires_hooks(self) -> None:
        with pytest.raises(TypeError, match="at least one hook"):
            parameter("a")

    def test_rejects_member_hooks(self) -> None:
        with pytest.raises(TypeError, match="ParameterAnnotation"):
            parameter("a", Noop())  # type: ignore[arg-type]

    def test_parameter_hooks_cannot_decorate_members(self) -> None:
        with pytest.raises(TypeError, match="@parameter"):

            @NotNone()
            def do(self, a) -> None:
                pass

    def test_not_none_guard_through_proxy(self) -> None:
        from proxier.proxy.generator import ProxyGenerator

        @proxied
        class Service:
            @parameter("value", NotNone())
            def store(self, value: object) -> object:
                return value

        service = ProxyGenerator.get_instance(Service).new()

        assert service.store(1) == 1
        with pytest.raises(ValueError, match="argument 1 of store is None"):
            service.store(None)
