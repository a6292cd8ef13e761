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
"""End-to-end tests through the public ``proxier`` API."""

from __future__ import annotations

import pytest

import proxier
from proxier import (
    Config,
    Invocation,
    ParameterAnnotation,
    ProxierAnnotation,
    observable,
    on_change,
    parameter,
    proxied,
    wrapped,
)


class Audit(ProxierAnnotation):
    """Records the member name and arguments before or after each call."""

    def __init__(self, log: list, is_before_call: bool = False) -> None:
        super().__init__(is_before_call)
        self.log = log

    def inject(self):
        phase = "before" if self.is_before_call else "after"

        def fragment(invocation: Invocation) -> None:
            self.log.append((phase, invocation.member_name, invocation.args, invocation.return_value))

        return fragment


class Positive(ParameterAnnotation):
    def inject(self):
        index = self.index

        def fragment(invocation: Invocation) -> None:
            if invocation.argument(index) <= 0:
                raise ValueError(f"{invocation.member_name}: argument {index} must be positive")

        return fragment


def _account_type(log: list, changes: list):
    @proxied
    @observable
    @wrapped
    class Account:
        def __init__(self) -> None:
            self.balance = 0
            self._owner = ""

        @Audit(log, is_before_call=True)
        @Audit(log)
        @parameter("amount", Positive())
        def deposit(self, amount: int) -> int:
            self.balance += amount
            return self.balance

        @property
        def owner(self) -> str:
            return self._owner

        @owner.setter
        def owner(self, value: str) -> None:
            self._owner = value

        @on_change
        def _changed(self, name: str) -> None:
            changes.append(name)

    return Account


class TestAccountScenario:
    def test_full_flow(self) -> None:
        log: list = []
        changes: list[str] = []
        Account = _account_type(log, changes)

        account = proxier.new(Account)

        assert proxier.is_proxied(Account, account) is True
        assert account.deposit(10) == 10
        assert log == [("before", "deposit", (10,), None), ("after", "deposit", (10,), 10)]

        account.owner = "ada"
        assert changes == ["owner"]
        assert account.owner == "ada"

        inner = proxier.extract(Account, account)
        assert type(inner) is Account
        assert inner.balance == 10
        assert inner.owner == "ada"
        assert proxier.is_proxied(Account, inner) is False

    def test_parameter_guard_blocks_the_call(self) -> None:
        log: list = []
        Account = _account_type(log, [])
        account = proxier.new(Account)

        with pytest.raises(ValueError, match="must be positive"):
            account.deposit(-5)

        assert proxier.extract(Account, account).balance == 0
        assert log == [("before", "deposit", (-5,), None)]

    def test_plain_types_pass_through(self) -> None:
        class Plain:
            pass

        instance = proxier.new(Plain)

        assert type(instance) is Plain
        assert proxier.is_proxied(Plain, instance) is False
        assert proxier.extract(Plain, instance) is instance


class TestConfigure:
    def test_configure_applies_logging_settings(self) -> None:
        proxier.configure(Config({"proxier": {"logging": {"level": {"root": "WARNING"}}}}))

        @proxied
        class Service:
            def work(self) -> int:
                return 1

        assert proxier.new(Service).work() == 1
