"""Given/when/then behaviour of the scenario builder."""

from __future__ import annotations

from typing import Union

import pytest

from gwt import (
    ConfigurationError,
    Literal,
    Scenario,
    ScenarioConfig,
    UnknownGuardError,
    UnsupportedAuthProviderError,
    UnsupportedFacadeError,
)
from tests.support.fakes import FakeAuth, FakeMail, NotAFacade, User, assert_acted_as


def test_end_to_end_sum():
    def check(sum):
        assert sum == 30

    (
        Scenario()
        .given(lambda: 10, as_="a")
        .given(lambda: 20, as_="b")
        .when(lambda a, b: a + b, as_="sum")
        .then(check)
    )


def test_conditions_then_actions_then_assertion(call_log):
    (
        Scenario()
        .when(lambda: call_log.append("action1"))
        .given(lambda: call_log.append("condition1"))
        .given(lambda: call_log.append("condition2"))
        .then(lambda: call_log.append("assertion"))
    )
    assert call_log == ["condition1", "condition2", "action1", "assertion"]


def test_then_twice_runs_callbacks_once():
    counter = {"calls": 0}

    def count():
        counter["calls"] += 1
        return counter["calls"]

    seen = []
    scenario = Scenario().given(count, as_="count")
    scenario.then(lambda count: seen.append(count))
    scenario.then(lambda count: seen.append(count))

    assert counter["calls"] == 1
    assert seen == [1, 1]


def test_given_value_is_stored_immediately():
    scenario = Scenario().given(5, as_="n")
    assert scenario.store.get("n") == 5
    assert len(scenario.conditions) == 0


def test_given_callable_is_deferred_until_then():
    calls = []

    def five():
        calls.append("five")
        return 5

    scenario = Scenario().given(five, as_="n")
    assert "n" not in scenario.store
    assert calls == []

    scenario.then(lambda n: calls.append(n))
    assert calls == ["five", 5]


def test_given_literal_stores_callable_as_value():
    scenario = Scenario().given(Literal(len), as_="measure")
    assert scenario.store.get("measure") is len


def test_given_value_without_key_uses_type_name():
    scenario = Scenario().given("hello").given([1, 2])
    assert scenario.store.get("str") == "hello"
    assert scenario.store.get("list") == [1, 2]


def test_when_defaults_to_response_key():
    scenario = Scenario().when(lambda: "ok").then(lambda response: None)
    assert scenario.store.get("response") == "ok"


def test_when_without_key_uses_type_name():
    scenario = Scenario().when(lambda: 3.5, as_=None).then(lambda: None)
    assert scenario.store.get("float") == 3.5
    assert "response" not in scenario.store


def test_unnamed_condition_result_keyed_by_type():
    scenario = Scenario().given(lambda: 42).then(lambda: None)
    assert scenario.store.get("int") == 42


def test_name_match_takes_precedence():
    received = []

    def check(x: str):
        received.append(x)

    Scenario().given("value of y", as_="y").given("value of x", as_="x").then(check)
    assert received == ["value of x"]


def test_type_only_match_uses_smallest_key():
    received = []

    def check(number: int):
        received.append(number)

    Scenario().given(2, as_="b").given(1, as_="a").then(check)
    assert received == [1]


def test_actions_receive_condition_results_by_type():
    alice = User("alice", roles=["admin"])

    def is_admin(account: User) -> bool:
        return "admin" in account.roles

    def check(response):
        assert response is True

    Scenario().given(lambda: alice, as_="actor").when(is_admin).then(check)


def test_local_class_annotations_do_not_break_type_injection():
    class Order:
        pass

    order = Order()
    received = []

    def check(items: list[str], placed: Order):
        received.append((items, placed))

    Scenario().given(["x"], as_="lines").given(order, as_="the_order").then(check)
    assert received == [(["x"], order)]


def test_union_annotation_next_to_local_class():
    class Order:
        pass

    order = Order()
    received = []

    def check(label: Union[int, str], placed: Order):
        received.append((label, placed))

    Scenario().given("text", as_="name").given(order, as_="the_order").then(check)
    assert received == [("text", order)]


def test_falsy_results_are_kept_and_injected():
    received = []
    Scenario().given(lambda: 0, as_="count").then(lambda count: received.append(count))
    assert received == [0]


def test_opaque_callable_is_called_without_arguments():
    scenario = Scenario().given(1, as_="a").given(dict, as_="empty").then(lambda: None)
    assert scenario.store.get("empty") == {}


def test_condition_failure_stops_the_pipeline(call_log):
    def fail():
        raise LookupError("no such record")

    scenario = (
        Scenario()
        .given(fail)
        .given(lambda: call_log.append("condition2"))
        .when(lambda: call_log.append("action"))
    )
    with pytest.raises(LookupError, match="no such record"):
        scenario.then(lambda: call_log.append("assertion"))
    assert call_log == []


def test_assertion_failure_propagates_unchanged():
    def check(response):
        assert response == "expected", "wrong response"

    with pytest.raises(AssertionError, match="wrong response"):
        Scenario().when(lambda: "actual").then(check)


def test_missing_argument_propagates_type_error():
    with pytest.raises(TypeError):
        Scenario().when(lambda order_id: order_id).then(lambda: None)


class TestThrows:
    def test_expected_exception_passes(self, call_log):
        def reject():
            raise ValueError("amount must be positive")

        (
            Scenario()
            .throws(ValueError, "must be positive")
            .when(reject)
            .then(lambda: call_log.append("assertion"))
        )
        assert call_log == []

    def test_expected_exception_kind_only(self):
        Scenario().throws(KeyError).when(lambda: {}["missing"]).then(lambda: None)

    def test_missing_exception_fails(self):
        scenario = Scenario().throws(ValueError).when(lambda: "fine")
        with pytest.raises(pytest.fail.Exception):
            scenario.then(lambda: None)

    def test_message_mismatch_fails(self):
        def reject():
            raise ValueError("something else")

        scenario = Scenario().throws(ValueError, "must be positive").when(reject)
        with pytest.raises(AssertionError):
            scenario.then(lambda: None)

    def test_other_exception_propagates(self):
        def reject():
            raise RuntimeError("unexpected")

        scenario = Scenario().throws(ValueError).when(reject)
        with pytest.raises(RuntimeError, match="unexpected"):
            scenario.then(lambda: None)

    def test_expectation_is_consumed(self):
        def reject():
            raise ValueError("once")

        scenario = Scenario().throws(ValueError).when(reject)
        scenario.then(lambda: None)
        scenario.then(lambda: None)


class TestFake:
    def test_fake_is_called_immediately(self):
        Scenario().fake(FakeMail)
        assert FakeMail.faked == 1

    def test_fake_not_called_again_by_then(self):
        Scenario().fake(FakeMail).then(lambda: None)
        assert FakeMail.faked == 1

    @pytest.mark.parametrize("facade", [object, NotAFacade, "Mail"])
    def test_unsupported_facade(self, facade):
        with pytest.raises(UnsupportedFacadeError, match="does not contain the method fake"):
            Scenario().fake(facade)

    def test_unsupported_facade_is_type_error(self):
        with pytest.raises(TypeError):
            Scenario().fake(object)


class TestActingAs:
    def test_principal_injected_as_user(self, auth_config):
        alice = User("alice")
        received = []

        Scenario(auth_config).acting_as(alice).then(lambda user: received.append(user))

        assert received == [alice]
        assert_acted_as(alice, guard="web")

    def test_provider_called_when_scenario_runs(self, auth_config):
        scenario = Scenario(auth_config).acting_as(User("bob"))
        assert FakeAuth.calls == []
        scenario.then(lambda: None)
        assert len(FakeAuth.calls) == 1

    def test_custom_key_and_type_injection(self, auth_config):
        alice = User("alice")
        received = []

        def check(account: User):
            received.append(account)

        Scenario(auth_config).acting_as(alice, as_="actor").then(check)
        assert received == [alice]

    def test_explicit_guard_and_abilities(self, auth_config):
        alice = User("alice")
        Scenario(auth_config).acting_as(alice, guard="api", abilities=["orders:read"]).then(lambda: None)
        assert_acted_as(alice, guard="api", abilities=["orders:read"])

    def test_unknown_guard_fails_before_evaluation(self, auth_config):
        with pytest.raises(UnknownGuardError, match="admin"):
            Scenario(auth_config).acting_as(User("alice"), guard="admin")
        assert FakeAuth.calls == []

    def test_explicit_provider(self):
        alice = User("alice")
        Scenario().acting_as(alice, provider=FakeAuth).then(lambda: None)
        assert_acted_as(alice)

    def test_unsupported_provider(self):
        with pytest.raises(UnsupportedAuthProviderError, match="acting_as"):
            Scenario().acting_as(User("alice"), provider=FakeMail)

    def test_no_provider_configured(self):
        with pytest.raises(ConfigurationError, match="No auth provider"):
            Scenario(ScenarioConfig()).acting_as(User("alice"))


def test_scenario_fixture(scenario):
    scenario.given(2, as_="a").when(lambda a: a * 21).then(lambda response: None)
    assert scenario.store.get("response") == 42
