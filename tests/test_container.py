from unittest.mock import MagicMock

import pytest

from lazybind import Container, Kind, UnregisteredDependencyError


def test_get_unregistered_identifier_raises():
    c = Container()
    with pytest.raises(UnregisteredDependencyError):
        c.get("unknown-id")


def test_unregistered_dependency_error_is_a_key_error():
    c = Container()
    with pytest.raises(KeyError) as ctx:
        c.get("unknown-id")
    assert str(ctx.value) == "No dependency registered for identifier: 'unknown-id'"
    assert ctx.value.identifier == "unknown-id"


@pytest.mark.parametrize("payload", ["foo", 4, False, None, {}, [1, 2]])
def test_value_returns_payload_verbatim(payload):
    c = Container()
    c.value("id", payload)
    assert c.get("id") is payload


def test_value_keeps_callable_payload_uncalled():
    c = Container()

    def func(): ...

    c.value("function-id", func)
    assert c.get("function-id") is func


def test_factory_is_called_with_the_container():
    c = Container()
    definition = MagicMock(return_value="built")

    c.factory("service", definition)
    assert c.get("service") == "built"
    definition.assert_called_once_with(c)


def test_singleton_is_called_with_the_container():
    c = Container()
    definition = MagicMock(return_value="built")

    c.singleton("service", definition)
    assert c.get("service") == "built"
    definition.assert_called_once_with(c)


def test_singleton_is_lazy():
    c = Container()
    definition = MagicMock()

    c.singleton("service", definition)
    definition.assert_not_called()

    c.get("service")
    definition.assert_called_once()


def test_factory_can_resolve_sub_dependencies():
    c = Container()
    c.value("protocol", "http://")
    c.value("host", "example.com")
    c.factory("url", lambda cont: cont.get("protocol") + cont.get("host"))

    assert c.get("url") == "http://example.com"


def test_has():
    c = Container()
    c.value("id", None)

    assert c.has("id")
    assert not c.has("missing")


def test_keys_in_insertion_order():
    c = Container()
    c.value("b", 1)
    c.factory("a", lambda _: 2)
    c.singleton("c", lambda _: 3)

    assert c.keys() == ["b", "a", "c"]


def test_keys_do_not_repeat_overwritten_identifiers():
    c = Container()
    c.value("a", 1)
    c.value("b", 2)
    c.value("a", 3)

    assert c.keys() == ["a", "b"]


def test_registration_methods_return_the_container():
    c = Container()

    assert c.value("v", 1) is c
    assert c.factory("f", lambda _: 1) is c
    assert c.singleton("s", lambda _: 1) is c
    assert c.service("svc", lambda _: 1) is c
    assert c.set("x", 1) is c
    assert c.extend("v", lambda prev, _: prev) is c


def test_registrations_can_be_chained():
    c = Container().value("a", 1).factory("b", lambda cont: cont.get("a") + 1)
    assert c.get("b") == 2


def test_registering_again_overwrites_previous_definition():
    c = Container()

    c.value("id", "foo")
    c.value("id", 5)
    assert c.get("id") == 5

    def func(): ...

    c.value("id", func)
    assert c.get("id") is func

    c.factory("id", lambda _: "built")
    assert c.get("id") == "built"


def test_set_infers_singleton_for_callables():
    c = Container()
    calls = []

    def make():
        calls.append(1)
        return len(calls)

    c.set("singleton", lambda _: make())
    assert c.get("singleton") == 1
    assert c.get("singleton") == 1
    assert calls == [1]


def test_set_infers_value_for_non_callables():
    c = Container()
    c.set("string-id", "foo")
    assert c.get("string-id") == "foo"


def test_set_accepts_kind_members_and_values():
    c = Container()
    c.set("f", lambda _: object(), Container.FACTORY)
    c.set("v", "payload", "value")

    assert c.get("f") is not c.get("f")
    assert c.get("v") == "payload"


def test_set_rejects_unknown_kind():
    c = Container()
    with pytest.raises(ValueError):
        c.set("id", "foo", "prototype")


def test_kind_aliases_on_container():
    assert Container.VALUE is Kind.VALUE
    assert Container.FACTORY is Kind.FACTORY
    assert Container.SINGLETON is Kind.SINGLETON


def test_pick_returns_requested_dependencies():
    c = Container()
    c.value("host", "example.com")
    c.value("port", 80)
    c.factory("unused", MagicMock())

    assert c.pick("host", "port") == {"host": "example.com", "port": 80}
    assert c.pick() == {}


def test_pick_propagates_first_failure():
    c = Container()
    c.value("host", "example.com")

    with pytest.raises(UnregisteredDependencyError) as ctx:
        c.pick("host", "missing", "also-missing")
    assert ctx.value.identifier == "missing"


def test_definition_may_register_while_resolving():
    c = Container()

    def redefine(cont):
        cont.factory("id", lambda _: "second")
        return "first"

    c.factory("id", redefine)

    assert c.get("id") == "first"
    assert c.get("id") == "second"
