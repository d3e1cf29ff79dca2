import logging

import pytest

from phased_config import MemoryStore, string_property
from phased_config.hooks import EventBus, PhaseChanged, PropertyAssigned
from phased_config.phases import Phase

HOST = string_property("db.host")


def assigned(value="a"):
    return PropertyAssigned(HOST, value, value, None, MemoryStore())


def test_eventbus_publish_in_order():
    bus = EventBus()
    seen = []
    bus.subscribe(lambda e: seen.append(("first", e)))
    bus.subscribe(lambda e: seen.append(("second", e)))
    event = assigned()
    bus.publish(event)
    assert seen == [("first", event), ("second", event)]
    assert len(bus) == 2


def test_eventbus_filters_by_event_type():
    bus = EventBus()
    phases, writes = [], []
    bus.subscribe(phases.append, PhaseChanged)
    bus.subscribe(writes.append, PropertyAssigned)
    bus.publish(PhaseChanged(Phase.REGISTER, Phase.CONFIG))
    bus.publish(assigned())
    assert [type(e) for e in phases] == [PhaseChanged]
    assert [type(e) for e in writes] == [PropertyAssigned]


def test_events_are_immutable():
    event = PhaseChanged(Phase.CONFIG, Phase.USE)
    with pytest.raises(AttributeError):
        event.current = Phase.REGISTER  # type: ignore[misc]


def test_eventbus_subscribe_validation():
    bus = EventBus()
    with pytest.raises(TypeError):
        bus.subscribe(123)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        bus.subscribe(print, dict)


def test_eventbus_invalid_failure_mode():
    with pytest.raises(ValueError):
        EventBus("boom")  # type: ignore[arg-type]


def test_eventbus_failure_modes(caplog):
    def bad(_):
        raise RuntimeError("fail")

    caplog.set_level(logging.DEBUG, logger="phased_config.hooks")
    bus_ignore = EventBus("ignore")
    bus_ignore.subscribe(bad)
    bus_ignore.publish(assigned())
    assert all(r.levelno == logging.DEBUG for r in caplog.records)

    caplog.clear()
    after = []
    bus_log = EventBus("log")
    bus_log.subscribe(bad)
    bus_log.subscribe(after.append)
    bus_log.publish(assigned())
    assert any(r.levelno == logging.ERROR for r in caplog.records)
    assert len(after) == 1

    bus_raise = EventBus("raise")
    bus_raise.subscribe(bad)
    with pytest.raises(RuntimeError):
        bus_raise.publish(assigned())


def test_eventbus_clear():
    bus = EventBus()
    bus.subscribe(lambda e: None)
    bus.clear()
    assert len(bus) == 0
    bus.publish(assigned())
