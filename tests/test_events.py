from facechase.core.events import Event, EventBus, EventType


def test_subscribe_and_unsubscribe():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(EventType.GAME_STARTED, seen.append)

    bus.emit(Event(EventType.GAME_STARTED))
    unsubscribe()
    bus.emit(Event(EventType.GAME_STARTED))

    assert len(seen) == 1


def test_handlers_only_see_their_type():
    bus = EventBus()
    seen = []
    bus.subscribe(EventType.PLAYER_CAUGHT, seen.append)
    bus.emit(Event(EventType.GAME_STARTED))
    assert seen == []


def test_failing_handler_does_not_stop_others():
    bus = EventBus()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.RUN_RESET, broken)
    bus.subscribe(EventType.RUN_RESET, seen.append)
    bus.emit(Event(EventType.RUN_RESET))

    assert len(seen) == 1


def test_handler_may_unsubscribe_during_dispatch():
    bus = EventBus()
    seen = []
    unsubscribers = []

    def once(event):
        seen.append("once")
        unsubscribers[0]()

    unsubscribers.append(bus.subscribe(EventType.SHUTDOWN, once))
    bus.subscribe(EventType.SHUTDOWN, lambda e: seen.append("always"))

    bus.emit(Event(EventType.SHUTDOWN))
    bus.emit(Event(EventType.SHUTDOWN))

    assert seen == ["once", "always", "always"]


def test_history_is_bounded_and_filterable():
    bus = EventBus(history_limit=3)
    for _ in range(5):
        bus.emit(Event(EventType.POINT_COLLECTED))
    bus.emit(Event(EventType.SHUTDOWN))

    assert len(bus.get_history(limit=10)) == 3
    assert len(bus.get_history(EventType.SHUTDOWN)) == 1
    assert len(bus.get_history(EventType.POINT_COLLECTED, limit=10)) == 2
