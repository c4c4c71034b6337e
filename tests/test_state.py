from facechase.core.state import Phase, PhaseMachine


def test_valid_transitions():
    machine = PhaseMachine()
    assert machine.transition(Phase.RUNNING)
    assert machine.is_running
    assert machine.transition(Phase.OVER)
    assert machine.transition(Phase.NOT_STARTED)


def test_invalid_transitions_are_rejected():
    machine = PhaseMachine()
    assert not machine.transition(Phase.OVER)
    assert machine.phase == Phase.NOT_STARTED

    machine = PhaseMachine(Phase.OVER)
    assert not machine.can_transition(Phase.OVER)
    assert machine.can_transition(Phase.RUNNING)


def test_listeners_get_old_and_new_phase():
    machine = PhaseMachine()
    seen = []
    machine.add_listener(lambda old, new: seen.append((old, new)))

    machine.transition(Phase.RUNNING)
    assert seen == [(Phase.NOT_STARTED, Phase.RUNNING)]


def test_listener_error_is_isolated():
    machine = PhaseMachine()
    seen = []

    def broken(old, new):
        raise ValueError("nope")

    machine.add_listener(broken)
    machine.add_listener(lambda old, new: seen.append(new))

    assert machine.transition(Phase.RUNNING)
    assert seen == [Phase.RUNNING]


def test_remove_listener():
    machine = PhaseMachine()
    seen = []
    listener = lambda old, new: seen.append(new)  # noqa: E731
    machine.add_listener(listener)
    machine.remove_listener(listener)
    machine.transition(Phase.RUNNING)
    assert seen == []


def test_force_notifies_only_on_change():
    machine = PhaseMachine(Phase.RUNNING)
    seen = []
    machine.add_listener(lambda old, new: seen.append(new))

    machine.force(Phase.RUNNING)
    assert seen == []

    machine.force(Phase.NOT_STARTED)
    assert seen == [Phase.NOT_STARTED]
