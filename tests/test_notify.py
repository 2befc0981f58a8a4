import pytest

from agent_tools import notify
from agent_tools.notify import IdleNotifier


class FakeProcess:
    def __init__(self, argv):
        self.argv = argv
        self.returncode = None

    def poll(self):
        return self.returncode


@pytest.fixture
def spawned(monkeypatch):
    procs = []

    def _popen(argv):
        proc = FakeProcess(argv)
        procs.append(proc)
        return proc

    monkeypatch.setattr(notify.subprocess, "Popen", _popen)
    return procs


def test_idle_event_speaks_once(spawned):
    notifier = IdleNotifier(enabled=True)

    assert notifier.handle_event({"type": "session.idle", "properties": {}})

    assert [proc.argv for proc in spawned] == [["say", "Your code is done!"]]


def test_other_events_are_ignored(spawned):
    notifier = IdleNotifier(enabled=True)

    assert not notifier.handle_event({"type": "session.updated"})
    assert not notifier.handle_event({})

    assert spawned == []


def test_disabled_notifier_is_a_no_op(spawned):
    notifier = IdleNotifier()

    assert notifier.events() == []
    assert not notifier.handle_event({"type": "session.idle"})
    assert spawned == []


def test_enabled_notifier_subscribes_to_idle():
    assert IdleNotifier(enabled=True).events() == ["session.idle"]


def test_from_env(monkeypatch):
    monkeypatch.setenv("IDLE_NOTIFY_ENABLED", "true")
    assert IdleNotifier.from_env().enabled

    monkeypatch.delenv("IDLE_NOTIFY_ENABLED")
    assert not IdleNotifier.from_env().enabled


def test_spawn_failure_propagates(monkeypatch):
    def _fail(argv):
        raise FileNotFoundError(argv[0])

    monkeypatch.setattr(notify.subprocess, "Popen", _fail)

    with pytest.raises(FileNotFoundError):
        IdleNotifier(enabled=True, command="no-such-speaker").handle_event({"type": "session.idle"})


def test_finished_announcements_are_reaped(spawned):
    notifier = IdleNotifier(enabled=True)

    notifier.handle_event({"type": "session.idle"})
    notifier.handle_event({"type": "session.idle"})
    assert notifier.reap() == 2

    spawned[0].returncode = 0
    assert notifier.reap() == 1

    spawned[1].returncode = 0
    notifier.handle_event({"type": "session.idle"})
    assert notifier.reap() == 1
    assert len(spawned) == 3
