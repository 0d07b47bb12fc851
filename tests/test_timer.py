from robogenius.timer import Timer, TimerManager


class _CountingManager(TimerManager):
    def __init__(self):
        super().__init__()
        self.front_calls = 0

    def on_timer_inserted_at_front(self):
        self.front_calls += 1


def test_empty_manager():
    manager = TimerManager()
    assert manager.has_timer() is False
    assert manager.get_next_timer() is None
    assert manager.list_expired() == []


def test_due_timer_is_listed_once():
    manager = TimerManager()
    timer = manager.add_timer(0, "cmd")
    assert manager.get_next_timer() == 0
    assert manager.list_expired() == ["cmd"]
    assert manager.has_timer() is False
    assert timer.command is None
    assert manager.list_expired() == []


def test_recurring_timer_stays():
    manager = TimerManager()
    timer = manager.add_timer(0, "tick", recurring=True)
    assert manager.list_expired() == ["tick"]
    assert manager.has_timer() is True
    assert timer.command == "tick"


def test_future_timer_not_expired():
    manager = TimerManager()
    manager.add_timer(60_000, "later")
    assert manager.list_expired() == []
    remaining = manager.get_next_timer()
    assert 0 < remaining <= 60_000


def test_expired_only_due_ones_in_order():
    manager = TimerManager()
    manager.add_timer(60_000, "later")
    manager.add_timer(0, "first")
    manager.add_timer(0, "second")
    assert manager.list_expired() == ["first", "second"]
    assert manager.has_timer() is True


def test_front_insert_hook_respects_tickle():
    manager = _CountingManager()
    TimerManager.add_timer(manager, 60_000, "a")
    assert manager.front_calls == 1
    TimerManager.add_timer(manager, 0, "b")
    assert manager.front_calls == 1
    assert TimerManager.get_next_timer(manager) == 0
    TimerManager.add_timer(manager, 0, "c")
    assert manager.front_calls == 2
    TimerManager.add_timer(manager, 120_000, "d")
    assert manager.front_calls == 2
    assert TimerManager.has_timer(manager) is True


def test_cancel_removes_timer():
    manager = TimerManager()
    timer = manager.add_timer(60_000, "x")
    assert timer.cancel() is True
    assert manager.has_timer() is False


def test_cancel_after_fired_returns_false():
    manager = TimerManager()
    timer = manager.add_timer(0, "x")
    manager.list_expired()
    assert timer.cancel() is False


def test_set_command():
    manager = TimerManager()
    timer = manager.add_timer(0, "old")
    timer.set_command("new")
    assert manager.list_expired() == ["new"]


def test_standalone_timer_fields():
    timer = Timer(500, "c", True)
    assert timer.ms == 500
    assert timer.recurring is True
    assert timer.cancel() is True