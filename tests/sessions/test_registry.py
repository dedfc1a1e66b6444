from __future__ import annotations

import threading

import pytest

from src.worktime.worktime.core.exceptions import AlreadyActiveError, NotActiveError
from src.worktime.worktime.sessions.registry import ActiveSessionRegistry


def test_second_clock_in_for_same_actor_is_rejected(clock):
    registry = ActiveSessionRegistry(clock=clock)

    start = registry.clock_in("u1")

    assert start == clock.now
    with pytest.raises(AlreadyActiveError):
        registry.clock_in("u1")
    assert len(registry) == 1


def test_clock_out_without_entry_raises(clock):
    registry = ActiveSessionRegistry(clock=clock)

    with pytest.raises(NotActiveError):
        registry.clock_out("ghost")
    assert len(registry) == 0


def test_clock_out_returns_pair_and_removes_entry(clock):
    registry = ActiveSessionRegistry(clock=clock)
    t0 = registry.clock_in("u1")
    t1 = clock.advance(hours=2)

    assert registry.clock_out("u1") == (t0, t1)
    assert registry.peek("u1") is None
    with pytest.raises(NotActiveError):
        registry.clock_out("u1")


def test_peek_and_list_active_do_not_mutate(clock):
    registry = ActiveSessionRegistry(clock=clock)
    t_a = registry.clock_in("a")
    t_b = registry.clock_in("b")

    assert registry.peek("a") == t_a
    assert sorted(registry.list_active()) == [("a", t_a), ("b", t_b)]
    assert len(registry) == 2


def test_concurrent_clock_in_same_actor_exactly_one_wins():
    registry = ActiveSessionRegistry()
    workers = 16
    barrier = threading.Barrier(workers)
    outcomes: list[str] = []
    lock = threading.Lock()

    def attempt():
        barrier.wait()
        try:
            registry.clock_in("same")
            result = "ok"
        except AlreadyActiveError:
            result = "already"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("already") == workers - 1


def test_concurrent_clock_in_different_actors_all_succeed():
    registry = ActiveSessionRegistry()
    actors = [f"u{i}" for i in range(32)]

    threads = [threading.Thread(target=registry.clock_in, args=(a,)) for a in actors]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(a for a, _ in registry.list_active()) == sorted(actors)
