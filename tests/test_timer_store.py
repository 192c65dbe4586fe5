"""
Tests for the TimerStore accounting operations.

All times come from the fake clock or are passed explicitly, so results are
exact to the millisecond.
"""

import pytest

from tasktimer.domain.errors import NotFoundError, ValidationError


class TestAddTask:

    def test_new_task_is_running_from_now(self, store, clock):
        task_id = store.add_task("Study")

        task = store.get_task(task_id)
        assert task.name == "Study"
        assert task.running is True
        assert task.accumulated_seconds == 0
        assert task.started_at == clock.now

    def test_tasks_keep_creation_order(self, store):
        ids = [store.add_task(name) for name in ("A", "B", "C")]
        assert [t.id for t in store.tasks] == ids

    @pytest.mark.parametrize("name", ["", "   ", "\t"])
    def test_blank_name_fails_without_creating(self, store, name):
        store.add_task("Existing")

        with pytest.raises(ValidationError):
            store.add_task(name)

        assert len(store) == 1

    def test_whitespace_name_does_not_persist(self, store, memory_storage):
        with pytest.raises(ValidationError):
            store.add_task("   ")

        store.run_pending()
        assert memory_storage.writes == 0

    def test_long_name_is_accepted(self, store):
        task_id = store.add_task("x" * 500)
        assert store.get_task(task_id).name == "x" * 500


class TestQueryElapsed:

    def test_study_scenario(self, store):
        task_id = store.add_task("Study", now=0)
        assert store.get_task(task_id).running is True

        assert store.query_elapsed(task_id, now=5_000) == 5

        store.pause(task_id, now=5_000)
        task = store.get_task(task_id)
        assert task.accumulated_seconds == 5
        assert task.running is False

        assert store.query_elapsed(task_id, now=9_000) == 5

        store.resume(task_id, now=9_000)
        task = store.get_task(task_id)
        assert task.running is True
        assert task.started_at == 9_000

        assert store.query_elapsed(task_id, now=12_000) == 8

    def test_monotonic_while_running(self, store):
        task_id = store.add_task("Study", now=0)
        readings = [store.query_elapsed(task_id, now=t) for t in range(0, 20_000, 137)]
        assert readings == sorted(readings)
        assert readings[-1] == 19

    def test_constant_while_paused(self, store):
        task_id = store.add_task("Study", now=0)
        store.pause(task_id, now=3_500)

        readings = {store.query_elapsed(task_id, now=t) for t in (3_500, 10_000, 10 ** 12)}
        assert readings == {3}

    def test_query_does_not_mutate(self, store, memory_storage):
        task_id = store.add_task("Study", now=0)
        store.run_pending()
        writes = memory_storage.writes
        before = store.get_task(task_id)

        for t in range(0, 60_000, 1_000):
            store.query_elapsed(task_id, now=t)

        assert store.get_task(task_id).model_dump() == before.model_dump()
        assert not store.has_pending_saves
        assert memory_storage.writes == writes

    def test_uses_clock_when_now_omitted(self, store, clock):
        task_id = store.add_task("Study")
        clock.advance(2_500)
        assert store.query_elapsed(task_id) == 2

    def test_unknown_id_raises_not_found(self, store):
        with pytest.raises(NotFoundError):
            store.query_elapsed("missing", now=0)


class TestPauseResume:

    def test_pause_resume_preserves_total(self, store):
        task_id = store.add_task("Study", now=0)
        before_pause = store.query_elapsed(task_id, now=7_300)

        store.pause(task_id, now=7_300)
        store.resume(task_id, now=7_300)

        assert store.query_elapsed(task_id, now=7_300) == before_pause

    def test_pause_is_idempotent(self, store):
        task_id = store.add_task("Study", now=0)
        store.pause(task_id, now=4_000)

        assert store.pause(task_id, now=50_000) is True
        assert store.get_task(task_id).accumulated_seconds == 4

    def test_resume_of_running_task_keeps_interval(self, store):
        task_id = store.add_task("Study", now=0)

        assert store.resume(task_id, now=30_000) is True
        assert store.get_task(task_id).started_at == 0
        assert store.query_elapsed(task_id, now=30_000) == 30

    def test_pause_banks_only_whole_seconds(self, store):
        task_id = store.add_task("Study", now=0)
        store.pause(task_id, now=1_999)
        assert store.get_task(task_id).accumulated_seconds == 1

    def test_clock_moving_backwards_banks_nothing(self, store):
        task_id = store.add_task("Study", now=10_000)
        store.pause(task_id, now=4_000)
        assert store.query_elapsed(task_id, now=4_000) == 0

    def test_toggle_switches_state(self, store):
        task_id = store.add_task("Study", now=0)

        assert store.toggle(task_id, now=2_000) is True
        assert store.get_task(task_id).running is False

        assert store.toggle(task_id, now=5_000) is True
        task = store.get_task(task_id)
        assert task.running is True
        assert task.started_at == 5_000
        assert store.query_elapsed(task_id, now=6_000) == 3


class TestResetRemove:

    @pytest.mark.parametrize("running", [True, False])
    def test_reset_zeroes_any_state(self, store, running):
        task_id = store.add_task("Study", now=0)
        if not running:
            store.pause(task_id, now=90_000)

        assert store.reset(task_id) is True

        task = store.get_task(task_id)
        assert task.running is False
        assert task.started_at is None
        for now in (0, 90_000, 10 ** 12):
            assert store.query_elapsed(task_id, now=now) == 0

    def test_remove_makes_id_unresolvable(self, store):
        task_id = store.add_task("Study", now=0)
        other_id = store.add_task("Gym", now=0)

        assert store.remove(task_id) is True

        assert task_id not in store
        assert store.get_task(task_id) is None
        with pytest.raises(NotFoundError):
            store.query_elapsed(task_id, now=0)
        with pytest.raises(NotFoundError):
            store.require_task(task_id)
        assert store.toggle(task_id) is False
        assert store.pause(task_id) is False
        assert store.resume(task_id) is False
        assert store.reset(task_id) is False
        assert store.remove(task_id) is False
        assert [t.id for t in store.tasks] == [other_id]

    def test_removed_id_is_never_reused(self, store):
        task_id = store.add_task("Study")
        store.remove(task_id)
        assert store.add_task("Study") != task_id


class TestUnknownIds:

    @pytest.mark.parametrize("operation", ["toggle", "pause", "resume", "reset", "remove"])
    def test_mutations_are_ignored(self, store, memory_storage, operation):
        assert getattr(store, operation)("nope") is False
        assert not store.has_pending_saves
        assert memory_storage.writes == 0


class TestSignals:

    def test_mutations_emit_signals(self, store):
        events = []
        store.task_added.connect(lambda task_id: events.append(("added", task_id)))
        store.task_changed.connect(lambda task_id: events.append(("changed", task_id)))
        store.task_removed.connect(lambda task_id: events.append(("removed", task_id)))

        task_id = store.add_task("Study", now=0)
        store.pause(task_id, now=1_000)
        store.pause(task_id, now=2_000)  # no-op, no signal
        store.resume(task_id, now=3_000)
        store.reset(task_id)
        store.remove(task_id)

        assert events == [
            ("added", task_id),
            ("changed", task_id),
            ("changed", task_id),
            ("changed", task_id),
            ("removed", task_id),
        ]

    def test_snapshots_are_detached(self, store):
        task_id = store.add_task("Study", now=0)

        snapshot = store.get_task(task_id)
        snapshot.accumulated_seconds = 999
        store.tasks[0].running = False

        assert store.query_elapsed(task_id, now=1_000) == 1
        assert store.running_count() == 1
