"""Tests for client session bookkeeping."""

from app.services import SessionState


class TestEditingState:
    def test_set_and_clear_skill(self) -> None:
        state = SessionState()
        state.set_editing_skill(3, "Go")

        assert state.is_editing_skill
        assert state.editing_skill_name == "Go"
        assert state.last_edited_skill is not None

        state.clear_editing_skill()
        assert not state.is_editing_skill
        assert state.last_edited_skill is None

    def test_observers_notified_with_old_and_new(self) -> None:
        state = SessionState()
        events: list[tuple[str, int | None, int | None]] = []
        state.subscribe(lambda prop, old, new: events.append((prop, old, new)))

        state.set_editing_skill(1)
        state.set_editing_skill(2)
        state.set_editing_project(7, "Blog")
        assert state.is_editing_project
        state.clear_editing_project()

        assert events == [
            ("EditingSkill", None, 1),
            ("EditingSkill", 1, 2),
            ("EditingProject", None, 7),
            ("EditingProject", 7, None),
        ]

    def test_unsubscribe(self) -> None:
        state = SessionState()
        events: list[str] = []
        unsubscribe = state.subscribe(lambda prop, old, new: events.append(prop))

        unsubscribe()
        unsubscribe()
        state.set_editing_skill(1)

        assert events == []


class TestOperationSamples:
    def test_window_keeps_most_recent(self) -> None:
        state = SessionState(max_samples=3)
        for i in range(5):
            state.record_operation(f"op{i}", float(i))

        assert [s.name for s in state.samples] == ["op2", "op3", "op4"]

    def test_default_window_is_100(self) -> None:
        state = SessionState()
        for i in range(150):
            state.record_operation("list", float(i))
        assert len(state.samples) == 100

    def test_statistics(self) -> None:
        state = SessionState()
        state.record_operation("list", 10.0, cache_hit=True)
        state.record_operation("list", 30.0, cache_hit=False)
        state.record_operation("create", 50.0)
        state.record_operation("list", 2.0, cache_hit=True)

        assert state.cache_hit_ratio() == 0.5
        assert state.average_duration_ms("list") == 14.0
        assert state.average_duration_ms() == 23.0
        assert [s.duration_ms for s in state.slowest(2)] == [50.0, 30.0]

    def test_empty_statistics(self) -> None:
        state = SessionState()
        assert state.cache_hit_ratio() == 0.0
        assert state.average_duration_ms() == 0.0
        assert state.slowest() == []

    def test_clear_samples(self) -> None:
        state = SessionState()
        state.record_operation("list", 1.0)
        state.clear_samples()
        assert state.samples == ()
