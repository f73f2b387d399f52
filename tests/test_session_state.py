"""
Tests for session state and level flow.
"""

import random

import pytest

from syncseed.rhythm_core.session_state import SessionState


class FakeLevelSource:
    def __init__(self):
        self.levels = []

    def generate(self, level):
        self.levels.append(level)
        return True


@pytest.fixture
def level_source():
    return FakeLevelSource()


@pytest.fixture
def session(config, level_source, score_display, leaderboard, ui):
    return SessionState(
        config=config,
        level_source=level_source,
        score_display=score_display,
        leaderboard=leaderboard,
        ui=ui,
    )


@pytest.fixture
def playing(session):
    session.set_player_name("Alice")
    session.start_level()
    return session


class TestDefaults:

    def test_construction_defaults(self, session):
        assert session.level == 1
        assert session.score == 0
        assert session.points_per_target == 10
        assert session.objectives_remaining == 0
        assert session.player_name == ""
        assert not session.is_game_active

    def test_snapshot(self, playing):
        snapshot = playing.snapshot()

        assert snapshot.to_dict() == {
            "level": 1,
            "score": 0,
            "points_per_target": 10,
            "objectives_remaining": 3,
            "player_name": "Alice",
            "is_game_active": True,
            "is_level_complete": False,
        }


class TestPlayerName:
    """Name validation activates the session."""

    @pytest.mark.parametrize("name", ["", "   ", "\t\n", None])
    def test_blank_names_rejected(self, session, name, warnings_log):
        assert not session.set_player_name(name)
        assert session.player_name == ""
        assert len(warnings_log) == 1

    def test_blank_name_keeps_existing(self, session):
        session.set_player_name("Alice")

        assert not session.set_player_name("   ")
        assert session.player_name == "Alice"

    def test_name_trimmed(self, session, recorder):
        changed = recorder()
        session.player_name_changed.connect(changed)

        assert session.set_player_name("  Alice  ")

        assert session.player_name == "Alice"
        assert session.is_game_active
        assert changed.calls == [("Alice",)]

    def test_same_name_does_not_renotify(self, session, recorder):
        changed = recorder()
        session.set_player_name("Alice")
        session.player_name_changed.connect(changed)

        assert session.set_player_name("Alice ")
        assert changed.count == 0


class TestStartLevel:

    def test_requires_active_session(self, session, level_source, recorder, warnings_log):
        started = recorder()
        session.game_started.connect(started)

        assert not session.start_level()

        assert level_source.levels == []
        assert started.count == 0
        assert session.objectives_remaining == 0
        assert len(warnings_log) == 1

    def test_start_sets_objectives_and_generates(self, session, level_source, recorder):
        remaining = recorder()
        started = recorder()
        session.objectives_remaining_changed.connect(remaining)
        session.game_started.connect(started)
        session.set_player_name("Alice")

        assert session.start_level()

        assert session.score == 0
        assert session.objectives_remaining == 3
        assert level_source.levels == [1]
        assert remaining.calls == [(3,)]
        assert started.count == 1

    def test_start_resets_score(self, playing, recorder):
        playing.add_score(50)
        scores = recorder()
        playing.score_changed.connect(scores)

        playing.start_level()

        assert playing.score == 0
        assert scores.calls == [(0,)]

    def test_works_without_level_source(self, config):
        session = SessionState(config=config)
        session.set_player_name("Solo")

        assert session.start_level()
        assert session.objectives_remaining == 3


class TestObjectiveHit:

    def test_three_hits_complete_level(self, playing, recorder, leaderboard, ui):
        completed = recorder()
        playing.level_completed.connect(completed)

        playing.objective_hit()
        playing.objective_hit()
        assert completed.count == 0

        playing.objective_hit()

        assert playing.score == 30
        assert playing.objectives_remaining == 0
        assert completed.count == 1
        assert leaderboard.submissions == [("Alice", 30)]
        assert ui.calls == ["leaderboard"]

    def test_hit_after_completion_rejected(self, playing, warnings_log):
        for _ in range(3):
            playing.objective_hit()

        assert not playing.objective_hit()
        assert playing.score == 30
        assert len(warnings_log) == 1

    def test_hit_without_session_rejected(self, session):
        assert not session.objective_hit()
        assert session.score == 0

    def test_report_objective_hit_delegates(self, playing):
        assert playing.report_objective_hit(999)

        assert playing.score == 10
        assert playing.objectives_remaining == 2

    def test_score_display_follows_score(self, playing, score_display):
        playing.objective_hit()
        playing.objective_hit()

        assert score_display.scores == [10, 20]

    def test_points_per_target_floor(self, playing):
        playing.set_points_per_target(0)
        playing.objective_hit()

        assert playing.points_per_target == 1
        assert playing.score == 1


class TestAddScore:

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_rejected(self, playing, amount, warnings_log):
        assert not playing.add_score(amount)
        assert playing.score == 0
        assert len(warnings_log) == 1

    def test_bonus_never_completes_level(self, playing, recorder):
        completed = recorder()
        playing.level_completed.connect(completed)

        assert playing.add_score(1000)

        assert playing.score == 1000
        assert playing.objectives_remaining == 3
        assert completed.count == 0


class TestLevelFlow:

    def test_advance_to_next_level(self, playing, level_source, recorder):
        levels = recorder()
        playing.level_changed.connect(levels)
        for _ in range(3):
            playing.objective_hit()

        assert playing.advance_to_next_level()

        assert playing.level == 2
        assert playing.score == 0
        assert playing.objectives_remaining == playing.difficulty.target_count(2) == 5
        assert levels.calls == [(2,)]
        assert level_source.levels == [1, 2]

    def test_restart_keeps_level(self, playing, level_source):
        playing.objective_hit()

        assert playing.restart_level()

        assert playing.level == 1
        assert playing.score == 0
        assert playing.objectives_remaining == 3
        assert level_source.levels == [1, 1]

    def test_end_level_with_objectives_remaining(self, playing, recorder, leaderboard, warnings_log):
        completed = recorder()
        playing.level_completed.connect(completed)

        assert not playing.end_level()

        assert completed.count == 0
        assert leaderboard.submissions == []
        assert len(warnings_log) == 1

    def test_end_level_again_resubmits(self, playing, leaderboard, recorder):
        completed = recorder()
        playing.level_completed.connect(completed)
        for _ in range(3):
            playing.objective_hit()

        assert playing.end_level()

        assert completed.count == 2
        assert leaderboard.submissions == [("Alice", 30), ("Alice", 30)]

    def test_end_level_without_player_skips_submit(self, session, leaderboard, ui):
        assert session.end_level()

        assert leaderboard.submissions == []
        assert ui.calls == ["leaderboard"]


class TestReset:

    def test_reset_restores_defaults(self, playing, ui):
        playing.objective_hit()
        playing.advance_to_next_level()
        playing.set_points_per_target(25)

        playing.reset_game()

        assert playing.level == 1
        assert playing.score == 0
        assert playing.objectives_remaining == 0
        assert playing.player_name == ""
        assert playing.points_per_target == 10
        assert ui.calls[-1] == "start_menu"

    def test_reset_then_new_player_matches_fresh_session(self, playing, config):
        for _ in range(3):
            playing.objective_hit()
        playing.advance_to_next_level()

        playing.reset_game()
        playing.set_player_name("Bob")
        playing.start_level()

        fresh = SessionState(config=config)
        fresh.set_player_name("Bob")
        fresh.start_level()
        assert playing.objectives_remaining == fresh.objectives_remaining == 3

    def test_reset_notifies_changes_only(self, playing, recorder):
        levels = recorder()
        names = recorder()
        playing.level_changed.connect(levels)
        playing.player_name_changed.connect(names)

        playing.reset_game()

        assert levels.count == 0
        assert names.calls == [("",)]


class TestInvariants:

    def test_random_operations_never_go_negative(self, session):
        """score and objectives_remaining stay non-negative under any call sequence."""
        rng = random.Random(1234)
        operations = [
            lambda: session.set_player_name(rng.choice(["", "  ", "Alice", "Bob"])),
            session.start_level,
            session.objective_hit,
            lambda: session.add_score(rng.randint(-20, 20)),
            session.advance_to_next_level,
            session.restart_level,
            session.end_level,
            session.reset_game,
        ]

        for _ in range(2000):
            rng.choice(operations)()
            assert session.score >= 0
            assert session.objectives_remaining >= 0
            assert session.level >= 1
            assert session.is_game_active == (session.player_name != "")
