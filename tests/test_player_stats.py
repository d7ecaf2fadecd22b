"""Player statistics aggregation."""

from datetime import date, timedelta

import pytest

from helpers import SnapshotBuilder, guest_seat, member_seat, standard_builder
from playgroup_stats.operations.player_stats import PlayerStatisticsAggregator
from playgroup_stats.operations.records import build_participation_records


def aggregate(snapshot, min_games=5):
    return PlayerStatisticsAggregator(min_games).aggregate(build_participation_records(snapshot))


def by_member(reports):
    return {r.member_id: r for r in reports}


@pytest.fixture
def snapshot():
    return (
        standard_builder()
        .game(date(2025, 1, 5),
              member_seat("m-alice", "c-atraxa", 1),
              member_seat("m-bob", "c-krenko", 2),
              member_seat("m-carol", "c-karn", 3),
              guest_seat("Vinny", "c-edgar", 4))
        .game(date(2025, 1, 12),
              member_seat("m-alice", "c-atraxa", 2),
              member_seat("m-bob", "c-krenko", 1),
              member_seat("m-dave", "c-kenrith", 3))
        .game(date(2025, 3, 2),
              member_seat("m-alice", "c-krenko", 1),
              member_seat("m-dave", "c-kenrith", 1))
        .build()
    )


class TestCounts:

    def test_games_wins_and_rates(self, snapshot):
        stats = by_member(aggregate(snapshot))
        alice = stats["m-alice"]
        assert alice.games_played == 3
        assert alice.wins == 2
        assert alice.losses == 1
        assert alice.win_rate == pytest.approx(2 / 3)
        assert alice.average_position == pytest.approx(4 / 3)

        bob = stats["m-bob"]
        assert (bob.games_played, bob.wins, bob.win_rate) == (2, 1, 0.5)
        assert bob.average_position == 1.5

    def test_win_rate_is_exact_ratio(self, snapshot):
        for report in aggregate(snapshot):
            assert report.win_rate == report.wins / report.games_played

    def test_zero_wins_is_zero_rate_not_none(self, snapshot):
        carol = by_member(aggregate(snapshot))["m-carol"]
        assert carol.games_played == 1
        assert carol.win_rate == 0.0
        assert carol.average_position == 3

    def test_clean_wins_exclude_shared_first(self, snapshot):
        stats = by_member(aggregate(snapshot))
        assert stats["m-alice"].clean_wins == 1
        assert stats["m-dave"].wins == 1
        assert stats["m-dave"].clean_wins == 0


class TestMembership:

    def test_member_without_games_is_absent(self, snapshot):
        assert "m-erin" not in by_member(aggregate(snapshot))

    def test_removed_member_with_history_is_present(self, snapshot):
        dave = by_member(aggregate(snapshot))["m-dave"]
        assert dave.is_active is False
        assert dave.display_name == "Dave"
        assert dave.games_played == 2

    def test_removed_member_without_games_is_absent(self):
        snapshot = (
            SnapshotBuilder()
            .user("m-1", "One").non_user("m-gone", "Gone", removed=True)
            .commander("c", "Commander")
            .game(date(2025, 1, 1), member_seat("m-1", "c", 1), guest_seat("G", "c", 2))
            .build()
        )
        assert [r.member_id for r in aggregate(snapshot)] == ["m-1"]

    def test_guests_never_appear(self, snapshot):
        names = [r.display_name for r in aggregate(snapshot)]
        assert "Vinny" not in names

    def test_no_games_gives_empty_report(self):
        snapshot = standard_builder().build()
        assert aggregate(snapshot) == ()

    def test_ordering_is_case_insensitive_by_name(self, snapshot):
        assert [r.display_name for r in aggregate(snapshot)] == ["Alice", "bob", "Carol", "Dave"]


def alternating_games(builder, plan):
    """plan: list of (commander_id, alice_wins) tuples, one game each."""
    start = date(2025, 1, 1)
    for offset, (commander_id, alice_wins) in enumerate(plan):
        builder.game(
            start + timedelta(days=offset),
            member_seat("m-alice", commander_id, 1 if alice_wins else 2),
            member_seat("m-bob", "c-karn", 2 if alice_wins else 1),
        )
    return builder.build()


class TestCommanderPreferences:

    def test_most_played_commander(self, snapshot):
        alice = by_member(aggregate(snapshot))["m-alice"]
        assert alice.most_played_commander.commander_id == "c-atraxa"
        assert alice.most_played_commander.games == 2
        assert alice.most_played_commander.wins == 1

    def test_best_commander_requires_threshold(self, snapshot):
        for report in aggregate(snapshot):
            assert report.best_commander is None

    def test_best_commander_highest_rate_among_eligible(self):
        plan = (
            [("c-atraxa", True)] * 3 + [("c-atraxa", False)] * 2      # 5 games, 60%
            + [("c-krenko", True)] * 4 + [("c-krenko", False)] * 1    # 5 games, 80%
            + [("c-kenrith", True)] * 4                                # 4 games, 100%, ineligible
        )
        alice = by_member(aggregate(alternating_games(standard_builder(), plan)))["m-alice"]
        assert alice.best_commander.commander_id == "c-krenko"
        assert alice.best_commander.win_rate == pytest.approx(0.8)

    def test_best_commander_tie_breaks_by_name(self):
        plan = (
            [("c-krenko", True)] * 3 + [("c-krenko", False)] * 2
            + [("c-atraxa", True)] * 3 + [("c-atraxa", False)] * 2
        )
        alice = by_member(aggregate(alternating_games(standard_builder(), plan)))["m-alice"]
        assert alice.best_commander.commander_id == "c-atraxa"
        assert alice.most_played_commander.commander_id == "c-atraxa"

    def test_most_played_tie_break_ignores_case(self):
        builder = (
            SnapshotBuilder()
            .user("m-alice", "Alice").user("m-bob", "Bob")
            .commander("c-upper", "Zur the Enchanter")
            .commander("c-lower", "atla Palani")
            .commander("c-karn", "Karn")
        )
        snapshot = alternating_games(builder, [("c-upper", True), ("c-lower", False)])
        alice = by_member(aggregate(snapshot))["m-alice"]
        assert alice.most_played_commander.commander_id == "c-lower"

    def test_custom_threshold(self, snapshot):
        alice = by_member(aggregate(snapshot, min_games=1))["m-alice"]
        # atraxa 1/2, krenko 1/1
        assert alice.best_commander.commander_id == "c-krenko"
