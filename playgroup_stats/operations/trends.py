"""
Trend engine: rolling win rates, seat analysis and monthly activity.

Every trend is recomputed from the full snapshot on each call. The rolling
series is exposed lazily through RollingWinRateSeries, which can be iterated as
many times as needed; TrendReport holds a materialized copy for serialization.
"""

import logging
from collections import defaultdict, deque
from datetime import date
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from playgroup_stats.data_models.reports import (
    GameWinFlag, MemberTrend, MonthlyGameCount, StartingPositionStats, TrendPoint, TrendReport
)
from playgroup_stats.data_models.snapshot import Game
from playgroup_stats.operations.records import ParticipationRecord

logger = logging.getLogger(__name__)


class RollingWinRateSeries:
    """
    Restartable, finite sequence of rolling win-rate points for one member.
    
    Each point covers the member's last ``window_size`` games ending at that
    game. Until the member has that many games, points are skipped unless
    ``require_full_window`` is False, in which case the available games are used.
    """
    
    def __init__(self, win_flags: Sequence[GameWinFlag], window_size: int,
                 require_full_window: bool = True):
        if window_size < 1:
            raise ValueError("window_size must be at least 1")
        self.win_flags = tuple(win_flags)
        self.window_size = window_size
        self.require_full_window = require_full_window
    
    def __iter__(self) -> Iterator[TrendPoint]:
        window = deque(maxlen=self.window_size)
        wins = 0
        for flag in self.win_flags:
            if len(window) == self.window_size:
                wins -= window[0]
            outcome = 1 if flag.is_winner else 0
            window.append(outcome)
            wins += outcome
            
            if self.require_full_window and len(window) < self.window_size:
                continue
            yield TrendPoint(
                game_index=flag.game_index,
                win_ratio=wins / len(window),
                window_games=len(window),
            )
    
    def __len__(self) -> int:
        if not self.require_full_window:
            return len(self.win_flags)
        return max(0, len(self.win_flags) - self.window_size + 1)


def _month_index(day: date) -> int:
    return day.year * 12 + (day.month - 1)


class TrendEngine:
    """Computes time-ordered trends for a playgroup"""
    
    @staticmethod
    def win_flags_by_member(records: Sequence[ParticipationRecord]) -> Dict[str, Tuple[GameWinFlag, ...]]:
        """Raw per-game win flags for each statistics-eligible member, in game order."""
        flags: Dict[str, List[GameWinFlag]] = defaultdict(list)
        for record in sorted(records, key=lambda r: r.game_index):
            if not record.identity.counts_toward_statistics:
                continue
            flags[record.identity.member_id].append(GameWinFlag(
                game_index=record.game_index,
                game_id=record.game.id,
                game_date=record.game.game_date,
                is_winner=record.result.is_winner,
            ))
        return {member_id: tuple(member_flags) for member_id, member_flags in flags.items()}
    
    def rolling_win_rates(self, records: Sequence[ParticipationRecord], window_size: int,
                          require_full_window: bool = True) -> Dict[str, RollingWinRateSeries]:
        """
        Lazy rolling win-rate series keyed by member id.
        
        Args:
            records: Participation records for the playgroup
            window_size: Number of trailing games per point
            require_full_window: Skip points until the member has window_size games
        """
        if window_size < 1:
            raise ValueError("window_size must be at least 1")
        return {
            member_id: RollingWinRateSeries(flags, window_size, require_full_window)
            for member_id, flags in self.win_flags_by_member(records).items()
        }
    
    @staticmethod
    def starting_positions(records: Sequence[ParticipationRecord]) -> Tuple[StartingPositionStats, ...]:
        """
        Win rate per starting seat, over every participant who held that seat.
        
        Seats range over 1..N where N is the largest table ever recorded; seats
        that were never occupied are omitted.
        """
        if not records:
            return ()
        
        max_players = max(r.game.player_count for r in records)
        samples = defaultdict(int)
        wins = defaultdict(int)
        for record in records:
            position = record.participant.starting_position
            samples[position] += 1
            if record.result.is_winner:
                wins[position] += 1
        
        return tuple(
            StartingPositionStats(
                position=position,
                sample_size=samples[position],
                wins=wins[position],
                win_rate=wins[position] / samples[position],
            )
            for position in range(1, max_players + 1)
            if samples.get(position)
        )
    
    @staticmethod
    def monthly_histogram(games: Sequence[Game], months: Optional[int] = None) -> Tuple[MonthlyGameCount, ...]:
        """
        Count games per calendar month, zero-filling months without games.
        
        Args:
            games: Games to bucket
            months: When set, only the last ``months`` months ending at the most
                recent game's month; otherwise first game through last game
        """
        if months is not None and months < 1:
            raise ValueError("months must be at least 1")
        if not games:
            return ()
        
        counts = defaultdict(int)
        for game in games:
            counts[_month_index(game.game_date)] += 1
        
        last = max(counts)
        first = min(counts) if months is None else last - months + 1
        
        return tuple(
            MonthlyGameCount(year=index // 12, month=index % 12 + 1, games=counts.get(index, 0))
            for index in range(first, last + 1)
        )
    
    def build_report(self, games: Sequence[Game], records: Sequence[ParticipationRecord],
                     window_size: int, require_full_window: bool = True,
                     histogram_months: Optional[int] = None) -> TrendReport:
        """Materialize every trend into a serializable TrendReport."""
        series = self.rolling_win_rates(records, window_size, require_full_window)
        labels = {
            r.identity.member_id: r.identity.label
            for r in records if r.identity.counts_toward_statistics
        }
        
        member_trends = sorted(
            (
                MemberTrend(
                    member_id=member_id,
                    display_name=labels[member_id],
                    win_flags=member_series.win_flags,
                    points=tuple(member_series),
                )
                for member_id, member_series in series.items()
            ),
            key=lambda t: (t.display_name.casefold(), t.member_id)
        )
        
        report = TrendReport(
            window_size=window_size,
            require_full_window=require_full_window,
            rolling_win_rates=tuple(member_trends),
            starting_positions=self.starting_positions(records),
            monthly_games=self.monthly_histogram(games, histogram_months),
        )
        
        logger.debug(
            f"Built trends for {len(member_trends)} members "
            f"(window={window_size}, months={len(report.monthly_games)})"
        )
        return report
