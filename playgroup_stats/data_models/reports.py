"""
Report data models for the statistics engine.

Immutable data transfer objects returned to the presentation layer. They hold
plain values only, with no references back into the snapshot, so they can be
serialized directly via report_to_dict().
"""

from dataclasses import dataclass, fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class DisplayIdentity:
    """Resolved identity of a game participant."""
    label: str
    counts_toward_statistics: bool
    member_id: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class ParticipantResult:
    """Tie-aware outcome of one participant in one game."""
    participant_id: str
    is_winner: bool
    normalized_position: int
    is_sole_winner: bool  # a "clean win": nobody tied for first


@dataclass(frozen=True)
class CommanderUsage:
    """A member's record with one commander."""
    commander_id: str
    name: str
    games: int
    wins: int
    win_rate: float


@dataclass(frozen=True)
class PlayerStatisticsReport:
    """Statistics for a single member with at least one recorded game."""
    member_id: str
    display_name: str
    is_active: bool
    games_played: int
    wins: int
    losses: int
    clean_wins: int
    win_rate: Optional[float]
    average_position: Optional[float]
    most_played_commander: Optional[CommanderUsage]
    best_commander: Optional[CommanderUsage]


@dataclass(frozen=True)
class CommanderStatistics:
    """Usage of one commander across every participant record."""
    commander_id: str
    name: str
    color_identity: str
    times_played: int
    wins: int
    win_rate: float


@dataclass(frozen=True)
class CommanderStatisticsReport:
    total_participations: int
    distinct_commanders: int
    diversity_metric: float
    top_most_played: Tuple[CommanderStatistics, ...]
    top_win_rate: Tuple[CommanderStatistics, ...]
    color_identity_distribution: Mapping[str, int]  # read-only view
    commanders: Tuple[CommanderStatistics, ...]


@dataclass(frozen=True)
class DateRange:
    first: date
    last: date


@dataclass(frozen=True)
class PlaygroupMetricsReport:
    playgroup_id: str
    playgroup_name: str
    total_games: int
    total_participants: int
    guest_participations: int
    total_unique_commanders: int
    average_players_per_game: Optional[float]
    date_range: Optional[DateRange]
    modal_player_count: Optional[int]
    active_members: int
    removed_members: int


@dataclass(frozen=True)
class GameWinFlag:
    """Raw per-game outcome feeding a member's rolling window."""
    game_index: int
    game_id: str
    game_date: date
    is_winner: bool


@dataclass(frozen=True)
class TrendPoint:
    game_index: int
    win_ratio: float
    window_games: int  # equals the window size unless partial windows were requested


@dataclass(frozen=True)
class MemberTrend:
    member_id: str
    display_name: str
    win_flags: Tuple[GameWinFlag, ...]
    points: Tuple[TrendPoint, ...]


@dataclass(frozen=True)
class StartingPositionStats:
    position: int
    sample_size: int
    wins: int
    win_rate: float


@dataclass(frozen=True)
class MonthlyGameCount:
    year: int
    month: int
    games: int


@dataclass(frozen=True)
class TrendReport:
    window_size: int
    require_full_window: bool
    rolling_win_rates: Tuple[MemberTrend, ...]
    starting_positions: Tuple[StartingPositionStats, ...]
    monthly_games: Tuple[MonthlyGameCount, ...]


@dataclass(frozen=True)
class PlaygroupStatistics:
    """Every report for one playgroup, computed from the same snapshot."""
    playgroup_id: str
    players: Tuple[PlayerStatisticsReport, ...]
    commanders: CommanderStatisticsReport
    metrics: PlaygroupMetricsReport
    trends: TrendReport


def report_to_dict(report: Any) -> Any:
    """Convert a report (or tuple of reports) into JSON-ready primitives."""
    if is_dataclass(report) and not isinstance(report, type):
        return {f.name: report_to_dict(getattr(report, f.name)) for f in fields(report)}
    if isinstance(report, (list, tuple)):
        return [report_to_dict(item) for item in report]
    if isinstance(report, Mapping):
        return {str(key): report_to_dict(value) for key, value in report.items()}
    if isinstance(report, (date, datetime)):
        return report.isoformat()
    if isinstance(report, Enum):
        return report.value
    return report
