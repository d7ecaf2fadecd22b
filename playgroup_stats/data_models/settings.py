"""Per-call configuration for the statistics engine."""

from dataclasses import dataclass
from typing import Optional

from playgroup_stats.config import Config
from playgroup_stats.constants import StatisticsDefaults


@dataclass(frozen=True)
class StatisticsSettings:
    """Caller-supplied thresholds, with the recognized defaults."""
    min_games_for_best_commander: int = StatisticsDefaults.MIN_GAMES_FOR_BEST_COMMANDER
    min_games_for_win_rate_ranking: int = StatisticsDefaults.MIN_GAMES_FOR_WIN_RATE_RANKING
    top_commander_limit: int = StatisticsDefaults.TOP_COMMANDER_LIMIT
    trend_window_size: int = StatisticsDefaults.TREND_WINDOW_SIZE
    require_full_window: bool = True
    histogram_months: Optional[int] = None  # None = first game through last game
    
    def __post_init__(self):
        if self.min_games_for_best_commander < 1:
            raise ValueError("min_games_for_best_commander must be at least 1")
        if self.min_games_for_win_rate_ranking < 1:
            raise ValueError("min_games_for_win_rate_ranking must be at least 1")
        if self.top_commander_limit < 1:
            raise ValueError("top_commander_limit must be at least 1")
        if self.trend_window_size < 1:
            raise ValueError("trend_window_size must be at least 1")
        if self.histogram_months is not None and self.histogram_months < 1:
            raise ValueError("histogram_months must be at least 1 when set")
    
    @classmethod
    def from_config(cls, **overrides) -> 'StatisticsSettings':
        """Build settings from environment configuration, applying overrides."""
        values = {
            'min_games_for_best_commander': Config.MIN_GAMES_FOR_BEST_COMMANDER,
            'min_games_for_win_rate_ranking': Config.MIN_GAMES_FOR_WIN_RATE_RANKING,
            'top_commander_limit': Config.TOP_COMMANDER_LIMIT,
            'trend_window_size': Config.TREND_WINDOW_SIZE,
            'require_full_window': Config.TREND_REQUIRE_FULL_WINDOW,
            'histogram_months': Config.HISTOGRAM_MONTHS,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
