"""
Statistics engine facade.

Runs the identity resolver and result classifier once per snapshot, then feeds
the resulting participation records to each aggregator. Every method is a pure
recomputation over the snapshot it is given.
"""

import logging
from typing import Optional, Tuple

from playgroup_stats.data_models.reports import (
    CommanderStatisticsReport, PlayerStatisticsReport, PlaygroupMetricsReport,
    PlaygroupStatistics, TrendReport
)
from playgroup_stats.data_models.settings import StatisticsSettings
from playgroup_stats.data_models.snapshot import PlaygroupSnapshot
from playgroup_stats.operations.commander_stats import CommanderStatisticsAggregator
from playgroup_stats.operations.player_stats import PlayerStatisticsAggregator
from playgroup_stats.operations.playgroup_metrics import PlaygroupMetricsAggregator
from playgroup_stats.operations.records import build_participation_records
from playgroup_stats.operations.trends import TrendEngine

logger = logging.getLogger(__name__)

# Default for arguments that fall back to the engine settings when omitted
FROM_SETTINGS = object()


class StatisticsEngine:
    """Computes every statistics report for a playgroup snapshot"""
    
    def __init__(self, settings: Optional[StatisticsSettings] = None):
        self.settings = settings or StatisticsSettings()
        self.player_aggregator = PlayerStatisticsAggregator(self.settings.min_games_for_best_commander)
        self.commander_aggregator = CommanderStatisticsAggregator(
            self.settings.min_games_for_win_rate_ranking,
            self.settings.top_commander_limit,
        )
        self.metrics_aggregator = PlaygroupMetricsAggregator()
        self.trend_engine = TrendEngine()
    
    def player_statistics(self, snapshot: PlaygroupSnapshot) -> Tuple[PlayerStatisticsReport, ...]:
        return self.player_aggregator.aggregate(build_participation_records(snapshot))
    
    def commander_statistics(self, snapshot: PlaygroupSnapshot) -> CommanderStatisticsReport:
        return self.commander_aggregator.aggregate(build_participation_records(snapshot))
    
    def playgroup_metrics(self, snapshot: PlaygroupSnapshot) -> PlaygroupMetricsReport:
        return self.metrics_aggregator.aggregate(snapshot, build_participation_records(snapshot))
    
    def trends(self, snapshot: PlaygroupSnapshot, window_size: Optional[int] = None,
               require_full_window: Optional[bool] = None,
               histogram_months=FROM_SETTINGS) -> TrendReport:
        """
        Compute the trend report, optionally overriding the configured window.
        
        Args:
            snapshot: Playgroup snapshot
            window_size: Rolling window size; settings value when omitted
            require_full_window: Whether early partial windows are skipped
            histogram_months: Limit the histogram to the last N months; None for
                the full first-to-last span, omitted for the settings value
            
        Raises:
            ValueError: window_size or histogram_months below 1
        """
        return self.trend_engine.build_report(
            snapshot.ordered_games(),
            build_participation_records(snapshot),
            self.settings.trend_window_size if window_size is None else window_size,
            self.settings.require_full_window if require_full_window is None else require_full_window,
            self.settings.histogram_months if histogram_months is FROM_SETTINGS else histogram_months,
        )
    
    def compute_all(self, snapshot: PlaygroupSnapshot) -> PlaygroupStatistics:
        """
        Compute every report from a single pass of identity resolution.
        
        Raises:
            DanglingReferenceError: Snapshot references a missing entity
            InvalidSnapshotError: Snapshot violates an upstream invariant
        """
        records = build_participation_records(snapshot)
        games = snapshot.ordered_games()
        
        statistics = PlaygroupStatistics(
            playgroup_id=snapshot.playgroup.id,
            players=self.player_aggregator.aggregate(records),
            commanders=self.commander_aggregator.aggregate(records),
            metrics=self.metrics_aggregator.aggregate(snapshot, records),
            trends=self.trend_engine.build_report(
                games,
                records,
                self.settings.trend_window_size,
                self.settings.require_full_window,
                self.settings.histogram_months,
            ),
        )
        
        logger.info(
            f"Computed statistics for playgroup {snapshot.playgroup.id}: "
            f"{len(games)} games, {len(statistics.players)} players, "
            f"{statistics.commanders.distinct_commanders} commanders"
        )
        return statistics
