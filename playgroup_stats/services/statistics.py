"""
Statistics service: loads a playgroup snapshot and runs the engine.

Statistics are recomputed from the full current data on every request. The
snapshot is read inside one session; computation happens after the session
closes so the engine never holds database resources.
"""

from typing import Optional, Tuple

from playgroup_stats.data_models.reports import (
    CommanderStatisticsReport, PlayerStatisticsReport, PlaygroupMetricsReport,
    PlaygroupStatistics, TrendReport
)
from playgroup_stats.data_models.settings import StatisticsSettings
from playgroup_stats.data_models.snapshot import PlaygroupSnapshot
from playgroup_stats.database.snapshot_loader import SnapshotLoader
from playgroup_stats.operations.engine import FROM_SETTINGS, StatisticsEngine
from playgroup_stats.services.base import BaseService
from playgroup_stats.utils.exceptions import StatisticsError
from playgroup_stats.utils.logger import setup_logger

logger = setup_logger(__name__)


class StatisticsService(BaseService):
    """Service for computing playgroup statistics from the database"""
    
    def __init__(self, session_factory, settings: Optional[StatisticsSettings] = None):
        super().__init__(session_factory)
        self.settings = settings or StatisticsSettings.from_config()
        self.engine = StatisticsEngine(self.settings)
        self.loader = SnapshotLoader()
    
    async def load_snapshot(self, playgroup_id: str) -> PlaygroupSnapshot:
        async with self.get_session() as session:
            return await self.loader.load(session, playgroup_id)
    
    async def get_playgroup_statistics(self, playgroup_id: str) -> PlaygroupStatistics:
        """
        Compute every report for a playgroup.
        
        Args:
            playgroup_id: Playgroup to report on
            
        Returns:
            PlaygroupStatistics bundle
            
        Raises:
            PlaygroupNotFoundError: Unknown playgroup
            DanglingReferenceError: Stored rows reference missing entities
            InvalidSnapshotError: Stored rows violate an invariant
        """
        snapshot = await self.load_snapshot(playgroup_id)
        try:
            return self.engine.compute_all(snapshot)
        except StatisticsError as e:
            logger.error(f"Statistics failed for playgroup {playgroup_id}: {e}")
            raise
    
    async def get_player_statistics(self, playgroup_id: str) -> Tuple[PlayerStatisticsReport, ...]:
        snapshot = await self.load_snapshot(playgroup_id)
        return self.engine.player_statistics(snapshot)
    
    async def get_commander_statistics(self, playgroup_id: str) -> CommanderStatisticsReport:
        snapshot = await self.load_snapshot(playgroup_id)
        return self.engine.commander_statistics(snapshot)
    
    async def get_playgroup_metrics(self, playgroup_id: str) -> PlaygroupMetricsReport:
        snapshot = await self.load_snapshot(playgroup_id)
        return self.engine.playgroup_metrics(snapshot)
    
    async def get_trends(self, playgroup_id: str, window_size: Optional[int] = None,
                         require_full_window: Optional[bool] = None,
                         histogram_months=FROM_SETTINGS) -> TrendReport:
        """Compute trends, optionally overriding the configured window and span."""
        snapshot = await self.load_snapshot(playgroup_id)
        return self.engine.trends(snapshot, window_size, require_full_window, histogram_months)
