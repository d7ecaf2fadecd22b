"""Playgroup-level summary metrics."""

import logging
from collections import Counter
from typing import Sequence

from playgroup_stats.data_models.reports import DateRange, PlaygroupMetricsReport
from playgroup_stats.data_models.snapshot import PlaygroupSnapshot
from playgroup_stats.operations.records import ParticipationRecord

logger = logging.getLogger(__name__)


class PlaygroupMetricsAggregator:
    """Aggregates totals, averages, date range and modal table size"""
    
    def aggregate(self, snapshot: PlaygroupSnapshot,
                  records: Sequence[ParticipationRecord]) -> PlaygroupMetricsReport:
        """
        Aggregate playgroup metrics.
        
        Args:
            snapshot: The playgroup snapshot (games and members)
            records: Participation records built from the same snapshot
            
        Returns:
            PlaygroupMetricsReport; averages, range and mode are None with no games
        """
        games = snapshot.ordered_games()
        total_games = len(games)
        total_participants = len(records)
        
        date_range = None
        modal_player_count = None
        average_players = None
        if total_games:
            date_range = DateRange(
                first=min(game.game_date for game in games),
                last=max(game.game_date for game in games),
            )
            table_sizes = Counter(game.player_count for game in games)
            # Most frequent size wins; ties go to the smaller table
            modal_player_count = min(table_sizes.items(), key=lambda item: (-item[1], item[0]))[0]
            average_players = total_participants / total_games
        
        members = snapshot.members_by_id().values()
        active_members = sum(1 for member in members if member.is_active)
        
        report = PlaygroupMetricsReport(
            playgroup_id=snapshot.playgroup.id,
            playgroup_name=snapshot.playgroup.name,
            total_games=total_games,
            total_participants=total_participants,
            guest_participations=sum(1 for r in records if not r.identity.counts_toward_statistics),
            total_unique_commanders=len({r.commander.id for r in records}),
            average_players_per_game=average_players,
            date_range=date_range,
            modal_player_count=modal_player_count,
            active_members=active_members,
            removed_members=len(members) - active_members,
        )
        
        logger.debug(f"Playgroup {snapshot.playgroup.id}: {total_games} games, {total_participants} participants")
        return report
