"""
Player statistics aggregation.

Builds one PlayerStatisticsReport per member that has played at least one game.
Members without games are omitted rather than reported with a 0% win rate.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from playgroup_stats.constants import StatisticsDefaults
from playgroup_stats.data_models.reports import CommanderUsage, PlayerStatisticsReport
from playgroup_stats.operations.records import ParticipationRecord

logger = logging.getLogger(__name__)


def _usage_sort_key(usage: CommanderUsage):
    return (usage.name.casefold(), usage.commander_id)


def _pick_most_played(usages: List[CommanderUsage]) -> Optional[CommanderUsage]:
    if not usages:
        return None
    return min(usages, key=lambda u: (-u.games,) + _usage_sort_key(u))


def _pick_best(usages: List[CommanderUsage], min_games: int) -> Optional[CommanderUsage]:
    eligible = [u for u in usages if u.games >= min_games]
    if not eligible:
        return None
    return min(eligible, key=lambda u: (-u.win_rate,) + _usage_sort_key(u))


class PlayerStatisticsAggregator:
    """Aggregates per-member win rates, positions and commander preferences"""
    
    def __init__(self, min_games_for_best_commander: int = StatisticsDefaults.MIN_GAMES_FOR_BEST_COMMANDER):
        self.min_games_for_best_commander = min_games_for_best_commander
    
    def aggregate(self, records: Sequence[ParticipationRecord]) -> Tuple[PlayerStatisticsReport, ...]:
        """
        Aggregate player statistics from participation records.
        
        Args:
            records: Participation records for the whole playgroup
            
        Returns:
            Reports ordered by display name (case-insensitive), then member id
        """
        by_member: Dict[str, List[ParticipationRecord]] = defaultdict(list)
        for record in records:
            if record.identity.counts_toward_statistics:
                by_member[record.identity.member_id].append(record)
        
        reports = [self._build_report(member_records) for member_records in by_member.values()]
        reports.sort(key=lambda r: (r.display_name.casefold(), r.member_id))
        
        logger.debug(f"Aggregated player statistics for {len(reports)} members")
        return tuple(reports)
    
    def _build_report(self, member_records: List[ParticipationRecord]) -> PlayerStatisticsReport:
        identity = member_records[0].identity
        games_played = len(member_records)
        wins = sum(1 for r in member_records if r.result.is_winner)
        clean_wins = sum(1 for r in member_records if r.result.is_sole_winner)
        total_position = sum(r.result.normalized_position for r in member_records)
        
        usages = self._commander_usages(member_records)
        
        return PlayerStatisticsReport(
            member_id=identity.member_id,
            display_name=identity.label,
            is_active=identity.is_active,
            games_played=games_played,
            wins=wins,
            losses=games_played - wins,
            clean_wins=clean_wins,
            win_rate=wins / games_played if games_played else None,
            average_position=total_position / games_played if games_played else None,
            most_played_commander=_pick_most_played(usages),
            best_commander=_pick_best(usages, self.min_games_for_best_commander),
        )
    
    @staticmethod
    def _commander_usages(member_records: List[ParticipationRecord]) -> List[CommanderUsage]:
        games = defaultdict(int)
        wins = defaultdict(int)
        names = {}
        for record in member_records:
            commander_id = record.commander.id
            games[commander_id] += 1
            if record.result.is_winner:
                wins[commander_id] += 1
            names[commander_id] = record.commander.name
        
        return [
            CommanderUsage(
                commander_id=commander_id,
                name=names[commander_id],
                games=count,
                wins=wins[commander_id],
                win_rate=wins[commander_id] / count,
            )
            for commander_id, count in games.items()
        ]
