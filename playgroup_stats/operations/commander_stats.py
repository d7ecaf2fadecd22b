"""
Commander statistics aggregation.

Counts every participant record, guests included, since commander performance
does not depend on who piloted the deck.
"""

import logging
from collections import Counter, defaultdict
from types import MappingProxyType
from typing import Sequence

from playgroup_stats.constants import StatisticsDefaults
from playgroup_stats.data_models.reports import CommanderStatistics, CommanderStatisticsReport
from playgroup_stats.operations.records import ParticipationRecord

logger = logging.getLogger(__name__)


class CommanderStatisticsAggregator:
    """Aggregates commander play counts, win rates, colors and diversity"""
    
    def __init__(self, min_games_for_win_rate_ranking: int = StatisticsDefaults.MIN_GAMES_FOR_WIN_RATE_RANKING,
                 top_limit: int = StatisticsDefaults.TOP_COMMANDER_LIMIT):
        self.min_games_for_win_rate_ranking = min_games_for_win_rate_ranking
        self.top_limit = top_limit
    
    def aggregate(self, records: Sequence[ParticipationRecord]) -> CommanderStatisticsReport:
        """
        Aggregate commander statistics from participation records.
        
        Args:
            records: Participation records for the whole playgroup
            
        Returns:
            CommanderStatisticsReport with rankings and color distribution
        """
        times_played = defaultdict(int)
        wins = defaultdict(int)
        commanders = {}
        colors = {}
        color_counts = Counter()
        
        for record in records:
            commander_id = record.commander.id
            times_played[commander_id] += 1
            if record.result.is_winner:
                wins[commander_id] += 1
            commanders[commander_id] = record.commander
            colors[commander_id] = record.color_identity
            color_counts[record.color_identity] += 1
        
        stats = [
            CommanderStatistics(
                commander_id=commander_id,
                name=commanders[commander_id].name,
                color_identity=colors[commander_id],
                times_played=count,
                wins=wins[commander_id],
                win_rate=wins[commander_id] / count,
            )
            for commander_id, count in times_played.items()
        ]
        
        by_play_count = sorted(
            stats,
            key=lambda s: (-s.times_played, s.name.casefold(), s.commander_id)
        )
        ranked_by_win_rate = sorted(
            (s for s in stats if s.times_played >= self.min_games_for_win_rate_ranking),
            key=lambda s: (-s.win_rate, -s.times_played, s.name.casefold(), s.commander_id)
        )
        
        total = len(records)
        distinct = len(stats)
        
        logger.debug(f"Aggregated {distinct} commanders over {total} participations")
        
        return CommanderStatisticsReport(
            total_participations=total,
            distinct_commanders=distinct,
            diversity_metric=distinct / total if total else 0.0,
            top_most_played=tuple(by_play_count[:self.top_limit]),
            top_win_rate=tuple(ranked_by_win_rate[:self.top_limit]),
            color_identity_distribution=MappingProxyType(
                dict(sorted(color_counts.items(), key=self._color_sort_key))
            ),
            commanders=tuple(by_play_count),
        )
    
    @staticmethod
    def _color_sort_key(item):
        # Most used identity first, then fewest colors, then alphabetical
        identity, count = item
        return (-count, len(identity), identity)
