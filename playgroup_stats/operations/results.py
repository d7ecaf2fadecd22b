"""Tie-aware game result classification."""

from typing import Dict, Sequence

from playgroup_stats.data_models.reports import ParticipantResult
from playgroup_stats.data_models.snapshot import Participant
from playgroup_stats.utils.exceptions import InvalidSnapshotError


class ResultClassifier:
    """Determines winners and normalized positions for a game"""
    
    @staticmethod
    def classify(participants: Sequence[Participant]) -> Dict[str, ParticipantResult]:
        """
        Classify every participant of a single game.
        
        Every participant sharing the lowest finishing position is a winner, so a
        fully tied game has no losers. Positions are reported as recorded; gaps
        such as [1, 3, 3, 4] are not compressed.
        
        Args:
            participants: All participants of one game
            
        Returns:
            Dictionary mapping participant id to its ParticipantResult
        """
        if not participants:
            return {}

        for participant in participants:
            if participant.finishing_position is None:
                raise InvalidSnapshotError(
                    f"participant {participant.id}",
                    "finishing position is missing"
                )
            if participant.starting_position is None:
                raise InvalidSnapshotError(
                    f"participant {participant.id}",
                    "starting position is missing"
                )

        best_position = min(p.finishing_position for p in participants)
        winner_count = sum(1 for p in participants if p.finishing_position == best_position)
        
        results = {}
        for participant in participants:
            is_winner = participant.finishing_position == best_position
            results[participant.id] = ParticipantResult(
                participant_id=participant.id,
                is_winner=is_winner,
                normalized_position=participant.finishing_position,
                is_sole_winner=is_winner and winner_count == 1,
            )
        return results
