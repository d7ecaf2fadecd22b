"""
Participation records: the resolved, classified view of a snapshot.

Each record pairs one participant with its display identity, its tie-aware
result, its commander and the game's chronological index. Aggregators consume
these records instead of the raw snapshot variants.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from playgroup_stats.data_models.reports import DisplayIdentity, ParticipantResult
from playgroup_stats.data_models.snapshot import Commander, Game, Participant, PlaygroupSnapshot
from playgroup_stats.operations.identity import IdentityResolver
from playgroup_stats.operations.results import ResultClassifier
from playgroup_stats.utils.color_identity import normalize_color_identity
from playgroup_stats.utils.exceptions import InvalidSnapshotError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParticipationRecord:
    game_index: int
    game: Game
    participant: Participant
    identity: DisplayIdentity
    result: ParticipantResult
    commander: Commander
    color_identity: str


def build_participation_records(snapshot: PlaygroupSnapshot) -> Tuple[ParticipationRecord, ...]:
    """
    Resolve and classify every participant in the snapshot.
    
    Records come out in chronological game order, and in starting-position
    order within a game.
    
    Raises:
        DanglingReferenceError: A member or commander reference is missing
        InvalidSnapshotError: A record violates a snapshot invariant
    """
    resolver = IdentityResolver.from_snapshot(snapshot)
    records = []
    
    for game_index, game in enumerate(snapshot.ordered_games()):
        results = ResultClassifier.classify(game.participants)
        seats = sorted(game.participants, key=lambda p: (p.starting_position, p.id))
        for participant in seats:
            if participant.game_id != game.id:
                raise InvalidSnapshotError(
                    f"participant {participant.id}",
                    f"listed under game {game.id} but references game {participant.game_id}"
                )
            commander = snapshot.commander(participant.commander_id, f"participant {participant.id}")
            records.append(ParticipationRecord(
                game_index=game_index,
                game=game,
                participant=participant,
                identity=resolver.resolve(participant),
                result=results[participant.id],
                commander=commander,
                color_identity=normalize_color_identity(commander.color_identity, commander.id),
            ))
    
    logger.debug(
        f"Built {len(records)} participation records from {len(snapshot.games)} games "
        f"for playgroup {snapshot.playgroup.id}"
    )
    return tuple(records)
