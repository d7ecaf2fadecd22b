"""
Snapshot data models for the statistics engine.

Read-only copies of the persisted entities for a single playgroup. The engine
receives one PlaygroupSnapshot per computation request and never mutates it.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from playgroup_stats.utils.exceptions import DanglingReferenceError, InvalidSnapshotError


class MemberType(Enum):
    """Distinguishes account-backed members from name-only members"""
    USER = "user"          # has account_id
    NON_USER = "non_user"  # has non_user_name


class PlayerType(Enum):
    """Distinguishes playgroup members from one-off guests in a game"""
    MEMBER = "member"  # tracked in statistics
    GUEST = "guest"    # free-text name, no statistics


@dataclass(frozen=True)
class Account:
    """Account profile; username is the current display name."""
    id: str
    username: str


@dataclass(frozen=True)
class Playgroup:
    id: str
    name: str
    created_by: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Member:
    """Playgroup membership. removed_at marks a soft delete."""
    id: str
    playgroup_id: str
    member_type: MemberType
    account_id: Optional[str] = None
    non_user_name: Optional[str] = None
    active_since: Optional[datetime] = None
    removed_at: Optional[datetime] = None
    
    @property
    def is_active(self) -> bool:
        return self.removed_at is None


@dataclass(frozen=True)
class Commander:
    id: str
    name: str
    scryfall_id: Optional[str] = None
    color_identity: Optional[str] = None
    image_png: Optional[str] = None
    image_border_crop: Optional[str] = None
    image_art_crop: Optional[str] = None
    image_large: Optional[str] = None
    image_normal: Optional[str] = None
    image_small: Optional[str] = None


@dataclass(frozen=True)
class Participant:
    """One seat in a game. Ties share a finishing_position."""
    id: str
    game_id: str
    commander_id: str
    player_type: PlayerType
    starting_position: int
    finishing_position: int
    member_id: Optional[str] = None
    guest_name: Optional[str] = None


@dataclass(frozen=True)
class Game:
    id: str
    playgroup_id: str
    game_date: date
    participants: Tuple[Participant, ...] = ()
    created_at: Optional[datetime] = None
    
    @property
    def player_count(self) -> int:
        return len(self.participants)


def _game_order_key(game: Game):
    # Undated rows sort ahead of dated rows on the same day
    created = game.created_at.timestamp() if game.created_at is not None else 0.0
    return (game.game_date, game.created_at is not None, created, game.id)


@dataclass(frozen=True)
class PlaygroupSnapshot:
    """Everything the engine needs to compute statistics for one playgroup."""
    playgroup: Playgroup
    members: Tuple[Member, ...] = ()
    games: Tuple[Game, ...] = ()
    commanders: Mapping[str, Commander] = field(default_factory=dict)
    accounts: Mapping[str, Account] = field(default_factory=dict)
    
    def members_by_id(self) -> Dict[str, Member]:
        """Index members (active and removed) by id."""
        index: Dict[str, Member] = {}
        for member in self.members:
            if member.id in index:
                raise InvalidSnapshotError(f"member {member.id}", "duplicate member id")
            if member.playgroup_id != self.playgroup.id:
                raise InvalidSnapshotError(
                    f"member {member.id}",
                    f"belongs to playgroup {member.playgroup_id}, not {self.playgroup.id}"
                )
            index[member.id] = member
        return index
    
    def commander(self, commander_id: str, referenced_by: str = None) -> Commander:
        """Look up a commander, failing loudly when the reference dangles."""
        commander = self.commanders.get(commander_id)
        if commander is None:
            raise DanglingReferenceError("Commander", commander_id, referenced_by)
        return commander
    
    def ordered_games(self) -> Tuple[Game, ...]:
        """
        Games in chronological order: game_date, then creation time, then id.
        
        Raises:
            InvalidSnapshotError: If a game belongs to another playgroup or ids repeat
        """
        seen = set()
        for game in self.games:
            if game.id in seen:
                raise InvalidSnapshotError(f"game {game.id}", "duplicate game id")
            seen.add(game.id)
            if game.playgroup_id != self.playgroup.id:
                raise InvalidSnapshotError(
                    f"game {game.id}",
                    f"belongs to playgroup {game.playgroup_id}, not {self.playgroup.id}"
                )
        return tuple(sorted(self.games, key=_game_order_key))
