"""Snapshot builders shared by the statistics tests."""

from datetime import date, datetime, timedelta
from typing import List, Optional

from playgroup_stats.data_models.snapshot import (
    Account, Commander, Game, Member, MemberType, Participant, PlayerType,
    Playgroup, PlaygroupSnapshot
)

PLAYGROUP_ID = "pg-1"


def member_seat(member_id: str, commander_id: str, finish: int) -> dict:
    return {"member_id": member_id, "commander_id": commander_id, "finish": finish}


def guest_seat(name: Optional[str], commander_id: str, finish: int) -> dict:
    return {"guest_name": name, "commander_id": commander_id, "finish": finish, "guest": True}


class SnapshotBuilder:
    """Fluent builder for PlaygroupSnapshot test fixtures."""
    
    def __init__(self, playgroup_id: str = PLAYGROUP_ID, name: str = "Friday Night Commander"):
        self.playgroup = Playgroup(id=playgroup_id, name=name, created_by="acct-owner")
        self.members: List[Member] = []
        self.games: List[Game] = []
        self.commanders = {}
        self.accounts = {}
        self._created = datetime(2025, 1, 1, 12, 0, 0)
    
    def user(self, member_id: str, username: str, removed: bool = False) -> 'SnapshotBuilder':
        account_id = f"acct-{member_id}"
        self.accounts[account_id] = Account(id=account_id, username=username)
        self.members.append(Member(
            id=member_id,
            playgroup_id=self.playgroup.id,
            member_type=MemberType.USER,
            account_id=account_id,
            removed_at=datetime(2025, 6, 1) if removed else None,
        ))
        return self
    
    def non_user(self, member_id: str, name: str, removed: bool = False) -> 'SnapshotBuilder':
        self.members.append(Member(
            id=member_id,
            playgroup_id=self.playgroup.id,
            member_type=MemberType.NON_USER,
            non_user_name=name,
            removed_at=datetime(2025, 6, 1) if removed else None,
        ))
        return self
    
    def commander(self, commander_id: str, name: str, colors: Optional[str] = "") -> 'SnapshotBuilder':
        self.commanders[commander_id] = Commander(
            id=commander_id, name=name, scryfall_id=f"scry-{commander_id}", color_identity=colors
        )
        return self
    
    def game(self, game_date: date, *seats: dict, game_id: Optional[str] = None) -> 'SnapshotBuilder':
        game_id = game_id or f"game-{len(self.games) + 1}"
        self._created += timedelta(minutes=1)
        participants = []
        for seat_number, seat in enumerate(seats, start=1):
            is_guest = seat.get("guest", False)
            participants.append(Participant(
                id=f"{game_id}-p{seat_number}",
                game_id=game_id,
                commander_id=seat["commander_id"],
                player_type=PlayerType.GUEST if is_guest else PlayerType.MEMBER,
                starting_position=seat_number,
                finishing_position=seat["finish"],
                member_id=None if is_guest else seat["member_id"],
                guest_name=seat.get("guest_name") if is_guest else None,
            ))
        self.games.append(Game(
            id=game_id,
            playgroup_id=self.playgroup.id,
            game_date=game_date,
            participants=tuple(participants),
            created_at=self._created,
        ))
        return self
    
    def build(self) -> PlaygroupSnapshot:
        return PlaygroupSnapshot(
            playgroup=self.playgroup,
            members=tuple(self.members),
            games=tuple(self.games),
            commanders=dict(self.commanders),
            accounts=dict(self.accounts),
        )


def standard_builder() -> SnapshotBuilder:
    """Four members (one removed, one never played) and a small commander pool."""
    return (
        SnapshotBuilder()
        .user("m-alice", "Alice")
        .user("m-bob", "bob")
        .non_user("m-carol", "Carol")
        .non_user("m-dave", "Dave", removed=True)
        .user("m-erin", "Erin")
        .commander("c-atraxa", "Atraxa, Praetors' Voice", "WUBG")
        .commander("c-krenko", "Krenko, Mob Boss", "R")
        .commander("c-kenrith", "Kenrith, the Returned King", "WUBRG")
        .commander("c-karn", "Karn, Silver Golem", "")
        .commander("c-edgar", "Edgar Markov", "RWB")
    )
