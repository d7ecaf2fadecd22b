"""
Snapshot loader: reads one playgroup's rows and builds a PlaygroupSnapshot.

This is the only module that touches the database on behalf of the engine.
It loads the full historical membership (removed members included) so that
past games keep resolving, plus every account and commander those rows
reference.
"""

import logging
from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from playgroup_stats.data_models import snapshot as snap
from playgroup_stats.database.models import (
    Commander, Game, GameParticipant, Playgroup, PlaygroupMember, Profile
)
from playgroup_stats.utils.exceptions import PlaygroupNotFoundError

logger = logging.getLogger(__name__)


class SnapshotLoader:
    """Builds immutable playgroup snapshots from the database"""
    
    async def load(self, session: AsyncSession, playgroup_id: str) -> snap.PlaygroupSnapshot:
        """
        Load a complete snapshot for one playgroup.
        
        Args:
            session: Database session
            playgroup_id: Playgroup to load
            
        Returns:
            PlaygroupSnapshot with members, accounts, games and commanders
            
        Raises:
            PlaygroupNotFoundError: If the playgroup does not exist
        """
        playgroup = await session.get(Playgroup, playgroup_id)
        if playgroup is None:
            raise PlaygroupNotFoundError(playgroup_id)
        
        # No removed_at filter: historical members must stay resolvable
        member_rows = (await session.execute(
            select(PlaygroupMember).where(PlaygroupMember.playgroup_id == playgroup_id)
        )).scalars().all()
        
        game_rows = (await session.execute(
            select(Game)
            .options(selectinload(Game.participants))
            .where(Game.playgroup_id == playgroup_id)
            .order_by(Game.game_date, Game.created_at, Game.id)
        )).scalars().all()
        
        account_ids = {m.user_id for m in member_rows if m.user_id is not None}
        commander_ids = {p.commander_id for g in game_rows for p in g.participants}
        
        accounts = await self._load_accounts(session, account_ids)
        commanders = await self._load_commanders(session, commander_ids)
        
        snapshot = snap.PlaygroupSnapshot(
            playgroup=snap.Playgroup(
                id=playgroup.id,
                name=playgroup.name,
                created_by=playgroup.created_by,
                created_at=playgroup.created_at,
            ),
            members=tuple(self._to_member(row) for row in member_rows),
            games=tuple(self._to_game(row) for row in game_rows),
            commanders=commanders,
            accounts=accounts,
        )
        
        logger.info(
            f"Loaded snapshot for playgroup {playgroup_id}: "
            f"{len(snapshot.members)} members, {len(snapshot.games)} games, "
            f"{len(commanders)} commanders"
        )
        return snapshot
    
    @staticmethod
    async def _load_accounts(session: AsyncSession, account_ids) -> Dict[str, snap.Account]:
        if not account_ids:
            return {}
        rows = (await session.execute(
            select(Profile).where(Profile.id.in_(account_ids))
        )).scalars().all()
        return {row.id: snap.Account(id=row.id, username=row.username) for row in rows}
    
    @staticmethod
    async def _load_commanders(session: AsyncSession, commander_ids) -> Dict[str, snap.Commander]:
        if not commander_ids:
            return {}
        rows = (await session.execute(
            select(Commander).where(Commander.id.in_(commander_ids))
        )).scalars().all()
        return {
            row.id: snap.Commander(
                id=row.id,
                name=row.name,
                scryfall_id=row.scryfall_id,
                color_identity=row.color_identity,
                image_png=row.scryfall_png,
                image_border_crop=row.scryfall_border_crop,
                image_art_crop=row.scryfall_art_crop,
                image_large=row.scryfall_large,
                image_normal=row.scryfall_normal,
                image_small=row.scryfall_small,
            )
            for row in rows
        }
    
    @staticmethod
    def _to_member(row: PlaygroupMember) -> snap.Member:
        return snap.Member(
            id=row.id,
            playgroup_id=row.playgroup_id,
            member_type=row.member_type,
            account_id=row.user_id,
            non_user_name=row.non_user_name,
            active_since=row.created_at,
            removed_at=row.removed_at,
        )
    
    @staticmethod
    def _to_game(row: Game) -> snap.Game:
        participants: List[snap.Participant] = [
            snap.Participant(
                id=p.id,
                game_id=p.game_id,
                commander_id=p.commander_id,
                player_type=p.player_type,
                starting_position=p.starting_position,
                finishing_position=p.finishing_position,
                member_id=p.playgroup_member_id,
                guest_name=p.guest_name,
            )
            for p in sorted(row.participants, key=lambda p: (p.starting_position, p.id))
        ]
        return snap.Game(
            id=row.id,
            playgroup_id=row.playgroup_id,
            game_date=row.game_date,
            participants=tuple(participants),
            created_at=row.created_at,
        )
