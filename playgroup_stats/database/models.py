import uuid

from sqlalchemy import (
    Column, String, Text, Integer, Date, DateTime, ForeignKey,
    Enum as SQLEnum, CheckConstraint, Index
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

from playgroup_stats.data_models.snapshot import MemberType, PlayerType

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Profile(Base):
    """Account profile; username is not unique, friend_code is"""
    __tablename__ = 'profiles'
    
    id = Column(String(36), primary_key=True, default=_new_id)
    username = Column(String(50), nullable=False, index=True)
    friend_code = Column(String(60), nullable=False, unique=True)
    
    # Metadata
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Profile(id={self.id}, username='{self.username}')>"


class Playgroup(Base):
    __tablename__ = 'playgroups'
    
    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    created_by = Column(String(36), ForeignKey('profiles.id', ondelete='RESTRICT'), nullable=False)
    
    # Metadata
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)
    
    # Relationships
    members = relationship("PlaygroupMember", back_populates="playgroup", cascade="all, delete-orphan")
    games = relationship("Game", back_populates="playgroup")  # RESTRICT: no cascade
    
    def __repr__(self):
        return f"<Playgroup(id={self.id}, name='{self.name}')>"


class PlaygroupMember(Base):
    """
    Playgroup membership with soft delete.
    
    removed_at NULL means active. Rows are never erased so historical games
    keep resolving to the member.
    """
    __tablename__ = 'playgroup_members'
    
    id = Column(String(36), primary_key=True, default=_new_id)
    playgroup_id = Column(String(36), ForeignKey('playgroups.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(String(36), ForeignKey('profiles.id', ondelete='CASCADE'), nullable=True)
    member_type = Column(SQLEnum(MemberType, name='member_type_enum',
                                 values_callable=lambda e: [m.value for m in e]), nullable=False)
    non_user_name = Column(Text, nullable=True)
    removed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    
    # Relationships
    playgroup = relationship("Playgroup", back_populates="members")
    profile = relationship("Profile")
    
    __table_args__ = (
        CheckConstraint(
            "(member_type = 'user' AND user_id IS NOT NULL AND non_user_name IS NULL) OR "
            "(member_type = 'non_user' AND non_user_name IS NOT NULL AND user_id IS NULL)",
            name='playgroup_members_type_check'
        ),
        Index('idx_playgroup_members_user', 'user_id'),
    )
    
    @property
    def is_active(self) -> bool:
        return self.removed_at is None
    
    def __repr__(self):
        return f"<PlaygroupMember(id={self.id}, type={self.member_type.value}, active={self.is_active})>"


class Commander(Base):
    """Commander card reference data, keyed externally by scryfall_id"""
    __tablename__ = 'commanders'
    
    id = Column(String(36), primary_key=True, default=_new_id)
    scryfall_id = Column(String(36), nullable=False, unique=True)
    name = Column(Text, nullable=False, index=True)
    color_identity = Column(String(5), nullable=True)  # WUBRG notation, e.g. "WUB"
    
    # Image references
    scryfall_png = Column(Text, nullable=True)
    scryfall_border_crop = Column(Text, nullable=True)
    scryfall_art_crop = Column(Text, nullable=True)
    scryfall_large = Column(Text, nullable=True)
    scryfall_normal = Column(Text, nullable=True)
    scryfall_small = Column(Text, nullable=True)
    
    # Metadata
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Commander(name='{self.name}', colors='{self.color_identity or ''}')>"


class Game(Base):
    __tablename__ = 'games'
    
    id = Column(String(36), primary_key=True, default=_new_id)
    playgroup_id = Column(String(36), ForeignKey('playgroups.id', ondelete='RESTRICT'), nullable=False)
    game_date = Column(Date, nullable=False)
    
    # Metadata
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)
    
    # Relationships
    playgroup = relationship("Playgroup", back_populates="games")
    participants = relationship("GameParticipant", back_populates="game", cascade="all, delete-orphan")
    
    __table_args__ = (
        Index('idx_games_playgroup_date', 'playgroup_id', 'game_date'),
    )
    
    def __repr__(self):
        return f"<Game(id={self.id}, date={self.game_date}, participants={len(self.participants)})>"


class GameParticipant(Base):
    """
    A player in a game: a playgroup member or a guest.
    
    finishing_position may repeat within a game (ties); starting_position is
    unique per game, validated by the application that records games.
    """
    __tablename__ = 'game_participants'
    
    id = Column(String(36), primary_key=True, default=_new_id)
    game_id = Column(String(36), ForeignKey('games.id', ondelete='CASCADE'), nullable=False, index=True)
    playgroup_member_id = Column(String(36), ForeignKey('playgroup_members.id', ondelete='SET NULL'),
                                 nullable=True, index=True)
    commander_id = Column(String(36), ForeignKey('commanders.id', ondelete='RESTRICT'), nullable=False, index=True)
    player_type = Column(SQLEnum(PlayerType, name='player_type_enum',
                                 values_callable=lambda e: [m.value for m in e]), nullable=False)
    guest_name = Column(Text, nullable=True)
    starting_position = Column(Integer, nullable=False)
    finishing_position = Column(Integer, nullable=False)
    
    # Metadata
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)
    
    # Relationships
    game = relationship("Game", back_populates="participants")
    member = relationship("PlaygroupMember")
    commander = relationship("Commander")
    
    def __repr__(self):
        return (f"<GameParticipant(game_id={self.game_id}, type={self.player_type.value}, "
                f"start={self.starting_position}, finish={self.finishing_position})>")
