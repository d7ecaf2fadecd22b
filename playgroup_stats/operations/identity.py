"""
Identity resolution for game participants.

This is the only place that inspects the member/non-user and member/guest
discriminants. Every aggregator works from the resolved DisplayIdentity.
"""

import logging
from typing import Mapping

from playgroup_stats.constants import DisplayConstants
from playgroup_stats.data_models.reports import DisplayIdentity
from playgroup_stats.data_models.snapshot import (
    Account, Member, MemberType, Participant, PlayerType, PlaygroupSnapshot
)
from playgroup_stats.utils.exceptions import DanglingReferenceError, InvalidSnapshotError

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Resolves participants and members to display identities"""
    
    def __init__(self, members: Mapping[str, Member], accounts: Mapping[str, Account]):
        """
        Initialize resolver with the playgroup's member and account lookups.
        
        Every member payload is validated here, including members without games.
        
        Args:
            members: Every member of the playgroup keyed by id, removed ones included
            accounts: Account profiles keyed by account id
            
        Raises:
            InvalidSnapshotError: A member's payload does not match its type
        """
        for member in members.values():
            self.validate_member(member)
        self.members = members
        self.accounts = accounts
    
    @classmethod
    def from_snapshot(cls, snapshot: PlaygroupSnapshot) -> 'IdentityResolver':
        """Build a resolver from the snapshot's members and accounts."""
        return cls(snapshot.members_by_id(), snapshot.accounts)
    
    @staticmethod
    def validate_member(member: Member) -> None:
        """Check that exactly the payload matching the member type is set."""
        has_account = member.account_id is not None
        has_name = member.non_user_name is not None
        
        if member.member_type == MemberType.USER:
            if not has_account or has_name:
                raise InvalidSnapshotError(
                    f"member {member.id}",
                    "user members must have an account id and no non-user name"
                )
        elif member.member_type == MemberType.NON_USER:
            if not has_name or has_account:
                raise InvalidSnapshotError(
                    f"member {member.id}",
                    "non-user members must have a name and no account id"
                )
        else:
            raise InvalidSnapshotError(f"member {member.id}", f"unknown member type {member.member_type!r}")
    
    def resolve_member(self, member: Member) -> DisplayIdentity:
        """
        Resolve a member to its current display identity.
        
        Removed members still count toward statistics; only the is_active flag
        reflects the soft delete. The member must already have passed
        validate_member().
        """
        if member.member_type == MemberType.USER:
            account = self.accounts.get(member.account_id)
            if account is None:
                raise DanglingReferenceError("Account", member.account_id, f"member {member.id}")
            label = account.username
        else:
            label = member.non_user_name
        
        return DisplayIdentity(
            label=label,
            counts_toward_statistics=True,
            member_id=member.id,
            is_active=member.is_active,
        )
    
    def resolve(self, participant: Participant) -> DisplayIdentity:
        """
        Resolve a participant to its display identity.
        
        Args:
            participant: Participant record from a game
            
        Returns:
            DisplayIdentity; guests never count toward statistics
            
        Raises:
            DanglingReferenceError: Member participant whose member is missing
            InvalidSnapshotError: Player type and payload disagree
        """
        if participant.player_type == PlayerType.GUEST:
            if participant.member_id is not None:
                raise InvalidSnapshotError(
                    f"participant {participant.id}",
                    "guest participants must not reference a member"
                )
            return DisplayIdentity(
                label=participant.guest_name or DisplayConstants.GUEST_LABEL,
                counts_toward_statistics=False,
            )
        
        if participant.player_type != PlayerType.MEMBER:
            raise InvalidSnapshotError(
                f"participant {participant.id}",
                f"unknown player type {participant.player_type!r}"
            )
        if participant.member_id is None or participant.guest_name is not None:
            raise InvalidSnapshotError(
                f"participant {participant.id}",
                "member participants must reference a member and carry no guest name"
            )
        
        member = self.members.get(participant.member_id)
        if member is None:
            logger.error(f"Participant {participant.id} references unknown member {participant.member_id}")
            raise DanglingReferenceError("Member", participant.member_id, f"participant {participant.id}")
        
        return self.resolve_member(member)
