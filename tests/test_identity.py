"""Identity resolution: member/guest and user/non-user variants."""

from datetime import date, datetime

import pytest

from playgroup_stats.data_models.snapshot import (
    Account, Member, MemberType, Participant, PlayerType
)
from playgroup_stats.operations.identity import IdentityResolver
from playgroup_stats.utils.exceptions import DanglingReferenceError, InvalidSnapshotError


def make_participant(**overrides) -> Participant:
    values = dict(
        id="p-1", game_id="g-1", commander_id="c-1", player_type=PlayerType.MEMBER,
        starting_position=1, finishing_position=1, member_id="m-1", guest_name=None,
    )
    values.update(overrides)
    return Participant(**values)


@pytest.fixture
def resolver():
    members = {
        "m-1": Member(id="m-1", playgroup_id="pg", member_type=MemberType.USER, account_id="a-1"),
        "m-2": Member(id="m-2", playgroup_id="pg", member_type=MemberType.NON_USER, non_user_name="Grandpa Joe"),
        "m-3": Member(id="m-3", playgroup_id="pg", member_type=MemberType.USER, account_id="a-3",
                      removed_at=datetime(2025, 3, 1)),
    }
    accounts = {
        "a-1": Account(id="a-1", username="Alice"),
        "a-3": Account(id="a-3", username="Former Friend"),
    }
    return IdentityResolver(members, accounts)


class TestMemberParticipants:

    def test_user_member_uses_account_username(self, resolver):
        identity = resolver.resolve(make_participant(member_id="m-1"))
        assert identity.label == "Alice"
        assert identity.counts_toward_statistics is True
        assert identity.member_id == "m-1"
        assert identity.is_active is True

    def test_non_user_member_uses_stored_name(self, resolver):
        identity = resolver.resolve(make_participant(member_id="m-2"))
        assert identity.label == "Grandpa Joe"
        assert identity.counts_toward_statistics is True

    def test_removed_member_still_counts(self, resolver):
        identity = resolver.resolve(make_participant(member_id="m-3"))
        assert identity.label == "Former Friend"
        assert identity.counts_toward_statistics is True
        assert identity.is_active is False

    def test_label_follows_current_username(self):
        member = Member(id="m-1", playgroup_id="pg", member_type=MemberType.USER, account_id="a-1")
        before = IdentityResolver({"m-1": member}, {"a-1": Account(id="a-1", username="Old")})
        after = IdentityResolver({"m-1": member}, {"a-1": Account(id="a-1", username="New")})
        participant = make_participant()
        assert before.resolve(participant).label == "Old"
        assert after.resolve(participant).label == "New"


class TestGuestParticipants:

    def test_guest_uses_free_text_name(self, resolver):
        identity = resolver.resolve(make_participant(
            player_type=PlayerType.GUEST, member_id=None, guest_name="Cousin Vinny"
        ))
        assert identity.label == "Cousin Vinny"
        assert identity.counts_toward_statistics is False
        assert identity.member_id is None

    @pytest.mark.parametrize("name", ["", None])
    def test_blank_guest_name_falls_back_to_guest(self, resolver, name):
        identity = resolver.resolve(make_participant(
            player_type=PlayerType.GUEST, member_id=None, guest_name=name
        ))
        assert identity.label == "Guest"
        assert identity.counts_toward_statistics is False


class TestErrors:

    def test_unknown_member_is_dangling(self, resolver):
        with pytest.raises(DanglingReferenceError) as exc_info:
            resolver.resolve(make_participant(member_id="m-missing"))
        assert exc_info.value.entity == "Member"
        assert exc_info.value.entity_id == "m-missing"

    def test_unknown_account_is_dangling(self):
        member = Member(id="m-1", playgroup_id="pg", member_type=MemberType.USER, account_id="a-gone")
        resolver = IdentityResolver({"m-1": member}, {})
        with pytest.raises(DanglingReferenceError):
            resolver.resolve(make_participant())

    def test_member_participant_without_member_ref(self, resolver):
        with pytest.raises(InvalidSnapshotError):
            resolver.resolve(make_participant(member_id=None))

    def test_member_participant_with_guest_name(self, resolver):
        with pytest.raises(InvalidSnapshotError):
            resolver.resolve(make_participant(guest_name="Someone"))

    def test_guest_with_member_ref(self, resolver):
        with pytest.raises(InvalidSnapshotError):
            resolver.resolve(make_participant(player_type=PlayerType.GUEST, member_id="m-1"))

    @pytest.mark.parametrize("member", [
        Member(id="x", playgroup_id="pg", member_type=MemberType.USER, account_id="a", non_user_name="n"),
        Member(id="x", playgroup_id="pg", member_type=MemberType.USER),
        Member(id="x", playgroup_id="pg", member_type=MemberType.NON_USER),
        Member(id="x", playgroup_id="pg", member_type=MemberType.NON_USER, account_id="a", non_user_name="n"),
    ])
    def test_member_variant_payload_mismatch(self, member):
        with pytest.raises(InvalidSnapshotError):
            IdentityResolver.validate_member(member)

    def test_constructor_rejects_malformed_member(self):
        members = {
            "m-1": Member(id="m-1", playgroup_id="pg", member_type=MemberType.USER, account_id="a-1"),
            "m-odd": Member(id="m-odd", playgroup_id="pg", member_type=MemberType.NON_USER),
        }
        with pytest.raises(InvalidSnapshotError) as exc_info:
            IdentityResolver(members, {"a-1": Account(id="a-1", username="Alice")})
        assert exc_info.value.record == "member m-odd"
