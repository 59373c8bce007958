"""Tournament participants."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, Iterable

from challonge import ParticipantId
from challonge.fields import (
    Index,
    decode_sequence,
    take_bool,
    take_datetime,
    take_int,
    take_opt_datetime,
    take_opt_int,
    take_opt_str,
    take_str,
    unwrap,
)
from challonge.forms import FieldPairs, bulk_key, collect, collect_bulk, field_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Participant:
    """A participant as returned by the service."""

    id: ParticipantId
    tournament_id: int
    name: str
    seed: int
    misc: str
    icon: str
    invite_email: str
    active: bool
    on_waiting_list: bool
    checked_in: bool
    can_check_in: bool
    removable: bool
    confirm_remove: bool
    invitation_pending: bool
    participatable_or_invitation_attached: bool
    reactivatable: bool
    final_rank: int | None
    group_id: int | None
    invitation_id: int | None
    challonge_username: str | None
    challonge_email_address_verified: str | None
    username: str | None
    email_hash: str
    display_name_with_invitation_email_address: str
    attached_participatable_portrait_url: str
    checked_in_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def decode(cls, value: Any) -> Participant:
        """Decode ``{"participant": {...}}``."""
        p = unwrap(value, "participant")
        participant = cls(
            id=ParticipantId(take_int(p, "id")),
            tournament_id=take_int(p, "tournament_id"),
            name=take_str(p, "name"),
            seed=take_int(p, "seed"),
            misc=take_str(p, "misc"),
            icon=take_str(p, "icon"),
            invite_email=take_str(p, "invite_email"),
            active=take_bool(p, "active"),
            on_waiting_list=take_bool(p, "on_waiting_list"),
            checked_in=take_bool(p, "checked_in"),
            can_check_in=take_bool(p, "can_check_in"),
            removable=take_bool(p, "removable"),
            confirm_remove=take_bool(p, "confirm_remove"),
            invitation_pending=take_bool(p, "invitation_pending"),
            participatable_or_invitation_attached=take_bool(
                p, "participatable_or_invitation_attached"
            ),
            reactivatable=take_bool(p, "reactivatable"),
            final_rank=take_opt_int(p, "final_rank"),
            group_id=take_opt_int(p, "group_id"),
            invitation_id=take_opt_int(p, "invitation_id"),
            challonge_username=take_opt_str(p, "challonge_username"),
            challonge_email_address_verified=take_opt_str(p, "challonge_email_address_verified"),
            username=take_opt_str(p, "username"),
            email_hash=take_str(p, "email_hash"),
            display_name_with_invitation_email_address=take_str(
                p, "display_name_with_invitation_email_address"
            ),
            attached_participatable_portrait_url=take_str(
                p, "attached_participatable_portrait_url"
            ),
            checked_in_at=take_opt_datetime(p, "checked_in_at"),
            created_at=take_datetime(p, "created_at"),
            updated_at=take_datetime(p, "updated_at"),
        )
        logger.debug("Decoded participant %s (%s)", participant.id, participant.name)
        return participant


class ParticipantIndex(Index[Participant]):
    """Participants of a tournament."""

    @classmethod
    def decode(cls, value: Any) -> ParticipantIndex:
        return cls(tuple(decode_sequence(value, Participant.decode)))


@dataclass
class ParticipantCreate:
    """Attributes for adding a participant to a tournament.

    ``name`` may be left unset when ``email`` or ``challonge_username`` is
    given; it must be unique per tournament. ``seed`` must lie between 1 and
    the participant count (including the new record); existing seeds are
    bumped. ``misc`` is a free-form field (max 255 characters) only visible
    through the API.
    """

    name: str | None = None
    challonge_username: str | None = None
    email: str = ""
    seed: int = 1
    misc: str = ""

    def with_name(self, name: object | None) -> ParticipantCreate:
        return replace(self, name=None if name is None else str(name))

    def with_challonge_username(self, username: object | None) -> ParticipantCreate:
        return replace(self, challonge_username=None if username is None else str(username))

    def with_email(self, email: object) -> ParticipantCreate:
        return replace(self, email=str(email))

    def with_seed(self, seed: int) -> ParticipantCreate:
        return replace(self, seed=seed)

    def with_misc(self, misc: object) -> ParticipantCreate:
        return replace(self, misc=str(misc))

    def _pairs(self, key: Callable[[str, str], str]) -> FieldPairs:
        pairs = [
            (key("participant", "email"), self.email),
            (key("participant", "seed"), str(self.seed)),
            (key("participant", "misc"), self.misc),
        ]
        if self.name is not None:
            pairs.append((key("participant", "name"), self.name))
        if self.challonge_username is not None:
            pairs.append((key("participant", "challonge_username"), self.challonge_username))
        return pairs

    def to_fields(self) -> FieldPairs:
        return self._pairs(field_key)

    @classmethod
    def from_fields(cls, pairs: FieldPairs) -> ParticipantCreate:
        return cls._from_dict(collect(pairs, "participant"))

    @classmethod
    def _from_dict(cls, fields: dict[str, str]) -> ParticipantCreate:
        pc = cls()
        if "name" in fields:
            pc.name = fields["name"]
        if "challonge_username" in fields:
            pc.challonge_username = fields["challonge_username"]
        if "email" in fields:
            pc.email = fields["email"]
        if "seed" in fields:
            pc.seed = int(fields["seed"])
        if "misc" in fields:
            pc.misc = fields["misc"]
        return pc


def bulk_fields(participants: Iterable[ParticipantCreate]) -> FieldPairs:
    """Encode several participants for ``bulk_add`` as ``participant[][...]`` pairs."""
    pairs: FieldPairs = []
    for participant in participants:
        pairs.extend(participant._pairs(bulk_key))
    return pairs


def bulk_from_fields(pairs: FieldPairs) -> list[ParticipantCreate]:
    return [ParticipantCreate._from_dict(d) for d in collect_bulk(pairs, "participant")]
