"""Tournament matches."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any

from challonge import MatchId, NumericTournamentId, ParticipantId
from challonge.attachments import Attachment
from challonge.fields import (
    Index,
    JsonObject,
    decode_sequence,
    take_bool,
    take_datetime,
    take_int,
    take_int_or,
    take_opt_datetime,
    take_opt_int,
    take_opt_str,
    take_str,
    unwrap,
)
from challonge.forms import FieldPairs, collect, field_key
from challonge.scalars import MatchScores

logger = logging.getLogger(__name__)


class MatchState(Enum):
    """State of a match. ``ALL`` only exists as a query filter."""

    ALL = "all"
    PENDING = "pending"
    OPEN = "open"
    COMPLETE = "complete"

    def __str__(self) -> str:
        return self.value

    def to_param(self) -> str:
        return self.value

    @classmethod
    def decode(cls, text: str) -> MatchState | None:
        try:
            return cls(text.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class Player:
    """One side of a match.

    The service sends players flattened into the match object
    (``player1_id``, ``player2_votes``...), so this reads prefixed keys
    from the match's own map.
    """

    participant_id: ParticipantId | None
    is_prereq_match_loser: bool
    prereq_match_id: MatchId | None
    votes: int

    @classmethod
    def decode(cls, obj: JsonObject, prefix: str) -> Player:
        participant_id = take_opt_int(obj, f"{prefix}_id")
        prereq_match_id = take_opt_int(obj, f"{prefix}_prereq_match_id")
        return cls(
            participant_id=ParticipantId(participant_id) if participant_id is not None else None,
            is_prereq_match_loser=take_bool(obj, f"{prefix}_is_prereq_match_loser"),
            prereq_match_id=MatchId(prereq_match_id) if prereq_match_id is not None else None,
            votes=take_int_or(obj, f"{prefix}_votes"),
        )


def _opt_participant(obj: JsonObject, key: str) -> ParticipantId | None:
    value = take_opt_int(obj, key)
    return ParticipantId(value) if value is not None else None


@dataclass(frozen=True)
class Match:
    """A match as returned by the service.

    ``round`` is negative for losers-bracket rounds of double elimination.
    ``attachments`` is only filled when requested with the match.
    """

    id: MatchId
    tournament_id: NumericTournamentId
    identifier: str
    round: int
    state: MatchState
    player1: Player
    player2: Player
    winner_id: ParticipantId | None
    loser_id: ParticipantId | None
    scores: MatchScores
    prerequisite_match_ids_csv: str
    has_attachment: bool
    attachment_count: int | None
    group_id: int | None
    location: str | None
    scheduled_time: datetime | None
    underway_at: datetime | None
    started_at: datetime | None
    created_at: datetime
    updated_at: datetime
    attachments: tuple[Attachment, ...] = ()

    @classmethod
    def decode(cls, value: Any) -> Match:
        """Decode ``{"match": {...}}``."""
        m = unwrap(value, "match")

        raw_state = take_str(m, "state")
        state = MatchState.decode(raw_state)
        if state is None:
            logger.warning("Unknown match state %r, using %s", raw_state, MatchState.ALL)
            state = MatchState.ALL

        attachments = m.pop("attachments", None)

        match = cls(
            id=MatchId(take_int(m, "id")),
            tournament_id=NumericTournamentId(take_int(m, "tournament_id")),
            identifier=take_str(m, "identifier"),
            round=take_int(m, "round"),
            state=state,
            player1=Player.decode(m, "player1"),
            player2=Player.decode(m, "player2"),
            winner_id=_opt_participant(m, "winner_id"),
            loser_id=_opt_participant(m, "loser_id"),
            scores=MatchScores.decode(take_str(m, "scores_csv")),
            prerequisite_match_ids_csv=take_str(m, "prerequisite_match_ids_csv"),
            has_attachment=take_bool(m, "has_attachment"),
            attachment_count=take_opt_int(m, "attachment_count"),
            group_id=take_opt_int(m, "group_id"),
            location=take_opt_str(m, "location"),
            scheduled_time=take_opt_datetime(m, "scheduled_time"),
            underway_at=take_opt_datetime(m, "underway_at"),
            started_at=take_opt_datetime(m, "started_at"),
            created_at=take_datetime(m, "created_at"),
            updated_at=take_datetime(m, "updated_at"),
            attachments=tuple(decode_sequence(attachments, Attachment.decode))
            if attachments is not None
            else (),
        )
        logger.debug("Decoded match %s (%s)", match.id, match.identifier)
        return match


class MatchIndex(Index[Match]):
    """Matches of a tournament."""

    @classmethod
    def decode(cls, value: Any) -> MatchIndex:
        return cls(tuple(decode_sequence(value, Match.decode)))


@dataclass
class MatchUpdate:
    """Result update for a match.

    Setting ``winner_id`` requires setting ``scores`` as well; scores alone
    may be sent for live score updates. Changing the outcome of a completed
    match resets every match that branches from it.
    """

    scores: MatchScores = field(default_factory=MatchScores)
    winner_id: ParticipantId | None = None
    player1_votes: int | None = None
    player2_votes: int | None = None

    def with_scores(self, scores: MatchScores | str) -> MatchUpdate:
        if isinstance(scores, str):
            scores = MatchScores.decode(scores)
        return replace(self, scores=scores)

    def with_winner_id(self, winner_id: ParticipantId | int | None) -> MatchUpdate:
        if isinstance(winner_id, int):
            winner_id = ParticipantId(winner_id)
        return replace(self, winner_id=winner_id)

    def with_player1_votes(self, votes: int | None) -> MatchUpdate:
        return replace(self, player1_votes=votes)

    def with_player2_votes(self, votes: int | None) -> MatchUpdate:
        return replace(self, player2_votes=votes)

    def to_fields(self) -> FieldPairs:
        pairs: FieldPairs = []
        if self.player1_votes is not None:
            pairs.append((field_key("match", "player1_votes"), str(self.player1_votes)))
        if self.player2_votes is not None:
            pairs.append((field_key("match", "player2_votes"), str(self.player2_votes)))
        pairs.append((field_key("match", "scores_csv"), str(self.scores)))
        if self.winner_id is not None:
            pairs.append((field_key("match", "winner_id"), str(self.winner_id)))
        return pairs

    @classmethod
    def from_fields(cls, pairs: FieldPairs) -> MatchUpdate:
        fields = collect(pairs, "match")
        mu = cls()
        if fields.get("scores_csv"):
            mu.scores = MatchScores.decode(fields["scores_csv"])
        if "winner_id" in fields:
            mu.winner_id = ParticipantId(int(fields["winner_id"]))
        if "player1_votes" in fields:
            mu.player1_votes = int(fields["player1_votes"])
        if "player2_votes" in fields:
            mu.player2_votes = int(fields["player2_votes"])
        return mu
