"""Addresses of the service's operations.

Each function describes one API call as an ``Endpoint``; ``to_request``
turns it into an unsent ``requests.Request`` carrying the encoded form
fields. Sending, retrying and authenticating are up to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

import requests

from challonge import AttachmentId, MatchId, ParticipantId, TournamentId
from challonge.config import Settings, load_settings
from challonge.forms import FieldPairs
from challonge.matches import MatchState
from challonge.scalars import format_date
from challonge.tournament import TournamentIncludes, TournamentState, TournamentType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str
    params: tuple[tuple[str, str], ...] = ()

    def url(self, settings: Settings | None = None) -> str:
        """Absolute address without the query string."""
        return (settings or load_settings()).url(self.path)

    def to_request(
        self, settings: Settings | None = None, fields: FieldPairs | None = None
    ) -> requests.Request:
        logger.debug("%s %s (%d fields)", self.method, self.path, len(fields or []))
        return requests.Request(
            self.method,
            self.url(settings),
            params=list(self.params),
            data=list(fields) if fields else None,
        )


def _tournament(tournament_id: TournamentId) -> str:
    return f"tournaments/{tournament_id}"


def _participant(tournament_id: TournamentId, participant_id: ParticipantId) -> str:
    return f"{_tournament(tournament_id)}/participants/{participant_id}"


def _match(tournament_id: TournamentId, match_id: MatchId) -> str:
    return f"{_tournament(tournament_id)}/matches/{match_id}"


# --- Tournaments ---


def tournament_index(
    state: TournamentState | None = None,
    tournament_type: TournamentType | None = None,
    created_after: date | None = None,
    created_before: date | None = None,
    subdomain: str | None = None,
) -> Endpoint:
    """List tournaments, optionally filtered. Unset filters are left out."""
    params: list[tuple[str, str]] = []
    if state is not None:
        params.append(("state", state.to_param()))
    if tournament_type is not None:
        params.append(("type", tournament_type.to_param()))
    if created_after is not None:
        params.append(("created_after", format_date(created_after)))
    if created_before is not None:
        params.append(("created_before", format_date(created_before)))
    if subdomain:
        params.append(("subdomain", subdomain))
    return Endpoint("GET", "tournaments.json", tuple(params))


def get_tournament(
    tournament_id: TournamentId, includes: TournamentIncludes = TournamentIncludes.NONE
) -> Endpoint:
    return Endpoint(
        "GET", f"{_tournament(tournament_id)}.json", tuple(includes.params().items())
    )


def create_tournament() -> Endpoint:
    return Endpoint("POST", "tournaments.json")


def update_tournament(tournament_id: TournamentId) -> Endpoint:
    return Endpoint("PUT", f"{_tournament(tournament_id)}.json")


def delete_tournament(tournament_id: TournamentId) -> Endpoint:
    return Endpoint("DELETE", f"{_tournament(tournament_id)}.json")


def _tournament_action(tournament_id: TournamentId, action: str) -> Endpoint:
    return Endpoint("POST", f"{_tournament(tournament_id)}/{action}.json")


def process_check_ins(tournament_id: TournamentId) -> Endpoint:
    """Finish check-in: drop participants that did not check in."""
    return _tournament_action(tournament_id, "process_check_ins")


def abort_check_ins(tournament_id: TournamentId) -> Endpoint:
    return _tournament_action(tournament_id, "abort_check_ins")


def start_tournament(tournament_id: TournamentId) -> Endpoint:
    return _tournament_action(tournament_id, "start")


def finalize_tournament(tournament_id: TournamentId) -> Endpoint:
    return _tournament_action(tournament_id, "finalize")


def reset_tournament(tournament_id: TournamentId) -> Endpoint:
    return _tournament_action(tournament_id, "reset")


# --- Participants ---


def participant_index(tournament_id: TournamentId) -> Endpoint:
    return Endpoint("GET", f"{_tournament(tournament_id)}/participants.json")


def create_participant(tournament_id: TournamentId) -> Endpoint:
    return Endpoint("POST", f"{_tournament(tournament_id)}/participants.json")


def bulk_add_participants(tournament_id: TournamentId) -> Endpoint:
    return Endpoint("POST", f"{_tournament(tournament_id)}/participants/bulk_add.json")


def get_participant(
    tournament_id: TournamentId, participant_id: ParticipantId, include_matches: bool = False
) -> Endpoint:
    return Endpoint(
        "GET",
        f"{_participant(tournament_id, participant_id)}.json",
        (("include_matches", "1" if include_matches else "0"),),
    )


def update_participant(tournament_id: TournamentId, participant_id: ParticipantId) -> Endpoint:
    return Endpoint("PUT", f"{_participant(tournament_id, participant_id)}.json")


def delete_participant(tournament_id: TournamentId, participant_id: ParticipantId) -> Endpoint:
    return Endpoint("DELETE", f"{_participant(tournament_id, participant_id)}.json")


def check_in_participant(tournament_id: TournamentId, participant_id: ParticipantId) -> Endpoint:
    return Endpoint("POST", f"{_participant(tournament_id, participant_id)}/check_in.json")


def undo_check_in_participant(
    tournament_id: TournamentId, participant_id: ParticipantId
) -> Endpoint:
    return Endpoint("POST", f"{_participant(tournament_id, participant_id)}/undo_check_in.json")


def randomize_participants(tournament_id: TournamentId) -> Endpoint:
    """Shuffle seeds; only allowed before the tournament starts."""
    return Endpoint("POST", f"{_tournament(tournament_id)}/participants/randomize.json")


# --- Matches ---


def match_index(
    tournament_id: TournamentId,
    state: MatchState | None = None,
    participant_id: ParticipantId | None = None,
) -> Endpoint:
    params: list[tuple[str, str]] = []
    if state is not None:
        params.append(("state", state.to_param()))
    if participant_id is not None:
        params.append(("participant_id", str(participant_id)))
    return Endpoint("GET", f"{_tournament(tournament_id)}/matches.json", tuple(params))


def get_match(
    tournament_id: TournamentId, match_id: MatchId, include_attachments: bool = False
) -> Endpoint:
    return Endpoint(
        "GET",
        f"{_match(tournament_id, match_id)}.json",
        (("include_attachments", "1" if include_attachments else "0"),),
    )


def update_match(tournament_id: TournamentId, match_id: MatchId) -> Endpoint:
    return Endpoint("PUT", f"{_match(tournament_id, match_id)}.json")


# --- Attachments ---


def attachment_index(tournament_id: TournamentId, match_id: MatchId) -> Endpoint:
    return Endpoint("GET", f"{_match(tournament_id, match_id)}/attachments.json")


def create_attachment(tournament_id: TournamentId, match_id: MatchId) -> Endpoint:
    return Endpoint("POST", f"{_match(tournament_id, match_id)}/attachments.json")


def get_attachment(
    tournament_id: TournamentId, match_id: MatchId, attachment_id: AttachmentId
) -> Endpoint:
    return Endpoint("GET", f"{_match(tournament_id, match_id)}/attachments/{attachment_id}.json")


def update_attachment(
    tournament_id: TournamentId, match_id: MatchId, attachment_id: AttachmentId
) -> Endpoint:
    return Endpoint("PUT", f"{_match(tournament_id, match_id)}/attachments/{attachment_id}.json")


def delete_attachment(
    tournament_id: TournamentId, match_id: MatchId, attachment_id: AttachmentId
) -> Endpoint:
    return Endpoint(
        "DELETE", f"{_match(tournament_id, match_id)}/attachments/{attachment_id}.json"
    )
