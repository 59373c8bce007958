"""Tournaments: decoded records, creation attributes and related enums."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Self

from challonge import NumericTournamentId
from challonge.errors import EncodeError
from challonge.fields import (
    Index,
    JsonObject,
    decode_sequence,
    take_bool,
    take_datetime,
    take_field,
    take_int,
    take_int_or,
    take_opt_datetime,
    take_opt_int,
    take_opt_str,
    take_str,
    take_str_list,
    unwrap,
)
from challonge.forms import FieldPairs, collect, field_key, parse_bool, render_bool
from challonge.matches import Match
from challonge.participants import Participant
from challonge.scalars import format_datetime, format_points, parse_datetime, parse_points

logger = logging.getLogger(__name__)


class _Spelled(Enum):
    """Enum whose value is the display spelling ("round robin").

    Decoding accepts spaces or underscores; ``to_param`` gives the
    underscore spelling used in query strings.
    """

    def __str__(self) -> str:
        return self.value

    def to_param(self) -> str:
        return self.value.replace(" ", "_")

    @classmethod
    def decode(cls, text: str) -> Self | None:
        normalized = text.strip().lower().replace("_", " ")
        for member in cls:
            if member.value == normalized:
                return member
        return None


class TournamentType(_Spelled):
    SINGLE_ELIMINATION = "single elimination"
    DOUBLE_ELIMINATION = "double elimination"
    ROUND_ROBIN = "round robin"
    SWISS = "swiss"


class RankedBy(_Spelled):
    """Ranking order for round robin and Swiss tournaments."""

    MATCH_WINS = "match wins"
    GAME_WINS = "game wins"
    POINTS_SCORED = "points scored"
    POINTS_DIFFERENCE = "points difference"
    CUSTOM = "custom"


class TournamentState(Enum):
    """State filter for the tournament index."""

    ALL = "all"
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    ENDED = "ended"

    def __str__(self) -> str:
        return self.value

    def to_param(self) -> str:
        return self.value


class TournamentIncludes(Enum):
    """Related records to embed when fetching a tournament."""

    NONE = "none"
    ALL = "all"
    MATCHES = "matches"
    PARTICIPANTS = "participants"

    def params(self) -> dict[str, str]:
        participants = self in (TournamentIncludes.ALL, TournamentIncludes.PARTICIPANTS)
        matches = self in (TournamentIncludes.ALL, TournamentIncludes.MATCHES)
        return {
            "include_participants": "1" if participants else "0",
            "include_matches": "1" if matches else "0",
        }


@dataclass(frozen=True)
class GamePoints:
    """Points awarded per match/game outcome in Swiss or round robin play.

    On the wire these are flat keys: ``pts_for_match_win`` for Swiss and
    ``rr_pts_for_match_win`` for round robin.
    """

    match_win: float = 1.0
    match_tie: float = 0.5
    game_win: float = 0.0
    game_tie: float = 0.0
    bye: float | None = None

    @classmethod
    def decode(cls, obj: JsonObject, prefix: str = "") -> GamePoints:
        # round robin payloads carry no bye key
        bye = obj.pop(f"{prefix}pts_for_bye", None)
        return cls(
            match_win=parse_points(take_field(obj, f"{prefix}pts_for_match_win")) or 0.0,
            match_tie=parse_points(take_field(obj, f"{prefix}pts_for_match_tie")) or 0.0,
            game_win=parse_points(take_field(obj, f"{prefix}pts_for_game_win")) or 0.0,
            game_tie=parse_points(take_field(obj, f"{prefix}pts_for_game_tie")) or 0.0,
            bye=parse_points(bye),
        )

    def to_fields(self, prefix: str = "", with_bye: bool = True) -> FieldPairs:
        pairs = [
            (field_key("tournament", f"{prefix}pts_for_match_win"), format_points(self.match_win)),
            (field_key("tournament", f"{prefix}pts_for_match_tie"), format_points(self.match_tie)),
            (field_key("tournament", f"{prefix}pts_for_game_win"), format_points(self.game_win)),
            (field_key("tournament", f"{prefix}pts_for_game_tie"), format_points(self.game_tie)),
        ]
        if with_bye and self.bye is not None:
            pairs.append((field_key("tournament", f"{prefix}pts_for_bye"), format_points(self.bye)))
        return pairs

    @classmethod
    def from_fields(cls, fields: dict[str, str], prefix: str = "") -> GamePoints:
        def points(name: str, default: float | None) -> float | None:
            value = fields.get(f"{prefix}{name}")
            parsed = parse_points(value) if value is not None else None
            return default if parsed is None else parsed

        defaults = cls()
        return cls(
            match_win=points("pts_for_match_win", defaults.match_win),
            match_tie=points("pts_for_match_tie", defaults.match_tie),
            game_win=points("pts_for_game_win", defaults.game_win),
            game_tie=points("pts_for_game_tie", defaults.game_tie),
            bye=points("pts_for_bye", None),
        )


def _decode_type(raw: str) -> TournamentType:
    tournament_type = TournamentType.decode(raw)
    if tournament_type is None:
        logger.warning("Unknown tournament type %r, assuming single elimination", raw)
        return TournamentType.SINGLE_ELIMINATION
    return tournament_type


def _decode_ranked_by(raw: str | None) -> RankedBy | None:
    if raw is None:
        return None
    ranked_by = RankedBy.decode(raw)
    if ranked_by is None:
        logger.warning("Unknown ranking %r", raw)
    return ranked_by


@dataclass(frozen=True)
class Tournament:
    """A tournament as returned by the service.

    ``participants`` and ``matches`` are only filled when the tournament was
    fetched with the matching ``TournamentIncludes``.
    """

    id: NumericTournamentId
    name: str
    url: str
    subdomain: str | None
    description: str
    description_source: str
    tournament_type: TournamentType
    ranked_by: RankedBy | None
    state: str
    swiss_points: GamePoints
    round_robin_points: GamePoints
    swiss_rounds: int
    participants_count: int
    game_id: int
    game_name: str
    max_predictions_per_user: int
    prediction_method: int
    progress_meter: int
    signup_cap: int | None
    check_in_duration: int | None
    tie_breaks: tuple[str, ...]
    accept_attachments: bool
    allow_participant_match_reporting: bool
    anonymous_voting: bool
    created_by_api: bool
    credit_capped: bool
    group_stages_enabled: bool
    group_stages_were_started: bool
    hide_forum: bool
    hide_seeds: bool
    hold_third_place_match: bool
    notify_users_when_matches_open: bool
    notify_users_when_the_tournament_ends: bool
    open_signup: bool
    private: bool
    quick_advance: bool
    require_score_agreement: bool
    sequential_pairings: bool
    show_rounds: bool
    teams: bool
    review_before_finalizing: bool
    accepting_predictions: bool
    participants_locked: bool
    participants_swappable: bool
    team_convertable: bool
    full_challonge_url: str
    live_image_url: str
    sign_up_url: str | None
    created_at: datetime
    updated_at: datetime
    start_at: datetime | None
    started_at: datetime | None
    completed_at: datetime | None
    participants: tuple[Participant, ...] = ()
    matches: tuple[Match, ...] = ()

    @classmethod
    def decode(cls, value: Any) -> Tournament:
        """Decode ``{"tournament": {...}}``."""
        t = unwrap(value, "tournament")

        participants = t.pop("participants", None)
        matches = t.pop("matches", None)

        tournament = cls(
            id=NumericTournamentId(take_int(t, "id")),
            name=take_str(t, "name"),
            url=take_str(t, "url"),
            subdomain=take_opt_str(t, "subdomain"),
            description=take_str(t, "description"),
            description_source=take_str(t, "description_source"),
            tournament_type=_decode_type(take_str(t, "tournament_type")),
            ranked_by=_decode_ranked_by(take_opt_str(t, "ranked_by")),
            state=take_str(t, "state"),
            swiss_points=GamePoints.decode(t),
            round_robin_points=GamePoints.decode(t, "rr_"),
            swiss_rounds=take_int_or(t, "swiss_rounds"),
            participants_count=take_int_or(t, "participants_count"),
            game_id=take_int_or(t, "game_id"),
            game_name=take_str(t, "game_name"),
            max_predictions_per_user=take_int_or(t, "max_predictions_per_user"),
            prediction_method=take_int_or(t, "prediction_method"),
            progress_meter=take_int_or(t, "progress_meter"),
            signup_cap=take_opt_int(t, "signup_cap"),
            check_in_duration=take_opt_int(t, "check_in_duration"),
            tie_breaks=tuple(take_str_list(t, "tie_breaks")),
            accept_attachments=take_bool(t, "accept_attachments"),
            allow_participant_match_reporting=take_bool(t, "allow_participant_match_reporting"),
            anonymous_voting=take_bool(t, "anonymous_voting"),
            created_by_api=take_bool(t, "created_by_api"),
            credit_capped=take_bool(t, "credit_capped"),
            group_stages_enabled=take_bool(t, "group_stages_enabled"),
            group_stages_were_started=take_bool(t, "group_stages_were_started"),
            hide_forum=take_bool(t, "hide_forum"),
            hide_seeds=take_bool(t, "hide_seeds"),
            hold_third_place_match=take_bool(t, "hold_third_place_match"),
            notify_users_when_matches_open=take_bool(t, "notify_users_when_matches_open"),
            notify_users_when_the_tournament_ends=take_bool(
                t, "notify_users_when_the_tournament_ends"
            ),
            open_signup=take_bool(t, "open_signup"),
            private=take_bool(t, "private"),
            quick_advance=take_bool(t, "quick_advance"),
            require_score_agreement=take_bool(t, "require_score_agreement"),
            sequential_pairings=take_bool(t, "sequential_pairings"),
            show_rounds=take_bool(t, "show_rounds"),
            teams=take_bool(t, "teams"),
            review_before_finalizing=take_bool(t, "review_before_finalizing"),
            accepting_predictions=take_bool(t, "accepting_predictions"),
            participants_locked=take_bool(t, "participants_locked"),
            participants_swappable=take_bool(t, "participants_swappable"),
            team_convertable=take_bool(t, "team_convertable"),
            full_challonge_url=take_str(t, "full_challonge_url"),
            live_image_url=take_str(t, "live_image_url"),
            sign_up_url=take_opt_str(t, "sign_up_url"),
            created_at=take_datetime(t, "created_at"),
            updated_at=take_datetime(t, "updated_at"),
            start_at=take_opt_datetime(t, "start_at"),
            started_at=take_opt_datetime(t, "started_at"),
            completed_at=take_opt_datetime(t, "completed_at"),
            participants=tuple(decode_sequence(participants, Participant.decode))
            if participants is not None
            else (),
            matches=tuple(decode_sequence(matches, Match.decode)) if matches is not None else (),
        )
        logger.debug("Decoded tournament %s (%s)", tournament.id, tournament.name)
        return tournament


class TournamentIndex(Index[Tournament]):
    """Tournaments of an account or organization."""

    @classmethod
    def decode(cls, value: Any) -> TournamentIndex:
        return cls(tuple(decode_sequence(value, Tournament.decode)))


@dataclass
class TournamentCreate:
    """Attributes for creating or updating a tournament.

    Defaults follow the service's documented defaults. ``url`` allows
    letters, numbers and underscores only; ``name`` is at most 60
    characters. ``round_robin_points.bye`` is never sent.
    """

    name: str = ""
    tournament_type: TournamentType = TournamentType.SINGLE_ELIMINATION
    url: str = ""
    subdomain: str = ""
    description: str = ""
    open_signup: bool = False
    hold_third_place_match: bool = False
    swiss_points: GamePoints = field(default_factory=lambda: GamePoints(bye=0.0))
    swiss_rounds: int = 0
    ranked_by: RankedBy = RankedBy.POINTS_SCORED
    round_robin_points: GamePoints = field(default_factory=GamePoints)
    show_rounds: bool = False
    private: bool = False
    game_name: str | None = None
    notify_users_when_matches_open: bool = True
    notify_users_when_the_tournament_ends: bool = True
    sequential_pairings: bool = False
    signup_cap: int = 4
    start_at: datetime | None = None
    check_in_duration: int = 60
    grand_finals_modifier: str | None = None

    def with_name(self, name: object) -> TournamentCreate:
        return replace(self, name=str(name))

    def with_tournament_type(self, tournament_type: TournamentType) -> TournamentCreate:
        return replace(self, tournament_type=tournament_type)

    def with_url(self, url: object) -> TournamentCreate:
        return replace(self, url=str(url))

    def with_subdomain(self, subdomain: object) -> TournamentCreate:
        return replace(self, subdomain=str(subdomain))

    def with_description(self, description: object) -> TournamentCreate:
        return replace(self, description=str(description))

    def with_open_signup(self, open_signup: bool) -> TournamentCreate:
        return replace(self, open_signup=open_signup)

    def with_hold_third_place_match(self, hold: bool) -> TournamentCreate:
        return replace(self, hold_third_place_match=hold)

    def with_swiss_points(self, points: GamePoints) -> TournamentCreate:
        return replace(self, swiss_points=points)

    def with_swiss_rounds(self, rounds: int) -> TournamentCreate:
        return replace(self, swiss_rounds=rounds)

    def with_ranked_by(self, ranked_by: RankedBy) -> TournamentCreate:
        return replace(self, ranked_by=ranked_by)

    def with_round_robin_points(self, points: GamePoints) -> TournamentCreate:
        return replace(self, round_robin_points=points)

    def with_show_rounds(self, show_rounds: bool) -> TournamentCreate:
        return replace(self, show_rounds=show_rounds)

    def with_private(self, private: bool) -> TournamentCreate:
        return replace(self, private=private)

    def with_game_name(self, game_name: object | None) -> TournamentCreate:
        return replace(self, game_name=None if game_name is None else str(game_name))

    def with_notify_users_when_matches_open(self, notify: bool) -> TournamentCreate:
        return replace(self, notify_users_when_matches_open=notify)

    def with_notify_users_when_the_tournament_ends(self, notify: bool) -> TournamentCreate:
        return replace(self, notify_users_when_the_tournament_ends=notify)

    def with_sequential_pairings(self, sequential: bool) -> TournamentCreate:
        return replace(self, sequential_pairings=sequential)

    def with_signup_cap(self, cap: int) -> TournamentCreate:
        return replace(self, signup_cap=cap)

    def with_start_at(self, start_at: datetime | None) -> TournamentCreate:
        """``start_at`` must carry a UTC offset."""
        if start_at is not None and start_at.tzinfo is None:
            raise EncodeError("Timestamp without UTC offset", start_at)
        return replace(self, start_at=start_at)

    def with_check_in_duration(self, minutes: int) -> TournamentCreate:
        return replace(self, check_in_duration=minutes)

    def with_grand_finals_modifier(self, modifier: str | None) -> TournamentCreate:
        """Double elimination only: None, "single match" or "skip"."""
        return replace(self, grand_finals_modifier=modifier)

    def to_fields(self) -> FieldPairs:
        def key(name: str) -> str:
            return field_key("tournament", name)

        pairs = [
            (key("name"), self.name),
            (key("tournament_type"), str(self.tournament_type)),
            (key("url"), self.url),
            (key("subdomain"), self.subdomain),
            (key("description"), self.description),
            (key("open_signup"), render_bool(self.open_signup)),
            (key("hold_third_place_match"), render_bool(self.hold_third_place_match)),
        ]
        pairs.extend(self.swiss_points.to_fields(with_bye=False))
        pairs.append((key("swiss_rounds"), str(self.swiss_rounds)))
        pairs.append((key("ranked_by"), str(self.ranked_by)))
        pairs.extend(self.round_robin_points.to_fields("rr_", with_bye=False))
        pairs.extend([
            (key("show_rounds"), render_bool(self.show_rounds)),
            (key("private"), render_bool(self.private)),
            (key("notify_users_when_matches_open"), render_bool(self.notify_users_when_matches_open)),
            (
                key("notify_users_when_the_tournament_ends"),
                render_bool(self.notify_users_when_the_tournament_ends),
            ),
            (key("sequential_pairings"), render_bool(self.sequential_pairings)),
            (key("signup_cap"), str(self.signup_cap)),
            (key("check_in_duration"), str(self.check_in_duration)),
        ])
        if self.grand_finals_modifier is not None:
            pairs.append((key("grand_finals_modifier"), self.grand_finals_modifier))
        if self.start_at is not None:
            pairs.append((key("start_at"), format_datetime(self.start_at)))
        if self.swiss_points.bye is not None:
            pairs.append((key("pts_for_bye"), format_points(self.swiss_points.bye)))
        if self.game_name is not None:
            pairs.append((key("game_name"), self.game_name))
        logger.debug("Encoded tournament %r into %d fields", self.name, len(pairs))
        return pairs

    @classmethod
    def from_fields(cls, pairs: FieldPairs) -> TournamentCreate:
        """Rebuild from pairs produced by ``to_fields``; absent keys keep defaults."""
        fields = collect(pairs, "tournament")
        tc = cls()
        for name in ("name", "url", "subdomain", "description"):
            if name in fields:
                setattr(tc, name, fields[name])
        for name in (
            "open_signup",
            "hold_third_place_match",
            "show_rounds",
            "private",
            "notify_users_when_matches_open",
            "notify_users_when_the_tournament_ends",
            "sequential_pairings",
        ):
            if name in fields:
                setattr(tc, name, parse_bool(fields[name]))
        for name in ("swiss_rounds", "signup_cap", "check_in_duration"):
            if name in fields:
                setattr(tc, name, int(fields[name]))
        if "tournament_type" in fields:
            tc.tournament_type = _decode_type(fields["tournament_type"])
        if "ranked_by" in fields:
            tc.ranked_by = RankedBy.decode(fields["ranked_by"]) or tc.ranked_by
        tc.swiss_points = GamePoints.from_fields(fields)
        rr = GamePoints.from_fields(fields, "rr_")
        tc.round_robin_points = replace(rr, bye=tc.round_robin_points.bye)
        tc.game_name = fields.get("game_name")
        tc.grand_finals_modifier = fields.get("grand_finals_modifier")
        if "start_at" in fields:
            tc.start_at = parse_datetime(fields["start_at"])
        return tc
