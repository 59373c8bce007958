"""Tests for match decoding and result updates."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from challonge import MatchId, NumericTournamentId, ParticipantId
from challonge.errors import DecodeError
from challonge.matches import Match, MatchIndex, MatchState, MatchUpdate, Player
from challonge.scalars import MatchScore, MatchScores

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def payload() -> dict:
    return json.loads((FIXTURE_DIR / "match.json").read_text())


class TestMatchDecode:
    def test_fields(self, payload: dict) -> None:
        m = Match.decode(payload)
        assert m.id == MatchId(23575258)
        assert m.tournament_id == NumericTournamentId(1086875)
        assert m.identifier == "A"
        assert m.round == 1
        assert m.state is MatchState.OPEN
        assert m.has_attachment is False
        assert m.winner_id is None
        assert m.loser_id is None
        assert m.prerequisite_match_ids_csv == ""
        assert m.started_at is not None
        assert m.attachments == ()

    def test_players(self, payload: dict) -> None:
        m = Match.decode(payload)
        assert m.player1 == Player(ParticipantId(16543993), False, None, 0)
        assert m.player2 == Player(ParticipantId(16543997), False, None, 3)

    def test_scores(self, payload: dict) -> None:
        m = Match.decode(payload)
        assert list(m.scores) == [MatchScore(3, 1), MatchScore(3, 2)]

    def test_losers_bracket_round(self, payload: dict) -> None:
        payload["match"]["round"] = -2
        assert Match.decode(payload).round == -2

    def test_completed_match(self, payload: dict) -> None:
        payload["match"].update(
            state="complete",
            winner_id=16543993,
            loser_id=16543997,
            player2_prereq_match_id=23575250,
            player2_is_prereq_match_loser=True,
        )
        m = Match.decode(payload)
        assert m.state is MatchState.COMPLETE
        assert m.winner_id == ParticipantId(16543993)
        assert m.loser_id == ParticipantId(16543997)
        assert m.player2.prereq_match_id == MatchId(23575250)
        assert m.player2.is_prereq_match_loser is True

    def test_undecided_player_slot(self, payload: dict) -> None:
        payload["match"]["player2_id"] = None
        assert Match.decode(payload).player2.participant_id is None

    def test_missing_player_key(self, payload: dict) -> None:
        del payload["match"]["player1_votes"]
        with pytest.raises(DecodeError):
            Match.decode(payload)

    def test_unknown_state(self, payload: dict) -> None:
        payload["match"]["state"] = "mystery"
        assert Match.decode(payload).state is MatchState.ALL

    def test_attachments(self, payload: dict) -> None:
        attachments = json.loads((FIXTURE_DIR / "attachments.json").read_text())
        payload["match"]["attachments"] = attachments
        m = Match.decode(payload)
        assert len(m.attachments) == 2
        assert m.attachments[0].description == "discord"

    def test_index(self, payload: dict) -> None:
        index = MatchIndex.decode([payload, payload])
        assert len(index) == 2
        assert index[1].identifier == "A"


class TestMatchState:
    def test_decode(self) -> None:
        assert MatchState.decode("pending") is MatchState.PENDING
        assert MatchState.decode("nope") is None

    def test_render(self) -> None:
        assert str(MatchState.COMPLETE) == "complete"
        assert MatchState.ALL.to_param() == "all"


class TestMatchUpdate:
    def test_scores_only(self) -> None:
        mu = MatchUpdate().with_scores("1-3,3-0,3-2")
        assert mu.to_fields() == [("match[scores_csv]", "1-3,3-0,3-2")]

    def test_full_order(self) -> None:
        mu = (
            MatchUpdate()
            .with_scores(MatchScores.of((3, 1), (3, 2)))
            .with_winner_id(16543993)
            .with_player1_votes(4)
            .with_player2_votes(1)
        )
        assert mu.to_fields() == [
            ("match[player1_votes]", "4"),
            ("match[player2_votes]", "1"),
            ("match[scores_csv]", "3-1,3-2"),
            ("match[winner_id]", "16543993"),
        ]

    def test_setters_return_new_value(self) -> None:
        base = MatchUpdate()
        updated = base.with_winner_id(ParticipantId(5))
        assert base.winner_id is None
        assert updated.winner_id == ParticipantId(5)

    def test_round_trip(self) -> None:
        mu = (
            MatchUpdate()
            .with_scores("2-0, 1-2, 2-1")
            .with_winner_id(ParticipantId(77))
            .with_player1_votes(0)
            .with_player2_votes(9)
        )
        assert MatchUpdate.from_fields(mu.to_fields()) == mu
