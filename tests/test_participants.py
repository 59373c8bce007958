"""Tests for participant decoding and creation attributes."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from challonge import ParticipantId
from challonge.errors import DecodeError
from challonge.participants import (
    Participant,
    ParticipantCreate,
    ParticipantIndex,
    bulk_fields,
    bulk_from_fields,
)

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def payload() -> dict:
    return json.loads((FIXTURE_DIR / "participant.json").read_text())


class TestParticipantDecode:
    def test_fields(self, payload: dict) -> None:
        p = Participant.decode(payload)
        assert p.id == ParticipantId(16543993)
        assert p.tournament_id == 1086875
        assert p.name == "Participant #1"
        assert p.seed == 1
        assert p.active is True
        assert p.on_waiting_list is False
        assert p.checked_in is False
        assert p.can_check_in is False
        assert p.removable is True
        assert p.confirm_remove is True
        assert p.invitation_pending is False
        assert p.participatable_or_invitation_attached is False
        assert p.reactivatable is False
        assert p.display_name_with_invitation_email_address == "Participant #1"

    def test_nulls(self, payload: dict) -> None:
        p = Participant.decode(payload)
        assert p.checked_in_at is None
        assert p.final_rank is None
        assert p.group_id is None
        assert p.invitation_id is None
        assert p.icon == ""
        assert p.invite_email == ""
        assert p.misc == ""
        assert p.email_hash == ""
        assert p.attached_participatable_portrait_url == ""
        assert p.challonge_username is None
        assert p.challonge_email_address_verified is None
        assert p.username is None

    def test_linked_account_and_check_in(self, payload: dict) -> None:
        payload["participant"].update(
            challonge_username="alice",
            username="alice",
            checked_in=True,
            checked_in_at="2015-01-19T17:00:00-05:00",
            final_rank=2,
        )
        p = Participant.decode(payload)
        assert p.challonge_username == "alice"
        assert p.username == "alice"
        assert p.checked_in is True
        assert p.checked_in_at is not None and p.checked_in_at.hour == 17
        assert p.final_rank == 2

    def test_missing_wrapper(self, payload: dict) -> None:
        with pytest.raises(DecodeError):
            Participant.decode(payload["participant"])

    def test_null_seed_fails(self, payload: dict) -> None:
        payload["participant"]["seed"] = None
        with pytest.raises(DecodeError):
            Participant.decode(payload)

    def test_index(self, payload: dict) -> None:
        index = ParticipantIndex.decode([payload])
        assert [p.name for p in index] == ["Participant #1"]

    def test_index_requires_array(self, payload: dict) -> None:
        with pytest.raises(DecodeError):
            ParticipantIndex.decode(payload)


class TestParticipantCreate:
    def test_defaults(self) -> None:
        pc = ParticipantCreate()
        assert pc.seed == 1
        assert pc.email == ""
        assert pc.name is None

    def test_fields(self) -> None:
        pc = ParticipantCreate().with_email("a@example.com").with_seed(3).with_misc("row 7")
        assert pc.to_fields() == [
            ("participant[email]", "a@example.com"),
            ("participant[seed]", "3"),
            ("participant[misc]", "row 7"),
        ]

    def test_optional_fields_appended(self) -> None:
        pc = ParticipantCreate().with_name("Alice").with_challonge_username("alice")
        assert pc.to_fields()[-2:] == [
            ("participant[name]", "Alice"),
            ("participant[challonge_username]", "alice"),
        ]

    def test_unset_name(self) -> None:
        pc = ParticipantCreate().with_name("Alice").with_name(None)
        assert "participant[name]" not in dict(pc.to_fields())

    def test_bulk(self) -> None:
        people = [
            ParticipantCreate().with_name("Alice").with_seed(1),
            ParticipantCreate().with_name("Bob").with_seed(2),
        ]
        fields = bulk_fields(people)
        assert all(k.startswith("participant[][") for k, _ in fields)
        assert [v for k, v in fields if k == "participant[][name]"] == ["Alice", "Bob"]
        assert bulk_from_fields(fields) == people

    def test_round_trip(self) -> None:
        pc = (
            ParticipantCreate()
            .with_name("Carol")
            .with_challonge_username("carol99")
            .with_email("carol@example.com")
            .with_seed(4)
            .with_misc("id=17")
        )
        assert ParticipantCreate.from_fields(pc.to_fields()) == pc
