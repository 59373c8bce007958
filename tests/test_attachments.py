"""Tests for match attachment decoding and creation attributes."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from challonge import AttachmentId, MatchId
from challonge.attachments import Asset, Attachment, AttachmentCreate, AttachmentIndex
from challonge.errors import DecodeError, EncodeError

FIXTURE_DIR = Path(__file__).parent / "fixtures"

SINGLE = (
    '{"match_attachment":{"id":165418,"match_id":65187924,"user_id":979950,'
    '"description":"discord","url":"","original_file_name":null,'
    '"created_at":"2016-07-02T13:24:09.899-04:00","updated_at":"2016-07-02T13:24:09.899-04:00",'
    '"asset_file_name":null,"asset_content_type":null,"asset_file_size":null,"asset_url":null}}'
)


@pytest.fixture
def index_payload() -> list:
    return json.loads((FIXTURE_DIR / "attachments.json").read_text())


class TestAttachmentDecode:
    def test_fields(self) -> None:
        a = Attachment.decode(json.loads(SINGLE))
        assert a.id == AttachmentId(165418)
        assert a.match_id == MatchId(65187924)
        assert a.user_id == 979950
        assert a.description == "discord"
        assert a.url == ""
        assert a.original_file_name is None
        assert a.asset == Asset(None, None, None, None)
        assert a.created_at.microsecond == 899000

    def test_asset(self) -> None:
        payload = json.loads(SINGLE)
        payload["match_attachment"].update(
            asset_file_name="bracket.png",
            asset_content_type="image/png",
            asset_file_size=20480,
            asset_url="//s3.amazonaws.com/bracket.png",
        )
        asset = Attachment.decode(payload).asset
        assert asset.file_name == "bracket.png"
        assert asset.content_type == "image/png"
        assert asset.file_size == 20480
        assert asset.url == "//s3.amazonaws.com/bracket.png"

    def test_missing_asset_key(self) -> None:
        payload = json.loads(SINGLE)
        del payload["match_attachment"]["asset_url"]
        with pytest.raises(DecodeError):
            Attachment.decode(payload)

    def test_not_an_object(self) -> None:
        with pytest.raises(DecodeError) as exc:
            Attachment.decode("match_attachment")
        assert exc.value.description == "Expected object"

    def test_index_keeps_order(self, index_payload: list) -> None:
        index = AttachmentIndex.decode(index_payload)
        assert len(index) == 2
        assert [a.id for a in index] == [AttachmentId(165418), AttachmentId(165417)]
        assert index[1].description == "test description"


class TestAttachmentCreate:
    def test_empty(self) -> None:
        assert AttachmentCreate().to_fields() == []

    def test_fields(self) -> None:
        ac = AttachmentCreate().with_url("https://example.com/vod").with_description("VOD")
        assert ac.to_fields() == [
            ("match_attachment[url]", "https://example.com/vod"),
            ("match_attachment[description]", "VOD"),
        ]

    def test_asset_first(self) -> None:
        ac = AttachmentCreate().with_description("notes").with_asset(b"round 1 notes")
        assert ac.to_fields()[0] == ("match_attachment[asset]", "round 1 notes")

    def test_round_trip(self) -> None:
        ac = (
            AttachmentCreate()
            .with_asset(b"log")
            .with_url("ftp://example.com/log.txt")
            .with_description("server log")
        )
        assert AttachmentCreate.from_fields(ac.to_fields()) == ac

    def test_binary_asset_is_rejected(self) -> None:
        ac = AttachmentCreate().with_asset(b"\x89PNG\r\n\x1a\n\x00\xff")
        with pytest.raises(EncodeError) as exc:
            ac.to_fields()
        assert exc.value.description == "Asset is not UTF-8 text"
