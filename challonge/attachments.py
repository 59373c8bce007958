"""Match attachments: links, notes and uploaded files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from challonge import AttachmentId, MatchId
from challonge.errors import EncodeError
from challonge.fields import (
    Index,
    JsonObject,
    decode_sequence,
    take_datetime,
    take_int,
    take_opt_int,
    take_opt_str,
    unwrap,
)
from challonge.forms import FieldPairs, collect, field_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Asset:
    """Uploaded file of an attachment; every part may be missing."""

    file_name: str | None = None
    content_type: str | None = None
    file_size: int | None = None
    url: str | None = None

    @classmethod
    def decode(cls, obj: JsonObject) -> Asset:
        """Read the ``asset_*`` keys from the attachment's own object."""
        return cls(
            file_name=take_opt_str(obj, "asset_file_name"),
            content_type=take_opt_str(obj, "asset_content_type"),
            file_size=take_opt_int(obj, "asset_file_size"),
            url=take_opt_str(obj, "asset_url"),
        )


@dataclass(frozen=True)
class Attachment:
    id: AttachmentId
    match_id: MatchId
    user_id: int
    url: str | None
    description: str | None
    original_file_name: str | None
    asset: Asset
    created_at: datetime
    updated_at: datetime

    @classmethod
    def decode(cls, value: Any) -> Attachment:
        """Decode ``{"match_attachment": {...}}``.

        An empty ``url`` or ``description`` is kept as ``""``; only null
        becomes ``None``.
        """
        a = unwrap(value, "match_attachment")
        attachment = cls(
            id=AttachmentId(take_int(a, "id")),
            match_id=MatchId(take_int(a, "match_id")),
            user_id=take_int(a, "user_id"),
            url=take_opt_str(a, "url"),
            description=take_opt_str(a, "description"),
            original_file_name=take_opt_str(a, "original_file_name"),
            asset=Asset.decode(a),
            created_at=take_datetime(a, "created_at"),
            updated_at=take_datetime(a, "updated_at"),
        )
        logger.debug("Decoded attachment %s of match %s", attachment.id, attachment.match_id)
        return attachment


class AttachmentIndex(Index[Attachment]):
    """Attachments of a match."""

    @classmethod
    def decode(cls, value: Any) -> AttachmentIndex:
        return cls(tuple(decode_sequence(value, Attachment.decode)))


@dataclass
class AttachmentCreate:
    """Attributes for a new match attachment.

    At least one of ``asset``, ``url`` and ``description`` must be set. When
    an asset is given the service ignores ``url``. Matches hold at most four
    attachments of up to 250KB each.
    """

    asset: bytes | None = None
    url: str | None = None
    description: str | None = None

    def with_asset(self, asset: bytes | None) -> AttachmentCreate:
        return replace(self, asset=asset)

    def with_url(self, url: object | None) -> AttachmentCreate:
        return replace(self, url=None if url is None else str(url))

    def with_description(self, description: object | None) -> AttachmentCreate:
        return replace(self, description=None if description is None else str(description))

    def to_fields(self) -> FieldPairs:
        """Encode the set attributes; the asset must be UTF-8 text."""
        pairs: FieldPairs = []
        if self.asset is not None:
            try:
                asset = self.asset.decode("utf-8")
            except UnicodeDecodeError as e:
                raise EncodeError("Asset is not UTF-8 text", self.asset[:16]) from e
            pairs.append((field_key("match_attachment", "asset"), asset))
        if self.url is not None:
            pairs.append((field_key("match_attachment", "url"), self.url))
        if self.description is not None:
            pairs.append((field_key("match_attachment", "description"), self.description))
        return pairs

    @classmethod
    def from_fields(cls, pairs: FieldPairs) -> AttachmentCreate:
        fields = collect(pairs, "match_attachment")
        asset = fields.get("asset")
        return cls(
            asset=asset.encode("utf-8") if asset is not None else None,
            url=fields.get("url"),
            description=fields.get("description"),
        )
