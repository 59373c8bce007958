"""Challonge API client: shared identifier types."""

from __future__ import annotations

from dataclasses import dataclass

from challonge.errors import DecodeError


class TournamentId:
    """A tournament is addressed by its numeric id or by subdomain + url.

    Use ``NumericTournamentId`` or ``UrlTournamentId``; a decoded tournament
    always carries the numeric variant.
    """

    @staticmethod
    def decode(value: object) -> TournamentId:
        """Build an id from a JSON value: a bare integer or a "subdomain-url" string."""
        if isinstance(value, int) and not isinstance(value, bool):
            return NumericTournamentId(value)
        if isinstance(value, str) and value:
            if value.isdigit():
                return NumericTournamentId(int(value))
            subdomain, dash, url = value.rpartition("-")
            # both sides of the dash must be present
            if url and (subdomain or not dash):
                return UrlTournamentId(subdomain, url)
        raise DecodeError("Expected tournament id", value)


@dataclass(frozen=True)
class NumericTournamentId(TournamentId):
    """Unique identifier assigned by the service."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UrlTournamentId(TournamentId):
    """Subdomain and tournament url (the subdomain may be empty)."""

    subdomain: str
    url: str

    def __str__(self) -> str:
        if not self.subdomain:
            return self.url
        return f"{self.subdomain}-{self.url}"


@dataclass(frozen=True)
class ParticipantId:
    """Participant id, unique across tournaments."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class MatchId:
    """Match id, unique across tournaments."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class AttachmentId:
    """Match attachment id."""

    value: int

    def __str__(self) -> str:
        return str(self.value)
