"""Wire-format scalars: match scores, timestamps and point values."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterator

from challonge.errors import EncodeError


def _parse_count(text: str) -> int:
    """Parse a non-negative integer, treating anything else as zero."""
    text = text.strip()
    if text.isascii() and text.isdigit():
        return int(text)
    return 0


@dataclass(frozen=True)
class MatchScore:
    """Scores of player 1 and player 2 in a single game or set."""

    player1: int = 0
    player2: int = 0

    @classmethod
    def decode(cls, text: str) -> MatchScore:
        """Parse "a-b".

        The service sometimes sends incomplete scores, so a missing or
        unparseable side counts as zero: "9-" is 9-0 and "" is 0-0.
        """
        first, _, second = text.strip().partition("-")
        return cls(_parse_count(first), _parse_count(second))

    def __str__(self) -> str:
        return f"{self.player1}-{self.player2}"


@dataclass(frozen=True)
class MatchScores:
    """Ordered per-game scores, as sent in ``scores_csv`` ("3-1,3-2")."""

    scores: tuple[MatchScore, ...] = ()

    @classmethod
    def decode(cls, text: str) -> MatchScores:
        return cls(tuple(MatchScore.decode(segment) for segment in text.split(",")))

    @classmethod
    def of(cls, *pairs: tuple[int, int]) -> MatchScores:
        """Build from plain (player1, player2) tuples."""
        return cls(tuple(MatchScore(a, b) for a, b in pairs))

    def __str__(self) -> str:
        return ",".join(str(s) for s in self.scores)

    def __iter__(self) -> Iterator[MatchScore]:
        return iter(self.scores)

    def __len__(self) -> int:
        return len(self.scores)

    def __getitem__(self, index: int) -> MatchScore:
        return self.scores[index]


def parse_datetime(text: str) -> datetime:
    """Parse an RFC 3339 timestamp; the UTC offset is mandatory."""
    dt = datetime.fromisoformat(text.strip())
    if dt.tzinfo is None:
        raise ValueError(f"Timestamp without UTC offset: {text!r}")
    return dt


def format_datetime(dt: datetime) -> str:
    if dt.tzinfo is None:
        raise EncodeError("Timestamp without UTC offset", dt)
    return dt.isoformat()


def format_date(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def parse_points(value: object) -> float | None:
    """Point values arrive as strings ("1.0"), occasionally as numbers."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def format_points(points: float) -> str:
    return str(float(points))
