"""Client settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_BASE = "https://api.challonge.com/v1"


@dataclass(frozen=True)
class Settings:
    """Where the service lives.

    ``api_base`` can be pointed at a mock server for integration tests.
    """

    api_base: str = DEFAULT_API_BASE

    def url(self, path: str) -> str:
        return f"{self.api_base.rstrip('/')}/{path.lstrip('/')}"


def load_settings() -> Settings:
    """Read CHALLONGE_API_BASE from the environment, falling back to the public API."""
    api_base = os.environ.get("CHALLONGE_API_BASE", "") or DEFAULT_API_BASE
    return Settings(api_base=api_base)
