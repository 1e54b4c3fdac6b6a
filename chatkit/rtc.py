"""Access tokens for joining video rooms."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import timedelta

import jwt


@dataclass
class LiveKit:
    """Issues room-join tokens signed with an API key and secret."""

    key: str
    secret: str = field(repr=False)
    url: str
    valid_for: timedelta = timedelta(hours=1)

    def get_livekit_url(self) -> str:
        return self.url

    def get_livekit_token(self, room: str, identity: str) -> str:
        """Return a signed token that lets identity join room."""
        now = int(time.time())
        claims = {
            "iss": self.key,
            "sub": identity,
            "nbf": now,
            "exp": now + int(self.valid_for.total_seconds()),
            "video": {"roomJoin": True, "room": room},
        }
        return jwt.encode(claims, self.secret, algorithm="HS256")