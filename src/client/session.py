"""Client-side credential state.

The session is an explicit object handed to the client instead of ambient
global storage. Lifecycle: issued at login, attached to every request,
cleared at logout or as soon as the server answers 401.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any


@dataclass
class ClientSession:
    """Bearer credentials held by one API client.

    Attributes:
        token: The bearer token, None when logged out
        user: Account summary returned alongside the token
        issued_at: When the token was received (UTC)
        expires_in: Token lifetime in seconds as announced by the server
    """

    token: str | None = None
    user: dict[str, Any] = field(default_factory=dict)
    issued_at: datetime | None = None
    expires_in: int | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    @property
    def expires_at(self) -> datetime | None:
        if self.issued_at is None or self.expires_in is None:
            return None
        return self.issued_at + timedelta(seconds=self.expires_in)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Whether the announced lifetime has elapsed; the server remains the authority."""
        expires_at = self.expires_at
        return expires_at is not None and (now or datetime.now(UTC)) >= expires_at

    def issue(self, token: str, user: dict[str, Any] | None = None, expires_in: int | None = None) -> None:
        self.token = token
        self.user = dict(user or {})
        self.expires_in = expires_in
        self.issued_at = datetime.now(UTC)

    def clear(self) -> None:
        self.token = None
        self.user = {}
        self.issued_at = None
        self.expires_in = None

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}
