"""Caller identity carried explicitly into every data-access call."""

from __future__ import annotations

from dataclasses import dataclass

from blog_api.core.constants import MAX_ID


@dataclass(frozen=True)
class CallerContext:
    """Identity asserted by the request header.

    Trusted as given; no session or token behind it.
    """

    user_id: int

    @classmethod
    def from_header(cls, raw: str | None) -> CallerContext | None:
        """Parse a header value; None unless it is a decimal integer in 1..MAX_ID."""
        if raw is None:
            return None
        value = raw.strip()
        if not value.isascii() or not value.isdigit():
            return None
        user_id = int(value)
        if not 1 <= user_id <= MAX_ID:
            return None
        return cls(user_id=user_id)
