"""Test configuration and fixtures."""

from datetime import datetime, timezone
import os

import logfire

from hello.domain.model import Identity
from hello.domain.value import Credential, IdentityId, Profile

os.environ.setdefault("ENVIRONMENT", "test")

# Spans and logs stay in-process during tests
logfire.configure(send_to_logfire=False, console=False)


def make_identity(
    identity_id: str = "12345@twitter",
    provider: str = "twitter",
    favorite_value: str = "Blue",
    is_administrator: bool = False,
    edited_at: datetime | None = None,
) -> Identity:
    """Helper to build an identity with sensible defaults.

    Args:
        identity_id: "<uid>@<provider>" key
        provider: Provider name
        favorite_value: Favorite value
        is_administrator: Administrator flag
        edited_at: Last favorite edit; defaults to created_at

    Returns:
        Identity domain model
    """
    created_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return Identity(
        id=IdentityId(identity_id),
        provider=provider,
        profile=Profile(name="Test User"),
        credential=Credential(token="token-123", secret="secret-456"),
        is_administrator=is_administrator,
        favorite_value=favorite_value,
        created_at=created_at,
        edited_at=edited_at or created_at,
    )
