"""Strongly typed identifiers for Hello Social domain entities."""

from typing import NewType

# "<provider_uid>@<provider_name>", e.g. "12345@twitter"
IdentityId = NewType("IdentityId", str)


def compose_identity_id(provider_uid: str, provider: str) -> IdentityId:
    """Build the identity key from a provider-local user ID and provider name.

    The provider suffix keeps keys unique when two providers hand out the
    same numeric user ID.
    """
    return IdentityId(f"{provider_uid}@{provider}")
