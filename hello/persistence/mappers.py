"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from hello.domain.model import Identity
from hello.domain.value import Credential, IdentityId, Profile


def row_to_identity(row: Dict[str, Any]) -> Identity:
    """Convert database row to Identity domain model.

    Args:
        row: Database row as dict

    Returns:
        Identity domain model
    """
    return Identity(
        id=IdentityId(row["id"]),
        provider=row["provider"],
        profile=Profile(
            name=row.get("name"),
            location=row.get("location"),
            email=row.get("email"),
            profile_link=row.get("profile_link"),
            portrait_link=row.get("portrait_link"),
        ),
        credential=Credential(
            token=row["credential_token"],
            secret=row.get("credential_secret"),
        ),
        raw_provider_payload=row.get("raw_provider_payload") or "{}",
        is_administrator=row["is_administrator"],
        favorite_value=row["favorite_value"],
        created_at=row["created_at"],
        edited_at=row["edited_at"],
    )


def identity_to_dict(identity: Identity) -> Dict[str, Any]:
    """Convert Identity domain model to database dict.

    Args:
        identity: Identity domain model

    Returns:
        Flat dict suitable for database insertion/update
    """
    return {
        "id": identity.id,
        "provider": identity.provider,
        "name": identity.profile.name,
        "location": identity.profile.location,
        "email": identity.profile.email,
        "profile_link": identity.profile.profile_link,
        "portrait_link": identity.profile.portrait_link,
        "credential_token": identity.credential.token,
        "credential_secret": identity.credential.secret,
        "raw_provider_payload": identity.raw_provider_payload,
        "is_administrator": identity.is_administrator,
        "favorite_value": identity.favorite_value,
        "created_at": identity.created_at,
        "edited_at": identity.edited_at,
    }
