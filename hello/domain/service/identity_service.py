"""Identity domain service."""

import json
from datetime import datetime, timezone
from typing import Any

import logfire

from hello.config import IdentitySettings
from hello.domain.error import NotFoundError, PersistenceFailureError
from hello.domain.model import Identity
from hello.domain.provider import ProviderRegistry, rules_for
from hello.domain.repository import IdentityRepository
from hello.domain.value import (
    Credential,
    IdentityId,
    LoginPayload,
    Profile,
    ProfileLinks,
    compose_identity_id,
)


def _as_text(value: Any) -> str | None:
    """Flatten a provider profile value to text.

    Some providers nest values (Facebook's location is {"id", "name"}).
    """
    if value is None:
        return None
    if isinstance(value, dict):
        nested = value.get("name")
        return str(nested) if nested is not None else None
    return str(value)


class IdentityService:
    """Domain service for identity operations."""

    def __init__(
        self,
        identity_repository: IdentityRepository,
        provider_rules: ProviderRegistry,
        identity_settings: IdentitySettings,
    ) -> None:
        """Initialize identity service.

        Args:
            identity_repository: Identity repository
            provider_rules: Rules per supported provider
            identity_settings: Identity defaults
        """
        self.identity_repository = identity_repository
        self.provider_rules = provider_rules
        self.identity_settings = identity_settings

    async def find_by_id(self, identity_id: IdentityId) -> Identity | None:
        """Get identity by ID, or None.

        Args:
            identity_id: Identity ID

        Returns:
            Identity if found, None otherwise
        """
        with logfire.span("identity_service.find_by_id", identity_id=identity_id):
            identity = await self.identity_repository.find_by_id(identity_id)
            if identity is None:
                logfire.warn("Identity not found", identity_id=identity_id)
            return identity

    async def get_by_id(self, identity_id: IdentityId) -> Identity:
        """Get identity by ID.

        Args:
            identity_id: Identity ID

        Returns:
            Identity

        Raises:
            NotFoundError: If identity not found
        """
        identity = await self.find_by_id(identity_id)
        if identity is None:
            raise NotFoundError("Identity", identity_id)
        return identity

    async def upsert(self, payload: LoginPayload) -> Identity:
        """Create or refresh the identity for a login callback.

        Steps:
        1. Compose "<uid>@<provider>" key
        2. Load the existing record, or start a new one with defaults
        3. Overwrite credential and profile with the payload
        4. Derive profile/portrait links with the provider's rules
        5. Keep a JSON copy of the raw profile
        6. Persist

        Args:
            payload: Login payload from the provider callback

        Returns:
            The stored identity

        Raises:
            PersistenceFailureError: If the record could not be written
        """
        identity_id = compose_identity_id(payload.provider_uid, payload.provider)

        with logfire.span(
            "identity_service.upsert",
            identity_id=identity_id,
            provider=payload.provider,
        ):
            existing = await self.identity_repository.find_by_id(identity_id)
            is_new = existing is None

            if existing is None:
                now = datetime.now(timezone.utc)
                existing = Identity(
                    id=identity_id,
                    provider=payload.provider,
                    credential=payload.credential,
                    is_administrator=False,
                    favorite_value=self.identity_settings.default_favorite_value,
                    created_at=now,
                    edited_at=now,
                )

            rules = rules_for(self.provider_rules, payload.provider)
            if rules is not None:
                links = rules.build_profile_links(payload)
            else:
                logfire.warn(
                    "No provider rules, leaving profile links unset",
                    provider=payload.provider,
                )
                links = ProfileLinks()

            profile = Profile(
                name=_as_text(payload.profile.get("name")),
                location=_as_text(payload.profile.get("location")),
                email=_as_text(payload.profile.get("email")),
                profile_link=links.profile_link,
                portrait_link=links.portrait_link,
            )

            identity = existing.model_copy(
                update={
                    "credential": payload.credential,
                    "profile": profile,
                    "raw_provider_payload": json.dumps(payload.profile, default=str),
                }
            )

            try:
                saved = await self.identity_repository.save(identity)
            except PersistenceFailureError as e:
                logfire.error(
                    "Identity upsert failed",
                    identity_id=identity_id,
                    reason=e.reason,
                )
                raise

            logfire.info(
                "New identity created" if is_new else "Identity refreshed",
                identity_id=identity_id,
                provider=payload.provider,
            )
            return saved

    async def update_favorite(self, identity: Identity, value: str) -> Identity:
        """Set the favorite value; edited_at moves only if the value changes.

        Args:
            identity: Identity to edit (authorization is the caller's job)
            value: New favorite value

        Returns:
            The stored identity
        """
        with logfire.span("identity_service.update_favorite", identity_id=identity.id):
            if value == identity.favorite_value:
                logfire.info("Favorite unchanged", identity_id=identity.id)
                return identity

            updated = identity.model_copy(
                update={
                    "favorite_value": value,
                    "edited_at": datetime.now(timezone.utc),
                }
            )
            saved = await self.identity_repository.save(updated)
            logfire.info("Favorite updated", identity_id=identity.id)
            return saved

    async def update_credential(
        self, identity: Identity, credential: Credential
    ) -> Identity:
        """Store a refreshed provider credential; edited_at is left alone.

        Raises:
            PersistenceFailureError: If the record could not be written
        """
        with logfire.span("identity_service.update_credential", identity_id=identity.id):
            saved = await self.identity_repository.save(
                identity.model_copy(update={"credential": credential})
            )
            logfire.info("Credential refreshed", identity_id=identity.id)
            return saved

    async def list_recently_edited(self, limit: int | None = None) -> list[Identity]:
        """List identities by most recent favorite edit.

        Args:
            limit: Maximum count; defaults to the configured feed size

        Returns:
            Identities, newest edit first
        """
        limit = limit or self.identity_settings.recent_limit
        with logfire.span("identity_service.list_recently_edited", limit=limit):
            identities = await self.identity_repository.find_recently_edited(limit)
            logfire.info("Recent identities listed", count=len(identities))
            return identities
