"""Identity aggregate root.

One record per user per provider. The only user-owned attribute is the
favorite value; everything else is refreshed from the provider on login.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from hello.domain.value import Credential, IdentityId, Profile


class Identity(BaseModel):
    """Local record for a user authenticated through one provider."""

    model_config = ConfigDict(frozen=True)

    id: IdentityId
    provider: str
    profile: Profile = Field(default_factory=Profile)
    credential: Credential
    raw_provider_payload: str = "{}"  # JSON copy of the provider profile
    is_administrator: bool = False  # Only ever set out-of-band
    favorite_value: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    edited_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def can_edit(self, target_id: IdentityId) -> bool:
        """Owner-or-administrator rule."""
        return self.id == target_id or self.is_administrator
