"""List recent favorites use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from hello.domain.service import IdentityService


class ListRecentRequest(BaseModel):
    """List recent favorites request."""

    limit: int | None = Field(default=None, ge=1, le=100)


class RecentFavorite(BaseModel):
    """Public view of one identity's favorite."""

    identity_id: str
    name: str | None
    provider: str
    profile_link: str | None
    favorite_value: str
    edited_at: datetime


class ListRecentResponse(BaseModel):
    """List recent favorites response."""

    favorites: list[RecentFavorite]


class ListRecentUseCase:
    """Use case for the public feed of recently edited favorites."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: ListRecentRequest) -> ListRecentResponse:
        identities = await self.identity_service.list_recently_edited(request.limit)
        return ListRecentResponse(
            favorites=[
                RecentFavorite(
                    identity_id=identity.id,
                    name=identity.profile.name,
                    provider=identity.provider,
                    profile_link=identity.profile.profile_link,
                    favorite_value=identity.favorite_value,
                    edited_at=identity.edited_at,
                )
                for identity in identities
            ]
        )
