"""Unit tests for IdentityService."""

import json
from datetime import datetime, timezone

import pytest

from hello.config import IdentitySettings
from hello.domain.error import NotFoundError, PersistenceFailureError
from hello.domain.provider import build_provider_registry
from hello.domain.service import IdentityService
from hello.domain.value import Credential, IdentityId, LoginPayload
from hello.persistence.repository.inmemory import InMemoryIdentityRepository
from tests.conftest import make_identity


def _service(repo: InMemoryIdentityRepository) -> IdentityService:
    return IdentityService(
        identity_repository=repo,
        provider_rules=build_provider_registry(),
        identity_settings=IdentitySettings(),
    )


def _twitter_payload(**profile) -> LoginPayload:
    return LoginPayload(
        provider="twitter",
        provider_uid="12345",
        credential=Credential(token="tok", secret="sec"),
        profile={
            "name": "Ada",
            "nickname": "ada",
            "location": "London",
            "image": "https://pbs.twimg.com/ada.jpg",
            **profile,
        },
    )


class TestUpsert:
    """Tests for IdentityService.upsert."""

    @pytest.mark.asyncio
    async def test_creates_identity_with_defaults(self):
        """First login should create a record with default favorite and no admin."""
        repo = InMemoryIdentityRepository()
        service = _service(repo)

        identity = await service.upsert(_twitter_payload())

        assert identity.id == "12345@twitter"
        assert identity.provider == "twitter"
        assert identity.favorite_value == "Blue"
        assert identity.is_administrator is False
        assert identity.created_at == identity.edited_at
        assert identity.credential == Credential(token="tok", secret="sec")
        assert identity.profile.name == "Ada"
        assert identity.profile.location == "London"
        assert await repo.find_by_id(IdentityId("12345@twitter")) == identity

    @pytest.mark.asyncio
    async def test_derives_twitter_links(self):
        """Twitter profile link comes from the nickname, portrait from image."""
        service = _service(InMemoryIdentityRepository())

        identity = await service.upsert(_twitter_payload())

        assert identity.profile.profile_link == "https://twitter.com/ada"
        assert identity.profile.portrait_link == "https://pbs.twimg.com/ada.jpg"

    @pytest.mark.asyncio
    async def test_derives_facebook_links_and_flattens_location(self):
        """Facebook links come from urls/uid; nested location becomes its name."""
        service = _service(InMemoryIdentityRepository())
        payload = LoginPayload(
            provider="facebook",
            provider_uid="999",
            credential=Credential(token="fb-token"),
            profile={
                "name": "Grace",
                "location": {"id": "1", "name": "Dublin, Ireland"},
                "urls": {"Facebook": "https://www.facebook.com/grace"},
            },
        )

        identity = await service.upsert(payload)

        assert identity.id == "999@facebook"
        assert identity.profile.location == "Dublin, Ireland"
        assert identity.profile.profile_link == "https://www.facebook.com/grace"
        assert identity.profile.portrait_link == "https://graph.facebook.com/999/picture"
        assert identity.credential.secret is None

    @pytest.mark.asyncio
    async def test_unrecognized_provider_leaves_links_unset(self):
        """An unknown provider still logs in, without links."""
        service = _service(InMemoryIdentityRepository())
        payload = LoginPayload(
            provider="myspace",
            provider_uid="7",
            credential=Credential(token="t"),
            profile={"name": "Tom"},
        )

        identity = await service.upsert(payload)

        assert identity.id == "7@myspace"
        assert identity.profile.profile_link is None
        assert identity.profile.portrait_link is None

    @pytest.mark.asyncio
    async def test_stores_raw_payload_as_json(self):
        """Full provider profile should be kept as JSON."""
        service = _service(InMemoryIdentityRepository())

        identity = await service.upsert(_twitter_payload(followers=10))

        raw = json.loads(identity.raw_provider_payload)
        assert raw["nickname"] == "ada"
        assert raw["followers"] == 10

    @pytest.mark.asyncio
    async def test_repeat_login_refreshes_profile_and_keeps_owned_fields(self):
        """Second login overwrites provider data but not favorite/admin/created_at."""
        repo = InMemoryIdentityRepository()
        service = _service(repo)
        first = await service.upsert(_twitter_payload())
        first = await service.update_favorite(first, "Green")
        repo.grant_administrator(first.id)

        second = await service.upsert(
            LoginPayload(
                provider="twitter",
                provider_uid="12345",
                credential=Credential(token="new-tok", secret="new-sec"),
                profile={"name": "Ada L.", "nickname": "adal"},
            )
        )

        assert second.id == first.id
        assert second.favorite_value == "Green"
        assert second.is_administrator is True
        assert second.created_at == first.created_at
        assert second.edited_at == first.edited_at
        assert second.credential.token == "new-tok"
        assert second.profile.name == "Ada L."
        assert second.profile.location is None
        assert second.profile.profile_link == "https://twitter.com/adal"
        assert json.loads(second.raw_provider_payload) == {
            "name": "Ada L.",
            "nickname": "adal",
        }
        stored = await repo.find_by_id(first.id)
        assert stored.raw_provider_payload == second.raw_provider_payload

    @pytest.mark.asyncio
    async def test_same_uid_on_two_providers_gives_two_identities(self):
        """The provider suffix keeps identities apart."""
        repo = InMemoryIdentityRepository()
        service = _service(repo)

        twitter = await service.upsert(_twitter_payload())
        facebook = await service.upsert(
            LoginPayload(
                provider="facebook",
                provider_uid="12345",
                credential=Credential(token="fb"),
            )
        )

        assert twitter.id != facebook.id
        assert await repo.find_by_id(IdentityId("12345@twitter")) is not None
        assert await repo.find_by_id(IdentityId("12345@facebook")) is not None

    @pytest.mark.asyncio
    async def test_persistence_failure_propagates(self):
        """A failed write should raise, not return a half-stored identity."""
        repo = InMemoryIdentityRepository()
        repo.fail_writes = True
        service = _service(repo)

        with pytest.raises(PersistenceFailureError):
            await service.upsert(_twitter_payload())

        assert await repo.find_by_id(IdentityId("12345@twitter")) is None


class TestUpdateFavorite:
    """Tests for IdentityService.update_favorite."""

    @pytest.mark.asyncio
    async def test_changes_value_and_edited_at(self):
        """A new value should move edited_at."""
        repo = InMemoryIdentityRepository()
        service = _service(repo)
        identity = await repo.save(make_identity())

        updated = await service.update_favorite(identity, "Green")

        assert updated.favorite_value == "Green"
        assert updated.edited_at > identity.edited_at
        assert updated.created_at == identity.created_at

    @pytest.mark.asyncio
    async def test_same_value_keeps_edited_at(self):
        """Saving the same value is not an edit."""
        service = _service(InMemoryIdentityRepository())
        identity = await service.upsert(_twitter_payload())

        updated = await service.update_favorite(identity, "Blue")

        assert updated.edited_at == identity.edited_at


class TestUpdateCredential:
    """Tests for IdentityService.update_credential."""

    @pytest.mark.asyncio
    async def test_stores_credential_without_moving_edited_at(self):
        """A token refresh is not a favorite edit."""
        repo = InMemoryIdentityRepository()
        service = _service(repo)
        identity = await repo.save(make_identity())

        updated = await service.update_credential(
            identity, Credential(token="fresh", secret="rotated")
        )

        assert updated.credential == Credential(token="fresh", secret="rotated")
        assert updated.edited_at == identity.edited_at
        stored = await repo.find_by_id(identity.id)
        assert stored.credential.token == "fresh"


class TestQueries:
    """Tests for identity lookups."""

    @pytest.mark.asyncio
    async def test_get_by_id_raises_when_missing(self):
        service = _service(InMemoryIdentityRepository())

        with pytest.raises(NotFoundError):
            await service.get_by_id(IdentityId("nobody@twitter"))

    @pytest.mark.asyncio
    async def test_find_by_id_returns_none_when_missing(self):
        service = _service(InMemoryIdentityRepository())

        assert await service.find_by_id(IdentityId("nobody@twitter")) is None

    @pytest.mark.asyncio
    async def test_list_recently_edited_newest_first(self):
        """Feed should be ordered by edited_at, newest first, and capped."""
        repo = InMemoryIdentityRepository()
        service = _service(repo)
        for uid, day in [("1", 1), ("2", 3), ("3", 2)]:
            identity = await service.upsert(
                LoginPayload(
                    provider="twitter",
                    provider_uid=uid,
                    credential=Credential(token="t"),
                )
            )
            await repo.save(
                identity.model_copy(
                    update={"edited_at": datetime(2025, 1, day, tzinfo=timezone.utc)}
                )
            )

        recent = await service.list_recently_edited(limit=2)

        assert [i.id for i in recent] == ["2@twitter", "3@twitter"]
