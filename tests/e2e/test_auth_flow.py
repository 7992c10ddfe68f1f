"""End-to-end tests for the login, session and logout flow."""

from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
from dishka import Provider, Scope
from sqlalchemy.exc import OperationalError

from hello.domain.repository import IdentityRepository
from hello.domain.value import IdentityId
from hello.interface.api.session import LOGIN_STATE_COOKIE, SESSION_COOKIE
from hello.persistence.repository import PostgresIdentityRepository
from hello.persistence.repository.inmemory import InMemoryIdentityRepository
from tests.harness import create_app_fixture, sign_in

# E2E test fixture
e2e_app = create_app_fixture()


def _unreachable_database() -> AsyncMock:
    """Session whose statements run but whose commit never lands."""
    session = AsyncMock()
    result = MagicMock()
    result.mappings.return_value.first.return_value = None
    result.mappings.return_value.one.return_value = {}
    session.execute.return_value = result
    session.commit.side_effect = OperationalError(
        "COMMIT", {}, Exception("connection lost")
    )
    return session


def _failing_repository() -> IdentityRepository:
    return PostgresIdentityRepository(_unreachable_database())


failing_commit = Provider(scope=Scope.REQUEST)
failing_commit.provide(_failing_repository)

# Real repository code over a database that loses every commit
failing_commit_app = create_app_fixture(overrides=[failing_commit])


def _state_of(response: httpx.Response) -> str:
    return parse_qs(urlparse(response.headers["location"]).query)["state"][0]


class TestLogin:
    """Tests for starting and completing a provider login."""

    @pytest.mark.asyncio
    async def test_initiate_login_returns_provider_url(self, e2e_app):
        client, _ = e2e_app

        response = await client.post("/auth/login", json={"provider": "twitter"})

        assert response.status_code == 200
        url = response.json()["authorization_url"]
        assert url.startswith("https://twitter.com/i/oauth2/authorize")
        assert "mock=true" in url

    @pytest.mark.asyncio
    async def test_initiate_login_unknown_provider(self, e2e_app):
        client, _ = e2e_app

        response = await client.post("/auth/login", json={"provider": "myspace"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_login_link_redirects_to_provider(self, e2e_app):
        client, _ = e2e_app

        response = await client.get("/auth/login/facebook", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"].startswith(
            "https://www.facebook.com/dialog/oauth"
        )

    @pytest.mark.asyncio
    async def test_callback_creates_identity_and_sets_cookie(self, e2e_app):
        """Should store the identity and bind the session cookie."""
        client, container = e2e_app
        repo = await container.get(InMemoryIdentityRepository)

        response = await sign_in(client, "twitter", "12345")

        assert response.status_code == 302
        assert response.headers["location"] == "http://localhost:3000"
        set_cookie = response.headers["set-cookie"]
        assert f"{SESSION_COOKIE}=" in set_cookie
        assert "HttpOnly" in set_cookie
        assert await repo.find_by_id(IdentityId("12345@twitter")) is not None

    @pytest.mark.asyncio
    async def test_me_after_login(self, e2e_app):
        client, _ = e2e_app
        await sign_in(client, "facebook", "999")

        response = await client.get("/auth/me")

        assert response.status_code == 200
        data = response.json()
        assert data["authenticated"] is True
        assert data["identity"]["identity_id"] == "999@facebook"
        assert data["identity"]["location"] == "Dublin, Ireland"
        assert "credential" not in data["identity"]

    @pytest.mark.asyncio
    async def test_me_without_cookie(self, e2e_app):
        client, _ = e2e_app

        response = await client.get("/auth/me")

        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "identity": None}

    @pytest.mark.asyncio
    async def test_denied_callback_goes_to_failure_page(self, e2e_app):
        """A cancelled login must not create a session."""
        client, container = e2e_app
        repo = await container.get(InMemoryIdentityRepository)

        response = await sign_in(client, "twitter", "denied")

        assert response.status_code == 302
        assert response.headers["location"] == "/auth/failure"
        assert SESSION_COOKIE not in client.cookies
        assert await repo.find_recently_edited(10) == []

    @pytest.mark.asyncio
    async def test_callback_with_provider_error(self, e2e_app):
        client, _ = e2e_app

        response = await client.get(
            "/auth/callback/twitter",
            params={"error": "access_denied", "state": "test_state"},
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/auth/failure"

    @pytest.mark.asyncio
    async def test_callback_for_unknown_provider(self, e2e_app):
        client, _ = e2e_app

        response = await client.get(
            "/auth/callback/myspace",
            params={"code": "1", "state": "s"},
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/auth/failure"

    @pytest.mark.asyncio
    async def test_storage_failure_binds_no_session(self, e2e_app):
        client, container = e2e_app
        repo = await container.get(InMemoryIdentityRepository)
        repo.fail_writes = True

        response = await sign_in(client, "twitter", "12345")

        assert response.status_code == 302
        assert response.headers["location"] == "/auth/failure"
        assert SESSION_COOKIE not in client.cookies

    @pytest.mark.asyncio
    async def test_failure_page(self, e2e_app):
        client, _ = e2e_app

        response = await client.get("/auth/failure")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Something went wrong with the authorization process",
            "home": "/",
        }


class TestLoginState:
    """Tests for tying a callback to the browser that started the login."""

    @pytest.mark.asyncio
    async def test_login_link_sets_login_state_cookie(self, e2e_app):
        client, _ = e2e_app

        response = await client.get("/auth/login/twitter", follow_redirects=False)

        set_cookie = response.headers["set-cookie"]
        assert f"{LOGIN_STATE_COOKIE}=" in set_cookie
        assert "HttpOnly" in set_cookie
        assert "Path=/auth/callback" in set_cookie
        assert f"{SESSION_COOKIE}=" not in set_cookie

    @pytest.mark.asyncio
    async def test_login_api_sets_login_state_cookie(self, e2e_app):
        client, _ = e2e_app

        response = await client.post("/auth/login", json={"provider": "facebook"})

        assert f"{LOGIN_STATE_COOKIE}=" in response.headers["set-cookie"]

    @pytest.mark.asyncio
    async def test_each_login_gets_a_fresh_state(self, e2e_app):
        client, _ = e2e_app

        first = await client.get("/auth/login/twitter", follow_redirects=False)
        second = await client.get("/auth/login/twitter", follow_redirects=False)

        assert _state_of(first) != _state_of(second)

    @pytest.mark.asyncio
    async def test_callback_with_another_state_binds_no_session(self, e2e_app):
        """A callback carrying a state this browser never got is refused."""
        client, container = e2e_app
        repo = await container.get(InMemoryIdentityRepository)
        await client.get("/auth/login/twitter", follow_redirects=False)

        response = await client.get(
            "/auth/callback/twitter",
            params={"code": "666", "state": "attacker-state"},
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/auth/failure"
        assert SESSION_COOKIE not in client.cookies
        assert await repo.find_by_id(IdentityId("666@twitter")) is None

    @pytest.mark.asyncio
    async def test_callback_without_login_state_binds_no_session(self, e2e_app):
        """A state issued to one browser is useless in another."""
        client, _ = e2e_app
        start = await client.get("/auth/login/twitter", follow_redirects=False)
        client.cookies.clear()

        response = await client.get(
            "/auth/callback/twitter",
            params={"code": "666", "state": _state_of(start)},
            follow_redirects=False,
        )

        assert response.headers["location"] == "/auth/failure"
        assert SESSION_COOKIE not in client.cookies

    @pytest.mark.asyncio
    async def test_login_state_for_another_provider_is_refused(self, e2e_app):
        client, _ = e2e_app
        start = await client.get("/auth/login/facebook", follow_redirects=False)

        response = await client.get(
            "/auth/callback/twitter",
            params={"code": "12345", "state": _state_of(start)},
            follow_redirects=False,
        )

        assert response.headers["location"] == "/auth/failure"
        assert SESSION_COOKIE not in client.cookies

    @pytest.mark.asyncio
    async def test_login_state_is_single_use(self, e2e_app):
        client, _ = e2e_app
        start = await client.get("/auth/login/twitter", follow_redirects=False)
        params = {"code": "12345", "state": _state_of(start)}
        first = await client.get(
            "/auth/callback/twitter", params=params, follow_redirects=False
        )
        assert first.headers["location"] == "http://localhost:3000"
        assert LOGIN_STATE_COOKIE not in client.cookies
        client.cookies.clear()

        replay = await client.get(
            "/auth/callback/twitter", params=params, follow_redirects=False
        )

        assert replay.headers["location"] == "/auth/failure"
        assert SESSION_COOKIE not in client.cookies


class TestDurableLogin:
    """A session is only bound to an identity the database has kept."""

    @pytest.mark.asyncio
    async def test_failed_commit_binds_no_session(self, failing_commit_app):
        client, _ = failing_commit_app

        response = await sign_in(client, "twitter", "12345")

        assert response.status_code == 302
        assert response.headers["location"] == "/auth/failure"
        assert f"{SESSION_COOKIE}=" not in response.headers.get("set-cookie", "")
        assert SESSION_COOKIE not in client.cookies


class TestSessionRejection:
    """Tests for sessions that are present but unusable."""

    @pytest.mark.asyncio
    async def test_forged_cookie_redirects_to_failure(self, e2e_app):
        client, _ = e2e_app
        client.cookies.set(SESSION_COOKIE, "forged-token")

        response = await client.get("/auth/me", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/failure"

    @pytest.mark.asyncio
    async def test_session_for_deleted_identity_redirects_to_failure(self, e2e_app):
        """A stale session is a failure, not an anonymous visit."""
        client, container = e2e_app
        await sign_in(client, "twitter", "12345")
        repo = await container.get(InMemoryIdentityRepository)
        del repo._identities[IdentityId("12345@twitter")]

        response = await client.get("/", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/failure"


class TestLogout:
    """Tests for logout."""

    @pytest.mark.asyncio
    async def test_logout_clears_session(self, e2e_app):
        client, _ = e2e_app
        await sign_in(client, "twitter", "12345")

        response = await client.post("/auth/logout")

        assert response.status_code == 200
        assert response.json()["success"] is True
        me = await client.get("/auth/me")
        assert me.json()["authenticated"] is False

    @pytest.mark.asyncio
    async def test_logout_link_redirects_home(self, e2e_app):
        client, _ = e2e_app
        await sign_in(client, "twitter", "12345")

        response = await client.get("/auth/logout", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/"
        assert SESSION_COOKIE not in client.cookies
