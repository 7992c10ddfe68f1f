"""Unit tests for LoginUseCase."""

from dishka import AsyncContainer
import pytest

from hello.adapter.error import ProviderError
from hello.application.usecase.auth.login import LoginRequest, LoginUseCase
from hello.domain.error import LoginStateMismatchError, PersistenceFailureError
from hello.domain.service import JWTService
from hello.domain.value import AuthProvider, IdentityId, LoginHandshake
from hello.persistence.repository.inmemory import InMemoryIdentityRepository
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _login_request(
    container: AsyncContainer,
    provider: AuthProvider,
    code: str,
    state: str = "s",
) -> LoginRequest:
    """Callback request from the browser that started the login with state "s"."""
    jwt_service = await container.get(JWTService)
    login_state = jwt_service.create_login_state(
        LoginHandshake(provider=provider, state="s", code_verifier="mock-verifier")
    )
    return LoginRequest(
        provider=provider, code=code, state=state, login_state=login_state
    )


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_first_twitter_login_creates_identity(self, unit_env: AsyncContainer):
        """First login should create the identity with default favorite."""
        # Arrange
        login_use_case = await unit_env.get(LoginUseCase)
        repo = await unit_env.get(InMemoryIdentityRepository)

        # Act
        response = await login_use_case.execute(
            await _login_request(unit_env, AuthProvider.TWITTER, "12345")
        )

        # Assert
        assert response.identity_id == "12345@twitter"
        assert response.provider == "twitter"
        identity = await repo.find_by_id(IdentityId("12345@twitter"))
        assert identity is not None
        assert identity.favorite_value == "Blue"
        assert identity.is_administrator is False
        assert identity.profile.name == "Mock Twitter User"
        assert identity.profile.profile_link == "https://twitter.com/mockuser12345"
        assert identity.credential.token == "mock-token-12345"
        assert identity.credential.secret == "mock-refresh"

    @pytest.mark.asyncio
    async def test_facebook_login_creates_identity(self, unit_env: AsyncContainer):
        """Facebook login should flatten location and keep the profile link."""
        # Arrange
        login_use_case = await unit_env.get(LoginUseCase)
        repo = await unit_env.get(InMemoryIdentityRepository)

        # Act
        response = await login_use_case.execute(
            await _login_request(unit_env, AuthProvider.FACEBOOK, "999")
        )

        # Assert
        assert response.identity_id == "999@facebook"
        identity = await repo.find_by_id(IdentityId("999@facebook"))
        assert identity.profile.location == "Dublin, Ireland"
        assert identity.profile.email == "mock@facebook.com"
        assert (
            identity.profile.profile_link
            == "https://www.facebook.com/app_scoped_user_id/999/"
        )
        assert identity.profile.portrait_link == "https://graph.facebook.com/999/picture"
        assert identity.credential.secret is None

    @pytest.mark.asyncio
    async def test_token_resolves_to_logged_in_identity(self, unit_env: AsyncContainer):
        """The issued session token should name the stored identity."""
        # Arrange
        login_use_case = await unit_env.get(LoginUseCase)
        jwt_service = await unit_env.get(JWTService)

        # Act
        response = await login_use_case.execute(
            await _login_request(unit_env, AuthProvider.TWITTER, "12345")
        )

        # Assert
        payload = jwt_service.verify_token(response.token)
        assert payload.identity_id == "12345@twitter"
        assert payload.provider == "twitter"

    @pytest.mark.asyncio
    async def test_repeat_login_keeps_favorite(self, unit_env: AsyncContainer):
        """Logging in again refreshes the profile but keeps the favorite."""
        # Arrange
        login_use_case = await unit_env.get(LoginUseCase)
        repo = await unit_env.get(InMemoryIdentityRepository)
        request = await _login_request(unit_env, AuthProvider.TWITTER, "12345")
        await login_use_case.execute(request)
        identity = await repo.find_by_id(IdentityId("12345@twitter"))
        await repo.save(identity.model_copy(update={"favorite_value": "Green"}))

        # Act
        await login_use_case.execute(request)

        # Assert
        identity = await repo.find_by_id(IdentityId("12345@twitter"))
        assert identity.favorite_value == "Green"
        assert len(await repo.find_recently_edited(10)) == 1

    @pytest.mark.asyncio
    async def test_denied_authorization_creates_nothing(self, unit_env: AsyncContainer):
        """A cancelled provider login should raise and store nothing."""
        # Arrange
        login_use_case = await unit_env.get(LoginUseCase)
        repo = await unit_env.get(InMemoryIdentityRepository)

        # Act & Assert
        with pytest.raises(ProviderError):
            await login_use_case.execute(
                await _login_request(unit_env, AuthProvider.TWITTER, "denied")
            )

        assert await repo.find_recently_edited(10) == []

    @pytest.mark.asyncio
    async def test_persistence_failure_issues_no_token(self, unit_env: AsyncContainer):
        """A failed write must not produce a session."""
        # Arrange
        login_use_case = await unit_env.get(LoginUseCase)
        repo = await unit_env.get(InMemoryIdentityRepository)
        repo.fail_writes = True

        # Act & Assert
        with pytest.raises(PersistenceFailureError):
            await login_use_case.execute(
                await _login_request(unit_env, AuthProvider.TWITTER, "12345")
            )


class TestLoginState:
    """A callback only completes in the browser that started the login."""

    @pytest.mark.asyncio
    async def test_state_from_another_login_is_rejected(self, unit_env: AsyncContainer):
        # Arrange
        login_use_case = await unit_env.get(LoginUseCase)
        repo = await unit_env.get(InMemoryIdentityRepository)
        request = await _login_request(
            unit_env, AuthProvider.TWITTER, "12345", state="someone-elses-state"
        )

        # Act & Assert
        with pytest.raises(LoginStateMismatchError):
            await login_use_case.execute(request)

        assert await repo.find_recently_edited(10) == []

    @pytest.mark.asyncio
    async def test_callback_without_login_state_is_rejected(
        self, unit_env: AsyncContainer
    ):
        login_use_case = await unit_env.get(LoginUseCase)

        with pytest.raises(LoginStateMismatchError):
            await login_use_case.execute(
                LoginRequest(provider=AuthProvider.TWITTER, code="12345", state="s")
            )

    @pytest.mark.asyncio
    async def test_login_state_for_another_provider_is_rejected(
        self, unit_env: AsyncContainer
    ):
        login_use_case = await unit_env.get(LoginUseCase)
        jwt_service = await unit_env.get(JWTService)
        login_state = jwt_service.create_login_state(
            LoginHandshake(provider=AuthProvider.FACEBOOK, state="s")
        )

        with pytest.raises(LoginStateMismatchError):
            await login_use_case.execute(
                LoginRequest(
                    provider=AuthProvider.TWITTER,
                    code="12345",
                    state="s",
                    login_state=login_state,
                )
            )

    @pytest.mark.asyncio
    async def test_session_token_is_not_a_login_state(self, unit_env: AsyncContainer):
        login_use_case = await unit_env.get(LoginUseCase)
        jwt_service = await unit_env.get(JWTService)
        session_token = jwt_service.create_token("12345@twitter", "twitter")

        with pytest.raises(LoginStateMismatchError):
            await login_use_case.execute(
                LoginRequest(
                    provider=AuthProvider.TWITTER,
                    code="12345",
                    state="s",
                    login_state=session_token,
                )
            )
