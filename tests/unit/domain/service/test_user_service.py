"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from reviewbot.config import PasswordSettings
from reviewbot.domain.error import (
    DuplicateIdentityError,
    NotFoundError,
    ValidationError,
)
from reviewbot.domain.service import PasswordService, UserService
from reviewbot.domain.value import AuthProvider, UserId
from reviewbot.persistence.repository.inmemory import InMemoryUserRepository


@pytest.fixture
def password_service() -> PasswordService:
    return PasswordService(
        PasswordSettings(time_cost=1, memory_cost=8192, parallelism=1)
    )


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def user_service(user_repo, password_service) -> UserService:
    return UserService(user_repo, password_service)


class TestCreateUser:
    """Tests for UserService.create_user()."""

    @pytest.mark.asyncio
    async def test_password_is_hashed_before_storage(
        self, user_service, user_repo, password_service
    ):
        # Act
        user = await user_service.create_user("alice@example.com", "correct horse")

        # Assert
        stored = await user_repo.find_by_id(user.id)
        assert stored.credential_hash != "correct horse"
        assert await password_service.verify_password(
            "correct horse", stored.credential_hash
        )
        assert stored.auth_provider == AuthProvider.LOCAL

    @pytest.mark.asyncio
    async def test_oauth_user_has_no_credential(self, user_service):
        user = await user_service.create_user(
            "bob@example.com",
            provider=AuthProvider.GOOGLE,
            provider_user_id="g-123",
        )

        assert user.credential_hash is None
        assert user.google_id == "g-123"
        assert user.discord_id is None
        assert user.auth_provider == AuthProvider.GOOGLE

    @pytest.mark.asyncio
    async def test_oauth_user_requires_provider_id(self, user_service):
        with pytest.raises(ValidationError):
            await user_service.create_user(
                "bob@example.com", provider=AuthProvider.DISCORD
            )

    @pytest.mark.asyncio
    async def test_email_is_normalised(self, user_service):
        user = await user_service.create_user("  Alice@Example.COM ", "correct horse")

        assert user.email == "alice@example.com"
        assert await user_service.get_user_by_email("ALICE@example.com") == user

    @pytest.mark.asyncio
    async def test_duplicate_email(self, user_service):
        await user_service.create_user("alice@example.com", "correct horse")

        with pytest.raises(DuplicateIdentityError):
            await user_service.create_user("Alice@example.com", "another password")

    @pytest.mark.asyncio
    async def test_short_password_rejected(self, user_service, user_repo):
        with pytest.raises(ValidationError):
            await user_service.create_user("alice@example.com", "short")

        assert await user_repo.find_all() == []

    @pytest.mark.asyncio
    async def test_hash_as_password_rejected(
        self, user_service, user_repo, password_service
    ):
        """Same rule as update_credential: a hash is never stored verbatim."""
        hashed = await password_service.hash_password("correct horse")

        with pytest.raises(ValidationError, match="plain text"):
            await user_service.create_user("alice@example.com", hashed)

        assert await user_repo.find_all() == []


class TestUpdateCredential:
    """Tests for UserService.update_credential()."""

    @pytest.mark.asyncio
    async def test_new_password_is_hashed(self, user_service, password_service):
        user = await user_service.create_user("alice@example.com", "correct horse")

        updated = await user_service.update_credential(user.id, "battery staple")

        assert updated.credential_hash != user.credential_hash
        assert await password_service.verify_password(
            "battery staple", updated.credential_hash
        )

    @pytest.mark.asyncio
    async def test_writing_back_stored_hash_is_noop(self, user_service):
        """Saving an already-hashed credential must not hash it again."""
        user = await user_service.create_user("alice@example.com", "correct horse")

        updated = await user_service.update_credential(user.id, user.credential_hash)

        assert updated.credential_hash == user.credential_hash

    @pytest.mark.asyncio
    async def test_foreign_hash_rejected(self, user_service, password_service):
        user = await user_service.create_user("alice@example.com", "correct horse")
        foreign = await password_service.hash_password("something else")

        with pytest.raises(ValidationError):
            await user_service.update_credential(user.id, foreign)

    @pytest.mark.asyncio
    async def test_oauth_user_can_set_first_password(
        self, user_service, password_service
    ):
        user = await user_service.create_user(
            "bob@example.com", provider=AuthProvider.GOOGLE, provider_user_id="g-1"
        )

        updated = await user_service.update_credential(user.id, "correct horse")

        assert updated.google_id == "g-1"
        assert await password_service.verify_password(
            "correct horse", updated.credential_hash
        )

    @pytest.mark.asyncio
    async def test_unknown_user(self, user_service):
        with pytest.raises(NotFoundError):
            await user_service.update_credential(UserId(uuid4()), "correct horse")


class TestRehashCredential:
    """Tests for UserService.rehash_credential()."""

    @pytest.mark.asyncio
    async def test_skips_password_policy(self, user_repo, password_service):
        user = await UserService(user_repo, password_service).create_user(
            "alice@example.com", "password1"
        )
        stricter = PasswordService(
            PasswordSettings(
                time_cost=2, memory_cost=8192, parallelism=1, min_length=12
            )
        )

        updated = await UserService(user_repo, stricter).rehash_credential(
            user.id, "password1"
        )

        assert updated.credential_hash != user.credential_hash
        assert await stricter.verify_password("password1", updated.credential_hash)

    @pytest.mark.asyncio
    async def test_unknown_user(self, user_service):
        with pytest.raises(NotFoundError):
            await user_service.rehash_credential(UserId(uuid4()), "password1")


class TestLinkProvider:
    """Tests for UserService.link_provider()."""

    @pytest.mark.asyncio
    async def test_link_keeps_credential(self, user_service):
        user = await user_service.create_user("alice@example.com", "correct horse")

        linked = await user_service.link_provider(user.id, AuthProvider.DISCORD, "d-9")

        assert linked.discord_id == "d-9"
        assert linked.credential_hash == user.credential_hash

    @pytest.mark.asyncio
    async def test_provider_id_already_linked_elsewhere(self, user_service):
        first = await user_service.create_user(
            "a@example.com", provider=AuthProvider.GOOGLE, provider_user_id="g-1"
        )
        second = await user_service.create_user("b@example.com", "correct horse")

        with pytest.raises(DuplicateIdentityError):
            await user_service.link_provider(second.id, AuthProvider.GOOGLE, "g-1")

        assert (await user_service.get_by_id(first.id)).google_id == "g-1"

    @pytest.mark.asyncio
    async def test_unknown_user(self, user_service):
        with pytest.raises(NotFoundError):
            await user_service.link_provider(
                UserId(uuid4()), AuthProvider.GOOGLE, "g-1"
            )


class TestAdministration:
    """Tests for listing and deleting users."""

    @pytest.mark.asyncio
    async def test_list_users_excludes_credentials(self, user_service):
        await user_service.create_user("alice@example.com", "correct horse")
        await user_service.create_user(
            "bob@example.com", provider=AuthProvider.DISCORD, provider_user_id="d-1"
        )

        users = await user_service.list_users()

        assert [u.email for u in users] == ["alice@example.com", "bob@example.com"]
        assert all(u.credential_hash is None for u in users)

    @pytest.mark.asyncio
    async def test_delete_user(self, user_service):
        user = await user_service.create_user("alice@example.com", "correct horse")

        await user_service.delete_user(user.id)

        with pytest.raises(NotFoundError):
            await user_service.get_by_id(user.id)
        with pytest.raises(NotFoundError):
            await user_service.delete_user(user.id)
