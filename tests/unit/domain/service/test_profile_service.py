"""Unit tests for ProfileService."""

import random
from uuid import uuid4

import pytest

from courseloop.adapter.inmemory import InMemoryAuthGateway, InMemoryTableGateway
from courseloop.domain.error import (
    AuthError,
    ConflictError,
    DuplicateRowError,
    NotFoundError,
    ValidationError,
)
from courseloop.domain.model import ProfilePatch
from courseloop.domain.service import ProfileService, SessionManager
from courseloop.domain.value import Table
from courseloop.domain.value.types import USERNAME_PATTERN
from tests.conftest import sign_in
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestEnsureProfile:
    """Tests for ensure_profile method."""

    @pytest.mark.asyncio
    async def test_creates_profile_for_new_user(self, unit_env):
        """First call creates the profile and marks it known on the session."""
        # Arrange
        session_manager = await unit_env.get(SessionManager)
        auth = await unit_env.get(InMemoryAuthGateway)
        profile_service = await unit_env.get(ProfileService)
        user_id = await sign_in(session_manager, auth)

        # Act
        profile = await profile_service.ensure_profile(
            user_id, "SwiftEagle42", full_name="Ada Lovelace"
        )

        # Assert
        assert profile.user_id == user_id
        assert profile.username.root == "SwiftEagle42"
        assert profile.email == "student@berkeley.edu"
        assert profile.full_name == "Ada Lovelace"
        assert session_manager.state.profile_known is True

    @pytest.mark.asyncio
    async def test_is_idempotent(self, unit_env):
        """Repeating the call yields the same single profile."""
        session_manager = await unit_env.get(SessionManager)
        auth = await unit_env.get(InMemoryAuthGateway)
        profile_service = await unit_env.get(ProfileService)
        tables = await unit_env.get(InMemoryTableGateway)
        user_id = await sign_in(session_manager, auth)

        first = await profile_service.ensure_profile(user_id, "SwiftEagle42")
        second = await profile_service.ensure_profile(user_id, "SwiftEagle42")

        assert first == second
        assert len(tables.rows(Table.PROFILES)) == 1

    @pytest.mark.asyncio
    async def test_updates_only_supplied_fields(self, unit_env):
        """Re-running with a new username keeps earlier optional fields."""
        session_manager = await unit_env.get(SessionManager)
        auth = await unit_env.get(InMemoryAuthGateway)
        profile_service = await unit_env.get(ProfileService)
        user_id = await sign_in(session_manager, auth)
        await profile_service.ensure_profile(user_id, "SwiftEagle42", university="MIT")

        profile = await profile_service.ensure_profile(user_id, "QuickSage7")

        assert profile.username.root == "QuickSage7"
        assert profile.university == "MIT"

    @pytest.mark.asyncio
    async def test_username_taken_by_another_user(self, unit_env):
        """A second user cannot claim the name, and the first profile is untouched."""
        # Arrange
        session_manager = await unit_env.get(SessionManager)
        auth = await unit_env.get(InMemoryAuthGateway)
        profile_service = await unit_env.get(ProfileService)
        tables = await unit_env.get(InMemoryTableGateway)

        alice_id = await sign_in(session_manager, auth, "alice@berkeley.edu")
        alice = await profile_service.ensure_profile(alice_id, "alice", full_name="Alice")
        await session_manager.sign_out()
        bob_id = await sign_in(session_manager, auth, "bob@berkeley.edu")

        # Act & Assert
        with pytest.raises(ConflictError) as exc_info:
            await profile_service.ensure_profile(bob_id, "alice")

        assert exc_info.value.reason == ConflictError.USERNAME_TAKEN
        assert await profile_service.get_profile(alice_id) == alice
        assert await profile_service.get_profile(bob_id) is None
        assert len(tables.rows(Table.PROFILES)) == 1

    @pytest.mark.asyncio
    async def test_duplicate_username_on_insert_is_a_conflict(self, unit_env):
        """A name claimed between the check and the insert still conflicts."""
        session_manager = await unit_env.get(SessionManager)
        auth = await unit_env.get(InMemoryAuthGateway)
        profile_service = await unit_env.get(ProfileService)
        tables = await unit_env.get(InMemoryTableGateway)
        user_id = await sign_in(session_manager, auth)
        tables.fail_next("insert", Table.PROFILES, DuplicateRowError("profiles", ("username",)))

        with pytest.raises(ConflictError):
            await profile_service.ensure_profile(user_id, "SwiftEagle42")

    @pytest.mark.asyncio
    async def test_invalid_username(self, unit_env):
        session_manager = await unit_env.get(SessionManager)
        auth = await unit_env.get(InMemoryAuthGateway)
        profile_service = await unit_env.get(ProfileService)
        user_id = await sign_in(session_manager, auth)

        for bad in ["ab", "has space", "x" * 21, "dash-name", "alice\n"]:
            with pytest.raises(ValidationError) as exc_info:
                await profile_service.ensure_profile(user_id, bad)
            assert exc_info.value.field == "username"

    @pytest.mark.asyncio
    async def test_requires_session(self, unit_env):
        profile_service = await unit_env.get(ProfileService)

        with pytest.raises(AuthError):
            await profile_service.ensure_profile(uuid4(), "SwiftEagle42")


class TestUpdateProfile:
    """Tests for update_profile method."""

    @pytest.mark.asyncio
    async def test_partial_update(self, unit_env):
        """Absent, None and blank fields leave stored values alone."""
        session_manager = await unit_env.get(SessionManager)
        auth = await unit_env.get(InMemoryAuthGateway)
        profile_service = await unit_env.get(ProfileService)
        user_id = await sign_in(session_manager, auth)
        await profile_service.ensure_profile(
            user_id, "SwiftEagle42", full_name="Ada Lovelace", university="Berkeley"
        )

        profile = await profile_service.update_profile(
            user_id, ProfilePatch(university="MIT", full_name="   ", avatar_url=None)
        )

        assert profile.university == "MIT"
        assert profile.full_name == "Ada Lovelace"
        assert profile.username.root == "SwiftEagle42"

    @pytest.mark.asyncio
    async def test_empty_patch_returns_current_profile(self, unit_env):
        session_manager = await unit_env.get(SessionManager)
        auth = await unit_env.get(InMemoryAuthGateway)
        profile_service = await unit_env.get(ProfileService)
        user_id = await sign_in(session_manager, auth)
        created = await profile_service.ensure_profile(user_id, "SwiftEagle42")

        profile = await profile_service.update_profile(user_id, ProfilePatch())

        assert profile == created

    @pytest.mark.asyncio
    async def test_missing_profile(self, unit_env):
        session_manager = await unit_env.get(SessionManager)
        auth = await unit_env.get(InMemoryAuthGateway)
        profile_service = await unit_env.get(ProfileService)
        user_id = await sign_in(session_manager, auth)

        with pytest.raises(NotFoundError):
            await profile_service.update_profile(user_id, ProfilePatch(university="MIT"))


class TestSuggestUsernames:
    """Tests for suggest_usernames method."""

    @pytest.mark.asyncio
    async def test_suggestions_are_valid_usernames(self, unit_env):
        profile_service = await unit_env.get(ProfileService)

        suggestions = profile_service.suggest_usernames(count=50, rng=random.Random(7))

        assert len(suggestions) == 50
        assert all(USERNAME_PATTERN.fullmatch(name) for name in suggestions)
