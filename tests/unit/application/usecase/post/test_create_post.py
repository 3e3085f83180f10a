"""Unit tests for CreatePostUseCase."""

import pytest

from courseloop.adapter.inmemory import InMemoryAuthGateway
from courseloop.application.usecase.post import CreatePostRequest, CreatePostUseCase
from courseloop.domain.error import NotFoundError, ValidationError
from courseloop.domain.service import SessionManager
from tests.conftest import onboard, sign_in
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_post_as_signed_in_user(self, unit_env):
        await onboard(unit_env)
        use_case = await unit_env.get(CreatePostUseCase)

        response = await use_case.execute(
            CreatePostRequest(course_code="cs 101", content="  Midterm study group?  ")
        )

        assert response.post.username == "SwiftEagle42"
        assert response.post.course_code == "CS101"
        assert response.post.content == "Midterm study group?"
        assert response.post.like_count == 0
        assert response.post.comment_count == 0

    @pytest.mark.asyncio
    async def test_requires_profile(self, unit_env):
        session_manager = await unit_env.get(SessionManager)
        auth = await unit_env.get(InMemoryAuthGateway)
        use_case = await unit_env.get(CreatePostUseCase)
        await sign_in(session_manager, auth)

        with pytest.raises(NotFoundError) as exc_info:
            await use_case.execute(CreatePostRequest(course_code="CS101", content="Hello"))

        assert exc_info.value.resource == "Profile"

    @pytest.mark.asyncio
    async def test_blank_content(self, unit_env):
        await onboard(unit_env)
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(CreatePostRequest(course_code="CS101", content="   "))
