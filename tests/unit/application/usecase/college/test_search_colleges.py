"""Unit tests for SearchCollegesUseCase."""

import pytest

from courseloop.application.usecase.college import (
    SearchCollegesRequest,
    SearchCollegesUseCase,
)
from courseloop.domain.gateway import CollegeLookup
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestSearchCollegesUseCase:
    """Tests for SearchCollegesUseCase."""

    @pytest.mark.asyncio
    async def test_search_without_session(self, unit_env):
        use_case = await unit_env.get(SearchCollegesUseCase)
        lookup = await unit_env.get(CollegeLookup)

        response = await use_case.execute(SearchCollegesRequest(query="stanford"))

        assert [c.name for c in response.colleges] == ["Stanford University"]
        assert lookup.queries == ["stanford"]

    @pytest.mark.asyncio
    async def test_no_matches(self, unit_env):
        use_case = await unit_env.get(SearchCollegesUseCase)

        response = await use_case.execute(SearchCollegesRequest(query="Hogwarts"))

        assert response.colleges == []
