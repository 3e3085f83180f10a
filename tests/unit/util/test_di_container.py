"""Unit tests for container wiring."""

import pytest

from courseloop.adapter.collegescorecard import (
    MockCollegeScorecardClient,
    RealCollegeScorecardClient,
)
from courseloop.adapter.inmemory import InMemoryTableGateway
from courseloop.application.usecase.college import SearchCollegesUseCase
from courseloop.domain.gateway import CollegeLookup, TableGateway
from courseloop.domain.service import SessionManager
from courseloop.util.di.container import create_container
from courseloop.util.error import ConfigurationError
from tests.di import build_test_container


class TestTestContainer:
    """Tests for build_test_container."""

    @pytest.mark.asyncio
    async def test_all_components_mocked_by_default(self):
        container = build_test_container()

        assert isinstance(await container.get(CollegeLookup), MockCollegeScorecardClient)
        assert isinstance(await container.get(TableGateway), InMemoryTableGateway)

        await container.close()

    @pytest.mark.asyncio
    async def test_unmock_college(self):
        container = build_test_container(unmock={"college"})

        assert isinstance(await container.get(CollegeLookup), RealCollegeScorecardClient)

        await container.close()

    @pytest.mark.asyncio
    async def test_session_is_shared_across_requests(self):
        container = build_test_container()

        async with container() as first:
            session_manager = await first.get(SessionManager)
        async with container() as second:
            assert await second.get(SessionManager) is session_manager

        await container.close()

    def test_unknown_component(self):
        with pytest.raises(ValueError):
            build_test_container(unmock={"twitter"})


class TestProductionContainer:
    """Tests for create_container."""

    @pytest.mark.asyncio
    async def test_college_search_wiring(self):
        container = create_container()

        async with container() as request_container:
            use_case = await request_container.get(SearchCollegesUseCase)

        assert isinstance(use_case.college_lookup, RealCollegeScorecardClient)

        await container.close()

    @pytest.mark.asyncio
    async def test_backend_requires_anon_key(self, monkeypatch):
        monkeypatch.delenv("BACKEND__ANON_KEY", raising=False)
        container = create_container()

        with pytest.raises(ConfigurationError):
            await container.get(SessionManager)

        await container.close()
