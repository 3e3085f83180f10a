"""Unit tests for the College Scorecard clients."""

import httpx
import pytest

from courseloop.adapter.collegescorecard import (
    MockCollegeScorecardClient,
    RealCollegeScorecardClient,
)

BASE_URL = "https://api.data.gov/ed/collegescorecard/v1/schools"


def make_client(handler) -> RealCollegeScorecardClient:
    return RealCollegeScorecardClient(
        base_url=BASE_URL,
        api_key="test-key",
        per_page=5,
        transport=httpx.MockTransport(handler),
    )


class TestRealCollegeScorecardClient:
    """Tests for RealCollegeScorecardClient."""

    @pytest.mark.asyncio
    async def test_search_parses_results(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json={
                    "metadata": {"total": 1, "page": 0, "per_page": 5},
                    "results": [
                        {
                            "id": 110635,
                            "school.name": "University of California-Berkeley",
                            "school.city": "Berkeley",
                            "school.state": "CA",
                        }
                    ],
                },
            )

        client = make_client(handler)

        colleges = await client.search("  berkeley ")

        [request] = requests
        assert request.url.params["school.name"] == "berkeley"
        assert request.url.params["api_key"] == "test-key"
        assert request.url.params["per_page"] == "5"
        assert [(c.id, c.name, c.state) for c in colleges] == [
            ("110635", "University of California-Berkeley", "CA")
        ]

    @pytest.mark.asyncio
    async def test_blank_query_skips_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        client = make_client(handler)

        assert await client.search("   ") == []

    @pytest.mark.asyncio
    async def test_server_error_yields_no_matches(self):
        client = make_client(lambda request: httpx.Response(500, text="oops"))

        assert await client.search("MIT") == []

    @pytest.mark.asyncio
    async def test_malformed_payload_yields_no_matches(self):
        client = make_client(lambda request: httpx.Response(200, json={"unexpected": []}))

        assert await client.search("MIT") == []

    @pytest.mark.asyncio
    async def test_non_json_body_yields_no_matches(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>"))

        assert await client.search("MIT") == []

    @pytest.mark.asyncio
    async def test_connection_failure_yields_no_matches(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        client = make_client(handler)

        assert await client.search("MIT") == []


class TestMockCollegeScorecardClient:
    """Tests for the in-process college lookup."""

    @pytest.mark.asyncio
    async def test_case_insensitive_substring(self):
        client = MockCollegeScorecardClient()

        colleges = await client.search("university")

        assert {c.name for c in colleges} == {
            "University of California-Berkeley",
            "Stanford University",
            "The University of Texas at Austin",
        }
        assert client.queries == ["university"]
