"""Tests for the LLM client and the offline mock provider."""
import pytest

from kerala_horizon.services.llm_client import LLMClient


@pytest.fixture
def client():
    return LLMClient()


class TestJsonParsing:
    """Test pulling JSON out of chat replies."""

    def test_plain_json(self, client):
        assert client._parse_json_response('{"a": 1}') == {"a": 1}

    def test_code_fence(self, client):
        text = 'Here you go:\n```json\n{"attractions": ["Fort Kochi"]}\n```'
        assert client._parse_json_response(text) == {"attractions": ["Fort Kochi"]}

    def test_braces_in_prose(self, client):
        assert client._parse_json_response('Sure! {"ok": true} Enjoy.') == {"ok": True}

    def test_non_object_json_is_ignored(self, client):
        assert client._parse_json_response('```json\n["Fort Kochi", "Munnar"]\n```') == {}
        assert client._parse_json_response("[1, 2, 3]") == {}
        assert client._parse_json_response('```\n[1]\n```\nAlso {"ok": 1}') == {"ok": 1}

    def test_nothing_parseable(self, client):
        assert client._parse_json_response("no json here") == {}
        assert client._parse_json_response("") == {}


class TestMockProvider:
    """Test the mock provider answers."""

    def test_is_mock(self, client):
        assert client.is_mock
        assert client.model == "mock-kerala"

    @pytest.mark.asyncio
    async def test_travel_advice(self, client):
        answer = await client.get_travel_advice("What should I eat in Kochi?")
        assert answer.startswith("In Kochi")

    @pytest.mark.asyncio
    async def test_concierge_json(self, client):
        result = await client.chat_json([
            {"role": "system", "content": "You are a travel concierge."},
            {"role": "user", "content": "Location: Munnar"},
        ])
        assert result["attractions"]
        assert all(a["location"] == "Munnar" for a in result["attractions"])

    @pytest.mark.asyncio
    async def test_itinerary_covers_each_day(self, client):
        text = await client.chat([
            {"role": "system", "content": "Write an itinerary."},
            {"role": "user", "content": "Plan a 2 days trip to Alleppey"},
        ])
        assert "Day 1: Alleppey" in text
        assert "Day 2: Alleppey" in text
        assert "Day 3" not in text
