import httpx
import pytest

from conftest import FakeMapsClient
from nearby_search.errors import InvalidInput, UpstreamError
from nearby_search.schemas.search import SearchQuery
from nearby_search.services.query_gateway import QueryGateway, validate_query

GOA_COMPONENTS = [
    {"long_name": "Panjim", "types": ["locality", "political"]},
    {"long_name": "Goa", "types": ["administrative_area_level_1", "political"]},
    {"long_name": "India", "types": ["country", "political"]},
]


class FakeCompletionClient:
    def __init__(self, answers=None, error: Exception | None = None):
        self.answers = answers or []
        self.error = error
        self.calls: list[list[dict]] = []

    async def chat_completion(self, messages: list[dict]) -> list[str]:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.answers


def _gateway(completion, maps=None) -> QueryGateway:
    return QueryGateway(completion_client=completion, maps_client=maps, default_country="India")


@pytest.mark.parametrize("query", ["", "   ", "\n\t", None])
def test_validate_query_rejects_blank(query):
    with pytest.raises(InvalidInput) as exc:
        validate_query(query)
    assert exc.value.status_code == 400
    assert exc.value.public_message == "No query provided."


def test_validate_query_trims():
    assert validate_query("  best coffee  ") == "best coffee"


@pytest.mark.asyncio
async def test_blank_query_makes_no_provider_call():
    completion = FakeCompletionClient(["x"])
    with pytest.raises(InvalidInput):
        await _gateway(completion).answer(SearchQuery(query="  "))
    assert completion.calls == []


@pytest.mark.asyncio
async def test_prompt_without_location(origin):
    completion = FakeCompletionClient(["answer"])
    answers = await _gateway(completion).answer(SearchQuery(query="best coffee"))

    assert answers == ["answer"]
    system, user = completion.calls[0]
    assert system["role"] == "system"
    assert "**Business Name**" in system["content"]
    assert "currently located" not in system["content"]
    assert user == {"role": "user", "content": "best coffee"}


@pytest.mark.asyncio
async def test_prompt_includes_reverse_geocoded_location(origin):
    completion = FakeCompletionClient(["answer"])
    maps = FakeMapsClient(reverse=[{"address_components": GOA_COMPONENTS}])

    await _gateway(completion, maps).answer(SearchQuery(query="best coffee near me", coordinates=origin))

    system = completion.calls[0][0]["content"]
    assert "The user is currently located at Panjim, Goa." in system


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reverse",
    [
        [],
        httpx.ConnectError("boom"),
        [{"address_components": [{"long_name": "India", "types": ["country"]}]}],
    ],
)
async def test_location_falls_back_to_coordinates(origin, reverse):
    completion = FakeCompletionClient(["answer"])
    maps = FakeMapsClient(reverse=reverse)

    await _gateway(completion, maps).answer(SearchQuery(query="chai", coordinates=origin))

    system = completion.calls[0][0]["content"]
    assert "located at coordinates 15.3838, 73.8578." in system


@pytest.mark.asyncio
async def test_location_without_maps_client_uses_coordinates(origin):
    gateway = _gateway(FakeCompletionClient())
    assert await gateway.describe_location(origin) == "coordinates 15.3838, 73.8578"


@pytest.mark.asyncio
async def test_no_choices_gives_empty_answers():
    assert await _gateway(FakeCompletionClient([])).answer(SearchQuery(query="chai")) == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectTimeout("slow"),
        httpx.HTTPStatusError(
            "server error",
            request=httpx.Request("POST", "https://api.perplexity.ai/chat/completions"),
            response=httpx.Response(502, text="bad gateway"),
        ),
        KeyError("message"),
    ],
)
async def test_provider_failure_is_upstream_error(error):
    with pytest.raises(UpstreamError) as exc:
        await _gateway(FakeCompletionClient(error=error)).answer(SearchQuery(query="chai"))
    assert exc.value.public_message == "Failed to fetch results."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reverse",
    [
        [{"address_components": None}],
        ["Panjim"],
        [{"address_components": [None]}],
    ],
)
async def test_malformed_reverse_geocoding_uses_coordinates(origin, reverse):
    completion = FakeCompletionClient(["answer"])
    maps = FakeMapsClient(reverse=reverse)

    answers = await _gateway(completion, maps).answer(SearchQuery(query="chai", coordinates=origin))

    assert answers == ["answer"]
    assert "located at coordinates 15.3838, 73.8578." in completion.calls[0][0]["content"]


@pytest.mark.asyncio
async def test_choice_without_text_is_upstream_error():
    error = ValueError("Completion choice without text content.")
    with pytest.raises(UpstreamError):
        await _gateway(FakeCompletionClient(error=error)).answer(SearchQuery(query="chai"))
