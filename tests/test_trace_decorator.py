import pytest

from nearby_search.infrastructure import observability
from nearby_search.infrastructure.trace_decorator import traced


@pytest.fixture(autouse=True)
def fresh_manager(monkeypatch):
    monkeypatch.setattr(observability, "_observability_manager", None)


@pytest.mark.asyncio
@pytest.mark.parametrize("enabled", [True, False])
async def test_traced_returns_result(enabled):
    observability.initialize_observability(service_name="test", enabled=enabled)

    @traced(span_name="search.test", handler_type="stage")
    async def double(value: int) -> int:
        return value * 2

    assert await double(21) == 42
    assert double.__name__ == "double"


@pytest.mark.asyncio
async def test_traced_reraises_failures():
    observability.initialize_observability(service_name="test", enabled=True)

    @traced(span_name="search.test", handler_type="stage")
    async def broken() -> None:
        raise LookupError("nothing here")

    with pytest.raises(LookupError):
        await broken()
