import asyncio

import pytest
from langchain_core.tools import StructuredTool

from agent.core.errors import SearchUnavailableError
from agent.tools.web_search import WEB_SEARCH_DESCRIPTION, ToolExecutor, decode_arguments


class StubSearch:
    def __init__(self, result: str = "Answer: 20 minutes", error: Exception | None = None, delay: float = 0.0) -> None:
        self.result = result
        self.error = error
        self.delay = delay
        self.queries: list[str] = []
        self.enabled = True

    async def search(self, query: str) -> str:
        self.queries.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


def test_decode_arguments_variants() -> None:
    assert decode_arguments('{"query": "atm"}') == {"query": "atm"}
    assert decode_arguments('```json\n{"query": "atm"}\n```') == {"query": "atm"}
    assert decode_arguments('Sure: {"query": "atm"} thanks') == {"query": "atm"}
    assert decode_arguments({"query": "atm"}) == {"query": "atm"}
    assert decode_arguments(None) == {}
    with pytest.raises(ValueError):
        decode_arguments("[1, 2]")
    with pytest.raises(ValueError):
        decode_arguments("not json at all")


def test_execute_runs_search() -> None:
    search = StubSearch()
    executor = ToolExecutor(search)
    result = asyncio.run(executor.execute("web_search", '{"query": "  pharmacy Sitapura  "}'))
    assert result == "Answer: 20 minutes"
    assert search.queries == ["pharmacy Sitapura"]


@pytest.mark.parametrize(
    "arguments",
    ['{"query": ""}', "{}", '{"q": "x"}', "garbage", '{"query": 42}'],
)
def test_invalid_arguments_become_tool_error_text(arguments: str) -> None:
    search = StubSearch()
    result = asyncio.run(ToolExecutor(search).execute("web_search", arguments))
    assert result.startswith("Tool error: invalid arguments for web_search")
    assert search.queries == []


def test_unknown_tool_becomes_tool_error_text() -> None:
    result = asyncio.run(ToolExecutor(StubSearch()).execute("book_cab", {"query": "x"}))
    assert result == "Tool error: 'book_cab' is not an available tool."


def test_search_failure_becomes_unavailable_text() -> None:
    search = StubSearch(error=SearchUnavailableError("SERPER_API_KEY not configured"))
    result = asyncio.run(ToolExecutor(search).execute("web_search", {"query": "atm"}))
    assert result == "Search unavailable: SERPER_API_KEY not configured"


def test_search_timeout_becomes_unavailable_text() -> None:
    search = StubSearch(delay=0.5)
    result = asyncio.run(ToolExecutor(search, timeout=0.01).execute("web_search", {"query": "atm"}))
    assert result.startswith("Search unavailable: timed out")


def test_definitions_follow_search_configuration() -> None:
    search = StubSearch()
    executor = ToolExecutor(search)
    [tool] = executor.definitions()
    assert isinstance(tool, StructuredTool)
    assert tool.name == "web_search"
    assert "Sitapura Tonk Road Jaipur 302022" in tool.description
    assert list(tool.args) == ["query"]

    search.enabled = False
    assert executor.definitions() == []


def test_structured_tool_routes_through_executor() -> None:
    search = StubSearch(result="1. *Cafe*")
    [tool] = ToolExecutor(search).definitions()
    assert asyncio.run(tool.ainvoke({"query": "cafes"})) == "1. *Cafe*"
    assert search.queries == ["cafes"]


def test_description_covers_live_lookups() -> None:
    assert "Live or current weather" in WEB_SEARCH_DESCRIPTION
    assert "places the knowledge base does not list" in WEB_SEARCH_DESCRIPTION
    assert "Sitapura Tonk Road Jaipur 302022" in WEB_SEARCH_DESCRIPTION
