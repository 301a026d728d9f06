import asyncio
import json

import httpx
import pytest

from agent.core.errors import SearchUnavailableError
from agent.tools.search import MAX_RESULT_CHARS, SerperSearchClient, format_results


def test_answer_box_first_then_knowledge_graph() -> None:
    data = {
        "answerBox": {"answer": "18 km", "link": "https://maps.example/route"},
        "knowledgeGraph": {
            "title": "InterContinental Jaipur Tonk Road",
            "type": "Hotel",
            "address": "Sitapura, Jaipur",
            "phone": "+91 141 717 6666",
            "rating": 4.6,
            "attributes": {f"k{i}": f"v{i}" for i in range(8)},
        },
    }
    text = format_results(data, "airport to hotel")
    lines = text.splitlines()
    assert lines[0] == "Answer: 18 km"
    assert lines[1] == "Source: https://maps.example/route"
    assert text.index("Answer:") < text.index("InterContinental Jaipur Tonk Road")
    assert "Phone: +91 141 717 6666" in text
    assert "Rating: 4.6 ⭐" in text
    assert "k5: v5" in text and "k6" not in text


def test_answer_box_snippet_used_without_answer() -> None:
    text = format_results({"answerBox": {"snippet": "About 25 minutes"}}, "q")
    assert text == "Answer: About 25 minutes"


def test_places_truncated_and_suppress_organic() -> None:
    places = [
        {
            "title": f"Salon {i}",
            "category": "Beauty salon",
            "rating": 4.5,
            "ratingCount": 120,
            "address": f"Shop {i}, Sitapura",
            "phoneNumber": f"98290000{i}",
        }
        for i in range(1, 7)
    ]
    organic = [{"title": "Blog", "snippet": "Top salons", "link": "https://blog.example"}]
    text = format_results({"places": places, "organic": organic}, "salons")
    assert "Nearby places found:" in text
    assert "1. *Salon 1* (Beauty salon) — ⭐ 4.5 (120 reviews)" in text
    assert "   📍 Shop 4, Sitapura" in text
    assert "Salon 5" not in text
    assert "Blog" not in text


def test_organic_top_three_with_header_after_other_parts() -> None:
    organic = [{"title": f"T{i}", "snippet": f"S{i}", "link": f"https://r{i}.example"} for i in range(5)]
    text = format_results({"answerBox": {"answer": "yes"}, "organic": organic}, "q")
    assert "Top results:" in text
    assert "3. T2: S2" in text
    assert "T3" not in text


def test_organic_without_header_when_alone() -> None:
    text = format_results({"organic": [{"title": "T", "snippet": "S"}]}, "q")
    assert text == "1. T: S"


def test_related_question_only_when_thin() -> None:
    related = [{"question": "Is it far?", "snippet": "No, 20 minutes."}]
    thin = format_results({"answerBox": {"answer": "yes"}, "peopleAlsoAsk": related}, "q")
    assert thin.endswith("Related: Is it far? → No, 20 minutes.")

    rich = format_results(
        {"organic": [{"title": f"T{i}", "snippet": "S"} for i in range(3)], "peopleAlsoAsk": related},
        "q",
    )
    assert "Related" not in rich


def test_empty_results_message() -> None:
    assert format_results({}, "florists near venue") == 'No useful results found for: "florists near venue"'


def test_output_is_bounded() -> None:
    text = format_results({"answerBox": {"answer": "x" * 10_000}}, "q")
    assert len(text) == MAX_RESULT_CHARS


def test_client_posts_serper_request() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("X-API-KEY")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"answerBox": {"answer": "15 minutes"}})

    client = SerperSearchClient("serper-key", transport=httpx.MockTransport(handler))
    text = asyncio.run(client.search("airport to Sitapura Tonk Road Jaipur 302022"))

    assert text == "Answer: 15 minutes"
    assert seen["url"] == "https://google.serper.dev/search"
    assert seen["key"] == "serper-key"
    assert seen["body"] == {
        "q": "airport to Sitapura Tonk Road Jaipur 302022",
        "num": 5,
        "gl": "in",
        "hl": "en",
    }


def test_client_without_key_is_unavailable() -> None:
    client = SerperSearchClient(None)
    assert not client.enabled
    with pytest.raises(SearchUnavailableError):
        asyncio.run(client.search("anything"))


def test_client_http_error_is_unavailable() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="busy"))
    client = SerperSearchClient("k", transport=transport)
    with pytest.raises(SearchUnavailableError):
        asyncio.run(client.search("q"))


def test_client_bad_json_is_unavailable() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
    client = SerperSearchClient("k", transport=transport)
    with pytest.raises(SearchUnavailableError):
        asyncio.run(client.search("q"))
