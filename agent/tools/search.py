from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from agent.core.errors import SearchUnavailableError
from config.settings import Settings, get_settings


logger = logging.getLogger("sush.search")

DEFAULT_SERPER_URL = "https://google.serper.dev/search"
MAX_RESULT_CHARS = 3000


def _format_answer_box(box: Dict[str, Any]) -> List[str]:
    parts = []
    if box.get("answer"):
        parts.append(f"Answer: {box['answer']}")
    elif box.get("snippet"):
        parts.append(f"Answer: {box['snippet']}")
    if box.get("link"):
        parts.append(f"Source: {box['link']}")
    return parts


def _format_knowledge_graph(graph: Dict[str, Any]) -> List[str]:
    parts = []
    if graph.get("title"):
        parts.append(f"\n{graph['title']}")
    if graph.get("type"):
        parts.append(f"Type: {graph['type']}")
    if graph.get("description"):
        parts.append(str(graph["description"]))
    for key, label in (("address", "Address"), ("phone", "Phone"), ("website", "Website")):
        if graph.get(key):
            parts.append(f"{label}: {graph[key]}")
    if graph.get("rating"):
        parts.append(f"Rating: {graph['rating']} ⭐")
    attributes = graph.get("attributes")
    if isinstance(attributes, dict):
        useful = " | ".join(f"{k}: {v}" for k, v in list(attributes.items())[:6])
        if useful:
            parts.append(useful)
    return parts


def _format_places(places: List[Dict[str, Any]]) -> List[str]:
    parts = ["\nNearby places found:"]
    for idx, place in enumerate(places[:4], start=1):
        line = f"{idx}. *{place.get('title')}*"
        if place.get("category"):
            line += f" ({place['category']})"
        if place.get("rating"):
            reviews = f" ({place['ratingCount']} reviews)" if place.get("ratingCount") else ""
            line += f" — ⭐ {place['rating']}{reviews}"
        parts.append(line)
        if place.get("address"):
            parts.append(f"   📍 {place['address']}")
        if place.get("phoneNumber"):
            parts.append(f"   📞 {place['phoneNumber']}")
        if place.get("website"):
            parts.append(f"   🌐 {place['website']}")
    return parts


def format_results(data: Dict[str, Any], query: str) -> str:
    """Condense a Serper response into model-readable text.

    Priority: answer box, knowledge graph, places, organic results (only when
    there are no places), then one related question when the rest is thin.
    """
    parts: List[str] = []

    if isinstance(data.get("answerBox"), dict):
        parts.extend(_format_answer_box(data["answerBox"]))

    if isinstance(data.get("knowledgeGraph"), dict):
        parts.extend(_format_knowledge_graph(data["knowledgeGraph"]))

    places = data.get("places") or []
    if places:
        parts.extend(_format_places(places))

    organic = data.get("organic") or []
    if organic and not places:
        if parts:
            parts.append("\nTop results:")
        for idx, result in enumerate(organic[:3], start=1):
            parts.append(f"{idx}. {result.get('title')}: {result.get('snippet')}")
            if result.get("link"):
                parts.append(f"   {result['link']}")

    related = data.get("peopleAlsoAsk") or []
    if related and len(parts) < 3:
        first = related[0]
        if first.get("snippet"):
            parts.append(f"\nRelated: {first.get('question')} → {first['snippet']}")

    if not parts:
        return f'No useful results found for: "{query}"'
    return "\n".join(parts).strip()[:MAX_RESULT_CHARS]


class SerperSearchClient:
    """Google search through Serper.dev."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        endpoint: str = DEFAULT_SERPER_URL,
        result_count: int = 5,
        locale: str = "in",
        language: str = "en",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.endpoint = endpoint
        self.result_count = result_count
        self.locale = locale
        self.language = language
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SerperSearchClient":
        settings = settings or get_settings()
        return cls(
            settings.serper_api_key,
            endpoint=settings.search_api_url,
            result_count=settings.search_result_count,
            locale=settings.search_locale,
            language=settings.search_language,
            timeout=settings.search_timeout,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def search(self, query: str) -> str:
        if not self.api_key:
            raise SearchUnavailableError("SERPER_API_KEY not configured")

        # gl=in gets Indian locale results (rupee prices, local businesses);
        # the model translates to the guest's language itself.
        payload = {
            "q": query,
            "num": self.result_count,
            "gl": self.locale,
            "hl": self.language,
        }
        headers = {"X-API-KEY": self.api_key, "Content-Type": "application/json"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise SearchUnavailableError(f"Search API call failed: {exc}") from exc
        except ValueError as exc:
            raise SearchUnavailableError("Failed to parse search response") from exc

        if not isinstance(data, dict):
            raise SearchUnavailableError("Search response must be a JSON object")

        formatted = format_results(data, query)
        logger.info("Search for %r returned %s chars", query, len(formatted))
        return formatted
