from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Mapping, Optional, Type, Union

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field, ValidationError, field_validator

from agent.core.errors import SearchUnavailableError
from agent.core.knowledge_base import VENUE_AREA
from agent.tools.search import SerperSearchClient


logger = logging.getLogger("sush.search")

WEB_SEARCH = "web_search"


def _strip_code_fences(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped[3:]
        if stripped.startswith("json"):
            stripped = stripped[len("json"):].lstrip()
        stripped = stripped.rstrip()
        if stripped.endswith("```"):
            stripped = stripped[:-3]
    return stripped.strip()


def _extract_json_segment(text: str) -> Optional[str]:
    start = text.find("{")
    if start == -1:
        return None
    stack = 0
    for idx in range(start, len(text)):
        ch = text[idx]
        if ch == "{":
            stack += 1
        elif ch == "}":
            stack -= 1
            if stack == 0:
                return text[start: idx + 1]
    return None


def decode_arguments(raw: Union[str, Mapping[str, Any], None]) -> Dict[str, Any]:
    """Turn the model's argument blob into a dict.

    Models occasionally wrap the JSON in code fences or surround it with prose;
    both are tolerated. Anything that still does not decode to an object raises
    ValueError.
    """
    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    cleaned = _strip_code_fences(str(raw))
    if not cleaned:
        return {}
    try:
        decoded = json.loads(cleaned)
    except json.JSONDecodeError:
        segment = _extract_json_segment(cleaned)
        if not segment:
            raise ValueError(f"Arguments are not valid JSON: {cleaned[:120]}")
        try:
            decoded = json.loads(segment)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Arguments are not valid JSON: {exc}") from exc
    if not isinstance(decoded, dict):
        raise ValueError("Arguments must be a JSON object")
    return decoded


class WebSearchInput(BaseModel):
    query: str = Field(
        ...,
        description=(
            f"Precise, area-anchored search query. Both venues are in Sitapura RIICO Industrial Area, "
            f"Tonk Road, Jaipur 302022. Examples: "
            f'"Jaipur airport to {VENUE_AREA} distance", '
            f'"bridal makeup artists {VENUE_AREA}", '
            f'"hair salons {VENUE_AREA}", '
            f'"laundry dry cleaning {VENUE_AREA}", '
            f'"pharmacy chemist {VENUE_AREA}", '
            f'"restaurants {VENUE_AREA}"'
        ),
    )

    @field_validator("query")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("query must be a non-empty string")
        return value


WEB_SEARCH_DESCRIPTION = (
    "Search Google for real-time information NOT available in the wedding knowledge base. "
    "Use this for: "
    "(1) Distances or travel times between locations, directions. "
    "(2) LOCAL SERVICES near the venues — makeup artists, bridal makeup, hair stylists, beauty salons, "
    "nail salons, laundry/dry cleaning services, tailors/alterations, pharmacies/chemists, ATMs, "
    "restaurants, cafes, florists, gift shops. "
    "(3) Live or current weather in Jaipur (today, tomorrow, a specific day). "
    "(4) Phone numbers, addresses or Maps links for places the knowledge base does not list. "
    "(5) Any other live factual detail the knowledge base cannot answer. "
    "Do NOT call this for info already in the knowledge base: the InterContinental and Atlantiis Google Maps "
    "links, the InterContinental phone number, the general July weather outlook, itinerary, dress codes, "
    "food at the hotel, shuttle etc. "
    "IMPORTANT: for any \"near me\" or \"nearby\" query, ALWAYS anchor to the actual area — both venues are "
    f"in Sitapura RIICO Industrial Area, Tonk Road, Jaipur 302022. Use \"{VENUE_AREA}\" in the query, NOT "
    "just the hotel name, to get geographically accurate results."
)

# Recognized tool names and the argument schema each one accepts.
TOOL_SCHEMAS: Dict[str, Type[BaseModel]] = {
    WEB_SEARCH: WebSearchInput,
}


class ToolExecutor:
    """Runs tool calls requested by the model and always answers with text."""

    def __init__(self, search_client: SerperSearchClient, timeout: float = 15.0) -> None:
        self.search_client = search_client
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return self.search_client.enabled

    async def execute(self, name: str, arguments: Union[str, Mapping[str, Any], None]) -> str:
        schema = TOOL_SCHEMAS.get(name)
        if schema is None:
            logger.warning("Model requested unknown tool %r", name)
            return f"Tool error: '{name}' is not an available tool."

        try:
            parsed = schema(**decode_arguments(arguments))
        except (ValueError, ValidationError) as exc:
            message = " ".join(str(exc).split())[:300]
            logger.warning("Invalid arguments for %s: %s", name, message)
            return f"Tool error: invalid arguments for {name}: {message}"

        try:
            return await asyncio.wait_for(self._dispatch(name, parsed), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Tool %s timed out after %ss", name, self.timeout)
            return f"Search unavailable: timed out after {self.timeout:g} seconds"
        except SearchUnavailableError as exc:
            logger.warning("Search failed: %s", exc)
            return f"Search unavailable: {exc}"

    async def _dispatch(self, name: str, parsed: BaseModel) -> str:
        if name == WEB_SEARCH:
            logger.info("Searching: %r", parsed.query)
            return await self.search_client.search(parsed.query)
        raise SearchUnavailableError(f"No handler for tool '{name}'")

    def definitions(self) -> list:
        """Tool definitions to offer the model; empty when search is off."""
        if not self.enabled:
            return []
        return [build_web_search_tool(self)]


def build_web_search_tool(executor: ToolExecutor) -> StructuredTool:
    async def _web_search(query: str) -> str:
        return await executor.execute(WEB_SEARCH, {"query": query})

    return StructuredTool.from_function(
        coroutine=_web_search,
        name=WEB_SEARCH,
        description=WEB_SEARCH_DESCRIPTION,
        args_schema=WebSearchInput,
    )
