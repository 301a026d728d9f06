from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage

from agent.core.formatting import sanitize
from agent.core.memory import HistoryStore, Role, Turn
from agent.core.prompt import SYSTEM_PROMPT
from agent.tools import SerperSearchClient, ToolExecutor
from config.settings import Settings, get_settings


logger = logging.getLogger("sush.agent")

FORCED_STOP_NOTE = (
    "(I couldn't finish looking that up just now – please ask the hotel front desk or the family for the latest details 🙏)"
)


class ExchangeState(str, Enum):
    AWAITING_MODEL = "awaiting_model"
    EXECUTING_TOOLS = "executing_tools"
    DONE = "done"
    FORCED_STOP = "forced_stop"


def build_llm(settings: Optional[Settings] = None) -> BaseChatModel:
    settings = settings or get_settings()
    if settings.llm_provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI

        if not settings.google_api_key:
            raise RuntimeError("GOOGLE_API_KEY not set. Please configure it in environment or .env")
        return ChatGoogleGenerativeAI(
            model=settings.llm_model,
            google_api_key=settings.google_api_key,
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
        )

    from langchain_openai import ChatOpenAI

    if not settings.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY not set. Please configure it in environment or .env")
    return ChatOpenAI(
        model=settings.llm_model,
        api_key=settings.openai_api_key,
        temperature=settings.temperature,
        max_tokens=settings.max_output_tokens,
    )


def to_lc_messages(history: Sequence[Turn]) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    for turn in history:
        if turn.role is Role.USER:
            messages.append(HumanMessage(content=turn.content))
        elif turn.role is Role.ASSISTANT:
            messages.append(AIMessage(content=turn.content))
        elif turn.role is Role.SYSTEM:
            messages.append(SystemMessage(content=turn.content))
        else:
            messages.append(ToolMessage(content=turn.content, tool_call_id=turn.tool_call_id or ""))
    return messages


def message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    # Some providers return a list of content parts.
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(str(part.get("text", "")))
    return "".join(parts)


class ConversationOrchestrator:
    """Drives the model/tool cycle for one guest message at a time per user.

    History is written only once the final reply is known; intermediate
    tool-call messages never reach the store.
    """

    def __init__(
        self,
        llm: Any,
        tool_executor: Optional[ToolExecutor] = None,
        history: Optional[HistoryStore] = None,
        *,
        system_prompt: str = SYSTEM_PROMPT,
        max_tool_rounds: int = 4,
        llm_timeout: Optional[float] = 30.0,
    ) -> None:
        if max_tool_rounds <= 0:
            raise ValueError("max_tool_rounds must be positive")
        self.llm = llm
        self.tool_executor = tool_executor
        self.history = history if history is not None else HistoryStore()
        self.system_prompt = system_prompt
        self.max_tool_rounds = max_tool_rounds
        self.llm_timeout = llm_timeout
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def _tool_definitions(self) -> list:
        if self.tool_executor is None:
            return []
        return self.tool_executor.definitions()

    def build_exchange(self, user_id: str, user_message: str) -> List[BaseMessage]:
        return [
            SystemMessage(content=self.system_prompt),
            *to_lc_messages(self.history.get(user_id)),
            HumanMessage(content=user_message),
        ]

    async def _call_model(self, model: Any, exchange: List[BaseMessage]) -> AIMessage:
        call = model.ainvoke(list(exchange))
        if self.llm_timeout:
            return await asyncio.wait_for(call, timeout=self.llm_timeout)
        return await call

    async def _run_tool(self, user_id: str, call: Dict[str, Any]) -> str:
        name = call.get("name") or ""
        try:
            result = await self.tool_executor.execute(name, call.get("args"))
        except Exception as exc:
            logger.warning("[%s] Tool %s raised: %s", user_id, name, exc)
            result = f"Tool error: {name} failed ({exc.__class__.__name__}: {exc})"
        if not result:
            result = f"Tool error: {name} returned no output"
        return result

    async def _execute_tools(self, user_id: str, reply: AIMessage) -> List[ToolMessage]:
        calls = list(reply.tool_calls or [])
        if self.tool_executor is None:
            results = ["Tool error: no tools are available right now"] * len(calls)
        else:
            results = await asyncio.gather(*(self._run_tool(user_id, call) for call in calls))

        messages = [
            ToolMessage(content=result, tool_call_id=call.get("id") or "", name=call.get("name"))
            for call, result in zip(calls, results)
        ]
        # Every id the model emitted needs an answer, including ones it mangled.
        for bad in getattr(reply, "invalid_tool_calls", None) or []:
            error = bad.get("error") or "arguments could not be parsed"
            messages.append(
                ToolMessage(
                    content=f"Tool error: invalid call to {bad.get('name')}: {error}",
                    tool_call_id=bad.get("id") or "",
                    name=bad.get("name"),
                )
            )
        return messages

    def evict(self, user_id: str) -> None:
        """Forget one guest: history and the idle per-user lock."""
        self.history.evict(user_id)
        lock = self._locks.get(user_id)
        if lock is not None and not lock.locked():
            del self._locks[user_id]

    def reset(self) -> None:
        self.history.reset()
        for user_id in [uid for uid, lock in self._locks.items() if not lock.locked()]:
            del self._locks[user_id]

    @staticmethod
    def _has_tool_calls(reply: AIMessage) -> bool:
        return bool(reply.tool_calls or getattr(reply, "invalid_tool_calls", None))

    async def respond(self, user_id: str, user_message: str) -> str:
        async with self._locks[user_id]:
            exchange = self.build_exchange(user_id, user_message)
            tools = self._tool_definitions()
            first_model = self.llm.bind_tools(tools, tool_choice="auto") if tools else self.llm

            state = ExchangeState.AWAITING_MODEL
            reply = await self._call_model(first_model, exchange)
            rounds = 0
            partial = ""

            while True:
                if not self._has_tool_calls(reply):
                    state = ExchangeState.DONE
                    break
                partial = message_text(reply) or partial
                if rounds >= self.max_tool_rounds:
                    state = ExchangeState.FORCED_STOP
                    break

                state = ExchangeState.EXECUTING_TOOLS
                rounds += 1
                exchange.append(reply)
                tool_messages = await self._execute_tools(user_id, reply)
                exchange.extend(tool_messages)
                logger.info("[%s] Tool round %s: %s call(s)", user_id, rounds, len(tool_messages))

                state = ExchangeState.AWAITING_MODEL
                reply = await self._call_model(self.llm, exchange)

            if state is ExchangeState.FORCED_STOP:
                logger.warning("[%s] Tool loop stopped after %s rounds", user_id, rounds)
                text = f"{partial.strip()}\n\n{FORCED_STOP_NOTE}" if partial.strip() else FORCED_STOP_NOTE
            else:
                text = message_text(reply)

            answer = sanitize(text.strip())
            self.history.append(user_id, Role.USER, user_message)
            self.history.append(user_id, Role.ASSISTANT, answer)
            return answer


def build_agent(
    settings: Optional[Settings] = None,
    history: Optional[HistoryStore] = None,
) -> ConversationOrchestrator:
    settings = settings or get_settings()
    executor = ToolExecutor(SerperSearchClient.from_settings(settings), timeout=settings.tool_timeout)
    return ConversationOrchestrator(
        build_llm(settings),
        executor,
        history if history is not None else HistoryStore(settings.max_history_pairs),
        max_tool_rounds=settings.max_tool_rounds,
        llm_timeout=settings.llm_timeout,
    )
