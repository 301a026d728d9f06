from __future__ import annotations

import asyncio
from typing import Any, List, Optional

from langchain_core.messages import AIMessage

from app.whatsapp import SendResult


def tool_call(query: str, call_id: str = "call_1", name: str = "web_search") -> dict:
    return {"name": name, "args": {"query": query}, "id": call_id}


class _BoundModel:
    def __init__(self, model: "ScriptedChatModel", tools: list, kwargs: dict) -> None:
        self.model = model
        self.tools = tools
        self.kwargs = kwargs

    async def ainvoke(self, messages: list) -> AIMessage:
        return await self.model._answer(messages, self.tools)


class ScriptedChatModel:
    """Chat model stand-in that replays prepared AIMessages and records calls."""

    def __init__(self, replies: List[Any], delay: float = 0.0) -> None:
        self.replies = list(replies)
        self.delay = delay
        self.calls: List[dict] = []

    def bind_tools(self, tools: list, **kwargs: Any) -> _BoundModel:
        return _BoundModel(self, tools, kwargs)

    async def ainvoke(self, messages: list) -> AIMessage:
        return await self._answer(messages, None)

    async def _answer(self, messages: list, tools: Optional[list]) -> AIMessage:
        self.calls.append({"messages": list(messages), "tools": tools})
        if self.delay:
            await asyncio.sleep(self.delay)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, str):
            return AIMessage(content=reply)
        return reply


class RecordingExecutor:
    def __init__(self, result: str = "Result text", error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[tuple] = []
        self.enabled = True

    async def execute(self, name: str, arguments: Any) -> str:
        self.calls.append((name, arguments))
        if self.error is not None:
            raise self.error
        return self.result

    def definitions(self) -> list:
        return ["web_search"] if self.enabled else []


class FakeTransport:
    def __init__(self, audio: bytes = b"OggS-voice", download_error: Optional[Exception] = None) -> None:
        self.audio = audio
        self.download_error = download_error
        self.texts: List[tuple] = []
        self.audios: List[tuple] = []
        self.typing: List[str] = []
        self.audio_result = SendResult(ok=True, status_code=200, message_id="wamid.out-audio")

    async def send_text(self, to: str, text: str, reply_to: Optional[str] = None) -> SendResult:
        self.texts.append((to, text, reply_to))
        return SendResult(ok=True, status_code=200, message_id="wamid.out")

    async def send_audio(self, to: str, audio: bytes, *, as_voice: bool = True, reply_to: Optional[str] = None) -> SendResult:
        self.audios.append((to, audio, as_voice, reply_to))
        return self.audio_result

    async def show_typing(self, message_id: str) -> SendResult:
        self.typing.append(message_id)
        return SendResult(ok=True, status_code=200)

    async def download_media(self, media_id: str) -> bytes:
        if self.download_error is not None:
            raise self.download_error
        return self.audio


class FakeVoice:
    def __init__(
        self,
        transcript: str = "Sangeet kab hai?",
        transcribe_error: Optional[Exception] = None,
        synth_error: Optional[Exception] = None,
    ) -> None:
        self.transcript = transcript
        self.transcribe_error = transcribe_error
        self.synth_error = synth_error
        self.synthesized: List[str] = []

    async def transcribe(self, audio: bytes, filename: str = "voice.ogg") -> str:
        if self.transcribe_error is not None:
            raise self.transcribe_error
        return self.transcript

    async def synthesize(self, text: str) -> bytes:
        if self.synth_error is not None:
            raise self.synth_error
        self.synthesized.append(text)
        return b"OggS-reply"


class FakeOrchestrator:
    def __init__(self, reply: str = "Sangeet *raat 8 baje* hai!", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: List[tuple] = []

    async def respond(self, user_id: str, user_message: str) -> str:
        self.calls.append((user_id, user_message))
        if self.error is not None:
            raise self.error
        return self.reply
