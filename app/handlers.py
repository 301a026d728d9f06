from __future__ import annotations

import logging
from typing import Optional, Tuple

from agent.agent import ConversationOrchestrator
from agent.core.errors import MediaDownloadError, SynthesisError, TranscriptionError
from app.voice import VoicePipeline
from app.whatsapp import InboundEvent, SendResult, WhatsAppClient


logger = logging.getLogger("sush.handlers")

FALLBACK_MESSAGE = (
    "🙏 So sorry, I ran into a small hiccup! Please try again in a moment, or contact the family "
    "directly for urgent queries. 😊"
)
DOWNLOAD_FAILED_MESSAGE = "Hmm, I couldn't download your voice note 🙈 Please try again!"
UNCLEAR_AUDIO_MESSAGE = (
    "I couldn't make that out clearly 🙈\n\nCould you try again, or type your question instead?"
)
VOICE_REPLY_FAILED_NOTE = "_(I couldn't record a voice reply this time, so here it is in text! 💬)_"

MEDIA_LABELS = {
    "image": "image 📸",
    "video": "video 🎥",
    "document": "document 📄",
    "sticker": "sticker 😄",
}

MIN_TRANSCRIPT_LENGTH = 2


def unsupported_media_message(msg_type: str) -> str:
    label = MEDIA_LABELS.get(msg_type, "file 📎")
    return (
        f"I can see you sent a {label}!\n\n"
        "I can only read *text messages* and listen to *voice notes* for now.\n\n"
        "Try typing your question, or record a voice note and I'll respond with one! 🎙️"
    )


class MessageHandlers:
    """Outermost handlers: the only place guests see fallback text.

    Each handler sends exactly one reply per event.
    """

    def __init__(
        self,
        orchestrator: ConversationOrchestrator,
        transport: WhatsAppClient,
        voice: Optional[VoicePipeline] = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.transport = transport
        self.voice = voice

    async def _show_typing(self, event: InboundEvent) -> None:
        if not event.message_id:
            return
        result = await self.transport.show_typing(event.message_id)
        if not result.ok:
            logger.debug("[%s] Typing indicator failed: %s", event.from_, result.error)

    def _log_send(self, event: InboundEvent, kind: str, result: SendResult) -> SendResult:
        if result.ok:
            logger.info("[%s] %s reply sent.", event.from_, kind)
        else:
            logger.error(
                "[%s] %s reply failed (status=%s): %s",
                event.from_,
                kind,
                result.status_code,
                result.error,
            )
        return result

    async def _reply_text(self, event: InboundEvent, text: str, kind: str = "Text") -> SendResult:
        result = await self.transport.send_text(event.from_, text, reply_to=event.message_id)
        return self._log_send(event, kind, result)

    async def handle_text(self, event: InboundEvent) -> SendResult:
        user_id = event.from_
        text = event.body.strip()
        logger.info("[%s] (text) %r", user_id, text)
        await self._show_typing(event)
        try:
            reply = await self.orchestrator.respond(user_id, text)
        except Exception as exc:
            logger.exception("[%s] Text handler error: %s", user_id, exc)
            reply = ""
        return await self._reply_text(event, reply or FALLBACK_MESSAGE)

    async def handle_voice(self, event: InboundEvent) -> SendResult:
        user_id = event.from_
        logger.info("[%s] Voice note received, processing", user_id)
        if self.voice is None or not event.media_id:
            return await self._reply_text(event, DOWNLOAD_FAILED_MESSAGE, "Voice")
        await self._show_typing(event)

        try:
            reply, notice = await self._voice_to_reply(event)
        except Exception as exc:
            logger.exception("[%s] Voice handler error: %s", user_id, exc)
            return await self._reply_text(event, FALLBACK_MESSAGE, "Voice")
        if notice:
            return await self._reply_text(event, notice, "Voice")

        try:
            return await self._send_voice_reply(event, reply)
        except Exception as exc:
            # The answer is already in history, so the guest still gets it as text.
            logger.exception("[%s] Voice reply error: %s", user_id, exc)
            return await self._reply_text(event, f"{reply}\n\n{VOICE_REPLY_FAILED_NOTE}", "Voice")

    async def _voice_to_reply(self, event: InboundEvent) -> Tuple[str, Optional[str]]:
        """Download, transcribe and answer; returns (reply, None) or ("", notice)."""
        user_id = event.from_
        try:
            audio = await self.transport.download_media(event.media_id)
        except MediaDownloadError as exc:
            logger.warning("[%s] %s", user_id, exc)
            return "", DOWNLOAD_FAILED_MESSAGE

        try:
            transcript = await self.voice.transcribe(audio)
        except TranscriptionError as exc:
            logger.warning("[%s] %s", user_id, exc)
            transcript = ""
        logger.info("[%s] Transcribed: %r", user_id, transcript)
        if len(transcript.strip()) < MIN_TRANSCRIPT_LENGTH:
            return "", UNCLEAR_AUDIO_MESSAGE

        reply = await self.orchestrator.respond(user_id, transcript)
        if not reply:
            return "", FALLBACK_MESSAGE
        return reply, None

    async def _send_voice_reply(self, event: InboundEvent, reply: str) -> SendResult:
        try:
            voice_note = await self.voice.synthesize(reply)
        except SynthesisError as exc:
            logger.warning("[%s] %s", event.from_, exc)
            return await self._reply_text(event, f"{reply}\n\n{VOICE_REPLY_FAILED_NOTE}", "Voice")

        result = await self.transport.send_audio(
            event.from_, voice_note, as_voice=True, reply_to=event.message_id
        )
        if not result.ok:
            self._log_send(event, "Voice", result)
            return await self._reply_text(event, f"{reply}\n\n{VOICE_REPLY_FAILED_NOTE}", "Voice")
        return self._log_send(event, "Voice", result)

    async def handle_unsupported_media(self, event: InboundEvent) -> SendResult:
        return await self._reply_text(event, unsupported_media_message(event.type), "Media")
