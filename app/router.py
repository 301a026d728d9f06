from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Optional

from app.handlers import MessageHandlers
from app.whatsapp import STATUS_BROADCAST, InboundEvent, SendResult


logger = logging.getLogger("sush.router")

TEXT_TYPES = {"text", "chat"}
VOICE_TYPES = {"audio", "ptt"}
UNSUPPORTED_MEDIA_TYPES = {"image", "video", "document", "sticker"}


class MessageKind(str, Enum):
    TEXT = "text"
    VOICE = "voice"
    UNSUPPORTED_MEDIA = "unsupported_media"
    IGNORED = "ignored"


def classify(event: InboundEvent) -> MessageKind:
    if event.type in TEXT_TYPES:
        return MessageKind.TEXT
    if event.type in VOICE_TYPES:
        return MessageKind.VOICE
    if event.type in UNSUPPORTED_MEDIA_TYPES:
        return MessageKind.UNSUPPORTED_MEDIA
    return MessageKind.IGNORED


class MessageRouter:
    """Filters inbound events and hands them to the matching handler."""

    def __init__(self, handlers: MessageHandlers) -> None:
        self.handlers = handlers
        self.ready_at: Optional[float] = None

    def mark_ready(self, at: Optional[float] = None) -> None:
        # Webhook timestamps are whole seconds.
        self.ready_at = float(int(time.time())) if at is None else at

    def skip_reason(self, event: InboundEvent) -> Optional[str]:
        """Why an event is dropped, or None when it should be handled."""
        if event.is_group_msg:
            return "group message"
        if event.from_ == STATUS_BROADCAST:
            return "status broadcast"
        if self.ready_at is None:
            return "not ready"
        if event.timestamp < self.ready_at:
            return "backlog"
        if classify(event) is MessageKind.TEXT and not event.body.strip():
            return "empty text"
        return None

    async def dispatch(self, event: InboundEvent) -> Optional[SendResult]:
        reason = self.skip_reason(event)
        if reason:
            logger.debug("Skipping %s event from %s: %s", event.type, event.from_, reason)
            return None

        kind = classify(event)
        if kind is MessageKind.TEXT:
            return await self.handlers.handle_text(event)
        if kind is MessageKind.VOICE:
            return await self.handlers.handle_voice(event)
        if kind is MessageKind.UNSUPPORTED_MEDIA:
            return await self.handlers.handle_unsupported_media(event)
        logger.debug("Ignoring %s event from %s", event.type, event.from_)
        return None
