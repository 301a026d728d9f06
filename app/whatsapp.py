"""WhatsApp Cloud API transport: webhook parsing and outbound messages."""

from __future__ import annotations

import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from agent.core.errors import MediaDownloadError
from config.settings import Settings, get_settings


logger = logging.getLogger("sush.whatsapp")

GRAPH_BASE_URL = "https://graph.facebook.com"
STATUS_BROADCAST = "status@broadcast"
VOICE_MIME_TYPE = "audio/ogg; codecs=opus"
MAX_TEXT_LENGTH = 4096


class InboundEvent(BaseModel):
    """One inbound WhatsApp event, normalized from the webhook payload."""

    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(..., alias="from", description="Sender id (phone number)")
    type: str = Field(..., description="'text', 'audio', 'image', ... or 'status'")
    body: str = ""
    timestamp: float = 0.0
    is_group_msg: bool = False
    message_id: Optional[str] = None
    media_id: Optional[str] = None
    is_voice: bool = False


@dataclass(frozen=True)
class SendResult:
    ok: bool
    status_code: Optional[int] = None
    message_id: Optional[str] = None
    error: Optional[str] = None


def _to_timestamp(raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return 0.0


def _message_event(message: Dict[str, Any]) -> InboundEvent:
    msg_type = message.get("type") or "unknown"
    body = ""
    media_id = None
    is_voice = False
    if msg_type == "text":
        body = (message.get("text") or {}).get("body") or ""
    media = message.get(msg_type)
    if msg_type in {"audio", "image", "video", "document", "sticker"} and isinstance(media, dict):
        media_id = media.get("id")
        body = media.get("caption") or ""
        is_voice = bool(media.get("voice"))
    return InboundEvent(
        **{
            "from": message.get("from") or "",
            "type": msg_type,
            "body": body,
            "timestamp": _to_timestamp(message.get("timestamp")),
            "is_group_msg": bool(message.get("group_id")),
            "message_id": message.get("id"),
            "media_id": media_id,
            "is_voice": is_voice,
        }
    )


def _status_event(status: Dict[str, Any]) -> InboundEvent:
    return InboundEvent(
        **{
            "from": STATUS_BROADCAST,
            "type": "status",
            "body": status.get("status") or "",
            "timestamp": _to_timestamp(status.get("timestamp")),
            "message_id": status.get("id"),
        }
    )


def parse_webhook_payload(payload: Dict[str, Any]) -> List[InboundEvent]:
    """Flatten a Cloud API webhook body into inbound events."""
    events: List[InboundEvent] = []
    for entry in payload.get("entry") or []:
        for change in entry.get("changes") or []:
            value = change.get("value") or {}
            for message in value.get("messages") or []:
                events.append(_message_event(message))
            for status in value.get("statuses") or []:
                events.append(_status_event(status))
    return events


def verify_signature(app_secret: Optional[str], body: bytes, header: Optional[str]) -> bool:
    """Check the X-Hub-Signature-256 header; always passes when no secret is set."""
    if not app_secret:
        return True
    if not header or not header.startswith("sha256="):
        return False
    expected = hmac.new(app_secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, header.split("=", 1)[1])


class WhatsAppClient:
    """Outbound calls to the Graph API. Sends report a SendResult instead of raising."""

    def __init__(
        self,
        token: str,
        phone_number_id: str,
        *,
        api_version: str = "v20.0",
        timeout: float = 20.0,
        base_url: str = GRAPH_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.token = token
        self.phone_number_id = phone_number_id
        self.api_root = f"{base_url}/{api_version}"
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "WhatsAppClient":
        settings = settings or get_settings()
        return cls(
            settings.whatsapp_token or "",
            settings.whatsapp_phone_number_id or "",
            api_version=settings.graph_api_version,
            timeout=settings.whatsapp_timeout,
        )

    @property
    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _post_message(self, payload: Dict[str, Any]) -> SendResult:
        body = {"messaging_product": "whatsapp", **payload}
        try:
            async with self._client() as client:
                response = await client.post(
                    f"{self.api_root}/{self.phone_number_id}/messages",
                    json=body,
                    headers=self._headers,
                )
        except httpx.HTTPError as exc:
            return SendResult(ok=False, error=str(exc))
        if response.status_code >= 300:
            return SendResult(
                ok=False,
                status_code=response.status_code,
                error=" ".join(response.text.split())[:500],
            )
        message_id = None
        try:
            data = response.json()
        except ValueError:
            data = None
        messages = data.get("messages") if isinstance(data, dict) else None
        if messages and isinstance(messages[0], dict):
            message_id = messages[0].get("id")
        return SendResult(ok=True, status_code=response.status_code, message_id=message_id)

    async def send_text(self, to: str, text: str, reply_to: Optional[str] = None) -> SendResult:
        payload: Dict[str, Any] = {
            "to": to,
            "type": "text",
            "text": {"preview_url": False, "body": text[:MAX_TEXT_LENGTH]},
        }
        if reply_to:
            payload["context"] = {"message_id": reply_to}
        return await self._post_message(payload)

    async def show_typing(self, message_id: str) -> SendResult:
        return await self._post_message(
            {
                "status": "read",
                "message_id": message_id,
                "typing_indicator": {"type": "text"},
            }
        )

    async def upload_media(self, data: bytes, mime_type: str, filename: str) -> str:
        async with self._client() as client:
            response = await client.post(
                f"{self.api_root}/{self.phone_number_id}/media",
                data={"messaging_product": "whatsapp", "type": mime_type},
                files={"file": (filename, data, mime_type)},
                headers=self._headers,
            )
            response.raise_for_status()
            body = response.json()
        if not isinstance(body, dict) or not body.get("id"):
            raise ValueError(f"Media upload returned no id: {body!r:.200}")
        return body["id"]

    async def send_audio(
        self,
        to: str,
        audio: bytes,
        *,
        as_voice: bool = True,
        reply_to: Optional[str] = None,
    ) -> SendResult:
        """Upload audio and send it; OGG Opus renders as a voice note."""
        mime_type = VOICE_MIME_TYPE if as_voice else "audio/mpeg"
        filename = "reply.ogg" if as_voice else "reply.mp3"
        try:
            media_id = await self.upload_media(audio, mime_type, filename)
        except (httpx.HTTPError, ValueError) as exc:
            return SendResult(ok=False, error=f"media upload failed: {exc}")
        payload: Dict[str, Any] = {"to": to, "type": "audio", "audio": {"id": media_id}}
        if reply_to:
            payload["context"] = {"message_id": reply_to}
        return await self._post_message(payload)

    async def download_media(self, media_id: str) -> bytes:
        try:
            async with self._client() as client:
                meta = await client.get(f"{self.api_root}/{media_id}", headers=self._headers)
                meta.raise_for_status()
                data = meta.json()
                url = data.get("url") if isinstance(data, dict) else None
                if not url:
                    raise MediaDownloadError(f"No download URL for media {media_id}")
                media = await client.get(url, headers=self._headers)
                media.raise_for_status()
        except httpx.HTTPError as exc:
            raise MediaDownloadError(f"Media download failed: {exc}") from exc
        except ValueError as exc:
            raise MediaDownloadError("Media lookup returned invalid JSON") from exc
        if not media.content:
            raise MediaDownloadError(f"Media {media_id} is empty")
        return media.content
