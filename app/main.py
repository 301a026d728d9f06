from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import BackgroundTasks, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field, field_validator

from agent.agent import ConversationOrchestrator, build_agent
from agent.core.errors import ConfigurationError
from app.handlers import FALLBACK_MESSAGE, MessageHandlers
from app.router import MessageRouter
from app.voice import VoicePipeline
from app.whatsapp import InboundEvent, WhatsAppClient, parse_webhook_payload, verify_signature
from config.settings import Settings, get_settings, validate_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("sush")


class ChatRequest(BaseModel):
    client_id: str = Field(..., description="Unique identifier for user/session")
    query: str = Field(..., min_length=1, description="User's latest message")

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("query must not be blank")
        return value


def build_router(settings: Settings) -> MessageRouter:
    validate_settings(settings)
    orchestrator = build_agent(settings)
    handlers = MessageHandlers(
        orchestrator,
        WhatsAppClient.from_settings(settings),
        VoicePipeline.from_settings(settings),
    )
    return MessageRouter(handlers)


async def _dispatch(router: MessageRouter, event: InboundEvent) -> None:
    try:
        await router.dispatch(event)
    except Exception as exc:
        logger.exception("Dispatch failed for %s event from %s: %s", event.type, event.from_, exc)


def create_app(
    settings: Optional[Settings] = None,
    router: Optional[MessageRouter] = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "router", None) is None:
            app.state.router = build_router(settings)
        orchestrator: ConversationOrchestrator = app.state.router.handlers.orchestrator
        search_on = bool(orchestrator.tool_executor and orchestrator.tool_executor.enabled)
        logger.info(
            "Config: provider=%s model=%s search_enabled=%s history_pairs=%s",
            settings.llm_provider,
            settings.llm_model,
            search_on,
            orchestrator.history.max_pairs,
        )
        app.state.router.mark_ready()
        logger.info("WhatsApp concierge is live and waiting for messages")
        yield

    app = FastAPI(title="SuSh Wedding Concierge", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.router = router

    # CORS: allow a local test frontend for /agent/chat during development
    if settings.app_env.lower() in {"dev", "development", "local"}:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/webhook")
    def verify_webhook(
        mode: Optional[str] = Query(None, alias="hub.mode"),
        token: Optional[str] = Query(None, alias="hub.verify_token"),
        challenge: Optional[str] = Query(None, alias="hub.challenge"),
    ) -> PlainTextResponse:
        if mode == "subscribe" and token and token == settings.whatsapp_verify_token:
            return PlainTextResponse(challenge or "")
        raise HTTPException(status_code=403, detail="Webhook verification failed")

    @app.post("/webhook")
    async def receive_webhook(request: Request, background_tasks: BackgroundTasks) -> Dict[str, Any]:
        body = await request.body()
        if not verify_signature(
            settings.whatsapp_app_secret, body, request.headers.get("X-Hub-Signature-256")
        ):
            raise HTTPException(status_code=403, detail="Invalid signature")
        try:
            payload = json.loads(body or b"{}")
        except json.JSONDecodeError:
            raise HTTPException(status_code=400, detail="Body must be JSON")
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Body must be a JSON object")

        events = parse_webhook_payload(payload)
        for event in events:
            background_tasks.add_task(_dispatch, request.app.state.router, event)
        # Acknowledge immediately; WhatsApp retries deliveries that are slow to answer.
        return {"status": "ok", "events": len(events)}

    @app.post("/agent/chat")
    async def chat(req: ChatRequest, request: Request) -> Dict[str, Any]:
        orchestrator: ConversationOrchestrator = request.app.state.router.handlers.orchestrator
        logger.info("Incoming chat: client_id=%s query_len=%s", req.client_id, len(req.query or ""))
        try:
            output_text = await orchestrator.respond(req.client_id, req.query)
        except Exception as e:
            logger.exception("Chat processing failed: %s", e)
            clean_error = " ".join(str(e).split())[:500]
            return {"ai_response": FALLBACK_MESSAGE, "error": clean_error}
        return {"ai_response": output_text or FALLBACK_MESSAGE}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


def run() -> int:
    import uvicorn

    settings = get_settings()
    try:
        router = build_router(settings)
    except ConfigurationError as exc:
        print(f"\nERROR: {exc}\n", file=sys.stderr)
        return 1
    uvicorn.run(create_app(settings, router), host=settings.host, port=settings.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
