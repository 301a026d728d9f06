"""Voice-note round trip: OGG Opus in, text through the concierge, OGG Opus out."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from openai import AsyncOpenAI, OpenAIError

from agent.core.errors import SynthesisError, TranscriptionError
from config.settings import Settings, get_settings


logger = logging.getLogger("sush.voice")

# Primes Whisper with names and ceremony terms so they transcribe correctly.
TRANSCRIPTION_PROMPT = " ".join(
    [
        "Wedding of Surakshit and Shreyaa in Jaipur.",
        "Venues: InterContinental Jaipur, Atlantiis Jaipur, Convergence Ballroom.",
        "Events: Sangeet, Haldi, Mayera, Reets, Choora, Sehrabandi, Baraat, Milni, Varmala, Pheras.",
        "Hashtag: ShreyaaHuiSurakshit.",
        "Guests may speak in Hindi, English, or Hinglish.",
    ]
)

SPEAKING_INSTRUCTIONS = {
    "hi": "Speak in warm, natural Hindi, like a friendly family member at a wedding.",
    "en": (
        "Speak in a warm, cheerful Indian English voice. Roman-script Hindi words "
        "(Hinglish) should be pronounced as Hindi."
    ),
}

_DEVANAGARI = re.compile(r"[\u0900-\u097F]")


def detect_lang(text: str) -> str:
    """Return 'hi' when more than 15% of non-space characters are Devanagari."""
    non_space = re.sub(r"\s", "", text or "")
    if not non_space:
        return "en"
    devanagari = len(_DEVANAGARI.findall(text))
    return "hi" if devanagari / len(non_space) > 0.15 else "en"


def to_spoken_text(text: str) -> str:
    """Strip WhatsApp markup, dividers and emoji so TTS reads cleanly."""
    spoken = re.sub(r"\*([^*]+)\*", r"\1", text)
    spoken = re.sub(r"━+", " ", spoken)
    spoken = spoken.replace("•", ",")
    spoken = re.sub(r"[^\x20-\x7E\u0900-\u097F\n.,!?।]", "", spoken)
    spoken = re.sub(r"\n{2,}", ". ", spoken)
    spoken = spoken.replace("\n", ", ")
    spoken = re.sub(r"[ \t]{2,}", " ", spoken)
    return spoken.strip()


class VoicePipeline:
    """Whisper transcription and OpenAI speech synthesis."""

    def __init__(
        self,
        client: Any,
        *,
        stt_model: str = "whisper-1",
        tts_model: str = "gpt-4o-mini-tts",
        tts_voice: str = "alloy",
    ) -> None:
        self.client = client
        self.stt_model = stt_model
        self.tts_model = tts_model
        self.tts_voice = tts_voice

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "VoicePipeline":
        settings = settings or get_settings()
        return cls(
            AsyncOpenAI(api_key=settings.openai_api_key),
            stt_model=settings.stt_model,
            tts_model=settings.tts_model,
            tts_voice=settings.tts_voice,
        )

    async def transcribe(self, audio: bytes, filename: str = "voice.ogg") -> str:
        # No language is set, so Whisper auto-detects Hindi / English / Hinglish.
        try:
            result = await self.client.audio.transcriptions.create(
                file=(filename, audio),
                model=self.stt_model,
                prompt=TRANSCRIPTION_PROMPT,
            )
        except OpenAIError as exc:
            raise TranscriptionError(f"Transcription failed: {exc}") from exc
        return (getattr(result, "text", "") or "").strip()

    async def synthesize(self, text: str) -> bytes:
        """Render text as OGG Opus, WhatsApp's native voice-note format."""
        # Language must be read before cleanup strips anything.
        lang = detect_lang(text)
        spoken = to_spoken_text(text)
        if not spoken:
            raise SynthesisError("Nothing speakable in reply")

        kwargs = {
            "model": self.tts_model,
            "voice": self.tts_voice,
            "input": spoken,
            "response_format": "opus",
        }
        if not self.tts_model.startswith("tts-"):
            kwargs["instructions"] = SPEAKING_INSTRUCTIONS[lang]
        try:
            response = await self.client.audio.speech.create(**kwargs)
        except OpenAIError as exc:
            raise SynthesisError(f"Speech synthesis failed: {exc}") from exc

        audio = response.content
        if not audio:
            raise SynthesisError("Speech synthesis returned no audio")
        logger.info("Synthesized %s bytes of %s speech", len(audio), lang)
        return audio
