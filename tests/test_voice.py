import asyncio
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from agent.core.errors import SynthesisError, TranscriptionError
from app.voice import SPEAKING_INSTRUCTIONS, TRANSCRIPTION_PROMPT, VoicePipeline, detect_lang, to_spoken_text


class _Endpoint:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


def fake_client(transcript="Mehendi kab hai?", audio=b"OggS-data", stt_error=None, tts_error=None):
    transcriptions = _Endpoint(SimpleNamespace(text=transcript), stt_error)
    speech = _Endpoint(SimpleNamespace(content=audio), tts_error)
    return SimpleNamespace(audio=SimpleNamespace(transcriptions=transcriptions, speech=speech))


@pytest.mark.parametrize(
    "text, lang",
    [
        ("संगीत कब है?", "hi"),
        ("Sangeet kab hai?", "en"),
        ("Where is the baraat?", "en"),
        ("", "en"),
        ("ok ok ok ok ok ok ok ok ok ok हाँ", "en"),
    ],
)
def test_detect_lang(text: str, lang: str) -> None:
    assert detect_lang(text) == lang


def test_to_spoken_text_strips_markup() -> None:
    reply = "*Sangeet* is at *8 PM* 🎶\n━━━━━━\n• Convergence Ballroom\n\nSee you there! 💃"
    spoken = to_spoken_text(reply)
    assert spoken.startswith("Sangeet is at 8 PM")
    assert spoken.endswith("See you there!")
    assert "Convergence Ballroom" in spoken
    for gone in ("*", "━", "•", "🎶", "💃", "\n"):
        assert gone not in spoken


def test_transcribe_uses_wedding_prompt() -> None:
    client = fake_client(transcript="  Mehendi kab hai?  ")
    pipeline = VoicePipeline(client)
    assert asyncio.run(pipeline.transcribe(b"OggS-in")) == "Mehendi kab hai?"

    [call] = client.audio.transcriptions.calls
    assert call["file"] == ("voice.ogg", b"OggS-in")
    assert call["model"] == "whisper-1"
    assert call["prompt"] == TRANSCRIPTION_PROMPT
    assert "language" not in call


def test_transcribe_error_is_wrapped() -> None:
    pipeline = VoicePipeline(fake_client(stt_error=OpenAIError("quota exceeded")))
    with pytest.raises(TranscriptionError, match="quota exceeded"):
        asyncio.run(pipeline.transcribe(b"OggS-in"))


def test_synthesize_requests_opus_with_language_instructions() -> None:
    client = fake_client(audio=b"OggS-out")
    pipeline = VoicePipeline(client, tts_voice="nova")
    assert asyncio.run(pipeline.synthesize("बारात *रात 10 बजे* निकलेगी")) == b"OggS-out"

    [call] = client.audio.speech.calls
    assert call["response_format"] == "opus"
    assert call["voice"] == "nova"
    assert call["input"] == "बारात रात 10 बजे निकलेगी"
    assert call["instructions"] == SPEAKING_INSTRUCTIONS["hi"]


def test_legacy_tts_models_get_no_instructions() -> None:
    client = fake_client()
    asyncio.run(VoicePipeline(client, tts_model="tts-1").synthesize("Welcome to Jaipur!"))
    assert "instructions" not in client.audio.speech.calls[0]


@pytest.mark.parametrize(
    "client, text",
    [
        (fake_client(tts_error=OpenAIError("tts down")), "Hello"),
        (fake_client(audio=b""), "Hello"),
        (fake_client(), "💍✨🎉"),
    ],
)
def test_synthesis_failures(client, text: str) -> None:
    with pytest.raises(SynthesisError):
        asyncio.run(VoicePipeline(client).synthesize(text))
