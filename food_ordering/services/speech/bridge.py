"""Speech bridge: synthesis, language detection and per-call audio."""
import logging

from food_ordering.services.speech.audio_store import AudioStore
from food_ordering.services.speech.language import LanguageDetectionService
from food_ordering.services.speech.tts import TextToSpeechService

logger = logging.getLogger(__name__)


class SpeechBridge:
    """Turns text into audio the call-media platform can play."""

    def __init__(
        self,
        tts_service: TextToSpeechService,
        language_service: LanguageDetectionService,
        audio_store: AudioStore,
    ):
        self.tts_service = tts_service
        self.language_service = language_service
        self.audio_store = audio_store

    async def synthesize(self, call_connection_id: str, text: str, language: str) -> str:
        """
        Synthesize text and store it as the call's transient audio.

        Repeated synthesis for the same call overwrites the same blob.

        Returns:
            URL of the audio blob
        """
        audio = await self.tts_service.synthesize_speech(text, language)
        url = await self.audio_store.upload(call_connection_id, audio)
        logger.debug(
            f"[SPEECH] Synthesized {len(audio)} bytes ({language}) - CallConnectionId: {call_connection_id}"
        )
        return url

    async def detect_language(self, text: str) -> str:
        """Detect the locale of an utterance."""
        return await self.language_service.detect_language(text)

    async def delete_audio(self, call_connection_id: str) -> None:
        """Delete the call's transient audio (best-effort)."""
        await self.audio_store.delete(call_connection_id)
