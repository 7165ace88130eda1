"""Text-to-speech service."""
from typing import Optional

import httpx

from food_ordering.services.speech.constants import OUTPUT_FORMAT, voice_for


class SpeechServiceError(Exception):
    """Raised when a speech, translation or audio storage call fails."""


def escape_xml(text: str) -> str:
    """Escape XML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def build_ssml(text: str, language: str) -> str:
    """Wrap text in SSML using the voice for the given locale."""
    return (
        f"<speak version='1.0' xml:lang='{language}'>"
        f"<voice name='{voice_for(language)}'>{escape_xml(text)}</voice>"
        f"</speak>"
    )


class TextToSpeechService:
    """Service for converting text to speech with the Azure Speech REST API."""

    def __init__(
        self,
        endpoint: str,
        subscription_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.subscription_key = subscription_key
        self.timeout = timeout
        self.transport = transport

    async def synthesize_speech(self, text: str, language: str) -> bytes:
        """
        Synthesize speech from text.

        Args:
            text: Text to convert to speech
            language: Locale tag, selects the voice

        Returns:
            Audio bytes (16kHz 16-bit mono WAV)
        """
        headers = {
            "Ocp-Apim-Subscription-Key": self.subscription_key,
            "X-Microsoft-OutputFormat": OUTPUT_FORMAT,
            "Content-Type": "application/ssml+xml",
            "User-Agent": "food-ordering-voice-agent",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.endpoint,
                    content=build_ssml(text, language).encode("utf-8"),
                    headers=headers,
                )
                response.raise_for_status()
                return response.content
        except httpx.HTTPError as e:
            raise SpeechServiceError(f"TTS synthesis failed: {str(e)}") from e
