"""Language detection service."""
import logging
from typing import Optional

import httpx

from food_ordering.services.speech.constants import LANGUAGE_LOCALES
from food_ordering.services.speech.tts import SpeechServiceError

logger = logging.getLogger(__name__)


class LanguageDetectionService:
    """Detects the language of an utterance with the Azure Translator API."""

    def __init__(
        self,
        endpoint: str,
        subscription_key: str,
        region: str,
        default_language: str = "en-US",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.subscription_key = subscription_key
        self.region = region
        self.default_language = default_language
        self.timeout = timeout
        self.transport = transport

    async def detect_language(self, text: str) -> str:
        """
        Detect the locale of a piece of text.

        Returns:
            Locale tag such as "fr-FR"; the default language for codes
            without a configured locale.
        """
        headers = {
            "Ocp-Apim-Subscription-Key": self.subscription_key,
            "Ocp-Apim-Subscription-Region": self.region,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.endpoint}/detect",
                    params={"api-version": "3.0"},
                    json=[{"Text": text}],
                    headers=headers,
                )
                response.raise_for_status()
                results = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SpeechServiceError(f"Language detection failed: {str(e)}") from e

        code = ""
        if isinstance(results, list) and results and isinstance(results[0], dict):
            code = results[0].get("language") or ""

        locale = LANGUAGE_LOCALES.get(code.lower(), self.default_language)
        logger.debug(f"[LANGUAGE] Detected '{code}' -> {locale}")
        return locale
