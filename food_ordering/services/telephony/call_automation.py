"""Call control through Azure Communication Services Call Automation."""
import logging
from typing import Optional

from azure.communication.callautomation import (
    CommunicationUserIdentifier,
    FileSource,
    PhoneNumberIdentifier,
    RecognizeInputType,
)
from azure.communication.callautomation.aio import CallAutomationClient

logger = logging.getLogger(__name__)

PHONE_NUMBER_PREFIX = "4:"


def target_identifier(raw_id: str):
    """Build a participant identifier from a raw ACS identifier."""
    if raw_id.startswith(PHONE_NUMBER_PREFIX):
        return PhoneNumberIdentifier(raw_id[len(PHONE_NUMBER_PREFIX):])
    if raw_id.startswith("+"):
        return PhoneNumberIdentifier(raw_id)
    return CommunicationUserIdentifier(raw_id)


class CallControlService:
    """Answers, plays to, listens on and hangs up calls."""

    def __init__(
        self,
        client: CallAutomationClient,
        callback_url: str,
        cognitive_services_endpoint: Optional[str] = None,
        initial_silence_timeout: int = 5,
    ):
        self.client = client
        self.callback_url = callback_url
        self.cognitive_services_endpoint = cognitive_services_endpoint
        self.initial_silence_timeout = initial_silence_timeout

    async def answer_call(self, incoming_call_context: str) -> str:
        """Answer an incoming call and return its call connection id."""
        properties = await self.client.answer_call(
            incoming_call_context=incoming_call_context,
            callback_url=self.callback_url,
            cognitive_services_endpoint=self.cognitive_services_endpoint,
        )
        logger.info(f"[CALL CONTROL] Call answered - CallConnectionId: {properties.call_connection_id}")
        return properties.call_connection_id

    async def play(self, call_connection_id: str, audio_url: str) -> None:
        """Play an audio file to everyone on the call."""
        connection = self.client.get_call_connection(call_connection_id)
        await connection.play_media(
            play_source=FileSource(url=audio_url),
            operation_context="play-response",
        )

    async def start_recognition(
        self,
        call_connection_id: str,
        language: str,
        target_id: str,
        prompt_url: Optional[str] = None,
    ) -> None:
        """Start speech recognition on the caller in the given locale."""
        connection = self.client.get_call_connection(call_connection_id)
        await connection.start_recognizing_media(
            input_type=RecognizeInputType.SPEECH,
            target_participant=target_identifier(target_id),
            speech_language=language,
            initial_silence_timeout=self.initial_silence_timeout,
            interrupt_prompt=True,
            play_prompt=FileSource(url=prompt_url) if prompt_url else None,
            operation_context="recognize-speech",
        )

    async def hang_up(self, call_connection_id: str) -> None:
        """Hang up the call for all participants."""
        connection = self.client.get_call_connection(call_connection_id)
        await connection.hang_up(is_for_everyone=True)

    async def close(self) -> None:
        await self.client.close()
