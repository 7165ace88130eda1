"""Call event dispatcher: drives the per-call dialogue state machine."""
import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional

from azure.core.exceptions import AzureError

from food_ordering.services.agent.client import AgentClient, AgentServiceError
from food_ordering.services.agent.constants import FALLBACK_REPLY, GOODBYE_PROMPT, REPEAT_PROMPT
from food_ordering.services.call_session.events import (
    CallEvent,
    CallEventType,
    MalformedEventError,
)
from food_ordering.services.call_session.models import CallSession
from food_ordering.services.call_session.store import SessionStore
from food_ordering.services.speech.bridge import SpeechBridge
from food_ordering.services.speech.tts import SpeechServiceError
from food_ordering.services.telephony.call_automation import CallControlService

logger = logging.getLogger(__name__)

Handler = Callable[[CallEvent], Awaitable[None]]


class CallEventDispatcher:
    """
    Routes decoded call events to their handlers.

    Events of one delivery are handled sequentially. Handlers touching a
    session run under the store's per-call lock, so concurrent deliveries
    for the same call cannot interleave their updates. A failing event is
    logged and never stops the rest of the delivery.
    """

    def __init__(
        self,
        store: SessionStore,
        call_control: CallControlService,
        speech: SpeechBridge,
        agent: AgentClient,
        default_language: str = "en-US",
        max_silence_count: int = 2,
        hangup_delay_seconds: float = 3.0,
        recognition_target_id: Optional[str] = None,
        welcome_audio_url: Optional[str] = None,
    ):
        self.store = store
        self.call_control = call_control
        self.speech = speech
        self.agent = agent
        self.default_language = default_language
        self.max_silence_count = max_silence_count
        self.hangup_delay_seconds = hangup_delay_seconds
        self.recognition_target_id = recognition_target_id
        self.welcome_audio_url = welcome_audio_url

        self.handlers: Dict[CallEventType, Handler] = {
            CallEventType.SUBSCRIPTION_VALIDATION: self._ignore,
            CallEventType.INCOMING_CALL: self.handle_incoming_call,
            CallEventType.CALL_CONNECTED: self._acknowledge,
            CallEventType.PARTICIPANTS_UPDATED: self._acknowledge,
            CallEventType.RECOGNIZE_COMPLETED: self.handle_recognize_completed,
            CallEventType.RECOGNIZE_FAILED: self.handle_recognize_failed,
            CallEventType.PLAY_COMPLETED: self.handle_play_completed,
            CallEventType.PLAY_FAILED: self._record_failure,
            CallEventType.CALL_DISCONNECTED: self.handle_call_disconnected,
            CallEventType.ANSWER_FAILED: self._record_failure,
            CallEventType.UNKNOWN: self._ignore,
        }

    async def dispatch(self, events: List[CallEvent]) -> None:
        """Handle every event of a delivery, isolating failures per event."""
        for event in events:
            try:
                await self.handlers[event.type](event)
            except MalformedEventError as e:
                logger.warning(f"[DISPATCH] Skipping malformed event: {str(e)}")
            except Exception as e:
                logger.error(
                    f"[DISPATCH] Error handling {event.type.value} - "
                    f"CallConnectionId: {event.call_connection_id}, "
                    f"Error: {type(e).__name__}: {str(e)}",
                    exc_info=True,
                )

    async def handle_incoming_call(self, event: CallEvent) -> None:
        """Answer the call, open its session and start listening."""
        incoming_call_context = event.require("incomingCallContext")
        caller_id = _caller_raw_id(event.data.get("from"))
        target = self._target_for(caller_id)

        call_connection_id = await self.call_control.answer_call(incoming_call_context)
        logger.info(f"[INCOMING CALL] Call accepted - CallConnectionId: {call_connection_id}")

        async with self.store.lock(call_connection_id):
            session = await self.store.get_or_create(call_connection_id)
            session.caller_id = caller_id
            await self._ensure_agent_session(session)

            await self.call_control.start_recognition(
                call_connection_id,
                self.default_language,
                target,
                prompt_url=self.welcome_audio_url,
            )
        logger.info(f"[INCOMING CALL] Listening - CallConnectionId: {call_connection_id}")

    async def handle_recognize_completed(self, event: CallEvent) -> None:
        """Route a recognition result to the silence or utterance path."""
        call_connection_id = event.require("callConnectionId")
        speech = event.speech

        async with self.store.lock(call_connection_id):
            session = await self.store.get(call_connection_id)
            if session is None:
                logger.warning(f"[RECOGNIZE] No session - CallConnectionId: {call_connection_id}")
                return

            if not speech:
                await self._handle_silence(session)
            else:
                await self._handle_utterance(session, speech)

    async def handle_recognize_failed(self, event: CallEvent) -> None:
        """Count an initial-silence timeout as an empty utterance."""
        call_connection_id = event.require("callConnectionId")
        if not event.is_initial_silence_timeout:
            await self._record_failure(event)
            return

        async with self.store.lock(call_connection_id):
            session = await self.store.get(call_connection_id)
            if session is None:
                logger.warning(f"[RECOGNIZE] No session - CallConnectionId: {call_connection_id}")
                return
            await self._handle_silence(session)

    async def handle_play_completed(self, event: CallEvent) -> None:
        """Listen again once playback finished."""
        call_connection_id = event.require("callConnectionId")

        async with self.store.lock(call_connection_id):
            session = await self.store.get(call_connection_id)
            if session is None:
                logger.warning(f"[PLAY COMPLETED] No session - CallConnectionId: {call_connection_id}")
                return

            language = session.language or self.default_language
            await self.call_control.start_recognition(
                call_connection_id, language, self._recognition_target(session)
            )
        logger.info(f"[PLAY COMPLETED] Listening again ({language}) - CallConnectionId: {call_connection_id}")

    async def handle_call_disconnected(self, event: CallEvent) -> None:
        """Release everything the call held. Safe to repeat."""
        call_connection_id = event.require("callConnectionId")
        async with self.store.lock(call_connection_id):
            await self._release(call_connection_id)

    async def _handle_silence(self, session: CallSession) -> None:
        call_connection_id = session.call_connection_id
        session.silence_count += 1
        logger.warning(
            f"[RECOGNIZE] No speech recognized ({session.silence_count}/{self.max_silence_count}) - "
            f"CallConnectionId: {call_connection_id}"
        )

        if session.silence_count < self.max_silence_count:
            url = await self.speech.synthesize(call_connection_id, REPEAT_PROMPT, self.default_language)
            await self.call_control.play(call_connection_id, url)
            return

        try:
            url = await self.speech.synthesize(call_connection_id, GOODBYE_PROMPT, self.default_language)
            await self.call_control.play(call_connection_id, url)
            await asyncio.sleep(self.hangup_delay_seconds)
        except (SpeechServiceError, AzureError) as e:
            logger.warning(
                f"[RECOGNIZE] Goodbye prompt failed, hanging up anyway - "
                f"CallConnectionId: {call_connection_id}, Error: {str(e)}"
            )

        try:
            await self.call_control.hang_up(call_connection_id)
            logger.info(f"[RECOGNIZE] Hung up after repeated silence - CallConnectionId: {call_connection_id}")
        finally:
            await self._release(call_connection_id)

    async def _handle_utterance(self, session: CallSession, speech: str) -> None:
        call_connection_id = session.call_connection_id
        session.silence_count = 0
        logger.info(f"[RECOGNIZE] User said: '{speech[:200]}' - CallConnectionId: {call_connection_id}")

        if session.language is None:
            try:
                session.language = await self.speech.detect_language(speech)
                logger.info(f"[RECOGNIZE] Detected language: {session.language} - CallConnectionId: {call_connection_id}")
            except SpeechServiceError as e:
                logger.warning(f"[RECOGNIZE] Language detection failed, using default: {str(e)}")
        language = session.language or self.default_language

        try:
            reply = await self._agent_reply(session, speech)
        except AgentServiceError as e:
            logger.error(
                f"[AGENT] No agent reply, apologizing - "
                f"CallConnectionId: {call_connection_id}, Error: {str(e)}"
            )
            reply = FALLBACK_REPLY

        try:
            url = await self.speech.synthesize(call_connection_id, reply, language)
            await self.call_control.play(call_connection_id, url)
        except (SpeechServiceError, AzureError) as e:
            # No PlayCompleted will follow, so listen again right away
            logger.error(
                f"[RECOGNIZE] Could not play reply, listening again - "
                f"CallConnectionId: {call_connection_id}, Error: {str(e)}"
            )
            await self.call_control.start_recognition(
                call_connection_id, language, self._recognition_target(session)
            )
            return
        logger.info(f"[RECOGNIZE] Played agent reply - CallConnectionId: {call_connection_id}")

    async def _agent_reply(self, session: CallSession, speech: str) -> str:
        await self._ensure_agent_session(session)
        if session.agent_session_id is None:
            raise AgentServiceError("No agent session available")
        return await self.agent.send(session.agent_session_id, speech)

    async def _ensure_agent_session(self, session: CallSession) -> None:
        """Create the call's agent session if it has none. Failure leaves it unset."""
        if session.agent_session_id is not None:
            return
        try:
            session.agent_session_id = await self.agent.create_session()
        except AgentServiceError as e:
            logger.error(
                f"[AGENT] Could not create agent session - "
                f"CallConnectionId: {session.call_connection_id}, Error: {str(e)}"
            )

    async def _release(self, call_connection_id: str) -> None:
        session = await self.store.remove(call_connection_id)
        if session is None:
            logger.debug(f"[TEARDOWN] Session already released - CallConnectionId: {call_connection_id}")
            return

        if session.agent_session_id:
            await self.agent.delete_session(session.agent_session_id)
        await self.speech.delete_audio(call_connection_id)
        logger.info(f"[TEARDOWN] Session released - CallConnectionId: {call_connection_id}")

    def _recognition_target(self, session: CallSession) -> str:
        return self._target_for(session.caller_id)

    def _target_for(self, caller_id: Optional[str]) -> str:
        """Participant to listen to: the caller, else the configured target."""
        target = caller_id or self.recognition_target_id
        if not target:
            raise MalformedEventError("No caller id and no configured recognition target")
        return target

    async def _acknowledge(self, event: CallEvent) -> None:
        logger.debug(f"[DISPATCH] {event.type.value} - CallConnectionId: {event.call_connection_id}")

    async def _record_failure(self, event: CallEvent) -> None:
        logger.error(
            f"[DISPATCH] {event.type.value} - CallConnectionId: {event.call_connection_id}, "
            f"Reason: {event.data.get('resultInformation', 'Unknown reason')}"
        )

    async def _ignore(self, event: CallEvent) -> None:
        logger.info(f"[DISPATCH] Unhandled event type: {event.raw_type or event.type.value}")


def _caller_raw_id(caller) -> Optional[str]:
    """Raw identifier of the caller in an IncomingCall 'from' field."""
    if not isinstance(caller, dict):
        return None
    if caller.get("rawId"):
        return caller["rawId"]
    phone = caller.get("phoneNumber")
    if isinstance(phone, dict) and phone.get("value"):
        return phone["value"]
    return None
