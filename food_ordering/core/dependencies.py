"""FastAPI dependencies."""
from functools import lru_cache

from azure.communication.callautomation.aio import CallAutomationClient
from azure.storage.blob.aio import BlobServiceClient
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from food_ordering.core.config import settings
from food_ordering.db.database import get_db
from food_ordering.services.agent.client import AgentClient
from food_ordering.services.call_session.dispatcher import CallEventDispatcher
from food_ordering.services.call_session.store import InMemorySessionStore, SessionStore
from food_ordering.services.menu.database_menu import DatabaseMenuProvider
from food_ordering.services.menu.repository import MenuRepository
from food_ordering.services.persistence.orders import OrderPersistenceService
from food_ordering.services.speech.audio_store import AudioStore
from food_ordering.services.speech.bridge import SpeechBridge
from food_ordering.services.speech.language import LanguageDetectionService
from food_ordering.services.speech.tts import TextToSpeechService
from food_ordering.services.telephony.call_automation import CallControlService

# Module-level session storage (persists across requests)
_session_store = InMemorySessionStore()


def get_session_store() -> SessionStore:
    """Get the process-wide call session store."""
    return _session_store


def get_menu_repository(db: AsyncSession = Depends(get_db)) -> MenuRepository:
    """Get menu repository instance."""
    return MenuRepository(provider=DatabaseMenuProvider(db))


def get_order_service(db: AsyncSession = Depends(get_db)) -> OrderPersistenceService:
    """Get order persistence service."""
    return OrderPersistenceService(db)


@lru_cache
def get_agent_client() -> AgentClient:
    """Get the conversational agent client."""
    return AgentClient(
        endpoint=settings.agent_endpoint,
        api_key=settings.agent_api_key,
        timeout=settings.http_timeout_seconds,
    )


@lru_cache
def get_call_control() -> CallControlService:
    """Get the call control service."""
    client = CallAutomationClient.from_connection_string(
        settings.acs_connection_string,
        connection_timeout=settings.http_timeout_seconds,
        read_timeout=settings.http_timeout_seconds,
    )
    return CallControlService(
        client,
        callback_url=settings.acs_callback_url,
        cognitive_services_endpoint=settings.acs_cognitive_services_endpoint,
        initial_silence_timeout=settings.initial_silence_timeout_seconds,
    )


@lru_cache
def get_speech_bridge() -> SpeechBridge:
    """Get the speech bridge."""
    blob_service = BlobServiceClient.from_connection_string(
        settings.blob_connection_string,
        connection_timeout=settings.http_timeout_seconds,
        read_timeout=settings.http_timeout_seconds,
    )
    return SpeechBridge(
        tts_service=TextToSpeechService(
            endpoint=settings.resolved_tts_endpoint,
            subscription_key=settings.tts_key,
            timeout=settings.http_timeout_seconds,
        ),
        language_service=LanguageDetectionService(
            endpoint=settings.translator_endpoint,
            subscription_key=settings.translator_key,
            region=settings.translator_region,
            default_language=settings.default_language,
            timeout=settings.http_timeout_seconds,
        ),
        audio_store=AudioStore(blob_service, settings.blob_container_name),
    )


def get_dispatcher(
    store: SessionStore = Depends(get_session_store),
    call_control: CallControlService = Depends(get_call_control),
    speech: SpeechBridge = Depends(get_speech_bridge),
    agent: AgentClient = Depends(get_agent_client),
) -> CallEventDispatcher:
    """Get call event dispatcher."""
    return CallEventDispatcher(
        store=store,
        call_control=call_control,
        speech=speech,
        agent=agent,
        default_language=settings.default_language,
        max_silence_count=settings.max_silence_count,
        hangup_delay_seconds=settings.hangup_delay_seconds,
        recognition_target_id=settings.acs_recognition_target_id,
        welcome_audio_url=settings.welcome_audio_url,
    )


async def close_clients() -> None:
    """Close the Azure clients created by this module."""
    if get_call_control.cache_info().currsize:
        await get_call_control().close()
    if get_speech_bridge.cache_info().currsize:
        await get_speech_bridge().audio_store.close()
