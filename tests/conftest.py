"""Shared test fixtures and configuration."""
import pytest
import os
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app
os.environ.setdefault("ACS_CONNECTION_STRING", "endpoint=https://test.communication.azure.com/;accesskey=dGVzdA==")
os.environ.setdefault("ACS_CALLBACK_URL", "https://example.test/webhooks/calls")
os.environ.setdefault("ACS_RECOGNITION_TARGET_ID", "8:acs:test-user")
os.environ.setdefault("TTS_KEY", "test-tts-key")
os.environ.setdefault("TTS_REGION", "eastus")
os.environ.setdefault("TRANSLATOR_KEY", "test-translator-key")
os.environ.setdefault("TRANSLATOR_REGION", "eastus")
os.environ.setdefault("BLOB_CONNECTION_STRING", "UseDevelopmentStorage=true")
os.environ.setdefault("BLOB_CONTAINER_NAME", "audio")
os.environ.setdefault("AGENT_ENDPOINT", "https://agent.example.test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from food_ordering.main import app
from food_ordering.db.models import Base
from food_ordering.core.dependencies import (
    get_agent_client,
    get_dispatcher,
    get_menu_repository,
    get_order_service,
    get_session_store,
)
from food_ordering.services.call_session.dispatcher import CallEventDispatcher
from food_ordering.services.call_session.store import InMemorySessionStore
from food_ordering.services.menu.repository import MenuRepository
from food_ordering.services.menu.yaml_menu import YamlMenuProvider


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

AUDIO_URL = "https://storage.example.test/audio/session-call-1.wav"


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(test_db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def test_menu_path():
    """Return path to test menu YAML file."""
    return Path(__file__).parent / "fixtures" / "test_menu.yaml"


@pytest.fixture
def test_menu_repository(test_menu_path):
    """Create menu repository backed by the test YAML menu."""
    return MenuRepository(YamlMenuProvider(str(test_menu_path)))


@pytest.fixture
def session_store():
    """Fresh in-memory call session store."""
    return InMemorySessionStore()


@pytest.fixture
def mock_call_control():
    """Mock ACS call control."""
    call_control = MagicMock()
    call_control.answer_call = AsyncMock(return_value="call-1")
    call_control.play = AsyncMock()
    call_control.start_recognition = AsyncMock()
    call_control.hang_up = AsyncMock()
    return call_control


@pytest.fixture
def mock_speech():
    """Mock speech bridge."""
    speech = MagicMock()
    speech.synthesize = AsyncMock(return_value=AUDIO_URL)
    speech.detect_language = AsyncMock(return_value="fr-FR")
    speech.delete_audio = AsyncMock()
    return speech


@pytest.fixture
def mock_agent():
    """Mock conversational agent client."""
    agent = MagicMock()
    agent.create_session = AsyncMock(return_value="agent-session-1")
    agent.send = AsyncMock(return_value="One large pepperoni, coming up.")
    agent.delete_session = AsyncMock()
    return agent


@pytest.fixture
def dispatcher(session_store, mock_call_control, mock_speech, mock_agent):
    """Dispatcher wired to mocks, with no hang-up delay."""
    return CallEventDispatcher(
        store=session_store,
        call_control=mock_call_control,
        speech=mock_speech,
        agent=mock_agent,
        default_language="en-US",
        max_silence_count=2,
        hangup_delay_seconds=0,
        recognition_target_id="8:acs:test-user",
    )


@pytest.fixture
def mock_order_db():
    """Mock database session for order writes."""
    db = MagicMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.get = AsyncMock(return_value=None)
    return db


@pytest.fixture
def test_client(dispatcher, session_store, test_menu_repository, mock_agent, mock_order_db):
    """Create FastAPI test client with overrides."""
    from food_ordering.services.persistence.orders import OrderPersistenceService

    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    app.dependency_overrides[get_session_store] = lambda: session_store
    app.dependency_overrides[get_menu_repository] = lambda: test_menu_repository
    app.dependency_overrides[get_agent_client] = lambda: mock_agent
    app.dependency_overrides[get_order_service] = lambda: OrderPersistenceService(mock_order_db)

    client = TestClient(app)

    yield client

    # Clear overrides
    app.dependency_overrides.clear()
