"""Blob storage for transient per-call audio."""
import logging

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient

from food_ordering.services.speech.constants import audio_blob_name
from food_ordering.services.speech.tts import SpeechServiceError

logger = logging.getLogger(__name__)


class AudioStore:
    """Stores synthesized audio so the call-media platform can fetch it."""

    def __init__(self, service_client: BlobServiceClient, container_name: str):
        self.service_client = service_client
        self.container_name = container_name

    def _blob(self, call_connection_id: str):
        return self.service_client.get_blob_client(
            container=self.container_name,
            blob=audio_blob_name(call_connection_id),
        )

    async def upload(self, call_connection_id: str, audio: bytes) -> str:
        """Upload audio for a call, replacing any previous audio. Returns the blob URL."""
        blob = self._blob(call_connection_id)
        try:
            await blob.upload_blob(
                audio,
                overwrite=True,
                content_settings=ContentSettings(content_type="audio/wav"),
            )
        except AzureError as e:
            raise SpeechServiceError(f"Audio upload failed: {str(e)}") from e
        return blob.url

    async def delete(self, call_connection_id: str) -> None:
        """Delete the audio for a call. Best-effort: failures are logged."""
        name = audio_blob_name(call_connection_id)
        try:
            await self._blob(call_connection_id).delete_blob()
            logger.info(f"[AUDIO] Deleted session audio: {name}")
        except ResourceNotFoundError:
            logger.debug(f"[AUDIO] No session audio to delete: {name}")
        except AzureError as e:
            logger.warning(f"[AUDIO] Failed to delete session audio {name}: {str(e)}")

    async def close(self) -> None:
        await self.service_client.close()
