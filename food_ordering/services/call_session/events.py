"""Inbound call event decoding.

Deliveries arrive either as one event object or as an array of Event Grid /
CloudEvents envelopes. Each envelope is decoded once into a ``CallEvent``
carrying a closed ``CallEventType``.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

# ACS sub-code for a recognition that timed out before any speech
INITIAL_SILENCE_TIMEOUT_SUBCODE = 8510


class MalformedEventError(ValueError):
    """Raised when an event lacks a field its handler requires."""


class CallEventType(str, Enum):
    """Known call event kinds."""

    SUBSCRIPTION_VALIDATION = "Microsoft.EventGrid.SubscriptionValidationEvent"
    INCOMING_CALL = "Microsoft.Communication.IncomingCall"
    CALL_CONNECTED = "Microsoft.Communication.CallConnected"
    PARTICIPANTS_UPDATED = "Microsoft.Communication.ParticipantsUpdated"
    RECOGNIZE_COMPLETED = "Microsoft.Communication.RecognizeCompleted"
    RECOGNIZE_FAILED = "Microsoft.Communication.RecognizeFailed"
    PLAY_COMPLETED = "Microsoft.Communication.PlayCompleted"
    PLAY_FAILED = "Microsoft.Communication.PlayFailed"
    CALL_DISCONNECTED = "Microsoft.Communication.CallDisconnected"
    ANSWER_FAILED = "Microsoft.Communication.AnswerFailed"
    UNKNOWN = "Unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class CallEvent(BaseModel):
    """A decoded call event."""

    type: CallEventType
    raw_type: str = ""
    data: Dict[str, Any] = {}

    @classmethod
    def from_envelope(cls, envelope: Any) -> "CallEvent":
        """Decode one envelope. Anything that is not an object decodes as UNKNOWN."""
        if not isinstance(envelope, dict):
            return cls(type=CallEventType.UNKNOWN, raw_type=type(envelope).__name__)

        raw_type = envelope.get("eventType") or envelope.get("type") or ""
        data = envelope.get("data")
        if not isinstance(data, dict):
            data = envelope
        return cls(type=CallEventType(raw_type), raw_type=str(raw_type), data=data)

    @property
    def call_connection_id(self) -> Optional[str]:
        return self.data.get("callConnectionId") or None

    def require(self, field: str) -> Any:
        """Get a required data field or raise MalformedEventError."""
        value = self.data.get(field)
        if not value:
            raise MalformedEventError(f"{self.raw_type or self.type.value} event missing '{field}'")
        return value

    @property
    def speech(self) -> str:
        """Recognized speech text, empty when nothing was recognized."""
        for key in ("speechResult", "recognitionResult"):
            result = self.data.get(key)
            if isinstance(result, dict) and result.get("speech"):
                return str(result["speech"]).strip()
        return ""

    @property
    def result_information(self) -> Dict[str, Any]:
        info = self.data.get("resultInformation")
        return info if isinstance(info, dict) else {}

    @property
    def is_initial_silence_timeout(self) -> bool:
        return self.result_information.get("subCode") == INITIAL_SILENCE_TIMEOUT_SUBCODE


def parse_delivery(body: Any) -> List[CallEvent]:
    """
    Decode a webhook delivery into events.

    Raises:
        ValueError: If the body is neither an object nor an array.
    """
    if isinstance(body, dict):
        envelopes = [body]
    elif isinstance(body, list):
        envelopes = body
    else:
        raise ValueError(f"Unsupported delivery shape: {type(body).__name__}")

    return [CallEvent.from_envelope(envelope) for envelope in envelopes]


def find_validation_code(events: List[CallEvent]) -> Optional[str]:
    """Validation code of the first subscription-validation event, if any."""
    for event in events:
        if event.type == CallEventType.SUBSCRIPTION_VALIDATION:
            return event.data.get("validationCode") or ""
    return None
