"""Speech constants."""

# Neural voice per recognition/synthesis locale
VOICES = {
    "en-US": "en-US-AriaNeural",
    "fr-FR": "fr-FR-DeniseNeural",
    "hi-IN": "hi-IN-MadhurNeural",
}
DEFAULT_VOICE = "en-US-AriaNeural"

# Translator language codes to locales
LANGUAGE_LOCALES = {
    "en": "en-US",
    "fr": "fr-FR",
    "hi": "hi-IN",
}

OUTPUT_FORMAT = "riff-16khz-16bit-mono-pcm"


def voice_for(language: str) -> str:
    """Voice for a locale, falling back to the default voice."""
    return VOICES.get(language, DEFAULT_VOICE)


def audio_blob_name(call_connection_id: str) -> str:
    """Blob holding the latest synthesized audio for a call."""
    return f"session-{call_connection_id}.wav"
