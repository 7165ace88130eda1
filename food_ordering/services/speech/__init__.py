"""Speech synthesis, language detection and call audio."""
