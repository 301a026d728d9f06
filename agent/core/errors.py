"""Custom exceptions for the wedding concierge."""


class ConciergeError(Exception):
    """Base class for concierge errors."""


class ConfigurationError(ConciergeError):
    """Raised at startup when a required credential or setting is missing."""


class SearchUnavailableError(ConciergeError):
    """Raised when the search provider is unconfigured or unreachable."""


class AudioPipelineError(ConciergeError):
    """Base class for voice-note pipeline failures."""


class MediaDownloadError(AudioPipelineError):
    """Raised when an inbound voice note cannot be fetched from WhatsApp."""


class TranscriptionError(AudioPipelineError):
    """Raised when speech-to-text fails."""


class SynthesisError(AudioPipelineError):
    """Raised when text-to-speech fails."""
