"""Generation failures, each mapped to the HTTP status returned to the caller."""


class GenerationError(Exception):
    """Base class for failures surfaced in a response body."""
    status_code = 500


class ValidationError(GenerationError):
    """Missing prompt/image or malformed request."""
    status_code = 400


class MissingCredentialError(ValidationError):
    """Provider requires an API key that was not supplied."""
    status_code = 401


class RateLimitError(GenerationError):
    """Provider answered 429."""
    status_code = 429


class ProviderError(GenerationError):
    """Provider returned an error response or a failed job."""
    pass


class JobCanceledError(ProviderError):
    """Async job reached the canceled state."""
    pass


class GenerationTimeoutError(GenerationError):
    """Polling ceiling elapsed; the job may still finish server-side."""
    pass


class EmptyResponseError(GenerationError):
    """Provider succeeded but produced nothing usable."""
    pass


class ModelRefusalError(EmptyResponseError):
    """Model answered with text instead of an image."""
    pass


class TransportError(GenerationError):
    """Network failure reaching a provider."""
    pass
