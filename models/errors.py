"""Exceptions raised and caught inside the orchestrator. They never leave it."""


class ProviderUnavailableError(Exception):
    """The AI provider could not be used: missing key, timeout, rate limit or error response."""

    def __init__(self, message: str, code: str = "provider_error"):
        super().__init__(message)
        self.code = code


class MalformedResponseError(Exception):
    """The provider answered, but the payload could not be parsed into a metric value."""
