"""Error taxonomy shared by providers, services and the JSON boundary."""


class ExaBrowserError(Exception):
    """Base class for all exabrowser failures."""


class InputError(ExaBrowserError):
    """Raised when a caller supplies an empty or malformed field."""


class ConfigurationError(ExaBrowserError):
    """Raised when a required provider credential is missing."""


class ProviderError(ExaBrowserError):
    """Raised when a single provider call fails or returns a malformed payload."""


class ProxyError(ExaBrowserError):
    """Raised when a proxied page cannot be fetched from upstream."""

    def __init__(self, message: str, status: int = 502):
        super().__init__(message)
        self.status = status
