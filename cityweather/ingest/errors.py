"""Errors raised by the directory and forecast clients."""


class WeatherServiceError(Exception):
    """Base class for failures talking to a remote service."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(WeatherServiceError):
    """The directory has no city with the requested id."""


class RateLimitedError(WeatherServiceError):
    """The remote signalled request-quota exhaustion (HTTP 429)."""


class NetworkError(WeatherServiceError):
    """Transport failure, non-success status, or an unusable response body."""


class MissingCredentialsError(WeatherServiceError):
    """No API key was supplied or found in the environment."""
