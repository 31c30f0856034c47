"""Error taxonomy for the fti client."""


class FtiError(Exception):
    """Base exception for all fti failures."""

    exit_code = 1


class InputError(FtiError):
    """Invalid user input (empty API key, bad option value)."""


class ConfigReadError(FtiError):
    """Settings file exists but cannot be parsed."""

    exit_code = 5


class AuthRequiredError(FtiError):
    """A protected endpoint was requested without an API key."""

    exit_code = 2

    def __init__(self, message: str = "API key required - run: fti auth login") -> None:
        super().__init__(message)


class NetworkError(FtiError):
    """Transport-level failure: DNS, connection refused, timeout."""

    exit_code = 3


class APIError(FtiError):
    """The remote API rejected the request with a status >= 400."""

    exit_code = 2

    def __init__(self, status_code: int, message: str) -> None:
        """Initialize API error.

        Args:
            status_code: HTTP status code of the response
            message: Server-provided detail or the standard reason phrase
        """
        self.status_code = status_code
        self.message = message
        super().__init__(f"API error {status_code}: {message}")


class DecodeError(FtiError):
    """Response body does not match the expected shape."""

    exit_code = 4

    def __init__(self, message: str, raw: bytes = b"") -> None:
        """Initialize decode error.

        Args:
            message: Description of the decode failure
            raw: Undecodable response body, kept for pass-through output
        """
        self.raw = raw
        super().__init__(message)
