"""Exception hierarchy for the signage board.

Fetch problems are the only errors that reach the readiness gate. Media
failures are handled per slide by :mod:`signboard.media` and never raise.
"""


class SignboardError(Exception):
    """Base exception for all signage board errors."""


class ConfigurationError(SignboardError):
    """Configuration value is missing or malformed.

    Raised when:
    - A numeric environment variable cannot be parsed
    - An interval or page size is not positive
    """


class FetchError(SignboardError):
    """A content source could not be fetched.

    Covers network errors, timeouts, non-2xx responses and payloads that
    are not a JSON list. The section name is kept so the readiness status
    message can name the source that failed.
    """

    def __init__(self, section: str, message: str):
        super().__init__(f"{section}: {message}")
        self.section = section
