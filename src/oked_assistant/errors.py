"""Error hierarchy for the OKED assistant.

Every error carries the HTTP status it maps to and the message that is safe
to return to the client. The API layer renders them as ``{"error": message}``.

Hierarchy:
    OkedAssistantError
    ├── ValidationError             (400, client input)
    ├── PayloadTooLargeError        (413, body over the size cap)
    ├── StatisticsUnavailableError  (501, statistics stub)
    └── ProviderError               (500, generic)
        ├── RateLimitError          (429)
        └── ProviderBadRequestError (400)
"""


class OkedAssistantError(Exception):
    """Base error for the OKED assistant."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.public_message
        super().__init__(self.message)

    @property
    def client_message(self) -> str:
        """Message returned in the response body."""
        return self.message


class ValidationError(OkedAssistantError):
    """Client input failed a shape or bounds check."""

    status_code = 400
    public_message = "Invalid request"


class PayloadTooLargeError(OkedAssistantError):
    """Request body exceeded the configured size cap."""

    status_code = 413
    public_message = "Request entity too large"


class StatisticsUnavailableError(OkedAssistantError):
    """Statistics source is not integrated yet."""

    status_code = 501
    public_message = (
        "Real statistics integration in progress. "
        "See https://github.com/kazdatahelp/oked-catalogue-assistant/issues/6"
    )


class ProviderError(OkedAssistantError):
    """LLM provider call failed.

    The detail passed in is kept for logs only; clients always get
    ``public_message``.
    """

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: str | None = None, http_status: int | None = None) -> None:
        super().__init__(message)
        self.http_status = http_status

    @property
    def client_message(self) -> str:
        return self.public_message


class RateLimitError(ProviderError):
    """Provider signalled a rate limit."""

    status_code = 429
    public_message = "Rate limit exceeded. Please try again later."


class ProviderBadRequestError(ProviderError):
    """Provider rejected the request as malformed."""

    status_code = 400
    public_message = "Invalid request format"
