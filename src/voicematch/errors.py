"""Custom voicematch exceptions.

Core components raise these typed failures and leave formatting to the
caller. Every failure is scoped to a single request.
"""


class VoiceMatchError(Exception):
    """Base exception for voicematch errors."""

    def __init__(
        self, message: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class ValidationError(VoiceMatchError):
    """Exception raised when a description is missing or out of bounds.

    Raised before any other processing, with a fixed user-facing message
    naming the violated bound.
    """

    pass


class ContentPolicyBlocked(VoiceMatchError):
    """Exception raised when the generation provider refuses a description.

    Carries the sanitizer's substitution notes so the caller can suggest
    a rephrasing. Never retried automatically.
    """

    def __init__(
        self,
        message: str,
        suggestions: list[str] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.suggestions = list(suggestions or [])


class ProviderUnavailable(VoiceMatchError):
    """Exception raised when the generation provider cannot serve a request.

    This typically occurs when:
    - Provider servers are failing (5xx errors)
    - Rate limits persist after the client's retry budget (429 error)
    - Account quota is exhausted (not retryable)

    A retryable failure means the whole top-level operation may be
    re-issued safely.
    """

    def __init__(
        self,
        message: str,
        retryable: bool = True,
        reason: str = "transient",
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.retryable = retryable
        self.reason = reason
        self.status_code = status_code


class NoUsableCandidate(VoiceMatchError):
    """Exception raised when generation returned no playable preview."""

    pass


class ProviderError(VoiceMatchError):
    """Exception raised by provider clients for transport-level failures.

    Attributes:
        kind: One of "content_policy", "quota", "transient", "auth", "unknown"
        status_code: HTTP status reported by the provider, if any
    """

    def __init__(
        self,
        message: str,
        kind: str = "unknown",
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.kind = kind
        self.status_code = status_code


class ProviderAuthError(ProviderError):
    """Exception raised for authentication failures.

    This typically occurs when:
    - API key is missing or invalid
    - API key permissions are insufficient
    """

    def __init__(
        self, message: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(message, "auth", None, original_error)
