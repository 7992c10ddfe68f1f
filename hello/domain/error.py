"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnauthenticatedError(DomainError):
    """Raised when an operation requires a signed-in identity and there is none."""

    def __init__(self, message: str = "You need to be logged in to do this"):
        super().__init__(message)


class ForbiddenError(DomainError):
    """Raised when the acting identity neither owns the target nor is an administrator."""

    def __init__(
        self,
        identity_id: str,
        target_id: str,
        message: str = "You don't have permission to do this",
    ):
        self.identity_id = identity_id
        self.target_id = target_id
        super().__init__(message)


class ProviderMismatchError(DomainError):
    """Raised when a share request names a provider other than the identity's own."""

    def __init__(self, expected: str, requested: str):
        self.expected = expected
        self.requested = requested
        super().__init__("Mismatch between the expected and logged-in providers")


class UnsupportedProviderError(DomainError):
    """Raised when no provider rules exist for a provider name."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider}")


class PersistenceFailureError(DomainError):
    """Raised when an identity record could not be written."""

    def __init__(self, identity_id: str, reason: str):
        self.identity_id = identity_id
        self.reason = reason
        super().__init__(f"Failed to persist identity {identity_id}: {reason}")


class InvalidSessionError(DomainError):
    """Raised when a session token is present but not a valid signed session."""

    pass


class StaleSessionError(DomainError):
    """Raised when a valid session token points at an identity that does not exist."""

    def __init__(self, identity_id: str):
        self.identity_id = identity_id
        super().__init__(f"Session refers to missing identity {identity_id}")


class PublishFailureError(DomainError):
    """Raised when a provider rejects or garbles a publish call."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"Failed to publish to {provider}: {reason}")


class CredentialRejectedError(PublishFailureError):
    """Raised when a provider refuses the stored credential, e.g. an expired token."""

    def __init__(self, provider: str, reason: str = "credential rejected"):
        super().__init__(provider, reason)


class SignInExpiredError(DomainError):
    """Raised when a rejected credential cannot be refreshed; the user must log in again."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Your {provider} sign-in has expired, please log in again")


class LoginStateMismatchError(DomainError):
    """Raised when a login callback does not match the login this browser started."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Login state mismatch for {provider}")
