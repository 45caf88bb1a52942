"""Error taxonomy of the client engine."""


class LucyError(Exception):
    """Base class for client engine errors."""


class DecodeError(LucyError):
    """Attachment source bytes could not be read or are not an accepted media type."""


class BackendError(LucyError):
    """Backend call rejected, unreachable, or returned an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SendFailure(LucyError):
    """A user turn could not be completed by the backend."""


class NotFoundError(LucyError):
    """No loading placeholder with the given id exists in the timeline."""

    def __init__(self, message_id: str):
        super().__init__(f"No loading placeholder with id {message_id}")
        self.message_id = message_id
